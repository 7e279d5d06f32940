import logging
import os
import socket
import sys

from .app import create_app
from .logging_setup import setup_logging
from .settings import Settings
from .state import new_record

logger = logging.getLogger("cnf_simulator")

HOST = '0.0.0.0'


def check_port_available(host, port):
    """Raise OSError if ``port`` cannot be bound on ``host``.

    Werkzeug reports bind failures itself and exits, so the check runs first to
    get the failure into the log.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))


def main():
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    record = new_record(os.environ)
    app = create_app(record, os.environ)

    logger.info("Starting CNF Simulator on port %d", settings.port)
    logger.info("CNF Instance ID: %s", record.id)
    logger.info("Running on Kubernetes Node: %s", record.k8s_node)
    logger.info("Environment: %s", record.environment)

    try:
        check_port_available(HOST, settings.port)
    except OSError as e:
        logger.error("Could not listen on port %d: %s", settings.port, e)
        sys.exit(1)

    app.run(host=HOST, port=settings.port, threaded=True)


if __name__ == '__main__':
    main()
