"""Console logging for the simulator; the container runtime collects stdout/stderr."""
import logging

FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(level="INFO"):
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if not any(isinstance(h, logging.StreamHandler) for h in root_logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(FORMAT))
        root_logger.addHandler(console)
