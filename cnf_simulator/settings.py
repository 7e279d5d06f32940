import os
from dataclasses import dataclass

from .security import parse_int

DEFAULT_PORT = 8080


@dataclass(frozen=True)
class Settings:
    port: int = DEFAULT_PORT
    environment: str = ""
    kubernetes_node: str = ""
    scan_enabled: bool = False
    min_security_rating: str = ""
    max_vulnerabilities: str = ""
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None):
        if environ is None:
            environ = os.environ
        port = parse_int(environ.get("PORT"))
        return cls(
            port=port if port is not None else DEFAULT_PORT,
            environment=environ.get("ENVIRONMENT", ""),
            kubernetes_node=environ.get("KUBERNETES_NODE_NAME", ""),
            scan_enabled=environ.get("SECURITY_SCAN_ENABLED") == "true",
            min_security_rating=environ.get("MINIMUM_SECURITY_RATING", ""),
            max_vulnerabilities=environ.get("MAX_VULNERABILITIES", ""),
            log_level=environ.get("LOG_LEVEL", "INFO").upper(),
        )
