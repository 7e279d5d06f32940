import os
import threading
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

SERVICE_NAME = "Simple-CNFSimulator"
SERVICE_VERSION = "1.0.0"
DEFAULT_NODE = "unknown-node"


def rfc3339(ts=None):
    if ts is None:
        ts = time.time()
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass
class SecurityInfo:
    scan_status: str = "completed"
    last_scan: str = ""
    vulnerabilities: int = 0
    security_rating: str = "A"


@dataclass
class ServiceRecord:
    """In-memory state of one simulator instance.

    ``id`` and ``started_at`` are fixed at construction; only ``status`` and
    the ``security`` fields are overwritten by request handlers, always under
    ``lock``.
    """

    id: str
    started_at: float
    started_monotonic: float
    environment: str = ""
    k8s_node: str = DEFAULT_NODE
    name: str = SERVICE_NAME
    version: str = SERVICE_VERSION
    status: str = "running"
    security: SecurityInfo = field(default_factory=SecurityInfo)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def __setattr__(self, key, value):
        if key in ("id", "started_at", "started_monotonic") and key in self.__dict__:
            raise AttributeError(f"{key} is immutable")
        super().__setattr__(key, value)

    def uptime_seconds(self):
        return int(time.monotonic() - self.started_monotonic)

    def mark_running(self, now=None):
        with self.lock:
            self.status = "running"
            self.security.last_scan = rfc3339(now)
            return self.snapshot()

    def record_scan(self, started, vulnerabilities, rating):
        with self.lock:
            self.security.last_scan = rfc3339(started)
            self.security.scan_status = "completed"
            self.security.vulnerabilities = vulnerabilities
            self.security.security_rating = rating
            return SecurityInfo(**asdict(self.security))

    def security_snapshot(self):
        with self.lock:
            return SecurityInfo(**asdict(self.security))

    def snapshot(self):
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "status": self.status,
            "started_at": rfc3339(self.started_at),
            "environment": self.environment,
            "k8s_node": self.k8s_node,
            "security": asdict(self.security),
        }


def new_record(environ=None, now=None):
    """Build the record for a freshly started instance."""
    if environ is None:
        environ = os.environ
    if now is None:
        now = time.time()

    return ServiceRecord(
        id=f"cnf-{int(now)}",
        started_at=now,
        started_monotonic=time.monotonic(),
        environment=environ.get("ENVIRONMENT", ""),
        k8s_node=environ.get("KUBERNETES_NODE_NAME") or DEFAULT_NODE,
        security=SecurityInfo(last_scan=rfc3339(now)),
    )
