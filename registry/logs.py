import json, logging, os, sys, time, uuid
from typing import Optional

from .db import read_config

logger = logging.getLogger("registry.ops")

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Root logger to stderr; level from arg, then LOG_LEVEL, then config.yaml log_level."""
    level_name = (level or os.environ.get("LOG_LEVEL") or read_config().get("log_level") or "INFO").upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    for h in root.handlers[:]:
        root.removeHandler(h)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)


class LogContext:
    """One operation log line per request: action, entity, payload, outcome, latency."""

    def __init__(self, action: str):
        self.action = action
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.payload = None
        self.entity_type = None
        self.entity_id = None

    def set_entity(self, etype: str, eid: str):
        self.entity_type = etype
        self.entity_id = eid

    def set_payload(self, obj): self.payload = obj

    def write(self, result: str = "OK", err: Optional[str] = None):
        elapsed_ms = int((time.perf_counter() - self.start) * 1000)
        rec = {
            "action": self.action,
            "request_id": self.request_id,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "payload": self.payload,
            "result": result,
            "err_msg": err,
            "latency_ms": elapsed_ms,
        }
        line = json.dumps(rec, ensure_ascii=False, default=str)
        if result == "OK":
            logger.info(line)
        elif result == "ERROR":
            logger.error(line)
        else:
            logger.warning(line)
        return rec
