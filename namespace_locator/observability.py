# ==================================================
# namespace_locator/observability.py
# ==================================================
import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = ("namespace_id", "batch_size", "status")   # copied from `extra=` when set
PLAIN_FMT    = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        out = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level"    : record.levelname,
            "logger"   : record.name,
            "message"  : record.getMessage(),
        }
        out.update({k: record.__dict__[k] for k in EXTRA_FIELDS
                    if record.__dict__.get(k) is not None})
        if record.exc_info:
            out["exception"] = self.formatException(record.exc_info)
        return json.dumps(out, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Attach one stderr handler to the root logger; returns it for removal."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else logging.Formatter(PLAIN_FMT))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
