import json
import logging
import sys
from datetime import datetime, timezone

from src.api.middleware.request_id import request_id_var

_SENSITIVE_KEYS = {"password", "secret", "token", "authorization"}
_DEFAULT_LOG_RECORD_KEYS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__)
# Extras promoted to top-level fields so log queries can filter on them
_PROMOTED_KEYS = ("duration_ms", "error_type", "upstream_status")
# Upstream error payloads can be large GraphQL documents
MAX_PAYLOAD_CHARS = 2000


def _sanitize_value(data: dict) -> dict:
    """Mask values whose key names look like credentials, recursing into dicts."""
    sanitized = {}
    for key, value in data.items():
        if any(s in str(key).lower() for s in _SENSITIVE_KEYS):
            sanitized[key] = "********"
        elif isinstance(value, dict):
            sanitized[key] = _sanitize_value(value)
        else:
            sanitized[key] = value
    return sanitized


def _truncate(value) -> str:
    text = value if isinstance(value, str) else json.dumps(value, default=str)
    if len(text) > MAX_PAYLOAD_CHARS:
        return text[:MAX_PAYLOAD_CHARS] + "...(truncated)"
    return text


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = request_id_var.get("")
        if request_id:
            log_entry["request_id"] = request_id
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra = _sanitize_value({
            k: v for k, v in record.__dict__.items()
            if k not in _DEFAULT_LOG_RECORD_KEYS and k not in ("message", "asctime")
        })
        for key in _PROMOTED_KEYS:
            if key in extra:
                log_entry[key] = extra.pop(key)
        if "upstream_payload" in extra:
            extra["upstream_payload"] = _truncate(extra["upstream_payload"])
        if extra:
            log_entry["extra"] = extra
        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO") -> None:
    """Send JSON logs to stdout at ``level``."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers.clear()
    root.addHandler(handler)

    # uvicorn's own access log duplicates the request-id middleware's line
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
