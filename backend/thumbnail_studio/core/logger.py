import logging
import json
import sys
import os
from datetime import datetime, timezone
import uuid

# Standard logging with JSON formatting, one object per line on stderr.

class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).replace(tzinfo=None).isoformat() + "Z",
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "func": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, "trace_id"):
            log_record["trace_id"] = record.trace_id

        if hasattr(record, "props"):
            log_record.update(record.props)

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)

def setup_logger(name: str = "thumbnail-studio"):
    logger = logging.getLogger(name)
    level_name = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(level)

    if not logger.handlers:
        # Use stderr to align with uvicorn default logging stream in many setups.
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)

    return logger

logger = setup_logger()


def _dup_to_uvicorn() -> bool:
    return (os.getenv("THUMBNAIL_LOG_DUP_TO_UVICORN") or "1").strip().lower() not in {"0", "false", "no", "off"}


class TaskLogger:
    def __init__(self, trace_id: str = None):
        self.trace_id = trace_id or str(uuid.uuid4())
        self.logger = logger

    def _log(self, level: int, message: str, props: dict):
        extra = {"trace_id": self.trace_id, "props": props}
        self.logger.log(level, message, extra=extra)
        if _dup_to_uvicorn():
            logging.getLogger("uvicorn.error").log(level, message, extra=extra)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, kwargs)
