import logging
import re
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict

from idplatform.core.config import settings
from idplatform.core.error_handling import request_id_var

# Demographic values that must not reach the log sinks
_EMAIL_RE = re.compile(r"[_A-Za-z0-9\-+.]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+")
_LONG_NUMBER_RE = re.compile(r"\d{10,}")
MASK = "***"


class RequestIDFilter(logging.Filter):
    """
    Inject the current request_id (from ContextVar) into log records.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = request_id_var.get()
        record.request_id = request_id if request_id else ""
        return True


class PIIMaskingFilter(logging.Filter):
    """
    Mask email addresses and phone/ID-like digit runs in log messages.

    The message is rendered once and the args are dropped, so formatters
    only ever see the masked text.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = _LONG_NUMBER_RE.sub(MASK, _EMAIL_RE.sub(MASK, message))
        if masked != message:
            record.msg = masked
            record.args = None
        return True


class JSONFormatter(logging.Formatter):
    """
    Formatter that renders each LogRecord as a single JSON line.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "service": settings.SERVICE_NAME,
            "domain": settings.UI_SPEC_DOMAIN,
        }

        if settings.LOG_INCLUDE_REQUEST_ID and getattr(record, "request_id", ""):
            log_obj["request_id"] = record.request_id

        # Structured fields passed via extra={"extra_fields": {...}}
        if hasattr(record, "extra_fields"):
            log_obj.update(record.extra_fields)

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


def setup_logging() -> None:
    """
    Configure logging for the identity platform services.

    JSON lines carry the service name and UI spec domain so output from the
    validator and the UI spec service can be told apart downstream.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)

    if settings.LOG_FORMAT.lower() == "json":
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s" + (
                " - request_id=%(request_id)s" if settings.LOG_INCLUDE_REQUEST_ID else ""
            )
        )

    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for h in root_logger.handlers[:]:
        root_logger.removeHandler(h)

    root_logger.addHandler(handler)

    if settings.LOG_MASK_PII:
        handler.addFilter(PIIMaskingFilter())
    if settings.LOG_INCLUDE_REQUEST_ID:
        handler.addFilter(RequestIDFilter())

    logging.getLogger("uvicorn.access").setLevel(log_level)
    logging.getLogger("uvicorn.error").setLevel(log_level)
    # httpx logs every master data request URL at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
