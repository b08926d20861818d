"""
Structured JSON logging with request and editor context
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from contextvars import ContextVar

from utils.logging import console_formatter, quiet_third_party_loggers

request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
editor_var: ContextVar[Optional[str]] = ContextVar('editor', default=None)


class StructuredFormatter(logging.Formatter):
    """One JSON object per record; keyword fields passed to StructuredLogger land at the top level"""

    def __init__(self, service: Optional[str] = None):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        if self.service:
            log_data["service"] = self.service

        request_id = request_id_var.get()
        if request_id:
            log_data["request_id"] = request_id
        editor = editor_var.get()
        if editor:
            log_data["editor"] = editor

        fields = getattr(record, "fields", None)
        if fields:
            # Reserved keys win over caller fields
            log_data = {**fields, **log_data}

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False)


class StructuredLogger:
    """Thin wrapper so call sites can write ``logger.info("msg", section="hero")``"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, fields)

    def error(self, message: str, **fields: Any) -> None:
        self._log(logging.ERROR, message, fields)

    def exception(self, message: str, **fields: Any) -> None:
        """Error with the active exception's traceback attached"""
        self._log(logging.ERROR, message, fields, exc_info=True)

    def _log(self, level: int, message: str, fields: Dict[str, Any], exc_info: bool = False) -> None:
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(level, message, extra={"fields": fields} if fields else None, exc_info=exc_info)


def setup_structured_logging(
    log_level: str = "INFO",
    service: Optional[str] = None,
    json_output: bool = True
) -> None:
    """Route the root logger to stdout, JSON in deployed environments"""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(service) if json_output else console_formatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    quiet_third_party_loggers()


def set_request_context(request_id: str) -> None:
    request_id_var.set(request_id)
    editor_var.set(None)


def set_editor_context(email: Optional[str]) -> None:
    """Tag the rest of the request's log lines with the signed-in editor"""
    editor_var.set(email)


def get_structured_logger(name: str) -> StructuredLogger:
    """Get structured logger instance"""
    return StructuredLogger(name)
