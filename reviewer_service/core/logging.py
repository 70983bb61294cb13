# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
JSON log lines for the reviewer service.

Each record becomes one JSON object on stdout. Identifiers passed through
``extra=`` (request, PR, user, team) are lifted to top-level keys so log
queries can filter on them directly:

    logger.info("PR merged", extra={"pr_id": "pr-1"})
    -> {"level": "INFO", "message": "PR merged", "pr_id": "pr-1", ...}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from reviewer_service.core.config import settings

CONTEXT_FIELDS: tuple[str, ...] = ("request_id", "pr_id", "user_id", "team_name")


class JSONFormatter(logging.Formatter):
    def __init__(self, service: str = settings.SERVICE_NAME,
                 version: str = settings.SERVICE_VERSION) -> None:
        super().__init__()
        self.service = service
        self.version = version

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service,
            "version": self.version,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            entry["error"] = str(exc)
            entry["error_type"] = type(exc).__name__
            entry["traceback"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger writing JSON lines at ``LOG_LEVEL``; handlers are attached once per name."""
    logger = logging.getLogger(name or settings.SERVICE_NAME)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    level = logging.getLevelName(settings.LOG_LEVEL)
    logger.setLevel(level if isinstance(level, int) else logging.INFO)
    logger.propagate = False
    return logger
