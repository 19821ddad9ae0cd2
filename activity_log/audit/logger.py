"""
Audit Logger

DESIGN DECISION: Every change to the activity log is recorded as a
structured log event. This provides:
1. Traceability of creates, deletes and clears
2. Debugging capability when the Notion API misbehaves
3. A correlation ID tying together all lines of one request

Logging never raises into the caller.
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog


_CONFIGURED = False


def configure_logging(level: str = "INFO", json: bool = True) -> None:
    """
    Configure structlog and the stdlib root logger.

    Safe to call more than once; only the first call takes effect.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _CONFIGURED = True


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


class AuditLogger:
    """
    Records user-level actions on the activity log.

    One instance is shared by the API; it holds no per-request state
    (the request's correlation ID lives in structlog's contextvars).
    """

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None):
        self._logger = logger or get_logger("activity_log.audit")

    def log_activity_created(
        self,
        activity_id: Optional[str],
        date: str,
        category: str,
        amount: int,
    ) -> None:
        """Log a successful create."""
        self._logger.info(
            "activity_created",
            activity_id=activity_id,
            date=date,
            category=category,
            amount=amount,
        )

    def log_activity_deleted(self, activity_id: str) -> None:
        self._logger.info("activity_deleted", activity_id=activity_id)

    def log_activities_cleared(self, archived_count: int) -> None:
        self._logger.info("activities_cleared", archived_count=archived_count)

    def log_request_failed(
        self,
        method: str,
        error_type: str,
        error_message: str,
    ) -> None:
        """Log a request that ended in a server error."""
        self._logger.error(
            "request_failed",
            method=method,
            error_type=error_type,
            error_message=error_message,
        )


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related log lines.

    The API creates one per request and binds it to the logging context.
    """
    return uuid4()
