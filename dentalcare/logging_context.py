"""Dashboard session ids on log records.

Every console or dashboard session owns a separate appointment store, so
log lines from two sessions look identical without a tag. The session id
lives in a ContextVar and a logging filter copies it onto each record,
where the format string picks it up as ``%(session_id)s``.

Usage:
    from dentalcare.logging_context import get_session_logger, new_session_id, set_session_id

    set_session_id(new_session_id())
    logger = get_session_logger(__name__)
    logger.info("Appointment approved")  # [SESSION-1a2b3c4d] Appointment approved
"""

import logging
import uuid
from contextvars import ContextVar

_session_id: ContextVar[str] = ContextVar("session_id", default="NO_SESSION")


def new_session_id() -> str:
    return f"SESSION-{uuid.uuid4().hex[:8]}"


def set_session_id(session_id: str) -> None:
    _session_id.set(session_id)


def get_session_id() -> str:
    return _session_id.get()


class SessionIdFilter(logging.Filter):
    """Stamps the current session id onto a record; never drops anything."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = get_session_id()  # type: ignore[attr-defined]
        return True


def get_session_logger(name: str) -> logging.Logger:
    """``logging.getLogger`` plus a single ``SessionIdFilter``.

    Used by the modules that write appointment state (store, workflow,
    booking), so their records carry the session even when the handler
    was configured by someone other than ``dentalcare.config``.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, SessionIdFilter) for f in logger.filters):
        logger.addFilter(SessionIdFilter())
    return logger
