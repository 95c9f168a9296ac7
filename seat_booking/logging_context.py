"""Session ID logging context for tracing booking operations.

Each front-end session (one signed-in user at the CLI) gets an
identifier held in a ContextVar. The handler built by
``make_session_handler`` stamps it onto every record it emits and
prints it in the log line, so a single session's reads and writes can
be followed through the booking service.

Usage:
    from seat_booking.logging_context import session_scope

    with session_scope("SESSION-alice"):
        service.create_booking(...)  # "... [SESSION-alice] INFO: ..."
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import IO, Iterator, Optional

NO_SESSION = "NO_SESSION"

LOG_FORMAT = "%(asctime)s [%(name)s] [%(session_id)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_session_id: ContextVar[str] = ContextVar("session_id", default=NO_SESSION)


def get_session_id() -> str:
    """Retrieve the current session identifier."""
    return _session_id.get()


@contextmanager
def session_scope(session_id: str) -> Iterator[None]:
    """Tag everything logged inside the block with ``session_id``."""
    token = _session_id.set(session_id)
    try:
        yield
    finally:
        _session_id.reset(token)


class SessionIdFilter(logging.Filter):
    """Injects session_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = _session_id.get()  # type: ignore[attr-defined]
        return True


def make_session_handler(stream: Optional[IO[str]] = None) -> logging.Handler:
    """Stream handler whose output carries the current session id.

    The filter sits on the handler rather than on individual loggers,
    so records propagated from any module get ``session_id`` before the
    formatter reads it.
    """
    handler = logging.StreamHandler(stream)
    handler.addFilter(SessionIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler
