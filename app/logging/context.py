"""Scoped logging context.

Fields bound with log_context() (run_id, source_id, job_id, ...) are copied
onto every log record emitted inside the block by ContextualFilter. Backed by
contextvars so concurrent threads or tasks keep separate contexts.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Dict, Iterator

_log_context: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields currently bound."""
    return dict(_log_context.get())


def push_log_context(**fields: Any) -> Token:
    """Bind fields on top of the current context; undo with pop_log_context()."""
    return _log_context.set({**_log_context.get(), **fields})


def pop_log_context(token: Token) -> None:
    _log_context.reset(token)


def clear_log_context() -> None:
    """Drop every bound field. Mostly useful in tests."""
    _log_context.set({})


@contextmanager
def log_context(**fields: Any) -> Iterator[Dict[str, Any]]:
    """Bind fields for the duration of a with-block.

    Example:
        >>> with log_context(run_id="abc123", source_id="stripe"):
        ...     logger.info("Processing source")  # record carries run_id and source_id
    """
    token = push_log_context(**fields)
    try:
        yield get_log_context()
    finally:
        pop_log_context(token)
