"""Context propagation for structured logging.

Fields pushed here (``run_id``, ``source`` ...) are stamped onto every log
record emitted inside the scope by ``ContextualFilter``. Storage is a
``ContextVar`` so each adapter worker thread can carry its own copy.
"""

import contextvars
from contextvars import ContextVar, Token
from typing import Any, Callable, Dict, Optional, TypeVar

T = TypeVar("T")

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active logging context."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the logging context.

    Returns:
        Token for ``pop_log_context`` to restore the previous state
    """
    return LogContextVar.set({**LogContextVar.get(), **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the logging context captured by ``push_log_context``."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop every context field. Mostly useful in tests."""
    LogContextVar.set({})


def bind_context(func: Callable[..., T]) -> Callable[..., T]:
    """Bind ``func`` to a snapshot of the current context.

    Worker threads started by an executor do not inherit context variables,
    so the snapshot must be taken in the submitting thread. Take one snapshot
    per submission: a ``Context`` cannot be entered by two threads at once.

    Example:
        >>> pool.submit(bind_context(adapter.fetch))
    """
    snapshot = contextvars.copy_context()

    def bound(*args, **kwargs) -> T:
        return snapshot.run(func, *args, **kwargs)

    return bound


class log_context:
    """Context manager for scoped logging context.

    Example:
        >>> with log_context(run_id="abc123", source="remoteok"):
        ...     logger.info("Fetching jobs")  # includes run_id and source
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
        return False
