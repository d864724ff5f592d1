"""Fetch Context Management.

Task-local context using contextvars for binding the fetch id, the
provider being fetched and any extra keys to log entries.
"""

import uuid
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


_fetch_id_var: ContextVar[str] = ContextVar("fetch_id", default="")
_provider_var: ContextVar[str] = ContextVar("provider", default="")
_extra_context_var: ContextVar[dict] = ContextVar("extra_context", default={})


def generate_fetch_id() -> str:
    """Generate a short unique fetch id."""
    return uuid.uuid4().hex[:12]


def get_fetch_id() -> str:
    """Get the current fetch id from context."""
    return _fetch_id_var.get()


def get_provider() -> str:
    """Get the provider bound to the current context."""
    return _provider_var.get()


def get_context_dict() -> dict[str, Any]:
    """Get all context variables as a dictionary for log binding."""
    ctx = {}
    fetch_id = _fetch_id_var.get()
    if fetch_id:
        ctx["fetch_id"] = fetch_id
    provider = _provider_var.get()
    if provider:
        ctx["provider"] = provider
    extra = _extra_context_var.get()
    if extra:
        ctx.update(extra)
    return ctx


@dataclass
class FetchContext:
    """Context manager binding one provider fetch to log entries.

    Restores the previous values on exit, so contexts nest and each
    asyncio task sees only its own fetch.

    Example:
        with FetchContext(provider="gemini", extra={"generation": 3}):
            logger.info("fetch issued")  # includes fetch_id, provider, generation
    """

    provider: str = ""
    fetch_id: str = ""
    extra: dict[str, Any] = field(default_factory=dict)
    started_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    _tokens: list = field(default_factory=list, repr=False)

    def __post_init__(self):
        if not self.fetch_id:
            self.fetch_id = generate_fetch_id()

    def __enter__(self) -> "FetchContext":
        self._tokens = [
            (_fetch_id_var, _fetch_id_var.set(self.fetch_id)),
            (_provider_var, _provider_var.set(self.provider)),
            (_extra_context_var, _extra_context_var.set(self.extra.copy())),
        ]
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        for var, token in reversed(self._tokens):
            var.reset(token)
        self._tokens.clear()

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since context was created."""
        delta = datetime.now(timezone.utc) - self.started_at
        return delta.total_seconds() * 1000

    def bind(self, **kwargs: Any) -> None:
        """Add extra key-value pairs to the context."""
        current = _extra_context_var.get()
        updated = {**current, **kwargs}
        _extra_context_var.set(updated)
        self.extra.update(kwargs)
