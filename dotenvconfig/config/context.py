"""Attach a :class:`Config` to a :class:`contextvars.Context` and get it back."""

from __future__ import annotations

import contextvars
from contextvars import ContextVar, Token
from typing import Dict, Optional

from .config_loader import DEFAULT_CONTEXT_KEY, Config
from .exceptions import ContextError

_VARS: Dict[str, ContextVar[Config]] = {}


def _var(key: str) -> ContextVar[Config]:
    """Return the context variable registered under ``key``."""
    var = _VARS.get(key)
    if var is None:
        var = _VARS[key] = ContextVar(f"dotenvconfig.{key}")
    return var


def to_context(
    ctx: Optional[contextvars.Context],
    config: Config,
    key: Optional[str] = None,
) -> contextvars.Context:
    """Return a copy of ``ctx`` carrying ``config`` under ``key`` (default: ``config.context_key``)."""
    if ctx is None:
        raise ContextError("error, nil context")

    new_ctx = ctx.copy()
    new_ctx.run(_var(key or config.context_key).set, config)
    return new_ctx


def from_context(ctx: Optional[contextvars.Context], key: str = DEFAULT_CONTEXT_KEY) -> Config:
    """Return the :class:`Config` stored in ``ctx`` under ``key``."""
    if ctx is None:
        raise ContextError("error, nil context")

    var = _VARS.get(key)
    val = ctx.get(var) if var is not None else None
    if val is None:
        raise ContextError(f"no value found in context for key: {key}")
    if not isinstance(val, Config):
        raise ContextError(f"value in context for key {key} is not of type Config")
    return val


def push_config(config: Config, key: Optional[str] = None) -> Token[Config]:
    """Store ``config`` in the running context and return the token for later reset."""
    return _var(key or config.context_key).set(config)


def reset_config(token: Token[Config]) -> None:
    """Restore the previous value using ``token`` returned from :func:`push_config`."""
    token.var.reset(token)


def current_config(key: str = DEFAULT_CONTEXT_KEY) -> Config:
    """Return the :class:`Config` stored in the running context."""
    return from_context(contextvars.copy_context(), key)


__all__ = ["to_context", "from_context", "push_config", "reset_config", "current_config"]
