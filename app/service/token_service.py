from __future__ import annotations

import time

from ..config import load_settings
from ..domain.store import TokenStore
from ..domain.tokens import TokenRequest, build_token, serialize_token
from ..logging_conf import get_logger

logger = get_logger("service.tokens")

_default_store = TokenStore()


def clock_ms() -> int:
    """Return current time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def get_token_store() -> TokenStore:
    """Return the process-wide token store."""
    return _default_store


# ------------------------
# Use-cases
# ------------------------

def create_token(
    *,
    user_id: str,
    scopes: list[str],
    expires_in_minutes: int,
    store: TokenStore,
    now_ms: int | None = None,
) -> dict:
    """Issue a token, register it in `store` and return its view.

    Inputs must already be validated (trimmed, non-empty, positive expiry).
    `now_ms` defaults to the wall clock.
    """
    issued_at = now_ms if now_ms is not None else clock_ms()
    request = TokenRequest(
        user_id=user_id, scopes=tuple(scopes), expires_in_minutes=expires_in_minutes
    )
    token = build_token(request, now_ms=issued_at, secret_bytes=load_settings().secret_bytes)
    view = serialize_token(token)
    store.insert(token)
    logger.info(
        "token.create",
        extra={
            "event": "token_create",
            "token_id": token.id,
            "user_id": token.user_id,
            "scope_count": len(token.scopes),
            "expires_at_ms": token.expires_at_ms,
        },
    )
    return view


def list_active_tokens_for_user(
    *, user_id: str, store: TokenStore, now_ms: int | None = None
) -> list[dict]:
    """Return views of the user's unexpired tokens, oldest first."""
    at = now_ms if now_ms is not None else clock_ms()
    tokens = store.list_active(user_id, at)
    logger.info(
        "tokens.list",
        extra={"event": "tokens_list", "user_id": user_id, "count": len(tokens)},
    )
    return [serialize_token(t) for t in tokens]
