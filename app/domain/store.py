from __future__ import annotations

import threading

from .tokens import Token, is_token_expired

__all__ = ["TokenStore"]


class TokenStore:
    """Append-only, process-lifetime collection of issued tokens.

    Tokens are grouped per user so listing one user never scans the others.
    A single lock serializes inserts against reads; readers filter a copy
    taken under the lock. Nothing is ever evicted: expired tokens simply
    stop showing up in `list_active`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_user: dict[str, list[Token]] = {}
        self._count = 0

    def insert(self, token: Token) -> None:
        with self._lock:
            self._by_user.setdefault(token.user_id, []).append(token)
            self._count += 1

    def list_active(self, user_id: str, now_ms: int) -> list[Token]:
        """Return the user's unexpired tokens in insertion order."""
        with self._lock:
            snapshot = list(self._by_user.get(user_id, ()))
        return [t for t in snapshot if not is_token_expired(t, now_ms)]

    def __len__(self) -> int:
        with self._lock:
            return self._count
