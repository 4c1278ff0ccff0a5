from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Issued:
    """A token issued during the smoke run, as returned by the API."""

    id: str
    user_id: str
    scopes: list[str]
    expires_at: str
    secret: str


class SmokeError(RuntimeError):
    """Raised when the smoke flow cannot proceed (e.g., health never ready)."""


class IssueError(SmokeError):
    """Raised when issuing a token fails after retries."""


class ListError(SmokeError):
    """Raised when listing a user's tokens fails after retries."""
