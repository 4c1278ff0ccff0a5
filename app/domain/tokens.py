from __future__ import annotations

import secrets
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "MS_PER_MINUTE",
    "DEFAULT_SECRET_BYTES",
    "TOKEN_ID_PREFIX",
    "TokenRequest",
    "Token",
    "build_token",
    "is_token_expired",
    "format_timestamp_ms",
    "serialize_token",
]

MS_PER_MINUTE = 60_000
MS_PER_DAY = 86_400_000
DEFAULT_SECRET_BYTES = 24  # 48 hex chars, 192 bits
TOKEN_ID_PREFIX = "token_"


# ------------------------
# Schema
# ------------------------
class TokenRequest(BaseModel):
    """An already-validated request to issue a token.

    The factory trusts these values; validation lives at the HTTP boundary.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    scopes: tuple[str, ...]
    expires_in_minutes: int


class Token(BaseModel):
    """An issued bearer token. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    scopes: tuple[str, ...] = Field(..., min_length=1)
    created_at_ms: int  # epoch milliseconds
    expires_at_ms: int  # created_at_ms + expires_in_minutes * 60_000
    secret: str


# ------------------------
# Factory
# ------------------------

def _new_token_id() -> str:
    return f"{TOKEN_ID_PREFIX}{uuid4()}"


def build_token(
    request: TokenRequest, *, now_ms: int, secret_bytes: int = DEFAULT_SECRET_BYTES
) -> Token:
    """Construct a fresh token for `request`, issued at `now_ms`.

    The id and the secret are generated independently of each other and of
    anything the user supplied. The returned token is not registered anywhere.
    """
    return Token(
        id=_new_token_id(),
        user_id=request.user_id,
        scopes=tuple(request.scopes),
        created_at_ms=now_ms,
        expires_at_ms=now_ms + request.expires_in_minutes * MS_PER_MINUTE,
        secret=secrets.token_hex(secret_bytes),
    )


def is_token_expired(token: Token, now_ms: int) -> bool:
    """Return True once `now_ms` has reached the token's expiry instant."""
    return token.expires_at_ms <= now_ms


# ------------------------
# View mapping
# ------------------------

def _civil_from_days(days: int) -> tuple[int, int, int]:
    """Proleptic Gregorian (year, month, day) for a day count since 1970-01-01."""
    z = days + 719_468  # shift the epoch to 0000-03-01
    era = z // 146_097
    doe = z - era * 146_097
    yoe = (doe - doe // 1460 + doe // 36_524 - doe // 146_096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def format_timestamp_ms(epoch_ms: int) -> str:
    """Render epoch milliseconds as ISO-8601 UTC, e.g. 2024-01-01T01:00:00.000Z.

    Integer arithmetic only, so every int maps to a string. Years outside
    0000-9999 use the expanded form with a sign and six digits
    (+275760-09-13T00:00:00.000Z), as JavaScript's toISOString does.
    """
    days, ms_of_day = divmod(epoch_ms, MS_PER_DAY)
    year, month, day = _civil_from_days(days)
    hours, rem = divmod(ms_of_day, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    seconds, millis = divmod(rem, 1000)
    if 0 <= year <= 9999:
        year_str = f"{year:04d}"
    else:
        year_str = f"{'+' if year > 0 else '-'}{abs(year):06d}"
    return f"{year_str}-{month:02d}-{day:02d}T{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}Z"


def serialize_token(token: Token) -> dict:
    """Map a token to its external (wire) view with string timestamps."""
    return {
        "id": token.id,
        "userId": token.user_id,
        "scopes": list(token.scopes),
        "createdAt": format_timestamp_ms(token.created_at_ms),
        "expiresAt": format_timestamp_ms(token.expires_at_ms),
        "token": token.secret,
    }
