from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CreateTokenRequest(BaseModel):
    """Body of POST /api/tokens.

    Values are normalized here (whitespace trimmed) so the core only ever
    sees clean input.
    """

    model_config = ConfigDict(alias_generator=to_camel)

    user_id: str
    scopes: list[str]
    expires_in_minutes: int

    @field_validator("user_id", mode="before")
    @classmethod
    def _check_user_id(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("userId must be a non-empty string.")
        return value.strip()

    @field_validator("scopes", mode="before")
    @classmethod
    def _check_scopes(cls, value: Any) -> list[str]:
        if not isinstance(value, list) or not value:
            raise ValueError("scopes must be a non-empty array of strings.")
        normalized = [s.strip() if isinstance(s, str) else s for s in value]
        if not all(isinstance(s, str) and s for s in normalized):
            raise ValueError("scopes must be a non-empty array of non-empty strings.")
        return normalized

    @field_validator("expires_in_minutes", mode="before")
    @classmethod
    def _check_expiry(cls, value: Any) -> int:
        # JSON has one number type: 60.0 is the integer 60.
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        # bool is an int subclass; JSON true must not pass as 1.
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError("expiresInMinutes must be a positive integer.")
        return value


class TokenResponse(BaseModel):
    """Wire view of an issued token."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    user_id: str
    scopes: list[str]
    created_at: str
    expires_at: str
    token: str
