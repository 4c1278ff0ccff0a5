from __future__ import annotations

import logging

import pytest

from app.domain.store import TokenStore
from app.service import token_service
from tests.conftest import T0_MS

HOUR_MS = 3_600_000


def test_create_token_scenario(store: TokenStore) -> None:
    view = token_service.create_token(
        user_id="u1", scopes=["read", "write"], expires_in_minutes=60, store=store, now_ms=T0_MS
    )

    assert view["userId"] == "u1"
    assert view["scopes"] == ["read", "write"]
    assert view["createdAt"] == "2024-01-01T00:00:00.000Z"
    assert view["expiresAt"] == "2024-01-01T01:00:00.000Z"
    assert len(store) == 1


def test_token_is_gone_an_hour_after_expiry(store: TokenStore) -> None:
    token_service.create_token(
        user_id="u1", scopes=["read", "write"], expires_in_minutes=60, store=store, now_ms=T0_MS
    )

    assert token_service.list_active_tokens_for_user(
        user_id="u1", store=store, now_ms=T0_MS + 2 * HOUR_MS
    ) == []


def test_one_minute_token_boundary(store: TokenStore) -> None:
    view = token_service.create_token(
        user_id="u", scopes=["read"], expires_in_minutes=1, store=store, now_ms=T0_MS
    )

    before = token_service.list_active_tokens_for_user(user_id="u", store=store, now_ms=T0_MS + 59_000)
    at = token_service.list_active_tokens_for_user(user_id="u", store=store, now_ms=T0_MS + 60_000)

    assert [v["id"] for v in before] == [view["id"]]
    assert at == []


def test_listing_only_returns_the_requested_user(store: TokenStore) -> None:
    first = token_service.create_token(
        user_id="u2", scopes=["a"], expires_in_minutes=5, store=store, now_ms=T0_MS
    )
    second = token_service.create_token(
        user_id="u2", scopes=["b"], expires_in_minutes=5, store=store, now_ms=T0_MS
    )
    other = token_service.create_token(
        user_id="u3", scopes=["c"], expires_in_minutes=5, store=store, now_ms=T0_MS
    )

    listed = token_service.list_active_tokens_for_user(user_id="u2", store=store, now_ms=T0_MS)

    assert [v["id"] for v in listed] == [first["id"], second["id"]]
    assert other["id"] not in {v["id"] for v in listed}


def test_repeated_listing_is_stable(store: TokenStore) -> None:
    for minutes in (1, 2, 3):
        token_service.create_token(
            user_id="u", scopes=["s"], expires_in_minutes=minutes, store=store, now_ms=T0_MS
        )

    first = token_service.list_active_tokens_for_user(user_id="u", store=store, now_ms=T0_MS + 90_000)
    second = token_service.list_active_tokens_for_user(user_id="u", store=store, now_ms=T0_MS + 90_000)

    assert first == second
    assert len(first) == 2


def test_default_clock_is_used_without_now(store: TokenStore) -> None:
    before = token_service.clock_ms()
    token_service.create_token(user_id="u", scopes=["s"], expires_in_minutes=1, store=store)

    assert len(token_service.list_active_tokens_for_user(user_id="u", store=store)) == 1
    assert store.list_active("u", before)[0].created_at_ms >= before


def test_secret_size_follows_settings(store: TokenStore, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TOKEN_SECRET_BYTES", "32")

    view = token_service.create_token(
        user_id="u", scopes=["s"], expires_in_minutes=1, store=store, now_ms=T0_MS
    )

    assert len(view["token"]) == 64


def test_secret_is_never_logged(store: TokenStore, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="service.tokens"):
        view = token_service.create_token(
            user_id="u", scopes=["s"], expires_in_minutes=1, store=store, now_ms=T0_MS
        )

    records = [r for r in caplog.records if r.name == "service.tokens"]
    assert records
    assert getattr(records[0], "token_id") == view["id"]
    assert all(view["token"] not in str(r.__dict__) for r in records)


def test_far_future_expiry_is_issued_and_listed(store: TokenStore) -> None:
    view = token_service.create_token(
        user_id="u", scopes=["r"], expires_in_minutes=5_000_000_000, store=store, now_ms=T0_MS
    )

    assert view["expiresAt"].startswith("+011")
    listed = token_service.list_active_tokens_for_user(user_id="u", store=store, now_ms=T0_MS)
    assert listed == [view]
