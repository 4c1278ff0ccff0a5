from __future__ import annotations

import asyncio
import time

import httpx

from app.logging_conf import get_logger
from runner.types import IssueError, Issued, ListError, SmokeError

logger = get_logger("runner.client")


async def wait_for_health(base_url: str, timeout_s: float = 20.0) -> None:
    """Ping /health until it returns ok or raise after `timeout_s` seconds."""
    deadline = time.monotonic() + timeout_s
    async with httpx.AsyncClient(base_url=base_url, timeout=5.0) as client:
        while time.monotonic() < deadline:
            try:
                r = await client.get("/health")
                if r.status_code == 200 and r.json().get("ok") is True:
                    logger.info("health.ok", extra={"event": "health_ok"})
                    return
            except httpx.HTTPError:
                pass
            await asyncio.sleep(0.25)
    raise SmokeError("Health check did not pass within timeout")


async def issue_token(
    client: httpx.AsyncClient,
    *,
    user_id: str,
    scopes: list[str],
    expires_in_minutes: int,
    retries: int = 3,
) -> Issued:
    """Issue one token over HTTP, retrying transient failures.

    A 4xx answer is not retried: the request itself is wrong.
    """
    payload = {"userId": user_id, "scopes": scopes, "expiresInMinutes": expires_in_minutes}
    last_err: Exception | None = None
    for attempt in range(retries):
        try:
            r = await client.post("/api/tokens", json=payload)
            if 400 <= r.status_code < 500:
                raise IssueError(f"token request rejected ({r.status_code}): {r.text}")
            r.raise_for_status()
            data = r.json()
            logger.info(
                "token.issued",
                extra={"event": "token_issued", "token_id": data["id"], "attempt": attempt + 1},
            )
            return Issued(
                id=data["id"],
                user_id=data["userId"],
                scopes=data["scopes"],
                expires_at=data["expiresAt"],
                secret=data["token"],
            )
        except httpx.HTTPError as e:  # pragma: no cover - network flakiness
            last_err = e
            logger.warning(
                "token.issue_retry",
                extra={
                    "event": "token_issue_retry",
                    "user_id": user_id,
                    "attempt": attempt + 1,
                    "error": str(e),
                },
            )
    raise IssueError(str(last_err) if last_err else "issue_token failed")


async def list_active(client: httpx.AsyncClient, user_id: str, *, retries: int = 3) -> list[dict]:
    """Fetch the raw views of the user's active tokens, with retry."""
    last_err: Exception | None = None
    for _ in range(retries):
        try:
            r = await client.get("/api/tokens", params={"userId": user_id})
            r.raise_for_status()
            return r.json()
        except httpx.HTTPError as e:  # pragma: no cover
            last_err = e
            logger.warning(
                "tokens.list_retry",
                extra={"event": "tokens_list_retry", "user_id": user_id, "error": str(e)},
            )
    raise ListError(str(last_err) if last_err else "list_active failed")
