#!/usr/bin/env python3
"""End-to-end smoke run against a live token issuer.

Steps:
- wait for server health
- issue `--count` tokens for one user, one after another
- list that user's active tokens
- check every issued token is listed in issue order with a distinct secret
- emit a JSON summary and exit code
"""
from __future__ import annotations

import asyncio
import sys

import httpx

from app.logging_conf import get_logger, setup_logging
from runner.cli import parse_args
from runner.client import issue_token, list_active, wait_for_health
from runner.utils import summarize

setup_logging(align_server_loggers=False)
logger = get_logger("runner")


async def run_smoke(
    *,
    base_url: str,
    user_id: str,
    scopes: list[str],
    expires_in_minutes: int,
    count: int,
    timeout_s: float = 20.0,
) -> int:
    await wait_for_health(base_url, timeout_s)
    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        # Sequential: listing order is only defined by issue order.
        issued = []
        for _ in range(count):
            issued.append(
                await issue_token(
                    client,
                    user_id=user_id,
                    scopes=scopes,
                    expires_in_minutes=expires_in_minutes,
                )
            )
        listed = await list_active(client, user_id)
    summary, exit_code = summarize(issued, listed)
    logger.info("runner.summary", extra=summary)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    code = asyncio.run(
        run_smoke(
            base_url=args.base_url,
            user_id=args.user_id,
            scopes=args.scopes,
            expires_in_minutes=args.expires_in_minutes,
            count=args.count,
            timeout_s=args.timeout,
        )
    )
    raise SystemExit(code)


if __name__ == "__main__":
    main()
