from __future__ import annotations

import argparse
import os


def parse_scopes(raw: str) -> list[str]:
    """Split a comma-separated scope list, dropping blanks: "read, ,write" -> [read, write]."""
    return [s.strip() for s in raw.split(",") if s.strip()]


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments for the smoke runner."""
    parser = argparse.ArgumentParser(description="Token issuer smoke runner")
    parser.add_argument("--base-url", default=os.getenv("BASE_URL", "http://127.0.0.1:8000"))
    parser.add_argument("--user-id", default="smoke-user")
    parser.add_argument("--scopes", type=parse_scopes, default=["read", "write"])
    parser.add_argument("--expires-in", type=int, default=60, dest="expires_in_minutes")
    parser.add_argument("--count", type=int, default=3)
    parser.add_argument("--timeout", type=float, default=20.0)
    args = parser.parse_args(argv)
    if not args.scopes:
        parser.error("--scopes must name at least one scope")
    if args.expires_in_minutes <= 0:
        parser.error("--expires-in must be a positive integer")
    if args.count <= 0:
        parser.error("--count must be a positive integer")
    return args
