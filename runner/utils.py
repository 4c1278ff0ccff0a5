from __future__ import annotations

from runner.types import Issued


def summarize(issued: list[Issued], listed: list[dict]) -> tuple[dict, int]:
    """Compare what was issued with what the API lists; return (summary, exit code).

    The run passes when every issued id is listed, in issue order, the
    listing holds no other user's tokens and no two secrets collide.
    """
    issued_ids = [t.id for t in issued]
    listed_ids = [it["id"] for it in listed]
    wanted = set(issued_ids)

    missing = [tid for tid in issued_ids if tid not in set(listed_ids)]
    in_order = [tid for tid in listed_ids if tid in wanted] == issued_ids
    foreign = [it["id"] for it in listed if issued and it["userId"] != issued[0].user_id]
    distinct_secrets = len({t.secret for t in issued}) == len(issued)

    summary = {
        "component": "runner",
        "event": "summary",
        "issued": len(issued),
        "listed": len(listed),
        "missing": missing,
        "in_order": in_order,
        "foreign": foreign,
        "distinct_secrets": distinct_secrets,
    }
    ok = not missing and in_order and not foreign and distinct_secrets and bool(issued)
    return summary, 0 if ok else 1
