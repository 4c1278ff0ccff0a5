"""Pure domain code: token records, the token factory and the token store.

Nothing here knows about FastAPI or HTTP, and nothing reads the clock:
callers pass `now_ms` explicitly.
"""
__all__ = ["tokens", "store"]
