"""FastAPI app factory: health endpoint, request logging and the token API."""
from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from uuid import uuid4

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api import router as api_router
from app.config import load_settings
from app.logging_conf import get_logger, setup_logging

settings = load_settings()

# Configure logging before anything else.
setup_logging(settings.log_level)
logger = get_logger("app")

_NON_OBJECT_BODY_ERRORS = frozenset({"model_type", "model_attributes_type", "dict_type"})


def describe_validation_error(errors: list[dict]) -> str:
    """Collapse pydantic errors into the single message returned to clients."""
    if not errors:
        return "Invalid request."
    err = errors[0]
    kind = err.get("type")
    at_body = tuple(err.get("loc", ())) == ("body",)
    if kind == "json_invalid" or (kind == "missing" and at_body):
        return "Invalid JSON body."
    if kind in _NON_OBJECT_BODY_ERRORS and at_body:
        return "Request body must be a JSON object."
    if kind == "missing":
        return f"{err['loc'][-1]} is required."
    return str(err.get("msg", "Invalid request.")).removeprefix("Value error, ")


def create_app() -> FastAPI:
    app = FastAPI(title="Token Issuer", version=settings.app_version)

    @app.on_event("startup")
    async def _on_startup() -> None:
        logger.info("startup", extra={"event": "startup", "version": settings.app_version})

    @app.on_event("shutdown")
    async def _on_shutdown() -> None:
        logger.info("shutdown", extra={"event": "shutdown"})

    @app.exception_handler(RequestValidationError)
    async def _on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = describe_validation_error(list(exc.errors()))
        logger.info(
            "request.rejected",
            extra={
                "event": "request_rejected",
                "path": request.url.path,
                "reason": message,
                "request_id": getattr(request.state, "request_id", None),
            },
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": {"error_code": "malformed_request", "error_message": message}
            },
        )

    @app.middleware("http")
    async def request_logger(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Log start/end of every request under a correlation id.

        An incoming X-Request-ID is reused, otherwise one is minted; it is
        echoed back on the response.
        """
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id

        start = time.perf_counter()
        logger.info(
            "request.start",
            extra={
                "event": "request_start",
                "method": request.method,
                "path": request.url.path,
                "request_id": request_id,
            },
        )
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={
                    "event": "request_error",
                    "method": request.method,
                    "path": request.url.path,
                    "request_id": request_id,
                },
            )
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                "request_id": request_id,
            },
        )
        return response

    @app.get("/health", summary="Liveness/readiness check")
    async def health() -> JSONResponse:
        return JSONResponse(content={"ok": True})

    app.include_router(api_router)

    return app


# ASGI entrypoint for uvicorn: `uvicorn app.main:app --port 8000`
app = create_app()
