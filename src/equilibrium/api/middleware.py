"""Middleware — CORS, API key gate, request logging, error mapping.

When ``api_secret_key`` is configured every route except health and the
OpenAPI docs requires the key, ``/auth/*`` included: sign-up and sign-in
write to the account store.  Stray ``ValueError``s from the engine become
422 responses; anything else becomes a bare 500.
"""

from __future__ import annotations

import secrets
import time
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from equilibrium.config import get_settings

logger = structlog.get_logger(__name__)

_DEFAULT_SECRET = "change-me-to-a-random-secret"

PUBLIC_PATHS: frozenset[str] = frozenset(
    {"/health", "/docs", "/docs/oauth2-redirect", "/openapi.json", "/redoc"}
)


def parse_origins(raw: str) -> list[str]:
    """Split ``cors_origins`` (comma-separated or ``"*"``) into a list."""
    raw = raw.strip()
    if raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


def api_key_enabled(secret: str) -> bool:
    return secret not in (_DEFAULT_SECRET, "")


# ── API key gate ──────────────────────────────────────────────


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Require ``X-API-Key`` or ``Authorization: Bearer <key>`` outside :data:`PUBLIC_PATHS`."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        secret = get_settings().api_secret_key
        if not api_key_enabled(secret) or request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        supplied = request.headers.get("X-API-Key") or _extract_bearer(
            request.headers.get("Authorization", "")
        )
        if not supplied or not secrets.compare_digest(supplied.encode(), secret.encode()):
            logger.info("http.api_key_rejected", path=request.url.path, supplied=bool(supplied))
            return JSONResponse(status_code=401, content={"detail": "Invalid or missing API key."})

        return await call_next(request)


# ── Request logging ───────────────────────────────────────────


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration; health probes are skipped."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        if request.url.path != "/health":
            logger.info(
                "http.request",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=round((time.monotonic() - start) * 1000, 1),
            )
        return response


# ── Error mapping ─────────────────────────────────────────────


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Map ``ValueError`` to 422 with its message and any other exception to 500."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except ValueError as exc:
            logger.warning("http.invalid_value", path=request.url.path, error=str(exc))
            return JSONResponse(status_code=422, content={"detail": str(exc)})
        except Exception as exc:
            logger.exception("http.unhandled_error", path=request.url.path, error=str(exc))
            return JSONResponse(status_code=500, content={"detail": "Internal server error."})


def setup_middleware(app: FastAPI) -> None:
    """Install, outermost first: error mapping, request logging, API key, CORS."""
    # Starlette wraps in reverse order of registration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_origins(get_settings().cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(APIKeyMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)


def _extract_bearer(auth_header: str) -> str:
    if auth_header.lower().startswith("bearer "):
        return auth_header[7:].strip()
    return ""
