"""FastAPI application — account, signal and dashboard endpoints.

This module wires together all infrastructure:
- CORS + API key auth middleware
- Key-value store (SQLite or in-memory)
- Account / session service
- Signal engine and derived-output routes
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from equilibrium.api.middleware import setup_middleware
from equilibrium.api.routes import auth as auth_routes
from equilibrium.api.routes import signals as signal_routes
from equilibrium.auth.service import AccountService
from equilibrium.config import get_settings
from equilibrium.engine.state import SignalEngine
from equilibrium.storage.database import dispose_db, init_db
from equilibrium.storage.kv import create_store

logger = structlog.get_logger(__name__)

__version__ = "0.1.0"

# ── Shared state (initialised in lifespan) ────────────────────

_accounts: AccountService | None = None
_engine: SignalEngine | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle hooks."""
    global _accounts, _engine

    settings = get_settings()

    # 1. Storage
    if settings.storage_backend == "sqlite":
        await init_db()
        logger.info("server.db_ready")
    store = create_store(settings)

    # 2. Accounts, restoring any persisted session
    _accounts = AccountService(
        store,
        password_min_length=settings.password_min_length,
        hash_iterations=settings.password_hash_iterations,
    )
    await _accounts.restore_session()

    # 3. Signal engine
    _engine = SignalEngine(
        point_count=settings.shape_point_count,
        base_radius=settings.shape_base_radius,
    )

    auth_routes.set_services(_accounts, _engine)
    signal_routes.set_services(_accounts, _engine)
    logger.info("server.started", port=settings.api_port, storage=store.name)

    yield  # ← application runs

    auth_routes.set_services(None, None)
    signal_routes.set_services(None, None)
    if settings.storage_backend == "sqlite":
        await dispose_db()
    logger.info("server.stopped")


app = FastAPI(
    title="Equilibrium API",
    description="Personal wellbeing dashboard: signals in, scores, interventions and shapes out.",
    version=__version__,
    lifespan=lifespan,
)

# ── Middleware ────────────────────────────────────────────────
setup_middleware(app)

# ── Routers ───────────────────────────────────────────────────
app.include_router(auth_routes.router)
app.include_router(signal_routes.router)


# ── Health ────────────────────────────────────────────────────

@app.get("/health", tags=["system"])
async def health():
    return {
        "status": "ok",
        "version": __version__,
        "signed_in": _accounts is not None and _accounts.current is not None,
    }
