"""Signal and derived-output routes for the signed-in user."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from equilibrium.api.schemas import SignalsRequest, SignalValueRequest
from equilibrium.auth.models import Session
from equilibrium.auth.service import AccountService
from equilibrium.engine.shape import render_svg
from equilibrium.engine.state import SignalEngine
from equilibrium.models import Captions, DashboardSnapshot, DerivedOutput, SignalField, SignalState

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["signals"])

# Module-level references, set by server lifespan
_accounts: AccountService | None = None
_engine: SignalEngine | None = None


def set_services(accounts: AccountService | None, engine: SignalEngine | None) -> None:
    global _accounts, _engine
    _accounts = accounts
    _engine = engine


def get_engine() -> SignalEngine:
    if _engine is None:
        raise HTTPException(503, "Signal engine not ready.")
    return _engine


def require_session() -> Session:
    if _accounts is None:
        raise HTTPException(503, "Account service not ready.")
    if _accounts.current is None:
        raise HTTPException(401, "Not signed in.")
    return _accounts.current


# ── Signals ───────────────────────────────────────────────────


@router.get("/signals", response_model=SignalState)
async def get_signals(
    _: Session = Depends(require_session),
    engine: SignalEngine = Depends(get_engine),
):
    return engine.signals


@router.put("/signals/{field}", response_model=DerivedOutput)
async def set_signal(
    field: SignalField,
    req: SignalValueRequest,
    session: Session = Depends(require_session),
    engine: SignalEngine = Depends(get_engine),
):
    """Set one signal and return the full recomputed output."""
    derived = engine.set_signal(field, req.value)
    logger.info("signals.set", uid=session.uid, field=field.value)
    return derived


@router.patch("/signals", response_model=DerivedOutput)
async def set_signals(
    req: SignalsRequest,
    session: Session = Depends(require_session),
    engine: SignalEngine = Depends(get_engine),
):
    """Set several signals with a single recomputation."""
    values = req.model_dump(exclude_none=True)
    if not values:
        return engine.get_derived()
    derived = engine.set_signals(values)
    logger.info("signals.set", uid=session.uid, fields=sorted(values))
    return derived


# ── Derived views ─────────────────────────────────────────────


@router.get("/derived", response_model=DerivedOutput)
async def get_derived(
    _: Session = Depends(require_session),
    engine: SignalEngine = Depends(get_engine),
):
    return engine.get_derived()


@router.get("/outline")
async def get_outline(
    _: Session = Depends(require_session),
    engine: SignalEngine = Depends(get_engine),
):
    outline = engine.get_outline()
    return {
        "point_count": outline.point_count,
        "smoothness": outline.smoothness,
        "tension_score": outline.tension_score,
        "path": outline.to_svg_path(),
        "vertices": [v.model_dump() for v in outline.vertices],
    }


@router.get("/outline.svg")
async def get_outline_svg(
    _: Session = Depends(require_session),
    engine: SignalEngine = Depends(get_engine),
):
    svg = render_svg(engine.get_outline(), engine.get_derived().vibe_score)
    return Response(content=svg, media_type="image/svg+xml")


@router.get("/captions", response_model=Captions)
async def get_captions(
    _: Session = Depends(require_session),
    engine: SignalEngine = Depends(get_engine),
):
    return engine.get_captions()


@router.get("/dashboard", response_model=DashboardSnapshot)
async def get_dashboard(
    _: Session = Depends(require_session),
    engine: SignalEngine = Depends(get_engine),
):
    return engine.snapshot()
