"""Account and session routes.

Endpoints
~~~~~~~~~
* ``POST /auth/signup`` — create an account and sign in
* ``POST /auth/login`` — sign in to an existing account
* ``POST /auth/logout`` — sign out and reset the signals
* ``GET /auth/session`` — who is signed in

Signing in or out starts the signal engine over from its defaults.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, HTTPException

from equilibrium.api.schemas import LoginRequest, SignupRequest
from equilibrium.auth.service import AccountService, AuthError, AuthResult
from equilibrium.engine.state import SignalEngine

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# Module-level references, set by server lifespan
_accounts: AccountService | None = None
_engine: SignalEngine | None = None


def set_services(accounts: AccountService | None, engine: SignalEngine | None) -> None:
    """Wire the account service and signal engine into this router at startup."""
    global _accounts, _engine
    _accounts = accounts
    _engine = engine


def _services() -> tuple[AccountService, SignalEngine]:
    if _accounts is None or _engine is None:
        raise HTTPException(503, "Account service not ready.")
    return _accounts, _engine


@router.post("/signup", status_code=201, response_model=AuthResult)
async def signup(req: SignupRequest):
    accounts, engine = _services()
    try:
        result = await accounts.signup(req.name, req.email, req.password, req.confirm_password)
    except AuthError as exc:
        raise HTTPException(400, exc.message) from exc
    engine.reset()
    return result


@router.post("/login", response_model=AuthResult)
async def login(req: LoginRequest):
    accounts, engine = _services()
    try:
        result = await accounts.login(req.email, req.password)
    except AuthError as exc:
        raise HTTPException(401, exc.message) from exc
    engine.reset()
    return result


@router.post("/logout")
async def logout():
    accounts, engine = _services()
    await accounts.logout()
    engine.reset()
    return {"signed_out": True}


@router.get("/session")
async def current_session() -> dict[str, Any]:
    accounts, _ = _services()
    session = accounts.current
    return {
        "signed_in": session is not None,
        "session": session.model_dump() if session else None,
    }
