"""Accounts and sessions for the dashboard."""

from equilibrium.auth.models import Account, Session
from equilibrium.auth.service import SESSION_KEY, AccountService, AuthError, AuthResult

__all__ = ["SESSION_KEY", "Account", "AccountService", "AuthError", "AuthResult", "Session"]
