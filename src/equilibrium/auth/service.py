"""Account sign-up, sign-in and session persistence over a key-value store.

Accounts live under ``eq_user_<email>`` and the active session under
``equilibrium_session``, both as JSON-encoded typed records.  Every failure
the user can act on is raised as :class:`AuthError` carrying the message to
show; storage failures are translated into such messages here.
"""

from __future__ import annotations

import re

import structlog
from pydantic import BaseModel, ValidationError

from equilibrium.auth.models import Account, Session
from equilibrium.auth.passwords import hash_password, verify_password
from equilibrium.logger import bind_user, unbind_user
from equilibrium.storage.kv import KeyValueStore, StorageError

logger = structlog.get_logger(__name__)

SESSION_KEY = "equilibrium_session"
_ACCOUNT_KEY_PREFIX = "eq_user_"
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class AuthError(Exception):
    """A user-facing authentication failure."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthResult(BaseModel):
    session: Session
    message: str


def account_key(email: str) -> str:
    return f"{_ACCOUNT_KEY_PREFIX}{email.lower()}"


class AccountService:
    """Manage accounts and the single active session.

    Parameters
    ----------
    store : KeyValueStore
        Backend for account and session records.
    password_min_length : int
        Minimum accepted password length at sign-up.
    hash_iterations : int
        PBKDF2 iteration count for new password hashes.
    """

    def __init__(
        self,
        store: KeyValueStore,
        password_min_length: int = 6,
        hash_iterations: int = 240_000,
    ) -> None:
        self._store = store
        self._password_min_length = password_min_length
        self._hash_iterations = hash_iterations
        self._current: Session | None = None

    @property
    def current(self) -> Session | None:
        return self._current

    # ── Sign-up ───────────────────────────────────────────────

    async def signup(self, name: str, email: str, password: str, confirm_password: str) -> AuthResult:
        if not name or not email or not password or not confirm_password:
            raise AuthError("All fields are required")
        if password != confirm_password:
            raise AuthError("Passwords do not match")
        if len(password) < self._password_min_length:
            raise AuthError(f"Password must be at least {self._password_min_length} characters")
        if not _EMAIL_RE.match(email):
            raise AuthError("Please enter a valid email")

        key = account_key(email)
        try:
            existing = await self._store.get(key)
        except StorageError:
            # An unreadable key is treated as a free one.
            existing = None
        if existing is not None:
            raise AuthError("Email already registered")

        account = Account(
            name=name,
            email=email.lower(),
            password_hash=hash_password(password, self._hash_iterations),
        )
        try:
            await self._store.set(key, account.model_dump_json())
        except StorageError as exc:
            logger.error("auth.account_save_failed", email=account.email, error=str(exc))
            raise AuthError("Failed to save account. Please try again.") from exc

        session = account.to_session()
        try:
            await self._store.set(SESSION_KEY, session.model_dump_json())
        except StorageError as exc:
            logger.error("auth.session_save_failed", uid=session.uid, error=str(exc))
            raise AuthError("Failed to create session. Please try again.") from exc

        self._current = session
        bind_user(session.uid)
        logger.info("auth.signup", uid=session.uid)
        return AuthResult(session=session, message="Account created successfully! 🎉")

    # ── Sign-in / sign-out ────────────────────────────────────

    async def login(self, email: str, password: str) -> AuthResult:
        if not email or not password:
            raise AuthError("Email and password required")

        try:
            raw = await self._store.get(account_key(email))
            if raw is None:
                raise AuthError("Account not found")
            account = Account.model_validate_json(raw)
            if not verify_password(password, account.password_hash):
                logger.info("auth.login_failed", email=email.lower(), reason="password")
                raise AuthError("Incorrect password")
            session = account.to_session()
            await self._store.set(SESSION_KEY, session.model_dump_json())
        except (StorageError, ValidationError) as exc:
            logger.error("auth.login_error", email=email.lower(), error=str(exc))
            raise AuthError("Login failed") from exc

        self._current = session
        bind_user(session.uid)
        logger.info("auth.login", uid=session.uid)
        return AuthResult(session=session, message="Welcome back!")

    async def logout(self) -> None:
        """Forget the active session.  A failed delete is logged, not raised."""
        try:
            await self._store.delete(SESSION_KEY)
        except StorageError as exc:
            logger.warning("auth.logout_delete_failed", error=str(exc))
        if self._current is not None:
            logger.info("auth.logout", uid=self._current.uid)
        self._current = None
        unbind_user()

    async def restore_session(self) -> Session | None:
        """Load a previously persisted session, if any."""
        try:
            raw = await self._store.get(SESSION_KEY)
        except StorageError:
            logger.info("auth.no_session")
            return None
        if raw is None:
            return None
        try:
            session = Session.model_validate_json(raw)
        except ValidationError:
            logger.warning("auth.session_corrupt")
            return None
        self._current = session
        bind_user(session.uid)
        logger.info("auth.session_restored", uid=session.uid)
        return session
