"""Typed records stored as JSON strings in the key-value store."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field


def _new_uid() -> str:
    return f"user_{uuid.uuid4().hex}"


class Account(BaseModel):
    """A registered user.  Only a salted hash of the password is kept."""

    kind: Literal["account"] = "account"
    uid: str = Field(default_factory=_new_uid)
    name: str
    email: str
    password_hash: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_session(self) -> Session:
        return Session(uid=self.uid, name=self.name, email=self.email)


class Session(BaseModel):
    """The signed-in user context handed to the dashboard."""

    kind: Literal["session"] = "session"
    uid: str
    name: str
    email: str
