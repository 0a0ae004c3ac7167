"""Request / response models shared across API route modules."""

from __future__ import annotations

from pydantic import BaseModel


class SignupRequest(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class SignalValueRequest(BaseModel):
    """Set one signal; the value is clamped into the field's domain."""
    value: float


class SignalsRequest(BaseModel):
    """Set any subset of signals in one recomputation."""
    screen_time: float | None = None
    steps: float | None = None
    mood_x: float | None = None   # 0 = negative, 100 = positive
    mood_y: float | None = None   # 0 = high energy, 100 = low energy
