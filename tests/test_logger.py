"""Tests for the structlog helpers."""

import pytest
import structlog

from equilibrium.logger import bind_user, redact_email, unbind_user


class TestRedactEmail:
    def test_masks_local_part(self):
        event = redact_email(None, "info", {"event": "auth.login_failed", "email": "ada@example.com"})
        assert event == {"event": "auth.login_failed", "email": "a***@example.com"}

    @pytest.mark.parametrize("value", ["not-an-email", None, 42])
    def test_leaves_other_values_alone(self, value):
        assert redact_email(None, "info", {"email": value}) == {"email": value}

    def test_no_email_field(self):
        assert redact_email(None, "info", {"event": "engine.reset"}) == {"event": "engine.reset"}


def test_bind_and_unbind_user():
    structlog.contextvars.clear_contextvars()
    bind_user("user_abc")
    assert structlog.contextvars.get_contextvars()["uid"] == "user_abc"
    unbind_user()
    assert "uid" not in structlog.contextvars.get_contextvars()
