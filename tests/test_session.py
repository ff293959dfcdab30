"""Tests for starnation.session module."""

import pytest

from starnation.config import SESSION_USER_KEY
from starnation.session import USER_SCOPED_KEYS, current_user, login, logout


class TestSessionGate:
    """Test suite for login and logout."""

    def test_login_trims_name(self):
        """Test that the stored creator name is trimmed."""
        state = {}

        assert login(state, "  Alice  ") == "Alice"
        assert state[SESSION_USER_KEY] == "Alice"
        assert current_user(state) == "Alice"

    def test_blank_name_rejected(self):
        """Test that a blank name does not log in."""
        state = {}

        with pytest.raises(ValueError):
            login(state, "   ")
        assert current_user(state) is None

    def test_logout_clears_creator_state(self):
        """Test that logout drops the user and every per-user key."""
        state = {"unrelated": 1}
        login(state, "Alice")
        for key in USER_SCOPED_KEYS:
            state[key] = "value"

        logout(state)

        assert current_user(state) is None
        assert state == {"unrelated": 1}

    def test_logout_when_logged_out(self):
        """Test that logout is safe without a session."""
        state = {}
        logout(state)
        assert state == {}

    def test_slash_in_name_rejected(self):
        """Test that names which would nest inside another creator's folder are refused."""
        state = {}

        with pytest.raises(ValueError):
            login(state, "alice/polaris")
        assert current_user(state) is None

    def test_next_creator_sees_no_tool_history(self):
        """Test that Oracle, Transmission and payment state do not survive a creator switch."""
        state = {}
        login(state, "alice")
        state["mirror_log"] = ["verse"]
        state["oracle_answer"] = "answer"
        state["transmission"] = "message"
        state["payment_checked"] = {"cs_1": True}

        logout(state)
        login(state, "bob")

        assert sorted(state) == [SESSION_USER_KEY]
