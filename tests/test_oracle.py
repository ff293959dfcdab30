"""Tests for starnation.oracle module."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from starnation.config import ORACLE_DETAILED_RULE, POETIC_REFLECTION_FALLBACK, SYMBOL_DECODER_FAILURE
from starnation.errors import GenerationError, InvalidApiKeyError, MissingApiKeyError
from starnation.oracle import (
    ROLE_MODEL,
    ROLE_USER,
    ChatLog,
    decode_symbolic_message,
    get_oracle_response,
    get_poetic_reflection,
    reflect,
)


@pytest.fixture
def genai_client():
    client = MagicMock()
    with patch("starnation.oracle.require_genai_client", return_value=client), \
            patch("starnation.oracle.get_genai_client", return_value=client):
        yield client


class TestPoeticReflection:
    """Test suite for the Oracle's Mirror."""

    def test_returns_model_text(self, genai_client):
        """Test that the reflection text comes from the model."""
        genai_client.models.generate_content.return_value = SimpleNamespace(text="A verse of stars")

        assert get_poetic_reflection("Who am I?") == "A verse of stars"
        kwargs = genai_client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-pro"
        assert '"Who am I?"' in kwargs["contents"]

    def test_errors_fall_back(self, genai_client):
        """Test that vendor failures return the static fallback."""
        genai_client.models.generate_content.side_effect = RuntimeError("offline")

        assert get_poetic_reflection("Who am I?") == POETIC_REFLECTION_FALLBACK

    def test_no_key_falls_back(self):
        """Test that a missing key also returns the fallback."""
        assert get_poetic_reflection("Who am I?") == POETIC_REFLECTION_FALLBACK


class TestChatLog:
    """Test suite for the chat transcript."""

    def test_reflect_appends_both_turns(self, genai_client):
        """Test that a reflection adds the user turn and the model turn."""
        genai_client.models.generate_content.return_value = SimpleNamespace(text="Echo")
        log = ChatLog()

        reply = reflect(log, "Hello")

        assert [m.role for m in log.messages] == [ROLE_USER, ROLE_MODEL]
        assert reply.text == "Echo"
        assert log.messages[0].id != log.messages[1].id

    def test_blank_prompt_is_ignored(self, genai_client):
        """Test that an empty prompt leaves the log unchanged."""
        log = ChatLog()

        assert reflect(log, "  ") is None
        assert len(log) == 0

    def test_unknown_role_is_rejected(self):
        """Test that only user and model roles are accepted."""
        with pytest.raises(ValueError):
            ChatLog().append("system", "hi")


class TestDecodeSymbolicMessage:
    """Test suite for the Transmission Hub."""

    def test_returns_interpretation(self, genai_client):
        """Test that the model's interpretation is returned."""
        genai_client.models.generate_content.return_value = SimpleNamespace(text=" The spiral speaks. ")

        assert decode_symbolic_message(b"img", "image/png") == "The spiral speaks."
        assert genai_client.models.generate_content.call_args.kwargs["model"] == "gemini-2.5-flash"

    def test_non_image_is_rejected(self, genai_client):
        """Test that only images can be decoded."""
        with pytest.raises(ValueError, match="Only symbolic images"):
            decode_symbolic_message(b"text", "text/plain")

    def test_vendor_failure_uses_static_message(self, genai_client):
        """Test that failures surface the static-veil message."""
        genai_client.models.generate_content.side_effect = RuntimeError("500 internal")

        with pytest.raises(GenerationError, match=SYMBOL_DECODER_FAILURE):
            decode_symbolic_message(b"img", "image/png")

    def test_invalid_key_propagates(self, genai_client):
        """Test that an invalid key is reported as such."""
        genai_client.models.generate_content.side_effect = RuntimeError("Requested entity was not found.")

        with pytest.raises(InvalidApiKeyError):
            decode_symbolic_message(b"img", "image/png")


class TestOracleResponse:
    """Test suite for the Universal Oracle."""

    def test_detailed_flag_changes_prompt(self, genai_client):
        """Test that the in-depth rule is only sent when requested."""
        genai_client.models.generate_content.return_value = SimpleNamespace(text="Answer")

        get_oracle_response("What is light?", detailed=True)
        detailed_prompt = genai_client.models.generate_content.call_args.kwargs["contents"]
        get_oracle_response("What is light?")
        concise_prompt = genai_client.models.generate_content.call_args.kwargs["contents"]

        assert ORACLE_DETAILED_RULE in detailed_prompt
        assert ORACLE_DETAILED_RULE not in concise_prompt
        assert "What is light?" in concise_prompt

    def test_blank_question_is_rejected(self, genai_client):
        """Test that an empty question raises ValueError."""
        with pytest.raises(ValueError):
            get_oracle_response("")

    def test_missing_key(self):
        """Test that the Oracle requires an API key."""
        with pytest.raises(MissingApiKeyError):
            get_oracle_response("What is light?")
