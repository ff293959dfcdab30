"""Tests for starnation.config module."""

from pathlib import Path

from starnation.config import (
    get_api_key,
    get_app_origin,
    get_data_dir,
    get_payment_poll_settings,
    get_supabase_credentials,
    get_video_poll_settings,
)


class TestConfig:
    """Test suite for environment accessors."""

    def test_api_key_precedence(self, monkeypatch):
        """Test that GEMINI_API_KEY wins over the fallbacks."""
        monkeypatch.setenv("API_KEY", "third")
        assert get_api_key() == "third"

        monkeypatch.setenv("GOOGLE_GENAI_API_KEY", "second")
        monkeypatch.setenv("GEMINI_API_KEY", "first")
        assert get_api_key() == "first"

    def test_api_key_placeholder_ignored(self, monkeypatch):
        """Test that unset placeholder values count as missing."""
        monkeypatch.setenv("GEMINI_API_KEY", "undefined")
        assert get_api_key() is None

    def test_supabase_requires_both(self, monkeypatch):
        """Test that both URL and key are needed."""
        monkeypatch.setenv("SUPABASE_URL", "https://proj.supabase.co")
        assert get_supabase_credentials() is None

        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
        assert get_supabase_credentials() == ("https://proj.supabase.co", "anon")

    def test_poll_defaults(self):
        """Test the default polling cadence and caps."""
        assert get_video_poll_settings() == (10.0, 60)
        assert get_payment_poll_settings() == (2.0, 10)

    def test_invalid_poll_values_fall_back(self, monkeypatch):
        """Test that unparseable or non-positive values use the defaults."""
        monkeypatch.setenv("VIDEO_POLL_INTERVAL", "soon")
        monkeypatch.setenv("VIDEO_POLL_MAX_ATTEMPTS", "0")
        assert get_video_poll_settings() == (10.0, 60)

        monkeypatch.setenv("VIDEO_POLL_INTERVAL", "5")
        monkeypatch.setenv("VIDEO_POLL_MAX_ATTEMPTS", "12")
        assert get_video_poll_settings() == (5.0, 12)

    def test_paths_and_origin(self, monkeypatch, tmp_path):
        """Test the data directory and checkout origin."""
        monkeypatch.setenv("STARNATION_DATA_DIR", str(tmp_path))
        assert get_data_dir() == Path(tmp_path)

        assert get_app_origin() == "http://localhost:8501"
        monkeypatch.setenv("APP_ORIGIN", "https://creator.example/")
        assert get_app_origin() == "https://creator.example"
