"""Tests for starnation.chambers module."""

import pytest

from starnation.chambers import (
    CELESTIAL_FORGE,
    STATUS_ERROR,
    STATUS_IDLE,
    STATUS_LOADING,
    STATUS_SUCCESS,
    STELLAR_ANIMATOR,
    VISION_WEAVER,
    ChamberState,
    get_chamber_spec,
    get_chamber_specs,
)


class TestChamberRegistry:
    """Test suite for the chamber registry."""

    def test_three_chambers(self):
        """Test the available chambers and their order."""
        assert [spec.key for spec in get_chamber_specs()] == [VISION_WEAVER, CELESTIAL_FORGE, STELLAR_ANIMATOR]

    def test_forge_aspect_ratios(self):
        """Test the Celestial Forge aspect ratio choices."""
        spec = get_chamber_spec(CELESTIAL_FORGE)

        assert spec.aspect_ratios == ("1:1", "16:9", "9:16", "4:3", "3:4")
        assert spec.default_aspect_ratio == "1:1"
        assert not spec.requires_source_image

    def test_animator_aspect_ratios(self):
        """Test the Stellar Animator aspect ratio choices."""
        spec = get_chamber_spec(STELLAR_ANIMATOR)

        assert spec.aspect_ratios == ("16:9", "9:16")
        assert spec.default_aspect_ratio == "16:9"
        assert spec.requires_source_image

    def test_unknown_chamber(self):
        """Test that an unknown key raises KeyError."""
        with pytest.raises(KeyError):
            get_chamber_spec("oracle")


class TestChamberState:
    """Test suite for per-chamber request status."""

    def test_lifecycle(self):
        """Test idle, loading, success and reset transitions."""
        state = ChamberState()
        assert state.status == STATUS_IDLE

        state.start()
        assert state.is_loading
        assert state.status == STATUS_LOADING

        state.succeed(b"image")
        assert state.status == STATUS_SUCCESS
        assert state.result == b"image"

        state.reset()
        assert state.status == STATUS_IDLE
        assert state.result is None

    def test_failure_clears_result(self):
        """Test that a failure keeps the message and drops any result."""
        state = ChamberState()
        state.succeed(b"old")

        state.start()
        state.fail("A cosmic storm interfered")

        assert state.status == STATUS_ERROR
        assert state.error == "A cosmic storm interfered"
        assert state.result is None
