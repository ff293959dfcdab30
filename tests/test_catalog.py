"""Tests for starnation.catalog and starnation.star_system modules."""

import pytest

from starnation.catalog import (
    CENTRAL_STAR_ID,
    THEME_COLORS,
    build_animation_prompt,
    build_vision_prompt,
    find_star,
    get_catalog,
    orbit_positions,
    replace_star,
    split_portals,
)
from starnation.star_system import THEMES, StarSystem


class TestCatalog:
    """Test suite for the fixed star catalog."""

    def test_seven_stars_in_order(self):
        """Test the catalog contents and display order."""
        ids = [star.id for star in get_catalog()]

        assert ids == ["polaris", "sirius", "pleiaden", "arcturus", "lyra", "orion", "andromeda"]
        assert len(set(ids)) == len(ids)

    def test_every_star_is_complete(self):
        """Test that every entry carries lore, details and a themed image."""
        for star in get_catalog():
            assert star.label and star.lore and star.details
            assert star.image.startswith("https://")
            assert star.theme in THEME_COLORS
            assert star.images == [] and star.video is None

    def test_get_catalog_returns_copy(self):
        """Test that callers cannot mutate the hardcoded catalog."""
        first = get_catalog()
        first.clear()

        assert len(get_catalog()) == 7

    def test_split_portals(self):
        """Test that Polaris is central and the rest orbit in catalog order."""
        central, orbiting = split_portals(get_catalog())

        assert central.id == CENTRAL_STAR_ID
        assert [s.id for s in orbiting] == ["sirius", "pleiaden", "arcturus", "lyra", "orion", "andromeda"]

    def test_replace_star(self):
        """Test that replace_star swaps only the matching entry."""
        systems = get_catalog()
        updated = find_star(systems, "lyra").with_media(images=["data:image/png;base64,AA=="])

        replaced = replace_star(systems, updated)

        assert find_star(replaced, "lyra") is updated
        assert find_star(systems, "lyra").images == []
        assert [s.id for s in replaced] == [s.id for s in systems]

    def test_find_unknown_star(self):
        """Test that an unknown id returns None."""
        assert find_star(get_catalog(), "vega") is None

    def test_orbit_positions_start_at_top(self):
        """Test the ellipse layout for orbiting portals."""
        positions = orbit_positions(4, radius_x=100, radius_y=50)

        assert len(positions) == 4
        assert positions[0] == pytest.approx((0.0, -50.0))
        assert positions[1] == pytest.approx((100.0, 0.0))

    def test_seed_prompts(self):
        """Test the prompts seeded from a star's context."""
        sirius = find_star(get_catalog(), "sirius")

        vision = build_vision_prompt(sirius)
        animation = build_animation_prompt(sirius)

        assert vision.startswith(f"A vision of a being from the star system {sirius.label}")
        assert f'"{sirius.lore}"' in vision
        assert vision.endswith(sirius.details)
        assert animation == f"The being from {sirius.label} comes to life. {sirius.lore}"


class TestStarSystem:
    """Test suite for the StarSystem record."""

    def _star(self, **kwargs):
        defaults = dict(id="x", label="X", theme="lyra", lore="lore", details="details", image="default.jpg")
        defaults.update(kwargs)
        return StarSystem(**defaults)

    def test_unknown_theme_rejected(self):
        """Test that only known themes are accepted."""
        with pytest.raises(ValueError):
            self._star(theme="vega")
        assert "zeta-reticuli" in THEMES

    def test_with_media_sets_primary(self):
        """Test that the newest image replaces the default image."""
        star = self._star().with_media(images=["new.jpg", "old.jpg"])

        assert star.image == "new.jpg"
        assert star.has_generated_media

    def test_with_video_only_keeps_images(self):
        """Test that adding a video leaves images untouched."""
        star = self._star().with_media(images=["a.jpg"]).with_media(video="v.mp4")

        assert star.images == ["a.jpg"]
        assert star.image == "a.jpg"
        assert star.video == "v.mp4"

    def test_empty_images_keep_default(self):
        """Test that no generated images leaves the catalog image."""
        star = self._star().with_media(images=[])

        assert star.image == "default.jpg"
        assert not star.has_generated_media

