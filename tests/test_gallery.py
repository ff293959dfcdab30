"""Tests for starnation.gallery module."""

import pytest

from starnation.errors import StorageAccessDeniedError
from starnation.gallery import is_access_denied, list_recent_images, list_recent_videos


class _Forbidden(Exception):
    status_code = 403


class TestGallery:
    """Test suite for the community gallery loader."""

    def test_collects_images_across_creators(self, fake_supabase):
        """Test that images from all creators and stars are merged newest first."""
        bucket = fake_supabase.storage.from_("starnation-images")
        bucket.add("alice/sirius/1-a.jpg", created_at="2024-01-01T00:00:00Z")
        bucket.add("bob/lyra/2-b.png", created_at="2024-03-01T00:00:00Z")
        bucket.add("bob/lyra/notes.txt", created_at="2024-04-01T00:00:00Z")

        items = list_recent_images(fake_supabase)

        assert [(i.user_id, i.star_id) for i in items] == [("bob", "lyra"), ("alice", "sirius")]
        assert all(i.type == "image" for i in items)
        assert items[0].url == bucket.get_public_url("bob/lyra/2-b.png")

    def test_total_limit(self, fake_supabase):
        """Test that at most `limit` items are returned."""
        bucket = fake_supabase.storage.from_("starnation-images")
        for user in range(3):
            for n in range(10):
                bucket.add(f"user{user}/sirius/{n}-x.jpg", created_at=f"2024-01-{n + 1:02d}T0{user}:00:00Z")

        assert len(list_recent_images(fake_supabase)) == 20
        assert len(list_recent_images(fake_supabase, limit=5)) == 5

    def test_per_folder_limit(self, fake_supabase):
        """Test that each star folder contributes at most five videos."""
        bucket = fake_supabase.storage.from_("starnation-videos")
        for n in range(8):
            bucket.add(f"alice/orion/{n}-v.mp4", created_at=f"2024-02-{n + 1:02d}T00:00:00Z")

        items = list_recent_videos(fake_supabase)

        assert len(items) == 5
        assert items[0].created_at == "2024-02-08T00:00:00Z"
        assert all(i.type == "video" for i in items)

    def test_missing_timestamps_sort_last(self, fake_supabase):
        """Test that entries without a timestamp come after dated ones."""
        bucket = fake_supabase.storage.from_("starnation-images")
        bucket.add("alice/sirius/1-a.jpg", created_at="2024-01-01T00:00:00Z")
        bucket.objects["bob/lyra/2-b.jpg"] = {"data": b"x", "created_at": None}

        items = list_recent_images(fake_supabase)

        assert [i.user_id for i in items] == ["alice", "bob"]

    def test_empty_bucket(self, fake_supabase):
        """Test that an empty bucket yields no items."""
        assert list_recent_images(fake_supabase) == []

    def test_permission_error_raises(self, fake_supabase):
        """Test that an access-policy denial is surfaced, not swallowed."""
        fake_supabase.storage.from_("starnation-images").list_error = RuntimeError(
            "new row violates row-level security policy"
        )

        with pytest.raises(StorageAccessDeniedError):
            list_recent_images(fake_supabase)

    def test_other_errors_return_empty(self, fake_supabase):
        """Test that transient listing errors degrade to an empty gallery."""
        fake_supabase.storage.from_("starnation-videos").list_error = RuntimeError("timeout")

        assert list_recent_videos(fake_supabase) == []


class TestIsAccessDenied:
    """Test suite for access-denied detection."""

    def test_markers_and_status(self):
        """Test message markers and 403 status attributes."""
        assert is_access_denied(RuntimeError("Permission denied"))
        assert is_access_denied(_Forbidden("nope"))
        assert not is_access_denied(RuntimeError("connection reset"))
