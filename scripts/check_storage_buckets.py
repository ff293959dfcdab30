#!/usr/bin/env python3
"""
Check that the Supabase media buckets exist and can be listed with the configured key.
"""

from __future__ import annotations

import sys
from pathlib import Path

from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from starnation.config import IMAGES_BUCKET, VIDEOS_BUCKET  # noqa: E402
from starnation.gallery import is_access_denied  # noqa: E402
from starnation.supabase_client import get_supabase_client  # noqa: E402


def _fail(msg: str) -> int:
    print(f"ERROR: {msg}", file=sys.stderr)
    return 1


def check_bucket(client, bucket: str) -> str | None:
    """Return an error description, or None when the bucket can be listed."""
    try:
        client.storage.from_(bucket).list("", {"limit": 1})
    except Exception as exc:
        if is_access_denied(exc):
            return f"{bucket}: access denied by bucket policy ({exc})"
        return f"{bucket}: {exc}"
    return None


def main(argv: list[str]) -> int:
    load_dotenv()
    buckets = argv[1:] or [IMAGES_BUCKET, VIDEOS_BUCKET]

    client = get_supabase_client()
    if client is None:
        return _fail("Supabase is not configured (set SUPABASE_URL and SUPABASE_ANON_KEY).")

    problems = [problem for problem in (check_bucket(client, bucket) for bucket in buckets) if problem]
    if problems:
        return _fail("Bucket checks failed:\n- " + "\n- ".join(problems))

    print(f"OK: buckets reachable: {', '.join(buckets)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
