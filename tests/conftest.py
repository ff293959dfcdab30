"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

ENV_VARS = (
    "GEMINI_API_KEY",
    "GOOGLE_GENAI_API_KEY",
    "API_KEY",
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "STRIPE_SECRET_KEY",
    "STRIPE_PRICE_ID",
    "APP_ORIGIN",
    "STARNATION_DATA_DIR",
    "VIDEO_POLL_INTERVAL",
    "VIDEO_POLL_MAX_ATTEMPTS",
    "PAYMENT_POLL_INTERVAL",
    "PAYMENT_POLL_MAX_ATTEMPTS",
    "STARNATION_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate every test from the developer's .env and local media stores."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("STARNATION_DATA_DIR", str(tmp_path / "data"))


class FakeBucket:
    """In-memory stand-in for a Supabase storage bucket (`client.storage.from_(name)`)."""

    def __init__(self, name, public_base="https://cdn.example.test"):
        self.name = name
        self.public_base = public_base
        self.objects = {}
        self.list_calls = []
        self.list_error = None
        self.upload_error = None
        self._clock = 0

    def add(self, path, created_at=None, data=b"x"):
        self._clock += 1
        self.objects[path] = {"data": data, "created_at": created_at or f"2024-01-01T00:00:{self._clock:02d}Z"}

    def upload(self, path, file, file_options=None):
        if self.upload_error:
            raise self.upload_error
        self.add(path, data=file)
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"{self.public_base}/{self.name}/{path}"

    def list(self, path="", options=None):
        self.list_calls.append((path, options))
        if self.list_error:
            raise self.list_error
        prefix = f"{path}/" if path else ""
        entries = {}
        for key, meta in self.objects.items():
            if not key.startswith(prefix):
                continue
            rest = key[len(prefix):]
            head, _, tail = rest.partition("/")
            if tail:
                entries.setdefault(head, {"name": head, "id": None, "created_at": None})
            else:
                entries[head] = {"name": head, "id": head, "created_at": meta["created_at"]}
        listed = list(entries.values())
        if options and options.get("sortBy", {}).get("order") == "desc":
            listed.sort(key=lambda e: e["created_at"] or "", reverse=True)
        limit = (options or {}).get("limit")
        return listed[:limit] if limit else listed

    def remove(self, paths):
        for path in paths:
            self.objects.pop(path, None)
        return paths


class FakeStorage:
    def __init__(self):
        self.buckets = {}

    def from_(self, name):
        if name not in self.buckets:
            self.buckets[name] = FakeBucket(name)
        return self.buckets[name]


class FakeQuery:
    """Chainable subset of the supabase-py table query builder."""

    def __init__(self, table):
        self.table = table
        self.filters = []
        self.action = "select"
        self.payload = None
        self._limit = None

    def select(self, _columns="*"):
        self.action = "select"
        return self

    def insert(self, payload):
        self.action = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.action = "update"
        self.payload = payload
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        rows = self.table.rows
        if self.action == "insert":
            row = dict(self.payload, id=len(rows) + 1)
            rows.append(row)
            return SimpleNamespace(data=[row])
        if self.action == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(row)
            return SimpleNamespace(data=updated)
        found = [row for row in rows if self._matches(row)]
        return SimpleNamespace(data=found[: self._limit] if self._limit else found)


class FakeTable:
    def __init__(self):
        self.rows = []


class FakeSupabase:
    def __init__(self):
        self.storage = FakeStorage()
        self.tables = {}

    def table(self, name):
        return FakeQuery(self.tables.setdefault(name, FakeTable()))


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def recording_sleep():
    """A sleep replacement that records requested delays instead of waiting."""
    calls = []

    def _sleep(seconds):
        calls.append(seconds)

    _sleep.calls = calls
    return _sleep
