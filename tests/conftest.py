"""
Pytest configuration and shared fixtures.

FakeSupabase is an in-memory stand-in for the Supabase query builder, covering
the chained calls the services use (table/select/eq/in_/order/limit/insert/
update/delete/execute).
"""

import os

# Set required environment variables BEFORE importing app modules
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test.anon.key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("TIMEZONE", "Asia/Seoul")

import copy
import itertools
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.core.dependencies import get_current_user_id
from app.database.supabase_client import get_supabase
from app.main import app


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self._operation = "select"
        self._payload = None
        self._filters = []
        self._order = None
        self._limit = None

    def select(self, *args, **kwargs):
        return self

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self._filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, count):
        self._limit = count
        return self

    def insert(self, payload):
        self._operation, self._payload = "insert", payload
        return self

    def update(self, payload):
        self._operation, self._payload = "update", payload
        return self

    def delete(self):
        self._operation = "delete"
        return self

    def _matches(self, row) -> bool:
        return all(f(row) for f in self._filters)

    def execute(self):
        self.db.calls.append((self.table_name, self._operation))
        if (self.table_name, self._operation) in self.db.failures:
            raise Exception(f"{self.table_name} {self._operation} failed: connection reset")

        rows = self.db.tables.setdefault(self.table_name, [])
        if self._operation == "insert":
            payloads = self._payload if isinstance(self._payload, list) else [self._payload]
            created = []
            for payload in payloads:
                row = dict(payload)
                row.setdefault("id", f"{self.table_name}-{next(self.db.ids)}")
                rows.append(row)
                created.append(copy.deepcopy(row))
            return SimpleNamespace(data=created)
        if self._operation == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(copy.deepcopy(self._payload))
                    updated.append(copy.deepcopy(row))
            return SimpleNamespace(data=updated)
        if self._operation == "delete":
            removed = [row for row in rows if self._matches(row)]
            self.db.tables[self.table_name] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=removed)

        result = [copy.deepcopy(row) for row in rows if self._matches(row)]
        if self._order:
            column, desc = self._order
            result.sort(key=lambda row: str(row.get(column) or ""), reverse=desc)
        if self._limit is not None:
            result = result[:self._limit]
        return SimpleNamespace(data=result)


class FakeSupabase:
    def __init__(self, tables=None):
        self.tables = {name: [dict(row) for row in rows] for name, rows in (tables or {}).items()}
        self.calls = []
        self.failures = set()
        self.ids = itertools.count(1)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail(self, table: str, operation: str) -> None:
        self.failures.add((table, operation))

    def heal(self) -> None:
        self.failures.clear()

    def rows(self, table: str):
        return self.tables.get(table, [])


def profile_row(user_id: str, name: str = "", role: str = "User", instrument: str = "", **extra) -> dict:
    row = {
        "id": user_id,
        "email": f"{user_id}@example.com",
        "display_name": "",
        "name": name,
        "role": role,
        "instrument": instrument,
        "part": "",
        "remarks": "",
        "created_at": "2024-01-01T00:00:00",
        "updated_at": "2024-01-01T00:00:00",
    }
    row.update(extra)
    return row


@pytest.fixture
def fake_db():
    return FakeSupabase()


@pytest.fixture
def api(fake_db):
    """Build a TestClient signed in as the given user id (their profile must exist or is created)."""
    def sign_in(user_id: str = "kim", email: str = None) -> TestClient:
        app.dependency_overrides[get_supabase] = lambda: fake_db
        app.dependency_overrides[get_current_user_id] = lambda: {
            "id": user_id,
            "email": email or f"{user_id}@example.com",
            "user_metadata": {},
            "app_metadata": {},
        }
        return TestClient(app)

    yield sign_in
    app.dependency_overrides.clear()
