"""Shared fixtures: a recording store double and an app wired to it."""
import pytest
from fastapi.testclient import TestClient

from productos_api.config import Settings
from productos_api.errors import StoreError
from productos_api.main import create_app


class FakeStore:
    """In-memory productos table that records every call made to it."""

    def __init__(self, rows=None):
        self.rows = [dict(r) for r in (rows or [])]
        self.next_id = max((r["id"] for r in self.rows), default=0) + 1
        self.calls = []
        self.error = None

    def fail_with(self, message):
        self.error = StoreError(message)

    def _record(self, name, *args):
        self.calls.append((name, args))
        if self.error is not None:
            raise self.error

    def calls_to(self, name):
        return [args for called, args in self.calls if called == name]

    def list_all(self):
        self._record("list_all")
        return [dict(r) for r in self.rows]

    def insert(self, row):
        self._record("insert", row)
        created = dict(row, id=self.next_id)
        self.next_id += 1
        self.rows.append(created)
        return [dict(created)]

    def _matching(self, producto_id):
        return [r for r in self.rows if str(r["id"]) == str(producto_id)]

    def update(self, producto_id, patch):
        self._record("update", producto_id, patch)
        matched = self._matching(producto_id)
        for row in matched:
            row.update(patch)
        return [dict(r) for r in matched]

    def delete(self, producto_id):
        self._record("delete", producto_id)
        matched = self._matching(producto_id)
        self.rows = [r for r in self.rows if r not in matched]
        return [dict(r) for r in matched]


@pytest.fixture
def settings():
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_key="test-key",
        cors_origins=("http://localhost:8888",),
    )


@pytest.fixture
def store():
    return FakeStore([
        {"id": 1, "nombre": "Laptop", "precio": 999.99, "descripcion": "14 pulgadas"},
        {"id": 2, "nombre": "Ratón", "precio": 29.99, "descripcion": None},
    ])


@pytest.fixture
def client(settings, store):
    """Create a test client for an app that uses the recording store."""
    return TestClient(create_app(settings=settings, store=store))
