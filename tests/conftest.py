"""Pytest configuration and fixtures."""

import copy
import os
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from pydantic import BaseModel

# settings are read at import time, so the environment must be ready before app.main is imported
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-service-role-key")
os.environ["ADMIN_SECRET"] = "test-admin-secret"
os.environ.pop("RESEND_API_KEY", None)

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402
from app.utils.supabase_client_handlers import get_supabase_client  # noqa: E402

ADMIN_ID = "admin-1"
WORKER_ID = "worker-1"
EMPLOYER_ID = "employer-1"

TOKENS = {
    "admin-token": SimpleNamespace(id=ADMIN_ID, email="admin@example.com", user_metadata={}),
    "worker-token": SimpleNamespace(id=WORKER_ID, email="worker@example.com", user_metadata={}),
    "employer-token": SimpleNamespace(id=EMPLOYER_ID, email="boss@example.com", user_metadata={}),
    "newcomer-token": SimpleNamespace(id="newcomer-1", email="new@example.com", user_metadata={"phone": "0900000000"}),
}


class MockExecuteResult:
    """Mock Supabase execute() result."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count


class MockQueryBuilder:
    """
    In-memory stand-in for the async PostgREST query builder.

    Filters are applied to the rows of one table. Embedded selects are not resolved: tests put the embedded
    objects directly on the rows they seed.
    """

    def __init__(self, db: "FakeSupabase", table_name: str):
        self._db = db
        self._table = table_name
        self._operation = "select"
        self._payload = None
        self._filters = []
        self._order = None
        self._range = None
        self._limit = None
        self._count_mode = None

    # ---- operations -------------------------------------------------------

    def select(self, fields: str = "*", count: str = None) -> "MockQueryBuilder":
        self._count_mode = count
        return self

    def insert(self, data) -> "MockQueryBuilder":
        self._operation = "insert"
        self._payload = data
        return self

    def update(self, data: dict) -> "MockQueryBuilder":
        self._operation = "update"
        self._payload = data
        return self

    # ---- filters ----------------------------------------------------------

    def eq(self, field: str, value) -> "MockQueryBuilder":
        self._filters.append(lambda row: _get(row, field) == value)
        return self

    def gte(self, field: str, value) -> "MockQueryBuilder":
        self._filters.append(lambda row: _get(row, field) is not None and str(_get(row, field)) >= str(value))
        return self

    def lte(self, field: str, value) -> "MockQueryBuilder":
        self._filters.append(lambda row: _get(row, field) is not None and str(_get(row, field)) <= str(value))
        return self

    def in_(self, field: str, values) -> "MockQueryBuilder":
        self._filters.append(lambda row: _get(row, field) in values)
        return self

    def or_(self, expression: str) -> "MockQueryBuilder":
        # only the "column.ilike.%term%,column.ilike.%term%" form used by the search boxes
        clauses = []
        for clause in expression.split(","):
            column, _, pattern = clause.split(".", 2)
            clauses.append((column, pattern.strip("%").lower()))
        self._filters.append(lambda row: any(term in str(row.get(column) or "").lower() for column, term in clauses))
        return self

    def order(self, field: str, desc: bool = False) -> "MockQueryBuilder":
        self._order = (field, desc)
        return self

    def range(self, start: int, end: int) -> "MockQueryBuilder":
        self._range = (start, end)
        return self

    def limit(self, n: int) -> "MockQueryBuilder":
        self._limit = n
        return self

    # ---- execution --------------------------------------------------------

    async def execute(self) -> MockExecuteResult:
        if (self._table, self._operation) in self._db.failures:
            raise Exception(f"{self._operation} on {self._table} failed")

        rows = self._db.tables.setdefault(self._table, [])

        if self._operation == "insert":
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = []
            for item in payload:
                row = {"id": str(uuid.uuid4()), "created_at": datetime.now(timezone.utc).isoformat(), **copy.deepcopy(item)}
                rows.append(row)
                inserted.append(copy.deepcopy(row))
            self._db.inserts.setdefault(self._table, []).extend(copy.deepcopy(payload))
            return MockExecuteResult(inserted)

        matched = [row for row in rows if all(check(row) for check in self._filters)]

        if self._operation == "update":
            for row in matched:
                row.update(copy.deepcopy(self._payload))
            self._db.updates.setdefault(self._table, []).append(copy.deepcopy(self._payload))
            return MockExecuteResult([copy.deepcopy(row) for row in matched])

        if self._order:
            field, desc = self._order
            matched = sorted(matched, key=lambda row: str(row.get(field) or ""), reverse=desc)

        count = len(matched) if self._count_mode else None
        if self._range:
            matched = matched[self._range[0] : self._range[1] + 1]
        if self._limit is not None:
            matched = matched[: self._limit]

        return MockExecuteResult([copy.deepcopy(row) for row in matched], count)


def _get(row: dict, field: str):
    """Column value, "embed.column" reads from an embedded object"""
    if "." not in field:
        return row.get(field)
    embed, column = field.split(".", 1)
    value = row.get(embed)
    if isinstance(value, list):
        value = value[0] if value else None
    return value.get(column) if isinstance(value, dict) else None


class MockBucket:
    def __init__(self, db: "FakeSupabase", name: str):
        self._db = db
        self._name = name

    async def upload(self, path: str, file: bytes, file_options: dict = None):
        self._db.uploads.append({"bucket": self._name, "path": path, "size": len(file), "options": file_options or {}})
        return SimpleNamespace(path=path)

    async def get_public_url(self, path: str) -> str:
        return f"https://test.supabase.co/storage/v1/object/public/{self._name}/{path}"

    async def remove(self, paths: list):
        self._db.removed.extend(f"{self._name}/{path}" for path in paths)
        return []


class MockStorage:
    def __init__(self, db: "FakeSupabase"):
        self._db = db

    def from_(self, bucket: str) -> MockBucket:
        return MockBucket(self._db, bucket)


class MockAuthUser(BaseModel):
    id: str
    email: str


class MockAdminAuth:
    async def list_users(self):
        return [MockAuthUser(id=user.id, email=user.email) for user in TOKENS.values()]


class MockAuth:
    def __init__(self):
        self.admin = MockAdminAuth()

    async def get_user(self, token: str):
        user = TOKENS.get(token)
        if user is None:
            raise Exception("invalid JWT")
        return SimpleNamespace(user=user)


class FakeSupabase:
    """Async supabase client double: tables are lists of row dicts, writes are recorded per table"""

    def __init__(self, tables: dict = None):
        self.tables = copy.deepcopy(tables or {})
        self.inserts = {}
        self.updates = {}
        self.failures = set()
        self.uploads = []
        self.removed = []
        self.storage = MockStorage(self)
        self.auth = MockAuth()

    def table(self, name: str) -> MockQueryBuilder:
        return MockQueryBuilder(self, name)

    def fail(self, table: str, operation: str) -> None:
        self.failures.add((table, operation))

    def row(self, table: str, row_id: str) -> dict:
        return next(row for row in self.tables.get(table, []) if row.get("id") == row_id)


def base_tables() -> dict:
    return {
        "users": [
            {"id": ADMIN_ID, "email": "admin@example.com", "role": "admin", "full_name": "Admin", "account_status": "active"},
            {"id": WORKER_ID, "email": "worker@example.com", "role": "worker", "full_name": "worker@example.com", "account_status": "active"},
            {"id": EMPLOYER_ID, "email": "boss@example.com", "role": "employer", "full_name": "Boss", "account_status": "active"},
        ],
        "worker_profiles": [{"id": WORKER_ID, "setup_step": 1, "setup_completed": False, "available": True}],
        "employer_profiles": [{"id": EMPLOYER_ID, "company_name": "Acme"}],
    }


@pytest.fixture
def fake_supabase():
    return FakeSupabase(base_tables())


@pytest.fixture
def client(fake_supabase):
    """Test client wired to the in-memory supabase; the lifespan does not run outside a with block"""

    async def _get_fake_client():
        return fake_supabase

    app.dependency_overrides[get_supabase_client] = _get_fake_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def worker_headers():
    return {"Authorization": "Bearer worker-token"}


@pytest.fixture
def employer_headers():
    return {"Authorization": "Bearer employer-token"}


@pytest.fixture
def admin_headers():
    return {"Authorization": "Bearer admin-token"}


@pytest.fixture
def secret_headers():
    return {"x-admin-secret": "test-admin-secret"}
