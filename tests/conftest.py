"""Shared fixtures: in-memory Supabase fake, mocked remote deployments, TestClient."""

import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from studio.core.dependencies import get_current_user, get_deployment_api_client
from studio.database.supabase_client import get_supabase
from studio.main import app
from studio.modules.auth.service import clear_auth_cache
from studio.modules.data_browser import pane_registry
from studio.modules.deployments.remote_client import DeploymentApiClient

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


# ---------------------------------------------------------------------------
# Supabase fake
# ---------------------------------------------------------------------------


class FakeResult:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Just enough of the postgrest query builder for the services."""

    def __init__(self, tables: Dict[str, List[dict]], name: str):
        self._rows = tables.setdefault(name, [])
        self._op = "select"
        self._payload: Optional[dict] = None
        self._filters: List[Callable[[dict], bool]] = []
        self._order: Optional[tuple] = None
        self._limit: Optional[int] = None
        self._single = False

    def select(self, *columns):
        self._op = "select"
        return self

    def insert(self, payload: dict):
        self._op = "insert"
        self._payload = payload
        return self

    def update(self, payload: dict):
        self._op = "update"
        self._payload = payload
        return self

    def delete(self):
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column: str, values: List[Any]):
        self._filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column: str, desc: bool = False):
        self._order = (column, desc)
        return self

    def limit(self, count: int):
        self._limit = count
        return self

    def maybe_single(self):
        self._single = True
        return self

    def execute(self):
        if self._op == "insert":
            row = {
                "id": str(uuid.uuid4()),
                "created_at": datetime.now(timezone.utc).isoformat(),
                **self._payload,
            }
            self._rows.append(row)
            return FakeResult([dict(row)])

        matched = [row for row in self._rows if all(f(row) for f in self._filters)]

        if self._op == "update":
            for row in matched:
                row.update(self._payload)
            return FakeResult([dict(row) for row in matched])

        if self._op == "delete":
            for row in matched:
                self._rows.remove(row)
            return FakeResult([dict(row) for row in matched])

        if self._order:
            column, desc = self._order
            matched.sort(key=lambda row: row.get(column) or "", reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        if self._single:
            # postgrest returns no response object at all for an empty maybe_single
            return FakeResult(dict(matched[0])) if matched else None
        return FakeResult([dict(row) for row in matched])


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[dict]] = {}
        self.auth = MagicMock()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables, name)

    def seed(self, table_name: str, /, **row) -> dict:
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        self.tables.setdefault(table_name, []).append(row)
        return row


class BrokenSupabase:
    """Every query blows up, as when PostgREST is unreachable."""

    def table(self, name: str):
        raise RuntimeError("connection refused")


# ---------------------------------------------------------------------------
# Remote deployment fake
# ---------------------------------------------------------------------------


class FakeRemote:
    """Routes (method, path) to canned httpx responses and records requests."""

    def __init__(self):
        self.routes: Dict[tuple, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def on(self, method: str, path: str, handler):
        if isinstance(handler, httpx.Response):
            response = handler
            handler = lambda request: response  # noqa: E731
        self.routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, text="not found")
        return handler(request)


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def fake_remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def api_client(fake_remote) -> DeploymentApiClient:
    return DeploymentApiClient(http_client=httpx.Client(transport=httpx.MockTransport(fake_remote.handle)))


@pytest.fixture
def current_user() -> Dict[str, Any]:
    return {"id": USER_ID, "email": "dev@example.com", "user_metadata": {}}


@pytest.fixture
def client(fake_supabase, api_client, current_user):
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_deployment_api_client] = lambda: api_client
    app.dependency_overrides[get_current_user] = lambda: current_user
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    pane_registry.clear()
    clear_auth_cache()


@pytest.fixture
def deployment(fake_supabase) -> dict:
    return fake_supabase.seed(
        "deployments",
        name="prod app",
        url="https://happy-otter-123.convex.cloud/",
        deploy_key="prod:secret",
        environment="prod",
        status="pending",
        last_checked=None,
        error_message=None,
        user_id=USER_ID,
    )


@pytest.fixture
def foreign_deployment(fake_supabase) -> dict:
    return fake_supabase.seed(
        "deployments",
        name="someone else",
        url="https://other.convex.cloud",
        deploy_key="dev:other",
        environment="dev",
        status="connected",
        last_checked=None,
        error_message=None,
        user_id=OTHER_USER_ID,
    )
