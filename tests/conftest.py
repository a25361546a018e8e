# tests/conftest.py
from __future__ import annotations

import asyncio
from collections.abc import Generator, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from feedguard.api.v1.dependencies import get_feed_registry, get_policy_store
from feedguard.db.session import create_tables, drop_tables
from feedguard.main import app as fastapi_app
from feedguard.repositories.settings_repo import SqlSettingsStorage
from feedguard.schemas.feed import Page, RawItem
from feedguard.services.feed import FeedRegistry, PaginatedFeed
from feedguard.services.policy import ModerationPolicyStore
from feedguard.services.wordlist import BlockedTermSet

TEST_DB_URL = "sqlite://"


class ScriptedSource:
    """Page source that replays queued results and records every cursor it was asked for.

    A result queued with a ``gate`` is held back until the event is set, which
    lets tests keep a fetch in flight.
    """

    def __init__(self) -> None:
        self.calls: list[str | None] = []
        self._script: list[tuple[Page | Exception, asyncio.Event | None]] = []

    def push(self, result: Page | Exception, gate: asyncio.Event | None = None) -> None:
        self._script.append((result, gate))

    async def __call__(self, cursor: str | None) -> Page:
        self.calls.append(cursor)
        if not self._script:
            raise AssertionError(f"unexpected fetch for cursor {cursor!r}")
        result, gate = self._script.pop(0)
        if gate is not None:
            await gate.wait()
        if isinstance(result, Exception):
            raise result
        return result


def make_page(
    *ids: str,
    cursor: str | None = None,
    exhausted: bool = False,
    bodies: dict[str, str] | None = None,
) -> Page:
    """Build a page whose items carry the given identifiers."""
    bodies = bodies or {}
    items = [RawItem(id=item_id, body=bodies.get(item_id, f"post {item_id}")) for item_id in ids]
    return Page(items=items, next_cursor=cursor, exhausted=exhausted)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    try:
        yield engine
    finally:
        drop_tables(engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def storage(session_factory: sessionmaker[Session]) -> SqlSettingsStorage:
    return SqlSettingsStorage(session_factory)


@pytest.fixture()
def policy_store(storage: SqlSettingsStorage) -> ModerationPolicyStore:
    """Policy store on a fresh database, so it starts from the default policy."""
    return ModerationPolicyStore(storage, key="moderation-settings")


@pytest.fixture()
def terms() -> BlockedTermSet:
    return BlockedTermSet(["damn", "crap", "jerk"], version="test")


@pytest.fixture()
def source() -> ScriptedSource:
    return ScriptedSource()


@pytest.fixture()
def feed(
    source: ScriptedSource,
    terms: BlockedTermSet,
    policy_store: ModerationPolicyStore,
) -> PaginatedFeed:
    return PaginatedFeed(source, terms, policy_store, name="home")


@pytest.fixture()
def sources() -> dict[tuple[str, str | None], ScriptedSource]:
    """Sources handed out by the registry, keyed by feed name and tag."""
    return {}


@pytest.fixture()
def registry(
    sources: dict[tuple[str, str | None], ScriptedSource],
    terms: BlockedTermSet,
    policy_store: ModerationPolicyStore,
) -> FeedRegistry:
    def _factory(name: str, tag: str | None) -> ScriptedSource:
        return sources.setdefault((name, tag), ScriptedSource())

    return FeedRegistry(
        _factory,
        terms,
        policy_store,
        names=["home", "notifications", "search"],
    )


@pytest.fixture()
def app(registry: FeedRegistry, policy_store: ModerationPolicyStore) -> Iterator[FastAPI]:
    fastapi_app.dependency_overrides[get_feed_registry] = lambda: registry
    fastapi_app.dependency_overrides[get_policy_store] = lambda: policy_store
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.pop(get_feed_registry, None)
        fastapi_app.dependency_overrides.pop(get_policy_store, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    # Not used as a context manager: startup would open the real settings database.
    yield TestClient(app, base_url="http://test")


@pytest.fixture()
def sample_payload() -> dict[str, Any]:
    return {
        "items": [
            {"id": "p1", "title": "Hello", "body": "what a damn day", "likes": 3},
            {"id": "p2", "body": "all good here"},
        ],
        "nextCursor": "c1",
        "exhausted": False,
    }
