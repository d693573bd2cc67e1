"""Tests for session stores, the session context and the store factory."""

import json

import pytest

from food_manager.core.config import get_settings
from food_manager.schemas import User
from food_manager.services.session import (
    FileSessionStore,
    InMemorySessionStore,
    SessionContext,
    get_session_store,
    reset_session_store,
)


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemorySessionStore()
    return FileSessionStore(tmp_path / "nested" / "session.json")


def test_empty_store_has_no_session(store):
    assert store.get() is None


def test_set_get_clear(store):
    store.set("abc123", User(username="admin"))

    session = store.get()
    assert session.token == "abc123"
    assert session.user.username == "admin"

    store.clear()
    assert store.get() is None


def test_clear_twice_is_harmless(store):
    store.clear()
    store.clear()
    assert store.get() is None


def test_file_layout_mirrors_key_value_entries(tmp_path):
    """The user entry is stored as a JSON string next to the raw token."""
    path = tmp_path / "session.json"
    FileSessionStore(path).set("tok", User(username="admin"))

    entries = json.loads(path.read_text())
    assert entries["token"] == "tok"
    assert isinstance(entries["user"], str)
    assert json.loads(entries["user"])["username"] == "admin"


def test_file_session_survives_new_instance(tmp_path):
    path = tmp_path / "session.json"
    FileSessionStore(path).set("tok", User(username="admin"))
    assert FileSessionStore(path).get().token == "tok"


@pytest.mark.parametrize("content", ["", "{not json", "[1, 2]", '{"token": "t", "user": "{bad"}'])
def test_corrupt_file_reads_as_no_session(tmp_path, content):
    path = tmp_path / "session.json"
    path.write_text(content)
    assert FileSessionStore(path).get() is None


def test_context_lifecycle(session_store):
    ctx = SessionContext(session_store)
    assert not ctx.is_authenticated
    assert ctx.token is None

    session = ctx.create("abc123", {"username": "admin"})
    assert session.user.username == "admin"
    assert ctx.is_authenticated
    assert ctx.read().token == "abc123"
    assert ctx.token == "abc123"

    ctx.invalidate()
    assert ctx.read() is None


def test_context_create_replaces_previous(session_store):
    ctx = SessionContext(session_store)
    ctx.create("first", {"username": "a"})
    ctx.create("second", User(username="b"))
    assert ctx.read().token == "second"
    assert ctx.read().user.username == "b"


def test_factory_selects_backend(monkeypatch, tmp_path):
    monkeypatch.setenv("FOOD_MANAGER_SESSION_BACKEND", "memory")
    get_settings.cache_clear()
    reset_session_store()
    try:
        store = get_session_store()
        assert isinstance(store, InMemorySessionStore)
        assert get_session_store() is store

        monkeypatch.setenv("FOOD_MANAGER_SESSION_BACKEND", "file")
        monkeypatch.setenv("FOOD_MANAGER_SESSION_FILE", str(tmp_path / "s.json"))
        get_settings.cache_clear()
        reset_session_store()

        store = get_session_store()
        assert isinstance(store, FileSessionStore)
        assert store.backend_name == "file"
        assert store.path == tmp_path / "s.json"
    finally:
        get_settings.cache_clear()
        reset_session_store()
