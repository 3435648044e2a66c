from __future__ import annotations

import pytest

from syntrio.infrastructure.db import build_engine, init_db, make_session_factory
from syntrio.infrastructure.repositories.records import SESSION_KEY, USERS_KEY
from syntrio.infrastructure.repositories.sessions import LocalSessionRepository
from syntrio.infrastructure.repositories.users import LocalUserRepository
from syntrio.infrastructure.storage import SqlAlchemyKeyValueStore, read_json, write_json


@pytest.fixture()
def db_store(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'nested' / 'syntrio.db'}")
    init_db(engine)
    yield SqlAlchemyKeyValueStore(make_session_factory(engine))
    engine.dispose()


def test_sqlite_file_and_parent_directory_are_created(tmp_path, db_store):
    db_store.set_item("greeting", "hello")

    assert (tmp_path / "nested" / "syntrio.db").exists()


def test_set_get_overwrite_remove(db_store):
    assert db_store.get_item("missing") is None

    db_store.set_item("greeting", "hello")
    db_store.set_item("greeting", "hola")
    assert db_store.get_item("greeting") == "hola"

    db_store.remove_item("greeting")
    db_store.remove_item("greeting")
    assert db_store.get_item("greeting") is None


def test_json_helpers(db_store):
    write_json(db_store, "payload", {"name": "Ada", "tags": ["é", 1]})

    assert read_json(db_store, "payload") == {"name": "Ada", "tags": ["é", 1]}
    assert read_json(db_store, "absent") is None


def test_malformed_json_is_cleared(db_store):
    db_store.set_item(USERS_KEY, "[{")

    assert read_json(db_store, USERS_KEY) is None
    assert db_store.get_item(USERS_KEY) is None


def test_wrong_shape_record_is_cleared(db_store):
    write_json(db_store, SESSION_KEY, {"user_id": "user_1"})

    assert LocalSessionRepository(db_store).load() is None
    assert db_store.get_item(SESSION_KEY) is None


def test_in_memory_sqlite_keeps_data_across_sessions():
    engine = build_engine("sqlite:///:memory:")
    init_db(engine)
    store = SqlAlchemyKeyValueStore(make_session_factory(engine))

    store.set_item("k", "v")

    assert store.get_item("k") == "v"
    assert LocalUserRepository(store).list_all() == []
    engine.dispose()
