import uuid
from datetime import datetime, timezone

import pytest

from escapedb.game import Game, GameStore
from escapedb.game_event import GameEvent, GameEventStore, GameEventType
from escapedb.persistence_service import (
    GameNotFoundError,
    PersistenceService,
    PersistenceServiceError,
)
from escapedb.storage import Database


@pytest.fixture
def stores(tmp_path):
    db = Database(tmp_path / "db")
    game_store = GameStore(db.open_tree("games"))
    event_store = GameEventStore(db.open_tree("game_events"))
    yield db, game_store, event_store
    db.close()


def test_insert_event_fails_when_game_missing(stores):
    _, game_store, event_store = stores
    service = PersistenceService(game_store, event_store)
    event = GameEvent("missing-game", GameEventType.ATTEMPT, datetime.now(timezone.utc))
    with pytest.raises(GameNotFoundError) as info:
        service.insert_event_if_game_exists(str(uuid.uuid4()), event)
    assert info.value.game_id == "missing-game"
    assert event_store.all() == []


def test_insert_event_succeeds_when_game_exists(stores):
    _, game_store, event_store = stores
    game_store.insert(Game(id="game-001", team_name="Team Bravo"))
    service = PersistenceService(game_store, event_store)
    event = GameEvent("game-001", GameEventType.START, datetime.now(timezone.utc))
    service.insert_event_if_game_exists("event-1", event)
    assert event_store.all() == [event]


def test_storage_failure_becomes_service_error(stores):
    db, game_store, event_store = stores
    service = PersistenceService(game_store, event_store)
    db.close()
    event = GameEvent("game-001", GameEventType.START, datetime.now(timezone.utc))
    with pytest.raises(PersistenceServiceError) as info:
        service.insert_event_if_game_exists("k", event)
    assert not isinstance(info.value, GameNotFoundError)
    assert str(info.value).startswith("Game error:")