"""Game events and their persistent store."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from .errors import AppError, StorageError
from .storage import Tree


class GameEventError(AppError):
    """A game event could not be stored or read back."""


class GameEventType(Enum):
    """What happened in a game."""

    START = "Start"
    ATTEMPT = "Attempt"
    SOLVE = "Solve"
    LEVEL_UP = "LevelUp"


def _to_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass
class GameEvent:
    """Something that happened in a game at a point in time."""

    game_id: str
    event_type: GameEventType
    timestamp: datetime

    def __post_init__(self) -> None:
        self.event_type = GameEventType(self.event_type)
        self.timestamp = _to_utc(self.timestamp)

    def to_bytes(self) -> bytes:
        """Serialize the event."""
        return json.dumps(
            {
                "game_id": self.game_id,
                "event_type": self.event_type.value,
                "timestamp": self.timestamp.isoformat(),
            }
        ).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> "GameEvent":
        """Deserialize an event written by :meth:`to_bytes`."""
        try:
            raw = json.loads(bytes(data).decode("utf-8"))
            if not isinstance(raw, dict):
                raise TypeError("expected an object")
            if not isinstance(raw["game_id"], str):
                raise TypeError("field `game_id` must be a string")
            if not isinstance(raw["timestamp"], str):
                raise TypeError("field `timestamp` must be a string")
            return cls(
                game_id=raw["game_id"],
                event_type=GameEventType(raw["event_type"]),
                timestamp=datetime.fromisoformat(raw["timestamp"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise GameEventError(f"Serialization error: {exc}") from exc


class GameEventStore:
    """Keeps game events in a tree under caller-chosen keys."""

    def __init__(self, tree: Tree) -> None:
        self.tree = tree

    def insert(self, key: str, event: GameEvent) -> None:
        """Store ``event`` under ``key``."""
        data = event.to_bytes()
        try:
            self.tree.insert(key, data)
        except StorageError as exc:
            raise GameEventError(f"Storage error: {exc}") from exc

    def all(self) -> list[GameEvent]:
        """Return every stored event in key order."""
        try:
            entries = list(self.tree.items())
        except StorageError as exc:
            raise GameEventError(f"Storage error: {exc}") from exc
        return [GameEvent.from_bytes(value) for _, value in entries]