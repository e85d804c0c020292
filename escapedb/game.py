"""Games and their persistent store."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from .errors import AppError, StorageError
from .storage import Tree

_U32_MAX = 2**32 - 1


class GamePersistenceError(AppError):
    """A game could not be stored or read back."""


def _to_utc(moment: Optional[datetime]) -> Optional[datetime]:
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _parse_time(value: Any, field: str) -> Optional[datetime]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"field `{field}` must be a timestamp string or null")
    return datetime.fromisoformat(value)


@dataclass
class Game:
    """One team's play-through."""

    id: str
    team_name: str
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    score: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.score, bool) or not isinstance(self.score, int):
            raise TypeError("score must be an integer")
        if not 0 <= self.score <= _U32_MAX:
            raise ValueError(f"score out of range: {self.score}")
        self.start_time = _to_utc(self.start_time)
        self.end_time = _to_utc(self.end_time)

    def to_bytes(self) -> bytes:
        """Serialize the game."""
        return json.dumps(
            {
                "id": self.id,
                "team_name": self.team_name,
                "start_time": self.start_time.isoformat() if self.start_time else None,
                "end_time": self.end_time.isoformat() if self.end_time else None,
                "score": self.score,
            }
        ).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> "Game":
        """Deserialize a game written by :meth:`to_bytes`."""
        try:
            raw = json.loads(bytes(data).decode("utf-8"))
            if not isinstance(raw, dict):
                raise TypeError("expected an object")
            for name in ("id", "team_name"):
                if not isinstance(raw[name], str):
                    raise TypeError(f"field `{name}` must be a string")
            return cls(
                id=raw["id"],
                team_name=raw["team_name"],
                start_time=_parse_time(raw["start_time"], "start_time"),
                end_time=_parse_time(raw["end_time"], "end_time"),
                score=raw["score"],
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise GamePersistenceError(f"Serialization error: {exc}") from exc


class GameStore:
    """Keeps games in a tree, keyed by game id."""

    def __init__(self, tree: Tree) -> None:
        self.tree = tree

    def insert(self, game: Game) -> None:
        """Store ``game``, replacing any game with the same id."""
        data = game.to_bytes()
        try:
            self.tree.insert(game.id, data)
        except StorageError as exc:
            raise GamePersistenceError(f"Storage error: {exc}") from exc

    def get(self, game_id: str) -> Optional[Game]:
        """Return the game with ``game_id``, or None."""
        try:
            data = self.tree.get(game_id)
        except StorageError as exc:
            raise GamePersistenceError(f"Storage error: {exc}") from exc
        return None if data is None else Game.from_bytes(data)

    def all(self) -> list[Game]:
        """Return every stored game in key order."""
        try:
            entries = list(self.tree.items())
        except StorageError as exc:
            raise GamePersistenceError(f"Storage error: {exc}") from exc
        return [Game.from_bytes(value) for _, value in entries]