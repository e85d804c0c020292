"""Operations that span games and their events."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import AppError
from .game import GamePersistenceError, GameStore
from .game_event import GameEvent, GameEventError, GameEventStore


class PersistenceServiceError(AppError):
    """A service operation failed."""


class GameNotFoundError(PersistenceServiceError):
    """The game an operation refers to does not exist."""

    def __init__(self, game_id: str) -> None:
        self.game_id = game_id
        super().__init__(f"Game with ID `{game_id}` not found")


@dataclass
class PersistenceService:
    """Coordinates the game and game-event stores."""

    game_store: GameStore
    event_store: GameEventStore

    def insert_event_if_game_exists(self, key: str, event: GameEvent) -> None:
        """Store ``event`` under ``key`` provided its game is known."""
        try:
            game = self.game_store.get(event.game_id)
        except GamePersistenceError as exc:
            raise PersistenceServiceError(f"Game error: {exc}") from exc
        if game is None:
            raise GameNotFoundError(event.game_id)
        try:
            self.event_store.insert(key, event)
        except GameEventError as exc:
            raise PersistenceServiceError(f"Game event error: {exc}") from exc