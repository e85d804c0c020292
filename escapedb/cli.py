"""Command-line entry point that exercises settings and the game database."""

from __future__ import annotations

import argparse
import os
import sys
import uuid
from datetime import datetime, timezone
from os import PathLike
from typing import Optional, Sequence, Union

from .errors import AppError
from .game import Game, GameStore
from .game_event import GameEvent, GameEventStore, GameEventType
from .persistence_service import PersistenceService, PersistenceServiceError
from .settings import Settings
from .storage import Database

SETTINGS_ENV = "SETTINGS_PATH"
DEFAULT_SETTINGS_PATH = "settings.json"
DEFAULT_DB_PATH = "game_db"


def load_and_update_settings(
    path: Union[str, "PathLike[str]", None] = None,
) -> Settings:
    """Load settings, bump ``max_connections`` by one and save them back."""
    if path is None:
        path = os.environ.get(SETTINGS_ENV, DEFAULT_SETTINGS_PATH)
    print(f"Using settings file: {path}")
    settings = Settings.load_from_file(path)
    settings.max_connections += 1
    settings.save_to_file(path)
    return settings


def _run(settings_path: Optional[str], db_path: str) -> None:
    settings = load_and_update_settings(settings_path)
    print(f"App is running with max_connections: {settings.max_connections}")

    with Database(db_path) as db:
        game_store = GameStore(db.open_tree("games"))
        event_store = GameEventStore(db.open_tree("game_events"))
        service = PersistenceService(game_store, event_store)

        game_id = "game-001"
        game = Game(
            id=game_id,
            team_name="Team Bravo",
            start_time=datetime.now(timezone.utc),
            end_time=None,
            score=0,
        )
        game_store.insert(game)
        print(f"Created game: {game!r}")

        event = GameEvent(
            game_id=game_id,
            event_type=GameEventType.START,
            timestamp=datetime.now(timezone.utc),
        )
        try:
            service.insert_event_if_game_exists(str(uuid.uuid4()), event)
        except PersistenceServiceError as exc:
            print(f"Failed to log event: {exc}", file=sys.stderr)
        else:
            print(f"Logged event: {event!r}")

        fetched = game_store.get(game_id)
        if fetched is not None:
            print(f"Fetched game from DB: {fetched!r}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the demo flow; return the process exit status."""
    parser = argparse.ArgumentParser(
        prog="escapedb", description="Record a game and its start event."
    )
    parser.add_argument(
        "--settings",
        default=None,
        help=f"settings file (default: ${SETTINGS_ENV} or {DEFAULT_SETTINGS_PATH})",
    )
    parser.add_argument(
        "--db", default=DEFAULT_DB_PATH, help="database directory"
    )
    args = parser.parse_args(argv)
    try:
        _run(args.settings, args.db)
    except AppError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())