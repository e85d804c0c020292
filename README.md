# escapedb

escapedb keeps track of escape-room games and the events that happen in them.
It has three parts:

- **Settings** (`escapedb.settings`): a small JSON settings file with the
  fields `project_name`, `version`, `debug` and `max_connections`.
- **Storage** (`escapedb.storage`): an embedded key-value database kept as a
  single SQLite file inside a directory, split into named trees.
- **Game records** (`escapedb.game`, `escapedb.game_event`,
  `escapedb.persistence_service`): games and game events, their stores, and a
  service that records an event only if its game already exists.

It uses only the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
escapedb [--settings PATH] [--db DIR]
```

The command does the following:

1. Reads the settings file given by `--settings`. Without that option it uses
   the `SETTINGS_PATH` environment variable, or `settings.json` when that is
   not set.
2. Adds one to `max_connections` and writes the file back.
3. Opens the database in the directory given by `--db` (default `game_db`),
   creating it if needed.
4. Stores a game `game-001` for "Team Bravo", starting now, with score 0.
5. Logs a `Start` event for that game through the persistence service, under a
   fresh random UUID key. If that fails, the reason goes to standard error and
   the command carries on.
6. Reads the game back and prints it.

Any other error is printed to standard error as `Error: ...` and the command
exits with status 1. The settings file must exist before you run it, for
example:

```json
{
  "project_name": "EscapeRoom",
  "version": "1.0.0",
  "debug": true,
  "max_connections": 42
}
```

## Settings

```python
from escapedb.settings import Settings

settings = Settings.load_from_file("settings.json")
settings.max_connections += 1
settings.save_to_file("settings.json")
```

`Settings` is a dataclass. `load_from_file` requires all four fields with the
right JSON types, and `max_connections` must lie between 0 and 2**32 - 1.
`save_to_file` writes the fields as JSON indented by two spaces.

## Storage

```python
from escapedb.storage import Database

with Database("game_db") as db:
    tree = db.open_tree("games")
    tree.insert("key", b"value")   # returns the replaced value, or None
    tree.get("key")                # b"value"
    list(tree.items())             # [(b"key", b"value")]
    len(tree)                      # 1
```

`Database(path)` creates the directory if needed and keeps its data in
`store.sqlite3` inside it. Keys may be `str` (stored as UTF-8) or bytes;
values are bytes. `Tree.items` yields pairs in ascending byte order of the
keys. After `Database.close`, or leaving the `with` block, any further access
raises `StorageError`.

## Games and events

A `Game` has an `id`, a `team_name`, an optional `start_time` and `end_time`,
and a `score` (an integer from 0 to 2**32 - 1, default 0). A `GameEvent` has a
`game_id`, an `event_type` and a `timestamp`. The event type is a
`GameEventType` member: `START`, `ATTEMPT`, `SOLVE` or `LEVEL_UP` (values
`"Start"`, `"Attempt"`, `"Solve"`, `"LevelUp"`). Times are converted to UTC;
naive times are taken to be UTC already. Both record types turn into JSON
bytes with `to_bytes` and back with `from_bytes`.

```python
from datetime import datetime, timezone
from escapedb.game import Game, GameStore
from escapedb.game_event import GameEvent, GameEventStore, GameEventType
from escapedb.persistence_service import PersistenceService
from escapedb.storage import Database

with Database("game_db") as db:
    games = GameStore(db.open_tree("games"))
    events = GameEventStore(db.open_tree("game_events"))
    service = PersistenceService(games, events)

    games.insert(Game(id="game-001", team_name="Team Bravo"))
    event = GameEvent("game-001", GameEventType.START, datetime.now(timezone.utc))
    service.insert_event_if_game_exists("event-1", event)
```

`GameStore.insert` stores a game under its id, replacing any game with the
same id; `GameStore.get` returns it or `None`; `GameStore.all` returns every
game in key order. `GameEventStore.insert` stores an event under a key you
choose and `GameEventStore.all` returns every event in key order.
`PersistenceService.insert_event_if_game_exists` raises `GameNotFoundError`
(with the missing id in `game_id`) when the event's game has not been stored.

## Errors

Every exception the package raises derives from `AppError`
(`escapedb.errors`):

- `SettingsError`, with `SettingsFileNotFoundError`,
  `SettingsPermissionError`, `SettingsIOError` and `SettingsParseError`
- `StorageError`, for database failures
- `GamePersistenceError` and `GameEventError`, for the two stores, including
  bytes that cannot be read back as a record
- `PersistenceServiceError`, with `GameNotFoundError`

## What it does not do

There is no way to update or delete records, no query by game for events, and
no command beyond the fixed sequence above; listing or editing games is done
from Python through the stores.