"""Read and write application settings stored as JSON."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from os import PathLike
from pathlib import Path
from typing import Any, Union

from .errors import AppError

_U32_MAX = 2**32 - 1

PathType = Union[str, "PathLike[str]"]


class SettingsError(AppError):
    """Settings could not be loaded or saved."""


class SettingsFileNotFoundError(SettingsError):
    """The settings file does not exist."""

    def __init__(self, message: str = "Settings file not found") -> None:
        super().__init__(message)


class SettingsPermissionError(SettingsError):
    """Access to the settings file was refused."""

    def __init__(
        self, message: str = "Permission denied when accessing settings file"
    ) -> None:
        super().__init__(message)


class SettingsIOError(SettingsError):
    """Reading or writing the settings file failed for another reason."""

    def __init__(self, cause: object) -> None:
        super().__init__(f"Unexpected I/O error: {cause}")


class SettingsParseError(SettingsError):
    """The settings file is not valid settings JSON."""

    def __init__(self, cause: object) -> None:
        super().__init__(f"JSON parse error: {cause}")


def _require(data: dict[str, Any], name: str, kind: type) -> Any:
    if name not in data:
        raise SettingsParseError(f"missing field `{name}`")
    value = data[name]
    if kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool)
    else:
        valid = isinstance(value, kind)
    if not valid:
        raise SettingsParseError(
            f"invalid type for field `{name}`: expected {kind.__name__}"
        )
    return value


@dataclass
class Settings:
    """Application settings."""

    project_name: str
    version: str
    debug: bool
    max_connections: int

    @classmethod
    def load_from_file(cls, path: PathType) -> "Settings":
        """Load settings from the JSON file at ``path``."""
        try:
            content = Path(path).read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise SettingsFileNotFoundError() from exc
        except PermissionError as exc:
            raise SettingsPermissionError() from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise SettingsIOError(exc) from exc

        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise SettingsParseError(exc) from exc

        if not isinstance(data, dict):
            raise SettingsParseError("expected a JSON object")

        max_connections = _require(data, "max_connections", int)
        if not 0 <= max_connections <= _U32_MAX:
            raise SettingsParseError(
                f"max_connections out of range: {max_connections}"
            )
        return cls(
            project_name=_require(data, "project_name", str),
            version=_require(data, "version", str),
            debug=_require(data, "debug", bool),
            max_connections=max_connections,
        )

    def save_to_file(self, path: PathType) -> None:
        """Write the settings to ``path`` as pretty-printed JSON."""
        text = json.dumps(asdict(self), indent=2)
        try:
            Path(path).write_text(text, encoding="utf-8")
        except OSError as exc:
            raise SettingsIOError(exc) from exc