import json

import pytest

from escapedb.settings import (
    Settings,
    SettingsError,
    SettingsFileNotFoundError,
    SettingsIOError,
    SettingsParseError,
)


def test_save_and_load_settings_successfully(tmp_path):
    settings = Settings(
        project_name="EscapeRoom",
        version="1.0.0",
        debug=True,
        max_connections=42,
    )
    path = tmp_path / "settings.json"
    settings.save_to_file(path)
    loaded = Settings.load_from_file(path)

    assert loaded.project_name == "EscapeRoom"
    assert loaded.version == "1.0.0"
    assert loaded.debug is True
    assert loaded.max_connections == 42
    assert loaded == settings


def test_load_missing_file_returns_file_not_found(tmp_path):
    with pytest.raises(SettingsFileNotFoundError) as info:
        Settings.load_from_file(tmp_path / "does_not_exist.json")
    assert str(info.value) == "Settings file not found"


def test_load_malformed_json_returns_parse_error(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{ not: valid: json }", encoding="utf-8")
    with pytest.raises(SettingsParseError):
        Settings.load_from_file(path)


def test_saved_file_holds_all_fields(tmp_path):
    settings = Settings("EscapeRoom", "1.0.0", False, 7)
    path = tmp_path / "settings.json"
    settings.save_to_file(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert list(data) == ["project_name", "version", "debug", "max_connections"]
    assert data["max_connections"] == 7


def test_missing_field_is_parse_error(tmp_path):
    path = tmp_path / "partial.json"
    path.write_text(
        json.dumps({"project_name": "EscapeRoom", "version": "1.0.0", "debug": True}),
        encoding="utf-8",
    )
    with pytest.raises(SettingsParseError, match="max_connections"):
        Settings.load_from_file(path)


@pytest.mark.parametrize(
    "max_connections", [-1, 2**32, "42", True, 1.5]
)
def test_invalid_max_connections_is_parse_error(tmp_path, max_connections):
    path = tmp_path / "bad_value.json"
    path.write_text(
        json.dumps(
            {
                "project_name": "EscapeRoom",
                "version": "1.0.0",
                "debug": True,
                "max_connections": max_connections,
            }
        ),
        encoding="utf-8",
    )
    with pytest.raises(SettingsParseError):
        Settings.load_from_file(path)


def test_unknown_fields_are_ignored(tmp_path):
    path = tmp_path / "extra.json"
    path.write_text(
        json.dumps(
            {
                "project_name": "EscapeRoom",
                "version": "1.0.0",
                "debug": False,
                "max_connections": 3,
                "extra": [1, 2],
            }
        ),
        encoding="utf-8",
    )
    assert Settings.load_from_file(path) == Settings("EscapeRoom", "1.0.0", False, 3)


def test_save_into_missing_directory_is_io_error(tmp_path):
    settings = Settings("EscapeRoom", "1.0.0", True, 1)
    with pytest.raises(SettingsIOError) as info:
        settings.save_to_file(tmp_path / "missing" / "settings.json")
    assert isinstance(info.value, SettingsError)


def test_loading_a_directory_is_an_error(tmp_path):
    with pytest.raises(SettingsError):
        Settings.load_from_file(tmp_path)