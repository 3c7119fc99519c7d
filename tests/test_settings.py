import json

import pytest

from dialtone_settings import AppSettings, SettingsError, load_settings, save_settings


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(None) == AppSettings()
    assert load_settings(str(tmp_path / "nope.json")) == AppSettings()


def test_round_trip_through_json(tmp_path):
    path = str(tmp_path / "settings.json")
    settings = AppSettings(backend="osc", osc_port=57120, amp=0.5, midi_port="IAC Bus 1")
    save_settings(path, settings)
    assert load_settings(path) == settings


def test_unknown_keys_are_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"backend": "midi", "tempo": 90}), encoding="utf-8")
    settings = load_settings(str(path))
    assert settings.backend == "midi"
    assert not hasattr(settings, "tempo")


@pytest.mark.parametrize(
    "data",
    [
        {"backend": "jack"},
        {"osc_port": 0},
        {"osc_port": "abc"},
        {"amp": 1.5},
        {"window_width": -1},
        ["not", "an", "object"],
    ],
)
def test_invalid_values_raise(tmp_path, data):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    with pytest.raises(SettingsError):
        load_settings(str(path))


def test_malformed_json_raises(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{backend:", encoding="utf-8")
    with pytest.raises(SettingsError):
        load_settings(str(path))


def test_undecodable_file_raises_settings_error(tmp_path):
    path = tmp_path / "settings.json"
    path.write_bytes(b'{"backend": "\xff"}')
    with pytest.raises(SettingsError):
        load_settings(str(path))


def test_directory_path_raises_settings_error(tmp_path):
    with pytest.raises(SettingsError):
        load_settings(str(tmp_path))
