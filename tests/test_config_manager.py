"""
Tests for the JSON configuration manager
"""

import json
from pathlib import Path

import pytest

from seba_chart.config_manager import ConfigManager


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "SebaChart" / "chart_config.json"


def test_creates_default_config(config_path):
    manager = ConfigManager(config_path)
    config = manager.load()

    assert config_path.exists()
    assert config['config_version'] == ConfigManager.CONFIG_VERSION
    assert manager.chart_filename == "notes.chart"
    assert manager.songs_root is None
    assert manager.log_level == "INFO"
    assert manager.log_file is None


def test_round_trip(config_path):
    manager = ConfigManager(config_path)
    manager.load()
    manager.set("songs.root", "/games/songs")
    manager.save()

    reloaded = ConfigManager(config_path)
    reloaded.load()
    assert reloaded.songs_root == Path("/games/songs")
    assert reloaded.get("songs.root") == "/games/songs"


def test_missing_keys_are_merged_from_defaults(config_path):
    config_path.parent.mkdir(parents=True)
    config_path.write_text(json.dumps({"logging": {"level": "debug"}}), encoding="utf-8")

    manager = ConfigManager(config_path)
    manager.load()
    assert manager.log_level == "DEBUG"
    assert manager.get("logging.max_size_mb") == 10
    assert manager.chart_filename == "notes.chart"


def test_corrupt_config_is_backed_up(config_path):
    config_path.parent.mkdir(parents=True)
    config_path.write_text("{not json", encoding="utf-8")

    manager = ConfigManager(config_path)
    config = manager.load()

    assert config['songs']['chart_filename'] == "notes.chart"
    backups = list(config_path.parent.glob("chart_config_backup_*.json"))
    assert len(backups) == 1
    assert json.loads(config_path.read_text(encoding="utf-8"))['config_version'] == 1


def test_get_and_set_dot_paths(config_path):
    manager = ConfigManager(config_path)
    manager.load()

    assert manager.get("songs.nothing", "fallback") == "fallback"
    assert manager.get("songs.chart_filename.deeper") is None

    manager.set("new.nested.value", 3)
    assert manager.get("new.nested.value") == 3


def test_numeric_string_version_is_current(config_path):
    config_path.parent.mkdir(parents=True)
    original = json.dumps({"config_version": "1", "songs": {"root": "/games/songs"}})
    config_path.write_text(original, encoding="utf-8")

    manager = ConfigManager(config_path)
    manager.load()
    assert manager.songs_root == Path("/games/songs")
    assert config_path.read_text(encoding="utf-8") == original


@pytest.mark.parametrize("version", ["abc", None, [1], 0])
def test_unusable_version_is_rewritten(config_path, version):
    config_path.parent.mkdir(parents=True)
    config_path.write_text(json.dumps({"config_version": version}), encoding="utf-8")

    ConfigManager(config_path).load()
    assert json.loads(config_path.read_text(encoding="utf-8"))['config_version'] == 1


def test_load_existing_without_file(config_path, capsys):
    manager = ConfigManager(config_path)
    assert manager.load_existing() is None
    assert not config_path.parent.exists()
    assert capsys.readouterr().out == ""


def test_load_existing_reads_without_saving(config_path, capsys):
    config_path.parent.mkdir(parents=True)
    original = json.dumps({"config_version": 0, "songs": {"chart_filename": "expert.chart"}})
    config_path.write_text(original, encoding="utf-8")

    manager = ConfigManager(config_path)
    assert manager.load_existing() is not None
    assert manager.chart_filename == "expert.chart"
    assert manager.songs_root is None
    assert config_path.read_text(encoding="utf-8") == original
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", b"\xff\xfe{}"])
def test_load_existing_ignores_bad_files(config_path, content, caplog):
    config_path.parent.mkdir(parents=True)
    if isinstance(content, bytes):
        config_path.write_bytes(content)
    else:
        config_path.write_text(content, encoding="utf-8")

    assert ConfigManager(config_path).load_existing() is None
    assert list(config_path.parent.iterdir()) == [config_path]
    assert "config file" in caplog.text.lower()


def test_load_existing_ignores_directories(config_path):
    config_path.mkdir(parents=True)
    assert ConfigManager(config_path).load_existing() is None


def test_wrongly_typed_song_settings_fall_back(config_path):
    config_path.parent.mkdir(parents=True)
    config_path.write_text(json.dumps({"songs": {"root": 5, "chart_filename": None}}), encoding="utf-8")

    manager = ConfigManager(config_path)
    manager.load_existing()
    assert manager.songs_root is None
    assert manager.chart_filename == "notes.chart"
