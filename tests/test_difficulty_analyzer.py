"""
Tests for header-only difficulty analysis
"""

import json
import logging
from pathlib import Path

import pytest

from seba_chart import (
    Difficulty,
    DifficultyAvailability,
    analyze_chart,
    analyze_chart_content,
    analyze_song_by_name,
    analyze_song_folder,
    parse_chart_content,
)
from seba_chart.config_manager import ConfigManager
from seba_chart.difficulty_analyzer import get_song_folder_path


@pytest.fixture(autouse=True)
def user_config(tmp_path, monkeypatch):
    config_path = tmp_path / "config" / "chart_config.json"
    monkeypatch.setattr(ConfigManager, "get_default_config_path", staticmethod(lambda: config_path))
    return config_path


def test_full_chart(full_chart):
    availability = analyze_chart_content(full_chart)
    assert availability == DifficultyAvailability(easy=True, expert=True)
    assert str(availability) == "Easy, Expert"
    assert availability.available() == [Difficulty.EASY, Difficulty.EXPERT]


@pytest.mark.parametrize("header,field", [
    ("[EasySingle]", "easy"),
    ("[easy]", "easy"),
    ("[MEDIUM]", "medium"),
    ("[HardGuitar]", "hard"),
    ("  [ExpertDrums]  ", "expert"),
])
def test_header_spellings(header, field):
    availability = analyze_chart_content(f"{header}\n{{\n}}\n")
    assert getattr(availability, field)
    assert len(availability.available()) == 1


@pytest.mark.parametrize("header", ["[Single]", "[Song]", "[ExpertDoubleBass]", "ExpertSingle", "[Expert"])
def test_headers_that_do_not_count(header):
    assert not analyze_chart_content(f"{header}\n").any()


def test_bodies_are_not_inspected():
    availability = analyze_chart_content("[Events]\n0 = E \"[Expert]\"\n")
    assert not availability.expert


def test_header_present_but_no_playable_notes(bad_lanes_chart):
    assert analyze_chart_content(bad_lanes_chart).expert
    assert 'ExpertSingle' not in parse_chart_content(bad_lanes_chart).tracks


def test_locale_aliases():
    hard_only = DifficultyAvailability(hard=True)
    assert hard_only.has_dificil
    assert not hard_only.has_facil
    assert DifficultyAvailability(expert=True).is_available("Dificil")
    assert DifficultyAvailability(easy=True).is_available("facil")
    assert DifficultyAvailability(easy=True).is_available("EASY")
    assert not DifficultyAvailability(easy=True).is_available("Medium")
    assert not DifficultyAvailability(easy=True).is_available("Insane")


def test_empty_content(caplog):
    with caplog.at_level(logging.WARNING):
        assert analyze_chart_content("") == DifficultyAvailability()
    assert "empty" in caplog.text


def test_missing_file_is_all_false(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        availability = analyze_chart(tmp_path / "missing" / "notes.chart")
    assert availability == DifficultyAvailability()
    assert str(availability) == ""
    assert "not found" in caplog.text


def test_analyze_chart_file(chart_file, full_chart):
    assert analyze_chart(chart_file(full_chart)).expert


def test_song_folder(chart_file, full_chart):
    path = chart_file(full_chart, folder="Mario Circuit")
    assert analyze_song_folder(path.parent).easy
    assert not analyze_song_folder(path.parent, chart_filename="other.chart").any()


def test_song_by_name(tmp_path, chart_file, full_chart):
    chart_file(full_chart, folder="Mario Circuit")
    assert analyze_song_by_name("Mario Circuit", songs_root=tmp_path).expert
    assert not analyze_song_by_name("Rainbow Road", songs_root=tmp_path).any()


def _write_config(config_path, settings):
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(settings), encoding="utf-8")


def test_song_folder_path_from_config(tmp_path, user_config):
    _write_config(user_config, {"songs": {"root": (tmp_path / "Songs").as_posix()}})
    assert get_song_folder_path("Mario Circuit") == tmp_path / "Songs" / "Mario Circuit"


def test_song_folder_path_without_config_changes_nothing(tmp_path, user_config, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert get_song_folder_path("Mario Circuit") == tmp_path / "Songs" / "Mario Circuit"
    assert not user_config.parent.exists()
    assert capsys.readouterr().out == ""


def test_outdated_config_is_not_rewritten(tmp_path, user_config, capsys):
    _write_config(user_config, {"config_version": 0, "songs": {"root": "Songs"}})
    before = user_config.read_text(encoding="utf-8")

    assert get_song_folder_path("Mario Circuit") == Path("Songs") / "Mario Circuit"
    assert user_config.read_text(encoding="utf-8") == before
    assert capsys.readouterr().out == ""


def test_unreadable_config_is_ignored(tmp_path, user_config, chart_file, full_chart, monkeypatch, caplog):
    user_config.parent.mkdir(parents=True)
    user_config.write_text("{not json", encoding="utf-8")
    chart_file(full_chart, folder="Songs/Mario Circuit")
    monkeypatch.chdir(tmp_path)

    with caplog.at_level(logging.WARNING):
        assert analyze_song_by_name("Mario Circuit").expert
    assert "Could not read config file" in caplog.text
    assert list(user_config.parent.iterdir()) == [user_config]


def test_config_path_that_is_a_directory(tmp_path, user_config, monkeypatch):
    user_config.mkdir(parents=True)
    monkeypatch.chdir(tmp_path)
    assert analyze_song_by_name("Mario Circuit") == DifficultyAvailability()


def test_no_home_directory(tmp_path, monkeypatch):
    def no_home():
        raise RuntimeError("Could not determine home directory")

    monkeypatch.setattr(ConfigManager, "get_default_config_path", staticmethod(no_home))
    monkeypatch.chdir(tmp_path)
    assert get_song_folder_path("Mario Circuit") == tmp_path / "Songs" / "Mario Circuit"


def test_configured_chart_filename(tmp_path, user_config, chart_file, full_chart):
    chart_file(full_chart, folder="Mario Circuit", filename="expert.chart")
    _write_config(user_config, {"songs": {"root": tmp_path.as_posix(), "chart_filename": "expert.chart"}})

    assert analyze_song_by_name("Mario Circuit") == DifficultyAvailability(easy=True, expert=True)
    assert analyze_song_folder(tmp_path / "Mario Circuit").expert
    assert not analyze_song_folder(tmp_path / "Mario Circuit", chart_filename="notes.chart").any()
