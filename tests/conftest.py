"""
Shared sample charts for the chart parser tests
"""

import textwrap

import pytest


SAMPLE_CHART_SCENARIO = textwrap.dedent("""\
    [Song]
    Resolution = 192
    [SyncTrack]
    0 = B 120000
    [ExpertSingle]
    0 = N 0 0
    192 = N 2 0
    """)

SAMPLE_CHART_FULL = textwrap.dedent("""\
    [Song]
    {
      Name = "Mario Circuit"
      Artist = "Nintendo"
      Charter = "Someone"
      Album = "Mario Kart"
      Offset = 0.5
      Resolution = 192
      Genre = "Game"
      MediaType = "cd"
      MusicStream = "song.ogg"
      PreviewStart = 12.5
    }
    [SyncTrack]
    {
      0 = TS 4
      0 = B 120000
      192 = B 240000
      768 = TS 3 3
    }
    [Events]
    {
      0 = E "section Intro"
    }
    [ExpertSingle]
    {
      0 = N 0 0
      0 = N 1 0
      192 = N 2 96
      384 = N 4 0
      384 = S 2 192
      480 = N 7 0
    }
    [EasySingle]
    {
      384 = N 0 0
      0 = N 3 0
    }
    """)

SAMPLE_CHART_NO_SECTIONS = "just some text without any headers\n"

SAMPLE_CHART_ONLY_BAD_LANES = textwrap.dedent("""\
    [Song]
    {
      Resolution = 192
    }
    [SyncTrack]
    {
      0 = B 120000
    }
    [ExpertSingle]
    {
      0 = N 5 0
      192 = N 6 0
      384 = N 7 0
    }
    """)


@pytest.fixture
def scenario_chart():
    return SAMPLE_CHART_SCENARIO


@pytest.fixture
def full_chart():
    return SAMPLE_CHART_FULL


@pytest.fixture
def chart_file(tmp_path):
    """Write a chart into a song folder and return the chart path"""
    def _write(content, folder="Mario Circuit", filename="notes.chart"):
        song_folder = tmp_path / folder
        song_folder.mkdir(parents=True, exist_ok=True)
        path = song_folder / filename
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def bad_lanes_chart():
    return SAMPLE_CHART_ONLY_BAD_LANES


@pytest.fixture
def headerless_chart():
    return SAMPLE_CHART_NO_SECTIONS
