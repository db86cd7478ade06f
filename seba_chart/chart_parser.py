"""
Chart File Parser

Parses .chart files (text-based format) into a time-resolved ChartData:
song metadata, tempo map and per-difficulty note lists with absolute
times in seconds.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from .models import ChartData, Difficulty, NoteEvent
from .note_track import parse_note_section
from .sections import (
    SONG_SECTION,
    SYNC_TRACK_SECTION,
    find_track_sections,
    parse_song_section,
    split_into_sections,
)
from .sync_track import parse_sync_track
from .timing import resolve_timing

logger = logging.getLogger(__name__)


# Difficulty name -> sections to try, in order
DIFFICULTY_SECTIONS: Dict[str, Tuple[str, ...]] = {
    'easy': ('EasySingle', 'EasyGuitar'),
    'medium': ('MediumSingle', 'MediumGuitar'),
    'hard': ('HardSingle', 'HardGuitar'),
    'expert': ('ExpertSingle', 'ExpertGuitar'),
    'facil': ('EasySingle', 'EasyGuitar', 'Single'),
    'dificil': ('HardSingle', 'HardGuitar', 'ExpertSingle', 'ExpertGuitar'),
}


def build_chart(content: str) -> ChartData:
    """Assemble an unresolved ChartData from chart text"""
    sections = split_into_sections(content)

    song = sections.get(SONG_SECTION)
    if song is None:
        logger.warning("No [Song] section found, using defaults")
    metadata = parse_song_section(song.body if song else None)

    sync = sections.get(SYNC_TRACK_SECTION)
    sync_track = parse_sync_track(sync.body if sync else None)

    tracks: Dict[str, Tuple[NoteEvent, ...]] = {}
    for header, section in find_track_sections(sections):
        notes = parse_note_section(section.body, header.canonical)
        if notes:
            tracks[header.canonical] = notes
            logger.debug(f"Parsed {len(notes)} notes for [{header.canonical}]")
        else:
            logger.debug(f"No playable notes in [{section.name}], track omitted")

    return ChartData(
        song_name=metadata.song_name,
        artist=metadata.artist,
        album=metadata.album,
        charter=metadata.charter,
        genre=metadata.genre,
        media_type=metadata.media_type,
        music_stream=metadata.music_stream,
        preview_start=metadata.preview_start,
        preview_end=metadata.preview_end,
        offset=metadata.offset,
        resolution=metadata.resolution,
        bpm_changes=sync_track.bpm_changes,
        time_signatures=sync_track.time_signatures,
        tracks=tracks,
    )


def parse_chart_content(content: Optional[str]) -> Optional[ChartData]:
    """
    Parse chart text into a resolved ChartData

    Args:
        content: Raw .chart text

    Returns:
        ChartData, or None if the text is empty
    """
    if not content or not content.strip():
        logger.error("Chart content is empty")
        return None

    chart = resolve_timing(build_chart(content))

    logger.info(f"Parsed chart: {chart.song_name or '(untitled)'} by {chart.artist or '(unknown)'}")
    logger.info(f"Found {len(chart.bpm_changes)} BPM changes, {len(chart.tracks)} difficulty tracks")
    return chart


def read_chart_text(chart_path: Path) -> Optional[str]:
    """Read a chart file as UTF-8 (BOM tolerant), or None if it can't be read"""
    try:
        with open(chart_path, 'r', encoding='utf-8-sig') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading chart file {chart_path}: {e}")
        return None


def parse_chart_file(chart_path: Union[str, Path]) -> Optional[ChartData]:
    """
    Parse a .chart file

    Args:
        chart_path: Path to chart file

    Returns:
        ChartData object with parsed information, or None if the file is
        missing, unreadable or empty
    """
    chart_path = Path(chart_path)
    if not chart_path.is_file():
        logger.error(f"Chart file not found: {chart_path}")
        return None

    content = read_chart_text(chart_path)
    if content is None:
        return None

    return parse_chart_content(content)


class ChartParser:
    """Parser for a single .chart file; create one per file"""

    def __init__(self, chart_path: Union[str, Path]):
        self.chart_path = Path(chart_path)

    def parse(self) -> Optional[ChartData]:
        return parse_chart_file(self.chart_path)


def get_notes_for_difficulty(chart: Optional[ChartData],
                             difficulty: Union[str, Difficulty]) -> Tuple[NoteEvent, ...]:
    """
    Get the notes to play for a difficulty

    Args:
        chart: Parsed chart data
        difficulty: Easy, Medium, Hard, Expert, or the Facil/Dificil aliases
            (case-insensitive), or a Difficulty member

    Returns:
        Notes of the first matching track, or an empty tuple
    """
    if chart is None:
        logger.error("Chart data is None")
        return ()

    key = difficulty.name.lower() if isinstance(difficulty, Difficulty) else difficulty.strip().lower()
    candidates = DIFFICULTY_SECTIONS.get(key)
    if candidates is None:
        known = ", ".join(name.capitalize() for name in DIFFICULTY_SECTIONS)
        logger.warning(f"Unknown difficulty: {difficulty}. Available: {known}")
        return ()

    for section in candidates:
        notes = chart.tracks.get(section)
        if notes:
            logger.debug(f"Found difficulty section [{section}] for {difficulty}")
            return notes

    logger.warning(f"No notes found for difficulty: {difficulty}")
    return ()
