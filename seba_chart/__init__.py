"""
Chart ingestion and timing resolution for five-lane rhythm game charts
"""

from .models import (
    BpmChange,
    ChartData,
    Difficulty,
    DifficultyAvailability,
    Instrument,
    NoteEvent,
    TimeSignature,
)
from .chart_parser import (
    ChartParser,
    get_notes_for_difficulty,
    parse_chart_content,
    parse_chart_file,
)
from .difficulty_analyzer import (
    analyze_chart,
    analyze_chart_content,
    analyze_song_by_name,
    analyze_song_folder,
)
from .timing import ChartTimingError, TempoMap, resolve_timing, tick_to_seconds

__all__ = [
    'BpmChange',
    'ChartData',
    'Difficulty',
    'DifficultyAvailability',
    'Instrument',
    'NoteEvent',
    'TimeSignature',
    'ChartParser',
    'get_notes_for_difficulty',
    'parse_chart_content',
    'parse_chart_file',
    'analyze_chart',
    'analyze_chart_content',
    'analyze_song_by_name',
    'analyze_song_folder',
    'ChartTimingError',
    'TempoMap',
    'resolve_timing',
    'tick_to_seconds',
]
