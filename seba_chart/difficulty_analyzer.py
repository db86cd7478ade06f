"""
Difficulty availability analysis

Looks only at section headers to tell which difficulties a chart offers,
without parsing notes or resolving timing. The song menu uses it to gate
difficulty choices before committing to a full parse, so a header can be
reported here even when the full parser later drops the whole track.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .chart_parser import read_chart_text
from .config_manager import ConfigManager
from .models import DifficultyAvailability
from .sections import lookup_track_header

logger = logging.getLogger(__name__)

DEFAULT_CHART_FILENAME = 'notes.chart'


def analyze_chart_content(content: Optional[str]) -> DifficultyAvailability:
    """Report which difficulties have a header in chart text"""
    if not content or not content.strip():
        logger.warning("Chart content is empty, no difficulties available")
        return DifficultyAvailability()

    found = set()
    for line in content.splitlines():
        line = line.strip()
        if not (line.startswith('[') and line.endswith(']')):
            continue

        header = lookup_track_header(line[1:-1])
        if header is not None and header.difficulty is not None:
            found.add(header.difficulty.name.lower())

    return DifficultyAvailability(**{name: True for name in found})


def analyze_chart(chart_path: Union[str, Path]) -> DifficultyAvailability:
    """
    Analyze a .chart file and return available difficulties

    A missing or unreadable file gives an all-false result, never an
    exception.
    """
    chart_path = Path(chart_path)
    if not chart_path.is_file():
        logger.warning(f"Chart file not found: {chart_path}")
        return DifficultyAvailability()

    content = read_chart_text(chart_path)
    if content is None:
        return DifficultyAvailability()

    availability = analyze_chart_content(content)
    logger.info(f"Chart analysis for {chart_path.name}: {str(availability) or 'no difficulties'}")
    return availability


def _read_user_config() -> Optional[ConfigManager]:
    """The user's config file, read-only, or None when there isn't a usable one"""
    try:
        config = ConfigManager()
    except RuntimeError as e:
        # No home directory to look in
        logger.debug(f"No user config location: {e}")
        return None

    if config.load_existing() is None:
        return None
    return config


def _configured_chart_filename(config: Optional[ConfigManager]) -> str:
    return config.chart_filename if config is not None else DEFAULT_CHART_FILENAME


def _configured_songs_root(config: Optional[ConfigManager]) -> Path:
    songs_root = config.songs_root if config is not None else None
    return songs_root or Path.cwd() / 'Songs'


def analyze_song_folder(song_folder: Union[str, Path],
                        chart_filename: Optional[str] = None) -> DifficultyAvailability:
    """
    Analyze the chart inside a song folder

    The chart file name comes from the config file when omitted, falling
    back to notes.chart.
    """
    if chart_filename is None:
        chart_filename = _configured_chart_filename(_read_user_config())
    return analyze_chart(Path(song_folder) / chart_filename)


def get_song_folder_path(song_name: str, songs_root: Optional[Union[str, Path]] = None) -> Path:
    """
    Get the full path to a song folder from a song name

    Args:
        song_name: Name of the song folder
        songs_root: Folder holding the songs; read from the config file when
            omitted, falling back to ./Songs. The config file is only read,
            never created.
    """
    if songs_root is None:
        songs_root = _configured_songs_root(_read_user_config())

    return Path(songs_root) / song_name


def analyze_song_by_name(song_name: str, songs_root: Optional[Union[str, Path]] = None,
                         chart_filename: Optional[str] = None) -> DifficultyAvailability:
    """Analyze a song by folder name and return available difficulties"""
    if songs_root is None or chart_filename is None:
        config = _read_user_config()
        if songs_root is None:
            songs_root = _configured_songs_root(config)
        if chart_filename is None:
            chart_filename = _configured_chart_filename(config)

    return analyze_song_folder(get_song_folder_path(song_name, songs_root), chart_filename)
