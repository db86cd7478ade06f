"""
Section extraction for .chart files

Splits raw chart text into named bracket sections and reads the [Song]
metadata block. Also owns the lookup table of note-track header spellings
shared by the full parser and the difficulty analyzer.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, NamedTuple, Optional, Tuple

from .models import DEFAULT_RESOLUTION, Difficulty, Instrument

logger = logging.getLogger(__name__)


SONG_SECTION = 'song'
SYNC_TRACK_SECTION = 'synctrack'


class TrackHeader(NamedTuple):
    """A recognised note-track header spelling"""
    canonical: str                   # e.g. 'ExpertSingle', 'Easy', 'Single'
    difficulty: Optional[Difficulty]  # None for the bare [Single] fallback
    instrument: Optional[Instrument]  # None for bare difficulty headers


def _build_track_headers() -> Mapping[str, TrackHeader]:
    headers = {}
    for difficulty in Difficulty:
        headers[difficulty.label.lower()] = TrackHeader(difficulty.label, difficulty, None)
        for instrument in Instrument:
            name = difficulty.label + instrument.label
            headers[name.lower()] = TrackHeader(name, difficulty, instrument)

    headers['single'] = TrackHeader('Single', None, Instrument.SINGLE)
    return headers


# Lower-cased header name -> TrackHeader
TRACK_HEADERS: Mapping[str, TrackHeader] = _build_track_headers()


def lookup_track_header(name: str) -> Optional[TrackHeader]:
    """Find the note-track header for a section name (case-insensitive)"""
    return TRACK_HEADERS.get(name.strip().lower())


class Section(NamedTuple):
    """A bracket-delimited section: header name and raw body text"""
    name: str
    body: str


def iter_sections(content: str) -> Iterator[Section]:
    """
    Yield every [Name] section in document order

    A header is '[' + name + ']' where the name holds no brackets or line
    breaks. A body runs from the end of its header to the next '[' in the
    text, whether or not that bracket opens a valid header, or to the end
    of the text.
    """
    length = len(content)
    start = content.find('[')

    while start != -1:
        next_open = content.find('[', start + 1)
        close = content.find(']', start + 1)
        limit = next_open if next_open != -1 else length

        name = None
        if close != -1 and close < limit:
            candidate = content[start + 1:close]
            if '\n' not in candidate and '\r' not in candidate:
                name = candidate

        if name is not None:
            yield Section(name.strip(), content[close + 1:limit])

        start = next_open


def split_into_sections(content: str) -> Dict[str, Section]:
    """
    Split chart text into sections keyed by lower-cased name

    The first occurrence of a name wins; later duplicates are logged and
    ignored.
    """
    sections: Dict[str, Section] = {}

    for section in iter_sections(content):
        key = section.name.lower()
        if key in sections:
            logger.warning(f"Duplicate [{section.name}] section ignored, keeping the first one")
            continue
        sections[key] = section

    return sections


def iter_body_lines(body: str) -> Iterator[str]:
    """Yield trimmed, non-empty body lines, skipping the { } braces"""
    for line in body.splitlines():
        line = line.strip()
        if not line or line in ('{', '}'):
            continue
        yield line


def split_key_value(line: str) -> Optional[Tuple[str, str]]:
    """Split a 'Key = Value' line, or return None if there is no '='"""
    key, sep, value = line.partition('=')
    if not sep:
        return None
    return key.strip(), value.strip()


def parse_int(token: str) -> Optional[int]:
    """Parse an integer field, or None if it isn't one or won't fit in a float"""
    try:
        number = int(token)
        float(number)
    except (ValueError, OverflowError):
        return None
    return number


@dataclass(frozen=True)
class SongMetadata:
    """Fields read from the [Song] section"""
    song_name: str = ""
    artist: str = ""
    album: str = ""
    charter: str = ""
    genre: str = ""
    media_type: str = ""
    music_stream: str = ""
    offset: float = 0.0
    resolution: float = DEFAULT_RESOLUTION
    preview_start: str = "0"
    preview_end: str = "0"


# .chart key -> SongMetadata attribute
STRING_FIELDS = {
    'name': 'song_name',
    'artist': 'artist',
    'album': 'album',
    'charter': 'charter',
    'genre': 'genre',
    'mediatype': 'media_type',
    'musicstream': 'music_stream',
    'previewstart': 'preview_start',
    'previewend': 'preview_end',
}


def _read_values(body: str) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for line in iter_body_lines(body):
        pair = split_key_value(line)
        if pair is None:
            continue
        key, value = pair
        # First occurrence of a key wins
        values.setdefault(key.lower(), value.strip('"').strip())
    return values


def _parse_float(values: Dict[str, str], key: str) -> Optional[float]:
    raw = values.get(key)
    if raw is None:
        return None
    try:
        number = float(raw)
    except ValueError:
        logger.warning(f"Could not parse {key} value {raw!r}, using default")
        return None
    if not math.isfinite(number):
        logger.warning(f"Non-finite {key} value {raw!r}, using default")
        return None
    return number


def parse_song_section(body: Optional[str]) -> SongMetadata:
    """
    Parse [Song] section for metadata

    Never raises: missing or unparsable fields fall back to defaults.
    Passing None (no [Song] section) returns all defaults.
    """
    if body is None:
        return SongMetadata()

    values = _read_values(body)
    fields = {attr: values[key] for key, attr in STRING_FIELDS.items() if key in values}

    offset = _parse_float(values, 'offset')
    if offset is not None:
        fields['offset'] = offset

    resolution = _parse_float(values, 'resolution')
    if resolution is not None:
        if resolution > 0:
            fields['resolution'] = resolution
        else:
            logger.warning(f"Resolution {resolution} is not positive, using {DEFAULT_RESOLUTION:g}")

    return SongMetadata(**fields)


def find_track_sections(sections: Dict[str, Section]) -> List[Tuple[TrackHeader, Section]]:
    """Pick the note-track sections out of a split chart, in document order"""
    tracks = []
    for key, section in sections.items():
        header = TRACK_HEADERS.get(key)
        if header is None:
            if key not in (SONG_SECTION, SYNC_TRACK_SECTION):
                logger.debug(f"Skipping unsupported section [{section.name}]")
            continue
        tracks.append((header, section))
    return tracks
