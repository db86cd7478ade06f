"""
Data model for parsed .chart files

Everything here is immutable: a ChartData is built once per parse and the
Timing Resolver hands back a new instance instead of editing in place.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple


LANE_COUNT = 5          # Five-fret single instrument
DEFAULT_RESOLUTION = 192.0
DEFAULT_BPM = 120.0


class Difficulty(IntEnum):
    """Difficulty identifiers, in ascending order"""
    EASY = 0
    MEDIUM = 1
    HARD = 2
    EXPERT = 3

    @property
    def label(self) -> str:
        """Header spelling, e.g. 'Expert'"""
        return self.name.capitalize()


class Instrument(IntEnum):
    """Instrument suffixes accepted on note-track headers"""
    SINGLE = 0
    GUITAR = 1
    BASS = 2
    DRUMS = 3
    KEYS = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class BpmChange:
    """Tempo anchor"""
    tick: int
    bpm: float                     # Beats per minute (already divided by 1000)
    time_in_seconds: float = 0.0   # Set by the Timing Resolver


@dataclass(frozen=True)
class TimeSignature:
    """Time signature marker (descriptive only, not used for timing)"""
    tick: int
    numerator: int
    denominator: int = 4


@dataclass(frozen=True)
class NoteEvent:
    """Individual note data"""
    tick: int
    lane: int                      # 0-4
    sustain_length_ticks: int = 0
    time: float = 0.0              # Seconds, set by the Timing Resolver
    sustain_seconds: float = 0.0   # Seconds, set by the Timing Resolver
    is_chord: bool = False         # Another note shares this tick

    @property
    def end_time(self) -> float:
        return self.time + self.sustain_seconds


def _freeze_tracks(tracks) -> Mapping[str, Tuple[NoteEvent, ...]]:
    return MappingProxyType({name: tuple(notes) for name, notes in dict(tracks).items()})


@dataclass(frozen=True)
class ChartData:
    """Complete parsed chart data"""
    song_name: str = ""
    artist: str = ""
    album: str = ""
    charter: str = ""
    genre: str = ""
    media_type: str = ""
    music_stream: str = ""
    preview_start: str = "0"
    preview_end: str = "0"

    # Timing information
    offset: float = 0.0
    resolution: float = DEFAULT_RESOLUTION  # Ticks per quarter note
    bpm_changes: Tuple[BpmChange, ...] = ()
    time_signatures: Tuple[TimeSignature, ...] = ()

    # Canonical section name -> notes, only for sections with surviving notes
    tracks: Mapping[str, Tuple[NoteEvent, ...]] = field(default_factory=dict, hash=False)

    is_resolved: bool = False

    def __post_init__(self):
        # Tuples and a read-only mapping keep the snapshot immutable
        object.__setattr__(self, 'bpm_changes', tuple(self.bpm_changes))
        object.__setattr__(self, 'time_signatures', tuple(self.time_signatures))
        object.__setattr__(self, 'tracks', _freeze_tracks(self.tracks))

    @property
    def track_names(self) -> List[str]:
        return list(self.tracks.keys())

    @property
    def total_notes(self) -> int:
        return sum(len(notes) for notes in self.tracks.values())

    def get_track(self, name: str) -> Optional[Tuple[NoteEvent, ...]]:
        """Get notes for a section name, ignoring case and surrounding brackets"""
        wanted = name.strip().strip('[]').lower()
        for track_name, notes in self.tracks.items():
            if track_name.lower() == wanted:
                return notes
        return None

    @property
    def song_length(self) -> float:
        """Latest note end time across all tracks, in seconds"""
        ends = [note.end_time for notes in self.tracks.values() for note in notes]
        return max(ends) if ends else 0.0

    def note_density(self, name: str) -> float:
        """Calculate notes per second for a single track"""
        notes = self.get_track(name)
        length = self.song_length - self.offset
        if not notes or length <= 0:
            return 0.0

        return len(notes) / length


@dataclass(frozen=True)
class DifficultyAvailability:
    """Which difficulties have a section header in a chart"""
    easy: bool = False
    medium: bool = False
    hard: bool = False
    expert: bool = False

    # Locale aliases used by the song menu
    @property
    def has_facil(self) -> bool:
        return self.easy

    @property
    def has_dificil(self) -> bool:
        return self.hard or self.expert

    def has(self, difficulty: Difficulty) -> bool:
        return getattr(self, difficulty.name.lower())

    def available(self) -> List[Difficulty]:
        return [d for d in Difficulty if self.has(d)]

    def any(self) -> bool:
        return bool(self.available())

    def is_available(self, name: str) -> bool:
        """
        Check a difficulty by name

        Accepts the canonical names (Easy, Medium, Hard, Expert) and the
        aliases Facil and Dificil, case-insensitively. Unknown names are
        reported as unavailable.
        """
        key = name.strip().lower()
        if key == 'facil':
            return self.has_facil
        if key == 'dificil':
            return self.has_dificil
        for difficulty in Difficulty:
            if difficulty.name.lower() == key:
                return self.has(difficulty)
        return False

    def __str__(self) -> str:
        return ", ".join(d.label for d in self.available())
