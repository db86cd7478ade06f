"""
Note-track parsing for [<Difficulty><Instrument>] and [Single] sections
"""

import logging
from collections import Counter
from dataclasses import replace
from typing import List, Optional, Tuple

from .models import LANE_COUNT, NoteEvent
from .sections import iter_body_lines, parse_int, split_key_value

logger = logging.getLogger(__name__)


def _parse_note_line(line: str) -> Optional[Tuple[int, int, int]]:
    """Parse 'tick = N lane sustain' into (tick, lane, sustain)"""
    pair = split_key_value(line)
    if pair is None:
        return None

    tick_str, event = pair
    tokens = event.split()
    if len(tokens) < 3 or tokens[0] != 'N':
        return None

    tick = parse_int(tick_str)
    lane = parse_int(tokens[1])
    sustain = parse_int(tokens[2])
    if tick is None or lane is None or sustain is None:
        return None

    if tick < 0 or sustain < 0:
        return None

    # The sustain end is converted to seconds too
    try:
        float(tick + sustain)
    except OverflowError:
        return None
    return tick, lane, sustain


def mark_chords(notes: List[NoteEvent]) -> List[NoteEvent]:
    """Flag notes that share a tick with another note"""
    per_tick = Counter(note.tick for note in notes)
    return [
        replace(note, is_chord=True) if per_tick[note.tick] > 1 else note
        for note in notes
    ]


def parse_note_section(body: str, section_name: str = "") -> Tuple[NoteEvent, ...]:
    """
    Parse a note-track section body

    Lanes outside 0-4 are dropped. Other event types (star power, local
    events) are ignored. The result is sorted by tick and may be empty.
    """
    notes: List[NoteEvent] = []
    dropped = 0

    for line in iter_body_lines(body):
        parsed = _parse_note_line(line)
        if parsed is None:
            logger.debug(f"Skipping non-note line in [{section_name}]: {line!r}")
            continue

        tick, lane, sustain = parsed
        if not 0 <= lane < LANE_COUNT:
            dropped += 1
            continue

        notes.append(NoteEvent(tick=tick, lane=lane, sustain_length_ticks=sustain))

    if dropped:
        logger.debug(f"Dropped {dropped} out-of-range lane events in [{section_name}]")

    notes.sort(key=lambda note: note.tick)
    return tuple(mark_chords(notes))
