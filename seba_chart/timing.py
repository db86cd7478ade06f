"""
Timing resolution: converts tick positions into seconds using the tempo map

Anchor times are computed once, in ascending tick order, since each one
depends on every tempo segment before it. Individual ticks are then looked
up against the anchors with a binary search.
"""

import logging
import math
from bisect import bisect_right
from dataclasses import replace
from typing import Dict, Iterable, Sequence, Tuple

from .models import BpmChange, ChartData, NoteEvent

logger = logging.getLogger(__name__)


class ChartTimingError(ValueError):
    """Raised when a tempo map cannot be turned into wall-clock time"""


def _check_inputs(bpm_changes: Sequence[BpmChange], resolution: float):
    if not bpm_changes:
        raise ChartTimingError("Tempo map has no BPM changes")
    if not (resolution > 0 and math.isfinite(resolution)):
        raise ChartTimingError(f"Resolution must be positive, got {resolution}")
    for change in bpm_changes:
        if not (change.bpm > 0 and math.isfinite(change.bpm)):
            raise ChartTimingError(f"BPM must be positive, got {change.bpm} at tick {change.tick}")


def resolve_anchors(bpm_changes: Iterable[BpmChange], resolution: float,
                    offset: float = 0.0) -> Tuple[BpmChange, ...]:
    """
    Calculate time in seconds for each BPM change

    Args:
        bpm_changes: Tempo anchors, already sorted by tick
        resolution: Ticks per quarter note
        offset: Time of the first anchor, in seconds

    Returns:
        New anchors with time_in_seconds populated
    """
    changes = list(bpm_changes)
    _check_inputs(changes, resolution)

    resolved = []
    current_time = offset
    previous = None

    for change in changes:
        if previous is not None:
            if change.tick < previous.tick:
                raise ChartTimingError("BPM changes must be sorted by tick")
            ticks = change.tick - previous.tick
            current_time += (ticks / resolution) * (60.0 / previous.bpm)

        resolved.append(replace(change, time_in_seconds=current_time))
        previous = change

    return tuple(resolved)


class TempoMap:
    """Resolved tempo anchors with tick -> seconds lookup"""

    def __init__(self, bpm_changes: Iterable[BpmChange], resolution: float, offset: float = 0.0):
        self.resolution = resolution
        self.anchors = resolve_anchors(bpm_changes, resolution, offset)
        self._ticks = [anchor.tick for anchor in self.anchors]

    def anchor_for(self, tick: int) -> BpmChange:
        """Last anchor at or before tick (the first one if tick precedes them all)"""
        index = bisect_right(self._ticks, tick) - 1
        return self.anchors[max(index, 0)]

    def tick_to_seconds(self, tick: int) -> float:
        anchor = self.anchor_for(tick)
        ticks = tick - anchor.tick
        return anchor.time_in_seconds + (ticks / self.resolution) * (60.0 / anchor.bpm)

    def resolve_note(self, note: NoteEvent) -> NoteEvent:
        start = self.tick_to_seconds(note.tick)
        end = self.tick_to_seconds(note.tick + note.sustain_length_ticks)
        return replace(note, time=start, sustain_seconds=end - start)


def tick_to_seconds(tick: int, anchors: Sequence[BpmChange], resolution: float) -> float:
    """
    Convert a single tick using anchors that already carry their times

    Use TempoMap when converting many ticks against the same tempo map.
    """
    _check_inputs(anchors, resolution)
    ticks = [anchor.tick for anchor in anchors]
    anchor = anchors[max(bisect_right(ticks, tick) - 1, 0)]
    return anchor.time_in_seconds + ((tick - anchor.tick) / resolution) * (60.0 / anchor.bpm)


def resolve_timing(chart: ChartData) -> ChartData:
    """
    Populate absolute times for every tempo anchor and every note

    Returns a new ChartData; an already resolved chart is returned as is.
    """
    if chart.is_resolved:
        return chart

    tempo_map = TempoMap(chart.bpm_changes, chart.resolution, chart.offset)

    tracks: Dict[str, Tuple[NoteEvent, ...]] = {
        name: tuple(tempo_map.resolve_note(note) for note in notes)
        for name, notes in chart.tracks.items()
    }

    logger.debug(f"Resolved {len(tempo_map.anchors)} tempo anchors and {sum(map(len, tracks.values()))} notes")

    return replace(
        chart,
        bpm_changes=tempo_map.anchors,
        tracks=tracks,
        is_resolved=True,
    )
