"""
[SyncTrack] parsing: tempo changes and time signatures
"""

import logging
from typing import List, NamedTuple, Optional, Tuple

from .models import DEFAULT_BPM, BpmChange, TimeSignature
from .sections import iter_body_lines, parse_int, split_key_value

logger = logging.getLogger(__name__)


class SyncTrack(NamedTuple):
    bpm_changes: Tuple[BpmChange, ...]
    time_signatures: Tuple[TimeSignature, ...]


def _parse_event(line: str) -> Optional[Tuple[int, str, List[int]]]:
    """Split 'tick = TYPE v1 [v2]' into (tick, TYPE, [values])"""
    pair = split_key_value(line)
    if pair is None:
        return None

    tick_str, event = pair
    tokens = event.split()
    if not tokens:
        return None

    tick = parse_int(tick_str)
    values = [parse_int(token) for token in tokens[1:]]
    if tick is None or None in values or tick < 0:
        return None
    return tick, tokens[0], values


def parse_sync_track(body: Optional[str]) -> SyncTrack:
    """
    Parse [SyncTrack] section for tempo and time signature

    Tempo values are stored in the file as BPM * 1000. Non-positive tempos
    are dropped. The returned tempo list is never empty: a 120 BPM anchor
    at tick 0 is synthesized when nothing usable was found.
    """
    bpm_changes: List[BpmChange] = []
    time_signatures: List[TimeSignature] = []

    for line in iter_body_lines(body or ""):
        parsed = _parse_event(line)
        if parsed is None:
            logger.debug(f"Skipping malformed SyncTrack line: {line!r}")
            continue

        tick, event, values = parsed

        if event == 'B':  # BPM change
            if not values:
                logger.debug(f"BPM event without a value at tick {tick}")
                continue
            bpm = values[0] / 1000.0
            if bpm <= 0:
                logger.warning(f"Ignoring non-positive BPM {bpm:g} at tick {tick}")
                continue
            bpm_changes.append(BpmChange(tick=tick, bpm=bpm))

        elif event == 'TS':  # Time signature
            if not values:
                logger.debug(f"Time signature without a numerator at tick {tick}")
                continue
            denominator = values[1] if len(values) > 1 else 4
            time_signatures.append(TimeSignature(tick, values[0], denominator))

    if not bpm_changes:
        logger.warning(f"No BPM changes found, using default {DEFAULT_BPM:g} BPM")
        bpm_changes.append(BpmChange(tick=0, bpm=DEFAULT_BPM))

    # Stable sort keeps file order for events sharing a tick
    bpm_changes.sort(key=lambda change: change.tick)
    time_signatures.sort(key=lambda signature: signature.tick)

    return SyncTrack(tuple(bpm_changes), tuple(time_signatures))
