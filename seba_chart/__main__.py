"""
Inspect a chart from the command line

Usage: python -m seba_chart [-v | --verbose] <notes.chart | song folder>
"""

import sys
from pathlib import Path

from colorama import Fore

from .chart_parser import parse_chart_file
from .config_manager import ConfigManager
from .console import (
    format_bpm_change,
    format_key_value,
    format_note_span,
    format_time_signature,
    print_debug,
    print_error,
    print_header,
    print_info,
    print_plain,
    print_section,
    print_success,
    print_warning,
)
from .difficulty_analyzer import analyze_chart
from .logger import get_chart_logger


def resolve_chart_path(target: Path, chart_filename: str) -> Path:
    """Accept either a chart file or a song folder containing one"""
    if target.is_dir():
        return target / chart_filename
    return target


def show_chart(chart_path: Path, verbose: bool = False) -> bool:
    """Print a summary of a chart; returns False if it could not be parsed"""
    availability = analyze_chart(chart_path)
    chart = parse_chart_file(chart_path)

    if chart is None:
        print_error(f"Could not parse chart: {chart_path}")
        return False

    print_header(f"{chart.song_name or chart_path.parent.name} - {chart.artist or 'Unknown Artist'}",
                 color=Fore.CYAN)

    print_plain(format_key_value("Charter", chart.charter or "-"))
    print_plain(format_key_value("Album", chart.album or "-"))
    print_plain(format_key_value("Genre", chart.genre or "-"))
    print_plain(format_key_value("Resolution", f"{chart.resolution:g} ticks per beat"))
    print_plain(format_key_value("Offset", f"{chart.offset:g} s"))
    print_plain(format_key_value("Song Length", f"{chart.song_length:.2f} s"))

    print_section("Tempo map")
    for change in chart.bpm_changes:
        print_plain(format_bpm_change(change), indent=1)
    for signature in chart.time_signatures:
        print_plain(format_time_signature(signature), indent=1)

    print_section("Difficulties")
    if availability.any():
        print_success(f"Headers present: {availability}")
    else:
        print_warning("No difficulty headers found")

    for name, notes in chart.tracks.items():
        chords = sum(1 for note in notes if note.is_chord)
        print_plain(f"{name}:", indent=1)
        print_plain(f"Total Notes: {len(notes)}", indent=2)
        print_plain(f"Chord Notes: {chords}", indent=2)
        print_plain(f"Note Density: {chart.note_density(name):.2f} NPS", indent=2)
        if verbose:
            print_debug(f"Notes span {format_note_span(notes)}", indent=2)

    missing = [d.label for d in availability.available()
               if not any(name.lower().startswith(d.label.lower()) for name in chart.tracks)]
    for label in missing:
        print_warning(f"{label} has a header but no playable notes")

    return True


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    verbose = any(arg in ("-v", "--verbose") for arg in argv)
    targets = [arg for arg in argv if arg not in ("-v", "--verbose")]

    if not targets:
        print_plain("Usage: python -m seba_chart [-v | --verbose] <notes.chart | song folder>")
        return 1

    config = ConfigManager()
    config.load()
    get_chart_logger(config.log_file, config.log_level, config.get('logging.max_size_mb', 10))

    chart_path = resolve_chart_path(Path(targets[0]), config.chart_filename)
    print_info(f"Reading {chart_path}")
    if verbose:
        print_debug(f"Config file: {config.config_path}")

    return 0 if show_chart(chart_path, verbose) else 1


if __name__ == '__main__':
    sys.exit(main())
