"""
Console output utilities with color support

Provides consistent message formatting for the command line tools, plus
one-line renderings of chart objects (tempo anchors, time signatures,
track statistics) used by the chart inspector.
"""

from colorama import Fore, Style


def _print_tagged(tag: str, color: str, message: str, indent: int = 0):
    prefix = "  " * indent
    print(f"{prefix}{color}{tag} {message}{Style.RESET_ALL}")


def print_success(message: str, indent: int = 0):
    """Print success message in green with [+] prefix"""
    _print_tagged("[+]", Fore.GREEN, message, indent)


def print_info(message: str, indent: int = 0):
    """Print info message in cyan with [*] prefix"""
    _print_tagged("[*]", Fore.CYAN, message, indent)


def print_warning(message: str, indent: int = 0):
    """Print warning message in yellow with [!] prefix"""
    _print_tagged("[!]", Fore.YELLOW, message, indent)


def print_error(message: str, indent: int = 0):
    """Print error message in red with [ERROR] prefix"""
    _print_tagged("[ERROR]", Fore.RED, message, indent)


def print_debug(message: str, indent: int = 0):
    """Print debug message in magenta with [DEBUG] prefix"""
    _print_tagged("[DEBUG]", Fore.MAGENTA, message, indent)


def print_header(title: str, width: int = 60, color=None):
    """Print a formatted header"""
    separator = "=" * width
    start, end = (color, Style.RESET_ALL) if color else ("", "")
    print(f"\n{start}{separator}")
    print(f"   {title}")
    print(f"{separator}{end}\n")


def print_section(title: str, width: int = 60):
    """Print a section divider"""
    separator = "-" * width
    print(f"\n{separator}")
    print(title)
    print(separator)


def print_plain(message: str, indent: int = 0):
    """Print plain message without prefix"""
    print(f"{'  ' * indent}{message}")


def format_key_value(key: str, value, width: int = 20) -> str:
    """Format key-value pair with alignment"""
    return f"{key:>{width}}: {value}"


def format_bpm_change(change) -> str:
    """e.g. 'tick      192   240.000 BPM  @    1.000 s'"""
    return f"tick {change.tick:>8}  {change.bpm:8.3f} BPM  @ {change.time_in_seconds:8.3f} s"


def format_time_signature(signature) -> str:
    """e.g. 'tick      768  TS 3/3'"""
    return f"tick {signature.tick:>8}  TS {signature.numerator}/{signature.denominator}"


def format_note_span(notes) -> str:
    """Time covered by a track, from its first note to its latest note end"""
    if not notes:
        return "no notes"
    first = min(note.time for note in notes)
    last = max(note.end_time for note in notes)
    return f"{first:.3f} s - {last:.3f} s"
