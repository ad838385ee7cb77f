"""
Console helpers for coloured command line messages.
"""

import sys
from typing import Dict, Optional, TextIO

from colorama import Fore, Style, just_fix_windows_console

# Enable ANSI handling on Windows consoles; a no-op elsewhere
just_fix_windows_console()

COLORS: Dict[str, str] = {
    "error": Fore.RED,
    "reset": Style.RESET_ALL,
}


def style(text: str, kind: str, stream: Optional[TextIO] = None) -> str:
    """
    Colour ``text`` for ``kind`` if ``stream`` is a terminal.

    Args:
        text: Message text
        kind: Colour table key, e.g. "error"
        stream: Stream the text is meant for (default: sys.stderr)

    Returns:
        The text, wrapped in colour codes when the stream is a TTY
    """
    stream = stream or sys.stderr
    if not getattr(stream, "isatty", lambda: False)():
        return text
    return f"{COLORS.get(kind, '')}{text}{COLORS['reset']}"


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    print(style(f"[Error] {message}", "error"), file=sys.stderr)
