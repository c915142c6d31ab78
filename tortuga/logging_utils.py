"""Console output for Tortuga runs.

Every message carries a short tag ([•] search trace, [✓] win, [!] error...)
so results still read without colour. ANSI colours are added on top unless
TORTUGA_NO_COLOR is set. Search traces are noisy and only appear with
DEBUG_SEARCH.
"""

import os
from enum import Enum


class Color(Enum):
    """Terminal colours, one per message kind."""

    BLUE = "\033[94m"      # Search phases, Kraken kills
    YELLOW = "\033[93m"    # Warnings such as a lowered depth cap
    RED = "\033[91m"       # Errors and losses
    GREEN = "\033[92m"     # Wins
    CYAN = "\033[96m"      # Map and run details

    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Return ``text`` wrapped in ``color`` escapes, or unchanged under TORTUGA_NO_COLOR."""
    if os.getenv("TORTUGA_NO_COLOR"):
        return text

    prefix = Color.BOLD.value + color.value if bold else color.value
    return f"{prefix}{text}{Color.RESET.value}"


def search_debug_enabled() -> bool:
    return os.getenv("DEBUG_SEARCH", "").lower() in ("1", "true", "yes")


def log_search(message: str) -> None:
    """Log a search trace (blue). Only printed when DEBUG_SEARCH is set."""
    if search_debug_enabled():
        print(colored(f"{LOG_TAG_SEARCH} {message}", Color.BLUE))


def log_warning(message: str) -> None:
    """Log a warning (yellow)."""
    print(colored(f"{LOG_TAG_WARNING} {message}", Color.YELLOW))


def log_error(message: str) -> None:
    """Log an error (red)."""
    print(colored(f"{LOG_TAG_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))


# Markers for message types (color-blind accessible)
LOG_TAG_SEARCH = "[•]"
LOG_TAG_WARNING = "[~]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"
