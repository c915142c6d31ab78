"""
Tortuga Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return int(value)


class Config:
    """Application configuration loaded from environment variables."""

    # Search Configuration
    # The longest route seen across millions of generated maps was 24 moves,
    # so backtracking stops exploring past 25.
    MAX_SEARCH_DEPTH: int = int(os.getenv("TORTUGA_MAX_DEPTH", "25"))
    DEFAULT_SCENARIO: int = int(os.getenv("TORTUGA_DEFAULT_SCENARIO", "1"))

    # Map generation
    SEED: int | None = _optional_int("TORTUGA_SEED")

    # Batch analysis
    ANALYSIS_MAPS: int = int(os.getenv("TORTUGA_ANALYSIS_MAPS", "1000"))

    # Files
    INPUT_FILE: Path = Path(os.getenv("TORTUGA_INPUT_FILE", "input.txt"))
    OUTPUT_DIR: Path = Path(os.getenv("TORTUGA_OUTPUT_DIR", "."))
    ASTAR_OUTPUT_NAME: str = "outputAStar.txt"
    BACKTRACKING_OUTPUT_NAME: str = "outputBacktracking.txt"

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors for out-of-range values."""
        if cls.MAX_SEARCH_DEPTH < 1:
            raise ValueError(
                f"TORTUGA_MAX_DEPTH must be a positive number of moves, got {cls.MAX_SEARCH_DEPTH}"
            )

        if cls.DEFAULT_SCENARIO not in (1, 2):
            raise ValueError(
                f"TORTUGA_DEFAULT_SCENARIO must be 1 or 2, got {cls.DEFAULT_SCENARIO}"
            )

        if cls.ANALYSIS_MAPS < 1:
            raise ValueError(
                f"TORTUGA_ANALYSIS_MAPS must be at least 1, got {cls.ANALYSIS_MAPS}"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Tortuga Configuration:",
            f"  Max Search Depth: {cls.MAX_SEARCH_DEPTH}",
            f"  Default Scenario: {cls.DEFAULT_SCENARIO}",
            f"  Seed: {cls.SEED if cls.SEED is not None else 'random'}",
            f"  Analysis Maps: {cls.ANALYSIS_MAPS}",
            f"  Input File: {cls.INPUT_FILE}",
            f"  Output Dir: {cls.OUTPUT_DIR}",
        ]
        return "\n".join(lines)
