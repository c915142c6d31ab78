"""
Map loading from input files.

An input file holds one puzzle instance in two lines:

```
[0,0] [4,2] [2,7] [7,4] [0,8] [8,8]
1
```

The first line places Jack Sparrow, Davy Jones, the Kraken, the Rock, the
Dead Man's Chest and Tortuga (in that order, spaces optional). The second
line selects the perception scenario (1 or 2).

Two kinds of failure are kept apart:
- ``MalformedInputError``: the text does not have this shape
- ``InvalidPlacementError``: the text parses but the placement breaks the
  map rules (e.g. Tortuga inside the Kraken's zone)

Both are ``ValueError`` subclasses. Unlike random generation there is no
retry: the input is fixed, so the caller decides what to do.

Usage:
    loader = MapLoader(Path("input.txt"))
    grid = loader.load()
"""

from pathlib import Path
from typing import List, Optional

from .config import Config
from .environment import GridMap, MapLayout, MalformedInputError


class MapLoader:
    """Load and validate a map from a two-line input file."""

    def __init__(self, input_path: Optional[Path] = None):
        """Initialize the loader.

        Args:
            input_path: File to read. Defaults to ``Config.INPUT_FILE``
        """
        self.input_path = Path(input_path) if input_path is not None else Config.INPUT_FILE

    def load_layout(self) -> MapLayout:
        """Read and parse the input file without checking placement rules.

        Raises:
            FileNotFoundError: If the input file does not exist
            MalformedInputError: If the file does not have the expected shape
        """
        if not self.input_path.exists():
            raise FileNotFoundError(f"Input file not found at {self.input_path}")

        lines = self._meaningful_lines(self.input_path.read_text(encoding="utf-8"))
        return MapLayout.from_text(lines[0], lines[1])

    def load(self) -> GridMap:
        """Read the input file and build a validated, filled map.

        Raises:
            FileNotFoundError: If the input file does not exist
            MalformedInputError: If the file does not have the expected shape
            InvalidPlacementError: If the placement breaks the map rules
        """
        return GridMap.load(self.load_layout())

    def save(self, layout: MapLayout) -> Path:
        """Write ``layout`` in the input format, e.g. to replay a generated map."""
        self.input_path.write_text(f"{layout.to_text()}\n{layout.scenario}\n", encoding="utf-8")
        return self.input_path

    @staticmethod
    def _meaningful_lines(text: str) -> List[str]:
        lines = [line.strip() for line in text.splitlines() if line.strip()]
        if len(lines) < 2:
            raise MalformedInputError(
                "Input must contain the agent positions on the first line and the scenario on the second"
            )
        return lines


def load_map(input_path: Optional[Path] = None) -> GridMap:
    """Convenience function to load a map from an input file."""
    return MapLoader(input_path).load()
