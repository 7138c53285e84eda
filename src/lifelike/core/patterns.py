"""Common Life-like seed patterns and pattern management."""

from typing import Dict, List, Tuple, Optional, Any
import json
import logging
from pathlib import Path

import numpy as np

from .grid import Grid

logger = logging.getLogger(__name__)


class Pattern:
    """A named set of living cells used to seed a grid."""

    def __init__(
        self,
        name: str,
        cells: List[Tuple[int, int]],
        description: str = "",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (row, col) coordinates for living cells
            description: Optional description
            metadata: Optional metadata dictionary
        """
        self.name = name
        self.cells = [(int(row), int(col)) for row, col in cells]
        self.description = description
        self.metadata = metadata or {}

    @classmethod
    def from_string(cls, name: str, picture: str, description: str = "") -> "Pattern":
        """Create a pattern from a picture such as '.*.\\n..*\\n***'."""
        grid = Grid.from_string(picture)
        return cls(name, list(grid.living_cells()), description)

    def to_grid(self, height: int, width: int, offset_row: int = 0, offset_col: int = 0) -> Grid:
        """Stamp this pattern onto a fresh all-dead grid.

        Cells that fall outside the grid are dropped.

        Args:
            height: Grid rows
            width: Grid columns
            offset_row: Vertical offset
            offset_col: Horizontal offset

        Returns:
            New Grid containing the pattern
        """
        cells = np.zeros((height, width), dtype=np.int8)
        clipped = 0
        for row, col in self.cells:
            r, c = row + offset_row, col + offset_col
            if 0 <= r < height and 0 <= c < width:
                cells[r, c] = 1
            else:
                clipped += 1

        if clipped:
            logger.warning(
                "Pattern '%s' clipped: %d of %d cells fall outside the %dx%d grid",
                self.name,
                clipped,
                len(self.cells),
                height,
                width,
            )
        return Grid(cells)

    def centered_offset(self, height: int, width: int) -> Tuple[int, int]:
        """Offset that centers the pattern on a grid of the given size."""
        min_row, min_col, _, _ = self.get_bounding_box()
        size_rows, size_cols = self.get_size()
        return (
            max(0, (height - size_rows) // 2) - min_row,
            max(0, (width - size_cols) // 2) - min_col,
        )

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_row, min_col, max_row, max_col)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        rows, cols = zip(*self.cells)
        return (min(rows), min(cols), max(rows), max(cols))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (rows, cols)."""
        min_row, min_col, max_row, max_col = self.get_bounding_box()
        return (max_row - min_row + 1, max_col - min_col + 1)

    def normalize(self) -> "Pattern":
        """Return a new pattern with coordinates shifted to start at (0, 0)."""
        if not self.cells:
            return Pattern(self.name, [], self.description, self.metadata.copy())

        min_row, min_col, _, _ = self.get_bounding_box()
        cells = [(row - min_row, col - min_col) for row, col in self.cells]
        return Pattern(self.name, cells, self.description, self.metadata.copy())

    def to_dict(self) -> Dict[str, Any]:
        """Convert pattern to dictionary for serialization."""
        return {
            "name": self.name,
            "cells": [list(cell) for cell in self.cells],
            "description": self.description,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pattern":
        """Create pattern from dictionary.

        Raises:
            KeyError: If 'name' or 'cells' is missing
            ValueError: If a cell is not a coordinate pair
        """
        cells = []
        for cell in data["cells"]:
            if len(cell) != 2:
                raise ValueError(f"Pattern cell {cell!r} is not a (row, col) pair")
            cells.append((cell[0], cell[1]))

        return cls(
            name=data["name"],
            cells=cells,
            description=data.get("description", ""),
            metadata=data.get("metadata", {}),
        )

    @classmethod
    def from_grid(cls, grid: Grid, name: str, description: str = "") -> "Pattern":
        """Create pattern from the living cells of a grid."""
        cells = list(grid.living_cells())
        metadata = {"source_grid_size": list(grid.shape), "population": len(cells)}
        return cls(name, cells, description, metadata)

    def __repr__(self) -> str:
        return f"Pattern({self.name!r}, cells={len(self.cells)})"


BUILTIN_PATTERNS = {
    "Still Life": [
        ("Block", "2x2 still life block", """
**
**
"""),
        ("Beehive", "Beehive still life", """
.**.
*..*
.**.
"""),
        ("Loaf", "Loaf still life", """
.**.
*..*
.*.*
..*.
"""),
    ],
    "Oscillators": [
        ("Blinker", "Period-2 oscillator", """
...
***
...
"""),
        ("Toad", "Period-2 oscillator", """
.***
***.
"""),
        ("Beacon", "Period-2 oscillator", """
**..
*...
...*
..**
"""),
        ("Pulsar", "Period-3 oscillator", """
..***...***..
.............
*....*.*....*
*....*.*....*
*....*.*....*
..***...***..
.............
..***...***..
*....*.*....*
*....*.*....*
*....*.*....*
.............
..***...***..
"""),
    ],
    "Spaceships": [
        ("Glider", "Smallest spaceship, period-4", """
.*.
..*
***
"""),
        ("Lightweight Spaceship", "LWSS - Period-4 spaceship", """
*..*.
....*
*...*
.****
"""),
    ],
    "Methuselahs": [
        ("R-pentomino", "Famous methuselah that stabilizes after 1103 generations", """
.**
**.
.*.
"""),
        ("Diehard", "Dies after exactly 130 generations", """
......*.
**......
.*...***
"""),
        ("Acorn", "Takes 5206 generations to stabilize", """
.*.....
...*...
**..***
"""),
    ],
}


class PatternLibrary:
    """Manages a collection of patterns."""

    def __init__(self, storage_dir: Optional[str] = None) -> None:
        """Initialize pattern library.

        Args:
            storage_dir: Directory for pattern files (defaults to 'patterns',
                created on first save)
        """
        self.storage_dir = Path(storage_dir or "patterns")
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        for patterns in BUILTIN_PATTERNS.values():
            for name, description, picture in patterns:
                self.add_pattern(Pattern.from_string(name, picture, description))

    def add_pattern(self, pattern: Pattern) -> None:
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name, or None if not found."""
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get patterns organized by category.

        Returns:
            Dictionary mapping categories to pattern name lists
        """
        categories = {
            category: [name for name, _, _ in patterns]
            for category, patterns in BUILTIN_PATTERNS.items()
        }
        builtin = {name for names in categories.values() for name in names}
        categories["Custom"] = [name for name in self._patterns if name not in builtin]

        # Remove empty categories
        return {cat: names for cat, names in categories.items() if names}

    def save_pattern(self, pattern: Pattern, filename: Optional[str] = None) -> Path:
        """Save a pattern to disk as JSON.

        Args:
            pattern: Pattern to save
            filename: Optional filename (defaults to pattern name)

        Returns:
            Path of the written file
        """
        if filename is None:
            filename = f"{pattern.name.replace(' ', '_').lower()}.json"

        self.storage_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.storage_dir / filename
        with open(filepath, "w") as f:
            json.dump(pattern.to_dict(), f, indent=2)
        return filepath

    def load_pattern(self, filename: str) -> Pattern:
        """Load a pattern from disk and add it to the library.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format is invalid
        """
        filepath = self.storage_dir / filename

        with open(filepath, "r") as f:
            data = json.load(f)

        pattern = Pattern.from_dict(data)
        self.add_pattern(pattern)
        return pattern

    def load_all_patterns(self) -> int:
        """Load all patterns from the storage directory.

        Returns:
            Number of patterns loaded
        """
        loaded = 0
        if not self.storage_dir.is_dir():
            return loaded

        for filepath in sorted(self.storage_dir.glob("*.json")):
            try:
                self.load_pattern(filepath.name)
                loaded += 1
            except (ValueError, KeyError, TypeError) as e:
                logger.warning("Failed to load pattern from %s: %s", filepath.name, e)
        return loaded

    def save_grid_as_pattern(
        self,
        grid: Grid,
        name: str,
        description: str = "",
        filename: Optional[str] = None,
    ) -> Pattern:
        """Save a grid's living cells as a new pattern.

        Args:
            grid: Source grid
            name: Pattern name
            description: Optional description
            filename: Optional filename; the pattern is written to disk only if given

        Returns:
            Created Pattern instance
        """
        pattern = Pattern.from_grid(grid, name, description)
        self.add_pattern(pattern)

        if filename is not None:
            self.save_pattern(pattern, filename)

        return pattern
