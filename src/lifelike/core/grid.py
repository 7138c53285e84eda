"""Grid data structure for cellular automata."""

from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

import numpy as np
import torch
import torch.nn.functional as F

from .errors import InvalidGridError

ALIVE_CHARS = "*O#1"
DEAD_CHARS = ".0 _"

# 3x3 Moore neighborhood, center excluded
NEIGHBOR_KERNEL = torch.tensor(
    [[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32
).unsqueeze(0).unsqueeze(0)


class Topology(Enum):
    """How neighborhoods of edge cells are resolved."""

    BOUNDED = "bounded"
    TOROIDAL = "toroidal"

    @classmethod
    def parse(cls, value: Union["Topology", str, bool]) -> "Topology":
        """Accept a Topology, its name, or a wrap-edges flag."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.TOROIDAL if value else cls.BOUNDED
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown topology {value!r}, expected 'bounded' or 'toroidal'")


def _as_cell_array(data) -> np.ndarray:
    """Validate raw cell data and return it as a 2D int8 array."""
    if isinstance(data, Grid):
        return data.cells

    if isinstance(data, np.ndarray):
        array = data
    else:
        try:
            rows = [list(row) for row in data]
        except TypeError:
            raise InvalidGridError("Grid data must be a sequence of rows")

        widths = {len(row) for row in rows}
        if len(widths) > 1:
            raise InvalidGridError(f"Grid is not rectangular, row lengths: {sorted(widths)}")
        try:
            array = np.array(rows)
        except ValueError as e:
            raise InvalidGridError(f"Grid cells must be 0 or 1: {e}") from e

    if array.ndim != 2:
        raise InvalidGridError(f"Grid must be two-dimensional, got {array.ndim} dimensions")
    if array.size == 0:
        raise InvalidGridError(f"Grid must have at least one cell, got shape {array.shape}")
    if array.dtype.kind not in "biuf":
        raise InvalidGridError(f"Grid cells must be 0 or 1, got dtype {array.dtype}")
    if not np.all((array == 0) | (array == 1)):
        bad = np.unique(array[(array != 0) & (array != 1)])
        raise InvalidGridError(f"Grid cells must be 0 or 1, found {bad.tolist()}")

    return array.astype(np.int8)


class Grid:
    """Immutable 2D grid of binary cells (0 dead, 1 alive).

    Cells are indexed as [row, col]. The backing numpy array is read-only, so a
    Grid can be kept as a snapshot while the automaton moves on.
    """

    __slots__ = ("_cells",)

    def __init__(self, data) -> None:
        """Initialize a grid from cell values.

        Args:
            data: Nested sequence or 2D array of 0/1 (or bool) values

        Raises:
            InvalidGridError: If the data is not a non-empty rectangular binary matrix
        """
        cells = _as_cell_array(data)
        if isinstance(data, Grid):
            self._cells = cells
            return
        cells = np.array(cells, dtype=np.int8, copy=True)
        cells.setflags(write=False)
        self._cells = cells

    @classmethod
    def empty(cls, height: int, width: int) -> "Grid":
        """Create an all-dead grid."""
        if height <= 0 or width <= 0:
            raise InvalidGridError(f"Grid dimensions must be positive, got {height}x{width}")
        return cls(np.zeros((height, width), dtype=np.int8))

    @classmethod
    def random(
        cls, height: int, width: int, probability: float = 0.1, seed: Optional[int] = None
    ) -> "Grid":
        """Randomly populate a new grid.

        Args:
            height: Number of rows
            width: Number of columns
            probability: Chance each cell will be alive (0.0 to 1.0)
            seed: Optional seed for reproducible grids

        Returns:
            New Grid instance
        """
        if height <= 0 or width <= 0:
            raise InvalidGridError(f"Grid dimensions must be positive, got {height}x{width}")
        rng = np.random.default_rng(seed)
        return cls((rng.random((height, width)) < probability).astype(np.int8))

    @classmethod
    def from_string(cls, text: str) -> "Grid":
        """Create a grid from a picture such as '.*.\\n.*.\\n.*.'.

        Alive cells are any of '*', 'O', '#', '1'; dead cells any of '.', '0',
        ' ', '_'. Blank leading and trailing lines are ignored.
        """
        rows = []
        for line in text.strip("\n").splitlines():
            row = []
            for char in line:
                if char in ALIVE_CHARS:
                    row.append(1)
                elif char in DEAD_CHARS:
                    row.append(0)
                else:
                    raise InvalidGridError(f"Unexpected cell character {char!r}")
            rows.append(row)
        return cls(rows)

    @property
    def cells(self) -> np.ndarray:
        """Read-only cell array of shape (height, width)."""
        return self._cells

    @property
    def height(self) -> int:
        return int(self._cells.shape[0])

    @property
    def width(self) -> int:
        return int(self._cells.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (height, width)."""
        return (self.height, self.width)

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._cells))

    def get_cell(self, row: int, col: int) -> bool:
        """Get the state of a cell.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Coordinates ({row}, {col}) out of bounds")
        return bool(self._cells[row, col])

    def with_cell(self, row: int, col: int, alive: bool) -> "Grid":
        """Return a copy of this grid with one cell changed.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Coordinates ({row}, {col}) out of bounds")
        cells = self._cells.copy()
        cells[row, col] = 1 if alive else 0
        return Grid(cells)

    def neighbor_count(self, row: int, col: int, topology: Topology = Topology.BOUNDED) -> int:
        """Count living neighbors of one cell by direct summation.

        Args:
            row: Row coordinate
            col: Column coordinate
            topology: Edge handling

        Returns:
            Number of living neighbors (0-8)
        """
        count = 0
        for dr in [-1, 0, 1]:
            for dc in [-1, 0, 1]:
                if dr == 0 and dc == 0:
                    continue

                nr, nc = row + dr, col + dc

                if topology is Topology.TOROIDAL:
                    count += self._cells[nr % self.height, nc % self.width]
                elif 0 <= nr < self.height and 0 <= nc < self.width:
                    count += self._cells[nr, nc]

        return int(count)

    def living_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield (row, col) coordinates of living cells."""
        rows, cols = np.nonzero(self._cells)
        for row, col in zip(rows, cols):
            yield (int(row), int(col))

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_row, min_col, max_row, max_col) or None if no living cells
        """
        rows, cols = np.nonzero(self._cells)
        if len(rows) == 0:
            return None

        return (int(rows.min()), int(cols.min()), int(rows.max()), int(cols.max()))

    def to_list(self) -> List[List[int]]:
        """Convert grid to nested list for serialization."""
        return self._cells.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __hash__(self) -> int:
        return hash((self.shape, self._cells.tobytes()))

    def __deepcopy__(self, memo) -> "Grid":
        return Grid(self._cells)

    def __repr__(self) -> str:
        return f"Grid(height={self.height}, width={self.width}, population={self.population})"

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        return "\n".join("".join("*" if cell else "." for cell in row) for row in self._cells)


def count_neighbors(grid: Grid, topology: Topology = Topology.BOUNDED) -> np.ndarray:
    """Count neighbors for all cells with a 3x3 convolution.

    Args:
        grid: Grid to count
        topology: Zero padding for BOUNDED, circular padding for TOROIDAL

    Returns:
        int8 array of shape (height, width) with counts 0-8
    """
    source = torch.from_numpy(grid.cells.astype(np.float32)).unsqueeze(0).unsqueeze(0)

    if topology is Topology.TOROIDAL:
        padded = F.pad(source, (1, 1, 1, 1), mode="circular")
        neighbors = F.conv2d(padded, NEIGHBOR_KERNEL)
    else:
        neighbors = F.conv2d(source, NEIGHBOR_KERNEL, padding=1)

    return neighbors[0, 0].round().to(torch.int8).numpy()
