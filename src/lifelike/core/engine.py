"""Evolution engine for Life-like cellular automata."""

from itertools import islice
from typing import Iterator, List, Union
import logging

from .grid import Grid, Topology, count_neighbors
from .rules import LIFE, Rule, resolve_rule

logger = logging.getLogger(__name__)


class GridAutomatonEngine:
    """Produces the successive generations of a grid under a birth/survival rule.

    The engine is a lazy, unbounded iterator. The first element is the initial
    grid (generation 0), each later element is computed from the previous one
    only when requested. It keeps no history; restart by building a new engine.

    Example:
        >>> engine = GridAutomatonEngine([[0, 1, 0], [0, 1, 0], [0, 1, 0]], "B3/S23")
        >>> [grid.population for grid in engine.take(3)]
        [3, 3, 3]
    """

    def __init__(
        self,
        initial,
        rule: Union[Rule, str] = LIFE,
        topology: Union[Topology, str, bool] = Topology.BOUNDED,
    ) -> None:
        """Initialize the engine.

        Args:
            initial: Initial Grid, or raw 2D 0/1 data
            rule: Rule instance, rule string ('B3/S23') or a named rule ('HighLife')
            topology: Topology, 'bounded'/'toroidal', or a wrap-edges flag

        Raises:
            InvalidGridError: If the initial grid is not rectangular and binary
            InvalidRuleError: If the rule has counts outside 0-8
            RuleParseError: If a rule string is malformed
        """
        self._current = initial if isinstance(initial, Grid) else Grid(initial)
        self._rule = resolve_rule(rule)
        self._topology = Topology.parse(topology)
        self._birth_table, self._survive_table = self._rule.lookup_tables()
        self._generation = 0
        self._started = False
        self._steps_computed = 0

        logger.debug(
            "Engine created: %dx%d grid, rule %s, %s topology",
            self._current.height,
            self._current.width,
            self._rule,
            self._topology.value,
        )

    @property
    def rule(self) -> Rule:
        return self._rule

    @property
    def topology(self) -> Topology:
        return self._topology

    @property
    def current(self) -> Grid:
        """The most recent grid (the initial grid until the engine advances)."""
        return self._current

    @property
    def generation(self) -> int:
        """Generation number of the current grid."""
        return self._generation

    @property
    def steps_computed(self) -> int:
        """How many evolution steps this engine has computed."""
        return self._steps_computed

    def next_generation(self, grid: Grid) -> Grid:
        """Compute the generation after ``grid`` without touching engine state.

        All cells update simultaneously from the read-only input snapshot.

        Args:
            grid: Current grid

        Returns:
            New Grid for the next generation
        """
        neighbor_counts = count_neighbors(grid, self._topology)
        alive = grid.cells == 1

        # Birth: dead cell whose count is in the birth set
        born = ~alive & self._birth_table[neighbor_counts]

        # Survival: live cell whose count is in the survival set
        survives = alive & self._survive_table[neighbor_counts]

        return Grid(born | survives)

    def step(self) -> Grid:
        """Advance the engine by one generation and return the new grid."""
        self._current = self.next_generation(self._current)
        self._generation += 1
        self._steps_computed += 1
        self._started = True
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Generation %d: population %d", self._generation, self._current.population)
        return self._current

    def __iter__(self) -> Iterator[Grid]:
        return self

    def __next__(self) -> Grid:
        if not self._started:
            self._started = True
            return self._current
        return self.step()

    def take(self, count: int) -> List[Grid]:
        """Pull the next ``count`` grids from the sequence."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return list(islice(self, count))

    def window(self, start: int, stop: int) -> List[Grid]:
        """Pull generations ``start`` up to (not including) ``stop``.

        Generation numbers are absolute, so this only works forward from the
        engine's position; earlier generations are gone.

        Raises:
            ValueError: If the window is empty or already passed
        """
        if start < 0 or stop < start:
            raise ValueError(f"Invalid window [{start}, {stop})")

        # The next element yielded is the current grid if the sequence hasn't
        # started yet, otherwise the one after it
        next_index = self._generation + 1 if self._started else self._generation
        if start < next_index:
            raise ValueError(
                f"Generation {start} already consumed (next available is {next_index})"
            )
        return list(islice(self, start - next_index, stop - next_index))

    def __repr__(self) -> str:
        return (
            f"GridAutomatonEngine(rule={self._rule}, topology={self._topology.value}, "
            f"generation={self._generation}, shape={self._current.shape})"
        )
