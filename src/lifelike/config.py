"""Run configuration for the automaton engine."""

from dataclasses import dataclass
from typing import List, Optional
import logging

from .core.engine import GridAutomatonEngine
from .core.grid import Grid, Topology
from .core.errors import PatternNotFoundError
from .core.patterns import PatternLibrary
from .core.rules import resolve_rule

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""

    width: int = 20
    height: int = 20
    rule: str = "B3/S23"
    toroidal: bool = False
    population_rate: float = 0.2
    pattern: Optional[str] = None
    pattern_row: Optional[int] = None
    pattern_col: Optional[int] = None
    seed: Optional[int] = None
    start: int = 0
    generations: int = 10
    max_generations: int = 1000

    @property
    def topology(self) -> Topology:
        return Topology.parse(self.toroidal)

    def validate(self) -> List[str]:
        """Check the configuration.

        Returns:
            List of problems, empty if the configuration is usable
        """
        errors = []

        if self.width <= 0:
            errors.append("Width must be positive")

        if self.height <= 0:
            errors.append("Height must be positive")

        if not 0.0 <= self.population_rate <= 1.0:
            errors.append("Population rate must be between 0.0 and 1.0")

        if self.start < 0:
            errors.append("Start generation must be non-negative")

        if self.generations <= 0:
            errors.append("Generations must be positive")

        if self.max_generations <= 0:
            errors.append("Max generations must be positive")

        if self.pattern_row is not None and self.pattern_row < 0:
            errors.append("Pattern row offset must be non-negative")

        if self.pattern_col is not None and self.pattern_col < 0:
            errors.append("Pattern column offset must be non-negative")

        return errors

    def build_initial_grid(self, library: Optional[PatternLibrary] = None) -> Grid:
        """Build generation 0 from the named pattern or a random population.

        Raises:
            PatternNotFoundError: If the pattern is not in the library
        """
        if self.pattern is None:
            logger.debug(
                "Random %dx%d grid (rate %.2f, seed %s)",
                self.height,
                self.width,
                self.population_rate,
                self.seed,
            )
            return Grid.random(self.height, self.width, self.population_rate, self.seed)

        library = library or PatternLibrary()
        pattern = library.get_pattern(self.pattern)
        if pattern is None:
            raise PatternNotFoundError(f"Pattern '{self.pattern}' not found")

        # Center on any axis without an explicit offset
        center_row, center_col = pattern.centered_offset(self.height, self.width)
        offset_row = center_row if self.pattern_row is None else self.pattern_row
        offset_col = center_col if self.pattern_col is None else self.pattern_col
        logger.debug("Placing pattern '%s' at (%d, %d)", self.pattern, offset_row, offset_col)
        return pattern.to_grid(self.height, self.width, offset_row, offset_col)

    def build_engine(self, library: Optional[PatternLibrary] = None) -> GridAutomatonEngine:
        """Build an engine for this configuration.

        Raises:
            RuleParseError: If the rule string is malformed
            InvalidRuleError: If the rule has counts outside 0-8
            PatternNotFoundError: If the pattern is not in the library
        """
        rule = resolve_rule(self.rule)
        return GridAutomatonEngine(self.build_initial_grid(library), rule, self.topology)
