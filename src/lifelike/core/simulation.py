"""Simulation tracking on top of the evolution engine."""

from typing import Any, Deque, Dict, List, Tuple
from collections import deque
import logging

import numpy as np

from .engine import GridAutomatonEngine
from .grid import Grid

logger = logging.getLogger(__name__)

MAX_REMEMBERED_STATES = 1000


class Simulation:
    """Runs an engine and keeps statistics about the run.

    Tracks the generation number, recent population history and detects
    cycles by remembering hashes of recent grids. The engine itself holds no
    history; all of it lives here.
    """

    def __init__(self, engine: GridAutomatonEngine) -> None:
        """Initialize the simulation.

        Args:
            engine: A freshly built engine (its current grid is generation 0)
        """
        self.engine = engine
        self._grid = engine.current
        self._generation = engine.generation
        self._population_history: Deque[int] = deque(maxlen=100)
        self._state_history: Deque[Tuple[bytes, int]] = deque()
        self._seen_states: Dict[bytes, int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()
        self._check_for_cycles()

    @property
    def grid(self) -> Grid:
        """Grid at the current generation."""
        return self._grid

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def population(self) -> int:
        return self._grid.population

    @property
    def population_history(self) -> List[int]:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> Grid:
        """Advance the simulation by one generation."""
        self._grid = self.engine.step()
        self._generation += 1

        self._update_population_history()
        self._check_for_cycles()
        return self._grid

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def _check_for_cycles(self) -> None:
        """Record the current grid and flag a cycle if it was seen before."""
        if self._cycle_detected:
            return

        current_state = self._grid.cells.tobytes()

        if current_state in self._seen_states:
            first_occurrence = self._seen_states[current_state]
            self._cycle_detected = True
            self._cycle_length = self._generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            logger.debug(
                "Cycle of length %d detected at generation %d",
                self._cycle_length,
                self._generation,
            )
            return

        self._seen_states[current_state] = self._generation
        self._state_history.append((current_state, self._generation))

        # Forget the oldest states to bound memory
        if len(self._state_history) > MAX_REMEMBERED_STATES:
            old_state, old_generation = self._state_history.popleft()
            if self._seen_states.get(old_state) == old_generation:
                del self._seen_states[old_state]

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Step until extinction, a cycle, or ``max_generations`` more steps.

        Returns (generation, reason) with reason one of ``"extinction"``,
        ``"cycle"`` or ``"max_generations"``.
        """
        for _ in range(max_generations):
            self.step()

            if self.population == 0:
                return self._generation, "extinction"
            if self._cycle_detected:
                return self._generation, "cycle"

        return self._generation, "max_generations"

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Mean population change per generation over the last ``window_size`` grids."""
        recent = list(self._population_history)[-window_size:]
        if len(recent) < 2:
            return 0.0
        return float(np.mean(np.diff(recent)))

    def _cycle_info(self) -> Dict[str, Any]:
        return {
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
        }

    def save_state(self) -> Dict[str, Any]:
        """Snapshot the run as a JSON-compatible dictionary."""
        return {
            "generation": self._generation,
            "grid": self._grid.to_list(),
            "rule": str(self.engine.rule),
            "topology": self.engine.topology.value,
            "population_history": self.population_history,
            **self._cycle_info(),
        }

    def load_state(self, state: Dict[str, Any]) -> None:
        """Resume from a ``save_state()`` snapshot, rebuilding the engine.

        Raises:
            ValueError: If the saved grid has a different shape
        """
        grid = Grid(state["grid"])
        if grid.shape != self._grid.shape:
            raise ValueError(f"Grid size mismatch: saved {grid.shape}, current {self._grid.shape}")

        self.engine = GridAutomatonEngine(grid, state["rule"], state["topology"])
        self._grid = self.engine.current
        self._generation = state["generation"]
        self._population_history = deque(state["population_history"], maxlen=100)
        self._cycle_detected = state["cycle_detected"]
        self._cycle_length = state["cycle_length"]
        self._cycle_start_generation = state["cycle_start_generation"]

        # Grid hashes are not part of the snapshot
        self._state_history.clear()
        self._seen_states.clear()
        self._check_for_cycles()

    def get_statistics(self) -> Dict[str, Any]:
        height, width = self._grid.shape
        bbox = self._grid.get_bounding_box()
        if bbox is None:
            bbox_size = (0, 0)
        else:
            bbox_size = (bbox[2] - bbox[0] + 1, bbox[3] - bbox[1] + 1)

        return {
            "generation": self._generation,
            "population": self.population,
            "population_density": self.population / (height * width),
            "population_change_rate": self.get_population_change_rate(),
            "grid_size": (height, width),
            "rule": str(self.engine.rule),
            "topology": self.engine.topology.value,
            "bounding_box": bbox,
            "bounding_box_size": bbox_size,
            "bounding_box_area": bbox_size[0] * bbox_size[1],
            **self._cycle_info(),
        }
