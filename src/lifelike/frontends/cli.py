"""Command-line interface for Life-like cellular automata."""

import argparse
import logging
import sys
import time
from typing import Optional, Tuple

from ..config import SimulationConfig
from ..core.errors import AutomatonError, PatternNotFoundError
from ..core.grid import Grid
from ..core.patterns import PatternLibrary
from ..core.rules import NAMED_RULES
from ..core.simulation import Simulation

logger = logging.getLogger(__name__)


class CLIAutomaton:
    """Command-line interface for running automaton simulations."""

    def __init__(self, pattern_dir: Optional[str] = None):
        """Initialize CLI interface.

        Args:
            pattern_dir: Optional directory of JSON pattern files to load
        """
        self.pattern_library = PatternLibrary(pattern_dir)
        self.last_grid: Optional[Grid] = None
        if pattern_dir:
            loaded = self.pattern_library.load_all_patterns()
            logger.debug("Loaded %d patterns from %s", loaded, pattern_dir)

    def show_generations(self, config: SimulationConfig, max_size: int = 80) -> int:
        """Print generations ``start`` through ``start + generations - 1``.

        Args:
            config: Run configuration
            max_size: Largest dimension printed as a picture

        Returns:
            Number of grids printed
        """
        engine = config.build_engine(self.pattern_library)
        print(
            f"Rule {engine.rule} on {config.height}x{config.width} grid "
            f"({engine.topology.value})"
        )

        printed = 0
        for offset, grid in enumerate(engine.window(config.start, config.start + config.generations)):
            generation = config.start + offset
            print(f"\nGeneration {generation} (population {grid.population}):")
            print(self._format_grid(grid, max_size))
            printed += 1
        return printed

    def run_simulation(
        self, config: SimulationConfig, show_grid: bool = False
    ) -> Tuple[int, str, dict]:
        """Run a simulation until it stabilises.

        Args:
            config: Run configuration
            show_grid: Show initial and final grid states

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        simulation = Simulation(config.build_engine(self.pattern_library))
        initial_population = simulation.population

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(simulation.grid))

        start_time = time.time()
        final_generation, reason = simulation.run_until_stable(config.max_generations)
        duration = time.time() - start_time

        stats = simulation.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population

        if show_grid and reason != "extinction":
            print(f"\nFinal grid (generation {final_generation}):")
            print(self._format_grid(simulation.grid))

        self.last_grid = simulation.grid
        return final_generation, reason, stats

    def _format_grid(self, grid: Grid, max_size: int = 80) -> str:
        """Format grid for display, truncating if too large."""
        if grid.width > max_size or grid.height > max_size:
            return f"Grid too large to display ({grid.height}x{grid.width})"

        return str(grid)

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                rows, cols = pattern.get_size()
                print(f"  {pattern_name}: {rows}x{cols}, {len(pattern.cells)} cells")
                if pattern.description:
                    print(f"    {pattern.description}")

    def list_rules(self) -> None:
        """List the well-known rules."""
        print("Named rules:")
        for name, rule in NAMED_RULES.items():
            print(f"  {name}: {rule}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="Evolve Life-like cellular automata from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the first 5 generations of a glider on a 10x10 torus
  lifelike-cli -W 10 -H 10 --pattern Glider --toroidal -g 5

  # Print generations 8 to 10 of a random HighLife grid
  lifelike-cli --rule B36/S23 --seed 42 --start 8 -g 3

  # Run the R-pentomino until it stabilises
  lifelike-cli -W 120 -H 120 --pattern R-pentomino --run-until-stable -v

  # List available patterns and rules
  lifelike-cli --list-patterns
  lifelike-cli --list-rules
        """,
    )

    # Grid configuration
    parser.add_argument("-W", "--width", type=int, default=20, help="Grid width (default: 20)")

    parser.add_argument("-H", "--height", type=int, default=20, help="Grid height (default: 20)")

    parser.add_argument(
        "-r",
        "--rule",
        type=str,
        default="B3/S23",
        help="Rule as B<digits>/S<digits> or a named rule (default: B3/S23)",
    )

    parser.add_argument(
        "-t",
        "--toroidal",
        action="store_true",
        help="Enable toroidal (wraparound) edges",
    )

    parser.add_argument(
        "-p",
        "--population",
        type=float,
        default=0.2,
        help="Initial random population rate 0.0-1.0 (default: 0.2)",
    )

    parser.add_argument("--seed", type=int, help="Random seed for reproducible grids")

    # Pattern configuration
    parser.add_argument(
        "--pattern",
        type=str,
        help="Load a specific pattern instead of random population",
    )

    parser.add_argument(
        "--pattern-row",
        type=int,
        help="Row offset for pattern placement (default: centered)",
    )

    parser.add_argument(
        "--pattern-col",
        type=int,
        help="Column offset for pattern placement (default: centered)",
    )

    parser.add_argument(
        "--pattern-dir",
        type=str,
        help="Directory of JSON pattern files to load",
    )

    # Generation window
    parser.add_argument(
        "--start",
        type=int,
        default=0,
        help="First generation to print (default: 0)",
    )

    parser.add_argument(
        "-g",
        "--generations",
        type=int,
        default=10,
        help="Number of generations to print (default: 10)",
    )

    # Run-until-stable mode
    parser.add_argument(
        "--run-until-stable",
        action="store_true",
        help="Run until extinction, a cycle, or --max-generations instead of printing generations",
    )

    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=1000,
        help="Maximum generations in --run-until-stable mode (default: 1000)",
    )

    parser.add_argument(
        "--show-grid",
        action="store_true",
        help="Display initial and final grid states in --run-until-stable mode",
    )

    parser.add_argument(
        "--save-pattern",
        type=str,
        help="Save the final grid of --run-until-stable as a JSON pattern with this name",
    )

    # Output configuration
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="List named rules and exit",
    )

    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Build a SimulationConfig from parsed arguments."""
    return SimulationConfig(
        width=args.width,
        height=args.height,
        rule=args.rule,
        toroidal=args.toroidal,
        population_rate=args.population,
        pattern=args.pattern,
        pattern_row=args.pattern_row,
        pattern_col=args.pattern_col,
        seed=args.seed,
        start=args.start,
        generations=args.generations,
        max_generations=args.max_generations,
    )


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display."""
    if reason == "extinction":
        return "Extinction - all cells died"
    elif reason == "cycle":
        cycle_len = stats.get("cycle_length", 0)
        cycle_start = stats.get("cycle_start_generation", 0)
        return f"Cycle detected - length {cycle_len}, started at generation {cycle_start}"
    elif reason == "max_generations":
        return f"Maximum generations reached ({stats.get('generation', 0)})"
    else:
        return f"Unknown reason: {reason}"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Rule: {stats['rule']} ({stats['topology']})")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")
        if "duration_seconds" in stats:
            print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
            print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")

        if stats["bounding_box"]:
            bbox = stats["bounding_box"]
            bbox_size = stats["bounding_box_size"]
            print(
                f"  Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]}) "
                f"[{bbox_size[0]}x{bbox_size[1]}]"
            )
    else:
        print(
            "Population: {} -> {}, "
            "Duration: {:.3f}s, "
            "Speed: {:.0f} gen/s".format(
                stats["initial_population"],
                stats["population"],
                stats.get("duration_seconds", 0),
                stats.get("generations_per_second", 0),
            )
        )


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Returns:
        True if arguments are valid
    """
    errors = config_from_args(args).validate()

    if args.save_pattern and not args.run_until_stable:
        errors.append("--save-pattern requires --run-until-stable")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[list] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cli = CLIAutomaton(args.pattern_dir)

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if args.list_rules:
        cli.list_rules()
        return 0

    if not validate_args(args):
        return 1

    config = config_from_args(args)

    try:
        if args.run_until_stable:
            final_generation, reason, stats = cli.run_simulation(config, show_grid=args.show_grid)
            print_results(final_generation, reason, stats, args.verbose)

            if args.save_pattern:
                library = cli.pattern_library
                pattern = library.save_grid_as_pattern(
                    cli.last_grid,
                    args.save_pattern,
                    description=f"Generation {final_generation} under {stats['rule']}",
                )
                path = library.save_pattern(pattern)
                print(f"Pattern saved to: {path}")
        else:
            cli.show_generations(config)

        return 0

    except PatternNotFoundError as e:
        print(f"Error: {e}")
        available = cli.pattern_library.list_patterns()
        print(f"Available patterns: {', '.join(available)}")
        return 1
    except AutomatonError as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
