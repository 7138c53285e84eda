#!/usr/bin/env python3
"""
Example usage of the lifelike package.
"""

from lifelike import GridAutomatonEngine, PatternLibrary, Simulation, Topology


def main():
    """Demonstrate programmatic usage of the lifelike package."""
    library = PatternLibrary()
    glider = library.get_pattern("Glider")
    grid = glider.to_grid(10, 10, offset_row=1, offset_col=1)

    # Generations 0-4 of a glider on a torus
    engine = GridAutomatonEngine(grid, "B3/S23", Topology.TOROIDAL)
    for generation, state in enumerate(engine.take(5)):
        print(f"Generation {generation} (population {state.population}):")
        print(state)
        print()

    # Generations 8-10 of the same seed under HighLife
    engine = GridAutomatonEngine(grid, "HighLife", Topology.TOROIDAL)
    for generation, state in zip(range(8, 11), engine.window(8, 11)):
        print(f"HighLife generation {generation}: population {state.population}")

    # Run until the glider wraps around and repeats
    simulation = Simulation(GridAutomatonEngine(grid, topology=Topology.TOROIDAL))
    final_generation, reason = simulation.run_until_stable(max_generations=200)
    print(f"\nStopped at generation {final_generation}: {reason}")

    stats = simulation.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
