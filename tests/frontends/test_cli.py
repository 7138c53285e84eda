"""Tests for the CLI frontend."""

import argparse
import json
from unittest.mock import patch

from lifelike.config import SimulationConfig
from lifelike.frontends.cli import (
    CLIAutomaton,
    config_from_args,
    create_parser,
    format_finish_reason,
    main,
    print_results,
    validate_args,
)


class TestCLIAutomaton:
    """Test cases for the CLI automaton runner."""

    def test_initialization(self):
        """Test CLI initialization."""
        cli = CLIAutomaton()
        assert cli.pattern_library is not None
        assert len(cli.pattern_library.list_patterns()) > 0
        assert cli.last_grid is None

    def test_initialization_with_pattern_dir(self, tmp_path):
        """Pattern files in the given directory are loaded."""
        (tmp_path / "dot.json").write_text(json.dumps({"name": "Dot", "cells": [[0, 0]]}))
        cli = CLIAutomaton(str(tmp_path))
        assert cli.pattern_library.get_pattern("Dot") is not None

    def test_show_generations(self, capsys):
        """Test printing a window of generations."""
        cli = CLIAutomaton()
        config = SimulationConfig(width=5, height=5, pattern="Blinker", start=1, generations=2)

        printed = cli.show_generations(config)
        output = capsys.readouterr().out

        assert printed == 2
        assert "Rule B3/S23 on 5x5 grid (bounded)" in output
        assert "Generation 0" not in output
        assert "Generation 1 (population 3):" in output
        assert "Generation 2 (population 3):" in output
        assert "..*.." in output
        assert ".***." in output

    def test_show_generations_large_grid(self, capsys):
        """Large grids are summarized instead of drawn."""
        cli = CLIAutomaton()
        config = SimulationConfig(width=100, height=90, seed=1, generations=1)
        cli.show_generations(config)
        assert "Grid too large to display (90x100)" in capsys.readouterr().out

    def test_run_simulation_random(self):
        """Test running simulation with random population."""
        cli = CLIAutomaton()
        config = SimulationConfig(width=10, height=10, population_rate=0.1, toroidal=True, max_generations=100)

        final_gen, reason, stats = cli.run_simulation(config)

        assert isinstance(final_gen, int)
        assert final_gen >= 0
        assert reason in ["extinction", "cycle", "max_generations"]
        assert "generation" in stats
        assert "population" in stats
        assert "duration_seconds" in stats
        assert cli.last_grid is not None

    def test_run_simulation_with_pattern(self, capsys):
        """Test running simulation with a specific pattern."""
        cli = CLIAutomaton()
        config = SimulationConfig(width=20, height=20, pattern="Blinker", max_generations=50)

        final_gen, reason, stats = cli.run_simulation(config, show_grid=True)
        output = capsys.readouterr().out

        assert final_gen == 2
        assert reason == "cycle"
        assert stats["initial_population"] == 3
        assert stats["cycle_length"] == 2
        assert "Initial grid:" in output
        assert "Final grid (generation 2):" in output

    def test_list_patterns(self, capsys):
        """Test listing patterns."""
        CLIAutomaton().list_patterns()
        output = capsys.readouterr().out

        assert "Available patterns:" in output
        assert "Spaceships:" in output
        assert "Glider: 3x3, 5 cells" in output

    def test_list_rules(self, capsys):
        """Test listing named rules."""
        CLIAutomaton().list_rules()
        output = capsys.readouterr().out
        assert "Life: B3/S23" in output
        assert "HighLife: B36/S23" in output


class TestCLIFunctions:
    """Test cases for module-level CLI functions."""

    def test_create_parser_defaults(self):
        """Test parser defaults."""
        args = create_parser().parse_args([])

        assert args.width == 20
        assert args.height == 20
        assert args.rule == "B3/S23"
        assert args.toroidal is False
        assert args.pattern is None
        assert args.pattern_row is None
        assert args.start == 0
        assert args.generations == 10
        assert args.run_until_stable is False

    def test_create_parser_options(self):
        """Test parsing options."""
        args = create_parser().parse_args(
            ["-W", "30", "-H", "15", "-r", "B36/S23", "-t", "--pattern", "Glider", "--start", "8", "-g", "3"]
        )
        config = config_from_args(args)

        assert config.width == 30
        assert config.height == 15
        assert config.rule == "B36/S23"
        assert config.toroidal is True
        assert config.pattern == "Glider"
        assert config.start == 8
        assert config.generations == 3

    def test_validate_args(self, capsys):
        """Test argument validation."""
        parser = create_parser()
        assert validate_args(parser.parse_args([]))

        assert not validate_args(parser.parse_args(["--width", "0"]))
        output = capsys.readouterr().out
        assert "Error: Invalid arguments:" in output
        assert "Width must be positive" in output

    def test_save_pattern_needs_run_until_stable(self, capsys):
        """Test that --save-pattern is rejected without a stabilising run."""
        parser = create_parser()
        assert not validate_args(parser.parse_args(["--save-pattern", "ash"]))
        assert "--save-pattern requires --run-until-stable" in capsys.readouterr().out

        assert validate_args(parser.parse_args(["--save-pattern", "ash", "--run-until-stable"]))

    def test_format_finish_reason(self):
        """Test formatting finish reasons."""
        assert format_finish_reason("extinction", {}) == "Extinction - all cells died"
        assert (
            format_finish_reason("cycle", {"cycle_length": 2, "cycle_start_generation": 5})
            == "Cycle detected - length 2, started at generation 5"
        )
        assert format_finish_reason("max_generations", {"generation": 100}) == "Maximum generations reached (100)"
        assert format_finish_reason("bogus", {}) == "Unknown reason: bogus"

    def test_print_results(self, capsys):
        """Test printing results in compact and verbose form."""
        stats = {
            "rule": "B3/S23",
            "topology": "bounded",
            "grid_size": (10, 10),
            "initial_population": 3,
            "population": 3,
            "population_density": 0.03,
            "population_change_rate": 0.0,
            "duration_seconds": 0.01,
            "generations_per_second": 200,
            "bounding_box": (4, 5, 6, 5),
            "bounding_box_size": (3, 1),
            "cycle_length": 2,
            "cycle_start_generation": 0,
        }

        print_results(2, "cycle", stats, verbose=False)
        compact = capsys.readouterr().out
        assert "Simulation completed after 2 generations" in compact
        assert "Population: 3 -> 3" in compact

        print_results(2, "cycle", stats, verbose=True)
        verbose = capsys.readouterr().out
        assert "Detailed Statistics:" in verbose
        assert "Rule: B3/S23 (bounded)" in verbose
        assert "Bounding box: (4, 5) to (6, 5) [3x1]" in verbose


class TestMain:
    """Test cases for the main entry point."""

    def test_list_patterns(self, capsys):
        """Test --list-patterns."""
        assert main(["--list-patterns"]) == 0
        assert "Glider" in capsys.readouterr().out

    def test_list_rules(self, capsys):
        """Test --list-rules."""
        assert main(["--list-rules"]) == 0
        assert "Seeds: B2/S" in capsys.readouterr().out

    def test_show_generations(self, capsys):
        """Test the default generation-printing mode."""
        assert main(["-W", "5", "-H", "5", "--pattern", "Blinker", "-g", "2"]) == 0
        output = capsys.readouterr().out
        assert "Generation 0 (population 3):" in output
        assert "Generation 1 (population 3):" in output
        assert "Generation 2" not in output

    def test_run_until_stable(self, capsys):
        """Test --run-until-stable on a still life."""
        assert main(["-W", "8", "-H", "8", "--pattern", "Block", "--run-until-stable"]) == 0
        output = capsys.readouterr().out
        assert "Cycle detected - length 1, started at generation 0" in output

    def test_save_pattern(self, tmp_path, capsys):
        """Test saving the final grid as a pattern."""
        args = [
            "-W", "8", "-H", "8", "--pattern", "Beehive", "--run-until-stable",
            "--pattern-dir", str(tmp_path), "--save-pattern", "Final Hive",
        ]
        assert main(args) == 0
        assert "Pattern saved to:" in capsys.readouterr().out

        data = json.loads((tmp_path / "final_hive.json").read_text())
        assert data["name"] == "Final Hive"
        assert len(data["cells"]) == 6

    def test_invalid_arguments(self, capsys):
        """Test that invalid arguments return an error code."""
        assert main(["--generations", "0"]) == 1
        assert "Generations must be positive" in capsys.readouterr().out

    def test_save_pattern_without_run(self, capsys, tmp_path):
        """Test that --save-pattern alone fails instead of being ignored."""
        assert main(["--save-pattern", "ash", "--pattern-dir", str(tmp_path)]) == 1
        assert "--save-pattern requires --run-until-stable" in capsys.readouterr().out
        assert list(tmp_path.iterdir()) == []

    def test_bad_rule(self, capsys):
        """Test that a malformed rule is reported."""
        assert main(["--rule", "B3/S23extra"]) == 1
        assert "Error: Invalid rule string" in capsys.readouterr().out

    def test_out_of_range_rule(self, capsys):
        """Test that a rule with a 9 is reported."""
        assert main(["--rule", "B9/S"]) == 1
        assert "Error: birth count 9 is outside 0-8" in capsys.readouterr().out

    def test_unknown_pattern(self, capsys):
        """Test that an unknown pattern is reported with the alternatives."""
        assert main(["--pattern", "Nope"]) == 1
        output = capsys.readouterr().out
        assert "Error: Pattern 'Nope' not found" in output
        assert "Available patterns:" in output

    def test_keyboard_interrupt(self, capsys):
        """Test that an interrupt returns an error code."""
        with patch.object(CLIAutomaton, "show_generations", side_effect=KeyboardInterrupt):
            assert main([]) == 1
        assert "Simulation interrupted by user" in capsys.readouterr().out

    def test_config_from_args_namespace(self):
        """Test building a config from a hand-made namespace."""
        args = argparse.Namespace(
            width=4, height=3, rule="B/S", toroidal=False, population=0.0, pattern=None,
            pattern_row=None, pattern_col=None, seed=None, start=0, generations=1, max_generations=5,
        )
        config = config_from_args(args)
        assert config.build_engine().current.shape == (3, 4)
