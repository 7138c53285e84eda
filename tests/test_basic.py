"""Basic tests for the lifelike package."""

import lifelike
from lifelike import GridAutomatonEngine, Grid, PatternLibrary, Topology, parse_rule


def test_public_api():
    """Test the names exported at package level."""
    for name in lifelike.__all__:
        assert hasattr(lifelike, name)
    assert lifelike.__version__ == "0.1.0"


def test_engine_creation():
    """Test basic engine creation from raw data."""
    engine = GridAutomatonEngine([[0, 0, 0], [1, 1, 1], [0, 0, 0]], "B3/S23")
    assert engine.current.population == 3
    assert engine.rule == parse_rule("B3/S23")
    assert engine.topology is Topology.BOUNDED


def test_pattern_library():
    """Test pattern library has some patterns."""
    library = PatternLibrary()
    patterns = library.list_patterns()
    assert len(patterns) > 0
    assert "Glider" in patterns


def test_blinker_pattern():
    """Test the blinker pattern oscillates correctly."""
    grid = Grid.empty(5, 5)
    for row in (1, 2, 3):
        grid = grid.with_cell(row, 2, True)

    engine = GridAutomatonEngine(grid)
    initial, first, second = engine.take(3)

    assert initial is grid
    assert first.population == 3
    assert first.get_cell(2, 1) is True
    assert first.get_cell(2, 2) is True
    assert first.get_cell(2, 3) is True

    assert second == grid
