"""Life-like cellular automata: Conway's Game of Life and the B/S rule family."""

__version__ = "0.1.0"

from .core.grid import Grid, Topology
from .core.rules import Rule, parse_rule, LIFE
from .core.engine import GridAutomatonEngine
from .core.errors import AutomatonError, InvalidGridError, InvalidRuleError, RuleParseError
from .core.patterns import Pattern, PatternLibrary
from .core.simulation import Simulation

__all__ = [
    "Grid",
    "Topology",
    "Rule",
    "parse_rule",
    "LIFE",
    "GridAutomatonEngine",
    "AutomatonError",
    "InvalidGridError",
    "InvalidRuleError",
    "RuleParseError",
    "Pattern",
    "PatternLibrary",
    "Simulation",
]
