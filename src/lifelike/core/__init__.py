"""Core cellular automata logic."""

from .errors import (
    AutomatonError,
    InvalidGridError,
    InvalidRuleError,
    PatternNotFoundError,
    RuleParseError,
)
from .grid import Grid, Topology, count_neighbors
from .rules import Rule, parse_rule, resolve_rule, LIFE, NAMED_RULES
from .engine import GridAutomatonEngine
from .patterns import Pattern, PatternLibrary
from .simulation import Simulation

__all__ = [
    "AutomatonError",
    "InvalidGridError",
    "InvalidRuleError",
    "PatternNotFoundError",
    "RuleParseError",
    "Grid",
    "Topology",
    "count_neighbors",
    "Rule",
    "parse_rule",
    "resolve_rule",
    "LIFE",
    "NAMED_RULES",
    "GridAutomatonEngine",
    "Pattern",
    "PatternLibrary",
    "Simulation",
]
