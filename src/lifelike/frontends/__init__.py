"""Frontend interfaces for the automaton engine."""

from .cli import CLIAutomaton

__all__ = ["CLIAutomaton"]
