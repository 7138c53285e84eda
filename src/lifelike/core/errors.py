"""Exceptions raised by the automaton core."""


class AutomatonError(ValueError):
    """Base class for invalid caller input to the automaton core."""


class InvalidGridError(AutomatonError):
    """Raised when an initial grid is not a rectangular binary matrix."""


class InvalidRuleError(AutomatonError):
    """Raised when a rule contains neighbor counts outside 0-8."""


class RuleParseError(AutomatonError):
    """Raised when a rule string is not of the form B<digits>/S<digits>."""


class PatternNotFoundError(AutomatonError, KeyError):
    """Raised when a named seed pattern is not in the pattern library."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
