"""Birth/survival rules for Life-like cellular automata."""

import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Tuple

import numpy as np

from .errors import InvalidRuleError, RuleParseError

MAX_NEIGHBORS = 8

RULE_PATTERN = re.compile(r"B([0-9]*)/S([0-9]*)")


def _validate_counts(name: str, counts: Iterable) -> FrozenSet[int]:
    try:
        values = list(counts)
    except TypeError:
        raise InvalidRuleError(f"{name} counts must be an iterable of integers, got {counts!r}")

    for value in values:
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidRuleError(f"{name} count {value!r} is not an integer")
        if not 0 <= value <= MAX_NEIGHBORS:
            raise InvalidRuleError(f"{name} count {value} is outside 0-{MAX_NEIGHBORS}")

    return frozenset(int(value) for value in values)


@dataclass(frozen=True)
class Rule:
    """Outer-totalistic rule in Birth/Survival notation (e.g. B3/S23 for Life).

    Attributes:
        birth: Neighbor counts that bring a dead cell to life
        survive: Neighbor counts that keep a live cell alive
    """

    birth: FrozenSet[int] = frozenset()
    survive: FrozenSet[int] = frozenset()

    def __post_init__(self) -> None:
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "birth", _validate_counts("birth", self.birth))
        object.__setattr__(self, "survive", _validate_counts("survive", self.survive))

    @classmethod
    def from_string(cls, text: str) -> "Rule":
        """Parse a rule string such as 'B3/S23'."""
        return parse_rule(text)

    def to_string(self) -> str:
        """Convert to the canonical notation, e.g. 'B36/S23'."""
        birth = "".join(str(count) for count in sorted(self.birth))
        survive = "".join(str(count) for count in sorted(self.survive))
        return f"B{birth}/S{survive}"

    def lookup_tables(self) -> Tuple[np.ndarray, np.ndarray]:
        """Boolean tables indexed by neighbor count (0-8).

        Returns:
            Tuple of (birth_table, survive_table)
        """
        birth_table = np.zeros(MAX_NEIGHBORS + 1, dtype=bool)
        survive_table = np.zeros(MAX_NEIGHBORS + 1, dtype=bool)
        for count in self.birth:
            birth_table[count] = True
        for count in self.survive:
            survive_table[count] = True
        return birth_table, survive_table

    def __str__(self) -> str:
        return self.to_string()


def parse_rule(text: str) -> Rule:
    """Parse a rule string of the form B<digits>/S<digits>.

    The whole string must match; trailing characters are rejected. Each digit
    is a single neighbor count, so 'B36' means counts 3 and 6.

    Args:
        text: Rule string, e.g. 'B3/S23', 'B36/S245' or 'B/S'

    Returns:
        Parsed Rule

    Raises:
        RuleParseError: If the string does not match the notation
        InvalidRuleError: If a digit is outside 0-8 (i.e. '9')
    """
    if not isinstance(text, str):
        raise RuleParseError(f"Rule must be a string, got {type(text).__name__}")

    match = RULE_PATTERN.fullmatch(text)
    if match is None:
        raise RuleParseError(f"Invalid rule string {text!r}, expected B<digits>/S<digits>")

    birth_digits, survive_digits = match.groups()
    return Rule(
        birth=frozenset(int(digit) for digit in birth_digits),
        survive=frozenset(int(digit) for digit in survive_digits),
    )


LIFE = Rule(birth=frozenset({3}), survive=frozenset({2, 3}))

NAMED_RULES: Dict[str, Rule] = {
    "Life": LIFE,
    "HighLife": parse_rule("B36/S23"),
    "Seeds": parse_rule("B2/S"),
    "Day & Night": parse_rule("B3678/S34678"),
    "Life without Death": parse_rule("B3/S012345678"),
    "Replicator": parse_rule("B1357/S1357"),
    "Maze": parse_rule("B3/S12345"),
    "2x2": parse_rule("B36/S125"),
}


def resolve_rule(value) -> Rule:
    """Turn a Rule, a rule string or a named rule into a Rule.

    Args:
        value: Rule instance, 'B.../S...' string, or a key of NAMED_RULES

    Returns:
        Rule instance
    """
    if isinstance(value, Rule):
        return value
    if isinstance(value, str) and value in NAMED_RULES:
        return NAMED_RULES[value]
    return parse_rule(value)


def list_rules() -> List[str]:
    """Get the names of the well-known rules."""
    return list(NAMED_RULES.keys())
