# SPDX-License-Identifier: MIT
"""Composer-style version constraints.

A constraint expression is an optional operator, a dotted numeric pattern
and an optional required stability:

    >=1.2.0@stable
    1.*
    !=2

A full constraint is a comma-separated list of expressions, all of which
must hold. Whitespace is not trimmed around the commas.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

import structlog

from .errors import InvalidOperationError, ParseError
from .version import PART_ORDER, Stability, Version, parse_version

logger = structlog.get_logger(__name__)

CONSTRAINT_PATTERN = re.compile(
    r"(?P<operator>==?|!=?|~|[<>]=?)?"
    r"(?P<version>(?:\*|[0-9]+)(?:\.(?:\*|[0-9]+))*)"
    r"(?:@(?P<stability>\w+))?"
)

WILDCARD = "*"


class Operator(str, Enum):
    """Operators understood by ``Constraint.match``."""

    EQ = "="
    EQ_ALT = "=="
    NE = "!="
    NE_ALT = "!"
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="


_EQUALITY = frozenset({Operator.EQ, Operator.EQ_ALT})
_INEQUALITY = frozenset({Operator.NE, Operator.NE_ALT})
_LESS = frozenset({Operator.LT, Operator.LE})
_GREATER = frozenset({Operator.GT, Operator.GE})
_INCLUSIVE = frozenset({Operator.LE, Operator.GE})
_OPERATORS = {operator.value: operator for operator in Operator}


def _compare(value: int, expected: int) -> int:
    if value < expected:
        return -1
    if value > expected:
        return 1
    return 0


@dataclass(frozen=True)
class Constraint:
    """A single constraint expression.

    Attributes:
        operator: One of the ``Operator`` values; any other value makes
            ``match()`` raise
        version: Numeric pattern with trailing wildcards removed; positions
            beyond its length are not compared, and an inner wildcard is 0
        stability: Stability a version must have to match
    """

    operator: Union[Operator, str]
    version: tuple[int, ...]
    stability: Stability = Stability.STABLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", _OPERATORS.get(self.operator, self.operator))
        object.__setattr__(self, "version", tuple(int(value) for value in self.version))
        object.__setattr__(self, "stability", Stability.parse(self.stability))

    @classmethod
    def parse(cls, expression: str) -> "Constraint":
        """Parse a single constraint expression. See ``parse_constraint``."""
        return parse_constraint(expression)

    def match(self, version: Version) -> bool:
        """Check whether ``version`` satisfies this constraint.

        The version's stability must equal the required stability for any
        operator. For ordering operators the first differing part decides;
        when no part differs only ``<=`` and ``>=`` are satisfied.

        Raises:
            InvalidOperationError: If the operator is not a known operator
        """
        if version.stability is not self.stability:
            return False

        numeric = version.numeric()
        mismatches = [
            result
            for result in (_compare(numeric[i], value) for i, value in enumerate(self.version))
            if result
        ]

        if self.operator in _EQUALITY:
            return not mismatches
        if self.operator in _INEQUALITY:
            return bool(mismatches)
        if self.operator in _LESS or self.operator in _GREATER:
            if not mismatches:
                return self.operator in _INCLUSIVE
            if self.operator in _LESS:
                return mismatches[0] < 0
            return mismatches[0] > 0

        raise InvalidOperationError(f"Unknown constraint operator: {self.operator!r}")


def parse_constraint(expression: str) -> Constraint:
    """Parse a single constraint expression.

    The operator defaults to ``=`` and the stability to ``stable``. Trailing
    ``*`` components are dropped from the pattern, so ``1.*`` only constrains
    the major version. A wildcard followed by a number compares as 0.

    Raises:
        ParseError: If the expression is malformed, uses the unsupported ``~``
            operator, names an unknown stability or has more components than a
            version has parts

    Examples:
        >>> parse_constraint(">=1.2.*@beta")
        Constraint(operator=<Operator.GE: '>='>, version=(1, 2), stability=<Stability.BETA: 2>)
    """
    if not isinstance(expression, str):
        raise ParseError(
            expression, f"Constraint must be a string, got {type(expression).__name__}"
        )

    match = CONSTRAINT_PATTERN.fullmatch(expression)
    if not match:
        raise ParseError(expression, f"Constraint expression {expression!r} could not be parsed")

    operator = match.group("operator") or Operator.EQ.value
    if operator not in _OPERATORS:
        raise ParseError(expression, f"Unsupported operator {operator!r} in {expression!r}")

    components = match.group("version").split(".")
    while components and components[-1] == WILDCARD:
        components.pop()
    if len(components) > len(PART_ORDER):
        raise ParseError(
            expression, f"Constraint {expression!r} has more than {len(PART_ORDER)} components"
        )

    return Constraint(
        operator=operator,
        version=tuple(
            0 if component == WILDCARD else int(component) for component in components
        ),
        stability=Stability.parse(match.group("stability") or Stability.STABLE.token),
    )


def parse_constraints(text: str) -> list[Constraint]:
    """Parse a comma-separated list of constraint expressions."""
    return [parse_constraint(expression) for expression in text.split(",")]


def is_match(constraints: str, version: Union[str, Version]) -> tuple[bool, list[str]]:
    """Match a version against a comma-separated list of constraints.

    Args:
        constraints: Constraint list, e.g. ``">=1.2.0,<2"``
        version: Version or version string

    Returns:
        A tuple of whether every constraint matched, and a note for each
        constraint that failed

    Raises:
        ParseError: If the constraints or the version string cannot be parsed

    Examples:
        >>> is_match(">=1.2.0,<=2", "2.0.0")
        (True, [])
        >>> is_match(">=1.2.0,<2", "2.0.0")
        (False, ["Constraint '<2' failed"])
    """
    v = parse_version(version) if isinstance(version, str) else version

    failures = []
    for expression in constraints.split(","):
        if not parse_constraint(expression).match(v):
            logger.debug("constraint_failed", constraint=expression, version=v.format())
            failures.append(f"Constraint '{expression}' failed")
    return not failures, failures
