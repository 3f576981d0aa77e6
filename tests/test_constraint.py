# SPDX-License-Identifier: MIT
"""Unit tests for constraint parsing and matching."""

import pytest

from version_constraint import (
    Constraint,
    InvalidOperationError,
    Operator,
    ParseError,
    Stability,
    Version,
    is_match,
    parse_constraint,
    parse_constraints,
    parse_version,
)


class TestParseConstraint:
    """Tests for parse_constraint function."""

    def test_defaults(self):
        """Test that operator and stability fall back to = and stable."""
        c = parse_constraint("1.2.3")
        assert c.operator is Operator.EQ
        assert c.version == (1, 2, 3)
        assert c.stability is Stability.STABLE

    def test_full_expression(self):
        c = parse_constraint(">=1.2.0@beta")
        assert c.operator is Operator.GE
        assert c.version == (1, 2, 0)
        assert c.stability is Stability.BETA

    @pytest.mark.parametrize(
        "expression,pattern",
        [
            ("1.*", (1,)),
            ("1.2.*", (1, 2)),
            ("1.*.*", (1,)),
            ("*", ()),
            ("*.*", ()),
            ("1", (1,)),
        ],
    )
    def test_trailing_wildcards_are_dropped(self, expression, pattern):
        assert parse_constraint(expression).version == pattern

    @pytest.mark.parametrize(
        "expression,operator",
        [
            ("=1", Operator.EQ),
            ("==1", Operator.EQ_ALT),
            ("!1", Operator.NE_ALT),
            ("!=1", Operator.NE),
            ("<1", Operator.LT),
            ("<=1", Operator.LE),
            (">1", Operator.GT),
            (">=1", Operator.GE),
        ],
    )
    def test_operators(self, expression, operator):
        assert parse_constraint(expression).operator is operator

    @pytest.mark.parametrize(
        "expression",
        [
            "foo",
            "",
            "=>1",
            "1.x",
            "1.2@",
            "1.2@foo",
            "1.2.3.4.*.6",
            "1.2.3.4.5.6",
            " 1.2",
            "1.2 ",
            "<<1",
        ],
    )
    def test_invalid(self, expression):
        with pytest.raises(ParseError):
            parse_constraint(expression)

    @pytest.mark.parametrize(
        "expression,pattern",
        [
            ("1.*.3", (1, 0, 3)),
            ("*.2", (0, 2)),
            ("1.*.3.*", (1, 0, 3)),
        ],
    )
    def test_inner_wildcards_compare_as_zero(self, expression, pattern):
        assert parse_constraint(expression).version == pattern

    def test_inner_wildcard_match(self):
        c = parse_constraint("1.*.3")
        assert c.match(Version(1, 0, 3)) is True
        assert c.match(Version(1, 2, 3)) is False

    def test_tilde_operator_is_unsupported(self):
        """Test that ~ is rejected when parsing rather than when matching."""
        with pytest.raises(ParseError, match="Unsupported operator"):
            parse_constraint("~1.2")

    def test_classmethod(self):
        assert Constraint.parse("<2") == Constraint("<", (2,))


class TestParseConstraints:
    """Tests for parse_constraints function."""

    def test_list(self):
        constraints = parse_constraints(">=1.2.0,<2")
        assert [c.operator for c in constraints] == [Operator.GE, Operator.LT]
        assert [c.version for c in constraints] == [(1, 2, 0), (2,)]

    def test_whitespace_is_not_trimmed(self):
        with pytest.raises(ParseError):
            parse_constraints(">=1.2.0, <2")

    def test_empty_item(self):
        with pytest.raises(ParseError):
            parse_constraints(">=1.2.0,")


CONSTRAINTS = [
    # equality
    ("1", "1.0.0", True),
    ("1", "1.1.0", True),
    ("1.*", "1.1.0", True),
    ("1.*", "1.2.0", True),
    ("=1", "1.0.0", True),
    ("=1", "1.1.0", True),
    ("=1.*", "1.1.0", True),
    ("=1.*", "1.2.0", True),
    ("==1", "1.0.0", True),
    ("==1", "1.1.0", True),
    ("==1.*", "1.1.0", True),
    ("==1.*", "1.2.0", True),
    ("1.*@stable", "1.2.0", True),
    ("1.*@dev", "1.2.0", False),
    ("1.2.0@stable", "1.2.0", True),
    ("1.2.0@stable", "1.2.0-alpha.1", False),
    ("1.2.0@alpha", "1.2.0-alpha.3", True),
    # inequality
    ("!1.*", "1.2.0", False),
    ("!1.*@stable", "1.2.0", False),
    ("!1.*", "2.2.0", True),
    ("!=1.*", "1.2.0", False),
    ("!=1.*", "2.2.0", True),
    # comparison
    ("<1.2.0@stable", "1.1.0", True),
    ("<1.2.0", "1.1.0", True),
    ("<1.2.0@stable", "1.2.0", False),
    ("<1.2.0@stable", "1.2.1", False),
    ("<=1.2.0@stable", "1.1.0", True),
    ("<=1.2.0", "1.1.0", True),
    ("<=1.2.0@stable", "1.2.0", True),
    ("<=1.2.0@stable", "1.2.1", False),
    (">1.2.0@stable", "1.1.1", False),
    (">1.2.0@stable", "1.2.0", False),
    (">1.2.0@stable", "1.2.1", True),
    (">1.2.0@stable", "2.2.1", True),
    (">=1.2.0@stable", "1.1.1", False),
    (">=1.2.0@stable", "1.2.0", True),
    (">=1.2.0@stable", "1.2.1", True),
    (">=1.2.0@stable", "2.2.1", True),
    (">=1.2.0@stable", "2.2.1-alpha", False),
    ("<2.0.0", "1.9.9-rc.1", False),
    # combinations
    (">=1.2.0,<=2", "1.3.0", True),
    (">=1.2.0,<=2", "2.0.0", True),
    (">=1.2.0,<2", "2.0.0", False),
]


class TestIsMatch:
    """Tests for is_match function."""

    @pytest.mark.parametrize("constraints,version,expected", CONSTRAINTS)
    def test_constraint(self, constraints, version, expected):
        ok, failures = is_match(constraints, parse_version(version))
        assert ok is expected
        assert bool(failures) is not expected

    def test_failure_notes(self):
        ok, failures = is_match(">=1.2.0,<2,!=2.0.0", "2.0.0")
        assert ok is False
        assert failures == ["Constraint '<2' failed", "Constraint '!=2.0.0' failed"]

    def test_version_string(self):
        assert is_match("<1.2.0@stable", "1.1.0") == (True, [])

    def test_invalid_constraint(self):
        with pytest.raises(ParseError):
            is_match(">=1.2.0,foo", "1.2.0")

    def test_invalid_version(self):
        with pytest.raises(ParseError):
            is_match(">=1.2.0", "one")


class TestMatch:
    """Tests for Constraint.match edge cases."""

    def test_unknown_operator(self):
        """Test that a directly built constraint with a bad operator raises."""
        c = Constraint("%", (1, 2, 3), "stable")
        with pytest.raises(InvalidOperationError):
            c.match(Version(1, 2, 3))

    def test_unknown_operator_with_other_stability(self):
        """Test that the stability check happens before the operator check."""
        assert Constraint("%", (1,), "dev").match(Version(1)) is False

    @pytest.mark.parametrize(
        "operator,expected",
        [
            ("<", False),
            (">", False),
            ("<=", True),
            (">=", True),
            ("=", True),
            ("!=", False),
        ],
    )
    def test_fully_wildcarded_pattern(self, operator, expected):
        """Test that an empty pattern only leaves the equality branch."""
        c = parse_constraint(f"{operator}*")
        assert c.match(Version(3, 4, 5)) is expected

    def test_string_operator(self):
        """Test that constraints built from plain strings behave like parsed ones."""
        assert Constraint("<", (2,)).match(Version(1, 5)) is True

    def test_string_operator_is_normalized(self):
        assert Constraint(">=", (1,)).operator is Operator.GE
        assert Constraint("%", (1,)).operator == "%"

    def test_stability_release_component(self):
        """Test that the fifth component compares the stability release."""
        c = parse_constraint(">=1.0.0.3.2@rc")
        assert c.match(Version(1, 0, 0, "rc", 2)) is True
        assert c.match(Version(1, 0, 0, "rc", 1)) is False

    def test_constraint_is_immutable(self):
        c = parse_constraint("1")
        with pytest.raises(AttributeError):
            c.operator = "<"
