# SPDX-License-Identifier: MIT
"""Unit tests for constraint parsing and satisfaction."""

import sys

import pytest

from semverse import (
    DEFAULT_CONSTRAINT,
    Constraint,
    InvalidConstraintFormat,
    InvalidVersionFormat,
    Operator,
    SemverseError,
    Version,
    is_valid_constraint,
)

_INT_DIGIT_LIMIT = sys.get_int_max_str_digits() if hasattr(sys, "get_int_max_str_digits") else 0


class TestSplit:
    """Tests for Constraint.split."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            (">= 1.0.0", (">=", 1, 0, 0, None, None)),
            ("<= 1.2", ("<=", 1, 2, None, None, None)),
            ("~> 2", ("~>", 2, None, None, None, None)),
            ("~ 2.1.3", ("~", 2, 1, 3, None, None)),
            ("> 1.0.0-alpha.1", (">", 1, 0, 0, "alpha.1", None)),
            ("< 1.0.0+build.2", ("<", 1, 0, 0, None, "build.2")),
            ("= 1.0.0-rc.1+sha.5", ("=", 1, 0, 0, "rc.1", "sha.5")),
            (">=1.0", (">=", 1, 0, None, None, None)),
            ("1.2.3", ("=", 1, 2, 3, None, None)),
            ("2", ("=", 2, None, None, None, None)),
        ],
    )
    def test_split(self, text, expected):
        assert Constraint.split(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            "hello",
            "1.0.0.0.0",
            "=> 1.0.0",
            ">>= 1.0",
            "!= 1.0.0",
            ">= ",
            ">=  1.0.0",
            "~> 1.0-alpha",
            ">= 1.x",
            "~> 1.0.0-alpha..1",
            "> 1.0.0+.",
        ],
    )
    def test_invalid(self, text):
        with pytest.raises(InvalidConstraintFormat) as exc_info:
            Constraint.split(text)
        assert exc_info.value.constraint == text

    @pytest.mark.skipif(not _INT_DIGIT_LIMIT, reason="int conversion has no digit limit")
    def test_overlong_digit_run(self):
        text = ">= " + "1" * (_INT_DIGIT_LIMIT + 1)
        with pytest.raises(InvalidConstraintFormat):
            Constraint.split(text)
        assert is_valid_constraint(text) is False


class TestConstruction:
    """Tests for building constraints."""

    def test_non_approx_defaults_missing_components(self):
        c = Constraint(">= 1")
        assert (c.minor, c.patch) == (0, 0)
        assert c.version == Version(1, 0, 0)
        assert c == Constraint(">= 1.0.0")

    def test_frozen(self):
        """Test that Constraint is immutable."""
        c = Constraint(">= 1.0.0")
        with pytest.raises(AttributeError):
            c.major = 5  # type: ignore
        with pytest.raises(AttributeError):
            c.version = Version(5, 0, 0)  # type: ignore
        assert c.version == Version(1, 0, 0)

    def test_approx_keeps_missing_components(self):
        c = Constraint("~> 2.1")
        assert c.minor == 1
        assert c.patch is None
        assert c.version == Version(2, 1, 0)

    def test_operator_kinds(self):
        assert Constraint("~> 1.0").kind is Operator.APPROX
        assert Constraint("~ 1.0").kind is Operator.APPROX
        assert Constraint(">= 1.0").kind is Operator.GREATER_THAN_EQUAL
        assert Constraint("<= 1.0").kind is Operator.LESS_THAN_EQUAL
        assert Constraint("> 1.0").kind is Operator.GREATER_THAN
        assert Constraint("< 1.0").kind is Operator.LESS_THAN
        assert Constraint("1.0").kind is Operator.EQUAL

    def test_default_when_empty(self):
        assert Constraint() == Constraint(">= 0.0.0")
        assert Constraint("") == Constraint(">= 0.0.0")

    def test_invalid_raises(self):
        with pytest.raises(InvalidConstraintFormat, match="did not contain a valid operator"):
            Constraint("hello")

    def test_error_hierarchy(self):
        with pytest.raises(SemverseError):
            Constraint("hello")
        with pytest.raises(ValueError):
            Constraint("hello")

    def test_is_valid_constraint(self):
        assert is_valid_constraint("~> 1.2") is True
        assert is_valid_constraint("1.2.3") is True
        assert is_valid_constraint("hello") is False
        assert is_valid_constraint("> 1.0.0.0") is False


class TestCoerce:
    """Tests for Constraint.coerce."""

    def test_none_is_default(self):
        assert Constraint.coerce(None) is DEFAULT_CONSTRAINT

    def test_constraint_returned_unchanged(self):
        c = Constraint(">= 1.0")
        assert Constraint.coerce(c) is c

    def test_string_parsed(self):
        assert Constraint.coerce("< 2.0") == Constraint("< 2.0.0")

    def test_default_accepts_everything(self):
        for text in ["0.0.0", "1.0.0", "2.0.0-alpha", "10.4.2+build"]:
            assert DEFAULT_CONSTRAINT.satisfies(text)


class TestRendering:
    """Tests for str and repr."""

    @pytest.mark.parametrize(
        "text, rendered",
        [
            ("~> 2.1", "~> 2.1"),
            ("~> 2", "~> 2"),
            (">= 1", ">= 1.0.0"),
            ("1.2.3", "= 1.2.3"),
            (">=1.0.0-alpha+build", ">= 1.0.0-alpha+build"),
            ("~ 1.0.0-beta.2", "~ 1.0.0-beta.2"),
        ],
    )
    def test_str(self, text, rendered):
        assert str(Constraint(text)) == rendered

    def test_str_reparses_to_equal_constraint(self):
        for text in ["~> 2.1", "< 3", ">= 1.0.0-rc.1", "~> 1.0.0+build.4"]:
            c = Constraint(text)
            assert Constraint(str(c)) == c

    def test_repr(self):
        assert repr(Constraint("~> 2.1")) == "<Constraint ~> 2.1>"


class TestEquality:
    """Tests for constraint equality and hashing."""

    def test_equal(self):
        assert Constraint(">= 1.0") == Constraint(">=1.0.0")

    def test_approx_precision_matters(self):
        assert Constraint("~> 2.1") != Constraint("~> 2.1.0")

    def test_operator_matters(self):
        assert Constraint("> 1.0.0") != Constraint(">= 1.0.0")

    def test_hashable(self):
        assert len({Constraint(">= 1.0"), Constraint(">= 1.0.0"), Constraint("< 2")}) == 2


class TestComparisonOperators:
    """Tests for the plain comparison operators."""

    def test_equal(self):
        c = Constraint("= 1.0.0")
        assert c.satisfies("1.0.0")
        assert not c.satisfies("1.0.1")
        assert not c.satisfies("1.0.0+build")

    def test_bare_version_is_equality(self):
        c = Constraint("1.2")
        assert c.satisfies("1.2.0")
        assert not c.satisfies("1.2.1")

    def test_greater_than(self):
        c = Constraint("> 1.0.0")
        assert c.satisfies("1.0.1")
        assert not c.satisfies("1.0.0")
        assert not c.satisfies("0.9.0")

    def test_greater_than_equal(self):
        c = Constraint(">= 1.0.0")
        assert c.satisfies("1.0.0")
        assert c.satisfies("2.3.4")
        assert not c.satisfies("0.9.9")

    def test_less_than(self):
        c = Constraint("< 2.0.0")
        assert c.satisfies("1.9.9")
        assert not c.satisfies("2.0.0")

    def test_less_than_equal(self):
        c = Constraint("<= 2.0.0")
        assert c.satisfies("2.0.0")
        assert not c.satisfies("2.0.1")

    def test_accepts_version_objects(self):
        assert Constraint(">= 1.0.0").satisfies(Version(1, 5, 0))

    def test_contains(self):
        assert "1.5.0" in Constraint("~> 1.2")
        assert Version(3, 0, 0) not in Constraint("~> 1.2")

    def test_invalid_target(self):
        with pytest.raises(InvalidVersionFormat):
            Constraint(">= 1.0.0").satisfies("hello")


class TestPreReleaseGuard:
    """Pre-releases only satisfy lower bounds that name a pre-release."""

    def test_release_lower_bound_rejects_pre_release(self):
        assert not Constraint(">= 1.0.0").satisfies("2.0.0-alpha")
        assert not Constraint("> 1.0.0").satisfies("2.0.0-alpha")
        assert not Constraint("~> 1.0").satisfies("1.5.0-beta")
        assert not Constraint("= 2.0.0").satisfies("2.0.0-alpha")

    def test_pre_release_lower_bound_accepts_pre_release(self):
        assert Constraint(">= 2.0.0-alpha").satisfies("2.0.0-alpha")
        assert Constraint(">= 2.0.0-alpha").satisfies("2.0.0-beta")
        assert Constraint(">= 2.0.0-alpha").satisfies("3.0.0-alpha")

    def test_less_than_family_accepts_pre_release(self):
        assert Constraint("< 2.0.0").satisfies("2.0.0-alpha")
        assert Constraint("<= 2.0.0").satisfies("1.0.0-rc.1")

    def test_zero_constraint_accepts_pre_release(self):
        assert Constraint(">= 0.0.0").satisfies("1.0.0-alpha")
        assert Constraint("~> 0").satisfies("0.3.0-alpha")


class TestApproximate:
    """Tests for ~> and ~ ranges."""

    def test_major_minor(self):
        c = Constraint("~> 2.1")
        assert c.satisfies("2.1.0")
        assert c.satisfies("2.9.9")
        assert not c.satisfies("3.0.0")
        assert not c.satisfies("2.0.9")

    def test_major_only(self):
        c = Constraint("~> 2")
        assert c.satisfies("2.0.0")
        assert c.satisfies("2.99.0")
        assert not c.satisfies("3.0.0")
        assert not c.satisfies("1.9.9")

    def test_full_triple(self):
        c = Constraint("~> 2.1.3")
        assert c.satisfies("2.1.3")
        assert c.satisfies("2.1.99")
        assert not c.satisfies("2.2.0")
        assert not c.satisfies("2.1.2")

    def test_tilde_alias(self):
        assert Constraint("~ 2.1.3").satisfies("2.1.7")
        assert not Constraint("~ 2.1.3").satisfies("2.2.0")

    def test_next_major_pre_release_excluded(self):
        assert not Constraint("~> 2.1").satisfies("3.0.0-alpha")
        assert not Constraint("~> 2.1.0-alpha").satisfies("3.0.0-alpha")

    def test_trailing_numeric_pre_release(self):
        c = Constraint("~> 1.0.0-alpha.1")
        assert c.satisfies("1.0.0-alpha.1")
        assert c.satisfies("1.0.0-alpha.7")
        assert c.satisfies("1.0.0-alpha.7.1")
        assert not c.satisfies("1.0.0-alpha.0")
        assert not c.satisfies("1.0.0-alpha.beta")
        assert not c.satisfies("1.0.0-beta")
        assert not c.satisfies("1.0.0")

    def test_trailing_alphanumeric_pre_release(self):
        c = Constraint("~> 1.0.0-beta")
        assert c.satisfies("1.0.0-beta")
        assert c.satisfies("1.0.0-beta.3")
        assert c.satisfies("1.0.0-beta.x.y")
        assert not c.satisfies("1.0.0-rc")
        assert not c.satisfies("1.0.0-alpha")
        assert not c.satisfies("1.0.0")

    def test_trailing_numeric_build(self):
        c = Constraint("~> 1.0.0+build.2")
        assert c.satisfies("1.0.0+build.2")
        assert c.satisfies("1.0.0+build.10")
        assert not c.satisfies("1.0.0+build.1")
        assert not c.satisfies("1.0.0+build.x")
        assert not c.satisfies("1.0.1")

    def test_trailing_alphanumeric_build(self):
        c = Constraint("~> 1.0.0+sha")
        assert c.satisfies("1.0.0+sha")
        assert c.satisfies("1.0.0+sha.1")
        assert not c.satisfies("1.0.0+tag")
        assert not c.satisfies("1.0.0")
