# SPDX-License-Identifier: MIT
"""Version constraints and selection of versions that satisfy them.

A constraint is an operator followed by a (possibly partial) version:

    = 1.0.0     exactly 1.0.0 (the operator may be omitted)
    > 1.0       strictly greater than 1.0.0
    <= 2        at most 2.0.0
    ~> 2.1      at least 2.1.0, below 3.0.0
    ~> 2.1.3    at least 2.1.3, below 2.2.0

Pre-release versions only satisfy a lower bound when the bound itself names
a pre-release, so ``>= 1.0.0`` does not pick up ``2.0.0-alpha``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Union

from .errors import InvalidConstraintFormat, NoSolutionError
from .version import UpperBound, Version, bump_identifiers, components_from_match

logger = logging.getLogger(__name__)


class Operator(str, Enum):
    """Kinds of comparison a constraint can perform."""

    APPROX = "approx"
    GREATER_THAN_EQUAL = "greater_than_equal"
    LESS_THAN_EQUAL = "less_than_equal"
    EQUAL = "equal"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"


# Order matters: the first symbol that prefixes the input wins.
OPERATORS: dict[str, Operator] = {
    "~>": Operator.APPROX,
    "~": Operator.APPROX,
    ">=": Operator.GREATER_THAN_EQUAL,
    "<=": Operator.LESS_THAN_EQUAL,
    "=": Operator.EQUAL,
    ">": Operator.GREATER_THAN,
    "<": Operator.LESS_THAN,
}

LESS_THAN_FAMILY = frozenset({Operator.LESS_THAN, Operator.LESS_THAN_EQUAL})

DEFAULT_CONSTRAINT_STRING = ">= 0.0.0"

OPERATOR_PATTERN = re.compile(
    r"(?P<operator>" + "|".join(re.escape(symbol) for symbol in OPERATORS) + r")\s?(?P<version>.+)"
)

CONSTRAINT_VERSION_PATTERNS = (
    re.compile(
        r"(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
        r"(?:-(?P<pre_release>[0-9a-z-]+(?:\.[0-9a-z-]+)*))?"
        r"(?:\+(?P<build>[0-9a-z-]+(?:\.[0-9a-z-]+)*))?",
        re.IGNORECASE,
    ),
    re.compile(r"(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"),
    re.compile(r"(?P<major>\d+)\.(?P<minor>\d+)"),
    re.compile(r"(?P<major>\d+)"),
)


def compare_equal(constraint: "Constraint", target: Version) -> bool:
    return target == constraint.version


def compare_gt(constraint: "Constraint", target: Version) -> bool:
    return target > constraint.version


def compare_lt(constraint: "Constraint", target: Version) -> bool:
    return target < constraint.version


def compare_gte(constraint: "Constraint", target: Version) -> bool:
    return target >= constraint.version


def compare_lte(constraint: "Constraint", target: Version) -> bool:
    return target <= constraint.version


def approx_upper_bound(constraint: "Constraint") -> UpperBound:
    """Compute the exclusive upper limit of an approximate constraint.

    - ``~> 2`` and ``~> 2.1`` stop before the next major release.
    - ``~> 2.1.3`` stops before the next minor release.
    - With pre-release or build identifiers, the trailing identifier is
      replaced (see ``bump_identifiers``) and everything else is held fixed.
    """
    version = constraint.version
    if constraint.patch is None:
        return UpperBound.below(version.major + 1, 0, 0)
    if constraint.build:
        return UpperBound(
            (
                version.major,
                version.minor,
                version.patch,
                version.pre_release_key(),
                (1, bump_identifiers(version.identifiers("build"))),
            )
        )
    if constraint.pre_release:
        return UpperBound(
            (
                version.major,
                version.minor,
                version.patch,
                (0, bump_identifiers(version.identifiers("pre_release"))),
                (0,),
            )
        )
    return UpperBound.below(version.major, version.minor + 1, 0)


def compare_approx(constraint: "Constraint", target: Version) -> bool:
    return constraint.version <= target and approx_upper_bound(constraint).admits(target)


COMPARATORS: dict[Operator, Callable[["Constraint", Version], bool]] = {
    Operator.APPROX: compare_approx,
    Operator.GREATER_THAN_EQUAL: compare_gte,
    Operator.GREATER_THAN: compare_gt,
    Operator.LESS_THAN_EQUAL: compare_lte,
    Operator.LESS_THAN: compare_lt,
    Operator.EQUAL: compare_equal,
}


@dataclass(frozen=True, slots=True, init=False, eq=False)
class Constraint:
    """A single version requirement such as ``>= 1.0`` or ``~> 2.1.3``.

    Attributes:
        operator: Operator symbol as written (``~`` and ``~>`` are kept apart)
        major: Major version number
        minor: Minor version number, None if an approximate constraint omits it
        patch: Patch version number, None if an approximate constraint omits it
        pre_release: Pre-release identifiers, if any
        build: Build metadata, if any
        version: The Version the constraint compares against
    """

    operator: str
    major: int
    minor: Optional[int]
    patch: Optional[int]
    pre_release: Optional[str]
    build: Optional[str]
    version: Version

    def __init__(self, constraint: Any = None):
        text = "" if constraint is None else str(constraint)
        if not text:
            text = DEFAULT_CONSTRAINT_STRING

        operator, major, minor, patch, pre_release, build = self.split(text)

        # Approximate constraints need to know which components were given
        if OPERATORS[operator] is not Operator.APPROX:
            minor = 0 if minor is None else minor
            patch = 0 if patch is None else patch

        object.__setattr__(self, "operator", operator)
        object.__setattr__(self, "major", major)
        object.__setattr__(self, "minor", minor)
        object.__setattr__(self, "patch", patch)
        object.__setattr__(self, "pre_release", pre_release)
        object.__setattr__(self, "build", build)
        object.__setattr__(self, "version", Version(major, minor, patch, pre_release, build))

    @staticmethod
    def split(constraint: str) -> tuple:
        """Split a constraint into ``(operator, major, minor, patch, pre_release, build)``.

        A constraint starting with a digit uses the ``=`` operator. Components
        not present in the string come back as None.

        Raises:
            InvalidConstraintFormat: If no operator or version can be read

        Examples:
            >>> Constraint.split(">= 1.0.0")
            ('>=', 1, 0, 0, None, None)
            >>> Constraint.split("~> 2.1")
            ('~>', 2, 1, None, None, None)
        """
        if constraint[:1].isdigit():
            operator, version = "=", constraint
        else:
            match = OPERATOR_PATTERN.fullmatch(constraint)
            if match is None:
                raise InvalidConstraintFormat(constraint)
            operator, version = match.group("operator"), match.group("version")

        for pattern in CONSTRAINT_VERSION_PATTERNS:
            found = pattern.fullmatch(version)
            if found is None:
                continue
            try:
                return (operator, *components_from_match(found.groupdict()))
            except ValueError:
                raise InvalidConstraintFormat(constraint) from None

        raise InvalidConstraintFormat(constraint)

    @classmethod
    def coerce(cls, value: Union["Constraint", str, None]) -> "Constraint":
        """Return a Constraint for ``value``; None means "any version"."""
        if value is None:
            return DEFAULT_CONSTRAINT
        if isinstance(value, cls):
            return value
        return cls(value)

    @staticmethod
    def satisfy_all(constraints: Any, versions: Any) -> list[Version]:
        """Class-level form of the module function ``satisfy_all``."""
        return satisfy_all(constraints, versions)

    @staticmethod
    def satisfy_best(constraints: Any, versions: Any) -> Version:
        """Class-level form of the module function ``satisfy_best``."""
        return satisfy_best(constraints, versions)

    @property
    def kind(self) -> Operator:
        try:
            return OPERATORS[self.operator]
        except KeyError:
            raise RuntimeError(f"unknown operator type: {self.operator}") from None

    def satisfies(self, target: Union[Version, str]) -> bool:
        """Return True if ``target`` is matched by this constraint.

        Raises:
            InvalidVersionFormat: If ``target`` is a string that is not a version
        """
        target = Version.coerce(target)

        if not self.version.is_zero and self._greedy_match(target):
            return False

        return COMPARATORS[self.kind](self, target)

    __contains__ = satisfies

    def _greedy_match(self, target: Version) -> bool:
        # 2.0.0-alpha must not satisfy ">= 1.0.0"
        return (
            self.kind not in LESS_THAN_FAMILY
            and target.is_pre_release
            and not self.version.is_pre_release
        )

    def _components(self) -> tuple:
        return (self.operator, self.major, self.minor, self.patch, self.pre_release, self.build)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constraint):
            return NotImplemented
        return self._components() == other._components()

    def __hash__(self) -> int:
        return hash(self._components())

    def __str__(self) -> str:
        out = f"{self.operator} {self.major}"
        if self.minor is not None:
            out += f".{self.minor}"
        if self.patch is not None:
            out += f".{self.patch}"
        if self.pre_release:
            out += f"-{self.pre_release}"
        if self.build:
            out += f"+{self.build}"
        return out

    def __repr__(self) -> str:
        return f"<Constraint {self}>"


DEFAULT_CONSTRAINT = Constraint(DEFAULT_CONSTRAINT_STRING)


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (str, Constraint, Version)):
        return [value]
    return list(value)


def satisfy_all(
    constraints: Iterable[Union[Constraint, str]] | Constraint | str | None,
    versions: Iterable[Union[Version, str]] | Version | str | None,
) -> list[Version]:
    """Return every version that satisfies all of the given constraints.

    Both inputs are coerced and de-duplicated, keeping first-seen order. An
    empty set of constraints keeps every version.

    Raises:
        InvalidConstraintFormat: If a constraint string cannot be parsed
        InvalidVersionFormat: If a version string cannot be parsed

    Examples:
        >>> satisfy_all([">= 1.0.0", "< 2.0.0"], ["0.9.0", "1.5.0", "2.0.0"])
        [Version('1.5.0')]
    """
    coerced_constraints = list(dict.fromkeys(Constraint.coerce(c) for c in _as_list(constraints)))
    coerced_versions = list(dict.fromkeys(Version.coerce(v) for v in _as_list(versions)))

    matching = [
        version
        for version in coerced_versions
        if all(constraint.satisfies(version) for constraint in coerced_constraints)
    ]
    logger.debug(
        "%d of %d version(s) satisfy %d constraint(s)",
        len(matching),
        len(coerced_versions),
        len(coerced_constraints),
    )
    return matching


def satisfy_best(
    constraints: Iterable[Union[Constraint, str]] | Constraint | str | None,
    versions: Iterable[Union[Version, str]] | Version | str | None,
) -> Version:
    """Return the highest version that satisfies all of the given constraints.

    Raises:
        NoSolutionError: If no version satisfies every constraint

    Examples:
        >>> satisfy_best([">= 1.0.0"], ["1.0.0", "1.2.0", "1.1.0"])
        Version('1.2.0')
    """
    constraints = _as_list(constraints)
    versions = _as_list(versions)

    solution = satisfy_all(constraints, versions)
    if not solution:
        logger.debug("no solution for constraints %s", constraints)
        raise NoSolutionError(constraints, versions)

    best = max(solution)
    logger.debug("selected %s out of %d candidate(s)", best, len(solution))
    return best


def is_valid_constraint(constraint: Any) -> bool:
    """Check if a string parses as a constraint.

    Examples:
        >>> is_valid_constraint("~> 1.2")
        True
        >>> is_valid_constraint("hello")
        False
    """
    try:
        Constraint(constraint)
    except InvalidConstraintFormat:
        return False
    return True
