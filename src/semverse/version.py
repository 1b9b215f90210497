# SPDX-License-Identifier: MIT
"""Semantic version parsing and ordering.

Supports MAJOR[.MINOR[.PATCH]] with optional pre-release and build metadata
on full triples:
- Pre-release: -alpha, -alpha.1, -beta.2, -rc.1, -0.3.7
- Build metadata: +build, +build.123, +20240101

Ordering follows SemVer 2.0.0 precedence. Build metadata never changes the
precedence decided by the other fields; it only breaks ties between versions
that are otherwise identical, which keeps the order total and consistent with
equality.
"""

from __future__ import annotations

import functools
import math
import re
from dataclasses import dataclass
from typing import Any, Optional, Union

from .errors import InvalidVersionFormat

# Grammars tried in order; the first match wins.
VERSION_PATTERNS = (
    re.compile(
        r"(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
        r"(?:-(?P<pre_release>[0-9a-z-]+(?:\.[0-9a-z-]+)*))?"
        r"(?:\+(?P<build>[0-9a-z-]+(?:\.[0-9a-z-]+)*))?",
        re.IGNORECASE,
    ),
    re.compile(r"(?P<major>\d+)\.(?P<minor>\d+)"),
    re.compile(r"(?P<major>\d+)"),
)

IDENTIFIER_KINDS = ("pre_release", "build")

# Identifier sort keys: numeric identifiers are (0, n), alphanumeric ones are
# (1, s). The two ceilings never come out of a parse.
NUMERIC_CEILING = (0, math.inf)
IDENTIFIER_CEILING = (2, "")

Identifier = Union[int, str]


def _to_identifier(token: str) -> Identifier:
    # "01" stays a string so that parsing and rendering agree
    if token.isdigit() and str(int(token)) == token:
        return int(token)
    return token


def identifier_key(identifier: Identifier) -> tuple:
    """Return the sort key of a single pre-release or build identifier."""
    if isinstance(identifier, int):
        return (0, identifier)
    return (1, identifier)


def components_from_match(parts: dict) -> tuple:
    """Convert named grammar groups into ``(major, minor, patch, pre_release, build)``.

    Raises:
        ValueError: If a digit run is too long to convert to an int
    """
    pre_release = parts.get("pre_release")
    build = parts.get("build")
    for value in (pre_release, build):
        for token in (value or "").split("."):
            _to_identifier(token)

    return (
        int(parts["major"]),
        int(parts["minor"]) if parts.get("minor") is not None else None,
        int(parts["patch"]) if parts.get("patch") is not None else None,
        pre_release,
        build,
    )


@functools.total_ordering
@dataclass(frozen=True, slots=True)
class Version:
    """Represents a parsed semantic version.

    Attributes:
        major: Major version number
        minor: Minor version number, 0 when not given
        patch: Patch version number, 0 when not given
        pre_release: Optional dot-separated pre-release identifiers (e.g. "alpha.1")
        build: Optional dot-separated build metadata (e.g. "build.123")
    """

    major: int
    minor: int = 0
    patch: int = 0
    pre_release: Optional[str] = None
    build: Optional[str] = None

    def __post_init__(self) -> None:
        if self.minor is None:
            object.__setattr__(self, "minor", 0)
        if self.patch is None:
            object.__setattr__(self, "patch", 0)
        if self.pre_release == "":
            object.__setattr__(self, "pre_release", None)
        if self.build == "":
            object.__setattr__(self, "build", None)

    @classmethod
    def split(cls, version_string: Any) -> tuple:
        """Split a version string into ``(major, minor, patch, pre_release, build)``.

        Components missing from the string are returned as None.

        Raises:
            InvalidVersionFormat: If the string matches none of the grammars
        """
        if not isinstance(version_string, str):
            raise InvalidVersionFormat(
                version_string,
                f"Version must be a string, got {type(version_string).__name__}",
            )

        text = version_string.strip()
        for pattern in VERSION_PATTERNS:
            match = pattern.fullmatch(text)
            if match is None:
                continue
            try:
                return components_from_match(match.groupdict())
            except ValueError:
                # digit runs past the interpreter's int conversion limit
                raise InvalidVersionFormat(version_string) from None

        raise InvalidVersionFormat(version_string)

    @classmethod
    def parse(cls, version_string: Any) -> "Version":
        """Parse a version string into a Version.

        Examples:
            >>> Version.parse("1.2.3-alpha.1+build.5")
            Version('1.2.3-alpha.1+build.5')
            >>> Version.parse("1.2")
            Version('1.2.0')
        """
        return cls(*cls.split(version_string))

    @classmethod
    def coerce(cls, value: Union["Version", str]) -> "Version":
        """Return ``value`` if it already is a Version, otherwise parse it."""
        if isinstance(value, cls):
            return value
        return cls.parse(value)

    @property
    def is_zero(self) -> bool:
        """True for the bare 0.0.0 version, which constraints treat as unbounded."""
        return (
            self.major == 0
            and self.minor == 0
            and self.patch == 0
            and not self.pre_release
            and not self.build
        )

    @property
    def is_pre_release(self) -> bool:
        return bool(self.pre_release)

    def identifiers(self, kind: str) -> list[Identifier]:
        """Split the pre-release or build field into identifiers.

        All-digit identifiers are returned as ints, everything else as strings.

        Args:
            kind: Either "pre_release" or "build"

        Examples:
            >>> Version.parse("1.0.0-alpha.1").identifiers("pre_release")
            ['alpha', 1]
        """
        if kind not in IDENTIFIER_KINDS:
            raise ValueError(f"Unknown identifier kind: {kind!r}")
        value = getattr(self, kind)
        if not value:
            return []
        return [_to_identifier(token) for token in value.split(".")]

    def pre_release_key(self) -> tuple:
        # A release outranks every pre-release of the same triple
        if not self.pre_release:
            return (1,)
        return (0, tuple(identifier_key(i) for i in self.identifiers("pre_release")))

    def build_key(self) -> tuple:
        if not self.build:
            return (0,)
        return (1, tuple(identifier_key(i) for i in self.identifiers("build")))

    def sort_key(self) -> tuple:
        """Return a tuple whose natural ordering is the version ordering."""
        return (self.major, self.minor, self.patch, self.pre_release_key(), self.build_key())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        """Return the canonical string representation of the version."""
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre_release:
            version += f"-{self.pre_release}"
        if self.build:
            version += f"+{self.build}"
        return version

    def __repr__(self) -> str:
        return f"Version('{self}')"


@dataclass(frozen=True, slots=True)
class UpperBound:
    """An exclusive upper limit expressed directly as a sort key.

    Used for approximate constraints, whose limits can sit between any two
    real versions and so have no string form.
    """

    key: tuple

    @classmethod
    def below(cls, major: int, minor: int, patch: int) -> "UpperBound":
        """Bound sitting just under ``major.minor.patch`` and all of its pre-releases."""
        return cls((major, minor, patch, (0, ()), (0,)))

    def admits(self, version: Version) -> bool:
        """True if ``version`` sorts strictly below this bound."""
        return version.sort_key() < self.key


def bump_identifiers(identifiers: list[Identifier]) -> tuple:
    """Return the sort key of the smallest identifier list past ``identifiers``'s family.

    A trailing numeric identifier is replaced by a marker above every number
    and below every alphanumeric identifier, so later numeric identifiers stay
    in range. A trailing alphanumeric identifier is kept and followed by a
    marker above everything, so only lists extending it stay in range.
    """
    keys = [identifier_key(i) for i in identifiers]
    if not keys:
        return (IDENTIFIER_CEILING,)
    if isinstance(identifiers[-1], int):
        keys[-1] = NUMERIC_CEILING
    else:
        keys.append(IDENTIFIER_CEILING)
    return tuple(keys)


def parse_version(version_string: str) -> Version:
    """Parse a version string into a Version object.

    Args:
        version_string: MAJOR[.MINOR[.PATCH[-pre_release][+build]]]

    Returns:
        A Version object with parsed components

    Raises:
        InvalidVersionFormat: If the string is not a recognised version

    Examples:
        >>> parse_version("1.0.0-alpha.1")
        Version('1.0.0-alpha.1')
    """
    return Version.parse(version_string)


def is_valid_version(version_string: Any) -> bool:
    """Check if a string parses as a version.

    Examples:
        >>> is_valid_version("1.0.0")
        True
        >>> is_valid_version("1.0.0.0")
        False
    """
    try:
        Version.split(version_string)
    except InvalidVersionFormat:
        return False
    return True


def compare_versions(version1: Union[str, Version], version2: Union[str, Version]) -> int:
    """Compare two versions.

    Returns:
        -1 if version1 < version2
        0 if version1 == version2
        1 if version1 > version2

    Raises:
        InvalidVersionFormat: If either version string is invalid

    Examples:
        >>> compare_versions("1.0.0-rc.1", "1.0.0")
        -1
    """
    v1 = Version.coerce(version1)
    v2 = Version.coerce(version2)
    if v1 == v2:
        return 0
    return -1 if v1 < v2 else 1


def version_key(version: Union[str, Version]) -> tuple:
    """Return a sort key for a version string or Version.

    Examples:
        >>> sorted(["1.0.0", "1.0.0-alpha", "0.9.0"], key=version_key)
        ['0.9.0', '1.0.0-alpha', '1.0.0']
    """
    return Version.coerce(version).sort_key()
