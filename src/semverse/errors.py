# SPDX-License-Identifier: MIT
"""Exceptions raised by semverse."""

from __future__ import annotations

from typing import Any, Sequence


class SemverseError(Exception):
    """Base class for every error raised by this package."""

    pass


class InvalidVersionFormat(SemverseError, ValueError):
    """Raised when a string is not a recognised version."""

    def __init__(self, version: Any, message: str = ""):
        self.version = version
        self.message = message or (
            f"'{version}' did not contain a valid version string: 'x.y.z' or 'x.y'."
        )
        super().__init__(self.message)


class InvalidConstraintFormat(SemverseError, ValueError):
    """Raised when a constraint has no valid operator or version portion."""

    def __init__(self, constraint: Any, message: str = ""):
        self.constraint = constraint
        self.message = message or (
            f"'{constraint}' did not contain a valid operator or a valid version string."
        )
        super().__init__(self.message)


class NoSolutionError(SemverseError):
    """Raised when no candidate version satisfies every constraint."""

    def __init__(self, constraints: Sequence[Any] = (), versions: Sequence[Any] = ()):
        self.constraints = list(constraints)
        self.versions = list(versions)
        rendered = ", ".join(str(c) for c in self.constraints) or "<none>"
        self.message = (
            f"no version satisfies constraints ({rendered}) "
            f"out of {len(self.versions)} candidate(s)"
        )
        super().__init__(self.message)
