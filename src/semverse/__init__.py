# SPDX-License-Identifier: MIT
"""Semantic version constraints for dependency resolution.

This package parses semantic versions and version constraints, orders
versions by SemVer 2.0.0 precedence, and picks the versions that satisfy a
set of constraints.

Example:
    >>> from semverse import Constraint, Version, satisfy_best
    >>>
    >>> Version.parse("1.0.0-alpha") < Version.parse("1.0.0")
    True
    >>> Constraint("~> 2.1").satisfies("2.9.9")
    True
    >>> satisfy_best([">= 1.0.0", "< 2.0.0"], ["0.9.0", "1.4.2", "2.0.0"])
    Version('1.4.2')
"""

__version__ = "0.1.0"

from .errors import (
    SemverseError,
    InvalidVersionFormat,
    InvalidConstraintFormat,
    NoSolutionError,
)
from .version import (
    Version,
    UpperBound,
    parse_version,
    is_valid_version,
    compare_versions,
    version_key,
)
from .constraint import (
    Constraint,
    Operator,
    OPERATORS,
    DEFAULT_CONSTRAINT,
    satisfy_all,
    satisfy_best,
    is_valid_constraint,
)

__all__ = [
    # Errors
    "SemverseError",
    "InvalidVersionFormat",
    "InvalidConstraintFormat",
    "NoSolutionError",
    # Versions
    "Version",
    "UpperBound",
    "parse_version",
    "is_valid_version",
    "compare_versions",
    "version_key",
    # Constraints
    "Constraint",
    "Operator",
    "OPERATORS",
    "DEFAULT_CONSTRAINT",
    "satisfy_all",
    "satisfy_best",
    "is_valid_constraint",
]
