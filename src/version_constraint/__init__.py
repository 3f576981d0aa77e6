# SPDX-License-Identifier: MIT
"""Version parsing, incrementing and composer-style constraint matching.

Versions have the form ``MAJOR[.MINOR[.PATCH]][-STABILITY[.NUMBER]]`` where the
stability is one of dev, alpha, beta, rc or stable. Constraints are
comma-separated expressions such as ``>=1.2.0@stable,<2`` that must all hold.

Example:
    >>> from version_constraint import Part, is_match, next_version, parse_version
    >>>
    >>> version = parse_version("1.2")
    >>> str(version)
    '1.2.0'
    >>> next_version("1.2.0", Part.MINOR)
    '1.3.0-dev'
    >>>
    >>> is_match(">=1.2.0,<2", version)
    (True, [])
"""

__version__ = "0.1.0"

from .errors import (
    VersionError,
    ParseError,
    InvalidOperationError,
)
from .version import (
    Version,
    Stability,
    Part,
    PART_ORDER,
    VERSION_PATTERN,
    parse_version,
    is_conform,
    next_version,
    compare_versions,
    version_key,
)
from .constraint import (
    Constraint,
    Operator,
    CONSTRAINT_PATTERN,
    parse_constraint,
    parse_constraints,
    is_match,
)

__all__ = [
    # Errors
    "VersionError",
    "ParseError",
    "InvalidOperationError",
    # Versions
    "Version",
    "Stability",
    "Part",
    "PART_ORDER",
    "VERSION_PATTERN",
    "parse_version",
    "is_conform",
    "next_version",
    "compare_versions",
    "version_key",
    # Constraints
    "Constraint",
    "Operator",
    "CONSTRAINT_PATTERN",
    "parse_constraint",
    "parse_constraints",
    "is_match",
]
