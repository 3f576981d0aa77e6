# SPDX-License-Identifier: MIT
"""Exceptions raised by version parsing and constraint matching."""

from __future__ import annotations

from typing import Any


class VersionError(Exception):
    """Base class for all errors raised by this package."""

    pass


class ParseError(VersionError, ValueError):
    """Raised when a string is not a well-formed version or constraint expression."""

    def __init__(self, text: Any, message: str = ""):
        self.text = text
        self.message = message or f"Could not parse {text!r}"
        super().__init__(self.message)


class InvalidOperationError(VersionError, RuntimeError):
    """Raised when a value is used outside of the states the grammar can produce.

    This signals a programming error, such as matching with a constraint that was
    built with an unknown operator, or incrementing the stability of a stable
    release.
    """

    pass
