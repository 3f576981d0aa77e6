# SPDX-License-Identifier: MIT
"""Version identifiers of the form ``MAJOR[.MINOR[.PATCH]][-STABILITY[.NUMBER]]``.

A version has five ordinal parts, from most to least significant:

- major, minor, patch: non-negative integers (minor and patch default to 0)
- stability: one of dev, alpha, beta, rc, stable (defaults to stable)
- stability release: positive integer (defaults to 1)

The canonical form always renders major, minor and patch, omits the stability
when it is ``stable`` and omits the release number of ``dev`` versions:

    1            -> 1.0.0
    1.2-beta     -> 1.2.0-beta.1
    1.2.3-dev.4  -> 1.2.3-dev
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Union

import structlog

from .errors import InvalidOperationError, ParseError

logger = structlog.get_logger(__name__)

DEFAULT_STABILITY_RELEASE = 1


class Stability(IntEnum):
    """Release maturity, ordered from least to most mature.

    The integer value is the rank used for comparison.
    """

    DEV = 0
    ALPHA = 1
    BETA = 2
    RC = 3
    STABLE = 4

    @property
    def token(self) -> str:
        """Return the token used in version strings (e.g. ``"beta"``)."""
        return self.name.lower()

    def successor(self) -> "Stability":
        """Return the next, more mature stability.

        Raises:
            InvalidOperationError: If this is already ``STABLE``
        """
        if self is Stability.STABLE:
            raise InvalidOperationError("Cannot advance stability past 'stable'")
        return Stability(self + 1)

    @classmethod
    def parse(cls, value: Union[str, "Stability"]) -> "Stability":
        """Return the member for a token such as ``"rc"``.

        Tokens are case-sensitive.

        Raises:
            ParseError: If the token is not a recognized stability
        """
        if isinstance(value, Stability):
            return value
        try:
            return _STABILITY_TOKENS[value]
        except (KeyError, TypeError):
            raise ParseError(value, f"Unknown stability: {value!r}") from None

    def __str__(self) -> str:
        return self.token


_STABILITY_TOKENS = {stability.token: stability for stability in Stability}


class Part(str, Enum):
    """The ordinal parts of a version."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    STABILITY = "stability"
    STABILITY_RELEASE = "stability_release"

    @classmethod
    def parse(cls, value: Union[str, "Part"]) -> "Part":
        """Return the part named by ``value`` (case-insensitive)."""
        if isinstance(value, Part):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ParseError(value, f"Unknown version part: {value!r}") from None


# Most significant first
PART_ORDER = (
    Part.MAJOR,
    Part.MINOR,
    Part.PATCH,
    Part.STABILITY,
    Part.STABILITY_RELEASE,
)

VERSION_PATTERN = re.compile(
    r"(?P<major>[0-9]+)"
    r"(?:\.(?P<minor>[0-9]+)(?:\.(?P<patch>[0-9]+))?)?"
    r"(?:-(?P<stability>" + "|".join(_STABILITY_TOKENS) + r")"
    r"(?:\.(?P<stability_release>[0-9]+))?)?"
)


def _to_int(value, name: str, minimum: int = 0) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ParseError(value, f"Version {name} must be an integer, got {value!r}") from None
    if number < minimum:
        raise ParseError(value, f"Version {name} must be >= {minimum}, got {number}")
    return number


@functools.total_ordering
@dataclass(eq=False)
class Version:
    """A parsed version.

    Versions compare by ``numeric()``, i.e. the tuple
    ``(major, minor, patch, stability rank, stability release)``.

    Note:
        ``increment()`` mutates the version in place. Use ``clone()`` first
        when the original value is still needed. Because of this, versions
        are not hashable.

    Attributes:
        major: Major version number
        minor: Minor version number
        patch: Patch version number
        stability: Release maturity
        stability_release: Release counter within the stability
    """

    major: int
    minor: Optional[int] = None
    patch: Optional[int] = None
    stability: Union[Stability, str, None] = None
    stability_release: Optional[int] = None

    def __post_init__(self) -> None:
        self.major = _to_int(self.major, "major")
        self.minor = 0 if self.minor is None else _to_int(self.minor, "minor")
        self.patch = 0 if self.patch is None else _to_int(self.patch, "patch")
        self.stability = (
            Stability.STABLE if self.stability is None else Stability.parse(self.stability)
        )
        self.stability_release = (
            DEFAULT_STABILITY_RELEASE
            if self.stability_release is None
            else _to_int(self.stability_release, "stability release", minimum=1)
        )

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse a version string. See ``parse_version``."""
        return parse_version(text)

    def numeric(self) -> tuple[int, int, int, int, int]:
        """Return the ordinal values of all five parts, most significant first."""
        return (
            self.major,
            self.minor,
            self.patch,
            int(self.stability),
            self.stability_release,
        )

    def format(self) -> str:
        """Return the canonical string form of the version."""
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.stability is Stability.STABLE:
            return text
        text += f"-{self.stability.token}"
        if self.stability is Stability.DEV:
            return text
        return f"{text}.{self.stability_release}"

    def clone(self) -> "Version":
        """Return an independent copy of this version."""
        return Version(
            self.major,
            self.minor,
            self.patch,
            self.stability,
            self.stability_release,
        )

    def increment(self, part: Union[Part, str]) -> "Version":
        """Increment ``part`` in place and return this version.

        Every part less significant than ``part`` is reset: numbers to 0,
        the stability to ``dev`` and the stability release to its default.
        More significant parts are left untouched. Incrementing the stability
        moves it to the next stability in ``dev, alpha, beta, rc, stable``.

        Args:
            part: The part to increment

        Returns:
            This (mutated) version

        Raises:
            InvalidOperationError: If the stability of a stable version is
                incremented. The version is left unchanged.

        Examples:
            >>> Version(1, 2, 3).increment(Part.MINOR).format()
            '1.3.0-dev'
            >>> Version(2, 1, 1, "alpha", 4).increment(Part.STABILITY).format()
            '2.1.1-beta.1'
        """
        part = Part.parse(part)
        before = self.format()

        next_stability = None
        if part is Part.STABILITY:
            next_stability = self.stability.successor()

        for current in reversed(PART_ORDER):
            if current is part:
                if current is Part.STABILITY:
                    self.stability = next_stability
                else:
                    setattr(self, current.value, getattr(self, current.value) + 1)
                break
            self._reset(current)

        logger.debug("version_incremented", part=part.value, before=before, after=self.format())
        return self

    def _reset(self, part: Part) -> None:
        if part is Part.STABILITY:
            self.stability = Stability.DEV
        elif part is Part.STABILITY_RELEASE:
            self.stability_release = DEFAULT_STABILITY_RELEASE
        else:
            setattr(self, part.value, 0)

    def __str__(self) -> str:
        return self.format()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.numeric() == other.numeric()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.numeric() < other.numeric()


def parse_version(text: str) -> Version:
    """Parse a version string into a Version.

    Minor and patch are optional, but patch requires minor. The stability
    release number is only allowed after a stability tag. No whitespace is
    tolerated.

    Args:
        text: A string such as ``"1"``, ``"1.2.3"`` or ``"1.2.3-beta.2"``

    Returns:
        The parsed Version, with defaults filled in for missing parts

    Raises:
        ParseError: If the string is not a well-formed version

    Examples:
        >>> parse_version("5.67.89-beta.2")
        Version(major=5, minor=67, patch=89, stability=<Stability.BETA: 2>, stability_release=2)
    """
    if not isinstance(text, str):
        raise ParseError(text, f"Version must be a string, got {type(text).__name__}")

    match = VERSION_PATTERN.fullmatch(text)
    if not match:
        raise ParseError(text, f"Invalid version: {text!r}")

    return Version(
        major=match.group("major"),
        minor=match.group("minor"),
        patch=match.group("patch"),
        stability=match.group("stability"),
        stability_release=match.group("stability_release"),
    )


def is_conform(text: str) -> bool:
    """Check whether a string is a version in its canonical form.

    Examples:
        >>> is_conform("1.0.0")
        True
        >>> is_conform("1.0")
        False
        >>> is_conform("1.0.0-dev.1")
        False
    """
    try:
        return parse_version(text).format() == text
    except ParseError:
        return False


def next_version(text: str, part: Union[Part, str] = Part.STABILITY) -> str:
    """Return the canonical form of ``text`` with ``part`` incremented.

    Examples:
        >>> next_version("1.2.0-beta.3")
        '1.2.0-rc.1'
        >>> next_version("1.2.0", Part.PATCH)
        '1.2.1-dev'
    """
    return parse_version(text).increment(part).format()


def compare_versions(version1: Union[str, Version], version2: Union[str, Version]) -> int:
    """Compare two versions.

    Returns:
        -1 if version1 < version2
        0 if version1 == version2
        1 if version1 > version2

    Raises:
        ParseError: If either version string is invalid
    """
    v1 = parse_version(version1) if isinstance(version1, str) else version1
    v2 = parse_version(version2) if isinstance(version2, str) else version2

    for a, b in zip(v1.numeric(), v2.numeric()):
        if a != b:
            return -1 if a < b else 1
    return 0


def version_key(version: Union[str, Version]) -> tuple[int, int, int, int, int]:
    """Return a sort key for a version.

    Examples:
        >>> sorted(["1.0.0", "1.0.0-rc.1", "0.9.0"], key=version_key)
        ['0.9.0', '1.0.0-rc.1', '1.0.0']
    """
    v = parse_version(version) if isinstance(version, str) else version
    return v.numeric()
