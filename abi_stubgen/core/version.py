"""
Version parser — decompose ``<name>_<major>.<minor>[.<patch>]`` strings.

This handles version-node names such as ``GLIBCXX_3.4.21`` or
``CXXABI_1.3``.  It is independent of the ``@``/``@@`` annotation used
in manifest records: the record parser never calls it.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional

_DIGITS_RE = re.compile(r"[0-9]+")


@unique
class VersionParseFailure(str, Enum):
    MISSING_UNDERSCORE = "MISSING_UNDERSCORE"
    MISSING_MAJOR = "MISSING_MAJOR"
    MISSING_MINOR = "MISSING_MINOR"
    INVALID_INTEGER = "INVALID_INTEGER"


class VersionParseError(ValueError):
    def __init__(self, reason: VersionParseFailure, text: str):
        self.reason = reason
        self.text = text
        super().__init__(f"{reason.value}: {text!r}")


@dataclass(frozen=True)
class SymbolVersion:
    """A version node split into its namespace and numeric components."""

    name: str
    major: int
    minor: int
    patch: Optional[int] = None

    def sort_key(self) -> tuple:
        return (self.major, self.minor, self.patch if self.patch is not None else -1)

    def __str__(self) -> str:
        base = f"{self.name}_{self.major}.{self.minor}"
        return base if self.patch is None else f"{base}.{self.patch}"


def _parse_int(field: str, text: str) -> int:
    if not _DIGITS_RE.fullmatch(field):
        raise VersionParseError(VersionParseFailure.INVALID_INTEGER, text)
    return int(field)


def parse_version_line(text: str) -> SymbolVersion:
    """
    Parse ``<name>_<major>.<minor>[.<patch>]``.

    The split happens on the *first* underscore.  Components after the
    patch are ignored.

    Raises
    ------
    VersionParseError
        No underscore, missing major/minor field, or a non-decimal
        numeric field.
    """
    name, sep, remainder = text.partition("_")
    if not sep:
        raise VersionParseError(VersionParseFailure.MISSING_UNDERSCORE, text)

    parts = remainder.split(".")
    if not parts[0]:
        raise VersionParseError(VersionParseFailure.MISSING_MAJOR, text)
    if len(parts) < 2:
        raise VersionParseError(VersionParseFailure.MISSING_MINOR, text)

    major = _parse_int(parts[0], text)
    minor = _parse_int(parts[1], text)
    patch = _parse_int(parts[2], text) if len(parts) > 2 else None

    return SymbolVersion(name=name, major=major, minor=minor, patch=patch)
