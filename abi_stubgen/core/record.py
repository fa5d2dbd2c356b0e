"""
Record parser — one manifest line → ManifestRecord, skip, or abort.

Manifest record shapes::

    FUNC:<symbol>@<version>
    FUNC:<symbol>@@<version>
    OBJECT:<size>:<symbol>@<version>
    OBJECT:<size>:<symbol>@@<version>

``@@`` binds the default version of a symbol, ``@`` a non-default
alias.  Parsing never looks beyond the current line.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional, Tuple

from abi_stubgen.policy.profile import StubProfile
from abi_stubgen.policy.verdict import AbortReason, ManifestError, SkipReason

DEFAULT_MARKER = "@@"
ALIAS_MARKER = "@"

_SIZE_RE = re.compile(r"[0-9]+")


@unique
class SymbolKind(str, Enum):
    FUNCTION = "FUNC"
    OBJECT = "OBJECT"


@dataclass(frozen=True)
class ManifestRecord:
    """One accepted manifest line."""

    kind: SymbolKind
    symbol_name: str
    version: str
    is_default: bool
    size: Optional[int] = None     # OBJECT only
    line_no: int = 0

    @property
    def marker(self) -> str:
        return DEFAULT_MARKER if self.is_default else ALIAS_MARKER

    @property
    def emitted_name(self) -> str:
        return emitted_name(self.symbol_name, self.version, self.is_default)


# ── Normalizer ───────────────────────────────────────────────────────────────

def normalize_version_suffix(version: str) -> str:
    """Symbol-safe suffix: every ``.`` becomes ``_``."""
    return version.replace(".", "_")


def emitted_name(symbol_name: str, version: str, is_default: bool) -> str:
    """
    The assembly label for a binding.

    Default bindings keep the bare symbol name; non-default aliases get
    the normalized version appended so that several versions of one
    symbol can coexist in a single object file.
    """
    if is_default:
        return symbol_name
    return f"{symbol_name}_{normalize_version_suffix(version)}"


# ── Parser ───────────────────────────────────────────────────────────────────

def split_versioned_symbol(field: str) -> Optional[Tuple[str, str, bool]]:
    """
    Split ``symbol@@version`` / ``symbol@version``.

    Returns (symbol_name, version, is_default), or None when the field
    carries no version marker.  Only the segment between the first and
    second marker is the version; anything after a second marker is
    dropped.
    """
    if DEFAULT_MARKER in field:
        marker, is_default = DEFAULT_MARKER, True
    elif ALIAS_MARKER in field:
        marker, is_default = ALIAS_MARKER, False
    else:
        return None
    segments = field.split(marker)
    return segments[0], segments[1], is_default


def _parse_size(field: str, line_no: int) -> int:
    if not _SIZE_RE.fullmatch(field):
        raise ManifestError(
            AbortReason.INVALID_SIZE,
            f"invalid OBJECT size {field!r}",
            line_no=line_no,
        )
    return int(field)


def parse_record(
    line: str,
    line_no: int = 0,
    profile: Optional[StubProfile] = None,
) -> Tuple[Optional[ManifestRecord], Optional[SkipReason]]:
    """
    Parse one manifest line (terminator already stripped).

    Returns (record, None) for an accepted line and (None, reason) for a
    skipped one.

    Raises
    ------
    ManifestError
        An OBJECT record whose size field is not a non-negative integer.
    """
    if profile is None:
        profile = StubProfile.libstdcxx()

    if not line:
        return None, SkipReason.BLANK
    if line.startswith(profile.comment_marker):
        return None, SkipReason.COMMENT

    fields = line.split(":")
    tag = fields[0]
    if tag not in profile.recognized_kinds:
        return None, SkipReason.UNKNOWN_KIND
    kind = SymbolKind(tag)

    size: Optional[int] = None
    if kind == SymbolKind.OBJECT:
        if len(fields) < 3:
            return None, SkipReason.MISSING_FIELD
        size = _parse_size(fields[1], line_no)
        sym_with_ver = fields[2]
    else:
        if len(fields) < 2:
            return None, SkipReason.MISSING_FIELD
        sym_with_ver = fields[1]

    split = split_versioned_symbol(sym_with_ver)
    if split is None:
        return None, SkipReason.NO_VERSION_MARKER
    symbol_name, version, is_default = split
    if not symbol_name or not version:
        return None, SkipReason.MISSING_FIELD
    # `sym@@V@W` leaves an `@` that cannot appear in a label or map node.
    if ALIAS_MARKER in version:
        return None, SkipReason.MISSING_FIELD

    return (
        ManifestRecord(
            kind=kind,
            symbol_name=symbol_name,
            version=version,
            is_default=is_default,
            size=size,
            line_no=line_no,
        ),
        None,
    )
