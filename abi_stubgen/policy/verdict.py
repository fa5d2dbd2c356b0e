"""
Verdict — the two-tier outcome of feeding one manifest line to the parser.

  1. Skip  (SkipReason):   the line is excluded, processing continues.
  2. Abort (ManifestError): the run stops and nothing is written.

Unknown record kinds and unversioned symbols are skips so that newer
manifests keep working; a malformed OBJECT size is an abort because it
would corrupt the reserved storage of the stub.
"""
from enum import Enum, unique
from typing import Optional


# ── Skip reasons ─────────────────────────────────────────────────────────────

@unique
class SkipReason(str, Enum):
    COMMENT = "COMMENT"
    BLANK = "BLANK"
    UNKNOWN_KIND = "UNKNOWN_KIND"
    NO_VERSION_MARKER = "NO_VERSION_MARKER"
    MISSING_FIELD = "MISSING_FIELD"


# ── Hard errors ──────────────────────────────────────────────────────────────

@unique
class AbortReason(str, Enum):
    INVALID_SIZE = "INVALID_SIZE"
    LINE_TOO_LONG = "LINE_TOO_LONG"
    INVALID_ENCODING = "INVALID_ENCODING"


class ManifestError(ValueError):
    """A manifest line that must abort the whole run."""

    def __init__(
        self,
        reason: AbortReason,
        message: str,
        line_no: Optional[int] = None,
        path: Optional[str] = None,
    ):
        super().__init__(message)
        self.reason = reason
        self.message = message
        self.line_no = line_no
        self.path = path

    def __str__(self) -> str:
        if self.path is not None and self.line_no is not None:
            return f"{self.path}:{self.line_no}: {self.message}"
        if self.line_no is not None:
            return f"line {self.line_no}: {self.message}"
        return self.message
