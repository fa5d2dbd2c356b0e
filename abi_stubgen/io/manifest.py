"""
Manifest reader — stream a baseline manifest line by line.

Lines are yielded with their terminator removed.  There is no fixed
buffer: an over-long line is rejected explicitly instead of being cut,
since a truncated line would silently change a symbol or version.
"""
from pathlib import Path
from typing import Iterator, Tuple, Union

from abi_stubgen.policy.verdict import AbortReason, ManifestError


def iter_manifest_lines(
    path: Union[str, Path],
    max_line_length: int = 256,
) -> Iterator[Tuple[int, str]]:
    """
    Yield ``(line_no, line)`` for every line of *path* (1-based).

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ManifestError
        If a line exceeds *max_line_length* bytes.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Manifest not found: {path}")

    with open(p, "rb") as f:
        for line_no, raw in enumerate(f, start=1):
            raw = raw.rstrip(b"\n")
            if raw.endswith(b"\r"):
                raw = raw[:-1]
            if len(raw) > max_line_length:
                raise ManifestError(
                    AbortReason.LINE_TOO_LONG,
                    f"line is {len(raw)} bytes, limit is {max_line_length}",
                    line_no=line_no,
                    path=str(p),
                )
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ManifestError(
                    AbortReason.INVALID_ENCODING,
                    f"invalid UTF-8 at byte {e.start}",
                    line_no=line_no,
                    path=str(p),
                ) from e
            yield line_no, line
