"""
Profile — generation-profile descriptor and tunable parameters.

The profile holds the manifest dialect knobs and output naming so that
core parsing and emission contain no hard-coded file names or limits.
"""
from dataclasses import dataclass, field
from typing import FrozenSet


@dataclass(frozen=True)
class StubProfile:
    """Describes which manifest lines are accepted and where output goes."""

    # Identity
    profile_id: str

    # Manifest dialect
    comment_marker: str = "#"
    recognized_kinds: FrozenSet[str] = field(
        default_factory=lambda: frozenset({"FUNC", "OBJECT"})
    )
    max_line_length: int = 256     # bytes, terminator excluded

    # Output naming
    asm_filename: str = "libstdc++.S"
    map_filename: str = "all.map"

    @classmethod
    def libstdcxx(cls, max_line_length: int = 256) -> "StubProfile":
        """The libstdc++-v3 baseline_symbols profile."""
        return cls(
            profile_id="libstdcxx-baseline-v0",
            comment_marker="#",
            recognized_kinds=frozenset({"FUNC", "OBJECT"}),
            max_line_length=max_line_length,
            asm_filename="libstdc++.S",
            map_filename="all.map",
        )
