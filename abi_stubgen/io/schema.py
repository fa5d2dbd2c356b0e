"""
Schema — Pydantic model for the optional generation report.

One report per run (``stubgen_report.json``): what was emitted, what
was skipped and why, and which version nodes the map declares.

Runtime contract fields (present in every output):
  package_name, generator_version, profile_id, schema_version.
"""
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from abi_stubgen import GENERATOR_VERSION, PACKAGE_NAME, SCHEMA_VERSION


class RecordCounts(BaseModel):
    lines: int = 0
    functions: int = 0
    objects: int = 0
    skipped: int = 0
    skipped_by_reason: Dict[str, int] = Field(default_factory=dict)


class SkippedLine(BaseModel):
    """A manifest line excluded from the output."""
    line_no: int
    reason: str              # SkipReason value


class NamespaceSummary(BaseModel):
    """Version nodes sharing a namespace, e.g. GLIBCXX or CXXABI."""
    namespace: str
    node_count: int = 0
    latest: str


class StubgenReport(BaseModel):
    """Run summary — stubgen_report.json."""

    package_name: str = PACKAGE_NAME
    generator_version: str = GENERATOR_VERSION
    schema_version: str = SCHEMA_VERSION
    profile_id: str

    manifest_path: str
    target_triple: str
    ptr_bits: int

    asm_path: Optional[str] = None
    map_path: Optional[str] = None

    counts: RecordCounts = Field(default_factory=RecordCounts)
    versions: List[str] = Field(default_factory=list)
    namespaces: List[NamespaceSummary] = Field(default_factory=list)
    unparsed_versions: List[str] = Field(default_factory=list)

    # Only non-comment, non-blank skips are listed.
    skipped_lines: List[SkippedLine] = Field(default_factory=list)

    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
