"""
Stubgen runner — top-level orchestration: manifest → assembly + version script.

This module ties line reading, record parsing, stub emission and IO
together into a single ``run_stubgen`` function that can be called
from the CLI or programmatically.
"""
from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from abi_stubgen.config import settings
from abi_stubgen.core.elf_target import target_from_elf
from abi_stubgen.core.emitter import StubEmitter
from abi_stubgen.core.record import parse_record
from abi_stubgen.core.target import TargetDescriptor, TargetError, resolve_target
from abi_stubgen.core.version import SymbolVersion, VersionParseError, parse_version_line
from abi_stubgen.core.version_set import VersionSet
from abi_stubgen.io.manifest import iter_manifest_lines
from abi_stubgen.io.schema import (
    NamespaceSummary,
    RecordCounts,
    SkippedLine,
    StubgenReport,
)
from abi_stubgen.io.writer import write_outputs, write_report
from abi_stubgen.policy.profile import StubProfile
from abi_stubgen.policy.verdict import ManifestError, SkipReason

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StubgenArtifacts:
    """Rendered output texts of one run."""

    assembly: str
    version_script: str


# ── Helpers ──────────────────────────────────────────────────────────────────

def summarize_namespaces(
    versions: VersionSet,
) -> Tuple[List[NamespaceSummary], List[str]]:
    """
    Group version nodes by namespace and find the newest of each.

    Returns (summaries, unparsed) where *unparsed* lists nodes that do
    not follow ``<name>_<major>.<minor>[.<patch>]``.
    """
    by_ns: Dict[str, List[SymbolVersion]] = {}
    unparsed: List[str] = []

    for v in versions:
        try:
            sv = parse_version_line(v)
        except VersionParseError as e:
            logger.debug("Version node %s not summarized: %s", v, e.reason.value)
            unparsed.append(v)
            continue
        by_ns.setdefault(sv.name, []).append(sv)

    summaries = [
        NamespaceSummary(
            namespace=ns,
            node_count=len(svs),
            latest=str(max(svs, key=lambda s: s.sort_key())),
        )
        for ns, svs in by_ns.items()
    ]
    return summaries, unparsed


# ── Pipeline ─────────────────────────────────────────────────────────────────

def run_stubgen(
    manifest_path: Union[str, Path],
    target: TargetDescriptor,
    output_dir: Optional[Path] = None,
    profile: Optional[StubProfile] = None,
    report_path: Optional[Path] = None,
) -> Tuple[StubgenReport, StubgenArtifacts]:
    """
    Generate stub assembly and a version script from a baseline manifest.

    Parameters
    ----------
    manifest_path : str or Path
        Path to the baseline_symbols manifest.
    target : TargetDescriptor
        Resolved target; only its pointer width is used.
    output_dir : Path, optional
        Directory to write the artifacts into.  If None, nothing is
        written (the rendered texts are still returned).
    profile : StubProfile, optional
        Generation profile.  Defaults to StubProfile.libstdcxx().
    report_path : Path, optional
        Where to write the JSON report, if anywhere.

    Returns
    -------
    (StubgenReport, StubgenArtifacts)

    Raises
    ------
    ManifestError
        Malformed OBJECT size or over-long line.  Nothing is written.
    FileNotFoundError
        Manifest does not exist.
    """
    if profile is None:
        profile = StubProfile.libstdcxx()

    manifest_path = Path(manifest_path)
    versions = VersionSet()
    emitter = StubEmitter(target, versions)

    skip_counts: Counter = Counter()
    skipped_lines: List[SkippedLine] = []
    n_lines = 0

    # ── Step 1: single ordered pass over the manifest ────────────────
    for line_no, line in iter_manifest_lines(manifest_path, profile.max_line_length):
        n_lines += 1
        try:
            record, skip = parse_record(line, line_no, profile)
        except ManifestError as e:
            e.path = str(manifest_path)
            raise

        if record is None:
            skip_counts[skip.value] += 1
            if skip not in (SkipReason.COMMENT, SkipReason.BLANK):
                logger.debug("Skipping line %d: %s", line_no, skip.value)
                skipped_lines.append(SkippedLine(line_no=line_no, reason=skip.value))
            continue

        emitter.emit(record)

    # ── Step 2: render ───────────────────────────────────────────────
    artifacts = StubgenArtifacts(
        assembly=emitter.render(),
        version_script=versions.render(),
    )

    namespaces, unparsed = summarize_namespaces(versions)
    report = StubgenReport(
        profile_id=profile.profile_id,
        manifest_path=str(manifest_path),
        target_triple=target.triple,
        ptr_bits=target.ptr_bits,
        counts=RecordCounts(
            lines=n_lines,
            functions=emitter.function_count,
            objects=emitter.object_count,
            skipped=sum(skip_counts.values()),
            skipped_by_reason=dict(sorted(skip_counts.items())),
        ),
        versions=versions.versions,
        namespaces=namespaces,
        unparsed_versions=unparsed,
        skipped_lines=skipped_lines,
    )

    # ── Step 3: write outputs ────────────────────────────────────────
    if output_dir:
        asm_path, map_path = write_outputs(
            artifacts.assembly, artifacts.version_script, output_dir, profile
        )
        report.asm_path = str(asm_path)
        report.map_path = str(map_path)
        logger.info("Wrote %s and %s", asm_path, map_path)

    if report_path:
        write_report(report, report_path)
        logger.info("Wrote report to %s", report_path)

    return report, artifacts


# ── CLI ──────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="abi-stubgen",
        description=(
            "Parse a libstdc++-v3 baseline_symbols file for a given target and "
            "generate the assembly and version script for a stub library."
        ),
    )
    parser.add_argument(
        "baseline_symbols_path",
        type=Path,
        help="Path to baseline_symbols.txt",
    )
    target_group = parser.add_mutually_exclusive_group(required=True)
    target_group.add_argument(
        "-target", "--target",
        dest="target",
        metavar="TRIPLE",
        help="<arch>-<os>-<abi>, e.g. x86_64-linux-gnu (linux only)",
    )
    target_group.add_argument(
        "--target-from-elf",
        type=Path,
        metavar="PATH",
        help="Take the target from a reference ELF file",
    )
    parser.add_argument(
        "-o", "--output-dir",
        type=Path,
        default=Path(settings.STUBGEN_OUTPUT_DIR),
        help="Base output directory for the generated files (default: %(default)s)",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Also write a JSON run report to this path",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for abi_stubgen."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.STUBGEN_LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.target_from_elf is not None:
            target = target_from_elf(str(args.target_from_elf))
        else:
            target = resolve_target(args.target)

        profile = StubProfile.libstdcxx(max_line_length=settings.STUBGEN_MAX_LINE_LENGTH)
        report, _ = run_stubgen(
            args.baseline_symbols_path,
            target,
            output_dir=args.output_dir,
            profile=profile,
            report_path=args.report,
        )
    except (ManifestError, TargetError, OSError) as e:
        logger.error("%s", e)
        return 1

    print(f"Target: {report.target_triple} ({report.ptr_bits}-bit)")
    print(f"Stubs: {report.counts.functions} functions, "
          f"{report.counts.objects} objects "
          f"(skipped={report.counts.skipped})")
    print(f"Version nodes: {len(report.versions)}")
    print(f"Outputs written to: {args.output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
