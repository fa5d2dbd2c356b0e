"""
Writer — persist the generated artifacts.

Filesystem layout:
    <output_dir>/libstdc++.S    (profile.asm_filename)
    <output_dir>/all.map        (profile.map_filename)

Each file is written whole, replacing any previous content.  Both are
staged as ``.tmp`` siblings first and only moved into place once both
writes succeed, so the pair on disk always comes from the same run.
"""
import json
import os
from pathlib import Path
from typing import List, Tuple

from abi_stubgen.io.schema import StubgenReport
from abi_stubgen.policy.profile import StubProfile


def _staging_path(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


def write_outputs(
    assembly: str,
    version_script: str,
    output_dir: Path,
    profile: StubProfile,
) -> Tuple[Path, Path]:
    """
    Write the assembly source and the version script into *output_dir*.

    Creates *output_dir* if it does not exist.
    Returns (asm_path, map_path).

    Raises
    ------
    OSError
        A destination is a directory or a write fails.  Existing
        artifacts are left untouched.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    asm_path = output_dir / profile.asm_filename
    map_path = output_dir / profile.map_filename

    for path in (asm_path, map_path):
        if path.is_dir():
            raise IsADirectoryError(f"Output path is a directory: {path}")

    staged: List[Tuple[Path, Path]] = []
    try:
        for path, text in ((asm_path, assembly), (map_path, version_script)):
            tmp = _staging_path(path)
            staged.append((tmp, path))
            tmp.write_text(text, encoding="utf-8", newline="\n")
    except OSError:
        for tmp, _ in staged:
            tmp.unlink(missing_ok=True)
        raise

    for tmp, path in staged:
        os.replace(tmp, path)

    return asm_path, map_path


def write_report(report: StubgenReport, report_path: Path) -> Path:
    """Serialize *report* as sorted, indented JSON."""
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(
        json.dumps(
            report.model_dump(mode="json"),
            indent=2,
            sort_keys=True,
        )
        + "\n"
    )
    return report_path
