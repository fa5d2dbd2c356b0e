"""
test_runner — end-to-end pipeline and CLI.

Tests verify invariant properties:
  - Outputs are deterministic and byte-identical across runs.
  - The version map only lists versions of accepted records.
  - A hard error writes nothing.
"""
import json
import re

import pytest

from abi_stubgen.policy.profile import StubProfile
from abi_stubgen.policy.verdict import ManifestError
from abi_stubgen.runner import main, run_stubgen

_LABEL_RE = re.compile(r"^(\S+): ", re.M)


def _labels(assembly: str) -> set:
    return set(_LABEL_RE.findall(assembly))


class TestPipeline:

    def test_default_and_alias_bindings(self, write_manifest, target64):
        p = write_manifest(
            "FUNC:_ZSomeFunc@@GLIBCXX_3.4\n"
            "OBJECT:16:_ZSomeVar@GLIBCXX_3.4.9\n"
        )
        _, artifacts = run_stubgen(p, target64)

        asm = artifacts.assembly
        assert "_ZSomeFunc: .quad 0\n" in asm
        assert ".symver _ZSomeFunc, _ZSomeFunc@@GLIBCXX_3.4\n" in asm
        assert ".size _ZSomeVar_GLIBCXX_3_4_9, 16;\n" in asm
        assert ".symver _ZSomeVar_GLIBCXX_3_4_9, _ZSomeVar@GLIBCXX_3.4.9\n" in asm
        assert artifacts.version_script == "GLIBCXX_3.4 { };\nGLIBCXX_3.4.9 { };\n"

    def test_layout_order(self, baseline_path, target64):
        _, artifacts = run_stubgen(baseline_path, target64)
        asm = artifacts.assembly
        assert asm.startswith(".text\n")
        assert asm.count(".data\n") == 1
        text_part, data_part = asm.split(".data\n")
        assert "%object" not in text_part
        assert "%function" not in data_part

    def test_counts_and_skips(self, baseline_path, target64):
        report, _ = run_stubgen(baseline_path, target64)

        assert report.counts.lines == 10
        assert report.counts.functions == 4
        assert report.counts.objects == 2
        assert report.counts.skipped == 4
        assert report.counts.skipped_by_reason == {
            "BLANK": 1,
            "COMMENT": 1,
            "NO_VERSION_MARKER": 1,
            "UNKNOWN_KIND": 1,
        }
        assert [s.line_no for s in report.skipped_lines] == [8, 9]

    def test_versions_only_from_accepted_records(self, baseline_path, target64):
        report, artifacts = run_stubgen(baseline_path, target64)

        # The TLS line's GLIBCXX_3.4.11 never reaches the map.
        assert report.versions == [
            "GLIBCXX_3.4",
            "GLIBCXX_3.4.6",
            "CXXABI_1.3",
            "GLIBCXX_3.4.9",
            "CXXABI_TM_1",
        ]
        assert "GLIBCXX_3.4.11" not in artifacts.version_script
        assert len(artifacts.version_script.splitlines()) == len(report.versions)

    def test_namespace_summary(self, baseline_path, target64):
        report, _ = run_stubgen(baseline_path, target64)

        by_ns = {n.namespace: n for n in report.namespaces}
        assert by_ns["GLIBCXX"].latest == "GLIBCXX_3.4.9"
        assert by_ns["GLIBCXX"].node_count == 3
        assert by_ns["CXXABI"].latest == "CXXABI_1.3"
        assert report.unparsed_versions == ["CXXABI_TM_1"]

    def test_comment_and_blank_only(self, write_manifest, target64):
        p = write_manifest("# comment\n\n")
        report, artifacts = run_stubgen(p, target64)
        assert artifacts.assembly == ".text\n.data\n"
        assert artifacts.version_script == ""
        assert report.versions == []

    def test_emitted_names_independent_of_order(self, baseline_path, reordered_path, target64):
        _, a = run_stubgen(baseline_path, target64)
        _, b = run_stubgen(reordered_path, target64)
        assert _labels(a.assembly) == _labels(b.assembly)

    def test_idempotent_outputs(self, baseline_path, target64, tmp_path):
        out = tmp_path / "out"
        run_stubgen(baseline_path, target64, output_dir=out)
        first = ((out / "libstdc++.S").read_bytes(), (out / "all.map").read_bytes())
        run_stubgen(baseline_path, target64, output_dir=out)
        second = ((out / "libstdc++.S").read_bytes(), (out / "all.map").read_bytes())
        assert first == second

    def test_outputs_replace_previous_content(self, write_manifest, target64, tmp_path):
        out = tmp_path / "out"
        out.mkdir()
        (out / "all.map").write_text("STALE_1.0 { };\n" * 100)
        run_stubgen(write_manifest("FUNC:f@@V_1.0\n"), target64, output_dir=out)
        assert (out / "all.map").read_text() == "V_1.0 { };\n"

    def test_bad_size_writes_nothing(self, bad_size_path, target64, tmp_path):
        out = tmp_path / "out"
        report_path = tmp_path / "report.json"
        with pytest.raises(ManifestError) as exc:
            run_stubgen(bad_size_path, target64, output_dir=out, report_path=report_path)
        assert exc.value.line_no == 2
        assert str(bad_size_path) in str(exc.value)
        assert not out.exists()
        assert not report_path.exists()

    def test_invalid_utf8_writes_nothing(self, write_manifest, target64, tmp_path):
        p = write_manifest("")
        p.write_bytes(b"FUNC:_Zfoo\xff@@GLIBCXX_3.4\n")
        out = tmp_path / "out"
        with pytest.raises(ManifestError) as exc:
            run_stubgen(p, target64, output_dir=out)
        assert exc.value.line_no == 1
        assert not out.exists()

    def test_failed_map_write_keeps_old_assembly(self, write_manifest, target64, tmp_path):
        out = tmp_path / "out"
        out.mkdir()
        (out / "libstdc++.S").write_text("OLD\n")
        (out / "all.map").mkdir()
        with pytest.raises(OSError):
            run_stubgen(write_manifest("FUNC:f@@V_1.0\n"), target64, output_dir=out)
        assert (out / "libstdc++.S").read_text() == "OLD\n"

    def test_repeated_marker_keeps_map_clean(self, write_manifest, target64):
        _, artifacts = run_stubgen(write_manifest("FUNC:sym@V_1.0@W_2.0\n"), target64)
        assert artifacts.version_script == "V_1.0 { };\n"
        assert "sym_V_1_0: .quad 0\n" in artifacts.assembly

    def test_custom_profile_names(self, write_manifest, target32, tmp_path):
        profile = StubProfile(
            profile_id="custom",
            asm_filename="stubs.S",
            map_filename="stubs.map",
        )
        out = tmp_path / "out"
        report, _ = run_stubgen(write_manifest("FUNC:f@@V_1.0\n"), target32, output_dir=out, profile=profile)
        assert (out / "stubs.S").read_text().count(".long 0") == 1
        assert report.asm_path == str(out / "stubs.S")
        assert report.profile_id == "custom"

    def test_report_written(self, baseline_path, target64, tmp_path):
        report_path = tmp_path / "report.json"
        run_stubgen(baseline_path, target64, report_path=report_path)
        data = json.loads(report_path.read_text())
        assert data["package_name"] == "abi_stubgen"
        assert data["target_triple"] == "x86_64-linux-gnu"
        assert data["ptr_bits"] == 64
        assert data["counts"]["functions"] == 4


class TestCli:

    def test_success(self, baseline_path, tmp_path, capsys):
        out = tmp_path / "build"
        rc = main([str(baseline_path), "-target", "x86_64-linux-gnu", "-o", str(out)])
        assert rc == 0
        assert (out / "libstdc++.S").exists()
        assert (out / "all.map").exists()
        assert "Version nodes: 5" in capsys.readouterr().out

    def test_32bit_target(self, baseline_path, tmp_path):
        out = tmp_path / "build"
        assert main([str(baseline_path), "-target", "arm-linux-gnueabihf", "-o", str(out)]) == 0
        asm = (out / "libstdc++.S").read_text()
        assert ".quad" not in asm
        assert ".balign 4\n" in asm

    def test_hard_error_exit_status(self, bad_size_path, tmp_path, caplog):
        out = tmp_path / "build"
        rc = main([str(bad_size_path), "-target", "x86_64-linux-gnu", "-o", str(out)])
        assert rc == 1
        assert not out.exists()
        assert "invalid OBJECT size" in caplog.text

    def test_bad_target(self, baseline_path, tmp_path):
        rc = main([str(baseline_path), "-target", "x86_64-windows-gnu", "-o", str(tmp_path / "b")])
        assert rc == 1

    def test_missing_manifest(self, tmp_path):
        rc = main([str(tmp_path / "nope.txt"), "-target", "x86_64-linux-gnu", "-o", str(tmp_path / "b")])
        assert rc == 1

    def test_target_required(self, baseline_path):
        with pytest.raises(SystemExit) as exc:
            main([str(baseline_path)])
        assert exc.value.code == 2

    def test_target_options_exclusive(self, baseline_path, tmp_path):
        with pytest.raises(SystemExit):
            main([
                str(baseline_path),
                "-target", "x86_64-linux-gnu",
                "--target-from-elf", str(tmp_path / "x.o"),
            ])
