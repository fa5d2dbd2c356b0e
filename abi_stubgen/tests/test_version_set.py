"""Tests for the first-seen-ordered version set."""
from abi_stubgen.core.version_set import VersionSet


class TestVersionSet:

    def test_register_dedupes(self):
        vs = VersionSet()
        assert vs.register("GLIBCXX_3.4") is True
        assert vs.register("GLIBCXX_3.4") is False
        assert len(vs) == 1

    def test_insertion_order(self):
        vs = VersionSet()
        for v in ("B_1.0", "A_1.0", "B_1.0", "C_1.0", "A_1.0"):
            vs.register(v)
        assert list(vs) == ["B_1.0", "A_1.0", "C_1.0"]

    def test_contains(self):
        vs = VersionSet()
        vs.register("CXXABI_1.3")
        assert "CXXABI_1.3" in vs
        assert "CXXABI_1.3.1" not in vs

    def test_render(self):
        vs = VersionSet()
        vs.register("GLIBCXX_3.4")
        vs.register("CXXABI_1.3")
        assert vs.render() == "GLIBCXX_3.4 { };\nCXXABI_1.3 { };\n"

    def test_render_empty(self):
        assert VersionSet().render() == ""
