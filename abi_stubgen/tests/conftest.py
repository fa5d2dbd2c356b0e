"""
Shared pytest fixtures for abi_stubgen tests.

Provides small baseline manifests in the libstdc++ baseline_symbols
format and resolved 32/64-bit targets.
"""
import textwrap
from pathlib import Path

import pytest

from abi_stubgen.core.target import TargetDescriptor, resolve_target

# A trimmed-down baseline_symbols.txt covering every record shape.
BASELINE = textwrap.dedent("""\
    # Generated baseline excerpt
    FUNC:_ZNKSt5ctypeIcE8do_widenEc@@GLIBCXX_3.4
    FUNC:_ZNSt6locale5facet13_S_get_c_nameEv@@GLIBCXX_3.4.6
    OBJECT:16:_ZTISt9exception@@GLIBCXX_3.4
    FUNC:__cxa_guard_acquire@@CXXABI_1.3

    OBJECT:8:_ZNSt10money_base18_S_default_patternE@GLIBCXX_3.4.9
    TLS:8:_ZSt15__once_callable@@GLIBCXX_3.4.11
    FUNC:_ZSt9terminatev
    FUNC:_ZGTtNKSt9exception4whatEv@@CXXABI_TM_1
""")

# Same records as BASELINE with unrelated lines shuffled.
BASELINE_REORDERED = textwrap.dedent("""\
    FUNC:__cxa_guard_acquire@@CXXABI_1.3
    OBJECT:8:_ZNSt10money_base18_S_default_patternE@GLIBCXX_3.4.9
    FUNC:_ZNKSt5ctypeIcE8do_widenEc@@GLIBCXX_3.4
    FUNC:_ZGTtNKSt9exception4whatEv@@CXXABI_TM_1
    OBJECT:16:_ZTISt9exception@@GLIBCXX_3.4
    FUNC:_ZNSt6locale5facet13_S_get_c_nameEv@@GLIBCXX_3.4.6
""")

BAD_SIZE = textwrap.dedent("""\
    FUNC:_ZSomeFunc@@GLIBCXX_3.4
    OBJECT:abc:_ZFoo@@1.0
""")


def _write(path: Path, text: str) -> Path:
    path.write_text(text)
    return path


@pytest.fixture
def baseline_path(tmp_path) -> Path:
    return _write(tmp_path / "baseline_symbols.txt", BASELINE)


@pytest.fixture
def reordered_path(tmp_path) -> Path:
    return _write(tmp_path / "baseline_reordered.txt", BASELINE_REORDERED)


@pytest.fixture
def bad_size_path(tmp_path) -> Path:
    return _write(tmp_path / "bad_size.txt", BAD_SIZE)


@pytest.fixture
def write_manifest(tmp_path):
    """Factory: write arbitrary manifest text and return its path."""
    def _make(text: str, name: str = "manifest.txt") -> Path:
        return _write(tmp_path / name, text)
    return _make


@pytest.fixture
def target64() -> TargetDescriptor:
    return resolve_target("x86_64-linux-gnu")


@pytest.fixture
def target32() -> TargetDescriptor:
    return resolve_target("i686-linux-gnu")
