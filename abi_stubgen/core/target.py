"""
Target — resolve an ``<arch>-<os>[-<abi>]`` triple into a TargetDescriptor.

Only the pointer width matters to stub emission: it fixes the stanza
alignment and the directive used for a word-sized zero.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional


class TargetError(ValueError):
    """The target cannot be resolved or is not supported."""


# Pointer width per architecture (Linux ABIs).
ARCH_PTR_BITS: Dict[str, int] = {
    # 64-bit
    "x86_64": 64,
    "aarch64": 64,
    "aarch64_be": 64,
    "riscv64": 64,
    "powerpc64": 64,
    "powerpc64le": 64,
    "mips64": 64,
    "mips64el": 64,
    "s390x": 64,
    "sparc64": 64,
    "loongarch64": 64,
    # 32-bit
    "x86": 32,
    "i386": 32,
    "i486": 32,
    "i586": 32,
    "i686": 32,
    "arm": 32,
    "armeb": 32,
    "thumb": 32,
    "thumbeb": 32,
    "riscv32": 32,
    "powerpc": 32,
    "powerpcle": 32,
    "mips": 32,
    "mipsel": 32,
    "sparc": 32,
    "m68k": 32,
    "csky": 32,
    "hexagon": 32,
    "xtensa": 32,
    "loongarch32": 32,
}

# ABIs that run a 64-bit ISA with 32-bit pointers.
ILP32_ABIS: FrozenSet[str] = frozenset({
    "gnux32",
    "muslx32",
    "gnuabin32",
    "muslabin32",
    "gnu_ilp32",
    "gnuilp32",
})

SUPPORTED_OS: FrozenSet[str] = frozenset({"linux"})


@dataclass(frozen=True)
class TargetDescriptor:
    """Resolved target facts consumed by the stub emitter."""

    arch: str
    ptr_bits: int
    os: str = "linux"
    abi: Optional[str] = None

    def __post_init__(self):
        if self.ptr_bits not in (32, 64):
            raise TargetError(f"unsupported pointer width: {self.ptr_bits}")

    @property
    def ptr_bytes(self) -> int:
        return self.ptr_bits // 8

    @property
    def word_directive(self) -> str:
        # GNU as sizes `.word` per architecture, not per pointer width,
        # so pick the explicitly sized directive.
        return ".quad" if self.ptr_bits == 64 else ".long"

    @property
    def triple(self) -> str:
        if self.abi:
            return f"{self.arch}-{self.os}-{self.abi}"
        return f"{self.arch}-{self.os}"


def resolve_target(triple: str) -> TargetDescriptor:
    """
    Resolve ``<arch>-<os>[-<abi>]`` (e.g. ``x86_64-linux-gnu``).

    Raises
    ------
    TargetError
        Malformed triple, unknown architecture, or non-Linux OS.
    """
    parts = triple.strip().split("-")
    if len(parts) < 2 or len(parts) > 3 or not all(parts):
        raise TargetError(
            f"malformed target {triple!r}, expected <arch>-<os>[-<abi>]"
        )

    arch, os_name = parts[0], parts[1]
    abi = parts[2] if len(parts) == 3 else None

    if os_name not in SUPPORTED_OS:
        raise TargetError(f"unsupported OS {os_name!r} (linux only)")

    ptr_bits = ARCH_PTR_BITS.get(arch)
    if ptr_bits is None:
        raise TargetError(f"unknown architecture {arch!r}")

    if abi in ILP32_ABIS:
        if ptr_bits != 64:
            raise TargetError(f"ABI {abi!r} requires a 64-bit architecture, got {arch!r}")
        ptr_bits = 32

    return TargetDescriptor(arch=arch, ptr_bits=ptr_bits, os=os_name, abi=abi)
