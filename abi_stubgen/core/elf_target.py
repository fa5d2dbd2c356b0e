"""
ELF target — derive a TargetDescriptor from a reference ELF file.

Useful when a cross toolchain is at hand but its triple spelling is
not: compile any object for the target and point the generator at it.

Responsibilities:
  - Validate that the file is an ELF binary.
  - Read the ELF class (pointer width) and e_machine (architecture).

This module does NOT look at sections or symbols.
"""
from pathlib import Path
from typing import Dict, Tuple

from elftools.common.exceptions import ELFError
from elftools.elf.elffile import ELFFile

from abi_stubgen.core.target import TargetDescriptor, TargetError

# e_machine → (arch for ELFCLASS32, arch for ELFCLASS64)
_MACHINE_ARCH: Dict[str, Tuple[str, str]] = {
    "EM_386": ("x86", "x86"),
    "EM_X86_64": ("x86_64", "x86_64"),
    "EM_ARM": ("arm", "arm"),
    "EM_AARCH64": ("aarch64", "aarch64"),
    "EM_RISCV": ("riscv32", "riscv64"),
    "EM_PPC": ("powerpc", "powerpc"),
    "EM_PPC64": ("powerpc64", "powerpc64"),
    "EM_MIPS": ("mips", "mips64"),
    "EM_S390": ("s390", "s390x"),
    "EM_SPARC": ("sparc", "sparc"),
    "EM_SPARCV9": ("sparc64", "sparc64"),
    "EM_68K": ("m68k", "m68k"),
    "EM_LOONGARCH": ("loongarch32", "loongarch64"),
}


def target_from_elf(path: str) -> TargetDescriptor:
    """
    Open *path* as an ELF file and return its target facts.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    TargetError
        If the file is not a valid ELF binary.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Reference ELF not found: {path}")

    with open(p, "rb") as f:
        try:
            elffile = ELFFile(f)
        except ELFError as e:
            raise TargetError(f"not an ELF file: {path}: {e}") from e

        elf_class = elffile.elfclass  # 32 or 64
        machine = elffile.header.e_machine
        little_endian = elffile.little_endian

    arch32, arch64 = _MACHINE_ARCH.get(
        machine, (str(machine).lower().removeprefix("em_"),) * 2
    )
    arch = arch64 if elf_class == 64 else arch32

    if little_endian and arch in ("powerpc", "powerpc64", "mips", "mips64"):
        arch += "le" if arch.startswith("powerpc") else "el"
    if not little_endian and arch == "aarch64":
        arch = "aarch64_be"

    abi = None
    if elf_class == 32 and machine in ("EM_X86_64", "EM_AARCH64"):
        abi = "gnux32" if machine == "EM_X86_64" else "gnu_ilp32"

    return TargetDescriptor(arch=arch, ptr_bits=elf_class, os="linux", abi=abi)
