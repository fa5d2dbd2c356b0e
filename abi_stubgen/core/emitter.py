"""
Stub emitter — render one assembly stanza per accepted record.

Functions go to the ``.text`` buffer as a single word-sized zero,
objects go to the ``.data`` buffer as ``size`` zero bytes.  Stanzas
keep manifest order within each buffer.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from abi_stubgen.core.record import ManifestRecord, SymbolKind
from abi_stubgen.core.target import TargetDescriptor
from abi_stubgen.core.version_set import VersionSet

logger = logging.getLogger(__name__)

TEXT_HEADER = ".text\n"
DATA_HEADER = ".data\n"


def render_function_stanza(record: ManifestRecord, target: TargetDescriptor) -> str:
    name = record.emitted_name
    return (
        f".balign {target.ptr_bytes}\n"
        f".globl {name}\n"
        f".type {name}, %function;\n"
        f".symver {name}, {record.symbol_name}{record.marker}{record.version}\n"
        f"{name}: {target.word_directive} 0\n"
    )


def render_object_stanza(record: ManifestRecord, target: TargetDescriptor) -> str:
    name = record.emitted_name
    return (
        f".balign {target.ptr_bytes}\n"
        f".globl {name}\n"
        f".type {name}, %object;\n"
        f".size {name}, {record.size};\n"
        f".symver {name}, {record.symbol_name}{record.marker}{record.version}\n"
        f"{name}: .fill {record.size}, 1, 0\n"
    )


class StubEmitter:
    """
    Accumulates function and object stanzas for one run.

    Every emitted stanza registers its version with *versions*, so a
    version only reaches the version script through an accepted record.
    """

    def __init__(self, target: TargetDescriptor, versions: Optional[VersionSet] = None):
        self.target = target
        self.versions = versions if versions is not None else VersionSet()
        self._functions: List[str] = []
        self._objects: List[str] = []

    @property
    def function_count(self) -> int:
        return len(self._functions)

    @property
    def object_count(self) -> int:
        return len(self._objects)

    def emit(self, record: ManifestRecord) -> str:
        """Append the stanza for *record* and return it."""
        if record.kind == SymbolKind.FUNCTION:
            stanza = render_function_stanza(record, self.target)
            self._functions.append(stanza)
        else:
            stanza = render_object_stanza(record, self.target)
            self._objects.append(stanza)

        if self.versions.register(record.version):
            logger.debug("New version node %s (line %d)", record.version, record.line_no)
        return stanza

    def render(self) -> str:
        """Full assembly source: text section, then data section."""
        return (
            TEXT_HEADER
            + "".join(self._functions)
            + DATA_HEADER
            + "".join(self._objects)
        )
