"""
Version set — distinct version nodes in first-seen order.

The version script only declares the nodes; which symbol belongs to
which node is carried by the ``.symver`` directives in the assembly.
"""
from typing import Dict, Iterator, List


class VersionSet:
    """Insertion-ordered set of version strings."""

    def __init__(self):
        self._seen: Dict[str, None] = {}

    def register(self, version: str) -> bool:
        """Add *version* if unseen.  Returns True when it was added."""
        if version in self._seen:
            return False
        self._seen[version] = None
        return True

    @property
    def versions(self) -> List[str]:
        return list(self._seen)

    def __len__(self) -> int:
        return len(self._seen)

    def __iter__(self) -> Iterator[str]:
        return iter(self._seen)

    def __contains__(self, version: object) -> bool:
        return version in self._seen

    def render(self) -> str:
        """One ``<version> { };`` line per node."""
        return "".join(f"{v} {{ }};\n" for v in self._seen)
