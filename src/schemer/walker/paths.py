"""List the paths of a spec: the keys under ``paths``."""

from __future__ import annotations

from schemer.models import ExtractedNode, NodeKind
from schemer.walker.base import Walker


class PathWalker(Walker):
    """Return every key under the root ``paths`` mapping, verbatim.

    ``paths`` may be inline or a ``$ref`` to a document whose top-level keys
    are the paths; both give the same result.
    """

    kind = NodeKind.PATH

    def walk(self) -> list[ExtractedNode]:
        paths = self.children(self.provider.root, "paths")
        return [self._node(path) for path in paths.keys()]
