"""List the operation ids of a spec.

The walk goes ``paths`` -> each path item -> each HTTP method -> the
method's ``operationId``. Any of those levels may be a ``$ref`` into another
document. Path-item keys that are not HTTP methods (``parameters``,
``summary``, ``servers``...) are skipped.
"""

from __future__ import annotations

from schemer.exceptions import StructuralKeyMissingError
from schemer.models import ExtractedNode, HTTPMethod, NodeKind
from schemer.parser.query import scalar_value
from schemer.walker.base import Walker

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)

OPERATION_ID_KEY = "operationId"


class OperationWalker(Walker):
    """Return the ``operationId`` of every operation.

    Order follows the document: paths in declaration order, and methods in
    declaration order within each path.

    Raises:
        StructuralKeyMissingError: If ``paths`` is absent, or an operation has
            no ``operationId``.
    """

    kind = NodeKind.OPERATION

    def walk(self) -> list[ExtractedNode]:
        results: list[ExtractedNode] = []
        paths = self.children(self.provider.root, "paths")
        for path in paths.keys():
            methods = self.descend(paths, path)
            for method in methods.keys():
                if method not in _HTTP_METHODS:
                    continue
                operation = self.descend(methods, method)
                if OPERATION_ID_KEY not in operation:
                    raise StructuralKeyMissingError(
                        OPERATION_ID_KEY,
                        f"`{method} {path}` of document '{operation.source}'",
                    )
                leaf = self.child_document(operation, OPERATION_ID_KEY)
                results.append(self._node(scalar_value(leaf, OPERATION_ID_KEY)))
        return results
