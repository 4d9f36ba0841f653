"""List the schemas of a spec: the keys under ``components.schemas``."""

from __future__ import annotations

from schemer.exceptions import StructuralKeyMissingError
from schemer.models import ExtractedNode, NodeKind
from schemer.walker.base import Walker


class SchemaWalker(Walker):
    """Return the name of every schema under ``components.schemas``.

    Schema bodies are not descended into, so ``$ref`` values inside a
    schema (``items: {$ref: '#/components/schemas/Pet'}``) are left alone.

    Raises:
        StructuralKeyMissingError: If ``components`` or ``schemas`` is absent.
    """

    kind = NodeKind.SCHEMA

    def walk(self) -> list[ExtractedNode]:
        components = self.children(self.provider.root, "components")
        if "schemas" not in components:
            raise StructuralKeyMissingError(
                "schemas", f"`components` of document '{components.source}'"
            )
        schemas = self.descend(components, "schemas")
        return [self._node(name) for name in schemas.keys()]
