"""Shared machinery for the path, operation, and schema walkers.

A walker descends a fixed chain of keys. At every step it asks
:func:`~schemer.parser.query.lookup_children` for the children of the next
key; when the answer is a :class:`~schemer.models.Reference` it resolves the
target through the :class:`~schemer.parser.content.ContentProvider` and reads
the target document's top-level pairs instead. One hop only: a target whose
root is another ``$ref`` is a
:class:`~schemer.exceptions.ReferenceChainError`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from schemer.models import Children, ExtractedNode, ListResult, NodeKind, Reference
from schemer.parser.content import ContentProvider
from schemer.parser.document import Document
from schemer.parser.query import lookup_children, top_level_children

logger = logging.getLogger(__name__)


class Walker(ABC):
    """Base class for a fixed traversal of an OpenAPI document.

    Subclasses set :attr:`kind` and implement :meth:`walk`.

    Args:
        provider: The content snapshot every ``$ref`` is resolved against.
    """

    kind: NodeKind

    def __init__(self, provider: ContentProvider) -> None:
        self._provider = provider

    @property
    def provider(self) -> ContentProvider:
        return self._provider

    @abstractmethod
    def walk(self) -> list[ExtractedNode]:
        """Run the traversal and return the extracted leaves in document order."""

    def list(self) -> ListResult:
        """Run :meth:`walk` and package the names for display."""
        return ListResult.from_nodes(self.kind, self.walk())

    def children(self, document: Document, key: str) -> Children:
        """Children of *key* in *document*, following a ``$ref`` if one stands in for them."""
        result = lookup_children(document, key)
        if isinstance(result, Reference):
            logger.debug("`%s` in %s is a $ref to %s", key, document.source, result.target)
            target = self._provider.resolve(result.target, document.source)
            return top_level_children(target)
        return result

    def descend(self, children: Children, key: str) -> Children:
        """Children of the child *key* of an earlier lookup.

        The child's pair text is parsed as a standalone document and looked
        up again, which is how every walker goes one level deeper.
        """
        return self.children(self.child_document(children, key), key)

    @staticmethod
    def child_document(children: Children, key: str) -> Document:
        """Parse the pair text stored under *key* as its own document."""
        return Document(children.entries[key], children.source)

    def _node(self, name: str) -> ExtractedNode:
        return ExtractedNode(kind=self.kind, name=name)
