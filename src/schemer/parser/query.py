"""Key lookups over a :class:`~schemer.parser.document.Document`.

Three questions are asked of a document while walking a spec:

* :func:`lookup_children` -- what is under key *K* at the top of this
  document? Either the child pairs, or the ``$ref`` that replaces them.
* :func:`top_level_children` -- what pairs make up this whole document?
  Used on the target of a ``$ref``.
* :func:`scalar_value` -- what scalar is stored under key *K*? Used for
  leaf values such as ``operationId``.

:func:`find_refs` answers a fourth, flat question for the content loader:
which ``$ref`` values appear anywhere in this document?

Lookups only ever look one level down. To go deeper the caller takes a
child's pair text from :class:`~schemer.models.Children` and parses it as
a new document, so every pair text produced here is a complete one-entry
mapping on its own.
"""

from __future__ import annotations

from yaml.nodes import MappingNode, Node, ScalarNode

from schemer.exceptions import (
    ReferenceChainError,
    StructuralKeyMissingError,
    UnexpectedNodeError,
)
from schemer.models import Children, LookupResult, Reference
from schemer.parser.document import Document, describe, is_empty, scalar_key

REF_KEY = "$ref"


def lookup_children(document: Document, parent_key: str) -> LookupResult:
    """Return the children of *parent_key*, or the ``$ref`` that stands in for them.

    Only the top-level pairs of *document* are searched. When the value
    under *parent_key* contains a ``$ref`` key, the result is a
    :class:`~schemer.models.Reference` and any sibling keys are ignored.

    Args:
        document: The document to search.
        parent_key: The key expected at the top level of *document*.

    Returns:
        :class:`~schemer.models.Children` mapping each child key to the
        text of its pair, or a :class:`~schemer.models.Reference`.

    Raises:
        StructuralKeyMissingError: If *parent_key* is not a top-level key.
        UnexpectedNodeError: If the value under *parent_key* is a scalar or
            a sequence.

    Example::

        doc = Document("paths:\\n  /pets:\\n    get: {}\\n")
        lookup_children(doc, "paths")
        # Children(entries={'/pets': '/pets:\\n    get: {}'})
    """
    for key, value in _root_pairs(document):
        if scalar_key(key) == parent_key:
            return _children_of(document, value, parent_key)
    raise StructuralKeyMissingError(parent_key, _where(document))


def top_level_children(document: Document) -> Children:
    """Split a whole document into its top-level pairs.

    This is how the target of a ``$ref`` is read: its root mapping *is* the
    content that the reference stood in for.

    Raises:
        ReferenceChainError: If the document's root is itself a ``$ref``.
        UnexpectedNodeError: If the root is a scalar or a sequence.
    """
    root = document.root
    if root is None or is_empty(root):
        return Children(source=document.source)
    result = _children_of(document, root, None)
    if isinstance(result, Reference):
        raise ReferenceChainError(
            f"$ref cannot link to another $ref: '{document.source}' "
            f"points on to '{result.target}'"
        )
    return result


def scalar_value(document: Document, key: str) -> str:
    """Return the scalar stored under a top-level *key*.

    This reads the value the way YAML defines it, so quoting and
    surrounding whitespace are already taken care of.

    Raises:
        StructuralKeyMissingError: If *key* is not a top-level key.
        ReferenceChainError: If the value is a ``$ref`` mapping; leaf values
            must be written inline.
        UnexpectedNodeError: If the value is any other mapping, or a sequence.
    """
    for pair_key, value in _root_pairs(document):
        if scalar_key(pair_key) == key:
            target = _ref_target(value)
            if target is not None:
                raise ReferenceChainError(
                    f"`{key}` in {_where(document)} must be written inline, "
                    f"found a $ref to '{target}'"
                )
            if not isinstance(value, ScalarNode):
                raise UnexpectedNodeError(
                    f"Expected a scalar under `{key}` in {_where(document)}, "
                    f"found {describe(value)}"
                )
            return value.value
    raise StructuralKeyMissingError(key, _where(document))


def find_refs(document: Document) -> list[str]:
    """Return every ``$ref`` value in *document*, in document order.

    This is a flat scan of the whole tree: references inside schema bodies
    are returned just like those at structural positions.
    """
    refs: list[str] = []
    for node in document.iter_nodes():
        if not isinstance(node, MappingNode):
            continue
        for key, value in node.value:
            if scalar_key(key) == REF_KEY and isinstance(value, ScalarNode):
                refs.append(value.value)
    return refs


def _root_pairs(document: Document) -> list[tuple[Node, Node]]:
    """Top-level pairs of *document*; an empty document has none."""
    root = document.root
    if root is None or is_empty(root):
        return []
    if not isinstance(root, MappingNode):
        raise UnexpectedNodeError(
            f"Expected a mapping at the top of {_where(document)}, found {describe(root)}"
        )
    return root.value


def _children_of(document: Document, value: Node, parent_key: str | None) -> LookupResult:
    """Build the lookup result for the mapping *value*."""
    if is_empty(value):
        return Children(source=document.source)
    if not isinstance(value, MappingNode):
        label = f"under `{parent_key}`" if parent_key is not None else "at the top"
        raise UnexpectedNodeError(
            f"Expected a mapping {label} in {_where(document)}, found {describe(value)}"
        )

    entries: dict[str, str] = {}
    for child_key, child_value in value.value:
        name = scalar_key(child_key)
        if name is None:
            continue
        if name == REF_KEY:
            if not isinstance(child_value, ScalarNode):
                raise UnexpectedNodeError(
                    f"Expected a string $ref in {_where(document)}, "
                    f"found {describe(child_value)}"
                )
            return Reference(target=child_value.value)
        entries[name] = document.pair_text(child_key, child_value)
    return Children(entries=entries, source=document.source)


def _where(document: Document) -> str:
    return f"document '{document.source}'"


def _ref_target(node: Node) -> str | None:
    """The ``$ref`` text inside the mapping *node*, if it holds one."""
    if not isinstance(node, MappingNode):
        return None
    for key, value in node.value:
        if scalar_key(key) == REF_KEY and isinstance(value, ScalarNode):
            return value.value
    return None
