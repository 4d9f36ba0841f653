"""Parse YAML (and JSON) text into a node tree that remembers source spans.

Lookups need more than the values of a document: they need the text of
each mapping pair so that a subtree can be handed back to the parser as a
standalone document. PyYAML's composer produces exactly that tree -- every
node carries ``start_mark`` and ``end_mark`` positions into the source --
so a :class:`Document` keeps the composed root node next to the text it
came from.

Merge keys (``<<: *base``) are expanded right after composing, the same
way PyYAML's constructor does it, so lookups see the merged pairs.

Documents are cheap and short-lived. Callers build one per query and throw
it away.
"""

from __future__ import annotations

from typing import Iterator

import yaml
from yaml.constructor import SafeConstructor
from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from schemer.exceptions import DocumentParseError

ROOT_MARKER = "#"
"""Identity of the root document in a content snapshot."""

_NULL_TAG = "tag:yaml.org,2002:null"
_MAP_TAG = "tag:yaml.org,2002:map"


class Document:
    """An immutable parse of one YAML text blob.

    Args:
        text: The raw document text.
        source: Identity used in error messages (a path, URL, or ``#``).

    Raises:
        DocumentParseError: If the text is not a single valid YAML document,
            or a merge key does not point at a mapping.
    """

    def __init__(self, text: str, source: str = ROOT_MARKER) -> None:
        self._text = text
        self._source = source
        try:
            self._root: Node | None = yaml.compose(text, Loader=yaml.SafeLoader)
            if self._root is not None:
                _expand_merge_keys(self._root)
        except yaml.YAMLError as exc:
            raise DocumentParseError(source, str(exc)) from exc

    @property
    def text(self) -> str:
        return self._text

    @property
    def source(self) -> str:
        return self._source

    @property
    def root(self) -> Node | None:
        """The composed root node, or ``None`` for an empty document."""
        return self._root

    def pair_text(self, key: Node, value: Node) -> str:
        """Return the text of a mapping pair, from the key to the end of the value.

        Usually this is the source slice with trailing whitespace dropped.
        A slice that would not parse on its own -- it uses an alias or a
        merged pair anchored elsewhere, or the key was written in the
        explicit ``? key`` form -- is serialised from the nodes instead.
        Either way the result parses as a one-entry mapping.
        """
        start = key.start_mark.index
        end = value.end_mark.index
        if self._is_explicit_key(key) or not _within(key, value, start, end):
            return _serialize_pair(key, value)
        return self._text[start:end].rstrip()

    def iter_nodes(self) -> Iterator[Node]:
        """Yield every node in the tree, depth first, each node at most once."""
        if self._root is None:
            return
        yield from _walk(self._root)

    def _is_explicit_key(self, key: Node) -> bool:
        index = key.start_mark.index
        while index > 0 and self._text[index - 1] in " \t":
            index -= 1
        return index > 0 and self._text[index - 1] == "?"


def is_null(node: Node) -> bool:
    """Whether *node* is an explicit or implicit YAML null (``key:``, ``~``, ``null``)."""
    return isinstance(node, ScalarNode) and node.tag == _NULL_TAG


def is_empty(node: Node) -> bool:
    """Whether *node* holds no content: a null or an empty mapping."""
    return is_null(node) or (isinstance(node, MappingNode) and not node.value)


def scalar_key(node: Node) -> str | None:
    """Return the text of a mapping key, or ``None`` for complex (non-scalar) keys."""
    if isinstance(node, ScalarNode):
        return node.value
    return None


def describe(node: Node) -> str:
    """Short human name for a node's kind, used in error messages."""
    if isinstance(node, MappingNode):
        return "a mapping"
    if isinstance(node, ScalarNode):
        return f"the scalar {node.value!r}"
    return "a sequence"


def _walk(root: Node) -> Iterator[Node]:
    seen: set[int] = set()
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        yield node
        if isinstance(node, MappingNode):
            for key, value in reversed(node.value):
                stack.append(value)
                stack.append(key)
        elif isinstance(node.value, list):
            stack.extend(reversed(node.value))


def _expand_merge_keys(root: Node) -> None:
    """Replace ``<<`` pairs with the pairs they merge in.

    Later keys win over earlier ones, as they do when PyYAML constructs a
    dict, so an explicit key overrides the same key brought in by a merge.
    """
    constructor = SafeConstructor()
    for node in list(_walk(root)):
        if not isinstance(node, MappingNode):
            continue
        constructor.flatten_mapping(node)
        last: dict[str, int] = {}
        for index, (key, _) in enumerate(node.value):
            name = scalar_key(key)
            if name is not None:
                last[name] = index
        node.value = [
            (key, value)
            for index, (key, value) in enumerate(node.value)
            if scalar_key(key) is None or last[scalar_key(key)] == index
        ]


def _within(key: Node, value: Node, start: int, end: int) -> bool:
    """Whether every node under the pair was written inside ``[start, end]``.

    An alias node is the anchored node itself, so its marks point back at
    the anchor. A node starting outside the slice means the slice refers to
    something it does not contain.
    """
    for root in (key, value):
        for node in _walk(root):
            if not start <= node.start_mark.index <= end:
                return False
    return True


def _serialize_pair(key: Node, value: Node) -> str:
    pair = MappingNode(_MAP_TAG, [(_unshared(key, {}), _unshared(value, {}))], flow_style=False)
    return yaml.serialize(pair, Dumper=yaml.SafeDumper, allow_unicode=True).rstrip()


def _unshared(node: Node, active: dict[int, Node]) -> Node:
    """Copy *node* so that aliased nodes are written out in full.

    Only a node that contains itself keeps its anchor; *active* holds the
    copies of the nodes currently being copied.
    """
    if id(node) in active:
        return active[id(node)]
    if isinstance(node, ScalarNode):
        return ScalarNode(node.tag, node.value, node.start_mark, node.end_mark, node.style)
    if isinstance(node, MappingNode):
        copy: Node = MappingNode(node.tag, [], node.start_mark, node.end_mark, node.flow_style)
        active[id(node)] = copy
        copy.value = [(_unshared(k, active), _unshared(v, active)) for k, v in node.value]
    else:
        copy = SequenceNode(node.tag, [], node.start_mark, node.end_mark, node.flow_style)
        active[id(node)] = copy
        copy.value = [_unshared(item, active) for item in node.value]
    del active[id(node)]
    return copy
