"""Document parsing, key lookups, and ``$ref`` content resolution.

This sub-package is the lower half of the schemer pipeline. It turns raw
YAML/JSON text into :class:`~schemer.parser.document.Document` trees,
answers one-level key lookups over them, and provides the content snapshot
that ``$ref`` pointers are resolved against.

Typical usage::

    from schemer.parser import ContentProvider, lookup_children

    provider = ContentProvider.from_source("openapi.yaml")
    result = lookup_children(provider.root, "paths")

Sub-modules:

* :mod:`~schemer.parser.document` -- PyYAML node tree plus source spans.
* :mod:`~schemer.parser.query` -- :func:`lookup_children`,
  :func:`top_level_children`, :func:`scalar_value`, :func:`find_refs`.
* :mod:`~schemer.parser.loader` -- I/O layer (file or URL) and path
  canonicalisation.
* :mod:`~schemer.parser.content` -- :class:`ContentProvider` snapshot with
  eager reference discovery.
"""

from schemer.parser.content import ContentProvider
from schemer.parser.document import ROOT_MARKER, Document
from schemer.parser.query import find_refs, lookup_children, scalar_value, top_level_children

__all__ = [
    "ROOT_MARKER",
    "ContentProvider",
    "Document",
    "find_refs",
    "lookup_children",
    "scalar_value",
    "top_level_children",
]
