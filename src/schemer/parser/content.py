"""An immutable snapshot of every document a spec can reach through ``$ref``.

Walkers never touch the file system. Before a walk starts, a
:class:`ContentProvider` is built from the root document: the root is read,
every external ``$ref`` in it is collected with
:func:`~schemer.parser.query.find_refs`, and each target is loaded eagerly.
By default discovery is recursive -- targets are scanned for further
references in turn -- so any reference a walker meets later has already been
fetched. With ``recursive=False`` only the root's own references are
loaded, and a walker that reaches a deeper reference fails with
:class:`~schemer.exceptions.UnresolvedReferenceError`.

Relative references in the root document resolve against the root's
directory (or URL). References inside any other document resolve against
that document's own directory, so a nested file can point at
``../components.yaml``. Discovery and :meth:`ContentProvider.resolve` apply
the same rule.

Typical usage::

    provider = ContentProvider.from_source("specs/openapi.yaml")
    root = provider.root
    doc = provider.resolve("resources/pets.yaml")
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from schemer.exceptions import UnresolvedReferenceError
from schemer.parser.document import ROOT_MARKER, Document
from schemer.parser.loader import base_of, canonicalize, join_reference, read_source
from schemer.parser.query import find_refs

logger = logging.getLogger(__name__)


def is_local_fragment(reference: str) -> bool:
    """Whether *reference* points inside the same document (``#/components/...``)."""
    return reference.startswith(ROOT_MARKER)


class ContentProvider:
    """Read-only map from document identity to raw text.

    The root document is stored twice: under its canonical identity and
    under the root marker ``#``. Instances are never mutated after
    construction and can be shared by any number of walkers.

    Args:
        contents: Identity to text. Must contain the root marker.
        base: The directory or URL that relative references resolve against.
    """

    def __init__(self, contents: Mapping[str, str], base: str) -> None:
        if ROOT_MARKER not in contents:
            raise ValueError("Content snapshot has no root document")
        self._contents = MappingProxyType(dict(contents))
        self._base = base

    @classmethod
    def from_source(
        cls,
        source: str,
        recursive: bool = True,
        timeout: float = 30.0,
    ) -> ContentProvider:
        """Read *source* and eagerly load every document it references.

        Args:
            source: Path or http(s) URL of the root document.
            recursive: Also scan loaded documents for further references.
            timeout: Timeout in seconds for documents fetched over HTTP.

        Returns:
            The populated snapshot.

        Raises:
            ContentLoadError: If the root or any referenced document cannot
                be read.
            DocumentParseError: If a scanned document is not valid YAML.
        """
        root_identity = canonicalize(source)
        base = base_of(root_identity)
        root_text = read_source(root_identity, timeout=timeout)
        contents: dict[str, str] = {ROOT_MARKER: root_text, root_identity: root_text}
        logger.debug("Loaded root document %s", root_identity)

        pending = [(root_identity, root_text)]
        while pending:
            identity, text = pending.pop(0)
            document = Document(text, identity)
            for target in _external_targets(document, base_of(identity)):
                if target in contents:
                    continue
                target_text = read_source(target, timeout=timeout)
                contents[target] = target_text
                logger.debug("Loaded %s (referenced from %s)", target, identity)
                if recursive:
                    pending.append((target, target_text))

        return cls(contents, base)

    @classmethod
    def from_mapping(cls, contents: Mapping[str, str], base: str = ".") -> ContentProvider:
        """Build a snapshot from text that is already in memory.

        Keys other than the root marker are canonicalised against *base*,
        so ``{"#": root, "Paths.yaml": paths}`` works as written.
        """
        normalised: dict[str, str] = {}
        base_identity = canonicalize(base)
        for identity, text in contents.items():
            if identity == ROOT_MARKER:
                normalised[identity] = text
            else:
                normalised[join_reference(base_identity, identity)] = text
        return cls(normalised, base_identity)

    @property
    def root(self) -> Document:
        """The root document, freshly parsed."""
        return Document(self._contents[ROOT_MARKER], ROOT_MARKER)

    @property
    def base(self) -> str:
        return self._base

    def identities(self) -> list[str]:
        """Every identity in the snapshot, the root marker included."""
        return list(self._contents)

    def get(self, identity: str) -> str | None:
        return self._contents.get(identity)

    def __contains__(self, identity: object) -> bool:
        return identity in self._contents

    def __len__(self) -> int:
        return len(self._contents)

    def resolve(self, reference: str, referrer: str = ROOT_MARKER) -> Document:
        """Return the document a ``$ref`` points at.

        Args:
            reference: The reference text, quotes already stripped.
            referrer: Identity of the document the reference was written
                in. Relative references resolve against its directory; the
                root marker means the root's base.

        Returns:
            A freshly parsed :class:`~schemer.parser.document.Document`.

        Raises:
            UnresolvedReferenceError: If the reference is a same-document
                fragment, carries a fragment into another document, or
                names a document that was not loaded during discovery.
        """
        if reference == ROOT_MARKER:
            return self.root
        if is_local_fragment(reference):
            raise UnresolvedReferenceError(
                reference, "same-document fragments are not followed"
            )
        if "#" in reference:
            raise UnresolvedReferenceError(
                reference, "fragments inside other documents are not followed"
            )

        base = self._base if referrer == ROOT_MARKER else base_of(referrer)
        identity = join_reference(base, reference)
        text = self._contents.get(identity)
        if text is None:
            raise UnresolvedReferenceError(reference, f"document '{identity}' was not pre-loaded")
        logger.debug("Following $ref %s -> %s", reference, identity)
        return Document(text, identity)


def _external_targets(document: Document, base: str) -> list[str]:
    """Canonical identities of the external documents *document* references."""
    targets: list[str] = []
    for reference in find_refs(document):
        if is_local_fragment(reference):
            continue
        path = reference.split("#", 1)[0]
        if not path:
            continue
        target = join_reference(base, path)
        if target not in targets:
            targets.append(target)
    return targets
