"""Canonical Pydantic models shared across all schemer modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`OutputConfig`, :class:`DiscoveryConfig`, and :class:`GlobalConfig`.

**Lookup results** -- produced by :mod:`schemer.parser.query`:
    :class:`Children` and :class:`Reference`, joined in the closed union
    :data:`LookupResult`. Every call site handles both cases explicitly.

**Walker output** -- produced by :mod:`schemer.walker`:
    :class:`NodeKind`, :class:`ExtractedNode`, and :class:`ListResult`.
"""

from __future__ import annotations

import enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


# --- Config ---


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class DiscoveryConfig(BaseModel):
    """How ``$ref`` targets are discovered and fetched before a walk starts."""

    recursive: bool = Field(
        default=True,
        description="Also scan referenced documents for further $ref targets",
    )
    timeout: int = Field(
        default=30, description="Timeout in seconds for documents fetched over HTTP"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/schemer/config.json``.

    Loaded and saved by :func:`~schemer.config.load_global_config` and
    :func:`~schemer.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by project config, environment
    variables, or CLI flags. See :func:`~schemer.config.resolve_config`
    for the full precedence chain.
    """

    output: OutputConfig = Field(default_factory=OutputConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)


# --- Lookup results ---


class Children(BaseModel):
    """The immediate children of a mapping, keyed by child key.

    Each value is the text of the child's whole mapping pair, key included
    (``"get:\\n  operationId: listPets"``), so it can be parsed again as a
    standalone one-entry document. It is the source slice unless that slice
    leans on an anchor outside it, in which case the pair is re-serialised.
    """

    model_config = ConfigDict(frozen=True)

    entries: dict[str, str] = Field(default_factory=dict)
    source: str = Field(default="#", description="Identity of the document the entries came from")

    def keys(self) -> list[str]:
        return list(self.entries)

    def get(self, key: str) -> str | None:
        return self.entries.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)


class Reference(BaseModel):
    """A ``$ref`` that stands in for a mapping's content.

    ``target`` is the pointer text with surrounding quotes removed. It may be
    a relative path, an absolute path or URL, or a ``#`` fragment.
    """

    model_config = ConfigDict(frozen=True)

    target: str


LookupResult = Union[Children, Reference]
"""Either the children of a mapping or the reference that replaces them."""


# --- Walker output ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised as operations inside an OpenAPI path item."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class NodeKind(str, enum.Enum):
    """What a walker extracted."""

    PATH = "path"
    OPERATION = "operation"
    SCHEMA = "schema"


class ExtractedNode(BaseModel):
    """A named leaf found at the bottom of a walk."""

    model_config = ConfigDict(frozen=True)

    kind: NodeKind
    name: str


class ListResult(BaseModel):
    """Ordered names returned by one walker, ready for display.

    ``str(result)`` is the newline-joined list, which is exactly what plain
    output prints.
    """

    kind: NodeKind
    entries: list[str] = Field(default_factory=list)

    @classmethod
    def from_nodes(cls, kind: NodeKind, nodes: list[ExtractedNode]) -> ListResult:
        return cls(kind=kind, entries=[node.name for node in nodes])

    def __str__(self) -> str:
        return "\n".join(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
