"""The three walkers: paths, operations, and schemas.

Each walker composes the lookups in :mod:`schemer.parser.query` into one
fixed traversal of the OpenAPI shape, following ``$ref`` pointers through a
:class:`~schemer.parser.content.ContentProvider` as it goes.

Typical usage::

    from schemer.parser import ContentProvider
    from schemer.walker import OperationWalker

    provider = ContentProvider.from_source("openapi.yaml")
    print(OperationWalker(provider).list())
"""

from schemer.models import NodeKind
from schemer.walker.base import Walker
from schemer.walker.operations import OperationWalker
from schemer.walker.paths import PathWalker
from schemer.walker.schemas import SchemaWalker

WALKERS: dict[NodeKind, type[Walker]] = {
    NodeKind.PATH: PathWalker,
    NodeKind.OPERATION: OperationWalker,
    NodeKind.SCHEMA: SchemaWalker,
}

__all__ = ["WALKERS", "OperationWalker", "PathWalker", "SchemaWalker", "Walker"]
