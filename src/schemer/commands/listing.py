"""List commands -- paths, operations, and schemas of an OpenAPI spec.

Provides the ``schemer path``, ``schemer operation``, and ``schemer schema``
sub-command groups. Each has a single ``list`` command taking the root
document. All three build the content snapshot for that document, run the
matching walker, and print the extracted names.
"""

from __future__ import annotations

import typer

from schemer.models import NodeKind
from schemer.output import debug, error, get_output, suggest


path_app = typer.Typer(no_args_is_help=True)
operation_app = typer.Typer(no_args_is_help=True)
schema_app = typer.Typer(no_args_is_help=True)

_SOURCE_HELP = "Root OpenAPI document (YAML or JSON file path, or http(s) URL)."


def _list(ctx: typer.Context, kind: NodeKind, source: str) -> None:
    """Load *source*, run the walker for *kind*, and print the result.

    Any :class:`~schemer.exceptions.SchemerError` is reported once on
    stderr and turned into a :class:`typer.Exit` carrying the error's exit
    code; no partial list is ever printed.

    Args:
        ctx: Typer context carrying the root options.
        kind: Which walker to run.
        source: Path or URL of the root document.

    Raises:
        typer.Exit: With the error's exit code when the walk fails.
    """
    from schemer.config import resolve_config
    from schemer.exceptions import SchemerError, UnresolvedReferenceError
    from schemer.parser import ContentProvider
    from schemer.walker import WALKERS

    obj = ctx.obj or {}
    recursive: bool | None = obj.get("recursive")
    try:
        config = resolve_config(cli_recursive=recursive)
        debug(
            f"Building content snapshot for {source} "
            f"(recursive={config.discovery.recursive})"
        )
        provider = ContentProvider.from_source(
            source,
            recursive=config.discovery.recursive,
            timeout=config.discovery.timeout,
        )
        debug(f"Loaded {len(provider) - 1} document(s)")
        result = WALKERS[kind](provider).list()
    except SchemerError as exc:
        error(str(exc))
        if isinstance(exc, UnresolvedReferenceError) and recursive is False:
            suggest("Drop --no-recursive to load references inside referenced documents")
        raise typer.Exit(code=exc.exit_code) from None

    debug(f"Found {len(result)} {kind.value}(s)")
    get_output().print_list(result)


@path_app.command("list")
def list_paths(
    ctx: typer.Context,
    source: str = typer.Argument(help=_SOURCE_HELP),
) -> None:
    """List the paths for a spec.

    Prints every key under ``paths``, following a ``$ref`` if ``paths``
    lives in another document.

    Example::

        schemer path list openapi.yaml
    """
    _list(ctx, NodeKind.PATH, source)


@operation_app.command("list")
def list_operations(
    ctx: typer.Context,
    source: str = typer.Argument(help=_SOURCE_HELP),
) -> None:
    """List the operations for a spec.

    Prints the ``operationId`` of every HTTP method under every path, in
    document order.

    Example::

        schemer operation list openapi.yaml --json
    """
    _list(ctx, NodeKind.OPERATION, source)


@schema_app.command("list")
def list_schemas(
    ctx: typer.Context,
    source: str = typer.Argument(help=_SOURCE_HELP),
) -> None:
    """List the schemas for a spec.

    Prints every key under ``components.schemas``.

    Example::

        schemer schema list openapi.yaml
    """
    _list(ctx, NodeKind.SCHEMA, source)
