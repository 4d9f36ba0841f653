"""Built-in CLI sub-commands for schemer.

This package groups the Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~schemer.commands.listing` -- ``path list``, ``operation list``,
  and ``schema list`` for a root OpenAPI document.
* :mod:`~schemer.commands.config` -- view and modify global settings.

Each module exports :class:`typer.Typer` sub-applications that
:func:`schemer.app.main` attaches to the root app.
"""
