"""Config commands -- view and modify global configuration.

Provides the ``schemer config`` sub-command group for reading, updating,
and resetting the user's global configuration file
(:class:`~schemer.models.GlobalConfig`). Settings are persisted in the
schemer config directory and control defaults such as the output format
and whether ``$ref`` discovery is recursive.
"""

from __future__ import annotations

import typer
from pydantic import ValidationError

from schemer.exceptions import InvalidUsageError
from schemer.models import GlobalConfig
from schemer.output import error, info, print_structured, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(
    effective: bool = typer.Option(
        False,
        "--effective",
        help="Show the merged result of global, project, and environment settings.",
    ),
) -> None:
    """Show current configuration.

    Prints the config directory path to stderr and the configuration to
    stdout. With ``--effective`` the project file and environment variables
    are applied first.

    Example::

        schemer config show
        schemer config show --effective --json
    """
    from schemer.config import get_config_dir, load_global_config, resolve_config
    from schemer.exceptions import ConfigError

    try:
        config = resolve_config() if effective else load_global_config()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    info(f"Config directory: {get_config_dir()}")
    print_structured(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'discovery.recursive')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    Uses dot notation for nested keys. The value is coerced to match the
    existing field's type (bool, int, or str) and the updated config is
    validated against :class:`~schemer.models.GlobalConfig` before saving.

    Raises:
        typer.Exit: With code 2 if the key path is invalid, the value
            cannot be coerced, or Pydantic validation fails.

    Example::

        schemer config set output.format json
        schemer config set discovery.recursive false
        schemer config set discovery.timeout 60
    """
    from schemer.config import load_global_config, save_global_config
    from schemer.exceptions import SchemerError

    try:
        new_config, coerced = _apply_setting(load_global_config(), key, value)
    except SchemerError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


def _apply_setting(
    config: GlobalConfig, key: str, value: str
) -> tuple[GlobalConfig, bool | int | str]:
    """Return a copy of *config* with the dotted *key* set to *value*.

    Raises:
        InvalidUsageError: If the key is unknown, names a section, the value
            cannot be coerced, or the result fails validation.
    """
    data = config.model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            raise InvalidUsageError(f"Invalid config key: {key}")
        target = target[k]

    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        raise InvalidUsageError(f"Unknown config key: {key}")

    current = target[final_key]
    coerced: bool | int | str
    if isinstance(current, bool):
        coerced = value.lower() in ("true", "1", "yes", "on")
    elif isinstance(current, int):
        try:
            coerced = int(value)
        except ValueError:
            raise InvalidUsageError(f"Expected integer for {key}, got: {value}") from None
    else:
        coerced = value

    target[final_key] = coerced

    try:
        return GlobalConfig.model_validate(data), coerced
    except ValidationError as exc:
        raise InvalidUsageError(f"Validation error: {exc}") from exc


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset configuration to defaults.

    Replaces the persisted global config with a fresh
    :class:`~schemer.models.GlobalConfig`. Asks for confirmation unless
    ``--force`` is given.

    Example::

        schemer config reset --force
    """
    from schemer.config import save_global_config

    if not force:
        confirmed = typer.confirm("Reset all config to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
