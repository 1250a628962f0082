"""Config commands -- view and modify global configuration.

Provides the ``zcompgen config`` sub-command group for reading, updating,
and resetting the user's global configuration file
(:class:`~zcompgen.models.GlobalConfig`). Settings are persisted in the
zcompgen config directory and control defaults such as the generated
function prefix.
"""

from __future__ import annotations

import typer

from zcompgen.commands import exit_on_error
from zcompgen.output import format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration.

    Prints the config directory path followed by the configuration after
    project config and environment overrides are applied.

    Example::

        zcompgen config show
    """
    from zcompgen.config import get_config_dir, resolve_config

    with exit_on_error():
        config = resolve_config()
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'generator.function_prefix')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a global configuration value.

    Uses dot notation for nested keys. Boolean fields accept ``true``,
    ``1`` or ``yes``.

    Example::

        zcompgen config set generator.function_prefix myorg
        zcompgen config set generator.attribution false
    """
    from zcompgen.config import load_global_config, save_global_config, set_config_value

    with exit_on_error():
        config = set_config_value(load_global_config(), key, value)
        save_global_config(config)
    success(f"Set {key} = {value}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset configuration to defaults.

    Example::

        zcompgen config reset
        zcompgen config reset --force
    """
    from zcompgen.config import save_global_config
    from zcompgen.models import GlobalConfig

    if not force:
        confirmed = typer.confirm("Reset all config to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
