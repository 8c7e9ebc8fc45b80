"""CLI for kubie using Click.

Exposes the resolved settings path, the effective settings and the set of
active kubeconfig files.
"""

import sys
from pathlib import Path

import click
import yaml

from kubie.config import (
    ConfigError,
    ContextHeaderBehavior,
    KubieSettings,
    SettingsLocator,
    default_settings,
    load_settings,
    resolve_config_paths,
)
from kubie.config.merge import deep_merge
from kubie.logging_config import setup_logging


@click.group()
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Use specific settings file (skips discovery)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, config_file: Path | None, verbose: bool) -> None:
    """kubie - settings and kubeconfig discovery."""
    setup_logging(verbose=verbose)

    # Ensure ctx.obj exists
    ctx.ensure_object(dict)

    # Resolved once per process and shared by every lookup
    home = Path.home()
    locator = SettingsLocator(home=home)
    ctx.obj["home"] = home
    ctx.obj["locator"] = locator
    ctx.obj["config_file"] = config_file

    # init writes the settings file, so it must not require a valid one
    if ctx.invoked_subcommand == "init":
        return

    try:
        settings = load_settings(locator, explicit_config=config_file)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    ctx.obj["settings"] = settings


@cli.command("settings-path")
@click.pass_context
def settings_path(ctx: click.Context) -> None:
    """Print the path of the settings file in use.

    The file may not exist, in which case defaults are in effect.
    """
    config_file: Path | None = ctx.obj["config_file"]
    locator: SettingsLocator = ctx.obj["locator"]
    click.echo(str(config_file or locator.resolve_settings_path()))


@cli.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """Print the effective settings as YAML."""
    settings: KubieSettings = ctx.obj["settings"]
    click.echo(
        yaml.safe_dump(settings.model_dump(mode="json"), sort_keys=False),
        nl=False,
    )


@cli.command()
@click.pass_context
def configs(ctx: click.Context) -> None:
    """List the active kubeconfig files.

    Files come from KUBECONFIG and the include patterns in the settings
    file, minus anything matched by the exclude patterns.

    Examples:

        \b
        # Files kubie would offer contexts from
        kubie configs

        \b
        # With an extra directory of cluster configs
        KUBECONFIG=~/clusters kubie configs
    """
    settings: KubieSettings = ctx.obj["settings"]
    home: Path = ctx.obj["home"]

    try:
        paths = resolve_config_paths(settings, home)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for path in sorted(paths):
        click.echo(str(path))


@cli.command()
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    help="Accept all defaults without prompting",
)
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite existing settings file",
)
@click.pass_context
def init(ctx: click.Context, yes: bool, force: bool) -> None:
    """Write a default settings file.

    The file is created at the resolved settings path (see
    `kubie settings-path`). By default, interactively prompts for a few
    common settings.

    Examples:

        \b
        # Interactive setup
        kubie init

        \b
        # Accept all defaults
        kubie init -y

        \b
        # Overwrite existing settings
        kubie init --force
    """
    locator: SettingsLocator = ctx.obj["locator"]
    settings_file = locator.resolve_settings_path()

    if settings_file.exists() and not force:
        click.echo(f"Settings file already exists: {settings_file}")
        if not click.confirm("Overwrite?", default=False):
            click.echo("Aborted.")
            sys.exit(0)

    try:
        defaults = default_settings()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    overrides: dict = {}
    if yes:
        click.echo("Using default settings...")
    else:
        click.echo("Configure kubie settings (press Enter to accept defaults):\n")

        shell = click.prompt("Shell (empty to detect)", default="", show_default=False)
        editor = click.prompt(
            "Default editor (empty to use $EDITOR)", default="", show_default=False
        )
        header = click.prompt(
            "Print context header in exec",
            type=click.Choice([mode.value for mode in ContextHeaderBehavior]),
            default=ContextHeaderBehavior.AUTO.value,
        )
        click.echo()

        overrides = {
            "shell": shell or None,
            "default_editor": editor or None,
            "behavior": {"print_context_in_exec": header},
        }

    document = deep_merge(defaults.model_dump(mode="json"), overrides)

    settings_file.parent.mkdir(parents=True, exist_ok=True)
    settings_file.write_text(
        "# kubie settings\n" + yaml.safe_dump(document, sort_keys=False)
    )

    click.echo(f"Created settings file: {settings_file}")


if __name__ == "__main__":
    cli()
