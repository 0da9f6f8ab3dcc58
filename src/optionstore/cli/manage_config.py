#!/usr/bin/env python3
"""Command line tools for inspecting and migrating option store config files."""

import importlib
import json
import os
import sys
from pathlib import Path
from typing import Any

import click

from optionstore.config import Config, LoadStatus
from optionstore.document import codec_for_path
from optionstore.errors import OptionStoreError
from optionstore.migrations import VERSION_KEY, MigrationEngine
from optionstore.settings import StoreSettings
from optionstore.storage import CONFIG_DIR_ENV
from optionstore.utils.structlog_configurator import configure_structlog, get_logger

logger = get_logger(__name__)


def resolve_config(target: str) -> Config:
    """Import ``module:attribute`` and return the Config it names.

    The attribute may be a Config or a zero-argument callable returning one.
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise click.BadParameter(f"Expected 'module:attribute', got '{target}'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import module '{module_name}': {e}") from e

    obj: Any = module
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise click.BadParameter(f"'{module_name}' has no attribute '{attribute}'") from e

    if not isinstance(obj, Config) and callable(obj):
        obj = obj()
    if not isinstance(obj, Config):
        raise click.BadParameter(f"'{target}' is not a Config")
    return obj


def print_load_result(config: Config, status: LoadStatus, errors: dict[str, Any]) -> None:
    """Print a one-line load summary plus any per-option errors."""
    color = {LoadStatus.LOADED: "green", LoadStatus.MISSING: "yellow"}.get(status, "red")
    click.echo(click.style(f"{config.filename}: {status.value}", fg=color))
    for key, error in errors.items():
        click.echo(click.style(f"  ✗ {key}: {error}", fg="red"), err=True)


@click.group()
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Base config directory (sets OPTIONSTORE_CONFIG_DIR before importing targets).",
)
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ...).")
@click.option("--json-logs/--no-json-logs", default=None, help="Render logs as JSON.")
@click.pass_context
def cli(
    ctx: click.Context, config_dir: Path | None, log_level: str | None, json_logs: bool | None
) -> None:
    """Inspect and migrate option store config files."""
    if config_dir is not None:
        os.environ[CONFIG_DIR_ENV] = str(config_dir)

    settings = StoreSettings.from_env()
    overrides: dict[str, Any] = {}
    if log_level is not None:
        overrides["level"] = log_level
    if json_logs is not None:
        overrides["json_logs"] = json_logs
    if overrides:
        try:
            logging_config = settings.logging.model_validate(
                {**settings.logging.model_dump(), **overrides}
            )
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--log-level") from e
        settings = settings.model_copy(update={"logging": logging_config})

    configure_structlog(settings)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@click.argument("target")
def show(target: str) -> None:
    """Load a config and print its current values.

    TARGET: Config to load, as 'module:attribute'
    """
    config = resolve_config(target)
    result = config.load()
    print_load_result(config, result.status, result.option_errors)
    if result.error is not None:
        click.echo(click.style(f"Error: {result.error}", fg="red"), err=True)
    click.echo(json.dumps(config.to_document(), indent=2, ensure_ascii=False))


@cli.command()
@click.argument("target")
def migrate(target: str) -> None:
    """Load a config, upgrade it to the current version, and save it.

    TARGET: Config to migrate, as 'module:attribute'
    """
    config = resolve_config(target)
    result = config.load()
    print_load_result(config, result.status, result.option_errors)

    if result.status is LoadStatus.FAILED:
        click.echo(click.style(f"✗ Migration failed: {result.error}", fg="red"), err=True)
        sys.exit(1)
    if result.status is LoadStatus.MISSING:
        click.echo("Nothing to migrate")
        return

    try:
        config.save()
    except OSError as e:
        click.echo(click.style(f"✗ Could not save {config.config_path}: {e}", fg="red"), err=True)
        sys.exit(1)

    logger.info(
        "Config migrated",
        filename=config.filename,
        from_version=result.document_version,
        to_version=config.version,
    )
    click.echo(
        click.style(
            f"✓ Migrated from version {result.document_version} to {config.version}", fg="green"
        )
    )


@cli.command()
@click.argument("target")
@click.confirmation_option(prompt="Overwrite the stored config with default values?")
def reset(target: str) -> None:
    """Write a config file containing only default values.

    TARGET: Config to reset, as 'module:attribute'
    """
    config = resolve_config(target)
    config.registry.reset_all()
    try:
        config.save()
    except OSError as e:
        click.echo(click.style(f"✗ Could not save {config.config_path}: {e}", fg="red"), err=True)
        sys.exit(1)
    click.echo(click.style(f"✓ Reset {config.config_path}", fg="green"))


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(path: Path) -> None:
    """Print the version and keys of a raw config document.

    PATH: Config document to inspect
    """
    try:
        document = codec_for_path(path).decode(path.read_bytes())
    except (OSError, OptionStoreError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    # Only reads the version; no schema is known here
    version = MigrationEngine().document_version(document)
    click.echo(f"Version: {version}")
    for key, value in document.items():
        if key == VERSION_KEY:
            continue
        click.echo(f"  {key}: {json.dumps(value, ensure_ascii=False, default=str)}")


def main() -> None:
    """Entry point for the optionstore command."""
    cli(obj={})


if __name__ == "__main__":
    main()
