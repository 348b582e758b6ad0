"""CLI module for mediarig."""

import logging
import sys
from pathlib import Path

import click

from mediarig.cli.exit_codes import ExitCode
from mediarig.config import HarnessConfig, LoggingConfig, get_config

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(
    base: LoggingConfig,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the loaded config and CLI options.

    Args:
        base: Logging section of the loaded configuration.
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    global _logging_configured
    if _logging_configured:
        return

    from mediarig.config.logging_factory import configure_logging_from_cli

    configure_logging_from_cli(
        base,
        level=log_level,
        file=log_file,
        format="json" if log_json else None,
    )
    _logging_configured = True


def load_cli_config(ctx: click.Context) -> HarnessConfig:
    """Return the configuration for a subcommand.

    Tests may place a ready HarnessConfig in ``ctx.obj["config"]``.

    Exits with CONFIG_ERROR when a value from the environment or the
    config file fails validation.
    """
    obj = ctx.ensure_object(dict)
    config = obj.get("config")
    if config is None:
        try:
            config = get_config()
        except ValueError as e:
            click.echo(f"Error: Invalid configuration: {e}", err=True)
            sys.exit(ExitCode.CONFIG_ERROR)
        obj["config"] = config
    return config


@click.group()
@click.version_option(package_name="mediarig")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """mediarig - Run containerised media tools and inspect their output."""
    config = load_cli_config(ctx)
    _configure_logging(config.logging, log_level, log_file, log_json)


# Defer import to avoid circular dependency
def _register_commands():
    from mediarig.cli.doctor import doctor_command
    from mediarig.cli.run import run_command
    from mediarig.cli.sample import sample_command
    from mediarig.cli.unframe import unframe_command

    main.add_command(doctor_command)
    main.add_command(run_command)
    main.add_command(sample_command)
    main.add_command(unframe_command)


_register_commands()
