"""CLI module for vsc."""

import logging
from pathlib import Path

import click

from vsc.cli.exit_codes import ExitCode
from vsc.cli.output import error_exit

logger = logging.getLogger(__name__)


def _configure_logging(
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from CLI options.

    Args:
        config_path: Config file to read the logging section from.
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    from vsc.config.logging_factory import configure_logging_from_cli

    try:
        configure_logging_from_cli(
            config_path=config_path,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    except ValueError as e:
        error_exit(f"Invalid configuration: {e}", ExitCode.CONFIG_ERROR)


@click.group()
@click.version_option(package_name="vsc")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: ~/.vsc/config.toml or VSC_CONFIG_PATH).",
)
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
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Video Standards Compliance - score videos against delivery standards
    and remediate the ones that fall short."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    _configure_logging(config_path, log_level, log_file, log_json)
    logger.debug("vsc starting: subcommand=%s", ctx.invoked_subcommand)


# Defer import to avoid circular dependency
def _register_commands():
    from vsc.cli.inspect import inspect_command
    from vsc.cli.process import process_command
    from vsc.cli.standards import standards_group

    main.add_command(inspect_command)
    main.add_command(process_command)
    main.add_command(standards_group)


_register_commands()
