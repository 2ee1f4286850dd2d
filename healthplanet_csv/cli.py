"""Command line entry point for healthplanet-csv."""

from __future__ import annotations

import logging
import logging.config
import sys
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Dict, Optional, Sequence, Type

import click
from pydantic import ValidationError

from . import __version__
from .errors import (
    AuthExchangeFailed,
    CredentialMissing,
    CredentialPersistError,
    FetchError,
    HealthPlanetError,
    ParseError,
    RefreshFailed,
)
from .healthplanet.application.services import validate_window
from .platform.config import DEFAULT_CONFIG_FILE, Settings, load_settings
from .platform.wiring import (
    get_export_measurements_use_case,
    provide_http_client,
    provide_token_manager,
    provide_token_store,
)

logger = logging.getLogger(__name__)

EXIT_CODES: Dict[Type[HealthPlanetError], int] = {
    CredentialMissing: 1,
    AuthExchangeFailed: 10,
    RefreshFailed: 11,
    CredentialPersistError: 11,
    FetchError: 12,
    ParseError: 13,
}

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "default": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        },
    },
    "formatters": {
        "default": {
            "format": "[%(asctime)s] [%(levelname).1s] (%(name)s) %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "loggers": {
        "": {
            "handlers": ["default"],
            "level": logging.WARNING,
        },
        "httpx": {
            "level": logging.WARNING,
        },
    },
}


def configure_logging(debug: bool = False) -> None:
    logging.config.dictConfig(LOGGING_CONFIG)
    package_logger = logging.getLogger("healthplanet_csv")
    package_logger.setLevel(logging.DEBUG if debug else logging.NOTSET)
    logger.debug("Debug mode enabled")


def exit_code_for(exc: HealthPlanetError) -> int:
    for error_cls, code in EXIT_CODES.items():
        if isinstance(exc, error_cls):
            return code
    return 1


def _load_settings(ctx: click.Context) -> Settings:
    try:
        return load_settings(ctx.obj["config_path"])
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc


@click.group()
@click.version_option(__version__, prog_name="healthplanet-csv")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    help="YAML config file",
)
@click.option("-v", "--debug", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Path, debug: bool) -> None:
    """Export Health Planet body composition data as CSV."""
    configure_logging(debug)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.pass_context
def auth(ctx: click.Context) -> None:
    """Authorize this tool and store the first token."""
    settings = _load_settings(ctx)
    store = provide_token_store(settings)
    if store.exists():
        logger.error(
            "Token file %s already exists. Remove it to authorize again.",
            settings.token_file,
        )
        ctx.exit(EXIT_CODES[AuthExchangeFailed])

    with provide_http_client() as http_client:
        manager = provide_token_manager(settings, http_client)
        click.echo(f"Open the following URL in a browser: {manager.authorization_url()}")
        code = click.prompt("Enter code").strip()
        try:
            manager.authorize(code)
        except HealthPlanetError as exc:
            logger.error("Failed to authenticate with Health Planet: %s", exc)
            ctx.exit(exit_code_for(exc))

    click.echo(f"Authentication successful, token saved to {settings.token_file}")


@cli.command()
@click.option(
    "-f",
    "--from",
    "from_",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="First day (YYYY-MM-DD). Defaults to 90 days before --to.",
)
@click.option(
    "-t",
    "--to",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Last day (YYYY-MM-DD). Defaults to today.",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write CSV to this file instead of stdout",
)
@click.pass_context
def dump(
    ctx: click.Context,
    from_: Optional[datetime],
    to: Optional[datetime],
    output: Optional[Path],
) -> None:
    """Download measurements and print them as CSV."""
    settings = _load_settings(ctx)
    end: date = to.date() if to else date.today()
    start: date = from_.date() if from_ else end - timedelta(days=settings.max_window_days)
    try:
        validate_window(start, end, settings.max_window_days)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--from/--to") from exc

    with provide_http_client() as http_client:
        use_case = get_export_measurements_use_case(settings, http_client)
        try:
            text = use_case(start, end)
        except HealthPlanetError as exc:
            logger.error("Failed to export measurements: %s", exc)
            ctx.exit(exit_code_for(exc))

    if output is None:
        click.echo(text, nl=False)
        return

    output.write_text(text, encoding="utf-8")
    logger.info("Data written to %s", output)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    try:
        result = cli.main(
            args=list(argv) if argv is not None else None,
            prog_name="healthplanet-csv",
            standalone_mode=False,
        )
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    # ctx.exit(code) surfaces here as the return value in non-standalone mode
    return result if isinstance(result, int) else 0


if __name__ == "__main__":  # pragma: no cover - convenience execution path
    sys.exit(main(sys.argv[1:]))
