"""CLI entry point for the CredHub client."""

import sys

import click

from credhub_client.cli.retrieval import find_command, get_by_id_command, get_command, paths_command
from credhub_client.config.settings import ClientSettings
from credhub_client.exceptions import ConfigurationError
from credhub_client.utils.logging_config import configure_logging, get_logger

log = get_logger(__name__)


@click.group()
@click.option(
    "--config",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path to YAML configuration file (default: CREDHUB_* environment variables)",
)
@click.option("--log-level", default="WARNING", help="Logging level")
@click.pass_context
def cli(ctx: click.Context, config: str | None, log_level: str) -> None:
    """credhub-client: read credentials from a CredHub server."""
    configure_logging(log_level)

    try:
        settings = ClientSettings.from_yaml(config) if config else ClientSettings()
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug("config_error", exc_info=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error: incomplete configuration: {e}", err=True)
        log.debug("config_error", exc_info=True)
        sys.exit(1)

    ctx.obj = {"settings": settings}


cli.add_command(find_command)
cli.add_command(paths_command)
cli.add_command(get_command)
cli.add_command(get_by_id_command)


if __name__ == "__main__":
    cli()
