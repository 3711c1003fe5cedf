"""CLI entry point for openapi-cli."""

from pathlib import Path

import click

from openapi_cli.config import Settings
from openapi_cli.errors import OpenAPICliError
from openapi_cli.logging import configure_logging
from openapi_cli.runner import get_schema, list_files, run

FILES = click.argument(
    "files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path)
)


@click.group()
@click.option("--log-level", default=None, help="Logging level (default: OPENAPI_LOG_LEVEL or WARNING).")
@click.pass_context
def main(ctx: click.Context, log_level: str | None):
    """openapi-cli: list, describe and call operations of OpenAPI 3 documents."""
    settings = Settings()
    configure_logging(log_level or settings.log_level)
    ctx.obj = settings


@main.command(name="list")
@FILES
def list_cmd(files: tuple[Path, ...]):
    """Print the operations declared in each file."""
    try:
        listings = list_files(files)
    except OpenAPICliError as e:
        raise click.ClickException(str(e)) from e
    for listing in listings:
        click.echo(listing)


@main.command(name="get-schema")
@click.argument("operation_id")
@FILES
def get_schema_cmd(operation_id: str, files: tuple[Path, ...]):
    """Print the JSON Schema of an operation's arguments."""
    try:
        click.echo(get_schema(operation_id, files))
    except OpenAPICliError as e:
        raise click.ClickException(str(e)) from e


@main.command(name="run")
@click.argument("operation_id")
@click.argument("args")
@FILES
@click.option("--default-host", default=None, help="Base URL for documents that declare no servers.")
@click.pass_obj
def run_cmd(
    settings: Settings, operation_id: str, args: str, files: tuple[Path, ...], default_host: str | None
):
    """Call an operation with a JSON object of arguments and print the response body."""
    config = settings.request_config(default_host=default_host)
    try:
        click.echo(run(operation_id, args, files, config))
    except OpenAPICliError as e:
        raise click.ClickException(str(e)) from e
