"""Command-line tool: get an item from a DynamoDB table by its primary key."""

import logging
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError as PydanticValidationError

from .config import DynamoDBConfig
from .core import DynamoDBClient, ItemFetcher
from .exceptions import DynamoDBLookupError
from .models import Found
from .utils import parse_projection, render_item, timed

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "dynamodb_lookup"

app = typer.Typer(
    help="Get an item from a DynamoDB table by its primary key.",
    add_completion=False,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Debug output is limited to this package; botocore stays at WARNING
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.NOTSET)


def _fail(message: str) -> NoReturn:
    typer.echo(f"Failed to get item: {message}", err=True)
    raise typer.Exit(1)


def _build_config(local: bool, endpoint_url: Optional[str], region: Optional[str]) -> DynamoDBConfig:
    config = DynamoDBConfig.for_local_development() if local else DynamoDBConfig.from_env()
    if endpoint_url:
        config.endpoint_url = endpoint_url
    if region:
        config.region_name = region
    return config


@app.command()
def get_item(
    table: str = typer.Argument(..., help="The table to get an item from."),
    name: str = typer.Argument(..., help="The item to get."),
    projection_expression: Optional[str] = typer.Argument(
        None, help='Quote-delimited, comma-separated attributes to retrieve, e.g. "default, bold".'
    ),
    key_name: str = typer.Option("Name", "--key-name", help="Name of the table's partition key attribute."),
    consistent_read: bool = typer.Option(False, "--consistent-read", help="Use a strongly consistent read."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Deadline for the request in seconds (one attempt, no retries)."),
    endpoint_url: Optional[str] = typer.Option(None, "--endpoint-url", help="Override the DynamoDB endpoint."),
    region: Optional[str] = typer.Option(None, "--region", help="AWS region to use."),
    local: bool = typer.Option(False, "--local", help="Use DynamoDB Local at http://localhost:8000."),
    timing: bool = typer.Option(False, "--timing", help="Print how long the lookup took."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """
    Get an item from TABLE whose key attribute equals NAME.

    All attributes are printed unless PROJECTION_EXPRESSION limits them.

    Example:
        get-item HelloTable World
        get-item SiteColors text "default, bold"
    """
    try:
        config = _build_config(local, endpoint_url, region)
    except PydanticValidationError as e:
        _fail(f"invalid configuration: {e}")

    _configure_logging(verbose or config.enable_debug_logging)

    with DynamoDBClient(config) as client:
        fetcher = ItemFetcher(client)
        fetch = fetcher.fetch
        if timing:
            fetch = timed(fetcher.fetch, on_elapsed=lambda _, elapsed_us: typer.echo(f"Elapsed = {elapsed_us}[µs]"))

        try:
            result = fetch(
                config.get_table_name(table),
                {key_name: name},
                parse_projection(projection_expression),
                consistent_read=consistent_read,
                timeout=timeout,
            )
        except DynamoDBLookupError as e:
            logger.debug(f"Lookup failed: {e!r}")
            _fail(e.message)

    if isinstance(result, Found):
        for line in render_item(result.item):
            typer.echo(line)
    else:
        typer.echo(f"No item found with the key {name}")


if __name__ == "__main__":
    app()
