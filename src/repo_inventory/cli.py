"""CLI for repo-inventory."""

import asyncio
import json
import sys

import click

from repo_inventory.config.logging import configure_logging
from repo_inventory.core.exceptions import ConfigurationError


def run_async(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """repo-inventory: list the repositories of a Bitbucket Cloud account."""
    log_level = "DEBUG" if verbose else "WARNING"
    configure_logging(log_level=log_level)


@cli.command(name="list")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Connection configuration JSON file (default: from settings)",
)
@click.option("--id", "service_id", type=int, default=None, help="External service id")
@click.option("--query", "-q", multiple=True, help="Bitbucket query filter, repeatable")
@click.option("--json", "as_json", is_flag=True, help="Print repositories as JSON")
@click.option("--strict", is_flag=True, help="Exit with status 1 if any page failed")
def list_repos(
    config_path: str | None,
    service_id: int | None,
    query: tuple[str, ...],
    as_json: bool,
    strict: bool,
) -> None:
    """List every repository reachable from a connection.

    Pages that fail are reported on stderr; the repositories that were
    fetched are printed regardless.
    """
    from repo_inventory.config.settings import get_settings
    from repo_inventory.services.inventory import InventoryService

    try:
        service = InventoryService.from_settings(
            get_settings(),
            config_path=config_path,
            service_id=service_id,
            queries=list(query) or None,
        )
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(2)

    async def _list():
        try:
            return await service.list_repos()
        finally:
            await service.close()

    result = run_async(_list())

    if as_json:
        payload = [
            repo.model_dump(mode="json", exclude={"metadata", "sources"})
            for repo in result.repos
        ]
        click.echo(json.dumps(payload, indent=2))
    else:
        for repo in result.repos:
            fork = " (fork)" if repo.fork else ""
            click.echo(f"{repo.name}{fork}")

    if result.error is not None:
        click.echo(f"{len(result.error)} error(s) while listing repositories:", err=True)
        for err in result.error:
            click.echo(f"  - {err}", err=True)
        if strict:
            sys.exit(1)


if __name__ == "__main__":
    cli()
