"""CLI entry point for SprintSync.

- serve: run the webhook server
- resolve: show which sprint dates an issue would get (no writes)
- sync: resolve and write the dates for one issue on demand
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from sprintsync.config import VALID_STRATEGIES, ConfigError, Settings, load_settings
from sprintsync.logging import setup_logging
from sprintsync.resolver import create_resolver
from sprintsync.tracker import TrackerClient
from sprintsync.updater import FieldUpdater

config_option = click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to a YAML config file (environment variables override it)",
)


def _configure_cli_logging(verbose: bool) -> None:
    """Configure console logging for one-shot commands.

    Args:
        verbose: Whether to enable debug logging.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(config_path: Path | None) -> Settings:
    try:
        return load_settings(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="sprintsync")
def main() -> None:
    """SprintSync - keep Jira task dates in step with their sprints."""
    pass


@main.command()
@config_option
@click.option("--host", default=None, help="Interface to bind (default: from config)")
@click.option("--port", type=int, default=None, help="Port to listen on (default: from config)")
def serve(config_path: Path | None, host: str | None, port: int | None) -> None:
    """Run the webhook server."""
    import uvicorn  # noqa: PLC0415

    from sprintsync.api import create_app  # noqa: PLC0415

    settings = _load(config_path)
    if host:
        settings.server.host = host
    if port:
        settings.server.port = port

    setup_logging(log_dir=settings.server.log_dir, level=settings.server.log_level)
    click.echo(
        f"Listening for Jira webhooks on "
        f"http://{settings.server.host}:{settings.server.port}/jira-webhook"
    )
    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.server.log_level.lower(),
    )


@main.command()
@click.argument("issue_key")
@config_option
@click.option(
    "--strategy",
    type=click.Choice(VALID_STRATEGIES, case_sensitive=False),
    default=None,
    help="Resolution strategy (default: from config)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def resolve(
    issue_key: str, config_path: Path | None, strategy: str | None, verbose: bool
) -> None:
    """Show the sprint dates ISSUE_KEY would be given, without writing them."""
    _configure_cli_logging(verbose)
    settings = _load(config_path)

    client = TrackerClient(settings.tracker)
    try:
        resolver = create_resolver(client, (strategy or settings.tracker.strategy).lower())
        dates = resolver.resolve(issue_key)
    finally:
        client.close()

    if dates is None:
        click.echo(f"No sprint dates found for {issue_key}", err=True)
        sys.exit(1)

    click.echo(f"{issue_key}: start {dates.start}, due {dates.end} (sprint {dates.sprint_id})")


@main.command()
@click.argument("issue_key")
@config_option
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def sync(issue_key: str, config_path: Path | None, verbose: bool) -> None:
    """Resolve sprint dates for ISSUE_KEY and write them to the issue."""
    _configure_cli_logging(verbose)
    settings = _load(config_path)

    client = TrackerClient(settings.tracker)
    try:
        dates = create_resolver(client, settings.tracker.strategy).resolve(issue_key)
        if dates is None:
            click.echo(f"No sprint dates found for {issue_key}", err=True)
            sys.exit(1)

        update = FieldUpdater(client, settings.tracker.start_date_field).apply_dates(
            issue_key, dates
        )
    finally:
        client.close()

    if not update.success:
        click.echo(f"Failed to update {issue_key}", err=True)
        sys.exit(1)

    for field_id, value in update.fields.items():
        click.echo(f"  {field_id} = {value}")
    click.echo(f"Updated {issue_key}")


if __name__ == "__main__":
    main()
