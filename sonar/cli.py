"""CLI entry point — command definitions using Click.

Commands:
    init          Generate a template config file
    fetch         Fetch a radar and print its parsed fields
    create        Submit a radar described by a YAML draft
"""

import functools
import json
import sys
from typing import Any

import click

from sonar import __version__


# ---------------------------------------------------------------------------
# Helpers shared by all data commands
# ---------------------------------------------------------------------------

def _make_tracker(ctx: click.Context):
    """Load config and return a ready OpenRadar tracker. Exits on error."""
    from sonar.config import ConfigError, load
    from sonar.trackers.openradar import OpenRadar

    obj = ctx.obj
    try:
        config = load(obj["config_path"])
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)

    _verbose(ctx, f"Connecting to {config.url}")

    return OpenRadar(token=config.token, url=config.url, timeout=config.timeout)


def _verbose(ctx: click.Context, message: str) -> None:
    if ctx.obj["verbose"]:
        click.echo(f"[verbose] {message}", err=True)


def _emit_json(data: Any, ctx: click.Context) -> None:
    """Write JSON to stdout or to the file specified by --output."""
    obj = ctx.obj
    indent = 2 if obj["pretty"] else None
    text = json.dumps(data, indent=indent, ensure_ascii=False)

    output_path: str | None = obj["output_path"]
    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
        click.echo(f"Output written to '{output_path}'", err=True)
    else:
        click.echo(text)


def _handle_tracker_errors(func):
    """Decorator that catches SonarError exceptions and exits cleanly."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from sonar.client import (
            AuthenticationError,
            NetworkError,
            NotFoundError,
            ParseError,
            SonarError,
        )
        from sonar.drafts import DraftError

        try:
            return func(*args, **kwargs)
        except DraftError as exc:
            click.echo(f"Draft error: {exc}", err=True)
            sys.exit(1)
        except AuthenticationError as exc:
            click.echo(f"Authentication error: {exc}", err=True)
            sys.exit(1)
        except NotFoundError as exc:
            click.echo(f"Not found: {exc}", err=True)
            sys.exit(1)
        except NetworkError as exc:
            click.echo(f"Network error: {exc}", err=True)
            sys.exit(1)
        except ParseError as exc:
            click.echo(f"Response error: {exc}", err=True)
            sys.exit(1)
        except SonarError as exc:
            click.echo(f"OpenRadar error: {exc}", err=True)
            sys.exit(1)

    return wrapper


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--config", "config_path", default="sonar-config.yaml", show_default=True,
              help="Path to the configuration file.")
@click.option("--output", "output_path", default=None,
              help="Write JSON output to a file instead of stdout.")
@click.option("--pretty", is_flag=True, default=False,
              help="Pretty-print the JSON output.")
@click.option("--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.version_option(__version__, prog_name="sonar")
@click.pass_context
def cli(ctx: click.Context, config_path: str, output_path: str | None,
        pretty: bool, verbose: bool) -> None:
    """OpenRadar client — fetch and submit bug reports."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["output_path"] = output_path
    ctx.obj["pretty"] = pretty
    ctx.obj["verbose"] = verbose


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@cli.command("init")
@click.option("--output", "output_path", default="sonar-config.yaml", show_default=True,
              help="Path where the template config file will be written.")
def init_command(output_path: str) -> None:
    """Generate a template sonar-config.yaml file."""
    from sonar.config import ConfigError, generate_template
    try:
        generate_template(output_path)
        click.echo(f"Template written to '{output_path}'.")
        click.echo("Edit it with your OpenRadar API token.")
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# fetch
# ---------------------------------------------------------------------------

@cli.command("fetch")
@click.argument("radar_id", type=int)
@click.pass_context
@_handle_tracker_errors
def fetch_command(ctx: click.Context, radar_id: int) -> None:
    """Fetch radar RADAR_ID and print its fields as JSON."""
    with _make_tracker(ctx) as tracker:
        _verbose(ctx, f"Fetching radar {radar_id}")
        radar = tracker.fetch(radar_id).result().unwrap()

    _emit_json(radar.to_dict(), ctx)


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------

@cli.command("create")
@click.argument("draft", type=click.Path(dir_okay=False))
@click.pass_context
@_handle_tracker_errors
def create_command(ctx: click.Context, draft: str) -> None:
    """Submit the radar described by the YAML file DRAFT."""
    from sonar.drafts import load_draft

    radar = load_draft(draft)
    with _make_tracker(ctx) as tracker:
        _verbose(ctx, f"Submitting radar {radar.id} with {len(radar.attachments)} attachment(s)")
        radar_id = tracker.create(radar).result().unwrap()

    _emit_json({"id": radar_id}, ctx)
