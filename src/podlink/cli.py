"""CLI interface for podlink.

Command-line tool for inspecting, generating and opening podnet:// links.
"""

import json
import logging
import sys
from pathlib import Path

import click
import httpx

from podlink.config import Config
from podlink.core.generator import generate_app_url, generate_documents_url
from podlink.core.parser import parse_deep_link_url
from podlink.core.types import (
    DOCUMENT_ROUTE_TYPES,
    ROUTE_PATTERNS,
    SCHEME_PREFIX,
    VALID_APPS,
    GenerateUrlOptions,
    MiniApp,
    route_from_dict,
)
from podlink.core.validator import validate_deep_link_url


@click.group()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover podlink.toml)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """podlink - podnet:// deep links for the multi-screen client."""
    try:
        config = Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    if verbose:
        config = config.with_overrides(log_level="DEBUG")

    _configure_logging(config.logging.level)
    ctx.obj = config


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command()
@click.argument("url")
def parse(url: str) -> None:
    """Parse a deep-link URL and print the result as JSON."""
    result = parse_deep_link_url(url)
    click.echo(json.dumps(result.to_dict(), indent=2))
    if not result.success:
        sys.exit(1)


@cli.command()
@click.argument("url")
def validate(url: str) -> None:
    """Validate a deep-link URL and print the sanitized result as JSON."""
    result = validate_deep_link_url(url)
    click.echo(json.dumps(result.to_dict(), indent=2))
    if not result.valid:
        sys.exit(1)


@cli.command()
@click.argument("app", type=click.Choice([app.value for app in VALID_APPS]))
@click.option(
    "--route",
    "route_type",
    type=click.Choice(list(DOCUMENT_ROUTE_TYPES)),
    default=None,
    help="Documents route type (documents app only)",
)
@click.option("--id", "document_id", type=int, default=None, help="Document ID for document-detail")
@click.option("--content-type", default=None, help="Content type for publish")
@click.option("--reply-to", default=None, help="Reply target for publish (post_<id>:<docId>)")
@click.option("--editing-draft-id", default=None, help="Draft UUID for publish")
@click.option(
    "--param",
    "-p",
    "params",
    multiple=True,
    help="Extra query parameter as KEY=VALUE (repeatable)",
)
@click.option(
    "--no-scheme",
    is_flag=True,
    help=f"Omit the {SCHEME_PREFIX} prefix",
)
def generate(
    app: str,
    route_type: str | None,
    document_id: int | None,
    content_type: str | None,
    reply_to: str | None,
    editing_draft_id: str | None,
    params: tuple[str, ...],
    no_scheme: bool,
) -> None:
    """Generate a deep-link URL for an app or documents route."""
    mini_app = MiniApp(app)

    try:
        options = GenerateUrlOptions(include_scheme=not no_scheme, params=_parse_params(params))

        if route_type is None:
            url = generate_app_url(mini_app, options)
        elif mini_app is not MiniApp.DOCUMENTS:
            raise ValueError(f"{mini_app} doesn't support route parameters")
        else:
            route = route_from_dict(
                {
                    "type": route_type,
                    "id": document_id,
                    "contentType": content_type,
                    "replyTo": reply_to,
                    "editingDraftId": editing_draft_id,
                }
            )
            url = generate_documents_url(route, options)
    except ValueError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(url)


def _parse_params(raw_params: tuple[str, ...]) -> dict[str, str | None]:
    """Parse KEY=VALUE pairs.

    Raises:
        ValueError: If a pair has no "=" or an empty key
    """
    params: dict[str, str | None] = {}
    for raw in raw_params:
        key, sep, value = raw.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid parameter '{raw}', expected KEY=VALUE")
        params[key] = value
    return params


@cli.command()
def routes() -> None:
    """List the apps and route patterns understood by the parser."""
    for app, patterns in ROUTE_PATTERNS.items():
        click.echo(click.style(f"{SCHEME_PREFIX}{app}", bold=True))
        for name, pattern in patterns.items():
            click.echo(f"  {pattern:<16} {name}")


@cli.command()
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.pass_obj
def serve(config: Config, host: str | None, port: int | None) -> None:
    """Start the deep-link intake server."""
    from podlink.server import run_server

    config = config.with_overrides(host=host, port=port)

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Open URLs with: podlink open {SCHEME_PREFIX}documents/")

    run_server(config)


@cli.command(name="open")
@click.argument("urls", nargs=-1, required=True)
@click.pass_obj
def open_urls(config: Config, urls: tuple[str, ...]) -> None:
    """Hand URLs to a running podlink server."""
    from podlink.client import forward_urls

    base_url = config.server.base_url
    try:
        accepted = forward_urls(base_url, list(urls), timeout=config.client.timeout)
    except httpx.HTTPError as e:
        click.echo(click.style(f"Error: could not reach {base_url}: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(f"Forwarded {accepted} URL(s) to {base_url}")


if __name__ == "__main__":
    cli()
