"""Command-line interface for Extracta."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import IO, Optional, Tuple

import click
import structlog
from rich.console import Console
from rich.table import Table

from extracta import __version__
from extracta.config import Config, LazyConfig
from extracta.extractor import (
    ExtractorNotFoundError,
    ExtractorRegistry,
    HttpOEmbedProvider,
    SourceUrl,
    generic_variant,
    register_site_variants,
)
from extracta.extractor import extract as extract_content
from extracta.observability import configure_logging

console = Console()
logger = structlog.get_logger(__name__)


def load_config(config_path: Optional[Path]) -> Config:
    """Load configuration from an explicit path, else the shared discovered configuration."""
    if config_path is not None:
        return Config.from_yaml(config_path)
    return LazyConfig.load()


def build_registry(config: Config, use_oembed: bool = True) -> Tuple[ExtractorRegistry, Optional[HttpOEmbedProvider]]:
    """Compose the site registry; the caller closes the returned provider."""
    provider = None
    if use_oembed and config.oembed.enabled:
        provider = HttpOEmbedProvider(
            endpoint=config.oembed.endpoint,
            timeout=config.oembed.timeout,
            user_agent=config.oembed.user_agent,
        )

    registry = ExtractorRegistry()
    register_site_variants(registry, provider)
    return registry, provider


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file path",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level (overrides the configuration file)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], log_level: Optional[str]) -> None:
    """Extracta - rule-driven content extraction from HTML pages."""
    ctx.ensure_object(dict)

    config = load_config(config_path)
    if log_level:
        monitoring = config.monitoring.model_copy(update={"log_level": log_level})
        config = config.model_copy(update={"monitoring": monitoring})

    configure_logging(config.monitoring)
    ctx.obj["config"] = config


@cli.command()
@click.argument("url")
@click.argument("html_file", type=click.File("rb"), default="-")
@click.option(
    "--generic/--no-generic",
    default=True,
    help="Fall back to generic extraction when no site variant applies",
)
@click.option("--oembed/--no-oembed", default=True, help="Allow remote oEmbed lookups")
@click.option("--indent", default=2, show_default=True, help="JSON indentation")
@click.pass_context
def extract(ctx: click.Context, url: str, html_file: IO[bytes], generic: bool, oembed: bool, indent: int) -> None:
    """Extract a content record from HTML_FILE (or stdin) fetched from URL."""
    config: Config = ctx.obj["config"]

    try:
        source = SourceUrl.parse(url)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="URL") from e

    fallback = generic_variant(config.extraction.default_media_type) if generic else None
    registry, provider = build_registry(config, use_oembed=oembed)
    try:
        content = extract_content(
            source,
            html_file.read(),
            fallback=fallback,
            registry=registry,
            threshold=config.extraction.content_block_threshold,
        )
    except ExtractorNotFoundError as e:
        logger.error("Extraction failed", url=url, error=str(e))
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        if provider is not None:
            provider.close()

    click.echo(json.dumps(content.to_dict(), indent=indent, ensure_ascii=False))


@cli.command()
@click.pass_context
def variants(ctx: click.Context) -> None:
    """List the registered site variants in priority order."""
    registry, _ = build_registry(ctx.obj["config"], use_oembed=False)

    table = Table(title="Extractor variants")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Matcher")
    table.add_column("Media type")
    for position, variant in enumerate(registry, start=1):
        table.add_row(str(position), variant.name, str(variant.matcher), variant.media_type)
    console.print(table)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
