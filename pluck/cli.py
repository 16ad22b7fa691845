"""pluck CLI: run scrapers against saved pages and debug selectors.

Usage:
    pluck extract module.path:scraper page.html      # Print scraped JSON
    pluck extract module.path:scraper - < page.html  # Read from stdin
    pluck extract ... --observe                      # Also show selector tree
    pluck select "table#filings tbody tr" page.html  # Print matching text
    pluck select "a" page.html --attr href           # Print an attribute
"""

from __future__ import annotations

import contextlib
import importlib
import json
import logging
from collections.abc import Callable
from typing import IO, Any

import click
from lxml.etree import LxmlError
from pydantic import BaseModel

from pluck.common.exceptions import PluckException
from pluck.common.lxml_page_element import LxmlPageElement
from pluck.common.selector_observer import SelectorObserver
from pluck.common.selector_utils import validate_selector


def import_scraper(scraper_path: str) -> Callable[..., Any]:
    """Import a scraper from a dotted path.

    Args:
        scraper_path: ``"module.path:name"`` string.

    Returns:
        The scraper callable.

    Raises:
        click.BadParameter: If the format is invalid, the import fails, or
            the attribute isn't callable.
    """
    if ":" not in scraper_path:
        raise click.BadParameter(
            f"Invalid scraper path '{scraper_path}'. "
            "Expected format: 'module.path:name'"
        )

    module_path, attr_name = scraper_path.rsplit(":", 1)
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise click.BadParameter(
            f"Could not import module '{module_path}': {e}"
        ) from e

    try:
        scraper = getattr(module, attr_name)
    except AttributeError as e:
        raise click.BadParameter(
            f"Module '{module_path}' has no attribute '{attr_name}'"
        ) from e

    if not callable(scraper):
        raise click.BadParameter(f"'{scraper_path}' is not a scraper")
    return scraper


def _load_page(source: IO[bytes], url: str) -> LxmlPageElement:
    try:
        return LxmlPageElement.from_html(source.read(), url)
    except LxmlError as e:
        raise click.ClickException(
            f"Could not parse {source.name}: {e}"
        ) from e


def _to_json_ready(value: Any) -> Any:
    """Convert validated models back to plain data for serialization."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {k: _to_json_ready(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_json_ready(v) for v in value]
    return value


@click.group()
@click.version_option(package_name="pluck")
def cli() -> None:
    """pluck: declarative scraping of parsed HTML."""


@cli.command()
@click.argument("scraper")
@click.argument("source", type=click.File("rb"))
@click.option(
    "--url",
    default="",
    help="URL the page was fetched from, exposed to scrapers as page.url.",
)
@click.option(
    "--observe",
    is_flag=True,
    help="Print the tree of selector queries to stderr.",
)
@click.option(
    "--indent",
    type=int,
    default=2,
    show_default=True,
    help="JSON indentation.",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
def extract(
    scraper: str,
    source: IO[bytes],
    url: str,
    observe: bool,
    indent: int,
    verbose: bool,
) -> None:
    """Run SCRAPER against the page in SOURCE and print the result as JSON.

    SOURCE is a file path, or - for stdin.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    scrape_fn = import_scraper(scraper)
    page = _load_page(source, url)

    observer = SelectorObserver() if observe else None
    try:
        with observer or contextlib.nullcontext():
            result = scrape_fn(page)
    except PluckException as e:
        raise click.ClickException(str(e)) from e
    finally:
        if observer is not None:
            click.echo(observer.simple_tree(), err=True)

    click.echo(json.dumps(_to_json_ready(result), indent=indent or None))


@cli.command()
@click.argument("selector")
@click.argument("source", type=click.File("rb"))
@click.option(
    "--attr",
    "attribute",
    default=None,
    help="Print this attribute instead of the text.",
)
@click.option(
    "--html",
    "inner_html",
    is_flag=True,
    help="Print the inner HTML instead of the text.",
)
def select(
    selector: str,
    source: IO[bytes],
    attribute: str | None,
    inner_html: bool,
) -> None:
    """Print every match of SELECTOR in SOURCE, one per line.

    Missing attributes print as an empty line.
    """
    try:
        validate_selector(selector)
    except PluckException as e:
        raise click.BadParameter(str(e), param_hint="SELECTOR") from e

    page = _load_page(source, "")
    for match in page.query_css(selector):
        if attribute is not None:
            click.echo(match.get_attribute(attribute) or "")
        elif inner_html:
            click.echo(match.inner_html())
        else:
            click.echo(match.text_content().strip())


def main() -> None:
    """Entry point for the ``pluck`` console script."""
    cli()
