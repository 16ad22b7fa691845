"""Scraper combinators.

Each function here is a factory: called with a selector and some
configuration, it returns a scraper, a pure function of a context node.
Scrapers compose by nesting, so the scraper definition mirrors the shape
of the data it produces::

    from pluck import scrape

    article = scrape.section("article", {
        "title": scrape.text("h1"),
        "author": scrape.section(".byline", {
            "name": scrape.text(".name"),
            "website": scrape.url("a"),
        }),
        "tags": scrape.list_(".tags li", scrape.text()),
        "comments": scrape.int_(".comment-count"),
    })

    data = article(LxmlPageElement.from_html(markup))

Absent content is never an error: a scraper whose node isn't found returns
None (or an empty list/dict for the list, tuple and table forms) without
running the scrapers nested inside it. Unparseable integers come back as
``nan``.

Selectors are CSS, compiled when the scraper is built. A blank selector
(None or "") means the context node itself. ``list_``, ``tuple_`` and
``int_`` carry a trailing underscore to avoid shadowing the builtins.
"""

from __future__ import annotations

import inspect
import logging
import math
import re
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any
from urllib.parse import parse_qs, urlsplit

from pluck.common.exceptions import (
    FieldCollisionException,
    PositionMismatchException,
    ScraperConfigurationException,
)
from pluck.common.page_element import PageElement
from pluck.common.resolver import resolve, resolve_all
from pluck.common.selector_utils import validate_selector
from pluck.data_types import (
    FieldMap,
    IndexedScraper,
    ParsedUrl,
    Positions,
    Record,
    Scraper,
    T,
)

__all__ = [
    "node",
    "text",
    "attr",
    "url",
    "int_",
    "exists",
    "section",
    "list_",
    "tuple_",
    "table",
    "parse_url",
    "parse_int",
]

logger = logging.getLogger(__name__)

_INTEGER_TEXT = re.compile(r"[+-]?[0-9A-Za-z]+")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _node(
    selector: str | None,
    scraper: Scraper[T],
    description: str,
) -> Callable[[PageElement], T | None]:
    selector = validate_selector(selector)

    def scrape_node(context: PageElement) -> T | None:
        found = resolve(selector, context, description)
        if found is None:
            return None
        return scraper(found)

    return scrape_node


def _freeze_fields(fields: FieldMap) -> Mapping[str, Callable[..., Any]]:
    """Validate a field map and return a read-only copy of it."""
    if not isinstance(fields, Mapping):
        raise ScraperConfigurationException(
            "Field map must be a mapping of field name to scraper",
            {"type": type(fields).__name__},
        )

    for name, scraper in fields.items():
        if not isinstance(name, str):
            raise ScraperConfigurationException(
                "Field names must be strings", {"field": repr(name)}
            )
        if not callable(scraper):
            raise ScraperConfigurationException(
                f"Scraper for field '{name}' is not callable",
                {"field": name, "type": type(scraper).__name__},
            )

    return MappingProxyType(dict(fields))


def _build_record(
    fields: Mapping[str, Callable[..., Any]], found: PageElement
) -> Record:
    return {name: scraper(found) for name, scraper in fields.items()}


def _accepts_index(scraper: Callable[..., Any]) -> bool:
    """Whether ``scraper`` can take the match index as a second argument."""
    try:
        signature = inspect.signature(scraper)
    except (TypeError, ValueError):
        return False

    required = 0
    for param in signature.parameters.values():
        if param.kind is param.VAR_POSITIONAL:
            return True
        if (
            param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD)
            and param.default is param.empty
        ):
            required += 1
    return required >= 2


def parse_url(href: str) -> ParsedUrl:
    """Split a URL string into its components.

    Parsing is lenient: a malformed port reads as None, and a string that
    can't be split at all yields empty components with ``href`` kept.

    Examples:
        >>> parts = parse_url("https://example.com/a?x=1&x=2&y=#top")
        >>> parts["hostname"], parts["path"], parts["fragment"]
        ('example.com', '/a', 'top')
        >>> parts["params"]
        {'x': ['1', '2'], 'y': ''}
    """
    try:
        split = urlsplit(href)
    except ValueError:
        return ParsedUrl(
            href=href,
            scheme="",
            netloc="",
            username=None,
            password=None,
            hostname=None,
            port=None,
            path="",
            query="",
            params={},
            fragment="",
        )

    try:
        port = split.port
    except ValueError:
        port = None

    params: dict[str, str | list[str]] = {}
    for name, values in parse_qs(split.query, keep_blank_values=True).items():
        params[name] = values[0] if len(values) == 1 else values

    return ParsedUrl(
        href=href,
        scheme=split.scheme,
        netloc=split.netloc,
        username=split.username,
        password=split.password,
        hostname=split.hostname,
        port=port,
        path=split.path,
        query=split.query,
        params=params,
        fragment=split.fragment,
    )


def parse_int(value: str, radix: int = 10) -> int | float:
    """Parse an integer, returning ``nan`` instead of raising.

    Only an optional sign followed by ASCII letters and digits is accepted,
    so digit separators (``1_000``) and non-ASCII digits give ``nan``.

    Examples:
        >>> parse_int("ff", 16)
        255
        >>> parse_int("abc!", 16)
        nan
        >>> parse_int("1_000")
        nan
    """
    value = value.strip()
    if not _INTEGER_TEXT.fullmatch(value):
        return math.nan
    try:
        return int(value, radix)
    except ValueError:
        return math.nan


# ---------------------------------------------------------------------------
# Scalar scrapers
# ---------------------------------------------------------------------------


def node(
    selector: str | None,
    scraper: Scraper[T],
) -> Callable[[PageElement], T | None]:
    """Build a scraper around a single node.

    If the node is not found, ``scraper`` is not called and None is
    returned.

    Args:
        selector: The selector for the node to pass to ``scraper``, or None
            to pass the context node itself.
        scraper: Function which, given the selected node, returns the
            result of the scraping operation.
    """
    return _node(selector, scraper, "node")


def text(
    selector: str | None = None, trim: bool = True
) -> Callable[[PageElement], str | None]:
    """Scrape the text content of a node.

    The text of every descendant is included, in document order.

    Args:
        selector: The selector for the node.
        trim: Whether to strip surrounding whitespace (default: True).
    """

    def read_text(found: PageElement) -> str:
        content = found.text_content()
        return content.strip() if trim else content

    return _node(selector, read_text, "text")


def attr(
    selector: str | None, name: str
) -> Callable[[PageElement], str | None]:
    """Scrape an attribute value; None if the node or attribute is absent."""
    return _node(selector, lambda found: found.get_attribute(name), "attr")


def url(
    selector: str | None = None,
) -> Callable[[PageElement], ParsedUrl | None]:
    """Scrape the ``href`` of a node and split it with :func:`parse_url`."""
    read_href = _node(
        selector, lambda found: found.get_attribute("href"), "url"
    )

    def scrape_url(context: PageElement) -> ParsedUrl | None:
        href = read_href(context)
        if href is None:
            return None
        return parse_url(href)

    return scrape_url


def int_(
    selector: str | None = None, radix: int = 10
) -> Callable[[PageElement], int | float | None]:
    """Scrape the trimmed text of a node and parse it as an integer.

    Args:
        selector: The selector for the node.
        radix: Base for :func:`int`, 2 to 36 (default: 10), or 0 to infer
            it from a prefix such as ``0x``.

    Returns:
        A scraper returning the integer, None if the node is absent, or
        ``nan`` if the text isn't an integer in that base.
    """
    if not (radix == 0 or 2 <= radix <= 36):
        raise ScraperConfigurationException(
            "Radix must be 0 or between 2 and 36", {"radix": radix}
        )

    read_text = text(selector)

    def scrape_int(context: PageElement) -> int | float | None:
        value = read_text(context)
        if value is None:
            return None
        return parse_int(value, radix)

    return scrape_int


def exists(selector: str | None) -> Callable[[PageElement], bool]:
    """Scrape whether a node is present. Never returns None."""
    selector = validate_selector(selector)

    def scrape_exists(context: PageElement) -> bool:
        return resolve(selector, context, "exists") is not None

    return scrape_exists


# ---------------------------------------------------------------------------
# Structural scrapers
# ---------------------------------------------------------------------------


def section(
    selector: str | None, fields: FieldMap
) -> Callable[[PageElement], Record | None]:
    """Compose multiple scrapers over one node.

    Every field scraper receives the same resolved node, so selectors in
    the fields are relative to it. For example::

        header = scrape.section("header", {
            "title": scrape.text("h1"),
            "author": scrape.section(".author", {
                "name": scrape.text(".author-name"),
                "url": scrape.url("a.author-website"),
            }),
        })

    Args:
        selector: The selector for the node to pass to each field, or None
            for the context node itself.
        fields: Mapping from field name to scraper.

    Returns:
        A scraper returning a dict with one key per field, or None if the
        node is absent.

    Raises:
        ScraperConfigurationException: If ``fields`` is not a mapping of
            names to callables.
    """
    field_map = _freeze_fields(fields)
    return _node(
        selector, lambda found: _build_record(field_map, found), "section"
    )


def list_(
    selector: str | None,
    scraper: Scraper[T] | IndexedScraper[T],
) -> Callable[[PageElement], list[T]]:
    """Scrape every node matching a selector with another scraper.

    This behaves a little bit like :func:`map`. Each matched node is the
    context of its own scraper call, so nested selectors can't reach
    sibling matches. A scraper with two required positional arguments
    also gets the index of the match. None results are dropped.

    Args:
        selector: The selector for the nodes. A blank selector matches
            nothing.
        scraper: A scraper to run against each matched node.
    """
    selector = validate_selector(selector)
    with_index = _accepts_index(scraper)

    def scrape_list(context: PageElement) -> list[T]:
        results: list[T] = []
        for index, match in enumerate(resolve_all(selector, context, "list")):
            value = scraper(match, index) if with_index else scraper(match)
            if value is not None:
                results.append(value)
        return results

    return scrape_list


def tuple_(
    selector: str | None,
    positions: Positions,
    strict: bool = False,
) -> Callable[[PageElement], Record]:
    """Build one record from a fixed sequence of sibling nodes.

    Match ``i`` is scraped with ``positions[i]`` as if by
    ``section(None, positions[i])``, and the partial records are merged in
    order, later positions overwriting earlier ones. None positions are
    skipped, extra matches are ignored, and missing matches leave their
    positions' fields out. For example::

        person = scrape.tuple_(".items span", [
            {"name": scrape.text()},
            {"age": scrape.int_()},
        ])

    Args:
        selector: The selector for the positional nodes.
        positions: One partial field map (or None) per position.
        strict: Raise instead of silently merging: on overlapping fields
            when the scraper is built, and when the number of matches
            differs from the number of positions.

    Raises:
        FieldCollisionException: In strict mode, if two positions declare
            the same field.
    """
    selector = validate_selector(selector)
    frozen = [
        None if fields is None else _freeze_fields(fields)
        for fields in positions
    ]

    if strict:
        seen: set[str] = set()
        collisions: list[str] = []
        for fields in frozen:
            for name in fields or ():
                if name in seen and name not in collisions:
                    collisions.append(name)
                seen.add(name)
        if collisions:
            raise FieldCollisionException(selector or "", collisions)

    def scrape_tuple(context: PageElement) -> Record:
        matches = resolve_all(selector, context, "tuple")

        if len(matches) != len(frozen):
            if strict:
                raise PositionMismatchException(
                    selector or "", len(frozen), len(matches)
                )
            logger.debug(
                "tuple %r matched %d nodes for %d positions",
                selector,
                len(matches),
                len(frozen),
            )

        record: Record = {}
        for match, fields in zip(matches, frozen):
            if fields is not None:
                record.update(_build_record(fields, match))
        return record

    return scrape_tuple


def table(
    selector: str | None,
    row_scrapers: Positions,
    has_body: bool = True,
    strict: bool = False,
) -> Callable[[PageElement], list[Record]]:
    """Scrape each row of a table into a record, one position per cell.

    Rows are ``tbody tr`` when ``has_body`` is true, so a header row kept
    in ``thead`` is skipped. Without a ``tbody`` wrapper nothing excludes
    the header row: pass ``has_body=False`` and drop or tolerate it.

    Args:
        selector: The selector for the table, or None for the context node.
        row_scrapers: One partial field map (or None) per cell.
        has_body: Whether rows live inside ``tbody`` (default: True).
        strict: Passed to :func:`tuple_` for each row.

    Returns:
        A scraper returning one dict per row, or an empty list if the
        table is absent.
    """
    selector = validate_selector(selector)
    rows = list_(
        "tbody tr" if has_body else "tr",
        tuple_("td", row_scrapers, strict=strict),
    )

    def scrape_table(context: PageElement) -> list[Record]:
        found = resolve(selector, context, "table")
        if found is None:
            return []
        return rows(found)

    return scrape_table
