"""Shared types for pluck scrapers.

A scraper is any callable taking a context node and returning a result.
The aliases below name the shapes the combinators accept and produce.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypedDict, TypeVar

from pluck.common.page_element import PageElement

T = TypeVar("T")

Scraper = Callable[[PageElement], T]
"""A pure function from a context node to a result."""

IndexedScraper = Callable[[PageElement, int], T]
"""A scraper that also receives the position of its node in a ``list_``."""

FieldMap = Mapping[str, Callable[[PageElement], Any]]
"""Output field name mapped to the scraper producing that field."""

Positions = Sequence[FieldMap | None]
"""Ordered partial field maps for positional combinators."""

Record = dict[str, Any]
"""A scraped object: field name mapped to scraped value."""


class ParsedUrl(TypedDict):
    """Structural components of a scraped URL.

    ``params`` holds the decoded query string. A name that appears once
    maps to a string; a repeated name maps to a list of strings.
    """

    href: str
    scheme: str
    netloc: str
    username: str | None
    password: str | None
    hostname: str | None
    port: int | None
    path: str
    query: str
    params: dict[str, str | list[str]]
    fragment: str
