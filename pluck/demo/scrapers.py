"""Bug Civil Court demo scrapers.

These scrapers extract a docket page (see :mod:`pluck.demo.data`) and
between them use every combinator in :mod:`pluck.scrape`:

- ``section`` for the case record and the hearing caption
- ``text``, ``attr``, ``url``, ``int_`` and ``exists`` for scalars
- ``list_`` with a plain and an index-aware scraper
- ``tuple_`` for party rows whose cells are only told apart by position
- ``table`` for the filings table

Run one from the command line::

    pluck extract pluck.demo.scrapers:case_page docket.html
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from pluck import scrape
from pluck.common.page_element import PageElement
from pluck.common.validation import check_fields, validated

party = scrape.tuple_(
    "span",
    [
        {"role": scrape.text()},
        {"name": scrape.text()},
    ],
)

filings = scrape.table(
    "#filings",
    [
        {"date": scrape.text()},
        {"title": scrape.text(), "document": scrape.attr("a", "href")},
        {"pages": scrape.int_()},
    ],
)

_opinion_fields = scrape.section(
    None,
    {
        "author": scrape.text(".author"),
        "type": scrape.text(".type"),
        "download": scrape.attr("a", "href"),
    },
)


def opinion(element: PageElement, index: int) -> dict[str, Any]:
    """Scrape one opinion, numbered by its position on the page."""
    return {"position": index, **(_opinion_fields(element) or {})}


case_page = scrape.section(
    "article.case",
    {
        "name": scrape.text("h1.case-name"),
        "docket": scrape.text(".docket"),
        "decided": scrape.node(
            ".status", lambda found: found.text_content().strip() == "Decided"
        ),
        "sealed": scrape.exists(".sealed-notice"),
        "court": scrape.url("header a.court"),
        "parties": scrape.list_(".parties li", party),
        "argued": scrape.tuple_(
            ".caption span",
            [
                {"event": scrape.text()},
                {"date": scrape.text()},
                {"courtroom": scrape.int_(radix=16)},
            ],
        ),
        "filings": filings,
        "opinions": scrape.list_(".opinions .opinion", opinion),
    },
)


class CaseSummary(BaseModel):
    """Headline fields of a case, validated."""

    name: str
    docket: str
    decided: bool


case_summary = validated(
    CaseSummary,
    scrape.section(
        "article.case",
        check_fields(
            CaseSummary,
            {
                "name": scrape.text("h1.case-name"),
                "docket": scrape.text(".docket"),
                "decided": scrape.exists(".status"),
            },
        ),
    ),
)
