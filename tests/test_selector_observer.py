"""Tests for SelectorObserver.

Tests recording logic, deduplication, output formats, and how scrapers
report their queries to an active observer.
"""

import contextvars
import json

import pytest
from lxml import html

from pluck import scrape
from pluck.common.selector_observer import (
    SelectorObserver,
    SelectorQuery,
    get_active_observer,
)


@pytest.fixture
def simple_html():
    """Simple HTML document for testing."""
    return """
    <html>
    <body>
        <div id="main">
            <table>
                <tr class="row"><td>Cell 1</td><td>Cell 2</td></tr>
                <tr class="row"><td>Cell 3</td><td>Cell 4</td></tr>
                <tr class="row"><td>Cell 5</td><td>Cell 6</td></tr>
            </table>
        </div>
    </body>
    </html>
    """


def test_observer_context_sets_and_resets_active():
    """Entering makes the observer active; exiting restores the previous."""
    assert get_active_observer() is None

    with SelectorObserver() as outer:
        assert get_active_observer() is outer
        with SelectorObserver() as inner:
            assert get_active_observer() is inner
        assert get_active_observer() is outer

    assert get_active_observer() is None


def test_record_simple_query(simple_html):
    """Observer should record a simple query."""
    doc = html.fromstring(simple_html)
    observer = SelectorObserver()

    results = doc.cssselect("tr.row")
    observer.record_query(
        selector="tr.row",
        description="list",
        results=results,
        expected_min=0,
        expected_max=None,
    )

    assert len(observer.queries) == 1
    query = observer.queries[0]
    assert query.selector == "tr.row"
    assert query.match_count == 3
    assert query.sample_elements == ["Cell 1Cell 2", "Cell 3Cell 4", "Cell 5Cell 6"]
    assert query.element_id == "selector_match_1"
    assert query.parent_element_id is None


def test_sample_limits():
    """Samples are capped in number and truncated in length."""
    doc = html.fromstring(
        "<div>" + "".join(f"<p>{'x' * 20}</p>" for _ in range(5)) + "</div>"
    )
    observer = SelectorObserver(max_sample_length=5, max_samples=2)

    observer.record_query("p", "list", doc.cssselect("p"), 0, None)

    assert observer.queries[0].sample_elements == ["xxxxx...", "xxxxx..."]


def test_satisfied():
    """A query is satisfied when its count is within bounds."""
    query = SelectorQuery("a", "node", 0, expected_min=1, expected_max=None)
    assert not query.satisfied

    query.match_count = 4
    assert query.satisfied

    query.expected_max = 3
    assert not query.satisfied


def test_scraper_queries_nest_under_parents(parse, simple_html):
    """Queries run against a matched element become its query's children."""
    page = parse(simple_html)
    scraper = scrape.section(
        "#main",
        {"rows": scrape.list_("tr.row", scrape.text("td"))},
    )

    with SelectorObserver() as observer:
        scraper(page)

    assert len(observer.queries) == 1
    main = observer.queries[0]
    assert (main.selector, main.description) == ("#main", "section")

    (rows,) = main.children
    assert (rows.selector, rows.description) == ("tr.row", "list")
    assert rows.parent is main
    assert rows.parent_element_id == main.element_id

    (cells,) = rows.children
    assert cells.selector == "td"


def test_repeated_queries_are_deduplicated(parse, simple_html):
    """The same selector under the same parent query folds into one entry."""
    page = parse(simple_html)
    scraper = scrape.list_("tr.row", scrape.text("td"))

    with SelectorObserver() as observer:
        scraper(page)

    (cells,) = observer.queries[0].children
    # One first-match per row
    assert cells.match_count == 3
    assert cells.sample_elements == ["Cell 1", "Cell 3", "Cell 5"]


def test_blank_selectors_are_not_recorded(parse, simple_html):
    page = parse(simple_html)

    with SelectorObserver() as observer:
        scrape.text()(page)
        scrape.list_(None, scrape.text())(page)

    assert observer.queries == []


def test_nothing_recorded_without_observer(parse, simple_html):
    """Scrapers evaluated outside an observer leave it untouched."""
    page = parse(simple_html)
    observer = SelectorObserver()

    scrape.text("td")(page)

    assert observer.queries == []


def test_simple_tree(parse, simple_html):
    page = parse(simple_html)
    scraper = scrape.section(
        "#main",
        {"first": scrape.text("td"), "link": scrape.url("a")},
    )

    with SelectorObserver() as observer:
        scraper(page)

    tree = observer.simple_tree()
    lines = tree.splitlines()
    assert lines[0] == '- #main "section" ✓ (1 match)'
    assert '  - td "text" ✓ (1 match)' in lines
    assert '    → "Cell 1"' in lines
    assert '  - a "url" ✗ (0 matches, expected 1+)' in lines


def test_json_output_is_serializable(parse, simple_html):
    page = parse(simple_html)

    with SelectorObserver() as observer:
        scrape.list_("tr.row", scrape.text("td"))(page)

    data = observer.json()
    assert json.loads(json.dumps(data)) == data
    assert data[0]["selector"] == "tr.row"
    assert data[0]["children"][0]["selector"] == "td"
    assert "parent" not in data[0]["children"][0]


def test_other_contexts_are_not_recorded(parse, simple_html):
    """Evaluations in a separate context don't see the active observer."""
    page = parse(simple_html)
    scraper = scrape.text("td")

    with SelectorObserver() as observer:
        result = contextvars.Context().run(scraper, page)

    assert result == "Cell 1"
    assert observer.queries == []
