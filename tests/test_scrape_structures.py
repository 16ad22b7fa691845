"""Tests for the structural scrapers: section, list_, tuple_ and table."""

import logging
from unittest.mock import MagicMock

import pytest

from pluck import scrape
from pluck.common.exceptions import (
    FieldCollisionException,
    PositionMismatchException,
    ScraperConfigurationException,
)


@pytest.fixture
def listing(parse):
    """A list where only some items carry bold text."""
    return parse(
        """
        <html>
        <body>
            <div class="byline"><span class="name">Ada</span></div>
            <ul class="items">
                <li><b>a</b></li>
                <li><b>b</b></li>
                <li>c</li>
            </ul>
            <p class="person"><span>Jim</span><span>29</span></p>
        </body>
        </html>
        """
    )


class TestSection:
    """Tests for section."""

    def test_builds_record(self, listing):
        scraper = scrape.section(
            ".byline", {"name": scrape.text(".name"), "x": scrape.text("i")}
        )

        assert scraper(listing) == {"name": "Ada", "x": None}

    def test_blank_selector_equals_selected_context(self, listing):
        """section(None) on a node matches section(selector) on its parent."""
        fields = {"name": scrape.text(".name")}
        byline = listing.query_css(".byline")[0]

        assert scrape.section(None, fields)(byline) == scrape.section(
            ".byline", fields
        )(listing)

    def test_missing_node_skips_fields(self, listing):
        field = MagicMock(return_value="x")

        assert scrape.section(".nowhere", {"f": field})(listing) is None
        field.assert_not_called()

    def test_empty_field_map(self, listing):
        assert scrape.section(".byline", {})(listing) == {}

    def test_field_map_is_copied(self, listing):
        """Mutating the field map after construction has no effect."""
        fields = {"name": scrape.text(".name")}
        scraper = scrape.section(".byline", fields)
        fields["extra"] = scrape.text()

        assert scraper(listing) == {"name": "Ada"}

    def test_non_mapping_fields(self):
        with pytest.raises(ScraperConfigurationException):
            scrape.section("div", [scrape.text()])

    def test_non_callable_field(self):
        with pytest.raises(ScraperConfigurationException) as exc_info:
            scrape.section("div", {"name": "h1"})

        assert exc_info.value.context["field"] == "name"


class TestList:
    """Tests for list_."""

    def test_items_are_isolated(self, listing):
        """Nested selectors only see the item they run against."""
        scraper = scrape.list_(
            ".items li", scrape.section(None, {"bold": scrape.text("b")})
        )

        assert scraper(listing) == [
            {"bold": "a"},
            {"bold": "b"},
            {"bold": None},
        ]

    def test_none_results_are_dropped(self, listing):
        assert scrape.list_(".items li", scrape.text("b"))(listing) == [
            "a",
            "b",
        ]

    def test_index_is_passed_to_two_argument_scrapers(self, listing):
        scraper = scrape.list_(
            ".items li", lambda item, index: (index, item.text_content())
        )

        assert scraper(listing) == [(0, "a"), (1, "b"), (2, "c")]

    def test_optional_second_parameter_gets_no_index(self, listing):
        """Only a required second parameter receives the index."""

        def item(element, upper=False):
            value = element.text_content()
            return value.upper() if upper else value

        assert scrape.list_(".items li", item)(listing) == ["a", "b", "c"]

    def test_no_matches(self, listing):
        assert scrape.list_(".nowhere", scrape.text())(listing) == []

    @pytest.mark.parametrize("selector", [None, ""])
    def test_blank_selector_matches_nothing(self, listing, selector):
        assert scrape.list_(selector, scrape.text())(listing) == []


class TestTuple:
    """Tests for tuple_."""

    def test_positions_merge_into_one_record(self, listing):
        scraper = scrape.tuple_(
            ".person span",
            [{"name": scrape.text()}, {"age": scrape.int_()}],
        )

        assert scraper(listing) == {"name": "Jim", "age": 29}

    def test_missing_positions_are_left_out(self, listing):
        scraper = scrape.tuple_(
            ".person span",
            [
                {"name": scrape.text()},
                {"age": scrape.int_()},
                {"email": scrape.text()},
            ],
        )

        assert scraper(listing) == {"name": "Jim", "age": 29}

    def test_extra_matches_are_ignored(self, listing):
        scraper = scrape.tuple_(".items li", [{"first": scrape.text()}])

        assert scraper(listing) == {"first": "a"}

    def test_none_position_is_skipped(self, listing):
        scraper = scrape.tuple_(".person span", [None, {"age": scrape.int_()}])

        assert scraper(listing) == {"age": 29}

    def test_later_position_wins(self, listing):
        scraper = scrape.tuple_(
            ".person span",
            [{"value": scrape.text()}, {"value": scrape.text()}],
        )

        assert scraper(listing) == {"value": "29"}

    def test_no_matches(self, listing):
        scraper = scrape.tuple_(".nowhere", [{"name": scrape.text()}])

        assert scraper(listing) == {}

    def test_count_mismatch_is_logged(self, listing, caplog):
        scraper = scrape.tuple_(".items li", [{"first": scrape.text()}])

        with caplog.at_level(logging.DEBUG, logger="pluck.scrape"):
            scraper(listing)

        assert "matched 3 nodes for 1 positions" in caplog.text

    def test_strict_rejects_overlapping_fields(self):
        with pytest.raises(FieldCollisionException) as exc_info:
            scrape.tuple_(
                "span",
                [{"value": scrape.text()}, None, {"value": scrape.int_()}],
                strict=True,
            )

        assert exc_info.value.fields == ["value"]

    def test_strict_rejects_count_mismatch(self, listing):
        scraper = scrape.tuple_(
            ".items li", [{"first": scrape.text()}], strict=True
        )

        with pytest.raises(PositionMismatchException) as exc_info:
            scraper(listing)

        assert exc_info.value.expected_count == 1
        assert exc_info.value.actual_count == 3

    def test_strict_accepts_exact_match(self, listing):
        scraper = scrape.tuple_(
            ".person span",
            [{"name": scrape.text()}, {"age": scrape.int_()}],
            strict=True,
        )

        assert scraper(listing) == {"name": "Jim", "age": 29}


class TestTable:
    """Tests for table."""

    ROWS = [{"name": scrape.text()}, {"age": scrape.int_()}]

    def test_body_rows(self, parse, people_table_html):
        page = parse(people_table_html)

        assert scrape.table("#t", self.ROWS)(page) == [
            {"name": "Jim", "age": 29},
            {"name": "Ann", "age": 31},
        ]

    def test_context_is_the_table(self, parse, people_table_html):
        table_node = parse(people_table_html).query_css("#t")[0]

        assert len(scrape.table(None, self.ROWS)(table_node)) == 2

    def test_missing_table(self, parse, people_table_html):
        page = parse(people_table_html)

        assert scrape.table("#other", self.ROWS)(page) == []

    def test_without_tbody(self, parse):
        """Without tbody the header row comes back as an empty record."""
        page = parse(
            """
            <table>
                <tr><th>Name</th><th>Age</th></tr>
                <tr><td>Jim</td><td>29</td></tr>
            </table>
            """
        )

        assert scrape.table("table", self.ROWS, has_body=False)(page) == [
            {},
            {"name": "Jim", "age": 29},
        ]
        assert scrape.table("table", self.ROWS)(page) == []

    def test_strict_rows(self, parse):
        page = parse(
            """
            <table><tbody>
                <tr><td>Jim</td><td>29</td></tr>
                <tr><td>Ann</td></tr>
            </tbody></table>
            """
        )

        with pytest.raises(PositionMismatchException):
            scrape.table("table", self.ROWS, strict=True)(page)
