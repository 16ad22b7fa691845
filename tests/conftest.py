"""Shared fixtures for pluck tests."""

from collections.abc import Callable

import pytest

from pluck.common.lxml_page_element import LxmlPageElement


@pytest.fixture
def parse() -> Callable[[str], LxmlPageElement]:
    """Parse markup into a page element.

    Returns:
        A function taking an HTML string and returning the wrapped root.
    """

    def _parse(markup: str) -> LxmlPageElement:
        return LxmlPageElement.from_html(markup)

    return _parse


@pytest.fixture
def people_table_html() -> str:
    """A table with a header row in thead and two body rows."""
    return """
    <html>
    <body>
        <table id="t">
            <thead><tr><th>Name</th><th>Age</th></tr></thead>
            <tbody>
                <tr><td>Jim</td><td>29</td></tr>
                <tr><td>Ann</td><td>31</td></tr>
            </tbody>
        </table>
    </body>
    </html>
    """
