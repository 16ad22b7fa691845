"""LxmlPageElement: the PageElement implementation backed by lxml.

This module wraps ``lxml.html.HtmlElement`` in the PageElement interface
used by the combinators. CSS selectors go through the cached compiler in
:mod:`pluck.common.selector_utils`.
"""

from __future__ import annotations

from lxml import html
from lxml.html import HtmlElement

from pluck.common.selector_utils import compile_css


class LxmlPageElement:
    """Implementation of the PageElement protocol wrapping an lxml element.

    Attributes:
        _element: The underlying lxml HtmlElement.
        _url: The URL the document was fetched from, if known.
    """

    def __init__(self, element: HtmlElement, url: str = ""):
        """Initialize LxmlPageElement.

        Args:
            element: The lxml element to wrap.
            url: Optional URL of the document, kept for error reporting.
        """
        self._element = element
        self._url = url

    @classmethod
    def from_html(cls, content: str | bytes, url: str = "") -> LxmlPageElement:
        """Parse a full document or a fragment and wrap its root.

        The root is always the ``<html>`` element, so every element of a
        fragment is a descendant of it and can be selected.

        Args:
            content: Raw markup.
            url: Optional URL of the document.

        Returns:
            LxmlPageElement wrapping the document root.
        """
        return cls(html.document_fromstring(content), url)

    @property
    def url(self) -> str:
        """The URL the document was fetched from, or an empty string."""
        return self._url

    def query_css(self, selector: str) -> list[LxmlPageElement]:
        """Find descendant elements matching a CSS selector.

        Args:
            selector: CSS selector expression.

        Returns:
            Matching descendants in document order, wrapped in
            LxmlPageElement.

        Raises:
            InvalidSelectorException: If the selector doesn't compile.
        """
        return [
            LxmlPageElement(elem, self._url)
            for elem in compile_css(selector)(self._element)
            if isinstance(elem, HtmlElement)
        ]

    def text_content(self) -> str:
        """Extract the text content.

        Returns:
            Text content of the element and its descendants.
        """
        return str(self._element.text_content())

    def get_attribute(self, name: str) -> str | None:
        """Extract an attribute value.

        Args:
            name: Name of the attribute.

        Returns:
            Value of the attribute, or None if it doesn't exist.
        """
        return self._element.get(name)

    def inner_html(self) -> str:
        """Get the inner HTML content.

        Returns:
            Inner HTML content of the element as a string.
        """
        elem = self._element
        inner = elem.text or ""
        inner += "".join(
            html.tostring(child, encoding="unicode") for child in elem
        )
        return inner

    def tag_name(self) -> str:
        """Get the element's tag name.

        Returns:
            Tag name as a lowercase string (e.g., "div", "a", "table").
        """
        return str(self._element.tag).lower()

    def __repr__(self) -> str:
        return f"<LxmlPageElement {self.tag_name()}>"
