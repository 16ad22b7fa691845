"""PageElement protocol for tree-agnostic data extraction.

The combinators in :mod:`pluck.scrape` only need three capabilities from a
tree node: descendant search, attribute lookup and flattened text. Any
object providing them can be scraped; :class:`LxmlPageElement` is the
implementation shipped with pluck.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PageElement(Protocol):
    """Protocol for a read-only node in a parsed HTML/XML tree.

    A node returned by :meth:`query_css` is itself a PageElement and can be
    used as the context for further queries. Implementations must never
    mutate the underlying tree.
    """

    def query_css(self, selector: str) -> list[PageElement]:
        """Find descendant elements matching a CSS selector.

        Args:
            selector: CSS selector expression.

        Returns:
            Matching descendants in document order. The element itself is
            never included. Empty if nothing matches.
        """
        ...

    def text_content(self) -> str:
        """Extract the text content.

        Returns:
            Text of the element and all its descendants, concatenated in
            document order.
        """
        ...

    def get_attribute(self, name: str) -> str | None:
        """Extract an attribute value.

        Args:
            name: Name of the attribute.

        Returns:
            Value of the attribute, or None if it doesn't exist.
        """
        ...
