"""SelectorObserver for debugging scrapers.

Scrapers are pure and print nothing. To see which selectors a scraper runs
and what they match, evaluate it inside an observer::

    from pluck.common.selector_observer import SelectorObserver

    with SelectorObserver() as observer:
        result = article_scraper(page)

    print(observer.simple_tree())  # Human-readable tree
    print(observer.json())  # JSON-serializable form

The observer is bound through a context variable, so evaluations running
in other threads or tasks are not recorded unless they enter their own
observer.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass, field
from typing import Any

# Context variable for the active observer
_active_observer: contextvars.ContextVar[SelectorObserver | None] = (
    contextvars.ContextVar("selector_observer", default=None)
)


@dataclass
class SelectorQuery:
    """A single selector query made while resolving nodes.

    Attributes:
        selector: The CSS selector string.
        description: Name of the combinator that made the query.
        match_count: Number of elements matched (summed over repeats).
        expected_min: Minimum count for the query to count as a hit.
        expected_max: Maximum count (None = unlimited).
        sample_elements: Sample text from matched elements.
        children: Queries run against elements this query matched.
        element_id: Unique ID of this query.
        parent_element_id: ID of the parent query, if any.
        parent: Reference to the parent SelectorQuery.
    """

    selector: str
    description: str
    match_count: int
    expected_min: int
    expected_max: int | None
    sample_elements: list[str] = field(default_factory=list)
    children: list[SelectorQuery] = field(default_factory=list)
    element_id: str | None = None
    parent_element_id: str | None = None
    parent: SelectorQuery | None = None

    @property
    def satisfied(self) -> bool:
        """Whether the match count is within the expected bounds."""
        if self.match_count < self.expected_min:
            return False
        return self.expected_max is None or self.match_count <= self.expected_max

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the query.
        """
        return {
            "selector": self.selector,
            "description": self.description,
            "match_count": self.match_count,
            "expected_min": self.expected_min,
            "expected_max": self.expected_max,
            "sample_elements": self.sample_elements,
            "children": [c.to_dict() for c in self.children],
            "element_id": self.element_id,
            "parent_element_id": self.parent_element_id,
        }


class SelectorObserver:
    """Observer that collects selector query information.

    Deduplication:

    When the same selector is run against several elements produced by the
    same parent query (e.g. the same cell selector against every table
    row), the observer folds them into a single query entry. Match counts
    and sample elements are aggregated.
    """

    def __init__(self, max_sample_length: int = 100, max_samples: int = 3):
        """Initialize the observer.

        Args:
            max_sample_length: Maximum characters per sample element.
            max_samples: Maximum number of sample elements to capture.
        """
        self.max_sample_length = max_sample_length
        self.max_samples = max_samples
        self.queries: list[SelectorQuery] = []
        self._element_counter: int = 0
        self._token: contextvars.Token[SelectorObserver | None] | None = None
        # Maps id() of an underlying element to (element, producing query).
        # The element is kept so its id() can't be reused while observing.
        self._element_to_query: dict[int, tuple[Any, SelectorQuery]] = {}
        # Maps (parent query id, selector) to a query for deduplication
        self._dedup_index: dict[tuple[str | None, str], SelectorQuery] = {}

    def __enter__(self) -> SelectorObserver:
        """Enter the observer context."""
        self._token = _active_observer.set(self)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit the observer context."""
        if self._token is not None:
            _active_observer.reset(self._token)
            self._token = None

    def record_query(
        self,
        selector: str,
        description: str,
        results: list[Any],
        expected_min: int,
        expected_max: int | None,
        parent_element: Any | None = None,
    ) -> None:
        """Record a selector query and its results.

        Args:
            selector: The CSS selector string.
            description: Name of the combinator making the query.
            results: The elements returned by the query.
            expected_min: Minimum expected count.
            expected_max: Maximum expected count (None = unlimited).
            parent_element: The element the query was executed on.

        Note:
            Queries with the same (parent query, selector) are deduplicated.
            Match counts and samples are aggregated into the existing query.
        """
        parent_query: SelectorQuery | None = None
        if parent_element is not None:
            entry = self._element_to_query.get(
                id(self._unwrap_element(parent_element))
            )
            if entry is not None:
                parent_query = entry[1]
        parent_query_id = parent_query.element_id if parent_query else None

        dedup_key = (parent_query_id, selector)
        existing_query = self._dedup_index.get(dedup_key)

        if existing_query is not None:
            existing_query.match_count += len(results)

            samples_needed = self.max_samples - len(
                existing_query.sample_elements
            )
            if samples_needed > 0:
                existing_query.sample_elements.extend(
                    self._extract_samples(results[:samples_needed])
                )

            self._track(results, existing_query)
            return

        self._element_counter += 1
        query = SelectorQuery(
            selector=selector,
            description=description,
            match_count=len(results),
            expected_min=expected_min,
            expected_max=expected_max,
            sample_elements=self._extract_samples(results[: self.max_samples]),
            element_id=f"selector_match_{self._element_counter}",
            parent_element_id=parent_query_id,
            parent=parent_query,
        )

        self._dedup_index[dedup_key] = query
        self._track(results, query)

        if parent_query is not None:
            parent_query.children.append(query)
        else:
            self.queries.append(query)

    def _track(self, results: list[Any], query: SelectorQuery) -> None:
        """Remember which query produced each result element."""
        for result in results:
            elem = self._unwrap_element(result)
            self._element_to_query[id(elem)] = (elem, query)

    def _unwrap_element(self, result: Any) -> Any:
        """Unwrap a PageElement to the underlying tree element, if any."""
        return getattr(result, "_element", result)

    def _extract_samples(self, results: list[Any]) -> list[str]:
        """Extract sample text content from results.

        Args:
            results: List of query results.

        Returns:
            List of sample text strings.
        """
        samples = []
        for result in results:
            if hasattr(result, "text_content"):
                text = result.text_content()
            else:
                text = str(result)

            # Normalize whitespace and truncate
            text = " ".join(text.split())
            if len(text) > self.max_sample_length:
                text = text[: self.max_sample_length] + "..."
            samples.append(text)
        return samples

    def simple_tree(self, indent: int = 0) -> str:
        """Generate a human-readable tree representation.

        Args:
            indent: Initial indentation level.

        Returns:
            Formatted string showing query hierarchy with match counts.

        Example output::

            - article "section" ✓ (1 match)
              - h1 "text" ✓ (1 match)
                → "Bug Court Rules"
              - .byline a "url" ✗ (0 matches, expected 1+)
        """
        lines = []
        for query in self.queries:
            lines.extend(self._format_query(query, indent))
        return "\n".join(lines)

    def _format_query(self, query: SelectorQuery, indent: int) -> list[str]:
        """Format a single query and its children."""
        prefix = "  " * indent + "- "
        status = "✓" if query.satisfied else "✗"

        match_text = f"{query.match_count} match" + (
            "es" if query.match_count != 1 else ""
        )
        if not query.satisfied:
            if query.match_count < query.expected_min:
                match_text += f", expected {query.expected_min}+"
            elif query.expected_max is not None:
                match_text += f", expected max {query.expected_max}"

        lines = [
            f'{prefix}{query.selector} "{query.description}" {status} ({match_text})'
        ]

        if query.sample_elements and query.match_count > 0:
            sample_preview = query.sample_elements[0]
            if sample_preview:
                lines.append("  " * (indent + 1) + f'→ "{sample_preview}"')

        for child in query.children:
            lines.extend(self._format_query(child, indent + 1))

        return lines

    def json(self) -> list[dict[str, Any]]:
        """Generate a JSON-serializable representation.

        Returns:
            List of top-level query dictionaries with nested children.
        """
        return [q.to_dict() for q in self.queries]


def get_active_observer() -> SelectorObserver | None:
    """Get the currently active SelectorObserver, if any."""
    return _active_observer.get()
