"""Node resolution: the first step of every combinator.

A blank selector resolves to the context node itself; any other selector
resolves to the context's matching descendants. Queries are reported to
the active :class:`~pluck.common.selector_observer.SelectorObserver`.
"""

from __future__ import annotations

from pluck.common.page_element import PageElement
from pluck.common.selector_observer import get_active_observer
from pluck.common.selector_utils import is_blank


def resolve_all(
    selector: str | None,
    context: PageElement,
    description: str = "list",
) -> list[PageElement]:
    """Find every descendant of ``context`` matching ``selector``.

    Args:
        selector: CSS selector. Blank selectors match nothing.
        context: The node to search under.
        description: Name reported to the observer.

    Returns:
        Matching nodes in document order, possibly empty.
    """
    if is_blank(selector):
        return []
    assert selector is not None

    matches = context.query_css(selector)

    observer = get_active_observer()
    if observer is not None:
        observer.record_query(
            selector=selector,
            description=description,
            results=matches,
            expected_min=0,
            expected_max=None,
            parent_element=context,
        )

    return matches


def resolve(
    selector: str | None,
    context: PageElement,
    description: str = "node",
) -> PageElement | None:
    """Find the node a scalar or object combinator operates on.

    Args:
        selector: CSS selector, or None for the context itself.
        context: The node to search under.
        description: Name reported to the observer.

    Returns:
        ``context`` for a blank selector, otherwise the first matching
        descendant in document order, or None if nothing matches.
    """
    if is_blank(selector):
        return context
    assert selector is not None

    matches = context.query_css(selector)

    observer = get_active_observer()
    if observer is not None:
        observer.record_query(
            selector=selector,
            description=description,
            results=matches[:1],
            expected_min=1,
            expected_max=None,
            parent_element=context,
        )

    return matches[0] if matches else None
