"""Selector compilation.

CSS selectors are translated to XPath once, with cssselect, and cached.
The translation uses the ``descendant::`` axis so a query never matches
the context element itself: a selector run against a node only ever sees
that node's descendants.
"""

from __future__ import annotations

from functools import lru_cache

from cssselect import HTMLTranslator, SelectorError
from lxml import etree

from pluck.common.exceptions import InvalidSelectorException

_translator = HTMLTranslator()


@lru_cache(maxsize=512)
def compile_css(selector: str) -> etree.XPath:
    """Compile a CSS selector into a reusable XPath evaluator.

    Args:
        selector: CSS selector expression.

    Returns:
        An ``lxml.etree.XPath`` that, called with an element, returns the
        element's matching descendants in document order.

    Raises:
        InvalidSelectorException: If the selector cannot be parsed or uses
            an unsupported pseudo-class.

    Examples:
        >>> from lxml import html
        >>> doc = html.fromstring("<div><p>a</p><p>b</p></div>")
        >>> [p.text for p in compile_css("p")(doc)]
        ['a', 'b']
    """
    try:
        expression = _translator.css_to_xpath(selector, prefix="descendant::")
    except SelectorError as e:
        raise InvalidSelectorException(selector, str(e)) from e

    return etree.XPath(expression)


def is_blank(selector: str | None) -> bool:
    """Return True when a selector means "the context node itself".

    Examples:
        >>> is_blank(None), is_blank(""), is_blank("  "), is_blank("a")
        (True, True, True, False)
    """
    return selector is None or not selector.strip()


def validate_selector(selector: str | None) -> str | None:
    """Check a selector at scraper construction time.

    Blank selectors are normalized to ``None``. Anything else is compiled
    (and cached) so syntax errors surface immediately.

    Args:
        selector: CSS selector, or None.

    Returns:
        The selector unchanged, or None for a blank selector.

    Raises:
        InvalidSelectorException: If the selector doesn't compile.
    """
    if is_blank(selector):
        return None
    assert selector is not None
    compile_css(selector)
    return selector
