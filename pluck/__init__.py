"""
Declarative scraping of parsed HTML.

Scrapers are small pure functions of a tree node, built by the combinators
in :mod:`pluck.scrape` and composed into the shape of the data they
produce. Parsing lives in :mod:`pluck.common.lxml_page_element`; selector
debugging in :mod:`pluck.common.selector_observer`.
"""
