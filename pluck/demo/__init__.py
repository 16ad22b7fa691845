"""Bug Civil Court demo for pluck.

A sample docket page and the scrapers that extract it, showing how the
combinators compose. Try it with::

    pluck extract pluck.demo.scrapers:case_page -
"""
