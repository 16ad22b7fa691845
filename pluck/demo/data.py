"""Fixture data for the Bug Civil Court demo.

A single docket page from the Bug Civil Court, plus the record that
:data:`pluck.demo.scrapers.case_page` is expected to extract from it.
"""

from __future__ import annotations

import math
from typing import Any

CASE_HTML = """\
<!DOCTYPE html>
<html>
<head><title>BCC-2024-017 | Bug Civil Court</title></head>
<body>
  <nav><a href="/">Home</a> <a href="/cases">Cases</a></nav>
  <article class="case">
    <header>
      <h1 class="case-name">  Beetle v. Aphid Colony  </h1>
      <span class="docket">BCC-2024-017</span>
      <span class="status">Decided</span>
      <a class="court" href="https://bugcourt.example/courts/civil?division=leaf&amp;panel=3&amp;panel=5#docket">
        Civil Division
      </a>
    </header>

    <ul class="parties">
      <li><span>Plaintiff</span><span>Japanese Beetle</span></li>
      <li><span>Defendant</span><span>Aphid Colony No. 4</span></li>
    </ul>

    <div class="caption"><span>Argued</span><span>2024-03-11</span><span>0x1f</span></div>

    <table id="filings">
      <thead>
        <tr><th>Date</th><th>Filing</th><th>Pages</th></tr>
      </thead>
      <tbody>
        <tr><td>2024-01-05</td><td><a href="/docs/complaint.pdf">Complaint</a></td><td>12</td></tr>
        <tr><td>2024-02-01</td><td><a href="/docs/answer.pdf">Answer</a></td><td>8</td></tr>
        <tr><td>2024-02-20</td><td>Notice of appearance</td><td>n/a</td></tr>
      </tbody>
    </table>

    <section class="opinions">
      <div class="opinion">
        <span class="author">Justice Mantis</span>
        <span class="type">majority</span>
        <a href="/opinions/17-majority.pdf">Download</a>
      </div>
      <div class="opinion">
        <span class="author">Justice Ladybug</span>
        <span class="type">dissent</span>
      </div>
    </section>
  </article>
</body>
</html>
"""

EXPECTED_CASE: dict[str, Any] = {
    "name": "Beetle v. Aphid Colony",
    "docket": "BCC-2024-017",
    "decided": True,
    "sealed": False,
    "court": {
        "href": (
            "https://bugcourt.example/courts/civil"
            "?division=leaf&panel=3&panel=5#docket"
        ),
        "scheme": "https",
        "netloc": "bugcourt.example",
        "username": None,
        "password": None,
        "hostname": "bugcourt.example",
        "port": None,
        "path": "/courts/civil",
        "query": "division=leaf&panel=3&panel=5",
        "params": {"division": "leaf", "panel": ["3", "5"]},
        "fragment": "docket",
    },
    "parties": [
        {"role": "Plaintiff", "name": "Japanese Beetle"},
        {"role": "Defendant", "name": "Aphid Colony No. 4"},
    ],
    "argued": {"event": "Argued", "date": "2024-03-11", "courtroom": 31},
    "filings": [
        {
            "date": "2024-01-05",
            "title": "Complaint",
            "document": "/docs/complaint.pdf",
            "pages": 12,
        },
        {
            "date": "2024-02-01",
            "title": "Answer",
            "document": "/docs/answer.pdf",
            "pages": 8,
        },
        {
            "date": "2024-02-20",
            "title": "Notice of appearance",
            "document": None,
            "pages": math.nan,
        },
    ],
    "opinions": [
        {
            "position": 0,
            "author": "Justice Mantis",
            "type": "majority",
            "download": "/opinions/17-majority.pdf",
        },
        {
            "position": 1,
            "author": "Justice Ladybug",
            "type": "dissent",
            "download": None,
        },
    ],
}
"""Expected output. ``pages`` of the last filing is ``nan``, so compare
through :func:`json.dumps`, which renders ``nan`` as ``NaN`` on both sides.
"""
