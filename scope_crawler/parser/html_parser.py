"""HTML parsing utilities for ScopeCrawler.

The crawler only needs two things from a page:

* links: raw ``href`` values of every ``<a href="…">`` tag, in document
  order, exactly as written (resolution and scope checks happen later in
  :mod:`scope_crawler.crawler.scope`).
* html:  the document re-serialized by lxml as a full tree, so stored pages share one
  canonical rendering instead of raw bytes.

:func:`parse_html` produces both from a single parse.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag
from bs4.exceptions import ParserRejectedMarkup

__all__: Sequence[str] = ("ParsedPage", "parse_html", "extract_links", "canonicalize")


@dataclass(slots=True)
class ParsedPage:
    """Lightweight representation of an HTML page."""

    html: str
    links: list[str]
    rejected: bool = False


def _soup(html: str) -> Optional[BeautifulSoup]:
    # lxml wraps fragments into a full <html><body> tree
    try:
        return BeautifulSoup(html, "lxml")
    except ParserRejectedMarkup:
        return None


def _hrefs(soup: BeautifulSoup) -> list[str]:
    links: list[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        # multi-valued attributes come back as lists
        if isinstance(href, list):
            href = " ".join(href)
        if isinstance(href, str):
            links.append(href)
    return links


def extract_links(html: str) -> list[str]:
    """Return raw href strings of all anchors, in the order they appear."""
    soup = _soup(html)
    return [] if soup is None else _hrefs(soup)


def canonicalize(html: str) -> str:
    """Return the parser's serialization of *html* (the input itself if rejected)."""
    soup = _soup(html)
    return html if soup is None else str(soup)


def parse_html(html: str) -> ParsedPage:
    """
    Parse *html* once and return its canonical markup and raw links.

    Markup the parser refuses is kept verbatim with no links and
    ``rejected=True``.
    """
    soup = _soup(html)
    if soup is None:
        return ParsedPage(html=html, links=[], rejected=True)
    return ParsedPage(html=str(soup), links=_hrefs(soup))
