from dataclasses import fields

import pytest

import scope_crawler.parser.html_parser as html_parser
from bs4.exceptions import ParserRejectedMarkup
from scope_crawler.parser.html_parser import ParsedPage, canonicalize, extract_links, parse_html

HTML = """
<html><head><title>t</title></head><body>
  <a href="/b">B</a>
  <a name="anchor-only">no href</a>
  <p><a href="https://a.test/x/c?q=1">C</a></p>
  <a href=" relative ">spaces</a>
  <a href="/b">B again</a>
</body></html>
"""


def test_extract_links_keeps_order_and_duplicates():
    assert extract_links(HTML) == ["/b", "https://a.test/x/c?q=1", " relative ", "/b"]


def test_extract_links_empty_document():
    assert extract_links("") == []


def test_canonicalize_wraps_fragment_into_document():
    assert canonicalize("<p>a<br>b</p>") == "<html><body><p>a<br/>b</p></body></html>"


def test_parse_html_matches_helpers():
    page = parse_html(HTML)
    assert not page.rejected
    assert page.links == extract_links(HTML)
    assert page.html == canonicalize(HTML)


def test_parsed_page_fields():
    assert [f.name for f in fields(ParsedPage)] == ["html", "links", "rejected"]


def test_malformed_marked_section_is_not_fatal():
    page = parse_html("<html><![foo</html>")
    assert page.links == []
    assert isinstance(page.html, str)


@pytest.fixture()
def rejecting_parser(monkeypatch):
    def reject(*args, **kwargs):
        raise ParserRejectedMarkup("unknown status keyword 'foo' in marked section")

    monkeypatch.setattr(html_parser, "BeautifulSoup", reject)


def test_rejected_markup_keeps_raw_body(rejecting_parser):
    page = parse_html('<a href="/x/a">A</a>')
    assert page.rejected
    assert page.html == '<a href="/x/a">A</a>'
    assert page.links == []
    assert canonicalize("<p>raw</p>") == "<p>raw</p>"
    assert extract_links('<a href="/x/a">A</a>') == []
