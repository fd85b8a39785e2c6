# File: tests/test_report.py
import json

from sitefix.aggregator import aggregate_results
from sitefix.crawler.models import CrawlResult
from sitefix.report import render_html, render_json


def _report():
    results = [
        CrawlResult(url="https://example.com", status_code=200, title="Home <Acme>", text_hash="x"),
        CrawlResult(url="https://example.com/copy", status_code=200, title="Copy", text_hash="x"),
    ]
    return aggregate_results(results, base_url="https://example.com")


def test_render_json(tmp_path):
    path = render_json(_report(), tmp_path / "nested" / "report.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["duplicates"] == [["https://example.com", "https://example.com/copy"]]
    assert {p["url"] for p in data["pages"]} == {"https://example.com", "https://example.com/copy"}


def test_render_html_escapes_and_lists_duplicates(tmp_path):
    path = render_html(_report(), tmp_path / "report.html")
    html = path.read_text(encoding="utf-8")
    assert "Home &lt;Acme&gt;" in html
    assert "Duplicate content" in html
    assert "https://example.com/copy" in html


def test_render_html_custom_template_dir(tmp_path):
    templates = tmp_path / "tpl"
    templates.mkdir()
    (templates / "report.html.j2").write_text("{{ pages | length }} pages", encoding="utf-8")
    path = render_html(_report(), tmp_path / "out.html", template_dir=templates)
    assert path.read_text(encoding="utf-8") == "2 pages"
