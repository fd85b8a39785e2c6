# File: sitefix/report/__init__.py
"""sitefix.report: JSON and HTML report writers used by the CLI."""

from sitefix.report.html_report import render_html
from sitefix.report.json_report import render_json

__all__ = ["render_json", "render_html"]
