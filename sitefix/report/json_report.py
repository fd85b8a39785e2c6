# sitefix/report/json_report.py

"""
JSON report generation for SiteFix.

Serializes a SiteReport to a file.
"""
import json
from pathlib import Path

from sitefix.aggregator import SiteReport


def render_json(report: SiteReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *report* as JSON at *output_path*.

    :param report: SiteReport with crawl analysis
    :param output_path: path of the JSON file
    :param pretty: indent output by 2 spaces
    :return: Path of the saved file
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
