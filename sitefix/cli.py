# === FILE: sitefix/cli.py ===
"""
Command line entry point of the SiteFix crawler.

Commands:
  crawl     Crawl a site and print/save the analysed report
  config    Show the effective configuration
  classify  Classify a single URL and compute its priority score

Common options:
  --config PATH       YAML/JSON config file (optional)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)
  --log-format FORMAT Logging format string

Example:
  sitefix crawl https://example.com --max-pages 20 --json report.json --pretty
"""
import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
from pydantic import ValidationError

from sitefix import __version__
from sitefix.analysis.priority import calculate_priority_score
from sitefix.analysis.roles import classify_page_role
from sitefix.config import CrawlerConfig, read_config_file
from sitefix.crawler.urls import url_depth
from sitefix.engine import Engine
from sitefix.logger import DEFAULT_FORMAT, configure
from sitefix.report.html_report import render_html
from sitefix.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg="red", err=True)
    sys.exit(1)


def build_config(data: Dict[str, Any], **overrides: Any) -> CrawlerConfig:
    """Merge non-None CLI *overrides* into file *data* and validate."""
    merged = dict(data)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return CrawlerConfig(**merged)
    except ValidationError as e:
        print_error(f"Invalid configuration: {e}")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", "-v", message="SiteFix, version %(version)s")
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a YAML or JSON configuration file.",
)
@click.option(
    "--log-level", "log_level",
    default="INFO", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Logging level",
)
@click.option(
    "--log-file", "log_file",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Log file path (stderr only when omitted)",
)
@click.option(
    "--log-format", "log_format",
    default=DEFAULT_FORMAT,
    show_default=True,
    help="Logging format string",
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SiteFix crawler command group."""
    configure(level=log_level, log_file=log_file, log_format=log_format)
    data: Dict[str, Any] = {}
    if config_path is not None:
        try:
            data = read_config_file(config_path)
        except (OSError, ValueError, TypeError) as e:
            print_error(f"Failed to load configuration: {e}")
    ctx.ensure_object(dict)
    ctx.obj["config_data"] = data


@cli.command("crawl", context_settings=CONTEXT_SETTINGS)
@click.argument("url", required=False)
@click.option("--max-pages", "-l", "max_pages", type=click.IntRange(min=1), default=None,
              help="Ceiling on visited pages (overrides config)")
@click.option("--max-depth", "-d", "max_depth", type=click.IntRange(min=0), default=None,
              help="Ceiling on link depth (overrides config)")
@click.option("--no-robots", "no_robots", is_flag=True, help="Ignore robots.txt")
@click.option("--delay", "request_delay", type=click.FloatRange(min=0), default=None,
              help="Pause between requests, seconds")
@click.option("--json", "-j", "json_output", default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help="Save the JSON report to a file")
@click.option("--html", "html_output", default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help="Save the HTML report to a file")
@click.option("--pretty", is_flag=True, help="Indent JSON output by 2 spaces")
@click.option("--scan-timeout", "scan_timeout", type=float, default=None,
              help="Timeout for the whole crawl (seconds)")
@click.pass_context
def crawl(ctx, url, max_pages, max_depth, no_robots, request_delay,
          json_output, html_output, pretty, scan_timeout):
    """Crawl a site, classify and rank its pages."""
    cfg = build_config(
        ctx.obj["config_data"],
        base_url=url,
        max_pages=max_pages,
        max_depth=max_depth,
        respect_robots_txt=False if no_robots else None,
        request_delay=request_delay,
    )
    try:
        report = Engine(cfg, scan_timeout=scan_timeout).start_scan()
    except asyncio.TimeoutError:
        print_error(f"Crawl did not finish within {scan_timeout} seconds")
    except Exception as e:
        print_error(f"Crawl failed: {e}")

    # Without output files the report goes to stdout
    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f"JSON report: {saved_json}")
        except OSError as e:
            print_error(f"Failed to save JSON report: {e}")

    if html_output:
        try:
            saved_html = render_html(report, html_output)
            click.echo(f"HTML report: {saved_html}")
        except OSError as e:
            print_error(f"Failed to save HTML report: {e}")


@cli.command("config", context_settings=CONTEXT_SETTINGS)
@click.argument("url", required=False)
@click.pass_context
def show_config(ctx, url: Optional[str]):
    """Show the effective configuration as JSON."""
    cfg = build_config(ctx.obj["config_data"], base_url=url)
    click.echo(cfg.model_dump_json(indent=2))


@cli.command("classify", context_settings=CONTEXT_SETTINGS)
@click.argument("url")
@click.option("--title", default=None, help="Page title")
@click.option("--h1", "h1", default=None, help="First H1 of the page")
@click.option("--nav", is_flag=True, help="Page is linked from navigation")
@click.option("--footer", is_flag=True, help="Page is linked from the footer")
@click.option("--inbound", type=click.IntRange(min=0), default=0, show_default=True,
              help="Number of internal pages linking to it")
def classify(url, title, h1, nav, footer, inbound):
    """Print the role and priority score of a single URL."""
    role = classify_page_role(url, title, h1)
    score = calculate_priority_score(role, nav, footer, inbound, url_depth(url))
    click.echo(f"{role.value}\t{score}")


if __name__ == "__main__":
    cli()
