"""CLI entry point: command definitions using Click.

Commands:
    init          Generate a template config file
    analyze       Analyze a stats file and report optimization opportunities
"""

import functools
import sys
from pathlib import Path

import click

from bundle_advisor import __version__

AI_NOTICE = "Note: AI analysis is not yet implemented. Showing rule-based analysis only."


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _verbose(ctx: click.Context, message: str) -> None:
    if ctx.obj.get("verbose"):
        click.echo(f"[verbose] {message}", err=True)


def _load_thresholds(ctx: click.Context, config_path: str | None, **overrides):
    """Resolve thresholds: CLI > environment > config file > defaults."""
    from bundle_advisor.config import DEFAULT_CONFIG_PATH, load

    if config_path is None and Path(DEFAULT_CONFIG_PATH).is_file():
        config_path = DEFAULT_CONFIG_PATH
    if config_path is not None:
        _verbose(ctx, f"Loading config from '{config_path}'")

    return load(config_path).merged(**overrides)


def _emit(text: str, output_path: str | None) -> None:
    """Write *text* to stdout or to *output_path*."""
    if output_path:
        Path(output_path).write_text(text + "\n", encoding="utf-8")
        click.echo(f"Report written to '{output_path}'", err=True)
    else:
        click.echo(text)


def _handle_errors(func):
    """Decorator that catches known failures and exits cleanly."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from bundle_advisor.adapters import FormatNotRecognizedError
        from bundle_advisor.config import ConfigError
        from bundle_advisor.loader import NetworkError, StatsLoadError

        try:
            return func(*args, **kwargs)
        except ConfigError as exc:
            click.echo(f"Configuration error: {exc}", err=True)
            sys.exit(1)
        except FormatNotRecognizedError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(1)
        except NetworkError as exc:
            click.echo(f"Network error: {exc}", err=True)
            sys.exit(1)
        except StatsLoadError as exc:
            click.echo(f"Stats error: {exc}", err=True)
            sys.exit(1)
        except OSError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(1)

    return wrapper


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.version_option(__version__, prog_name="bundle-advisor")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Bundle advisor: find size optimizations in webpack / Rollup / Vite stats."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@cli.command("init")
@click.option("--output", "output_path", default="bundle-advisor.yaml", show_default=True,
              help="Path where the template config file will be written.")
def init_command(output_path: str) -> None:
    """Generate a template bundle-advisor.yaml file."""
    from bundle_advisor.config import ConfigError, generate_template
    try:
        generate_template(output_path)
        click.echo(f"Template written to '{output_path}'.")
        click.echo("Edit the thresholds to match your performance budget.")
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# analyze
# ---------------------------------------------------------------------------

@cli.command("analyze")
@click.option("--stats", "stats_source", required=True,
              help="Path or http(s) URL of the stats file (e.g. webpack-stats.json).")
@click.option("--format", "report_format", type=click.Choice(["json", "markdown"]),
              default="markdown", show_default=True, help="Output format.")
@click.option("--output", "output_path", default=None,
              help="Write the report to a file instead of stdout.")
@click.option("--config", "config_path", default=None,
              help="Path to the configuration file (default: ./bundle-advisor.yaml if present).")
@click.option("--max-chunk-size", type=int, default=None,
              help="Vendor bytes allowed in one initial chunk.")
@click.option("--max-module-size", type=int, default=None,
              help="Module size above which a module is reported.")
@click.option("--min-lazy-load-threshold", type=int, default=None,
              help="Initial chunk size above which lazy loading is suggested.")
@click.option("--ai/--no-ai", "use_ai", default=True,
              help="Enable or disable AI analysis (rules only when disabled).")
@click.pass_context
@_handle_errors
def analyze_command(
    ctx: click.Context,
    stats_source: str,
    report_format: str,
    output_path: str | None,
    config_path: str | None,
    max_chunk_size: int | None,
    max_module_size: int | None,
    min_lazy_load_threshold: int | None,
    use_ai: bool,
) -> None:
    """Analyze bundle stats and generate optimization recommendations."""
    from bundle_advisor.adapters import select_adapter
    from bundle_advisor.analyzer import Analyzer
    from bundle_advisor.loader import load_stats
    from bundle_advisor.models import Report
    from bundle_advisor.reports import generate_json_report, generate_markdown_report
    from bundle_advisor.rules import build_engine

    thresholds = _load_thresholds(
        ctx,
        config_path,
        max_chunk_size=max_chunk_size,
        max_module_size=max_module_size,
        min_lazy_load_threshold=min_lazy_load_threshold,
    )

    _verbose(ctx, f"Reading stats from '{stats_source}'")
    raw = load_stats(stats_source)

    adapter = select_adapter(stats_source, raw)
    _verbose(ctx, f"Detected format: {adapter.format_name}")

    analysis = Analyzer(adapter).analyze(raw)
    _verbose(ctx, f"{len(analysis.modules)} modules in {len(analysis.chunks)} chunks")

    issues = build_engine(thresholds).run(analysis)
    report = Report(analysis=analysis, issues=tuple(issues))

    if use_ai:
        click.echo(AI_NOTICE, err=True)

    if report_format == "json":
        text = generate_json_report(report)
    else:
        text = generate_markdown_report(report)

    _emit(text, output_path)
