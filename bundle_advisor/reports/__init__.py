"""Report generators.

Functions:
    generate_json_report(report)       -> str
    generate_markdown_report(report)   -> str
"""

from bundle_advisor.reports.json_report import generate_json_report
from bundle_advisor.reports.markdown import build_summary, generate_markdown_report

__all__ = ["build_summary", "generate_json_report", "generate_markdown_report"]
