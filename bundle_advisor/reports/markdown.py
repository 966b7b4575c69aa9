"""Markdown report, issues grouped by severity (high first)."""

from bundle_advisor.models import FixType, Issue, Report, Severity
from bundle_advisor.rules.engine import format_bytes

_SEVERITY_TITLES = {
    Severity.HIGH:   "High Priority Issues",
    Severity.MEDIUM: "Medium Priority Issues",
    Severity.LOW:    "Low Priority Issues",
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_summary(issues: list[Issue] | tuple[Issue, ...]) -> dict:
    by_severity = {s.value: 0 for s in Severity}
    by_fix_type = {f.value: 0 for f in FixType}

    for issue in issues:
        by_severity[issue.severity.value] += 1
        by_fix_type[issue.fix_type.value] += 1

    return {
        "total":       len(issues),
        "by_severity": by_severity,
        "by_fix_type": by_fix_type,
    }


def generate_markdown_report(report: Report) -> str:
    analysis = report.analysis
    issues = list(report.issues)
    summary = build_summary(issues)
    savings = sum(i.bytes_estimate or 0 for i in issues)

    lines = [
        "# Bundle Analysis Report",
        "",
        "## Overview",
        "",
        f"- **Total size:** {format_bytes(analysis.total_size)}",
        f"- **Initial size:** {format_bytes(analysis.initial_size)}",
        f"- **Modules:** {len(analysis.modules)}",
        f"- **Chunks:** {len(analysis.chunks)}",
        f"- **Duplicate packages:** {len(analysis.duplicate_packages)}",
        f"- **Issues:** {summary['total']} "
        f"({summary['by_severity']['high']} high, "
        f"{summary['by_severity']['medium']} medium, "
        f"{summary['by_severity']['low']} low)",
        f"- **Potential savings:** {format_bytes(savings)}",
        "",
    ]

    if not issues:
        lines += [
            "## No Issues Found",
            "",
            "No optimization opportunities were detected by the enabled rules.",
            "",
        ]

    for severity in sorted(Severity, reverse=True):
        group = [i for i in issues if i.severity is severity]
        if not group:
            continue
        lines += [f"## {_SEVERITY_TITLES[severity]}", ""]
        for issue in group:
            lines += _render_issue(issue)

    if analysis.duplicate_packages:
        lines += [
            "## Duplicate Packages",
            "",
            "| Package | Versions | Total size |",
            "| --- | --- | --- |",
        ]
        for dup in analysis.duplicate_packages:
            lines.append(
                f"| {dup.package_name} | {', '.join(dup.versions)} | {format_bytes(dup.total_size)} |"
            )
        lines.append("")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _render_issue(issue: Issue) -> list[str]:
    lines = [
        f"### {issue.title}",
        "",
        issue.description,
        "",
        f"- **Rule:** `{issue.rule_id}`",
        f"- **Fix:** {issue.fix_type.value}",
    ]
    if issue.bytes_estimate is not None:
        lines.append(f"- **Estimated savings:** {format_bytes(issue.bytes_estimate)}")
    if issue.affected_modules:
        lines.append(f"- **Affected modules:** {len(issue.affected_modules)}")
    lines.append("")
    return lines
