"""Rule: named initial chunks that could be loaded on demand."""

from bundle_advisor.models import Analysis, FixType, Issue, Severity
from bundle_advisor.rules.engine import format_bytes, generate_issue_id

RULE_ID = "lazy-load-candidates"
DEFAULT_MIN_LAZY_LOAD_THRESHOLD = 100 * 1024


def rule_lazy_load_candidates(
    analysis: Analysis,
    threshold: int = DEFAULT_MIN_LAZY_LOAD_THRESHOLD,
) -> list[Issue]:
    issues: list[Issue] = []

    for chunk in analysis.chunks:
        if not chunk.is_initial or chunk.size <= threshold:
            continue
        # Unnamed initial chunks are usually the main bundle itself.
        if not chunk.entry_points:
            continue

        names = ", ".join(chunk.entry_points)
        issues.append(Issue(
            id=generate_issue_id(RULE_ID, chunk.id),
            rule_id=RULE_ID,
            severity=Severity.MEDIUM,
            title=f"Lazy load candidate: {names}",
            description=(
                f'Entry point "{names}" ({format_bytes(chunk.size)}) is loaded initially. '
                "Consider lazy loading to reduce initial bundle size."
            ),
            bytes_estimate=chunk.size,
            affected_modules=chunk.modules,
            fix_type=FixType.LAZY_LOAD_MODULE,
            metadata={
                "chunkId":     chunk.id,
                "entryPoints": chunk.entry_points,
                "size":        chunk.size,
            },
        ))

    return issues
