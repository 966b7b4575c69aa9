"""Rule: initial chunks carrying too many third-party bytes."""

from bundle_advisor.models import Analysis, FixType, Issue, Severity
from bundle_advisor.rules.engine import format_bytes, generate_issue_id

RULE_ID = "large-vendor-chunks"
DEFAULT_MAX_CHUNK_SIZE = 250 * 1024

#: Vendor bytes above ``threshold * HIGH_SEVERITY_FACTOR`` are rated high.
HIGH_SEVERITY_FACTOR = 2


def rule_large_vendor_chunks(
    analysis: Analysis,
    threshold: int = DEFAULT_MAX_CHUNK_SIZE,
) -> list[Issue]:
    issues: list[Issue] = []
    modules = analysis.module_index()

    for chunk in analysis.chunks:
        if not chunk.is_initial:
            continue

        vendor = [modules[mid] for mid in chunk.modules if mid in modules and modules[mid].is_vendor]
        vendor_size = sum(m.size for m in vendor)
        if vendor_size <= threshold:
            continue

        severity = Severity.HIGH if vendor_size > threshold * HIGH_SEVERITY_FACTOR else Severity.MEDIUM
        label = ", ".join(chunk.entry_points) or chunk.id
        packages = tuple(sorted({m.package_name for m in vendor if m.package_name}))

        issues.append(Issue(
            id=generate_issue_id(RULE_ID, chunk.id),
            rule_id=RULE_ID,
            severity=severity,
            title=f"Large vendor code in initial chunk: {label}",
            description=(
                f'Initial chunk "{label}" ({format_bytes(chunk.size)}) contains '
                f"{format_bytes(vendor_size)} of third-party code, above the "
                f"{format_bytes(threshold)} limit. Split vendor code into separate "
                "chunks so it can be cached and loaded in parallel."
            ),
            bytes_estimate=vendor_size - threshold,
            affected_modules=tuple(m.id for m in vendor),
            fix_type=FixType.SPLIT_CHUNK,
            metadata={
                "chunkId":    chunk.id,
                "chunkSize":  chunk.size,
                "vendorSize": vendor_size,
                "threshold":  threshold,
                "packages":   packages,
            },
        ))

    return issues
