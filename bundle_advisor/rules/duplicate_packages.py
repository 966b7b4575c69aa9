"""Rule: packages bundled in more than one version."""

from bundle_advisor.models import Analysis, FixType, Issue, Severity
from bundle_advisor.rules.engine import format_bytes, generate_issue_id

RULE_ID = "duplicate-packages"


def rule_duplicate_packages(analysis: Analysis) -> list[Issue]:
    issues: list[Issue] = []

    for dup in analysis.duplicate_packages:
        affected = tuple(m.id for m in analysis.modules if m.package_name == dup.package_name)
        versions = ", ".join(dup.versions)
        # Deduping keeps one copy; an even split across versions is assumed.
        savings = dup.total_size - dup.total_size // len(dup.versions)

        issues.append(Issue(
            id=generate_issue_id(RULE_ID, dup.package_name),
            rule_id=RULE_ID,
            severity=Severity.MEDIUM,
            title=f"Duplicate package: {dup.package_name}",
            description=(
                f'Package "{dup.package_name}" is bundled in {len(dup.versions)} versions '
                f"({versions}) totalling {format_bytes(dup.total_size)}. Align dependency "
                "ranges or add a resolution so only one version ships."
            ),
            bytes_estimate=savings,
            affected_modules=affected,
            fix_type=FixType.DEDUPE_PACKAGE,
            metadata={
                "packageName": dup.package_name,
                "versions":    dup.versions,
                "totalSize":   dup.total_size,
            },
        ))

    return issues
