"""Rule: individual modules that are unusually large."""

from bundle_advisor.models import Analysis, FixType, Issue, Severity
from bundle_advisor.rules.engine import format_bytes, generate_issue_id

RULE_ID = "huge-modules"
DEFAULT_MAX_MODULE_SIZE = 200 * 1024
HIGH_SEVERITY_SIZE = 500 * 1024


def rule_huge_modules(
    analysis: Analysis,
    threshold: int = DEFAULT_MAX_MODULE_SIZE,
) -> list[Issue]:
    issues: list[Issue] = []

    for mod in analysis.modules:
        if mod.size <= threshold:
            continue

        label = mod.package_name or mod.path or mod.id
        issues.append(Issue(
            id=generate_issue_id(RULE_ID, mod.id),
            rule_id=RULE_ID,
            severity=Severity.HIGH if mod.size > HIGH_SEVERITY_SIZE else Severity.MEDIUM,
            title=f"Huge module: {label}",
            description=(
                f'Module "{label}" is {format_bytes(mod.size)}. Consider replacing it with '
                "a lighter alternative, tree-shaking unused code, or lazy loading it."
            ),
            bytes_estimate=mod.size,
            affected_modules=(mod.id,),
            fix_type=FixType.REPLACE_PACKAGE if mod.package_name else FixType.OPTIMIZE_IMPORTS,
            metadata={
                "moduleId":    mod.id,
                "modulePath":  mod.path,
                "packageName": mod.package_name,
                "size":        mod.size,
            },
        ))

    return issues
