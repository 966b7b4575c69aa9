"""Rule registry plus the helpers every rule shares.

Usage:
    engine = RuleEngine()
    engine.register(rule_huge_modules)
    issues = engine.run(analysis)
"""

import math
from typing import Callable, Iterable

from bundle_advisor.models import Analysis, Issue

Rule = Callable[[Analysis], Iterable[Issue]]

_UNITS = ("B", "KB", "MB", "GB", "TB")


class RuleEngine:
    """Ordered collection of independent rules."""

    def __init__(self) -> None:
        self._rules: list[Rule] = []

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    def register(self, rule: Rule) -> None:
        self._rules.append(rule)

    def run(self, analysis: Analysis) -> list[Issue]:
        """Run every rule against *analysis*; results keep registration order."""
        issues: list[Issue] = []
        for rule in self._rules:
            issues.extend(rule(analysis))
        return issues


def generate_issue_id(rule_id: str, entity_id: str) -> str:
    return f"{rule_id}:{entity_id}"


def format_bytes(size: int) -> str:
    """Format a byte count with 1024-based units, e.g. ``97.7 KB``."""
    if size <= 0:
        return "0 B"
    exponent = min(int(math.log(size, 1024)), len(_UNITS) - 1)
    value = round(size / 1024 ** exponent, 1)
    if value >= 1024 and exponent < len(_UNITS) - 1:
        exponent += 1
        value = round(size / 1024 ** exponent, 1)
    text = f"{value:.1f}".removesuffix(".0")
    return f"{text} {_UNITS[exponent]}"
