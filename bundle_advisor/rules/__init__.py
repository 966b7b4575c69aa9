"""Built-in rules and the default engine wiring.

Usage:
    engine = build_engine(RuleThresholds())
    issues = engine.run(analysis)
"""

from functools import partial
from typing import TYPE_CHECKING

from bundle_advisor.rules.duplicate_packages import rule_duplicate_packages
from bundle_advisor.rules.engine import Rule, RuleEngine, format_bytes, generate_issue_id
from bundle_advisor.rules.huge_modules import rule_huge_modules
from bundle_advisor.rules.large_vendor_chunks import rule_large_vendor_chunks
from bundle_advisor.rules.lazy_load_candidates import rule_lazy_load_candidates

if TYPE_CHECKING:
    from bundle_advisor.config import RuleThresholds


def build_engine(thresholds: "RuleThresholds | None" = None) -> RuleEngine:
    """Return an engine with every built-in rule registered in report order."""
    from bundle_advisor.config import RuleThresholds

    thresholds = thresholds or RuleThresholds()
    engine = RuleEngine()
    engine.register(rule_duplicate_packages)
    engine.register(partial(rule_large_vendor_chunks, threshold=thresholds.max_chunk_size))
    engine.register(partial(rule_huge_modules, threshold=thresholds.max_module_size))
    engine.register(partial(rule_lazy_load_candidates, threshold=thresholds.min_lazy_load_threshold))
    return engine


__all__ = [
    "Rule",
    "RuleEngine",
    "build_engine",
    "format_bytes",
    "generate_issue_id",
    "rule_duplicate_packages",
    "rule_huge_modules",
    "rule_large_vendor_chunks",
    "rule_lazy_load_candidates",
]
