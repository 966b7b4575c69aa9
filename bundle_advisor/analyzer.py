"""Turn normalised adapter output into an ``Analysis``.

Usage:
    analyzer = Analyzer(WebpackStatsAdapter())
    analysis = analyzer.analyze(raw_stats)
"""

from typing import Any

from bundle_advisor.adapters.base import StatsAdapter
from bundle_advisor.models import Analysis, AnalysisInput, DuplicatePackage, Module

#: Modules strictly above this size are listed in ``Analysis.large_modules``.
LARGE_MODULE_THRESHOLD = 100 * 1024


class Analyzer:
    """Bind one adapter and derive aggregate figures from its output."""

    def __init__(self, adapter: StatsAdapter) -> None:
        self.adapter = adapter

    def analyze(self, raw_stats: Any) -> Analysis:
        return build_analysis(self.adapter.to_analysis_input(raw_stats))


def build_analysis(data: AnalysisInput) -> Analysis:
    # Chunk sizes are authoritative: a module may be counted in several chunks.
    total_size = sum(c.size for c in data.chunks)
    initial_size = sum(c.size for c in data.chunks if c.is_initial)

    return Analysis(
        total_size=total_size,
        initial_size=initial_size,
        modules=tuple(data.modules),
        chunks=tuple(data.chunks),
        duplicate_packages=tuple(find_duplicate_packages(data.modules)),
        large_modules=tuple(m for m in data.modules if m.size > LARGE_MODULE_THRESHOLD),
    )


def find_duplicate_packages(modules: tuple[Module, ...] | list[Module]) -> list[DuplicatePackage]:
    """Return packages bundled in two or more versions, largest first.

    The total size covers every module of the package, whatever its version
    (or lack of one). Ties keep first-seen order.
    """
    groups: dict[str, dict[str, Any]] = {}
    for mod in modules:
        if not mod.package_name:
            continue
        group = groups.setdefault(mod.package_name, {"versions": {}, "total_size": 0})
        if mod.package_version:
            group["versions"].setdefault(mod.package_version, None)
        group["total_size"] += mod.size

    duplicates = [
        DuplicatePackage(
            package_name=name,
            versions=tuple(group["versions"]),
            total_size=group["total_size"],
        )
        for name, group in groups.items()
        if len(group["versions"]) >= 2
    ]
    duplicates.sort(key=lambda d: d.total_size, reverse=True)
    return duplicates
