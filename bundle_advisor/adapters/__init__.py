"""Stats adapters and format detection.

Usage:
    adapter = select_adapter("stats.json", raw)   # raises FormatNotRecognizedError
    data    = adapter.to_analysis_input(raw)
"""

from typing import Any

from bundle_advisor.adapters.base import StatsAdapter
from bundle_advisor.adapters.bundle_stats import BundleStatsAdapter
from bundle_advisor.adapters.webpack import WebpackStatsAdapter


class FormatNotRecognizedError(Exception):
    """Raised when no adapter accepts the stats document."""

    def __init__(self, supported_formats: list[str]) -> None:
        self.supported_formats = supported_formats
        super().__init__(
            "Stats file format not recognized. Supported formats: "
            + ", ".join(supported_formats)
        )


def default_adapters() -> list[StatsAdapter]:
    """Return fresh adapter instances in probing order."""
    return [BundleStatsAdapter(), WebpackStatsAdapter()]


def select_adapter(
    file_path: str,
    raw: Any,
    adapters: list[StatsAdapter] | None = None,
) -> StatsAdapter:
    """Return the first adapter whose ``can_handle`` accepts *raw*."""
    candidates = default_adapters() if adapters is None else adapters
    for adapter in candidates:
        if adapter.can_handle(file_path, raw):
            return adapter
    raise FormatNotRecognizedError([a.format_name for a in candidates])


__all__ = [
    "BundleStatsAdapter",
    "FormatNotRecognizedError",
    "StatsAdapter",
    "WebpackStatsAdapter",
    "default_adapters",
    "select_adapter",
]
