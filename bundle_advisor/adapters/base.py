"""Adapter contract and helpers shared by the stats adapters.

Raw stats documents are JSON-decoded and only loosely shaped: optional arrays
go missing, IDs arrive as numbers, sizes are absent. The ``as_*`` helpers
coerce those values to the canonical shapes without ever raising.
"""

import math
import re
from abc import ABC, abstractmethod
from typing import Any, Iterable

from bundle_advisor.models import AnalysisInput

_NODE_MODULES_RE = re.compile(r"node_modules/(@[^/]+/[^/]+|[^/.][^/]*)")


class StatsAdapter(ABC):
    """Contract for adapters that normalise one bundler stats format."""

    #: Human-readable format name, listed when no adapter matches.
    format_name: str = ""

    @abstractmethod
    def can_handle(self, file_path: str, raw: Any) -> bool:
        """Return True when *raw* looks like this adapter's format."""

    @abstractmethod
    def to_analysis_input(self, raw: Any) -> AnalysisInput:
        """Normalise *raw* into modules and chunks."""


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------

def as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def as_id(value: Any) -> str | None:
    """Return *value* as a string key, or None when it cannot be one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, (str, int, float)):
        text = str(value)
        return text if text != "" else None
    return None


def as_size(value: Any) -> int:
    """Return a non-negative byte count; anything unusable becomes 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    return 0


def unique_ids(values: Iterable[Any]) -> list[str]:
    """Stringify *values*, dropping unusable entries and repeats (order kept)."""
    seen: dict[str, None] = {}
    for value in values:
        key = as_id(value)
        if key is not None:
            seen.setdefault(key, None)
    return list(seen)


def as_names(value: Any) -> tuple[str, ...]:
    return tuple(n for n in as_list(value) if isinstance(n, str) and n)


# ---------------------------------------------------------------------------
# Package extraction
# ---------------------------------------------------------------------------

def normalise_path(path: str) -> str:
    return path.replace("\\", "/")


def is_vendor_path(path: str | None) -> bool:
    return bool(path) and "node_modules" in path


def node_modules_package(path: str) -> str | None:
    """Return the package name following the first ``node_modules/`` segment.

    Scoped packages consume two segments (``@babel/core``), others one.
    Dot-directories such as ``.pnpm`` are never package names.
    """
    match = _NODE_MODULES_RE.search(normalise_path(path))
    return match.group(1) if match else None
