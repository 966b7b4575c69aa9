"""Data models for bundle analyses.

Contains frozen dataclasses shared by adapters, analyzer, rules and reports:
    - Module, Chunk          (normalised bundler output)
    - AnalysisInput          (what an adapter returns)
    - DuplicatePackage
    - Analysis               (what the analyzer returns)
    - Issue                  (what a rule returns)
    - Report                 (analysis + issues, handed to report generators)

Every model exposes ``to_dict()`` which produces the JSON shape (camelCase
keys, ``None`` values dropped).
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    # Ordered by rank, not by the string value.
    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANK = {Severity.LOW: 0, Severity.MEDIUM: 1, Severity.HIGH: 2}


class FixType(str, Enum):
    REPLACE_PACKAGE = "replace-package"
    SPLIT_CHUNK = "split-chunk"
    LAZY_LOAD_MODULE = "lazy-load-module"
    DEDUPE_PACKAGE = "dedupe-package"
    OPTIMIZE_IMPORTS = "optimize-imports"
    OTHER = "other"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _compact(d: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {k: v for k, v in d.items() if v is not None}


def _plain(value: Any) -> Any:
    """Convert tuples / enums nested in rule metadata to JSON-friendly values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items() if v is not None}
    return value


# ---------------------------------------------------------------------------
# Bundle structure
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Module:
    id: str
    size: int
    chunks: tuple[str, ...] = ()
    path: str | None = None
    package_name: str | None = None
    package_version: str | None = None
    is_vendor: bool = False

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "id":             self.id,
            "path":           self.path,
            "size":           self.size,
            "chunks":         list(self.chunks),
            "packageName":    self.package_name,
            "packageVersion": self.package_version,
            "isVendor":       self.is_vendor,
        })


@dataclass(frozen=True)
class Chunk:
    id: str
    size: int
    modules: tuple[str, ...] = ()
    entry_points: tuple[str, ...] = ()
    is_initial: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id":          self.id,
            "size":        self.size,
            "modules":     list(self.modules),
            "entryPoints": list(self.entry_points),
            "isInitial":   self.is_initial,
        }


@dataclass(frozen=True)
class AnalysisInput:
    """Normalised adapter output: modules and chunks, nothing derived yet."""

    modules: tuple[Module, ...] = ()
    chunks: tuple[Chunk, ...] = ()


@dataclass(frozen=True)
class DuplicatePackage:
    package_name: str
    versions: tuple[str, ...]
    total_size: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "packageName": self.package_name,
            "versions":    list(self.versions),
            "totalSize":   self.total_size,
        }


@dataclass(frozen=True)
class Analysis:
    total_size: int
    initial_size: int
    modules: tuple[Module, ...] = ()
    chunks: tuple[Chunk, ...] = ()
    duplicate_packages: tuple[DuplicatePackage, ...] = ()
    large_modules: tuple[Module, ...] = ()

    def module_index(self) -> dict[str, Module]:
        """Return a fresh ``{module_id: Module}`` lookup."""
        return {m.id: m for m in self.modules}

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalSize":         self.total_size,
            "initialSize":       self.initial_size,
            "modules":           [m.to_dict() for m in self.modules],
            "chunks":            [c.to_dict() for c in self.chunks],
            "duplicatePackages": [d.to_dict() for d in self.duplicate_packages],
            "largeModules":      [m.to_dict() for m in self.large_modules],
        }


# ---------------------------------------------------------------------------
# Findings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Issue:
    id: str
    rule_id: str
    severity: Severity
    title: str
    description: str
    fix_type: FixType
    affected_modules: tuple[str, ...] = ()
    bytes_estimate: int | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "id":              self.id,
            "ruleId":          self.rule_id,
            "severity":        self.severity.value,
            "title":           self.title,
            "description":     self.description,
            "bytesEstimate":   self.bytes_estimate,
            "affectedModules": list(self.affected_modules),
            "fixType":         self.fix_type.value,
            "metadata":        _plain(self.metadata),
        })


@dataclass(frozen=True)
class Report:
    analysis: Analysis
    issues: tuple[Issue, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "analysis": self.analysis.to_dict(),
            "issues":   [i.to_dict() for i in self.issues],
        }
