"""Adapter for webpack ``stats.json`` files.

Modules may be listed at the top level, nested inside each chunk, or both.
Nested-only modules are created on first sight and later sightings only add
chunk membership.
"""

from typing import Any

from bundle_advisor.adapters.base import (
    StatsAdapter,
    as_dict,
    as_id,
    as_list,
    as_names,
    as_size,
    is_vendor_path,
    node_modules_package,
    unique_ids,
)
from bundle_advisor.models import AnalysisInput, Chunk, Module

_SNIFF_KEYS = ("chunks", "modules", "assets")


class WebpackStatsAdapter(StatsAdapter):
    format_name = "Webpack stats.json"

    def can_handle(self, file_path: str, raw: Any) -> bool:
        return isinstance(raw, dict) and any(raw.get(k) is not None for k in _SNIFF_KEYS)

    def to_analysis_input(self, raw: Any) -> AnalysisInput:
        stats = as_dict(raw)

        # module_id -> {path, size, chunks}
        registry: dict[str, dict[str, Any]] = {}

        for mod in as_list(stats.get("modules")):
            mod = as_dict(mod)
            module_id = as_id(mod.get("id")) or as_id(mod.get("name"))
            if module_id is None:
                continue
            entry = _register(registry, module_id, mod)
            for chunk_id in unique_ids(as_list(mod.get("chunks"))):
                entry["chunks"].setdefault(chunk_id, None)

        chunk_records: dict[str, dict[str, Any]] = {}
        for chunk in as_list(stats.get("chunks")):
            chunk = as_dict(chunk)
            chunk_id = as_id(chunk.get("id"))
            if chunk_id is None or chunk_id in chunk_records:
                continue

            members: dict[str, None] = {}
            for mod in as_list(chunk.get("modules")):
                mod = as_dict(mod)
                module_id = as_id(mod.get("id")) or as_id(mod.get("name"))
                if module_id is None:
                    continue
                members.setdefault(module_id, None)
                _register(registry, module_id, mod)["chunks"].setdefault(chunk_id, None)

            chunk_records[chunk_id] = {
                "size":         as_size(chunk.get("size")),
                "members":      members,
                "entry_points": as_names(chunk.get("names")),
                "is_initial":   bool(chunk.get("initial")) or bool(chunk.get("entry")),
            }

        modules: list[Module] = []
        for module_id, entry in registry.items():
            chunk_ids = tuple(c for c in entry["chunks"] if c in chunk_records)
            for chunk_id in chunk_ids:
                chunk_records[chunk_id]["members"].setdefault(module_id, None)

            path = entry["path"]
            is_vendor = is_vendor_path(path)
            modules.append(Module(
                id=module_id,
                path=path,
                size=entry["size"],
                chunks=chunk_ids,
                package_name=node_modules_package(path) if is_vendor else None,
                is_vendor=is_vendor,
            ))

        chunks = tuple(
            Chunk(
                id=chunk_id,
                size=c["size"],
                modules=tuple(c["members"]),
                entry_points=c["entry_points"],
                is_initial=c["is_initial"],
            )
            for chunk_id, c in chunk_records.items()
        )
        return AnalysisInput(modules=tuple(modules), chunks=chunks)


def _register(registry: dict[str, dict[str, Any]], module_id: str, mod: dict) -> dict[str, Any]:
    """Return the registry entry for *module_id*, creating it on first sight."""
    entry = registry.get(module_id)
    if entry is None:
        name = mod.get("name")
        entry = {
            "path":   name if isinstance(name, str) and name else module_id,
            "size":   as_size(mod.get("size")),
            "chunks": {},
        }
        registry[module_id] = entry
    return entry
