"""Adapter for ``bundle-stats.json`` (Rollup / Vite bundle-stats plugin).

Each module, asset and package record carries a ``runs`` list holding one
entry per recorded build; only the first (latest) run is read. Chunks come
from assets flagged ``isChunk`` and take their display name from the optional
``rawData[0].webpack.chunks`` list.

pnpm keeps every installed version under a flattened store, e.g.::

    node_modules/.pnpm/@babel+core@7.23.0_@babel+types@7.23.0/node_modules/@babel/core/index.js

The store segment encodes ``name@version`` (scope slash written as ``+``,
peer-dependency suffix after ``_``), which is the only place a version can be
recovered from.
"""

import re
from typing import Any

from bundle_advisor.adapters.base import (
    StatsAdapter,
    as_dict,
    as_id,
    as_list,
    as_size,
    is_vendor_path,
    node_modules_package,
    normalise_path,
    unique_ids,
)
from bundle_advisor.models import AnalysisInput, Chunk, Module

_PNPM_STORE_RE = re.compile(r"node_modules/\.pnpm/((?:@[^+/]+\+[^@/]+)|(?:[^@/]+))@([^/]+)")


def extract_package_info(path: str | None) -> tuple[str | None, str | None, bool]:
    """Return ``(package_name, package_version, is_vendor)`` for a module path."""
    if not is_vendor_path(path):
        return None, None, False

    match = _PNPM_STORE_RE.search(normalise_path(path))
    if match:
        return match.group(1).replace("+", "/"), match.group(2).split("_")[0], True

    return node_modules_package(path), None, True


def _first_run(record: Any) -> dict | None:
    runs = as_list(as_dict(record).get("runs"))
    if runs and isinstance(runs[0], dict):
        return runs[0]
    return None


class BundleStatsAdapter(StatsAdapter):
    format_name = "bundle-stats.json (Rollup/Vite)"

    def can_handle(self, file_path: str, raw: Any) -> bool:
        if not isinstance(raw, dict) or not isinstance(raw.get("modules"), list):
            return False
        modules = raw["modules"]
        if not modules:
            # webpack stats also carry a (possibly empty) modules array
            return "chunks" not in raw
        return any(isinstance(as_dict(m).get("runs"), list) for m in modules)

    def to_analysis_input(self, raw: Any) -> AnalysisInput:
        stats = as_dict(raw)

        chunk_names: dict[str, str] = {}
        raw_data = as_list(stats.get("rawData"))
        if raw_data:
            webpack = as_dict(as_dict(raw_data[0]).get("webpack"))
            for info in as_list(webpack.get("chunks")):
                info = as_dict(info)
                chunk_id = as_id(info.get("id"))
                name = info.get("name")
                if chunk_id is not None and isinstance(name, str) and name:
                    chunk_names.setdefault(chunk_id, name)

        # module_id -> {path, size, chunks}
        registry: dict[str, dict[str, Any]] = {}
        for record in as_list(stats.get("modules")):
            run = _first_run(record)
            if run is None:
                continue
            name = run.get("name") if isinstance(run.get("name"), str) else None
            module_id = as_id(as_dict(record).get("key")) or as_id(name)
            if module_id is None:
                continue

            entry = registry.setdefault(module_id, {
                "path":   name,
                "size":   as_size(run.get("value")),
                "chunks": {},
            })
            for chunk_id in unique_ids(as_list(run.get("chunkIds"))):
                entry["chunks"].setdefault(chunk_id, None)

        chunks: list[Chunk] = []
        seen_chunks: set[str] = set()
        for record in as_list(stats.get("assets")):
            run = _first_run(record)
            if run is None or not run.get("isChunk"):
                continue
            chunk_id = as_id(run.get("chunkId"))
            if chunk_id is None or chunk_id in seen_chunks:
                continue
            seen_chunks.add(chunk_id)

            members = tuple(mid for mid, entry in registry.items() if chunk_id in entry["chunks"])
            name = chunk_names.get(chunk_id)
            chunks.append(Chunk(
                id=chunk_id,
                size=as_size(run.get("value")),
                modules=members,
                entry_points=(name,) if name else (),
                is_initial=bool(run.get("isInitial")) or bool(run.get("isEntry")),
            ))

        modules = []
        for module_id, entry in registry.items():
            package_name, package_version, is_vendor = extract_package_info(entry["path"])
            modules.append(Module(
                id=module_id,
                path=entry["path"],
                size=entry["size"],
                chunks=tuple(c for c in entry["chunks"] if c in seen_chunks),
                package_name=package_name,
                package_version=package_version,
                is_vendor=is_vendor,
            ))

        return AnalysisInput(modules=tuple(modules), chunks=tuple(chunks))
