"""Shared builders for canonical model objects."""

from bundle_advisor.analyzer import build_analysis
from bundle_advisor.models import AnalysisInput, Chunk, Module

KIB = 1024


def make_module(module_id: str, size: int, *, chunks=(), path=None,
                package=None, version=None, vendor=None) -> Module:
    return Module(
        id=module_id,
        size=size,
        chunks=tuple(chunks),
        path=path or (f"./node_modules/{package}/index.js" if package else f"./src/{module_id}.js"),
        package_name=package,
        package_version=version,
        is_vendor=bool(package) if vendor is None else vendor,
    )


def make_chunk(chunk_id: str, size: int, *, modules=(), entry_points=(), initial=False) -> Chunk:
    return Chunk(
        id=chunk_id,
        size=size,
        modules=tuple(modules),
        entry_points=tuple(entry_points),
        is_initial=initial,
    )


def make_analysis(modules=(), chunks=()):
    return build_analysis(AnalysisInput(modules=tuple(modules), chunks=tuple(chunks)))
