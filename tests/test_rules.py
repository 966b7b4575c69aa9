"""Tests for bundle_advisor/rules"""

import pytest

from bundle_advisor.config import RuleThresholds
from bundle_advisor.models import FixType, Severity
from bundle_advisor.rules import (
    RuleEngine,
    build_engine,
    format_bytes,
    generate_issue_id,
    rule_duplicate_packages,
    rule_huge_modules,
    rule_large_vendor_chunks,
    rule_lazy_load_candidates,
)

from conftest import KIB, make_analysis, make_chunk, make_module


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("size, expected", [
    (0, "0 B"),
    (512, "512 B"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (100000, "97.7 KB"),
    (1024 * 1024, "1 MB"),
    (1024 * 1024 - 1, "1 MB"),
    (3 * 1024 ** 3, "3 GB"),
])
def test_format_bytes(size, expected):
    assert format_bytes(size) == expected


def test_issue_id_combines_rule_and_entity():
    assert generate_issue_id("huge-modules", "42") == "huge-modules:42"


# ---------------------------------------------------------------------------
# RuleEngine
# ---------------------------------------------------------------------------

def test_engine_without_rules_returns_no_issues():
    analysis = make_analysis(modules=[make_module("m", 900 * KIB)])
    assert RuleEngine().run(analysis) == []


def test_engine_concatenates_in_registration_order():
    analysis = make_analysis(
        modules=[make_module("m", 300 * KIB, chunks=["c"])],
        chunks=[make_chunk("c", 300 * KIB, modules=["m"], entry_points=["home"], initial=True)],
    )
    engine = RuleEngine()
    engine.register(rule_lazy_load_candidates)
    engine.register(rule_huge_modules)

    assert [i.rule_id for i in engine.run(analysis)] == ["lazy-load-candidates", "huge-modules"]
    assert len(engine.rules) == 2


def test_engine_is_idempotent():
    analysis = make_analysis(
        modules=[
            make_module("a", 600 * KIB, package="moment", version="2.29.0"),
            make_module("b", 10, package="moment", version="2.30.0"),
        ],
        chunks=[make_chunk("c", 700 * KIB, modules=["a", "b"], entry_points=["app"], initial=True)],
    )
    engine = build_engine()
    first = {i.id for i in engine.run(analysis)}
    second = {i.id for i in engine.run(analysis)}
    assert first == second
    assert "duplicate-packages:moment" in first


def test_build_engine_uses_thresholds():
    analysis = make_analysis(modules=[make_module("m", 60 * KIB)])
    assert build_engine().run(analysis) == []

    issues = build_engine(RuleThresholds(max_module_size=50 * KIB)).run(analysis)
    assert [i.rule_id for i in issues] == ["huge-modules"]


# ---------------------------------------------------------------------------
# huge-modules
# ---------------------------------------------------------------------------

def test_huge_module_above_500k_is_high():
    [issue] = rule_huge_modules(make_analysis(modules=[make_module("m", 600 * KIB)]))
    assert issue.severity is Severity.HIGH
    assert issue.id == "huge-modules:m"
    assert issue.bytes_estimate == 600 * KIB
    assert issue.affected_modules == ("m",)
    assert "600 KB" in issue.description


def test_huge_module_between_thresholds_is_medium():
    [issue] = rule_huge_modules(make_analysis(modules=[make_module("m", 250 * KIB)]))
    assert issue.severity is Severity.MEDIUM


def test_module_below_threshold_is_ignored():
    assert rule_huge_modules(make_analysis(modules=[make_module("m", 150 * KIB)])) == []


def test_huge_module_fix_type_depends_on_package():
    analysis = make_analysis(modules=[
        make_module("pkg", 300 * KIB, package="lodash"),
        make_module("own", 300 * KIB),
    ])
    issues = {i.affected_modules[0]: i for i in rule_huge_modules(analysis)}
    assert issues["pkg"].fix_type is FixType.REPLACE_PACKAGE
    assert issues["pkg"].title == "Huge module: lodash"
    assert issues["own"].fix_type is FixType.OPTIMIZE_IMPORTS


# ---------------------------------------------------------------------------
# duplicate-packages
# ---------------------------------------------------------------------------

def test_duplicate_package_issue():
    analysis = make_analysis(modules=[
        make_module("a", 100, package="lodash", version="4.17.21"),
        make_module("b", 200, package="lodash", version="3.10.1"),
        make_module("c", 999),
    ])
    [issue] = rule_duplicate_packages(analysis)

    assert issue.id == "duplicate-packages:lodash"
    assert issue.severity is Severity.MEDIUM
    assert issue.fix_type is FixType.DEDUPE_PACKAGE
    assert issue.affected_modules == ("a", "b")
    assert issue.bytes_estimate == 150
    assert issue.metadata["versions"] == ("4.17.21", "3.10.1")


def test_no_duplicates_no_issue():
    analysis = make_analysis(modules=[make_module("a", 100, package="lodash", version="1")])
    assert rule_duplicate_packages(analysis) == []


# ---------------------------------------------------------------------------
# large-vendor-chunks
# ---------------------------------------------------------------------------

def _vendor_chunk_analysis(vendor_size: int, initial: bool = True):
    return make_analysis(
        modules=[
            make_module("v", vendor_size, package="react", chunks=["main"]),
            make_module("own", 900 * KIB, chunks=["main"]),
        ],
        chunks=[make_chunk("main", vendor_size + 900 * KIB, modules=["v", "own"], initial=initial)],
    )


def test_vendor_bytes_over_threshold_is_medium():
    [issue] = rule_large_vendor_chunks(_vendor_chunk_analysis(300 * KIB))
    assert issue.id == "large-vendor-chunks:main"
    assert issue.severity is Severity.MEDIUM
    assert issue.fix_type is FixType.SPLIT_CHUNK
    assert issue.bytes_estimate == 50 * KIB
    assert issue.affected_modules == ("v",)
    assert issue.metadata["packages"] == ("react",)


def test_vendor_bytes_far_over_threshold_is_high():
    [issue] = rule_large_vendor_chunks(_vendor_chunk_analysis(600 * KIB))
    assert issue.severity is Severity.HIGH


def test_first_party_bytes_do_not_count():
    assert rule_large_vendor_chunks(_vendor_chunk_analysis(100 * KIB)) == []


def test_non_initial_chunk_is_ignored():
    assert rule_large_vendor_chunks(_vendor_chunk_analysis(600 * KIB, initial=False)) == []


def test_custom_chunk_threshold():
    assert rule_large_vendor_chunks(_vendor_chunk_analysis(100 * KIB), threshold=50 * KIB)


# ---------------------------------------------------------------------------
# lazy-load-candidates
# ---------------------------------------------------------------------------

def test_named_initial_chunk_is_lazy_load_candidate():
    analysis = make_analysis(chunks=[
        make_chunk("dash", 150 * KIB, modules=["x"], entry_points=["dashboard"], initial=True),
    ])
    [issue] = rule_lazy_load_candidates(analysis)
    assert issue.id == "lazy-load-candidates:dash"
    assert issue.severity is Severity.MEDIUM
    assert issue.fix_type is FixType.LAZY_LOAD_MODULE
    assert issue.affected_modules == ("x",)
    assert "dashboard" in issue.title


@pytest.mark.parametrize("chunk", [
    make_chunk("main", 150 * KIB, initial=True),
    make_chunk("lazy", 150 * KIB, entry_points=["admin"], initial=False),
    make_chunk("edge", 100 * KIB, entry_points=["admin"], initial=True),
])
def test_lazy_load_candidate_exclusions(chunk):
    assert rule_lazy_load_candidates(make_analysis(chunks=[chunk])) == []
