"""Tests for adapter selection in bundle_advisor/adapters/__init__.py"""

import pytest

from bundle_advisor.adapters import (
    BundleStatsAdapter,
    FormatNotRecognizedError,
    WebpackStatsAdapter,
    select_adapter,
)


def test_selects_bundle_stats_adapter():
    raw = {"modules": [{"key": "m", "runs": [{"name": "./a.js", "value": 1}]}], "assets": []}
    assert isinstance(select_adapter("bundle-stats.json", raw), BundleStatsAdapter)


def test_selects_webpack_adapter_for_webpack_modules():
    raw = {"modules": [{"id": 0, "name": "./a.js", "size": 1, "chunks": [0]}], "chunks": []}
    assert isinstance(select_adapter("stats.json", raw), WebpackStatsAdapter)


def test_selects_webpack_adapter_for_chunks_only():
    assert isinstance(select_adapter("stats.json", {"chunks": []}), WebpackStatsAdapter)


def test_unrecognised_format_lists_supported_formats():
    with pytest.raises(FormatNotRecognizedError, match="not recognized") as info:
        select_adapter("x.json", {"version": 3})
    assert info.value.supported_formats == [
        "bundle-stats.json (Rollup/Vite)",
        "Webpack stats.json",
    ]


def test_custom_adapter_list_is_probed_in_order():
    raw = {"chunks": []}
    webpack = WebpackStatsAdapter()
    assert select_adapter("stats.json", raw, adapters=[webpack, BundleStatsAdapter()]) is webpack


def test_empty_adapter_list_never_matches():
    with pytest.raises(FormatNotRecognizedError):
        select_adapter("stats.json", {"chunks": []}, adapters=[])
