"""Tests for bundle_advisor/models.py"""

import pytest

from bundle_advisor.models import FixType, Issue, Severity


def _issue(**metadata) -> Issue:
    return Issue(
        id="huge-modules:1",
        rule_id="huge-modules",
        severity=Severity.HIGH,
        title="Huge module: lodash",
        description="Module is 600 KB.",
        fix_type=FixType.REPLACE_PACKAGE,
        affected_modules=("1",),
        bytes_estimate=614400,
        metadata=metadata,
    )


# ---------------------------------------------------------------------------
# Severity ordering
# ---------------------------------------------------------------------------

def test_severity_comparisons_follow_rank():
    assert Severity.LOW < Severity.MEDIUM < Severity.HIGH
    assert Severity.HIGH > Severity.MEDIUM > Severity.LOW
    assert Severity.MEDIUM <= Severity.MEDIUM <= Severity.HIGH
    assert Severity.HIGH >= Severity.HIGH >= Severity.LOW
    assert not Severity.HIGH <= Severity.MEDIUM
    assert not Severity.LOW >= Severity.MEDIUM


def test_severity_max_and_min():
    assert max([Severity.LOW, Severity.HIGH, Severity.MEDIUM]) is Severity.HIGH
    assert min([Severity.HIGH, Severity.LOW, Severity.MEDIUM]) is Severity.LOW


# ---------------------------------------------------------------------------
# Issue immutability
# ---------------------------------------------------------------------------

def test_issue_metadata_is_read_only():
    source = {"size": 614400}
    issue = _issue(**source)
    with pytest.raises(TypeError):
        issue.metadata["size"] = 0
    source["size"] = 0
    assert issue.metadata["size"] == 614400


def test_issue_is_hashable():
    assert hash(_issue(size=1)) == hash(_issue(size=2))
    assert _issue(size=1) == _issue(size=1)
    assert len({_issue(size=1), _issue(size=1)}) == 1


def test_issue_to_dict_renders_metadata_as_plain_json():
    data = _issue(versions=("1.0.0", "2.0.0"), packageName=None).to_dict()
    assert data["metadata"] == {"versions": ["1.0.0", "2.0.0"]}
    assert data["severity"] == "high"
    assert data["fixType"] == "replace-package"
