"""JSON report: the ``Report`` serialised as-is."""

import json

from bundle_advisor.models import Report


def generate_json_report(report: Report) -> str:
    return json.dumps(report.to_dict(), indent=2)
