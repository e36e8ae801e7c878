"""
Output formatting for survey reports.
"""

import json
from pathlib import Path
from typing import Any

from .aggregator import ProjectAggregator

REPORT_MODES = ("ranked", "map")


class ReportFormatter:
    """Turns an aggregator into the JSON report."""

    def __init__(self, indent: int | None = 2):
        self.indent = indent

    def build_report(self, aggregator: ProjectAggregator, mode: str = "ranked") -> Any:
        """
        Build the report structure.

        ``ranked`` gives a list of ``{name, stars, packages}`` in descending
        star order; ``map`` gives ``{name: {stars, packages}}`` in discovery
        order.
        """
        if mode == "ranked":
            return [record.to_dict(include_name=True) for record in aggregator.ranked]
        if mode == "map":
            return {
                name: record.to_dict() for name, record in aggregator.records.items()
            }
        raise ValueError(f"Unsupported report mode: {mode}")

    def format_json_output(
        self, aggregator: ProjectAggregator, mode: str = "ranked"
    ) -> str:
        """Format the report as a JSON document."""
        return json.dumps(self.build_report(aggregator, mode), indent=self.indent)

    def save_to_file(
        self, aggregator: ProjectAggregator, output_file: str | Path, mode: str = "ranked"
    ) -> None:
        output = self.format_json_output(aggregator, mode)
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(output)
            f.write("\n")
