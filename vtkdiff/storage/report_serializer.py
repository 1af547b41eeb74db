# vtkdiff/storage/report_serializer.py
# ReportSerializer -- writes an ErrorReport to a JSON file.
#
# All float values are written twice: float.hex() for lossless round trips
# and a decimal repr for reading. +inf, -inf and NaN serialize to distinct
# strings in both forms. The parent directory is created if missing.

import json
import math
from pathlib import Path
from typing import Optional

from vtkdiff.data_models.error_report import ComponentErrorStats, ErrorReport
from vtkdiff.version import REPORT_FORMAT_VERSION, VTKDIFF_VERSION


def _serialize_float(value: float) -> dict:
    if math.isnan(value):
        return {"hex": "nan", "decimal": "nan"}
    if math.isinf(value):
        text = "inf" if value > 0 else "-inf"
        return {"hex": text, "decimal": text}
    return {"hex": value.hex(), "decimal": repr(value)}


def _serialize_component(index: int, stats: ComponentErrorStats) -> dict:
    return {
        "component": index,
        "abs_l1":    _serialize_float(stats.abs_l1),
        "abs_l2_sq": _serialize_float(stats.abs_l2_sq),
        "abs_l2":    _serialize_float(stats.abs_l2),
        "abs_max":   _serialize_float(stats.abs_max),
        "rel_l1":    _serialize_float(stats.rel_l1),
        "rel_l2_sq": _serialize_float(stats.rel_l2_sq),
        "rel_l2":    _serialize_float(stats.rel_l2),
        "rel_max":   _serialize_float(stats.rel_max),
    }


def report_to_dict(
    report:  ErrorReport,
    array_a: str,
    array_b: str,
    file_a:  str,
    file_b:  Optional[str],
) -> dict:
    return {
        "format_version":  REPORT_FORMAT_VERSION,
        "vtkdiff_version": VTKDIFF_VERSION,
        "result":          "PASS" if report.passed else "FAIL",
        "array_a":         array_a,
        "array_b":         array_b,
        "file_a":          file_a,
        "file_b":          file_b or file_a,
        "tuple_count":     report.tuple_count,
        "component_count": report.component_count,
        "abs_threshold":   _serialize_float(report.abs_threshold),
        "rel_threshold":   _serialize_float(report.rel_threshold),
        "max_abs":         _serialize_float(report.max_abs),
        "max_rel":         _serialize_float(report.max_rel),
        "components":      [
            _serialize_component(i, c) for i, c in enumerate(report.components)
        ],
    }


class ReportSerializer:
    """Serializes one ErrorReport with its input identification to JSON."""

    def serialize(
        self,
        report:   ErrorReport,
        filepath: Path,
        array_a:  str,
        array_b:  str,
        file_a:   str,
        file_b:   Optional[str] = None,
    ) -> Path:
        """Write the report to filepath. Returns the path written."""
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        payload = report_to_dict(report, array_a, array_b, file_a, file_b)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        return filepath
