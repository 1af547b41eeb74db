# vtkdiff/report.py
# Text rendering of ErrorReport and DifferingEntry records.
#
# Number formatting is carried by an explicit FormatConfig passed to every
# renderer. No process-wide stream state is touched.

import sys
from dataclasses import dataclass
from typing import Iterable, List, Optional

from vtkdiff.data_models.error_report import DifferingEntry, ErrorReport

# Significant decimal digits of an IEEE 754 double (digits10).
DOUBLE_DIGITS10: int = sys.float_info.dig

FAIL_MESSAGE: str = (
    "Absolute and relative error (maximum norm) are larger than the "
    "corresponding thresholds."
)


@dataclass(frozen=True)
class FormatConfig:
    """
    Numeric formatting options for report output.

    Fields:
      precision       -- Digits after the decimal point.
      scientific      -- Scientific notation if True, fixed otherwise.
      tuple_width     -- Minimum width of tuple indices in entry lines.
      component_width -- Minimum width of component indices in entry lines.
    """
    precision:       int = DOUBLE_DIGITS10
    scientific:      bool = True
    tuple_width:     int = 4
    component_width: int = 2

    @property
    def value_width(self) -> int:
        return self.precision + 7

    def format_float(self, value: float) -> str:
        spec = "e" if self.scientific else "f"
        return f"{value:.{self.precision}{spec}}"


def format_vector(values: Iterable[float], fmt: FormatConfig) -> str:
    """Format a sequence of floats as "[v0, v1, ...]"."""
    return "[" + ", ".join(fmt.format_float(v) for v in values) + "]"


def render_header(
    array_a: str,
    file_a:  str,
    array_b: str,
    file_b:  Optional[str],
) -> str:
    return (
        f"Comparing data array `{array_a}' from file `{file_a}' "
        f"to data array `{array_b}' from file `{file_b or file_a}'."
    )


def render_entry(entry: DifferingEntry, fmt: FormatConfig) -> str:
    w = fmt.value_width
    return (
        f"tuple: {entry.tuple_index:{fmt.tuple_width}d} "
        f"component: {entry.component_index:{fmt.component_width}d}: "
        f"abs err = {fmt.format_float(entry.abs_err):>{w}}, "
        f"rel err = {fmt.format_float(entry.rel_err):>{w}}"
    )


def render_norms(report: ErrorReport, fmt: FormatConfig) -> List[str]:
    """Norm summary lines, absolute block then relative block."""
    comps = report.components
    return [
        "Computed difference between data arrays:",
        "abs l1 norm      = " + format_vector((c.abs_l1 for c in comps), fmt),
        "abs l2-norm^2    = " + format_vector((c.abs_l2_sq for c in comps), fmt),
        "abs l2-norm      = " + format_vector((c.abs_l2 for c in comps), fmt),
        "abs maximum norm = " + format_vector((c.abs_max for c in comps), fmt),
        "",
        "rel l1 norm      = " + format_vector((c.rel_l1 for c in comps), fmt),
        "rel l2-norm^2    = " + format_vector((c.rel_l2_sq for c in comps), fmt),
        "rel l2-norm      = " + format_vector((c.rel_l2 for c in comps), fmt),
        "rel maximum norm = " + format_vector((c.rel_max for c in comps), fmt),
    ]


def render_verdict(report: ErrorReport) -> List[str]:
    """The failure sentence on FAIL, nothing on PASS."""
    return [] if report.passed else [FAIL_MESSAGE]
