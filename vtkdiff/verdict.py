# vtkdiff/verdict.py
# VerdictEngine -- pass/fail decision over aggregated maximum norms.
#
# FAIL only if the worst absolute error exceeds the absolute threshold AND
# the worst relative error exceeds the relative threshold. Either dimension
# within tolerance everywhere is enough to pass. The rule is an AND, never OR.

from typing import Iterable

from vtkdiff.data_models.error_report import ComponentErrorStats, ErrorReport


def exceeds_thresholds(
    max_abs:       float,
    max_rel:       float,
    abs_threshold: float,
    rel_threshold: float,
) -> bool:
    """True iff both maxima are strictly larger than their thresholds."""
    return max_abs > abs_threshold and max_rel > rel_threshold


class VerdictEngine:
    """
    Decides whether two arrays are equal within tolerance.

    Methods:
      decide(report) -> bool
      decide_components(components, abs_threshold, rel_threshold) -> bool
    """

    def decide(self, report: ErrorReport) -> bool:
        """
        Re-derive the verdict from the report's components and thresholds.
        The stored report.passed is not consulted.
        """
        return self.decide_components(
            report.components, report.abs_threshold, report.rel_threshold,
        )

    def decide_components(
        self,
        components:    Iterable[ComponentErrorStats],
        abs_threshold: float,
        rel_threshold: float,
    ) -> bool:
        components = tuple(components)
        max_abs = max((c.abs_max for c in components), default=0.0)
        max_rel = max((c.rel_max for c in components), default=0.0)
        return not exceeds_thresholds(max_abs, max_rel, abs_threshold, rel_threshold)
