# vtkdiff/data_models/error_report.py
# ComponentErrorStats, DifferingEntry and ErrorReport data classes.

import math
from dataclasses import dataclass, field
from typing import Iterator, Tuple


@dataclass(frozen=True)
class ComponentErrorStats:
    """
    Error accumulators for one component index. Immutable: update() and
    merge() return a new instance.

    The L2 accumulators hold the sum of squares. abs_l2 and rel_l2 are
    derived at read time and never stored.

    Max fields start at 0.0: error magnitudes are non-negative. A NaN error
    never replaces the current maximum but does propagate into the sums.
    """
    abs_l1:    float = 0.0
    abs_l2_sq: float = 0.0
    abs_max:   float = 0.0
    rel_l1:    float = 0.0
    rel_l2_sq: float = 0.0
    rel_max:   float = 0.0

    def update(self, abs_err: float, rel_err: float) -> "ComponentErrorStats":
        """Return the accumulators with a single (abs_err, rel_err) pair added."""
        return ComponentErrorStats(
            abs_l1=self.abs_l1 + abs_err,
            abs_l2_sq=self.abs_l2_sq + abs_err * abs_err,
            abs_max=abs_err if abs_err > self.abs_max else self.abs_max,
            rel_l1=self.rel_l1 + rel_err,
            rel_l2_sq=self.rel_l2_sq + rel_err * rel_err,
            rel_max=rel_err if rel_err > self.rel_max else self.rel_max,
        )

    def merge(self, other: "ComponentErrorStats") -> "ComponentErrorStats":
        """Fold a partial accumulator in: sums add, maxima take the max."""
        return ComponentErrorStats(
            abs_l1=self.abs_l1 + other.abs_l1,
            abs_l2_sq=self.abs_l2_sq + other.abs_l2_sq,
            abs_max=other.abs_max if other.abs_max > self.abs_max else self.abs_max,
            rel_l1=self.rel_l1 + other.rel_l1,
            rel_l2_sq=self.rel_l2_sq + other.rel_l2_sq,
            rel_max=other.rel_max if other.rel_max > self.rel_max else self.rel_max,
        )

    @property
    def abs_l2(self) -> float:
        return math.sqrt(self.abs_l2_sq)

    @property
    def rel_l2(self) -> float:
        return math.sqrt(self.rel_l2_sq)


@dataclass(frozen=True)
class DifferingEntry:
    """
    One (tuple, component) pair whose absolute error exceeds the absolute
    threshold AND whose relative error exceeds the relative threshold.
    """
    tuple_index:     int
    component_index: int
    abs_err:         float
    rel_err:         float


@dataclass(frozen=True)
class ErrorReport:
    """
    Result of one comparison run.

    Fields:
      components        -- Tuple of ComponentErrorStats, index-aligned with
                           the component index. Each entry is frozen.
      abs_threshold     -- Absolute max-norm threshold used for the verdict.
      rel_threshold     -- Relative max-norm threshold used for the verdict.
      passed            -- Verdict: True iff the arrays are equal within tolerance.
      tuple_count       -- Number of tuples compared.
      differing_entries -- Lazy, single-use iterator of DifferingEntry.
                           Empty unless the comparison ran verbose.
    """
    components:        Tuple[ComponentErrorStats, ...]
    abs_threshold:     float
    rel_threshold:     float
    passed:            bool
    tuple_count:       int = 0
    differing_entries: Iterator[DifferingEntry] = field(
        default_factory=lambda: iter(()), compare=False, repr=False,
    )

    @property
    def component_count(self) -> int:
        return len(self.components)

    @property
    def max_abs(self) -> float:
        """Maximum over components of abs_max. 0.0 for an empty report."""
        return max((c.abs_max for c in self.components), default=0.0)

    @property
    def max_rel(self) -> float:
        """Maximum over components of rel_max. 0.0 for an empty report."""
        return max((c.rel_max for c in self.components), default=0.0)
