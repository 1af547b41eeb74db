# vtkdiff/comparator.py
# ArrayComparator -- per-component absolute and relative error norms of two
# tuple arrays of identical shape.
#
# Relative error policy (per scalar pair va, vb):
#   abs_err == 0.0           -> rel_err = 0.0   (exact match, zeros included)
#   va == 0.0 or vb == 0.0   -> rel_err = +inf  (one side zero, other not)
#   otherwise                -> rel_err = abs_err / min(|va|, |vb|)
#
# Accumulation runs over fixed-size tuple chunks. Each chunk produces partial
# ComponentErrorStats that are merged into the running totals; sums add and
# maxima take the max, so only floating-point rounding depends on chunking.

import math
from typing import Iterator, List

import numpy as np

from vtkdiff.data_models.error_report import (
    ComponentErrorStats,
    DifferingEntry,
    ErrorReport,
)
from vtkdiff.data_models.tuple_array import TupleArray
from vtkdiff.exceptions import NonNumericInputError, ShapeMismatchError
from vtkdiff.verdict import VerdictEngine
from vtkdiff.version import DEFAULT_CHUNK_SIZE


def relative_error(va: float, vb: float) -> float:
    """Relative error of a single scalar pair."""
    abs_err = abs(va - vb)
    if abs_err == 0.0:
        return 0.0
    if va == 0.0 or vb == 0.0:
        return math.inf
    return abs_err / min(abs(va), abs(vb))


def _chunk_errors(va: np.ndarray, vb: np.ndarray):
    """
    Vectorised absolute and relative errors for a 2-D chunk.
    Same policy as relative_error(), applied elementwise.
    """
    with np.errstate(all="ignore"):
        abs_err = np.abs(va - vb)
        rel_err = abs_err / np.minimum(np.abs(va), np.abs(vb))
    rel_err = np.where((va == 0.0) | (vb == 0.0), np.inf, rel_err)
    rel_err = np.where(abs_err == 0.0, 0.0, rel_err)
    return abs_err, rel_err


def _chunk_stats(abs_err: np.ndarray, rel_err: np.ndarray) -> List[ComponentErrorStats]:
    """Partial accumulators, one per column of the chunk."""
    with np.errstate(all="ignore"):
        abs_l1    = np.sum(abs_err, axis=0)
        abs_l2_sq = np.sum(abs_err * abs_err, axis=0)
        rel_l1    = np.sum(rel_err, axis=0)
        rel_l2_sq = np.sum(rel_err * rel_err, axis=0)
    # fmax skips NaN, so a NaN error never becomes the maximum.
    abs_max = np.fmax.reduce(abs_err, axis=0, initial=0.0)
    rel_max = np.fmax.reduce(rel_err, axis=0, initial=0.0)
    return [
        ComponentErrorStats(
            abs_l1=float(abs_l1[c]),
            abs_l2_sq=float(abs_l2_sq[c]),
            abs_max=float(abs_max[c]),
            rel_l1=float(rel_l1[c]),
            rel_l2_sq=float(rel_l2_sq[c]),
            rel_max=float(rel_max[c]),
        )
        for c in range(abs_err.shape[1])
    ]


def _check_preconditions(a: TupleArray, b: TupleArray) -> None:
    """Numeric first, then tuple count, then component count."""
    if not a.is_numeric:
        raise NonNumericInputError("a", a.data_type)
    if not b.is_numeric:
        raise NonNumericInputError("b", b.data_type)
    if a.tuple_count != b.tuple_count:
        raise ShapeMismatchError("tuple_count", a.tuple_count, b.tuple_count)
    if a.component_count != b.component_count:
        raise ShapeMismatchError("component_count", a.component_count, b.component_count)


class ArrayComparator:
    """
    Computes per-component L1, L2 and maximum norms of the absolute and
    relative errors between two tuple arrays, and the pass/fail verdict.

    Method:
      compare(a, b, abs_threshold, rel_threshold, verbose) -> ErrorReport
      iter_differing_entries(a, b, abs_threshold, rel_threshold) -> Iterator
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if not isinstance(chunk_size, int) or chunk_size <= 0:
            raise ValueError(f"chunk_size must be a positive int, got {chunk_size!r}")
        self._chunk_size = chunk_size
        self._verdict    = VerdictEngine()

    def _chunks(self, a: TupleArray, b: TupleArray):
        """Yield (offset, va, vb) float64 slices of chunk_size tuples."""
        fa = a.as_float64()
        fb = b.as_float64()
        for start in range(0, a.tuple_count, self._chunk_size):
            stop = start + self._chunk_size
            yield start, fa[start:stop], fb[start:stop]

    def compare(
        self,
        a:             TupleArray,
        b:             TupleArray,
        abs_threshold: float,
        rel_threshold: float,
        verbose:       bool = False,
    ) -> ErrorReport:
        """
        Compare a and b. Returns ErrorReport.

        Raises NonNumericInputError or ShapeMismatchError before any
        accumulation; no partial report is ever produced.

        With verbose=True the report carries a lazy iterator of the entries
        whose absolute AND relative errors both exceed the thresholds.
        """
        _check_preconditions(a, b)

        totals = [ComponentErrorStats() for _ in range(a.component_count)]
        for _, va, vb in self._chunks(a, b):
            abs_err, rel_err = _chunk_errors(va, vb)
            totals = [
                total.merge(partial)
                for total, partial in zip(totals, _chunk_stats(abs_err, rel_err))
            ]

        passed = self._verdict.decide_components(totals, abs_threshold, rel_threshold)

        if verbose:
            entries = self.iter_differing_entries(a, b, abs_threshold, rel_threshold)
        else:
            entries = iter(())

        return ErrorReport(
            components=tuple(totals),
            abs_threshold=abs_threshold,
            rel_threshold=rel_threshold,
            passed=passed,
            tuple_count=a.tuple_count,
            differing_entries=entries,
        )

    def iter_differing_entries(
        self,
        a:             TupleArray,
        b:             TupleArray,
        abs_threshold: float,
        rel_threshold: float,
    ) -> Iterator[DifferingEntry]:
        """
        Lazily yield DifferingEntry records in (tuple, component) order for
        every pair with abs_err > abs_threshold AND rel_err > rel_threshold.
        """
        _check_preconditions(a, b)
        return self._differing(a, b, abs_threshold, rel_threshold)

    def _differing(self, a, b, abs_threshold, rel_threshold):
        for offset, va, vb in self._chunks(a, b):
            abs_err, rel_err = _chunk_errors(va, vb)
            mask = (abs_err > abs_threshold) & (rel_err > rel_threshold)
            for t, c in zip(*np.nonzero(mask)):
                yield DifferingEntry(
                    tuple_index=offset + int(t),
                    component_index=int(c),
                    abs_err=float(abs_err[t, c]),
                    rel_err=float(rel_err[t, c]),
                )
