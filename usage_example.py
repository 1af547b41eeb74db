# usage_example.py
# Minimal usage example for vtkdiff/comparator.py.
# This file is not part of the vtkdiff package. For reference only.

from vtkdiff import ArrayComparator, FormatConfig, TupleArray
from vtkdiff.report import render_entry, render_norms

# Inputs
a = TupleArray.from_values("pressure",     [1.0, 2.0,    0.0])
b = TupleArray.from_values("pressure_ref", [1.0, 2.0001, 0.0])

# Compute
report = ArrayComparator().compare(a, b, abs_threshold=1e-3, rel_threshold=1e-3, verbose=True)

# Inspect
# One component. abs errors = [0, 1e-4, 0] -> abs maximum norm 1e-4 <= 1e-3 -> PASS
# rel errors = [0, 5e-5, 0] (1e-4 / min(|2.0|, |2.0001|))
fmt = FormatConfig()
for entry in report.differing_entries:
    print(render_entry(entry, fmt))
for line in render_norms(report, fmt):
    print(line)
print("PASS" if report.passed else "FAIL")

# Expected output (no entry exceeds both thresholds, so no "tuple:" lines):
# Computed difference between data arrays:
# abs l1 norm      = [1.000000000002110e-04]
# ...
# abs maximum norm = [1.000000000002110e-04]
#
# rel l1 norm      = [5.000000000010552e-05]
# ...
# rel maximum norm = [5.000000000010552e-05]
# PASS

# Error examples:
# ArrayComparator().compare(a, TupleArray.from_values("x", [1.0]), 1e-3, 1e-3)
#     -> ShapeMismatchError: Number of tuples differ: 3 in data array a and 1 in data array b.
# vtkdiff.ArraySource().resolve_pair("result.vtu", "pressure", "", "pressure")
#     -> SelfComparisonError
