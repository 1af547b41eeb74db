# vtkdiff/version.py
# Version and default constants. Single authoritative definition.
# Referenced by run_diff.py, report_serializer.py, array_source.py
# and comparator.py.

import sys

VTKDIFF_VERSION: str = "0.1.0"

# Format version of the JSON report record written with --json.
REPORT_FORMAT_VERSION: str = "1.0.0"

# Default thresholds: machine epsilon for IEEE 754 double precision.
DEFAULT_ABS_THRESHOLD: float = sys.float_info.epsilon
DEFAULT_REL_THRESHOLD: float = sys.float_info.epsilon

# Number of tuples accumulated per vectorised chunk before merging.
DEFAULT_CHUNK_SIZE: int = 65536

# Only VTK XML unstructured grid files are read.
SUPPORTED_SUFFIXES: tuple = (".vtu",)
