# vtkdiff -- numerical comparison of data arrays in VTK unstructured grids.
# Version: 0.1.0
#
# ENTRY POINT:
#   vtkdiff INPUT_FILE_A [INPUT_FILE_B] -a NAME -b NAME [--abs FLOAT] [--rel FLOAT]
#   python -m vtkdiff ...
#
# LIBRARY USE:
#   from vtkdiff import ArrayComparator, TupleArray
#   report = ArrayComparator().compare(a, b, 1e-10, 1e-8)

from .version import (
    VTKDIFF_VERSION,
    REPORT_FORMAT_VERSION,
    DEFAULT_ABS_THRESHOLD,
    DEFAULT_REL_THRESHOLD,
)
from .exceptions import (
    DiffError,
    InputResolutionError,
    FileUnreadableError,
    UnsupportedFileTypeError,
    ArrayNotFoundError,
    NotNumericError,
    SelfComparisonError,
    ComparisonError,
    ShapeMismatchError,
    NonNumericInputError,
)
from .data_models.tuple_array import TupleArray
from .data_models.error_report import ComponentErrorStats, DifferingEntry, ErrorReport
from .comparator import ArrayComparator, relative_error
from .verdict import VerdictEngine
from .array_source import ArraySource, StorageClass
from .report import FormatConfig
from .run_diff import main, run_diff

__all__ = [
    # Version constants
    "VTKDIFF_VERSION",
    "REPORT_FORMAT_VERSION",
    "DEFAULT_ABS_THRESHOLD",
    "DEFAULT_REL_THRESHOLD",
    # Exceptions
    "DiffError",
    "InputResolutionError",
    "FileUnreadableError",
    "UnsupportedFileTypeError",
    "ArrayNotFoundError",
    "NotNumericError",
    "SelfComparisonError",
    "ComparisonError",
    "ShapeMismatchError",
    "NonNumericInputError",
    # Data model
    "TupleArray",
    "ComponentErrorStats",
    "DifferingEntry",
    "ErrorReport",
    # Components
    "ArrayComparator",
    "relative_error",
    "VerdictEngine",
    "ArraySource",
    "StorageClass",
    "FormatConfig",
    # Entry points
    "main",
    "run_diff",
]
