# vtkdiff/data_models/failure_record.py
# FailureRecord data class and failure type registry.

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# FAILURE TYPE REGISTRY
# ---------------------------------------------------------------------------
# Exit code mapping:
#   Code 0 -- Arrays equal within tolerance (no failure).
#   Code 1 -- THRESHOLD_EXCEEDED
#   Code 2 -- Input resolution failures (file / array lookup)
#   Code 3 -- Comparator precondition failures
#   Code 4 -- Internal errors

FAILURE_TYPES = {
    # Exit Code 1
    "THRESHOLD_EXCEEDED":    1,
    # Exit Code 2
    "FILE_UNREADABLE":       2,
    "UNSUPPORTED_FILE_TYPE": 2,
    "ARRAY_NOT_FOUND":       2,
    "NOT_NUMERIC":           2,
    "SELF_COMPARISON":       2,
    # Exit Code 3
    "SHAPE_MISMATCH":        3,
    "NON_NUMERIC_INPUT":     3,
    # Exit Code 4
    "INTERNAL_ERROR":        4,
}

# Exception class name -> failure type id.
EXCEPTION_FAILURE_TYPES = {
    "FileUnreadableError":      "FILE_UNREADABLE",
    "UnsupportedFileTypeError": "UNSUPPORTED_FILE_TYPE",
    "ArrayNotFoundError":       "ARRAY_NOT_FOUND",
    "NotNumericError":          "NOT_NUMERIC",
    "SelfComparisonError":      "SELF_COMPARISON",
    "ShapeMismatchError":       "SHAPE_MISMATCH",
    "NonNumericInputError":     "NON_NUMERIC_INPUT",
}


@dataclass(frozen=True)
class FailureRecord:
    """
    Summary of one failed run, produced by FailureHandler.

    Fields:
      failure_type_id -- Key from FAILURE_TYPES registry.
      exit_code       -- Integer exit code (1-4).
      field_name      -- Field or argument involved. Empty if not applicable.
      detail          -- Human-readable failure description.
    """
    failure_type_id: str
    exit_code:       int
    field_name:      str
    detail:          str
