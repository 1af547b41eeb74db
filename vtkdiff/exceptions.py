# =============================================================================
# vtkdiff -- EXCEPTION HIERARCHY
# File:   vtkdiff/exceptions.py
# =============================================================================
#
# SCOPE
# -----
# Defines every error the array source and the comparator can raise.
# All exceptions are pure value objects: no side effects, no printing,
# no I/O of any kind. The command-line entry point is the only place that
# turns them into diagnostics and exit codes.
#
# EXCEPTION HIERARCHY
# -------------------
#   DiffError(Exception)                          -- base; never raised directly
#     InputResolutionError(DiffError)             -- file / array lookup failures
#       FileUnreadableError                       -- file missing or not parseable
#       UnsupportedFileTypeError                  -- suffix is not .vtu
#       ArrayNotFoundError                        -- name absent in point and cell data
#       NotNumericError                           -- array dtype is not numeric
#       SelfComparisonError                       -- array compared to itself
#     ComparisonError(DiffError)                  -- comparator preconditions
#       ShapeMismatchError                        -- tuple / component counts differ
#       NonNumericInputError                      -- comparator given non-numeric data
#
# MESSAGE CONTRACT
# ----------------
# Every exception message is deterministic, names the offending value(s)
# and is never empty.
# =============================================================================

from __future__ import annotations

from typing import Any, Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class DiffError(Exception):
    """
    Base class for all vtkdiff exceptions.

    Never raised directly. Use a concrete subclass.

    Attributes:
        field_name:  Name of the offending field or argument, or empty
                     string if not applicable.
        value:       The offending value, or None.
        message:     Human-readable description. Always non-empty.
    """

    def __init__(
        self,
        message:    str,
        field_name: str = "",
        value:      Any = None,
    ) -> None:
        if not isinstance(message, str) or not message:
            raise ValueError("DiffError: message must be a non-empty string")
        if not isinstance(field_name, str):
            raise ValueError("DiffError: field_name must be a string")
        super().__init__(message)
        self.field_name: str = field_name
        self.value:      Any = value
        self.message:    str = message

    def __repr__(self) -> str:
        return (
            self.__class__.__name__
            + "(field_name=" + repr(self.field_name)
            + ", value=" + repr(self.value)
            + ", message=" + repr(self.message)
            + ")"
        )


# =============================================================================
# INPUT RESOLUTION ERRORS
# =============================================================================

class InputResolutionError(DiffError):
    """File or array lookup failure. Propagated unchanged to the caller."""


class FileUnreadableError(InputResolutionError):
    """
    Raised when an input file does not exist or cannot be parsed.

    Args:
        path:   Path of the file as given by the caller.
        reason: Underlying error description.
    """

    def __init__(self, path: str, reason: str) -> None:
        message = "Error reading file `" + str(path) + "': " + reason
        super().__init__(message=message, field_name="path", value=str(path))
        self.path:   str = str(path)
        self.reason: str = reason


class UnsupportedFileTypeError(InputResolutionError):
    """Raised for any input file whose suffix is not a supported one."""

    def __init__(self, path: str, supported: tuple) -> None:
        message = (
            "Invalid file type of `" + str(path) + "'! Only "
            + ", ".join(supported) + " files are supported."
        )
        super().__init__(message=message, field_name="path", value=str(path))
        self.path: str = str(path)


class ArrayNotFoundError(InputResolutionError):
    """
    Raised when a named array is found neither in point data nor in cell
    data (or not in the single storage class that was requested).
    """

    def __init__(self, path: str, array_name: str, searched: tuple) -> None:
        message = (
            "Data array '" + array_name + "' not found in "
            + " nor in ".join(searched) + " of file `" + str(path) + "'."
        )
        super().__init__(message=message, field_name="array_name", value=array_name)
        self.path:       str = str(path)
        self.array_name: str = array_name
        self.searched:   tuple = searched


class NotNumericError(InputResolutionError):
    """Raised when a resolved array holds non-numeric data."""

    def __init__(self, array_name: str, data_type: str) -> None:
        message = (
            "Data in data array '" + array_name + "' is not numeric: "
            "data type is " + data_type + "."
        )
        super().__init__(message=message, field_name="data_type", value=data_type)
        self.array_name: str = array_name
        self.data_type:  str = data_type


class SelfComparisonError(InputResolutionError):
    """
    Raised when no second file is given and both array names are equal,
    i.e. an array would be compared to itself.
    """

    def __init__(self, path: str, array_name: str) -> None:
        message = (
            "You are trying to compare data array `" + array_name
            + "' from file `" + str(path) + "' to itself."
        )
        super().__init__(message=message, field_name="array_name", value=array_name)
        self.path:       str = str(path)
        self.array_name: str = array_name


# =============================================================================
# COMPARISON ERRORS
# =============================================================================

class ComparisonError(DiffError):
    """Comparator precondition violation. No partial report is produced."""


class ShapeMismatchError(ComparisonError):
    """
    Raised when the two arrays disagree in tuple count or component count.

    Message format:
        "Number of <what> differ: <value_a> in data array a and
         <value_b> in data array b."

    Args:
        field_name: "tuple_count" or "component_count".
        value_a:    Count observed in array a.
        value_b:    Count observed in array b.
    """

    _LABELS = {
        "tuple_count":     "tuples",
        "component_count": "components",
    }

    def __init__(self, field_name: str, value_a: int, value_b: int) -> None:
        if field_name not in self._LABELS:
            raise ValueError(
                "ShapeMismatchError: field_name must be one of "
                + repr(sorted(self._LABELS))
            )
        message = (
            "Number of " + self._LABELS[field_name] + " differ: "
            + str(value_a) + " in data array a and "
            + str(value_b) + " in data array b."
        )
        super().__init__(message=message, field_name=field_name, value=(value_a, value_b))
        self.value_a: int = value_a
        self.value_b: int = value_b


class NonNumericInputError(ComparisonError):
    """Raised by the comparator when either input array is not numeric."""

    def __init__(self, label: str, data_type: Optional[str]) -> None:
        message = (
            "Data in data array " + label + " is not numeric: "
            "data type is " + str(data_type) + "."
        )
        super().__init__(message=message, field_name="data_type", value=data_type)
        self.label:     str = label
        self.data_type: Optional[str] = data_type


__all__ = [
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
]
