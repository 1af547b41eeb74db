# vtkdiff/failure_handler.py
# FailureHandler -- maps errors and failed verdicts to diagnostics and
# exit codes for the command-line entry point.
#
# Every failure kind gets a distinct diagnostic naming the offending values
# and a non-zero exit code from FAILURE_TYPES. The handler returns the exit
# code; terminating the process is left to the caller.

import sys
from typing import Optional, TextIO

from vtkdiff.data_models.failure_record import (
    EXCEPTION_FAILURE_TYPES,
    FAILURE_TYPES,
    FailureRecord,
)
from vtkdiff.exceptions import DiffError


class FailureHandler:
    """
    Builds a FailureRecord, writes it to the error stream and returns the
    exit code.

    Usage:
      fh = FailureHandler()
      return fh.handle_from_exception(exc)
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved late so that redirected sys.stderr is honoured.
        return self._stream if self._stream is not None else sys.stderr

    def record(
        self,
        failure_type_id: str,
        detail:          str,
        field_name:      str = "",
    ) -> FailureRecord:
        exit_code = FAILURE_TYPES.get(failure_type_id, FAILURE_TYPES["INTERNAL_ERROR"])
        return FailureRecord(
            failure_type_id=failure_type_id,
            exit_code=exit_code,
            field_name=field_name,
            detail=detail,
        )

    def handle(
        self,
        failure_type_id: str,
        detail:          str,
        field_name:      str = "",
    ) -> int:
        """Write the failure summary to the error stream. Returns exit code."""
        rec = self.record(failure_type_id, detail, field_name)
        self.stream.write(
            f"VTKDIFF ERROR: {rec.failure_type_id}\n"
            f"{rec.detail}\n"
        )
        return rec.exit_code

    def handle_from_exception(self, exc: Exception) -> int:
        """
        Map a DiffError subclass to its failure type; anything else is an
        INTERNAL_ERROR.
        """
        failure_type_id = "INTERNAL_ERROR"
        for cls in type(exc).__mro__:
            if cls.__name__ in EXCEPTION_FAILURE_TYPES:
                failure_type_id = EXCEPTION_FAILURE_TYPES[cls.__name__]
                break
        field_name = exc.field_name if isinstance(exc, DiffError) else ""
        detail     = str(exc) or type(exc).__name__
        return self.handle(failure_type_id, detail, field_name)
