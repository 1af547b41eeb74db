# vtkdiff/run_diff.py
# Command-line entry point.
#
# Standard invocation:
#   vtkdiff result.vtu reference.vtu -a pressure -b pressure --abs 1e-10 --rel 1e-8
#
# Two arrays of one file:
#   python -m vtkdiff result.vtu -a pressure -b pressure_ref
#
# EXIT CODES:
#   0  -- Arrays equal within tolerance.
#   1  -- THRESHOLD_EXCEEDED: absolute and relative max norms both too large.
#   2  -- Input resolution failure (file, array name, data type, self comparison).
#   3  -- Comparison precondition failure (shape mismatch, non-numeric input).
#   4  -- Internal error.

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from vtkdiff.array_source import ArraySource
from vtkdiff.comparator import ArrayComparator
from vtkdiff.data_models.failure_record import FAILURE_TYPES
from vtkdiff.exceptions import ComparisonError, InputResolutionError
from vtkdiff.failure_handler import FailureHandler
from vtkdiff.report import (
    FormatConfig,
    render_entry,
    render_header,
    render_norms,
    render_verdict,
)
from vtkdiff.storage.report_serializer import ReportSerializer
from vtkdiff.version import (
    DEFAULT_ABS_THRESHOLD,
    DEFAULT_REL_THRESHOLD,
    VTKDIFF_VERSION,
)


def _build_parser() -> argparse.ArgumentParser:
    eps_text = f"{DEFAULT_ABS_THRESHOLD:.16e}"
    parser = argparse.ArgumentParser(
        description=(
            "Compare two data arrays of VTK unstructured grid files and report "
            "the absolute and relative error norms per component."
        ),
        prog="vtkdiff",
    )
    parser.add_argument(
        "input_file_a",
        metavar="VTK_FILE",
        help="Path to the VTK unstructured grid input file.",
    )
    parser.add_argument(
        "input_file_b",
        metavar="VTK_FILE_B",
        nargs="?",
        default="",
        help="Path to the second VTK unstructured grid input file.",
    )
    parser.add_argument(
        "-a", "--first_data_array",
        required=True,
        metavar="NAME",
        help="First data array name for comparison.",
    )
    parser.add_argument(
        "-b", "--second_data_array",
        required=True,
        metavar="NAME",
        help="Second data array name for comparison.",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Suppress all but error output.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Also print which values differ.",
    )
    parser.add_argument(
        "--abs",
        type=float,
        default=DEFAULT_ABS_THRESHOLD,
        metavar="FLOAT",
        help=f"Tolerance for the absolute error in the maximum norm ({eps_text}).",
    )
    parser.add_argument(
        "--rel",
        type=float,
        default=DEFAULT_REL_THRESHOLD,
        metavar="FLOAT",
        help=f"Tolerance for the componentwise relative error ({eps_text}).",
    )
    parser.add_argument(
        "--json",
        default=None,
        metavar="PATH",
        help="Also write the computed norms and verdict as JSON to PATH.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {VTKDIFF_VERSION}",
    )
    return parser


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Resolve both arrays, compare them and print the report.

    Returns the process exit code. Argument errors exit through argparse
    with status 2.
    """
    args = _parse_args(argv)
    fh   = FailureHandler()
    fmt  = FormatConfig()

    source = ArraySource()
    try:
        a, b, _ = source.resolve_pair(
            args.input_file_a,
            args.first_data_array,
            args.input_file_b,
            args.second_data_array,
        )
    except InputResolutionError as exc:
        return fh.handle_from_exception(exc)
    except Exception as exc:
        return fh.handle(
            "INTERNAL_ERROR",
            f"Unexpected error while reading input: {type(exc).__name__}: {exc}",
        )

    if not args.quiet:
        print(render_header(
            args.first_data_array, args.input_file_a,
            args.second_data_array, args.input_file_b,
        ))

    comparator = ArrayComparator()
    try:
        report = comparator.compare(a, b, args.abs, args.rel, verbose=args.verbose)
    except ComparisonError as exc:
        return fh.handle_from_exception(exc)
    except Exception as exc:
        return fh.handle(
            "INTERNAL_ERROR",
            f"Unexpected error while comparing: {type(exc).__name__}: {exc}",
        )

    for entry in report.differing_entries:
        print(render_entry(entry, fmt))

    if not args.quiet:
        for line in render_norms(report, fmt):
            print(line)

    if args.json:
        try:
            ReportSerializer().serialize(
                report,
                Path(args.json),
                array_a=args.first_data_array,
                array_b=args.second_data_array,
                file_a=args.input_file_a,
                file_b=args.input_file_b,
            )
        except OSError as exc:
            return fh.handle("INTERNAL_ERROR", f"Failed to write JSON report: {exc}")

    if not report.passed:
        if not args.quiet:
            for line in render_verdict(report):
                print(line)
        return FAILURE_TYPES["THRESHOLD_EXCEEDED"]

    return 0


def run_diff(
    file_a:        str,
    array_a:       str,
    array_b:       str,
    file_b:        str = "",
    abs_threshold: float = DEFAULT_ABS_THRESHOLD,
    rel_threshold: float = DEFAULT_REL_THRESHOLD,
    quiet:         bool = True,
) -> int:
    """
    Programmatic entry point. Runs main() in-process with the equivalent
    command-line arguments and returns its exit code.
    """
    argv = [file_a]
    if file_b:
        argv.append(file_b)
    argv += [
        "-a", array_a,
        "-b", array_b,
        "--abs", repr(abs_threshold),
        "--rel", repr(rel_threshold),
    ]
    if quiet:
        argv.append("-q")
    return main(argv)


if __name__ == "__main__":
    sys.exit(main())
