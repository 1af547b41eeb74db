# tests/unit/vtkdiff/test_run_diff.py
# Target: vtkdiff/run_diff.py, vtkdiff/failure_handler.py
# End-to-end runs of the command-line entry point on .vtu files in tmp_path.

import io
import json

import meshio
import numpy as np
import pytest

from vtkdiff.comparator import ArrayComparator
from vtkdiff.data_models.failure_record import FAILURE_TYPES
from vtkdiff.exceptions import ArrayNotFoundError, ShapeMismatchError
from vtkdiff.failure_handler import FailureHandler
from vtkdiff.report import FAIL_MESSAGE
from vtkdiff.run_diff import main, run_diff


# =============================================================================
# FailureHandler
# =============================================================================

class TestFailureHandler:
    def test_input_error_exit_code(self):
        stream = io.StringIO()
        code = FailureHandler(stream).handle_from_exception(
            ArrayNotFoundError("r.vtu", "T", ("point data", "cell data"))
        )
        assert code == 2
        assert stream.getvalue().startswith("VTKDIFF ERROR: ARRAY_NOT_FOUND\n")
        assert "'T'" in stream.getvalue()

    def test_comparison_error_exit_code(self):
        stream = io.StringIO()
        code = FailureHandler(stream).handle_from_exception(
            ShapeMismatchError("tuple_count", 10, 12)
        )
        assert code == 3
        assert "SHAPE_MISMATCH" in stream.getvalue()

    def test_unknown_exception_is_internal_error(self):
        stream = io.StringIO()
        code = FailureHandler(stream).handle_from_exception(KeyError("x"))
        assert code == 4
        assert "INTERNAL_ERROR" in stream.getvalue()

    def test_unknown_failure_type_maps_to_internal_exit_code(self):
        rec = FailureHandler(io.StringIO()).record("NO_SUCH_TYPE", "detail")
        assert rec.exit_code == FAILURE_TYPES["INTERNAL_ERROR"]

    def test_all_failure_codes_non_zero(self):
        assert all(code != 0 for code in FAILURE_TYPES.values())


# =============================================================================
# main()
# =============================================================================

class TestMain:
    def test_identical_arrays_pass(self, result_vtu, reference_vtu, capsys):
        code = main([str(result_vtu), str(reference_vtu), "-a", "pressure", "-b", "pressure"])
        out = capsys.readouterr().out
        assert code == 0
        assert out.startswith("Comparing data array `pressure'")
        assert "abs maximum norm = [0.000000000000000e+00]" in out
        assert FAIL_MESSAGE not in out

    def test_differing_arrays_fail(self, result_vtu, reference_vtu, capsys):
        code = main([str(result_vtu), str(reference_vtu), "-a", "velocity", "-b", "velocity"])
        out = capsys.readouterr().out
        assert code == FAILURE_TYPES["THRESHOLD_EXCEEDED"]
        assert FAIL_MESSAGE in out

    def test_thresholds_loosen_verdict(self, result_vtu, reference_vtu):
        code = main([
            str(result_vtu), str(reference_vtu), "-a", "velocity", "-b", "velocity",
            "--abs", "0.5", "--rel", "1e-8",
        ])
        assert code == 0

    def test_end_to_end_example_single_file(self, result_vtu, capsys):
        code = main([
            str(result_vtu), "-a", "pressure", "-b", "pressure_ref",
            "--abs", "1e-3", "--rel", "1e-3",
        ])
        assert code == 0
        assert "from file `" + str(result_vtu) + "'." in capsys.readouterr().out

    def test_quiet_prints_nothing(self, result_vtu, reference_vtu, capsys):
        code = main([
            str(result_vtu), str(reference_vtu), "-a", "velocity", "-b", "velocity", "-q",
        ])
        captured = capsys.readouterr()
        assert code == 1
        assert captured.out == ""
        assert captured.err == ""

    def test_verbose_prints_differing_entries(self, result_vtu, reference_vtu, capsys):
        main([str(result_vtu), str(reference_vtu), "-a", "velocity", "-b", "velocity", "-v"])
        lines = [l for l in capsys.readouterr().out.splitlines() if l.startswith("tuple:")]
        assert len(lines) == 1
        assert lines[0].startswith("tuple:    1 component:  1: ")

    def test_self_comparison(self, result_vtu, capsys):
        code = main([str(result_vtu), "-a", "pressure", "-b", "pressure"])
        captured = capsys.readouterr()
        assert code == 2
        assert "SELF_COMPARISON" in captured.err
        assert captured.out == ""

    def test_missing_file(self, tmp_path, capsys):
        code = main([str(tmp_path / "absent.vtu"), "-a", "p", "-b", "q"])
        assert code == 2
        assert "FILE_UNREADABLE" in capsys.readouterr().err

    def test_unparsable_file(self, tmp_path, capsys):
        path = tmp_path / "broken.vtu"
        path.write_text("this is not xml", encoding="utf-8")
        code = main([str(path), "-a", "p", "-b", "q"])
        captured = capsys.readouterr()
        assert code == 2
        assert captured.err.startswith("VTKDIFF ERROR: FILE_UNREADABLE\n")
        assert captured.out == ""

    def test_unexpected_reader_error_is_internal(self, result_vtu, monkeypatch, capsys):
        def failing_read(*args, **kwargs):
            raise RuntimeError("reader crashed")

        monkeypatch.setattr(meshio.vtu, "read", failing_read)
        code = main([str(result_vtu), "-a", "pressure", "-b", "pressure_ref"])
        err = capsys.readouterr().err
        assert code == FAILURE_TYPES["INTERNAL_ERROR"]
        assert "INTERNAL_ERROR" in err
        assert "RuntimeError: reader crashed" in err

    def test_unexpected_comparison_error_is_internal(self, result_vtu, monkeypatch, capsys):
        def failing_compare(*args, **kwargs):
            raise MemoryError("out of memory")

        monkeypatch.setattr(ArrayComparator, "compare", failing_compare)
        code = main([str(result_vtu), "-a", "pressure", "-b", "pressure_ref"])
        assert code == 4
        assert "MemoryError: out of memory" in capsys.readouterr().err

    def test_quiet_verbose_prints_only_entries(self, result_vtu, reference_vtu, capsys):
        code = main([
            str(result_vtu), str(reference_vtu), "-a", "velocity", "-b", "velocity", "-q", "-v",
        ])
        lines = capsys.readouterr().out.splitlines()
        assert code == 1
        assert len(lines) == 1
        assert lines[0].startswith("tuple:    1 component:  1: ")

    def test_unsupported_file_type(self, tmp_path, capsys):
        code = main([str(tmp_path / "mesh.vtk"), "-a", "p", "-b", "q"])
        assert code == 2
        assert "UNSUPPORTED_FILE_TYPE" in capsys.readouterr().err

    def test_missing_array(self, result_vtu, capsys):
        code = main([str(result_vtu), "-a", "pressure", "-b", "temperature"])
        assert code == 2
        assert "ARRAY_NOT_FOUND" in capsys.readouterr().err

    def test_component_mismatch(self, result_vtu, capsys):
        code = main([str(result_vtu), "-a", "pressure", "-b", "velocity"])
        captured = capsys.readouterr()
        assert code == 3
        assert "Number of components differ: 1 in data array a and 3" in captured.err

    def test_tuple_mismatch(self, tmp_path, write_vtu, capsys):
        small = write_vtu(tmp_path / "small.vtu", point_data={"p": np.arange(4.0)})
        points = np.array([
            [0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 1.0, 0.0],
            [0.0, 1.0, 0.0], [2.0, 2.0, 0.0],
        ])
        large = write_vtu(tmp_path / "large.vtu", point_data={"p": np.arange(5.0)}, points=points)
        code = main([str(small), str(large), "-a", "p", "-b", "p"])
        assert code == 3
        assert "Number of tuples differ: 4 in data array a and 5" in capsys.readouterr().err

    def test_json_report(self, result_vtu, reference_vtu, tmp_path):
        target = tmp_path / "report.json"
        code = main([
            str(result_vtu), str(reference_vtu), "-a", "velocity", "-b", "velocity",
            "-q", "--json", str(target),
        ])
        data = json.loads(target.read_text(encoding="utf-8"))
        assert code == 1
        assert data["result"] == "FAIL"
        assert data["component_count"] == 3
        assert data["max_abs"]["decimal"] == "0.5"

    def test_missing_required_option_exits_2(self, result_vtu):
        with pytest.raises(SystemExit) as info:
            main([str(result_vtu), "-a", "pressure"])
        assert info.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as info:
            main(["--version"])
        assert info.value.code == 0
        assert "vtkdiff" in capsys.readouterr().out


class TestRunDiff:
    def test_programmatic_pass(self, result_vtu):
        assert run_diff(str(result_vtu), "pressure", "pressure_ref",
                        abs_threshold=1e-3, rel_threshold=1e-3) == 0

    def test_programmatic_fail(self, result_vtu, reference_vtu):
        assert run_diff(str(result_vtu), "velocity", "velocity",
                        file_b=str(reference_vtu)) == 1
