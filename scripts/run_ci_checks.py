#!/usr/bin/env python3
# =============================================================================
# vtkdiff -- CI CHECKS RUNNER
# File:   scripts/run_ci_checks.py
# =============================================================================
#
# PURPOSE
# -------
# Runs the CI gate in two sequential stages:
#   Stage 1: pytest (all tests + coverage report via pytest-cov)
#   Stage 2: self-check (vtkdiff run on a generated mesh pair: one pair
#            that must pass, one that must fail with THRESHOLD_EXCEEDED)
#
# Exit codes:
#   0 -- All stages passed.
#   1 -- Stage 1 (pytest) failed.
#   2 -- Stage 2 (self-check) failed.
#
# Usage:
#   python scripts/run_ci_checks.py
# =============================================================================

from __future__ import annotations

import pathlib
import subprocess
import sys
import tempfile

import meshio
import numpy as np

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
_REPO_ROOT = pathlib.Path(__file__).parent.parent
_PYTHON    = sys.executable


def _separator(char: str = "=", width: int = 72) -> str:
    return char * width


def _run(cmd: list[str], label: str) -> int:
    """
    Run a subprocess command, stream stdout/stderr live, return exit code.
    """
    print(_separator())
    print(f"CI STAGE: {label}")
    print(f"CMD:      {' '.join(cmd)}")
    print(_separator("-"))
    sys.stdout.flush()

    proc = subprocess.run(
        cmd,
        cwd=str(_REPO_ROOT),
    )
    return proc.returncode


def _write_mesh(path: pathlib.Path, velocity: np.ndarray) -> None:
    points = np.array([
        [0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0],
        [1.0, 1.0, 0.0],
        [0.0, 1.0, 0.0],
    ])
    mesh = meshio.Mesh(
        points=points,
        cells=[("quad", np.array([[0, 1, 2, 3]]))],
        point_data={"velocity": velocity},
    )
    meshio.write(str(path), mesh, file_format="vtu")


def _self_check(workdir: pathlib.Path) -> int:
    """
    Return 0 if vtkdiff passes the identical pair and fails the perturbed
    pair with exit code 1; otherwise 2.
    """
    base = np.arange(12.0).reshape(4, 3)
    perturbed = base.copy()
    perturbed[2, 1] += 1.0

    a = workdir / "a.vtu"
    b = workdir / "b.vtu"
    c = workdir / "c.vtu"
    _write_mesh(a, base)
    _write_mesh(b, base.copy())
    _write_mesh(c, perturbed)

    cmd = [_PYTHON, "-m", "vtkdiff", "-a", "velocity", "-b", "velocity"]
    same_rc = _run(cmd[:3] + [str(a), str(b)] + cmd[3:], "self-check: identical pair")
    diff_rc = _run(cmd[:3] + [str(a), str(c)] + cmd[3:] + ["-v"], "self-check: perturbed pair")

    if same_rc != 0 or diff_rc != 1:
        print(f"SELF-CHECK: identical rc={same_rc} (want 0), perturbed rc={diff_rc} (want 1)")
        return 2
    return 0


def main() -> int:
    print(_separator())
    print("vtkdiff CI GATE -- starting")
    print(_separator())
    sys.stdout.flush()

    # ------------------------------------------------------------------
    # Stage 1: pytest
    # ------------------------------------------------------------------
    pytest_rc = _run(
        [_PYTHON, "-m", "pytest", "--cov=vtkdiff", "--cov-report=term-missing"],
        "pytest (tests + coverage)",
    )

    if pytest_rc != 0:
        print(_separator())
        print(f"CI RESULT: FAIL  [stage=pytest  exit_code={pytest_rc}]")
        print(_separator())
        sys.stdout.flush()
        return 1

    print(_separator("-"))
    print("CI STAGE pytest: PASS")
    sys.stdout.flush()

    # ------------------------------------------------------------------
    # Stage 2: self-check on generated meshes
    # ------------------------------------------------------------------
    with tempfile.TemporaryDirectory() as tmp:
        check_rc = _self_check(pathlib.Path(tmp))

    if check_rc != 0:
        print(_separator())
        print(f"CI RESULT: FAIL  [stage=self-check  exit_code={check_rc}]")
        print(_separator())
        sys.stdout.flush()
        return 2

    print(_separator("-"))
    print("CI STAGE self-check: PASS")

    print(_separator())
    print("CI RESULT: PASS  [stages=pytest,self-check]")
    print(_separator())
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
