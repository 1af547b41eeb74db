from pathlib import Path
from typing import Dict, List, Optional

import meshio
import numpy as np
import pytest

from vtkdiff.data_models.tuple_array import TupleArray


# Unit square split into two triangles plus one boundary line.
_POINTS = np.array([
    [0.0, 0.0, 0.0],
    [1.0, 0.0, 0.0],
    [1.0, 1.0, 0.0],
    [0.0, 1.0, 0.0],
])
_CELLS = [
    ("triangle", np.array([[0, 1, 2], [0, 2, 3]])),
    ("line",     np.array([[0, 1]])),
]


def _write_vtu(
    path:       Path,
    point_data: Optional[Dict[str, np.ndarray]] = None,
    cell_data:  Optional[Dict[str, List[np.ndarray]]] = None,
    points:     Optional[np.ndarray] = None,
) -> Path:
    mesh = meshio.Mesh(
        points=_POINTS if points is None else points,
        cells=_CELLS,
        point_data=point_data or {},
        cell_data=cell_data or {},
    )
    meshio.write(str(path), mesh, file_format="vtu")
    return path


@pytest.fixture
def write_vtu():
    """Return a helper that writes a small two-triangle mesh to a .vtu file."""
    return _write_vtu


@pytest.fixture
def result_vtu(tmp_path) -> Path:
    """
    Mesh with:
      pressure      -- scalar point data
      pressure_ref  -- pressure with one value perturbed by 1e-4
      velocity      -- 3-component point data
      ids           -- int32 point data
      material      -- scalar cell data split over both cell blocks
    """
    return _write_vtu(
        tmp_path / "result.vtu",
        point_data={
            "pressure":     np.array([1.0, 2.0, 0.0, 4.0]),
            "pressure_ref": np.array([1.0, 2.0001, 0.0, 4.0]),
            "velocity":     np.array([
                [1.0, 0.0, 0.0],
                [0.0, 1.0, 0.0],
                [0.0, 0.0, 1.0],
                [1.0, 1.0, 1.0],
            ]),
            "ids":          np.array([0, 1, 2, 3], dtype=np.int32),
        },
        cell_data={
            "material": [np.array([1.0, 2.0]), np.array([3.0])],
        },
    )


@pytest.fixture
def reference_vtu(tmp_path) -> Path:
    """Same mesh as result_vtu with velocity off by 0.5 in one component."""
    return _write_vtu(
        tmp_path / "reference.vtu",
        point_data={
            "pressure":     np.array([1.0, 2.0, 0.0, 4.0]),
            "pressure_ref": np.array([1.0, 2.0001, 0.0, 4.0]),
            "velocity":     np.array([
                [1.0, 0.0, 0.0],
                [0.0, 1.5, 0.0],
                [0.0, 0.0, 1.0],
                [1.0, 1.0, 1.0],
            ]),
            "ids":          np.array([0, 1, 2, 3], dtype=np.int32),
        },
        cell_data={
            "material": [np.array([1.0, 2.0]), np.array([3.0])],
        },
    )


@pytest.fixture
def scalar_pair():
    """End-to-end example arrays: one component, three tuples."""
    a = TupleArray.from_values("a", [1.0, 2.0, 0.0])
    b = TupleArray.from_values("b", [1.0, 2.0001, 0.0])
    return a, b


@pytest.fixture
def vector_pair():
    """Two 2-component arrays of four tuples with known differences."""
    a = TupleArray.from_values("a", [[1.0, 10.0], [2.0, 20.0], [3.0, 30.0], [4.0, 40.0]])
    b = TupleArray.from_values("b", [[1.0, 10.0], [2.5, 20.0], [3.0, 28.0], [4.0, 40.0]])
    return a, b
