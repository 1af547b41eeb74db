# vtkdiff/array_source.py
# ArraySource -- resolves (file, array name) into a numeric TupleArray.
#
# Lookup order: point data first, then cell data. Absent in both is an
# ArrayNotFoundError. Cell data split over several cell blocks is joined in
# block order. Files are read with meshio and cached per ArraySource instance.

import xml.etree.ElementTree as ET
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import meshio
import numpy as np

from vtkdiff.data_models.tuple_array import TupleArray
from vtkdiff.exceptions import (
    ArrayNotFoundError,
    FileUnreadableError,
    NotNumericError,
    SelfComparisonError,
    UnsupportedFileTypeError,
)
from vtkdiff.version import SUPPORTED_SUFFIXES

PathLike = Union[str, Path]


class StorageClass(Enum):
    POINT = "point data"
    CELL  = "cell data"


# Search order when no storage class is requested.
SEARCH_ORDER: Tuple[StorageClass, ...] = (StorageClass.POINT, StorageClass.CELL)


def _point_array(mesh: meshio.Mesh, name: str) -> Optional[np.ndarray]:
    if name not in mesh.point_data:
        return None
    return np.asarray(mesh.point_data[name])


def _cell_array(mesh: meshio.Mesh, name: str) -> Optional[np.ndarray]:
    if name not in mesh.cell_data:
        return None
    blocks = [np.asarray(block) for block in mesh.cell_data[name]]
    if not blocks:
        return None
    if len(blocks) == 1:
        return blocks[0]
    return np.concatenate(blocks, axis=0)


_GETTERS = {
    StorageClass.POINT: _point_array,
    StorageClass.CELL:  _cell_array,
}


class ArraySource:
    """
    Reads VTK unstructured grid files and extracts named data arrays.

    Methods:
      resolve(path, array_name, storage_class=None) -> TupleArray
      locate(path, array_name, storage_class=None) -> (TupleArray, StorageClass)
      resolve_pair(file_a, array_a, file_b, array_b)
          -> (TupleArray, TupleArray, StorageClass)
    """

    def __init__(self) -> None:
        self._meshes: Dict[str, meshio.Mesh] = {}

    def _read(self, path: PathLike) -> meshio.Mesh:
        key = str(path)
        if key in self._meshes:
            return self._meshes[key]
        if Path(key).suffix.lower() not in SUPPORTED_SUFFIXES:
            raise UnsupportedFileTypeError(key, SUPPORTED_SUFFIXES)
        # meshio.read exits the process on a reader error, so the vtu reader is
        # called directly. meshio cannot read String DataArrays; a file holding
        # one is unreadable as a whole, even when the requested array is numeric.
        try:
            mesh = meshio.vtu.read(key)
        except (OSError, ValueError, ET.ParseError, meshio.ReadError) as exc:
            raise FileUnreadableError(key, str(exc) or type(exc).__name__) from exc
        self._meshes[key] = mesh
        return mesh

    def locate(
        self,
        path:          PathLike,
        array_name:    str,
        storage_class: Optional[StorageClass] = None,
    ) -> Tuple[TupleArray, StorageClass]:
        """
        Find array_name in path. Searches only storage_class when given,
        otherwise point data and then cell data.

        Raises FileUnreadableError, UnsupportedFileTypeError,
        ArrayNotFoundError or NotNumericError.
        """
        mesh  = self._read(path)
        order = SEARCH_ORDER if storage_class is None else (storage_class,)
        for sc in order:
            values = _GETTERS[sc](mesh, array_name)
            if values is None:
                continue
            array = TupleArray.from_values(array_name, values)
            if not array.is_numeric:
                raise NotNumericError(array_name, array.data_type)
            return array, sc
        raise ArrayNotFoundError(str(path), array_name, tuple(sc.value for sc in order))

    def resolve(
        self,
        path:          PathLike,
        array_name:    str,
        storage_class: Optional[StorageClass] = None,
    ) -> TupleArray:
        array, _ = self.locate(path, array_name, storage_class)
        return array

    def resolve_pair(
        self,
        file_a:  PathLike,
        array_a: str,
        file_b:  Optional[PathLike],
        array_b: str,
    ) -> Tuple[TupleArray, TupleArray, StorageClass]:
        """
        Resolve array_a from file_a, then array_b from file_b (or from
        file_a when file_b is empty). Array b is looked up in the storage
        class array a was found in.

        Raises SelfComparisonError before reading anything when file_b is
        empty and both names are equal.
        """
        if not file_b and array_a == array_b:
            raise SelfComparisonError(str(file_a), array_a)
        a, storage_class = self.locate(file_a, array_a)
        b = self.resolve(file_b or file_a, array_b, storage_class)
        return a, b, storage_class
