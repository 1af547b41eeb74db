# vtkdiff/data_models/tuple_array.py
# TupleArray data class: a named array of multi-component tuples.

from dataclasses import dataclass

import numpy as np

# numpy dtype kinds accepted as numeric: boolean, signed, unsigned, float.
NUMERIC_KINDS: str = "biuf"


@dataclass(frozen=True, eq=False)
class TupleArray:
    """
    Named array of tuple_count tuples with component_count components each.

    Fields:
      name      -- Array name as stored in the source file.
      data_type -- Observed dtype descriptor (e.g. "float64", "int32", "<U8").
      values    -- 2-D numpy array of shape (tuple_count, component_count),
                   in its original dtype.

    Build instances with TupleArray.from_values(); it normalises 1-D input to
    a single component and flattens any trailing axes into components.
    """
    name:      str
    data_type: str
    values:    np.ndarray

    @classmethod
    def from_values(cls, name: str, values) -> "TupleArray":
        arr = np.asarray(values)
        if arr.ndim == 0:
            raise ValueError(
                f"TupleArray '{name}': scalar input has no tuple structure."
            )
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        elif arr.ndim > 2:
            arr = arr.reshape(arr.shape[0], -1)
        return cls(name=name, data_type=str(arr.dtype), values=arr)

    @property
    def tuple_count(self) -> int:
        return int(self.values.shape[0])

    @property
    def component_count(self) -> int:
        return int(self.values.shape[1])

    @property
    def is_numeric(self) -> bool:
        return self.values.dtype.kind in NUMERIC_KINDS

    def get(self, tuple_index: int, component_index: int) -> float:
        """Return one component of one tuple as a Python float."""
        if not 0 <= tuple_index < self.tuple_count:
            raise IndexError(
                f"tuple_index {tuple_index} out of range [0, {self.tuple_count})"
            )
        if not 0 <= component_index < self.component_count:
            raise IndexError(
                f"component_index {component_index} out of range "
                f"[0, {self.component_count})"
            )
        return float(self.values[tuple_index, component_index])

    def as_float64(self) -> np.ndarray:
        """Return the values converted to float64. Numeric arrays only."""
        return self.values.astype(np.float64, copy=False)
