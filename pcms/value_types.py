"""Scalar value kinds used for field data: reals, local ordinals and global ordinals."""

from __future__ import annotations

import enum
from typing import Any

import numpy as np

REAL_DTYPE = np.dtype(np.float64)
LO_DTYPE = np.dtype(np.int32)
GO_DTYPE = np.dtype(np.int64)

_LO_INFO = np.iinfo(LO_DTYPE)


class ValueType(enum.Enum):
    """Kind of scalar stored in a field."""

    REAL = "real"
    LO = "lo"
    GO = "go"

    @property
    def dtype(self) -> np.dtype:
        """The numpy dtype that stores values of this kind."""
        return _DTYPES[self]


_DTYPES = {
    ValueType.REAL: REAL_DTYPE,
    ValueType.LO: LO_DTYPE,
    ValueType.GO: GO_DTYPE,
}

_BY_DTYPE = {dtype: kind for kind, dtype in _DTYPES.items()}


def type_enum_from_value(value: Any) -> ValueType:
    """Return the value kind of a scalar, numpy array or numpy dtype.

    Python floats are reals. Python ints are local ordinals when they fit in
    32 bits and global ordinals otherwise. Numpy values are classified by their
    dtype, which must be float64, int32 or int64.
    """
    if isinstance(value, (bool, np.bool_)):
        raise TypeError("booleans have no value kind")
    if isinstance(value, np.dtype):
        dtype = value
    elif isinstance(value, type) and issubclass(value, np.generic):
        dtype = np.dtype(value)
    elif isinstance(value, (np.generic, np.ndarray)):
        dtype = value.dtype
    elif isinstance(value, float):
        return ValueType.REAL
    elif isinstance(value, int):
        if _LO_INFO.min <= value <= _LO_INFO.max:
            return ValueType.LO
        return ValueType.GO
    else:
        raise TypeError(f"unsupported value type: {type(value).__name__}")
    try:
        return _BY_DTYPE[dtype]
    except KeyError:
        raise TypeError(f"unsupported dtype: {dtype}") from None