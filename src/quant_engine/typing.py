from __future__ import annotations

from typing import TypeAlias

import numpy as np
from numpy.typing import DTypeLike

# typing only
Scalar: TypeAlias = float | np.floating
Greeks: TypeAlias = dict[str, np.floating]

# Runtime types
FloatDType = np.float64  # default element type
SUPPORTED_DTYPES: tuple[type[np.floating], ...] = (np.float32, np.float64)


def resolve_dtype(dtype: DTypeLike | None) -> np.dtype:
    """Normalise ``dtype`` to one of the supported floating dtypes."""
    dt = np.dtype(FloatDType if dtype is None else dtype)
    if dt.type not in SUPPORTED_DTYPES:
        raise TypeError(f"Unsupported element dtype: {dt}")
    return dt
