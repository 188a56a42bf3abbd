"""Dense NumPy storage used by :class:`~narray.core.array.NArray`.

Buffers handed out by this module are 1-D, C-contiguous and read-only, so an
array value can share memory with another without the sharing ever being
observable.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

import numpy as np
from numpy.lib.stride_tricks import as_strided


def freeze(buffer: np.ndarray) -> np.ndarray:
    view = buffer.view()
    view.flags.writeable = False
    return view


def as_coords(values: Any, dtype: Optional[Any] = None) -> np.ndarray:
    """Copy ``values`` into a fresh flat buffer."""
    arr = np.array(values, dtype=dtype, copy=True, order="C")
    return freeze(arr.reshape(-1))


def prod(values: Iterable[int]) -> int:
    result = 1
    for value in values:
        result *= int(value)
    return result


def reorder_vector(
    strides: Sequence[int],
    extents: Sequence[int],
    coords: np.ndarray,
) -> np.ndarray:
    """Permute a flat buffer given element strides and the new extents."""
    base = np.ascontiguousarray(coords)
    itemsize = base.itemsize
    view = as_strided(
        base,
        shape=tuple(int(e) for e in extents),
        strides=tuple(int(s) * itemsize for s in strides),
        writeable=False,
    )
    return freeze(np.ascontiguousarray(view).reshape(-1))


def as_rows(coords: np.ndarray, cols: int) -> np.ndarray:
    return coords.reshape(-1, int(cols))


def transpose_flat(matrix: np.ndarray) -> np.ndarray:
    return freeze(np.ascontiguousarray(matrix.T).reshape(-1))


def matmul(left: np.ndarray, right: np.ndarray) -> np.ndarray:
    return np.matmul(left, right)


def vjoin(buffers: Sequence[np.ndarray]) -> np.ndarray:
    return freeze(np.concatenate([np.asarray(b).reshape(-1) for b in buffers]))


def replicate(coords: np.ndarray, times: int) -> np.ndarray:
    return freeze(np.tile(coords, int(times)))


def identity(n: int, dtype: Any) -> np.ndarray:
    return np.eye(int(n), dtype=dtype)
