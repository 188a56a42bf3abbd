from __future__ import annotations

from typing import Any, Callable, List

import numpy as np

from . import backend
from .array import Name, NArray
from .conform import new_index
from .exceptions import OrderMismatch
from .layout import parts, reorder


def as_scalar(t: NArray) -> Any:
    """Extract the element of a 0-dimensional array."""
    if t.order != 0:
        raise OrderMismatch(f"as_scalar requires a 0th order array, got order {t.order}")
    return t.coords[0]


def as_vector(t: NArray) -> np.ndarray:
    """Extract the vector of a 1-dimensional array."""
    if t.order != 1:
        raise OrderMismatch(f"as_vector requires a 1st order array, got order {t.order}")
    return t.coords


def as_matrix(t: NArray) -> np.ndarray:
    """Extract the matrix of a 2-dimensional array.

    Rows and columns follow the alphabetical order of the index names.
    """
    if t.order != 2:
        raise OrderMismatch(f"as_matrix requires a 2nd order array, got order {t.order}")
    q = reorder(t.names, t)
    return backend.as_rows(q.coords, q.size(q.names_r[-1]))


def basis_of(t: NArray) -> List[NArray]:
    """Canonical basis of the space of arrays with the structure of ``t``."""
    eye = backend.identity(t.coords.size, t.coords.dtype)
    return [NArray(t.dims, row) for row in eye]


def extract(pred: Callable[[int, NArray], bool], name: Name, t: NArray) -> NArray:
    """Select the parts of ``t`` along ``name`` accepted by ``pred``.

    ``pred`` receives the 1-based position and the part.
    """
    kept = [p for k, p in enumerate(parts(t, name), start=1) if pred(k, p)]
    return reorder(t.names_r, new_index(t.type_of(name), name, kept))


def on_index(
    fn: Callable[[List[NArray]], List[NArray]],
    name: Name,
    t: NArray,
) -> NArray:
    """Apply a list function to the parts of ``t`` at index ``name``."""
    x = new_index(t.type_of(name), name, fn(parts(t, name)))
    if sorted(x.names_r) == sorted(t.names_r):
        return reorder(t.names_r, x)
    return x
