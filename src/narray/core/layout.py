from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from . import backend
from .array import Name, NArray
from .exceptions import AxisSetMismatch
from .idx import Idx


def move_to_front(names: Sequence[Name], t: NArray) -> NArray:
    """Transpose ``t`` so its internal names begin with ``names``.

    The remaining axes keep their relative order. The abstract array does
    not change, only the layout of its coordinates.
    """
    positions = _front_positions(names, t)
    extents = t.sizes_r
    inner = [backend.prod(extents[p + 1 :]) for p in range(len(extents))]
    dims = tuple(t.dims[p] for p in positions)
    # Axes of extent 1 never need to move.
    moving = [p for p in positions if extents[p] > 1]
    if moving == sorted(moving):
        return NArray(dims, t.coords)
    coords = backend.reorder_vector(
        [inner[p] for p in positions],
        [extents[p] for p in positions],
        t.coords,
    )
    return NArray(dims, coords)


def _front_positions(names: Sequence[Name], t: NArray) -> List[int]:
    current = t.names_r
    front: List[int] = []
    for name in names:
        found = [p for p, n in enumerate(current) if n == name]
        if not found:
            raise AxisSetMismatch(f"{name!r} is not a dimension of {current}")
        if len(found) > 1:
            raise AxisSetMismatch(f"{name!r} is repeated in {current}")
        if found[0] in front:
            raise AxisSetMismatch(f"{name!r} requested twice in {list(names)}")
        front.append(found[0])
    return front + [p for p in range(len(current)) if p not in front]


def reorder(names: Sequence[Name], t: NArray) -> NArray:
    """Change the internal layout of coordinates.

    The array, considered as an abstract object, does not change.
    """
    names = list(names)
    if sorted(names) != sorted(t.names_r):
        raise AxisSetMismatch(f"wrong index sequence {names} to reorder {t.names_r}")
    return move_to_front(names, t)


def matrixator(t: NArray, rows: Sequence[Name], cols: Sequence[Name]) -> np.ndarray:
    """Reshape ``t`` as a matrix with ``rows`` flattened as rows and ``cols`` as columns."""
    q = reorder(list(rows) + list(cols), t)
    width = backend.prod(q.size(n) for n in cols)
    return backend.as_rows(q.coords, width)


def matrixator_free(t: NArray, rows: Sequence[Name]) -> Tuple[np.ndarray, List[Name]]:
    """Like :func:`matrixator` without forcing the order of the columns.

    Returns the matrix and the column names in the order used.
    """
    q = move_to_front(rows, t)
    col_dims = q.dims[len(rows) :]
    width = backend.prod(d.dim for d in col_dims)
    return backend.as_rows(q.coords, width), [d.name for d in col_dims]


def first_idx(name: Name, t: NArray) -> Tuple[Tuple[Idx, ...], np.ndarray]:
    """Bring the first occurrence of ``name`` to the front.

    Returns the resulting dims and a matrix whose rows are the slices of
    ``t`` along ``name``.
    """
    current = t.names_r
    if name not in current:
        raise AxisSetMismatch(f"{name!r} is not a dimension of {current}")
    split = current.index(name)
    before, after = t.dims[:split], t.dims[split:]
    width = backend.prod(d.dim for d in after)
    flat = backend.transpose_flat(backend.as_rows(t.coords, width))
    rows = backend.as_rows(flat, t.coords.size // t.dims[split].dim)
    return tuple(after) + tuple(before), rows


def fibers(name: Name, t: NArray) -> np.ndarray:
    """Matrix whose rows are the slices of ``t`` along ``name``."""
    return first_idx(name, t)[1]


def parts_raw(t: NArray, name: Name) -> List[NArray]:
    dims, rows = first_idx(name, t)
    rest = dims[1:]
    return [NArray(rest, row) for row in rows]


def parts(t: NArray, name: Name) -> List[NArray]:
    """Create a list of the substructures at the given level."""
    current = t.names_r
    if name not in current:
        raise AxisSetMismatch(f"parts: {name!r} is not a dimension of {current}")
    remaining = list(current)
    remaining.remove(name)
    return [reorder(remaining, p) for p in parts_raw(t, name)]
