from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence, TypeVar

import numpy as np

from . import backend
from .array import Name, NArray, mk_narray
from .exceptions import ConformanceError, ConstructionSizeMismatch, format_dims
from .idx import Idx, same_axis
from .layout import reorder

T = TypeVar("T")
V = TypeVar("V")


def conformable(dim_lists: Sequence[Sequence[Idx]]) -> Optional[List[Idx]]:
    """Most general structure of a list of dimension specifications.

    Returns ``None`` when two descriptors share a name but differ in extent
    or type.
    """
    alldims: List[Idx] = []
    for dims in dim_lists:
        for d in dims:
            if d not in alldims:
                alldims.append(d)
    for k, d in enumerate(alldims):
        if any(same_axis(d, e) for e in alldims[k + 1 :]):
            return None
    return alldims


def extend(alldims: Sequence[Idx], t: NArray) -> NArray:
    """Replicate ``t`` along the axes of ``alldims`` it does not have."""
    missing = [d for d in alldims if d not in t.dims]
    copies = backend.prod(d.dim for d in missing)
    widened = NArray(tuple(missing) + t.dims, backend.replicate(t.coords, copies))
    return reorder([d.name for d in alldims], widened)


def make_conformant(ts: Sequence[NArray]) -> List[NArray]:
    """Convert a list of arrays to a common structure."""
    ts = list(ts)
    alldims = conformable([t.dims for t in ts])
    if alldims is None:
        raise ConformanceError(
            "make_conformant with inconsistent dimensions "
            + ", ".join(format_dims(t.dims) for t in ts),
            dims=[t.dims for t in ts],
        )
    return [extend(alldims, t) for t in ts]


def zip_array(
    fn: Callable[[np.ndarray, np.ndarray], Any],
    a: NArray,
    b: NArray,
) -> NArray:
    """Apply an element-by-element binary function to two arrays.

    The arguments are made conformant first.
    """
    left, right = make_conformant([a, b])
    return mk_narray(left.dims, fn(left.coords, right.coords))


def new_index(kind: Any, name: Name, ts: Sequence[NArray]) -> NArray:
    """Create an array from a list of subarrays (the inverse of ``parts``)."""
    ts = list(ts)
    if not ts:
        raise ConstructionSizeMismatch(f"new_index {name!r} needs at least one subarray")
    cts = make_conformant(ts)
    dims = (Idx(kind, len(cts), name),) + cts[0].dims
    return mk_narray(dims, backend.vjoin([t.coords for t in cts]))


def same_structure(a: NArray, b: NArray) -> bool:
    """Check if two arrays have the same structure."""

    def key(d: Idx) -> Name:
        return d.name

    return sorted(a.dims, key=key) == sorted(b.dims, key=key)


def common(fn: Callable[[T], V], items: Sequence[T]) -> Optional[V]:
    """Common value of a property of a list, or ``None``."""
    values = [fn(item) for item in items]
    if not values:
        return None
    first = values[0]
    if all(value == first for value in values[1:]):
        return first
    return None
