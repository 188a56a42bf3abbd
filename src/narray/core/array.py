"""Named multidimensional arrays.

Arrays are immutable. Operations work on complete structures and dimensions
carry names, which select the contractions performed by tensor products.
Coordinates are stored flat in row-major order: the last listed axis varies
fastest.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Number
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from . import backend
from .exceptions import AxisSetMismatch, ConstructionSizeMismatch, format_dims
from .idx import Idx

Name = str


@dataclass(frozen=True, eq=False)
class NArray:
    dims: Tuple[Idx, ...]
    coords: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "dims", tuple(self.dims))
        coords = np.asarray(self.coords).reshape(-1)
        extents = [d.dim for d in self.dims]
        if any(int(e) <= 0 for e in extents) or coords.size != backend.prod(extents):
            raise ConstructionSizeMismatch(
                f"{extents} dimensions and {coords.size} coordinates for {type(self).__name__}"
            )
        object.__setattr__(self, "coords", backend.freeze(coords))

    # -- queries ---------------------------------------------------------

    @property
    def order(self) -> int:
        return len(self.dims)

    @property
    def names_r(self) -> List[Name]:
        """Index names in internal order."""
        return [d.name for d in self.dims]

    @property
    def names(self) -> List[Name]:
        """Index names in alphabetical order."""
        return sorted(self.names_r)

    @property
    def sizes_r(self) -> List[int]:
        return [d.dim for d in self.dims]

    @property
    def sizes(self) -> List[int]:
        """Extents in alphabetical order of the index names."""
        return [self.size(n) for n in self.names]

    @property
    def element_count(self) -> int:
        return backend.prod(self.sizes_r)

    @property
    def dtype(self) -> np.dtype:
        return self.coords.dtype

    def idx(self, name: Name) -> Idx:
        for d in self.dims:
            if d.name == name:
                return d
        raise AxisSetMismatch(f"{name!r} is not a dimension of {self.names_r}")

    def size(self, name: Name) -> int:
        return self.idx(name).dim

    def type_of(self, name: Name) -> Any:
        return self.idx(name).kind

    def __repr__(self) -> str:
        return f"NArray({format_dims(self.dims)}, dtype={self.coords.dtype})"

    # -- arithmetic --------------------------------------------------------

    def __mul__(self, other: Any) -> "NArray":
        from .contraction import contract_pair

        return contract_pair(self, _lift(other))

    def __rmul__(self, other: Any) -> "NArray":
        from .contraction import contract_pair

        return contract_pair(_lift(other), self)

    def __add__(self, other: Any) -> "NArray":
        from .conform import zip_array

        return zip_array(np.add, self, _lift(other))

    def __radd__(self, other: Any) -> "NArray":
        from .conform import zip_array

        return zip_array(np.add, _lift(other), self)

    def __sub__(self, other: Any) -> "NArray":
        from .conform import zip_array

        return zip_array(np.subtract, self, _lift(other))

    def __rsub__(self, other: Any) -> "NArray":
        from .conform import zip_array

        return zip_array(np.subtract, _lift(other), self)

    def __neg__(self) -> "NArray":
        return NArray(self.dims, np.negative(self.coords))


def _lift(value: Any) -> NArray:
    if isinstance(value, NArray):
        return value
    if isinstance(value, (Number, np.number)):
        return scalar(value)
    raise TypeError(f"Cannot combine NArray with {type(value).__name__}")


# -- construction ----------------------------------------------------------


def mk_narray(dims: Sequence[Idx], coords: Any, dtype: Optional[Any] = None) -> NArray:
    return NArray(tuple(dims), backend.as_coords(coords, dtype=dtype))


def scalar(value: Any) -> NArray:
    """Create a 0-dimensional structure."""
    return NArray((), backend.as_coords([value]))


def from_vector(kind: Any, vector: Any) -> NArray:
    """Create a 1st order array named ``"1"`` from a vector."""
    vec = np.asarray(vector)
    if vec.ndim != 1:
        raise ConstructionSizeMismatch(f"from_vector expects a 1-D buffer, got shape {vec.shape}")
    return mk_narray([Idx(kind, vec.shape[0], "1")], vec)


def from_matrix(row_kind: Any, col_kind: Any, matrix: Any) -> NArray:
    """Create a 2nd order array with axes ``"1"`` (rows) and ``"2"`` (columns)."""
    mat = np.asarray(matrix)
    if mat.ndim != 2:
        raise ConstructionSizeMismatch(f"from_matrix expects a 2-D buffer, got shape {mat.shape}")
    rows, cols = mat.shape
    return mk_narray([Idx(row_kind, rows, "1"), Idx(col_kind, cols, "2")], mat)


def reset_coords(t: NArray, coords: Any) -> NArray:
    """Replace the whole set of coordinates, keeping the structure."""
    vec = backend.as_coords(coords)
    if vec.size != t.coords.size:
        raise ConstructionSizeMismatch(
            f"reset_coords with {vec.size} coordinates for {format_dims(t.dims)}"
        )
    return NArray(t.dims, vec)


# -- structure manipulation --------------------------------------------------


def rename_super_raw(t: NArray, names: Sequence[Name]) -> NArray:
    """Rename indices in internal order without contracting repeated names."""
    names = list(names)
    if len(names) != t.order:
        raise AxisSetMismatch(f"rename of {t.names_r} with {names}")
    return NArray(tuple(d.renamed(n) for d, n in zip(t.dims, names)), t.coords)


def map_dims(fn: Callable[[Idx], Idx], t: NArray) -> NArray:
    return NArray(tuple(fn(d) for d in t.dims), t.coords)


def map_types(fn: Callable[[Any], Any], t: NArray) -> NArray:
    return map_dims(lambda d: Idx(fn(d.kind), d.dim, d.name), t)


def map_names(fn: Callable[[Name], Name], t: NArray) -> NArray:
    return map_dims(lambda d: d.renamed(fn(d.name)), t)


def map_array(fn: Callable[[np.ndarray], Any], t: NArray) -> NArray:
    """Apply a vectorized function to all elements of a structure."""
    return mk_narray(t.dims, fn(t.coords))


def select_dims(dims: Iterable[Idx], names: Iterable[Name]) -> List[Idx]:
    dims = list(dims)
    selected: List[Idx] = []
    for name in names:
        match = next((d for d in dims if d.name == name), None)
        if match is None:
            raise AxisSetMismatch(f"{name!r} is not a dimension of {[d.name for d in dims]}")
        selected.append(match)
    return selected


def seq_idx(n: int, prefix: str) -> List[Name]:
    """Sequence of ``n`` index names with the given prefix."""
    return [f"{prefix}{k}" for k in range(1, n + 1)]
