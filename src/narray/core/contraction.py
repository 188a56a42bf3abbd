"""Einstein products of named arrays.

Pairwise products contract every index name shared by both operands. Shared
axes are moved to the front of each operand so the product reduces to a
single matrix multiplication. Repeated names inside one array are contracted
out along their diagonal.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from . import backend
from .array import Name, NArray, map_names, mk_narray, rename_super_raw, select_dims
from .exceptions import AxisSetMismatch, IncompatibleAxis, OrderMismatch, format_dims
from .idx import Idx, compat
from .layout import first_idx, matrixator_free, parts, reorder


@dataclass(frozen=True)
class ProductAnalysis:
    shared: Tuple[Name, ...]
    dims: Tuple[Idx, ...]
    size: int
    result: Optional[NArray] = None


def common_names(a: NArray, b: NArray) -> List[Name]:
    """Names present in both arrays, in the internal order of ``a``."""
    other = set(b.names_r)
    return [n for n in a.names_r if n in other]


def analyze_product(a: NArray, b: NArray, *, dry_run: bool = False) -> ProductAnalysis:
    """Check and (unless ``dry_run``) compute the contraction of ``a`` and ``b``.

    The result holds the private axes of ``b`` followed by those of ``a``,
    which is the layout the backend produces for ``B^T A`` without a
    transpose. ``size`` is the element count of the result either way.
    """
    shared = common_names(a, b)
    for left, right in zip(select_dims(a.dims, shared), select_dims(b.dims, shared)):
        if not compat(left, right):
            raise IncompatibleAxis(
                f"wrong contraction: {format_dims(a.dims)} and {format_dims(b.dims)}",
                left=left,
                right=right,
            )
    shared_set = set(shared)
    dims = tuple(d for d in b.dims if d.name not in shared_set) + tuple(
        d for d in a.dims if d.name not in shared_set
    )
    size = backend.prod(d.dim for d in dims)
    if dry_run:
        return ProductAnalysis(tuple(shared), dims, size)
    ma, _ = matrixator_free(a, shared)
    mb, _ = matrixator_free(b, shared)
    mc = backend.matmul(mb.T, ma)
    result = NArray(dims, mc.reshape(-1))
    return ProductAnalysis(tuple(shared), dims, size, result)


def contract_pair(a: NArray, b: NArray) -> NArray:
    """Tensor product with automatic contraction of repeated indices."""
    result = analyze_product(a, b).result
    if result is None:
        raise RuntimeError("analyze_product returned no result")
    return result


# -- self contraction ----------------------------------------------------------


def contract_self(t: NArray, name_a: Name, name_b: Name) -> NArray:
    """Sum the diagonal of axes ``name_a`` and ``name_b`` of the same array."""
    left, right = t.idx(name_a), t.idx(name_b)
    if name_a == name_b:
        raise AxisSetMismatch(f"contract_self needs two distinct names, got {name_a!r} twice")
    if left.dim != right.dim or not compat(left, right):
        raise IncompatibleAxis(
            f"wrong self contraction: {format_dims(t.dims)} {name_a} {name_b}",
            left=left,
            right=right,
        )
    dims, slices = first_idx(name_a, t)
    total: Optional[np.ndarray] = None
    rest: Tuple[Idx, ...] = ()
    for k, row in enumerate(slices):
        sub_dims, sub_slices = first_idx(name_b, NArray(dims[1:], row))
        rest = sub_dims[1:]
        total = sub_slices[k] if total is None else total + sub_slices[k]
    return NArray(rest, total)


def contract_repeated(t: NArray, name: Name) -> NArray:
    """Contract the first two occurrences of a repeated name."""
    current = t.names_r
    if current.count(name) < 2:
        raise AxisSetMismatch(f"{name!r} is not repeated in {current}")
    first = current.index(name)
    alias = f" {name} "  # reserved: user names are never space padded
    renamed = rename_super_raw(t, current[:first] + [alias] + current[first + 1 :])
    return contract_self(renamed, name, alias)


def repeated_names(t: NArray) -> List[Name]:
    """Names that occur again later, one entry per extra occurrence."""
    seen = set()
    repeats: List[Name] = []
    for name in t.names_r:
        if name in seen:
            repeats.append(name)
        seen.add(name)
    return repeats


def contract(t: NArray) -> NArray:
    """Contract out every pair of repeated names, one pair at a time."""
    repeats = repeated_names(t)
    while repeats:
        t = contract_repeated(t, repeats[0])
        repeats = repeated_names(t)
    return t


# -- renaming ----------------------------------------------------------------


def rename_raw(t: NArray, names: Sequence[Name]) -> NArray:
    """Rename indices in internal order. Equal indices are contracted out."""
    return contract(rename_super_raw(t, names))


def rename_explicit(
    mapping: Union[Mapping[Name, Name], Sequence[Tuple[Name, Name]]],
    t: NArray,
) -> NArray:
    """Rename indices using an association list.

    Repeated names produced by the renaming are contracted and the remaining
    axes keep their original relative order.
    """
    table = dict(mapping)
    renamed = map_names(lambda n: table.get(n, n), t)
    counts = Counter(renamed.names_r)
    survivors = [n for n in dict.fromkeys(renamed.names_r) if counts[n] % 2 == 1]
    return reorder(survivors, contract(renamed))


def reshape_vector(dims: Sequence[Idx], coords: object) -> NArray:
    """Create an array from a flat buffer, contracting repeated names."""
    return contract(mk_narray(dims, coords))


# -- diagonal access -----------------------------------------------------------


def at(t: NArray, positions: Sequence[int]) -> NArray:
    """Select a subarray by successive positions along the leading axis."""
    q = t
    for k in positions:
        if q.order == 0:
            raise OrderMismatch(f"at: too many positions {list(positions)} for {format_dims(t.dims)}")
        q = parts(q, q.names_r[0])[k]
    return q


def take_diag(t: NArray) -> List[object]:
    """Elements whose indices are all equal."""
    if t.order == 0:
        return [t.coords[0]]
    n = min(t.sizes_r)
    return [at(t, [k] * t.order).coords[0] for k in range(n)]
