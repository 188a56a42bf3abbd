"""Axis descriptors and the axis-type capability used to validate contractions.

An axis type (the ``kind`` of an :class:`Idx`) decides whether two equally
named axes may be contracted and what its dual looks like. Any object that
provides the two methods of :class:`Compat` can serve as a kind; the library
ships :class:`Euclidean` (plain indices) and :class:`Variant`
(covariant/contravariant indices).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Compat(Protocol):
    def compat(self, a: "Idx", b: "Idx") -> bool:
        """Return ``True`` when ``a`` and ``b`` may be contracted."""

    def opposite(self, a: "Idx") -> "Idx":
        """Return the dual descriptor of ``a``."""


@dataclass(frozen=True)
class Idx:
    kind: Any
    dim: int
    name: str

    # Planning compares axes by name only; equality stays structural.
    def __lt__(self, other: "Idx") -> bool:
        return self.name < other.name

    def __str__(self) -> str:
        return f"{self.name}:{self.dim}"

    def renamed(self, name: str) -> "Idx":
        return replace(self, name=name)


def same_axis(a: Idx, b: Idx) -> bool:
    """Axes are the same for planning when their names agree."""
    return a.name == b.name


class Euclidean(enum.Enum):
    NONE = "none"

    def compat(self, a: Idx, b: Idx) -> bool:
        return isinstance(b.kind, Euclidean) and a.dim == b.dim

    def opposite(self, a: Idx) -> Idx:
        return a


class Variant(enum.Enum):
    CO = "co"
    CONTRA = "contra"

    def flipped(self) -> "Variant":
        return Variant.CONTRA if self is Variant.CO else Variant.CO

    def compat(self, a: Idx, b: Idx) -> bool:
        return isinstance(b.kind, Variant) and a.dim == b.dim and a.kind is not b.kind

    def opposite(self, a: Idx) -> Idx:
        return replace(a, kind=a.kind.flipped())


def _capability(idx: Idx) -> Compat:
    kind = idx.kind
    if not isinstance(kind, Compat):
        raise TypeError(f"Axis type {type(kind).__name__} does not provide compat/opposite")
    return kind


def compat(a: Idx, b: Idx) -> bool:
    return bool(_capability(a).compat(a, b))


def opposite(a: Idx) -> Idx:
    return _capability(a).opposite(a)
