from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from .idx import Idx


class NArrayError(Exception):
    """Base class for narray-specific exceptions."""


class ConstructionSizeMismatch(NArrayError, ValueError):
    pass


class AxisSetMismatch(NArrayError, ValueError):
    pass


class OrderMismatch(NArrayError, ValueError):
    pass


class ConformanceError(NArrayError, ValueError):
    """Two arrays declare the same axis name with different descriptors."""

    def __init__(self, message: str, *, dims: Optional[Sequence[Sequence["Idx"]]] = None):
        super().__init__(message)
        self.dims = [tuple(ds) for ds in dims] if dims is not None else []


class IncompatibleAxis(NArrayError, ValueError):
    """Two equally named axes cannot be contracted together."""

    def __init__(
        self,
        message: str,
        *,
        left: Optional["Idx"] = None,
        right: Optional["Idx"] = None,
    ):
        detail = _format_pair(left, right)
        super().__init__(f"{message}{detail}")
        self.left = left
        self.right = right


class PlannerError(NArrayError, RuntimeError):
    pass


class IncompatiblePlan(PlannerError, IncompatibleAxis):
    """Incompatible axes discovered while ranking candidate contractions."""


def format_dims(dims: Sequence["Idx"]) -> str:
    return "[" + ", ".join(f"{d.name}:{d.dim}" for d in dims) + "]"


def _format_pair(left: Optional["Idx"], right: Optional["Idx"]) -> str:
    if left is None or right is None:
        return ""
    return f" ({left!r} vs {right!r})"
