"""Greedy ordering of n-ary tensor products.

:func:`smart_product` multiplies a list of named arrays by repeatedly
contracting the cheapest candidate pair. Candidates are kept in a heap of
``(cost, id_a, id_b)`` entries that may outlive the arrays they name; such
stale entries are skipped when popped. Contractions that do not grow past the
larger operand (``(0, size)``) always rank before growing ones
(``(1, size - size_a - size_b)``). The two currently smallest arrays always
have a candidate, which keeps disconnected networks and scalars contractible.
"""

from __future__ import annotations

import bisect
import heapq
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .array import Name, NArray
from .config import ContractionConfig
from .contraction import analyze_product, contract_pair
from .exceptions import IncompatibleAxis, IncompatiblePlan, PlannerError, format_dims

Cost = Tuple[int, int]
TensorID = int

_LOGGER = logging.getLogger(__name__)

SHRINKING = 0
GROWING = 1


@dataclass(frozen=True)
class ContractionStep:
    left: TensorID
    right: TensorID
    result: TensorID
    cost: Cost
    size: int
    dims: Tuple[str, ...] = ()


def pair_cost(a: NArray, b: NArray) -> Cost:
    try:
        analysis = analyze_product(a, b, dry_run=True)
    except IncompatibleAxis as exc:
        raise IncompatiblePlan(
            f"inconsistent dimensions in smart_product: {format_dims(a.dims)} and {format_dims(b.dims)}",
            left=exc.left,
            right=exc.right,
        ) from exc
    size_c = analysis.size
    size_a, size_b = a.element_count, b.element_count
    if size_c <= max(size_a, size_b):
        return (SHRINKING, size_c)
    return (GROWING, size_c - size_a - size_b)


def checked_size(a: NArray, b: NArray, limit: Optional[int]) -> int:
    size = analyze_product(a, b, dry_run=True).size
    if limit is not None and size > limit:
        raise PlannerError(
            f"contraction of {format_dims(a.dims)} and {format_dims(b.dims)} "
            f"needs {size} elements (limit {limit})"
        )
    return size


class SmartProduct:
    """Working set of the greedy planner.

    ``index_map`` only tracks axes of extent greater than one; ``pair_costs``
    holds an entry for every pair sharing such an axis plus one for the two
    smallest arrays.
    """

    def __init__(self, config: Optional[ContractionConfig] = None):
        self.config = (config or ContractionConfig()).normalized()
        self.logger = self.config.logger if self.config.logger is not None else _LOGGER
        self.level = logging.INFO if self.config.explain else logging.DEBUG
        self.tensors: Dict[TensorID, NArray] = {}
        self.index_map: Dict[Name, Set[TensorID]] = {}
        self.sizes: List[Tuple[int, TensorID]] = []
        self.pair_costs: List[Tuple[Cost, TensorID, TensorID]] = []
        self.max_id: TensorID = 0
        self.steps: List[ContractionStep] = []

    def _smallest(self) -> Tuple[Tuple[int, TensorID], ...]:
        return tuple(self.sizes[:2])

    def _refresh_smallest(self, before: Tuple[Tuple[int, TensorID], ...]) -> None:
        after = self._smallest()
        if after == before or len(after) < 2:
            return
        (_, id_a), (_, id_b) = after
        cost = pair_cost(self.tensors[id_a], self.tensors[id_b])
        heapq.heappush(self.pair_costs, (cost, id_a, id_b))

    def add_tensor(self, t: NArray) -> TensorID:
        before = self._smallest()
        new_id = self.max_id + 1
        neighbours: Set[TensorID] = set()
        for name in t.names_r:
            neighbours.update(self.index_map.get(name, ()))
        for other in sorted(neighbours):
            heapq.heappush(self.pair_costs, (pair_cost(t, self.tensors[other]), other, new_id))
        self.tensors[new_id] = t
        for d in t.dims:
            if d.dim > 1:
                self.index_map.setdefault(d.name, set()).add(new_id)
        bisect.insort(self.sizes, (t.element_count, new_id))
        self.max_id = new_id
        self._refresh_smallest(before)
        return new_id

    def remove_tensor(self, tensor_id: TensorID) -> NArray:
        before = self._smallest()
        t = self.tensors.pop(tensor_id)
        for name in t.names_r:
            ids = self.index_map.get(name)
            if ids is None:
                continue
            ids.discard(tensor_id)
            if not ids:
                del self.index_map[name]
        self.sizes.remove((t.element_count, tensor_id))
        self._refresh_smallest(before)
        return t

    def contract_all(self) -> NArray:
        while len(self.tensors) > 1:
            if not self.pair_costs:
                raise PlannerError(f"no candidate contraction left for {len(self.tensors)} arrays")
            cost, id_a, id_b = heapq.heappop(self.pair_costs)
            if id_a not in self.tensors or id_b not in self.tensors:
                self.logger.debug("skipping stale candidate T%d * T%d", id_a, id_b)
                continue
            a, b = self.tensors[id_a], self.tensors[id_b]
            size = checked_size(a, b, self.config.max_intermediate_size)
            result = contract_pair(a, b)
            self.remove_tensor(id_b)
            self.remove_tensor(id_a)
            new_id = self.add_tensor(result)
            self.steps.append(
                ContractionStep(id_a, id_b, new_id, cost, size, tuple(result.names_r))
            )
            self.logger.log(
                self.level,
                "contract T%d * T%d -> T%d %s (cost %s)",
                id_a,
                id_b,
                new_id,
                format_dims(result.dims),
                cost,
            )
        (result,) = self.tensors.values()
        return result


def _sequential(
    ts: Sequence[NArray],
    config: ContractionConfig,
) -> Tuple[NArray, List[ContractionStep]]:
    logger = config.logger if config.logger is not None else _LOGGER
    level = logging.INFO if config.explain else logging.DEBUG
    steps: List[ContractionStep] = []
    acc, acc_id = ts[0], 1
    next_id = len(ts) + 1
    for offset, t in enumerate(ts[1:], start=2):
        cost = pair_cost(acc, t)
        size = checked_size(acc, t, config.max_intermediate_size)
        acc = contract_pair(acc, t)
        steps.append(ContractionStep(acc_id, offset, next_id, cost, size, tuple(acc.names_r)))
        logger.log(level, "contract T%d * T%d -> T%d %s", acc_id, offset, next_id, format_dims(acc.dims))
        acc_id, next_id = next_id, next_id + 1
    return acc, steps


def plan_product(
    ts: Sequence[NArray],
    config: Optional[ContractionConfig] = None,
) -> Tuple[NArray, List[ContractionStep]]:
    """Multiply ``ts`` and report the contractions performed.

    Input arrays are numbered 1..n in the steps; each intermediate receives
    the next free number.
    """
    cfg = (config or ContractionConfig()).normalized()
    ts = list(ts)
    if not ts:
        raise PlannerError("smart_product needs at least one array")
    if len(ts) == 1:
        return ts[0], []
    if cfg.strategy == "sequential":
        return _sequential(ts, cfg)
    planner = SmartProduct(cfg)
    planner.logger.log(
        planner.level,
        "planning product of %d arrays: %s",
        len(ts),
        " ".join(format_dims(t.dims) for t in ts),
    )
    for t in ts:
        planner.add_tensor(t)
    result = planner.contract_all()
    return result, planner.steps


def smart_product(ts: Sequence[NArray], config: Optional[ContractionConfig] = None) -> NArray:
    """Product of a list of arrays in a greedily chosen contraction order."""
    return plan_product(ts, config)[0]


def format_plan(steps: Sequence[ContractionStep]) -> str:
    lines = []
    for number, step in enumerate(steps, start=1):
        tier = "shrinking" if step.cost[0] == SHRINKING else "growing"
        axes = ",".join(step.dims) or "scalar"
        lines.append(
            f"{number:>3}: T{step.result} = T{step.left} * T{step.right}"
            f"  [{axes}] size={step.size} {tier}={step.cost[1]}"
        )
    return "\n".join(lines)
