from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional


@dataclass
class ContractionConfig:
    """
    Switches for n-ary products of named arrays.

    Key behaviors:
    * ``strategy`` selects the greedy size-driven planner (``"greedy"``) or a plain
      left-to-right fold of pairwise products (``"sequential"``).
    * ``max_intermediate_size`` aborts the product before any contraction whose result
      would hold more elements than the limit.
    * ``logger`` receives planner messages; the module logger is used when omitted.
      ``explain`` raises those messages from DEBUG to INFO.
    """

    strategy: str = "greedy"  # "greedy" | "sequential"
    max_intermediate_size: Optional[int] = None
    logger: Optional[logging.Logger] = None
    explain: bool = False

    def normalized(self) -> "ContractionConfig":
        strategy = (self.strategy or "greedy").lower()
        if strategy not in {"greedy", "sequential"}:
            raise ValueError(f"Unsupported contraction strategy: {self.strategy}")
        limit = self.max_intermediate_size
        if limit is not None:
            limit = int(limit)
            if limit <= 0:
                raise ValueError("max_intermediate_size must be positive when provided")
        return replace(
            self,
            strategy=strategy,
            max_intermediate_size=limit,
            explain=bool(self.explain),
        )
