#!/usr/bin/env python3
"""
Greedy versus sequential ordering benchmark for n-ary named products.

The script builds a random "ladder" network (two rails of matrices joined by
rungs) where a left-to-right fold produces large intermediates, and times
``smart_product`` under both strategies.
"""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from narray import ContractionConfig, Euclidean, Idx, NArray, mk_narray, plan_product


@dataclass
class BenchmarkResult:
    strategy: str
    min_s: float
    mean_s: float
    iterations: int
    steps: int
    peak_elements: int


def build_ladder(length: int, bond: int, seed: int) -> List[NArray]:
    rng = np.random.default_rng(seed)
    ops: List[NArray] = []
    for k in range(length):
        for rail in ("a", "b"):
            dims = [
                Idx(Euclidean.NONE, bond, f"{rail}{k}"),
                Idx(Euclidean.NONE, bond, f"{rail}{k + 1}"),
                Idx(Euclidean.NONE, bond, f"r{k}"),
            ]
            ops.append(mk_narray(dims, rng.standard_normal(bond**3) / bond))
    return ops


def run_strategy(
    ops: List[NArray],
    strategy: str,
    *,
    iterations: int,
    max_size: Optional[int],
) -> BenchmarkResult:
    config = ContractionConfig(strategy=strategy, max_intermediate_size=max_size)
    timings: List[float] = []
    steps = []
    for _ in range(iterations):
        start = time.perf_counter()
        _, steps = plan_product(ops, config)
        timings.append(time.perf_counter() - start)
    peak = max((step.size for step in steps), default=0)
    return BenchmarkResult(
        strategy=strategy,
        min_s=min(timings),
        mean_s=sum(timings) / len(timings),
        iterations=iterations,
        steps=len(steps),
        peak_elements=peak,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--length", type=int, default=6, help="Number of ladder rungs")
    parser.add_argument("--bond", type=int, default=4, help="Extent of every axis")
    parser.add_argument("--iterations", type=int, default=5)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument(
        "--max-size",
        type=int,
        default=None,
        help="Skip a strategy when an intermediate exceeds this many elements",
    )
    args = parser.parse_args(argv)

    ops = build_ladder(args.length, args.bond, args.seed)
    print(f"ladder: {len(ops)} operands, bond {args.bond}")
    for strategy in ("greedy", "sequential"):
        try:
            result = run_strategy(ops, strategy, iterations=args.iterations, max_size=args.max_size)
        except RuntimeError as exc:
            print(f"{strategy:>10}: skipped ({exc})")
            continue
        print(
            f"{result.strategy:>10}: min {result.min_s * 1e3:8.2f} ms  "
            f"mean {result.mean_s * 1e3:8.2f} ms  steps {result.steps}  "
            f"peak {result.peak_elements} elements"
        )
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
