from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np

from .core.array import NArray, mk_narray
from .core.config import ContractionConfig
from .core.exceptions import NArrayError
from .core.idx import Euclidean, Idx
from .core.planner import format_plan, plan_product


def _parse_shape(spec: str) -> List[Idx]:
    spec = spec.strip()
    if spec in ("", "scalar"):
        return []
    dims: List[Idx] = []
    for item in spec.split(","):
        name, sep, extent = item.partition(":")
        if not sep or not name:
            raise SystemExit(f"Invalid axis spec {item!r}; expected name:extent")
        try:
            dims.append(Idx(Euclidean.NONE, int(extent), name.strip()))
        except ValueError as exc:
            raise SystemExit(f"Invalid extent in axis spec {item!r}") from exc
    return dims


def _load_operand(spec: str) -> NArray:
    path_text, sep, axes = spec.rpartition(":")
    if not sep:
        raise SystemExit(f"Invalid operand {spec!r}; expected FILE:axis,axis,...")
    path = Path(path_text)
    try:
        data = np.load(path)
    except FileNotFoundError as exc:
        raise SystemExit(f"Array file not found: {path}") from exc
    names = [n.strip() for n in axes.split(",") if n.strip()]
    if len(names) != data.ndim:
        raise SystemExit(f"{path}: {data.ndim} axes but {len(names)} names given")
    dims = [Idx(Euclidean.NONE, extent, name) for extent, name in zip(data.shape, names)]
    return mk_narray(dims, data)


def _write_output(path: Path, result: NArray) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    dense = np.asarray(result.coords).reshape(result.sizes_r)
    if str(path).lower().endswith(".json"):
        payload = {"axes": result.names_r, "shape": result.sizes_r, "data": dense.tolist()}
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    else:
        np.save(path, dense)


def _config(args: argparse.Namespace) -> ContractionConfig:
    return ContractionConfig(
        strategy=args.strategy,
        max_intermediate_size=args.max_size,
        explain=args.verbose,
    )


def _plan(shapes: Sequence[str], args: argparse.Namespace) -> None:
    rng = np.random.default_rng(args.seed)
    operands = []
    for spec in shapes:
        dims = _parse_shape(spec)
        count = int(np.prod([d.dim for d in dims], dtype=np.int64))
        operands.append(mk_narray(dims, rng.standard_normal(count)))
    result, steps = plan_product(operands, _config(args))
    print(format_plan(steps) or "(single operand, nothing to contract)")
    print(f"# result {result!r}")


def _contract(operands: Sequence[str], args: argparse.Namespace, out: Optional[Path]) -> None:
    arrays = [_load_operand(spec) for spec in operands]
    result, _ = plan_product(arrays, _config(args))
    if out is None:
        np.set_printoptions(suppress=True)
        print(f"# axes {','.join(result.names_r)}")
        print(np.asarray(result.coords).reshape(result.sizes_r))
        return
    _write_output(out, result)


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--strategy",
        default="greedy",
        choices=["greedy", "sequential"],
        help="Contraction ordering (default: greedy)",
    )
    parser.add_argument(
        "--max-size",
        type=int,
        default=None,
        help="Abort when an intermediate result would exceed this many elements",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every contraction")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="narray command line utilities")
    subparsers = parser.add_subparsers(dest="cmd")

    plan_parser = subparsers.add_parser("plan", help="Show the greedy order for a network")
    plan_parser.add_argument(
        "shapes",
        nargs="+",
        help="Operand shapes as name:extent,name:extent (use 'scalar' for order 0)",
    )
    plan_parser.add_argument("--seed", type=int, default=0, help="Seed for the random operands")
    _add_common_options(plan_parser)

    contract_parser = subparsers.add_parser("contract", help="Contract .npy arrays by axis name")
    contract_parser.add_argument(
        "operands",
        nargs="+",
        help="Operands as FILE.npy:axis,axis,...",
    )
    contract_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Optional output path (.npy/.json). If omitted, prints the result",
    )
    _add_common_options(contract_parser)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    try:
        if args.cmd == "plan":
            _plan(args.shapes, args)
            return
        if args.cmd == "contract":
            _contract(args.operands, args, out=args.out)
            return
    except NArrayError as exc:
        raise SystemExit(f"error: {exc}") from exc

    parser.print_help()


if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:])
