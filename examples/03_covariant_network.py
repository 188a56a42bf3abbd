"""Contract a small network of tensors with covariant/contravariant axes."""

import logging

import numpy as np

from narray import (
    ContractionConfig,
    IncompatibleAxis,
    Idx,
    Variant,
    mk_narray,
    smart_product,
)

logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

rng = np.random.default_rng(1)
UP, DOWN = Variant.CONTRA, Variant.CO

metric = mk_narray([Idx(DOWN, 3, "a"), Idx(DOWN, 3, "b")], np.eye(3))
u = mk_narray([Idx(UP, 3, "a")], rng.standard_normal(3))
w = mk_narray([Idx(UP, 3, "b")], rng.standard_normal(3))

dot = smart_product([metric, u, w], ContractionConfig(explain=True))
print("g(u, w) =", dot.coords[0])
assert np.isclose(dot.coords[0], u.coords @ w.coords)

try:
    smart_product([metric, mk_narray([Idx(DOWN, 3, "a")], np.ones(3))])
except IncompatibleAxis as exc:
    print("rejected:", exc)
