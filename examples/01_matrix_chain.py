"""Multiply a chain of matrices by axis name and show the greedy order."""

import numpy as np

from narray import Euclidean, Idx, format_plan, mk_narray, plan_product, reorder

rng = np.random.default_rng(0)


def matrix(rows: str, cols: str, n_rows: int, n_cols: int):
    dims = [Idx(Euclidean.NONE, n_rows, rows), Idx(Euclidean.NONE, n_cols, cols)]
    return mk_narray(dims, rng.standard_normal(n_rows * n_cols))


A = matrix("i", "j", 30, 40)
B = matrix("j", "k", 40, 2)
C = matrix("k", "l", 2, 50)
v = mk_narray([Idx(Euclidean.NONE, 50, "l")], rng.standard_normal(50))

result, steps = plan_product([A, B, C, v])
print(format_plan(steps))

out = reorder(["i"], result)
dense = (
    A.coords.reshape(30, 40) @ B.coords.reshape(40, 2) @ C.coords.reshape(2, 50) @ v.coords
)
assert np.allclose(out.coords, dense)
print("result", out)
