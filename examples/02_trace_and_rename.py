"""Renaming an axis onto another contracts the pair (trace by renaming)."""

import numpy as np

from narray import Euclidean, from_matrix, rename_explicit, rename_raw

m = from_matrix(Euclidean.NONE, Euclidean.NONE, np.arange(16.0).reshape(4, 4))
print("axes", m.names_r)

trace = rename_explicit({"1": "2"}, m)
print("trace via rename_explicit:", trace.coords[0])

same = rename_raw(m, ["x", "x"])
print("trace via rename_raw:", same.coords[0])
assert trace.coords[0] == np.trace(np.arange(16.0).reshape(4, 4))
