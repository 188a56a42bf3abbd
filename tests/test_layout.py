import numpy as np
import pytest

from narray import AxisSetMismatch, Euclidean, Idx, mk_narray, move_to_front, new_index, parts, reorder
from narray.core.layout import first_idx, fibers, matrixator, matrixator_free, parts_raw
from tests._narray_utils import dense, named


def test_reorder_transposes_matrix():
    t = named({"i": 2, "j": 3}, np.arange(6.0))
    r = reorder(["j", "i"], t)
    assert r.names_r == ["j", "i"]
    np.testing.assert_array_equal(r.coords, [0.0, 3.0, 1.0, 4.0, 2.0, 5.0])


def test_extent_one_axes_never_move_data():
    t = named({"i": 2, "u": 1, "j": 3}, np.arange(6.0))
    same = reorder(["u", "i", "j"], t)
    assert np.shares_memory(same.coords, t.coords)
    a = reorder(["j", "u", "i"], t)
    b = reorder(["u", "j", "i"], t)
    c = reorder(["j", "i", "u"], t)
    np.testing.assert_array_equal(a.coords, b.coords)
    np.testing.assert_array_equal(a.coords, c.coords)


def test_reorder_rejects_different_axis_set():
    t = named({"i": 2, "j": 3})
    with pytest.raises(AxisSetMismatch, match="wrong index sequence"):
        reorder(["i", "k"], t)
    with pytest.raises(AxisSetMismatch):
        reorder(["i"], t)


def test_move_to_front_keeps_remaining_order():
    t = named({"a": 2, "b": 3, "c": 4, "d": 5})
    moved = move_to_front(["c", "a"], t)
    assert moved.names_r == ["c", "a", "b", "d"]
    np.testing.assert_array_equal(
        dense(moved, ["a", "b", "c", "d"]), dense(t, ["a", "b", "c", "d"])
    )


def test_move_to_front_rejects_missing_and_repeated_names():
    t = named({"a": 2, "b": 3})
    with pytest.raises(AxisSetMismatch, match="not a dimension"):
        move_to_front(["z"], t)
    with pytest.raises(AxisSetMismatch):
        move_to_front(["a", "a"], t)


def test_matrixator_views():
    t = named({"i": 2, "j": 3, "k": 4})
    m = matrixator(t, ["k"], ["i", "j"])
    assert m.shape == (4, 6)
    expected = dense(t, ["k", "i", "j"]).reshape(4, 6)
    np.testing.assert_array_equal(m, expected)

    free, cols = matrixator_free(t, ["j"])
    assert cols == ["i", "k"]
    np.testing.assert_array_equal(free, dense(t, ["j", "i", "k"]).reshape(3, 8))


def test_first_idx_puts_axis_first():
    t = named({"i": 2, "j": 3, "k": 4})
    dims, rows = first_idx("j", t)
    assert [d.name for d in dims] == ["j", "k", "i"]
    assert rows.shape == (3, 8)
    np.testing.assert_array_equal(rows, dense(t, ["j", "k", "i"]).reshape(3, 8))
    np.testing.assert_array_equal(fibers("j", t), rows)


def test_parts_restore_original_order():
    t = named({"i": 2, "j": 3, "k": 4})
    pieces = parts(t, "j")
    assert len(pieces) == 3
    full = dense(t, ["i", "j", "k"])
    for index, piece in enumerate(pieces):
        assert piece.names_r == ["i", "k"]
        np.testing.assert_array_equal(dense(piece, ["i", "k"]), full[:, index, :])
    raw = parts_raw(t, "j")
    assert raw[0].names_r == ["k", "i"]
    with pytest.raises(AxisSetMismatch, match="parts"):
        parts(t, "z")


def test_parts_of_non_square_array():
    t = mk_narray(
        [Idx(Euclidean.NONE, 2, "i"), Idx(Euclidean.NONE, 3, "j")], np.arange(6.0)
    )
    rows = parts(t, "i")
    assert len(rows) == 2
    assert all(p.names_r == ["j"] and p.coords.size == 3 for p in rows)
    np.testing.assert_array_equal(rows[0].coords, [0.0, 1.0, 2.0])
    np.testing.assert_array_equal(rows[1].coords, [3.0, 4.0, 5.0])
    cols = parts(t, "j")
    assert len(cols) == 3
    np.testing.assert_array_equal(cols[2].coords, [2.0, 5.0])
    rebuilt = reorder(["i", "j"], new_index(Euclidean.NONE, "i", rows))
    np.testing.assert_array_equal(rebuilt.coords, t.coords)
