import numpy as np
import pytest

from narray import (
    AxisSetMismatch,
    ConstructionSizeMismatch,
    Euclidean,
    Idx,
    NArray,
    Variant,
    as_matrix,
    from_matrix,
    from_vector,
    map_array,
    map_names,
    map_types,
    mk_narray,
    rename_super_raw,
    reset_coords,
    scalar,
    seq_idx,
)
from tests._narray_utils import named


def test_mk_narray_rejects_size_mismatch():
    dims = [Idx(Euclidean.NONE, 2, "i"), Idx(Euclidean.NONE, 3, "j")]
    with pytest.raises(ConstructionSizeMismatch, match="5 coordinates"):
        mk_narray(dims, np.arange(5.0))


def test_mk_narray_rejects_zero_extent():
    dims = [Idx(Euclidean.NONE, 0, "i")]
    with pytest.raises(ConstructionSizeMismatch):
        mk_narray(dims, [])


def test_scalar_has_order_zero():
    s = scalar(4.5)
    assert s.order == 0
    assert s.names_r == []
    assert s.element_count == 1
    assert s.coords[0] == 4.5


def test_buffer_is_owned_and_read_only():
    source = np.arange(6.0)
    t = named({"i": 2, "j": 3}, source)
    source[0] = 100.0
    assert t.coords[0] == 0.0
    assert not t.coords.flags.writeable
    with pytest.raises(ValueError):
        t.coords[0] = 1.0


def test_queries_follow_internal_and_alphabetical_order():
    t = named({"k": 4, "i": 2, "j": 3})
    assert t.names_r == ["k", "i", "j"]
    assert t.names == ["i", "j", "k"]
    assert t.sizes_r == [4, 2, 3]
    assert t.sizes == [2, 3, 4]
    assert t.size("i") == 2
    assert t.type_of("j") is Euclidean.NONE
    with pytest.raises(AxisSetMismatch):
        t.size("z")


def test_from_vector_and_matrix_synthesize_names():
    v = from_vector(Euclidean.NONE, [1.0, 2.0, 3.0])
    assert v.names_r == ["1"]
    m = from_matrix(Variant.CO, Variant.CONTRA, np.arange(6.0).reshape(2, 3))
    assert m.names_r == ["1", "2"]
    assert m.type_of("2") is Variant.CONTRA
    np.testing.assert_array_equal(as_matrix(m), np.arange(6.0).reshape(2, 3))


def test_from_matrix_rejects_wrong_rank():
    with pytest.raises(ConstructionSizeMismatch):
        from_matrix(Euclidean.NONE, Euclidean.NONE, np.arange(3.0))


def test_reset_coords_keeps_structure():
    t = named({"i": 2, "j": 2})
    r = reset_coords(t, [1.0, 2.0, 3.0, 4.0])
    assert r.dims == t.dims
    np.testing.assert_array_equal(r.coords, [1.0, 2.0, 3.0, 4.0])
    with pytest.raises(ConstructionSizeMismatch):
        reset_coords(t, [1.0, 2.0])


def test_rename_super_raw_requires_matching_count():
    t = named({"i": 2, "j": 3})
    r = rename_super_raw(t, ["a", "b"])
    assert r.names_r == ["a", "b"]
    np.testing.assert_array_equal(r.coords, t.coords)
    with pytest.raises(AxisSetMismatch):
        rename_super_raw(t, ["a"])


def test_map_helpers():
    t = named({"i": 2, "j": 3}, np.arange(6.0))
    assert map_names(str.upper, t).names_r == ["I", "J"]
    flipped = map_types(lambda _: Variant.CO, t)
    assert flipped.type_of("i") is Variant.CO
    doubled = map_array(lambda v: 2 * v, t)
    np.testing.assert_array_equal(doubled.coords, 2 * np.arange(6.0))
    with pytest.raises(ConstructionSizeMismatch):
        map_array(lambda v: v[:2], t)


def test_seq_idx():
    assert seq_idx(3, "x") == ["x1", "x2", "x3"]
    assert seq_idx(0, "x") == []


def test_negation_and_scalar_arithmetic():
    t = named({"i": 3}, [1.0, 2.0, 3.0])
    np.testing.assert_array_equal((-t).coords, [-1.0, -2.0, -3.0])
    np.testing.assert_array_equal((2 * t).coords, [2.0, 4.0, 6.0])
    np.testing.assert_array_equal((t + 1).coords, [2.0, 3.0, 4.0])
    np.testing.assert_array_equal((10 - t).coords, [9.0, 8.0, 7.0])
    with pytest.raises(TypeError):
        t * "x"


def test_direct_construction_checks_extents_and_size():
    with pytest.raises(ConstructionSizeMismatch, match="5 coordinates"):
        NArray((Idx(Euclidean.NONE, 0, "i"), Idx(Euclidean.NONE, 3, "j")), np.arange(5.0))
    with pytest.raises(ConstructionSizeMismatch):
        NArray((Idx(Euclidean.NONE, 2, "i"),), np.arange(3.0))
    assert NArray((Idx(Euclidean.NONE, 2, "i"),), np.arange(2.0)).element_count == 2
