import numpy as np
import pytest

from narray import analyze_product, contract_pair
from tests._narray_utils import named

hypothesis = pytest.importorskip("hypothesis")
from hypothesis import given  # noqa: E402
from hypothesis import strategies as st  # noqa: E402


@st.composite
def sharing_pairs(draw):
    extents = {n: draw(st.integers(min_value=1, max_value=3)) for n in "abcdef"}
    left = draw(st.lists(st.sampled_from(list("abcdef")), max_size=4, unique=True))
    right = draw(st.lists(st.sampled_from(list("abcdef")), max_size=4, unique=True))
    a = named({n: extents[n] for n in left}, seed=1)
    b = named({n: extents[n] for n in right}, seed=2)
    return a, b


@given(sharing_pairs())
def test_analysis_size_matches_result(pair):
    a, b = pair
    analysis = analyze_product(a, b)
    assert analysis.size == analysis.result.element_count
    assert analyze_product(a, b, dry_run=True).size == analysis.size
    assert analyze_product(a, b, dry_run=True).result is None


@given(sharing_pairs())
def test_product_matches_einsum(pair):
    a, b = pair
    c = contract_pair(a, b)
    spec = "".join(a.names_r) + "," + "".join(b.names_r) + "->" + "".join(c.names_r)
    expected = np.einsum(
        spec,
        np.asarray(a.coords).reshape(a.sizes_r),
        np.asarray(b.coords).reshape(b.sizes_r),
    )
    np.testing.assert_allclose(np.asarray(c.coords).reshape(c.sizes_r), expected)
