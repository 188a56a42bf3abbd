from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _load_version

from .core.array import (
    NArray,
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
from .core.config import ContractionConfig
from .core.conform import conformable, make_conformant, new_index, same_structure, zip_array
from .core.contraction import (
    analyze_product,
    contract,
    contract_pair,
    contract_self,
    rename_explicit,
    rename_raw,
    reshape_vector,
    take_diag,
)
from .core.exceptions import (
    AxisSetMismatch,
    ConformanceError,
    ConstructionSizeMismatch,
    IncompatibleAxis,
    IncompatiblePlan,
    NArrayError,
    OrderMismatch,
    PlannerError,
)
from .core.extract import as_matrix, as_scalar, as_vector, basis_of, extract, on_index
from .core.idx import Compat, Euclidean, Idx, Variant, compat, opposite
from .core.layout import move_to_front, parts, reorder
from .core.planner import ContractionStep, format_plan, plan_product, smart_product

try:
    __version__ = _load_version("narray")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "NArray",
    "Idx",
    "Compat",
    "Euclidean",
    "Variant",
    "compat",
    "opposite",
    "mk_narray",
    "scalar",
    "from_vector",
    "from_matrix",
    "reshape_vector",
    "reset_coords",
    "rename_super_raw",
    "rename_raw",
    "rename_explicit",
    "map_array",
    "map_names",
    "map_types",
    "seq_idx",
    "reorder",
    "move_to_front",
    "parts",
    "conformable",
    "make_conformant",
    "zip_array",
    "new_index",
    "same_structure",
    "analyze_product",
    "contract_pair",
    "contract_self",
    "contract",
    "take_diag",
    "smart_product",
    "plan_product",
    "format_plan",
    "ContractionStep",
    "ContractionConfig",
    "as_scalar",
    "as_vector",
    "as_matrix",
    "basis_of",
    "extract",
    "on_index",
    "NArrayError",
    "ConstructionSizeMismatch",
    "AxisSetMismatch",
    "ConformanceError",
    "IncompatibleAxis",
    "IncompatiblePlan",
    "OrderMismatch",
    "PlannerError",
    "__version__",
]
