"""Heuristic two-level Boolean minimization using ternary-index expansion."""

from .cube import Cube, Trit, default_var_names
from .ternary_index import ComplementIndex, TernaryIndex
from .expansion import expand_minterm, expand_cube, is_prime
from .cover import CoverSelector, CoverResult
from .redundancy import eliminate_redundant, RedundancyReport
from .truth_tables import BooleanFunction
from .solver import (
    SOPMinimizer,
    MinimizerOptions,
    MinimizationResult,
    CostBreakdown,
    minimize,
)
from .errors import (
    MinimizationError,
    MalformedInput,
    InconsistentSpecification,
    IncompleteSpecification,
    DeadlineExceeded,
)
from .export import to_sop, to_cube_list, to_equations, to_verilog, to_c_code
from .verify import verify_cover, verify_result

__all__ = [
    "Cube",
    "Trit",
    "default_var_names",
    "TernaryIndex",
    "ComplementIndex",
    "expand_minterm",
    "expand_cube",
    "is_prime",
    "CoverSelector",
    "CoverResult",
    "eliminate_redundant",
    "RedundancyReport",
    "BooleanFunction",
    "SOPMinimizer",
    "MinimizerOptions",
    "MinimizationResult",
    "CostBreakdown",
    "minimize",
    "MinimizationError",
    "MalformedInput",
    "InconsistentSpecification",
    "IncompleteSpecification",
    "DeadlineExceeded",
    "to_sop",
    "to_cube_list",
    "to_equations",
    "to_verilog",
    "to_c_code",
    "verify_cover",
    "verify_result",
]
__version__ = "0.1.0"
