"""
Fuzzy norms: t-norms (conjunction, implication) and s-norms
(disjunction, aggregation).
"""

from fuzzinfer.norm.base import Norm, SNorm, TNorm
from fuzzinfer.norm.snorm import (
    AlgebraicSum,
    BoundedSum,
    DrasticSum,
    EinsteinSum,
    HamacherSum,
    Maximum,
    NilpotentMaximum,
    NormalizedSum,
    UnboundedSum,
)
from fuzzinfer.norm.tnorm import (
    AlgebraicProduct,
    BoundedDifference,
    DrasticProduct,
    EinsteinProduct,
    HamacherProduct,
    Minimum,
    NilpotentMinimum,
)

# Depends on the Function term, so it is imported last
from fuzzinfer.norm.function_norm import SNormFunction, TNormFunction  # noqa: E402

__all__ = [
    "Norm",
    "TNorm",
    "SNorm",
    # T-norms
    "Minimum",
    "AlgebraicProduct",
    "BoundedDifference",
    "DrasticProduct",
    "EinsteinProduct",
    "HamacherProduct",
    "NilpotentMinimum",
    "TNormFunction",
    # S-norms
    "Maximum",
    "AlgebraicSum",
    "BoundedSum",
    "DrasticSum",
    "EinsteinSum",
    "HamacherSum",
    "NilpotentMaximum",
    "NormalizedSum",
    "UnboundedSum",
    "SNormFunction",
]
