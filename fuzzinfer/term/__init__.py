"""
Linguistic terms (membership functions) of fuzzinfer.
"""

from fuzzinfer.term.activated import Activated
from fuzzinfer.term.aggregated import Accumulated, Aggregated
from fuzzinfer.term.base import Term
from fuzzinfer.term.basic import Discrete, Rectangle, Trapezoid, Triangle
from fuzzinfer.term.edge import Concave, Ramp, Sigmoid, SShape, ZShape
from fuzzinfer.term.extended import (
    Bell,
    Binary,
    Cosine,
    Gaussian,
    GaussianProduct,
    PiShape,
    SigmoidDifference,
    SigmoidProduct,
    Spike,
)
from fuzzinfer.term.function import (
    Element,
    ElementType,
    Function,
    FunctionFactory,
    Node,
    default_function_factory,
)
from fuzzinfer.term.function_based import Constant, Linear

__all__ = [
    "Term",
    # Basic
    "Triangle",
    "Trapezoid",
    "Rectangle",
    "Discrete",
    # Extended
    "Bell",
    "Binary",
    "Cosine",
    "Gaussian",
    "GaussianProduct",
    "PiShape",
    "SigmoidDifference",
    "SigmoidProduct",
    "Spike",
    # Edge
    "Concave",
    "Ramp",
    "Sigmoid",
    "SShape",
    "ZShape",
    # Function based
    "Constant",
    "Linear",
    "Function",
    "Element",
    "ElementType",
    "Node",
    "FunctionFactory",
    "default_function_factory",
    # Fuzzy output
    "Activated",
    "Aggregated",
    "Accumulated",
]
