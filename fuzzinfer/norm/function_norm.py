"""
Norms computed from a user formula over ``a`` and ``b``.
"""

from typing import Optional

from fuzzinfer.norm.base import SNorm, TNorm
from fuzzinfer.term.function import Function, FunctionFactory


class _FormulaNorm:
    """Mixin holding a loaded formula in the variables a and b."""

    def __init__(self, formula: str = "", factory: Optional[FunctionFactory] = None):
        self.function = Function(type(self).__name__, formula, factory=factory)
        if formula.strip():
            self.function.load()

    @property
    def formula(self) -> str:
        return self.function.formula

    @formula.setter
    def formula(self, formula: str) -> None:
        self.function.load(formula)

    def compute(self, a: float, b: float) -> float:
        return self.function.compute({"a": a, "b": b})

    def clone(self):
        result = super().clone()  # type: ignore[misc]
        result.function = self.function.clone()
        return result

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.formula == other.formula  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.formula))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.formula!r})"


class TNormFunction(_FormulaNorm, TNorm):
    """T-norm given by a formula, e.g. ``TNormFunction("a * b")``."""


class SNormFunction(_FormulaNorm, SNorm):
    """S-norm given by a formula, e.g. ``SNormFunction("a + b - a * b")``."""
