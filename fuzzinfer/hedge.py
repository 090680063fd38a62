"""
Hedges: unary transforms applied to the degree of a proposition.

In rule text a hedge is written between ``is`` and the term, as in
``if service is very good``. Hedge names are the lower-cased class names.
"""

import copy
from abc import ABC, abstractmethod
from typing import Optional

from fuzzinfer import operation as op
from fuzzinfer.term.function import Function, FunctionFactory


class Hedge(ABC):
    """Abstract unary transform of a degree of truth."""

    @property
    def name(self) -> str:
        return type(self).__name__.lower()

    @abstractmethod
    def hedge(self, x: float) -> float:
        """Transform the degree x."""

    def clone(self) -> "Hedge":
        return copy.copy(self)

    def __call__(self, x: float) -> float:
        return self.hedge(x)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Any(Hedge):
    """Always 1; ``variable is any`` holds regardless of the term."""

    def hedge(self, x: float) -> float:
        return 1.0


class Extremely(Hedge):
    """x^3"""

    def hedge(self, x: float) -> float:
        return x * x * x


class Not(Hedge):
    """1 - x"""

    def hedge(self, x: float) -> float:
        return 1.0 - x


class Seldom(Hedge):
    """sqrt(x / 2) when x <= 0.5, otherwise 1 - sqrt((1 - x) / 2)"""

    def hedge(self, x: float) -> float:
        if op.is_le(x, 0.5):
            return op.sqrt(x / 2.0)
        return 1.0 - op.sqrt((1.0 - x) / 2.0)


class Somewhat(Hedge):
    """sqrt(x)"""

    def hedge(self, x: float) -> float:
        return op.sqrt(x)


class Very(Hedge):
    """x^2"""

    def hedge(self, x: float) -> float:
        return x * x


class HedgeFunction(Hedge):
    """
    Hedge given by a formula in ``x``.

    Example:
        >>> HedgeFunction("x ^ 4").hedge(0.5)
        0.0625
    """

    def __init__(
        self,
        formula: str = "",
        name: str = "function",
        factory: Optional[FunctionFactory] = None,
    ):
        self._name = name
        self.function = Function(name, formula, factory=factory)
        self.function.variables["x"] = op.nan
        if formula.strip():
            self.function.load()

    @property
    def name(self) -> str:
        return self._name

    @property
    def formula(self) -> str:
        return self.function.formula

    @formula.setter
    def formula(self, formula: str) -> None:
        self.function.load(formula)

    def hedge(self, x: float) -> float:
        return self.function.membership(x)

    def clone(self) -> "HedgeFunction":
        result = super().clone()
        result.function = self.function.clone()
        return result

    def __repr__(self) -> str:
        return f"HedgeFunction({self.formula!r}, name={self.name!r})"
