"""
Terms whose value does not come from a shape: Constant and Linear.

Both are typical consequents of Takagi-Sugeno engines. Their membership
ignores x and is not scaled by height.
"""

from typing import TYPE_CHECKING, Iterable, Optional

from fuzzinfer import get_logger
from fuzzinfer import operation as op
from fuzzinfer.errors import EvaluationError, ErrorCodes
from fuzzinfer.term.base import Term

if TYPE_CHECKING:
    from fuzzinfer.engine import Engine

logger = get_logger(__name__)


class Constant(Term):
    """Term that always evaluates to ``value``."""

    def __init__(self, name: str = "", value: float = op.nan):
        super().__init__(name)
        self.value = value

    def membership(self, x: float) -> float:
        return self.value

    def parameters(self) -> str:
        return op.format_parameter(self.value)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        self.value = self._parse_parameters(parameters, 1, variadic=True)[0]


class Linear(Term):
    """
    Linear combination of the engine's input values.

    membership = c_0 v_0 + c_1 v_1 + ... + c_{n-1} v_{n-1} [+ k]

    where v_i is the current value of the i-th input variable of the
    engine and the optional constant k is the coefficient that follows
    the last input. The engine is referenced, not owned, and must be
    re-bound with ``update_reference`` when the term moves to a clone.
    """

    def __init__(
        self,
        name: str = "",
        coefficients: Optional[Iterable[float]] = None,
        engine: Optional["Engine"] = None,
    ):
        super().__init__(name)
        self.coefficients: list[float] = [float(c) for c in (coefficients or [])]
        self.engine = engine

    def membership(self, x: float) -> float:
        if self.engine is None:
            logger.error(f"Linear term <{self.name}> evaluated without an engine")
            raise EvaluationError(
                message=f"[linear error] term <{self.name}> is missing a reference to the engine",
                error_code=ErrorCodes.TERM_MISSING_ENGINE,
                details={"term": self.name},
            )

        inputs = self.engine.input_variables
        result = 0.0
        for coefficient, variable in zip(self.coefficients, inputs):
            result += coefficient * variable.value
        if len(self.coefficients) > len(inputs):
            result += self.coefficients[-1]
        return result

    def update_reference(self, engine: Optional["Engine"]) -> None:
        self.engine = engine

    def parameters(self) -> str:
        return " ".join(op.format_parameter(c) for c in self.coefficients)

    def configure(self, parameters: str) -> None:
        self.coefficients = []
        if not parameters.strip():
            return
        self.coefficients = self._parse_parameters(parameters, 0, variadic=True)

    def clone(self) -> "Linear":
        result = super().clone()
        result.coefficients = list(self.coefficients)
        return result
