"""
Linguistic variables.

An input variable holds a crisp value that its terms fuzzify; an output
variable holds the fuzzy output filled by the rules and the crisp value
obtained by defuzzifying it.
"""

import copy
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, Optional

from fuzzinfer import get_logger
from fuzzinfer import operation as op
from fuzzinfer.defuzzifier.base import Defuzzifier
from fuzzinfer.errors import EngineError, ErrorCodes, EvaluationError
from fuzzinfer.term.aggregated import Aggregated
from fuzzinfer.term.base import Term

if TYPE_CHECKING:
    from fuzzinfer.norm.base import SNorm

logger = get_logger(__name__)


class Variable(ABC):
    """
    Named range with a list of terms.

    Attributes:
        name: Name of the variable
        terms: Terms of the variable, in order
        enabled: Disabled variables are ignored by rules
    """

    def __init__(
        self,
        name: str = "",
        minimum: float = -op.inf,
        maximum: float = op.inf,
        terms: Optional[Iterable[Term]] = None,
    ):
        self.name = name
        self._minimum = minimum
        self._maximum = maximum
        self.terms: list[Term] = list(terms or [])
        self.enabled = True

    @property
    def minimum(self) -> float:
        return self._minimum

    @minimum.setter
    def minimum(self, value: float) -> None:
        self._minimum = value
        self._range_changed()

    @property
    def maximum(self) -> float:
        return self._maximum

    @maximum.setter
    def maximum(self, value: float) -> None:
        self._maximum = value
        self._range_changed()

    def set_range(self, minimum: float, maximum: float) -> None:
        self._minimum = minimum
        self._maximum = maximum
        self._range_changed()

    def range(self) -> float:
        return self._maximum - self._minimum

    def _range_changed(self) -> None:
        pass

    def has_term(self, name: str) -> bool:
        return any(term.name == name for term in self.terms)

    def term(self, name: str) -> Term:
        """
        Term named ``name``.

        Raises:
            EngineError: If the variable has no such term
        """
        for term in self.terms:
            if term.name == name:
                return term
        raise EngineError(
            message=f"[variable error] term <{name}> not found in variable <{self.name}>",
            error_code=ErrorCodes.ENGINE_UNKNOWN_TERM,
            details={
                "variable": self.name,
                "term": name,
                "available": [term.name for term in self.terms],
            },
        )

    def add_term(self, term: Term) -> None:
        self.terms.append(term)

    def remove_term(self, name: str) -> Term:
        term = self.term(name)
        self.terms.remove(term)
        return term

    @abstractmethod
    def term_degree(self, term: Term) -> float:
        """Degree to which the current state of the variable belongs to ``term``."""

    def fuzzify(self, x: float) -> str:
        """Memberships of ``x`` in every term, e.g. ``0.500/low + 0.500/high``."""
        return _fuzzy_text((term.membership(x), term.name) for term in self.terms)

    def highest_membership(self, x: float) -> tuple[float, Optional[Term]]:
        """
        Term to which ``x`` belongs the most.

        Returns:
            Tuple (degree, term); (0.0, None) when no term has a degree
            greater than zero
        """
        result: tuple[float, Optional[Term]] = (0.0, None)
        for term in self.terms:
            y = term.membership(x)
            if op.is_gt(y, result[0]):
                result = (y, term)
        return result

    def clone(self) -> "Variable":
        result = copy.copy(self)
        result.terms = [term.clone() for term in self.terms]
        return result

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"range=[{op.str_value(self._minimum)}, {op.str_value(self._maximum)}], "
            f"terms={[term.name for term in self.terms]})"
        )


class InputVariable(Variable):
    """
    Variable whose value is set before each inference cycle.

    Attributes:
        value: Crisp input value (NaN until set)
    """

    def __init__(
        self,
        name: str = "",
        minimum: float = op.nan,
        maximum: float = op.nan,
        terms: Optional[Iterable[Term]] = None,
    ):
        super().__init__(name, minimum, maximum, terms)
        self.value = op.nan

    def term_degree(self, term: Term) -> float:
        return term.membership(self.value)

    def fuzzy_input_value(self) -> str:
        return self.fuzzify(self.value)


class OutputVariable(Variable):
    """
    Variable whose value results from defuzzifying its fuzzy output.

    Attributes:
        fuzzy_output: Activated terms of the current cycle
        defuzzifier: Reduces the fuzzy output to a crisp value
        value: Crisp output of the last cycle
        previous_value: Last finite output before the current one
        default_value: Output when no rule fired
        lock_previous_value: Keep the previous output when no rule fired
        lock_value_in_range: Bound the output to [minimum, maximum]
    """

    def __init__(
        self,
        name: str = "",
        minimum: float = op.nan,
        maximum: float = op.nan,
        terms: Optional[Iterable[Term]] = None,
    ):
        self.fuzzy_output = Aggregated(name, minimum, maximum)
        super().__init__(name, minimum, maximum, terms)
        self.defuzzifier: Optional[Defuzzifier] = None
        self.value = op.nan
        self.previous_value = op.nan
        self.default_value = op.nan
        self.lock_previous_value = False
        self.lock_value_in_range = False

    @property
    def name(self) -> str:
        return self.fuzzy_output.name

    @name.setter
    def name(self, value: str) -> None:
        self.fuzzy_output.name = value

    def _range_changed(self) -> None:
        self.fuzzy_output.set_range(self._minimum, self._maximum)

    @property
    def aggregation(self) -> Optional["SNorm"]:
        return self.fuzzy_output.aggregation

    @aggregation.setter
    def aggregation(self, value: Optional["SNorm"]) -> None:
        self.fuzzy_output.aggregation = value

    def term_degree(self, term: Term) -> float:
        return self.fuzzy_output.activation_degree(term)

    def defuzzify(self) -> None:
        """
        Compute the crisp value of the current fuzzy output.

        When the variable is disabled or no rule fired, the value is the
        previous value (if locked and available) or the default value.

        Raises:
            EvaluationError: If there is something to defuzzify but no
                defuzzifier is set
        """
        if op.is_finite(self.value):
            self.previous_value = self.value

        if self.enabled and not self.fuzzy_output.is_empty():
            if self.defuzzifier is None:
                logger.error(f"Output variable <{self.name}> has no defuzzifier")
                raise EvaluationError(
                    message=f"[defuzzifier error] defuzzifier needed to defuzzify output variable <{self.name}>",
                    error_code=ErrorCodes.DEFUZZ_MISSING_DEFUZZIFIER,
                    details={"variable": self.name},
                    suggestion="Configure a defuzzifier for the output variable",
                )
            result = self.defuzzifier.defuzzify(
                self.fuzzy_output, self._minimum, self._maximum
            )
        elif self.lock_previous_value and not op.is_nan(self.previous_value):
            result = self.previous_value
        else:
            result = self.default_value

        if self.lock_value_in_range:
            result = op.bound(result, self._minimum, self._maximum)
        self.value = result

    def fuzzy_output_value(self) -> str:
        """Activation degree of every term, e.g. ``0.000/low + 0.750/high``."""
        return _fuzzy_text(
            (self.fuzzy_output.activation_degree(term), term.name) for term in self.terms
        )

    def clear(self) -> None:
        self.fuzzy_output.clear()
        self.value = op.nan
        self.previous_value = op.nan

    def clone(self) -> "OutputVariable":
        result = super().clone()
        result.fuzzy_output = self.fuzzy_output.clone()
        result.fuzzy_output.clear()
        if self.defuzzifier is not None:
            result.defuzzifier = self.defuzzifier.clone()
        return result


def _fuzzy_text(degrees: Iterable[tuple[float, str]]) -> str:
    result = ""
    for index, (degree, name) in enumerate(degrees):
        if index == 0:
            result = f"{op.str_value(degree)}/{name}"
        elif op.is_nan(degree) or op.is_ge(degree, 0.0):
            result += f" + {op.str_value(degree)}/{name}"
        else:
            result += f" - {op.str_value(abs(degree))}/{name}"
    return result
