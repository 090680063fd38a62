"""
Aggregated term: the fuzzy output of an output variable.

During an inference cycle every fired rule appends one ``Activated`` term
per conclusion; the aggregated membership folds the aggregation s-norm
over all of them. The set is cleared at the start of the next cycle,
so callers that need the result of a cycle after the engine moves on
should keep a ``snapshot()``.
"""

from typing import TYPE_CHECKING, Iterable, Optional

from fuzzinfer import get_logger
from fuzzinfer import operation as op
from fuzzinfer.errors import ErrorCodes, EvaluationError
from fuzzinfer.term.activated import Activated
from fuzzinfer.term.base import Term

if TYPE_CHECKING:
    from fuzzinfer.norm.base import SNorm, TNorm

logger = get_logger(__name__)


class Aggregated(Term):
    """
    Union of activated terms over [minimum, maximum].

    Attributes:
        terms: Activated terms of the current cycle
        minimum: Lower bound of the output range
        maximum: Upper bound of the output range
        aggregation: S-norm combining the activated terms
    """

    def __init__(
        self,
        name: str = "",
        minimum: float = op.nan,
        maximum: float = op.nan,
        aggregation: Optional["SNorm"] = None,
        terms: Optional[Iterable[Activated]] = None,
    ):
        super().__init__(name)
        self.minimum = minimum
        self.maximum = maximum
        self.aggregation = aggregation
        self.terms: list[Activated] = list(terms or [])

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan
        if self.terms and self.aggregation is None:
            logger.error(f"Aggregated <{self.name}> has terms but no aggregation")
            raise EvaluationError(
                message=f"[aggregation error] aggregation operator needed to aggregate variable <{self.name}>",
                error_code=ErrorCodes.DEFUZZ_MISSING_AGGREGATION,
                details={"variable": self.name, "terms": len(self.terms)},
            )

        mu = 0.0
        for activated in self.terms:
            mu = self.aggregation.compute(mu, activated.membership(x))
        return mu

    def activation_degree(self, term: Term) -> float:
        """
        Combined degree of every activation of ``term``.

        Activations are matched by identity of the underlying term and
        combined with the aggregation, or summed when none is set.
        """
        result = 0.0
        for activated in self.terms:
            if activated.term is term:
                if self.aggregation is not None:
                    result = self.aggregation.compute(result, activated.degree)
                else:
                    result += activated.degree
        return result

    def highest_activated_term(self) -> Optional[Activated]:
        """Activated term with the greatest degree, or None when no term fired."""
        result: Optional[Activated] = None
        maximum_degree = -op.inf
        for activated in self.terms:
            if op.is_gt(activated.degree, maximum_degree):
                result = activated
                maximum_degree = activated.degree
        return result

    def add_term(
        self, term: Term, degree: float, implication: Optional["TNorm"] = None
    ) -> Activated:
        activated = Activated(term, degree, implication)
        self.terms.append(activated)
        return activated

    def is_empty(self) -> bool:
        return not self.terms

    def clear(self) -> None:
        self.terms.clear()

    def set_range(self, minimum: float, maximum: float) -> None:
        self.minimum = minimum
        self.maximum = maximum

    def range(self) -> float:
        return self.maximum - self.minimum

    def snapshot(self) -> "Aggregated":
        """
        Detached copy of the current set.

        The copy holds new Activated entries (still referencing the same
        underlying terms), so clearing or refilling this set does not
        alter it.
        """
        return type(self)(
            self.name,
            self.minimum,
            self.maximum,
            self.aggregation,
            [
                Activated(activated.term, activated.degree, activated.implication)
                for activated in self.terms
            ],
        )

    def clone(self) -> "Aggregated":
        result = self.snapshot()
        if self.aggregation is not None:
            result.aggregation = self.aggregation.clone()
        return result

    def parameters(self) -> str:
        aggregation = self.aggregation.name if self.aggregation is not None else "none"
        result = (
            f"{op.str_value(self.minimum)} {op.str_value(self.maximum)} {aggregation}"
        )
        for activated in self.terms:
            result += f" {activated}"
        return result

    def configure(self, parameters: str) -> None:
        """Aggregated terms are filled by rules, not configured from text."""

    def __str__(self) -> str:
        aggregation = self.aggregation.name if self.aggregation is not None else ""
        return f"{self.name}: {self.class_name()} {aggregation}[{','.join(str(t) for t in self.terms)}]"


class Accumulated(Aggregated):
    """Aggregated set under the name used by accumulation-based engines."""

    @property
    def accumulation(self) -> Optional["SNorm"]:
        return self.aggregation

    @accumulation.setter
    def accumulation(self, value: Optional["SNorm"]) -> None:
        self.aggregation = value
