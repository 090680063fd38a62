"""
Weighted defuzzifiers.

Instead of integrating, these work on the discrete list of activated
terms: each term contributes a representative value ``z`` weighted by
its activation degree ``w``.

- TakagiSugeno: ``z`` is the membership of the term at ``w`` (constant,
  linear and formula terms ignore their argument).
- Tsukamoto: ``z`` is the inverse of a monotonic term at ``w``; terms
  that are not monotonic fall back to their membership at ``w``.
- Automatic: chooses one of the above per term.
"""

from enum import Enum
from typing import Optional, Union

from fuzzinfer import get_logger
from fuzzinfer import operation as op
from fuzzinfer.defuzzifier.base import Defuzzifier
from fuzzinfer.errors import ConfigurationError, ErrorCodes
from fuzzinfer.term.aggregated import Aggregated
from fuzzinfer.term.base import Term
from fuzzinfer.term.function import Function
from fuzzinfer.term.function_based import Constant, Linear

logger = get_logger(__name__)


class WeightedType(str, Enum):
    """How the representative value of a term is obtained."""

    AUTOMATIC = "Automatic"
    TAKAGI_SUGENO = "TakagiSugeno"
    TSUKAMOTO = "Tsukamoto"


class WeightedDefuzzifier(Defuzzifier):
    """
    Base of the weighted defuzzifiers.

    Attributes:
        type: Representative value used for each term
    """

    def __init__(self, type: Union[WeightedType, str] = WeightedType.AUTOMATIC):
        self.type = self._parse_type(type)

    def _parse_type(self, value: Union[WeightedType, str]) -> WeightedType:
        try:
            return WeightedType(value)
        except ValueError as e:
            logger.error(f"Unknown weighted defuzzifier type: {value}")
            raise ConfigurationError(
                message=f"[configuration error] type <{value}> not recognized for defuzzifier <{self.name}>",
                error_code=ErrorCodes.DEFUZZ_INVALID_TYPE,
                details={
                    "defuzzifier": self.name,
                    "type": value,
                    "available": [t.value for t in WeightedType],
                },
            ) from e

    @staticmethod
    def infer_type(term: Term) -> WeightedType:
        if isinstance(term, (Constant, Linear, Function)):
            return WeightedType.TAKAGI_SUGENO
        return WeightedType.TSUKAMOTO

    def resolve_type(self, term: Term) -> WeightedType:
        if self.type == WeightedType.AUTOMATIC:
            return self.infer_type(term)
        return self.type

    def representative_value(
        self, term: Term, degree: float, minimum: float, maximum: float
    ) -> float:
        """Value ``z`` of ``term`` activated with ``degree``."""
        if self.resolve_type(term) == WeightedType.TSUKAMOTO and term.is_monotonic():
            return term.tsukamoto(degree, minimum, maximum)
        return term.membership(degree)

    def grouped_degrees(self, fuzzy_output: Aggregated) -> list[tuple[Term, float]]:
        """
        One (term, degree) pair per activation, or per distinct term when
        the set has an aggregation; degrees of the same term are then
        combined with it.
        """
        if fuzzy_output.aggregation is None:
            return [(activated.term, activated.degree) for activated in fuzzy_output.terms]

        # Terms are grouped by identity, in order of first activation
        groups: dict[int, tuple[Term, float]] = {}
        for activated in fuzzy_output.terms:
            term, degree = groups.get(id(activated.term), (activated.term, 0.0))
            groups[id(activated.term)] = (
                term,
                fuzzy_output.aggregation.compute(degree, activated.degree),
            )
        return list(groups.values())

    def parameters(self) -> str:
        return self.type.value

    def configure(self, parameters: str) -> None:
        values = op.split_parameters(parameters)
        if values:
            self.type = self._parse_type(values[0])

    @staticmethod
    def _fuzzy_output(term: Term) -> Optional[Aggregated]:
        if isinstance(term, Aggregated) and not term.is_empty():
            return term
        return None


class WeightedAverage(WeightedDefuzzifier):
    """sum(w * z) / sum(w)"""

    def defuzzify(self, term: Term, minimum: float, maximum: float) -> float:
        fuzzy_output = self._fuzzy_output(term)
        if fuzzy_output is None:
            return op.nan

        total = 0.0
        weights = 0.0
        for activated_term, w in self.grouped_degrees(fuzzy_output):
            z = self.representative_value(
                activated_term, w, fuzzy_output.minimum, fuzzy_output.maximum
            )
            total += w * z
            weights += w
        return op.divide(total, weights)


class WeightedSum(WeightedDefuzzifier):
    """sum(w * z)"""

    def defuzzify(self, term: Term, minimum: float, maximum: float) -> float:
        fuzzy_output = self._fuzzy_output(term)
        if fuzzy_output is None:
            return op.nan

        total = 0.0
        for activated_term, w in self.grouped_degrees(fuzzy_output):
            total += w * self.representative_value(
                activated_term, w, fuzzy_output.minimum, fuzzy_output.maximum
            )
        return total


class WeightedAverageCustom(WeightedDefuzzifier):
    """
    Weighted average using the fuzzy operators of the set.

    In TakagiSugeno mode each product ``w * z`` is computed with the
    implication of the activated term and the sums with the aggregation
    of the set, falling back to plain arithmetic when they are unset.
    """

    def defuzzify(self, term: Term, minimum: float, maximum: float) -> float:
        fuzzy_output = self._fuzzy_output(term)
        if fuzzy_output is None:
            return op.nan

        aggregation = fuzzy_output.aggregation
        total = 0.0
        weights = 0.0
        for activated in fuzzy_output.terms:
            w = activated.degree
            if self.resolve_type(activated.term) == WeightedType.TAKAGI_SUGENO:
                z = activated.term.membership(w)
                implication = activated.implication
                wz = implication.compute(w, z) if implication is not None else w * z
                if aggregation is not None:
                    total = aggregation.compute(total, wz)
                    weights = aggregation.compute(weights, w)
                else:
                    total += wz
                    weights += w
            else:
                z = self.representative_value(
                    activated.term, w, fuzzy_output.minimum, fuzzy_output.maximum
                )
                total += w * z
                weights += w
        return op.divide(total, weights)


class WeightedSumCustom(WeightedDefuzzifier):
    """Weighted sum using the fuzzy operators of the set (see WeightedAverageCustom)."""

    def defuzzify(self, term: Term, minimum: float, maximum: float) -> float:
        fuzzy_output = self._fuzzy_output(term)
        if fuzzy_output is None:
            return op.nan

        aggregation = fuzzy_output.aggregation
        total = 0.0
        for activated in fuzzy_output.terms:
            w = activated.degree
            if self.resolve_type(activated.term) == WeightedType.TAKAGI_SUGENO:
                z = activated.term.membership(w)
                implication = activated.implication
                wz = implication.compute(w, z) if implication is not None else w * z
                if aggregation is not None:
                    total = aggregation.compute(total, wz)
                else:
                    total += wz
            else:
                total += w * self.representative_value(
                    activated.term, w, fuzzy_output.minimum, fuzzy_output.maximum
                )
        return total
