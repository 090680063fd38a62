"""
Base class of defuzzifiers.
"""

import copy
from abc import ABC, abstractmethod

from fuzzinfer.term.base import Term


class Defuzzifier(ABC):
    """Reduces a fuzzy set to a crisp value."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def defuzzify(self, term: Term, minimum: float, maximum: float) -> float:
        """
        Crisp value of ``term`` over [minimum, maximum].

        Args:
            term: Fuzzy set to defuzzify, usually an Aggregated term
            minimum: Lower bound of the range
            maximum: Upper bound of the range

        Returns:
            Crisp value, or NaN when the set carries no information
        """

    def parameters(self) -> str:
        return ""

    def configure(self, parameters: str) -> None:
        """Configure from text; defuzzifiers without parameters ignore it."""

    def clone(self) -> "Defuzzifier":
        return copy.copy(self)

    def __repr__(self) -> str:
        return f"{self.name}({self.parameters()!r})"
