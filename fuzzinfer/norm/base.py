"""
Base classes for fuzzy norms.

A norm is a stateless binary function over degrees of truth. T-norms model
conjunction (and implication), s-norms model disjunction (and aggregation).
Instances hold no state, so one instance can be shared by every rule block
and output variable of any number of engines.
"""

import copy
from abc import ABC, abstractmethod


class Norm(ABC):
    """Abstract binary operator over degrees of truth."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def compute(self, a: float, b: float) -> float:
        """
        Combine two degrees of truth.

        Args:
            a: First degree
            b: Second degree

        Returns:
            Combined degree
        """

    def clone(self) -> "Norm":
        return copy.copy(self)

    def __call__(self, a: float, b: float) -> float:
        return self.compute(a, b)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{self.name}()"


class TNorm(Norm):
    """Triangular norm: conjunction, with compute(a, 1) == a."""


class SNorm(Norm):
    """Triangular conorm: disjunction, with compute(a, 0) == a."""
