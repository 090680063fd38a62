"""
Activated term: a rule conclusion scaled by its activation degree.
"""

from typing import TYPE_CHECKING, Optional

from fuzzinfer import operation as op
from fuzzinfer.errors import ErrorCodes, EvaluationError
from fuzzinfer.term.base import Term

if TYPE_CHECKING:
    from fuzzinfer.norm.base import TNorm


class Activated(Term):
    """
    Term referenced by a rule consequent, implied with the rule's degree.

    The underlying term is referenced, not owned. The membership is
    ``implication(term.membership(x), degree)``.
    """

    def __init__(
        self,
        term: Term,
        degree: float = 1.0,
        implication: Optional["TNorm"] = None,
    ):
        super().__init__(term.name if term is not None else "")
        self.term = term
        self.degree = degree
        self.implication = implication

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan
        if self.implication is None:
            raise EvaluationError(
                message=f"[implication error] implication operator needed to activate {self.term}",
                error_code=ErrorCodes.RULE_MISSING_IMPLICATION,
                details={"term": self.term.name},
            )
        return self.implication.compute(self.term.membership(x), self.degree)

    def parameters(self) -> str:
        implication = self.implication.name if self.implication is not None else "none"
        return f"{op.str_value(self.degree)} {implication} {self.term.name}"

    def configure(self, parameters: str) -> None:
        """Activated terms are produced by rules, not configured from text."""

    def __str__(self) -> str:
        implication = self.implication.name if self.implication is not None else ""
        return f"{implication}({op.str_value(self.degree)},{self.term.name})"
