"""
Expression tree of rule antecedents.

An antecedent is a binary tree whose leaves are propositions
(``variable is [hedges] term``) and whose inner nodes are the logical
operators ``and``/``or``. Each node computes its own degree, so the tree
is evaluated by plain virtual dispatch.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from fuzzinfer import operation as op
from fuzzinfer.errors import ErrorCodes, EvaluationError
from fuzzinfer.hedge import Any, Hedge

if TYPE_CHECKING:
    from fuzzinfer.norm.base import SNorm, TNorm
    from fuzzinfer.term.base import Term
    from fuzzinfer.variable import Variable

IF = "if"
IS = "is"
THEN = "then"
AND = "and"
OR = "or"
WITH = "with"


class Expression(ABC):
    """Node of an antecedent tree."""

    @abstractmethod
    def activation_degree(
        self,
        conjunction: Optional["TNorm"],
        disjunction: Optional["SNorm"],
        rule_text: str = "",
    ) -> float:
        """
        Degree of truth of the subtree.

        Args:
            conjunction: T-norm used for ``and``
            disjunction: S-norm used for ``or``
            rule_text: Text of the rule, used in error messages

        Raises:
            EvaluationError: If an operator has no norm to compute with
        """

    @abstractmethod
    def to_prefix(self) -> str: ...

    @abstractmethod
    def to_infix(self) -> str: ...

    @abstractmethod
    def to_postfix(self) -> str: ...


class Proposition(Expression):
    """
    Leaf ``variable is [hedges] term``.

    Hedges are kept in written order and applied from the one closest to
    the term outwards, so ``very somewhat cold`` is very(somewhat(cold)).
    A trailing ``any`` replaces the term.
    """

    def __init__(
        self,
        variable: Optional["Variable"] = None,
        hedges: Optional[list[Hedge]] = None,
        term: Optional["Term"] = None,
    ):
        self.variable = variable
        self.hedges: list[Hedge] = hedges if hedges is not None else []
        self.term = term

    def apply_hedges(self, degree: float) -> float:
        for hedge in reversed(self.hedges):
            degree = hedge.hedge(degree)
        return degree

    def activation_degree(
        self,
        conjunction: Optional["TNorm"],
        disjunction: Optional["SNorm"],
        rule_text: str = "",
    ) -> float:
        if not self.variable.enabled:
            return 0.0

        if self.hedges and isinstance(self.hedges[-1], Any):
            return self.apply_hedges(op.nan)

        return self.apply_hedges(self.variable.term_degree(self.term))

    def to_prefix(self) -> str:
        return str(self)

    def to_infix(self) -> str:
        return str(self)

    def to_postfix(self) -> str:
        return str(self)

    def __str__(self) -> str:
        parts = [self.variable.name if self.variable is not None else "?", IS]
        parts.extend(hedge.name for hedge in self.hedges)
        if self.term is not None:
            parts.append(self.term.name)
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"Proposition({str(self)!r})"


class Operator(Expression):
    """Inner node combining two subtrees with ``and`` or ``or``."""

    def __init__(
        self,
        name: str,
        left: Optional[Expression] = None,
        right: Optional[Expression] = None,
    ):
        self.name = name
        self.left = left
        self.right = right

    def activation_degree(
        self,
        conjunction: Optional["TNorm"],
        disjunction: Optional["SNorm"],
        rule_text: str = "",
    ) -> float:
        if self.left is None or self.right is None:
            raise EvaluationError(
                message="[syntax error] left and right operands cannot be missing",
                error_code=ErrorCodes.RULE_SYNTAX,
                details={"operator": self.name, "rule": rule_text},
            )

        if self.name == AND:
            if conjunction is None:
                raise EvaluationError(
                    message=f"[conjunction error] the following rule requires a conjunction operator: {rule_text}",
                    error_code=ErrorCodes.RULE_MISSING_CONJUNCTION,
                    details={"rule": rule_text},
                    suggestion="Configure a conjunction on the rule block",
                )
            return conjunction.compute(
                self.left.activation_degree(conjunction, disjunction, rule_text),
                self.right.activation_degree(conjunction, disjunction, rule_text),
            )

        if self.name == OR:
            if disjunction is None:
                raise EvaluationError(
                    message=f"[disjunction error] the following rule requires a disjunction operator: {rule_text}",
                    error_code=ErrorCodes.RULE_MISSING_DISJUNCTION,
                    details={"rule": rule_text},
                    suggestion="Configure a disjunction on the rule block",
                )
            return disjunction.compute(
                self.left.activation_degree(conjunction, disjunction, rule_text),
                self.right.activation_degree(conjunction, disjunction, rule_text),
            )

        raise EvaluationError(
            message=f"[syntax error] operator <{self.name}> not recognized",
            error_code=ErrorCodes.RULE_SYNTAX,
            details={"operator": self.name, "rule": rule_text},
        )

    def to_prefix(self) -> str:
        return f"{self.name} {self.left.to_prefix()} {self.right.to_prefix()}"

    def to_infix(self) -> str:
        return f"{self._grouped(self.left)} {self.name} {self._grouped(self.right)}"

    def to_postfix(self) -> str:
        return f"{self.left.to_postfix()} {self.right.to_postfix()} {self.name}"

    def _grouped(self, child: Expression) -> str:
        # "and" binds tighter than "or"
        if isinstance(child, Operator) and child.name != self.name:
            if child.name == OR:
                return f"( {child.to_infix()} )"
        return child.to_infix()

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Operator({self.to_infix()!r})"
