"""
Fuzzy rule: ``if <antecedent> then <consequent> [with <weight>]``.
"""

from typing import TYPE_CHECKING, NoReturn, Optional

from fuzzinfer import get_logger
from fuzzinfer import operation as op
from fuzzinfer.errors import ErrorCodes, EvaluationError, ParseError
from fuzzinfer.hedge import Hedge
from fuzzinfer.rule.antecedent import Antecedent
from fuzzinfer.rule.consequent import Consequent
from fuzzinfer.rule.expression import IF, THEN, WITH

if TYPE_CHECKING:
    from fuzzinfer.engine import Engine
    from fuzzinfer.norm.base import SNorm, TNorm

logger = get_logger(__name__)

COMMENT = "#"

S_NONE = 0
S_IF = 1
S_THEN = 2
S_WITH = 3
S_END = 4


class Rule:
    """
    A conditional statement of a rule block.

    The rule keeps its text and, once loaded against an engine, the
    parsed antecedent and consequent. Text after ``#`` is a comment.

    Attributes:
        text: Rule text
        weight: Multiplier of the antecedent degree (from ``with``)
        enabled: Disabled rules never fire
        activation_degree: Degree computed in the last activation
        triggered: Whether the rule fired in the last activation
        hedges: Hedges used by the rule, by name
    """

    def __init__(self, text: str = "", weight: float = 1.0):
        self.text = text
        self.weight = weight
        self.enabled = True
        self.activation_degree = 0.0
        self.triggered = False
        self.antecedent = Antecedent()
        self.consequent = Consequent()
        self.hedges: dict[str, Hedge] = {}

    @classmethod
    def parse(cls, text: str, engine: "Engine") -> "Rule":
        """Create a rule and load it against ``engine``."""
        result = cls(text)
        result.load(engine)
        return result

    def is_loaded(self) -> bool:
        return self.antecedent.is_loaded() and self.consequent.is_loaded()

    def unload(self) -> None:
        self.deactivate()
        self.antecedent.unload()
        self.consequent.unload()
        self.hedges.clear()

    def load(self, engine: "Engine", text: Optional[str] = None) -> None:
        """
        Parse the rule against the variables and hedges of ``engine``.

        Args:
            engine: Engine resolving variable, term and hedge names
            text: Rule text; the current text when omitted

        Raises:
            ParseError: If the rule is malformed; the rule is left unloaded
        """
        if text is not None:
            self.text = text
        rule = self.text.split(COMMENT, 1)[0]

        antecedent: list[str] = []
        consequent: list[str] = []
        weight = 1.0
        state = S_NONE

        try:
            for token in rule.split():
                if state == S_NONE:
                    if token != IF:
                        self._syntax_error(
                            f"[syntax error] expected keyword <{IF}>, but found <{token}> "
                            f"in rule: {self.text}"
                        )
                    state = S_IF
                elif state == S_IF:
                    if token == THEN:
                        state = S_THEN
                    else:
                        antecedent.append(token)
                elif state == S_THEN:
                    if token == WITH:
                        state = S_WITH
                    else:
                        consequent.append(token)
                elif state == S_WITH:
                    try:
                        weight = op.to_float(token)
                    except ValueError:
                        self._syntax_error(
                            f"[syntax error] expected a numeric value as the weight of "
                            f"the rule: {self.text}"
                        )
                    state = S_END
                else:
                    self._syntax_error(
                        f"[syntax error] unexpected token <{token}> at the end of rule"
                    )

            if state == S_NONE:
                kind = "ignored" if rule.strip() or self.text.strip() else "empty"
                self._syntax_error(f"[syntax error] {kind} rule: {self.text}")
            if state == S_IF:
                self._syntax_error(
                    f"[syntax error] keyword <{THEN}> not found in rule: {self.text}"
                )
            if state == S_WITH:
                self._syntax_error(
                    f"[syntax error] expected a numeric value as the weight of the "
                    f"rule: {self.text}"
                )

            self.antecedent.load(" ".join(antecedent), self, engine)
            self.consequent.load(" ".join(consequent), self, engine)
            self.weight = weight
        except ParseError:
            self.unload()
            raise

    def compute_activation_degree(
        self, conjunction: Optional["TNorm"], disjunction: Optional["SNorm"]
    ) -> float:
        """
        Weighted degree of the antecedent.

        Returns:
            weight * antecedent degree

        Raises:
            EvaluationError: If the rule is not loaded
        """
        self._ensure_loaded()
        return self.weight * self.antecedent.activation_degree(conjunction, disjunction)

    def activate(self, degree: float, implication: Optional["TNorm"]) -> None:
        """
        Fire the rule with ``degree``, adding its conclusions to the outputs.

        Disabled rules record the degree but do not fire.
        """
        self._ensure_loaded()
        self.activation_degree = degree
        if not self.enabled:
            return
        self.consequent.modify(degree, implication)
        self.triggered = True

    def deactivate(self) -> None:
        self.activation_degree = 0.0
        self.triggered = False

    def clone(self) -> "Rule":
        """Unloaded copy of the rule; load it against the target engine."""
        result = Rule(self.text, self.weight)
        result.enabled = self.enabled
        result.hedges = {name: hedge.clone() for name, hedge in self.hedges.items()}
        return result

    def _ensure_loaded(self) -> None:
        if not self.is_loaded():
            raise EvaluationError(
                message=f"[rule error] the following rule is not loaded: {self.text}",
                error_code=ErrorCodes.RULE_NOT_LOADED,
                details={"rule": self.text},
            )

    def _syntax_error(self, message: str) -> NoReturn:
        raise ParseError(
            message=message,
            error_code=ErrorCodes.RULE_SYNTAX,
            details={"rule": self.text},
        )

    def __str__(self) -> str:
        if not self.is_loaded():
            return self.text
        result = f"{IF} {self.antecedent} {THEN} {self.consequent}"
        if not op.is_eq(self.weight, 1.0):
            result += f" {WITH} {op.format_parameter(self.weight)}"
        return result

    def __repr__(self) -> str:
        return f"Rule({self.text!r})"
