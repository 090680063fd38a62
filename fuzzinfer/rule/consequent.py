"""
Consequent of a rule: the conclusions between ``then`` and ``with``.
"""

from typing import TYPE_CHECKING, NoReturn, Optional

from fuzzinfer import get_logger
from fuzzinfer.errors import ErrorCodes, EvaluationError, ParseError
from fuzzinfer.rule.antecedent import resolve_hedge
from fuzzinfer.rule.expression import AND, IS, WITH, Proposition

if TYPE_CHECKING:
    from fuzzinfer.engine import Engine
    from fuzzinfer.norm.base import TNorm
    from fuzzinfer.rule.rule import Rule

logger = get_logger(__name__)

S_VARIABLE = 1
S_IS = 2
S_HEDGE = 4
S_TERM = 8
S_AND = 16
S_WITH = 32


class Consequent:
    """
    List of conclusions ``output is [hedges] term`` joined by ``and``.
    """

    def __init__(self, text: str = ""):
        self.text = text
        self.conclusions: list[Proposition] = []

    def is_loaded(self) -> bool:
        return bool(self.conclusions)

    def unload(self) -> None:
        self.conclusions = []

    def modify(self, activation_degree: float, implication: Optional["TNorm"]) -> None:
        """
        Add the activated conclusions to the fuzzy output of their variables.

        Each enabled output receives ``Activated(term, degree, implication)``
        where the degree is the rule's activation degree transformed by
        the hedges of that conclusion.

        Raises:
            EvaluationError: If the consequent is not loaded
        """
        if not self.is_loaded():
            raise EvaluationError(
                message=f"[consequent error] consequent <{self.text}> is not loaded",
                error_code=ErrorCodes.RULE_NOT_LOADED,
                details={"consequent": self.text},
            )

        for proposition in self.conclusions:
            variable = proposition.variable
            if not variable.enabled:
                continue
            degree = proposition.apply_hedges(activation_degree)
            activated = variable.fuzzy_output.add_term(
                proposition.term, degree, implication
            )
            logger.debug(f"Aggregating {activated} into <{variable.name}>")

    def load(self, text: str, rule: "Rule", engine: "Engine") -> None:
        """
        Extract the conclusions of ``text``.

        Raises:
            ParseError: If the text is not a valid consequent
        """
        self.unload()
        self.text = text
        if not text.strip():
            self._syntax_error("[syntax error] consequent is empty", text)

        state = S_VARIABLE
        proposition: Optional[Proposition] = None
        token = ""

        for token in text.split():
            if state & S_VARIABLE:
                if engine.has_output_variable(token):
                    proposition = Proposition(engine.output_variable(token))
                    self.conclusions.append(proposition)
                    state = S_IS
                    continue

            if state & S_IS:
                if token == IS:
                    state = S_HEDGE | S_TERM
                    continue

            if state & S_HEDGE:
                hedge = resolve_hedge(token, rule, engine)
                if hedge is not None:
                    proposition.hedges.append(hedge)
                    state = S_HEDGE | S_TERM
                    continue

            if state & S_TERM:
                if proposition.variable.has_term(token):
                    proposition.term = proposition.variable.term(token)
                    state = S_AND | S_WITH
                    continue

            if state & S_AND:
                if token == AND:
                    state = S_VARIABLE
                    continue

            if state & S_VARIABLE:
                self._syntax_error(
                    f"[syntax error] consequent expected output variable, but found <{token}>",
                    text,
                )
            if state & S_IS:
                self._syntax_error(
                    f"[syntax error] consequent expected keyword <{IS}>, but found <{token}>",
                    text,
                )
            if state & (S_HEDGE | S_TERM):
                self._syntax_error(
                    f"[syntax error] consequent expected hedge or term, but found <{token}>",
                    text,
                )
            self._syntax_error(
                f"[syntax error] consequent expected operator <{AND}> or keyword "
                f"<{WITH}>, but found <{token}>",
                text,
            )

        if not state & (S_AND | S_WITH):
            if state & S_VARIABLE:
                self._syntax_error(
                    f"[syntax error] consequent expected output variable after <{token}>",
                    text,
                )
            if state & S_IS:
                self._syntax_error(
                    f"[syntax error] consequent expected keyword <{IS}> after <{token}>",
                    text,
                )
            self._syntax_error(
                f"[syntax error] consequent expected hedge or term after <{token}>",
                text,
            )

    def _syntax_error(self, message: str, text: str) -> NoReturn:
        self.unload()
        raise ParseError(
            message=message,
            error_code=ErrorCodes.RULE_SYNTAX,
            details={"consequent": text},
        )

    def __str__(self) -> str:
        return f" {AND} ".join(str(conclusion) for conclusion in self.conclusions)
