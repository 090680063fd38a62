"""
Antecedent of a rule: the text between ``if`` and ``then``.
"""

from typing import TYPE_CHECKING, NoReturn, Optional

from fuzzinfer import get_logger
from fuzzinfer.errors import ErrorCodes, EvaluationError, ParseError
from fuzzinfer.hedge import Any, Hedge
from fuzzinfer.rule.expression import AND, IS, OR, Expression, Operator, Proposition
from fuzzinfer.term.function import Function

if TYPE_CHECKING:
    from fuzzinfer.engine import Engine
    from fuzzinfer.norm.base import SNorm, TNorm
    from fuzzinfer.rule.rule import Rule

logger = get_logger(__name__)

# Parser states; several may be acceptable at once
S_VARIABLE = 1
S_IS = 2
S_HEDGE = 4
S_TERM = 8
S_AND_OR = 16


class Antecedent:
    """
    Expression tree of propositions joined by ``and``/``or``.

    Loading converts the text to postfix with the formula tokenizer (so
    ``and`` binds tighter than ``or`` and parentheses group) and then
    walks the tokens with a small state machine:

    1. after a variable comes ``is``
    2. after ``is`` comes a hedge or a term
    3. after a hedge comes a hedge or a term (``any`` ends the proposition)
    4. after a term comes a variable or a logical operator
    """

    def __init__(self, text: str = ""):
        self.text = text
        self.expression: Optional[Expression] = None

    def is_loaded(self) -> bool:
        return self.expression is not None

    def unload(self) -> None:
        self.expression = None

    def activation_degree(
        self, conjunction: Optional["TNorm"], disjunction: Optional["SNorm"]
    ) -> float:
        """
        Degree of truth of the antecedent.

        Raises:
            EvaluationError: If the antecedent is not loaded or a logical
                operator has no norm configured
        """
        if self.expression is None:
            raise EvaluationError(
                message=f"[antecedent error] antecedent <{self.text}> is not loaded",
                error_code=ErrorCodes.RULE_NOT_LOADED,
                details={"antecedent": self.text},
            )
        return self.expression.activation_degree(conjunction, disjunction, self.text)

    def load(self, text: str, rule: "Rule", engine: "Engine") -> None:
        """
        Build the expression tree of ``text``.

        Args:
            text: Antecedent text
            rule: Rule owning the antecedent; caches the hedges it uses
            engine: Engine resolving variables, terms and hedges

        Raises:
            ParseError: If the text is not a valid antecedent
        """
        logger.debug(f"Antecedent: {text}")
        self.unload()
        self.text = text
        if not text.strip():
            self._syntax_error("[syntax error] antecedent is empty", text)

        postfix = Function(factory=engine.factory_manager.function).to_postfix(text)

        state = S_VARIABLE
        stack: list[Expression] = []
        proposition: Optional[Proposition] = None
        token = ""

        for token in postfix.split():
            if state & S_VARIABLE:
                variable = None
                if engine.has_input_variable(token):
                    variable = engine.input_variable(token)
                elif engine.has_output_variable(token):
                    variable = engine.output_variable(token)
                if variable is not None:
                    proposition = Proposition(variable)
                    stack.append(proposition)
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
                    if isinstance(hedge, Any):
                        state = S_VARIABLE | S_AND_OR
                    else:
                        state = S_HEDGE | S_TERM
                    continue

            if state & S_TERM:
                if proposition.variable.has_term(token):
                    proposition.term = proposition.variable.term(token)
                    state = S_VARIABLE | S_AND_OR
                    continue

            if state & S_AND_OR:
                if token in (AND, OR):
                    if len(stack) < 2:
                        self._syntax_error(
                            f"[syntax error] logical operator <{token}> expects at least "
                            f"two operands, but found <{len(stack)}>",
                            text,
                        )
                    right = stack.pop()
                    left = stack.pop()
                    stack.append(Operator(token, left, right))
                    state = S_VARIABLE | S_AND_OR
                    continue

            # No acceptable interpretation of the token
            if state & (S_VARIABLE | S_AND_OR):
                self._syntax_error(
                    f"[syntax error] expected variable or logical operator, but found <{token}>",
                    text,
                )
            if state & S_IS:
                self._syntax_error(
                    f"[syntax error] expected keyword <{IS}>, but found <{token}>", text
                )
            self._syntax_error(
                f"[syntax error] expected hedge or term, but found <{token}>", text
            )

        if not state & (S_VARIABLE | S_AND_OR):
            if state & S_IS:
                self._syntax_error(
                    f"[syntax error] expected keyword <{IS}> after <{token}>", text
                )
            self._syntax_error(
                f"[syntax error] expected hedge or term after <{token}>", text
            )

        if len(stack) != 1:
            remaining = " ".join(str(expression) for expression in stack[1:])
            self._syntax_error(
                f"[syntax error] unable to parse the following expressions: <{remaining}>",
                text,
            )

        self.expression = stack[0]

    def to_prefix(self) -> str:
        return self._loaded_expression().to_prefix()

    def to_infix(self) -> str:
        return self._loaded_expression().to_infix()

    def to_postfix(self) -> str:
        return self._loaded_expression().to_postfix()

    def _loaded_expression(self) -> Expression:
        if self.expression is None:
            raise EvaluationError(
                message=f"[antecedent error] antecedent <{self.text}> is not loaded",
                error_code=ErrorCodes.RULE_NOT_LOADED,
                details={"antecedent": self.text},
            )
        return self.expression

    def _syntax_error(self, message: str, text: str) -> NoReturn:
        self.unload()
        raise ParseError(
            message=message,
            error_code=ErrorCodes.RULE_SYNTAX,
            details={"antecedent": text},
        )

    def __str__(self) -> str:
        if self.expression is None:
            return self.text
        return self.expression.to_infix()


def resolve_hedge(token: str, rule: "Rule", engine: "Engine") -> Optional[Hedge]:
    """Hedge named ``token`` from the rule cache or the engine's hedge registry."""
    if token in rule.hedges:
        return rule.hedges[token]
    factory = engine.factory_manager.hedge
    if factory.has(token):
        hedge = factory.construct(token)
        rule.hedges[token] = hedge
        return hedge
    return None
