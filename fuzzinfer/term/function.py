"""
Function term: a membership given by an infix mathematical formula.

The formula is converted to postfix with the shunting-yard algorithm,
built into a binary tree of ``Node`` objects and evaluated against a map
of variable values. When the term is bound to an engine, the values of
every input and output variable are available by name, together with
``x``, the value whose membership is requested.

Operators and functions come from a ``FunctionFactory``. Each element is
a plain callable with an arity, a precedence and an associativity:

    !  ~        unary, precedence 100, right associative
    ^           precedence 90, right associative
    *  /  %     precedence 80
    +  -        precedence 70
    and         precedence 60
    or          precedence 50

Functions: gt ge eq neq le lt acos asin atan ceil cos cosh exp fabs floor
log log10 sin sinh sqrt tan tanh log1p pow atan2 fmod.

Note that ``-`` is always binary; negation is written ``~``.
"""

import copy
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

import numpy as np

from fuzzinfer import get_logger
from fuzzinfer import operation as op
from fuzzinfer.errors import ErrorCodes, EvaluationError, ParseError
from fuzzinfer.registry import Registry
from fuzzinfer.term.base import Term

if TYPE_CHECKING:
    from fuzzinfer.engine import Engine

logger = get_logger(__name__)

LEFT = -1
RIGHT = 1

PARENTHESES_AND_COMMA = ("(", ")", ",")


class ElementType(str, Enum):
    """Kinds of elements a formula may contain."""

    OPERATOR = "operator"
    FUNCTION = "function"


@dataclass(frozen=True)
class Element:
    """An operator or function usable inside a formula."""

    name: str
    description: str
    type: ElementType
    method: Callable[..., float]
    arity: int
    precedence: int = 0
    associativity: int = LEFT

    def is_operator(self) -> bool:
        return self.type == ElementType.OPERATOR

    def is_function(self) -> bool:
        return self.type == ElementType.FUNCTION


def _comparison(predicate: Callable[[float, float], bool]) -> Callable[[float, float], float]:
    def compare(a: float, b: float) -> float:
        return 1.0 if predicate(a, b) else 0.0

    compare.__name__ = predicate.__name__
    return compare


class FunctionFactory(Registry[Element]):
    """Registry of the operators and functions understood by formulas."""

    kind = "function element"

    def __init__(self) -> None:
        super().__init__()
        operator = ElementType.OPERATOR
        function = ElementType.FUNCTION

        for element in (
            Element("!", "Logical NOT", operator, op.logical_not, 1, 100, RIGHT),
            Element("~", "Negation", operator, op.negate, 1, 100, RIGHT),
            Element("^", "Power", operator, op.power, 2, 90, RIGHT),
            Element("*", "Multiplication", operator, op.multiply, 2, 80),
            Element("/", "Division", operator, op.divide, 2, 80),
            Element("%", "Modulo", operator, op.modulo, 2, 80),
            Element("+", "Addition", operator, op.add, 2, 70),
            Element("-", "Subtraction", operator, op.subtract, 2, 70),
            Element("and", "Logical AND", operator, op.logical_and, 2, 60),
            Element("or", "Logical OR", operator, op.logical_or, 2, 50),
        ):
            self.register(element.name, element)

        for name, description, method, arity in (
            ("gt", "Greater than (>)", _comparison(op.is_gt), 2),
            ("ge", "Greater than or equal to (>=)", _comparison(op.is_ge), 2),
            ("eq", "Equal to (==)", _comparison(op.is_eq), 2),
            ("neq", "Not equal to (!=)", _comparison(op.is_neq), 2),
            ("le", "Less than or equal to (<=)", _comparison(op.is_le), 2),
            ("lt", "Less than (<)", _comparison(op.is_lt), 2),
            ("acos", "Inverse cosine", op.ieee(np.arccos), 1),
            ("asin", "Inverse sine", op.ieee(np.arcsin), 1),
            ("atan", "Inverse tangent", op.ieee(np.arctan), 1),
            ("ceil", "Ceiling", op.ieee(np.ceil), 1),
            ("cos", "Cosine", op.ieee(np.cos), 1),
            ("cosh", "Hyperbolic cosine", op.ieee(np.cosh), 1),
            ("exp", "Exponential", op.exp, 1),
            ("fabs", "Absolute value", op.ieee(np.fabs), 1),
            ("floor", "Floor", op.ieee(np.floor), 1),
            ("log", "Natural logarithm", op.log, 1),
            ("log10", "Common logarithm", op.ieee(np.log10), 1),
            ("sin", "Sine", op.ieee(np.sin), 1),
            ("sinh", "Hyperbolic sine", op.ieee(np.sinh), 1),
            ("sqrt", "Square root", op.sqrt, 1),
            ("tan", "Tangent", op.ieee(np.tan), 1),
            ("tanh", "Hyperbolic tangent", op.ieee(np.tanh), 1),
            ("log1p", "Natural logarithm plus one", op.ieee(np.log1p), 1),
            ("pow", "Power", op.power, 2),
            ("atan2", "Inverse tangent (y,x)", op.ieee(np.arctan2), 2),
            ("fmod", "Floating-point remainder", op.modulo, 2),
        ):
            self.register(name, Element(name, description, function, method, arity))

    def _build(self, entry: Any) -> Element:
        # Elements are immutable and shared
        return entry

    def element(self, name: str) -> Optional[Element]:
        return self.get(name)  # type: ignore[return-value]

    def operators(self) -> list[str]:
        return [name for name in self if self.element(name).is_operator()]

    def functions(self) -> list[str]:
        return [name for name in self if self.element(name).is_function()]


@lru_cache
def default_function_factory() -> FunctionFactory:
    """Shared registry used by formulas that are not bound to an engine."""
    return FunctionFactory()


class Node:
    """
    Node of a formula tree.

    A node is either an element with one (``left``) or two (``left`` and
    ``right``) children, a variable name, or a constant value.
    """

    def __init__(
        self,
        element: Optional[Element] = None,
        variable: str = "",
        value: float = op.nan,
        left: Optional["Node"] = None,
        right: Optional["Node"] = None,
    ):
        self.element = element
        self.variable = variable
        self.value = value
        self.left = left
        self.right = right

    def evaluate(self, variables: Optional[Mapping[str, float]] = None) -> float:
        """
        Evaluate the subtree rooted at this node.

        Args:
            variables: Values of the variables referenced by the formula

        Returns:
            Value of the subtree

        Raises:
            EvaluationError: If a referenced variable has no value
        """
        if self.element is not None:
            if self.element.arity == 1:
                return self.element.method(self.left.evaluate(variables))
            return self.element.method(
                self.left.evaluate(variables), self.right.evaluate(variables)
            )

        if self.variable:
            if variables is None or self.variable not in variables:
                raise EvaluationError(
                    message=f"[function error] variable <{self.variable}> not registered",
                    error_code=ErrorCodes.FUNC_UNKNOWN_VARIABLE,
                    details={
                        "variable": self.variable,
                        "available": sorted(variables or {}),
                    },
                )
            return variables[self.variable]

        return self.value

    def to_prefix(self) -> str:
        if self.element is None:
            return str(self)
        children = [child.to_prefix() for child in (self.left, self.right) if child]
        return " ".join([self.element.name] + children)

    def to_postfix(self) -> str:
        if self.element is None:
            return str(self)
        children = [child.to_postfix() for child in (self.left, self.right) if child]
        return " ".join(children + [self.element.name])

    def to_infix(self) -> str:
        """Render the subtree as a formula that parses back to the same tree."""
        if self.element is None:
            return str(self)

        if self.element.is_function():
            arguments = [child.to_infix() for child in (self.left, self.right) if child]
            return f"{self.element.name}({', '.join(arguments)})"

        if self.element.arity == 1:
            return f"{self.element.name} {self._operand(self.left, RIGHT)}"

        return (
            f"{self._operand(self.left, LEFT)} {self.element.name} "
            f"{self._operand(self.right, RIGHT)}"
        )

    def _operand(self, child: "Node", side: int) -> str:
        text = child.to_infix()
        inner = child.element
        if inner is None or not inner.is_operator() or inner.arity == 1:
            return text
        if inner.precedence < self.element.precedence or (
            inner.precedence == self.element.precedence
            and side != self.element.associativity
        ):
            return f"( {text} )"
        return text

    def __str__(self) -> str:
        if self.element is not None:
            return self.element.name
        if self.variable:
            return self.variable
        return op.format_parameter(self.value)

    def __repr__(self) -> str:
        return f"Node({self.to_postfix()!r})"


class Function(Term):
    """
    Term whose membership is computed from a formula.

    Example:
        >>> f = Function.create("f", "2 * x + 1")
        >>> f.membership(3.0)
        7.0
    """

    def __init__(
        self,
        name: str = "",
        formula: str = "",
        engine: Optional["Engine"] = None,
        factory: Optional[FunctionFactory] = None,
    ):
        super().__init__(name)
        self.formula = formula
        self.engine = engine
        self.root: Optional[Node] = None
        self.variables: dict[str, float] = {}
        self._factory = factory

    @classmethod
    def create(
        cls,
        name: str,
        formula: str,
        engine: Optional["Engine"] = None,
        factory: Optional[FunctionFactory] = None,
    ) -> "Function":
        """Create and load a function in one step."""
        result = cls(name, formula, engine, factory)
        result.load(formula, engine)
        return result

    @property
    def factory(self) -> FunctionFactory:
        if self._factory is not None:
            return self._factory
        if self.engine is not None:
            return self.engine.factory_manager.function
        return default_function_factory()

    def membership(self, x: float) -> float:
        if self.root is None:
            logger.error(f"Function <{self.name}> evaluated before loading")
            raise EvaluationError(
                message=f"[function error] function <{self.formula}> not loaded",
                error_code=ErrorCodes.FUNC_NOT_LOADED,
                details={"term": self.name, "formula": self.formula},
            )
        if self.engine is not None:
            for variable in self.engine.input_variables:
                self.variables[variable.name] = variable.value
            for variable in self.engine.output_variables:
                self.variables[variable.name] = variable.value
        self.variables["x"] = x
        return self.compute(self.variables)

    def compute(self, variables: Optional[Mapping[str, float]] = None) -> float:
        """
        Evaluate the loaded formula.

        Args:
            variables: Variable values; the function's own map when omitted

        Raises:
            EvaluationError: If the function is not loaded or a variable is missing
        """
        if self.root is None:
            raise EvaluationError(
                message="[function error] evaluation failed because function is not loaded",
                error_code=ErrorCodes.FUNC_NOT_LOADED,
                details={"term": self.name, "formula": self.formula},
            )
        return self.root.evaluate(self.variables if variables is None else variables)

    def is_loaded(self) -> bool:
        return self.root is not None

    def unload(self) -> None:
        self.root = None
        self.variables.clear()

    def load(self, formula: Optional[str] = None, engine: Optional["Engine"] = None) -> None:
        """
        Parse a formula and keep its tree.

        Args:
            formula: Formula to load; the current formula when omitted
            engine: Engine providing variable values; unchanged when omitted

        Raises:
            ParseError: If the formula is malformed
        """
        if formula is None:
            formula = self.formula
        if engine is not None:
            self.engine = engine
        self.root = self.parse(formula)
        self.formula = formula
        logger.debug(f"Loaded function <{self.name}>: {formula}")

    def to_postfix(self, formula: str) -> str:
        """
        Convert an infix formula to postfix notation.

        Args:
            formula: Infix formula

        Returns:
            Space-separated postfix tokens

        Raises:
            ParseError: If the parentheses do not match
        """
        factory = self.factory

        spaced = formula
        for token in factory.operators() + list(PARENTHESES_AND_COMMA):
            if token in ("and", "or"):
                continue
            spaced = spaced.replace(token, f" {token} ")

        queue: list[str] = []
        stack: list[str] = []

        for token in spaced.split():
            element = factory.element(token)

            if element is None and token not in PARENTHESES_AND_COMMA:
                queue.append(token)

            elif element is not None and element.is_function():
                stack.append(token)

            elif token == ",":
                while stack and stack[-1] != "(":
                    queue.append(stack.pop())
                if not stack:
                    self._raise_mismatched(formula)

            elif element is not None and element.is_operator():
                while stack:
                    top = factory.element(stack[-1])
                    if top is None:
                        break
                    if (
                        element.associativity == LEFT
                        and element.precedence == top.precedence
                    ) or element.precedence < top.precedence:
                        queue.append(stack.pop())
                    else:
                        break
                stack.append(token)

            elif token == "(":
                stack.append(token)

            elif token == ")":
                while stack and stack[-1] != "(":
                    queue.append(stack.pop())
                if not stack:
                    self._raise_mismatched(formula)
                stack.pop()

                if stack:
                    top = factory.element(stack[-1])
                    if top is not None and top.is_function():
                        queue.append(stack.pop())

        while stack:
            token = stack.pop()
            if token in ("(", ")"):
                self._raise_mismatched(formula)
            queue.append(token)

        return " ".join(queue)

    def parse(self, formula: str) -> Optional[Node]:
        """
        Build the tree of a formula.

        Returns:
            Root node, or None for an empty formula

        Raises:
            ParseError: On mismatched parentheses, missing operands or an
                ill-formed formula
        """
        if not formula.strip():
            return None

        postfix = self.to_postfix(formula)
        factory = self.factory
        stack: list[Node] = []

        for token in postfix.split():
            element = factory.element(token)
            if element is not None:
                if element.arity > len(stack):
                    logger.error(
                        f"Operator {element.name} needs {element.arity} operands in: {formula}"
                    )
                    raise ParseError(
                        message=(
                            f"[function error] operator <{element.name}> has arity "
                            f"<{element.arity}>, but <{len(stack)}> elements are available"
                        ),
                        error_code=ErrorCodes.FUNC_ARITY_MISMATCH,
                        details={
                            "formula": formula,
                            "element": element.name,
                            "arity": element.arity,
                            "available": len(stack),
                        },
                    )
                right = stack.pop() if element.arity == 2 else None
                left = stack.pop()
                stack.append(Node(element, left=left, right=right))
            elif op.is_number(token):
                stack.append(Node(value=op.to_float(token)))
            elif token.isidentifier():
                stack.append(Node(variable=token))
            else:
                logger.error(f"Unknown token <{token}> in formula: {formula}")
                raise ParseError(
                    message=f"[function error] unknown token <{token}> in formula <{formula}>",
                    error_code=ErrorCodes.FUNC_UNKNOWN_TOKEN,
                    details={"formula": formula, "token": token},
                )

        if len(stack) != 1:
            remaining = ";".join(node.to_postfix() for node in stack)
            raise ParseError(
                message=f"[function error] ill-formed formula <{formula}> due to: <{remaining}>",
                error_code=ErrorCodes.FUNC_ILL_FORMED,
                details={"formula": formula, "remaining": remaining},
            )
        return stack[0]

    def update_reference(self, engine: Optional["Engine"]) -> None:
        self.engine = engine

    def parameters(self) -> str:
        return self.formula

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        self.load(parameters)

    def clone(self) -> "Function":
        result = super().clone()
        result.root = copy.deepcopy(self.root)
        result.variables = dict(self.variables)
        return result

    @staticmethod
    def _raise_mismatched(formula: str) -> None:
        logger.error(f"Mismatched parentheses in formula: {formula}")
        raise ParseError(
            message=f"[parsing error] mismatching parentheses in: {formula}",
            error_code=ErrorCodes.FUNC_MISMATCHED_PARENTHESES,
            details={"formula": formula},
        )
