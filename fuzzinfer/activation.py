"""
Activation methods: which rules of a rule block fire, and with what degree.

Every method first deactivates all rules, then computes the activation
degree of each loaded, enabled rule and fires a selection of them.
Unloaded or disabled rules are logged and skipped so that one bad rule
never aborts the block.
"""

import copy
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Iterator

from fuzzinfer import get_logger
from fuzzinfer import operation as op
from fuzzinfer.errors import ConfigurationError, ErrorCodes

if TYPE_CHECKING:
    from fuzzinfer.rule.rule import Rule
    from fuzzinfer.rule.rule_block import RuleBlock

logger = get_logger(__name__)


class Activation(ABC):
    """Abstract activation method."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def activate(self, rule_block: "RuleBlock") -> None:
        """Activate the rules of ``rule_block``."""

    def parameters(self) -> str:
        return ""

    def configure(self, parameters: str) -> None:
        """Configure from text; methods without parameters ignore it."""

    def clone(self) -> "Activation":
        return copy.copy(self)

    def _evaluated_rules(self, rule_block: "RuleBlock") -> Iterator["Rule"]:
        """
        Deactivate every rule, then yield the active ones with their
        activation degree computed.
        """
        logger.debug(
            f"Activation {self.name} {self.parameters()} on rule block <{rule_block.name}>"
        )
        for rule in rule_block.rules:
            rule.deactivate()
            if not rule.enabled:
                logger.debug(f"Skipping disabled rule: {rule.text}")
                continue
            if not rule.is_loaded():
                logger.debug(f"Skipping rule not loaded: {rule.text}")
                continue
            rule.activation_degree = rule.compute_activation_degree(
                rule_block.conjunction, rule_block.disjunction
            )
            logger.debug(
                f"[degree={op.str_value(rule.activation_degree)}] {rule.text}"
            )
            yield rule

    def _split(self, parameters: str, required: int) -> list[str]:
        values = op.split_parameters(parameters)
        if len(values) < required:
            logger.error(
                f"Invalid {self.name} parameters: expected {required}, got {len(values)}"
            )
            raise ConfigurationError(
                message=f"[configuration error] activation <{self.name}> requires <{required}> parameters",
                error_code=ErrorCodes.ACTIVATION_INVALID_PARAMETER,
                details={
                    "activation": self.name,
                    "required": required,
                    "provided": len(values),
                },
            )
        return values

    def _number(self, token: str, kind=float):
        try:
            return kind(op.to_float(token)) if kind is int else op.to_float(token)
        except (ValueError, OverflowError) as e:
            raise ConfigurationError(
                message=f"[configuration error] activation <{self.name}> received non-numeric parameter <{token}>",
                error_code=ErrorCodes.ACTIVATION_INVALID_PARAMETER,
                details={"activation": self.name, "parameter": token},
            ) from e

    def __repr__(self) -> str:
        return f"{self.name}({self.parameters()!r})"


class General(Activation):
    """Fires every rule whose activation degree is greater than zero."""

    def activate(self, rule_block: "RuleBlock") -> None:
        for rule in self._evaluated_rules(rule_block):
            if op.is_gt(rule.activation_degree, 0.0):
                rule.activate(rule.activation_degree, rule_block.implication)


class First(Activation):
    """
    Fires the first ``number_of_rules`` rules (in block order) whose
    degree is greater than zero and at least ``threshold``.
    """

    def __init__(self, number_of_rules: int = 1, threshold: float = 0.0):
        self.number_of_rules = number_of_rules
        self.threshold = threshold

    def activate(self, rule_block: "RuleBlock") -> None:
        activated = 0
        for rule in self._ordered(rule_block):
            degree = rule.activation_degree
            if (
                activated < self.number_of_rules
                and op.is_gt(degree, 0.0)
                and op.is_ge(degree, self.threshold)
            ):
                rule.activate(degree, rule_block.implication)
                activated += 1

    def _ordered(self, rule_block: "RuleBlock") -> list["Rule"]:
        return list(self._evaluated_rules(rule_block))

    def parameters(self) -> str:
        return f"{self.number_of_rules} {op.format_parameter(self.threshold)}"

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        values = self._split(parameters, 2)
        self.number_of_rules = self._number(values[0], int)
        self.threshold = self._number(values[1])


class Last(First):
    """
    Fires the last ``number_of_rules`` rules (in block order) whose
    degree is greater than zero and at least ``threshold``.
    """

    def _ordered(self, rule_block: "RuleBlock") -> list["Rule"]:
        return list(reversed(list(self._evaluated_rules(rule_block))))


class Highest(Activation):
    """Fires the ``number_of_rules`` rules with the highest degree greater than zero."""

    descending = True

    def __init__(self, number_of_rules: int = 1):
        self.number_of_rules = number_of_rules

    def activate(self, rule_block: "RuleBlock") -> None:
        candidates = [
            rule
            for rule in self._evaluated_rules(rule_block)
            if op.is_gt(rule.activation_degree, 0.0)
        ]
        # Stable sort keeps block order among equal degrees
        candidates.sort(key=lambda rule: rule.activation_degree, reverse=self.descending)
        for rule in candidates[: max(self.number_of_rules, 0)]:
            rule.activate(rule.activation_degree, rule_block.implication)

    def parameters(self) -> str:
        return str(self.number_of_rules)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        values = self._split(parameters, 1)
        self.number_of_rules = self._number(values[0], int)


class Lowest(Highest):
    """Fires the ``number_of_rules`` rules with the lowest degree greater than zero."""

    descending = False


class Proportional(Activation):
    """
    Fires every rule with its degree divided by the sum of all degrees.

    When every degree is zero no rule fires.
    """

    def activate(self, rule_block: "RuleBlock") -> None:
        rules = list(self._evaluated_rules(rule_block))
        total = sum(rule.activation_degree for rule in rules)
        if op.is_eq(total, 0.0):
            return
        for rule in rules:
            rule.activate(rule.activation_degree / total, rule_block.implication)


class Comparison(str, Enum):
    """Comparison operators of the Threshold activation."""

    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL_TO = "<="
    EQUAL_TO = "=="
    NOT_EQUAL_TO = "!="
    GREATER_THAN_OR_EQUAL_TO = ">="
    GREATER_THAN = ">"

    def compare(self, a: float, b: float) -> bool:
        return _COMPARATORS[self](a, b)


_COMPARATORS = {
    Comparison.LESS_THAN: op.is_lt,
    Comparison.LESS_THAN_OR_EQUAL_TO: op.is_le,
    Comparison.EQUAL_TO: op.is_eq,
    Comparison.NOT_EQUAL_TO: op.is_neq,
    Comparison.GREATER_THAN_OR_EQUAL_TO: op.is_ge,
    Comparison.GREATER_THAN: op.is_gt,
}


class Threshold(Activation):
    """Fires every rule whose degree satisfies ``degree <comparison> value``."""

    def __init__(
        self,
        comparison: Comparison = Comparison.GREATER_THAN_OR_EQUAL_TO,
        value: float = 0.0,
    ):
        self.comparison = Comparison(comparison)
        self.value = value

    def activates_with(self, degree: float) -> bool:
        return self.comparison.compare(degree, self.value)

    def activate(self, rule_block: "RuleBlock") -> None:
        for rule in self._evaluated_rules(rule_block):
            if self.activates_with(rule.activation_degree):
                rule.activate(rule.activation_degree, rule_block.implication)

    def parameters(self) -> str:
        return f"{self.comparison.value} {op.format_parameter(self.value)}"

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        values = self._split(parameters, 2)
        try:
            self.comparison = Comparison(values[0])
        except ValueError as e:
            raise ConfigurationError(
                message=f"[configuration error] comparison operator <{values[0]}> not recognized",
                error_code=ErrorCodes.ACTIVATION_INVALID_PARAMETER,
                details={
                    "activation": self.name,
                    "comparison": values[0],
                    "available": [c.value for c in Comparison],
                },
            ) from e
        self.value = self._number(values[1])
