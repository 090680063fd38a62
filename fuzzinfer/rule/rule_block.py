"""
Rule block: a set of rules sharing the same operators.
"""

from typing import TYPE_CHECKING, Optional

from fuzzinfer import get_logger
from fuzzinfer.activation import General
from fuzzinfer.errors import ErrorCodes, ParseError
from fuzzinfer.rule.rule import Rule

if TYPE_CHECKING:
    from fuzzinfer.activation import Activation
    from fuzzinfer.engine import Engine
    from fuzzinfer.norm.base import SNorm, TNorm

logger = get_logger(__name__)


class RuleBlock:
    """
    Rules evaluated together with one conjunction, disjunction,
    implication and activation method.

    Attributes:
        name: Name of the block
        conjunction: T-norm computing ``and``
        disjunction: S-norm computing ``or``
        implication: T-norm shaping the activated consequent terms
        activation: Method selecting which rules fire; when unset every
            rule with a degree greater than zero fires
        enabled: Disabled blocks are skipped by the engine
        rules: Rules of the block, in order
    """

    def __init__(
        self,
        name: str = "",
        conjunction: Optional["TNorm"] = None,
        disjunction: Optional["SNorm"] = None,
        implication: Optional["TNorm"] = None,
        activation: Optional["Activation"] = None,
    ):
        self.name = name
        self.conjunction = conjunction
        self.disjunction = disjunction
        self.implication = implication
        self.activation = activation
        self.enabled = True
        self.rules: list[Rule] = []

    def add_rule(self, rule: Rule) -> None:
        self.rules.append(rule)

    def insert_rule(self, index: int, rule: Rule) -> None:
        self.rules.insert(index, rule)

    def remove_rule(self, rule: Rule) -> Rule:
        self.rules.remove(rule)
        return rule

    def activate(self) -> None:
        """Compute the degree of every rule and fire those selected."""
        if self.activation is not None:
            self.activation.activate(self)
            return

        General().activate(self)

    def unload_rules(self) -> None:
        for rule in self.rules:
            rule.unload()

    def load_rules(self, engine: "Engine") -> None:
        """
        Load every rule against ``engine``.

        All rules are attempted; the ones that fail stay unloaded.

        Raises:
            ParseError: Listing each rule that could not be loaded
        """
        failures: list[str] = []
        for rule in self.rules:
            if rule.is_loaded():
                rule.unload()
            try:
                rule.load(engine)
            except ParseError as e:
                failures.append(f"[{rule.text}]: {e.message}")

        if failures:
            logger.error(
                f"Rule block <{self.name}>: {len(failures)} of {len(self.rules)} rules failed to load"
            )
            raise ParseError(
                message="[ruleblock error] the following rules could not be loaded:\n"
                + "\n".join(failures),
                error_code=ErrorCodes.RULE_BLOCK_LOAD_FAILED,
                details={"rule_block": self.name, "failures": failures},
            )

    def reload_rules(self, engine: "Engine") -> None:
        self.unload_rules()
        self.load_rules(engine)

    def clone(self) -> "RuleBlock":
        """Copy with cloned operators and unloaded rules."""
        result = RuleBlock(
            self.name,
            self.conjunction.clone() if self.conjunction is not None else None,
            self.disjunction.clone() if self.disjunction is not None else None,
            self.implication.clone() if self.implication is not None else None,
            self.activation.clone() if self.activation is not None else None,
        )
        result.enabled = self.enabled
        result.rules = [rule.clone() for rule in self.rules]
        return result

    def __str__(self) -> str:
        lines = [f"RuleBlock: {self.name}"]
        lines.append(f"  enabled: {str(self.enabled).lower()}")
        for label, value in (
            ("conjunction", self.conjunction),
            ("disjunction", self.disjunction),
            ("implication", self.implication),
            ("activation", self.activation),
        ):
            lines.append(f"  {label}: {value.name if value is not None else 'none'}")
        lines.extend(f"  rule: {rule.text}" for rule in self.rules)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"RuleBlock(name={self.name!r}, rules={len(self.rules)})"
