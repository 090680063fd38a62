"""
Fuzzy inference engine.

An engine owns the input variables, output variables and rule blocks of
a fuzzy system. One inference cycle (``process``) clears the fuzzy output
of every output variable, activates the enabled rule blocks in order and
defuzzifies every output variable.

An engine is not safe for concurrent ``process`` calls: the fuzzy outputs
are mutated in place. Use one engine (see ``clone``) per thread.
"""

from enum import Enum
from typing import Optional, Union

from fuzzinfer import get_logger, log_performance
from fuzzinfer import operation as op
from fuzzinfer.activation import Activation
from fuzzinfer.defuzzifier import Defuzzifier, IntegralDefuzzifier, WeightedDefuzzifier
from fuzzinfer.defuzzifier.weighted import WeightedType
from fuzzinfer.errors import EngineError, ErrorCodes, ParseError
from fuzzinfer.factory import FactoryManager
from fuzzinfer.norm import AlgebraicProduct, SNorm, TNorm
from fuzzinfer.rule import RuleBlock
from fuzzinfer.rule.expression import AND, OR, THEN
from fuzzinfer.variable import InputVariable, OutputVariable, Variable

logger = get_logger(__name__)


class EngineType(str, Enum):
    """Kind of fuzzy system, inferred from the configuration of an engine."""

    MAMDANI = "Mamdani"
    LARSEN = "Larsen"
    TAKAGI_SUGENO = "TakagiSugeno"
    TSUKAMOTO = "Tsukamoto"
    INVERSE_TSUKAMOTO = "InverseTsukamoto"
    HYBRID = "Hybrid"
    UNKNOWN = "Unknown"


class Engine:
    """
    Container and driver of a fuzzy inference system.

    Attributes:
        name: Name of the engine
        description: Free text describing the engine
        input_variables: Input variables, in order
        output_variables: Output variables, in order
        rule_blocks: Rule blocks, activated in order
        factory_manager: Registries used to resolve names in rules and
            in ``configure``
    """

    def __init__(
        self,
        name: str = "",
        description: str = "",
        factory_manager: Optional[FactoryManager] = None,
    ):
        self.name = name
        self.description = description
        self.input_variables: list[InputVariable] = []
        self.output_variables: list[OutputVariable] = []
        self.rule_blocks: list[RuleBlock] = []
        self.factory_manager = factory_manager or FactoryManager.default()

    # --- Configuration ---

    def configure(
        self,
        conjunction: Union[TNorm, str, None] = None,
        disjunction: Union[SNorm, str, None] = None,
        implication: Union[TNorm, str, None] = None,
        aggregation: Union[SNorm, str, None] = None,
        defuzzifier: Union[Defuzzifier, str, None] = None,
        activation: Union[Activation, str, None] = None,
    ) -> None:
        """
        Set the operators of every rule block and output variable.

        Each argument is an instance or a registered name; each rule
        block and output variable receives its own clone. ``None`` (or an
        empty name) clears the operator, except for the activation, which
        falls back to ``General``.

        Raises:
            ConfigurationError: If a name is not registered
        """
        factories = self.factory_manager
        conjunction = self._resolve(conjunction, factories.tnorm)
        disjunction = self._resolve(disjunction, factories.snorm)
        implication = self._resolve(implication, factories.tnorm)
        aggregation = self._resolve(aggregation, factories.snorm)
        defuzzifier = self._resolve(defuzzifier, factories.defuzzifier)
        activation = self._resolve(activation, factories.activation)
        if activation is None:
            activation = factories.activation.construct("General")

        for rule_block in self.rule_blocks:
            rule_block.conjunction = _clone(conjunction)
            rule_block.disjunction = _clone(disjunction)
            rule_block.implication = _clone(implication)
            rule_block.activation = _clone(activation)

        for output_variable in self.output_variables:
            output_variable.defuzzifier = _clone(defuzzifier)
            output_variable.fuzzy_output.aggregation = _clone(aggregation)

        logger.debug(
            f"Engine <{self.name}> configured: conjunction={_name(conjunction)}, "
            f"disjunction={_name(disjunction)}, implication={_name(implication)}, "
            f"aggregation={_name(aggregation)}, defuzzifier={_name(defuzzifier)}, "
            f"activation={_name(activation)}"
        )

    @staticmethod
    def _resolve(value, registry):
        if isinstance(value, str):
            return registry.construct(value) if value.strip() else None
        return value

    def is_ready(self) -> tuple[bool, list[str]]:
        """
        Check that the engine can be processed.

        Returns:
            Tuple (ready, problems) where problems lists what is missing
        """
        problems: list[str] = []

        if not self.input_variables:
            problems.append("Engine has no input variables")

        if not self.output_variables:
            problems.append("Engine has no output variables")
        for variable in self.output_variables:
            if not variable.terms:
                problems.append(f"Output variable <{variable.name}> has no terms")
            if variable.defuzzifier is None:
                problems.append(f"Output variable <{variable.name}> has no defuzzifier")
            elif (
                isinstance(variable.defuzzifier, IntegralDefuzzifier)
                and variable.fuzzy_output.aggregation is None
            ):
                problems.append(f"Output variable <{variable.name}> has no aggregation")

        if not self.rule_blocks:
            problems.append("Engine has no rule blocks")
        for rule_block in self.rule_blocks:
            if not rule_block.rules:
                problems.append(f"Rule block <{rule_block.name}> has no rules")

            requires_conjunction = 0
            requires_disjunction = 0
            requires_implication = 0
            for rule in rule_block.rules:
                antecedent = rule.text.split(f" {THEN} ", 1)[0]
                if f" {AND} " in antecedent:
                    requires_conjunction += 1
                if f" {OR} " in antecedent:
                    requires_disjunction += 1
                if rule.is_loaded() and any(
                    isinstance(conclusion.variable.defuzzifier, IntegralDefuzzifier)
                    for conclusion in rule.consequent.conclusions
                ):
                    requires_implication += 1

            for count, operator, label in (
                (requires_conjunction, rule_block.conjunction, "conjunction"),
                (requires_disjunction, rule_block.disjunction, "disjunction"),
                (requires_implication, rule_block.implication, "implication"),
            ):
                if count and operator is None:
                    problems.append(
                        f"Rule block <{rule_block.name}> has {count} rules that "
                        f"require a {label} operator, but none is set"
                    )

        return not problems, problems

    def type(self) -> tuple[EngineType, str]:
        """
        Infer the kind of fuzzy system.

        Returns:
            Tuple (engine type, reason)
        """
        if not self.output_variables:
            return EngineType.UNKNOWN, "Engine has no output variables"

        defuzzifiers = [variable.defuzzifier for variable in self.output_variables]

        if all(isinstance(d, IntegralDefuzzifier) for d in defuzzifiers):
            if self.rule_blocks and all(
                isinstance(rule_block.implication, AlgebraicProduct)
                for rule_block in self.rule_blocks
            ):
                return (
                    EngineType.LARSEN,
                    "Output variables have integral defuzzifiers; rule blocks "
                    "imply with the algebraic product",
                )
            return EngineType.MAMDANI, "Output variables have integral defuzzifiers"

        if self._all_weighted(
            (WeightedType.AUTOMATIC, WeightedType.TAKAGI_SUGENO),
            lambda defuzzifier, term: defuzzifier.infer_type(term)
            == WeightedType.TAKAGI_SUGENO,
        ):
            return (
                EngineType.TAKAGI_SUGENO,
                "Output variables have weighted defuzzifiers and only constant, "
                "linear or function terms",
            )

        if self._all_weighted(
            (WeightedType.AUTOMATIC, WeightedType.TSUKAMOTO),
            lambda defuzzifier, term: term.is_monotonic(),
        ):
            return (
                EngineType.TSUKAMOTO,
                "Output variables have weighted defuzzifiers and only monotonic terms",
            )

        if all(isinstance(d, WeightedDefuzzifier) for d in defuzzifiers):
            return (
                EngineType.INVERSE_TSUKAMOTO,
                "Output variables have weighted defuzzifiers with terms that are "
                "neither all constant, linear or function nor all monotonic",
            )

        if all(d is not None for d in defuzzifiers):
            return EngineType.HYBRID, "Output variables have different defuzzifiers"

        return EngineType.UNKNOWN, "There are output variables without a defuzzifier"

    def _all_weighted(self, types, accepts) -> bool:
        for variable in self.output_variables:
            defuzzifier = variable.defuzzifier
            if not isinstance(defuzzifier, WeightedDefuzzifier):
                return False
            if defuzzifier.type not in types:
                return False
            if not all(accepts(defuzzifier, term) for term in variable.terms):
                return False
        return True

    # --- Inference ---

    @log_performance(threshold_ms=100)
    def process(self) -> None:
        """
        Run one inference cycle.

        Raises:
            EvaluationError: If the engine is structurally incomplete (a
                rule needs a missing norm, an output has no defuzzifier)
        """
        for variable in self.output_variables:
            variable.fuzzy_output.clear()

        for variable in self.input_variables:
            if variable.enabled:
                logger.debug(
                    f"{variable.name}.input = {op.str_value(variable.value)} "
                    f"({variable.fuzzy_input_value()})"
                )

        for rule_block in self.rule_blocks:
            if rule_block.enabled:
                rule_block.activate()

        for variable in self.output_variables:
            variable.defuzzify()
            if variable.enabled:
                logger.debug(
                    f"{variable.name}.output = {op.str_value(variable.value)} "
                    f"({variable.fuzzy_output_value()})"
                )

    def restart(self) -> None:
        """Reset input values and clear every output."""
        for variable in self.input_variables:
            variable.value = op.nan
        for variable in self.output_variables:
            variable.clear()

    def set_input_value(self, name: str, value: float) -> None:
        self.input_variable(name).value = value

    def output_value(self, name: str) -> float:
        return self.output_variable(name).value

    # --- Containers ---

    def variables(self) -> list[Variable]:
        return [*self.input_variables, *self.output_variables]

    def add_input_variable(self, variable: InputVariable) -> None:
        self.input_variables.append(variable)

    def add_output_variable(self, variable: OutputVariable) -> None:
        self.output_variables.append(variable)

    def add_rule_block(self, rule_block: RuleBlock) -> None:
        self.rule_blocks.append(rule_block)

    def has_input_variable(self, name: str) -> bool:
        return any(variable.name == name for variable in self.input_variables)

    def has_output_variable(self, name: str) -> bool:
        return any(variable.name == name for variable in self.output_variables)

    def has_variable(self, name: str) -> bool:
        return self.has_input_variable(name) or self.has_output_variable(name)

    def has_rule_block(self, name: str) -> bool:
        return any(rule_block.name == name for rule_block in self.rule_blocks)

    def input_variable(self, name: str) -> InputVariable:
        return self._find(self.input_variables, name, "input variable")

    def output_variable(self, name: str) -> OutputVariable:
        return self._find(self.output_variables, name, "output variable")

    def variable(self, name: str) -> Variable:
        return self._find(self.variables(), name, "variable")

    def rule_block(self, name: str) -> RuleBlock:
        return self._find(
            self.rule_blocks,
            name,
            "rule block",
            ErrorCodes.ENGINE_UNKNOWN_RULE_BLOCK,
        )

    def remove_input_variable(self, name: str) -> InputVariable:
        variable = self.input_variable(name)
        self.input_variables.remove(variable)
        return variable

    def remove_output_variable(self, name: str) -> OutputVariable:
        variable = self.output_variable(name)
        self.output_variables.remove(variable)
        return variable

    def remove_rule_block(self, name: str) -> RuleBlock:
        rule_block = self.rule_block(name)
        self.rule_blocks.remove(rule_block)
        return rule_block

    def _find(
        self,
        items: list,
        name: str,
        kind: str,
        error_code: str = ErrorCodes.ENGINE_UNKNOWN_VARIABLE,
    ):
        for item in items:
            if item.name == name:
                return item
        raise EngineError(
            message=f"[engine error] {kind} <{name}> not found",
            error_code=error_code,
            details={
                "engine": self.name,
                "name": name,
                "available": [item.name for item in items],
            },
        )

    def clone(self) -> "Engine":
        """
        Independent copy of the engine.

        Terms reading engine variables (Linear, Function) are bound to the
        copy, and the rules are reloaded against it.

        Raises:
            ParseError: If rules cannot be reloaded; every other rule of the
                copy is still loaded
        """
        result = Engine(self.name, self.description, self.factory_manager)
        result.input_variables = [variable.clone() for variable in self.input_variables]
        result.output_variables = [
            variable.clone() for variable in self.output_variables
        ]
        for variable in result.variables():
            for term in variable.terms:
                term.update_reference(result)

        failure: Optional[ParseError] = None
        for rule_block in self.rule_blocks:
            block = rule_block.clone()
            result.rule_blocks.append(block)
            try:
                block.load_rules(result)
            except ParseError as e:
                failure = failure or e
        if failure is not None:
            raise failure
        return result

    def __repr__(self) -> str:
        return (
            f"Engine(name={self.name!r}, inputs={[v.name for v in self.input_variables]}, "
            f"outputs={[v.name for v in self.output_variables]}, "
            f"rule_blocks={[b.name for b in self.rule_blocks]})"
        )


def _clone(value):
    return value.clone() if value is not None else None


def _name(value) -> str:
    return value.name if value is not None else "none"
