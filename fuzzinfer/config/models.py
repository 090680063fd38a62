"""
Pydantic models describing a fuzzy engine.

An engine description lists the input variables, output variables and
rule blocks of an engine. Component names (term types, norms,
defuzzifiers, activation methods) are checked against the registries of
the default factory manager.

Example (YAML):

    name: tipper
    inputs:
      - name: service
        minimum: 0
        maximum: 10
        terms:
          - {name: poor, type: Triangle, parameters: [0, 0, 5]}
          - {name: good, type: Triangle, parameters: [0, 5, 10]}
    outputs:
      - name: tip
        minimum: 0
        maximum: 30
        defuzzifier: Centroid
        aggregation: Maximum
        terms:
          - {name: low, type: Triangle, parameters: "0 5 10"}
    rule_blocks:
      - conjunction: Minimum
        implication: Minimum
        rules:
          - if service is poor then tip is low
"""

from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from fuzzinfer import get_logger
from fuzzinfer import operation as op
from fuzzinfer.factory import default_factory_manager

logger = get_logger(__name__)


def _check_registered(value: Optional[str], registry) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if not registry.has(value):
        raise ValueError(
            f"Unknown {registry.kind} '{value}'. Must be one of {registry.available()}"
        )
    return value


class TermConfig(BaseModel):
    """Configuration of one term of a variable."""

    name: str = Field(..., min_length=1, description="Name of the term in rules")
    type: str = Field(..., description="Registered term type, e.g. Triangle")
    parameters: Union[str, list[float]] = Field(
        default="", description="Parameters as text or as a list of numbers"
    )
    height: Optional[float] = Field(
        default=None, description="Height of the term; keeps the parsed value when unset"
    )

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Validate that the term type is registered."""
        v = v.strip()
        if not v:
            raise ValueError("Term type cannot be empty")
        return _check_registered(v, default_factory_manager().term)

    @field_validator("parameters")
    @classmethod
    def normalize_parameters(cls, v: Union[str, list[float]]) -> str:
        """Store the parameters in their text form."""
        if isinstance(v, list):
            return " ".join(op.format_parameter(value) for value in v)
        return v.strip()


class VariableConfig(BaseModel):
    """Fields shared by input and output variables."""

    name: str = Field(..., min_length=1, description="Name of the variable in rules")
    description: str = Field(default="")
    enabled: bool = Field(default=True)
    minimum: float = Field(default=op.nan, description="Lower bound of the range")
    maximum: float = Field(default=op.nan, description="Upper bound of the range")
    terms: list[TermConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_range_and_terms(self) -> "VariableConfig":
        """
        Validate the range and the uniqueness of term names.

        Raises:
            ValueError: If minimum is greater than maximum or term names repeat
        """
        if self.minimum > self.maximum:
            raise ValueError(
                f"Variable '{self.name}' has minimum {self.minimum} greater than "
                f"maximum {self.maximum}"
            )
        names = [term.name for term in self.terms]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Variable '{self.name}' repeats terms: {duplicates}")
        return self


class InputVariableConfig(VariableConfig):
    """Configuration of an input variable."""


class OutputVariableConfig(VariableConfig):
    """Configuration of an output variable."""

    defuzzifier: Optional[str] = Field(default=None)
    defuzzifier_parameters: str = Field(
        default="", description="Resolution (integral) or type (weighted)"
    )
    aggregation: Optional[str] = Field(default=None)
    default_value: float = Field(default=op.nan)
    lock_previous_value: bool = Field(default=False)
    lock_value_in_range: bool = Field(default=False)

    @field_validator("defuzzifier")
    @classmethod
    def validate_defuzzifier(cls, v: Optional[str]) -> Optional[str]:
        return _check_registered(v, default_factory_manager().defuzzifier)

    @field_validator("aggregation")
    @classmethod
    def validate_aggregation(cls, v: Optional[str]) -> Optional[str]:
        return _check_registered(v, default_factory_manager().snorm)


class RuleBlockConfig(BaseModel):
    """Configuration of a rule block."""

    name: str = Field(default="")
    description: str = Field(default="")
    enabled: bool = Field(default=True)
    conjunction: Optional[str] = Field(default=None)
    disjunction: Optional[str] = Field(default=None)
    implication: Optional[str] = Field(default=None)
    activation: Optional[str] = Field(default=None)
    activation_parameters: str = Field(default="")
    rules: list[str] = Field(..., min_length=1, description="Rule texts")

    @field_validator("conjunction", "implication")
    @classmethod
    def validate_tnorm(cls, v: Optional[str]) -> Optional[str]:
        return _check_registered(v, default_factory_manager().tnorm)

    @field_validator("disjunction")
    @classmethod
    def validate_snorm(cls, v: Optional[str]) -> Optional[str]:
        return _check_registered(v, default_factory_manager().snorm)

    @field_validator("activation")
    @classmethod
    def validate_activation(cls, v: Optional[str]) -> Optional[str]:
        return _check_registered(v, default_factory_manager().activation)

    @field_validator("rules")
    @classmethod
    def validate_rules(cls, rules: list[str]) -> list[str]:
        """Strip rule texts and reject blank ones."""
        stripped = [rule.strip() for rule in rules]
        if any(not rule for rule in stripped):
            raise ValueError("Rules cannot be empty")
        return stripped


class EngineConfig(BaseModel):
    """Complete description of an engine."""

    name: str = Field(default="")
    description: str = Field(default="")
    inputs: list[InputVariableConfig] = Field(default_factory=list)
    outputs: list[OutputVariableConfig] = Field(..., min_length=1)
    rule_blocks: list[RuleBlockConfig] = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_unique_variables(self) -> "EngineConfig":
        """
        Validate that variable names are unique across inputs and outputs.

        Raises:
            ValueError: If a variable name repeats
        """
        names = [variable.name for variable in (*self.inputs, *self.outputs)]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Variable names must be unique, repeated: {duplicates}")

        logger.debug(
            f"Validated engine '{self.name}': {len(self.inputs)} inputs, "
            f"{len(self.outputs)} outputs, {len(self.rule_blocks)} rule blocks"
        )
        return self
