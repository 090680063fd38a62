"""
Global test fixtures for the fuzzinfer project.

This module contains engines and engine descriptions shared by the test
modules.
"""

from pathlib import Path

import pytest
import yaml

from fuzzinfer.defuzzifier import Centroid, WeightedAverage
from fuzzinfer.engine import Engine
from fuzzinfer.logging import reset_rate_limit_state
from fuzzinfer.norm import AlgebraicProduct, Maximum, Minimum
from fuzzinfer.rule import Rule, RuleBlock
from fuzzinfer.term import Constant, Ramp, Triangle
from fuzzinfer.variable import InputVariable, OutputVariable

TIPPER_YAML = """
name: tipper
description: Tip from service and food quality
inputs:
  - name: service
    minimum: 0
    maximum: 10
    terms:
      - {name: poor, type: Ramp, parameters: [5, 0]}
      - {name: good, type: Triangle, parameters: [0, 5, 10]}
      - {name: excellent, type: Ramp, parameters: "5 10"}
  - name: food
    minimum: 0
    maximum: 10
    terms:
      - {name: rancid, type: Ramp, parameters: [5, 0]}
      - {name: delicious, type: Ramp, parameters: [5, 10]}
outputs:
  - name: tip
    minimum: 0
    maximum: 30
    defuzzifier: Centroid
    defuzzifier_parameters: "200"
    aggregation: Maximum
    default_value: .nan
    terms:
      - {name: cheap, type: Triangle, parameters: [0, 5, 10]}
      - {name: average, type: Triangle, parameters: [10, 15, 20]}
      - {name: generous, type: Triangle, parameters: [20, 25, 30]}
rule_blocks:
  - name: mamdani
    conjunction: Minimum
    disjunction: Maximum
    implication: Minimum
    activation: General
    rules:
      - if service is poor or food is rancid then tip is cheap
      - if service is good then tip is average
      - if service is excellent and food is delicious then tip is generous
"""


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Let rate-limited warnings through in every test."""
    reset_rate_limit_state()
    yield
    reset_rate_limit_state()


@pytest.fixture
def two_input_engine():
    """Engine with the inputs a and b and no rules."""
    engine = Engine("two_inputs")
    for name in ("a", "b"):
        engine.add_input_variable(
            InputVariable(name, 0.0, 10.0, [Triangle("mid", 0.0, 5.0, 10.0)])
        )
    return engine


@pytest.fixture
def simple_engine():
    """
    Mamdani engine with one input x and one output y, each with a single
    Triangle(0, 5, 10) term named mid.
    """
    engine = Engine("simple")
    engine.add_input_variable(
        InputVariable("x", 0.0, 10.0, [Triangle("mid", 0.0, 5.0, 10.0)])
    )
    y = OutputVariable("y", 0.0, 10.0, [Triangle("mid", 0.0, 5.0, 10.0)])
    y.defuzzifier = Centroid(100)
    y.aggregation = Maximum()
    engine.add_output_variable(y)

    rule_block = RuleBlock("rules", Minimum(), Maximum(), AlgebraicProduct())
    rule_block.add_rule(Rule("if x is mid then y is mid"))
    engine.add_rule_block(rule_block)
    rule_block.load_rules(engine)
    return engine


def _ramp_input(engine: Engine) -> None:
    engine.add_input_variable(
        InputVariable(
            "x", 0.0, 10.0, [Ramp("low", 10.0, 0.0), Ramp("high", 0.0, 10.0)]
        )
    )


def _low_high_rules(engine: Engine) -> RuleBlock:
    rule_block = RuleBlock("rules", Minimum(), Maximum())
    rule_block.add_rule(Rule("if x is low then y is low"))
    rule_block.add_rule(Rule("if x is high then y is high"))
    engine.add_rule_block(rule_block)
    rule_block.load_rules(engine)
    return rule_block


@pytest.fixture
def sugeno_engine():
    """Takagi-Sugeno engine: y is 2 when x is low and 8 when x is high."""
    engine = Engine("sugeno")
    _ramp_input(engine)
    y = OutputVariable("y", 0.0, 10.0, [Constant("low", 2.0), Constant("high", 8.0)])
    y.defuzzifier = WeightedAverage()
    engine.add_output_variable(y)
    _low_high_rules(engine)
    return engine


@pytest.fixture
def tsukamoto_engine():
    """Tsukamoto engine whose outputs are the monotonic ramps of the input."""
    engine = Engine("tsukamoto")
    _ramp_input(engine)
    y = OutputVariable(
        "y", 0.0, 10.0, [Ramp("low", 10.0, 0.0), Ramp("high", 0.0, 10.0)]
    )
    y.defuzzifier = WeightedAverage("Tsukamoto")
    engine.add_output_variable(y)
    _low_high_rules(engine)
    return engine


@pytest.fixture
def tipper_dict() -> dict:
    """Dictionary form of the tipper description."""
    return yaml.safe_load(TIPPER_YAML)


@pytest.fixture
def tipper_yaml(tmp_path) -> Path:
    """Path to a YAML description of a two-input Mamdani tipper."""
    path = tmp_path / "tipper.yaml"
    path.write_text(TIPPER_YAML)
    return path
