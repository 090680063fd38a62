"""
Tests for the inference engine.
"""

import pytest

from fuzzinfer import operation as op
from fuzzinfer.activation import General, Highest
from fuzzinfer.defuzzifier import Centroid, WeightedAverage
from fuzzinfer.engine import Engine, EngineType
from fuzzinfer.errors import ConfigurationError, EngineError, ErrorCodes, ParseError
from fuzzinfer.factory import FactoryManager
from fuzzinfer.norm import AlgebraicProduct, AlgebraicSum, Maximum, Minimum
from fuzzinfer.rule import Rule, RuleBlock
from fuzzinfer.term import Linear, Triangle
from fuzzinfer.variable import OutputVariable


class TestProcess:
    """Tests for inference cycles."""

    def test_simple_engine(self, simple_engine):
        """Test that a symmetric consequent defuzzifies to its center."""
        simple_engine.set_input_value("x", 5.0)
        simple_engine.process()
        assert simple_engine.output_value("y") == pytest.approx(5.0, abs=0.1)

    def test_partial_activation(self, simple_engine):
        """Test that a scaled consequent keeps its center."""
        simple_engine.set_input_value("x", 2.5)
        simple_engine.process()
        y = simple_engine.output_variable("y")
        assert y.fuzzy_output.terms[0].degree == pytest.approx(0.5)
        assert y.value == pytest.approx(5.0, abs=0.1)

    def test_fuzzy_output_is_cleared_between_cycles(self, simple_engine):
        """Test that each cycle starts from an empty fuzzy output."""
        for value in (5.0, 2.5, 7.5):
            simple_engine.set_input_value("x", value)
            simple_engine.process()
            assert len(simple_engine.output_variable("y").fuzzy_output.terms) == 1

    def test_no_rule_fires(self, simple_engine):
        """Test that an unset input fires no rule and keeps the previous value."""
        simple_engine.set_input_value("x", 5.0)
        simple_engine.process()
        simple_engine.set_input_value("x", op.nan)
        simple_engine.process()

        y = simple_engine.output_variable("y")
        assert y.fuzzy_output.is_empty()
        assert op.is_nan(y.value)
        assert y.previous_value == pytest.approx(5.0, abs=0.1)

    def test_disabled_rule_block(self, simple_engine):
        """Test that disabled blocks are not activated."""
        simple_engine.rule_blocks[0].enabled = False
        simple_engine.output_variable("y").default_value = 0.0
        simple_engine.set_input_value("x", 5.0)
        simple_engine.process()
        assert simple_engine.output_value("y") == 0.0

    def test_restart(self, simple_engine):
        """Test that restarting resets inputs and outputs."""
        simple_engine.set_input_value("x", 5.0)
        simple_engine.process()
        simple_engine.restart()
        y = simple_engine.output_variable("y")
        assert op.is_nan(simple_engine.input_variable("x").value)
        assert op.is_nan(y.value)
        assert op.is_nan(y.previous_value)
        assert y.fuzzy_output.is_empty()

    def test_missing_output(self, simple_engine):
        """Test that unknown names raise EngineError."""
        with pytest.raises(EngineError):
            simple_engine.set_input_value("z", 1.0)
        with pytest.raises(EngineError):
            simple_engine.output_value("z")


class TestReadiness:
    """Tests for the readiness check."""

    def test_ready(self, simple_engine):
        """Test that a complete engine is ready."""
        assert simple_engine.is_ready() == (True, [])

    def test_empty_engine(self):
        """Test that an empty engine lists every missing part."""
        ready, problems = Engine("empty").is_ready()
        assert not ready
        assert "Engine has no input variables" in problems
        assert "Engine has no output variables" in problems
        assert "Engine has no rule blocks" in problems

    def test_missing_operators(self, simple_engine):
        """Test that missing norms and defuzzifiers are reported."""
        rule_block = simple_engine.rule_blocks[0]
        rule_block.add_rule(Rule("if x is mid and x is mid then y is mid"))
        rule_block.add_rule(Rule("if x is mid or x is mid then y is mid"))
        rule_block.load_rules(simple_engine)
        rule_block.conjunction = None
        rule_block.disjunction = None
        rule_block.implication = None
        simple_engine.output_variable("y").aggregation = None

        ready, problems = simple_engine.is_ready()
        assert not ready
        text = "\n".join(problems)
        assert "Output variable <y> has no aggregation" in text
        assert "1 rules that require a conjunction" in text
        assert "1 rules that require a disjunction" in text
        assert "3 rules that require a implication" in text

    def test_missing_defuzzifier_and_terms(self, simple_engine):
        """Test that outputs without terms or defuzzifier are reported."""
        simple_engine.add_output_variable(OutputVariable("z", 0.0, 1.0))
        ready, problems = simple_engine.is_ready()
        assert not ready
        assert "Output variable <z> has no terms" in problems
        assert "Output variable <z> has no defuzzifier" in problems

    def test_empty_rule_block(self, simple_engine):
        """Test that blocks without rules are reported."""
        simple_engine.add_rule_block(RuleBlock("empty"))
        ready, problems = simple_engine.is_ready()
        assert not ready
        assert "Rule block <empty> has no rules" in problems


class TestEngineType:
    """Tests for inferring the kind of fuzzy system."""

    def test_larsen(self, simple_engine):
        """Test that product implication over integral outputs is Larsen."""
        assert simple_engine.type()[0] == EngineType.LARSEN

    def test_mamdani(self, simple_engine):
        """Test that minimum implication over integral outputs is Mamdani."""
        simple_engine.rule_blocks[0].implication = Minimum()
        engine_type, reason = simple_engine.type()
        assert engine_type == EngineType.MAMDANI
        assert "integral" in reason

    def test_takagi_sugeno(self, sugeno_engine):
        """Test that constant outputs are Takagi-Sugeno."""
        assert sugeno_engine.type()[0] == EngineType.TAKAGI_SUGENO

    def test_tsukamoto(self, tsukamoto_engine):
        """Test that monotonic outputs are Tsukamoto."""
        assert tsukamoto_engine.type()[0] == EngineType.TSUKAMOTO

    def test_inverse_tsukamoto(self, simple_engine):
        """Test weighted outputs with non-monotonic terms."""
        simple_engine.output_variable("y").defuzzifier = WeightedAverage()
        assert simple_engine.type()[0] == EngineType.INVERSE_TSUKAMOTO

    def test_hybrid(self, simple_engine, sugeno_engine):
        """Test outputs with different kinds of defuzzifiers."""
        simple_engine.add_output_variable(sugeno_engine.output_variable("y").clone())
        assert simple_engine.type()[0] == EngineType.HYBRID

    def test_unknown(self, simple_engine):
        """Test engines without outputs or defuzzifiers."""
        assert Engine().type()[0] == EngineType.UNKNOWN
        simple_engine.output_variable("y").defuzzifier = None
        assert simple_engine.type()[0] == EngineType.UNKNOWN


class TestConfigure:
    """Tests for configuring every operator at once."""

    def test_configure_by_name(self, simple_engine):
        """Test that registered names are resolved and cloned per owner."""
        simple_engine.add_rule_block(RuleBlock("second"))
        simple_engine.configure(
            "AlgebraicProduct", "AlgebraicSum", "Minimum", "Maximum", "Centroid", "Highest"
        )

        first, second = simple_engine.rule_blocks
        assert isinstance(first.conjunction, AlgebraicProduct)
        assert isinstance(first.disjunction, AlgebraicSum)
        assert isinstance(first.implication, Minimum)
        assert isinstance(first.activation, Highest)
        assert first.conjunction is not second.conjunction

        y = simple_engine.output_variable("y")
        assert isinstance(y.defuzzifier, Centroid)
        assert isinstance(y.aggregation, Maximum)

    def test_configure_with_instances(self, simple_engine):
        """Test that instances are cloned into every owner."""
        conjunction = Minimum()
        simple_engine.configure(conjunction=conjunction, aggregation=Maximum())
        rule_block = simple_engine.rule_blocks[0]
        assert rule_block.conjunction == conjunction
        assert rule_block.conjunction is not conjunction

    def test_activation_defaults_to_general(self, simple_engine):
        """Test that no activation means General."""
        simple_engine.configure("Minimum", "Maximum", "Minimum", "Maximum", "Centroid")
        assert isinstance(simple_engine.rule_blocks[0].activation, General)

    def test_none_clears_operators(self, simple_engine):
        """Test that missing operators are cleared."""
        simple_engine.configure()
        rule_block = simple_engine.rule_blocks[0]
        assert rule_block.conjunction is None
        assert simple_engine.output_variable("y").defuzzifier is None

    def test_unknown_name(self, simple_engine):
        """Test that unregistered names raise ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            simple_engine.configure(conjunction="Smallest")
        assert exc_info.value.error_code == ErrorCodes.FACTORY_UNKNOWN_NAME


class TestContainers:
    """Tests for adding, finding and removing engine parts."""

    def test_lookups(self, simple_engine):
        """Test finding variables and rule blocks by name."""
        assert simple_engine.has_input_variable("x")
        assert simple_engine.has_output_variable("y")
        assert simple_engine.has_variable("y")
        assert not simple_engine.has_variable("z")
        assert simple_engine.has_rule_block("rules")
        assert simple_engine.variable("x") is simple_engine.input_variable("x")
        assert [v.name for v in simple_engine.variables()] == ["x", "y"]

    def test_unknown_names(self, simple_engine):
        """Test the error codes of failed lookups."""
        with pytest.raises(EngineError) as exc_info:
            simple_engine.input_variable("y")
        assert exc_info.value.error_code == ErrorCodes.ENGINE_UNKNOWN_VARIABLE
        assert exc_info.value.details["available"] == ["x"]

        with pytest.raises(EngineError) as exc_info:
            simple_engine.rule_block("missing")
        assert exc_info.value.error_code == ErrorCodes.ENGINE_UNKNOWN_RULE_BLOCK

    def test_remove(self, simple_engine):
        """Test removing parts by name."""
        x = simple_engine.remove_input_variable("x")
        assert x.name == "x"
        assert not simple_engine.has_input_variable("x")
        assert simple_engine.remove_output_variable("y").name == "y"
        assert simple_engine.remove_rule_block("rules").name == "rules"
        with pytest.raises(EngineError):
            simple_engine.remove_rule_block("rules")

    def test_private_factory_manager(self):
        """Test that engines share the default registries unless given their own."""
        assert Engine().factory_manager is FactoryManager.default()
        manager = FactoryManager()
        assert Engine(factory_manager=manager).factory_manager is manager

    def test_repr(self, simple_engine):
        """Test the representation of an engine."""
        assert repr(simple_engine) == (
            "Engine(name='simple', inputs=['x'], outputs=['y'], rule_blocks=['rules'])"
        )


class TestClone:
    """Tests for copying engines."""

    def test_clone_is_independent(self, simple_engine):
        """Test that a clone owns its variables and rules."""
        clone = simple_engine.clone()

        assert clone.input_variable("x") is not simple_engine.input_variable("x")
        rule = clone.rule_blocks[0].rules[0]
        assert rule.is_loaded()
        assert rule.antecedent.expression.variable is clone.input_variable("x")
        assert rule.consequent.conclusions[0].variable is clone.output_variable("y")

        clone.set_input_value("x", 5.0)
        clone.process()
        assert clone.output_value("y") == pytest.approx(5.0, abs=0.1)
        assert op.is_nan(simple_engine.input_variable("x").value)
        assert op.is_nan(simple_engine.output_value("y"))

    def test_clone_rebinds_linear_terms(self, two_input_engine):
        """Test that terms reading engine variables follow the clone."""
        z = OutputVariable("z", 0.0, 10.0, [Linear("sum", [1.0, 1.0], two_input_engine)])
        z.defuzzifier = WeightedAverage()
        two_input_engine.add_output_variable(z)

        clone = two_input_engine.clone()
        assert clone.output_variable("z").term("sum").engine is clone

        clone.set_input_value("a", 1.0)
        clone.set_input_value("b", 2.0)
        assert clone.output_variable("z").term("sum").membership(0.0) == pytest.approx(3.0)

    def test_clone_reports_rule_failures(self, simple_engine):
        """Test that rules failing to reload raise after the rest are loaded."""
        simple_engine.rule_blocks[0].add_rule(Rule("if x is nowhere then y is mid"))
        with pytest.raises(ParseError) as exc_info:
            simple_engine.clone()
        assert exc_info.value.error_code == ErrorCodes.RULE_BLOCK_LOAD_FAILED

    def test_clone_keeps_operators(self, simple_engine):
        """Test that operators are copied, not shared."""
        simple_engine.output_variable("y").aggregation = AlgebraicSum()
        clone = simple_engine.clone()
        original_block = simple_engine.rule_blocks[0]
        cloned_block = clone.rule_blocks[0]
        assert cloned_block.implication == original_block.implication
        assert cloned_block.implication is not original_block.implication
        assert isinstance(clone.output_variable("y").aggregation, AlgebraicSum)


class TestMultipleOutputs:
    """Tests for engines with several rule blocks and outputs."""

    def test_two_blocks(self, simple_engine):
        """Test that every block contributes to the outputs."""
        z = OutputVariable("z", 0.0, 10.0, [Triangle("mid", 0.0, 5.0, 10.0)])
        z.defuzzifier = Centroid(100)
        z.aggregation = Maximum()
        simple_engine.add_output_variable(z)

        rule_block = RuleBlock("second", Minimum(), Maximum(), Minimum())
        rule_block.add_rule(Rule("if x is mid then z is mid"))
        simple_engine.add_rule_block(rule_block)
        rule_block.load_rules(simple_engine)

        simple_engine.set_input_value("x", 5.0)
        simple_engine.process()
        assert simple_engine.output_value("y") == pytest.approx(5.0, abs=0.1)
        assert simple_engine.output_value("z") == pytest.approx(5.0, abs=0.1)
