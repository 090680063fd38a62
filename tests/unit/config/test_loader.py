"""
Tests for loading engine descriptions and building engines.
"""

import pytest

from fuzzinfer.activation import Highest
from fuzzinfer.config.loader import EngineConfigLoader
from fuzzinfer.defuzzifier import Centroid, WeightedAverage, WeightedType
from fuzzinfer.errors import (
    ConfigurationError,
    ConfigurationFileError,
    ErrorCodes,
    InvalidConfigurationError,
)
from fuzzinfer.factory import FactoryManager
from fuzzinfer.norm import Maximum, Minimum
from fuzzinfer.term import Linear, Triangle


@pytest.fixture
def loader(tmp_path):
    return EngineConfigLoader(config_dir=tmp_path)


class TestLoadFromYaml:
    """Tests for reading description files."""

    def test_load(self, loader, tipper_yaml):
        """Test loading a valid file."""
        config = loader.load_from_yaml(tipper_yaml)
        assert config.name == "tipper"
        assert [variable.name for variable in config.inputs] == ["service", "food"]
        assert config.inputs[0].terms[2].parameters == "5 10"
        assert len(config.rule_blocks[0].rules) == 3

    def test_relative_path(self, loader, tipper_yaml):
        """Test that relative paths are resolved against the config directory."""
        config = loader.load_from_yaml(tipper_yaml.name)
        assert config.name == "tipper"

    def test_missing_file(self, loader):
        """Test that a missing file raises ConfigurationFileError."""
        with pytest.raises(ConfigurationFileError) as exc_info:
            loader.load_from_yaml("missing.yaml")
        assert exc_info.value.error_code == ErrorCodes.CONFIG_FILE_NOT_FOUND
        assert exc_info.value.context["file"].endswith("missing.yaml")

    def test_invalid_yaml(self, loader, tmp_path):
        """Test that malformed YAML raises InvalidConfigurationError."""
        path = tmp_path / "broken.yaml"
        path.write_text("inputs: [unclosed\n")
        with pytest.raises(InvalidConfigurationError) as exc_info:
            loader.load_from_yaml(path)
        assert exc_info.value.error_code == ErrorCodes.CONFIG_INVALID_YAML

    def test_empty_file(self, loader, tmp_path):
        """Test that an empty file fails validation."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(InvalidConfigurationError) as exc_info:
            loader.load_from_yaml(path)
        assert exc_info.value.error_code == ErrorCodes.CONFIG_VALIDATION_FAILED


class TestLoadFromDict:
    """Tests for validating dictionaries."""

    def test_validation_errors(self, tipper_dict):
        """Test that validation errors are collected in the details."""
        tipper_dict["outputs"][0]["defuzzifier"] = "Centre"
        with pytest.raises(InvalidConfigurationError) as exc_info:
            EngineConfigLoader.load_from_dict(tipper_dict)
        error = exc_info.value
        assert error.error_code == ErrorCodes.CONFIG_VALIDATION_FAILED
        assert error.details["validation_errors"]


class TestBuildEngine:
    """Tests for turning descriptions into engines."""

    @pytest.mark.integration
    def test_tipper(self, loader, tipper_yaml):
        """Test building and processing the tipper."""
        engine = loader.load_engine(tipper_yaml)
        assert engine.is_ready() == (True, [])

        engine.set_input_value("service", 5.0)
        engine.set_input_value("food", 5.0)
        engine.process()
        assert engine.output_value("tip") == pytest.approx(15.0, abs=0.1)

    def test_components(self, loader, tipper_dict):
        """Test that every component is resolved from the registries."""
        engine = loader.build_engine(loader.load_from_dict(tipper_dict))

        tip = engine.output_variable("tip")
        assert isinstance(tip.defuzzifier, Centroid)
        assert tip.defuzzifier.resolution == 200
        assert isinstance(tip.aggregation, Maximum)
        assert isinstance(tip.term("average"), Triangle)
        assert (tip.fuzzy_output.minimum, tip.fuzzy_output.maximum) == (0.0, 30.0)

        rule_block = engine.rule_block("mamdani")
        assert isinstance(rule_block.conjunction, Minimum)
        assert isinstance(rule_block.implication, Minimum)
        assert all(rule.is_loaded() for rule in rule_block.rules)

    def test_output_options(self, loader, tipper_dict):
        """Test defaults, locks, heights and activation parameters."""
        output = tipper_dict["outputs"][0]
        output.update(
            {
                "default_value": 0.0,
                "lock_previous_value": True,
                "lock_value_in_range": True,
            }
        )
        output["terms"][0]["height"] = 0.5
        tipper_dict["rule_blocks"][0].update(
            {"activation": "Highest", "activation_parameters": "2", "enabled": False}
        )

        engine = loader.build_engine(loader.load_from_dict(tipper_dict))
        tip = engine.output_variable("tip")
        assert tip.default_value == 0.0
        assert tip.lock_previous_value
        assert tip.lock_value_in_range
        assert tip.term("cheap").height == 0.5

        rule_block = engine.rule_blocks[0]
        assert isinstance(rule_block.activation, Highest)
        assert rule_block.activation.number_of_rules == 2
        assert not rule_block.enabled

    def test_takagi_sugeno(self, loader):
        """Test a description with linear consequents."""
        config = loader.load_from_dict(
            {
                "inputs": [
                    {
                        "name": "x",
                        "minimum": 0,
                        "maximum": 10,
                        "terms": [{"name": "rising", "type": "Ramp", "parameters": [0, 10]}],
                    }
                ],
                "outputs": [
                    {
                        "name": "y",
                        "defuzzifier": "WeightedAverage",
                        "defuzzifier_parameters": "TakagiSugeno",
                        "terms": [{"name": "line", "type": "Linear", "parameters": "2 1"}],
                    }
                ],
                "rule_blocks": [{"rules": ["if x is rising then y is line"]}],
            }
        )
        engine = loader.build_engine(config)
        y = engine.output_variable("y")
        assert isinstance(y.defuzzifier, WeightedAverage)
        assert y.defuzzifier.type == WeightedType.TAKAGI_SUGENO
        assert isinstance(y.term("line"), Linear)
        assert y.term("line").engine is engine

        engine.set_input_value("x", 4.0)
        engine.process()
        assert engine.output_value("y") == pytest.approx(9.0)

    def test_invalid_term_parameters(self, loader, tipper_dict):
        """Test that terms failing to configure raise ConfigurationError."""
        tipper_dict["inputs"][0]["terms"][1]["parameters"] = "0 5"
        with pytest.raises(ConfigurationError) as exc_info:
            loader.build_engine(loader.load_from_dict(tipper_dict))
        error = exc_info.value
        assert error.error_code == ErrorCodes.CONFIG_BUILD_FAILED
        assert error.details["term"] == "good"
        assert error.context["section"] == "service"

    def test_invalid_rule(self, loader, tipper_dict):
        """Test that rules failing to load raise ConfigurationError."""
        tipper_dict["rule_blocks"][0]["rules"].append("if service is stellar then tip is generous")
        with pytest.raises(ConfigurationError) as exc_info:
            loader.build_engine(loader.load_from_dict(tipper_dict))
        error = exc_info.value
        assert error.error_code == ErrorCodes.CONFIG_BUILD_FAILED
        assert "stellar" in error.details["error"]

    def test_private_factory_manager(self, tmp_path, tipper_dict):
        """Test that engines are built with the loader's registries."""
        manager = FactoryManager()
        loader = EngineConfigLoader(config_dir=tmp_path, factory_manager=manager)
        engine = loader.build_engine(loader.load_from_dict(tipper_dict))
        assert engine.factory_manager is manager
