"""
Loader of engine descriptions.

Descriptions are validated with the models of ``fuzzinfer.config.models``
and turned into ready-to-process engines by ``build_engine``.
"""

from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from fuzzinfer import get_logger, log_entry_exit
from fuzzinfer.config.models import (
    EngineConfig,
    OutputVariableConfig,
    RuleBlockConfig,
    VariableConfig,
)
from fuzzinfer.engine import Engine
from fuzzinfer.errors import (
    ConfigurationError,
    ConfigurationFileError,
    ErrorCodes,
    InvalidConfigurationError,
    ParseError,
)
from fuzzinfer.factory import FactoryManager
from fuzzinfer.rule import Rule, RuleBlock
from fuzzinfer.variable import InputVariable, OutputVariable

logger = get_logger(__name__)


class EngineConfigLoader:
    """
    Loads engine descriptions from dictionaries or YAML files and builds
    engines from them.
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        factory_manager: Optional[FactoryManager] = None,
    ):
        """
        Initialize the loader.

        Args:
            config_dir: Directory against which relative paths are resolved;
                the current working directory when not given
            factory_manager: Registries used to build engines; the default
                manager when not given
        """
        self.config_dir = Path(config_dir) if config_dir else Path.cwd()
        self.factory_manager = factory_manager or FactoryManager.default()

    @staticmethod
    def load_from_dict(config_dict: dict[str, Any]) -> EngineConfig:
        """
        Validate an engine description given as a dictionary.

        Args:
            config_dict: Dictionary representation of the engine

        Returns:
            Validated EngineConfig

        Raises:
            InvalidConfigurationError: If validation fails
        """
        try:
            return EngineConfig.model_validate(config_dict)
        except ValidationError as e:
            logger.error(f"Engine description validation failed: {e}")
            raise InvalidConfigurationError(
                message="Engine description validation failed",
                error_code=ErrorCodes.CONFIG_VALIDATION_FAILED,
                details={"validation_errors": e.errors(include_context=False)},
            ) from e

    def load_from_yaml(self, file_path: Union[str, Path]) -> EngineConfig:
        """
        Load and validate an engine description from a YAML file.

        Args:
            file_path: Path to the file; relative paths are resolved against
                the config directory

        Returns:
            Validated EngineConfig

        Raises:
            ConfigurationFileError: If the file does not exist
            InvalidConfigurationError: If the YAML is malformed or the
                description fails validation
        """
        path = Path(file_path)
        if not path.is_absolute():
            path = self.config_dir / path

        logger.info(f"Loading engine description from file: {path}")

        if not path.exists():
            logger.error(f"Engine description file not found: {path}")
            raise ConfigurationFileError(
                message=f"Engine description file not found: {path}",
                error_code=ErrorCodes.CONFIG_FILE_NOT_FOUND,
                context={"file": str(path)},
                details={"path": str(path)},
            )

        try:
            with open(path) as file:
                config_dict = yaml.safe_load(file)
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML format in engine description: {e}")
            raise InvalidConfigurationError(
                message="Invalid YAML format in engine description",
                error_code=ErrorCodes.CONFIG_INVALID_YAML,
                context={"file": str(path)},
                details={"yaml_error": str(e)},
            ) from e

        if config_dict is None:
            logger.warning(f"Empty engine description file: {path}")
            config_dict = {}

        config = self.load_from_dict(config_dict)
        logger.info(f"Successfully loaded engine description from {path}")
        return config

    @log_entry_exit()
    def build_engine(self, config: EngineConfig) -> Engine:
        """
        Build an engine from a validated description.

        Args:
            config: Engine description

        Returns:
            Engine with every rule loaded

        Raises:
            ConfigurationError: If a term cannot be configured or a rule
                cannot be loaded
        """
        engine = Engine(config.name, config.description, self.factory_manager)

        for variable_config in config.inputs:
            variable = InputVariable(
                variable_config.name, variable_config.minimum, variable_config.maximum
            )
            self._add_terms(engine, variable, variable_config)
            engine.add_input_variable(variable)

        for variable_config in config.outputs:
            engine.add_output_variable(self._build_output(engine, variable_config))

        for block_config in config.rule_blocks:
            engine.add_rule_block(self._build_rule_block(block_config))

        for rule_block in engine.rule_blocks:
            try:
                rule_block.load_rules(engine)
            except ParseError as e:
                raise ConfigurationError(
                    message=f"Rule block '{rule_block.name}' could not be loaded",
                    error_code=ErrorCodes.CONFIG_BUILD_FAILED,
                    context={"section": "rule_blocks"},
                    details={"rule_block": rule_block.name, "error": e.message},
                ) from e

        logger.info(
            f"Built engine '{engine.name}' with {len(engine.input_variables)} inputs, "
            f"{len(engine.output_variables)} outputs and "
            f"{sum(len(block.rules) for block in engine.rule_blocks)} rules"
        )
        return engine

    def load_engine(self, file_path: Union[str, Path]) -> Engine:
        """Load a YAML description and build its engine."""
        return self.build_engine(self.load_from_yaml(file_path))

    def _add_terms(
        self,
        engine: Engine,
        variable: Union[InputVariable, OutputVariable],
        variable_config: VariableConfig,
    ) -> None:
        variable.enabled = variable_config.enabled
        for term_config in variable_config.terms:
            try:
                term = self.factory_manager.term.create(
                    term_config.type, term_config.parameters, term_config.name, engine
                )
            except (ConfigurationError, ParseError) as e:
                logger.error(
                    f"Failed to configure term '{term_config.name}' of '{variable.name}': {e}"
                )
                raise ConfigurationError(
                    message=f"Term '{term_config.name}' of variable '{variable.name}' could not be configured",
                    error_code=ErrorCodes.CONFIG_BUILD_FAILED,
                    context={"section": variable.name},
                    details={
                        "term": term_config.name,
                        "type": term_config.type,
                        "parameters": term_config.parameters,
                        "error": e.message,
                    },
                ) from e
            if term_config.height is not None:
                term.height = term_config.height
            variable.add_term(term)

    def _build_output(
        self, engine: Engine, variable_config: OutputVariableConfig
    ) -> OutputVariable:
        factories = self.factory_manager
        variable = OutputVariable(
            variable_config.name, variable_config.minimum, variable_config.maximum
        )
        self._add_terms(engine, variable, variable_config)
        if variable_config.defuzzifier:
            variable.defuzzifier = factories.defuzzifier.create(
                variable_config.defuzzifier, variable_config.defuzzifier_parameters
            )
        if variable_config.aggregation:
            variable.aggregation = factories.snorm.construct(variable_config.aggregation)
        variable.default_value = variable_config.default_value
        variable.lock_previous_value = variable_config.lock_previous_value
        variable.lock_value_in_range = variable_config.lock_value_in_range
        return variable

    def _build_rule_block(self, block_config: RuleBlockConfig) -> RuleBlock:
        factories = self.factory_manager

        def construct(name: Optional[str], registry):
            return registry.construct(name) if name else None

        rule_block = RuleBlock(
            block_config.name,
            construct(block_config.conjunction, factories.tnorm),
            construct(block_config.disjunction, factories.snorm),
            construct(block_config.implication, factories.tnorm),
        )
        if block_config.activation:
            rule_block.activation = factories.activation.create(
                block_config.activation, block_config.activation_parameters
            )
        rule_block.enabled = block_config.enabled
        for text in block_config.rules:
            rule_block.add_rule(Rule(text))
        return rule_block
