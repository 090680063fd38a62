"""
Base class for linguistic terms.

A term is a named membership function ``membership(x) -> degree``. Every
shape owns only its numeric parameters plus a ``height`` that scales the
result. Parameters travel as text through ``configure``/``parameters``,
which is the protocol used by the engine description loader and the CLI.
"""

import copy
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Union

import numpy as np
import pandas as pd

from fuzzinfer import get_logger
from fuzzinfer import operation as op
from fuzzinfer.errors import ConfigurationError, ErrorCodes

if TYPE_CHECKING:
    from fuzzinfer.engine import Engine

logger = get_logger(__name__)


class Term(ABC):
    """
    Abstract base class for terms.

    Subclasses implement ``membership``, ``parameters`` and ``configure``.
    Shapes whose membership is monotonic additionally override
    ``is_monotonic`` and ``tsukamoto``.
    """

    def __init__(self, name: str = "", height: float = 1.0):
        self.name = name
        self.height = height

    @abstractmethod
    def membership(self, x: float) -> float:
        """
        Compute the membership degree of x.

        Args:
            x: Value to evaluate

        Returns:
            Degree of membership scaled by height; NaN when x is NaN
        """

    @abstractmethod
    def parameters(self) -> str:
        """Space-separated parameters accepted back by ``configure``."""

    @abstractmethod
    def configure(self, parameters: str) -> None:
        """
        Configure the term from space-separated parameters.

        Args:
            parameters: Parameter text; an empty text leaves the term unchanged

        Raises:
            ConfigurationError: If fewer parameters than required are given
                or a parameter is not numeric
        """

    def evaluate(
        self, x: Union[float, pd.Series, np.ndarray]
    ) -> Union[float, pd.Series, np.ndarray]:
        """
        Evaluate the membership for scalar or vectorized inputs.

        Args:
            x: Input value(s) to evaluate

        Returns:
            Membership degree(s) of the same kind as the input
        """
        if isinstance(x, pd.Series):
            logger.debug(
                f"Evaluating {self.class_name()} <{self.name}> for pandas Series of length {len(x)}"
            )
            return x.astype(float).apply(self.membership)

        if isinstance(x, np.ndarray):
            logger.debug(
                f"Evaluating {self.class_name()} <{self.name}> for numpy array of shape {x.shape}"
            )
            return np.vectorize(self.membership, otypes=[float])(x.astype(float))

        return self.membership(float(x))

    def is_monotonic(self) -> bool:
        return False

    def tsukamoto(
        self, activation_degree: float, minimum: float, maximum: float
    ) -> float:
        """
        Value z such that membership(z) equals the activation degree.

        Only meaningful for monotonic terms; other terms return NaN.
        """
        return op.nan

    def update_reference(self, engine: Optional["Engine"]) -> None:
        """Bind the term to the engine whose variables it reads."""

    def clone(self) -> "Term":
        return copy.copy(self)

    @classmethod
    def class_name(cls) -> str:
        return cls.__name__

    def _parse_parameters(
        self, parameters: str, required: int, variadic: bool = False
    ) -> list[float]:
        """
        Split and convert parameter text, applying a trailing height.

        Args:
            parameters: Space-separated parameter text
            required: Number of parameters the shape needs
            variadic: Whether the shape accepts any number of parameters,
                in which case the height is never taken from the text

        Returns:
            The converted parameters without the height

        Raises:
            ConfigurationError: If parameters are missing or not numeric
        """
        tokens = op.split_parameters(parameters)
        if len(tokens) < required:
            logger.error(
                f"Invalid {self.class_name()} parameters: expected {required}, got {len(tokens)}"
            )
            raise ConfigurationError(
                message=f"[configuration error] term <{self.class_name()}> requires <{required}> parameters",
                error_code=ErrorCodes.TERM_MISSING_PARAMETERS,
                details={
                    "term": self.class_name(),
                    "required": required,
                    "provided": len(tokens),
                },
            )

        values = []
        for token in tokens:
            try:
                values.append(op.to_float(token))
            except ValueError as e:
                logger.error(f"Invalid {self.class_name()} parameter: {token!r}")
                raise ConfigurationError(
                    message=f"[configuration error] term <{self.class_name()}> received non-numeric parameter <{token}>",
                    error_code=ErrorCodes.TERM_INVALID_PARAMETER,
                    details={"term": self.class_name(), "parameter": token},
                ) from e

        if not variadic and len(values) > required:
            self.height = values[required]
            values = values[:required]
        return values

    def _format_parameters(self, *values: float) -> str:
        result = " ".join(op.format_parameter(value) for value in values)
        if not op.is_eq(self.height, 1.0):
            result += " " + op.format_parameter(self.height)
        return result

    def __str__(self) -> str:
        return f"term: {self.name} {self.class_name()} {self.parameters()}".rstrip()

    def __repr__(self) -> str:
        return f"{self.class_name()}({self.name!r}, {self.parameters()!r})"
