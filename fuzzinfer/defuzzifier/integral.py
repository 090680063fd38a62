"""
Integral defuzzifiers.

The fuzzy set is sampled with the midpoint rule: ``resolution`` points at
``minimum + (i + 0.5) * dx`` with ``dx = (maximum - minimum) / resolution``.
"""

from typing import Optional

import numpy as np

from fuzzinfer import get_logger
from fuzzinfer import operation as op
from fuzzinfer.config.settings import get_engine_settings
from fuzzinfer.defuzzifier.base import Defuzzifier
from fuzzinfer.errors import ConfigurationError, ErrorCodes
from fuzzinfer.logging import should_rate_limit_log
from fuzzinfer.term.aggregated import Aggregated
from fuzzinfer.term.base import Term

logger = get_logger(__name__)


class IntegralDefuzzifier(Defuzzifier):
    """
    Defuzzifier integrating the membership function over the range.

    Attributes:
        resolution: Number of samples; ``EngineSettings.resolution`` when
            not given
    """

    def __init__(self, resolution: Optional[int] = None):
        if resolution is None:
            resolution = get_engine_settings().resolution
        self.resolution = int(resolution)

    def parameters(self) -> str:
        return str(self.resolution)

    def configure(self, parameters: str) -> None:
        values = op.split_parameters(parameters)
        if not values:
            return
        try:
            resolution = int(op.to_float(values[0]))
        except (ValueError, OverflowError) as e:
            raise ConfigurationError(
                message=f"[configuration error] defuzzifier <{self.name}> expects an integer resolution, but found <{values[0]}>",
                error_code=ErrorCodes.DEFUZZ_INVALID_TYPE,
                details={"defuzzifier": self.name, "resolution": values[0]},
            ) from e
        self.resolution = resolution

    def can_defuzzify(self, term: Term, minimum: float, maximum: float) -> bool:
        """
        Whether the range and the set carry anything to integrate.

        False for a non-finite or empty range, an aggregated set without
        activated terms, or a non-positive resolution.
        """
        if not op.is_finite(minimum + maximum) or op.is_eq(minimum, maximum):
            return False
        if self.resolution <= 0:
            return False
        if isinstance(term, Aggregated) and term.is_empty():
            return False

        if maximum - minimum > self.resolution and should_rate_limit_log(
            f"defuzzifier.resolution.{self.name}"
        ):
            logger.warning(
                f"[accuracy warning] resolution ({self.resolution}) is smaller than the "
                f"range ({op.str_value(minimum)}, {op.str_value(maximum)}). Improve the "
                f"accuracy by increasing the resolution to a value greater or equal to "
                f"the range."
            )
        return True

    def samples(
        self, term: Term, minimum: float, maximum: float
    ) -> Optional[tuple[np.ndarray, np.ndarray]]:
        """Sample points and memberships of ``term``, or None if it cannot be defuzzified."""
        if not self.can_defuzzify(term, minimum, maximum):
            return None
        dx = (maximum - minimum) / self.resolution
        x = minimum + (np.arange(self.resolution) + 0.5) * dx
        y = np.array([term.membership(float(value)) for value in x], dtype=float)
        return x, y


class Centroid(IntegralDefuzzifier):
    """Center of gravity: sum(x * y) / sum(y)."""

    def defuzzify(self, term: Term, minimum: float, maximum: float) -> float:
        sampled = self.samples(term, minimum, maximum)
        if sampled is None:
            return op.nan
        x, y = sampled
        area = float(np.sum(y))
        return op.divide(float(np.sum(x * y)), area)


class Bisector(IntegralDefuzzifier):
    """
    Value splitting the area into two halves.

    Samples are taken alternately from both ends, always on the side with
    the smaller accumulated area, until they meet.
    """

    def defuzzify(self, term: Term, minimum: float, maximum: float) -> float:
        if not self.can_defuzzify(term, minimum, maximum):
            return op.nan

        dx = (maximum - minimum) / self.resolution
        left = right = 0
        left_area = right_area = 0.0
        x_left, x_right = minimum, maximum
        for _ in range(self.resolution):
            if op.is_le(left_area, right_area):
                x_left = minimum + (left + 0.5) * dx
                left_area += term.membership(x_left)
                left += 1
            else:
                x_right = maximum - (right + 0.5) * dx
                right_area += term.membership(x_right)
                right += 1

        # Inverse weighted average compensates the side that is ahead
        return op.divide(
            left_area * x_right + right_area * x_left, left_area + right_area
        )


class SmallestOfMaximum(IntegralDefuzzifier):
    """Smallest x at which the membership is highest."""

    def defuzzify(self, term: Term, minimum: float, maximum: float) -> float:
        sampled = self.samples(term, minimum, maximum)
        if sampled is None:
            return op.nan
        y_max = -1.0
        x_smallest = minimum
        for x, y in zip(*sampled):
            if op.is_gt(y, y_max):
                y_max = y
                x_smallest = x
        return float(x_smallest)


class LargestOfMaximum(IntegralDefuzzifier):
    """Largest x at which the membership is highest."""

    def defuzzify(self, term: Term, minimum: float, maximum: float) -> float:
        sampled = self.samples(term, minimum, maximum)
        if sampled is None:
            return op.nan
        y_max = -1.0
        x_largest = maximum
        for x, y in zip(*sampled):
            if op.is_ge(y, y_max):
                y_max = y
                x_largest = x
        return float(x_largest)


class MeanOfMaximum(IntegralDefuzzifier):
    """Midpoint of the first plateau at which the membership is highest."""

    def defuzzify(self, term: Term, minimum: float, maximum: float) -> float:
        sampled = self.samples(term, minimum, maximum)
        if sampled is None:
            return op.nan
        y_max = -1.0
        x_smallest = minimum
        x_largest = maximum
        same_plateau = False
        for x, y in zip(*sampled):
            if op.is_gt(y, y_max):
                y_max = y
                x_smallest = x
                x_largest = x
                same_plateau = True
            elif same_plateau and op.is_eq(y, y_max):
                x_largest = x
            elif op.is_lt(y, y_max):
                same_plateau = False
        return float((x_largest + x_smallest) / 2.0)
