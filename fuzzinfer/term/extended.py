"""
Extended smooth and step terms.

Bell, Binary, Cosine, Gaussian, GaussianProduct, PiShape,
SigmoidDifference, SigmoidProduct and Spike. Formulas follow the usual
fuzzy toolbox definitions (gbellmf, gaussmf, gauss2mf, pimf, dsigmf,
psigmf) and every result is scaled by the term height.
"""

import math

from fuzzinfer import operation as op
from fuzzinfer.term.base import Term


class Bell(Term):
    """Generalized bell: h / (1 + |(x - center) / width|^(2 slope))."""

    def __init__(
        self,
        name: str = "",
        center: float = op.nan,
        width: float = op.nan,
        slope: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.center = center
        self.width = width
        self.slope = slope

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan
        base = abs(op.divide(x - self.center, self.width))
        return self.height * op.divide(1.0, 1.0 + op.power(base, 2.0 * self.slope))

    def parameters(self) -> str:
        return self._format_parameters(self.center, self.width, self.slope)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        self.center, self.width, self.slope = self._parse_parameters(parameters, 3)


class Binary(Term):
    """
    Step function at ``start``.

    A positive direction (typically +inf) gives full height for x >= start;
    a negative direction (typically -inf) gives full height for x <= start.
    """

    def __init__(
        self,
        name: str = "",
        start: float = op.nan,
        direction: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.start = start
        self.direction = direction

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan
        if self.direction > 0 and op.is_ge(x, self.start):
            return self.height * 1.0
        if self.direction < 0 and op.is_le(x, self.start):
            return self.height * 1.0
        return self.height * 0.0

    def parameters(self) -> str:
        return self._format_parameters(self.start, self.direction)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        self.start, self.direction = self._parse_parameters(parameters, 2)


class Cosine(Term):
    """Raised cosine centered at ``center``, zero outside center +/- width / 2."""

    def __init__(
        self,
        name: str = "",
        center: float = op.nan,
        width: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.center = center
        self.width = width

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan
        if op.is_lt(x, self.center - self.width / 2.0) or op.is_gt(
            x, self.center + self.width / 2.0
        ):
            return self.height * 0.0
        angle = op.divide(2.0, self.width) * math.pi * (x - self.center)
        if not op.is_finite(angle):
            return self.height * 1.0 if op.is_eq(x, self.center) else op.nan
        return self.height * 0.5 * (1.0 + math.cos(angle))

    def parameters(self) -> str:
        return self._format_parameters(self.center, self.width)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        self.center, self.width = self._parse_parameters(parameters, 2)


class Gaussian(Term):
    """h exp(-(x - mean)^2 / (2 standard_deviation^2))."""

    def __init__(
        self,
        name: str = "",
        mean: float = op.nan,
        standard_deviation: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.mean = mean
        self.standard_deviation = standard_deviation

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan
        return self.height * _gaussian(x, self.mean, self.standard_deviation)

    def parameters(self) -> str:
        return self._format_parameters(self.mean, self.standard_deviation)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        self.mean, self.standard_deviation = self._parse_parameters(parameters, 2)


class GaussianProduct(Term):
    """
    Two-sided Gaussian.

    Uses the left Gaussian for x <= mean_a, the right Gaussian for
    x >= mean_b and full height in between.
    """

    def __init__(
        self,
        name: str = "",
        mean_a: float = op.nan,
        standard_deviation_a: float = op.nan,
        mean_b: float = op.nan,
        standard_deviation_b: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.mean_a = mean_a
        self.standard_deviation_a = standard_deviation_a
        self.mean_b = mean_b
        self.standard_deviation_b = standard_deviation_b

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan
        a = 1.0
        if op.is_le(x, self.mean_a):
            a = _gaussian(x, self.mean_a, self.standard_deviation_a)
        b = 1.0
        if op.is_ge(x, self.mean_b):
            b = _gaussian(x, self.mean_b, self.standard_deviation_b)
        return self.height * a * b

    def parameters(self) -> str:
        return self._format_parameters(
            self.mean_a,
            self.standard_deviation_a,
            self.mean_b,
            self.standard_deviation_b,
        )

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        (
            self.mean_a,
            self.standard_deviation_a,
            self.mean_b,
            self.standard_deviation_b,
        ) = self._parse_parameters(parameters, 4)


class PiShape(Term):
    """S-shaped rise from bottom_left to top_left, Z-shaped fall from top_right to bottom_right."""

    def __init__(
        self,
        name: str = "",
        bottom_left: float = op.nan,
        top_left: float = op.nan,
        top_right: float = op.nan,
        bottom_right: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.bottom_left = bottom_left
        self.top_left = top_left
        self.top_right = top_right
        self.bottom_right = bottom_right

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan

        a_b_average = (self.bottom_left + self.top_left) / 2.0
        b_minus_a = self.top_left - self.bottom_left
        c_d_average = (self.top_right + self.bottom_right) / 2.0
        d_minus_c = self.bottom_right - self.top_right

        if op.is_le(x, self.bottom_left):
            return self.height * 0.0
        if op.is_le(x, a_b_average):
            return self.height * 2.0 * op.divide(x - self.bottom_left, b_minus_a) ** 2
        if op.is_lt(x, self.top_left):
            return self.height * (
                1.0 - 2.0 * op.divide(x - self.top_left, b_minus_a) ** 2
            )
        if op.is_le(x, self.top_right):
            return self.height * 1.0
        if op.is_le(x, c_d_average):
            return self.height * (
                1.0 - 2.0 * op.divide(x - self.top_right, d_minus_c) ** 2
            )
        if op.is_lt(x, self.bottom_right):
            return self.height * 2.0 * op.divide(x - self.bottom_right, d_minus_c) ** 2
        return self.height * 0.0

    def parameters(self) -> str:
        return self._format_parameters(
            self.bottom_left, self.top_left, self.top_right, self.bottom_right
        )

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        (
            self.bottom_left,
            self.top_left,
            self.top_right,
            self.bottom_right,
        ) = self._parse_parameters(parameters, 4)


class SigmoidDifference(Term):
    """h |sigmoid(rising, left) - sigmoid(falling, right)|."""

    def __init__(
        self,
        name: str = "",
        left: float = op.nan,
        rising: float = op.nan,
        falling: float = op.nan,
        right: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.left = left
        self.rising = rising
        self.falling = falling
        self.right = right

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan
        a = op.divide(1.0, 1.0 + op.exp(-self.rising * (x - self.left)))
        b = op.divide(1.0, 1.0 + op.exp(-self.falling * (x - self.right)))
        return self.height * abs(a - b)

    def parameters(self) -> str:
        return self._format_parameters(self.left, self.rising, self.falling, self.right)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        (
            self.left,
            self.rising,
            self.falling,
            self.right,
        ) = self._parse_parameters(parameters, 4)


class SigmoidProduct(Term):
    """h sigmoid(rising, left) sigmoid(falling, right)."""

    def __init__(
        self,
        name: str = "",
        left: float = op.nan,
        rising: float = op.nan,
        falling: float = op.nan,
        right: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.left = left
        self.rising = rising
        self.falling = falling
        self.right = right

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan
        a = 1.0 + op.exp(-self.rising * (x - self.left))
        b = 1.0 + op.exp(-self.falling * (x - self.right))
        return self.height * op.divide(1.0, op.multiply(a, b))

    def parameters(self) -> str:
        return self._format_parameters(self.left, self.rising, self.falling, self.right)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        (
            self.left,
            self.rising,
            self.falling,
            self.right,
        ) = self._parse_parameters(parameters, 4)


class Spike(Term):
    """h exp(-|10 / width (x - center)|)."""

    def __init__(
        self,
        name: str = "",
        center: float = op.nan,
        width: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.center = center
        self.width = width

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan
        return self.height * op.exp(
            -abs(op.multiply(op.divide(10.0, self.width), x - self.center))
        )

    def parameters(self) -> str:
        return self._format_parameters(self.center, self.width)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        self.center, self.width = self._parse_parameters(parameters, 2)


def _gaussian(x: float, mean: float, standard_deviation: float) -> float:
    return op.exp(
        op.divide(-((x - mean) ** 2), 2.0 * standard_deviation * standard_deviation)
    )
