"""
Monotonic edge terms: Concave, Ramp, Sigmoid, SShape and ZShape.

These shapes are strictly monotonic between their parameters, so each
one offers a closed-form inverse through ``tsukamoto``, which Tsukamoto
style defuzzification uses to turn an activation degree back into a
crisp value.
"""

from fuzzinfer import get_logger
from fuzzinfer import operation as op
from fuzzinfer.term.base import Term

logger = get_logger(__name__)

# Residual above which an inverse is reported as inaccurate
TSUKAMOTO_TOLERANCE = 1e-2


class Concave(Term):
    """
    Rational concave curve reaching full height at ``end``.

    When inflection <= end the curve increases towards end; otherwise it
    decreases towards end. At x = inflection the degree is half the height.
    """

    def __init__(
        self,
        name: str = "",
        inflection: float = op.nan,
        end: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.inflection = inflection
        self.end = end

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan
        if op.is_le(self.inflection, self.end):
            if op.is_lt(x, self.end):
                return self.height * op.divide(
                    self.end - self.inflection, 2.0 * self.end - self.inflection - x
                )
        elif op.is_gt(x, self.end):
            return self.height * op.divide(
                self.inflection - self.end, self.inflection - 2.0 * self.end + x
            )
        return self.height * 1.0

    def is_monotonic(self) -> bool:
        return True

    def tsukamoto(
        self, activation_degree: float, minimum: float, maximum: float
    ) -> float:
        i, e = self.inflection, self.end
        z = (i - e) * op.divide(self.height, activation_degree) + 2.0 * e - i
        _check_inverse(self, activation_degree, z)
        return z

    def parameters(self) -> str:
        return self._format_parameters(self.inflection, self.end)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        self.inflection, self.end = self._parse_parameters(parameters, 2)


class Ramp(Term):
    """
    Linear ramp from 0 at ``start`` to full height at ``end``.

    The ramp is increasing when start < end and decreasing when
    start > end; when both are equal the degree is always 0.
    """

    def __init__(
        self,
        name: str = "",
        start: float = op.nan,
        end: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.start = start
        self.end = end

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan

        if op.is_eq(self.start, self.end):
            return self.height * 0.0

        if op.is_lt(self.start, self.end):
            if op.is_le(x, self.start):
                return self.height * 0.0
            if op.is_ge(x, self.end):
                return self.height * 1.0
            return self.height * (x - self.start) / (self.end - self.start)

        if op.is_ge(x, self.start):
            return self.height * 0.0
        if op.is_le(x, self.end):
            return self.height * 1.0
        return self.height * (self.start - x) / (self.start - self.end)

    def is_monotonic(self) -> bool:
        return True

    def tsukamoto(
        self, activation_degree: float, minimum: float, maximum: float
    ) -> float:
        w = op.divide(activation_degree, self.height)
        z = op.scale(w, 0.0, 1.0, self.start, self.end)
        _check_inverse(self, activation_degree, z)
        return z

    def parameters(self) -> str:
        return self._format_parameters(self.start, self.end)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        self.start, self.end = self._parse_parameters(parameters, 2)


class Sigmoid(Term):
    """Logistic curve h / (1 + exp(-slope (x - inflection)))."""

    def __init__(
        self,
        name: str = "",
        inflection: float = op.nan,
        slope: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.inflection = inflection
        self.slope = slope

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan
        return self.height * op.divide(
            1.0, 1.0 + op.exp(-self.slope * (x - self.inflection))
        )

    def is_monotonic(self) -> bool:
        return True

    def tsukamoto(
        self, activation_degree: float, minimum: float, maximum: float
    ) -> float:
        w = op.divide(activation_degree, self.height)

        # The curve only reaches 0 and 1 asymptotically
        if op.is_eq(w, 1.0):
            z = maximum if op.is_ge(self.slope, 0.0) else minimum
        elif op.is_eq(w, 0.0):
            z = minimum if op.is_ge(self.slope, 0.0) else maximum
        else:
            z = self.inflection + op.divide(
                op.log(op.divide(1.0, w) - 1.0), -self.slope
            )
            _check_inverse(self, activation_degree, z)
        return z

    def parameters(self) -> str:
        return self._format_parameters(self.inflection, self.slope)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        self.inflection, self.slope = self._parse_parameters(parameters, 2)


class SShape(Term):
    """
    Smooth quadratic rise from 0 at ``start`` to full height at ``end``,
    with the inflection at the midpoint.
    """

    def __init__(
        self,
        name: str = "",
        start: float = op.nan,
        end: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.start = start
        self.end = end

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan

        average = (self.start + self.end) / 2.0
        difference = self.end - self.start

        if op.is_le(x, self.start):
            return self.height * 0.0
        if op.is_le(x, average):
            return self.height * 2.0 * op.divide(x - self.start, difference) ** 2
        if op.is_lt(x, self.end):
            return self.height * (
                1.0 - 2.0 * op.divide(x - self.end, difference) ** 2
            )
        return self.height * 1.0

    def is_monotonic(self) -> bool:
        return True

    def tsukamoto(
        self, activation_degree: float, minimum: float, maximum: float
    ) -> float:
        w = op.divide(activation_degree, self.height)
        difference_squared = (self.end - self.start) ** 2

        lower = self.start + op.sqrt(w * difference_squared / 2.0)
        upper = self.end - op.sqrt((1.0 - w) * difference_squared / 2.0)
        z = _closest_root(self, activation_degree, lower, upper)
        _check_inverse(self, activation_degree, z)
        return z

    def parameters(self) -> str:
        return self._format_parameters(self.start, self.end)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        self.start, self.end = self._parse_parameters(parameters, 2)


class ZShape(Term):
    """
    Smooth quadratic fall from full height at ``start`` to 0 at ``end``,
    with the inflection at the midpoint.
    """

    def __init__(
        self,
        name: str = "",
        start: float = op.nan,
        end: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.start = start
        self.end = end

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan

        average = (self.start + self.end) / 2.0
        difference = self.end - self.start

        if op.is_le(x, self.start):
            return self.height * 1.0
        if op.is_le(x, average):
            return self.height * (
                1.0 - 2.0 * op.divide(x - self.start, difference) ** 2
            )
        if op.is_lt(x, self.end):
            return self.height * 2.0 * op.divide(x - self.end, difference) ** 2
        return self.height * 0.0

    def is_monotonic(self) -> bool:
        return True

    def tsukamoto(
        self, activation_degree: float, minimum: float, maximum: float
    ) -> float:
        w = op.divide(activation_degree, self.height)
        difference_squared = (self.end - self.start) ** 2

        lower = self.start + op.sqrt((1.0 - w) * difference_squared / 2.0)
        upper = self.end - op.sqrt(w * difference_squared / 2.0)
        z = _closest_root(self, activation_degree, lower, upper)
        _check_inverse(self, activation_degree, z)
        return z

    def parameters(self) -> str:
        return self._format_parameters(self.start, self.end)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        self.start, self.end = self._parse_parameters(parameters, 2)


def _closest_root(term: Term, activation_degree: float, a: float, b: float) -> float:
    """Pick the candidate whose membership is closer to the activation degree."""
    residual_a = abs(activation_degree - term.membership(a))
    residual_b = abs(activation_degree - term.membership(b))
    if op.is_nan(residual_b) or residual_a <= residual_b:
        return a
    return b


def _check_inverse(term: Term, activation_degree: float, z: float) -> None:
    residual = abs(activation_degree - term.membership(z))
    if residual > TSUKAMOTO_TOLERANCE:
        logger.debug(
            f"Tsukamoto inverse of {term.class_name()} <{term.name}> is inaccurate: "
            f"w={op.str_value(activation_degree)}, z={op.str_value(z)}, "
            f"f(z)={op.str_value(term.membership(z))}"
        )
