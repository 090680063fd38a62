"""
Basic piecewise-linear terms: Triangle, Trapezoid, Rectangle and Discrete.
"""

import bisect
from typing import Iterable, Optional

from fuzzinfer import get_logger
from fuzzinfer import operation as op
from fuzzinfer.errors import ConfigurationError, ErrorCodes
from fuzzinfer.term.base import Term

logger = get_logger(__name__)


class Triangle(Term):
    """
    Triangular term defined by three vertices [a, b, c].

    The membership degree is calculated as:
    - 0,                 if x < a or x > c
    - h,                 if x = b
    - h (x - a) / (b - a), if a <= x < b
    - h (c - x) / (c - b), if b < x <= c
    """

    def __init__(
        self,
        name: str = "",
        vertex_a: float = op.nan,
        vertex_b: float = op.nan,
        vertex_c: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.vertex_a = vertex_a
        self.vertex_b = vertex_b
        self.vertex_c = vertex_c

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan

        if op.is_lt(x, self.vertex_a) or op.is_gt(x, self.vertex_c):
            return self.height * 0.0
        if op.is_eq(x, self.vertex_b):
            return self.height * 1.0
        if op.is_lt(x, self.vertex_b):
            return self.height * op.divide(
                x - self.vertex_a, self.vertex_b - self.vertex_a
            )
        return self.height * op.divide(self.vertex_c - x, self.vertex_c - self.vertex_b)

    def parameters(self) -> str:
        return self._format_parameters(self.vertex_a, self.vertex_b, self.vertex_c)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        self.vertex_a, self.vertex_b, self.vertex_c = self._parse_parameters(
            parameters, 3
        )


class Trapezoid(Term):
    """
    Trapezoidal term defined by four vertices [a, b, c, d].

    Rises linearly from a to b, stays at the height from b to c and falls
    linearly from c to d.
    """

    def __init__(
        self,
        name: str = "",
        vertex_a: float = op.nan,
        vertex_b: float = op.nan,
        vertex_c: float = op.nan,
        vertex_d: float = op.nan,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.vertex_a = vertex_a
        self.vertex_b = vertex_b
        self.vertex_c = vertex_c
        self.vertex_d = vertex_d

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan

        if op.is_lt(x, self.vertex_a) or op.is_gt(x, self.vertex_d):
            return self.height * 0.0
        if op.is_lt(x, self.vertex_b):
            return self.height * op.minimum(
                1.0, op.divide(x - self.vertex_a, self.vertex_b - self.vertex_a)
            )
        if op.is_le(x, self.vertex_c):
            return self.height * 1.0
        if op.is_lt(x, self.vertex_d):
            return self.height * op.divide(
                self.vertex_d - x, self.vertex_d - self.vertex_c
            )
        return self.height * 0.0

    def parameters(self) -> str:
        return self._format_parameters(
            self.vertex_a, self.vertex_b, self.vertex_c, self.vertex_d
        )

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        (
            self.vertex_a,
            self.vertex_b,
            self.vertex_c,
            self.vertex_d,
        ) = self._parse_parameters(parameters, 4)


class Rectangle(Term):
    """Full height inside [start, end] (inclusive), zero elsewhere."""

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
        if op.is_ge(x, self.start) and op.is_le(x, self.end):
            return self.height * 1.0
        return self.height * 0.0

    def parameters(self) -> str:
        return self._format_parameters(self.start, self.end)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        self.start, self.end = self._parse_parameters(parameters, 2)


class Discrete(Term):
    """
    Piecewise-linear term over a list of (x, y) pairs.

    The pairs must be sorted ascending by x; ``sort()`` restores the order
    after manual edits. Outside the range of the pairs the membership is
    clamped to the first or last y.
    """

    def __init__(
        self,
        name: str = "",
        xy: Optional[Iterable[tuple[float, float]]] = None,
        height: float = 1.0,
    ):
        super().__init__(name, height)
        self.xy: list[tuple[float, float]] = [
            (float(x), float(y)) for x, y in (xy or [])
        ]

    @classmethod
    def from_pairs(
        cls, name: str, values: Iterable[float], height: float = 1.0
    ) -> "Discrete":
        """
        Create a term from a flat sequence ``x0 y0 x1 y1 ...``.

        Raises:
            ConfigurationError: If the sequence has an odd length
        """
        values = list(values)
        if len(values) % 2 != 0:
            raise ConfigurationError(
                message=f"[configuration error] term <Discrete> requires an even number of values, but found <{len(values)}>",
                error_code=ErrorCodes.TERM_INVALID_PARAMETER,
                details={"term": "Discrete", "provided": len(values)},
            )
        return cls(name, list(zip(values[0::2], values[1::2])), height)

    @classmethod
    def discretize(
        cls, term: Term, start: float, end: float, resolution: int = 10
    ) -> "Discrete":
        """Sample a term at ``resolution + 1`` evenly spaced points."""
        dx = (end - start) / resolution
        xy = []
        for i in range(resolution + 1):
            x = start + i * dx
            xy.append((x, term.membership(x)))
        return cls(term.name, xy)

    def x(self) -> list[float]:
        return [pair[0] for pair in self.xy]

    def y(self) -> list[float]:
        return [pair[1] for pair in self.xy]

    def sort(self) -> None:
        self.xy.sort(key=lambda pair: pair[0])

    def membership(self, x: float) -> float:
        if op.is_nan(x):
            return op.nan
        if not self.xy:
            return self.height * 0.0

        first_x, first_y = self.xy[0]
        last_x, last_y = self.xy[-1]
        if op.is_le(x, first_x):
            return self.height * first_y
        if op.is_ge(x, last_x):
            return self.height * last_y

        xs = self.x()
        upper = bisect.bisect_left(xs, x)
        lower = upper - 1
        if op.is_eq(xs[upper], x):
            return self.height * self.xy[upper][1]
        if op.is_eq(xs[lower], x):
            return self.height * self.xy[lower][1]

        return self.height * op.scale(
            x, xs[lower], xs[upper], self.xy[lower][1], self.xy[upper][1]
        )

    def parameters(self) -> str:
        values = [value for pair in self.xy for value in pair]
        return self._format_parameters(*values)

    def configure(self, parameters: str) -> None:
        if not parameters.strip():
            return
        values = self._parse_parameters(parameters, 2, variadic=True)
        if len(values) % 2 != 0:
            self.height = values[-1]
            values = values[:-1]
        else:
            self.height = 1.0
        self.xy = list(zip(values[0::2], values[1::2]))

    def clone(self) -> "Discrete":
        result = super().clone()
        result.xy = list(self.xy)
        return result
