"""
S-norms used for disjunction and aggregation.
"""

from fuzzinfer import operation as op
from fuzzinfer.norm.base import SNorm


class Maximum(SNorm):
    """max(a, b)"""

    def compute(self, a: float, b: float) -> float:
        return op.maximum(a, b)


class AlgebraicSum(SNorm):
    """a + b - a * b"""

    def compute(self, a: float, b: float) -> float:
        return a + b - (a * b)


class BoundedSum(SNorm):
    """min(1, a + b)"""

    def compute(self, a: float, b: float) -> float:
        return op.minimum(1.0, a + b)


class DrasticSum(SNorm):
    """max(a, b) if min(a, b) == 0, otherwise 1"""

    def compute(self, a: float, b: float) -> float:
        if op.is_eq(op.minimum(a, b), 0.0):
            return op.maximum(a, b)
        return 1.0


class EinsteinSum(SNorm):
    """(a + b) / (1 + a * b)"""

    def compute(self, a: float, b: float) -> float:
        return op.divide(a + b, 1.0 + a * b)


class HamacherSum(SNorm):
    """(a + b - 2 * a * b) / (1 - a * b), defined as 1 when a = b = 1"""

    def compute(self, a: float, b: float) -> float:
        if op.is_eq(a * b, 1.0):
            return 1.0
        return op.divide(a + b - 2.0 * a * b, 1.0 - a * b)


class NilpotentMaximum(SNorm):
    """max(a, b) if a + b < 1, otherwise 1"""

    def compute(self, a: float, b: float) -> float:
        if op.is_lt(a + b, 1.0):
            return op.maximum(a, b)
        return 1.0


class NormalizedSum(SNorm):
    """(a + b) / max(1, a + b)"""

    def compute(self, a: float, b: float) -> float:
        return op.divide(a + b, op.maximum(1.0, a + b))


class UnboundedSum(SNorm):
    """a + b, which may exceed 1"""

    def compute(self, a: float, b: float) -> float:
        return a + b
