"""
T-norms used for conjunction and implication.
"""

from fuzzinfer import operation as op
from fuzzinfer.norm.base import TNorm


class Minimum(TNorm):
    """min(a, b)"""

    def compute(self, a: float, b: float) -> float:
        return op.minimum(a, b)


class AlgebraicProduct(TNorm):
    """a * b"""

    def compute(self, a: float, b: float) -> float:
        return a * b


class BoundedDifference(TNorm):
    """max(0, a + b - 1)"""

    def compute(self, a: float, b: float) -> float:
        return op.maximum(0.0, a + b - 1.0)


class DrasticProduct(TNorm):
    """min(a, b) if max(a, b) == 1, otherwise 0"""

    def compute(self, a: float, b: float) -> float:
        if op.is_eq(op.maximum(a, b), 1.0):
            return op.minimum(a, b)
        return 0.0


class EinsteinProduct(TNorm):
    """(a * b) / (2 - (a + b - a * b))"""

    def compute(self, a: float, b: float) -> float:
        return op.divide(a * b, 2.0 - (a + b - a * b))


class HamacherProduct(TNorm):
    """(a * b) / (a + b - a * b), defined as 0 when a = b = 0"""

    def compute(self, a: float, b: float) -> float:
        if op.is_eq(a + b, 0.0):
            return 0.0
        return op.divide(a * b, a + b - a * b)


class NilpotentMinimum(TNorm):
    """min(a, b) if a + b > 1, otherwise 0"""

    def compute(self, a: float, b: float) -> float:
        if op.is_gt(a + b, 1.0):
            return op.minimum(a, b)
        return 0.0
