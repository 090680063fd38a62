"""
Defuzzifiers: reduce the fuzzy output of a variable to a crisp value.
"""

from fuzzinfer.defuzzifier.base import Defuzzifier
from fuzzinfer.defuzzifier.integral import (
    Bisector,
    Centroid,
    IntegralDefuzzifier,
    LargestOfMaximum,
    MeanOfMaximum,
    SmallestOfMaximum,
)
from fuzzinfer.defuzzifier.weighted import (
    WeightedAverage,
    WeightedAverageCustom,
    WeightedDefuzzifier,
    WeightedSum,
    WeightedSumCustom,
    WeightedType,
)

__all__ = [
    "Defuzzifier",
    # Integral
    "IntegralDefuzzifier",
    "Centroid",
    "Bisector",
    "SmallestOfMaximum",
    "LargestOfMaximum",
    "MeanOfMaximum",
    # Weighted
    "WeightedDefuzzifier",
    "WeightedType",
    "WeightedAverage",
    "WeightedSum",
    "WeightedAverageCustom",
    "WeightedSumCustom",
]
