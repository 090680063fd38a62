"""
Behavior shared by every membership shape.
"""

import numpy as np
import pytest

from fuzzinfer import operation as op
from fuzzinfer.term import (
    Bell,
    Binary,
    Concave,
    Cosine,
    Discrete,
    Gaussian,
    GaussianProduct,
    PiShape,
    Ramp,
    Rectangle,
    Sigmoid,
    SigmoidDifference,
    SigmoidProduct,
    Spike,
    SShape,
    Trapezoid,
    Triangle,
    ZShape,
)

SHAPES = [
    (Triangle, "0 5 10"),
    (Trapezoid, "0 2 8 10"),
    (Rectangle, "2 8"),
    (Discrete, "0 0 5 1 10 0"),
    (Bell, "5 2 3"),
    (Gaussian, "5 2"),
    (GaussianProduct, "4 1 6 1"),
    (PiShape, "0 4 6 10"),
    (Cosine, "5 10"),
    (Ramp, "0 10"),
    (Sigmoid, "5 1"),
    (SShape, "0 10"),
    (ZShape, "0 10"),
    (Concave, "5 10"),
    (Spike, "5 10"),
    (Binary, "5 inf"),
    (SigmoidDifference, "4 2 2 6"),
    (SigmoidProduct, "4 2 -2 6"),
]

SAMPLES = np.linspace(-2.0, 12.0, 29)


def _ids(shapes):
    return [shape.__name__ for shape, _ in shapes]


class TestShapeCatalog:
    """Tests that hold for all membership shapes."""

    @pytest.mark.parametrize("shape,parameters", SHAPES, ids=_ids(SHAPES))
    def test_nan_input(self, shape, parameters):
        """Test that a NaN input gives a NaN degree."""
        term = shape("t")
        term.configure(parameters)
        assert op.is_nan(term.membership(op.nan))

    @pytest.mark.parametrize("shape,parameters", SHAPES, ids=_ids(SHAPES))
    def test_configure_from_parameters(self, shape, parameters):
        """Test that a term rebuilt from its parameters has the same memberships."""
        term = shape("t")
        term.configure(f"{parameters} 0.75")
        assert term.height == 0.75

        rebuilt = shape("t")
        rebuilt.configure(term.parameters())
        assert rebuilt.height == 0.75
        assert rebuilt.parameters() == term.parameters()
        for x in SAMPLES:
            assert rebuilt.membership(x) == pytest.approx(term.membership(x)), x

    @pytest.mark.parametrize("shape,parameters", SHAPES, ids=_ids(SHAPES))
    def test_height_bounds_membership(self, shape, parameters):
        """Test that degrees stay within [0, height]."""
        term = shape("t")
        term.configure(f"{parameters} 0.75")
        for x in SAMPLES:
            assert 0.0 <= term.membership(x) <= 0.75 + 1e-9, x
