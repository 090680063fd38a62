"""
Tests for the smooth and special-purpose terms.
"""

import math

import pytest

from fuzzinfer import operation as op
from fuzzinfer.errors import EvaluationError
from fuzzinfer.term import (
    Bell,
    Binary,
    Constant,
    Cosine,
    Gaussian,
    GaussianProduct,
    Linear,
    PiShape,
    SigmoidDifference,
    SigmoidProduct,
    Spike,
)


class TestSmoothTerms:
    """Tests for bell-shaped terms."""

    def test_gaussian(self):
        """Test the Gaussian at the mean and one deviation away."""
        term = Gaussian("t", 0.0, 1.0)
        assert term.membership(0.0) == pytest.approx(1.0)
        assert term.membership(1.0) == pytest.approx(math.exp(-0.5))
        assert term.membership(-1.0) == pytest.approx(math.exp(-0.5))

    def test_gaussian_product_plateau(self):
        """Test that the product is 1 between the two means."""
        term = GaussianProduct("t", 3.0, 1.0, 7.0, 1.0)
        assert term.membership(5.0) == pytest.approx(1.0)
        assert term.membership(2.0) == pytest.approx(math.exp(-0.5))
        assert term.membership(8.0) == pytest.approx(math.exp(-0.5))

    def test_bell(self):
        """Test the generalized bell at the center and at the width."""
        term = Bell("t", 0.0, 2.0, 3.0)
        assert term.membership(0.0) == pytest.approx(1.0)
        assert term.membership(2.0) == pytest.approx(0.5)
        assert term.membership(-2.0) == pytest.approx(0.5)

    def test_pi_shape(self):
        """Test the plateau and the smooth edges."""
        term = PiShape("t", 0.0, 2.0, 8.0, 10.0)
        assert term.membership(-1.0) == 0.0
        assert term.membership(1.0) == pytest.approx(0.5)
        assert term.membership(5.0) == 1.0
        assert term.membership(9.0) == pytest.approx(0.5)
        assert term.membership(10.0) == 0.0

    def test_cosine(self):
        """Test the raised cosine inside and outside its width."""
        term = Cosine("t", 0.0, 4.0)
        assert term.membership(0.0) == pytest.approx(1.0)
        assert term.membership(1.0) == pytest.approx(0.5)
        assert term.membership(3.0) == 0.0

    def test_spike(self):
        """Test the exponential spike."""
        term = Spike("t", 0.0, 10.0)
        assert term.membership(0.0) == pytest.approx(1.0)
        assert term.membership(1.0) == pytest.approx(math.exp(-1.0))

    def test_sigmoid_difference_and_product(self):
        """Test the two-sigmoid terms at their center."""
        difference = SigmoidDifference("t", 2.0, 5.0, 5.0, 8.0)
        assert difference.membership(5.0) > 0.9
        assert difference.membership(-5.0) < 0.01

        product = SigmoidProduct("t", 2.0, 5.0, -5.0, 8.0)
        assert product.membership(5.0) > 0.9
        assert product.membership(15.0) < 0.01

    @pytest.mark.parametrize(
        "term",
        [
            Gaussian("t", 0.0, 1.0),
            Bell("t", 0.0, 2.0, 3.0),
            Cosine("t", 0.0, 4.0),
            Spike("t", 0.0, 10.0),
            PiShape("t", 0.0, 2.0, 8.0, 10.0),
        ],
    )
    def test_nan_input(self, term):
        """Test that NaN inputs give NaN."""
        assert op.is_nan(term.membership(op.nan))

    def test_configure_round_trip(self):
        """Test that parameters configure an equivalent term."""
        term = GaussianProduct("t", 3.0, 0.5, 7.0, 1.5)
        other = GaussianProduct("t")
        other.configure(term.parameters())
        assert other.parameters() == "3 0.5 7 1.5"
        assert other.membership(2.0) == pytest.approx(term.membership(2.0))


class TestBinary:
    """Tests for the Binary step term."""

    def test_positive_direction(self):
        """Test a step that holds to the right of start."""
        term = Binary("t", 5.0, op.inf)
        assert term.membership(5.0) == 1.0
        assert term.membership(6.0) == 1.0
        assert term.membership(4.0) == 0.0

    def test_negative_direction(self):
        """Test a step that holds to the left of start."""
        term = Binary("t", 5.0, -op.inf)
        assert term.membership(4.0) == 1.0
        assert term.membership(6.0) == 0.0

    def test_configure_with_infinity(self):
        """Test that infinities parse from text."""
        term = Binary("t")
        term.configure("5 -inf")
        assert term.direction == -op.inf
        assert term.parameters() == "5 -inf"


class TestConstantAndLinear:
    """Tests for terms that ignore x."""

    def test_constant(self):
        """Test that a constant is not scaled by height."""
        term = Constant("t", 3.5)
        assert term.membership(0.0) == 3.5
        assert term.membership(100.0) == 3.5
        term.configure("2")
        assert term.membership(0.0) == 2.0
        assert term.parameters() == "2"

    def test_linear_combination(self, two_input_engine):
        """Test coefficients times input values plus a constant."""
        two_input_engine.input_variable("a").value = 1.0
        two_input_engine.input_variable("b").value = 2.0
        term = Linear("t", [2.0, 3.0, 1.0], two_input_engine)
        assert term.membership(op.nan) == pytest.approx(9.0)

    def test_linear_without_constant(self, two_input_engine):
        """Test coefficients matching the number of inputs."""
        two_input_engine.input_variable("a").value = 4.0
        two_input_engine.input_variable("b").value = 0.5
        term = Linear("t")
        term.configure("1 2")
        term.update_reference(two_input_engine)
        assert term.membership(0.0) == pytest.approx(5.0)
        assert term.parameters() == "1 2"

    def test_linear_without_engine(self):
        """Test that evaluating without an engine raises EvaluationError."""
        with pytest.raises(EvaluationError):
            Linear("t", [1.0]).membership(0.0)
