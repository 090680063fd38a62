"""
Tests for t-norms and s-norms.
"""

import pytest

from fuzzinfer import operation as op
from fuzzinfer.errors import ParseError
from fuzzinfer.norm import (
    AlgebraicProduct,
    AlgebraicSum,
    BoundedDifference,
    BoundedSum,
    DrasticProduct,
    DrasticSum,
    EinsteinProduct,
    EinsteinSum,
    HamacherProduct,
    HamacherSum,
    Maximum,
    Minimum,
    NilpotentMaximum,
    NilpotentMinimum,
    NormalizedSum,
    SNorm,
    SNormFunction,
    TNorm,
    TNormFunction,
    UnboundedSum,
)

TNORMS = [
    AlgebraicProduct,
    BoundedDifference,
    DrasticProduct,
    EinsteinProduct,
    HamacherProduct,
    Minimum,
    NilpotentMinimum,
]

SNORMS = [
    AlgebraicSum,
    BoundedSum,
    DrasticSum,
    EinsteinSum,
    HamacherSum,
    Maximum,
    NilpotentMaximum,
    NormalizedSum,
]

GRID = [0.0, 0.25, 0.5, 0.75, 1.0]


class TestTNorms:
    """Tests for conjunction and implication operators."""

    @pytest.mark.parametrize(
        "norm,expected",
        [
            (Minimum(), 0.4),
            (AlgebraicProduct(), 0.24),
            (BoundedDifference(), 0.0),
            (DrasticProduct(), 0.0),
            (EinsteinProduct(), 0.24 / (2.0 - (1.0 - 0.24))),
            (HamacherProduct(), 0.24 / (1.0 - 0.24)),
            (NilpotentMinimum(), 0.0),
        ],
    )
    def test_known_values(self, norm, expected):
        """Test each t-norm at (0.4, 0.6)."""
        assert norm.compute(0.4, 0.6) == pytest.approx(expected)

    @pytest.mark.parametrize("norm_class", TNORMS)
    def test_identity_and_annihilator(self, norm_class):
        """Test that 1 is the identity and 0 annihilates."""
        norm = norm_class()
        for a in GRID:
            assert norm.compute(a, 1.0) == pytest.approx(a)
            assert norm.compute(a, 0.0) == pytest.approx(0.0)

    @pytest.mark.parametrize("norm_class", TNORMS)
    def test_commutative_and_bounded(self, norm_class):
        """Test commutativity and that results never exceed min(a, b)."""
        norm = norm_class()
        for a in GRID:
            for b in GRID:
                assert norm.compute(a, b) == pytest.approx(norm.compute(b, a))
                assert op.is_le(norm.compute(a, b), min(a, b))

    def test_nilpotent_minimum_above_one(self):
        """Test that NilpotentMinimum keeps the minimum when a + b > 1."""
        assert NilpotentMinimum().compute(0.7, 0.6) == 0.6

    def test_hamacher_product_at_zero(self):
        """Test that HamacherProduct is 0 when both degrees are 0."""
        assert HamacherProduct().compute(0.0, 0.0) == 0.0

    def test_minimum_propagates_nan(self):
        """Test that NaN degrees propagate through Minimum."""
        assert op.is_nan(Minimum().compute(op.nan, 0.5))


class TestSNorms:
    """Tests for disjunction and aggregation operators."""

    @pytest.mark.parametrize(
        "norm,expected",
        [
            (Maximum(), 0.6),
            (AlgebraicSum(), 1.0 - 0.6 * 0.4),
            (BoundedSum(), 1.0),
            (DrasticSum(), 1.0),
            (EinsteinSum(), 1.0 / (1.0 + 0.24)),
            (HamacherSum(), (1.0 - 0.48) / (1.0 - 0.24)),
            (NilpotentMaximum(), 1.0),
            (NormalizedSum(), 1.0),
            (UnboundedSum(), 1.0),
        ],
    )
    def test_known_values(self, norm, expected):
        """Test each s-norm at (0.4, 0.6)."""
        assert norm.compute(0.4, 0.6) == pytest.approx(expected)

    @pytest.mark.parametrize("norm_class", SNORMS)
    def test_identity_and_annihilator(self, norm_class):
        """Test that 0 is the identity and 1 annihilates."""
        norm = norm_class()
        for a in GRID:
            assert norm.compute(a, 0.0) == pytest.approx(a)
            assert norm.compute(a, 1.0) == pytest.approx(1.0)

    @pytest.mark.parametrize("norm_class", SNORMS)
    def test_commutative_and_bounded(self, norm_class):
        """Test commutativity and that results are never below max(a, b)."""
        norm = norm_class()
        for a in GRID:
            for b in GRID:
                assert norm.compute(a, b) == pytest.approx(norm.compute(b, a))
                assert op.is_ge(norm.compute(a, b), max(a, b))

    def test_nilpotent_maximum_below_one(self):
        """Test that NilpotentMaximum keeps the maximum when a + b < 1."""
        assert NilpotentMaximum().compute(0.2, 0.3) == 0.3

    def test_unbounded_sum_exceeds_one(self):
        """Test that UnboundedSum is not clamped."""
        assert UnboundedSum().compute(0.8, 0.9) == pytest.approx(1.7)

    def test_normalized_sum_below_one(self):
        """Test that NormalizedSum is the plain sum when it is at most 1."""
        assert NormalizedSum().compute(0.2, 0.3) == pytest.approx(0.5)

    def test_hamacher_sum_at_one(self):
        """Test that HamacherSum is 1 when both degrees are 1."""
        assert HamacherSum().compute(1.0, 1.0) == 1.0


class TestNormBase:
    """Tests for behavior shared by every norm."""

    def test_kinds(self):
        """Test the t-norm and s-norm class hierarchy."""
        assert isinstance(Minimum(), TNorm)
        assert isinstance(Maximum(), SNorm)
        assert not isinstance(Maximum(), TNorm)

    def test_name_and_equality(self):
        """Test that norms are named and compared by class."""
        assert Minimum().name == "Minimum"
        assert Minimum() == Minimum()
        assert Minimum() != Maximum()
        assert repr(AlgebraicSum()) == "AlgebraicSum()"

    def test_callable(self):
        """Test that norms can be called like functions."""
        assert AlgebraicProduct()(0.5, 0.5) == pytest.approx(0.25)

    def test_clone(self):
        """Test that clones are equal but distinct."""
        norm = EinsteinSum()
        clone = norm.clone()
        assert clone == norm
        assert clone is not norm


class TestNormFunctions:
    """Tests for norms given by a formula in a and b."""

    def test_tnorm_function(self):
        """Test a t-norm formula."""
        norm = TNormFunction("a * b")
        assert norm.compute(0.5, 0.4) == pytest.approx(0.2)
        assert isinstance(norm, TNorm)

    def test_snorm_function(self):
        """Test an s-norm formula with a function call."""
        norm = SNormFunction("fmod(a + b, 1)")
        assert norm.compute(0.5, 0.75) == pytest.approx(0.25)
        assert isinstance(norm, SNorm)

    def test_formula_setter_reloads(self):
        """Test that assigning a formula parses it."""
        norm = TNormFunction("a")
        norm.formula = "b"
        assert norm.compute(0.1, 0.9) == pytest.approx(0.9)

    def test_invalid_formula(self):
        """Test that malformed formulas raise ParseError."""
        with pytest.raises(ParseError):
            TNormFunction("(a * b")

    def test_clone_is_independent(self):
        """Test that a clone keeps its formula after the original changes."""
        norm = SNormFunction("a + b")
        clone = norm.clone()
        norm.formula = "a"
        assert clone.compute(0.25, 0.5) == pytest.approx(0.75)
        assert clone == SNormFunction("a + b")
