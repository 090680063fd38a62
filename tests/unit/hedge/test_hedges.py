"""
Tests for hedges.
"""

import pytest

from fuzzinfer.errors import ParseError
from fuzzinfer.hedge import Any, Extremely, HedgeFunction, Not, Seldom, Somewhat, Very


class TestHedges:
    """Tests for the built-in hedges."""

    @pytest.mark.parametrize(
        "hedge,x,expected",
        [
            (Any(), 0.3, 1.0),
            (Extremely(), 0.5, 0.125),
            (Not(), 0.3, 0.7),
            (Seldom(), 0.5, 0.5),
            (Seldom(), 0.18, 0.3),
            (Seldom(), 0.82, 0.7),
            (Somewhat(), 0.25, 0.5),
            (Very(), 0.5, 0.25),
        ],
    )
    def test_hedge(self, hedge, x, expected):
        """Test each hedge at a known point."""
        assert hedge.hedge(x) == pytest.approx(expected)
        assert hedge(x) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "hedge,name",
        [
            (Any(), "any"),
            (Extremely(), "extremely"),
            (Not(), "not"),
            (Seldom(), "seldom"),
            (Somewhat(), "somewhat"),
            (Very(), "very"),
        ],
    )
    def test_names(self, hedge, name):
        """Test that hedge names are the lower-cased class names."""
        assert hedge.name == name

    def test_seldom_is_continuous(self):
        """Test that both branches of seldom agree at 0.5."""
        hedge = Seldom()
        assert hedge.hedge(0.5) == pytest.approx(hedge.hedge(0.5 + 1e-9), abs=1e-6)


class TestHedgeFunction:
    """Tests for formula hedges."""

    def test_formula(self):
        """Test a hedge defined by a formula in x."""
        hedge = HedgeFunction("x ^ 4", name="quartic")
        assert hedge.name == "quartic"
        assert hedge.hedge(0.5) == pytest.approx(0.0625)

    def test_formula_setter(self):
        """Test that assigning a formula reloads it."""
        hedge = HedgeFunction("x")
        hedge.formula = "1 - x"
        assert hedge.hedge(0.25) == pytest.approx(0.75)
        assert hedge.formula == "1 - x"

    def test_invalid_formula(self):
        """Test that a malformed formula raises ParseError."""
        with pytest.raises(ParseError):
            HedgeFunction("(x")

    def test_clone_is_independent(self):
        """Test that a clone keeps its own formula."""
        hedge = HedgeFunction("x ^ 2")
        clone = hedge.clone()
        hedge.formula = "x ^ 3"
        assert clone.hedge(0.5) == pytest.approx(0.25)
        assert hedge.hedge(0.5) == pytest.approx(0.125)
