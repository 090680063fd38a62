"""
Registries of the named components of an engine.

Every component an engine description refers to by name (terms, norms,
hedges, defuzzifiers, activation methods and formula elements) is
constructed through one of the registries below. A ``FactoryManager``
bundles one of each; ``FactoryManager.default()`` is shared, while
``FactoryManager()`` gives an independent set that can be extended
without affecting other engines.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, Optional

from fuzzinfer import get_logger
from fuzzinfer.activation import (
    Activation,
    First,
    General,
    Highest,
    Last,
    Lowest,
    Proportional,
    Threshold,
)
from fuzzinfer.defuzzifier import (
    Bisector,
    Centroid,
    Defuzzifier,
    LargestOfMaximum,
    MeanOfMaximum,
    SmallestOfMaximum,
    WeightedAverage,
    WeightedAverageCustom,
    WeightedSum,
    WeightedSumCustom,
)
from fuzzinfer.hedge import Any, Extremely, Hedge, Not, Seldom, Somewhat, Very
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
from fuzzinfer.registry import Registry
from fuzzinfer.term import (
    Bell,
    Binary,
    Concave,
    Constant,
    Cosine,
    Discrete,
    Function,
    FunctionFactory,
    Gaussian,
    GaussianProduct,
    Linear,
    PiShape,
    Ramp,
    Rectangle,
    Sigmoid,
    SigmoidDifference,
    SigmoidProduct,
    Spike,
    SShape,
    Term,
    Trapezoid,
    Triangle,
    ZShape,
    default_function_factory,
)

if TYPE_CHECKING:
    from fuzzinfer.engine import Engine

logger = get_logger(__name__)


def _register_classes(registry: Registry, classes: tuple, name=None) -> None:
    for cls in classes:
        registry.register(name(cls) if name else cls.__name__, cls)


class TermFactory(Registry[Term]):
    """Registry of term types by class name."""

    kind = "term"

    def __init__(self) -> None:
        super().__init__()
        _register_classes(
            self,
            (
                Bell,
                Binary,
                Concave,
                Constant,
                Cosine,
                Discrete,
                Function,
                Gaussian,
                GaussianProduct,
                Linear,
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
            ),
        )

    def create(
        self,
        type_name: str,
        parameters: str = "",
        name: str = "",
        engine: Optional["Engine"] = None,
    ) -> Term:
        """
        Construct and configure a term.

        Args:
            type_name: Registered term type, e.g. ``Triangle``
            parameters: Parameters in the term's text form
            name: Name of the term
            engine: Engine the term reads variables from (Linear, Function)

        Returns:
            Configured term

        Raises:
            ConfigurationError: If the type is unknown or the parameters
                are invalid
        """
        term = self.construct(type_name)
        term.name = name
        term.update_reference(engine)
        if parameters.strip():
            term.configure(parameters)
        return term


class TNormFactory(Registry[TNorm]):
    """Registry of t-norms by class name."""

    kind = "tnorm"

    def __init__(self) -> None:
        super().__init__()
        _register_classes(
            self,
            (
                AlgebraicProduct,
                BoundedDifference,
                DrasticProduct,
                EinsteinProduct,
                HamacherProduct,
                Minimum,
                NilpotentMinimum,
                TNormFunction,
            ),
        )


class SNormFactory(Registry[SNorm]):
    """Registry of s-norms by class name."""

    kind = "snorm"

    def __init__(self) -> None:
        super().__init__()
        _register_classes(
            self,
            (
                AlgebraicSum,
                BoundedSum,
                DrasticSum,
                EinsteinSum,
                HamacherSum,
                Maximum,
                NilpotentMaximum,
                NormalizedSum,
                UnboundedSum,
                SNormFunction,
            ),
        )


class HedgeFactory(Registry[Hedge]):
    """Registry of hedges by the name used in rules (``very``, ``not``...)."""

    kind = "hedge"

    def __init__(self) -> None:
        super().__init__()
        _register_classes(
            self,
            (Any, Extremely, Not, Seldom, Somewhat, Very),
            name=lambda cls: cls.__name__.lower(),
        )


class DefuzzifierFactory(Registry[Defuzzifier]):
    """Registry of defuzzifiers by class name."""

    kind = "defuzzifier"

    def __init__(self) -> None:
        super().__init__()
        _register_classes(
            self,
            (
                Bisector,
                Centroid,
                LargestOfMaximum,
                MeanOfMaximum,
                SmallestOfMaximum,
                WeightedAverage,
                WeightedAverageCustom,
                WeightedSum,
                WeightedSumCustom,
            ),
        )

    def create(self, name: str, parameters: str = "") -> Defuzzifier:
        """Construct a defuzzifier configured with ``parameters`` (resolution or type)."""
        defuzzifier = self.construct(name)
        if parameters.strip():
            defuzzifier.configure(parameters)
        return defuzzifier


class ActivationFactory(Registry[Activation]):
    """Registry of activation methods by class name."""

    kind = "activation"

    def __init__(self) -> None:
        super().__init__()
        _register_classes(
            self,
            (First, General, Highest, Last, Lowest, Proportional, Threshold),
        )

    def create(self, name: str, parameters: str = "") -> Activation:
        activation = self.construct(name)
        if parameters.strip():
            activation.configure(parameters)
        return activation


class FactoryManager:
    """
    One registry of each kind.

    Attributes:
        term: Term types
        tnorm: T-norms
        snorm: S-norms
        hedge: Hedges
        defuzzifier: Defuzzifiers
        activation: Activation methods
        function: Operators and functions of formulas
    """

    def __init__(
        self,
        term: Optional[TermFactory] = None,
        tnorm: Optional[TNormFactory] = None,
        snorm: Optional[SNormFactory] = None,
        hedge: Optional[HedgeFactory] = None,
        defuzzifier: Optional[DefuzzifierFactory] = None,
        activation: Optional[ActivationFactory] = None,
        function: Optional[FunctionFactory] = None,
    ):
        self.term = term or TermFactory()
        self.tnorm = tnorm or TNormFactory()
        self.snorm = snorm or SNormFactory()
        self.hedge = hedge or HedgeFactory()
        self.defuzzifier = defuzzifier or DefuzzifierFactory()
        self.activation = activation or ActivationFactory()
        self.function = function or FunctionFactory()

    @classmethod
    def default(cls) -> "FactoryManager":
        """Shared manager used by engines that are not given their own."""
        return default_factory_manager()

    def __repr__(self) -> str:
        return (
            f"FactoryManager(terms={len(self.term)}, tnorms={len(self.tnorm)}, "
            f"snorms={len(self.snorm)}, hedges={len(self.hedge)}, "
            f"defuzzifiers={len(self.defuzzifier)}, activations={len(self.activation)}, "
            f"functions={len(self.function)})"
        )


@lru_cache
def default_factory_manager() -> FactoryManager:
    """Get the shared factory manager with caching."""
    return FactoryManager(function=default_function_factory())
