"""
Numeric helpers shared by terms, norms, rules and defuzzifiers.

Degrees of truth are compared with a tolerance (the machine epsilon from
``EngineSettings``) rather than exactly, and formulas that can divide by
zero or overflow follow IEEE-754 semantics: they produce ``inf`` or ``nan``
instead of raising.
"""

from typing import Callable, Optional

import numpy as np

from fuzzinfer.config.settings import get_engine_settings

nan = float("nan")
inf = float("inf")


def machine_epsilon() -> float:
    """Tolerance used by the fuzzy comparisons."""
    return get_engine_settings().machine_epsilon


def is_nan(x: float) -> bool:
    return x != x


def is_inf(x: float) -> bool:
    return x == inf or x == -inf


def is_finite(x: float) -> bool:
    return not (is_nan(x) or is_inf(x))


def is_eq(a: float, b: float, eps: Optional[float] = None) -> bool:
    """
    Fuzzy equality: exact match, difference below epsilon, or both NaN.

    Args:
        a: First value
        b: Second value
        eps: Tolerance; the configured machine epsilon when omitted

    Returns:
        True if the values are considered equal
    """
    if eps is None:
        eps = machine_epsilon()
    return a == b or abs(a - b) < eps or (is_nan(a) and is_nan(b))


def is_neq(a: float, b: float, eps: Optional[float] = None) -> bool:
    return not is_eq(a, b, eps)


def is_lt(a: float, b: float, eps: Optional[float] = None) -> bool:
    return not is_eq(a, b, eps) and a < b


def is_le(a: float, b: float, eps: Optional[float] = None) -> bool:
    return is_eq(a, b, eps) or a < b


def is_gt(a: float, b: float, eps: Optional[float] = None) -> bool:
    return not is_eq(a, b, eps) and a > b


def is_ge(a: float, b: float, eps: Optional[float] = None) -> bool:
    return is_eq(a, b, eps) or a > b


def scale(
    x: float, from_min: float, from_max: float, to_min: float, to_max: float
) -> float:
    """Linearly map x from [from_min, from_max] onto [to_min, to_max]."""
    return divide(to_max - to_min, from_max - from_min) * (x - from_min) + to_min


def bound(x: float, minimum: float, maximum: float) -> float:
    if x > maximum:
        return maximum
    if x < minimum:
        return minimum
    return x


def in_range(x: float, minimum: float, maximum: float) -> bool:
    return is_ge(x, minimum) and is_le(x, maximum)


def logical_and(a: float, b: float) -> float:
    return 1.0 if is_eq(a, 1.0) and is_eq(b, 1.0) else 0.0


def logical_or(a: float, b: float) -> float:
    return 1.0 if is_eq(a, 1.0) or is_eq(b, 1.0) else 0.0


def logical_not(a: float) -> float:
    return 0.0 if is_eq(a, 1.0) else 1.0


def negate(a: float) -> float:
    return -a


def add(a: float, b: float) -> float:
    return a + b


def subtract(a: float, b: float) -> float:
    return a - b


def multiply(a: float, b: float) -> float:
    with np.errstate(over="ignore", invalid="ignore"):
        return float(np.multiply(a, b))


def divide(a: float, b: float) -> float:
    """Division where x/0 yields +/-inf and 0/0 yields nan."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return float(np.divide(a, b))


def modulo(a: float, b: float) -> float:
    """Floating point remainder with the sign of the dividend."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.fmod(a, b))


def power(a: float, b: float) -> float:
    with np.errstate(all="ignore"):
        return float(np.power(float(a), float(b)))


def ieee(ufunc: Callable) -> Callable[..., float]:
    """
    Wrap a numpy ufunc so that it returns a float and never raises on
    domain errors, overflow or division by zero.
    """

    def call(*args: float) -> float:
        with np.errstate(all="ignore"):
            return float(ufunc(*[float(arg) for arg in args]))

    call.__name__ = getattr(ufunc, "__name__", "ieee")
    return call


exp = ieee(np.exp)
sqrt = ieee(np.sqrt)
log = ieee(np.log)


def to_float(text: str) -> float:
    """
    Convert text to float, accepting ``nan``, ``inf`` and ``-inf``.

    Raises:
        ValueError: If the text is not a number
    """
    token = text.strip().lower()
    if token in ("nan", "+nan", "-nan"):
        return nan
    if token in ("inf", "+inf", "infinity", "+infinity"):
        return inf
    if token in ("-inf", "-infinity"):
        return -inf
    return float(token)


def is_number(text: str) -> bool:
    try:
        to_float(text)
    except ValueError:
        return False
    return True


def str_value(x: float, decimals: Optional[int] = None) -> str:
    """
    Render a value with fixed decimals; NaN and infinities as ``nan``,
    ``inf`` and ``-inf``.
    """
    if is_nan(x):
        return "nan"
    if x == inf:
        return "inf"
    if x == -inf:
        return "-inf"
    if decimals is None:
        decimals = get_engine_settings().decimals
    result = f"{x:.{decimals}f}"
    # Avoid "-0.000"
    if float(result) == 0.0:
        result = f"{0.0:.{decimals}f}"
    return result


def format_parameter(x: float) -> str:
    """
    Render a parameter with the shortest text that parses back to the same
    float, so that ``configure(parameters())`` is exact.
    """
    if is_nan(x):
        return "nan"
    if x == inf:
        return "inf"
    if x == -inf:
        return "-inf"
    return np.format_float_positional(float(x), trim="-")


def split_parameters(text: str) -> list[str]:
    return text.split()


def minimum(a: float, b: float) -> float:
    """Minimum that propagates NaN regardless of argument order."""
    if is_nan(a) or is_nan(b):
        return nan
    return a if a < b else b


def maximum(a: float, b: float) -> float:
    """Maximum that propagates NaN regardless of argument order."""
    if is_nan(a) or is_nan(b):
        return nan
    return a if a > b else b
