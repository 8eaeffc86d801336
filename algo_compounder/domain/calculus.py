"""
Finite-difference calculus and local extremum search on 1D functions.

Every operation here only samples f.eval(x), so any object with an
`eval` method gets derivatives and both search strategies for free.
Non-finite samples are never an error: they propagate through the
arithmetic and make the convergence checks fail.
"""

import logging
import math
from typing import Optional, Protocol, Tuple, runtime_checkable

from algo_compounder.domain.numeric import divide


@runtime_checkable
class Evaluable(Protocol):
    """A scalar function of one real variable"""

    def eval(self, x: float) -> float:
        ...


def first_derivative(f: Evaluable, x: float, delta: float) -> float:
    """f'(x) by central differences, delta -> 0+"""
    return divide(f.eval(x + delta) - f.eval(x - delta), 2.0 * delta)


def second_derivative(f: Evaluable, x: float, delta: float) -> float:
    """f''(x) by the central second difference, delta -> 0+"""
    return divide(f.eval(x + delta) - 2.0 * f.eval(x) + f.eval(x - delta), delta * delta)


def _report_non_finite(strategy: str, iteration: int, x: float, value: float) -> None:
    if not math.isfinite(value):
        logging.debug(
            "Non-finite derivative sample",
            extra={"strategy": strategy, "iteration": iteration, "x": x, "value": value},
        )


def search_extrema_newton(
    f: Evaluable,
    x0: float,
    max_iters: int,
    delta: float,
    epsilon: float,
) -> Optional[float]:
    """
    Find a local extremum near x0 with Newton's method on f'.

    Args:
        x0: initial guess
        max_iters: iteration budget
        delta: finite difference step
        epsilon: threshold on |f'(x)|, the closer to zero the more accurate

    Returns:
        The extremum, or None when |f'(x)| never drops below epsilon
    """
    x = x0
    for iteration in range(max_iters):
        x = x - divide(first_derivative(f, x, delta), second_derivative(f, x, delta))
        slope = first_derivative(f, x, delta)
        _report_non_finite("newton", iteration, x, slope)
        if abs(slope) < epsilon:
            return x
    return None


def search_extrema_bisection(
    f: Evaluable,
    bracket: Tuple[float, float],
    max_iters: int,
    delta: float,
    epsilon: float,
) -> Optional[float]:
    """
    Find a local extremum inside bracket by bisecting on the sign of f'.

    The bracket is trusted to hold a single sign change of f'. If the
    endpoints agree in sign the search gives up at once. Running out of
    iterations is not a failure: the midpoint of the last bracket is
    returned as the best estimate.

    Args:
        bracket: (lower, upper) where the extremum may lie
        max_iters: iteration budget
        delta: finite difference step
        epsilon: threshold on |f'(mid)|, the closer to zero the more accurate

    Returns:
        The extremum estimate, or None when no sign change is seen
    """
    lower, upper = bracket
    for iteration in range(max_iters):
        mid = (upper - lower) * 0.5 + lower
        slope_lower = first_derivative(f, lower, delta)
        slope_mid = first_derivative(f, mid, delta)
        slope_upper = first_derivative(f, upper, delta)
        _report_non_finite("bisection", iteration, mid, slope_mid)

        lower_positive = slope_lower > 0.0
        mid_positive = slope_mid > 0.0
        upper_positive = slope_upper > 0.0

        if lower_positive == upper_positive:
            return None
        elif abs(slope_mid) < epsilon:
            return mid
        elif mid_positive != upper_positive:
            lower = mid
        elif lower_positive != mid_positive:
            upper = mid
        else:
            return None

    return (upper - lower) * 0.5 + lower
