"""Float arithmetic that yields non-finite values instead of raising"""

import math


def divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE-754 semantics: x/0 is +-inf, 0/0 and nan/0 are nan"""
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def power(base: float, exponent: float) -> float:
    """
    Raise to a power like C's pow().

    Overflow returns +-inf and a negative base with a non-integer
    exponent returns nan.
    """
    try:
        return math.pow(base, exponent)
    except OverflowError:
        odd_exponent = float(exponent).is_integer() and exponent % 2 == 1
        return -math.inf if base < 0 and odd_exponent else math.inf
    except ValueError:
        # pow(0, negative) is the only other domain error
        if base == 0:
            return math.inf
        return math.nan
