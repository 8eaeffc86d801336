"""Closed-form functions bound to their coefficients"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from algo_compounder.domain.exceptions import CoefficientMismatchError

CoefsT = TypeVar("CoefsT")

Formula = Callable[[float, CoefsT], float]


def analytic_formula(coefs_type: type) -> Callable[[Formula], Formula]:
    """Declare which coefficient type a formula accepts"""

    def decorate(func: Formula) -> Formula:
        func.coefs_type = coefs_type
        return func

    return decorate


@dataclass(frozen=True)
class AnalyticFunction(Generic[CoefsT]):
    """
    A simple 1D closed-form analytic function f(x) = formula(x, coefs).

    The formula and its coefficients are paired once, at construction.
    """

    formula: Callable[[float, CoefsT], float]
    coefs: CoefsT

    def __post_init__(self) -> None:
        expected: Any = getattr(self.formula, "coefs_type", None)
        if expected is None:
            raise CoefficientMismatchError(
                f"{getattr(self.formula, '__name__', self.formula)!r} is not declared with @analytic_formula"
            )
        if not isinstance(self.coefs, expected):
            raise CoefficientMismatchError(
                f"{self.formula.__name__} expects {expected.__name__}, got {type(self.coefs).__name__}"
            )

    def eval(self, x: float) -> float:
        return self.formula(x, self.coefs)
