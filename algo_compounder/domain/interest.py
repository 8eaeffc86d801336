"""Reward compounding model - picks how often to collect staking rewards"""

from typing import Optional

from algo_compounder.domain.analytic import AnalyticFunction, analytic_formula
from algo_compounder.domain.calculus import search_extrema_bisection
from algo_compounder.domain.models import CompoundModelCoefs, WaitTimeRecommendation
from algo_compounder.domain.numeric import divide, power

SECONDS_PER_DAY = 24.0 * 3600.0
DAYS_PER_YEAR = 365.0
DEFAULT_WAIT_SECONDS = SECONDS_PER_DAY

# Bisection over collections per year
SEARCH_BRACKET = (1.0, 1_000_000_000.0)
SEARCH_MAX_ITERS = 64
SEARCH_DELTA = 0.0001
SEARCH_EPSILON = 0.0000001


@analytic_formula(CompoundModelCoefs)
def projected_wallet_value(collections_per_year: float, coefs: CompoundModelCoefs) -> float:
    """
    Wallet balance after coefs.years as a function of the collection rate.

    Compounding with a fee per collection follows the recurrence

        C(0) = A
        C(n) = C(n-1) * (1 + r/t)^t - f*t

    A: principal, r: yearly rate, t: collections per year,
    f: average fee per collection, n: years of compounding.
    Solving it gives the closed form evaluated here. When the growth
    factor g is 1 (rate 0) the fee term is 0/0 and the result is nan.
    """
    # g is the yearly growth factor at this collection rate
    g = power(1.0 + divide(coefs.rate, collections_per_year), collections_per_year)
    growth = power(g, coefs.years)
    fees = divide((collections_per_year * coefs.avg_fees) * (growth - 1.0), g - 1.0)
    return coefs.initial_principal * growth - fees


def collections_to_wait_seconds(collections_per_year: float) -> float:
    """Time between collections when collecting collections_per_year times a year"""
    return (DAYS_PER_YEAR / collections_per_year) * SECONDS_PER_DAY


class InterestModel:
    """Wallet value model used to time reward collection"""

    def __init__(self, coefs: CompoundModelCoefs):
        self.model = AnalyticFunction(projected_wallet_value, coefs)

    @classmethod
    def create(cls, years: float, rate: float, avg_fees: float, initial_principal: float) -> "InterestModel":
        return cls(CompoundModelCoefs(years, rate, avg_fees, initial_principal))

    @property
    def coefs(self) -> CompoundModelCoefs:
        return self.model.coefs

    def eval(self, x: float) -> float:
        return self.model.eval(x)

    def projected_value(self, collections_per_year: float) -> float:
        return self.model.eval(collections_per_year)

    def get_optimal_collections_per_year(self) -> Optional[float]:
        """Collection rate that locally extremizes the wallet value"""
        return search_extrema_bisection(self, SEARCH_BRACKET, SEARCH_MAX_ITERS, SEARCH_DELTA, SEARCH_EPSILON)

    def get_ideal_reward_wait_time(self) -> Optional[float]:
        """Optimal number of seconds to wait before collecting the reward"""
        optimal = self.get_optimal_collections_per_year()
        if optimal is None:
            return None
        return collections_to_wait_seconds(optimal)


def recommend_wait_time(
    coefs: CompoundModelCoefs,
    default_wait_seconds: float = DEFAULT_WAIT_SECONDS,
) -> WaitTimeRecommendation:
    """
    Decide how long to wait before the next collection.

    Falls back to default_wait_seconds (one day) when the search finds
    no extremum.
    """
    model = InterestModel(coefs)
    optimal = model.get_optimal_collections_per_year()
    if optimal is None:
        return WaitTimeRecommendation(wait_seconds=default_wait_seconds, found=False)

    return WaitTimeRecommendation(
        wait_seconds=collections_to_wait_seconds(optimal),
        found=True,
        optimal_collections_per_year=optimal,
    )
