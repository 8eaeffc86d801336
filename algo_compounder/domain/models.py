"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CompoundModelCoefs:
    """Coefficients of the compounding-with-fees formula"""

    years: float  # duration of compounding
    rate: float  # annual interest rate
    avg_fees: float  # fee paid per collection
    initial_principal: float


@dataclass(frozen=True)
class WaitTimeRecommendation:
    """Output of the wait time decision"""

    wait_seconds: float
    found: bool
    optimal_collections_per_year: Optional[float] = None

    @property
    def wait_days(self) -> float:
        return self.wait_seconds / (24.0 * 3600.0)


@dataclass
class NodeStatus:
    """Algod node status snapshot"""

    last_round: int
    time_since_last_round: int
    catchup_time: int
    last_version: str


@dataclass
class TransactionParams:
    """Suggested parameters for building a transaction"""

    last_round: int
    genesis_id: str
    genesis_hash: str
    fee: int
    min_fee: int


@dataclass
class PendingTransaction:
    """Pool state of a submitted transaction"""

    confirmed_round: Optional[int]
    pool_error: str


@dataclass
class SignedPayment:
    """Signed transaction ready to broadcast"""

    tx_id: str
    raw: bytes


@dataclass
class CycleOutcome:
    """Result of one compounding cycle"""

    cycle: int
    balance: float
    recommendation: WaitTimeRecommendation
    tx_id: str
    confirmed_round: Optional[int] = None
    error: Optional[str] = None

    @property
    def confirmed(self) -> bool:
        return self.confirmed_round is not None
