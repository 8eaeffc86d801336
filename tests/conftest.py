"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from algo_compounder.api.main import create_app
from algo_compounder.config import Settings
from algo_compounder.domain.exceptions import AlgodAPIError
from algo_compounder.domain.models import (
    CompoundModelCoefs,
    NodeStatus,
    PendingTransaction,
    SignedPayment,
    TransactionParams,
)

MAINNET_GENESIS_HASH = "wGHE2Pwdvd7S12BL5FaOP20EGYesN73ktiC1qzkkit8="


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def compound_coefs() -> CompoundModelCoefs:
    """Coefficients the compounding loop uses for a 100 Algo wallet"""
    return CompoundModelCoefs(years=1.0, rate=0.069, avg_fees=0.001, initial_principal=100.0)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        algod_address="http://algod.test",
        algod_token="a" * 64,
        confirmation_timeout_rounds=3,
        default_wait_seconds=86400.0,
    )


@pytest.fixture
def transaction_params() -> TransactionParams:
    return TransactionParams(
        last_round=1000,
        genesis_id="mainnet-v1.0",
        genesis_hash=MAINNET_GENESIS_HASH,
        fee=0,
        min_fee=1000,
    )


class FakeLedger:
    """In-memory ledger node that confirms after a scripted number of polls"""

    def __init__(self, balance: float, params: TransactionParams, polls_until_confirmed: int = 1, pool_error: str = ""):
        self.balance = balance
        self.params = params
        self.polls_until_confirmed = polls_until_confirmed
        self.pool_error = pool_error
        self.last_round = params.last_round
        self.sent: list[bytes] = []
        self.waited_rounds: list[int] = []
        self.polls = 0
        self.fail_send = False

    def _status(self) -> NodeStatus:
        return NodeStatus(self.last_round, 0, 0, "https://github.com/algorandfoundation/specs/tree/test")

    async def status(self) -> NodeStatus:
        return self._status()

    async def status_after_block(self, round_number: int) -> NodeStatus:
        self.waited_rounds.append(round_number)
        self.last_round = round_number + 1
        return self._status()

    async def account_balance(self, address: str) -> float:
        return self.balance

    async def transaction_params(self) -> TransactionParams:
        return self.params

    async def send_transaction(self, raw: bytes) -> str:
        if self.fail_send:
            raise AlgodAPIError("Algod error 400 on /v2/transactions: overspend")
        self.sent.append(raw)
        self.polls = 0
        return f"TX{len(self.sent)}"

    async def pending_transaction(self, tx_id: str) -> PendingTransaction:
        self.polls += 1
        if self.pool_error:
            return PendingTransaction(confirmed_round=None, pool_error=self.pool_error)
        if self.polls_until_confirmed and self.polls >= self.polls_until_confirmed:
            return PendingTransaction(confirmed_round=self.last_round, pool_error="")
        return PendingTransaction(confirmed_round=None, pool_error="")


class FakeSigner:
    """Signer that records the notes it was asked to sign"""

    address = "COMPOUNDERTESTADDRESS"

    def __init__(self):
        self.notes: list[str] = []

    def sign_self_payment(self, params: TransactionParams, note: str) -> SignedPayment:
        self.notes.append(note)
        return SignedPayment(tx_id=f"TX{len(self.notes)}", raw=note.encode())


@pytest.fixture
def fake_ledger(transaction_params: TransactionParams) -> FakeLedger:
    return FakeLedger(balance=100.0, params=transaction_params)


@pytest.fixture
def fake_signer() -> FakeSigner:
    return FakeSigner()
