"""Interfaces the compounding loop needs from the ledger side"""

from typing import Protocol

from algo_compounder.domain.models import (
    NodeStatus,
    PendingTransaction,
    SignedPayment,
    TransactionParams,
)


class LedgerGateway(Protocol):
    """Read and write access to a ledger node"""

    async def status(self) -> NodeStatus:
        ...

    async def status_after_block(self, round_number: int) -> NodeStatus:
        ...

    async def account_balance(self, address: str) -> float:
        ...

    async def transaction_params(self) -> TransactionParams:
        ...

    async def send_transaction(self, raw: bytes) -> str:
        ...

    async def pending_transaction(self, tx_id: str) -> PendingTransaction:
        ...


class TransactionSigner(Protocol):
    """Account that can sign a zero-value payment to itself"""

    address: str

    def sign_self_payment(self, params: TransactionParams, note: str) -> SignedPayment:
        ...
