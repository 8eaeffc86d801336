"""Reward compounding loop - collects staking rewards at the model's optimal rate"""

import asyncio
import logging
from typing import Awaitable, Callable, List

from algo_compounder.config import Settings, settings
from algo_compounder.domain.exceptions import ConfirmationError
from algo_compounder.domain.interest import recommend_wait_time
from algo_compounder.domain.models import CycleOutcome, WaitTimeRecommendation
from algo_compounder.domain.ports import LedgerGateway, TransactionSigner
from algo_compounder.infrastructure.observability.logging import log_cycle
from algo_compounder.infrastructure.observability.metrics import (
    balance_gauge,
    confirmation_failure_counter,
    cycle_counter,
    record_recommendation,
)

Sleep = Callable[[float], Awaitable[None]]


def payment_note(count: int) -> str:
    return f"This was an automated payment for compounding count:{count}"


class Compounder:
    """Sends a zero-value self payment, then sleeps for the recommended wait"""

    def __init__(
        self,
        ledger: LedgerGateway,
        signer: TransactionSigner,
        config: Settings | None = None,
    ):
        self.ledger = ledger
        self.signer = signer
        self.config = config or settings
        self.payment_count = 0

    async def recommend(self) -> tuple[float, WaitTimeRecommendation]:
        """Current balance and the wait time the model recommends for it"""
        balance = await self.ledger.account_balance(self.signer.address)
        balance_gauge.set(balance)

        recommendation = recommend_wait_time(
            self.config.compound_coefs(balance),
            self.config.default_wait_seconds,
        )
        record_recommendation(recommendation)
        if not recommendation.found:
            logging.warning(
                "No optimal collection rate found, using default wait",
                extra={"balance_algos": balance, "wait_seconds": recommendation.wait_seconds},
            )
        return balance, recommendation

    async def confirm_transaction(self, tx_id: str, timeout_rounds: int) -> int:
        """
        Wait for tx_id to land in a block.

        Returns:
            The round the transaction was confirmed in

        Raises:
            ConfirmationError: If the pool rejects the transaction or
                timeout_rounds pass without confirmation
        """
        status = await self.ledger.status()
        start_round = status.last_round + 1
        current_round = start_round

        while current_round < start_round + timeout_rounds:
            pending = await self.ledger.pending_transaction(tx_id)
            if pending.confirmed_round is not None and pending.confirmed_round > 0:
                return pending.confirmed_round
            if pending.pool_error:
                confirmation_failure_counter.labels(reason="rejected").inc()
                raise ConfirmationError(f"Transaction rejected: {pending.pool_error}")
            await self.ledger.status_after_block(current_round)
            current_round += 1

        confirmation_failure_counter.labels(reason="timeout").inc()
        raise ConfirmationError("Timeout exceeded")

    async def run_cycle(self) -> CycleOutcome:
        """
        One compounding cycle.

        Flow:
        1. Read balance and compute the recommended wait
        2. Sign and broadcast a zero-value self payment
        3. Poll for confirmation
        """
        params = await self.ledger.transaction_params()
        balance, recommendation = await self.recommend()

        signed = self.signer.sign_self_payment(params, payment_note(self.payment_count))
        tx_id = await self.ledger.send_transaction(signed.raw)
        logging.info("Transaction sent", extra={"tx_id": tx_id, "cycle": self.payment_count})

        outcome = CycleOutcome(
            cycle=self.payment_count,
            balance=balance,
            recommendation=recommendation,
            tx_id=tx_id,
        )
        try:
            outcome.confirmed_round = await self.confirm_transaction(tx_id, self.config.confirmation_timeout_rounds)
        except ConfirmationError as e:
            outcome.error = str(e)

        cycle_counter.labels(outcome="confirmed" if outcome.confirmed else "failed").inc()
        log_cycle(outcome)
        return outcome

    async def run(self, max_cycles: int | None = None, sleep: Sleep = asyncio.sleep) -> List[CycleOutcome]:
        """
        Compound forever, or for max_cycles cycles.

        A confirmed cycle sleeps for the recommended wait and advances the
        payment count. A failed confirmation retries straight away.
        Node errors propagate.
        """
        outcomes: List[CycleOutcome] = []
        cycles = 0
        while max_cycles is None or cycles < max_cycles:
            outcome = await self.run_cycle()
            cycles += 1
            if max_cycles is not None:
                outcomes.append(outcome)
            if outcome.confirmed:
                wait_seconds = outcome.recommendation.wait_seconds
                logging.info(
                    f"Sleeping for {wait_seconds} seconds or {wait_seconds / (24.0 * 3600.0)} days",
                    extra={"wait_seconds": wait_seconds},
                )
                await sleep(wait_seconds)
                self.payment_count += 1
        return outcomes
