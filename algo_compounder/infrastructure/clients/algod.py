"""Algod v2 REST client for account, transaction and round queries"""

import logging
from pathlib import Path
from typing import Any, Dict, Tuple

import httpx

from algo_compounder.config import Settings, settings
from algo_compounder.domain.exceptions import AlgodAPIError, NodeCredentialsError
from algo_compounder.domain.models import NodeStatus, PendingTransaction, TransactionParams
from algo_compounder.infrastructure.observability.metrics import algod_failure_counter, algod_latency_histogram

MICROALGOS_PER_ALGO = 1e6


def read_node_credentials(data_dir: str | Path) -> Tuple[str, str]:
    """
    Read the node's REST address and API token from its data directory.

    Raises:
        NodeCredentialsError: If algod.net or algod.token cannot be read
    """
    data_dir = Path(data_dir)
    try:
        address = "http://" + (data_dir / "algod.net").read_text().strip()
        token = (data_dir / "algod.token").read_text().strip()
    except OSError as e:
        raise NodeCredentialsError(f"Cannot read node credentials from {data_dir}: {e}") from e
    return address, token


class AlgodClient:
    """Client for an Algorand node's algod REST API"""

    def __init__(
        self,
        address: str,
        token: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.address = address.rstrip("/")
        self.token = token
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "AlgodClient":
        """Build from explicit address/token, falling back to the node data dir"""
        config = config or settings
        if config.algod_address and config.algod_token:
            return cls(config.algod_address, config.algod_token, config.http_timeout_seconds)
        if not config.algorand_data:
            raise NodeCredentialsError("Set ALGOD_ADDRESS and ALGOD_TOKEN, or ALGORAND_DATA")
        address, token = read_node_credentials(config.algorand_data)
        return cls(address, token, config.http_timeout_seconds)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        """
        Send one request to the node and decode its JSON body.

        Raises:
            AlgodAPIError: On timeout, network or HTTP errors, or a non-JSON body
        """
        headers = {"X-Algod-API-Token": self.token, **kwargs.pop("headers", {})}
        async with httpx.AsyncClient(
            base_url=self.address,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                with algod_latency_histogram.time():
                    response = await client.request(method, path, headers=headers, **kwargs)
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                algod_failure_counter.inc()
                raise AlgodAPIError(f"Algod timeout after {self.timeout}s on {path}") from e
            except httpx.HTTPStatusError as e:
                algod_failure_counter.inc()
                raise AlgodAPIError(f"Algod error {e.response.status_code} on {path}: {e.response.text}") from e
            except httpx.RequestError as e:
                algod_failure_counter.inc()
                raise AlgodAPIError(f"Algod unreachable at {self.address}: {e}") from e
            except ValueError as e:
                algod_failure_counter.inc()
                raise AlgodAPIError(f"Invalid response from algod on {path}: {e}") from e

    @staticmethod
    def _parse_status(data: Dict[str, Any]) -> NodeStatus:
        try:
            return NodeStatus(
                last_round=data["last-round"],
                time_since_last_round=data["time-since-last-round"],
                catchup_time=data["catchup-time"],
                last_version=data["last-version"],
            )
        except (KeyError, TypeError) as e:
            raise AlgodAPIError(f"Invalid node status from algod: {e}") from e

    async def status(self) -> NodeStatus:
        return self._parse_status(await self._request("GET", "/v2/status"))

    async def status_after_block(self, round_number: int) -> NodeStatus:
        """Block until the node has seen the round after round_number"""
        data = await self._request("GET", f"/v2/status/wait-for-block-after/{round_number}")
        return self._parse_status(data)

    async def account_balance(self, address: str) -> float:
        """Account balance in Algos"""
        data = await self._request("GET", f"/v2/accounts/{address}")
        try:
            return data["amount"] / MICROALGOS_PER_ALGO
        except (KeyError, TypeError) as e:
            raise AlgodAPIError(f"Invalid account information from algod: {e}") from e

    async def transaction_params(self) -> TransactionParams:
        data = await self._request("GET", "/v2/transactions/params")
        try:
            return TransactionParams(
                last_round=data["last-round"],
                genesis_id=data["genesis-id"],
                genesis_hash=data["genesis-hash"],
                fee=data["fee"],
                min_fee=data["min-fee"],
            )
        except (KeyError, TypeError) as e:
            raise AlgodAPIError(f"Invalid transaction params from algod: {e}") from e

    async def send_transaction(self, raw: bytes) -> str:
        """Broadcast a msgpack-encoded signed transaction, returning its ID"""
        data = await self._request(
            "POST",
            "/v2/transactions",
            content=raw,
            headers={"Content-Type": "application/x-binary"},
        )
        try:
            return data["txId"]
        except (KeyError, TypeError) as e:
            raise AlgodAPIError(f"Invalid broadcast response from algod: {e}") from e

    async def pending_transaction(self, tx_id: str) -> PendingTransaction:
        data = await self._request("GET", f"/v2/transactions/pending/{tx_id}")
        try:
            return PendingTransaction(
                confirmed_round=data.get("confirmed-round"),
                pool_error=data.get("pool-error", ""),
            )
        except AttributeError as e:
            raise AlgodAPIError(f"Invalid pending transaction from algod: {e}") from e


async def log_node_status(client: AlgodClient) -> NodeStatus:
    """Log the node's sync state"""
    status = await client.status()
    logging.info(
        "Algod status",
        extra={
            "last_round": status.last_round,
            "time_since_last_round": status.time_since_last_round,
            "catchup_time": status.catchup_time,
            "last_version": status.last_version,
        },
    )
    return status
