"""Unit tests for the algod REST client"""

import asyncio
import httpx
import pytest
from algo_compounder.config import Settings
from algo_compounder.domain.exceptions import AlgodAPIError, NodeCredentialsError
from algo_compounder.infrastructure.clients.algod import AlgodClient, log_node_status, read_node_credentials

TOKEN = "a" * 64

STATUS = {
    "last-round": 41_000_000,
    "time-since-last-round": 1_200_000_000,
    "catchup-time": 0,
    "last-version": "https://github.com/algorandfoundation/specs/tree/925a46433742afb0b51bb939354bd907fa88bf95",
}


def make_client(handler) -> AlgodClient:
    return AlgodClient("http://algod.test/", TOKEN, timeout=1.0, transport=httpx.MockTransport(handler))


def test_status_sends_token_and_parses():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=STATUS)

    status = asyncio.run(make_client(handler).status())

    assert status.last_round == 41_000_000
    assert status.catchup_time == 0
    assert seen[0].url.path == "/v2/status"
    assert seen[0].headers["X-Algod-API-Token"] == TOKEN


def test_status_after_block():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v2/status/wait-for-block-after/41000000"
        return httpx.Response(200, json={**STATUS, "last-round": 41_000_001})

    status = asyncio.run(make_client(handler).status_after_block(41_000_000))

    assert status.last_round == 41_000_001


def test_account_balance_in_algos():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v2/accounts/ADDR"
        return httpx.Response(200, json={"address": "ADDR", "amount": 12_345_678})

    assert asyncio.run(make_client(handler).account_balance("ADDR")) == pytest.approx(12.345678)


def test_transaction_params():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "consensus-version": "v38",
                "fee": 0,
                "genesis-hash": "wGHE2Pwdvd7S12BL5FaOP20EGYesN73ktiC1qzkkit8=",
                "genesis-id": "mainnet-v1.0",
                "last-round": 41_000_000,
                "min-fee": 1000,
            },
        )

    params = asyncio.run(make_client(handler).transaction_params())

    assert params.last_round == 41_000_000
    assert params.genesis_id == "mainnet-v1.0"
    assert params.min_fee == 1000


def test_send_transaction_posts_raw_bytes():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/v2/transactions"
        assert request.headers["Content-Type"] == "application/x-binary"
        assert request.content == b"\x82\xa3sig"
        return httpx.Response(200, json={"txId": "TXID"})

    assert asyncio.run(make_client(handler).send_transaction(b"\x82\xa3sig")) == "TXID"


def test_pending_transaction_unconfirmed():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v2/transactions/pending/TXID"
        return httpx.Response(200, json={"pool-error": "", "txn": {}})

    pending = asyncio.run(make_client(handler).pending_transaction("TXID"))

    assert pending.confirmed_round is None
    assert pending.pool_error == ""


def test_pending_transaction_confirmed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"confirmed-round": 41_000_002, "pool-error": ""})

    assert asyncio.run(make_client(handler).pending_transaction("TXID")).confirmed_round == 41_000_002


def test_http_error_raises_algod_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "Invalid API Token"})

    with pytest.raises(AlgodAPIError, match="401"):
        asyncio.run(make_client(handler).status())


def test_timeout_raises_algod_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(AlgodAPIError, match="timeout"):
        asyncio.run(make_client(handler).status())


def test_malformed_status_raises_algod_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unexpected": True})

    with pytest.raises(AlgodAPIError, match="Invalid node status"):
        asyncio.run(make_client(handler).status())


def test_log_node_status(caplog):
    caplog.set_level("INFO")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=STATUS)

    status = asyncio.run(log_node_status(make_client(handler)))

    assert status.last_round == 41_000_000
    assert any(r.getMessage() == "Algod status" and r.last_round == 41_000_000 for r in caplog.records)


def test_read_node_credentials(tmp_path):
    (tmp_path / "algod.net").write_text("127.0.0.1:8080\n")
    (tmp_path / "algod.token").write_text(TOKEN + "\n")

    assert read_node_credentials(tmp_path) == ("http://127.0.0.1:8080", TOKEN)


def test_read_node_credentials_missing(tmp_path):
    with pytest.raises(NodeCredentialsError):
        read_node_credentials(tmp_path)


def test_from_settings_prefers_explicit_address():
    client = AlgodClient.from_settings(Settings(algod_address="http://node:4001", algod_token=TOKEN))

    assert client.address == "http://node:4001"
    assert client.token == TOKEN


def test_from_settings_reads_data_dir(tmp_path):
    (tmp_path / "algod.net").write_text("127.0.0.1:8080")
    (tmp_path / "algod.token").write_text(TOKEN)

    client = AlgodClient.from_settings(Settings(algod_address=None, algod_token=None, algorand_data=str(tmp_path)))

    assert client.address == "http://127.0.0.1:8080"


def test_from_settings_without_node_raises():
    with pytest.raises(NodeCredentialsError):
        AlgodClient.from_settings(Settings(algod_address=None, algod_token=None, algorand_data=None))
