"""Pytest configuration and fixtures."""

import json
from typing import Dict, List, Tuple

import httpx
import pytest
import pytest_asyncio

from bitvora.api.client import BitvoraClient

BASE_URL = "https://api.test.bitvora.com"
API_KEY = "test_api_key_12345"


# Test markers
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that require the live Bitvora signet API"
    )


class FakeBitvoraAPI:
    """
    In-memory stand-in for the Bitvora API.

    Routes are registered per (method, path) and every request the client
    sends is recorded for later inspection.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Tuple[int, str]] = {}
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self.handle)

    def add(self, method: str, path: str, status: int = 200, body=None, text: str = None):
        if text is None:
            text = json.dumps(body)
        self.routes[(method, path)] = (status, text)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, text=f"no route for {request.method} {request.url.path}")
        status, text = self.routes[key]
        return httpx.Response(status, text=text, headers={"Content-Type": "application/json"})

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def fake_api():
    """Fake API backed by httpx.MockTransport."""
    return FakeBitvoraAPI()


@pytest_asyncio.fixture
async def client(fake_api):
    """Client wired to the fake API."""
    async with BitvoraClient(BASE_URL, API_KEY, transport=fake_api.transport) as c:
        yield c


@pytest.fixture
def lnd_payment():
    """Lightning payment tracking detail with a single failed HTLC attempt."""
    return {
        "payment_hash": "a1" * 32,
        "value": "21",
        "creation_date": "1730000000",
        "fee": "1",
        "payment_preimage": "b2" * 32,
        "value_sat": "21",
        "value_msat": "21000",
        "payment_request": "lntbs210n1pjexample",
        "status": "SUCCEEDED",
        "fee_sat": "1",
        "fee_msat": "1000",
        "creation_time_ns": "1730000000000000000",
        "htlcs": [
            {
                "attempt_id": "1",
                "status": "FAILED",
                "route": {
                    "total_time_lock": 800144,
                    "total_fees": "1",
                    "total_fees_msat": "1000",
                    "total_amt": "22",
                    "hops": [
                        {
                            "chan_id": "879779480666112001",
                            "chan_capacity": "1000000",
                            "amt_to_forward": "21",
                            "expiry": 800104,
                        }
                    ],
                },
                "attempt_time_ns": "1730000000000000000",
                "resolve_time_ns": "1730000001000000000",
                "failure": {
                    "code": "TEMPORARY_CHANNEL_FAILURE",
                    "channel_update": {
                        "signature": "3045",
                        "chain_hash": "00" * 32,
                        "chan_id": "879779480666112001",
                        "timestamp": 1730000000,
                        "message_flags": 1,
                        "channel_flags": 0,
                        "time_lock_delta": 40,
                        "htlc_minimum_msat": "1000",
                        "base_fee": 1000,
                        "fee_rate": 1,
                        "htlc_maximum_msat": "990000000",
                        "extra_opaque_data": "",
                    },
                    "htlc_msat": "21000",
                    "onion_sha_256": "",
                    "cltv_expiry": 0,
                    "flags": 0,
                    "failure_source_index": 1,
                    "height": 0,
                },
                "preimage": "",
            }
        ],
        "payment_index": "42",
        "failure_reason": "FAILURE_REASON_NONE",
    }


@pytest.fixture
def withdraw_body(lnd_payment):
    return {
        "status": 201,
        "message": "ok",
        "data": {
            "id": "wd_123",
            "amount_sats": 21,
            "recipient": "user@domain",
            "fee_sats": 1.0,
            "network_type": "lightning",
            "rail_type": "lightning",
            "status": "settled",
            "lightning_payment": lnd_payment,
            "chain_tx_id": None,
            "metadata": {"userID": "1234"},
            "created_at": "2024-10-27T12:00:00Z",
        },
    }


@pytest.fixture
def estimate_body():
    return {
        "status": 200,
        "message": "ok",
        "data": {
            "recipient": "user@domain",
            "recipient_type": "lightning_address",
            "amount_sats": 21,
            "bitvora_fee_sats": 0.5,
            "success_probability": 0.95,
        },
    }


@pytest.fixture
def invoice_body():
    return {
        "status": 201,
        "message": "ok",
        "data": {
            "id": "inv_1",
            "node_id": "02" + "ab" * 32,
            "memo": "Test invoice",
            "r_preimage": "cd" * 32,
            "r_hash": "ef" * 32,
            "amount_sats": 21,
            "settled": False,
            "payment_request": "lntbs210n1pjinvoice",
            "metadata": None,
            "lightning_address_id": None,
        },
    }


@pytest.fixture
def lightning_address_body():
    return {
        "status": 201,
        "message": "ok",
        "data": {
            "id": "la_1",
            "handle": "sillyzebu667",
            "domain": "signet.bitvora.me",
            "address": "sillyzebu667@signet.bitvora.me",
            "metadata": {"userID": "1234"},
            "created_at": "2024-10-27T12:00:00Z",
            "last_used_at": None,
            "deleted_at": None,
        },
    }


@pytest.fixture
def onchain_address_body():
    return {
        "status": 201,
        "message": "ok",
        "data": {
            "id": "oc_1",
            "address": "tb1qexampleaddress",
            "metadata": None,
            "created_at": "2024-10-27T12:00:00Z",
        },
    }


@pytest.fixture
def deposit_body():
    return {
        "status": 200,
        "message": "ok",
        "data": {
            "id": "dep_1",
            "ledger_tx_id": "ltx_1",
            "recipient": "tb1qexampleaddress",
            "amount_sats": 5000,
            "fee_sats": 0.0,
            "chain_tx_id": "f00d" * 16,
            "rail_type": "onchain",
            "network_type": "bitcoin",
            "status": "settled",
            "metadata": None,
            "lightning_invoice_id": None,
            "created_at": "2024-10-27T12:00:00Z",
        },
    }


@pytest.fixture
def balance_body():
    return {"status": 200, "message": "ok", "data": {"balance": 5000}}


@pytest.fixture
def transactions_body():
    return {
        "status": 200,
        "message": "ok",
        "data": [
            {
                "id": "tx_1",
                "company_id": "co_1",
                "amount_sats": 5000,
                "recipient": "tb1qexampleaddress",
                "rail_type": "onchain",
                "type": "deposit",
                "fee_microsats": 0,
                "status": "settled",
                "created_at": "2024-10-27T12:00:00Z",
            },
            {
                "id": "tx_2",
                "company_id": "co_1",
                "amount_sats": 21,
                "recipient": "user@domain",
                "rail_type": "lightning",
                "type": "withdrawal",
                "fee_microsats": 1000000,
                "status": "settled",
                "created_at": "2024-10-27T12:05:00Z",
            },
        ],
    }
