"""
Shared fixtures for relayer tests.

HTTP is faked by patching ``httpx.AsyncClient`` with a factory whose
context manager yields a stub routing requests by URL path.
"""

import json
from typing import Any, Dict, Iterator, List, Optional
from unittest.mock import AsyncMock, MagicMock, patch
from urllib.parse import urlsplit

import httpx
import pytest

from polyrelay.relayer.client import RelayerClient
from polyrelay.signing.signer import LocalSigner
from polyrelay.types.relayer import BuilderCredentials

# =============================================================================
# Test Constants
# =============================================================================

RELAYER_URL = "https://relayer.test"
DATA_API_URL = "https://data-api.test"
CHAIN_ID = 137

# Well-known development key (Hardhat account #0)
PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
EOA = "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"
SAFE = "0xd93b25cb943d14d0d34fbaf01fc93a0f8b5f6e47"

BUILDER_SECRET = "c2VjcmV0LWtleS1mb3ItdGVzdHM="

CONDITION_ID = "0x" + "ab" * 32
TX_ID = "0190c6b2-7d3f-7c1e-9a5b-3f2e1d0c9b8a"
TX_HASH = "0x" + "cd" * 32


# =============================================================================
# HTTP stubs
# =============================================================================


def create_mock_response(
    status_code: int = 200,
    json_data: Any = None,
    text: Optional[str] = None,
) -> MagicMock:
    """Create a mock httpx Response."""
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    if json_data is not None:
        response.json.return_value = json_data
        response.text = text if text is not None else json.dumps(json_data)
    else:
        response.json.side_effect = json.JSONDecodeError("Expecting value", text or "", 0)
        response.text = text or ""
    return response


class MockAsyncContextManager:
    """Mock async context manager for httpx.AsyncClient."""

    def __init__(self, mock_client: AsyncMock):
        self.mock_client = mock_client

    async def __aenter__(self):
        return self.mock_client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None


class FakeHttp:
    """
    Routes GET/POST requests by URL path to queued responses.

    The last response queued for a path is repeated once the others
    are used up.
    """

    def __init__(self) -> None:
        self._responses: Dict[str, List[MagicMock]] = {}
        self.http = AsyncMock()
        self.http.get = AsyncMock(side_effect=self._respond)
        self.http.post = AsyncMock(side_effect=self._respond)
        self.client_class = MagicMock(
            side_effect=lambda *args, **kwargs: MockAsyncContextManager(self.http)
        )

    def on(self, path: str, *responses: MagicMock) -> "FakeHttp":
        self._responses.setdefault(path, []).extend(responses)
        return self

    def on_json(self, path: str, *payloads: Any, status_code: int = 200) -> "FakeHttp":
        return self.on(
            path, *(create_mock_response(status_code, payload) for payload in payloads)
        )

    async def _respond(self, url: str, *args: Any, **kwargs: Any) -> MagicMock:
        queue = self._responses.get(urlsplit(url).path)
        if not queue:
            raise AssertionError(f"Unexpected request to {url}")
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def get_calls(self, path: str) -> List[Any]:
        return [c for c in self.http.get.call_args_list if urlsplit(c.args[0]).path == path]

    @property
    def post_calls(self) -> List[Any]:
        return self.http.post.call_args_list

    def submitted(self, index: int = -1) -> Dict[str, Any]:
        """Decoded JSON body of a POST /submit call."""
        return json.loads(self.post_calls[index].kwargs["content"])

    @property
    def request_count(self) -> int:
        return self.http.get.call_count + self.http.post.call_count


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fake_http() -> Iterator[FakeHttp]:
    fake = FakeHttp()
    with patch("httpx.AsyncClient", fake.client_class):
        yield fake


@pytest.fixture
def credentials() -> BuilderCredentials:
    return BuilderCredentials(key="builder-key", secret=BUILDER_SECRET, passphrase="builder-pass")


@pytest.fixture
def signer() -> LocalSigner:
    return LocalSigner(PRIVATE_KEY)


@pytest.fixture
def client(signer: LocalSigner, credentials: BuilderCredentials) -> RelayerClient:
    return RelayerClient(
        RELAYER_URL,
        CHAIN_ID,
        signer=signer,
        builder_credentials=credentials,
        data_api_url=DATA_API_URL,
    )


@pytest.fixture
def read_only_client() -> RelayerClient:
    return RelayerClient(RELAYER_URL, CHAIN_ID, data_api_url=DATA_API_URL)


@pytest.fixture
def deployed_wallet(fake_http: FakeHttp) -> FakeHttp:
    """Relayer reporting a deployed Safe at nonce 5 and accepting submissions."""
    fake_http.on_json("/deployed", {"deployed": True})
    fake_http.on_json("/nonce", {"nonce": "5"})
    fake_http.on_json(
        "/submit",
        {"transactionID": TX_ID, "transactionHash": TX_HASH, "state": "STATE_NEW"},
    )
    return fake_http


def transaction_payload(state: str, **extra: Any) -> List[Dict[str, Any]]:
    """GET /transaction body for a single transaction."""
    payload = {
        "transactionID": TX_ID,
        "transactionHash": TX_HASH,
        "from": EOA,
        "to": SAFE,
        "proxyAddress": SAFE,
        "state": state,
        "type": "SAFE",
    }
    payload.update(extra)
    return [payload]
