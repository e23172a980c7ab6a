"""
Shared constants for signing tests.

Expected digests and addresses were computed independently from the
contract formulas.
"""

import pytest

from polyrelay.signing.signer import LocalSigner

CHAIN_ID = 137
SAFE_FACTORY = "0xaacFeEa03eb1561C4e67d661e40682Bd20E3541b"
CTF = "0x4D97DCd97eC945f40cF65F87097ACe5EA0476045"

OWNER = "0xAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA1111"
OWNER_SAFE = "0x40e8e5fd316a68c4e704d7f2e2a5b20b309e61b1"

# Well-known development key (Hardhat account #0)
PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
PRIVATE_KEY_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
PRIVATE_KEY_SAFE = "0xd93b25cb943d14d0d34fbaf01fc93a0f8b5f6e47"


@pytest.fixture
def local_signer() -> LocalSigner:
    return LocalSigner(PRIVATE_KEY)
