#!/usr/bin/env python3
"""
Example: Deploy your Safe wallet through the relayer

The Safe address is derived from your EOA before deployment, so funds
can be sent to it in advance. Deployment is gasless.

Usage:
    python examples/deploy_wallet.py

Environment Variables:
    PRIVATE_KEY: Private key of the Safe owner
    POLY_API_KEY: Builder API key
    POLY_API_SECRET: Builder API secret
    POLY_PASSPHRASE: Builder API passphrase
    CHAIN_ID: 137 (Polygon, default) or 80002 (Amoy)
"""

import asyncio
import os
import sys

from dotenv import load_dotenv

from polyrelay import BuilderCredentials, LocalSigner, RelayerClient, RelayerConfig
from polyrelay.errors import PolyRelayError
from polyrelay.utils import configure_logging

# Load .env file
load_dotenv()


async def main() -> int:
    print("=" * 60)
    print("polyrelay - Deploy Safe Wallet")
    print("=" * 60)

    private_key = os.getenv("PRIVATE_KEY", "")
    credentials = BuilderCredentials.from_env()
    if not private_key or credentials is None:
        print("Set PRIVATE_KEY, POLY_API_KEY, POLY_API_SECRET and POLY_PASSPHRASE")
        return 1

    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    config = RelayerConfig.for_chain(int(os.getenv("CHAIN_ID", "137")))
    client = RelayerClient.from_config(config, LocalSigner(private_key), credentials)

    safe_address = client.get_expected_safe()
    print(f"Signer: {client.address}")
    print(f"Safe:   {safe_address}")

    if await client.get_deployed(safe_address):
        print("Safe is already deployed.")
        return 0

    response = await client.deploy()
    print(f"Submitted: {response.transaction_id}")

    tx = await client.wait_for_transaction(response.transaction_id)
    if tx is None:
        print("Still pending; check again later.")
        return 0

    print(f"Deployed in {tx.transaction_hash}")

    approve = input("Approve USDC for the CTF contract now? [y/N] ").strip().lower()
    if approve == "y":
        response = await client.approve_collateral()
        tx = await client.wait_for_transaction(response.transaction_id)
        print(f"Approved in {tx.transaction_hash}" if tx else "Approval pending")

    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except PolyRelayError as e:
        print(f"Error: {e}")
        sys.exit(1)
