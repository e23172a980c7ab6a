#!/usr/bin/env python3
"""
Example: Redeem winning positions through the relayer

Finds every position of your Safe wallet in a resolved market that is
still worth something and redeems it gaslessly. Polymarket's relayer pays
the gas.

Prerequisites:
    - A deployed Safe wallet (see examples/deploy_wallet.py)
    - Builder API credentials. These are NOT the CLOB API keys: create them
      under Builder Keys at https://polymarket.com/settings?tab=builder

Usage:
    python examples/redeem_positions.py

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
from polyrelay.errors import PolyRelayError, TransactionFailedError
from polyrelay.utils import configure_logging

# Load .env file
load_dotenv()


async def main() -> int:
    print("=" * 60)
    print("polyrelay - Redeem Positions")
    print("=" * 60)

    private_key = os.getenv("PRIVATE_KEY", "")
    credentials = BuilderCredentials.from_env()
    if not private_key or credentials is None:
        print("Set PRIVATE_KEY, POLY_API_KEY, POLY_API_SECRET and POLY_PASSPHRASE")
        return 1

    configure_logging(os.getenv("LOG_LEVEL", "WARNING"))

    config = RelayerConfig.for_chain(int(os.getenv("CHAIN_ID", "137")))
    client = RelayerClient.from_config(config, LocalSigner(private_key), credentials)

    safe_address = client.get_expected_safe()
    print(f"Signer: {client.address}")
    print(f"Safe:   {safe_address}")

    if not await client.get_deployed(safe_address):
        print("Safe is not deployed. Run examples/deploy_wallet.py first.")
        return 1

    positions = await client.get_redeemable_positions(safe_address)
    if not positions:
        print("No redeemable positions.")
        return 0

    print(f"\nFound {len(positions)} redeemable position(s):")
    for position in positions:
        print(
            f"  - {position.title} [{position.outcome}] "
            f"size={position.size} value=${position.current_value:.2f}"
        )

    print("\nRedeeming...")
    results = await client.redeem_all_positions()

    for result in results:
        title = result.position.title
        if not result.success:
            print(f"  FAILED  {title}: {result.error}")
            continue

        response = result.response
        try:
            tx = await client.wait_for_transaction(response.transaction_id)
        except TransactionFailedError as e:
            print(f"  FAILED  {title}: {e.state}")
            continue

        if tx is None:
            print(f"  PENDING {title}: {response.transaction_id}")
        else:
            print(f"  OK      {title}: {tx.transaction_hash}")

    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except PolyRelayError as e:
        print(f"Error: {e}")
        sys.exit(1)
