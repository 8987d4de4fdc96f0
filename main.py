#!/usr/bin/env python3
"""
Record Provider - Infrastructure Check

Connects to the ledger service, reads the chain tip and, when an account is
configured, looks up a credits record.

Usage:
    python main.py
    python main.py --amount 5000 --start-height 10 --end-height 20
"""

import argparse
import asyncio
import logging
import sys

from config.settings import settings
from record_provider import (
    Account, BlockHeightSearch, NetworkRecordProvider, OpenSearch, credits_to_microcredits, is_error,
)
from record_provider.ledger import LedgerRpcClient, RpcLedgerClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_search_parameters(start_height, end_height):
    if end_height is None:
        return OpenSearch({"startHeight": start_height})
    return BlockHeightSearch(start_height, end_height)


async def check_infrastructure(amount: int, start_height: int, end_height) -> bool:
    print("=" * 60)
    print("Record Provider - Infrastructure Check")
    print("=" * 60)
    print()
    print(f"Ledger URL: {settings.ledger_url}")
    print()

    rpc = LedgerRpcClient(
        url=settings.ledger_url,
        username=settings.ledger_username,
        password=settings.ledger_password,
        timeout=settings.request_timeout,
        max_message_size=settings.max_message_size,
    )

    print("[1/3] Connecting to ledger service...")
    if not await rpc.connect():
        print("❌ FAILED: Could not connect to ledger service")
        print()
        print("Troubleshooting:")
        print(f"  1. Is the ledger service running at {settings.ledger_url}?")
        print("  2. Are the credentials in config/settings.py correct?")
        return False
    print("✅ Connected")

    try:
        print()
        print("[2/3] Querying chain tip...")
        health = await rpc.health_check()
        if health["status"] != "healthy":
            print(f"❌ Health check: {health}")
            return False
        print(f"✅ Latest height: {health['latest_height']:,}")

        print()
        print(f"[3/3] Searching for a record of {amount:,} microcredits...")
        if not settings.account_private_key:
            print("⚠️  No account configured in config/settings.py, skipping")
            return True

        account = Account(settings.account_private_key, settings.account_address or "")
        provider = NetworkRecordProvider(account, RpcLedgerClient(rpc))
        record = await provider.find_credits_record(
            amount, True, [], build_search_parameters(start_height, end_height),
        )
        if is_error(record):
            cause = getattr(record, "cause", None)
            print(f"⚠️  {record}" + (f" ({cause})" if cause else ""))
        else:
            print(f"✅ Found {record}")
        return True

    except Exception as e:
        print(f"❌ Error during check: {e}")
        logger.exception("Check failed with exception")
        return False

    finally:
        await rpc.disconnect()


async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("-a", "--amount", type=int, default=5000, help="Microcredits to search for")
    parser.add_argument("-c", "--credits", type=float, default=None, help="Credits to search for, overrides --amount")
    parser.add_argument("--start-height", type=int, default=settings.default_start_height)
    parser.add_argument("--end-height", type=int, default=None, help="Defaults to the chain tip")
    args = parser.parse_args()

    amount = credits_to_microcredits(args.credits) if args.credits is not None else args.amount
    success = await check_infrastructure(amount, args.start_height, args.end_height)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
