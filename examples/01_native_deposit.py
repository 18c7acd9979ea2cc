#!/usr/bin/env python3
"""
Example 01: Deposit the native token on L1 and relay it to the L2 rollup.

Reads endpoints and contract addresses from the environment (or .env) and
deposits 1 ETH worth of wei for a random recipient commitment.

Usage:
    DEPOSITOR_PRIVATE_KEY=0x... python examples/01_native_deposit.py
    DEPOSITOR_PRIVATE_KEY=0x... python examples/01_native_deposit.py 2500000000000000
"""

import asyncio
import os
import secrets
import sys

from deposit_invoker import DepositInvoker, DepositRequest, Settings

amount = int(sys.argv[1]) if len(sys.argv) > 1 else 10**18
private_key = os.environ["DEPOSITOR_PRIVATE_KEY"]
settings = Settings.from_env()

request = DepositRequest(
    private_key=private_key,
    l1_rpc_url=settings.l1_rpc_url,
    liquidity_contract_address=settings.liquidity_contract_address,
    l2_rpc_url=settings.l2_rpc_url,
    rollup_contract_address=settings.rollup_contract_address,
    amount=amount,
    token_type=0,
    pubkey_salt_hash="0x" + secrets.token_hex(32),
)


async def run():
    async with DepositInvoker.from_settings(settings, private_key) as invoker:
        result = await invoker.deposit(request)
    print(f"Recipient:    {request.pubkey_salt_hash}")
    print(f"Deposit TX:   {result.deposit_tx_hash}")
    print(f"Token index:  {result.token_index}")
    print(f"Deposit hash: {result.deposit_hash}")
    print(f"Relay TX:     {result.relay_tx_hash}")


asyncio.run(run())
