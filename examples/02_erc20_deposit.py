#!/usr/bin/env python3
"""
Example 02: Deposit an ERC20 token with the one-shot helper.

The Liquidity contract must already hold an allowance for the amount.

Usage:
    DEPOSITOR_PRIVATE_KEY=0x... python examples/02_erc20_deposit.py <token_address> <amount> <pubkey_salt_hash>
"""

import asyncio
import os
import sys

from deposit_invoker import Settings, UnsupportedTokenTypeError, deposit

if len(sys.argv) < 4:
    print("Usage: python 02_erc20_deposit.py <token_address> <amount> <pubkey_salt_hash>")
    sys.exit(0)

token_address, amount, pubkey_salt_hash = sys.argv[1], int(sys.argv[2]), sys.argv[3]
settings = Settings.from_env()

try:
    result = asyncio.run(deposit(
        os.environ["DEPOSITOR_PRIVATE_KEY"],
        str(settings.l1_rpc_url),
        settings.liquidity_contract_address,
        str(settings.l2_rpc_url),
        settings.rollup_contract_address,
        amount,
        1,
        token_address,
        "0",
        pubkey_salt_hash,
        l1_chain_id=settings.l1_chain_id,
        l2_chain_id=settings.l2_chain_id,
    ))
except UnsupportedTokenTypeError as e:
    print(f"Rejected: {e}")
    sys.exit(1)

print(result.to_summary())
