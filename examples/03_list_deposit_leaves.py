#!/usr/bin/env python3
"""
Example 03: List the deposits the rollup has inserted into its deposit tree.

Usage:
    python examples/03_list_deposit_leaves.py
    python examples/03_list_deposit_leaves.py 1200
"""

import asyncio
import sys

from deposit_invoker import RollupContract, Settings

settings = Settings.from_env()
from_block = int(sys.argv[1]) if len(sys.argv) > 1 else None


async def run():
    rollup = RollupContract(
        str(settings.l2_rpc_url),
        settings.rollup_contract_address,
        chain_id=settings.l2_chain_id,
        deployed_block_number=settings.rollup_contract_deployed_block_number,
    )
    async with rollup:
        leaves = await rollup.get_deposit_leaf_inserted_events(from_block)
    for leaf in leaves:
        print(f"#{leaf.deposit_index:<5} {leaf.deposit_hash}  (block {leaf.block_number})")
    print(f"{len(leaves)} deposits")


asyncio.run(run())
