"""
deposit_invoker.relayer: relays L1 deposits to the L2 Rollup contract.

Provides:
- DepositRelayer: hashes deposits and submits them via processDeposits
"""

from deposit_invoker.relayer.deposit_relayer import DepositRelayer

__all__ = [
    "DepositRelayer",
]
