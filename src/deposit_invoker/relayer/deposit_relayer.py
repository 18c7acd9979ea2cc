"""
Deposit Relayer: pushes deposit hashes into the Rollup contract.

On a production network the rollup learns about L1 deposits through the
messaging bridge. Local dev chains have no bridge, so the relayer calls
`processDeposits` directly:

    processDeposits(lastProcessedDepositId, [hash_1, ..., hash_N])

Each hash is keccak256(pubkeySaltHash ‖ tokenIndex ‖ amount), see
deposit_invoker.core.hashing.
"""

from __future__ import annotations

import logging

from deposit_invoker.core.contracts import RollupClient
from deposit_invoker.core.models import Deposit

logger = logging.getLogger("deposit_invoker.relayer")


class DepositRelayer:
    """
    Relays batches of deposits to the Rollup contract.

    Usage:
        relayer = DepositRelayer(rollup)
        tx_hash = await relayer.relay([Deposit(pubkey_salt_hash=..., token_index=0, amount=10**18)])
    """

    def __init__(self, rollup: RollupClient, last_processed_deposit_id: int = 0):
        """
        Args:
            rollup: client bound to the L2 Rollup contract.
            last_processed_deposit_id: id passed through to processDeposits.
        """
        self.rollup = rollup
        self.last_processed_deposit_id = last_processed_deposit_id

    @staticmethod
    def build_deposit_hashes(deposits: list[Deposit]) -> list[bytes]:
        """Compute the deposit hash of each deposit, preserving order."""
        return [deposit.hash() for deposit in deposits]

    async def relay(self, deposits: list[Deposit]) -> str:
        """
        Submit one processDeposits batch and wait for it to be mined.

        Returns:
            str: the relay transaction hash.

        Raises:
            ValueError: if the batch is empty.
        """
        if not deposits:
            raise ValueError("No deposits to relay")

        hashes = self.build_deposit_hashes(deposits)
        logger.info(
            "Relaying %d deposit(s) after deposit id %d",
            len(hashes), self.last_processed_deposit_id,
        )
        return await self.rollup.process_deposits(self.last_processed_deposit_id, hashes)
