"""
DepositInvoker: deposit a token on L1 and relay the deposit to the L2 rollup.

Flow (strictly sequential, every step awaited):
    1. depositNativeToken / depositERC20 on the Liquidity contract (L1)
    2. getTokenIndex(tokenType, tokenAddress, tokenId)
    3. deposit hash computed locally
    4. processDeposits(0, [hash]) on the Rollup contract (L2)

Nothing is retried. Any failure from a remote call propagates to the caller
and later steps are not attempted.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from web3 import Web3

from deposit_invoker.core.abi import LIQUIDITY, ROLLUP, load_abi
from deposit_invoker.core.config import Settings
from deposit_invoker.core.contracts import (
    LiquidityClient,
    LiquidityContract,
    RollupClient,
    RollupContract,
)
from deposit_invoker.core.models import (
    Deposit,
    DepositRequest,
    DepositResult,
    ERC20Asset,
    NativeAsset,
)
from deposit_invoker.core.wallet import Wallet
from deposit_invoker.relayer.deposit_relayer import DepositRelayer

logger = logging.getLogger("deposit_invoker.invoker")


class DepositInvoker:
    """
    Runs one deposit against a pair of chain clients.

    The clients are injected so any LiquidityClient / RollupClient pair works,
    including in-memory fakes.

    Usage:
        async with DepositInvoker.from_request(request) as invoker:
            result = await invoker.deposit(request)
    """

    def __init__(self, liquidity: LiquidityClient, rollup: RollupClient, relay: bool = True) -> None:
        """
        Args:
            liquidity: L1 Liquidity client holding the depositor's signing key.
            rollup: L2 Rollup client.
            relay: when False, stop after the token index lookup and skip
                   processDeposits (the relay only exists for dev chains).
        """
        self.liquidity = liquidity
        self.rollup = rollup
        self.relay = relay

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_request(
        cls,
        request: DepositRequest,
        l1_chain_id: int | None = None,
        l2_chain_id: int | None = None,
        rollup_deployed_block_number: int = 0,
        abi_dir: str | Path | None = None,
        relay: bool = True,
    ) -> DepositInvoker:
        """Build web3-backed clients for the endpoints and addresses in `request`."""
        wallet = Wallet.from_private_key(request.private_key.get_secret_value())
        liquidity = LiquidityContract(
            str(request.l1_rpc_url),
            request.liquidity_contract_address,
            wallet,
            chain_id=l1_chain_id,
            abi=load_abi(LIQUIDITY, abi_dir),
        )
        rollup = RollupContract(
            str(request.l2_rpc_url),
            request.rollup_contract_address,
            chain_id=l2_chain_id,
            deployed_block_number=rollup_deployed_block_number,
            abi=load_abi(ROLLUP, abi_dir),
        )
        return cls(liquidity, rollup, relay=relay)

    @classmethod
    def from_settings(cls, settings: Settings, private_key: str, relay: bool = True) -> DepositInvoker:
        """Build web3-backed clients from process configuration."""
        wallet = Wallet.from_private_key(private_key)
        liquidity = LiquidityContract(
            str(settings.l1_rpc_url),
            settings.liquidity_contract_address,
            wallet,
            chain_id=settings.l1_chain_id,
            abi=load_abi(LIQUIDITY, settings.abi_dir),
        )
        rollup = RollupContract(
            str(settings.l2_rpc_url),
            settings.rollup_contract_address,
            chain_id=settings.l2_chain_id,
            deployed_block_number=settings.rollup_contract_deployed_block_number,
            abi=load_abi(ROLLUP, settings.abi_dir),
        )
        return cls(liquidity, rollup, relay=relay)

    # ------------------------------------------------------------------
    # Deposit
    # ------------------------------------------------------------------

    async def deposit(self, request: DepositRequest) -> DepositResult:
        """
        Deposit on L1, resolve the token index, and relay the deposit hash to L2.

        Returns:
            DepositResult: transaction hashes, token index and deposit hash.
        """
        asset = request.asset
        pubkey_salt_hash = request.pubkey_salt_hash_bytes
        logger.debug(
            "Depositing %s of token type %s for %s",
            request.amount, request.token_type.name, request.pubkey_salt_hash,
        )

        if isinstance(asset, NativeAsset):
            deposit_tx_hash = await self.liquidity.deposit_native(pubkey_salt_hash, request.amount)
        elif isinstance(asset, ERC20Asset):
            deposit_tx_hash = await self.liquidity.deposit_erc20(
                asset.token_address, pubkey_salt_hash, request.amount
            )
        else:
            raise TypeError(f"Unknown deposit asset: {asset!r}")

        token_index = await self.liquidity.get_token_index(
            request.token_type, request.token_address, request.token_id_int
        )
        logger.info("Token index: %d", token_index)

        deposit = Deposit(
            pubkey_salt_hash=pubkey_salt_hash,
            token_index=token_index,
            amount=request.amount,
        )
        deposit_hash = Web3.to_hex(deposit.hash())

        relay_tx_hash = None
        if self.relay:
            relay_tx_hash = await DepositRelayer(self.rollup).relay([deposit])
        else:
            logger.info("Relay disabled; deposit hash %s not sent to the rollup", deposit_hash)

        return DepositResult(
            deposit_tx_hash=deposit_tx_hash,
            token_index=token_index,
            deposit_hash=deposit_hash,
            relay_tx_hash=relay_tx_hash,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close both chain connections."""
        try:
            await self.liquidity.close()
        finally:
            await self.rollup.close()

    async def __aenter__(self) -> DepositInvoker:
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()


async def deposit(
    private_key: str,
    l1_rpc_url: str,
    liquidity_contract_address: str,
    l2_rpc_url: str,
    rollup_contract_address: str,
    amount: int,
    token_type: int,
    token_address: str,
    token_id: str,
    pubkey_salt_hash: str,
    *,
    l1_chain_id: int | None = None,
    l2_chain_id: int | None = None,
    relay: bool = True,
) -> DepositResult:
    """
    One-shot deposit with fresh connections to both chains.

    The request is validated before any client is created, so an unsupported
    token type raises UnsupportedTokenTypeError without touching the network.
    """
    request = DepositRequest(
        private_key=private_key,
        l1_rpc_url=l1_rpc_url,
        liquidity_contract_address=liquidity_contract_address,
        l2_rpc_url=l2_rpc_url,
        rollup_contract_address=rollup_contract_address,
        amount=amount,
        token_type=token_type,
        token_address=token_address,
        token_id=token_id,
        pubkey_salt_hash=pubkey_salt_hash,
    )
    invoker = DepositInvoker.from_request(
        request, l1_chain_id=l1_chain_id, l2_chain_id=l2_chain_id, relay=relay
    )
    async with invoker:
        return await invoker.deposit(request)
