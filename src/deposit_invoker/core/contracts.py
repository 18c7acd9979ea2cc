"""
Chain clients: async JSON-RPC bindings for the Liquidity (L1) and Rollup (L2)
contracts.

The invoker only depends on the LiquidityClient / RollupClient protocols, so
tests can hand it in-memory fakes instead of live endpoints.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from deposit_invoker.core.abi import LIQUIDITY, ROLLUP, load_abi
from deposit_invoker.core.models import DepositLeaf, TokenType, to_checksum
from deposit_invoker.core.wallet import Wallet

logger = logging.getLogger("deposit_invoker.contracts")

# Block window per eth_getLogs request when scanning rollup events
EVENT_BLOCK_RANGE = 10_000

# Seconds to wait for a transaction to be mined (web3's own default)
DEFAULT_RECEIPT_TIMEOUT = 120.0


class RemoteCallError(Exception):
    """Raised when a transaction is mined but reverted (receipt status 0)."""

    def __init__(self, message: str, tx_hash: str | None = None) -> None:
        super().__init__(message)
        self.tx_hash = tx_hash


class LiquidityClient(Protocol):
    async def deposit_native(self, pubkey_salt_hash: bytes, amount: int) -> str: ...

    async def deposit_erc20(self, token_address: str, pubkey_salt_hash: bytes, amount: int) -> str: ...

    async def get_token_index(self, token_type: TokenType, token_address: str, token_id: int) -> int: ...

    async def close(self) -> None: ...


class RollupClient(Protocol):
    async def process_deposits(self, last_processed_deposit_id: int, deposit_hashes: list[bytes]) -> str: ...

    async def get_deposit_leaf_inserted_events(self, from_block: int | None = None) -> list[DepositLeaf]: ...

    async def close(self) -> None: ...


def get_client(rpc_url: str) -> AsyncWeb3:
    """Return an async web3 client for an HTTP JSON-RPC endpoint."""
    return AsyncWeb3(AsyncHTTPProvider(str(rpc_url)))


class _Contract:
    """Shared plumbing: one web3 connection, one contract, optional signer."""

    def __init__(
        self,
        rpc_url: str,
        address: str,
        abi: list[dict[str, Any]],
        chain_id: int | None = None,
        wallet: Wallet | None = None,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
    ) -> None:
        self.rpc_url = str(rpc_url)
        self.address = to_checksum(address)
        self.chain_id = chain_id
        self.wallet = wallet
        self.receipt_timeout = receipt_timeout
        self.w3 = get_client(self.rpc_url)
        self.contract = self.w3.eth.contract(address=self.address, abi=abi)

    async def get_chain_id(self) -> int:
        if self.chain_id is None:
            self.chain_id = await self.w3.eth.chain_id
        return self.chain_id

    async def _transact(self, fn: Any, label: str, value: int | None = None) -> str:
        """
        Send a state-changing call and wait until it is mined.

        Signs locally when the client holds a signing wallet, otherwise lets
        the node sign from its first unlocked account.

        Returns:
            str: 0x-prefixed transaction hash.

        Raises:
            RemoteCallError: if the transaction reverted on-chain.
        """
        params: dict[str, Any] = {}
        if value is not None:
            params["value"] = value

        if self.wallet is not None and self.wallet.can_sign:
            sender = self.wallet.address
            params["from"] = sender
            params["chainId"] = await self.get_chain_id()
            params["nonce"] = await self.w3.eth.get_transaction_count(sender, "pending")
            tx = await fn.build_transaction(params)
            raw = self.wallet.sign_transaction(tx)
            tx_hash = await self.w3.eth.send_raw_transaction(raw)
        else:
            params["from"] = await self._node_sender()
            tx_hash = await fn.transact(params)

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info("%s sent: %s", label, tx_hash_hex)

        receipt = await self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        if receipt["status"] != 1:
            raise RemoteCallError(f"{label} reverted in tx {tx_hash_hex}", tx_hash=tx_hash_hex)
        logger.info("%s mined in block %s", label, receipt["blockNumber"])
        return tx_hash_hex

    async def _node_sender(self) -> str:
        if self.wallet is not None:
            return self.wallet.address
        accounts = await self.w3.eth.accounts
        if not accounts:
            raise RemoteCallError(f"Node at {self.rpc_url} has no unlocked account to send from")
        return accounts[0]

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.w3.provider.disconnect()

    async def __aenter__(self) -> _Contract:
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()


class LiquidityContract(_Contract):
    """
    L1 Liquidity contract client. Deposits need a signing wallet.

    Usage:
        liquidity = LiquidityContract(rpc_url, address, Wallet.from_private_key(key), chain_id=1)
        tx_hash = await liquidity.deposit_native(pubkey_salt_hash, 10**18)
    """

    def __init__(
        self,
        rpc_url: str,
        address: str,
        wallet: Wallet,
        chain_id: int | None = None,
        abi: list[dict[str, Any]] | None = None,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
    ) -> None:
        super().__init__(
            rpc_url,
            address,
            abi if abi is not None else load_abi(LIQUIDITY),
            chain_id=chain_id,
            wallet=wallet,
            receipt_timeout=receipt_timeout,
        )

    async def deposit_native(self, pubkey_salt_hash: bytes, amount: int) -> str:
        """Deposit the native token; `amount` is sent as the call value."""
        fn = self.contract.functions.depositNativeToken(pubkey_salt_hash)
        return await self._transact(fn, "depositNativeToken", value=amount)

    async def deposit_erc20(self, token_address: str, pubkey_salt_hash: bytes, amount: int) -> str:
        """Deposit an ERC20 token. The Liquidity contract must hold an allowance for `amount`."""
        fn = self.contract.functions.depositERC20(to_checksum(token_address), pubkey_salt_hash, amount)
        return await self._transact(fn, "depositERC20")

    async def get_token_index(self, token_type: TokenType, token_address: str, token_id: int) -> int:
        found, token_index = await self.contract.functions.getTokenIndex(
            int(token_type), to_checksum(token_address), token_id
        ).call()
        if not found:
            logger.warning(
                "Token (type=%s, address=%s, id=%s) is not registered; contract returned index %s",
                int(token_type), token_address, token_id, token_index,
            )
        return int(token_index)


class RollupContract(_Contract):
    """
    L2 Rollup contract client.

    Without a wallet, state-changing calls go through eth_sendTransaction
    using the node's first unlocked account (local dev chains).
    """

    def __init__(
        self,
        rpc_url: str,
        address: str,
        chain_id: int | None = None,
        deployed_block_number: int = 0,
        wallet: Wallet | None = None,
        abi: list[dict[str, Any]] | None = None,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
    ) -> None:
        super().__init__(
            rpc_url,
            address,
            abi if abi is not None else load_abi(ROLLUP),
            chain_id=chain_id,
            wallet=wallet,
            receipt_timeout=receipt_timeout,
        )
        self.deployed_block_number = deployed_block_number

    async def process_deposits(self, last_processed_deposit_id: int, deposit_hashes: list[bytes]) -> str:
        fn = self.contract.functions.processDeposits(last_processed_deposit_id, deposit_hashes)
        return await self._transact(fn, "processDeposits")

    async def get_deposit_leaf_inserted_events(self, from_block: int | None = None) -> list[DepositLeaf]:
        """
        Collect DepositLeafInserted events from `from_block` (default: the
        deployment block) up to the chain head.

        Returns:
            list[DepositLeaf]: sorted by deposit index.
        """
        start = self.deployed_block_number if from_block is None else from_block
        latest = await self.w3.eth.block_number
        leaves: list[DepositLeaf] = []
        while start <= latest:
            end = min(start + EVENT_BLOCK_RANGE - 1, latest)
            logger.debug("Scanning DepositLeafInserted in blocks %s-%s", start, end)
            logs = await self.contract.events.DepositLeafInserted.get_logs(from_block=start, to_block=end)
            for log in logs:
                leaves.append(DepositLeaf(
                    deposit_index=int(log["args"]["depositIndex"]),
                    deposit_hash=Web3.to_hex(log["args"]["depositHash"]),
                    block_number=int(log["blockNumber"]),
                ))
            start = end + 1
        leaves.sort(key=lambda leaf: leaf.deposit_index)
        return leaves
