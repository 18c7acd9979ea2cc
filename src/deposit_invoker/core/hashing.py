"""
Deposit hash: the leaf the Rollup contract inserts into its deposit tree.

    keccak256(abi.encodePacked(bytes32 pubkeySaltHash, uint32 tokenIndex, uint256 amount))
"""

from __future__ import annotations

from web3 import Web3

DEPOSIT_HASH_TYPES = ["bytes32", "uint32", "uint256"]


def get_deposit_hash(pubkey_salt_hash: bytes, token_index: int, amount: int) -> bytes:
    """
    Compute the 32-byte deposit hash.

    Args:
        pubkey_salt_hash: 32-byte recipient commitment.
        token_index: token index assigned by the Liquidity contract (uint32).
        amount: deposited amount in base units (uint256).

    Returns:
        bytes: the keccak256 digest of the tightly packed fields.
    """
    if len(pubkey_salt_hash) != 32:
        raise ValueError(f"pubkey salt hash must be 32 bytes, got {len(pubkey_salt_hash)}")
    return bytes(Web3.solidity_keccak(DEPOSIT_HASH_TYPES, [pubkey_salt_hash, token_index, amount]))
