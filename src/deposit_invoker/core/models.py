"""
Core data models for L1 -> L2 deposits.
All amounts are in the token's base unit (wei for the native token).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, SecretStr, field_validator
from web3 import Web3

from deposit_invoker.core.hashing import get_deposit_hash

UINT256_MAX = 2**256 - 1
UINT32_MAX = 2**32 - 1
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class UnsupportedTokenTypeError(Exception):
    """Raised when a deposit is requested for a token type this flow cannot handle."""

    def __init__(self, token_type: object) -> None:
        super().__init__(
            f"Unsupported token type {token_type}: not supported for NFT and other token types"
        )
        self.token_type = token_type


class TokenType(IntEnum):
    """Token kinds known to the Liquidity contract."""
    NATIVE = 0
    ERC20 = 1
    NFT = 2
    SFT = 3


DEPOSITABLE_TOKEN_TYPES = (TokenType.NATIVE, TokenType.ERC20)


def to_bytes32(value: str | bytes) -> bytes:
    """Parse a 32-byte hash given as raw bytes or 0x-prefixed hex."""
    if isinstance(value, bytes):
        raw = value
    else:
        text = value[2:] if value[:2] in ("0x", "0X") else value
        try:
            raw = bytes.fromhex(text)
        except ValueError as e:
            raise ValueError(f"Invalid hex hash: {value!r}") from e
    if len(raw) != 32:
        raise ValueError(f"Expected a 32-byte hash, got {len(raw)} bytes")
    return raw


def to_checksum(address: str) -> str:
    if not isinstance(address, str) or not Web3.is_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    return Web3.to_checksum_address(address)


@dataclass(frozen=True)
class NativeAsset:
    """Deposit of the chain's native token; the amount travels as call value."""


@dataclass(frozen=True)
class ERC20Asset:
    """Deposit of an ERC20 token pulled by the Liquidity contract."""
    token_address: str


DepositAsset = Union[NativeAsset, ERC20Asset]


class DepositRequest(BaseModel):
    """
    Everything needed to deposit on L1 and relay the deposit to L2.

    Validation happens at construction time, so a request that exists is
    always depositable. An unsupported token type raises
    UnsupportedTokenTypeError directly, not a pydantic ValidationError.
    """
    model_config = ConfigDict(frozen=True, hide_input_in_errors=True)

    private_key: SecretStr
    l1_rpc_url: AnyHttpUrl
    liquidity_contract_address: str
    l2_rpc_url: AnyHttpUrl
    rollup_contract_address: str
    amount: int
    token_type: TokenType
    token_address: str = ZERO_ADDRESS
    token_id: str = "0"
    pubkey_salt_hash: str

    @field_validator("token_type", mode="before")
    @classmethod
    def _check_token_type(cls, value: object) -> TokenType:
        if isinstance(value, bool) or not isinstance(value, int) or value not in DEPOSITABLE_TOKEN_TYPES:
            raise UnsupportedTokenTypeError(value)
        return TokenType(value)

    @field_validator("private_key", mode="before")
    @classmethod
    def _check_private_key(cls, value: object) -> object:
        secret = value.get_secret_value() if isinstance(value, SecretStr) else value
        try:
            to_bytes32(secret)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            # never echo the key back in the error
            raise ValueError("private key must be 32 bytes of hex") from None
        return value

    @field_validator("liquidity_contract_address", "rollup_contract_address", "token_address")
    @classmethod
    def _check_address(cls, value: str) -> str:
        return to_checksum(value)

    @field_validator("amount")
    @classmethod
    def _check_amount(cls, value: int) -> int:
        if not 0 <= value <= UINT256_MAX:
            raise ValueError(f"amount out of uint256 range: {value}")
        return value

    @field_validator("token_id", mode="before")
    @classmethod
    def _check_token_id(cls, value: object) -> str:
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            raise ValueError(f"token id must be a string, got {type(value).__name__}")
        parsed = int(value, 16) if value.lower().startswith("0x") else int(value, 10)
        if not 0 <= parsed <= UINT256_MAX:
            raise ValueError(f"token id out of uint256 range: {value}")
        return value

    @field_validator("pubkey_salt_hash", mode="before")
    @classmethod
    def _check_pubkey_salt_hash(cls, value: object) -> str:
        if not isinstance(value, (str, bytes)):
            raise ValueError("pubkey salt hash must be hex or bytes")
        return "0x" + to_bytes32(value).hex()

    @property
    def asset(self) -> DepositAsset:
        if self.token_type == TokenType.NATIVE:
            return NativeAsset()
        return ERC20Asset(token_address=self.token_address)

    @property
    def token_id_int(self) -> int:
        return int(self.token_id, 16) if self.token_id.lower().startswith("0x") else int(self.token_id, 10)

    @property
    def pubkey_salt_hash_bytes(self) -> bytes:
        return to_bytes32(self.pubkey_salt_hash)


class Deposit(BaseModel):
    """A deposit as seen by the rollup: recipient commitment, token index and amount."""
    pubkey_salt_hash: str
    token_index: int
    amount: int

    @field_validator("pubkey_salt_hash", mode="before")
    @classmethod
    def _normalize_hash(cls, value: object) -> str:
        if not isinstance(value, (str, bytes)):
            raise ValueError("pubkey salt hash must be hex or bytes")
        return "0x" + to_bytes32(value).hex()

    @field_validator("token_index")
    @classmethod
    def _check_token_index(cls, value: int) -> int:
        if not 0 <= value <= UINT32_MAX:
            raise ValueError(f"token index out of uint32 range: {value}")
        return value

    @field_validator("amount")
    @classmethod
    def _check_amount(cls, value: int) -> int:
        if not 0 <= value <= UINT256_MAX:
            raise ValueError(f"amount out of uint256 range: {value}")
        return value

    def hash(self) -> bytes:
        """Deposit hash committed to the rollup's deposit tree."""
        return get_deposit_hash(to_bytes32(self.pubkey_salt_hash), self.token_index, self.amount)


class DepositLeaf(BaseModel):
    """A DepositLeafInserted event emitted by the Rollup contract."""
    deposit_index: int
    deposit_hash: str
    block_number: int


class DepositResult(BaseModel):
    """Outcome of a deposit + relay round trip."""
    deposit_tx_hash: str
    token_index: int
    deposit_hash: str
    relay_tx_hash: str | None = None

    def to_summary(self) -> str:
        """One-line human-readable summary."""
        relay = self.relay_tx_hash or "skipped"
        return (
            f"deposit tx {self.deposit_tx_hash}, token index {self.token_index}, "
            f"deposit hash {self.deposit_hash}, relay tx {relay}"
        )
