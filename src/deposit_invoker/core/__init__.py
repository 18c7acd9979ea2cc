"""core module init"""
from deposit_invoker.core.abi import LIQUIDITY, ROLLUP, load_abi
from deposit_invoker.core.config import ConfigurationError, Settings
from deposit_invoker.core.contracts import (
    LiquidityClient,
    LiquidityContract,
    RemoteCallError,
    RollupClient,
    RollupContract,
)
from deposit_invoker.core.hashing import get_deposit_hash
from deposit_invoker.core.models import (
    Deposit,
    DepositAsset,
    DepositLeaf,
    DepositRequest,
    DepositResult,
    ERC20Asset,
    NativeAsset,
    TokenType,
    UnsupportedTokenTypeError,
)
from deposit_invoker.core.wallet import Wallet, WalletError

__all__ = [
    "ConfigurationError",
    "Deposit",
    "DepositAsset",
    "DepositLeaf",
    "DepositRequest",
    "DepositResult",
    "ERC20Asset",
    "LIQUIDITY",
    "LiquidityClient",
    "LiquidityContract",
    "NativeAsset",
    "ROLLUP",
    "RemoteCallError",
    "RollupClient",
    "RollupContract",
    "Settings",
    "TokenType",
    "UnsupportedTokenTypeError",
    "Wallet",
    "WalletError",
    "get_deposit_hash",
    "load_abi",
]
