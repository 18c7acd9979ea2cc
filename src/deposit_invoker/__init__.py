"""
deposit-invoker: deposit tokens on an L1 liquidity contract and relay them to an L2 rollup.

Usage:
    from deposit_invoker import DepositInvoker, DepositRequest
    from deposit_invoker import deposit  # one-shot helper
"""

from deposit_invoker.core.config import ConfigurationError, Settings
from deposit_invoker.core.contracts import LiquidityContract, RemoteCallError, RollupContract
from deposit_invoker.core.hashing import get_deposit_hash
from deposit_invoker.core.models import (
    Deposit,
    DepositLeaf,
    DepositRequest,
    DepositResult,
    TokenType,
    UnsupportedTokenTypeError,
)
from deposit_invoker.core.wallet import Wallet
from deposit_invoker.invoker import DepositInvoker, deposit

__version__ = "0.1.0"
__all__ = [
    "DepositInvoker",
    "deposit",
    "DepositRequest",
    "DepositResult",
    "Deposit",
    "DepositLeaf",
    "TokenType",
    "get_deposit_hash",
    "LiquidityContract",
    "RollupContract",
    "Wallet",
    "Settings",
    "ConfigurationError",
    "RemoteCallError",
    "UnsupportedTokenTypeError",
]
