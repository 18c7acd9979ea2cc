"""
Wallet: private key handling and transaction signing for EVM chains.

Private keys never leave this module. Callers only ever see the address and
raw signed transactions.
"""

from __future__ import annotations

from typing import Any

from eth_account import Account
from eth_account.signers.local import LocalAccount

from deposit_invoker.core.models import to_checksum


class WalletError(Exception):
    pass


class Wallet:
    """
    EVM wallet: holds the signing key (if any) for one account.

    Usage:
        wallet = Wallet.from_private_key("0x...")
        wallet = Wallet.read_only(address="0x...")  # no signing, query only
    """

    def __init__(self, address: str, _account: LocalAccount | None = None) -> None:
        self.address = address
        self._account = _account

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_private_key(cls, private_key: str) -> Wallet:
        """
        Create a signing wallet from a hex-encoded secp256k1 private key.

        Raises:
            WalletError: if the key is malformed (the key itself is not echoed).
        """
        try:
            account = Account.from_key(private_key)
        except (ValueError, TypeError):
            raise WalletError("Invalid private key") from None
        return cls(address=account.address, _account=account)

    @classmethod
    def read_only(cls, address: str) -> Wallet:
        """Wallet that can identify an account but cannot sign."""
        try:
            return cls(address=to_checksum(address))
        except ValueError as e:
            raise WalletError(str(e)) from e

    @property
    def can_sign(self) -> bool:
        return self._account is not None

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    def sign_transaction(self, tx: dict[str, Any]) -> bytes:
        """
        Sign a fully populated transaction dict.

        Returns:
            bytes: the raw signed transaction, ready for eth_sendRawTransaction.
        """
        if self._account is None:
            raise WalletError(f"Wallet {self.address} is read-only and cannot sign")
        signed = self._account.sign_transaction(tx)
        return bytes(signed.raw_transaction)

    def __repr__(self) -> str:
        mode = "signer" if self.can_sign else "read-only"
        return f"Wallet(address={self.address!r}, {mode})"
