"""
Unit tests for the signing wallet. Pure local crypto, no network.
"""

import pytest

from deposit_invoker.core.wallet import Wallet, WalletError

# Well-known local dev-chain account #0
PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

LEGACY_TX = {
    "to": "0x5FbDB2315678afecb367f032d93F642f64180aa3",
    "value": 10**18,
    "gas": 100_000,
    "gasPrice": 1_000_000_000,
    "nonce": 0,
    "chainId": 31337,
    "data": "0x",
}


def test_from_private_key_derives_address():
    wallet = Wallet.from_private_key(PRIVATE_KEY)
    assert wallet.address == ADDRESS
    assert wallet.can_sign


def test_invalid_private_key():
    with pytest.raises(WalletError) as excinfo:
        Wallet.from_private_key("0x1234")
    assert "1234" not in str(excinfo.value)


def test_read_only_wallet_checksums_address():
    wallet = Wallet.read_only(ADDRESS.lower())
    assert wallet.address == ADDRESS
    assert not wallet.can_sign


def test_read_only_invalid_address():
    with pytest.raises(WalletError, match="Invalid address"):
        Wallet.read_only("0xnope")


def test_sign_transaction_returns_raw_bytes():
    raw = Wallet.from_private_key(PRIVATE_KEY).sign_transaction(LEGACY_TX)
    assert isinstance(raw, bytes)
    assert len(raw) > 0


def test_signing_is_deterministic():
    wallet = Wallet.from_private_key(PRIVATE_KEY)
    assert wallet.sign_transaction(LEGACY_TX) == wallet.sign_transaction(LEGACY_TX)


def test_read_only_cannot_sign():
    with pytest.raises(WalletError, match="read-only"):
        Wallet.read_only(ADDRESS).sign_transaction(LEGACY_TX)


def test_repr_hides_key():
    text = repr(Wallet.from_private_key(PRIVATE_KEY))
    assert PRIVATE_KEY[2:] not in text
    assert "signer" in text
