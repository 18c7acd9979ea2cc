"""
Unit tests for DepositInvoker.
Both chains are in-memory fakes; no network required.
"""

from unittest.mock import patch

import pytest
from web3 import Web3
from web3.exceptions import ContractLogicError

from deposit_invoker.core.models import DepositRequest, TokenType, UnsupportedTokenTypeError
from deposit_invoker.invoker import DepositInvoker, deposit

from fakes import DEPOSIT_TX, RELAY_TX, FakeLiquidity, FakeRollup

PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
LIQUIDITY = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
ROLLUP = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"
TOKEN = "0x9fE46736679d2D9a65F0992F2272dE9f3c7fa6e0"
ZERO = "0x0000000000000000000000000000000000000000"
SALT_HASH = "0x" + "ab" * 32
ONE_ETH = 1_000_000_000_000_000_000


def make_request(**overrides):
    fields = dict(
        private_key=PRIVATE_KEY,
        l1_rpc_url="http://localhost:8545",
        liquidity_contract_address=LIQUIDITY,
        l2_rpc_url="http://localhost:8546",
        rollup_contract_address=ROLLUP,
        amount=ONE_ETH,
        token_type=0,
        token_address=ZERO,
        token_id="0",
        pubkey_salt_hash=SALT_HASH,
    )
    fields.update(overrides)
    return DepositRequest(**fields)


def expected_hash(token_index, amount):
    packed = bytes.fromhex("ab" * 32) + token_index.to_bytes(4, "big") + amount.to_bytes(32, "big")
    return bytes(Web3.keccak(packed))


# --- Native ---

class TestNativeDeposit:

    @pytest.mark.asyncio
    async def test_native_deposit_and_relay(self):
        liquidity, rollup = FakeLiquidity(token_index=0), FakeRollup()
        invoker = DepositInvoker(liquidity, rollup)

        result = await invoker.deposit(make_request())

        assert liquidity.calls[0] == ("deposit_native", bytes.fromhex("ab" * 32), ONE_ETH)
        assert not any(call[0] == "deposit_erc20" for call in liquidity.calls)
        assert liquidity.calls[1] == ("get_token_index", TokenType.NATIVE, ZERO, 0)
        assert rollup.calls == [("process_deposits", 0, [expected_hash(0, ONE_ETH)])]
        assert result.deposit_tx_hash == DEPOSIT_TX
        assert result.relay_tx_hash == RELAY_TX
        assert result.token_index == 0
        assert result.deposit_hash == "0x" + expected_hash(0, ONE_ETH).hex()

    @pytest.mark.asyncio
    async def test_relay_uses_resolved_token_index(self):
        liquidity, rollup = FakeLiquidity(token_index=9), FakeRollup()

        await DepositInvoker(liquidity, rollup).deposit(make_request())

        assert rollup.calls[0][2] == [expected_hash(9, ONE_ETH)]


# --- ERC20 ---

class TestERC20Deposit:

    @pytest.mark.asyncio
    async def test_erc20_deposit_arguments(self):
        liquidity, rollup = FakeLiquidity(token_index=4), FakeRollup()
        request = make_request(token_type=1, token_address=TOKEN, amount=500)

        result = await DepositInvoker(liquidity, rollup).deposit(request)

        assert liquidity.calls[0] == ("deposit_erc20", TOKEN, bytes.fromhex("ab" * 32), 500)
        assert not any(call[0] == "deposit_native" for call in liquidity.calls)
        assert liquidity.calls[1] == ("get_token_index", TokenType.ERC20, TOKEN, 0)
        assert rollup.calls == [("process_deposits", 0, [expected_hash(4, 500)])]
        assert result.token_index == 4

    @pytest.mark.asyncio
    async def test_token_id_forwarded_to_index_lookup(self):
        liquidity, rollup = FakeLiquidity(), FakeRollup()
        request = make_request(token_type=1, token_address=TOKEN, token_id="0x10")

        await DepositInvoker(liquidity, rollup).deposit(request)

        assert liquidity.calls[1][3] == 16


# --- Ordering & failures ---

class TestFailures:

    def test_unsupported_token_type_rejected_before_clients(self):
        with pytest.raises(UnsupportedTokenTypeError):
            make_request(token_type=2)

    @pytest.mark.asyncio
    async def test_module_deposit_rejects_nft_without_network(self):
        with patch("deposit_invoker.invoker.DepositInvoker.from_request") as from_request:
            with pytest.raises(UnsupportedTokenTypeError, match="not supported for NFT"):
                await deposit(
                    PRIVATE_KEY, "http://localhost:8545", LIQUIDITY,
                    "http://localhost:8546", ROLLUP,
                    1, 2, TOKEN, "1", SALT_HASH,
                )
        from_request.assert_not_called()

    @pytest.mark.asyncio
    async def test_liquidity_revert_propagates_and_skips_relay(self):
        error = ContractLogicError("execution reverted: insufficient balance")
        liquidity, rollup = FakeLiquidity(error=error), FakeRollup()

        with pytest.raises(ContractLogicError) as excinfo:
            await DepositInvoker(liquidity, rollup).deposit(make_request())

        assert excinfo.value is error
        assert [call[0] for call in liquidity.calls] == ["deposit_native"]
        assert rollup.calls == []

    @pytest.mark.asyncio
    async def test_relay_failure_propagates(self):
        error = ConnectionError("L2 unreachable")
        liquidity, rollup = FakeLiquidity(), FakeRollup(error=error)

        with pytest.raises(ConnectionError):
            await DepositInvoker(liquidity, rollup).deposit(make_request())

        assert [call[0] for call in liquidity.calls] == ["deposit_native", "get_token_index"]

    @pytest.mark.asyncio
    async def test_relay_disabled(self):
        liquidity, rollup = FakeLiquidity(), FakeRollup()

        result = await DepositInvoker(liquidity, rollup, relay=False).deposit(make_request())

        assert rollup.calls == []
        assert result.relay_tx_hash is None
        assert result.deposit_hash == "0x" + expected_hash(0, ONE_ETH).hex()


# --- Lifecycle & construction ---

class TestLifecycle:

    @pytest.mark.asyncio
    async def test_context_manager_closes_both_clients(self):
        liquidity, rollup = FakeLiquidity(), FakeRollup()
        async with DepositInvoker(liquidity, rollup):
            pass
        assert liquidity.closed and rollup.closed

    @pytest.mark.asyncio
    async def test_rollup_closed_even_if_liquidity_close_fails(self):
        class BrokenLiquidity(FakeLiquidity):
            async def close(self):
                raise RuntimeError("close failed")

        rollup = FakeRollup()
        with pytest.raises(RuntimeError):
            await DepositInvoker(BrokenLiquidity(), rollup).close()
        assert rollup.closed

    def test_from_request_builds_signing_liquidity_and_keyless_rollup(self):
        invoker = DepositInvoker.from_request(make_request(), l1_chain_id=31337, relay=False)
        assert invoker.liquidity.wallet.address == "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
        assert invoker.liquidity.wallet.can_sign
        assert invoker.liquidity.chain_id == 31337
        assert invoker.rollup.wallet is None
        assert invoker.rollup.address == ROLLUP
        assert invoker.relay is False

    @pytest.mark.asyncio
    async def test_module_deposit_runs_and_closes(self):
        liquidity, rollup = FakeLiquidity(), FakeRollup()
        with patch(
            "deposit_invoker.invoker.DepositInvoker.from_request",
            return_value=DepositInvoker(liquidity, rollup),
        ):
            result = await deposit(
                PRIVATE_KEY, "http://localhost:8545", LIQUIDITY,
                "http://localhost:8546", ROLLUP,
                ONE_ETH, 0, ZERO, "0", SALT_HASH,
            )
        assert result.relay_tx_hash == RELAY_TX
        assert liquidity.closed and rollup.closed
