"""
Command-line entry point.

Usage:
    deposit-invoker deposit --private-key 0x... --amount 1000000000000000000 \\
        --token-type native --pubkey-salt-hash 0x...
    deposit-invoker deposit --private-key 0x... --amount 500 --token-type erc20 \\
        --token-address 0x... --pubkey-salt-hash 0x... --no-relay
    deposit-invoker leaves --from-block 0

Endpoints and contract addresses come from the environment (or `.env`):
L1_RPC_URL, L1_CHAIN_ID, LIQUIDITY_CONTRACT_ADDRESS, L2_RPC_URL, L2_CHAIN_ID,
ROLLUP_CONTRACT_ADDRESS, ROLLUP_CONTRACT_DEPLOYED_BLOCK_NUMBER, ABI_DIR (optional).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from deposit_invoker.core.abi import ROLLUP, load_abi
from deposit_invoker.core.config import ConfigurationError, Settings
from deposit_invoker.core.contracts import RemoteCallError, RollupContract
from deposit_invoker.core.models import DepositRequest, TokenType, UnsupportedTokenTypeError
from deposit_invoker.core.wallet import WalletError
from deposit_invoker.invoker import DepositInvoker

logger = logging.getLogger("deposit_invoker.cli")

TOKEN_TYPES = {
    "native": TokenType.NATIVE,
    "erc20": TokenType.ERC20,
    "nft": TokenType.NFT,
    "sft": TokenType.SFT,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deposit-invoker",
        description="Deposit tokens on the L1 Liquidity contract and relay them to the L2 Rollup",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--env-file", default=".env", help="dotenv file to load (default: .env)")
    sub = parser.add_subparsers(dest="command", required=True)

    dep = sub.add_parser("deposit", help="deposit on L1 and relay the deposit hash to L2")
    dep.add_argument("--private-key", required=True, help="L1 depositor private key (hex)")
    dep.add_argument("--amount", required=True, type=int, help="amount in base units")
    dep.add_argument(
        "--token-type",
        required=True,
        type=str.lower,
        choices=sorted(TOKEN_TYPES),
        help="token type (only native and erc20 can be deposited)",
    )
    dep.add_argument("--token-address", default="0x0000000000000000000000000000000000000000")
    dep.add_argument("--token-id", default="0")
    dep.add_argument("--pubkey-salt-hash", required=True, help="recipient pubkey salt hash (32-byte hex)")
    dep.add_argument("--no-relay", action="store_true", help="skip processDeposits on the rollup")

    leaves = sub.add_parser("leaves", help="list DepositLeafInserted events on the rollup")
    leaves.add_argument("--from-block", type=int, default=None, help="default: rollup deployment block")
    return parser


async def run_deposit(settings: Settings, args: argparse.Namespace) -> None:
    request = DepositRequest(
        private_key=args.private_key,
        l1_rpc_url=settings.l1_rpc_url,
        liquidity_contract_address=settings.liquidity_contract_address,
        l2_rpc_url=settings.l2_rpc_url,
        rollup_contract_address=settings.rollup_contract_address,
        amount=args.amount,
        token_type=int(TOKEN_TYPES[args.token_type]),
        token_address=args.token_address,
        token_id=args.token_id,
        pubkey_salt_hash=args.pubkey_salt_hash,
    )
    invoker = DepositInvoker.from_settings(
        settings, request.private_key.get_secret_value(), relay=not args.no_relay
    )
    async with invoker:
        result = await invoker.deposit(request)
    print(result.to_summary())


async def run_leaves(settings: Settings, args: argparse.Namespace) -> None:
    rollup = RollupContract(
        str(settings.l2_rpc_url),
        settings.rollup_contract_address,
        chain_id=settings.l2_chain_id,
        deployed_block_number=settings.rollup_contract_deployed_block_number,
        abi=load_abi(ROLLUP, settings.abi_dir),
    )
    async with rollup:
        leaves = await rollup.get_deposit_leaf_inserted_events(args.from_block)
    for leaf in leaves:
        print(f"{leaf.deposit_index:>6}  {leaf.deposit_hash}  block {leaf.block_number}")
    print(f"{len(leaves)} deposit leaf event(s)")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = Settings.from_env(env_file=args.env_file)
        if args.command == "deposit":
            asyncio.run(run_deposit(settings, args))
        else:
            asyncio.run(run_leaves(settings, args))
    except (ConfigurationError, UnsupportedTokenTypeError, WalletError, RemoteCallError, ValueError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
