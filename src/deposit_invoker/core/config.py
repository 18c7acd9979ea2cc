"""
Settings: L1/L2 endpoints and contract addresses read from the environment.

A `.env` file in the working directory is loaded first; variables already
present in the environment win.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv
from pydantic import AnyHttpUrl, BaseModel, ValidationError, field_validator

from deposit_invoker.core.models import to_checksum

ENV_VARS = (
    "L1_RPC_URL",
    "L1_CHAIN_ID",
    "LIQUIDITY_CONTRACT_ADDRESS",
    "L2_RPC_URL",
    "L2_CHAIN_ID",
    "ROLLUP_CONTRACT_ADDRESS",
    "ROLLUP_CONTRACT_DEPLOYED_BLOCK_NUMBER",
)
OPTIONAL_ENV_VARS = ("ABI_DIR",)


class ConfigurationError(Exception):
    """Raised when required configuration is missing or malformed."""
    pass


class Settings(BaseModel):
    """Validated process configuration."""
    l1_rpc_url: AnyHttpUrl
    l1_chain_id: int
    liquidity_contract_address: str
    l2_rpc_url: AnyHttpUrl
    l2_chain_id: int
    rollup_contract_address: str
    rollup_contract_deployed_block_number: int
    abi_dir: Path | None = None

    @field_validator("liquidity_contract_address", "rollup_contract_address")
    @classmethod
    def _check_address(cls, value: str) -> str:
        return to_checksum(value)

    @field_validator("l1_chain_id", "l2_chain_id")
    @classmethod
    def _check_chain_id(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"chain id must be positive, got {value}")
        return value

    @field_validator("rollup_contract_deployed_block_number")
    @classmethod
    def _check_block_number(cls, value: int) -> int:
        if value < 0:
            raise ValueError(f"block number must not be negative, got {value}")
        return value

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        env_file: str | Path | None = ".env",
    ) -> Settings:
        """
        Build settings from environment variables.

        Args:
            environ: mapping to read instead of os.environ (the .env file is
                     not consulted when given).
            env_file: dotenv file merged into os.environ before reading.

        Raises:
            ConfigurationError: if a variable is missing or fails validation.
        """
        if environ is None:
            if env_file is not None:
                load_dotenv(env_file, override=False)
            environ = os.environ

        missing = [name for name in ENV_VARS if not environ.get(name)]
        if missing:
            raise ConfigurationError(f"Missing environment variables: {', '.join(missing)}")

        values = {name.lower(): environ[name] for name in ENV_VARS}
        for name in OPTIONAL_ENV_VARS:
            if environ.get(name):
                values[name.lower()] = environ[name]

        try:
            return cls(**values)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']).upper()}: {err['msg']}" for err in e.errors()
            )
            raise ConfigurationError(f"Invalid configuration: {problems}") from e
