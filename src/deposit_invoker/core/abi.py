"""
Contract ABI loading.

The package bundles the entry points it calls. Point `abi_dir` at a folder of
full compiler artifacts (Hardhat/Foundry `{"abi": [...]}` or bare ABI arrays)
to use the deployed contracts' own interface instead.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any

from deposit_invoker.core.config import ConfigurationError

LIQUIDITY = "Liquidity"
ROLLUP = "Rollup"


def load_abi(name: str, abi_dir: str | Path | None = None) -> list[dict[str, Any]]:
    """
    Load a contract ABI by artifact name.

    Args:
        name: artifact name, e.g. "Liquidity" or "Rollup".
        abi_dir: optional directory holding `<name>.json`.

    Raises:
        ConfigurationError: if the artifact is missing or not an ABI.
    """
    if abi_dir is not None:
        path = Path(abi_dir) / f"{name}.json"
        if not path.is_file():
            raise ConfigurationError(f"ABI artifact not found: {path}")
        text = path.read_text(encoding="utf-8")
    else:
        resource = resources.files("deposit_invoker") / "abi" / f"{name}.json"
        try:
            text = resource.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ConfigurationError(f"No bundled ABI named {name!r}") from None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"ABI artifact {name!r} is not valid JSON: {e}") from e

    abi = data.get("abi") if isinstance(data, dict) else data
    if not isinstance(abi, list):
        raise ConfigurationError(f"ABI artifact {name!r} has no ABI array")
    return abi
