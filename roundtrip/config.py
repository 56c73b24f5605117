"""Configuration loading for roundtrip.

Settings live in ``~/.config/roundtrip/config.toml``. Every key is
optional; missing keys fall back to DEFAULT_CONFIG.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Optional

import toml
from pydantic import ValidationError

from roundtrip.engine.policies import MatchingPolicy

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "roundtrip" / "config.toml"

DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    "risk": {
        "initial_capital": 10000.0,
    },
    "matching": {
        "profit_method": "realized",
        "max_abs_roi": 0,
        "fee_allocation": "ledger",
    },
    "stats": {
        "win_rate_basis": "transactions",
    },
    "logging": {
        "level": "WARNING",
    },
}


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.
    
    Args:
        config_path: Optional path to a config file. Uses the default
            location if not provided.
            
    Returns:
        Configuration dictionary. Defaults are returned when the file is
        missing or cannot be read.
    """
    path = config_path or DEFAULT_CONFIG_PATH

    if not path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        loaded = toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Could not read config %s: %s", path, e)
        return copy.deepcopy(DEFAULT_CONFIG)

    return _merge(DEFAULT_CONFIG, loaded)


def policy_from_config(
    config: dict,
    profit_method: Optional[str] = None,
    max_abs_roi: Optional[float] = None,
    fee_allocation: Optional[str] = None,
) -> MatchingPolicy:
    """Build a MatchingPolicy from config, with optional overrides.
    
    A max_abs_roi of 0 or less disables the ROI filter.
    
    Raises:
        ValueError: If the configured values are invalid.
    """
    matching = config.get("matching", {})
    method = profit_method or matching.get("profit_method", "realized")
    roi_limit = max_abs_roi if max_abs_roi is not None else matching.get("max_abs_roi", 0)
    allocation = fee_allocation or matching.get("fee_allocation", "ledger")

    try:
        return MatchingPolicy(
            profit_method=method,
            max_abs_roi=roi_limit if roi_limit and roi_limit > 0 else None,
            fee_allocation=allocation,
        )
    except ValidationError as e:
        raise ValueError(f"Invalid matching configuration: {e}") from e
