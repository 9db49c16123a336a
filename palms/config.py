"""Scoring configuration management."""

import logging
from functools import lru_cache
from pathlib import Path

from .schemas import ScoringConfig
from .utils import load_json

logger = logging.getLogger('palms.config')

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'scoring_config.json'


@lru_cache(maxsize=1)
def get_config(path: Path | str | None = None) -> ScoringConfig:
    """
    Load scoring configuration from data/scoring_config.json.

    Configuration is cached after first load. When no file exists at the
    default location the built-in defaults are returned; an explicit path
    that does not exist raises.

    Raises:
        FileNotFoundError: If an explicit path doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from palms.config import get_config
        config = get_config()
        print(f"Bonus rules: {len(config.bonus_rules)}")
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            logger.debug('No scoring_config.json found, using defaults')
            return ScoringConfig()
        path = DEFAULT_CONFIG_PATH
    return load_json(path, schema=ScoringConfig)


def get_bonus_rules():
    """Get the team bonus rules from config."""
    return get_config().bonus_rules


def get_tyfcb_unit() -> float:
    """Get the TYFCB amount that counts as one scoring unit."""
    return get_config().tyfcb_unit


def get_name_columns() -> list[str]:
    """Get the column headers searched for a member name."""
    return get_config().name_columns


def get_leaderboard_size() -> int:
    """Get the default individual leaderboard window."""
    return get_config().leaderboard_size


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
