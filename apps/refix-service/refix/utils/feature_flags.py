"""Storage switches read from the environment once and cached.

DOCUMENT_STORE_ENABLED      allow the managed document store (default on)
CATEGORY_MIGRATION_ON_INIT  migrate legacy public categories in init() (default on)
"""

import os
from functools import lru_cache
from typing import Dict

_FLAG_ENV = {
    "document_store_enabled": ("DOCUMENT_STORE_ENABLED", True),
    "category_migration_on_init": ("CATEGORY_MIGRATION_ON_INIT", True),
}

_FALSE_VALUES = {"", "0", "false", "no", "off"}
_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _FALSE_VALUES:
        return False
    if value in _TRUE_VALUES:
        return True
    # unrecognized spellings keep the default
    return default


@lru_cache(maxsize=None)
def get_feature_flags() -> Dict[str, bool]:
    return {key: _env_bool(env_var, default) for key, (env_var, default) in _FLAG_ENV.items()}


def document_store_enabled() -> bool:
    return get_feature_flags()["document_store_enabled"]


def category_migration_on_init() -> bool:
    return get_feature_flags()["category_migration_on_init"]


def refresh_feature_flag_cache() -> None:
    """Drop cached values so the next read sees the current environment."""
    get_feature_flags.cache_clear()
