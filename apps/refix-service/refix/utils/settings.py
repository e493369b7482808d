"""Storage configuration sourced from the process environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

DEFAULT_JSON_DB_FILE = "db.json"

_POSTGRES_VARS = ("POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB")


def _get_document_db_url() -> Optional[str]:
    """Return the document store URL, or None when it is not configured.

    DOCUMENT_DB_URL wins; otherwise all POSTGRES_* components must be set.
    A partial component set is treated as absent.
    """
    if os.getenv("DOCUMENT_DB_URL"):
        return os.getenv("DOCUMENT_DB_URL")

    values = {var: os.getenv(var) for var in _POSTGRES_VARS}
    if not all(values.values()):
        return None

    return (
        f"postgresql://{values['POSTGRES_USER']}:{values['POSTGRES_PASSWORD']}"
        f"@{values['POSTGRES_HOST']}:{values['POSTGRES_PORT']}/{values['POSTGRES_DB']}"
    )


def missing_postgres_vars() -> List[str]:
    """Names of POSTGRES_* variables that are unset (for diagnostics)."""
    return [var for var in _POSTGRES_VARS if not os.getenv(var)]


@dataclass(frozen=True)
class StorageSettings:
    """Connection settings read once at startup."""

    document_db_url: Optional[str] = None
    json_db_file: str = DEFAULT_JSON_DB_FILE

    @classmethod
    def from_env(cls) -> "StorageSettings":
        return cls(
            document_db_url=_get_document_db_url(),
            json_db_file=os.getenv("JSON_DB_FILE") or DEFAULT_JSON_DB_FILE,
        )

    @property
    def document_store_configured(self) -> bool:
        return bool(self.document_db_url)
