"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dataclasses import dataclass
from typing import Any, Mapping

from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "lightbnb")
DB_USER: str = os.getenv("DB_USER", "vagrant")
DB_PASS: str = os.getenv("DB_PASS", "")

# ── Connection pool ───────────────────────────────────────
DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "10"))

# ── Queries ───────────────────────────────────────────────
DEFAULT_RESULT_LIMIT: int = int(os.getenv("DEFAULT_RESULT_LIMIT", "10"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Connection settings for the LightBnB database.

    Attributes:
        host: Server hostname.
        port: Server port.
        user: Role to connect as.
        password: Password for `user` (may be empty for trust/peer auth).
        database: Database name.
    """
    host: str = "localhost"
    port: int = 5432
    user: str = "vagrant"
    password: str = ""
    database: str = "lightbnb"

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        """Build the config from the DB_* environment variables."""
        return cls(
            host=DB_HOST,
            port=DB_PORT,
            user=DB_USER,
            password=DB_PASS,
            database=DB_NAME,
        )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "DatabaseConfig":
        """
        Build the config from a plain dict of options.

        Only `host`, `port`, `user`, `password` and `database` are read;
        missing keys keep their defaults and unknown keys are ignored.
        """
        known = {k: options[k] for k in ("host", "port", "user", "password", "database") if k in options}
        if "port" in known:
            known["port"] = int(known["port"])
        return cls(**known)

    @property
    def dsn(self) -> str:
        """libpq connection URL for this config."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"
