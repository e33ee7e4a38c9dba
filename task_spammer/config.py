"""
Task Spammer - Config Module

Credentials and runtime settings, loaded once from the environment.
"""

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError

DEFAULT_INTERVAL_SECONDS = 6.0
DEFAULT_CHAIN_ID = 31337
DEFAULT_DEPLOYMENT_DIR = Path("contracts/deployments/swap-manager")
DEFAULT_RECEIPT_TIMEOUT_SECONDS = 120.0


@dataclass(frozen=True)
class Credentials:
    """RPC endpoint paired with the signing key. Never logged."""
    endpoint: str
    secret: str = field(repr=False)


@dataclass(frozen=True)
class Settings:
    """
    Process-wide settings.

    Example:
        >>> settings = Settings.from_env()
        >>> print(settings.credentials.endpoint)
    """
    credentials: Credentials
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS
    chain_id: int = DEFAULT_CHAIN_ID
    deployment_dir: Path = DEFAULT_DEPLOYMENT_DIR
    deployment_url: Optional[str] = None
    abi_path: Optional[Path] = None
    receipt_timeout_seconds: float = DEFAULT_RECEIPT_TIMEOUT_SECONDS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> 'Settings':
        """
        Build settings from environment variables.

        Args:
            dotenv: Load a ``.env`` file first (existing variables win)

        Returns:
            Validated settings

        Raises:
            ConfigError: If a required variable is missing or a value is invalid
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=False)

        endpoint = _required("RPC_URL")
        secret = _required("PRIVATE_KEY")
        _validate_endpoint(endpoint)

        abi_path = os.getenv("SPAMMER_ABI_PATH")
        settings = cls(
            credentials=Credentials(endpoint=endpoint, secret=secret),
            interval_seconds=_number("SPAMMER_INTERVAL_SECONDS", DEFAULT_INTERVAL_SECONDS),
            chain_id=_number("SPAMMER_CHAIN_ID", DEFAULT_CHAIN_ID, cast=int),
            deployment_dir=Path(os.getenv("SPAMMER_DEPLOYMENT_DIR", str(DEFAULT_DEPLOYMENT_DIR))),
            deployment_url=os.getenv("SPAMMER_DEPLOYMENT_URL") or None,
            abi_path=Path(abi_path) if abi_path else None,
            receipt_timeout_seconds=_number(
                "SPAMMER_RECEIPT_TIMEOUT_SECONDS", DEFAULT_RECEIPT_TIMEOUT_SECONDS
            ),
            log_level=os.getenv("SPAMMER_LOG_LEVEL", "INFO").upper(),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Raise ConfigError on values the loop cannot run with."""
        if not math.isfinite(self.interval_seconds) or self.interval_seconds <= 0:
            raise ConfigError("SPAMMER_INTERVAL_SECONDS must be a finite number > 0")
        if not math.isfinite(self.receipt_timeout_seconds) or self.receipt_timeout_seconds <= 0:
            raise ConfigError("SPAMMER_RECEIPT_TIMEOUT_SECONDS must be a finite number > 0")
        if self.chain_id <= 0:
            raise ConfigError("SPAMMER_CHAIN_ID must be a positive integer")

    def deployment_source(self) -> str:
        """Location of the deployment record for the configured chain."""
        if self.deployment_url:
            return self.deployment_url
        return str(self.deployment_dir / f"{self.chain_id}.json")


def _required(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ConfigError(f"failed to retrieve {name}: variable is not set")
    return value


def _number(name: str, default, cast=float):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def _validate_endpoint(endpoint: str) -> None:
    parsed = urlparse(endpoint)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"RPC_URL must be an http(s) URL, got {endpoint!r}")
