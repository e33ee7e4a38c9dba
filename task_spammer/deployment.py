"""
Task Spammer - Deployment Module

Resolves the target contract address from a deployment-metadata record.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import requests
from pydantic import AliasChoices, BaseModel, Field, ValidationError

from .errors import ResolutionError

logger = logging.getLogger(__name__)


class DeploymentAddresses(BaseModel):
    swap_manager_service_manager: str = Field(
        validation_alias=AliasChoices(
            "swapManagerServiceManager",
            "swap_manager_service_manager",
            "SwapManager",
        )
    )


class DeploymentRecord(BaseModel):
    """Deployment metadata as written by the contract deployment scripts."""
    addresses: DeploymentAddresses

    @property
    def contract_address(self) -> str:
        return self.addresses.swap_manager_service_manager


class DeploymentResolver:
    """
    Loads a DeploymentRecord from a JSON file or an HTTP(S) URL.

    Example:
        >>> resolver = DeploymentResolver("contracts/deployments/swap-manager/31337.json")
        >>> record = resolver.resolve()
        >>> print(record.contract_address)
    """

    def __init__(self, source: str, timeout: int = 10):
        """
        Initialize resolver.

        Args:
            source: Path to the record, or an http(s) URL serving it
            timeout: HTTP request timeout in seconds
        """
        self.source = source
        self.timeout = timeout
        self.session: Optional[requests.Session] = None

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    def resolve(self) -> DeploymentRecord:
        """
        Read and validate the deployment record.

        Returns:
            Parsed deployment record

        Raises:
            ResolutionError: If the record is unreadable or lacks an address
        """
        data = self._fetch_remote() if self.is_remote else self._read_file()
        try:
            return DeploymentRecord.model_validate(data)
        except ValidationError as e:
            raise ResolutionError(
                f"deployment record at {self.source} has no contract address: {e}"
            ) from e

    def _read_file(self) -> dict:
        path = Path(self.source)
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError as e:
            raise ResolutionError(f"deployment record not found: {path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise ResolutionError(f"cannot read deployment record {path}: {e}") from e

    def _fetch_remote(self) -> dict:
        if self.session is None:
            self.session = requests.Session()
        try:
            response = self.session.get(self.source, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise ResolutionError(f"cannot fetch deployment record {self.source}: {e}") from e
