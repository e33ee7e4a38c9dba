"""
Task Spammer - Client Module

Signs and submits createNewTask calls to the service manager contract.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import ContractLogicError, TimeExhausted

from .config import Settings
from .contract import load_abi
from .deployment import DeploymentResolver
from .errors import (
    NetworkError,
    ResolutionError,
    SubmissionError,
    TransactionFailedError,
)
from .types import SubmissionOutcome, SubmissionResult
from .wallet import Wallet

logger = logging.getLogger(__name__)


class SubmissionClient:
    """
    Submission client bound to one signer, endpoint and deployment.

    Example:
        >>> client = SubmissionClient(settings, resolver)
        >>> outcome = await client.create_new_task("QuickFox42")
        >>> print(outcome.transaction_hash)
    """

    def __init__(
        self,
        settings: Settings,
        resolver: DeploymentResolver,
        web3: Optional[AsyncWeb3] = None,
        wallet: Optional[Wallet] = None,
        abi: Optional[List[Dict[str, Any]]] = None
    ):
        """
        Initialize client.

        Args:
            settings: Process settings holding the credentials
            resolver: Source of the target contract address
            web3: Optional preconfigured AsyncWeb3 instance
            wallet: Optional signer; built from the secret on first use
            abi: Optional contract ABI; read from settings when omitted
        """
        self.settings = settings
        self.endpoint = settings.credentials.endpoint
        self.resolver = resolver
        self.receipt_timeout = settings.receipt_timeout_seconds
        self._web3 = web3
        self._owns_web3 = web3 is None
        self._wallet = wallet
        self._abi = abi

    @property
    def web3(self) -> AsyncWeb3:
        if self._web3 is None:
            # One attempt per cycle; the next tick is the retry.
            self._web3 = AsyncWeb3(
                AsyncHTTPProvider(self.endpoint, exception_retry_configuration=None)
            )
        return self._web3

    @property
    def wallet(self) -> Wallet:
        if self._wallet is None:
            self._wallet = Wallet.from_private_key(self.settings.credentials.secret)
        return self._wallet

    @property
    def abi(self) -> List[Dict[str, Any]]:
        if self._abi is None:
            self._abi = load_abi(self.settings.abi_path)
        return self._abi

    async def contract_address(self) -> str:
        """
        Resolve and checksum the service manager address.

        Returns:
            Checksummed contract address

        Raises:
            ResolutionError: If the record is missing or the address is malformed
        """
        # File reads and HTTP fetches run off the event loop.
        record = await asyncio.get_running_loop().run_in_executor(None, self.resolver.resolve)
        try:
            return Web3.to_checksum_address(record.contract_address)
        except (ValueError, TypeError) as e:
            raise ResolutionError(
                f"malformed contract address {record.contract_address!r}: {e}"
            ) from e

    async def create_new_task(self, task_name: str) -> SubmissionOutcome:
        """
        Submit one createNewTask call and wait for its receipt.

        Args:
            task_name: Task name passed as the sole contract argument

        Returns:
            Outcome holding the transaction hash

        Raises:
            ResolutionError: Deployment record unavailable or malformed
            SigningError: Invalid key or signing failure
            NetworkError: Endpoint unreachable or RPC error
            TransactionFailedError: Transaction reverted or not included
        """
        address = await self.contract_address()
        wallet = self.wallet
        contract = self.web3.eth.contract(address=address, abi=self.abi)
        tx_hash = None

        try:
            nonce = await self.web3.eth.get_transaction_count(wallet.address, "pending")
            tx = await contract.functions.createNewTask(task_name).build_transaction({
                'from': wallet.address,
                'nonce': nonce,
            })
            raw = wallet.sign_transaction(tx)
            tx_hash = Web3.to_hex(await self.web3.eth.send_raw_transaction(raw))
            receipt = await self.web3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.receipt_timeout
            )
        except SubmissionError:
            raise
        except ContractLogicError as e:
            raise TransactionFailedError(f"createNewTask reverted: {e}", tx_hash) from e
        except TimeExhausted as e:
            raise TransactionFailedError(
                f"transaction {tx_hash} not included after {self.receipt_timeout}s",
                tx_hash
            ) from e
        except Exception as e:
            raise NetworkError(f"RPC call to {self.endpoint} failed: {e}") from e

        if receipt.get("status") == 0:
            raise TransactionFailedError(f"transaction {tx_hash} reverted", tx_hash)

        outcome = SubmissionOutcome(
            transaction_hash=Web3.to_hex(receipt["transactionHash"]),
            block_number=receipt.get("blockNumber"),
        )
        logger.info("Transaction successful with tx: %s", outcome.transaction_hash)
        return outcome

    async def submit(self, task_name: str) -> SubmissionResult:
        """
        Submit a task, folding every submission error into the result.

        Args:
            task_name: Task name

        Returns:
            Successful or failed SubmissionResult
        """
        try:
            outcome = await self.create_new_task(task_name)
        except SubmissionError as e:
            return SubmissionResult.failure(task_name, e)
        return SubmissionResult.success(task_name, outcome)

    async def close(self) -> None:
        """Release the HTTP session if this client created it."""
        if self._owns_web3 and self._web3 is not None:
            await self._web3.provider.disconnect()
            self._web3 = None
