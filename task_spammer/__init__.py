"""
Task Spammer

Periodically creates tasks on a service manager contract to generate
synthetic load against an EVM chain.
"""

from .client import SubmissionClient
from .config import Credentials, Settings
from .deployment import DeploymentRecord, DeploymentResolver
from .dispatch import DispatchLoop
from .names import generate_task_name
from .types import LoopState, SubmissionOutcome, SubmissionResult
from .wallet import Wallet
from .errors import (
    TaskSpammerError,
    ConfigError,
    SubmissionError,
    ResolutionError,
    SigningError,
    NetworkError,
    TransactionFailedError,
)

__version__ = "0.1.0"
__all__ = [
    # Core classes
    "DispatchLoop",
    "SubmissionClient",
    "DeploymentResolver",
    "Wallet",
    "Settings",
    "Credentials",
    "generate_task_name",
    # Types
    "DeploymentRecord",
    "LoopState",
    "SubmissionOutcome",
    "SubmissionResult",
    # Errors
    "TaskSpammerError",
    "ConfigError",
    "SubmissionError",
    "ResolutionError",
    "SigningError",
    "NetworkError",
    "TransactionFailedError",
]
