"""
Task Spammer - Errors Module

Exception hierarchy shared by the submission client and the dispatch loop.
"""

from typing import Optional


class TaskSpammerError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(TaskSpammerError):
    """Required configuration is missing or invalid. Fatal at startup."""


class SubmissionError(TaskSpammerError):
    """A single task submission failed. Recoverable per cycle."""


class ResolutionError(SubmissionError):
    """Deployment record could not be loaded or holds a malformed address."""


class SigningError(SubmissionError):
    """The signing key is invalid or the transaction could not be signed."""


class NetworkError(SubmissionError):
    """The RPC endpoint was unreachable or answered with an error."""


class TransactionFailedError(SubmissionError):
    """The transaction was reverted or never included."""

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        super().__init__(message)
        self.tx_hash = tx_hash
