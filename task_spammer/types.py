"""
Task Spammer - Types Module

Value types passed between the submission client and the dispatch loop.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LoopState(Enum):
    """Dispatch loop state."""
    IDLE = "idle"
    DISPATCHING = "dispatching"


@dataclass(frozen=True)
class SubmissionOutcome:
    """Acknowledgment of a task included on chain."""
    transaction_hash: str
    block_number: Optional[int] = None


@dataclass(frozen=True)
class SubmissionResult:
    """
    Result of one submission: either an outcome or the error that ended it.

    Example:
        >>> result = await client.submit("QuickFox7")
        >>> if result.ok:
        ...     print(result.outcome.transaction_hash)
    """
    task_name: str
    outcome: Optional[SubmissionOutcome] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.outcome is not None and self.error is None

    @classmethod
    def success(cls, task_name: str, outcome: SubmissionOutcome) -> 'SubmissionResult':
        return cls(task_name=task_name, outcome=outcome)

    @classmethod
    def failure(cls, task_name: str, error: Exception) -> 'SubmissionResult':
        return cls(task_name=task_name, error=error)
