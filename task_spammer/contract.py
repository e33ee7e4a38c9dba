"""
Task Spammer - Contract Module

ABI of the service manager entry point used to create tasks.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ResolutionError

CREATE_NEW_TASK = "createNewTask"

SERVICE_MANAGER_ABI: List[Dict[str, Any]] = [
    {
        "type": "function",
        "name": CREATE_NEW_TASK,
        "stateMutability": "nonpayable",
        "inputs": [{"name": "name", "type": "string", "internalType": "string"}],
        "outputs": [],
    },
]


def load_abi(path: Optional[Path] = None) -> List[Dict[str, Any]]:
    """
    Load the service manager ABI.

    Accepts either a bare ABI list or a compiler artifact with an ``abi`` key.

    Args:
        path: Optional ABI file; the built-in fragment is used when omitted

    Returns:
        ABI entries

    Raises:
        ResolutionError: If the file is unreadable or lacks createNewTask
    """
    if path is None:
        return SERVICE_MANAGER_ABI

    try:
        with Path(path).open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ResolutionError(f"cannot read ABI {path}: {e}") from e

    abi = data.get("abi") if isinstance(data, dict) else data
    if not isinstance(abi, list):
        raise ResolutionError(f"ABI {path} is not a list of entries")
    if not any(entry.get("name") == CREATE_NEW_TASK for entry in abi if isinstance(entry, dict)):
        raise ResolutionError(f"ABI {path} has no {CREATE_NEW_TASK} function")
    return abi
