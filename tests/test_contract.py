import json

import pytest

from task_spammer.contract import SERVICE_MANAGER_ABI, load_abi
from task_spammer.errors import ResolutionError


def test_default_abi():
    abi = load_abi()
    assert abi is SERVICE_MANAGER_ABI
    entry = abi[0]
    assert entry["name"] == "createNewTask"
    assert [i["type"] for i in entry["inputs"]] == ["string"]


def test_loads_compiler_artifact(tmp_path):
    path = tmp_path / "SwapManager.json"
    path.write_text(json.dumps({"abi": SERVICE_MANAGER_ABI, "bytecode": "0x"}))
    assert load_abi(path) == SERVICE_MANAGER_ABI


def test_loads_bare_abi(tmp_path):
    path = tmp_path / "SwapManager.json"
    path.write_text(json.dumps(SERVICE_MANAGER_ABI))
    assert load_abi(path) == SERVICE_MANAGER_ABI


def test_rejects_abi_without_create_new_task(tmp_path):
    path = tmp_path / "Other.json"
    path.write_text(json.dumps([{"type": "function", "name": "respondToTask", "inputs": []}]))
    with pytest.raises(ResolutionError, match="createNewTask"):
        load_abi(path)


def test_missing_abi_file(tmp_path):
    with pytest.raises(ResolutionError):
        load_abi(tmp_path / "missing.json")
