import json
from pathlib import Path

import pytest
from hexbytes import HexBytes
from web3 import Web3

from task_spammer.config import Credentials, Settings
from task_spammer.deployment import DeploymentResolver

# First default anvil account.
ANVIL_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
ANVIL_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

CONTRACT_ADDRESS = "0x5fbdb2315678afecb367f032d93f642f64180aa3"
TX_HASH = "0x" + "ab" * 32


class FakeContractFunction:
    def __init__(self, eth, task_name):
        self.eth = eth
        self.task_name = task_name

    async def build_transaction(self, params):
        self.eth.built.append((self.task_name, dict(params)))
        if self.eth.build_error is not None:
            raise self.eth.build_error
        return {
            "to": self.eth.contract_address,
            "data": "0x",
            "value": 0,
            "gas": 100_000,
            "gasPrice": 1_000_000_000,
            "nonce": params["nonce"],
            "chainId": 31337,
        }


class FakeFunctions:
    def __init__(self, eth):
        self.eth = eth

    def createNewTask(self, task_name):
        return FakeContractFunction(self.eth, task_name)


class FakeContract:
    def __init__(self, eth):
        self.functions = FakeFunctions(eth)


class FakeEth:
    def __init__(self, receipt=None):
        self.receipt = receipt or {
            "transactionHash": HexBytes(TX_HASH),
            "status": 1,
            "blockNumber": 7,
        }
        self.contract_address = None
        self.built = []
        self.sent = []
        self.build_error = None
        self.send_error = None
        self.receipt_error = None

    def contract(self, address, abi):
        self.contract_address = address
        return FakeContract(self)

    async def get_transaction_count(self, address, block_identifier):
        return len(self.sent)

    async def send_raw_transaction(self, raw):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(raw)
        return HexBytes(TX_HASH)

    async def wait_for_transaction_receipt(self, tx_hash, timeout):
        if self.receipt_error is not None:
            raise self.receipt_error
        return self.receipt


class FakeProvider:
    def __init__(self):
        self.disconnected = False

    async def disconnect(self):
        self.disconnected = True


class FakeWeb3:
    """Stands in for AsyncWeb3 with a fixed receipt."""

    def __init__(self, receipt=None):
        self.eth = FakeEth(receipt)
        self.provider = FakeProvider()


def write_deployment(directory: Path, address=CONTRACT_ADDRESS, chain_id=31337, key="swapManagerServiceManager"):
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{chain_id}.json"
    path.write_text(json.dumps({"addresses": {key: address}, "lastUpdate": {"block_number": 1}}))
    return path


@pytest.fixture
def settings(tmp_path):
    return Settings(
        credentials=Credentials(endpoint="http://localhost:8545", secret=ANVIL_KEY),
        interval_seconds=0.01,
        deployment_dir=tmp_path / "deployments",
    )


@pytest.fixture
def deployment(settings):
    write_deployment(settings.deployment_dir)
    return DeploymentResolver(settings.deployment_source())


@pytest.fixture
def fake_web3():
    return FakeWeb3()


@pytest.fixture
def checksum_contract_address():
    return Web3.to_checksum_address(CONTRACT_ADDRESS)


ENV_VARS = [
    "RPC_URL",
    "PRIVATE_KEY",
    "SPAMMER_INTERVAL_SECONDS",
    "SPAMMER_CHAIN_ID",
    "SPAMMER_DEPLOYMENT_DIR",
    "SPAMMER_DEPLOYMENT_URL",
    "SPAMMER_ABI_PATH",
    "SPAMMER_RECEIPT_TIMEOUT_SECONDS",
    "SPAMMER_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so values written by load_dotenv are undone too
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
