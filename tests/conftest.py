from unittest.mock import MagicMock

import pytest
from eth_utils import to_checksum_address
from hexbytes import HexBytes

from deployment.toolkit import ChainToolkit

# Common constants
DEPLOYER = to_checksum_address("0x" + "d" * 40)
MINTER = to_checksum_address("0xabc1230000000000000000000000000000000000")
NEW_MINTER = to_checksum_address("0x" + "12" * 20)
PROXY = to_checksum_address("0x" + "1f" * 20)
IMPLEMENTATION = to_checksum_address("0x" + "a5" * 20)
MINTER_ROLE = HexBytes("0x9f2df0fed2c77648de5860a4cc508cd0818c85b8b8a1ab4ceeef8d981c8956a6")
INIT_DATA = HexBytes("0xc0c53b8b" + "00" * 96)

# EIP-55 test vector with a single character flipped to the wrong case
BAD_CHECKSUM_ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAeD"

INVALID_ADDRESSES = [
    "not-an-address",
    "",
    "0x",
    "0x1234",
    "0x" + "g" * 40,
    "1f" * 20 + "00",
    BAD_CHECKSUM_ADDRESS,
    None,
]


# Fixtures
@pytest.fixture
def deployer():
    account = MagicMock()
    account.address = DEPLOYER
    return account


@pytest.fixture
def toolkit(deployer):
    toolkit = MagicMock(spec=ChainToolkit)
    toolkit.network_name = "local"
    toolkit.get_account.return_value = deployer
    toolkit.deploy_proxy.return_value = MagicMock(address=PROXY)
    toolkit.upgrade_proxy.return_value = MagicMock(address=PROXY)
    toolkit.get_implementation_address.return_value = IMPLEMENTATION
    toolkit.encode_initializer.return_value = INIT_DATA
    return toolkit


@pytest.fixture
def sleeps(monkeypatch):
    """Records verification delays instead of sleeping."""
    delays = []
    monkeypatch.setattr("deployment.verification.time.sleep", delays.append)
    return delays
