import json
import os
import typing
from pathlib import Path
from typing import Any, Dict, List

import yaml
from ape import networks, project
from ape.contracts import ContractContainer
from eth_typing import ChecksumAddress
from eth_utils import (
    is_address,
    is_checksum_address,
    is_checksum_formatted_address,
    to_checksum_address,
)
from ethpm_types import MethodABI
from web3.auto import w3

from deployment.networks import is_local_network


class InvalidAddress(ValueError):
    """Raised when a parameter is not a well-formed ethereum address"""


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def _load_json(filepath: Path) -> dict:
    """Loads a JSON file."""
    with open(filepath, "r") as file:
        return json.load(file)


def is_valid_address(value: Any) -> bool:
    """
    Returns True if the value is a hex address string. Mixed-case
    addresses must carry a valid EIP-55 checksum.
    """
    if not isinstance(value, str) or not is_address(value):
        return False
    # mixed case carries a checksum
    return not is_checksum_formatted_address(value) or is_checksum_address(value)


def validate_address(name: str, value: Any) -> ChecksumAddress:
    if not is_valid_address(value):
        raise InvalidAddress(f"Invalid {name} address: {value}")
    return to_checksum_address(value)


def check_etherscan_plugin(network_name: typing.Optional[str] = None) -> None:
    """
    Checks that the ape-etherscan plugin is installed and that
    the appropriate API key environment variable is set.
    """
    if is_local_network(network_name):
        # unnecessary for local deployment
        return
    try:
        import ape_etherscan  # noqa: F401
        from ape_etherscan.utils import API_KEY_ENV_KEY_MAP
    except ImportError:
        raise ImportError("Please install the ape-etherscan plugin to use this script.")
    ecosystem_name = networks.provider.network.ecosystem.name
    explorer_envvar = API_KEY_ENV_KEY_MAP.get(ecosystem_name)
    if not explorer_envvar:
        raise ValueError(f"No explorer API key known for ecosystem '{ecosystem_name}'.")
    api_key = os.environ.get(explorer_envvar)
    if not api_key:
        raise ValueError(f"{explorer_envvar} is not set.")


def check_plugins(network_name: typing.Optional[str] = None) -> None:
    print("Checking plugins...")
    check_etherscan_plugin(network_name)


def _get_dependency_contract_container(contract: str) -> ContractContainer:
    for dependency_name, dependency_versions in project.dependencies.items():
        if len(dependency_versions) > 1:
            raise ValueError(f"Ambiguous {dependency_name} dependency for {contract}")
        try:
            dependency_api = list(dependency_versions.values())[0]
            contract_container = getattr(dependency_api, contract)
            return contract_container
        except AttributeError:
            continue
    raise ValueError(f"No contract found with name '{contract}'.")


def contract_name_from_path(contract: str) -> str:
    """'path/to/Source.sol:Name' -> 'Name'"""
    return contract.split(":")[-1]


def get_contract_container(contract: str) -> ContractContainer:
    contract = contract_name_from_path(contract)
    try:
        contract_container = getattr(project, contract)
    except AttributeError:
        # not in root project; check dependencies
        contract_container = _get_dependency_contract_container(contract)

    return contract_container


def _is_encodable(abi_type: str, value: Any) -> bool:
    if abi_type == "address":
        # hex addresses only; web3 would otherwise try to resolve ENS names
        return is_valid_address(value)
    return w3.is_encodable(abi_type, value)


def _find_method_abi(method_abis: List[MethodABI], args: typing.Sequence[Any]) -> MethodABI:
    """Returns the first ABI whose inputs can encode the given arguments."""
    if len(method_abis) == 0:
        raise ValueError("No method abis provided for validation of args")

    abis_matching_args_length = [abi for abi in method_abis if len(abi.inputs) == len(args)]
    for abi in abis_matching_args_length:
        for arg, abi_input in zip(args, abi.inputs):
            if not _is_encodable(abi_input.type, arg):
                break
        else:
            return abi
    raise ValueError(
        f"Could not find ABI for '{method_abis[0].name}' with {len(args)} arg(s) and given type(s)"
    )


def _validate_method_args(
    method_abis: List[MethodABI], args: typing.Sequence[Any]
) -> Dict[str, Any]:
    """Validates the transaction arguments against the function ABI."""
    abi = _find_method_abi(method_abis=method_abis, args=args)
    return {abi_input.name: arg for arg, abi_input in zip(args, abi.inputs)}
