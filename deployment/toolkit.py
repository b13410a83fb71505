import typing
from pathlib import Path
from typing import Any, List, Sequence

from ape import accounts, chain, networks
from ape.api import AccountAPI
from ape.contracts import ContractContainer, ContractInstance
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from ethpm_types import MethodABI
from hexbytes import HexBytes

from deployment.confirm import _confirm_deployment, _confirm_initializer
from deployment.constants import (
    ERC1967_PROXY,
    LOCAL_NETWORKS,
    SUPPORTED_PROXY_KINDS,
    UUPS,
    VMAHOUT_INITIALIZER,
    VMAHOUT_MANIFEST_FILEPATH,
)
from deployment.networks import get_network_name, is_local_network
from deployment.params import DeploymentParams, Transactor
from deployment.registry import ProxyEntry, get_proxy_entry, record_proxy
from deployment.utils import (
    _find_method_abi,
    _is_encodable,
    _validate_method_args,
    get_contract_container,
)


def _check_kind(kind: str) -> None:
    if kind not in SUPPORTED_PROXY_KINDS:
        raise ValueError(
            f"Unsupported proxy kind '{kind}'; expected one of {SUPPORTED_PROXY_KINDS}."
        )


def _get_method_abis(container: ContractContainer, method_name: str) -> List[MethodABI]:
    method_abis = [abi for abi in container.contract_type.methods if abi.name == method_name]
    if not method_abis:
        raise ValueError(f"{container.contract_type.name} has no method named '{method_name}'.")
    return method_abis


def _validate_constructor_arguments(container: ContractContainer, args: Sequence[Any]) -> None:
    """Validates constructor arguments against the constructor ABI."""
    contract_name = container.contract_type.name
    abi_inputs = container.constructor.abi.inputs
    if len(args) != len(abi_inputs):
        raise ValueError(
            f"Constructor arguments length mismatch - "
            f"{contract_name} ABI requires {len(abi_inputs)}, Got {len(args)}."
        )
    for position, (abi_input, value) in enumerate(zip(abi_inputs, args)):
        if not _is_encodable(abi_input.type, value):
            raise ValueError(
                f"{contract_name} constructor argument '{abi_input.name}' at position {position} "
                f"has a value '{value}' whose type does not match expected ABI type "
                f"'{abi_input.type}'"
            )


class ChainExplorer:
    """
    Read-only chain access: network identity, contract loading,
    proxy inspection and explorer verification.
    """

    @property
    def network_name(self) -> str:
        return get_network_name()

    @property
    def chain_id(self) -> int:
        return networks.provider.chain_id

    def get_contract_factory(self, contract_name: str) -> ContractContainer:
        return get_contract_container(contract_name)

    def encode_initializer(
        self, factory: ContractContainer, initializer: str, args: Sequence[Any]
    ) -> HexBytes:
        """Returns the calldata of the initializer call executed by the proxy constructor."""
        abi = _find_method_abi(method_abis=_get_method_abis(factory, initializer), args=args)
        ecosystem = networks.provider.network.ecosystem
        selector = ecosystem.get_method_selector(abi)
        return HexBytes(selector + ecosystem.encode_calldata(abi, *args))

    def get_implementation_address(self, proxy_address: ChecksumAddress) -> ChecksumAddress:
        proxy_info = networks.provider.network.ecosystem.get_proxy_info(proxy_address)
        if proxy_info is None:
            raise ValueError(
                f"No implementation found behind {proxy_address}. "
                "Are you sure this is an EIP1967-compatible proxy?"
            )
        return to_checksum_address(proxy_info.target)

    def verify(
        self,
        address: ChecksumAddress,
        contract: typing.Optional[str] = None,
        constructor_arguments: typing.Optional[Sequence[Any]] = None,
    ) -> None:
        """Publishes the source of the contract at address to the network's explorer."""
        explorer = networks.provider.network.explorer
        if explorer is None:
            raise ValueError(f"No explorer plugin available for network '{self.network_name}'.")

        if contract:
            container = get_contract_container(contract)
            # the explorer looks up sources by the contract type cached for the address
            chain.contracts[address] = container.contract_type
            if constructor_arguments is not None:
                _validate_constructor_arguments(container, constructor_arguments)
                pretty_args = ", ".join(str(arg) for arg in constructor_arguments)
                print(f"(i) Constructor arguments: {pretty_args}")

        explorer.publish_contract(address)


class ChainToolkit(Transactor, ChainExplorer):
    """
    ape-backed signer access and UUPS proxy lifecycle on top of ChainExplorer.

    Proxies deployed or imported through the toolkit are tracked in a
    JSON manifest so that upgrades only ever target known proxies.
    """

    def __init__(
        self,
        account: typing.Optional[AccountAPI] = None,
        autosign: bool = False,
        manifest_filepath: Path = VMAHOUT_MANIFEST_FILEPATH,
        proxy_contract: str = ERC1967_PROXY,
        local_networks: Sequence[str] = LOCAL_NETWORKS,
    ):
        if account is None and is_local_network(local_networks=local_networks):
            # first available signer
            account = accounts.test_accounts[0]
        super().__init__(account=account, autosign=autosign)
        self.manifest_filepath = manifest_filepath
        self.proxy_contract = proxy_contract

    @classmethod
    def from_params(
        cls,
        params: DeploymentParams,
        account: typing.Optional[AccountAPI] = None,
        autosign: bool = False,
    ) -> "ChainToolkit":
        return cls(
            account=account,
            autosign=autosign,
            manifest_filepath=params.manifest_filepath,
            proxy_contract=params.proxy_contract,
            local_networks=params.local_networks,
        )

    def _deploy(
        self, container: ContractContainer, *args, confirm: bool = True
    ) -> ContractInstance:
        if confirm and not self._autosign:
            _confirm_deployment(container.contract_type.name)
        return self.get_account().deploy(container, *args)

    def deploy_proxy(
        self,
        factory: ContractContainer,
        args: Sequence[Any],
        initializer: str = VMAHOUT_INITIALIZER,
        kind: str = UUPS,
    ) -> ContractInstance:
        _check_kind(kind)
        contract_name = factory.contract_type.name
        method_abis = _get_method_abis(factory, initializer)
        named_args = _validate_method_args(method_abis=method_abis, args=args)
        init_data = self.encode_initializer(factory, initializer, args)
        if not self._autosign:
            _confirm_initializer(contract_name, initializer, named_args)

        print(f"\nDeploying {contract_name} implementation.")
        implementation = self._deploy(factory, confirm=False)

        proxy_container = get_contract_container(self.proxy_contract)
        print(
            f"\nDeploying {proxy_container.contract_type.name} "
            f"contract to proxy {contract_name}."
        )
        proxy = self._deploy(proxy_container, implementation.address, init_data)

        entry = ProxyEntry(
            chain_id=self.chain_id,
            address=to_checksum_address(proxy.address),
            contract_name=contract_name,
            implementation=to_checksum_address(implementation.address),
            kind=kind,
        )
        record_proxy(entry, self.manifest_filepath)
        print(
            f"\nWrapping {contract_name} into {proxy_container.contract_type.name} "
            f"at {proxy.address}."
        )
        return factory.at(proxy.address)

    def force_import(
        self, proxy_address: ChecksumAddress, factory: ContractContainer, kind: str = UUPS
    ) -> ContractInstance:
        """Registers (or refreshes) an existing proxy in the manifest."""
        _check_kind(kind)
        proxy_address = to_checksum_address(proxy_address)
        implementation = self.get_implementation_address(proxy_address)
        contract_name = factory.contract_type.name
        print(
            f"(i) Importing {contract_name} proxy at {proxy_address} "
            f"with implementation at {implementation}"
        )
        entry = ProxyEntry(
            chain_id=self.chain_id,
            address=proxy_address,
            contract_name=contract_name,
            implementation=implementation,
            kind=kind,
        )
        record_proxy(entry, self.manifest_filepath)
        return factory.at(proxy_address)

    def upgrade_proxy(
        self, proxy_address: ChecksumAddress, factory: ContractContainer
    ) -> ContractInstance:
        proxy_address = to_checksum_address(proxy_address)
        entry = get_proxy_entry(self.manifest_filepath, self.chain_id, proxy_address)
        if entry is None:
            raise ValueError(
                f"Proxy at {proxy_address} is not registered in {self.manifest_filepath}; "
                "import it first."
            )
        _check_kind(entry.kind)

        contract_name = factory.contract_type.name
        print(f"\nDeploying new {contract_name} implementation.")
        implementation = self._deploy(factory)

        proxy = factory.at(proxy_address)
        # UUPS: the upgrade is authorized and executed by the current implementation
        self.transact(proxy.upgradeToAndCall, implementation.address, b"")

        entry = entry._replace(
            contract_name=contract_name,
            implementation=to_checksum_address(implementation.address),
        )
        record_proxy(entry, self.manifest_filepath)
        return factory.at(proxy_address)
