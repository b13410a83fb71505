import typing
from pathlib import Path
from typing import Any, Dict, Tuple

from ape.api import AccountAPI, ReceiptAPI
from ape.cli.choices import select_account
from ape.contracts.base import ContractTransactionHandler

from deployment.confirm import _continue
from deployment.constants import (
    ARTIFACTS_DIR,
    ERC1967_PROXY,
    LOCAL_NETWORKS,
    SUPPORTED_PROXY_KINDS,
    UUPS,
    VERIFICATION_DELAY,
    VMAHOUT,
    VMAHOUT_INITIALIZER,
    VMAHOUT_MANIFEST_FILEPATH,
)
from deployment.utils import _load_yaml, _validate_method_args


def get_manifest_filepath(config: Dict) -> Path:
    """Returns the filepath of the proxy manifest artifact."""
    artifact_config = config.get("artifacts") or dict()
    artifact_dir = Path(artifact_config.get("dir", ARTIFACTS_DIR))
    filename = artifact_config.get("filename", VMAHOUT_MANIFEST_FILEPATH.name)
    if not filename:
        raise ValueError("artifact filename is not set in params file.")
    return artifact_dir / filename


class DeploymentParams(typing.NamedTuple):
    """What to deploy behind the proxy, and how to verify it afterwards."""

    contract: str = VMAHOUT
    initializer: str = VMAHOUT_INITIALIZER
    kind: str = UUPS
    proxy_contract: str = ERC1967_PROXY
    verification_delay: int = VERIFICATION_DELAY
    local_networks: Tuple[str, ...] = LOCAL_NETWORKS
    manifest_filepath: Path = VMAHOUT_MANIFEST_FILEPATH

    @classmethod
    def from_config(cls, config: Dict) -> "DeploymentParams":
        print("Validating parameters YAML...")
        if not config:
            raise ValueError("Parameters file is empty.")

        deployment = config.get("deployment")
        if not deployment:
            raise ValueError("deployment is not set in params file.")

        kind = deployment.get("kind", UUPS)
        if kind not in SUPPORTED_PROXY_KINDS:
            raise ValueError(
                f"Unsupported proxy kind '{kind}'; expected one of {SUPPORTED_PROXY_KINDS}."
            )

        verification = config.get("verification") or dict()
        delay = verification.get("delay")
        if delay is None:
            delay = VERIFICATION_DELAY
        try:
            delay = int(delay)
        except (TypeError, ValueError):
            raise ValueError(f"Verification delay must be an integer, got {delay!r}.")
        if delay < 0:
            raise ValueError(f"Verification delay must not be negative, got {delay}.")

        local_networks = verification.get("local_networks", LOCAL_NETWORKS)
        if isinstance(local_networks, str):
            raise ValueError("local_networks must be a list of network names.")

        return cls(
            contract=deployment.get("contract", VMAHOUT),
            initializer=deployment.get("initializer", VMAHOUT_INITIALIZER),
            kind=kind,
            proxy_contract=deployment.get("proxy_contract", ERC1967_PROXY),
            verification_delay=delay,
            local_networks=tuple(local_networks),
            manifest_filepath=get_manifest_filepath(config),
        )

    @classmethod
    def from_yaml(cls, filepath: Path) -> "DeploymentParams":
        config = _load_yaml(filepath)
        return cls.from_config(config)

    def with_verification_delay(self, delay: typing.Optional[int]) -> "DeploymentParams":
        if delay is None:
            return self
        return self._replace(verification_delay=delay)


class Transactor:
    """
    Represents an ape account plus validated/annotated transaction execution.
    """

    def __init__(self, account: typing.Optional[AccountAPI] = None, autosign: bool = False):
        if account is None:
            self._account = select_account()
        else:
            self._account = account
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
        self._autosign = autosign
        if hasattr(self._account, "set_autosign"):
            # test accounts always sign
            self._account.set_autosign(autosign)

    def get_account(self) -> AccountAPI:
        """Returns the transactor account."""
        return self._account

    def transact(self, method: ContractTransactionHandler, *args: Any) -> ReceiptAPI:
        named_args = _validate_method_args(method_abis=method.abis, args=args)
        base_message = (
            f"\nTransacting {method.contract.contract_type.name}"
            f"[{method.contract.address[:10]}].{method}"
        )
        if named_args:
            pretty_args = "\n\t".join(f"{k}={v}" for k, v in named_args.items())
            message = f"{base_message} with arguments:\n\t{pretty_args}"
        else:
            message = f"{base_message} with no arguments"
        print(message)
        if not self._autosign:
            _continue()

        return method(*args, sender=self._account)
