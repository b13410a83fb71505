"""
Deployment and upgrade workflows for the VMahout ERC20Votes token,
which lives behind a UUPS (ERC-1967) proxy.

The workflows only orchestrate a chain toolkit (see deployment.toolkit.ChainToolkit);
they can be driven by any object exposing the same methods.
"""

import typing
from typing import Any, List

from eth_typing import ChecksumAddress

from deployment.constants import MINTER_ROLE
from deployment.networks import should_verify
from deployment.params import DeploymentParams
from deployment.utils import validate_address
from deployment.verification import verify_safe, wait_for_explorer

DEFAULT_PARAMS = DeploymentParams()


def grant_minter_role(toolkit, token, minter: ChecksumAddress):
    print(f"Granting MINTER_ROLE to {minter}...")
    minter_role = getattr(token, MINTER_ROLE)()
    receipt = toolkit.transact(token.grantRole, minter_role, minter)
    print(f"MINTER_ROLE granted to {minter}")
    return receipt


def verify_deployment(
    toolkit,
    proxy_address: ChecksumAddress,
    params: DeploymentParams = DEFAULT_PARAMS,
    initializer_args: typing.Optional[List[Any]] = None,
) -> typing.Tuple[bool, bool]:
    """
    Best-effort verification of the implementation behind the proxy, then of the
    proxy itself. When the initializer arguments are known, the proxy is verified
    with its full constructor arguments (implementation, initializer calldata).
    """
    implementation = toolkit.get_implementation_address(proxy_address)
    print(f"Verifying implementation at {implementation}...")
    implementation_verified = verify_safe(toolkit, implementation)

    extra = {"contract": params.proxy_contract}
    if initializer_args is not None:
        factory = toolkit.get_contract_factory(params.contract)
        init_data = toolkit.encode_initializer(factory, params.initializer, initializer_args)
        extra["constructor_arguments"] = [implementation, init_data]
    print(f"Verifying proxy at {proxy_address}...")
    proxy_verified = verify_safe(toolkit, proxy_address, **extra)
    return implementation_verified, proxy_verified


def deploy_vmahout(
    toolkit,
    minter: str,
    params: DeploymentParams = DEFAULT_PARAMS,
    verify: typing.Optional[bool] = None,
) -> ChecksumAddress:
    """Deploys VMahout behind a new proxy and returns the proxy address."""
    minter = validate_address(name="minter", value=minter)

    deployer = toolkit.get_account()

    print(f"Deploying {params.contract}...")
    print(f"  Deployer (admin & upgrader): {deployer.address}")
    print(f"  Minter:                      {minter}")

    factory = toolkit.get_contract_factory(params.contract)
    # admin, minter, upgrader
    initializer_args = [deployer.address, minter, deployer.address]
    proxy = toolkit.deploy_proxy(
        factory, initializer_args, initializer=params.initializer, kind=params.kind
    )
    proxy_address = proxy.address
    print(f"{params.contract} proxy deployed at: {proxy_address}")

    if should_verify(toolkit.network_name, params.local_networks, verify):
        wait_for_explorer(params.verification_delay, "deployment")
        verify_deployment(toolkit, proxy_address, params, initializer_args=initializer_args)

    return proxy_address


def upgrade_vmahout(
    toolkit,
    proxy: str,
    minter: typing.Optional[str] = None,
    params: DeploymentParams = DEFAULT_PARAMS,
    verify: typing.Optional[bool] = None,
) -> ChecksumAddress:
    """
    Points an existing proxy at a freshly deployed implementation and
    optionally grants MINTER_ROLE to a new minter. Returns the proxy address.
    """
    proxy = validate_address(name="proxy", value=proxy)
    if minter:
        minter = validate_address(name="minter", value=minter)

    deployer = toolkit.get_account()

    print(f"Upgrading {params.contract} proxy at {proxy}...")
    print(f"  Upgrader (tx sender): {deployer.address}")
    if minter:
        print(f"  Minter (will receive MINTER_ROLE): {minter}")

    factory = toolkit.get_contract_factory(params.contract)

    # the manifest may be stale, or the proxy deployed elsewhere
    toolkit.force_import(proxy, factory, kind=params.kind)

    upgraded = toolkit.upgrade_proxy(proxy, factory)
    print(f"Upgrade complete. Proxy still at: {upgraded.address}")

    if minter:
        grant_minter_role(toolkit, upgraded, minter)

    if should_verify(toolkit.network_name, params.local_networks, verify):
        wait_for_explorer(params.verification_delay, "upgrade")
        # proxy verification is repeated even if it already succeeded once
        verify_deployment(toolkit, proxy, params)

    return upgraded.address
