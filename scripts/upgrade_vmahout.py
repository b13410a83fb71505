#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from deployment.networks import get_network_name, should_verify
from deployment.options import (
    auto_option,
    optional_minter_option,
    params_filepath_option,
    proxy_option,
    verification_delay_option,
    verify_option,
)
from deployment.params import DeploymentParams
from deployment.toolkit import ChainToolkit
from deployment.utils import check_plugins
from deployment.vmahout import upgrade_vmahout


@click.command(cls=ConnectedProviderCommand, name="upgrade-vmahout")
@account_option()
@network_option(required=True)
@proxy_option
@optional_minter_option
@params_filepath_option
@verify_option
@verification_delay_option
@auto_option
def cli(network, account, proxy, minter, params_filepath, verify, verification_delay, auto):
    """
    Upgrade an existing VMahout proxy to the latest implementation,
    optionally granting MINTER_ROLE to a new minter.

    ape run upgrade_vmahout --network ethereum:sepolia:infura --account deployer --proxy 0x...
    """
    params = DeploymentParams.from_yaml(params_filepath).with_verification_delay(
        verification_delay
    )
    if should_verify(get_network_name(), params.local_networks, verify):
        check_plugins()

    toolkit = ChainToolkit.from_params(params, account=account, autosign=auto)
    proxy_address = upgrade_vmahout(toolkit, proxy, minter=minter, params=params, verify=verify)
    print(f"(i) {params.contract} proxy: {proxy_address}")
    return proxy_address


if __name__ == "__main__":
    cli()
