#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, network_option

from deployment.networks import get_network_name, is_local_network
from deployment.options import params_filepath_option, proxy_option
from deployment.params import DeploymentParams
from deployment.toolkit import ChainExplorer
from deployment.utils import check_plugins
from deployment.vmahout import verify_deployment


@click.command(cls=ConnectedProviderCommand, name="verify-vmahout")
@network_option(required=True)
@proxy_option
@params_filepath_option
def cli(network, proxy, params_filepath):
    """Verify the VMahout implementation behind a proxy, then the proxy itself."""
    params = DeploymentParams.from_yaml(params_filepath)
    network_name = get_network_name()
    if is_local_network(network_name, params.local_networks):
        raise click.ClickException(f"Nothing to verify on local network '{network_name}'.")
    check_plugins()

    implementation_verified, proxy_verified = verify_deployment(ChainExplorer(), proxy, params)
    if not (implementation_verified and proxy_verified):
        print("WARNING: Not all contracts were verified; see messages above.")


if __name__ == "__main__":
    cli()
