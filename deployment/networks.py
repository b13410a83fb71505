from typing import Iterable, Optional

from ape import networks

from deployment.constants import LOCAL_NETWORKS


def get_network_name() -> str:
    """Returns the name of the network the active provider is connected to."""
    return networks.provider.network.name


def is_local_network(
    network_name: Optional[str] = None, local_networks: Iterable[str] = LOCAL_NETWORKS
) -> bool:
    network_name = network_name or get_network_name()
    return network_name in local_networks


def should_verify(
    network_name: str,
    local_networks: Iterable[str] = LOCAL_NETWORKS,
    verify: Optional[bool] = None,
) -> bool:
    """
    Local networks have no explorer and are never verified. On any other network
    verification happens unless it was explicitly turned off.
    """
    if is_local_network(network_name, local_networks):
        return False
    if verify is None:
        return True
    return verify
