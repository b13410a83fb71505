from pathlib import Path

import click

from deployment.constants import VMAHOUT_PARAMS_FILEPATH
from deployment.types import ChecksumAddress, MinInt

minter_option = click.option(
    "--minter",
    "-m",
    help="Address that will receive MINTER_ROLE",
    type=ChecksumAddress(),
    required=True,
)

optional_minter_option = click.option(
    "--minter",
    "-m",
    help="Address that will receive MINTER_ROLE",
    type=ChecksumAddress(allow_empty=True),
    required=False,
    default=None,
)

proxy_option = click.option(
    "--proxy",
    "-p",
    help="Existing proxy address",
    type=ChecksumAddress(),
    required=True,
)

params_filepath_option = click.option(
    "--params-filepath",
    "-f",
    help="Deployment parameters YAML file",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    default=VMAHOUT_PARAMS_FILEPATH,
    show_default=True,
)

verify_option = click.option(
    "--verify/--no-verify",
    help="Verify sources on the network explorer; never done on local networks.",
    default=None,
)

verification_delay_option = click.option(
    "--verification-delay",
    help="Seconds to wait for the explorer to index before verifying.",
    type=MinInt(0),
    required=False,
    default=None,
)

auto_option = click.option(
    "--auto",
    help="Automatically sign transactions.",
    is_flag=True,
)
