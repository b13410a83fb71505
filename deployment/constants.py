from pathlib import Path

#
# Filesystem
#

DEPLOYMENT_DIR = Path(__file__).parent
CONSTRUCTOR_PARAMS_DIR = DEPLOYMENT_DIR / "constructor_params"
ARTIFACTS_DIR = DEPLOYMENT_DIR / "artifacts"

VMAHOUT_PARAMS_FILEPATH = CONSTRUCTOR_PARAMS_DIR / "vmahout.yml"
VMAHOUT_MANIFEST_FILEPATH = ARTIFACTS_DIR / "vmahout-proxies.json"

#
# Networks
#

LOCAL_NETWORKS = ("local", "hardhat", "localhost")

#
# Contracts
#

VMAHOUT = "VMahout"
VMAHOUT_INITIALIZER = "initialize"
MINTER_ROLE = "MINTER_ROLE"

UUPS = "uups"
SUPPORTED_PROXY_KINDS = [UUPS]

ERC1967_PROXY = "@openzeppelin/contracts/proxy/ERC1967/ERC1967Proxy.sol:ERC1967Proxy"

#
# Verification
#

# seconds to wait for the explorer to index a deployment
VERIFICATION_DELAY = 90
