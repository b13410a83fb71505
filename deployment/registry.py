import json
from collections import defaultdict
from pathlib import Path
from typing import List, NamedTuple, Optional

from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from deployment.utils import _load_json

ChainId = int
ContractName = str


STANDARD_REGISTRY_JSON_FORMAT = {"indent": 4, "separators": (",", ": ")}


class ProxyEntry(NamedTuple):
    """Represents a single proxy tracked by the manifest."""

    chain_id: ChainId
    address: ChecksumAddress
    contract_name: ContractName
    implementation: ChecksumAddress
    kind: str


def read_manifest(filepath: Path) -> List[ProxyEntry]:
    if not filepath.exists():
        return list()
    data = _load_json(filepath)
    entries = list()
    for chain_id, proxies in data.items():
        for proxy_address, info in proxies.items():
            entry = ProxyEntry(
                chain_id=int(chain_id),
                address=to_checksum_address(proxy_address),
                contract_name=info["contract_name"],
                implementation=to_checksum_address(info["implementation"]),
                kind=info["kind"],
            )
            entries.append(entry)
    return entries


def write_manifest(entries: List[ProxyEntry], filepath: Path) -> Path:
    """Writes the proxy manifest, replacing any existing file."""
    # sort entries to enforce common order
    entries = sorted(entries, key=lambda entry: (str(entry.chain_id), entry.address))

    data = defaultdict(dict)
    for entry in entries:
        data[str(entry.chain_id)][entry.address] = {
            "contract_name": entry.contract_name,
            "implementation": entry.implementation,
            "kind": entry.kind,
        }

    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w") as file:
        json.dump(data, file, **STANDARD_REGISTRY_JSON_FORMAT)

    return filepath


def get_proxy_entry(
    filepath: Path, chain_id: ChainId, address: ChecksumAddress
) -> Optional[ProxyEntry]:
    address = to_checksum_address(address)
    for entry in read_manifest(filepath):
        if entry.chain_id == chain_id and entry.address == address:
            return entry
    return None


def record_proxy(entry: ProxyEntry, filepath: Path) -> Path:
    """Adds the entry to the manifest, replacing a previous entry for the same proxy."""
    entries = [
        e
        for e in read_manifest(filepath)
        if not (e.chain_id == entry.chain_id and e.address == entry.address)
    ]
    entries.append(entry)
    write_manifest(entries=entries, filepath=filepath)
    print(f"(i) Proxy manifest updated at {filepath}")
    return filepath
