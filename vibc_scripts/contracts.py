"""
On-chain handles for the IBC app and the Universal Channel middleware.

Only the read-only getters the scripts need are in the ABIs.
"""

from typing import Iterator, Optional, Tuple

import requests
from web3 import Web3
from web3.exceptions import Web3Exception

IBC_APP_ABI = [
    {
        "inputs": [],
        "name": "mw",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    }
]

UC_HANDLER_ABI = [
    {
        "inputs": [],
        "name": "dispatcher",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [{"name": "", "type": "uint256"}],
        "name": "connectedChannels",
        "outputs": [{"name": "", "type": "bytes32"}],
        "stateMutability": "view",
        "type": "function"
    }
]

# Reverts, RPC error payloads and HTTP transport failures of a read call
RPC_ERRORS = (Web3Exception, ValueError, requests.exceptions.RequestException)


def connect(rpc_url: str) -> Web3:
    return Web3(Web3.HTTPProvider(rpc_url))


def get_ibc_app(w3: Web3, address: str):
    return w3.eth.contract(address=Web3.to_checksum_address(address), abi=IBC_APP_ABI)


def get_uc_handler(w3: Web3, address: str):
    return w3.eth.contract(address=Web3.to_checksum_address(address), abi=UC_HANDLER_ABI)


def probe_connected_channel(uc_handler, index: int) -> Optional[bytes]:
    """connectedChannels(index), or None once the index is past the end of the list.

    The getter reverts for an out of bounds index. Any call failure is read
    as the end of the list.
    """
    try:
        return uc_handler.functions.connectedChannels(index).call()
    except RPC_ERRORS:
        return None


def iter_connected_channels(uc_handler) -> Iterator[Tuple[int, bytes]]:
    """Yield (index, channel_bytes) from index 0 until the first failing probe"""
    index = 0
    while True:
        channel = probe_connected_channel(uc_handler, index)
        if channel is None:
            return
        yield index, channel
        index += 1
