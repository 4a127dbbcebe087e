"""
Chain Registry

Static deployment data the scripts compare the config file against:

    {
      "networks": {"optimism": {"chainId": 11155420, "rpc": "https://..."}},
      "polymer": {
        "11155420": {
          "clients": {
            "sim-client": {
              "universalChannelAddr": "0x...",
              "dispatcherAddr": "0x...",
              "universalChannelId": "channel-10"
            }
          }
        }
      }
    }

Loaded from CHAIN_REGISTRY_PATH (default ./chain_registry.json). RPC URLs can
be overridden per network with RPC_URL_<NETWORK>, e.g. RPC_URL_BASE.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import ConfigFileError

DEFAULT_REGISTRY_FILE = "chain_registry.json"

OP_CLIENT = "op-client"
SIM_CLIENT = "sim-client"
SUBFINALITY_CLIENT = "subfinality"


class RegistryLookupError(KeyError):
    """Network, chain id or client profile missing from the registry"""

    def __str__(self):
        return self.args[0] if self.args else "registry lookup failed"


def sanity_profile(proofs_enabled: Any) -> str:
    """Client profile the sanity check expects for the proofsEnabled flag"""
    return OP_CLIENT if proofs_enabled is True else SIM_CLIENT


def switch_profile(proofs_enabled: Any) -> str:
    """Client profile switch_clients reads universal channel ids from"""
    return SUBFINALITY_CLIENT if proofs_enabled is True else SIM_CLIENT


def rpc_env_var(network: str) -> str:
    return "RPC_URL_" + network.upper().replace("-", "_")


class ChainRegistry:
    def __init__(self, networks: Dict[str, Dict[str, Any]], polymer: Dict[str, Dict[str, Any]]):
        self.networks = networks
        self.polymer = polymer

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChainRegistry":
        if not isinstance(data, dict):
            raise ConfigFileError("Chain registry must be a JSON object")
        return cls(networks=data.get("networks") or {}, polymer=data.get("polymer") or {})

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ChainRegistry":
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigFileError(f"Cannot read chain registry {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigFileError(f"Invalid JSON in chain registry {path}: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, path: Optional[Union[str, Path]] = None) -> "ChainRegistry":
        path = path or os.environ.get("CHAIN_REGISTRY_PATH") or DEFAULT_REGISTRY_FILE
        return cls.load(path)

    def chain_id(self, network: str) -> int:
        try:
            return int(self.networks[network]["chainId"])
        except (KeyError, TypeError, ValueError):
            raise RegistryLookupError(f"No chainId configured for network '{network}'") from None

    def rpc_url(self, network: str) -> str:
        url = os.environ.get(rpc_env_var(network)) or (self.networks.get(network) or {}).get("rpc")
        if not url:
            raise RegistryLookupError(
                f"No RPC URL for network '{network}' (set {rpc_env_var(network)} or networks.{network}.rpc)"
            )
        return url

    def client(self, chain_id: Union[int, str], profile: str) -> Dict[str, Any]:
        """polymer[chainId]['clients'][profile]"""
        try:
            client = self.polymer[str(chain_id)]["clients"][profile]
        except (KeyError, TypeError):
            raise RegistryLookupError(f"No '{profile}' client configured for chain {chain_id}") from None
        if not isinstance(client, dict):
            raise RegistryLookupError(f"Malformed '{profile}' client entry for chain {chain_id}")
        return client

    def client_value(self, chain_id: Union[int, str], profile: str, key: str) -> Any:
        client = self.client(chain_id, profile)
        if key not in client:
            raise RegistryLookupError(f"No {key} in '{profile}' client for chain {chain_id}")
        return client[key]
