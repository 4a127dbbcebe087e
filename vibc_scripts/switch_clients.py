#!/usr/bin/env python3
"""
Switch Clients (DEPRECATED)

Flips config.json between the proof client and the sim client:

1. Restores createChannel addresses, sendPacket and sendUniversalPacket from
   the backup section, or writes placeholder defaults when there is no backup
2. Sets the universal channel ids of both chains from the chain registry
3. Backs up the current sendPacket / sendUniversalPacket
4. Negates proofsEnabled

No longer used by the current SDK, kept for existing setups.

Usage:
    python -m vibc_scripts.switch_clients
    python -m vibc_scripts.switch_clients --config path/to/config.json
"""

import argparse
import copy
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .config import ConfigFileError, get_channel_endpoints, get_config_path, load_config, save_config
from .console import print_error, print_ok, print_warning
from .registry import ChainRegistry, RegistryLookupError, switch_profile

DEFAULT_CHANNEL_ADDR = "0x1234567890AbCdEf1234567890aBcDeF12345678"
DEFAULT_PORT_ADDR = "0x1234567890abcdef1234567890abcdef12345678"
DEFAULT_TIMEOUT = 36000
DEFAULT_RECV_GAS_LIMIT = 800000
DEFAULT_ACK_GAS_LIMIT = 600000


def _default_network(channel_id: str) -> Dict[str, Any]:
    return {
        "portAddr": DEFAULT_PORT_ADDR,
        "channelId": channel_id,
        "timeout": DEFAULT_TIMEOUT,
    }


def default_sections(source: str, destination: str) -> Dict[str, Dict[str, Any]]:
    """Placeholder createChannel, sendPacket and sendUniversalPacket sections"""
    return {
        "createChannel": {
            "srcChain": source,
            "srcAddr": DEFAULT_CHANNEL_ADDR,
            "dstChain": destination,
            "dstAddr": DEFAULT_CHANNEL_ADDR,
            "version": "1.0",
            "ordering": 0,
            "fees": False,
        },
        "sendPacket": {
            "networks": {
                "optimism": _default_network("channel-n"),
                "base": _default_network("channel-n"),
            },
            "recvPacketGasLimit": DEFAULT_RECV_GAS_LIMIT,
            "ackPacketGasLimit": DEFAULT_ACK_GAS_LIMIT,
        },
        "sendUniversalPacket": {
            "networks": {
                "optimism": _default_network("channel-x"),
                "base": _default_network("channel-y"),
            },
            "recvPacketGasLimit": DEFAULT_RECV_GAS_LIMIT,
            "ackPacketGasLimit": DEFAULT_ACK_GAS_LIMIT,
        },
    }


def has_backup(config: Dict[str, Any]) -> bool:
    backup = config.get("backup")
    return isinstance(backup, dict) and len(backup) > 0


def flip_config(config: Dict[str, Any], registry: ChainRegistry) -> Dict[str, Any]:
    """Return the flipped config. `config` itself is left untouched."""
    snapshot = copy.deepcopy(config)
    updated = copy.deepcopy(config)

    source, destination = get_channel_endpoints(snapshot)
    src_chain_id = registry.chain_id(source)
    dst_chain_id = registry.chain_id(destination)

    try:
        if has_backup(updated):
            backup = updated["backup"]
            updated["createChannel"]["srcAddr"] = backup["sendPacket"]["networks"][source]["portAddr"]
            updated["createChannel"]["dstAddr"] = backup["sendPacket"]["networks"][destination]["portAddr"]
            updated["sendPacket"] = backup["sendPacket"]
            updated["sendUniversalPacket"] = backup["sendUniversalPacket"]
        else:
            updated.update(default_sections(source, destination))

        # Universal channel ids come from the client that was active before the flip
        profile = switch_profile(snapshot.get("proofsEnabled"))
        universal_networks = updated["sendUniversalPacket"]["networks"]
        universal_networks[source]["channelId"] = registry.client_value(src_chain_id, profile, "universalChannelId")
        universal_networks[destination]["channelId"] = registry.client_value(dst_chain_id, profile, "universalChannelId")

        # Sections missing before the flip are left out of the backup
        updated["backup"] = {
            section: snapshot[section]
            for section in ("sendPacket", "sendUniversalPacket")
            if section in snapshot
        }
    except RegistryLookupError:
        raise
    except (KeyError, TypeError) as e:
        raise ConfigFileError(f"Malformed config, missing {e}") from e

    updated["proofsEnabled"] = not updated.get("proofsEnabled")
    return updated


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="(DEPRECATED) Switch config.json between the proof and sim clients")
    parser.add_argument("--config", help="Config file (default: $CONFIG_PATH or ./config.json)")
    parser.add_argument("--registry", help="Chain registry file (default: $CHAIN_REGISTRY_PATH or ./chain_registry.json)")
    args = parser.parse_args(argv)

    load_dotenv()
    print_warning("switch_clients is deprecated and no longer used by the current SDK")

    try:
        config_path = args.config or get_config_path()
        registry = ChainRegistry.from_env(args.registry)
        config = load_config(config_path)
        updated = flip_config(config, registry)
        save_config(updated, config_path)
    except (ConfigFileError, RegistryLookupError) as e:
        print_error(f"Failed to update config: {e}")
        return 1

    print_ok(f"Config updated (proofsEnabled: {str(updated['proofsEnabled']).lower()})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
