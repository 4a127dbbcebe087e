"""
Config file access

The config file (config.json by default, CONFIG_PATH to override) holds the
createChannel / sendPacket / sendUniversalPacket sections, the isUniversal
and proofsEnabled flags and the backup written by switch_clients.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Union

DEFAULT_CONFIG_FILE = "config.json"


class ConfigFileError(Exception):
    """Config file could not be read, parsed or written, or is missing a section"""


def get_config_path() -> Path:
    """Resolve the config file path from CONFIG_PATH, falling back to ./config.json"""
    return Path(os.environ.get("CONFIG_PATH") or DEFAULT_CONFIG_FILE).resolve()


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            config = json.load(f)
    except OSError as e:
        raise ConfigFileError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigFileError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigFileError(f"Expected a JSON object in {path}")
    return config


def save_config(config: Dict[str, Any], path: Union[str, Path]):
    """Write the whole config back as 2-space indented JSON"""
    path = Path(path)
    try:
        content = json.dumps(config, indent=2, ensure_ascii=False)
        path.write_text(content, encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        raise ConfigFileError(f"Cannot write {path}: {e}") from e


def is_universal(config: Dict[str, Any]) -> bool:
    return config.get("isUniversal") is True


def get_app_address(config: Dict[str, Any], network: str) -> str:
    """Address of the IBC enabled app deployed on `network`.

    Universal apps are looked up under sendUniversalPacket, custom channel
    apps under sendPacket.
    """
    section = "sendUniversalPacket" if is_universal(config) else "sendPacket"
    try:
        return config[section]["networks"][network]["portAddr"]
    except (KeyError, TypeError) as e:
        raise ConfigFileError(f"No portAddr for {network} in {section}.networks") from e


def get_channel_endpoints(config: Dict[str, Any]):
    """Return (source, destination) network names from createChannel"""
    try:
        create_channel = config["createChannel"]
        return create_channel["srcChain"], create_channel["dstChain"]
    except (KeyError, TypeError) as e:
        raise ConfigFileError("createChannel.srcChain / dstChain missing from config") from e
