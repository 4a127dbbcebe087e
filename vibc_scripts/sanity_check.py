#!/usr/bin/env python3
"""
Universal Channel Sanity Check

Compares the values stored in your IBC enabled app and the Universal Channel
middleware with the ones in the config file and chain registry:

1. mw() of the IBC app vs. the universalChannelAddr of the active client
2. dispatcher() of the middleware vs. the dispatcherAddr of the active client
3. the channel id at the last index of connectedChannels() vs.
   sendUniversalPacket.networks.<network>.channelId

The active client is op-client when proofsEnabled is true, sim-client
otherwise. Checks stop at the first mismatch.

Usage:
    # Check the createChannel source and destination networks
    python -m vibc_scripts.sanity_check

    # Check specific networks, exit 1 on any failure (for CI)
    python -m vibc_scripts.sanity_check --network optimism --network base --strict
"""

import argparse
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import requests
from dotenv import load_dotenv

from .config import ConfigFileError, get_app_address, get_channel_endpoints, get_config_path, load_config
from .console import Colors, print_error, print_info, print_section
from .contracts import RPC_ERRORS, connect, get_ibc_app, get_uc_handler, iter_connected_channels
from .helpers import are_addresses_equal, decode_bytes32_string
from .registry import ChainRegistry, RegistryLookupError, sanity_profile


class CheckFailure(Enum):
    CONFIGURATION_MISMATCH = "configuration mismatch"
    ADDRESS_LOOKUP = "address lookup error"
    ADDRESS_MISMATCH = "universal channel mw mismatch"
    DISPATCHER_MISMATCH = "dispatcher mismatch"
    CHANNEL_MISMATCH = "channel id mismatch"
    RPC_UNAVAILABLE = "rpc request failed"


@dataclass
class SanityResult:
    network: str
    passed: bool
    failure: Optional[CheckFailure] = None
    reason: str = ""
    expected: Optional[str] = None
    found: Optional[str] = None
    channel_id: Optional[str] = None
    channel_index: Optional[int] = None


def _fail(network: str, failure: CheckFailure, reason: str, expected=None, found=None, **extra) -> SanityResult:
    return SanityResult(
        network=network,
        passed=False,
        failure=failure,
        reason=reason,
        expected=expected,
        found=found,
        **extra,
    )


def check_universal_channel(
    network: str,
    chain_id: int,
    config: Dict[str, Any],
    registry: ChainRegistry,
    ibc_app,
    handler_factory: Callable[[str], Any],
) -> SanityResult:
    """Run the middleware, dispatcher and channel id checks for one network.

    `ibc_app` is the IBC app contract handle, `handler_factory` maps the
    middleware address to its contract handle. Never prints.
    """
    profile = sanity_profile(config.get("proofsEnabled"))

    # 1. Universal Channel Mw stored in the app
    try:
        uc_handler_addr = ibc_app.functions.mw().call()
    except requests.exceptions.RequestException as e:
        return _fail(network, CheckFailure.RPC_UNAVAILABLE, f"Error calling mw() on the IBC app: {e}")
    except RPC_ERRORS as e:
        return _fail(
            network,
            CheckFailure.CONFIGURATION_MISMATCH,
            "Error getting Universal Channel Mw address from IBC app. "
            f"Check if the config file has the correct isUniversal flag set ({e})",
        )

    # 2. Compare with the registry value for the active client
    try:
        expected_mw = registry.client_value(chain_id, profile, "universalChannelAddr")
    except RegistryLookupError as e:
        return _fail(network, CheckFailure.ADDRESS_LOOKUP, str(e), found=uc_handler_addr)

    if not are_addresses_equal(uc_handler_addr, expected_mw):
        return _fail(
            network,
            CheckFailure.ADDRESS_MISMATCH,
            "Check if the universalChannelAddr in the chain registry is correct",
            expected=expected_mw,
            found=uc_handler_addr,
        )

    # 3. Dispatcher stored in the middleware
    try:
        uc_handler = handler_factory(uc_handler_addr)
        dispatcher_addr = uc_handler.functions.dispatcher().call()
        expected_dispatcher = registry.client_value(chain_id, profile, "dispatcherAddr")
    except requests.exceptions.RequestException as e:
        return _fail(network, CheckFailure.RPC_UNAVAILABLE, f"Error calling dispatcher() on the Universal Channel Mw: {e}")
    except RPC_ERRORS + (RegistryLookupError,) as e:
        return _fail(
            network,
            CheckFailure.DISPATCHER_MISMATCH,
            f"Error getting dispatcher address from Universal Channel Mw or from registry: {e}",
        )

    if not are_addresses_equal(dispatcher_addr, expected_dispatcher):
        return _fail(
            network,
            CheckFailure.DISPATCHER_MISMATCH,
            "Check if the dispatcherAddr in the chain registry is correct",
            expected=expected_dispatcher,
            found=dispatcher_addr,
        )

    # 4. Channel id at the last connected channel index
    last = None
    for index, channel_bytes in iter_connected_channels(uc_handler):
        last = (index, channel_bytes)

    try:
        expected_channel = config["sendUniversalPacket"]["networks"][network]["channelId"]
    except (KeyError, TypeError):
        expected_channel = None

    if last is None:
        return _fail(
            network,
            CheckFailure.CHANNEL_MISMATCH,
            "No channels connected to the Universal Channel Mw",
            expected=expected_channel,
        )

    channel_index, channel_bytes = last
    try:
        channel_id = decode_bytes32_string(channel_bytes)
    except (ValueError, UnicodeDecodeError) as e:
        return _fail(
            network,
            CheckFailure.CHANNEL_MISMATCH,
            f"Cannot decode channel id at index {channel_index}: {e}",
            expected=expected_channel,
            channel_index=channel_index,
        )

    if channel_id != expected_channel:
        return _fail(
            network,
            CheckFailure.CHANNEL_MISMATCH,
            "Check if the channel id value for the Universal channel in the config is correct",
            expected=expected_channel,
            found=channel_id,
            channel_id=channel_id,
            channel_index=channel_index,
        )

    return SanityResult(network=network, passed=True, channel_id=channel_id, channel_index=channel_index)


def print_result(result: SanityResult):
    if result.passed:
        print(f"{Colors.OKCYAN}Channel ID in UCH contract: {result.channel_id}{Colors.ENDC}")
        print(f"{Colors.OKGREEN}[OK] Sanity check passed for network {result.network}{Colors.ENDC}")
        return

    print(f"{Colors.FAIL}[X] Sanity check failed for network {result.network}: {result.failure.value}{Colors.ENDC}")
    print(f"  {result.reason}")
    if result.expected is not None or result.found is not None:
        print("-" * 50)
        print(f"  Expected (config / registry): {result.expected}")
        print(f"  Found (on-chain):             {result.found}")
        print("-" * 50)


def run_network(network: str, config: Dict[str, Any], registry: ChainRegistry) -> SanityResult:
    """Resolve the handles for `network` and run the checks against the live chain"""
    try:
        chain_id = registry.chain_id(network)
        w3 = connect(registry.rpc_url(network))
    except RegistryLookupError as e:
        return _fail(network, CheckFailure.ADDRESS_LOOKUP, str(e))

    try:
        ibc_app = get_ibc_app(w3, get_app_address(config, network))
    except (ConfigFileError, ValueError) as e:
        return _fail(network, CheckFailure.CONFIGURATION_MISMATCH, f"Cannot resolve IBC app: {e}")

    return check_universal_channel(
        network,
        chain_id,
        config,
        registry,
        ibc_app,
        lambda address: get_uc_handler(w3, address),
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Sanity check the Universal Channel setup against the config file")
    parser.add_argument("--network", action="append", dest="networks", help="Network to check (repeatable)")
    parser.add_argument("--config", help="Config file (default: $CONFIG_PATH or ./config.json)")
    parser.add_argument("--registry", help="Chain registry file (default: $CHAIN_REGISTRY_PATH or ./chain_registry.json)")
    parser.add_argument("--strict", action="store_true", help="Exit 1 if any network fails the check")
    args = parser.parse_args(argv)

    load_dotenv()

    try:
        config = load_config(args.config or get_config_path())
        registry = ChainRegistry.from_env(args.registry)
        networks = args.networks or list(get_channel_endpoints(config))
    except ConfigFileError as e:
        print_error(str(e))
        return 1

    print_section("UNIVERSAL CHANNEL SANITY CHECK")
    print_info(f"Active client: {sanity_profile(config.get('proofsEnabled'))}")

    results = []
    for network in networks:
        print(f"\n{Colors.OKBLUE}--- {network} ---{Colors.ENDC}")
        result = run_network(network, config, registry)
        print_result(result)
        results.append(result)

    failed = [r.network for r in results if not r.passed]
    print("\n" + "=" * 70)
    print(f"{Colors.BOLD}SUMMARY{Colors.ENDC}")
    print(f"Checked: {len(results)}  Passed: {len(results) - len(failed)}  Failed: {len(failed)}")
    if failed:
        print(f"Failed networks: {', '.join(failed)}")
    print("=" * 70)

    if failed and args.strict:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
