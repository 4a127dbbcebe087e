import copy
import json

import pytest

from tests.fakes import REGISTRY_DATA, make_config
from vibc_scripts.registry import ChainRegistry


@pytest.fixture
def registry():
    return ChainRegistry.from_dict(copy.deepcopy(REGISTRY_DATA))


@pytest.fixture
def registry_file(tmp_path):
    path = tmp_path / "chain_registry.json"
    path.write_text(json.dumps(REGISTRY_DATA))
    return path


@pytest.fixture
def config():
    return make_config()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("CONFIG_PATH", "CHAIN_REGISTRY_PATH", "RPC_URL_OPTIMISM", "RPC_URL_BASE"):
        monkeypatch.delenv(name, raising=False)
