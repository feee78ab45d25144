import pytest

from casper_mcp.config import (
    DEFAULT_PORT,
    MAINNET_URL,
    MISSING_API_KEY_MESSAGE,
    TESTNET_URL,
    CasperMcpConfig,
    ConfigError,
    Network,
    Transport,
    load_api_key,
    load_config,
)


def test_defaults_with_env_key():
    config = load_config([], {"CSPR_CLOUD_API_KEY": "env-key"})
    assert config.api_key == "env-key"
    assert config.network is Network.MAINNET
    assert config.transport is Transport.STDIO
    assert config.port == DEFAULT_PORT
    assert config.server_api_key is None
    assert config.auth_enabled is False
    assert config.mainnet_url == MAINNET_URL
    assert config.testnet_url == TESTNET_URL


def test_flag_beats_environment():
    config = load_config(
        ["--api-key", "flag-key", "--network", "testnet", "--transport", "sse", "--port", "8080"],
        {
            "CSPR_CLOUD_API_KEY": "env-key",
            "CASPER_MCP_NETWORK": "mainnet",
            "CASPER_MCP_TRANSPORT": "stdio",
            "CASPER_MCP_PORT": "9000",
        },
    )
    assert config.api_key == "flag-key"
    assert config.is_testnet
    assert config.is_sse
    assert config.port == 8080


def test_environment_fills_missing_flags():
    config = load_config(
        [],
        {
            "CSPR_CLOUD_API_KEY": "env-key",
            "CASPER_MCP_NETWORK": "TESTNET",
            "CASPER_MCP_TRANSPORT": "sse",
            "CASPER_MCP_PORT": "9000",
            "CASPER_MCP_SERVER_API_KEY": "secret",
        },
    )
    assert config.network is Network.TESTNET
    assert config.transport is Transport.SSE
    assert config.port == 9000
    assert config.server_api_key == "secret"
    assert config.auth_enabled is True


def test_missing_api_key_raises():
    with pytest.raises(ConfigError) as excinfo:
        load_config([], {})
    assert str(excinfo.value) == MISSING_API_KEY_MESSAGE


def test_blank_env_key_counts_as_missing():
    with pytest.raises(ConfigError):
        load_config([], {"CSPR_CLOUD_API_KEY": "   "})


def test_api_key_file(tmp_path):
    key_file = tmp_path / "key.txt"
    key_file.write_text("file-key\n", encoding="utf-8")
    assert load_api_key({"CSPR_CLOUD_API_KEY_FILE": str(key_file)}) == "file-key"
    assert load_api_key({"CSPR_CLOUD_API_KEY_FILE": str(tmp_path / "missing.txt")}) is None


@pytest.mark.parametrize(
    "argv",
    [
        ["--network", "devnet"],
        ["--transport", "websocket"],
        ["--port", "70000"],
        ["--timeout", "0"],
    ],
)
def test_invalid_values_raise(argv):
    with pytest.raises(ConfigError):
        load_config(["--api-key", "k", *argv], {})


def test_invalid_port_from_env():
    with pytest.raises(ConfigError):
        load_config([], {"CSPR_CLOUD_API_KEY": "k", "CASPER_MCP_PORT": "abc"})


def test_upstream_url_overrides():
    config = load_config(
        [],
        {
            "CSPR_CLOUD_API_KEY": "k",
            "CSPR_CLOUD_MAINNET_URL": "http://localhost:1",
            "CSPR_CLOUD_TESTNET_URL": "http://localhost:2",
        },
    )
    assert config.mainnet_url == "http://localhost:1"
    assert config.testnet_url == "http://localhost:2"


def test_config_is_frozen():
    config = CasperMcpConfig(api_key="k")
    with pytest.raises(AttributeError):
        config.port = 1  # type: ignore[misc]


def test_network_label():
    assert Network.TESTNET.label == "Testnet"
    assert Network.MAINNET.label == "Mainnet"
