"""
Configuration helpers for the Casper MCP server.

This module resolves runtime settings with a fixed precedence: command-line flag,
then environment variable, then built-in default. No secrets are stored in the
repository; the CSPR.cloud API key is read from the command line, the environment,
or a local file named by ``CSPR_CLOUD_API_KEY_FILE``.
"""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Sequence

# Upstream endpoints
MAINNET_URL = "https://api.cspr.cloud"
TESTNET_URL = "https://api.testnet.cspr.cloud"

# Environment variables
API_KEY_ENV_VAR = "CSPR_CLOUD_API_KEY"
API_KEY_FILE_ENV_VAR = "CSPR_CLOUD_API_KEY_FILE"
SERVER_API_KEY_ENV_VAR = "CASPER_MCP_SERVER_API_KEY"
NETWORK_ENV_VAR = "CASPER_MCP_NETWORK"
TRANSPORT_ENV_VAR = "CASPER_MCP_TRANSPORT"
PORT_ENV_VAR = "CASPER_MCP_PORT"
TIMEOUT_ENV_VAR = "CASPER_MCP_HTTP_TIMEOUT"
LOG_LEVEL_ENV_VAR = "CASPER_MCP_LOG_LEVEL"
LOG_FORMAT_ENV_VAR = "CASPER_MCP_LOG_FORMAT"
MAINNET_URL_ENV_VAR = "CSPR_CLOUD_MAINNET_URL"
TESTNET_URL_ENV_VAR = "CSPR_CLOUD_TESTNET_URL"

DEFAULT_PORT = 3001
DEFAULT_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "json"  # json or plain

# Pagination limits
MAX_PAGE_SIZE = 250
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

MISSING_API_KEY_MESSAGE = (
    "API key is required. Provide via --api-key argument or CSPR_CLOUD_API_KEY environment variable."
)


class ConfigError(Exception):
    """Raised when the process configuration is unusable."""


class Network(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Transport(str, Enum):
    STDIO = "stdio"
    SSE = "sse"


@dataclass(slots=True, frozen=True)
class CasperMcpConfig:
    """Immutable runtime configuration, built once at process start."""

    api_key: str
    network: Network = Network.MAINNET
    transport: Transport = Transport.STDIO
    port: int = DEFAULT_PORT
    server_api_key: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT
    mainnet_url: str = MAINNET_URL
    testnet_url: str = TESTNET_URL

    @property
    def is_testnet(self) -> bool:
        return self.network is Network.TESTNET

    @property
    def is_sse(self) -> bool:
        return self.transport is Transport.SSE

    @property
    def auth_enabled(self) -> bool:
        return bool(self.server_api_key)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="casper-mcp",
        description="MCP server exposing CSPR.cloud blockchain-explorer queries.",
    )
    # Defaults stay None so environment values can fill the gaps.
    parser.add_argument("--api-key", help="CSPR.cloud API key")
    parser.add_argument("--network", help="mainnet or testnet (default: mainnet)")
    parser.add_argument("--transport", help="stdio or sse (default: stdio)")
    parser.add_argument("--port", type=int, help=f"Listen port for the sse transport (default: {DEFAULT_PORT})")
    parser.add_argument("--server-api-key", help="Shared secret required from inbound HTTP clients")
    parser.add_argument("--timeout", type=float, help=f"Upstream HTTP timeout in seconds (default: {DEFAULT_TIMEOUT})")
    parser.add_argument("--log-level", help=f"Logging level (default: {DEFAULT_LOG_LEVEL})")
    parser.add_argument("--log-format", choices=["json", "plain"], help="Log output format (default: json)")
    return parser


def load_api_key(environ: Mapping[str, str]) -> Optional[str]:
    """
    Load the CSPR.cloud API key from the environment or a key file.

    Returns:
        The API key string if available, otherwise None. The key is never logged.
    """
    env_key = environ.get(API_KEY_ENV_VAR)
    if env_key and env_key.strip():
        return env_key.strip()

    key_path = environ.get(API_KEY_FILE_ENV_VAR)
    if key_path:
        path = Path(key_path)
        if path.is_file():
            return path.read_text(encoding="utf-8").strip() or None

    return None


def _first(*values):
    for value in values:
        if value is not None and value != "":
            return value
    return None


def _parse_network(raw: str) -> Network:
    try:
        return Network(raw.strip().lower())
    except ValueError:
        raise ConfigError(f"Unknown network '{raw}'. Expected 'mainnet' or 'testnet'.") from None


def _parse_transport(raw: str) -> Transport:
    try:
        return Transport(raw.strip().lower())
    except ValueError:
        raise ConfigError(f"Unknown transport '{raw}'. Expected 'stdio' or 'sse'.") from None


def _parse_port(raw) -> int:
    try:
        port = int(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid port '{raw}'.") from None
    if not 0 < port < 65536:
        raise ConfigError(f"Invalid port '{raw}'.")
    return port


def _parse_timeout(raw) -> float:
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid timeout '{raw}'.") from None
    if timeout <= 0:
        raise ConfigError(f"Invalid timeout '{raw}'.")
    return timeout


def load_config(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CasperMcpConfig:
    """
    Build the process configuration from command-line flags and the environment.

    Raises:
        ConfigError: when the API key is missing or a value cannot be parsed.
    """
    env = os.environ if environ is None else environ
    args = build_parser().parse_args(argv)

    api_key = _first(args.api_key, load_api_key(env))
    if not api_key:
        raise ConfigError(MISSING_API_KEY_MESSAGE)

    network = _parse_network(_first(args.network, env.get(NETWORK_ENV_VAR), Network.MAINNET.value))
    transport = _parse_transport(_first(args.transport, env.get(TRANSPORT_ENV_VAR), Transport.STDIO.value))
    port = _parse_port(_first(args.port, env.get(PORT_ENV_VAR), DEFAULT_PORT))
    timeout = _parse_timeout(_first(args.timeout, env.get(TIMEOUT_ENV_VAR), DEFAULT_TIMEOUT))

    return CasperMcpConfig(
        api_key=api_key,
        network=network,
        transport=transport,
        port=port,
        server_api_key=_first(args.server_api_key, env.get(SERVER_API_KEY_ENV_VAR)),
        timeout=timeout,
        log_level=_first(args.log_level, env.get(LOG_LEVEL_ENV_VAR), DEFAULT_LOG_LEVEL),
        log_format=_first(args.log_format, env.get(LOG_FORMAT_ENV_VAR), DEFAULT_LOG_FORMAT),
        mainnet_url=_first(env.get(MAINNET_URL_ENV_VAR), MAINNET_URL),
        testnet_url=_first(env.get(TESTNET_URL_ENV_VAR), TESTNET_URL),
    )
