"""Minimal live sanity checks for the Casper MCP tools against CSPR.cloud."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from casper_mcp.config import ConfigError, load_config  # noqa: E402
from casper_mcp.cspr_cloud.client import CsprCloudClient  # noqa: E402
from casper_mcp.tools import (  # noqa: E402
    get_account_info,
    get_currencies,
    get_latest_blocks,
    get_network_status,
    get_supply_info,
    get_validators,
    resolve_cspr_name,
)

# Optional sample account for account lookups; skipped when unset.
SAMPLE_ACCOUNT = os.getenv("CASPER_SAMPLE_ACCOUNT")
# Optional CSPR.name to resolve.
SAMPLE_NAME = os.getenv("CASPER_SAMPLE_NAME")


async def main() -> int:
    try:
        config = load_config([])
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    client = CsprCloudClient(config)
    endpoint = client.endpoint()
    try:
        print(await get_network_status(endpoint=endpoint))
        print(await get_supply_info(endpoint=endpoint))
        print(await get_latest_blocks(page_size=3, endpoint=endpoint))
        print(await get_validators(page_size=3, endpoint=endpoint))
        print(await get_currencies(page_size=5, endpoint=endpoint))
        if SAMPLE_ACCOUNT:
            print(await get_account_info(SAMPLE_ACCOUNT, endpoint=endpoint))
        if SAMPLE_NAME:
            print(await resolve_cspr_name(SAMPLE_NAME, endpoint=endpoint))
    finally:
        await client.aclose()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
