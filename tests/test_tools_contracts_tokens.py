import pytest

from casper_mcp.cspr_cloud.client import CsprCloudNotFoundError
from casper_mcp.tools.contracts import (
    get_contract,
    get_contract_entry_point_costs,
    get_contract_entry_points,
    get_contract_types,
)
from casper_mcp.tools.tokens import (
    get_account_ft_balances,
    get_contract_package_fungible_token_actions,
    get_fungible_token_actions,
    get_ft_token_info,
)


@pytest.mark.asyncio
async def test_contract_with_package(stub_endpoint):
    endpoint = stub_endpoint(
        {
            "contract.get_contract": {
                "data": {
                    "contract_hash": "ch",
                    "contract_package_hash": "ph",
                    "is_disabled": False,
                    "contract_package": {"name": "CSPR.market", "owner_public_key": "01aa"},
                }
            }
        }
    )
    result = await get_contract("ch", endpoint=endpoint)
    assert "- **Disabled:** No\n" in result
    assert "\n### Contract Package\n- **Name:** CSPR.market\n- **Description:** N/A\n- **Owner:** 01aa\n" in result


@pytest.mark.asyncio
async def test_contract_not_found(stub_endpoint):
    endpoint = stub_endpoint({"contract.get_contract": CsprCloudNotFoundError("no")})
    assert await get_contract("ch", endpoint=endpoint) == "Contract not found: ch"


@pytest.mark.asyncio
async def test_entry_points(stub_endpoint):
    endpoint = stub_endpoint(
        {
            "contract.get_contract_entry_points": {
                "data": [{"id": 1, "name": "transfer"}, {"id": 2, "name": None}],
                "item_count": 2,
            }
        }
    )
    result = await get_contract_entry_points("ch", endpoint=endpoint)
    assert result == (
        "## Contract Entry Points (2 total)\n"
        "Contract: ch\n"
        "\n"
        "- **transfer** (ID: 1)\n"
        "- **unnamed** (ID: 2)\n"
    )


@pytest.mark.asyncio
async def test_entry_point_costs(stub_endpoint):
    endpoint = stub_endpoint(
        {
            "contract.get_contract_entry_point_costs": {
                "data": {"deploys_num": 12, "avg_cost": "2500000000.50", "min_cost": 1, "max_cost": None}
            }
        }
    )
    result = await get_contract_entry_point_costs("ch", "transfer", endpoint=endpoint)
    assert result.startswith("## Entry Point Cost Statistics\n- **Contract:** ch\n- **Entry Point:** transfer\n")
    assert "- **Average Cost:** 2500000000.5\n" in result
    assert "- **Max Cost:** N/A\n" in result
    assert endpoint.calls == [("contract.get_contract_entry_point_costs", ("ch", "transfer"), {})]


@pytest.mark.asyncio
async def test_entry_point_costs_missing_name(stub_endpoint):
    endpoint = stub_endpoint()
    result = await get_contract_entry_point_costs("ch", "", endpoint=endpoint)
    assert result == "Error retrieving entry point costs: Entry point name is required."


@pytest.mark.asyncio
async def test_contract_types_empty(stub_endpoint):
    endpoint = stub_endpoint({"contract.get_contract_types": []})
    assert await get_contract_types(endpoint=endpoint) == "No contract types found."


@pytest.mark.asyncio
async def test_ft_token_info(stub_endpoint):
    endpoint = stub_endpoint(
        {"contract.get_contract_package": {"data": {"contract_package_hash": "ph", "name": "Wrapped CSPR"}}}
    )
    result = await get_ft_token_info("ph", endpoint=endpoint)
    assert result.startswith("## Fungible Token Information\n- **Contract Package:** ph\n- **Name:** Wrapped CSPR\n")


@pytest.mark.asyncio
async def test_account_ft_balances_with_package_name(stub_endpoint):
    endpoint = stub_endpoint(
        {
            "ft.get_account_ft_ownership": {
                "data": [
                    {"contract_package_hash": "ph1", "balance": "42", "contract_package": {"name": "Token A"}},
                    {"contract_package_hash": "ph2", "balance": "7"},
                ],
                "item_count": 2,
                "page_count": 1,
            }
        }
    )
    result = await get_account_ft_balances("01aa", endpoint=endpoint)
    assert "- **Token:** ph1\n  Name: Token A\n  Balance: 42\n" in result
    assert "- **Token:** ph2\n  Balance: 7\n" in result


@pytest.mark.asyncio
async def test_ft_actions_rows(stub_endpoint):
    action = {
        "deploy_hash": "d1",
        "contract_package_hash": "ph",
        "from_hash": "from-hash",
        "to_public_key": "01bb",
        "amount": "100",
    }
    endpoint = stub_endpoint(
        {
            "ft.get_ft_actions": {"data": [action], "item_count": 1, "page_count": 1},
            "ft.get_contract_package_ft_actions": {"data": [action], "item_count": 1, "page_count": 1},
        }
    )
    everywhere = await get_fungible_token_actions(endpoint=endpoint)
    assert "- **Deploy:** d1\n  Token: ph\n  From: from-hash\n  To: 01bb\n  Amount: 100 | N/A\n" in everywhere

    scoped = await get_contract_package_fungible_token_actions("ph", endpoint=endpoint)
    assert "  Token:" not in scoped
    assert "- **Deploy:** d1\n  From: from-hash\n" in scoped
