import pytest

from casper_mcp import registry, tools
from casper_mcp.cspr_cloud.client import CsprCloudError, CsprCloudNotFoundError

MUTATING_TOOLS = {"create_awaiting_deploy", "add_awaiting_deploy_approval"}
ERA_TOOLS = {"get_validators", "get_validator_info"}
NETWORK_TOOLS = {"get_network_status", "get_era_info", "get_supply_info"}


def _required_args(tool):
    args = {}
    for name in tool.input_schema["required"]:
        args[name] = '{"hash": "dh"}' if name == "deploy_json" else "x"
    return args


ALL_TOOLS = sorted(registry.TOOL_REGISTRY)


def test_registry_matches_tool_package():
    assert set(registry.TOOL_REGISTRY) == set(tools.__all__)
    assert len(registry.TOOL_REGISTRY) == 75


def test_list_tools_shape():
    listed = registry.list_tools()
    assert len(listed) == len(registry.TOOL_REGISTRY)
    for entry in listed:
        assert entry["description"]
        schema = entry["inputSchema"]
        assert schema["type"] == "object"
        assert schema["additionalProperties"] is False
        assert set(schema["required"]) <= set(schema["properties"])


def test_paged_tools_expose_page_params():
    schema = registry.TOOL_REGISTRY["get_latest_blocks"].input_schema
    assert schema["properties"]["page"]["type"] == "integer"
    assert schema["properties"]["page_size"]["type"] == "integer"
    assert "maximum" not in schema["properties"]["page_size"]
    assert schema["required"] == []
    assert registry.TOOL_REGISTRY["get_latest_blocks"].params == {
        "page": "integer (optional)",
        "page_size": "integer (optional)",
    }


def test_required_params():
    assert registry.TOOL_REGISTRY["get_nft"].input_schema["required"] == ["contract_package_hash", "token_id"]
    assert registry.TOOL_REGISTRY["get_ft_rate_latest"].input_schema["required"] == ["contract_package_hash"]
    assert "currency_id" in registry.TOOL_REGISTRY["get_ft_rate_latest"].input_schema["properties"]


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ALL_TOOLS)
async def test_every_tool_reports_upstream_failure_as_text(name, stub_endpoint):
    endpoint = stub_endpoint(default=CsprCloudError("Service unavailable", status_code=503))
    result = await registry.call_tool(name, _required_args(registry.TOOL_REGISTRY[name]), endpoint=endpoint)
    assert result.startswith("Error ")
    assert result.endswith(": Service unavailable")
    assert registry.is_error_result(result)


@pytest.mark.asyncio
@pytest.mark.parametrize("name", sorted(set(ALL_TOOLS) - MUTATING_TOOLS - ERA_TOOLS))
async def test_every_tool_has_a_not_found_sentence(name, stub_endpoint):
    endpoint = stub_endpoint(default=CsprCloudNotFoundError("gone", status_code=404))
    result = await registry.call_tool(name, _required_args(registry.TOOL_REGISTRY[name]), endpoint=endpoint)
    assert result
    assert not registry.is_error_result(result)
    assert not result.startswith("## ")


@pytest.mark.asyncio
@pytest.mark.parametrize("name", sorted(set(ALL_TOOLS) - MUTATING_TOOLS - ERA_TOOLS - NETWORK_TOOLS))
async def test_empty_payload_is_not_a_report(name, stub_endpoint):
    endpoint = stub_endpoint(default={"data": [], "item_count": 0, "page_count": 0})
    result = await registry.call_tool(name, _required_args(registry.TOOL_REGISTRY[name]), endpoint=endpoint)
    assert not registry.is_error_result(result)
    assert not result.startswith("## ")


@pytest.mark.asyncio
async def test_call_tool_clamps_page_size(stub_endpoint):
    endpoint = stub_endpoint(default={"data": []})
    await registry.call_tool("get_latest_blocks", {"page": 3, "page_size": 500}, endpoint=endpoint)
    assert endpoint.calls == [("block.get_blocks", (), {"page": 3, "page_size": 250})]


@pytest.mark.asyncio
async def test_call_tool_unknown(stub_endpoint):
    assert await registry.call_tool("get_weather", {}, endpoint=stub_endpoint()) == "Unknown tool: get_weather"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"block_hash": "bh", "unexpected": 1},
        {},
        {"page": 1},
    ],
)
async def test_call_tool_invalid_params(params, stub_endpoint):
    endpoint = stub_endpoint()
    result = await registry.call_tool("get_block", params, endpoint=endpoint)
    assert result == "Invalid parameters for tool: get_block"
    assert endpoint.calls == []


@pytest.mark.asyncio
async def test_call_tool_optional_filter(stub_endpoint):
    endpoint = stub_endpoint(default={"data": None})
    await registry.call_tool(
        "get_ft_rate_latest", {"contract_package_hash": "ph", "currency_id": "1"}, endpoint=endpoint
    )
    assert endpoint.calls == [("ft.get_rate_latest", ("ph",), {"currency_id": "1"})]


def test_is_error_result():
    assert registry.is_error_result("Error retrieving block: boom")
    assert registry.is_error_result("Unknown tool: x")
    assert not registry.is_error_result("Block not found: bh")
    assert not registry.is_error_result("## Block Information\n")
