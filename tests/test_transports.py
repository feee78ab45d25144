import mcp.types as types
import pytest

from casper_mcp.cspr_cloud.client import CsprCloudError
from casper_mcp.metrics import default_metrics
from casper_mcp.transports import SERVER_NAME, UNKNOWN_TOOL, SseBridge, build_mcp_server, invoke_tool


@pytest.mark.asyncio
async def test_invoke_tool_records_success(stub_endpoint):
    endpoint = stub_endpoint({"supply.get_supply": {"data": {"total": "1000000000"}}})
    result = await invoke_tool("get_supply_info", {}, endpoint=endpoint, request_id="req-1")
    assert result.startswith("## CSPR Supply Information\n")
    assert default_metrics.snapshot()["tool_success"] == {"get_supply_info": 1}


@pytest.mark.asyncio
async def test_invoke_tool_records_error(stub_endpoint, caplog):
    endpoint = stub_endpoint(default=CsprCloudError("down"))
    with caplog.at_level("WARNING"):
        result = await invoke_tool("get_supply_info", None, endpoint=endpoint)
    assert result == "Error retrieving supply info: down"
    assert default_metrics.snapshot()["tool_error"] == {"get_supply_info": 1}
    assert any(getattr(record, "tool", None) == "get_supply_info" for record in caplog.records)


@pytest.mark.asyncio
async def test_unregistered_tool_names_share_one_metrics_key(stub_endpoint):
    endpoint = stub_endpoint()
    for index in range(50):
        result = await invoke_tool(f"bogus_{index}", {}, endpoint=endpoint)
        assert result == f"Unknown tool: bogus_{index}"
    assert default_metrics.snapshot()["tool_error"] == {UNKNOWN_TOOL: 50}
    assert endpoint.calls == []


@pytest.mark.asyncio
async def test_mcp_server_lists_registry_tools(stub_endpoint):
    server = build_mcp_server(stub_endpoint())
    assert server.name == SERVER_NAME
    assert types.CallToolRequest in server.request_handlers
    handler = server.request_handlers[types.ListToolsRequest]
    result = await handler(types.ListToolsRequest(method="tools/list"))
    tools = result.root.tools
    assert len(tools) == 75
    block = next(tool for tool in tools if tool.name == "get_block")
    assert block.inputSchema["required"] == ["block_hash"]


def test_sse_bridge_exposes_post_handler(stub_endpoint):
    bridge = SseBridge(build_mcp_server(stub_endpoint()))
    assert callable(bridge.handle_post_message)
