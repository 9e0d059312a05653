"""
Tests for the MCP surface, driven in-process through fastmcp.Client.
"""

import importlib
import json

import pytest
from fastmcp import Client

from tools import mcp_server
from tools.mcp_server import SERVER_NAME, build_server

from conftest import FakeGraylog

TOOL_NAMES = {"search_relative_logs", "count_relative_logs", "search_absolute_logs", "count_absolute_logs"}

RELATIVE = {"query": "message:*", "range": 300}
ABSOLUTE = {"query": "message:*", "from": "2025-01-01T00:00:00Z", "to": "2025-01-01T01:00:00Z"}


@pytest.fixture
def server(config, graylog):
    return build_server(config, transport=graylog.transport)


class TestToolListing:
    def test_server_name(self, server):
        assert server.name == SERVER_NAME

    @pytest.mark.asyncio
    async def test_all_tools_registered(self, server):
        async with Client(server) as client:
            tools = await client.list_tools()
        assert {tool.name for tool in tools} == TOOL_NAMES

    @pytest.mark.asyncio
    async def test_absolute_tools_publish_from(self, server):
        async with Client(server) as client:
            tools = {tool.name: tool for tool in await client.list_tools()}

        for name in ("search_absolute_logs", "count_absolute_logs"):
            properties = tools[name].inputSchema["properties"]
            assert "from" in properties
            assert "from_" not in properties
            assert "to" in properties
            assert "range" not in properties

    @pytest.mark.asyncio
    async def test_relative_tools_publish_range(self, server):
        async with Client(server) as client:
            tools = {tool.name: tool for tool in await client.list_tools()}

        for name in ("search_relative_logs", "count_relative_logs"):
            schema = tools[name].inputSchema
            assert set(schema["required"]) == {"query", "range"}
            assert {"limit", "offset", "sort", "filter", "fields", "decorate"} <= set(schema["properties"])


class TestToolCalls:
    @pytest.mark.asyncio
    async def test_search_relative(self, server, graylog):
        async with Client(server) as client:
            result = await client.call_tool("search_relative_logs", {**RELATIVE, "limit": 1})

        assert not result.is_error
        body = json.loads(result.content[0].text)
        assert body["total_results"] == 42
        assert graylog.last_params["limit"] == "1"

    @pytest.mark.asyncio
    async def test_count_absolute(self, server, graylog):
        async with Client(server) as client:
            result = await client.call_tool("count_absolute_logs", ABSOLUTE)

        assert not result.is_error
        assert json.loads(result.content[0].text) == {"query": "message:*", "took_ms": 12, "total_results": 42}
        assert graylog.last_params["from"] == "2025-01-01T00:00:00Z"
        assert graylog.last_params["limit"] == "0"
        assert graylog.last_params["offset"] == "0"

    @pytest.mark.asyncio
    async def test_search_absolute_with_fields(self, server, graylog):
        async with Client(server) as client:
            result = await client.call_tool("search_absolute_logs", {**ABSOLUTE, "fields": ["source", "message"]})

        assert not result.is_error
        assert graylog.last_params["fields"] == "source,message"
        assert graylog.last_params["to"] == "2025-01-01T01:00:00Z"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "tool_name,arguments",
        [
            ("search_relative_logs", {**RELATIVE, "limit": 5000}),
            ("count_relative_logs", {**RELATIVE, "range": 0}),
            ("search_absolute_logs", {**ABSOLUTE, "limit": 1001}),
            ("count_absolute_logs", {**ABSOLUTE, "query": ""}),
            ("count_relative_logs", {**RELATIVE, "decorate": "yes"}),
            ("search_relative_logs", {**RELATIVE, "limit": True}),
        ],
    )
    async def test_invalid_arguments_never_reach_graylog(self, server, graylog, tool_name, arguments):
        async with Client(server) as client:
            result = await client.call_tool(tool_name, arguments, raise_on_error=False)

        assert result.is_error
        assert graylog.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool_name", sorted(TOOL_NAMES))
    async def test_backend_error_is_tool_error(self, config, tool_name):
        graylog = FakeGraylog(status_code=503, text="Service Unavailable")
        server = build_server(config, transport=graylog.transport)
        arguments = ABSOLUTE if "absolute" in tool_name else RELATIVE

        async with Client(server) as client:
            result = await client.call_tool(tool_name, arguments, raise_on_error=False)

        assert result.is_error
        assert "503" in result.content[0].text


class TestLogLevel:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, "INFO"),
            ("", "INFO"),
            ("debug", "DEBUG"),
            (" Warning ", "WARNING"),
            ("verbose", None),
            ("10", None),
        ],
    )
    def test_resolve(self, raw, expected):
        assert mcp_server._resolve_log_level(raw) == expected

    def test_unknown_level_does_not_break_import(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        reloaded = importlib.reload(mcp_server)
        assert reloaded._log_level is None
