# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (all four Graylog tools)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Registers the Graylog search tools on a FastMCP server.  Each tool is a
#   thin wrapper around a core/search.py handler: it collects the arguments,
#   logs the call, and turns the handler's ToolOutcome into an MCP result.
#
# HOW IT WORKS (the flow):
#   1. An agent calls a tool by name via MCP (e.g., "count_relative_logs")
#   2. FastMCP validates the arguments against the tool's JSON schema
#      (limit <= 1000, range > 0, non-empty query, ...)
#   3. The function below forwards the supplied arguments to SearchHandlers
#   4. A success outcome is returned as text (pretty-printed JSON);
#      an error outcome is raised as ToolError, which MCP reports as isError
#
# TOOLS:
#   search_relative_logs   messages from the last N seconds
#   count_relative_logs    total matches in the last N seconds
#   search_absolute_logs   messages between two timestamps
#   count_absolute_logs    total matches between two timestamps
#   All four are read-only GETs against Graylog's universal search API.
#
# WIRING:
#   build_server(config) takes an already-resolved GraylogConfig, so the
#   tools never read the environment themselves.  main.py resolves the
#   config once and calls build_server().
# =============================================================================

import json
import logging
import os
import sys
from typing import Annotated, Any, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool_transform import ArgTransform
from pydantic import Field

from core.client import GraylogClient
from core.config import GraylogConfig
from core.models import (
    FROM_DESCRIPTION,
    TO_DESCRIPTION,
    Decorate,
    FieldNames,
    Limit,
    Offset,
    Query,
    RangeSeconds,
    Sort,
    StreamFilter,
    Timestamp,
)
from core.search import SearchHandlers, ToolOutcome

SERVER_NAME = "graylog-mcp-server"

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: STDOUT is the MCP transport, and anything printed there
# would corrupt the JSON-RPC stream.
#
# ANSI colors make tool traffic easy to scan in a terminal:
#   CYAN    incoming tool call with its arguments
#   YELLOW  status lines
#   GREEN   response (truncated)
#   RED     error result
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

# Search responses can hold up to 1000 messages; only the head is logged.
_MAX_LOGGED_RESPONSE = 500

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _resolve_log_level(raw: Optional[str]) -> Optional[str]:
    """Normalize LOG_LEVEL to a logging level name, or None if it names none."""
    level = (raw or "").strip().upper() or "INFO"
    return level if level in _LOG_LEVELS else None


_log_level = _resolve_log_level(os.environ.get("LOG_LEVEL"))
logging.basicConfig(
    level=_log_level or "INFO",
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)
if _log_level is None:
    logging.warning(f"Unknown LOG_LEVEL {os.environ['LOG_LEVEL']!r}; using INFO")


def _log_request(tool_name: str, **params) -> None:
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, outcome: ToolOutcome) -> None:
    if outcome.is_error:
        logging.info(f"{_RED}  ← {tool_name} error: {outcome.text}{_RESET}")
        return
    compact = json.dumps(json.loads(outcome.text), separators=(",", ":"), ensure_ascii=False)
    if len(compact) > _MAX_LOGGED_RESPONSE:
        compact = f"{compact[:_MAX_LOGGED_RESPONSE]}... ({len(compact)} chars)"
    logging.info(f"{_GREEN}  ← {tool_name} response: {compact}{_RESET}")


def _supplied(**arguments: Any) -> dict[str, Any]:
    """Keep only the arguments the caller actually passed."""
    return {key: value for key, value in arguments.items() if value is not None}


def _respond(tool_name: str, outcome: ToolOutcome) -> str:
    _log_response(tool_name, outcome)
    if outcome.is_error:
        raise ToolError(outcome.text)
    return outcome.text


def build_server(
    config: GraylogConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastMCP:
    """Create the FastMCP server with all four Graylog tools registered.

    Args:
        config: Resolved connection settings (see core.config.load_config).
        transport: Optional httpx transport, used by tests to stand in for
            a real Graylog.

    Returns:
        A FastMCP instance ready for .run().
    """
    handlers = SearchHandlers(GraylogClient(config, transport=transport))
    mcp = FastMCP(SERVER_NAME)
    _log_status(f"Graylog tools bound to {config.base_url}")

    # =========================================================================
    # TOOL 1: search_relative_logs
    # =========================================================================
    @mcp.tool()
    async def search_relative_logs(
        query: Query,
        range: RangeSeconds,
        limit: Optional[Limit] = None,
        offset: Optional[Offset] = None,
        sort: Optional[Sort] = None,
        filter: Optional[StreamFilter] = None,
        fields: Optional[FieldNames] = None,
        decorate: Optional[Decorate] = None,
    ) -> str:
        """Search Graylog messages within a relative timeframe (seconds) counted back from now.

        Returns JSON with query, took_ms, total_results and messages.  Each
        message has index and message (the stored fields), plus highlight
        when Graylog provides it.  At most `limit` messages are returned
        (default 150); total_results is the full match count.
        """
        arguments = _supplied(
            query=query, range=range, limit=limit, offset=offset,
            sort=sort, filter=filter, fields=fields, decorate=decorate,
        )
        _log_request("search_relative_logs", **arguments)
        outcome = await handlers.search_relative_logs(arguments)
        return _respond("search_relative_logs", outcome)

    # =========================================================================
    # TOOL 2: count_relative_logs
    # =========================================================================
    # Same arguments as search_relative_logs; limit is forced to 0 so
    # Graylog only counts.
    # =========================================================================
    @mcp.tool()
    async def count_relative_logs(
        query: Query,
        range: RangeSeconds,
        limit: Optional[Limit] = None,
        offset: Optional[Offset] = None,
        sort: Optional[Sort] = None,
        filter: Optional[StreamFilter] = None,
        fields: Optional[FieldNames] = None,
        decorate: Optional[Decorate] = None,
    ) -> str:
        """Return only the total number of Graylog messages that match a query within a relative timeframe.

        Returns JSON with query, took_ms and total_results.  No messages are
        fetched, so this is cheap enough to call before a search to size it.
        """
        arguments = _supplied(
            query=query, range=range, limit=limit, offset=offset,
            sort=sort, filter=filter, fields=fields, decorate=decorate,
        )
        _log_request("count_relative_logs", **arguments)
        outcome = await handlers.count_relative_logs(arguments)
        return _respond("count_relative_logs", outcome)

    # =========================================================================
    # TOOLS 3 & 4: search_absolute_logs / count_absolute_logs
    # =========================================================================
    # Graylog calls the window start "from", which is a Python keyword.
    # The functions take from_ and the published tool renames it back to
    # "from" with FastMCP's tool transformation.
    # =========================================================================
    async def search_absolute_logs(
        query: Query,
        from_: Annotated[Timestamp, Field(description=FROM_DESCRIPTION)],
        to: Annotated[Timestamp, Field(description=TO_DESCRIPTION)],
        limit: Optional[Limit] = None,
        offset: Optional[Offset] = None,
        sort: Optional[Sort] = None,
        filter: Optional[StreamFilter] = None,
        fields: Optional[FieldNames] = None,
        decorate: Optional[Decorate] = None,
    ) -> str:
        """Search Graylog messages within an absolute time range defined by explicit start and end timestamps.

        Returns JSON with query, took_ms, total_results and messages.  Each
        message has index and message (the stored fields), plus highlight
        when Graylog provides it.  At most `limit` messages are returned
        (default 150).
        """
        arguments = _supplied(
            query=query, to=to, limit=limit, offset=offset,
            sort=sort, filter=filter, fields=fields, decorate=decorate,
        )
        arguments["from"] = from_
        _log_request("search_absolute_logs", **arguments)
        outcome = await handlers.search_absolute_logs(arguments)
        return _respond("search_absolute_logs", outcome)

    async def count_absolute_logs(
        query: Query,
        from_: Annotated[Timestamp, Field(description=FROM_DESCRIPTION)],
        to: Annotated[Timestamp, Field(description=TO_DESCRIPTION)],
        limit: Optional[Limit] = None,
        offset: Optional[Offset] = None,
        sort: Optional[Sort] = None,
        filter: Optional[StreamFilter] = None,
        fields: Optional[FieldNames] = None,
        decorate: Optional[Decorate] = None,
    ) -> str:
        """Return only the total number of Graylog messages that match a query within an absolute timeframe.

        Returns JSON with query, took_ms and total_results.
        """
        arguments = _supplied(
            query=query, to=to, limit=limit, offset=offset,
            sort=sort, filter=filter, fields=fields, decorate=decorate,
        )
        arguments["from"] = from_
        _log_request("count_absolute_logs", **arguments)
        outcome = await handlers.count_absolute_logs(arguments)
        return _respond("count_absolute_logs", outcome)

    for fn in (search_absolute_logs, count_absolute_logs):
        mcp.add_tool(
            Tool.from_tool(
                Tool.from_function(fn),
                transform_args={"from_": ArgTransform(name="from")},
            )
        )

    return mcp
