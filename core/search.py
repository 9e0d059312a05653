# =============================================================================
# core/search.py  -  The Four Search Tool Handlers
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Implements the behaviour behind each MCP tool, independent of FastMCP:
#
#   Tool                   Endpoint                        Defaults
#   ---------------------  ------------------------------  --------------------------
#   search_relative_logs   api/search/universal/relative   limit=150 if unset
#   count_relative_logs    api/search/universal/relative   limit=0, offset=offset or 0
#   search_absolute_logs   api/search/universal/absolute   limit=150 if unset
#   count_absolute_logs    api/search/universal/absolute   limit=0, offset=offset or 0
#
# THE FLOW (same for all four):
#   1. Validate the raw arguments into a request model
#   2. Merge the tool's defaults
#   3. Normalize the payload (drop None, join fields)
#   4. GET through GraylogClient
#   5. Shape the response (full projection or totals only)
#   6. Return a ToolOutcome: pretty-printed JSON, or the error message
#
# BOUNDARY RULE:
#   A handler never raises a GraylogError.  Every failure (validation,
#   network, HTTP, decoding) comes back as ToolOutcome(is_error=True).
#   Validation failures return before any request is sent.
# =============================================================================

import json
from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError

from core.client import GraylogClient
from core.errors import Failure, GraylogError, InputValidationError
from core.formatter import format_count_result, format_search_result, result_to_dict
from core.models import AbsoluteSearchRequest, RelativeSearchRequest, SearchRequest
from core.payload import build_payload

RELATIVE_SEARCH_PATH = "api/search/universal/relative"
ABSOLUTE_SEARCH_PATH = "api/search/universal/absolute"

DEFAULT_SEARCH_LIMIT = 150


@dataclass(frozen=True)
class ToolOutcome:
    """What a handler hands back to the tool layer."""

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, payload: dict[str, Any]) -> "ToolOutcome":
        return cls(text=json.dumps(payload, indent=2, ensure_ascii=False))

    @classmethod
    def failure(cls, error: GraylogError) -> "ToolOutcome":
        return cls(text=error.message, is_error=True)


def validate_request(
    model: type[SearchRequest],
    arguments: Mapping[str, Any],
    tool_name: str,
) -> SearchRequest:
    """Build a request model from raw arguments or raise InputValidationError."""
    try:
        return model.model_validate(dict(arguments))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'input'}: {err['msg']}"
            for err in exc.errors()
        )
        raise InputValidationError(f"Invalid arguments for {tool_name}: {problems}") from None


class SearchHandlers:
    """One coroutine per tool, all sharing a single GraylogClient."""

    def __init__(self, client: GraylogClient):
        self._client = client

    async def search_relative_logs(self, arguments: Mapping[str, Any]) -> ToolOutcome:
        return await self._run("search_relative_logs", RelativeSearchRequest, RELATIVE_SEARCH_PATH, arguments)

    async def count_relative_logs(self, arguments: Mapping[str, Any]) -> ToolOutcome:
        return await self._run(
            "count_relative_logs", RelativeSearchRequest, RELATIVE_SEARCH_PATH, arguments, count_only=True
        )

    async def search_absolute_logs(self, arguments: Mapping[str, Any]) -> ToolOutcome:
        return await self._run("search_absolute_logs", AbsoluteSearchRequest, ABSOLUTE_SEARCH_PATH, arguments)

    async def count_absolute_logs(self, arguments: Mapping[str, Any]) -> ToolOutcome:
        return await self._run(
            "count_absolute_logs", AbsoluteSearchRequest, ABSOLUTE_SEARCH_PATH, arguments, count_only=True
        )

    async def _run(
        self,
        tool_name: str,
        model: type[SearchRequest],
        path: str,
        arguments: Mapping[str, Any],
        count_only: bool = False,
    ) -> ToolOutcome:
        try:
            request = validate_request(model, arguments, tool_name)

            if count_only:
                payload = build_payload(request, limit=0, offset=request.offset or 0)
            else:
                limit = DEFAULT_SEARCH_LIMIT if request.limit is None else request.limit
                payload = build_payload(request, limit=limit)

            result = await self._client.get(path, payload)
            if isinstance(result, Failure):
                return ToolOutcome.failure(result.error)

            if count_only:
                shaped = format_count_result(result.value)
            else:
                shaped = format_search_result(result.value)
            return ToolOutcome.success(result_to_dict(shaped))
        except GraylogError as exc:
            return ToolOutcome.failure(exc)
