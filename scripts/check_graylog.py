# =============================================================================
# scripts/check_graylog.py  -  Live Connectivity Check
# =============================================================================
#
# HOW TO RUN:
#   uv run python -m scripts.check_graylog
#
# WHAT IT DOES:
#   Talks to a real Graylog with the same client the MCP tools use:
#     1. Relative search: "message:*" over the last 5 minutes, limit 1
#     2. Absolute search: "message:*" over the last hour, limit 1
#   Each response must carry a string "query" and a numeric
#   "total_results".  Prints [PASS] per check, or [FAIL] and exits 1.
# =============================================================================

import asyncio
import json
import sys
from datetime import datetime, timedelta, timezone

from dotenv import load_dotenv

from core.client import GraylogClient
from core.config import load_config
from core.errors import Failure, GraylogError
from core.search import ABSOLUTE_SEARCH_PATH, RELATIVE_SEARCH_PATH


def _is_search_response(body) -> bool:
    return (
        isinstance(body, dict)
        and isinstance(body.get("query"), str)
        and isinstance(body.get("total_results"), (int, float))
    )


async def _check(client: GraylogClient, label: str, path: str, params: dict) -> None:
    result = await client.get(path, params)
    if isinstance(result, Failure):
        raise result.error
    body = result.value
    if not _is_search_response(body):
        raise GraylogError(f"{label.capitalize()} response JSON did not match expected shape")
    print(
        f"[PASS] {label}: status=200, total_results={body['total_results']}, "
        f"query={body['query']}, results={json.dumps(body, indent=2)}"
    )


async def run_checks() -> None:
    client = GraylogClient(load_config())

    await _check(client, "relative", RELATIVE_SEARCH_PATH, {"query": "message:*", "range": 300, "limit": 1})

    to = datetime.now(timezone.utc)
    since = to - timedelta(hours=1)
    await _check(
        client,
        "absolute",
        ABSOLUTE_SEARCH_PATH,
        {
            "query": "message:*",
            "from": since.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "to": to.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "limit": 1,
        },
    )

    print("All checks passed.")


def main() -> None:
    load_dotenv()
    try:
        asyncio.run(run_checks())
    except GraylogError as exc:
        print(f"[FAIL] {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
