# =============================================================================
# main.py  -  Entry Point for the Graylog MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#   (or the installed console script: graylog-mcp-server)
#
# WHAT HAPPENS:
#   1. Loads a .env file from the working directory, if there is one
#   2. Resolves GRAYLOG_BASE_URL / GRAYLOG_USERNAME / GRAYLOG_PASSWORD once
#   3. Builds the FastMCP server with the four search tools
#   4. Serves MCP over stdio until the client disconnects
#
# A missing or malformed setting is fatal: the message goes to stderr and
# the process exits with status 1 before any transport is opened.
#
# CONNECTING FROM AN MCP CLIENT (e.g. a desktop agent's config file):
#   {
#     "command": "uv",
#     "args": ["run", "python", "/path/to/main.py"],
#     "env": {
#       "GRAYLOG_BASE_URL": "https://graylog.example.com",
#       "GRAYLOG_USERNAME": "...",
#       "GRAYLOG_PASSWORD": "..."
#     }
#   }
# =============================================================================

import sys

from dotenv import load_dotenv

from core.config import load_config
from core.errors import ConfigurationError


def main() -> None:
    load_dotenv()

    try:
        config = load_config()
    except ConfigurationError as exc:
        print(f"✗ {exc}", file=sys.stderr)
        sys.exit(1)

    # Imported here so logging.basicConfig in mcp_server sees LOG_LEVEL
    # from the .env file loaded above.
    from tools.mcp_server import build_server

    mcp = build_server(config)
    mcp.run()


if __name__ == "__main__":
    main()
