# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP wiring for the Graylog search tools.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between MCP and core/.  It:
#     1. Declares each tool's name, docstring and typed parameters
#        (the agent reads these to decide WHEN and HOW to call it)
#     2. Forwards the supplied arguments to a core/search.py handler
#     3. Returns the handler's JSON text, or raises ToolError on failure
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build HTTP requests (core/client.py does)
#   - They do NOT shape Graylog responses (core/formatter.py does)
#   - They do NOT read environment variables (main.py resolves config)
# =============================================================================
