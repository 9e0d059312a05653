# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL of the Graylog adapter logic: configuration,
# the HTTP client, payload normalization, response shaping, and the four
# search handlers.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The handlers return plain
#   ToolOutcome values, so they can be driven from tests, scripts, or any
#   other transport without an MCP session.
# =============================================================================
