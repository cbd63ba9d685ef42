# =============================================================================
# core/__init__.py
# =============================================================================
# All business logic for the Unomi profile server.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or the MCP SDK.  The only
#   third-party import is httpx, confined to core/client.py.  Faults are
#   core.errors.ToolFault; tools/ decides how they look on the wire.
# =============================================================================
