# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP wiring for the Unomi profile server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between MCP and core/.  It:
#     1. Advertises each tool with a JSON Schema and a description (the host
#        shows these to the model)
#     2. Hands the raw arguments to core.dispatcher.ToolDispatcher
#     3. Maps ToolResponse onto CallToolResult and ToolFault onto a
#        JSON-RPC error
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build Unomi payloads (core/context.py, core/dispatcher.py)
#   - They do NOT talk HTTP (core/client.py)
# =============================================================================
