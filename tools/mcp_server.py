# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the Unomi operations as MCP tools and one MCP resource.  Tool
#   calls go straight to core.dispatcher.ToolDispatcher with the raw
#   "arguments" object the host sent; the is_valid_* checks in
#   core/validators.py are the only argument validation.
#
# TOOL REGISTRATION:
#   tools/list and tools/call are installed directly in the low-level
#   server's request table, the same way FastMCP installs its own
#   resources/read handler.  Arguments reach the dispatcher uncoerced, and
#   an McpError raised here reaches the JSON-RPC layer intact.
#
# HOW OUTCOMES MAP ONTO MCP:
#   ToolResponse            →  CallToolResult (text content)
#   ToolResponse(is_error)  →  CallToolResult with isError: true
#   ToolFault               →  McpError  →  JSON-RPC error response
#                                           carrying the fault's code
#
# RUNNING THIS SERVER:
#   main.py builds the config and calls create_server(config).run().
#   Claude Desktop (or any MCP host) talks to it over stdio.
# =============================================================================

import json
import logging
import sys
from typing import Any, Optional

import httpx
from fastmcp import FastMCP
from mcp import types
from mcp.shared.exceptions import McpError
from mcp.types import ErrorData

from core.client import UnomiClient
from core.config import UnomiConfig
from core.dispatcher import ToolDispatcher
from core.errors import ToolFault
from core.models import ToolResponse
from core.resources import JSON_MIME_TYPE, PROFILES_RESOURCE, PROFILES_URI, ResourceLister

SERVER_NAME = "unomi-profile-server"
SERVER_VERSION = "0.1.0"

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT is the MCP transport; every log line goes to STDERR.
#
#   CYAN    incoming requests (tool name + parameters)
#   GREEN   response JSON
#   YELLOW  status / faults
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logger = logging.getLogger("unomi_mcp")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON in GREEN, then return it."""
    logger.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'))}{_RESET}")
    return result


def _to_mcp_error(fault: ToolFault) -> McpError:
    return McpError(ErrorData(code=int(fault.code), message=fault.message))


def _to_call_tool_result(response: ToolResponse) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=item["text"]) for item in response.content],
        isError=response.is_error,
    )


# =============================================================================
# Tool catalogue
# =============================================================================
# Plain JSON Schema, advertised as-is.  Hosts use it to build their calls;
# the server does not enforce it.
# =============================================================================
TOOLS = [
    types.Tool(
        name="create_scope",
        description="Create a new Unomi scope",
        inputSchema={
            "type": "object",
            "properties": {
                "scope": {"type": "string", "description": "Scope identifier"},
                "name": {"type": "string", "description": "Human-readable name for the scope"},
                "description": {"type": "string", "description": "Description of the scope"},
            },
            "required": ["scope"],
        },
    ),
    types.Tool(
        name="update_my_profile",
        description="Update properties of your profile using environment-provided ID",
        inputSchema={
            "type": "object",
            "properties": {
                "properties": {
                    "type": "object",
                    "description": "Key-value pairs of properties to update",
                    "additionalProperties": {"type": ["string", "number", "boolean", "null"]},
                },
            },
            "required": ["properties"],
        },
    ),
    types.Tool(
        name="get_my_profile",
        description="Get your profile using environment-provided IDs",
        inputSchema={
            "type": "object",
            "properties": {
                "requireSegments": {
                    "type": "boolean",
                    "description": "Whether to include segments in the response",
                },
                "requireScores": {
                    "type": "boolean",
                    "description": "Whether to include scores in the response",
                },
            },
        },
    ),
    types.Tool(
        name="get_profile",
        description="Get a specific Unomi profile by ID",
        inputSchema={
            "type": "object",
            "properties": {
                "profileId": {"type": "string", "description": "Profile ID"},
            },
            "required": ["profileId"],
        },
    ),
    types.Tool(
        name="search_profiles",
        description="Search Unomi profiles",
        inputSchema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search query"},
                "limit": {"type": "number", "description": "Maximum number of results"},
                "offset": {"type": "number", "description": "Result offset for pagination"},
            },
            "required": ["query"],
        },
    ),
]


# =============================================================================
# Server factory
# =============================================================================
def create_server(
    config: UnomiConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastMCP:
    """Build the FastMCP server around one dispatcher and one resource lister.

    Args:
        config: Validated process configuration.
        transport: Optional httpx transport (tests pass a MockTransport).
    """
    client = UnomiClient(config, transport=transport)
    dispatcher = ToolDispatcher(config, client)
    resources = ResourceLister(client)

    mcp = FastMCP(SERVER_NAME)

    async def dispatch(tool_name: str, arguments: Any) -> ToolResponse:
        _log_request(tool_name, arguments=arguments)
        try:
            response = await dispatcher.call_tool(tool_name, arguments)
        except ToolFault as fault:
            _log_status(f"{fault.code.name}: {fault.message}")
            raise _to_mcp_error(fault) from fault
        _log_response(tool_name, response.to_payload())
        return response

    # -------------------------------------------------------------------------
    # tools/list and tools/call
    # -------------------------------------------------------------------------
    async def list_tools(request: types.ListToolsRequest) -> types.ServerResult:
        return types.ServerResult(types.ListToolsResult(tools=TOOLS))

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        response = await dispatch(request.params.name, request.params.arguments)
        return types.ServerResult(_to_call_tool_result(response))

    mcp._mcp_server.request_handlers[types.ListToolsRequest] = list_tools
    mcp._mcp_server.request_handlers[types.CallToolRequest] = call_tool

    # -------------------------------------------------------------------------
    # RESOURCE: unomi://profiles/list
    # -------------------------------------------------------------------------
    @mcp.resource(
        PROFILES_URI,
        name=PROFILES_RESOURCE["name"],
        description=PROFILES_RESOURCE["description"],
        mime_type=JSON_MIME_TYPE,
    )
    async def profiles_list() -> str:
        _log_request("read_resource", uri=PROFILES_URI)
        try:
            contents = await resources.read_resource(PROFILES_URI)
        except ToolFault as fault:
            _log_status(f"{fault.code.name}: {fault.message}")
            raise _to_mcp_error(fault) from fault
        return contents[0]["text"]

    _log_status(f"{SERVER_NAME} {SERVER_VERSION} ready: tools={dispatcher.tool_names}")
    return mcp
