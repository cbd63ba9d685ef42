# =============================================================================
# core/errors.py  —  Fault Taxonomy & Remote-Failure Strategies
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Defines every error the server can produce and the three policies used
#   when a call to Unomi fails:
#
#     best_effort  →  side effect nobody asked for (log it, swallow it)
#     required     →  precondition the action cannot run without (escalate
#                     as an internal-error fault)
#     reported     →  the action the caller asked for (return an error
#                     payload with isError=True)
#
#   The tools/ layer maps ToolFault onto MCP protocol errors.  Nothing here
#   imports the MCP framework.
# =============================================================================

import logging
from contextlib import asynccontextmanager
from enum import IntEnum
from typing import Awaitable, Optional

from core.models import ToolResponse

logger = logging.getLogger(__name__)


class ErrorCode(IntEnum):
    """JSON-RPC error codes used for protocol-level faults."""

    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class ConfigurationError(Exception):
    """Required configuration is missing.  Fatal at startup."""


class ToolFault(Exception):
    """A protocol-level fault (bad arguments, unknown tool, failed precondition)."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"ToolFault({self.code.name}, {self.message!r})"


class UnomiAPIError(Exception):
    """Any transport-level failure talking to Unomi.

    ``message`` prefers the ``message`` field of a JSON error body and falls
    back to the transport error text.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


# =============================================================================
# Strategy 1: best_effort  —  non-critical side effects
# =============================================================================
@asynccontextmanager
async def best_effort(action: str):
    """Run a block whose failure must never reach the caller.

    Usage::

        async with best_effort("set email on fallback profile"):
            await client.post_context(request)
    """
    try:
        yield
    except UnomiAPIError as exc:
        logger.warning("%s failed (ignored): %s", action, exc.message)


# =============================================================================
# Strategy 2: required  —  blocking preconditions
# =============================================================================
@asynccontextmanager
async def required(action: str):
    """Run a block whose failure aborts the tool call with INTERNAL_ERROR."""
    try:
        yield
    except UnomiAPIError as exc:
        logger.error("%s failed: %s", action, exc.message)
        raise ToolFault(
            ErrorCode.INTERNAL_ERROR,
            f"Failed to {action}: {exc.message}",
        ) from exc


# =============================================================================
# Strategy 3: reported  —  the primary requested action
# =============================================================================
async def reported(action: Awaitable[ToolResponse]) -> ToolResponse:
    """Await the primary action; a remote failure becomes an error payload."""
    try:
        return await action
    except UnomiAPIError as exc:
        logger.error("Unomi API error: %s", exc.message)
        return ToolResponse.error(f"Unomi API error: {exc.message}")
