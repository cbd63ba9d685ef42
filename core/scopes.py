# =============================================================================
# core/scopes.py  —  Make Sure a Scope Exists
# =============================================================================
#
# Unomi drops events whose scope does not exist, without reporting an error.
# Before any identity-scoped tool runs, the dispatcher calls
# ensure_scope_exists() for the default scope.
#
# "Absent" means: GET /cxs/scopes/{id} answered 204, or answered with an
# empty body / an object without keys.  A scope that exists with empty
# metadata but no keys at all would look the same.
#
# FAILURE POLICY: required.  If we cannot check or create the scope, the
# tool call fails with an internal-error fault.
# =============================================================================

import logging
from typing import Optional

from core.client import UnomiClient
from core.config import UnomiConfig
from core.errors import required
from core.models import Scope

logger = logging.getLogger(__name__)

AUTO_SCOPE_DESCRIPTION = "Automatically created scope for Claude Desktop MCP Server"


def auto_scope(scope: str) -> Scope:
    """The record we create for a scope nobody has set up yet."""
    return Scope.build(
        scope,
        name=f"Claude Desktop Scope - {scope}",
        description=AUTO_SCOPE_DESCRIPTION,
    )


class ScopeEnsurer:

    def __init__(self, config: UnomiConfig, client: UnomiClient):
        self.config = config
        self.client = client

    async def ensure_scope_exists(self, scope: Optional[str] = None) -> bool:
        """Create ``scope`` (default: the configured scope) if Unomi lacks it.

        Returns:
            True if the scope was created, False if it already existed.

        Raises:
            ToolFault: INTERNAL_ERROR if Unomi could not be reached.
        """
        scope = scope or self.config.default_scope
        async with required("check/create scope"):
            status, body = await self.client.get_scope(scope)
            if status != 204 and body:
                return False
            logger.info("Scope %r not found; creating it", scope)
            await self.client.create_scope(auto_scope(scope))
        return True
