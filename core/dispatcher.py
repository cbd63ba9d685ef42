# =============================================================================
# core/dispatcher.py  —  Tool Dispatch
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a (tool name, arguments) pair into Unomi calls and a ToolResponse.
#
# THE ORDER OF OPERATIONS (per tool):
#
#   create_scope       validate → create → echo record
#   update_my_profile  ensure scope → validate → resolve → context write
#   get_my_profile     ensure scope → validate → resolve → context read
#   get_profile        validate → GET profile → raw body
#   search_profiles    validate → POST search → raw body
#
# TWO FAULT SURFACES:
#   - ToolFault (raised): bad arguments, unknown tool, scope precondition.
#     These never produce a ToolResponse; the MCP layer turns them into
#     protocol errors.
#   - ToolResponse(is_error=True) (returned): the requested Unomi call
#     failed.  Produced by core.errors.reported().
# =============================================================================

import logging
from typing import Any, Optional

from core.client import UnomiClient
from core.config import UnomiConfig
from core.context import prefix_properties, profile_read_request, update_properties_request
from core.errors import ErrorCode, ToolFault, reported
from core.models import Scope, ToolResponse
from core.resolver import ProfileResolver
from core.scopes import ScopeEnsurer
from core.session import generate_session_id
from core.validators import (
    is_valid_create_scope_args,
    is_valid_get_my_profile_args,
    is_valid_get_profile_args,
    is_valid_search_profiles_args,
    is_valid_update_my_profile_args,
)

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 10
DEFAULT_SEARCH_OFFSET = 0
SEARCHABLE_PROPERTIES = ("firstName", "lastName", "email")


def build_search_query(query: str, limit: Optional[float] = None, offset: Optional[float] = None) -> dict[str, Any]:
    """OR of ``contains`` matches on first name, last name and email."""
    return {
        "offset": DEFAULT_SEARCH_OFFSET if offset is None else offset,
        "limit": DEFAULT_SEARCH_LIMIT if limit is None else limit,
        "condition": {
            "type": "booleanCondition",
            "parameterValues": {
                "operator": "or",
                "subConditions": [
                    {
                        "type": "profilePropertyCondition",
                        "parameterValues": {
                            "propertyName": f"properties.{name}",
                            "comparisonOperator": "contains",
                            "propertyValue": query,
                        },
                    }
                    for name in SEARCHABLE_PROPERTIES
                ],
            },
        },
    }


def _require(valid: bool, message: str) -> None:
    if not valid:
        raise ToolFault(ErrorCode.INVALID_PARAMS, message)


class ToolDispatcher:
    """Routes tool calls to their handlers."""

    def __init__(
        self,
        config: UnomiConfig,
        client: UnomiClient,
        resolver: Optional[ProfileResolver] = None,
        scopes: Optional[ScopeEnsurer] = None,
    ):
        self.config = config
        self.client = client
        self.resolver = resolver or ProfileResolver(config, client)
        self.scopes = scopes or ScopeEnsurer(config, client)
        self._handlers = {
            "create_scope": self.create_scope,
            "update_my_profile": self.update_my_profile,
            "get_my_profile": self.get_my_profile,
            "get_profile": self.get_profile,
            "search_profiles": self.search_profiles,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    async def call_tool(self, name: str, arguments: Any) -> ToolResponse:
        handler = self._handlers.get(name)
        if handler is None:
            raise ToolFault(ErrorCode.METHOD_NOT_FOUND, f"Unknown tool: {name}")
        logger.debug("Dispatching %s", name)
        return await handler(arguments)

    # -------------------------------------------------------------------------
    # create_scope
    # -------------------------------------------------------------------------
    async def create_scope(self, arguments: Any) -> ToolResponse:
        _require(is_valid_create_scope_args(arguments), "Invalid create scope arguments")
        scope = Scope.build(
            arguments["scope"],
            name=arguments.get("name"),
            description=arguments.get("description"),
        )

        async def action() -> ToolResponse:
            await self.client.create_scope(scope)
            return ToolResponse.ok({
                "message": "Scope created successfully",
                "scope": scope.to_payload(),
            })

        return await reported(action())

    # -------------------------------------------------------------------------
    # update_my_profile
    # -------------------------------------------------------------------------
    async def update_my_profile(self, arguments: Any) -> ToolResponse:
        await self.scopes.ensure_scope_exists()
        _require(is_valid_update_my_profile_args(arguments), "Invalid update profile arguments")
        properties = dict(arguments["properties"])
        resolution = await self.resolver.get_effective_profile_id()
        profile_id = resolution.profile_id

        async def action() -> ToolResponse:
            session_id = generate_session_id(profile_id)
            request = update_properties_request(
                self.config, profile_id, session_id, prefix_properties(properties)
            )
            await self.client.post_context(request)
            return ToolResponse.ok({
                "message": "Profile properties updated successfully",
                "updatedProperties": properties,
                "profileId": profile_id,
                "sessionId": session_id,
                "source": resolution.source,
            })

        return await reported(action())

    # -------------------------------------------------------------------------
    # get_my_profile
    # -------------------------------------------------------------------------
    async def get_my_profile(self, arguments: Any) -> ToolResponse:
        await self.scopes.ensure_scope_exists()
        _require(is_valid_get_my_profile_args(arguments), "Invalid get my profile arguments")
        resolution = await self.resolver.get_effective_profile_id()
        profile_id = resolution.profile_id

        async def action() -> ToolResponse:
            session_id = generate_session_id(profile_id)
            request = profile_read_request(
                self.config,
                profile_id,
                session_id,
                require_segments=arguments.get("requireSegments"),
                require_scores=arguments.get("requireScores"),
            )
            data = await self.client.post_context(request)
            if not isinstance(data, dict):
                data = {}
            return ToolResponse.ok({
                "profile": data.get("profileProperties"),
                "session": data.get("sessionProperties"),
                "segments": data.get("profileSegments"),
                "scores": data.get("profileScores"),
                "sessionId": session_id,
                "profileId": profile_id,
                "source": resolution.source,
            })

        return await reported(action())

    # -------------------------------------------------------------------------
    # get_profile / search_profiles
    # -------------------------------------------------------------------------
    async def get_profile(self, arguments: Any) -> ToolResponse:
        _require(is_valid_get_profile_args(arguments), "Invalid profile arguments")

        async def action() -> ToolResponse:
            return ToolResponse.ok(await self.client.get_profile(arguments["profileId"]))

        return await reported(action())

    async def search_profiles(self, arguments: Any) -> ToolResponse:
        _require(is_valid_search_profiles_args(arguments), "Invalid search arguments")
        query = build_search_query(
            arguments["query"],
            limit=arguments.get("limit"),
            offset=arguments.get("offset"),
        )

        async def action() -> ToolResponse:
            return ToolResponse.ok(await self.client.search_profiles(query))

        return await reported(action())
