# =============================================================================
# core/resources.py  —  MCP Resources
# =============================================================================
#
# One resource: the first page of Unomi profiles.  Unlike tools, a failed
# read is a protocol fault (there is no isError flag on resource reads).
# =============================================================================

import json
from typing import Any

from core.client import UnomiClient
from core.errors import ErrorCode, ToolFault, UnomiAPIError

PROFILES_URI = "unomi://profiles/list"
JSON_MIME_TYPE = "application/json"

PROFILES_RESOURCE = {
    "uri": PROFILES_URI,
    "name": "Unomi Profiles",
    "mimeType": JSON_MIME_TYPE,
    "description": "List of available Apache Unomi profiles",
}

LIST_ALL_QUERY = {
    "offset": 0,
    "limit": 10,
    "condition": {"type": "matchAllCondition"},
}


class ResourceLister:

    def __init__(self, client: UnomiClient):
        self.client = client

    def list_resources(self) -> list[dict[str, str]]:
        return [dict(PROFILES_RESOURCE)]

    async def read_resource(self, uri: str) -> list[dict[str, Any]]:
        if uri != PROFILES_URI:
            raise ToolFault(ErrorCode.INVALID_REQUEST, f"Unknown resource: {uri}")
        try:
            data = await self.client.search_profiles(LIST_ALL_QUERY)
        except UnomiAPIError as exc:
            raise ToolFault(ErrorCode.INTERNAL_ERROR, f"Unomi API error: {exc.message}") from exc
        return [{
            "uri": uri,
            "mimeType": JSON_MIME_TYPE,
            "text": json.dumps(data, indent=2),
        }]
