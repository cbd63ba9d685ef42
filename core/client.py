# =============================================================================
# core/client.py  —  Unomi REST Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   The only place in the code base that speaks HTTP.  Every method maps to
#   exactly one Unomi endpoint and returns the decoded JSON body.
#
# AUTHENTICATION:
#   Every request carries HTTP basic auth (UNOMI_USERNAME / UNOMI_PASSWORD)
#   and the X-Unomi-Peer header holding the privileged key.
#
# FAILURES:
#   Any httpx error (connection refused, timeout, non-2xx status) is raised
#   as UnomiAPIError.  Deciding what a failure MEANS is left to the caller;
#   see core/errors.py for the three policies.
#
# CONNECTIONS:
#   A fresh AsyncClient per request.  Calls are sequential and infrequent,
#   so there is nothing to pool.  Tests inject an httpx.MockTransport.
# =============================================================================

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from core.config import UnomiConfig
from core.errors import UnomiAPIError
from core.models import ContextRequest, Profile, Scope

logger = logging.getLogger(__name__)

PROFILE_PATH = "/cxs/profiles"
SEARCH_PATH = "/cxs/profiles/search"
CONTEXT_PATH = "/context.json"
SCOPE_PATH = "/cxs/scopes"


def _to_api_error(exc: httpx.HTTPError) -> UnomiAPIError:
    """Prefer the ``message`` field of a JSON error body over httpx's text."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return UnomiAPIError(str(body["message"]), response.status_code)
        return UnomiAPIError(str(exc), response.status_code)
    return UnomiAPIError(str(exc) or type(exc).__name__)


class UnomiClient:
    """Thin async wrapper over the Unomi REST API."""

    def __init__(self, config: UnomiConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.base_url,
            auth=self.config.auth,
            headers=self.config.headers,
            transport=self._transport,
        )

    async def _send(self, method: str, path: str, json: Any = None) -> httpx.Response:
        logger.debug("%s %s", method, path)
        try:
            async with self._client() as client:
                response = await client.request(method, path, json=json)
                response.raise_for_status()
                return response
        except httpx.HTTPError as exc:
            raise _to_api_error(exc) from exc

    @staticmethod
    def _body(response: httpx.Response) -> Any:
        """Decoded JSON body, or None for 204 / empty / non-JSON bodies."""
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------
    async def get_profile(self, profile_id: str) -> Any:
        response = await self._send("GET", f"{PROFILE_PATH}/{quote(profile_id, safe='')}")
        return self._body(response)

    async def search_profiles(self, query: dict[str, Any]) -> Any:
        response = await self._send("POST", SEARCH_PATH, json=query)
        return self._body(response)

    async def find_profile_id_by_email(self, email: str) -> Optional[str]:
        """Return the itemId of the first profile whose email equals ``email``."""
        result = await self.search_profiles({
            "condition": {
                "type": "profilePropertyCondition",
                "parameterValues": {
                    "propertyName": "properties.email",
                    "comparisonOperator": "equals",
                    "propertyValue": email,
                },
            },
            "limit": 1,
        })
        matches = result.get("list") if isinstance(result, dict) else None
        if matches and isinstance(matches, list) and isinstance(matches[0], dict):
            return Profile.from_payload(matches[0]).item_id or None
        return None

    # -------------------------------------------------------------------------
    # Context
    # -------------------------------------------------------------------------
    async def post_context(self, request: ContextRequest) -> Any:
        response = await self._send("POST", CONTEXT_PATH, json=request.to_payload())
        return self._body(response)

    # -------------------------------------------------------------------------
    # Scopes
    # -------------------------------------------------------------------------
    async def get_scope(self, scope_id: str) -> tuple[int, Any]:
        """Return (status code, decoded body) so callers can see a 204."""
        response = await self._send("GET", f"{SCOPE_PATH}/{quote(scope_id, safe='')}")
        return response.status_code, self._body(response)

    async def create_scope(self, scope: Scope) -> Any:
        response = await self._send("POST", SCOPE_PATH, json=scope.to_payload())
        return self._body(response)
