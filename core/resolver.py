# =============================================================================
# core/resolver.py  —  Which Profile Is "Mine"?
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   The get_my_profile / update_my_profile tools act on behalf of the
#   configured identity.  This module decides which Unomi profile that is:
#
#     UNOMI_EMAIL set?
#       ├─ yes → search profiles where properties.email == UNOMI_EMAIL
#       │         ├─ found     → use that profile's itemId
#       │         └─ not found → use UNOMI_PROFILE_ID and, best effort,
#       │                        write the email onto it so the next lookup
#       │                        finds it
#       └─ no  → use UNOMI_PROFILE_ID
#
# FAILURE POLICY:
#   Both remote calls here are best effort.  A failed lookup counts as "not
#   found"; a failed email write is logged and forgotten.  Neither ever
#   reaches the tool caller.
# =============================================================================

import logging
from typing import Optional

from core.client import UnomiClient
from core.config import UnomiConfig
from core.context import update_properties_request
from core.errors import best_effort
from core.models import Resolution
from core.session import generate_session_id

logger = logging.getLogger(__name__)

SOURCE_EMAIL_LOOKUP = "email_lookup"
SOURCE_ENVIRONMENT = "environment"


class ProfileResolver:
    """Resolves the effective profile id for identity-scoped tools."""

    def __init__(self, config: UnomiConfig, client: UnomiClient):
        self.config = config
        self.client = client

    @property
    def source(self) -> str:
        return SOURCE_EMAIL_LOOKUP if self.config.email else SOURCE_ENVIRONMENT

    async def find_profile_by_email(self, email: str) -> Optional[str]:
        profile_id = None
        async with best_effort(f"look up profile by email {email!r}"):
            profile_id = await self.client.find_profile_id_by_email(email)
        return profile_id

    async def get_effective_profile_id(self) -> Resolution:
        email = self.config.email
        fallback = self.config.profile_id
        if not email:
            return Resolution(fallback, self.source)

        existing = await self.find_profile_by_email(email)
        if existing:
            logger.info("Resolved profile %s via email lookup", existing)
            return Resolution(existing, self.source)

        logger.info("No profile has email %r; using fallback %s", email, fallback)
        await self._attach_email(fallback, email)
        return Resolution(fallback, self.source)

    async def _attach_email(self, profile_id: str, email: str) -> None:
        request = update_properties_request(
            self.config,
            profile_id,
            generate_session_id(profile_id),
            {"properties.email": email},
        )
        async with best_effort(f"set email on profile {profile_id}"):
            await self.client.post_context(request)
