# =============================================================================
# core/context.py  —  Context Request Builders
# =============================================================================
#
# Both the profile resolver and the "my profile" tools talk to /context.json.
# These helpers build the two shapes they need so the envelope is spelled
# out in exactly one place:
#
#   update_properties_request  →  write: one updateProperties event
#   profile_read_request       →  read: all profile + session properties
# =============================================================================

from typing import Any, Optional

from core.config import UnomiConfig
from core.models import ContextEvent, ContextRequest, ItemRef

SOURCE_ITEM_TYPE = "claude"
PROFILE_ITEM_TYPE = "profile"


def source_ref(config: UnomiConfig) -> ItemRef:
    return ItemRef(config.source_id, SOURCE_ITEM_TYPE, config.default_scope)


def prefix_properties(properties: dict[str, Any]) -> dict[str, Any]:
    """{"age": 30} -> {"properties.age": 30}"""
    return {f"properties.{key}": value for key, value in properties.items()}


def update_properties_request(
    config: UnomiConfig,
    profile_id: str,
    session_id: str,
    update: dict[str, Any],
) -> ContextRequest:
    """Build a write carrying a single updateProperties event.

    ``update`` keys must already be fully qualified (``properties.<name>``).
    """
    event = ContextEvent(
        event_type="updateProperties",
        scope=config.default_scope,
        source=source_ref(config),
        target=ItemRef(profile_id, PROFILE_ITEM_TYPE, config.default_scope),
        properties={"update": update},
    )
    return ContextRequest(
        session_id=session_id,
        profile_id=profile_id,
        source=source_ref(config),
        events=[event],
    )


def profile_read_request(
    config: UnomiConfig,
    profile_id: str,
    session_id: str,
    require_segments: Optional[bool] = None,
    require_scores: Optional[bool] = None,
) -> ContextRequest:
    return ContextRequest(
        session_id=session_id,
        profile_id=profile_id,
        source=source_ref(config),
        required_profile_properties=["*"],
        required_session_properties=["*"],
        require_segments=require_segments,
        require_scores=require_scores,
    )
