# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of everything that crosses the Unomi
# boundary.  Python code uses snake_case attributes; each model knows how to
# render itself as the camelCase JSON payload Unomi expects (to_payload) or,
# for remote-owned entities, how to read one (from_payload).
#
# DESIGN PRINCIPLE — "Open where Unomi is open":
#   Profile properties, scores and system properties belong to the remote
#   schema, not to us.  They stay plain dicts with whatever values Unomi
#   returns (str, number, bool, None, nested dicts).  We never coerce them.
# =============================================================================

import json
from dataclasses import dataclass, field
from typing import Any, Optional


# -----------------------------------------------------------------------------
# Profile — owned by Unomi, read-only here
# -----------------------------------------------------------------------------
@dataclass
class Consent:
    """One consent record on a profile."""

    status: str
    timestamp: Optional[int] = None


@dataclass
class Profile:
    """A Unomi profile as returned by GET /cxs/profiles/{id}."""

    item_id: str
    properties: dict[str, Any] = field(default_factory=dict)
    segments: list[str] = field(default_factory=list)
    scores: dict[str, float] = field(default_factory=dict)
    consents: dict[str, Consent] = field(default_factory=dict)
    system_properties: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Profile":
        records = payload.get("consents")
        consents = {
            name: Consent(status=record.get("status", ""), timestamp=record.get("timestamp"))
            for name, record in (records if isinstance(records, dict) else {}).items()
            if isinstance(record, dict)
        }
        return cls(
            item_id=payload.get("itemId", ""),
            properties=dict(payload.get("properties") or {}),
            segments=list(payload.get("segments") or []),
            scores=dict(payload.get("scores") or {}),
            consents=consents,
            system_properties=dict(payload.get("systemProperties") or {}),
        )


# -----------------------------------------------------------------------------
# Scope — the namespace Unomi requires before it accepts events
# -----------------------------------------------------------------------------
@dataclass
class ScopeMetadata:
    id: str
    scope: str
    name: Optional[str] = None
    description: Optional[str] = None


@dataclass
class Scope:
    """A Unomi scope record (POST /cxs/scopes)."""

    item_id: str
    metadata: ScopeMetadata
    item_type: str = "scope"

    @classmethod
    def build(
        cls,
        scope: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> "Scope":
        return cls(
            item_id=scope,
            metadata=ScopeMetadata(id=scope, scope=scope, name=name, description=description),
        )

    def to_payload(self) -> dict[str, Any]:
        metadata: dict[str, Any] = {"id": self.metadata.id}
        if self.metadata.name is not None:
            metadata["name"] = self.metadata.name
        if self.metadata.description is not None:
            metadata["description"] = self.metadata.description
        metadata["scope"] = self.metadata.scope
        return {
            "itemId": self.item_id,
            "itemType": self.item_type,
            "metadata": metadata,
        }


# -----------------------------------------------------------------------------
# Context requests — POST /context.json, used for both reads and writes
# -----------------------------------------------------------------------------
@dataclass
class ItemRef:
    """The {itemId, itemType, scope} triple used for sources and targets."""

    item_id: str
    item_type: str
    scope: str

    def to_payload(self) -> dict[str, str]:
        return {"itemId": self.item_id, "itemType": self.item_type, "scope": self.scope}


@dataclass
class ContextEvent:
    """One event inside a context request (e.g. updateProperties)."""

    event_type: str
    scope: str
    source: ItemRef
    target: ItemRef
    properties: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return {
            "eventType": self.event_type,
            "scope": self.scope,
            "source": self.source.to_payload(),
            "target": self.target.to_payload(),
            "properties": self.properties,
        }


@dataclass
class ContextRequest:
    """Envelope sent to /context.json.

    Writes carry ``events``; reads carry the ``required*`` / ``require*``
    flags.  Unset optional fields are left out of the payload.
    """

    session_id: str
    profile_id: str
    source: ItemRef
    events: Optional[list[ContextEvent]] = None
    required_profile_properties: Optional[list[str]] = None
    required_session_properties: Optional[list[str]] = None
    require_segments: Optional[bool] = None
    require_scores: Optional[bool] = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "sessionId": self.session_id,
            "profileId": self.profile_id,
            "source": self.source.to_payload(),
        }
        if self.required_profile_properties is not None:
            payload["requiredProfileProperties"] = self.required_profile_properties
        if self.required_session_properties is not None:
            payload["requiredSessionProperties"] = self.required_session_properties
        if self.require_segments is not None:
            payload["requireSegments"] = self.require_segments
        if self.require_scores is not None:
            payload["requireScores"] = self.require_scores
        if self.events is not None:
            payload["events"] = [event.to_payload() for event in self.events]
        return payload


# -----------------------------------------------------------------------------
# Resolution — which profile an identity-scoped tool call operates on
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Resolution:
    profile_id: str
    source: str                        # "email_lookup" or "environment"


# -----------------------------------------------------------------------------
# ToolResponse — what every tool call hands back to the MCP layer
# -----------------------------------------------------------------------------
@dataclass
class ToolResponse:
    """A tool result: a list of MCP text items plus the isError flag."""

    content: list[dict[str, str]]
    is_error: bool = False

    @classmethod
    def ok(cls, payload: Any) -> "ToolResponse":
        return cls(content=[{"type": "text", "text": json.dumps(payload, indent=2)}])

    @classmethod
    def error(cls, message: str) -> "ToolResponse":
        return cls(content=[{"type": "text", "text": message}], is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(item["text"] for item in self.content)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"content": self.content}
        if self.is_error:
            payload["isError"] = True
        return payload
