"""Payload rendering for the wire models."""

from core.models import ContextRequest, ItemRef, Profile, Scope, ToolResponse


def test_profile_from_sparse_payload():
    profile = Profile.from_payload({"itemId": "p1", "properties": {"age": 30, "nested": {"a": 1}}})
    assert profile.item_id == "p1"
    assert profile.properties == {"age": 30, "nested": {"a": 1}}
    assert profile.segments == []
    assert profile.consents == {}


def test_profile_consents():
    profile = Profile.from_payload({
        "itemId": "p1",
        "consents": {"newsletter": {"status": "GRANTED", "timestamp": 1700000000}},
    })
    assert profile.consents["newsletter"].status == "GRANTED"
    assert profile.consents["newsletter"].timestamp == 1700000000


def test_scope_payload_omits_unset_metadata():
    assert Scope.build("web").to_payload() == {
        "itemId": "web",
        "itemType": "scope",
        "metadata": {"id": "web", "scope": "web"},
    }


def test_context_request_minimal_payload():
    request = ContextRequest("p1-20240101", "p1", ItemRef("claude-desktop", "claude", "claude-desktop"))
    assert request.to_payload() == {
        "sessionId": "p1-20240101",
        "profileId": "p1",
        "source": {"itemId": "claude-desktop", "itemType": "claude", "scope": "claude-desktop"},
    }


def test_tool_response_json_is_indented():
    response = ToolResponse.ok({"a": 1})
    assert response.text == '{\n  "a": 1\n}'
    assert response.to_payload() == {"content": [{"type": "text", "text": response.text}]}
