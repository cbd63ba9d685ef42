"""ResourceLister: one static resource backed by a match-all search."""

import asyncio
import json

import pytest

from core.errors import ErrorCode, ToolFault
from core.resources import PROFILES_URI, ResourceLister


def test_list_resources(client):
    assert ResourceLister(client).list_resources() == [{
        "uri": "unomi://profiles/list",
        "name": "Unomi Profiles",
        "mimeType": "application/json",
        "description": "List of available Apache Unomi profiles",
    }]


def test_read_profiles_list(client, unomi):
    body = {"list": [{"itemId": "p1"}], "totalSize": 1}
    unomi.route("POST", "/cxs/profiles/search", body=body)

    (content,) = asyncio.run(ResourceLister(client).read_resource(PROFILES_URI))

    assert content["uri"] == PROFILES_URI
    assert content["mimeType"] == "application/json"
    assert json.loads(content["text"]) == body
    assert unomi.body(unomi.requests[0]) == {
        "offset": 0,
        "limit": 10,
        "condition": {"type": "matchAllCondition"},
    }


def test_unknown_uri_faults_without_remote_call(client, unomi):
    with pytest.raises(ToolFault) as excinfo:
        asyncio.run(ResourceLister(client).read_resource("unomi://segments/list"))
    assert excinfo.value.code is ErrorCode.INVALID_REQUEST
    assert excinfo.value.message == "Unknown resource: unomi://segments/list"
    assert unomi.requests == []


def test_remote_failure_is_internal_error(client, unomi):
    unomi.route("POST", "/cxs/profiles/search", status=500, body={"message": "search failed"})
    with pytest.raises(ToolFault) as excinfo:
        asyncio.run(ResourceLister(client).read_resource(PROFILES_URI))
    assert excinfo.value.code is ErrorCode.INTERNAL_ERROR
    assert excinfo.value.message == "Unomi API error: search failed"
