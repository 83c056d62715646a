"""Shared test fixtures for airtable-mcp tests.

Requests to Airtable are served by an in-memory router plugged into httpx via
MockTransport, so tests run without network access or credentials.
"""

import json
from typing import Any, Callable, Dict, List, Tuple, Union

import httpx
import pytest

from airtable_mcp.config import ServerConfig
from airtable_mcp.context import build_context

Route = Union[Tuple[int, Any], Callable[[httpx.Request], httpx.Response]]

NOT_FOUND_BODY = {"error": {"type": "NOT_FOUND", "message": "Could not find what you are looking for"}}


class FakeApi:
    """Routes (method, path) pairs to canned JSON responses and records every request."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json=NOT_FOUND_BODY)
        if callable(route):
            return route(request)
        status, body = route
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


SCHEMA = {
    "tables": [
        {
            "id": "tblProducts",
            "name": "Products",
            "description": "Things we sell",
            "primaryFieldId": "fldName",
            "fields": [
                {"id": "fldName", "name": "Name", "type": "singleLineText"},
                {"id": "fldNotes", "name": "Notes", "type": "multilineText", "description": "Free text"},
                {"id": "fldTags", "name": "Tags", "type": "multipleRecordLinks"},
                {"id": "fldPrice", "name": "Price", "type": "currency"},
                {"id": "fldActive", "name": "Active", "type": "checkbox"},
            ],
            "views": [{"id": "viwAll", "name": "Grid view", "type": "grid"}],
        },
        {
            "id": "tblCounters",
            "name": "Counters",
            "fields": [
                {"id": "fldCount", "name": "Count", "type": "number"},
            ],
        },
    ]
}

RECORDS = [
    {
        "id": "rec1",
        "createdTime": "2024-01-01T00:00:00.000Z",
        "fields": {"Name": "Widget A", "Tags": ["red", "blue"], "Price": 10},
    },
    {
        "id": "rec2",
        "createdTime": "2024-01-02T00:00:00.000Z",
        "fields": {"Name": "Gadget", "Tags": ["blue"], "Price": 20},
    },
]


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig(
        airtable_access_token="patTEST",
        completion_api_key="sk-test",
        completion_api_url="https://llm.example.com/v1/chat/completions",
    )


@pytest.fixture
def fake_airtable() -> FakeApi:
    fake = FakeApi()
    fake.add("GET", "/v0/meta/bases/appTEST/tables", SCHEMA)
    fake.add("GET", "/v0/appTEST/Products", {"records": RECORDS})
    return fake


@pytest.fixture
def fake_llm() -> FakeApi:
    fake = FakeApi()
    fake.add(
        "POST",
        "/v1/chat/completions",
        {"id": "chatcmpl-1", "choices": [{"message": {"role": "assistant", "content": "hi"}}]},
    )
    return fake


@pytest.fixture
def context(config, fake_airtable, fake_llm):
    return build_context(config, airtable_transport=fake_airtable.transport, completion_transport=fake_llm.transport)
