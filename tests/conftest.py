"""
Shared fixtures: a resolved config and an in-process stand-in for Graylog.
"""

import copy
from typing import Any, Optional

import httpx
import pytest

from core.client import GraylogClient
from core.config import GraylogConfig
from core.search import SearchHandlers


SAMPLE_SEARCH_RESPONSE = {
    "query": "message:*",
    "built_query": "{...}",
    "used_indices": [{"index_name": "graylog_0"}],
    "took_ms": 12,
    "total_results": 42,
    "fields": ["source", "message", "timestamp"],
    "messages": [
        {
            "index": "graylog_0",
            "message": {"_id": "a1", "source": "web-01", "message": "disk full on /var"},
            "highlight": {"message": ["<em>disk</em> full"]},
            "decoration_stats": None,
        },
        {
            "index": "graylog_0",
            "message": {"_id": "a2", "source": "web-02", "message": "request served"},
            "decoration_stats": None,
        },
    ],
}


class FakeGraylog:
    """Records every request and answers with a canned response.

    Pass ``error`` to make the transport raise (simulating DNS failure,
    refused connections or timeouts) instead of answering.
    """

    def __init__(
        self,
        status_code: int = 200,
        body: Any = None,
        text: Optional[str] = None,
        error: Optional[Exception] = None,
    ):
        self.status_code = status_code
        self.body = copy.deepcopy(SAMPLE_SEARCH_RESPONSE) if body is None else body
        self.text = text
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_params(self) -> dict[str, str]:
        return dict(self.last_request.url.params)


@pytest.fixture
def config():
    return GraylogConfig(base_url="http://graylog.test/", username="admin", password="secret")


@pytest.fixture
def graylog():
    return FakeGraylog()


@pytest.fixture
def client(config, graylog):
    return GraylogClient(config, transport=graylog.transport)


@pytest.fixture
def handlers(client):
    return SearchHandlers(client)
