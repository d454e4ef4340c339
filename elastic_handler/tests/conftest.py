from __future__ import annotations

import json
import os
from typing import Optional

import pytest

ALIASES_LISTING = {
    ".kibana-4": {"aliases": {}},
    "logs-16-04-01": {"aliases": {"logs": {}}},
    "logs-16-04-02": {"aliases": {"logs": {}}},
    "checks-16-04-01": {"aliases": {"checks": {}}},
    "checks-16-04-02": {"aliases": {"checks": {}}},
    "checks-16-04-03": {"aliases": {"checks": {}}},
    "checks-16-04-04": {"aliases": {"checks": {}}},
    "checks-16-04-05": {"aliases": {"checks": {}}},
    "checks-16-04-06": {"aliases": {"checks": {}}},
    "checks-16-04-07": {"aliases": {"checks": {}}},
    "checks-16-04-08": {"aliases": {"checks": {}}},
    "checks-16-04-09": {"aliases": {"checks": {}}},
}


class DummyTransport:
    """Records every request and replays queued ``(status, body)`` responses."""

    def __init__(self, responses: Optional[list] = None):
        self.calls: list[tuple[str, str, Optional[bytes]]] = []
        self.responses = list(responses or [])

    def queue(self, status: int, body) -> None:
        if not isinstance(body, bytes):
            body = json.dumps(body).encode()
        self.responses.append((status, body))

    def execute(self, method, path, body=None):
        self.calls.append((method, path, body))
        if self.responses:
            return self.responses.pop(0)
        return 200, b'{"acknowledged":true}'


@pytest.fixture
def transport() -> DummyTransport:
    return DummyTransport()


@pytest.fixture
def listing() -> dict:
    return json.loads(json.dumps(ALIASES_LISTING))


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: tests that require a running OpenSearch/Elasticsearch cluster",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if os.getenv("ELASTIC_RUN_INTEGRATION") == "1":
        return

    skip_integration = pytest.mark.skip(
        reason="Set ELASTIC_RUN_INTEGRATION=1 to run integration tests"
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)
