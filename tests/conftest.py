"""Shared fixtures: a fake NNFCM upstream served through httpx.MockTransport."""
import json
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from nnfcm_exporter.config import Config


class FakeUpstream:
    """Routes request paths to canned responses and records every request."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def json(self, path, payload, status=200):
        self.routes[path] = (status, json.dumps(payload).encode())

    def raw(self, path, body, status=200):
        self.routes[path] = (status, body)

    def fail(self, path):
        self.routes[path] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path not in self.routes:
            return httpx.Response(404, content=b"not found")
        route = self.routes[request.url.path]
        if route is None:
            raise httpx.ConnectError("connection refused", request=request)
        status, body = route
        return httpx.Response(status, content=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def upstream():
    return FakeUpstream()


def make_config(statistics=None, monitoring=None, query_params="op-1") -> Config:
    """Config with the given category lists pointed at fake hosts."""
    raw = {"queryParams": query_params}
    if statistics is not None:
        raw["RemoteStatisticServer"] = {"address": "stats.local", "port": 8080}
        raw["MetricsStatisticsCategory"] = statistics
    if monitoring is not None:
        raw["RemoteMonitoringServer"] = {"address": "monitor.local", "port": 8081}
        raw["MetricsMonitoringCategory"] = monitoring
    return Config(**raw)
