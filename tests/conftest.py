"""
Shared fixtures: an in-memory collaboration agent and gateway network
served through httpx.MockTransport.
"""
import json
from typing import List

import httpx
import pytest

AGENT_URL = "http://agent.test"

CENTERS = {
    "A": {"code": "A", "gatewayIp": "10.0.0.1", "gatewayPort": "8081"},
    "B": {"code": "B", "gatewayIp": "10.0.0.2", "gatewayPort": "8082"},
    "C": {"code": "C", "gatewayIp": "10.0.0.3", "gatewayPort": 8083},
    "X": {"code": "X", "gatewayIp": "10.0.0.9", "gatewayPort": "8089"},
}


class ChunkedBody(httpx.AsyncByteStream):
    """Response body that is only available by streaming it, like a socket."""

    def __init__(self, payload: bytes, chunk_size: int = 16):
        self.chunks = [payload[i:i + chunk_size] for i in range(0, len(payload), chunk_size)]

    async def __aiter__(self):
        for chunk in self.chunks:
            yield chunk


class AgentStub:
    """Collaboration agent plus downstream gateways behind one MockTransport."""

    def __init__(self, local_code: str = "A", planned_route: str = "A,B,C"):
        self.local_code = local_code
        self.planned_route = planned_route
        self.fail_local = False
        self.stream_echo = True
        self.upstream_cookie = None
        self.requests: List[httpx.Request] = []

    def calls_to(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path and r.url.host == "agent.test"]

    def forwarded(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host != "agent.test"]

    def _message(self, result) -> httpx.Response:
        return httpx.Response(200, json={"status": 200, "memo": "success", "result": result})

    def _echo(self, request: httpx.Request) -> httpx.Response:
        """Next gateway or local service: echo what it received."""
        echoed = {
            "host": request.url.host,
            "port": request.url.port,
            "method": request.method,
            "path": request.url.path,
            "query": dict(request.url.params),
            "route": request.headers.get("x-route-path"),
            "forwarded_for": request.headers.get("x-forwarded-for"),
            "cookie": request.headers.get("cookie"),
            "body": request.content.decode(),
        }
        headers = {"X-Upstream": request.url.host}
        if self.upstream_cookie:
            headers["Set-Cookie"] = f"{self.upstream_cookie}; Path=/"
        if not self.stream_echo:
            return httpx.Response(201, headers=headers, json=echoed)
        headers["Content-Type"] = "application/json"
        return httpx.Response(201, headers=headers, stream=ChunkedBody(json.dumps(echoed).encode()))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.host != "agent.test":
            return self._echo(request)

        if request.url.path == "/co/center/local":
            if self.fail_local:
                raise httpx.ConnectError("agent down", request=request)
            return self._message(CENTERS[self.local_code])
        if request.url.path == "/co/center/next":
            return self._message(CENTERS[request.url.params["coCenterCode"]])
        if request.url.path == "/net/path/optimum":
            return self._message(self.planned_route)
        return httpx.Response(404, content=json.dumps({"detail": "not found"}))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def agent() -> AgentStub:
    return AgentStub()
