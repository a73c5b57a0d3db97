"""Shared test fixtures.

Provides a local HTTP server that answers with a configurable status and
records every request, so probes and Marathon updates hit a real socket.
"""

import json
import threading
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: dict
    body: bytes = b""

    def json(self):
        return json.loads(self.body.decode("utf-8"))


@dataclass
class FakeServer:
    url: str
    status: int = 200
    payload: dict = field(default_factory=dict)
    requests: list = field(default_factory=list)


def _make_handler(state: FakeServer):
    class Handler(BaseHTTPRequestHandler):
        def _reply(self, with_body: bool) -> None:
            length = int(self.headers.get("Content-Length") or 0)
            body = self.rfile.read(length) if length else b""
            state.requests.append(
                RecordedRequest(self.command, self.path, dict(self.headers), body)
            )

            data = json.dumps(state.payload).encode("utf-8")
            self.send_response(state.status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(data)))
            self.end_headers()
            if with_body:
                self.wfile.write(data)

        def do_HEAD(self):
            self._reply(with_body=False)

        def do_GET(self):
            self._reply(with_body=True)

        def do_PUT(self):
            self._reply(with_body=True)

        def log_message(self, format, *args):
            pass

    return Handler


@pytest.fixture
def http_server():
    """Local server on a free port; tweak .status / .payload per test."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), None)
    state = FakeServer(url=f"http://127.0.0.1:{server.server_address[1]}")
    server.RequestHandlerClass = _make_handler(state)

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield state
    server.shutdown()
    server.server_close()


@pytest.fixture
def workspace(tmp_path):
    """Build workspace with a minimal marathon.json."""
    descriptor = {
        "id": "/web/app",
        "cpus": 0.5,
        "mem": 256,
        "instances": 2,
        "container": {
            "type": "DOCKER",
            "docker": {"image": "registry.local/app:latest", "network": "BRIDGE"},
        },
        "uris": ["http://files.local/settings.tgz"],
        "labels": {"team": "platform"},
    }
    (tmp_path / "marathon.json").write_text(json.dumps(descriptor), encoding="utf-8")
    return tmp_path


@pytest.fixture(autouse=True)
def no_proxy(monkeypatch):
    """Keep requests to 127.0.0.1 off any proxy configured in the environment."""
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
