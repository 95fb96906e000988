#!/usr/bin/env python3
"""
End-to-end tests for the workspace daemon.

Starts the real server in a subprocess and exercises it over HTTP.
No Anthropic key is passed, so chat answers 503 and everything else runs
against the placeholder catalogue.

Run with: pytest tests/test_daemon_e2e.py -v
"""

from __future__ import annotations

import json
import os
import signal
import socket
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generator
from urllib.error import URLError
from urllib.request import Request, urlopen

import pytest


# --- Configuration ---

DAEMON_HOST = "127.0.0.1"
DAEMON_PORT = 18421  # Non-standard port to avoid clashing with a running daemon
DAEMON_URL = f"http://{DAEMON_HOST}:{DAEMON_PORT}"
STARTUP_TIMEOUT = 30
REQUEST_TIMEOUT = 30
USER_EMAIL = "e2e@example.com"


# --- HTTP Client ---

@dataclass(frozen=True)
class HttpResponse:
    """Immutable HTTP response."""
    status: int
    body: dict[str, Any] | list[Any] | str
    latency_ms: float


class DaemonClient:
    """Typed client with get/post methods."""

    def get(self, path: str, timeout: float = REQUEST_TIMEOUT) -> HttpResponse:
        return http_request("GET", path, timeout=timeout)

    def post(self, path: str, data: dict[str, Any], timeout: float = REQUEST_TIMEOUT) -> HttpResponse:
        return http_request("POST", path, data=data, timeout=timeout)


def http_request(
    method: str,
    path: str,
    data: dict[str, Any] | None = None,
    timeout: float = REQUEST_TIMEOUT,
) -> HttpResponse:
    """
    Make HTTP request to daemon.

    Raises:
        URLError: If connection fails (HTTPError for non-2xx statuses)
    """
    url = f"{DAEMON_URL}{path}"
    headers = {"Content-Type": "application/json"} if data is not None else {}
    body_bytes = json.dumps(data).encode() if data is not None else None

    req = Request(url, data=body_bytes, headers=headers, method=method)

    start = time.perf_counter()
    with urlopen(req, timeout=timeout) as resp:
        latency_ms = (time.perf_counter() - start) * 1000
        raw = resp.read().decode()
        parsed: dict[str, Any] | list[Any] | str
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            parsed = raw
        return HttpResponse(status=resp.status, body=parsed, latency_ms=latency_ms)


def wait_for_server(timeout: float = STARTUP_TIMEOUT) -> bool:
    """Wait until /health reports ready. Returns False on timeout."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            resp = http_request("GET", "/health", timeout=5)
            if isinstance(resp.body, dict) and resp.body.get("status") == "ready":
                return True
        except (URLError, OSError):
            pass
        time.sleep(0.5)
    return False


def is_port_free(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind((DAEMON_HOST, port))
            return True
        except OSError:
            return False


# --- Fixtures ---

@pytest.fixture(scope="module")
def daemon_process() -> Generator[subprocess.Popen[bytes], None, None]:
    """
    Start the daemon for the test module and stop it with SIGTERM afterwards.
    """
    if not is_port_free(DAEMON_PORT):
        pytest.skip(f"Port {DAEMON_PORT} is already in use")

    project_root = Path(__file__).parent.parent
    env = os.environ.copy()
    env["PYTHONPATH"] = str(project_root) + os.pathsep + env.get("PYTHONPATH", "")
    env["USER_GOOGLE_EMAIL"] = USER_EMAIL
    env["ANTHROPIC_API_KEY"] = ""
    env["ALLOW_REMOTE_SHUTDOWN"] = "false"

    cmd = [
        sys.executable, "-m", "workspace_daemon.server",
        "--host", DAEMON_HOST,
        "--port", str(DAEMON_PORT),
    ]

    print(f"\n[SETUP] Starting daemon on {DAEMON_HOST}:{DAEMON_PORT}...")
    proc: subprocess.Popen[bytes] = subprocess.Popen(
        cmd,
        cwd=project_root,
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
    )

    if not wait_for_server():
        proc.terminate()
        stdout, _ = proc.communicate(timeout=5)
        pytest.fail(f"Daemon failed to start. Output:\n{stdout.decode()}")

    print("[SETUP] Daemon is ready")
    yield proc

    print("\n[TEARDOWN] Stopping daemon...")
    proc.send_signal(signal.SIGTERM)
    try:
        proc.wait(timeout=10)
        print("[TEARDOWN] Daemon stopped cleanly")
    except subprocess.TimeoutExpired:
        print("[TEARDOWN] Daemon did not stop, killing...")
        proc.kill()
        proc.wait()


@pytest.fixture
def client(daemon_process: subprocess.Popen[bytes]) -> DaemonClient:
    _ = daemon_process
    return DaemonClient()


def assert_dict_body(resp: HttpResponse) -> dict[str, Any]:
    assert isinstance(resp.body, dict), f"Expected dict body, got {type(resp.body)}"
    body: dict[str, Any] = resp.body
    return body


def assert_list_body(resp: HttpResponse) -> list[dict[str, Any]]:
    assert isinstance(resp.body, list), f"Expected list body, got {type(resp.body)}"
    result: list[dict[str, Any]] = resp.body
    return result


# --- Health ---

class TestHealth:
    """Tests for GET /health and GET /status."""

    def test_health_ready(self, client: DaemonClient) -> None:
        """
        Input: GET /health
        Output: 200 with status="ready" and the configured user
        """
        resp = client.get("/health")
        body = assert_dict_body(resp)

        assert resp.status == 200
        assert body["status"] == "ready"
        assert body["user_id"] == USER_EMAIL
        assert body["tools_count"] == 93

    def test_status_without_planner(self, client: DaemonClient) -> None:
        """
        Input: GET /status with no Anthropic key
        Output: initialized, planner not configured
        """
        body = assert_dict_body(client.get("/status"))
        assert body["initialized"] is True
        assert body["planner_configured"] is False


# --- Catalogue ---

class TestCatalogue:
    """Tests for tool and profile listings."""

    def test_profiles(self, client: DaemonClient) -> None:
        """
        Input: GET /v1/profiles
        Output: the four workspace profiles with their fields
        """
        body = assert_list_body(client.get("/v1/profiles"))
        assert [p["name"] for p in body] == ["workspace", "mail", "calendar", "documents"]
        for profile in body:
            assert "system_prompt_preview" in profile
            assert "max_tool_rounds" in profile

    def test_tools_have_schemas(self, client: DaemonClient) -> None:
        """
        Input: GET /v1/tools
        Output: every tool carries an object JSON Schema
        """
        body = assert_list_body(client.get("/v1/tools"))
        assert len(body) == 93
        assert all(t["parameters"]["type"] == "object" for t in body)


# --- Invocation ---

class TestInvocation:
    """Tests for POST /v1/invoke-tool and /v1/invoke-batch."""

    def test_invoke_unknown_tool_returns_404(self, client: DaemonClient) -> None:
        with pytest.raises(URLError) as exc_info:
            client.post("/v1/invoke-tool", {"tool_name": "NOT_A_TOOL", "arguments": {}})
        assert "404" in str(exc_info.value)

    def test_invoke_returns_envelope(self, client: DaemonClient) -> None:
        """
        Input: POST /v1/invoke-tool with GMAIL_LIST_LABELS
        Output: succeeded envelope plus latency
        """
        resp = client.post(
            "/v1/invoke-tool",
            {"tool_name": "GMAIL_LIST_LABELS", "arguments": {"user_google_email": USER_EMAIL}},
        )
        body = assert_dict_body(resp)

        assert resp.status == 200
        assert body["tool_name"] == "GMAIL_LIST_LABELS"
        assert body["result"]["succeeded"] is True
        assert "latency_ms" in body

    def test_batch_outcomes_in_order(self, client: DaemonClient) -> None:
        resp = client.post(
            "/v1/invoke-batch",
            {
                "requests": [
                    {"tool_name": "GMAIL_GET_USER_PROFILE", "arguments": {"user_google_email": USER_EMAIL}},
                    {"tool_name": "NOT_A_TOOL", "arguments": {}},
                    {"tool_name": "TASKS_LIST_TASK_LISTS", "arguments": {"user_google_email": USER_EMAIL}},
                ]
            },
        )
        body = assert_dict_body(resp)
        assert [r["succeeded"] for r in body["results"]] == [True, False, True]


# --- Chat and lifecycle ---

class TestDisabledSurfaces:
    """Chat without a planner, shutdown without opt-in."""

    def test_chat_returns_503(self, client: DaemonClient) -> None:
        with pytest.raises(URLError) as exc_info:
            client.post("/v1/chat", {"message": "Hello", "profile": "mail"})
        assert "503" in str(exc_info.value)

    def test_chat_unknown_profile_returns_400(self, client: DaemonClient) -> None:
        with pytest.raises(URLError) as exc_info:
            client.post("/v1/chat", {"message": "Hello", "profile": "nonexistent_profile"})
        assert "400" in str(exc_info.value)

    def test_shutdown_forbidden(self, client: DaemonClient) -> None:
        with pytest.raises(URLError) as exc_info:
            client.post("/shutdown", {})
        assert "403" in str(exc_info.value)


class TestPerformance:
    """Basic latency checks."""

    def test_health_is_fast(self, client: DaemonClient) -> None:
        assert client.get("/health").latency_ms < 100


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
