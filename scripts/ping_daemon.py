#!/usr/bin/env python3
"""
Smoke test client for the workspace daemon.

Tests:
1. Health check
2. Status
3. Profile listing
4. Tool listing
5. Direct tool invocation
6. Batch invocation
7. Chat (skipped when no planner is configured)

Usage:
    python scripts/ping_daemon.py [host:port]

Default: http://127.0.0.1:8080
"""

from __future__ import annotations

import json
import sys
import time
from typing import Any, Callable
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

# Type alias for test functions
TestFunction = Callable[[str], bool]

USER_EMAIL = "smoke@example.com"


def request(method: str, url: str, data: dict[str, Any] | None = None) -> Any:
    """Make HTTP request and return the decoded JSON body."""
    req = Request(
        url,
        data=json.dumps(data).encode() if data else None,
        headers={"Content-Type": "application/json"} if data else {},
        method=method,
    )
    try:
        with urlopen(req, timeout=120) as resp:
            return json.loads(resp.read().decode())
    except HTTPError as e:
        return {"error": f"HTTP {e.code}", "status_code": e.code}
    except URLError as e:
        return {"error": str(e)}


def test_health(base_url: str) -> bool:
    print("\n1. Testing /health...")
    result = request("GET", f"{base_url}/health")

    if "error" in result:
        print(f"   ❌ Failed: {result['error']}")
        return False

    print(f"   ✅ Status: {result['status']}")
    print(f"   ✅ Tools: {result['tools_count']}")
    print(f"   ✅ Uptime: {result['uptime_seconds']:.1f}s")
    return result["status"] == "ready"


def test_status(base_url: str) -> bool:
    print("\n2. Testing /status...")
    result = request("GET", f"{base_url}/status")

    if "error" in result:
        print(f"   ❌ Failed: {result['error']}")
        return False

    print(f"   ✅ Initialized: {result['initialized']}")
    print(f"   ✅ Planner configured: {result['planner_configured']}")
    return bool(result["initialized"])


def test_profiles(base_url: str) -> bool:
    print("\n3. Testing /v1/profiles...")
    profiles = request("GET", f"{base_url}/v1/profiles")

    if isinstance(profiles, dict):
        print(f"   ❌ Failed: {profiles.get('error')}")
        return False

    for profile in profiles:
        prefixes = ", ".join(profile.get("tool_prefixes", []))
        max_rounds = profile.get("max_tool_rounds", 0)
        print(f"   ✅ {profile['name']}: [{prefixes}], max {max_rounds} rounds")
    return True


def test_tools(base_url: str) -> bool:
    print("\n4. Testing /v1/tools...")
    tools = request("GET", f"{base_url}/v1/tools")

    if isinstance(tools, dict):
        print(f"   ❌ Failed: {tools.get('error')}")
        return False

    print(f"   ✅ {len(tools)} tools available:")
    for tool in tools[:5]:
        desc = tool.get("description", "")[:60]
        print(f"      - {tool['name']}: {desc}...")
    if len(tools) > 5:
        print(f"      ... and {len(tools) - 5} more")
    return len(tools) > 0


def test_tool_invoke(base_url: str) -> bool:
    print("\n5. Testing /v1/invoke-tool...")
    print("   Invoking: GMAIL_LIST_LABELS")

    result = request(
        "POST",
        f"{base_url}/v1/invoke-tool",
        {"tool_name": "GMAIL_LIST_LABELS", "arguments": {"user_google_email": USER_EMAIL}},
    )

    if "error" in result:
        print(f"   ❌ Failed: {result['error']}")
        return False

    envelope = result["result"]
    print(f"   ✅ Succeeded: {envelope['succeeded']}")
    print(f"   ✅ Latency: {result.get('latency_ms', 0):.0f}ms")
    if envelope["succeeded"]:
        print(f"   ✅ Result keys: {list(envelope['data'].keys())}")
    return bool(envelope["succeeded"])


def test_batch_invoke(base_url: str) -> bool:
    print("\n6. Testing /v1/invoke-batch...")

    result = request(
        "POST",
        f"{base_url}/v1/invoke-batch",
        {
            "requests": [
                {"tool_name": "GMAIL_GET_USER_PROFILE", "arguments": {"user_google_email": USER_EMAIL}},
                {"tool_name": "CALENDAR_LIST_CALENDARS", "arguments": {"user_google_email": USER_EMAIL}},
                {"tool_name": "NOT_A_TOOL", "arguments": {}},
            ]
        },
    )

    if "error" in result:
        print(f"   ❌ Failed: {result['error']}")
        return False

    outcomes = [r["succeeded"] for r in result["results"]]
    print(f"   ✅ Outcomes: {outcomes}")
    print(f"   ✅ Latency: {result.get('latency_ms', 0):.0f}ms")
    return outcomes == [True, True, False]


def test_chat(base_url: str) -> bool:
    print("\n7. Testing /v1/chat (mail profile)...")
    print("   Sending: 'Which Gmail labels do I have?'")

    start = time.time()
    result = request(
        "POST",
        f"{base_url}/v1/chat",
        {"message": "Which Gmail labels do I have? Be very brief.", "profile": "mail"},
    )
    elapsed = time.time() - start

    if result.get("status_code") == 503:
        print("   ⚠️  No planner configured, skipping")
        return True
    if "error" in result:
        print(f"   ❌ Failed: {result['error']}")
        return False

    content = str(result.get("content", ""))[:200]
    print(f"   ✅ Response: {content}")
    tool_calls: list[dict[str, Any]] = result.get("tool_calls", [])
    print(f"   ✅ Tool calls: {len(tool_calls)}")
    for tc in tool_calls[:3]:
        print(f"      - {tc.get('name')}({list(tc.get('arguments', {}).keys())})")
    print(f"   ✅ Rounds: {result.get('rounds_used')}, Finished: {result.get('finished')}")
    print(f"   ✅ Latency: {result.get('latency_ms', 0):.0f}ms (total: {elapsed:.1f}s)")
    return True


def main() -> int:
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://127.0.0.1:8080"
    if not base_url.startswith("http"):
        base_url = f"http://{base_url}"

    print("=" * 60)
    print("🧪 Workspace Daemon Smoke Test")
    print("=" * 60)
    print(f"Target: {base_url}")

    tests: list[tuple[str, TestFunction]] = [
        ("Health check", test_health),
        ("Status", test_status),
        ("Profile listing", test_profiles),
        ("Tool listing", test_tools),
        ("Tool invocation", test_tool_invoke),
        ("Batch invocation", test_batch_invoke),
        ("Chat", test_chat),
    ]

    passed = 0
    failed = 0

    for _, test_fn in tests:
        try:
            if test_fn(base_url):
                passed += 1
            else:
                failed += 1
        except Exception as e:
            print(f"   ❌ Exception: {e}")
            failed += 1

    print("\n" + "=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    return 0 if failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
