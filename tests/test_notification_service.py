"""Tests for the outbound webhook notifier."""
from __future__ import annotations

import asyncio
import json
import time
from typing import Any

import httpx
import pytest

from workout_planner.config import Settings
from workout_planner.services.notification_service import NotificationService


WEBHOOK = "https://hooks.example.com/catch/123"


def _service(handler, **settings_overrides: Any) -> NotificationService:
    settings = Settings(webhook_url=WEBHOOK, **settings_overrides)
    return NotificationService(settings=settings, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_send_event_posts_json_body():
    captured: dict[str, Any] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["body"] = json.loads(request.content)
        return httpx.Response(200)

    service = _service(handler)
    sent = await service.send_event("workout_created", {"workoutId": "w1", "name": "Legs"})

    assert sent is True
    assert captured["url"] == WEBHOOK
    body = captured["body"]
    assert body["event"] == "workout_created"
    assert body["app"] == "Workout-Planner-App"
    assert body["workoutId"] == "w1"
    assert "ts" in body


@pytest.mark.asyncio
async def test_send_event_without_url_is_noop():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    service = NotificationService(settings=Settings(webhook_url=""), transport=httpx.MockTransport(handler))

    assert service.enabled is False
    assert await service.send_event("workout_created") is False
    assert calls == []


@pytest.mark.asyncio
async def test_failures_are_silent_by_default():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    assert await _service(handler).send_event("planner_reset") is False


@pytest.mark.asyncio
async def test_error_status_is_silent_by_default():
    service = _service(lambda request: httpx.Response(500))
    assert await service.send_event("planner_reset") is False


@pytest.mark.asyncio
async def test_failures_raise_when_not_silent():
    service = _service(lambda request: httpx.Response(502))
    with pytest.raises(httpx.HTTPStatusError):
        await service.send_event("planner_reset", fail_silently=False)


@pytest.mark.asyncio
async def test_configured_policy_can_disable_silence():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    service = _service(handler, webhook_fail_silently=False)
    with pytest.raises(httpx.ConnectError):
        await service.send_event("workout_deleted")


async def _start_dripping_server() -> tuple[asyncio.AbstractServer, str]:
    """Local webhook that promises a 6-byte body and sends one byte every 0.4s."""

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        try:
            await reader.readuntil(b"\r\n\r\n")
            writer.write(b"HTTP/1.1 200 OK\r\nContent-Length: 6\r\n\r\n")
            await writer.drain()
            for _ in range(6):
                if writer.is_closing():
                    break
                await asyncio.sleep(0.4)
                writer.write(b"x")
                await writer.drain()
        except (ConnectionError, asyncio.IncompleteReadError):
            pass
        finally:
            writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    return server, f"http://127.0.0.1:{port}/hook"


@pytest.mark.asyncio
async def test_timeout_bounds_whole_request():
    server, url = await _start_dripping_server()
    try:
        service = NotificationService(settings=Settings(webhook_url=url, webhook_timeout_seconds=0.5))

        started = time.monotonic()
        sent = await service.send_event("workout_created")
        elapsed = time.monotonic() - started
    finally:
        server.close()

    assert sent is False
    assert elapsed < 1.5


@pytest.mark.asyncio
async def test_timeout_raises_when_not_silent():
    server, url = await _start_dripping_server()
    try:
        service = NotificationService(settings=Settings(webhook_url=url, webhook_timeout_seconds=0.5))
        with pytest.raises(asyncio.TimeoutError):
            await service.send_event("workout_created", fail_silently=False)
    finally:
        server.close()
