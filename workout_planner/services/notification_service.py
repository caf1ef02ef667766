"""Outbound planner event notifications (webhook catch hook, e.g. Zapier).

Setup: create a webhook trigger in the automation tool, copy its URL and set
``WEBHOOK_URL`` in the environment or ``.env``. Without a URL every call is a
no-op.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from workout_planner.config import Settings, get_settings


logger = logging.getLogger(__name__)


class NotificationService:
    """Sends planner events to the configured webhook.

    Failures are logged and suppressed by default so notification problems
    never affect planner state.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.webhook_url = settings.webhook_url
        self.app_name = settings.app_name
        self.timeout_seconds = settings.webhook_timeout_seconds
        self.fail_silently = settings.webhook_fail_silently
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    def build_payload(self, event: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        return {
            "event": event,
            "ts": datetime.now(timezone.utc).isoformat(),
            "app": self.app_name,
            **(payload or {}),
        }

    async def send_event(
        self,
        event: str,
        payload: dict[str, Any] | None = None,
        *,
        fail_silently: bool | None = None,
        timeout_seconds: float | None = None,
    ) -> bool:
        """
        POST an event to the webhook.

        Args:
            event: Event name (e.g. ``workout_created``)
            payload: Extra JSON fields merged into the body
            fail_silently: Override the configured failure policy
            timeout_seconds: Override the configured request timeout

        Returns:
            True when the webhook accepted the event, False when skipped or failed silently
        """
        if not self.webhook_url:
            return False

        silent = self.fail_silently if fail_silently is None else fail_silently
        timeout = timeout_seconds if timeout_seconds is not None else self.timeout_seconds

        try:
            # httpx timeouts apply per phase; wait_for bounds the whole exchange.
            response = await asyncio.wait_for(self._post(self.build_payload(event, payload), timeout), timeout)
        except asyncio.TimeoutError:
            if not silent:
                raise
            logger.warning("Webhook notification %s timed out after %.1fs", event, timeout)
            return False
        except httpx.HTTPError as exc:
            if not silent:
                raise
            logger.warning("Webhook notification %s failed: %s", event, exc)
            return False

        logger.debug("Webhook notification %s delivered (status=%s)", event, response.status_code)
        return True

    async def _post(self, body: dict[str, Any], timeout: float) -> httpx.Response:
        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            response = await client.post(self.webhook_url, json=body)
            response.raise_for_status()
            return response
