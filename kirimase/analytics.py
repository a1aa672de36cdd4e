"""Best-effort usage reporting.

Events are POSTed to the kirimase analytics proxy with the project config and
a small data payload.  Reporting never affects the command being run: the
request has a bounded timeout, its response is ignored, and transport errors
are discarded.  Setting ``analytics`` to ``false`` in the config (or
``KIRIMASE_DISABLE_ANALYTICS=1``) turns it off entirely.

Typical usage::

    reporter = AnalyticsReporter(config)
    reporter.notify("add_package", {"packages": ["drizzle"]})
    ...
    await reporter.flush()
"""

from __future__ import annotations

import asyncio
import os
from enum import Enum
from typing import Any

import httpx

from .config import Config

DEFAULT_ANALYTICS_URL = "https://kirimase-proxy-analytics.vercel.app"


class AnalyticsEvent(str, Enum):
    INIT_CONFIG = "init_config"
    ADD_PACKAGE = "add_package"
    GENERATE = "generate"


def analytics_disabled_by_env() -> bool:
    """Return ``True`` when ``KIRIMASE_DISABLE_ANALYTICS`` is set to a truthy value."""
    return os.environ.get("KIRIMASE_DISABLE_ANALYTICS", "").lower() in {"1", "true", "yes"}


class AnalyticsReporter:
    """Fire-and-forget event sender bound to one project config."""

    def __init__(
        self,
        config: Config,
        url: str | None = None,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self.url = (url or os.environ.get("KIRIMASE_ANALYTICS_URL") or DEFAULT_ANALYTICS_URL).rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def enabled(self) -> bool:
        return self.config.analytics and not analytics_disabled_by_env()

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.url,
            timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 3.0)),
            headers={"x-request-from": "kirimase"},
            transport=self._transport,
        )

    async def send_event(self, event: AnalyticsEvent | str, data: dict[str, Any]) -> None:
        """POST one event and wait for it; failures are discarded."""
        if not self.enabled:
            return
        payload = {
            "event": AnalyticsEvent(event).value,
            "config": self.config.model_dump(mode="json", by_alias=True),
            "data": data,
        }
        try:
            async with self._client() as client:
                await client.post("/api/send-event", json=payload)
        except (httpx.HTTPError, httpx.InvalidURL, TypeError, ValueError):
            # Also covers a malformed endpoint URL and data json cannot encode.
            return

    def notify(self, event: AnalyticsEvent | str, data: dict[str, Any]) -> None:
        """Schedule :meth:`send_event` in the background and return at once.

        Must be called from inside a running event loop.
        """
        if not self.enabled:
            return
        task = asyncio.get_running_loop().create_task(self.send_event(event, data))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def flush(self) -> None:
        """Wait for scheduled events, giving up after the reporter's timeout."""
        if not self._pending:
            return
        pending = list(self._pending)
        _, still_running = await asyncio.wait(pending, timeout=self.timeout)
        for task in still_running:
            task.cancel()
