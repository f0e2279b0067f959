"""Offline message notifier: POSTs undelivered chat messages to a webhook.

Delivery is best effort and at most once. The POST runs as a detached
asyncio task so the host pipeline never waits on the network, and every
transport failure is turned into a FAILED DeliveryResult instead of an
exception.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from offline_notifier.models import (
    DeliveryResult,
    DeliveryStatus,
    MessageType,
    NotifierConfig,
    OfflineMessageEvent,
)
from offline_notifier.webhook.payload import FORM_CONTENT_TYPE, build_payload, encode_payload

logger = logging.getLogger(__name__)


class OfflineNotifier:
    """Hook callback for the host's offline message event."""

    def __init__(
        self,
        config: NotifierConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._pending: set[asyncio.Task[DeliveryResult]] = set()

    @property
    def config(self) -> NotifierConfig:
        return self._config

    @property
    def pending(self) -> int:
        """Number of deliveries still in flight."""
        return len(self._pending)

    @staticmethod
    def qualifies(event: OfflineMessageEvent) -> bool:
        return event.type == MessageType.CHAT and bool(event.body)

    async def on_offline_message(self, event: OfflineMessageEvent) -> OfflineMessageEvent:
        """Schedule a webhook POST for a qualifying event and pass it on unchanged."""
        if not self.qualifies(event):
            return event

        logger.info(
            "Handling offline message %s from %s to %s",
            event.message_id, event.from_, event.to,
        )
        fields = build_payload(event, self._config)
        task = asyncio.get_running_loop().create_task(self.deliver(fields))
        self._pending.add(task)
        task.add_done_callback(self._on_done)
        return event

    handle = on_offline_message

    async def deliver(self, fields: list[tuple[str, str]]) -> DeliveryResult:
        """POST the form fields to the webhook. Never raises."""
        data = encode_payload(fields)
        logger.debug("Webhook data %r", data)
        logger.debug("Webhook token %r", self._config.auth_token)
        logger.debug("Webhook post url %r", self._config.post_url)
        headers = {
            "Authorization": self._config.auth_token,
            "Content-Type": FORM_CONTENT_TYPE,
        }
        logger.debug(
            "Webhook request %r",
            (self._config.post_url, headers, FORM_CONTENT_TYPE, data),
        )

        try:
            if self._client is not None:
                resp = await self._client.post(
                    self._config.post_url, content=data, headers=headers,
                )
            else:
                async with httpx.AsyncClient() as client:
                    resp = await client.post(
                        self._config.post_url, content=data, headers=headers,
                    )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            # Failures stay here: the host pipeline must not see them
            logger.debug("Webhook post to %s failed: %r", self._config.post_url, exc)
            return DeliveryResult(status=DeliveryStatus.FAILED, error=str(exc) or repr(exc))
        except Exception as exc:  # e.g. a token httpx cannot encode as a header
            logger.debug("Webhook request to %s failed: %r", self._config.post_url, exc)
            return DeliveryResult(status=DeliveryStatus.FAILED, error=str(exc) or repr(exc))

        logger.info("Webhook post request sent")
        return DeliveryResult(status=DeliveryStatus.SENT, status_code=resp.status_code)

    def _on_done(self, task: asyncio.Task[DeliveryResult]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.debug("Webhook delivery task failed: %r", exc)
            return
        logger.debug("Webhook delivery finished: %r", task.result())

    async def drain(self) -> list[DeliveryResult]:
        """Wait for all in-flight deliveries to finish."""
        if not self._pending:
            return []
        results = await asyncio.gather(*self._pending, return_exceptions=True)
        return [r for r in results if isinstance(r, DeliveryResult)]
