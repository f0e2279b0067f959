"""Per-host lifecycle of the webhook module."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from offline_notifier.config import load_config
from offline_notifier.hooks import OFFLINE_MESSAGE_HOOK, HookRegistry
from offline_notifier.models import NotifierConfig
from offline_notifier.webhook.notifier import OfflineNotifier

logger = logging.getLogger(__name__)

HOOK_SEQ = 1


class ModuleNotStartedError(Exception):
    def __init__(self, host: str) -> None:
        self.host = host
        super().__init__(f"Webhook module is not started for host '{host}'")


class WebhookModule:
    """Registers an OfflineNotifier on the offline message hook of each host."""

    def __init__(
        self,
        hooks: HookRegistry,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._hooks = hooks
        self._client = client
        self._notifiers: dict[str, OfflineNotifier] = {}

    def start(self, host: str, opts: Mapping[str, Any] | None = None) -> OfflineNotifier:
        if host in self._notifiers:
            logger.info(
                "Webhook module already started for %s; new options ignored until restart",
                host,
            )
            return self._notifiers[host]
        logger.info("Webhook module loading for %s...", host)
        config = load_config(opts)
        notifier = OfflineNotifier(config, client=self._client)
        self._notifiers[host] = notifier
        self._hooks.add(OFFLINE_MESSAGE_HOOK, host, notifier.on_offline_message, HOOK_SEQ)
        logger.info("Webhook module started for %s", host)
        return notifier

    async def stop(self, host: str) -> None:
        """Deregister the hook and wait for deliveries still in flight."""
        logger.info("Webhook module stopping for %s...", host)
        notifier = self._notifiers.pop(host, None)
        if notifier is None:
            return
        self._hooks.delete(OFFLINE_MESSAGE_HOOK, host, notifier.on_offline_message, HOOK_SEQ)
        await notifier.drain()

    def reload(
        self,
        host: str,
        new_opts: Mapping[str, Any] | None,
        old_opts: Mapping[str, Any] | None,
    ) -> None:
        """Accept a reload request without reconfiguring.

        Option changes take effect on the next start of the module.
        """
        logger.info(
            "Webhook module reload requested for %s; restart to apply new options",
            host,
        )

    @staticmethod
    def depends(host: str, opts: Mapping[str, Any] | None = None) -> list[tuple[str, str]]:
        return []

    def is_started(self, host: str) -> bool:
        return host in self._notifiers

    def notifier_for(self, host: str) -> OfflineNotifier:
        try:
            return self._notifiers[host]
        except KeyError:
            raise ModuleNotStartedError(host) from None

    def config_for(self, host: str) -> NotifierConfig:
        return self.notifier_for(host).config
