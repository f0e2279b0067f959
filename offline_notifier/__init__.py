"""Offline message webhook notifier.

Forwards chat messages that could not be delivered (recipient offline)
to an HTTP webhook:
- Option validation and defaults
- Hook registration on the host pipeline
- Form payload construction
- Fire-and-forget delivery
"""

from offline_notifier.config import (
    ConfigError,
    InvalidOptionError,
    UnknownOptionError,
    load_config,
    load_config_from_env,
    mod_doc,
    mod_options,
)
from offline_notifier.hooks import OFFLINE_MESSAGE_HOOK, STOP, HookRegistry
from offline_notifier.models import (
    DeliveryResult,
    DeliveryStatus,
    Jid,
    MessageType,
    NotifierConfig,
    OfflineMessageEvent,
)
from offline_notifier.module import ModuleNotStartedError, WebhookModule
from offline_notifier.webhook.notifier import OfflineNotifier
from offline_notifier.webhook.payload import build_payload, encode_payload
from offline_notifier.xmpp import StanzaError, dispatch_stanza, event_from_stanza

__all__ = [
    # Exceptions
    "ConfigError",
    "InvalidOptionError",
    "ModuleNotStartedError",
    "StanzaError",
    "UnknownOptionError",
    # Components
    "HookRegistry",
    "OfflineNotifier",
    "WebhookModule",
    # Functions
    "build_payload",
    "dispatch_stanza",
    "encode_payload",
    "event_from_stanza",
    "load_config",
    "load_config_from_env",
    "mod_doc",
    "mod_options",
    # Constants
    "OFFLINE_MESSAGE_HOOK",
    "STOP",
    # Models
    "DeliveryResult",
    "DeliveryStatus",
    "Jid",
    "MessageType",
    "NotifierConfig",
    "OfflineMessageEvent",
]
