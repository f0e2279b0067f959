"""Stanza entry point for hosts that hand over raw ``<message>`` XML.

Older hook signatures pass (from, to, packet) instead of a parsed event.
This module turns such a packet into an OfflineMessageEvent and sends it
down the normal notifier path.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from offline_notifier.models import Jid, MessageType, OfflineMessageEvent
from offline_notifier.webhook.notifier import OfflineNotifier

_CLIENT_NS = "jabber:client"


class StanzaError(ValueError):
    """Raised when a message stanza cannot be parsed."""


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def event_from_stanza(
    from_jid: Jid | str, to_jid: Jid | str, stanza: str,
) -> OfflineMessageEvent:
    """Build an event from a message stanza.

    The type attribute defaults to ``normal`` as in XMPP; unknown types are
    mapped to ``normal`` too so they never qualify for the webhook.
    """
    try:
        root = ET.fromstring(stanza)
    except ET.ParseError as exc:
        raise StanzaError(f"Malformed stanza: {exc}") from exc

    if _local_name(root.tag) != "message":
        raise StanzaError(f"Expected a <message> stanza, got <{_local_name(root.tag)}>")

    try:
        msg_type = MessageType(root.get("type", MessageType.NORMAL.value))
    except ValueError:
        msg_type = MessageType.NORMAL

    body = ""
    for child in root:
        if child.tag in ("body", f"{{{_CLIENT_NS}}}body"):
            body = child.text or ""
            break

    return OfflineMessageEvent(
        from_=from_jid if isinstance(from_jid, Jid) else Jid.parse(from_jid),
        to=to_jid if isinstance(to_jid, Jid) else Jid.parse(to_jid),
        message_id=root.get("id", ""),
        body=body,
        type=msg_type,
    )


async def dispatch_stanza(
    notifier: OfflineNotifier, from_jid: Jid | str, to_jid: Jid | str, stanza: str,
) -> OfflineMessageEvent:
    event = event_from_stanza(from_jid, to_jid, stanza)
    return await notifier.on_offline_message(event)
