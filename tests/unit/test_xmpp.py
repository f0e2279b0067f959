"""Tests for the raw stanza entry point."""

from __future__ import annotations

import httpx
import pytest

from offline_notifier.models import Jid, MessageType, NotifierConfig
from offline_notifier.webhook.notifier import OfflineNotifier
from offline_notifier.xmpp import StanzaError, dispatch_stanza, event_from_stanza
from tests.conftest import RecordingTransport

CHAT_STANZA = (
    '<message xmlns="jabber:client" type="chat" id="abc-1" '
    'from="alice@example.com/phone" to="bob@example.com">'
    "<body>see you at 5</body></message>"
)


class TestEventFromStanza:
    def test_extracts_fields(self) -> None:
        event = event_from_stanza("alice@example.com/phone", "bob@example.com", CHAT_STANZA)
        assert event.from_.user == "alice"
        assert event.to.user == "bob"
        assert event.message_id == "abc-1"
        assert event.body == "see you at 5"
        assert event.type == MessageType.CHAT

    def test_accepts_jid_objects(self) -> None:
        sender = Jid.parse("alice@example.com")
        event = event_from_stanza(sender, Jid.parse("bob@example.com"), CHAT_STANZA)
        assert event.from_ is sender

    def test_missing_type_defaults_to_normal(self) -> None:
        event = event_from_stanza(
            "a@x.org", "b@x.org", "<message id='1'><body>hi</body></message>",
        )
        assert event.type == MessageType.NORMAL

    def test_unknown_type_maps_to_normal(self) -> None:
        event = event_from_stanza(
            "a@x.org", "b@x.org", "<message type='weird'><body>hi</body></message>",
        )
        assert event.type == MessageType.NORMAL

    def test_missing_body_and_id(self) -> None:
        event = event_from_stanza("a@x.org", "b@x.org", "<message type='chat'/>")
        assert event.body == ""
        assert event.message_id == ""

    def test_ignores_body_in_foreign_namespace(self) -> None:
        stanza = (
            "<message xmlns='jabber:client' type='chat'>"
            "<body xmlns='urn:example:other'>nope</body></message>"
        )
        assert event_from_stanza("a@x.org", "b@x.org", stanza).body == ""

    def test_malformed_xml_raises(self) -> None:
        with pytest.raises(StanzaError):
            event_from_stanza("a@x.org", "b@x.org", "<message><body>")

    def test_non_message_stanza_raises(self) -> None:
        with pytest.raises(StanzaError):
            event_from_stanza("a@x.org", "b@x.org", "<presence/>")


@pytest.mark.asyncio
async def test_dispatch_stanza_posts_webhook() -> None:
    recorder = RecordingTransport()
    async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
        notifier = OfflineNotifier(NotifierConfig(), client=client)
        await dispatch_stanza(notifier, "alice@example.com/phone", "bob@example.com", CHAT_STANZA)
        await notifier.drain()

    assert recorder.requests[0].content == (
        b"from=alice&to=bob&message_id=abc-1&body=see+you+at+5"
    )
