"""Tests for webhook form payload construction."""

from __future__ import annotations

from urllib.parse import parse_qsl

from offline_notifier.models import NotifierConfig
from offline_notifier.webhook.payload import build_payload, encode_payload
from tests.conftest import make_event


class TestBuildPayload:
    def test_field_order_with_body(self) -> None:
        fields = build_payload(make_event(), NotifierConfig())
        assert fields == [
            ("from", "alice"),
            ("to", "bob"),
            ("message_id", "123"),
            ("body", "hi"),
        ]

    def test_confidential_omits_body(self) -> None:
        fields = build_payload(make_event(), NotifierConfig(confidential=True))
        assert [name for name, _ in fields] == ["from", "to", "message_id"]

    def test_only_local_parts_are_sent(self) -> None:
        event = make_event(from_="carol@chat.example.org/laptop", to="dave@other.net")
        fields = dict(build_payload(event, NotifierConfig()))
        assert fields["from"] == "carol"
        assert fields["to"] == "dave"


class TestEncodePayload:
    def test_matches_plain_wire_format(self) -> None:
        body = encode_payload(build_payload(make_event(), NotifierConfig()))
        assert body == "from=alice&to=bob&message_id=123&body=hi"

    def test_confidential_wire_format(self) -> None:
        body = encode_payload(build_payload(make_event(), NotifierConfig(confidential=True)))
        assert body == "from=alice&to=bob&message_id=123"

    def test_reserved_characters_are_escaped(self) -> None:
        event = make_event(body="a&b=c")
        body = encode_payload(build_payload(event, NotifierConfig()))
        assert body.endswith("&body=a%26b%3Dc")
        assert dict(parse_qsl(body))["body"] == "a&b=c"

    def test_non_ascii_body_survives_decoding(self) -> None:
        event = make_event(body="zdravo, Srđan ☕")
        body = encode_payload(build_payload(event, NotifierConfig()))
        assert body.isascii()
        assert dict(parse_qsl(body))["body"] == "zdravo, Srđan ☕"
