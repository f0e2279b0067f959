"""Form payload for the offline message webhook."""

from __future__ import annotations

from urllib.parse import urlencode

from offline_notifier.models import NotifierConfig, OfflineMessageEvent

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def build_payload(
    event: OfflineMessageEvent, config: NotifierConfig,
) -> list[tuple[str, str]]:
    """Ordered form fields: from, to, message_id and, unless confidential, body."""
    fields = [
        ("from", event.from_.user),
        ("to", event.to.user),
        ("message_id", event.message_id),
    ]
    if not config.confidential:
        fields.append(("body", event.body))
    return fields


def encode_payload(fields: list[tuple[str, str]]) -> str:
    """Form-encode fields, escaping ``&``, ``=`` and non-ASCII values."""
    return urlencode(fields)
