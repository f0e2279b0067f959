"""Shared Pydantic data models for offline-notifier."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

DEFAULT_AUTH_TOKEN = "secret"
DEFAULT_POST_URL = "http://localhost:5000/notify"

# --- Enums ---


class MessageType(str, Enum):
    """XMPP message stanza types."""

    CHAT = "chat"
    GROUPCHAT = "groupchat"
    NORMAL = "normal"
    HEADLINE = "headline"
    ERROR = "error"


class DeliveryStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"


# --- Configuration ---


class NotifierConfig(BaseModel):
    """Per-host module options, immutable once the module is started."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    auth_token: StrictStr = DEFAULT_AUTH_TOKEN
    post_url: StrictStr = DEFAULT_POST_URL
    confidential: StrictBool = False


# --- Message Models ---


class Jid(BaseModel):
    """An XMPP address: ``user@server/resource``."""

    model_config = ConfigDict(frozen=True)

    user: str
    server: str
    resource: str = ""

    @classmethod
    def parse(cls, text: str) -> Jid:
        """Split the textual form of an address.

        The local-part is case-folded and the domain lowercased, matching
        the host's ``luser``/``lserver`` normalisation.
        """
        bare, _, resource = text.strip().partition("/")
        user, sep, server = bare.rpartition("@")
        if not sep:
            # "example.com" is a server address with no local-part
            user, server = "", bare
        if not server:
            raise ValueError(f"Invalid address {text!r}: missing domain part")
        return cls(user=user.casefold(), server=server.lower(), resource=resource)

    def bare(self) -> str:
        return f"{self.user}@{self.server}" if self.user else self.server

    def __str__(self) -> str:
        return f"{self.bare()}/{self.resource}" if self.resource else self.bare()


class OfflineMessageEvent(BaseModel):
    """A message the host could not deliver because the recipient is offline."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: Jid = Field(alias="from")
    to: Jid
    message_id: str = ""
    body: str = ""
    type: MessageType = MessageType.CHAT


# --- Delivery Models ---


class DeliveryResult(BaseModel):
    """Outcome of a single webhook POST. Logged, never surfaced to the host."""

    model_config = ConfigDict(frozen=True)

    status: DeliveryStatus
    status_code: int | None = None
    error: str | None = None
