"""Module options: validation, defaults and documentation."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from offline_notifier.models import DEFAULT_AUTH_TOKEN, DEFAULT_POST_URL, NotifierConfig

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Raised when module options cannot be turned into a NotifierConfig."""


class UnknownOptionError(ConfigError):
    def __init__(self, names: list[str]) -> None:
        self.names = names
        super().__init__(f"Unknown option(s): {', '.join(names)}")


class InvalidOptionError(ConfigError):
    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid value for option '{name}': {reason}")


def mod_options() -> dict[str, Any]:
    """Default option values."""
    return {
        "auth_token": DEFAULT_AUTH_TOKEN,
        "post_url": DEFAULT_POST_URL,
        "confidential": False,
    }


def mod_doc() -> dict[str, Any]:
    return {
        "desc": "Simple module to POST offline messages to a Webhook endpoint.",
        "opts": {
            "auth_token": {
                "value": "Text",
                "desc": (
                    "Authorization Header to be sent with the POST request. "
                    'Default value is: "secret". Please change to something more secure.'
                ),
            },
            "post_url": {
                "value": "Text",
                "desc": (
                    "Webhook endpoint URL for the POST request. "
                    'Default value is: "http://localhost:5000/notify". '
                    "Change to your Webhook endpoint URL."
                ),
            },
            "confidential": {
                "value": "true | false",
                "desc": (
                    "Confidential mode. Default value is: 'false'. "
                    "If set to 'true', message Body will not be sent."
                ),
            },
        },
        "example": [
            "modules:",
            "  ...",
            "  mod_webhook:",
            '    auth_token: "secret"',
            '    post_url: "http://localhost:5000/notify"',
            "    confidential: false",
            "  ...",
            "",
            "modules:",
            "  ...",
            "  mod_webhook:",
            '    auth_token: "mgFqMZcrLMMccjDFFmMCXZhmP9wKeGtXRVuaiwyYk9"',
            '    post_url: "https://api.example.com/notify"',
            "    confidential: true",
            "  ...",
        ],
    }


def load_config(opts: Mapping[str, Any] | None = None) -> NotifierConfig:
    """Merge host-provided options over the defaults and validate them.

    Raises UnknownOptionError for names the module does not define and
    InvalidOptionError for values of the wrong type.
    """
    opts = dict(opts or {})
    defaults = mod_options()
    unknown = sorted(k for k in opts if k not in defaults)
    if unknown:
        raise UnknownOptionError(unknown)

    try:
        return NotifierConfig(**{**defaults, **opts})
    except ValidationError as exc:
        error = exc.errors()[0]
        name = str(error["loc"][0]) if error["loc"] else "?"
        raise InvalidOptionError(name, error["msg"]) from exc


def load_config_from_env() -> NotifierConfig:
    """Build config from WEBHOOK_* environment variables, falling back to defaults."""
    opts: dict[str, Any] = {}
    if "WEBHOOK_AUTH_TOKEN" in os.environ:
        opts["auth_token"] = os.environ["WEBHOOK_AUTH_TOKEN"]
    if "WEBHOOK_POST_URL" in os.environ:
        opts["post_url"] = os.environ["WEBHOOK_POST_URL"]
    if "WEBHOOK_CONFIDENTIAL" in os.environ:
        opts["confidential"] = _parse_bool(
            "confidential", os.environ["WEBHOOK_CONFIDENTIAL"],
        )
    return load_config(opts)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InvalidOptionError(name, f"expected a boolean, got {raw!r}")
