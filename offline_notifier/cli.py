"""Click CLI for inspecting and exercising the offline message webhook."""

from __future__ import annotations

import asyncio
import json
import logging

import click

from offline_notifier.config import ConfigError, load_config_from_env, mod_doc
from offline_notifier.models import (
    DeliveryResult,
    Jid,
    MessageType,
    NotifierConfig,
    OfflineMessageEvent,
)
from offline_notifier.webhook.notifier import OfflineNotifier
from offline_notifier.webhook.payload import build_payload, encode_payload


def _mask(token: str) -> str:
    if len(token) <= 4:
        return "*" * len(token)
    return token[:2] + "*" * (len(token) - 4) + token[-2:]


def _make_event(
    sender: str, recipient: str, body: str, message_id: str, msg_type: str,
) -> OfflineMessageEvent:
    try:
        return OfflineMessageEvent(
            from_=Jid.parse(sender),
            to=Jid.parse(recipient),
            message_id=message_id,
            body=body,
            type=MessageType(msg_type),
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.group()
@click.option("--auth-token", default=None, help="Authorization header value.")
@click.option("--post-url", default=None, help="Webhook endpoint URL.")
@click.option(
    "--confidential/--no-confidential", default=None,
    help="Omit the message body from the webhook payload.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    auth_token: str | None,
    post_url: str | None,
    confidential: bool | None,
    verbose: bool,
) -> None:
    """Offline message webhook notifier."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)
    ctx.ensure_object(dict)
    try:
        config = load_config_from_env()
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc

    overrides = {
        "auth_token": auth_token,
        "post_url": post_url,
        "confidential": confidential,
    }
    ctx.obj["config"] = config.model_copy(
        update={k: v for k, v in overrides.items() if v is not None},
    )


@cli.command()
@click.pass_context
def options(ctx: click.Context) -> None:
    """Print the effective options (token masked)."""
    config: NotifierConfig = ctx.obj["config"]
    data = config.model_dump()
    data["auth_token"] = _mask(config.auth_token)
    click.echo(json.dumps(data, indent=2))


@cli.command()
def doc() -> None:
    """Print the module documentation."""
    documentation = mod_doc()
    click.echo(documentation["desc"])
    click.echo("")
    for name, opt in documentation["opts"].items():
        click.echo(f"  {name}: {opt['value']}")
        click.echo(f"      {opt['desc']}")
    click.echo("")
    click.echo("\n".join(documentation["example"]))


@cli.command()
@click.argument("sender")
@click.argument("recipient")
@click.argument("body")
@click.option("--id", "message_id", default="", help="Message id.")
@click.pass_context
def payload(ctx: click.Context, sender: str, recipient: str, body: str, message_id: str) -> None:
    """Print the form body that would be POSTed for a chat message."""
    config: NotifierConfig = ctx.obj["config"]
    event = _make_event(sender, recipient, body, message_id, MessageType.CHAT.value)
    click.echo(encode_payload(build_payload(event, config)))


@cli.command()
@click.argument("sender")
@click.argument("recipient")
@click.argument("body")
@click.option("--id", "message_id", default="", help="Message id.")
@click.option(
    "--type", "msg_type",
    type=click.Choice([t.value for t in MessageType]),
    default=MessageType.CHAT.value,
    help="Message type.",
)
@click.pass_context
def send(
    ctx: click.Context, sender: str, recipient: str, body: str, message_id: str, msg_type: str,
) -> None:
    """Dispatch one offline message event and report the delivery result."""
    config: NotifierConfig = ctx.obj["config"]
    event = _make_event(sender, recipient, body, message_id, msg_type)
    notifier = OfflineNotifier(config)

    async def _run() -> list[DeliveryResult]:
        await notifier.on_offline_message(event)
        return await notifier.drain()

    results = asyncio.run(_run())
    if not results:
        click.echo("Event does not qualify for the webhook; nothing sent.", err=True)
        return
    click.echo(results[0].model_dump_json(indent=2))
