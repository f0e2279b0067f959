"""Named hook dispatcher used by the host delivery pipeline.

Callbacks are registered per (hook, host) with a sequence number and run
in ascending order. ``run_fold`` threads an accumulator through them; a
callback that returns ``STOP`` ends the fold early.
"""

from __future__ import annotations

import inspect
import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

OFFLINE_MESSAGE_HOOK = "offline_message_hook"

STOP = object()

HookCallback = Callable[[Any], Any]


@dataclass(order=True)
class _Registration:
    seq: int
    order: int
    callback: HookCallback = field(compare=False)


class HookRegistry:
    """Host-side registry of hook callbacks."""

    def __init__(self) -> None:
        self._hooks: dict[tuple[str, str], list[_Registration]] = {}
        self._counter = itertools.count()

    def add(self, hook: str, host: str, callback: HookCallback, seq: int = 50) -> None:
        entries = self._hooks.setdefault((hook, host), [])
        if any(e.callback == callback and e.seq == seq for e in entries):
            return
        entries.append(_Registration(seq, next(self._counter), callback))
        entries.sort()

    def delete(self, hook: str, host: str, callback: HookCallback, seq: int = 50) -> None:
        entries = self._hooks.get((hook, host), [])
        remaining = [e for e in entries if not (e.callback == callback and e.seq == seq)]
        if remaining:
            self._hooks[(hook, host)] = remaining
        else:
            self._hooks.pop((hook, host), None)

    def callbacks(self, hook: str, host: str) -> list[HookCallback]:
        return [e.callback for e in self._hooks.get((hook, host), [])]

    async def run_fold(self, hook: str, host: str, acc: Any) -> Any:
        """Run every callback for the hook, passing each the previous result."""
        for callback in self.callbacks(hook, host):
            try:
                result = callback(acc)
                if inspect.isawaitable(result):
                    result = await result
            except Exception:
                # A failing hook must not break message delivery
                logger.exception("Hook %s callback %r failed", hook, callback)
                continue
            if result is STOP:
                break
            acc = result
        return acc
