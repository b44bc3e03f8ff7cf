"""Websocket channels and the subscription messages they send."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, ClassVar


def _encode(op: str, args: dict[str, Any]) -> str:
    message = {"op": op, "args": [args]}
    return json.dumps(message, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


class WebsocketChannel:
    """A channel on the exchange websocket.

    Subclasses set ``CHANNEL`` and, for channels that need a login first,
    ``AUTH``. Extra subscription arguments come from ``_channel_args``.
    """

    CHANNEL: ClassVar[str] = ""
    AUTH: ClassVar[bool] = False

    def _channel_args(self) -> dict[str, Any]:
        return {}

    def _args(self) -> dict[str, Any]:
        return {"channel": self.CHANNEL, **self._channel_args()}

    def subscribe_message(self) -> str:
        """JSON text of the request that subscribes to this channel."""
        return _encode("subscribe", self._args())

    def unsubscribe_message(self) -> str:
        """JSON text of the request that unsubscribes from this channel."""
        return _encode("unsubscribe", self._args())

    def is_private(self) -> bool:
        """True when the channel needs an authenticated connection."""
        return self.AUTH


@dataclass(frozen=True)
class _InstrumentChannel(WebsocketChannel):
    inst_id: str

    def _channel_args(self) -> dict[str, Any]:
        return {"instId": self.inst_id}


class Books(_InstrumentChannel):
    """Full-depth order book channel for one instrument."""

    CHANNEL = "books"


class Books5(_InstrumentChannel):
    """Five-level order book channel for one instrument."""

    CHANNEL = "books5"


class BboTbt(_InstrumentChannel):
    """Tick-by-tick best bid and offer channel for one instrument."""

    CHANNEL = "bbo-tbt"


class BooksL2Tbt(_InstrumentChannel):
    """Tick-by-tick level 2 order book channel for one instrument."""

    CHANNEL = "books-l2-tbt"


class Tickers(_InstrumentChannel):
    """Ticker channel for one instrument."""

    CHANNEL = "tickers"