"""Recognise and decode websocket push messages for a given channel."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping, Optional, Union

from okxkit.channels import BboTbt, Books, Books5, BooksL2Tbt, Tickers, WebsocketChannel
from okxkit.market_data import Ticker
from okxkit.orders import OrderDetail, OrderOp, OrdersChannel, PlaceOrderResponse
from okxkit.trading_account import BalanceAndPositionChannel

logger = logging.getLogger(__name__)

_ORDER_OP_PATTERN = '"op":"order"'
_IGNORED_EVENTS = frozenset({"subscribe", "unsubscribe"})

# Channels whose push data always holds exactly one entry.
_SINGLE_ENTRY: tuple[type, ...] = (
    Books,
    Books5,
    BboTbt,
    BooksL2Tbt,
    OrdersChannel,
    OrderOp,
    BalanceAndPositionChannel,
)

_DECODERS: dict[type, Callable[[Mapping[str, Any]], Any]] = {
    Tickers: Ticker.from_dict,
    OrdersChannel: OrderDetail.from_dict,
    OrderOp: PlaceOrderResponse.from_dict,
}


class ApiError(Exception):
    """An error reported by the exchange over the websocket."""

    def __init__(
        self,
        code: Union[str, int, None] = None,
        msg: Optional[str] = None,
        conn_id: Optional[str] = None,
        data: Any = None,
    ) -> None:
        super().__init__(f"api error {code}: {msg}")
        self.code = code
        self.msg = msg
        self.conn_id = conn_id
        self.data = data


def _opt_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"invalid type for `{key}`: expected a string")
    return value


@dataclass(frozen=True)
class WsResponse:
    """One websocket message: an event, a push of data, or an operation reply."""

    event: Optional[str] = None
    arg: Optional[dict[str, Any]] = None
    data: Optional[list[Any]] = None
    code: Union[str, int, None] = None
    msg: Optional[str] = None
    conn_id: Optional[str] = None
    op: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WsResponse":
        """Build a response from its decoded JSON object."""
        if not isinstance(data, Mapping):
            raise ValueError("expected a JSON object")
        arg = data.get("arg")
        if arg is not None and not isinstance(arg, Mapping):
            raise ValueError("invalid type for `arg`: expected an object")
        entries = data.get("data")
        if entries is not None and not isinstance(entries, list):
            raise ValueError("invalid type for `data`: expected a list")
        code = data.get("code")
        if code is not None and (isinstance(code, bool) or not isinstance(code, (str, int))):
            raise ValueError("invalid type for `code`: expected a string or an integer")
        return cls(
            event=_opt_str(data, "event"),
            arg=dict(arg) if arg is not None else None,
            data=list(entries) if entries is not None else None,
            code=code,
            msg=_opt_str(data, "msg"),
            conn_id=_opt_str(data, "connId"),
            op=_opt_str(data, "op"),
            id=_opt_str(data, "id"),
        )


def channel_pattern(channel_cls: type) -> str:
    """The text that marks a raw message as belonging to ``channel_cls``."""
    if not isinstance(channel_cls, type) or not issubclass(channel_cls, WebsocketChannel):
        raise TypeError(f"not a websocket channel: {channel_cls!r}")
    if issubclass(channel_cls, OrderOp):
        return _ORDER_OP_PATTERN
    if not channel_cls.CHANNEL:
        raise TypeError(f"channel {channel_cls.__name__} has no name to match")
    return f'"channel":"{channel_cls.CHANNEL}"'


def _load(msg: str) -> Any:
    try:
        return json.loads(msg)
    except json.JSONDecodeError as exc:
        logger.error("%s", msg)
        logger.error("%r", exc)
        start = max(exc.pos - 20, 0)
        logger.error(".. %r ..", msg[start : exc.pos + 20])
        raise


def _decoder_for(channel_cls: type) -> Optional[Callable[[Mapping[str, Any]], Any]]:
    return next((_DECODERS[base] for base in channel_cls.__mro__ if base in _DECODERS), None)


def _typed(channel_cls: type, response: WsResponse) -> WsResponse:
    if response.data is None:
        return response
    if issubclass(channel_cls, _SINGLE_ENTRY) and len(response.data) != 1:
        raise ValueError(f"expected exactly one data entry, got {len(response.data)}")
    decoder = _decoder_for(channel_cls)
    if decoder is None:
        return response
    return replace(response, data=[decoder(entry) for entry in response.data])


def try_parse(channel_cls: type, msg: str) -> Optional[WsResponse]:
    """Decode ``msg`` if it belongs to ``channel_cls``.

    Returns ``None`` for messages of other channels and for subscription
    acknowledgements; raises ApiError for error events and ValueError for
    messages that cannot be decoded.
    """
    if channel_pattern(channel_cls) not in msg:
        return None
    raw = _load(msg)
    if raw is None:
        return None
    response = WsResponse.from_dict(raw)
    if response.event == "error":
        logger.error("%r", response)
        raise ApiError(code=response.code, msg=response.msg, conn_id=response.conn_id)
    if response.event in _IGNORED_EVENTS:
        logger.info("%r", response)
        return None
    return _typed(channel_cls, response)


def try_parse_books(msg: str) -> Optional[WsResponse]:
    """Decode a full-depth book or best bid/offer message.

    Error events are logged and give ``None``, as do subscription
    acknowledgements and messages of other channels.
    """
    if channel_pattern(Books) not in msg and channel_pattern(BboTbt) not in msg:
        return None
    response = WsResponse.from_dict(_load(msg))
    if response.event == "error":
        logger.error("%r", response)
        return None
    if response.event in _IGNORED_EVENTS:
        logger.info("%r", response)
        return None
    return _typed(Books, response)