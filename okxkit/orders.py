"""Order placement, cancellation and order queries, with the orders channel."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union

from okxkit.book import Side
from okxkit.channels import WebsocketChannel
from okxkit.fields import StringEnum, parse_float, parse_opt_str
from okxkit.request import Method, Request

Wire = Union[str, StringEnum]

_U64 = re.compile(r"\+?[0-9]+")


def _parse_u64(text: str) -> int:
    if not _U64.fullmatch(text):
        raise ValueError(f"invalid unsigned integer {text!r}")
    value = int(text)
    if value >= 2**64:
        raise ValueError(f"number too large {text!r}")
    return value


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _text(data: Mapping[str, Any], key: str) -> str:
    try:
        value = data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None
    if not isinstance(value, str):
        raise ValueError(f"invalid type for `{key}`: expected a string")
    return value


def _wire(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


@dataclass
class CancelOrder(Request):
    """Cancel one order by order id or client order id."""

    METHOD = Method.POST
    PATH = "/trade/cancel-order"
    AUTH = True

    inst_id: str
    ord_id: Optional[str] = None
    cl_ord_id: Optional[str] = None


@dataclass(frozen=True)
class CancelOrderData:
    """Result of cancelling one order."""

    ord_id: str
    cl_ord_id: Optional[str] = None
    s_code: Optional[int] = None
    s_msg: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CancelOrderData":
        """Build a cancel result from its decoded JSON object."""
        get = data.get
        return cls(
            ord_id=_text(data, "ordId"),
            cl_ord_id=parse_opt_str(get("clOrdId"), str),
            s_code=parse_opt_str(get("sCode"), _parse_u64),
            s_msg=parse_opt_str(get("sMsg"), str),
        )


@dataclass
class CancelMultipleOrders(Request):
    """Cancel a batch of orders in one call."""

    METHOD = Method.POST
    PATH = "/trade/cancel-batch-orders"
    AUTH = True

    orders: list[CancelOrder] = field(default_factory=list)

    def params(self) -> dict[str, Any]:
        """No query parameters: the batch travels in the body."""
        return {}

    def body(self) -> list[dict[str, Any]]:
        """The batch as the list of cancel requests sent on the wire."""
        return [order.params() for order in self.orders]


@dataclass(kw_only=True)
class PlaceOrder(Request):
    """Place one order."""

    METHOD = Method.POST
    PATH = "/trade/order"
    AUTH = True
    AS_STR = frozenset({"td_mode", "side"})

    inst_id: str
    td_mode: Wire
    ccy: Optional[str] = None
    cl_ord_id: Optional[str] = None
    tag: Optional[str] = None
    side: Union[Side, str]
    pos_side: Optional[Wire] = None
    ord_type: Wire
    sz: str
    px: Optional[str] = None
    reduce_only: Optional[bool] = None
    tgt_ccy: Optional[Wire] = None
    ban_amend: Optional[bool] = None
    attach_algo_cl_ord_id: Optional[str] = None
    tp_trigger_px: Optional[str] = None
    tp_ord_px: Optional[str] = None
    sl_trigger_px: Optional[str] = None
    sl_ord_px: Optional[str] = None
    tp_trigger_px_type: Optional[Wire] = None
    sl_trigger_px_type: Optional[Wire] = None
    quick_mgn_type: Optional[str] = None
    stp_id: Optional[str] = None
    stp_mode: Optional[Wire] = None


@dataclass(frozen=True)
class PlaceOrderResponse:
    """Result of placing one order."""

    ord_id: Optional[str] = None
    cl_ord_id: Optional[str] = None
    tag: Optional[str] = None
    s_code: Optional[int] = None
    s_msg: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PlaceOrderResponse":
        """Build a placement result from its decoded JSON object."""
        get = data.get
        return cls(
            ord_id=parse_opt_str(get("ordId"), str),
            cl_ord_id=parse_opt_str(get("clOrdId"), str),
            tag=parse_opt_str(get("tag"), str),
            s_code=parse_opt_str(get("sCode"), _parse_u64),
            s_msg=parse_opt_str(get("sMsg"), str),
        )


@dataclass
class GetOrderDetails(Request):
    """Details of one order."""

    METHOD = Method.GET
    PATH = "/trade/order"
    AUTH = True

    inst_id: str
    ord_id: Optional[str] = None
    cl_ord_id: Optional[str] = None


_FLOAT_FIELDS = frozenset(
    {
        "px", "sz", "pnl", "acc_fill_sz", "fill_px", "fill_sz", "avg_px", "lever",
        "tp_trigger_px", "tp_ord_px", "sl_trigger_px", "sl_ord_px", "fee",
    }
)
_INT_FIELDS = frozenset({"fill_time", "u_time", "c_time"})


def _converter(name: str) -> Callable[[str], Any]:
    if name in _FLOAT_FIELDS:
        return parse_float
    if name in _INT_FIELDS:
        return _parse_u64
    if name == "side":
        return Side.parse
    return str


@dataclass(frozen=True)
class OrderDetail:
    """State of one order."""

    inst_type: str
    inst_id: str
    tgt_ccy: Optional[str] = None
    ccy: Optional[str] = None
    ord_id: Optional[str] = None
    cl_ord_id: Optional[str] = None
    tag: Optional[str] = None
    px: Optional[float] = None
    sz: Optional[float] = None
    pnl: Optional[float] = None
    ord_type: Optional[str] = None
    side: Optional[Side] = None
    pos_side: Optional[str] = None
    td_mode: Optional[str] = None
    acc_fill_sz: Optional[float] = None
    fill_px: Optional[float] = None
    trade_id: Optional[str] = None
    fill_sz: Optional[float] = None
    fill_time: Optional[int] = None
    avg_px: Optional[float] = None
    state: Optional[str] = None
    lever: Optional[float] = None
    tp_trigger_px: Optional[float] = None
    tp_trigger_px_type: Optional[str] = None
    tp_ord_px: Optional[float] = None
    sl_trigger_px: Optional[float] = None
    sl_trigger_px_type: Optional[str] = None
    sl_ord_px: Optional[float] = None
    fee_ccy: Optional[str] = None
    fee: Optional[float] = None
    rebate_ccy: Optional[str] = None
    source: Optional[str] = None
    rebate: Optional[str] = None
    category: Optional[str] = None
    u_time: Optional[int] = None
    c_time: Optional[int] = None
    exec_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OrderDetail":
        """Build an order record from its decoded JSON object."""
        optional = {
            item.name: parse_opt_str(data.get(_camel(item.name)), _converter(item.name))
            for item in fields(cls)
            if item.name not in ("inst_type", "inst_id")
        }
        return cls(
            inst_type=_text(data, "instType"),
            inst_id=_text(data, "instId"),
            **optional,
        )


@dataclass
class GetOrderList(Request):
    """Pending orders."""

    METHOD = Method.GET
    PATH = "/trade/orders-pending"
    AUTH = True
    AS_STR = frozenset(
        {"inst_type", "uly", "inst_id", "ord_type", "state", "after", "before", "limit"}
    )

    inst_type: Optional[Wire] = None
    uly: Optional[str] = None
    inst_id: Optional[str] = None
    ord_type: Optional[Wire] = None
    state: Optional[Wire] = None
    after: Optional[str] = None
    before: Optional[str] = None
    limit: Optional[int] = None


@dataclass(frozen=True)
class OrdersChannel(WebsocketChannel):
    """Private order updates for one instrument type."""

    CHANNEL = "orders"
    AUTH = True

    inst_type: Wire

    def _channel_args(self) -> dict[str, Any]:
        return {"instType": _wire(self.inst_type)}


class OrderOp(WebsocketChannel):
    """Order placement over the websocket, answered with placement results."""

    CHANNEL = ""