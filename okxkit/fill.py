"""Fill (transaction detail) history of the last three days."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from okxkit.book import Side
from okxkit.fields import StringEnum, parse_float, parse_opt_str
from okxkit.request import Method, Request

_U64 = re.compile(r"\+?[0-9]+")


def _parse_u64(text: str) -> int:
    if not _U64.fullmatch(text):
        raise ValueError(f"invalid unsigned integer {text!r}")
    value = int(text)
    if value >= 2**64:
        raise ValueError(f"number too large {text!r}")
    return value


def _text(data: Mapping[str, Any], key: str) -> str:
    try:
        value = data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None
    if not isinstance(value, str):
        raise ValueError(f"invalid type for `{key}`: expected a string")
    return value


@dataclass
class GetFillHistory(Request):
    """Query fills of the last three days."""

    METHOD = Method.GET
    PATH = "/trade/fills"
    AUTH = True
    AS_STR = frozenset(
        {"inst_type", "inst_id", "ord_id", "after", "before", "begin", "end", "limit"}
    )

    inst_type: Optional[Union[str, StringEnum]] = None
    uly: Optional[str] = None
    inst_id: Optional[str] = None
    ord_id: Optional[str] = None
    after: Optional[str] = None
    before: Optional[str] = None
    begin: Optional[int] = None
    end: Optional[int] = None
    limit: Optional[int] = None


@dataclass(frozen=True)
class FillHistory:
    """One fill."""

    inst_type: str
    inst_id: str
    trade_id: Optional[str] = None
    ord_id: Optional[str] = None
    cl_ord_id: Optional[str] = None
    bill_id: Optional[str] = None
    tag: Optional[str] = None
    fill_px: Optional[float] = None
    fill_sz: Optional[float] = None
    side: Optional[Side] = None
    pos_side: Optional[str] = None
    exec_type: Optional[str] = None
    fee_ccy: Optional[str] = None
    fee: Optional[float] = None
    ts: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FillHistory":
        """Build a fill from its decoded JSON object."""
        get = data.get
        return cls(
            inst_type=_text(data, "instType"),
            inst_id=_text(data, "instId"),
            trade_id=parse_opt_str(get("tradeId"), str),
            ord_id=parse_opt_str(get("ordId"), str),
            cl_ord_id=parse_opt_str(get("clOrdId"), str),
            bill_id=parse_opt_str(get("billId"), str),
            tag=parse_opt_str(get("tag"), str),
            fill_px=parse_opt_str(get("fillPx"), parse_float),
            fill_sz=parse_opt_str(get("fillSz"), parse_float),
            side=parse_opt_str(get("side"), Side.parse),
            pos_side=parse_opt_str(get("posSide"), str),
            exec_type=parse_opt_str(get("execType"), str),
            fee_ccy=parse_opt_str(get("feeCcy"), str),
            fee=parse_opt_str(get("fee"), parse_float),
            ts=parse_opt_str(get("ts"), _parse_u64),
        )