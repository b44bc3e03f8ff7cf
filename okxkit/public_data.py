"""Public data endpoints and public websocket channels."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Union

from okxkit.channels import WebsocketChannel
from okxkit.fields import StringEnum
from okxkit.request import Method, Request

InstType = Union[str, StringEnum]


def _wire(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _field(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None


def _text(data: Mapping[str, Any], key: str) -> str:
    value = _field(data, key)
    if not isinstance(value, str):
        raise ValueError(f"invalid type for `{key}`: expected a string")
    return value


def _number(data: Mapping[str, Any], key: str) -> float:
    value = _field(data, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"invalid type for `{key}`: expected a number")
    return float(value)


def _uint(data: Mapping[str, Any], key: str) -> int:
    value = _field(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < 2**64:
        raise ValueError(f"invalid value for `{key}`: expected an unsigned integer")
    return value


@dataclass
class GetInstruments(Request):
    """List instruments with open contracts."""

    METHOD = Method.GET
    PATH = "/public/instruments"
    AUTH = False

    inst_type: InstType
    uly: Optional[str] = None
    inst_family: Optional[str] = None
    inst_id: Optional[str] = None


@dataclass
class GetDeliveryExerciseHistory(Request):
    """Delivery and exercise records of the last three months."""

    METHOD = Method.GET
    PATH = "/public/delivery-exercise-history"
    AUTH = False

    inst_type: InstType
    underlying: Optional[str] = None
    inst_family: Optional[str] = None
    after: Optional[int] = None
    before: Optional[int] = None
    limit: Optional[int] = None


@dataclass
class GetOpenInterest(Request):
    """Total open interest of contracts."""

    METHOD = Method.GET
    PATH = "/public/open-interest"
    AUTH = False

    inst_type: InstType
    uly: Optional[str] = None
    inst_family: Optional[str] = None
    inst_id: Optional[str] = None


@dataclass
class GetFundingRate(Request):
    """Current funding rate of a swap."""

    METHOD = Method.GET
    PATH = "/public/funding-rate"
    AUTH = False

    inst_id: str


@dataclass
class GetFundingRateHistory(Request):
    """Funding rate history of a swap."""

    METHOD = Method.GET
    PATH = "/public/funding-rate-history"
    AUTH = False

    inst_id: str
    before: Optional[int] = None
    after: Optional[int] = None
    limit: Optional[int] = None


@dataclass
class GetLimitPrice(Request):
    """Highest buy limit and lowest sell limit of an instrument."""

    METHOD = Method.GET
    PATH = "/public/price-limit"
    AUTH = False

    inst_id: str


@dataclass
class GetDiscountRateAndInterestFreeQuota(Request):
    """Discount rate level and interest-free quota."""

    METHOD = Method.GET
    PATH = "/public/discount-rate-interest-free-quota"
    AUTH = False

    ccy: Optional[str] = None
    discount_lv: Optional[int] = None


@dataclass
class GetSystemTime(Request):
    """API server time."""

    METHOD = Method.GET
    PATH = "/public/time"
    AUTH = False


@dataclass
class GetMarkPrice(Request):
    """Mark price of instruments."""

    METHOD = Method.GET
    PATH = "/public/mark-price"
    AUTH = False
    KEEP_NONE = frozenset({"uly", "inst_family"})

    inst_type: Optional[InstType] = None
    uly: Optional[str] = None
    inst_family: Optional[str] = None
    inst_id: Optional[str] = None


@dataclass(kw_only=True)
class GetPositionTiers(Request):
    """Position tiers and their maximum leverage."""

    METHOD = Method.GET
    PATH = "/public/position-tiers"
    AUTH = False

    inst_type: Optional[InstType] = None
    td_mode: Union[str, StringEnum]
    uly: Optional[str] = None
    inst_family: Optional[str] = None
    inst_id: Optional[str] = None
    ccy: Optional[str] = None
    tier: Optional[str] = None


@dataclass
class GetUnderlying(Request):
    """Underlyings of an instrument type."""

    METHOD = Method.GET
    PATH = "/public/underlying"
    AUTH = False

    inst_type: InstType


@dataclass
class GetInsuranceFund(Request):
    """Insurance fund balance information."""

    METHOD = Method.GET
    PATH = "/public/insurance-fund"
    AUTH = False

    inst_type: InstType
    type: Optional[str] = None
    uly: Optional[str] = None
    inst_family: Optional[str] = None
    ccy: Optional[str] = None
    before: Optional[int] = None
    after: Optional[int] = None
    limit: Optional[int] = None


@dataclass
class GetIndexTickers(Request):
    """Index tickers."""

    METHOD = Method.GET
    PATH = "/market/index-tickers"
    AUTH = False

    quote_ccy: Optional[str] = None
    inst_id: Optional[str] = None


@dataclass
class GetIndexCandles(Request):
    """Recent candlesticks of an index."""

    METHOD = Method.GET
    PATH = "/market/index-candles"
    AUTH = False

    inst_id: str
    after: Optional[int] = None
    before: Optional[int] = None
    bar: Optional[str] = None
    limit: Optional[int] = None


@dataclass
class GetHistoryIndexCandles(Request):
    """Candlesticks of an index from recent years."""

    METHOD = Method.GET
    PATH = "/market/history-index-candles"
    AUTH = False
    KEEP_NONE = frozenset({"bar", "limit"})

    inst_id: str
    after: Optional[int] = None
    before: Optional[int] = None
    bar: Optional[str] = None
    limit: Optional[int] = None


@dataclass
class GetMarkPriceCandles(Request):
    """Recent candlesticks of the mark price."""

    METHOD = Method.GET
    PATH = "/market/mark-price-candles"
    AUTH = False

    inst_id: str
    after: Optional[int] = None
    before: Optional[int] = None
    bar: Optional[str] = None
    limit: Optional[int] = None


@dataclass
class GetHistoryMarkPriceCandles(Request):
    """Candlesticks of the mark price from recent years."""

    METHOD = Method.GET
    PATH = "/market/history-mark-price-candles"
    AUTH = False

    inst_id: str
    after: Optional[int] = None
    before: Optional[int] = None
    bar: Optional[str] = None
    limit: Optional[int] = None


@dataclass
class GetIndexComponents(Request):
    """Component information of an index."""

    METHOD = Method.GET
    PATH = "/market/index-components"
    AUTH = False

    index: str


@dataclass(frozen=True)
class IndexComponentItem:
    """One exchange pair contributing to an index."""

    exch: str
    symbol: str
    sym_px: float
    wgt: float
    cnv_px: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IndexComponentItem":
        """Build an item from its decoded JSON object."""
        return cls(
            exch=_text(data, "exch"),
            symbol=_text(data, "symbol"),
            sym_px=_number(data, "symPx"),
            wgt=_number(data, "wgt"),
            cnv_px=_number(data, "cnvPx"),
        )


@dataclass(frozen=True)
class IndexComponent:
    """An index with its latest price and components."""

    index: str
    last: float
    ts: int
    components: list[IndexComponentItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IndexComponent":
        """Build an index component record from its decoded JSON object."""
        components = _field(data, "components")
        if not isinstance(components, list):
            raise ValueError("invalid type for `components`: expected a list")
        return cls(
            index=_text(data, "index"),
            last=_number(data, "last"),
            ts=_uint(data, "ts"),
            components=[IndexComponentItem.from_dict(item) for item in components],
        )


@dataclass(frozen=True)
class Instruments(WebsocketChannel):
    """Instrument updates for one instrument type."""

    CHANNEL = "instruments"

    inst_type: InstType

    def _channel_args(self) -> dict[str, Any]:
        return {"instType": _wire(self.inst_type)}


@dataclass(frozen=True)
class MarkPrices(WebsocketChannel):
    """Mark price updates for one instrument."""

    CHANNEL = "mark-price"

    inst_id: str

    def _channel_args(self) -> dict[str, Any]:
        return {"instId": self.inst_id}


@dataclass(frozen=True)
class IndexTickers(WebsocketChannel):
    """Index ticker updates for one index."""

    CHANNEL = "index-tickers"

    inst_id: str

    def _channel_args(self) -> dict[str, Any]:
        return {"instId": self.inst_id}