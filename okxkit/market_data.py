"""Market data endpoints: index prices, interest rates, trades, candles, tickers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from okxkit.book import Side
from okxkit.fields import parse_float, parse_opt_str
from okxkit.request import Method, Request

_U64 = re.compile(r"\+?[0-9]+")


def _parse_u64(text: str) -> int:
    if not _U64.fullmatch(text):
        raise ValueError(f"invalid unsigned integer {text!r}")
    value = int(text)
    if value >= 2**64:
        raise ValueError(f"number too large {text!r}")
    return value


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


def _list(data: Mapping[str, Any], key: str) -> list:
    value = _field(data, key)
    if not isinstance(value, list):
        raise ValueError(f"invalid type for `{key}`: expected a list")
    return value


def _opt_float(data: Mapping[str, Any], key: str) -> Optional[float]:
    return parse_opt_str(data.get(key), parse_float)


@dataclass
class GetIndexPrice(Request):
    """Index tickers by quote currency or index."""

    METHOD = Method.GET
    PATH = "/market/index-tickers"
    AUTH = False

    quote_ccy: Optional[str] = None
    inst_id: Optional[str] = None


@dataclass
class GetInterestRates(Request):
    """Interest rates and loan quotas."""

    METHOD = Method.GET
    PATH = "/public/interest-rate-loan-quota"
    AUTH = False


@dataclass(frozen=True)
class BaseInterestRate:
    """Base interest rate and quota of one asset."""

    asset: str
    quota: Optional[float] = None
    rate: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BaseInterestRate":
        """Build a base rate from its decoded JSON object."""
        return cls(
            asset=_text(data, "ccy"),
            quota=_opt_float(data, "quota"),
            rate=_opt_float(data, "rate"),
        )


@dataclass(frozen=True)
class InterestRateTier:
    """Discount and loan quota coefficient of one user level."""

    level: str
    discount: Optional[float] = None
    loan_quota_coef: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "InterestRateTier":
        """Build a tier from its decoded JSON object."""
        return cls(
            level=_text(data, "level"),
            discount=_opt_float(data, "irDiscount"),
            loan_quota_coef=_opt_float(data, "loanQuotaCoef"),
        )


@dataclass(frozen=True)
class InterestRates:
    """Base rates with the VIP and regular tiers."""

    basic: list[BaseInterestRate] = field(default_factory=list)
    vip: list[InterestRateTier] = field(default_factory=list)
    regular: list[InterestRateTier] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "InterestRates":
        """Build the rate table from its decoded JSON object."""
        return cls(
            basic=[BaseInterestRate.from_dict(item) for item in _list(data, "basic")],
            vip=[InterestRateTier.from_dict(item) for item in _list(data, "vip")],
            regular=[InterestRateTier.from_dict(item) for item in _list(data, "regular")],
        )


@dataclass(frozen=True)
class TradeHistory:
    """One public trade."""

    inst_id: str
    trade_id: str
    px: float
    sz: float
    side: Side
    ts: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TradeHistory":
        """Build a trade from its decoded JSON object."""
        return cls(
            inst_id=_text(data, "instId"),
            trade_id=_text(data, "tradeId"),
            px=_number(data, "px"),
            sz=_number(data, "sz"),
            side=Side.parse(_text(data, "side")),
            ts=_uint(data, "ts"),
        )


@dataclass
class GetTrades(Request):
    """Recent trades of an instrument."""

    METHOD = Method.GET
    PATH = "/market/history-trades"

    inst_id: str
    type: Optional[str] = None
    after: Optional[str] = None
    before: Optional[str] = None


@dataclass
class GetHistoryCandles(Request):
    """Candlesticks of an instrument from recent years."""

    METHOD = Method.GET
    PATH = "/market/history-candles"
    AUTH = False

    inst_id: str
    after: Optional[int] = None
    before: Optional[int] = None
    bar: Optional[str] = None
    limit: Optional[int] = None


_TICKER_FLOATS = {
    "last": "last",
    "last_sz": "lastSz",
    "ask_px": "askPx",
    "ask_sz": "askSz",
    "bid_px": "bidPx",
    "bid_sz": "bidSz",
    "open24h": "open24h",
    "high24h": "high24h",
    "low24h": "low24h",
    "vol_ccy24h": "volCcy24h",
    "vol24h": "vol24h",
    "sod_utc0": "sodUtc0",
    "sod_utc8": "sodUtc8",
}


@dataclass(frozen=True)
class Ticker:
    """Latest ticker of an instrument."""

    inst_type: str
    inst_id: str
    last: Optional[float] = None
    last_sz: Optional[float] = None
    ask_px: Optional[float] = None
    ask_sz: Optional[float] = None
    bid_px: Optional[float] = None
    bid_sz: Optional[float] = None
    open24h: Optional[float] = None
    high24h: Optional[float] = None
    low24h: Optional[float] = None
    vol_ccy24h: Optional[float] = None
    vol24h: Optional[float] = None
    sod_utc0: Optional[float] = None
    sod_utc8: Optional[float] = None
    ts: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Ticker":
        """Build a ticker from its decoded JSON object."""
        floats = {name: _opt_float(data, key) for name, key in _TICKER_FLOATS.items()}
        return cls(
            inst_type=_text(data, "instType"),
            inst_id=_text(data, "instId"),
            ts=parse_opt_str(data.get("ts"), _parse_u64),
            **floats,
        )