"""Trading account endpoints and the private account websocket channels."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from okxkit.channels import WebsocketChannel
from okxkit.fields import StringEnum
from okxkit.request import Method, Request

Wire = Union[str, StringEnum]

_EXTRA_PARAMS = (
    "\n"
    + " " * 24
    + "{\n"
    + " " * 26
    + '"updateInterval": "1"\n'
    + " " * 24
    + "}\n"
    + " " * 20
)


def _wire(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _encode(op: str, args: dict[str, Any]) -> str:
    message = {"op": op, "args": [args]}
    return json.dumps(message, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


@dataclass
class GetTradingBalances(Request):
    """Assets with a non-zero balance in the trading account."""

    METHOD = Method.GET
    PATH = "/account/balance"
    AUTH = True

    ccy: Optional[str] = None


@dataclass
class GetPositions(Request):
    """Open positions."""

    METHOD = Method.GET
    PATH = "/account/positions"
    AUTH = True

    inst_type: Optional[Wire] = None
    inst_id: Optional[str] = None
    pos_id: Optional[str] = None


@dataclass
class GetPositionsHistory(Request):
    """Position updates of the last three months."""

    METHOD = Method.GET
    PATH = "/account/positions-history"
    AUTH = True

    inst_type: Optional[Wire] = None
    inst_id: Optional[str] = None
    mgn_mode: Optional[Wire] = None
    type: Optional[str] = None
    pos_id: Optional[str] = None
    after: Optional[int] = None
    before: Optional[int] = None
    limit: Optional[int] = None


@dataclass
class GetInterestAccrued(Request):
    """Accrued interest records."""

    METHOD = Method.GET
    PATH = "/account/interest-accrued"
    AUTH = True

    after: Optional[str] = None
    before: Optional[str] = None
    mgn_mode: Optional[Wire] = None


@dataclass
class GetInterestLimits(Request):
    """Borrow interest and borrowing limits."""

    METHOD = Method.GET
    PATH = "/account/interest-limits"
    AUTH = True

    type: Optional[str] = None
    ccy: Optional[str] = None


@dataclass(frozen=True)
class AccountChannel(WebsocketChannel):
    """Private balance updates of the trading account."""

    CHANNEL = "account"
    AUTH = True

    def subscribe_message(self) -> str:
        """JSON text of the subscription, asking for updates every second."""
        return _encode("subscribe", {"channel": self.CHANNEL, "extraParams": _EXTRA_PARAMS})


@dataclass(frozen=True)
class PositionsChannel(WebsocketChannel):
    """Private position updates."""

    CHANNEL = "positions"
    AUTH = True

    inst_type: Wire
    inst_family: Optional[str] = None
    inst_id: Optional[str] = None

    def subscribe_message(self) -> str:
        """JSON text of the subscription; unset filters are sent as null."""
        return _encode(
            "subscribe",
            {
                "channel": self.CHANNEL,
                "instType": _wire(self.inst_type),
                "instId": self.inst_id,
                "instFamily": self.inst_family,
            },
        )


@dataclass(frozen=True)
class BalanceAndPositionChannel(WebsocketChannel):
    """Private combined balance and position updates."""

    CHANNEL = "balance_and_position"
    AUTH = True