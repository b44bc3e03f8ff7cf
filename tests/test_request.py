from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pytest

from okxkit.fields import StringEnum
from okxkit.request import Method, Request


class Kind(StringEnum):
    SPOT = "SPOT"
    SWAP = "SWAP"


@dataclass
class _Instruments(Request):
    PATH = "/public/instruments"

    inst_type: Kind
    uly: Optional[str] = None
    inst_family: Optional[str] = None
    inst_id: Optional[str] = None


@dataclass
class _MarkPrice(Request):
    PATH = "/public/mark-price"
    KEEP_NONE = frozenset({"uly", "inst_family"})

    inst_type: Optional[Kind] = None
    uly: Optional[str] = None
    inst_family: Optional[str] = None
    inst_id: Optional[str] = None


@dataclass
class _Fills(Request):
    PATH = "/trade/fills"
    AUTH = True
    AS_STR = frozenset({"begin", "limit", "inst_type"})

    inst_type: Optional[Kind] = None
    begin: Optional[int] = None
    limit: Optional[int] = None


@dataclass
class _Insurance(Request):
    PATH = "/public/insurance-fund"

    type: Optional[str] = None
    discount_lv: Optional[int] = None


class _SystemTime(Request):
    PATH = "/public/time"


def test_params_use_camel_case_and_drop_none():
    request = _Instruments(Kind.SWAP, inst_family="BTC-USD")
    assert Request.params(request) == {"instType": "SWAP", "instFamily": "BTC-USD"}


def test_enum_values_are_plain_strings():
    value = Request.params(_Instruments(Kind.SPOT))["instType"]
    assert value == "SPOT"
    assert type(value) is str


def test_keep_none_fields_are_sent_as_null():
    request = _MarkPrice(inst_id="BTC-USD-SWAP")
    assert Request.params(request) == {
        "uly": None,
        "instFamily": None,
        "instId": "BTC-USD-SWAP",
    }


def test_as_str_fields_are_rendered_as_strings():
    request = _Fills(inst_type=Kind.SWAP, begin=1597026383085, limit=100)
    assert Request.params(request) == {
        "instType": "SWAP",
        "begin": "1597026383085",
        "limit": "100",
    }


def test_as_str_fields_still_omitted_when_none():
    assert Request.params(_Fills()) == {}


def test_plain_ints_keep_their_type_and_type_field_keeps_name():
    request = _Insurance(type="bankruptcy_loss", discount_lv=3)
    assert Request.params(request) == {"type": "bankruptcy_loss", "discountLv": 3}


def test_request_without_fields_has_no_params():
    assert Request.params(_SystemTime()) == {}


def test_class_settings_and_defaults():
    assert _SystemTime.METHOD is Method.parse("GET")
    assert _SystemTime.AUTH is False
    assert _Fills.AUTH is True
    assert _Instruments.PATH == "/public/instruments"


def test_method_parses_and_renders():
    assert Method.parse("POST") is Method.POST
    assert str(Method.GET) == "GET"
    with pytest.raises(ValueError):
        Method.parse("get")