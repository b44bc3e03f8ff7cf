import pytest

from okxkit.book import Side
from okxkit.market_data import (
    BaseInterestRate,
    GetHistoryCandles,
    GetIndexPrice,
    GetInterestRates,
    GetTrades,
    InterestRates,
    InterestRateTier,
    Ticker,
    TradeHistory,
)
from okxkit.request import Method


@pytest.mark.parametrize(
    "request_cls, path",
    [
        (GetIndexPrice, "/market/index-tickers"),
        (GetInterestRates, "/public/interest-rate-loan-quota"),
        (GetTrades, "/market/history-trades"),
        (GetHistoryCandles, "/market/history-candles"),
    ],
)
def test_endpoints(request_cls, path):
    assert request_cls.PATH == path
    assert request_cls.METHOD is Method.GET
    assert request_cls.AUTH is False


def test_index_price_params():
    assert GetIndexPrice().params() == {}
    assert GetIndexPrice(inst_id="BTC-USD").params() == {"instId": "BTC-USD"}


def test_interest_rates_request_has_no_params():
    assert GetInterestRates().params() == {}


def test_trades_params():
    params = GetTrades("BTC-USDT", after="10").params()
    assert params == {"instId": "BTC-USDT", "after": "10"}


def test_history_candles_params_keep_ints():
    params = GetHistoryCandles("BTC-USDT", limit=100, bar="1H").params()
    assert params == {"instId": "BTC-USDT", "bar": "1H", "limit": 100}


def test_interest_rates_from_dict():
    rates = InterestRates.from_dict(
        {
            "basic": [{"ccy": "BTC", "quota": "100", "rate": ""}],
            "vip": [{"irDiscount": "", "loanQuotaCoef": "6", "level": "VIP1"}],
            "regular": [{"loanQuotaCoef": "1.23", "level": "Lv1"}],
        }
    )
    assert rates.basic == [BaseInterestRate(asset="BTC", quota=100.0, rate=None)]
    assert rates.vip == [InterestRateTier(level="VIP1", discount=None, loan_quota_coef=6.0)]
    assert rates.regular[0].loan_quota_coef == 1.23
    assert rates.regular[0].discount is None


def test_interest_rates_missing_list():
    with pytest.raises(ValueError, match="regular"):
        InterestRates.from_dict({"basic": [], "vip": []})


def test_base_rate_missing_currency():
    with pytest.raises(ValueError, match="ccy"):
        BaseInterestRate.from_dict({"quota": "1"})


def test_trade_history_from_numbers():
    trade = TradeHistory.from_dict(
        {"instId": "BTC-USDT", "tradeId": "123", "px": 1.23, "sz": 100, "side": "sell", "ts": 1597026383085}
    )
    assert trade.px == 1.23
    assert trade.sz == 100.0
    assert trade.side is Side.SELL
    assert trade.ts == 1597026383085


def test_trade_history_rejects_string_price():
    with pytest.raises(ValueError):
        TradeHistory.from_dict(
            {"instId": "BTC-USDT", "tradeId": "1", "px": "1.23", "sz": 1, "side": "buy", "ts": 1}
        )


def test_trade_history_rejects_unknown_side():
    with pytest.raises(ValueError):
        TradeHistory.from_dict(
            {"instId": "BTC-USDT", "tradeId": "1", "px": 1.0, "sz": 1, "side": "hold", "ts": 1}
        )


def test_ticker_from_dict():
    ticker = Ticker.from_dict(
        {
            "instType": "SPOT",
            "instId": "BTC-USDT",
            "last": "1.23",
            "askPx": "",
            "bidPx": None,
            "vol24h": "100",
            "ts": "1597026383085",
        }
    )
    assert ticker.last == 1.23
    assert ticker.ask_px is None
    assert ticker.bid_px is None
    assert ticker.vol24h == 100.0
    assert ticker.high24h is None
    assert ticker.ts == 1597026383085


def test_ticker_numeric_json_values_give_none():
    ticker = Ticker.from_dict({"instType": "SPOT", "instId": "BTC-USDT", "last": 1.23, "ts": 5})
    assert ticker.last is None
    assert ticker.ts is None


def test_ticker_invalid_float_string():
    with pytest.raises(ValueError):
        Ticker.from_dict({"instType": "SPOT", "instId": "BTC-USDT", "last": "abc"})