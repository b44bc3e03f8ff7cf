# okxkit

Building blocks for working with the OKX v5 API: request models, response
models, websocket channel messages, push-message parsing and a local order
book. It has no dependencies outside the standard library.

## Modules

- `okxkit.request`: `Method` and the `Request` base class. Every request
  class carries `METHOD`, `PATH` and `AUTH` class attributes, and
  `params()` returns its parameters with camelCase keys. Fields left as
  `None` are omitted (a few endpoints keep some of them as `null`), and
  enum members are sent as their string values.
- `okxkit.public_data`: public endpoints such as `GetInstruments`,
  `GetFundingRate`, `GetMarkPrice`, `GetPositionTiers`, `GetInsuranceFund`,
  `GetIndexCandles` and `GetIndexComponents`; the `IndexComponent` and
  `IndexComponentItem` response models; the `Instruments`, `MarkPrices`
  and `IndexTickers` channels.
- `okxkit.market_data`: `GetIndexPrice`, `GetInterestRates`, `GetTrades`,
  `GetHistoryCandles`, and the `InterestRates`, `BaseInterestRate`,
  `InterestRateTier`, `TradeHistory` and `Ticker` response models.
- `okxkit.fill`: `GetFillHistory` and the `FillHistory` response model.
- `okxkit.orders`: `PlaceOrder`, `CancelOrder`, `CancelMultipleOrders`
  (whose orders travel in `body()`), `GetOrderDetails`, `GetOrderList`,
  the `PlaceOrderResponse`, `CancelOrderData` and `OrderDetail` response
  models, and the `OrdersChannel` and `OrderOp` channels.
- `okxkit.trading_account`: `GetTradingBalances`, `GetPositions`,
  `GetPositionsHistory`, `GetInterestAccrued`, `GetInterestLimits`, and the
  private `AccountChannel`, `PositionsChannel` and
  `BalanceAndPositionChannel`.
- `okxkit.channels`: the `WebsocketChannel` base with `subscribe_message()`,
  `unsubscribe_message()` and `is_private()`, and the `Books`, `Books5`,
  `BboTbt`, `BooksL2Tbt` and `Tickers` channels.
- `okxkit.ws_parse`: `try_parse()`, `try_parse_books()`,
  `channel_pattern()`, `WsResponse` and `ApiError`.
- `okxkit.book`: `OrderBook`, `BookManager`, `BookUpdate`, `BookLevel`,
  `BookUpdateType`, `Side` and `SequenceResetError`.
- `okxkit.fields`: helpers for the wire format's string-encoded fields:
  `parse_opt_str`, `parse_float`, `dump_str`, `dump_str_opt`, `drop_none`
  and the `StringEnum` base.

## Examples

Building a request:

```python
from okxkit.public_data import GetFundingRateHistory

req = GetFundingRateHistory(inst_id="BTC-USD-SWAP", limit=50)
req.METHOD    # Method.GET
req.PATH      # "/public/funding-rate-history"
req.params()  # {"instId": "BTC-USD-SWAP", "limit": 50}
```

Decoding a response entry; numbers sent as strings are converted and empty
strings become `None`:

```python
from okxkit.orders import PlaceOrderResponse

PlaceOrderResponse.from_dict({"ordId": "12345", "clOrdId": "", "sCode": "0", "sMsg": ""})
# PlaceOrderResponse(ord_id='12345', cl_ord_id=None, tag=None, s_code=0, s_msg=None)
```

Response models raise `ValueError` when a required field is missing or has
the wrong type.

Subscribing to a channel and parsing what comes back:

```python
from okxkit.channels import Tickers
from okxkit.ws_parse import try_parse

message = Tickers(inst_id="BTC-USDT").subscribe_message()  # JSON text to send

response = try_parse(Tickers, incoming_text)
if response is not None:
    for ticker in response.data:   # okxkit.market_data.Ticker objects
        print(ticker.last)
```

`try_parse` returns `None` for frames that belong to another channel and for
subscribe/unsubscribe acknowledgements, raises `ApiError` when the exchange
reports an error event, and raises `ValueError` for frames it cannot
decode. Push data is turned into model objects for `Tickers`,
`OrdersChannel` and `OrderOp`; for the other channels `WsResponse.data`
holds the decoded JSON objects. `try_parse_books` handles `books` and
`bbo-tbt` frames and logs error events instead of raising.

Keeping a local order book:

```python
from okxkit.book import BookLevel, BookManager, BookUpdate, BookUpdateType

manager = BookManager()
snapshot = BookUpdate(
    bids=[BookLevel("100.1", "2")],
    asks=[BookLevel("100.2", "1")],
    seq_id=10,
    prev_seq_id=-1,
    ts=1700000000000,
)
manager.handle_book_update(snapshot, BookUpdateType.SNAPSHOT)  # True
manager.book.best_bid()  # (Decimal('100.1'), Decimal('2'))
```

The first update a `BookManager` accepts must be a snapshot; later updates
are applied only when their sequence number moves forward, and
`handle_book_update` returns whether the update was applied. A level with a
size of zero or less removes that price. A best-bid/offer update drops every
level on the wrong side of the new best price. A sequence number lower than
the update's previous one raises `SequenceResetError`.

## What it does not do

- It sends nothing. There is no HTTP client, no request signing and no
  websocket connection or login; the request objects and subscribe
  messages are meant to be handed to whatever transport you use.
- Many REST endpoints (instruments, funding rates, mark prices, balances,
  positions and others) have request models only; their responses are
  left to you to decode.
- Book push messages are not turned into `BookUpdate` objects
  automatically; build those from the decoded `data` entries.

## Running the tests

```
pip install -e ".[test]"
pytest
```