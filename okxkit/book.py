"""Local order book and the manager that applies sequenced book updates."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union

from okxkit.fields import StringEnum

Number = Union[Decimal, str, int, float]

_DEPTH_SHOWN = 8


class Side(StringEnum):
    """Order side."""

    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class BookLevel:
    """One price level as it arrives on the wire."""

    price: str
    size: str


@dataclass
class BookUpdate:
    """A book message: snapshot, incremental diff or best bid/offer."""

    bids: list[BookLevel] = field(default_factory=list)
    asks: list[BookLevel] = field(default_factory=list)
    seq_id: Optional[int] = None
    prev_seq_id: Optional[int] = None
    ts: Optional[int] = None


class BookUpdateType(Enum):
    """How a book update should be applied."""

    BBO = "bbo"
    DIFF = "diff"
    SNAPSHOT = "snapshot"


class SequenceResetError(RuntimeError):
    """Raised when the exchange resets its sequence numbers."""


def _decimal(value: Number) -> Decimal:
    if isinstance(value, bool):
        raise TypeError("a boolean is not a valid decimal")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(repr(value))
    else:
        try:
            result = Decimal(value)
        except (InvalidOperation, TypeError):
            raise ValueError(f"invalid decimal {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"invalid decimal {value!r}")
    return result


@dataclass(repr=False)
class OrderBook:
    """Price levels keyed by price, bids and asks kept apart."""

    bids: dict[Decimal, Decimal] = field(default_factory=dict)
    asks: dict[Decimal, Decimal] = field(default_factory=dict)

    def handle_level(self, price: Number, size: Number, side: Side, bbo: bool = False) -> None:
        """Set, or with a non-positive size remove, one level.

        When ``bbo`` is set the level is the best on its side, so every level
        behind it on the wrong side of the price is dropped.
        """
        price = _decimal(price)
        size = _decimal(size)
        side = Side(side)
        levels = self.bids if side is Side.BUY else self.asks
        if size <= 0:
            levels.pop(price, None)
        else:
            levels[price] = size
        if bbo:
            if side is Side.BUY:
                self.bids = {p: s for p, s in self.bids.items() if p <= price}
            else:
                self.asks = {p: s for p, s in self.asks.items() if p >= price}

    def best_bid(self) -> Optional[tuple[Decimal, Decimal]]:
        """Highest bid as ``(price, size)``, or ``None`` when there are no bids."""
        if not self.bids:
            return None
        price = max(self.bids)
        return price, self.bids[price]

    def best_ask(self) -> Optional[tuple[Decimal, Decimal]]:
        """Lowest ask as ``(price, size)``, or ``None`` when there are no asks."""
        if not self.asks:
            return None
        price = min(self.asks)
        return price, self.asks[price]

    def crossed(self) -> bool:
        """True when the best bid is above the best ask."""
        bid, ask = self.best_bid(), self.best_ask()
        if bid is None or ask is None:
            return False
        return bid[0] > ask[0]

    def __repr__(self) -> str:
        asks = [f"({p},{self.asks[p]})" for p in sorted(self.asks)[:_DEPTH_SHOWN]]
        bids = [
            f"({p},{self.bids[p]})"
            for p in sorted(self.bids, reverse=True)[:_DEPTH_SHOWN]
        ]
        return f"{list(reversed(asks))!r} asks / \nbids {bids!r}\n"


def _only_level(levels: list[BookLevel]) -> BookLevel:
    if len(levels) != 1:
        raise ValueError("not an bbo")
    return levels[0]


@dataclass
class BookManager:
    """Keeps an order book in step with the exchange's sequence numbers."""

    book: OrderBook = field(default_factory=OrderBook)
    last_seq: Optional[int] = None
    last_exch_ts: Optional[int] = None

    def handle_book_update(self, update: BookUpdate, update_type: BookUpdateType) -> bool:
        """Apply ``update`` if it is due; return whether it was applied.

        The first update applied must be a snapshot. Updates whose sequence
        number is not beyond the last one applied are dropped.
        """
        seq_id = update.seq_id
        if seq_id is None:
            raise ValueError("no seq id")
        if update.prev_seq_id is None:
            raise ValueError("no prev seq")
        if seq_id < update.prev_seq_id:
            raise SequenceResetError(
                f"sequence reset: seq {seq_id} below previous {update.prev_seq_id}"
            )

        if self.last_seq is None:
            should_update = update_type is BookUpdateType.SNAPSHOT
        else:
            should_update = seq_id > self.last_seq
        if not should_update:
            return False

        if update.ts is None:
            raise ValueError("no ts")

        if update_type is BookUpdateType.BBO:
            bid = _only_level(update.bids)
            ask = _only_level(update.asks)
            self.book.handle_level(bid.price, bid.size, Side.BUY, True)
            self.book.handle_level(ask.price, ask.size, Side.SELL, True)
        else:
            for bid in update.bids:
                self.book.handle_level(bid.price, bid.size, Side.BUY, False)
            for ask in update.asks:
                self.book.handle_level(ask.price, ask.size, Side.SELL, False)

        self.last_seq = seq_id
        self.last_exch_ts = update.ts
        assert not self.book.crossed(), "crossed book"
        return True