"""
exchange.py - Buy/sell execution

An exchange is built, then executed:

1. build_order() reads the game view and fixes the price for today:
   effective_price(item.price, today's event, direction)
2. ExchangeEngine.execute() validates the order against current state and
   applies it atomically: balance and catalog membership change together or
   not at all.

Buying moves an item from a source catalog (the shop by default) to a
destination (the player by default) and debits the balance. Selling removes
an item from a source catalog (the player by default) and credits the
balance; a selling order may name a destination too.
Failures (insufficient funds, item not in catalog, stale order) are returned
as REJECTED receipts, never raised.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Optional

from .core import (
    CURRENCY_SUFFIX, PLAYER_CATALOG, SHOP_CATALOG,
    Direction, ExchangeResult, GameView,
)
from .game import GameContext
from .pricing import CalendarEvent, effective_price


@dataclass(frozen=True, slots=True)
class ExchangeOrder:
    """
    A priced exchange request - represents INTENT.

    Attributes:
        item: The entity changing hands
        direction: BUYING or SELLING
        source: Catalog the item leaves
        dest: Catalog the item enters (None when sold)
        price: Effective price for the day the order was built
        event: Calendar event the price was computed under
    """
    item: Any
    direction: Direction
    source: str
    dest: Optional[str]
    price: int
    event: CalendarEvent

    def __repr__(self) -> str:
        return (f"ExchangeOrder({self.direction.verb} {getattr(self.item, 'name', self.item)!r} "
                f"for {self.price}{CURRENCY_SUFFIX}: {self.source}→{self.dest or '-'})")


@dataclass(frozen=True, slots=True)
class ExchangeReceipt:
    """
    Outcome of executing an ExchangeOrder - represents FACT.

    Attributes:
        order: The executed order
        result: APPLIED or REJECTED
        balance_before: Player balance before execution
        balance_after: Player balance after execution (unchanged if rejected)
        reason: Why the order was rejected ("" when applied)
    """
    order: ExchangeOrder
    result: ExchangeResult
    balance_before: int
    balance_after: int
    reason: str = ""

    @property
    def succeeded(self) -> bool:
        return self.result is ExchangeResult.APPLIED

    def __repr__(self) -> str:
        if self.succeeded:
            return f"ExchangeReceipt(APPLIED {self.order!r}, balance {self.balance_before}→{self.balance_after})"
        return f"ExchangeReceipt(REJECTED {self.order!r}: {self.reason})"


def build_order(
    view: GameView,
    item: Any,
    direction: Direction,
    source: Optional[str] = None,
    dest: Optional[str] = None,
) -> ExchangeOrder:
    """
    Price an exchange for today.

    Args:
        view: Read-only game view (provides today's event)
        item: Exchangeable entity
        direction: BUYING (debits the balance) or SELLING (credits it)
        source: Catalog the item leaves (default: shop when buying,
                player when selling)
        dest: Catalog the item enters (default: player when buying,
              nowhere when selling)

    Returns:
        An ExchangeOrder ready for ExchangeEngine.execute()
    """
    event = view.get_today_event()
    price = effective_price(item.price, event.event_type, direction)
    if direction is Direction.BUYING:
        source = source or SHOP_CATALOG
        dest = dest or PLAYER_CATALOG
    else:
        source = source or PLAYER_CATALOG
    return ExchangeOrder(item, direction, source, dest, price, event)


class ExchangeEngine:
    """
    Executes exchange orders against a GameContext.

    Every order is validated before anything changes:
    - the order was priced today (a day change invalidates it)
    - the item is in the source catalog
    - when buying, the balance covers the price

    Applied orders are appended to context.exchange_log.
    """

    def __init__(self, context: GameContext, verbose: Optional[bool] = None):
        """
        Args:
            context: Game state to operate on
            verbose: Print a line per order (default: context.verbose)
        """
        self.context = context
        self.verbose = context.verbose if verbose is None else verbose

    def _validate(self, order: ExchangeOrder) -> str:
        """Return the rejection reason, or "" if the order can be applied."""
        ctx = self.context
        if order.event.day != ctx.today:
            return f"stale order priced on {order.event.day.isoformat()}, today is {ctx.today.isoformat()}"
        source = ctx.get_catalog(order.source)
        if order.dest is not None:
            ctx.get_catalog(order.dest)
        if order.item not in source:
            return f"{getattr(order.item, 'name', order.item)!r} is not in {order.source}"
        if order.direction is Direction.BUYING and ctx.balance < order.price:
            return f"insufficient funds: balance {ctx.balance} < price {order.price}"
        return ""

    def execute(self, order: ExchangeOrder) -> ExchangeReceipt:
        """
        Execute an order atomically.

        Args:
            order: ExchangeOrder from build_order()

        Returns:
            ExchangeReceipt with result APPLIED or REJECTED

        Raises:
            CatalogNotRegistered: If the order names an unknown catalog
        """
        ctx = self.context
        before = ctx.balance
        reason = self._validate(order)
        if reason:
            if self.verbose:
                print(f"✗ REJECTED: {reason}")
            return ExchangeReceipt(order, ExchangeResult.REJECTED, before, before, reason)

        ctx.get_catalog(order.source).remove(order.item)
        if order.dest is not None:
            ctx.get_catalog(order.dest).add(order.item)
        if order.direction is Direction.BUYING:
            ctx.debit(order.price)
        else:
            ctx.credit(order.price)

        receipt = ExchangeReceipt(order, ExchangeResult.APPLIED, before, ctx.balance)
        ctx.exchange_log.append(receipt)
        if self.verbose:
            print(f"✓ APPLIED: {order.direction.past_tense} "
                  f"{getattr(order.item, 'name', order.item)} for {order.price}{CURRENCY_SUFFIX} "
                  f"(balance {before} → {ctx.balance})")
        return receipt

    def exchange(
        self,
        item: Any,
        direction: Direction,
        source: Optional[str] = None,
        dest: Optional[str] = None,
    ) -> ExchangeReceipt:
        """Build and execute an order for today in one step (see build_order for catalog defaults)."""
        return self.execute(build_order(self.context, item, direction, source, dest))

    def history(self) -> List[ExchangeReceipt]:
        return list(self.context.exchange_log)
