"""
pricing.py - Calendar events and effective prices

Provides the pricing rule applied on top of an item's canonical price:

- effective_price(): pure function (price, event type, direction) -> int
- CalendarEvent: the condition of a single day (NONE or HOLIDAY)
- Calendar: recurring and one-off holidays, queried by date

The canonical price stored on an item is never modified. Every displayed or
charged price is derived from it here.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_FLOOR
from typing import Dict, Mapping, Optional, Tuple

from .core import Direction, EventType


# ============================================================================
# PRICING CONSTANTS
# ============================================================================

# Holiday purchases cost 75% of the canonical price (25% discount).
HOLIDAY_DISCOUNT_RATE = Decimal("0.75")

# Holiday sales pay 110% of the canonical price.
HOLIDAY_MARKUP_RATE = Decimal("1.10")

# Recurring holidays as (month, day) -> name.
DEFAULT_HOLIDAYS: Mapping[Tuple[int, int], str] = {
    (1, 1): "New Year's Day",
    (2, 14): "Valentine's Day",
    (5, 1): "Labour Day",
    (10, 31): "Halloween",
    (12, 24): "Christmas Eve",
    (12, 25): "Christmas",
    (12, 31): "New Year's Eve",
}


# ============================================================================
# EFFECTIVE PRICE
# ============================================================================

def _apply_rate(price: int, rate: Decimal) -> int:
    return int((Decimal(price) * rate).to_integral_value(rounding=ROUND_FLOOR))


def effective_price(canonical_price: int, event_type: EventType, direction: Direction) -> int:
    """
    Price actually charged or paid for an item today.

    HOLIDAY + BUYING:  floor(price * 0.75)
    HOLIDAY + SELLING: floor(price * HOLIDAY_MARKUP_RATE)
    otherwise:         price

    Args:
        canonical_price: The item's stored price (currency units)
        event_type: Today's calendar condition
        direction: BUYING from the shop or SELLING to it

    Returns:
        Non-negative integer price
    """
    price = max(int(canonical_price), 0)
    if event_type is EventType.HOLIDAY:
        if direction is Direction.BUYING:
            return _apply_rate(price, HOLIDAY_DISCOUNT_RATE)
        return _apply_rate(price, HOLIDAY_MARKUP_RATE)
    return price


def is_price_adjusted(canonical_price: int, event_type: EventType, direction: Direction) -> bool:
    """True if today's effective price differs from the canonical price."""
    return effective_price(canonical_price, event_type, direction) != canonical_price


# ============================================================================
# CALENDAR
# ============================================================================

@dataclass(frozen=True, slots=True)
class CalendarEvent:
    """
    The calendar condition of one day.

    Attributes:
        day: Date the event applies to
        event_type: NONE on ordinary days, HOLIDAY otherwise
        name: Holiday name ("" for ordinary days)
    """
    day: date
    event_type: EventType = EventType.NONE
    name: str = ""

    @property
    def is_holiday(self) -> bool:
        return self.event_type is EventType.HOLIDAY

    @classmethod
    def none(cls, day: date) -> 'CalendarEvent':
        return cls(day=day)

    def __repr__(self) -> str:
        if self.is_holiday:
            return f"CalendarEvent({self.day.isoformat()}: {self.name or 'holiday'})"
        return f"CalendarEvent({self.day.isoformat()}: none)"


class Calendar:
    """
    Holiday calendar.

    Recurring holidays repeat every year on the same month/day. One-off
    holidays apply to a single date and take precedence over recurring ones.
    """

    def __init__(self, holidays: Optional[Mapping[Tuple[int, int], str]] = None):
        """
        Args:
            holidays: Recurring holidays as (month, day) -> name.
                      Defaults to DEFAULT_HOLIDAYS; pass {} for none.
        """
        source = DEFAULT_HOLIDAYS if holidays is None else holidays
        self.recurring: Dict[Tuple[int, int], str] = dict(source)
        self.one_off: Dict[date, str] = {}

    def add_holiday(self, day: date, name: str = "Holiday") -> None:
        """Schedule a holiday on a specific date."""
        self.one_off[day] = name

    def event_on(self, day: date) -> CalendarEvent:
        """Return the calendar event for a date (NONE event if nothing is scheduled)."""
        name = self.one_off.get(day)
        if name is None:
            name = self.recurring.get((day.month, day.day))
        if name is None:
            return CalendarEvent.none(day)
        return CalendarEvent(day=day, event_type=EventType.HOLIDAY, name=name)

    def __repr__(self) -> str:
        return f"Calendar({len(self.recurring)} recurring, {len(self.one_off)} one-off)"
