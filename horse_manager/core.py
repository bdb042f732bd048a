"""
Core types for the horse manager game.

This module provides the foundational data structures and protocols:
1. Protocols: GameView for read-only game state access, Exchangeable for tradeable entities
2. Enums: Rarity, Direction, EventType, ExchangeResult
3. Exceptions: GameError and domain-specific error types
4. Catalog: named, ordered collection of items
5. Constants: table geometry, currency suffix, catalog names

Functions that accept a GameView declare their read-only intent.
Only GameContext and ExchangeEngine mutate catalogs and balances.
"""

from __future__ import annotations
from datetime import date
from enum import Enum
from typing import (
    Any, Iterator, List, Optional, Protocol, Sequence, runtime_checkable,
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from .pricing import CalendarEvent


# ============================================================================
# CONSTANTS
# ============================================================================

# Catalog names (strings, not enum, like wallet ids).
SHOP_CATALOG = "shop"
PLAYER_CATALOG = "player"

# Width used when a table has nothing to show.
DEFAULT_TABLE_WIDTH = 72

# Appended to every rendered price.
CURRENCY_SUFFIX = ",00 €"

# Width of the checkbox column of selectable tables.
SELECTION_COLUMN_WIDTH = 5

EMPTY_TABLE_MESSAGE = "Nothing to show."
NO_FIELDS_MESSAGE = "{count} item(s), no displayable fields."


# ============================================================================
# ENUMS
# ============================================================================

class Rarity(Enum):
    """
    Ordered rarity tier of an exchangeable entity.

    The integer value gives the ordering: Common < Rare < Epic < Legendary.
    """
    COMMON = 0
    RARE = 1
    EPIC = 2
    LEGENDARY = 3

    def __lt__(self, other: 'Rarity') -> bool:
        if not isinstance(other, Rarity):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: 'Rarity') -> bool:
        if not isinstance(other, Rarity):
            return NotImplemented
        return self.value <= other.value

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.label


class Direction(Enum):
    """
    Side of an exchange from the player's point of view.

    BUYING: item moves from the shop into the player's catalog.
    SELLING: item leaves the player's catalog for cash.
    """
    BUYING = "buying"
    SELLING = "selling"

    @property
    def verb(self) -> str:
        return "buy" if self is Direction.BUYING else "sell"

    @property
    def past_tense(self) -> str:
        return "bought" if self is Direction.BUYING else "sold"


class EventType(Enum):
    """Calendar condition for a single day."""
    NONE = "none"
    HOLIDAY = "holiday"


class ExchangeResult(Enum):
    """
    Outcome of an exchange attempt.

    APPLIED: Balance and catalogs were updated.
    REJECTED: Nothing changed (insufficient funds, item not in catalog).
    """
    APPLIED = "applied"
    REJECTED = "rejected"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class GameError(Exception):
    """Base exception for all game-related errors."""
    pass


class FormatError(GameError):
    """Raised when a field value is missing or cannot be formatted for display."""
    pass


class InsufficientFunds(GameError):
    """Raised when a debit would take the player's balance below zero."""
    pass


class ItemNotInCatalog(GameError):
    """Raised when an item is expected in a catalog that does not contain it."""
    pass


class CatalogNotRegistered(GameError):
    """Raised when operating on a catalog that has not been registered."""
    pass


class DialogAlreadyResolved(GameError):
    """Raised when a dialog continuation would fire a second time."""
    pass


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class Exchangeable(Protocol):
    """Capability of entities that can be bought and sold."""

    name: str
    price: int
    rarity: Rarity


@runtime_checkable
class GameView(Protocol):
    """
    Read-only interface to game state.

    Renderers and screens query catalogs, balance and calendar through this
    protocol. GameContext implements it and also provides mutation methods;
    tests use FakeGameView.
    """

    @property
    def today(self) -> date:
        """Return the current in-game date."""
        ...

    @property
    def balance(self) -> int:
        """Return the player's balance in currency units."""
        ...

    def get_items(self, catalog: str) -> List[Any]:
        """
        Return the items of a catalog, in catalog order.

        Returns a copy; mutating it does not affect the game.
        """
        ...

    def get_today_event(self) -> 'CalendarEvent':
        """Return the calendar event for today (a NONE event on ordinary days)."""
        ...


# ============================================================================
# CATALOG
# ============================================================================

class Catalog:
    """
    Named, ordered collection of items.

    Items are compared by identity, so two equal horses are still two horses.
    Membership is changed by GameContext during stocking and by ExchangeEngine.
    """

    def __init__(self, name: str, items: Optional[Sequence[Any]] = None):
        if not name or not name.strip():
            raise ValueError("Catalog name cannot be empty")
        self.name = name
        self._items: List[Any] = list(items or [])

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: Any) -> bool:
        return any(existing is item for existing in self._items)

    def items(self) -> List[Any]:
        """Return a copy of the items in catalog order."""
        return list(self._items)

    def add(self, item: Any) -> None:
        if item in self:
            raise ValueError(f"Item {getattr(item, 'name', item)!r} already in catalog {self.name}")
        self._items.append(item)

    def remove(self, item: Any) -> None:
        for i, existing in enumerate(self._items):
            if existing is item:
                del self._items[i]
                return
        raise ItemNotInCatalog(
            f"Item {getattr(item, 'name', item)!r} not in catalog {self.name}"
        )

    def __repr__(self) -> str:
        return f"Catalog({self.name!r}, {len(self._items)} items)"
