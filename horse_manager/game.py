"""
game.py - Explicit game state

GameContext is the single owner of mutable game state: catalogs, the
player's balance, the current date and the exchange log. It is passed
explicitly to every operation that needs it; there is no global game
manager.

Key responsibilities:
    - Implements the GameView protocol for read-only access by renderers
    - Registers and stocks catalogs
    - Debits and credits the player's balance
    - Tracks the in-game date (forward only) and answers today's calendar event
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .core import (
    PLAYER_CATALOG, SHOP_CATALOG,
    Catalog, CatalogNotRegistered, GameError, InsufficientFunds,
)
from .pricing import DEFAULT_HOLIDAYS, Calendar, CalendarEvent


@dataclass
class GameConfig:
    """Starting conditions for a new game."""
    starting_balance: int = 1000
    start_date: date = date(2022, 1, 3)
    holidays: Mapping[Tuple[int, int], str] = field(default_factory=lambda: dict(DEFAULT_HOLIDAYS))
    verbose: bool = True


class GameContext:
    """
    Mutable game state with a read-only view.

    Thread Safety:
        Not thread-safe. The game loop is single-threaded by construction.

    Example:
        ctx = GameContext(GameConfig(starting_balance=1000))
        ctx.stock(SHOP_CATALOG, [horse])
        ctx.get_items(SHOP_CATALOG)   # [horse]
        ctx.get_today_event()         # CalendarEvent(2022-01-03: none)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        calendar: Optional[Calendar] = None,
        test_mode: bool = False,
    ):
        """
        Create a game with empty shop and player catalogs.

        Args:
            config: Starting conditions (default: GameConfig())
            calendar: Holiday calendar (default: built from config.holidays)
            test_mode: Allow set_balance() calls (default: False)
        """
        self.config = config or GameConfig()
        self.calendar = calendar or Calendar(self.config.holidays)
        self.verbose = self.config.verbose
        self._test_mode = test_mode
        self._balance: int = self.config.starting_balance
        self._today: date = self.config.start_date
        self.catalogs: Dict[str, Catalog] = {}
        self.exchange_log: List[Any] = []

        if self._balance < 0:
            raise ValueError(f"Starting balance must be >= 0, got {self._balance}")

        self.register_catalog(SHOP_CATALOG)
        self.register_catalog(PLAYER_CATALOG)

    # ========================================================================
    # GameView PROTOCOL IMPLEMENTATION (read-only)
    # ========================================================================

    @property
    def today(self) -> date:
        return self._today

    @property
    def balance(self) -> int:
        return self._balance

    def get_items(self, catalog: str) -> List[Any]:
        return self.get_catalog(catalog).items()

    def get_today_event(self) -> CalendarEvent:
        return self.calendar.event_on(self._today)

    # ========================================================================
    # CATALOGS
    # ========================================================================

    def register_catalog(self, name: str) -> Catalog:
        """
        Register an empty catalog.

        Raises:
            ValueError: If a catalog with that name already exists
        """
        if name in self.catalogs:
            raise ValueError(f"Catalog {name} already registered")
        catalog = Catalog(name)
        self.catalogs[name] = catalog
        return catalog

    def get_catalog(self, name: str) -> Catalog:
        if name not in self.catalogs:
            raise CatalogNotRegistered(f"Catalog {name} not registered")
        return self.catalogs[name]

    def find_catalog(self, item: Any) -> Optional[str]:
        """Name of the catalog holding item, or None."""
        for name, catalog in self.catalogs.items():
            if item in catalog:
                return name
        return None

    def stock(self, catalog: str, items: List[Any]) -> None:
        """
        Place newly generated items into a catalog.

        Raises:
            GameError: If an item already belongs to a catalog
        """
        target = self.get_catalog(catalog)
        for item in items:
            owner = self.find_catalog(item)
            if owner is not None:
                raise GameError(f"{getattr(item, 'name', item)!r} already belongs to {owner}")
            target.add(item)

    # ========================================================================
    # BALANCE
    # ========================================================================

    def debit(self, amount: int) -> None:
        """
        Take amount from the player's balance.

        Raises:
            ValueError: If amount is negative
            InsufficientFunds: If the balance is lower than amount
        """
        if amount < 0:
            raise ValueError(f"Debit amount must be >= 0, got {amount}")
        if amount > self._balance:
            raise InsufficientFunds(f"Balance {self._balance} < {amount}")
        self._balance -= amount

    def credit(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Credit amount must be >= 0, got {amount}")
        self._balance += amount

    def set_balance(self, amount: int) -> None:
        """
        Overwrite the player's balance.

        Only available in test mode; gameplay changes the balance through
        exchanges.

        Raises:
            GameError: If called when test_mode is False
        """
        if not self._test_mode:
            raise GameError(
                "set_balance() is disabled outside test mode. "
                "Set test_mode=True when creating GameContext for testing."
            )
        if amount < 0:
            raise ValueError(f"Balance must be >= 0, got {amount}")
        self._balance = amount

    # ========================================================================
    # TIME
    # ========================================================================

    def advance_day(self, new_day: date) -> None:
        """
        Move the in-game date forward.

        Raises:
            ValueError: If new_day is before today
        """
        if new_day < self._today:
            raise ValueError(f"Cannot move time backwards: {new_day} < {self._today}")
        self._today = new_day

    def __repr__(self) -> str:
        catalogs = ", ".join(f"{name}={len(c)}" for name, c in self.catalogs.items())
        return f"GameContext(day={self._today.isoformat()}, balance={self._balance}, {catalogs})"
