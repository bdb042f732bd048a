"""
conftest.py - Shared pytest fixtures for horse_manager tests

Provides common fixtures used across unit and functional tests:
- Entities (horses of each rarity, a jockey)
- Game contexts (empty, stocked shop, holiday)
- Navigation stacks with shop and stable screens
"""

import pytest

from horse_manager import (
    ExchangeEngine, NavigationStack, Horse, Jockey, Rarity, SHOP_CATALOG,
)

from tests.fake_view import FakeGameView, make_context, shop_screen


# =============================================================================
# ENTITY FIXTURES
# =============================================================================

@pytest.fixture
def abbey_ace():
    """Common horse priced 600."""
    return Horse(1, "Abbey Ace", resistance=6, energy=100, age=4, price=600,
                 speed=8, rarity=Rarity.COMMON)


@pytest.fixture
def gus():
    """Epic horse priced 900."""
    return Horse(2, "Gus", resistance=10, energy=45, age=5, price=900,
                 speed=15, rarity=Rarity.EPIC)


@pytest.fixture
def northern_star():
    """Legendary horse priced 1300."""
    return Horse(3, "Northern Star", resistance=14, energy=20, age=8, price=1300,
                 speed=20, rarity=Rarity.LEGENDARY)


@pytest.fixture
def jockey():
    return Jockey(1, "Lester", skill=85, age=31, price=700, rarity=Rarity.RARE)


# =============================================================================
# GAME FIXTURES
# =============================================================================

@pytest.fixture
def ctx():
    """Empty context with balance 1000 and no holidays."""
    return make_context()


@pytest.fixture
def shop_ctx(ctx, abbey_ace):
    """Context whose shop holds Abbey Ace."""
    ctx.stock(SHOP_CATALOG, [abbey_ace])
    return ctx


@pytest.fixture
def holiday_ctx(shop_ctx):
    """Stocked context where today is a holiday."""
    shop_ctx.calendar.add_holiday(shop_ctx.today, "Festival")
    return shop_ctx


@pytest.fixture
def engine(shop_ctx):
    return ExchangeEngine(shop_ctx)


@pytest.fixture
def stack(shop_ctx):
    """Navigation stack showing the shop screen."""
    nav = NavigationStack(shop_ctx)
    nav.show(shop_screen())
    return nav


@pytest.fixture
def fake_view(abbey_ace):
    return FakeGameView(items={SHOP_CATALOG: [abbey_ace]}, balance=1000)
