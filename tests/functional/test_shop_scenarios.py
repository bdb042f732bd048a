"""
test_shop_scenarios.py - End-to-end shop session tests

Tests complete player sessions driven through the navigation stack:
- Buying on an ordinary day and on a holiday
- Failing to afford a horse, then affording it after a sale
- Selling with the holiday markup
- Empty shop and stable rendering
- Hiring a jockey from the shop or from an agency catalog
"""

import pytest
from datetime import date

from horse_manager import (
    GameContext, GameConfig, NavigationStack, NavigationEvent, Screen, Table,
    Horse, Jockey, Rarity, Direction, DialogKind,
    SHOP_CATALOG, PLAYER_CATALOG, EMPTY_TABLE_MESSAGE, DEFAULT_TABLE_WIDTH,
    canonical_horse_price, resistance_for, as_plain_text,
)
from tests.fake_view import make_context, shop_screen, stable_screen


def generated_horse(horse_id, name, rarity, speed, age=4, energy=100):
    """Horse built the way a generator would: price and resistance derived."""
    return Horse(horse_id, name, resistance=resistance_for(speed, age), energy=energy, age=age,
                 price=canonical_horse_price(rarity, speed), speed=speed, rarity=rarity)


class TestAbbeyAce:
    """The reference purchase: a Common horse priced 600 with 1000 in the bank."""

    def test_ordinary_day(self, stack, shop_ctx, abbey_ace):
        assert stack.confirm() is NavigationEvent.DIALOG_OPENED
        assert stack.active_dialog.message(shop_ctx) == "Are you sure you want to buy Abbey Ace for 600,00 € ?"
        assert stack.confirm() is NavigationEvent.EXCHANGED
        assert stack.confirm() is NavigationEvent.DISMISSED

        assert shop_ctx.balance == 400
        assert shop_ctx.get_items(SHOP_CATALOG) == []
        assert shop_ctx.get_items(PLAYER_CATALOG) == [abbey_ace]

    def test_holiday(self, stack, holiday_ctx, abbey_ace):
        stack.confirm()
        assert stack.active_dialog.message(holiday_ctx) == "Are you sure you want to buy Abbey Ace for 450,00 € ?"
        stack.confirm()
        assert holiday_ctx.balance == 550
        assert holiday_ctx.get_items(PLAYER_CATALOG) == [abbey_ace]
        assert abbey_ace.price == 600

    def test_shop_is_empty_afterwards(self, stack):
        stack.confirm()
        stack.confirm()
        stack.confirm()
        text = as_plain_text(stack.render())
        assert EMPTY_TABLE_MESSAGE in text
        assert "Abbey Ace" not in text


class TestSession:

    def test_buy_fail_sell_buy(self):
        """Buy a cheap horse, fail on an expensive one, sell at a holiday markup, then afford it."""
        ctx = make_context(balance=1000, holidays={(12, 25): "Christmas"})
        cheap = generated_horse(1, "Abbey Ace", Rarity.COMMON, speed=8)
        star = generated_horse(2, "Northern Star", Rarity.LEGENDARY, speed=20)
        ctx.stock(SHOP_CATALOG, [cheap, star])
        nav = NavigationStack(ctx)
        shop = shop_screen()
        nav.show(shop)

        # Legendary sorts first; move down to the Common horse and buy it.
        assert nav.move_selection(1) is NavigationEvent.MOVED
        nav.confirm()
        assert nav.confirm() is NavigationEvent.EXCHANGED
        nav.confirm()
        assert ctx.balance == 400

        # Only the legendary horse is left and it is too expensive.
        nav.confirm()
        assert nav.confirm() is NavigationEvent.EXCHANGE_FAILED
        assert nav.active_dialog.kind is DialogKind.ERROR
        assert nav.active_dialog.message(ctx) == "You don't have enough money to buy Northern Star!"
        nav.cancel()
        assert ctx.balance == 400

        # Christmas: sell at 110%.
        ctx.advance_day(date(2022, 12, 25))
        nav.show(stable_screen())
        nav.confirm()
        assert nav.active_dialog.message(ctx) == "Are you sure you want to sell Abbey Ace for 660,00 € ?"
        assert nav.confirm() is NavigationEvent.EXCHANGED
        nav.confirm()
        assert ctx.balance == 1060

        # Still Christmas: the legendary costs 975 now.
        assert nav.cancel() is NavigationEvent.BACK
        assert nav.active_screen is shop
        nav.confirm()
        assert nav.confirm() is NavigationEvent.EXCHANGED
        assert ctx.balance == 85
        assert ctx.get_items(PLAYER_CATALOG) == [star]
        assert [r.order.price for r in ctx.exchange_log] == [600, 660, 975]

    def test_add_new_from_empty_stable(self, ctx):
        nav = NavigationStack(ctx)
        nav.show(stable_screen(addable=True))
        lines = [line.plain for line in nav.render()]
        assert EMPTY_TABLE_MESSAGE in lines[4]
        assert lines[7].startswith("| [X] | Add new Horse")
        assert nav.confirm() is NavigationEvent.ADD_REQUESTED

    def test_sold_row_clamps_selection(self):
        ctx = make_context(balance=5000)
        horses = [generated_horse(i, f"Horse {i}", Rarity.RARE, speed=10) for i in range(3)]
        ctx.stock(SHOP_CATALOG, horses)
        nav = NavigationStack(ctx)
        nav.show(shop_screen())
        nav.move_selection(5)
        nav.confirm()
        nav.confirm()
        nav.confirm()
        assert nav.active_screen.table.selected_position == 2
        nav.render()
        assert nav.active_screen.table.selected_position == 1


class TestJockeys:

    def test_hire_jockey(self):
        ctx = make_context(balance=1000)
        lester = Jockey(1, "Lester", skill=85, age=31, price=700, rarity=Rarity.RARE)
        ctx.stock(SHOP_CATALOG, [lester])
        nav = NavigationStack(ctx)
        nav.show(Screen("Jockeys", SHOP_CATALOG, Table("Jockeys", exclude=("id",), selectable=True),
                        Direction.BUYING, entity_type=Jockey))

        lines = [line.plain for line in nav.render()]
        assert "85%" in lines[5]
        assert "700,00 €" in lines[5]

        nav.confirm()
        assert nav.active_dialog.title == "buy jockey"
        assert nav.confirm() is NavigationEvent.EXCHANGED
        assert ctx.balance == 300
        assert ctx.get_items(PLAYER_CATALOG) == [lester]

    def test_hire_from_agency_catalog(self):
        ctx = make_context(balance=1000)
        ctx.register_catalog("agency")
        lester = Jockey(1, "Lester", skill=85, age=31, price=700, rarity=Rarity.LEGENDARY)
        ctx.stock("agency", [lester])
        nav = NavigationStack(ctx)
        nav.show(Screen("Agency", "agency", Table("Agency", exclude=("id",), selectable=True),
                        Direction.BUYING, entity_type=Jockey))

        lines = [line.plain for line in nav.render()]
        assert {len(line) for line in lines} == {len(lines[0])}

        nav.confirm()
        assert nav.confirm() is NavigationEvent.EXCHANGED
        assert ctx.get_items("agency") == []
        assert ctx.get_items(PLAYER_CATALOG) == [lester]
        assert ctx.balance == 300


class TestRendering:

    def test_player_table_width(self, ctx, abbey_ace):
        ctx.stock(PLAYER_CATALOG, [abbey_ace])
        screen = Screen("My Horses", PLAYER_CATALOG, Table("My Horses", exclude=("id", "price")),
                        entity_type=Horse)
        lines = screen.render(ctx)
        assert {len(line.plain) for line in lines} == {DEFAULT_TABLE_WIDTH + 2}

    def test_player_table_width_with_legendary(self, ctx, abbey_ace, northern_star):
        ctx.stock(PLAYER_CATALOG, [abbey_ace, northern_star])
        screen = Screen("My Horses", PLAYER_CATALOG, Table("My Horses", exclude=("id", "price")),
                        entity_type=Horse)
        lines = screen.render(ctx)
        assert "Legendary" in lines[5].plain
        assert {len(line.plain) for line in lines} == {DEFAULT_TABLE_WIDTH + 2}

    def test_stable_browse_on_holiday_shows_sale_price(self, ctx, abbey_ace):
        ctx.calendar.add_holiday(ctx.today, "Festival")
        ctx.stock(PLAYER_CATALOG, [abbey_ace])
        nav = NavigationStack(ctx)
        nav.show(Screen("My Horses", PLAYER_CATALOG, Table("My Horses", exclude=("id",)),
                        entity_type=Horse))
        assert "660,00 €" in nav.render()[5].plain

    def test_full_context_defaults(self, abbey_ace):
        ctx = GameContext(GameConfig(verbose=False))
        ctx.stock(SHOP_CATALOG, [abbey_ace])
        ctx.advance_day(date(2022, 12, 24))
        lines = shop_screen().render(ctx)
        assert "450,00 €" in lines[5].plain
