"""
Atomicity Conformance Tests

INVARIANT: Exchanges are all-or-nothing.

    ∀ exchange X:
        X applied  ⟹ balance and catalog membership both changed
        X rejected ⟹ neither changed

    buy succeeds ⟺ balance ≥ effective price
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from horse_manager import (
    Direction, ExchangeEngine, ExchangeResult, Rarity,
    SHOP_CATALOG, PLAYER_CATALOG, effective_price,
)
from tests.fake_view import make_context, make_horse


def snapshot(ctx):
    return (
        ctx.balance,
        [id(i) for i in ctx.get_items(SHOP_CATALOG)],
        [id(i) for i in ctx.get_items(PLAYER_CATALOG)],
        len(ctx.exchange_log),
    )


class TestAtomicityProperties:
    """Property-based atomicity tests."""

    @given(st.integers(min_value=0, max_value=5000), st.integers(min_value=0, max_value=5000),
           st.booleans())
    @settings(max_examples=100)
    def test_buy_succeeds_iff_affordable(self, balance, price, holiday):
        """
        PROPERTY: A purchase applies exactly when the balance covers today's price.
        """
        ctx = make_context(balance=balance)
        if holiday:
            ctx.calendar.add_holiday(ctx.today, "Festival")
        horse = make_horse("Lot", price=price)
        ctx.stock(SHOP_CATALOG, [horse])
        cost = effective_price(price, ctx.get_today_event().event_type, Direction.BUYING)
        before = snapshot(ctx)

        receipt = ExchangeEngine(ctx).exchange(horse, Direction.BUYING)

        if balance >= cost:
            assert receipt.result is ExchangeResult.APPLIED
            assert ctx.balance == balance - cost
            assert ctx.get_items(PLAYER_CATALOG) == [horse]
            assert ctx.get_items(SHOP_CATALOG) == []
        else:
            assert receipt.result is ExchangeResult.REJECTED
            assert snapshot(ctx) == before

    @given(st.lists(st.tuples(st.integers(min_value=0, max_value=4), st.sampled_from(list(Direction))),
                    max_size=20))
    @settings(max_examples=50)
    def test_item_always_in_at_most_one_catalog(self, actions):
        """
        PROPERTY: Any sequence of exchanges keeps every item in at most one
        catalog, and the balance equals the sum of applied cash flows.
        """
        ctx = make_context(balance=2000)
        horses = [make_horse(f"H{i}", price=300 + 100 * i, rarity=Rarity.RARE) for i in range(5)]
        ctx.stock(SHOP_CATALOG, horses)
        engine = ExchangeEngine(ctx)

        for index, direction in actions:
            engine.exchange(horses[index], direction)

        for horse in horses:
            owners = [name for name, catalog in ctx.catalogs.items() if horse in catalog]
            assert len(owners) <= 1

        flows = sum(
            -r.order.price if r.order.direction is Direction.BUYING else r.order.price
            for r in ctx.exchange_log
        )
        assert ctx.balance == 2000 + flows
        assert ctx.balance >= 0


class TestAtomicityExamples:
    """Explicit boundary examples."""

    def test_exact_balance_succeeds(self):
        ctx = make_context(balance=600)
        horse = make_horse("Abbey Ace", price=600)
        ctx.stock(SHOP_CATALOG, [horse])
        assert ExchangeEngine(ctx).exchange(horse, Direction.BUYING).succeeded
        assert ctx.balance == 0

    def test_one_unit_short_fails(self):
        ctx = make_context(balance=599)
        horse = make_horse("Abbey Ace", price=600)
        ctx.stock(SHOP_CATALOG, [horse])
        assert not ExchangeEngine(ctx).exchange(horse, Direction.BUYING).succeeded
        assert ctx.balance == 599
        assert ctx.get_items(SHOP_CATALOG) == [horse]

    def test_exact_holiday_balance_succeeds(self):
        ctx = make_context(balance=450)
        ctx.calendar.add_holiday(ctx.today, "Festival")
        horse = make_horse("Abbey Ace", price=600)
        ctx.stock(SHOP_CATALOG, [horse])
        assert ExchangeEngine(ctx).exchange(horse, Direction.BUYING).succeeded
        assert ctx.balance == 0
