#!/usr/bin/env python3
"""
demo.py - Interactive Tutorial: A Day at the Horse Shop

This is a walkthrough of the horse_manager engine. Each step builds on the
previous one. Press Enter to advance.

WHAT YOU'LL SEE:
  1-2: Tables      - Stocking the shop, metadata-driven columns, empty stable
  3-4: Exchanges   - Buying through a dialog, a rejected purchase
  5-6: Holidays    - Discounted buying, selling at a markup
  7:   The Log     - Every applied exchange, in order

Run:
    python demo.py           # Interactive mode (press Enter for each step)
    python demo.py --quick   # Run all steps without pausing
"""

from dataclasses import dataclass
from datetime import date
import sys

from rich.console import Console

from horse_manager import (
    GameContext, GameConfig, NavigationStack, Screen, Table,
    Horse, Rarity, Direction,
    SHOP_CATALOG, PLAYER_CATALOG, CURRENCY_SUFFIX,
    canonical_horse_price, resistance_for, field_descriptors, column_width, print_lines,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class DemoConfig:
    """Configuration for the tutorial. Modify these to experiment."""
    start_date: date = date(2022, 12, 20)
    holiday: date = date(2022, 12, 25)
    starting_balance: int = 1500


CONFIG = DemoConfig()

# Global state for interactive mode
QUICK_MODE = "--quick" in sys.argv

console = Console()


def wait_for_enter():
    """Pause for user input unless in quick mode."""
    if not QUICK_MODE:
        input("\n[Press Enter to continue...]")


def step_header(number: int, title: str, objective: str):
    """Print a step header with learning objective."""
    print(f"\n{'='*70}")
    print(f"STEP {number}: {title}")
    print(f"{'='*70}")
    print(f"\nObjective: {objective}\n")


def section_header(text: str):
    """Print a section header within a step."""
    print(f"\n--- {text} ---\n")


def show(nav: NavigationStack):
    """Render the status line, the active screen and any open dialog."""
    console.print(nav.status_line())
    print_lines(nav.render(), console)


def make_horse(horse_id: int, name: str, rarity: Rarity, speed: int, age: int, energy: int) -> Horse:
    return Horse(
        id=horse_id,
        name=name,
        resistance=resistance_for(speed, age),
        energy=energy,
        age=age,
        price=canonical_horse_price(rarity, speed),
        speed=speed,
        rarity=rarity,
    )


# ============================================================================
# STEPS
# ============================================================================

def step_01_stock_the_shop():
    """Create a game and fill the shop."""
    step_header(1, "Stocking the Shop",
        "See how field metadata alone decides the table layout.")

    print("""
    Every entity type registers an ordered list of FieldDescriptors: a label,
    a padding width and a format kind (plain, percentage, currency, rarity
    colored, energy colored, static colored). The renderer never looks at a
    Horse directly; it only follows the descriptors.
    """)

    ctx = GameContext(GameConfig(
        starting_balance=CONFIG.starting_balance,
        start_date=CONFIG.start_date,
    ))
    ctx.stock(SHOP_CATALOG, [
        make_horse(1, "Abbey Ace", Rarity.COMMON, speed=8, age=4, energy=100),
        make_horse(2, "Gus", Rarity.EPIC, speed=15, age=6, energy=45),
        make_horse(3, "Northern Star", Rarity.LEGENDARY, speed=20, age=5, energy=20),
        make_horse(4, "Dusty", Rarity.RARE, speed=10, age=9, energy=75),
    ])

    section_header("Horse columns")
    for d in field_descriptors(Horse, exclude=("id",)):
        print(f"  {d.label:<12} {d.kind.value:<16} width {column_width(d)}")

    nav = NavigationStack(ctx)
    nav.show(Screen("Shop", SHOP_CATALOG, Table("Shop", exclude=("id",), selectable=True),
                    Direction.BUYING, entity_type=Horse))

    section_header("The shop (rarest first)")
    show(nav)
    return ctx, nav


def step_02_empty_stable(nav: NavigationStack):
    """Open the player's stable before owning anything."""
    step_header(2, "An Empty Stable",
        "An empty catalog is not an error; addable tables still offer a new row.")

    stable = Screen("My Horses", PLAYER_CATALOG,
                    Table("My Horses", exclude=("id",), selectable=True, addable=True),
                    Direction.SELLING, entity_type=Horse)
    nav.show(stable)
    show(nav)

    print(f"\n>>> nav.confirm()  ->  {nav.confirm()}")
    print(f">>> nav.cancel()   ->  {nav.cancel()}")
    return stable


def step_03_buy(nav: NavigationStack):
    """Buy a horse through a confirmation dialog."""
    step_header(3, "Buying Through a Dialog",
        "Confirming a row opens a question; confirming the question runs the exchange.")

    for _ in range(3):
        nav.move_selection(1)

    section_header("Selected: the Common horse")
    event = nav.confirm()
    print(f">>> nav.confirm()  ->  {event}")
    show(nav)

    section_header("Confirm the purchase")
    event = nav.confirm()
    print(f">>> nav.confirm()  ->  {event}")
    show(nav)
    print(f">>> nav.confirm()  ->  {nav.confirm()}")


def step_04_rejected(nav: NavigationStack):
    """Try to buy something the player cannot afford."""
    step_header(4, "A Rejected Purchase",
        "Insufficient funds is an outcome, not an exception. Nothing changes.")

    nav.move_selection(-10)
    nav.confirm()
    event = nav.confirm()
    print(f">>> nav.confirm()  ->  {event}")
    show(nav)
    nav.cancel()


def step_05_holiday(ctx: GameContext, nav: NavigationStack):
    """Advance to a holiday and watch prices change."""
    step_header(5, "Holiday Prices",
        "On holidays buying costs 75% and selling pays 110%; stored prices never change.")

    print(f">>> ctx.advance_day({CONFIG.holiday!r})")
    ctx.advance_day(CONFIG.holiday)
    print(f"Today's event: {ctx.get_today_event()!r}")
    show(nav)

    section_header("Buy the epic at a discount")
    nav.move_selection(-10)
    nav.move_selection(1)
    nav.confirm()
    show(nav)
    print(f">>> nav.confirm()  ->  {nav.confirm()}")
    nav.confirm()


def step_06_sell(nav: NavigationStack, stable: Screen):
    """Sell a horse at the holiday markup."""
    step_header(6, "Selling at a Markup",
        "Selling removes the horse from the stable and credits 110% of its price.")

    nav.show(stable)
    nav.move_selection(1)
    nav.confirm()
    show(nav)
    print(f">>> nav.confirm()  ->  {nav.confirm()}")
    nav.confirm()
    show(nav)


def step_07_log(ctx: GameContext):
    """Review the exchange log."""
    step_header(7, "The Exchange Log",
        "Every applied exchange is recorded with the price actually paid.")

    for receipt in ctx.exchange_log:
        order = receipt.order
        print(f"  {order.event.day.isoformat()}  {order.direction.verb:<4} "
              f"{order.item.name:<15} {order.price:>6}{CURRENCY_SUFFIX}  "
              f"balance {receipt.balance_before} -> {receipt.balance_after}")
    print(f"\nFinal balance: {ctx.balance}{CURRENCY_SUFFIX}")


def main():
    """Run the complete tutorial."""
    print("=" * 70)
    print("       HORSE MANAGER - SHOP TUTORIAL")
    print("=" * 70)

    if QUICK_MODE:
        print("Running in QUICK mode (no pauses)")
    else:
        print("Running in INTERACTIVE mode (press Enter to advance)")

    wait_for_enter()

    ctx, nav = step_01_stock_the_shop()
    wait_for_enter()

    stable = step_02_empty_stable(nav)
    wait_for_enter()

    step_03_buy(nav)
    wait_for_enter()

    step_04_rejected(nav)
    wait_for_enter()

    step_05_holiday(ctx, nav)
    wait_for_enter()

    step_06_sell(nav, stable)
    wait_for_enter()

    step_07_log(ctx)


if __name__ == "__main__":
    main()
