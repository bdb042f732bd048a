"""
horse_manager - Horse trading game engine

Metadata-driven text tables, holiday pricing, buy/sell exchanges and a
screen/dialog navigation stack for a terminal horse trading game.

Usage:
    from horse_manager import (
        GameContext, GameConfig, Horse, Rarity, Direction,
        ExchangeEngine, NavigationStack, Screen, Table,
        SHOP_CATALOG, print_lines,
    )

    ctx = GameContext(GameConfig(starting_balance=1000))
    ctx.stock(SHOP_CATALOG, [
        Horse(1, "Abbey Ace", resistance=6, energy=100, age=4, price=600, speed=8,
              rarity=Rarity.COMMON),
    ])

    # Direct exchange
    engine = ExchangeEngine(ctx)
    receipt = engine.exchange(ctx.get_items(SHOP_CATALOG)[0], Direction.BUYING)

    # Or through the navigation stack
    stack = NavigationStack(ctx, engine)
    shop = Screen("Shop", SHOP_CATALOG, Table("Shop", exclude=("id",), selectable=True),
                  Direction.BUYING, entity_type=Horse)
    print_lines(stack.show(shop))
"""

# Core types
from .core import (
    GameView,
    Exchangeable,
    Catalog,
    Rarity,
    Direction,
    EventType,
    ExchangeResult,
    GameError,
    FormatError,
    InsufficientFunds,
    ItemNotInCatalog,
    CatalogNotRegistered,
    DialogAlreadyResolved,
    SHOP_CATALOG,
    PLAYER_CATALOG,
    DEFAULT_TABLE_WIDTH,
    CURRENCY_SUFFIX,
    SELECTION_COLUMN_WIDTH,
    EMPTY_TABLE_MESSAGE,
    NO_FIELDS_MESSAGE,
)

# Field metadata
from .metadata import (
    FormatKind,
    FieldDescriptor,
    EntityMetadata,
    register_fields,
    entity_metadata,
    field_descriptors,
    field_value,
    column_width,
)

# Entities
from .entities import (
    Horse,
    Jockey,
    canonical_horse_price,
    resistance_for,
    HORSE_FIELDS,
    JOCKEY_FIELDS,
)

# Pricing and calendar
from .pricing import (
    effective_price,
    is_price_adjusted,
    CalendarEvent,
    Calendar,
    DEFAULT_HOLIDAYS,
    HOLIDAY_DISCOUNT_RATE,
    HOLIDAY_MARKUP_RATE,
)

# Tables
from .table import (
    Table,
    render_table,
    format_cell,
    energy_style,
    as_plain_text,
    print_lines,
    RARITY_STYLES,
    ADJUSTED_PRICE_STYLE,
    ENERGY_LOW_THRESHOLD,
    ENERGY_HIGH_THRESHOLD,
)

# Game state
from .game import GameContext, GameConfig

# Exchanges
from .exchange import ExchangeEngine, ExchangeOrder, ExchangeReceipt, build_order

# Navigation
from .navigation import (
    Screen,
    Dialog,
    DialogKind,
    ConfirmExchange,
    ShowMessage,
    NavigationEvent,
    NavigationStack,
    result_message,
)

__all__ = [
    # Core
    'GameView', 'Exchangeable', 'Catalog',
    'Rarity', 'Direction', 'EventType', 'ExchangeResult',
    'GameError', 'FormatError', 'InsufficientFunds', 'ItemNotInCatalog',
    'CatalogNotRegistered', 'DialogAlreadyResolved',
    'SHOP_CATALOG', 'PLAYER_CATALOG', 'DEFAULT_TABLE_WIDTH', 'CURRENCY_SUFFIX',
    'SELECTION_COLUMN_WIDTH', 'EMPTY_TABLE_MESSAGE', 'NO_FIELDS_MESSAGE',
    # Metadata
    'FormatKind', 'FieldDescriptor', 'EntityMetadata',
    'register_fields', 'entity_metadata', 'field_descriptors', 'field_value', 'column_width',
    # Entities
    'Horse', 'Jockey', 'canonical_horse_price', 'resistance_for',
    'HORSE_FIELDS', 'JOCKEY_FIELDS',
    # Pricing
    'effective_price', 'is_price_adjusted', 'CalendarEvent', 'Calendar',
    'DEFAULT_HOLIDAYS', 'HOLIDAY_DISCOUNT_RATE', 'HOLIDAY_MARKUP_RATE',
    # Tables
    'Table', 'render_table', 'format_cell', 'energy_style', 'as_plain_text', 'print_lines',
    'RARITY_STYLES', 'ADJUSTED_PRICE_STYLE', 'ENERGY_LOW_THRESHOLD', 'ENERGY_HIGH_THRESHOLD',
    # Game
    'GameContext', 'GameConfig',
    # Exchange
    'ExchangeEngine', 'ExchangeOrder', 'ExchangeReceipt', 'build_order',
    # Navigation
    'Screen', 'Dialog', 'DialogKind', 'ConfirmExchange', 'ShowMessage',
    'NavigationEvent', 'NavigationStack', 'result_message',
]

__version__ = '1.0.0'
