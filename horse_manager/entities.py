"""
entities.py - Exchangeable game entities

Horse and Jockey are immutable records. Their canonical price is fixed when
the entity is created; holiday adjustments are computed at display and
exchange time (see pricing.py) and never written back.

Each type registers its display fields with the metadata registry at import
time, in the order the columns appear on screen.
"""

from __future__ import annotations
from dataclasses import dataclass

from .core import Rarity
from .metadata import FieldDescriptor, FormatKind, register_fields


# Style for secondary numeric stats.
STAT_COLOR = "bright_black"

# Price brackets: rarity -> (speed threshold, price at or below, price above)
HORSE_PRICE_BRACKETS = {
    Rarity.COMMON: (7, 500, 600),
    Rarity.RARE: (12, 700, 800),
    Rarity.EPIC: (17, 900, 1000),
    Rarity.LEGENDARY: (None, 1300, 1300),
}


def canonical_horse_price(rarity: Rarity, speed: int) -> int:
    """
    Canonical price of a horse from its rarity bracket and speed.

    Common 500/600 (split at speed 7), Rare 700/800 (12),
    Epic 900/1000 (17), Legendary 1300.
    """
    threshold, low, high = HORSE_PRICE_BRACKETS[rarity]
    if threshold is None or speed <= threshold:
        return low
    return high


def resistance_for(speed: int, age: int) -> int:
    """Resistance stat derived from speed and age."""
    return (speed + age) // 2


@dataclass(frozen=True, slots=True)
class Horse:
    """
    A horse that can be bought, sold and raced.

    Attributes:
        id: Identifier assigned by the collaborator that generated the horse
        name: Display name
        resistance: Stamina stat
        energy: Current energy, 0-100 (percent)
        age: Age in years
        price: Canonical price in currency units
        speed: Speed stat
        rarity: Rarity tier
    """
    id: int
    name: str
    resistance: int
    energy: int
    age: int
    price: int
    speed: int
    rarity: Rarity

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Horse name cannot be empty")
        if self.price < 0:
            raise ValueError(f"Horse price must be >= 0, got {self.price}")
        if not 0 <= self.energy <= 100:
            raise ValueError(f"Horse energy must be within 0-100, got {self.energy}")

    def __repr__(self) -> str:
        return f"Horse({self.name!r}, {self.rarity.label}, price={self.price})"


@dataclass(frozen=True, slots=True)
class Jockey:
    """
    A jockey that can be hired (bought) and released (sold).

    Attributes:
        id: Identifier assigned by the generator
        name: Display name
        skill: Riding skill, 0-100 (percent)
        age: Age in years
        price: Canonical price in currency units
        rarity: Rarity tier
    """
    id: int
    name: str
    skill: int
    age: int
    price: int
    rarity: Rarity

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Jockey name cannot be empty")
        if self.price < 0:
            raise ValueError(f"Jockey price must be >= 0, got {self.price}")

    def __repr__(self) -> str:
        return f"Jockey({self.name!r}, {self.rarity.label}, price={self.price})"


# ============================================================================
# DISPLAY FIELDS
# ============================================================================

HORSE_FIELDS = register_fields(Horse, (
    FieldDescriptor("id", "Id"),
    FieldDescriptor("name", "Name", padding=17),
    FieldDescriptor("rarity", "Rarity", FormatKind.RARITY_COLORED, padding=11),
    FieldDescriptor("energy", "Energy", FormatKind.ENERGY_COLORED, padding=10),
    FieldDescriptor("resistance", "Resistance", FormatKind.STATIC_COLORED, padding=13, color=STAT_COLOR),
    FieldDescriptor("speed", "Speed", FormatKind.STATIC_COLORED, padding=9, color=STAT_COLOR),
    FieldDescriptor("age", "Age", padding=7),
    FieldDescriptor("price", "Price", FormatKind.CURRENCY, padding=13),
))

JOCKEY_FIELDS = register_fields(Jockey, (
    FieldDescriptor("id", "Id"),
    FieldDescriptor("name", "Name", padding=17),
    FieldDescriptor("rarity", "Rarity", FormatKind.RARITY_COLORED, padding=11),
    FieldDescriptor("skill", "Skill", FormatKind.PERCENTAGE, padding=9),
    FieldDescriptor("age", "Age", padding=7),
    FieldDescriptor("price", "Price", FormatKind.CURRENCY, padding=13),
))
