"""
metadata.py - Display metadata for entity types

Every entity type that can appear in a table has a constant, ordered tuple of
FieldDescriptor objects describing how each field is labelled, padded and
styled. Descriptors are registered once per type and never mutated; the
table renderer reads them instead of inspecting entity attributes.

Usage:
    register_fields(Horse, (
        FieldDescriptor("name", "Name", padding=17),
        FieldDescriptor("price", "Price", FormatKind.CURRENCY, padding=13),
    ))

    descriptors = field_descriptors(Horse, exclude=("price",))
"""

from __future__ import annotations
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .core import FormatError


class FormatKind(Enum):
    """How a field value is turned into a table cell."""
    PLAIN = "plain"
    PERCENTAGE = "percentage"
    CURRENCY = "currency"
    RARITY_COLORED = "rarity_colored"
    ENERGY_COLORED = "energy_colored"
    STATIC_COLORED = "static_colored"


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """
    Declarative description of one displayable field.

    Attributes:
        name: Attribute (or mapping key) read from each item.
        label: Column header text.
        kind: Formatting policy for the cell.
        padding: Fixed column width; 0 derives the width from the label.
        color: Rich style for STATIC_COLORED cells.
    """
    name: str
    label: str
    kind: FormatKind = FormatKind.PLAIN
    padding: int = 0
    color: Optional[str] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("FieldDescriptor name cannot be empty")
        if not self.label:
            raise ValueError("FieldDescriptor label cannot be empty")
        if self.padding < 0:
            raise ValueError(f"FieldDescriptor padding must be >= 0, got {self.padding}")
        if self.kind is FormatKind.STATIC_COLORED and not self.color:
            raise ValueError(f"STATIC_COLORED field {self.name} needs a color")

    @property
    def width(self) -> int:
        return column_width(self)


@dataclass(frozen=True, slots=True)
class EntityMetadata:
    """Registered display metadata for one entity type."""
    entity_type: type
    display_name: str
    fields: Tuple[FieldDescriptor, ...]


# entity type -> metadata, filled only by register_fields()
_REGISTRY: Dict[type, EntityMetadata] = {}

# metadata derived for unregistered types on first lookup
_DERIVED: Dict[type, EntityMetadata] = {}


def column_width(descriptor: FieldDescriptor) -> int:
    """
    Width of a column, derived only from header metadata.

    The label is rendered with one space on each side, so the minimum is
    len(label) + 2. A positive padding widens the column but never shrinks it.
    """
    label_width = len(descriptor.label) + 2
    if descriptor.padding > 0:
        return max(descriptor.padding, label_width)
    return label_width


def register_fields(
    entity_type: type,
    descriptors: Iterable[FieldDescriptor],
    display_name: Optional[str] = None,
) -> EntityMetadata:
    """
    Register the display fields of an entity type.

    Args:
        entity_type: The class whose instances will be rendered
        descriptors: Fields in display order
        display_name: Name used in "Add new <name>" (default: class name)

    Returns:
        The registered EntityMetadata

    Raises:
        ValueError: If the type is already registered or field names repeat
    """
    if entity_type in _REGISTRY:
        raise ValueError(f"Entity type {entity_type.__name__} already registered")
    descriptors = tuple(descriptors)
    names = [d.name for d in descriptors]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate field names for {entity_type.__name__}: {names}")
    metadata = EntityMetadata(
        entity_type=entity_type,
        display_name=display_name or entity_type.__name__,
        fields=descriptors,
    )
    _REGISTRY[entity_type] = metadata
    _DERIVED.pop(entity_type, None)
    return metadata


def _derive_metadata(entity_type: type) -> EntityMetadata:
    """Plain, zero-padding descriptors for a type nobody registered."""
    derived: Tuple[FieldDescriptor, ...] = ()
    if is_dataclass(entity_type):
        derived = tuple(
            FieldDescriptor(f.name, f.name.replace("_", " ").title())
            for f in fields(entity_type)
            if not f.name.startswith("_")
        )
    return EntityMetadata(entity_type, entity_type.__name__, derived)


def entity_metadata(entity_type: type) -> EntityMetadata:
    """
    Return the metadata for an entity type.

    Unregistered types get derived metadata, computed once and cached apart
    from the registry, so the type can still be registered later.
    Never fails.
    """
    metadata = _REGISTRY.get(entity_type)
    if metadata is None:
        metadata = _DERIVED.get(entity_type)
    if metadata is None:
        metadata = _derive_metadata(entity_type)
        _DERIVED[entity_type] = metadata
    return metadata


def field_descriptors(
    entity_type: type,
    exclude: Iterable[str] = (),
) -> Tuple[FieldDescriptor, ...]:
    """
    Ordered field descriptors of a type, minus excluded field names.

    Args:
        entity_type: Entity class
        exclude: Field names to leave out (unknown names are ignored)

    Returns:
        Tuple of descriptors in declaration order
    """
    excluded = frozenset(exclude)
    return tuple(
        d for d in entity_metadata(entity_type).fields
        if d.name not in excluded
    )


def field_value(item: Any, descriptor: FieldDescriptor) -> Any:
    """
    Read a descriptor's value from an item.

    Items may be objects (attribute access) or mappings (key access), so rows
    loaded from storage render the same way as entity instances.

    Raises:
        FormatError: If the value is missing or None
    """
    if isinstance(item, Mapping):
        value = item.get(descriptor.name)
    else:
        value = getattr(item, descriptor.name, None)
    if value is None:
        raise FormatError(f"{type(item).__name__} has no value for field {descriptor.name!r}")
    return value
