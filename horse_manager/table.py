"""
table.py - Metadata-driven text tables

render_table() turns a sequence of entities into bordered, fixed-width lines
of styled text. Column geometry comes only from FieldDescriptor metadata;
cell formatting is chosen by the descriptor's FormatKind, so no entity type
is special-cased.

Layout of a selectable, addable table with two rows on a holiday:

    +--------------------------------+
    |              Shop              |
    +--------------------------------+
    |     |    Name    |    Price    |
    +--------------------------------+
    | [X] | Abbey Ace  |  450,00 €   |
    |     |            |             |
    | [ ] |    Gus     |  675,00 €   |
    +--------------------------------+
    | [ ] | Add new Horse            |
    +--------------------------------+

Rendering is pure: it reads items and metadata and returns rich Text lines.
A Table object carries the only mutable state, the selected row.
"""

from __future__ import annotations
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.text import Text

from .core import (
    CURRENCY_SUFFIX, DEFAULT_TABLE_WIDTH, EMPTY_TABLE_MESSAGE, NO_FIELDS_MESSAGE, SELECTION_COLUMN_WIDTH,
    Direction, EventType, FormatError, Rarity,
)
from .metadata import (
    FieldDescriptor, FormatKind, column_width, entity_metadata, field_descriptors, field_value,
)
from .pricing import effective_price


# ============================================================================
# STYLES
# ============================================================================

RARITY_STYLES = {
    Rarity.COMMON: "white",
    Rarity.RARE: "blue",
    Rarity.EPIC: "magenta",
    Rarity.LEGENDARY: "yellow",
}

# Prices that differ from the canonical price (holiday discount or markup).
ADJUSTED_PRICE_STYLE = "green"

# Energy bands: [0, LOW) red, [LOW, HIGH) yellow, [HIGH, ...) green.
ENERGY_LOW_THRESHOLD = 30
ENERGY_HIGH_THRESHOLD = 70

ENERGY_STYLES = ("red", "yellow", "green")


def energy_style(energy: int) -> str:
    """Style for an energy value using the three-band policy."""
    if energy < ENERGY_LOW_THRESHOLD:
        return ENERGY_STYLES[0]
    if energy < ENERGY_HIGH_THRESHOLD:
        return ENERGY_STYLES[1]
    return ENERGY_STYLES[2]


# ============================================================================
# TEXT HELPERS
# ============================================================================

def align_center(text: str, width: int) -> str:
    """Center text in width columns; extra space goes right. Longer text is returned as is."""
    if len(text) >= width:
        return text
    left = (width - len(text)) // 2
    return " " * left + text + " " * (width - len(text) - left)


def align_left(text: str, width: int) -> str:
    return text.ljust(width)


def _as_rarity(value: Any) -> Rarity:
    if isinstance(value, Rarity):
        return value
    if isinstance(value, str):
        return Rarity[value.strip().upper()]
    return Rarity(int(value))


def format_cell(
    item: Any,
    descriptor: FieldDescriptor,
    event_type: EventType = EventType.NONE,
    direction: Direction = Direction.BUYING,
) -> Tuple[str, Optional[str]]:
    """
    Format one field of one item.

    Returns:
        (label, style) where style is None for unstyled cells

    Raises:
        FormatError: If the value is missing or has the wrong shape for its kind
    """
    value = field_value(item, descriptor)
    kind = descriptor.kind
    try:
        if kind is FormatKind.PERCENTAGE:
            return f"{value}%", None
        if kind is FormatKind.CURRENCY:
            canonical = int(value)
            price = effective_price(canonical, event_type, direction)
            style = ADJUSTED_PRICE_STYLE if price != canonical else None
            return f"{price}{CURRENCY_SUFFIX}", style
        if kind is FormatKind.RARITY_COLORED:
            rarity = _as_rarity(value)
            return rarity.label, RARITY_STYLES[rarity]
        if kind is FormatKind.ENERGY_COLORED:
            energy = int(value)
            return f"{energy}%", energy_style(energy)
        if kind is FormatKind.STATIC_COLORED:
            return str(value), descriptor.color
    except (TypeError, ValueError, KeyError) as e:
        raise FormatError(
            f"Cannot format {descriptor.name}={value!r} as {kind.value}: {e}"
        ) from e
    return str(value), None


# ============================================================================
# RENDERING
# ============================================================================

def _rule(width: int) -> Text:
    return Text("+" + "-" * width + "+")


def _gap_row(widths: Sequence[int]) -> Text:
    return Text("".join("|" + " " * w for w in widths) + "|")


def _data_row(
    item: Any,
    descriptors: Sequence[FieldDescriptor],
    selected: Optional[bool],
    event_type: EventType,
    direction: Direction,
) -> Text:
    line = Text()
    if selected is not None:
        line.append("| [X] " if selected else "| [ ] ")
    for descriptor in descriptors:
        width = column_width(descriptor)
        line.append("|")
        try:
            label, style = format_cell(item, descriptor, event_type, direction)
        except FormatError:
            line.append(" " * width)
            continue
        line.append(align_center(f" {label} ", width), style=style)
    line.append("|")
    return line


def render_table(
    items: Iterable[Any],
    descriptors: Sequence[FieldDescriptor],
    *,
    title: str,
    selection: Optional[int] = None,
    selectable: bool = False,
    addable: bool = False,
    event_type: EventType = EventType.NONE,
    direction: Direction = Direction.BUYING,
    entity_name: str = "Item",
) -> List[Text]:
    """
    Render items as a bordered text table.

    Args:
        items: Entities (or mappings) to render, in display order
        descriptors: Columns to render, in order
        title: Centered title line
        selection: Selected row index; len(items) selects the "add new" row
        selectable: Prepend a checkbox column to every row
        addable: Append an "Add new <entity_name>" footer row
        event_type: Today's calendar condition, applied to CURRENCY fields
        direction: BUYING or SELLING, applied to CURRENCY fields
        entity_name: Name shown in the footer

    Returns:
        One rich Text per output line. Plain text width is fixed by the
        descriptors; values wider than their column are not reflowed.
        Without columns the table collapses to a single message line:
        EMPTY_TABLE_MESSAGE for no items, NO_FIELDS_MESSAGE otherwise.
    """
    items = list(items)
    descriptors = tuple(descriptors)
    count = len(items)

    if items and (descriptors or selectable):
        headers = [" " * SELECTION_COLUMN_WIDTH] if selectable else []
        headers += [align_center(f" {d.label} ", column_width(d)) for d in descriptors]
    else:
        # rows but no columns: report the row count
        message = NO_FIELDS_MESSAGE.format(count=count) if items else EMPTY_TABLE_MESSAGE
        items = []
        headers = [align_center(message, DEFAULT_TABLE_WIDTH)]
    widths = [len(h) for h in headers]
    table_width = sum(widths) + len(widths) - 1

    header_row = Text("|" + "|".join(headers) + "|")
    lines = [
        _rule(table_width),
        Text("| " + align_center(title, table_width - 2) + " |"),
        _rule(table_width),
    ]
    if items:
        lines.append(header_row)
    else:
        lines.extend([_gap_row(widths), header_row, _gap_row(widths)])
    lines.append(_rule(table_width))

    for i, item in enumerate(items):
        selected = (i == selection) if selectable else None
        lines.append(_data_row(item, descriptors, selected, event_type, direction))
        if i < len(items) - 1:
            lines.append(_gap_row(widths))

    if addable:
        if items:
            lines.append(_rule(table_width))
        marker = "| [X] |" if selection == count else "| [ ] |"
        lines.append(Text(
            marker + align_left(f" Add new {entity_name} ", table_width - 6) + "|"
        ))
        lines.append(_rule(table_width))
    elif items:
        lines.append(_rule(table_width))

    return lines


def as_plain_text(lines: Iterable[Text]) -> str:
    """Join rendered lines into a single unstyled string."""
    return "\n".join(line.plain for line in lines)


def print_lines(lines: Iterable[Text], console: Optional[Console] = None) -> None:
    """Write rendered lines to a rich console without wrapping."""
    console = console or Console()
    for line in lines:
        console.print(line, soft_wrap=True)


# ============================================================================
# TABLE (selection state)
# ============================================================================

def _rarity_rank(item: Any) -> int:
    rarity = getattr(item, "rarity", None)
    return rarity.value if isinstance(rarity, Rarity) else 0


class Table:
    """
    A table configuration plus its selection state.

    Selection bounds depend on the number of items at render time:
    - addable tables select over [0, N], where N is the "add new" row
    - other tables select over [0, N-1], or nothing when empty

    The selected index is clamped into bounds whenever the item count is
    known, so a row disappearing after a sale never leaves it out of range.
    """

    def __init__(
        self,
        title: str,
        exclude: Iterable[str] = (),
        selectable: bool = False,
        addable: bool = False,
    ):
        self.title = title
        self.exclude: Tuple[str, ...] = tuple(exclude)
        self.selectable = selectable
        self.addable = addable
        self.selected_position = 0

    def selection_bounds(self, count: int) -> Optional[Tuple[int, int]]:
        """Inclusive (low, high) selection range for count items, or None."""
        if self.addable:
            return 0, count
        if count == 0:
            return None
        return 0, count - 1

    def clamp_selection(self, count: int) -> Optional[int]:
        bounds = self.selection_bounds(count)
        if bounds is None:
            return None
        low, high = bounds
        self.selected_position = min(max(self.selected_position, low), high)
        return self.selected_position

    def move_selection(self, delta: int, count: int) -> Optional[int]:
        """Move the selection by delta rows, stopping at the first and last row."""
        if self.clamp_selection(count) is None:
            return None
        self.selected_position += delta
        return self.clamp_selection(count)

    def is_add_row(self, index: Optional[int], count: int) -> bool:
        return self.addable and index == count

    def ordered(self, items: Iterable[Any]) -> List[Any]:
        """Items by rarity, highest first; ties and non-exchangeables keep their order."""
        return sorted(items, key=lambda item: -_rarity_rank(item))

    def selected_item(self, items: Iterable[Any]) -> Optional[Any]:
        """The item under the selection, or None on the add row or an empty table."""
        ordered = self.ordered(items)
        index = self.clamp_selection(len(ordered))
        if index is None or self.is_add_row(index, len(ordered)):
            return None
        return ordered[index]

    def render(
        self,
        items: Iterable[Any],
        entity_type: type,
        event_type: EventType = EventType.NONE,
        direction: Direction = Direction.BUYING,
    ) -> List[Text]:
        ordered = self.ordered(items)
        metadata = entity_metadata(entity_type)
        selection = None
        if self.selectable or self.addable:
            selection = self.clamp_selection(len(ordered))
        return render_table(
            ordered,
            field_descriptors(entity_type, self.exclude),
            title=self.title,
            selection=selection,
            selectable=self.selectable,
            addable=self.addable,
            event_type=event_type,
            direction=direction,
            entity_name=metadata.display_name,
        )

    def __repr__(self) -> str:
        flags = [f for f, on in (("selectable", self.selectable), ("addable", self.addable)) if on]
        return f"Table({self.title!r}{', ' + ', '.join(flags) if flags else ''})"
