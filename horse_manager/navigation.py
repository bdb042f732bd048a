"""
navigation.py - Screens, dialogs and the navigation stack

The navigation stack is a small state machine:

    screen (no dialog) --confirm on row--> ConfirmExchange dialog
    ConfirmExchange    --confirm-->        exchange runs, ShowMessage dialog
    ConfirmExchange    --cancel-->         screen
    ShowMessage        --confirm/cancel--> screen
    screen (no dialog) --cancel-->         previous screen

Dialog requests are plain tagged records (ConfirmExchange, ShowMessage)
captured when the dialog opens. confirm() dispatches on the request type;
nothing is stored as a callback.

Example:
    stack = NavigationStack(ctx)
    stack.show(Screen("Shop", SHOP_CATALOG, Table("Shop", selectable=True),
                      Direction.BUYING, entity_type=Horse))
    stack.confirm()   # NavigationEvent.DIALOG_OPENED
    stack.confirm()   # NavigationEvent.EXCHANGED (or EXCHANGE_FAILED)
    stack.confirm()   # NavigationEvent.DISMISSED
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Union

from rich.text import Text

from .core import (
    CURRENCY_SUFFIX, SHOP_CATALOG, Direction, DialogAlreadyResolved, EventType, GameError, GameView,
)
from .exchange import ExchangeEngine, ExchangeReceipt
from .game import GameContext
from .metadata import entity_metadata
from .pricing import effective_price
from .table import Table, align_center, align_left


# ============================================================================
# SCREENS
# ============================================================================

class Screen:
    """
    A titled view over one catalog.

    Attributes:
        title: Screen title (also used by the stack's verbose output)
        catalog: Name of the catalog whose items are listed
        table: Table configuration and selection state
        direction: BUYING or SELLING for exchange screens, None for
                   browse-only screens
        entity_type: Type whose field metadata lays out the table
                     (default: the type of the first listed item);
                     required for addable tables

    Prices follow the screen's direction. Browse-only screens price the
    shop as BUYING and every other catalog as SELLING.
    """

    def __init__(
        self,
        title: str,
        catalog: str,
        table: Table,
        direction: Optional[Direction] = None,
        entity_type: Optional[type] = None,
    ):
        self.title = title
        self.catalog = catalog
        self.table = table
        if table.addable and entity_type is None:
            raise ValueError(f"Addable screen {title!r} needs an entity_type")
        self.direction = direction
        self.entity_type = entity_type

    @property
    def pricing_direction(self) -> Direction:
        if self.direction is not None:
            return self.direction
        return Direction.BUYING if self.catalog == SHOP_CATALOG else Direction.SELLING

    def items(self, view: GameView) -> List[Any]:
        return view.get_items(self.catalog)

    def _entity_type(self, items: List[Any]) -> type:
        if self.entity_type is not None:
            return self.entity_type
        return type(items[0]) if items else object

    def render(self, view: GameView) -> List[Text]:
        items = self.items(view)
        event = view.get_today_event()
        return self.table.render(
            items,
            self._entity_type(items),
            event_type=event.event_type,
            direction=self.pricing_direction,
        )

    def __repr__(self) -> str:
        return f"Screen({self.title!r}, catalog={self.catalog!r})"


# ============================================================================
# DIALOG REQUESTS
# ============================================================================

class DialogKind(Enum):
    QUESTION = "question"
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


DIALOG_STYLES = {
    DialogKind.QUESTION: "cyan",
    DialogKind.SUCCESS: "green",
    DialogKind.ERROR: "red",
    DialogKind.INFO: "white",
}


@dataclass(frozen=True, slots=True)
class ConfirmExchange:
    """Ask the player to confirm buying or selling an item from a catalog."""
    direction: Direction
    item: Any
    source: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ShowMessage:
    """Report an outcome; dismissed by confirm or cancel."""
    text: str
    kind: DialogKind = DialogKind.INFO


DialogRequest = Union[ConfirmExchange, ShowMessage]


def result_message(receipt: ExchangeReceipt) -> ShowMessage:
    """Build the outcome message for an executed exchange."""
    order = receipt.order
    name = getattr(order.item, "name", order.item)
    if receipt.succeeded:
        return ShowMessage(f"{name} was successfully {order.direction.past_tense}!", DialogKind.SUCCESS)
    if receipt.reason.startswith("insufficient funds"):
        return ShowMessage(f"You don't have enough money to {order.direction.verb} {name}!", DialogKind.ERROR)
    return ShowMessage(f"Could not {order.direction.verb} {name}: {receipt.reason}", DialogKind.ERROR)


# ============================================================================
# DIALOG
# ============================================================================

DIALOG_MIN_WIDTH = 40
CONFIRM_BUTTONS = "[Enter] Confirm  [Esc] Cancel"
MESSAGE_BUTTONS = "[Enter] OK"


class Dialog:
    """
    A modal overlay on top of a screen.

    A dialog resolves exactly once: the stack calls resolve() on confirm or
    cancel and then drops it.
    """

    def __init__(self, request: DialogRequest, screen: Optional[Screen]):
        self.request = request
        self.screen = screen
        self._resolved = False

    @property
    def resolved(self) -> bool:
        return self._resolved

    @property
    def kind(self) -> DialogKind:
        if isinstance(self.request, ConfirmExchange):
            return DialogKind.QUESTION
        return self.request.kind

    @property
    def title(self) -> str:
        request = self.request
        if isinstance(request, ConfirmExchange):
            type_name = entity_metadata(type(request.item)).display_name.lower()
            return f"{request.direction.verb} {type_name}"
        return request.kind.value.title()

    def message(self, view: GameView) -> str:
        request = self.request
        if isinstance(request, ConfirmExchange):
            event = view.get_today_event()
            price = effective_price(request.item.price, event.event_type, request.direction)
            return (f"Are you sure you want to {request.direction.verb} "
                    f"{request.item.name} for {price}{CURRENCY_SUFFIX} ?")
        return request.text

    def resolve(self) -> DialogRequest:
        """
        Mark the dialog resolved and hand back its request.

        Raises:
            DialogAlreadyResolved: On a second call
        """
        if self._resolved:
            raise DialogAlreadyResolved(f"Dialog {self.title!r} was already resolved")
        self._resolved = True
        return self.request

    def render(self, view: GameView) -> List[Text]:
        message = self.message(view)
        buttons = CONFIRM_BUTTONS if self.kind is DialogKind.QUESTION else MESSAGE_BUTTONS
        width = max(DIALOG_MIN_WIDTH, len(message) + 2, len(self.title) + 2, len(buttons) + 2)
        style = DIALOG_STYLES[self.kind]

        rule = Text("+" + "-" * width + "+")
        title = Text("|")
        title.append(align_center(self.title, width), style=f"bold {style}")
        title.append("|")
        blank = Text("|" + " " * width + "|")
        return [
            rule,
            title,
            rule,
            blank,
            Text("|" + align_left(" " + message, width) + "|"),
            blank,
            Text("|" + align_center(buttons, width) + "|"),
            rule,
        ]

    def __repr__(self) -> str:
        state = "resolved" if self._resolved else "open"
        return f"Dialog({self.title!r}, {state})"


# ============================================================================
# NAVIGATION STACK
# ============================================================================

class NavigationEvent(Enum):
    """What a navigation input did."""
    NONE = "none"
    MOVED = "moved"
    DIALOG_OPENED = "dialog_opened"
    EXCHANGED = "exchanged"
    EXCHANGE_FAILED = "exchange_failed"
    DISMISSED = "dismissed"
    CANCELLED = "cancelled"
    ADD_REQUESTED = "add_requested"
    BACK = "back"


class NavigationStack:
    """
    Ordered screens (last is active) plus at most one dialog.

    Input operations (move_selection, confirm, cancel) return a
    NavigationEvent describing what happened; none of them raise on
    ordinary gameplay such as an unaffordable purchase.
    """

    def __init__(self, context: GameContext, engine: Optional[ExchangeEngine] = None):
        self.context = context
        self.engine = engine or ExchangeEngine(context)
        self.verbose = context.verbose
        self.screens: List[Screen] = []
        self._dialog: Optional[Dialog] = None
        self.last_receipt: Optional[ExchangeReceipt] = None

    @property
    def active_screen(self) -> Optional[Screen]:
        return self.screens[-1] if self.screens else None

    @property
    def active_dialog(self) -> Optional[Dialog]:
        return self._dialog

    # ------------------------------------------------------------------------
    # Screens
    # ------------------------------------------------------------------------

    def show(self, screen: Screen) -> List[Text]:
        """
        Make screen active and render.

        A screen already on the stack becomes active again and every screen
        above it is dropped; a new screen is pushed.

        Raises:
            GameError: If a dialog is open
        """
        if self._dialog is not None:
            raise GameError(f"Cannot show {screen.title!r} while dialog {self._dialog.title!r} is open")
        for i, existing in enumerate(self.screens):
            if existing is screen:
                del self.screens[i + 1:]
                break
        else:
            self.screens.append(screen)
        if self.verbose:
            print(f"→ {screen.title}")
        return self.render()

    def back(self) -> Optional[Screen]:
        """Pop the active screen. The root screen is never popped."""
        if len(self.screens) > 1:
            self.screens.pop()
            if self.verbose:
                print(f"← {self.screens[-1].title}")
        return self.active_screen

    # ------------------------------------------------------------------------
    # Dialogs
    # ------------------------------------------------------------------------

    def open_dialog(self, request: DialogRequest) -> Dialog:
        """
        Open a dialog over the active screen.

        Raises:
            GameError: If a dialog is already open
        """
        if self._dialog is not None:
            raise GameError(f"Dialog {self._dialog.title!r} is already open")
        self._dialog = Dialog(request, self.active_screen)
        return self._dialog

    def _close_dialog(self) -> DialogRequest:
        dialog = self._dialog
        self._dialog = None
        return dialog.resolve()

    # ------------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------------

    def move_selection(self, delta: int) -> NavigationEvent:
        """Move the active table's selection. Ignored while a dialog is open."""
        screen = self.active_screen
        if self._dialog is not None or screen is None:
            return NavigationEvent.NONE
        count = len(screen.items(self.context))
        before = screen.table.clamp_selection(count)
        after = screen.table.move_selection(delta, count)
        return NavigationEvent.MOVED if after != before else NavigationEvent.NONE

    def confirm(self) -> NavigationEvent:
        """
        Confirm the dialog, or the selected row when no dialog is open.

        Returns:
            DIALOG_OPENED: a row was confirmed on an exchange screen
            ADD_REQUESTED: the "add new" row was confirmed
            EXCHANGED / EXCHANGE_FAILED: a ConfirmExchange dialog ran the
                exchange; a ShowMessage with the outcome is now open
            DISMISSED: a ShowMessage dialog was closed
            NONE: nothing to confirm
        """
        if self._dialog is not None:
            request = self._close_dialog()
            if isinstance(request, ConfirmExchange):
                receipt = self.engine.exchange(request.item, request.direction, request.source)
                self.last_receipt = receipt
                self.open_dialog(result_message(receipt))
                return NavigationEvent.EXCHANGED if receipt.succeeded else NavigationEvent.EXCHANGE_FAILED
            return NavigationEvent.DISMISSED

        screen = self.active_screen
        if screen is None:
            return NavigationEvent.NONE
        items = screen.items(self.context)
        index = screen.table.clamp_selection(len(items))
        if index is None:
            return NavigationEvent.NONE
        if screen.table.is_add_row(index, len(items)):
            return NavigationEvent.ADD_REQUESTED
        if screen.direction is None:
            return NavigationEvent.NONE
        item = screen.table.selected_item(items)
        self.open_dialog(ConfirmExchange(screen.direction, item, screen.catalog))
        return NavigationEvent.DIALOG_OPENED

    def cancel(self) -> NavigationEvent:
        """Discard the open dialog, or go back one screen when there is none."""
        if self._dialog is not None:
            request = self._close_dialog()
            if isinstance(request, ShowMessage):
                return NavigationEvent.DISMISSED
            return NavigationEvent.CANCELLED
        if len(self.screens) > 1:
            self.back()
            return NavigationEvent.BACK
        return NavigationEvent.NONE

    # ------------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------------

    def status_line(self) -> Text:
        """Balance, date and today's holiday, if any."""
        event = self.context.get_today_event()
        line = Text(f"Balance: {self.context.balance}{CURRENCY_SUFFIX}   {self.context.today.isoformat()}")
        if event.event_type is EventType.HOLIDAY:
            line.append(f"   {event.name}", style="bold green")
        return line

    def render(self) -> List[Text]:
        """Active screen's lines followed by the open dialog's lines."""
        screen = self.active_screen
        lines = screen.render(self.context) if screen is not None else []
        if self._dialog is not None:
            lines = lines + self._dialog.render(self.context)
        return lines

    def __repr__(self) -> str:
        path = " > ".join(s.title for s in self.screens) or "-"
        dialog = f", dialog={self._dialog.title!r}" if self._dialog else ""
        return f"NavigationStack({path}{dialog})"
