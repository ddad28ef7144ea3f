"""Widgets backing the song modal.

Provides the overlay, the dialog surface and the controls the modal
controller wires listeners onto.
"""
# Created: 2026-10-13

from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Tuple, TYPE_CHECKING

from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.widget import Widget
from textual.widgets import Button, Input, Select, Static

from ..models import Genre, NEW_RECORD_ID

if TYPE_CHECKING:
    from ..templates import Markup


class Listenable:
    """Mixin adding listener registration to a widget.

    Listeners are plain callables keyed by event name. They live exactly
    as long as the widget they are attached to.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._event_listeners: Dict[str, List[Callable]] = defaultdict(list)

    def add_listener(self, event: str, callback: Callable) -> None:
        """Attach a callback for an event."""
        self._event_listeners[event].append(callback)

    def remove_listener(self, event: str, callback: Callable) -> None:
        """Detach a previously attached callback."""
        listeners = self._event_listeners.get(event, [])
        if callback in listeners:
            listeners.remove(callback)

    def listener_count(self, event: str) -> int:
        return len(self._event_listeners.get(event, []))

    def fire(self, event: str, *args) -> None:
        """Invoke every callback attached for an event."""
        for callback in list(self._event_listeners.get(event, [])):
            callback(*args)


class ModalButton(Listenable, Button):
    """Button whose presses are handed to its ``click`` listeners.

    The button itself only posts ``Button.Pressed``; the enclosing
    ModalOverlay, or the app for controls outside it, calls
    ``dispatch_press`` to fire the listeners.
    """


def dispatch_press(event: Button.Pressed) -> bool:
    """Fire the ``click`` listeners of a pressed ModalButton.

    Returns:
        True if the press belonged to a ModalButton and was consumed
    """
    if not isinstance(event.button, ModalButton):
        return False
    event.stop()
    event.button.fire("click")
    return True


class ModalOverlay(Container):
    """Overlay layer hosting the modal dialog, shown with the ``open`` class."""

    DEFAULT_CSS = """
    ModalOverlay {
        layer: overlay;
        width: 100%;
        height: 100%;
        align: center middle;
        display: none;
        background: $background 60%;
    }

    ModalOverlay.open {
        display: block;
    }

    ModalOverlay > #modal-close {
        dock: top;
        width: 5;
        min-width: 5;
        margin: 1 2;
    }
    """

    @property
    def is_open(self) -> bool:
        return self.has_class("open")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Route presses of the close button and dialog controls."""
        dispatch_press(event)


class ModalDialog(Listenable, Vertical):
    """Dialog surface whose content is replaced on every render.

    ``record_id`` tags the song being edited; an empty string marks a new
    song. Pressing Enter in any input fires ``submit``.
    """

    DEFAULT_CSS = """
    ModalDialog {
        width: 64;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    ModalDialog .modal-heading {
        text-align: center;
        text-style: bold;
        color: $primary;
        margin-bottom: 1;
    }

    ModalDialog .song-field {
        margin-bottom: 1;
    }

    ModalDialog Input {
        margin-bottom: 1;
    }

    ModalDialog .modal-buttons {
        height: 3;
        align: center middle;
        margin-top: 1;
    }

    ModalDialog Button {
        margin: 0 1;
    }
    """

    def __init__(self, *children: Widget, **kwargs) -> None:
        super().__init__(*children, **kwargs)
        self.record_id = NEW_RECORD_ID
        self.content_markup: Optional["Markup"] = None

    def compose(self) -> ComposeResult:
        if self.content_markup is not None:
            yield from self.content_markup.widgets

    def replace_content(self, markup: "Markup") -> None:
        """Replace all children with freshly rendered markup."""
        self.content_markup = markup
        if self.is_mounted:
            self.remove_children()
            self.mount(*markup.widgets)

    def focus_first_field(self) -> None:
        """Focus the first input, or the first button for read-only content."""
        for widget_type in (Input, Button):
            widgets = self.query(widget_type)
            if widgets:
                widgets.first().focus()
                return

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Treat Enter in a form field as a form submission."""
        event.stop()
        self.fire("submit")


class GenreSelect(Widget):
    """Genre selection control.

    Options and the chosen genre are kept on the widget itself so they can
    be replaced before the control is mounted. Without an explicit choice
    the first option is selected.
    """

    DEFAULT_CSS = """
    GenreSelect {
        height: auto;
        margin-bottom: 1;
    }

    GenreSelect .genre-empty {
        color: $text-muted;
    }
    """

    def __init__(self, genres: Iterable[Genre] = (), value: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self.options: List[Genre] = list(genres)
        self._value = value

    @property
    def value(self) -> str:
        """Id of the selected genre, or an empty string without options."""
        if any(genre.id == self._value for genre in self.options):
            return self._value
        return self.options[0].id if self.options else ""

    def option_states(self) -> List[Tuple[Genre, bool]]:
        """Return each option paired with whether it is selected."""
        selected = self.value
        return [(genre, genre.id == selected) for genre in self.options]

    def replace_options(self, genres: Iterable[Genre], selected_id: Optional[str] = None) -> None:
        """Replace every option and mark ``selected_id`` as chosen."""
        self.options = list(genres)
        self._value = selected_id or ""
        if self.is_mounted:
            self.refresh(recompose=True)

    def compose(self) -> ComposeResult:
        if not self.options:
            yield Static("No genres available", classes="genre-empty")
            return

        yield Select(
            [(genre.name, genre.id) for genre in self.options],
            value=self.value,
            allow_blank=False,
        )

    def on_select_changed(self, event: Select.Changed) -> None:
        """Track the user's choice."""
        event.stop()
        if isinstance(event.value, str):
            self._value = event.value
