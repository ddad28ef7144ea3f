"""Yes/no confirmation dialog.

Used before quitting when ``ui.confirm_quit`` is enabled.
"""
# Created: 2026-10-19

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button, Label, Static
from textual.screen import ModalScreen


class ConfirmationModal(ModalScreen[bool]):
    """Modal dialog dismissed with True on confirm and False on cancel."""

    DEFAULT_CSS = """
    ConfirmationModal {
        align: center middle;
    }

    ConfirmationModal > Container {
        width: 50;
        height: auto;
        max-height: 15;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    ConfirmationModal .modal-title {
        text-style: bold;
        color: $warning;
        margin-bottom: 1;
    }

    ConfirmationModal .button-container {
        height: 3;
        align: center middle;
        margin-top: 1;
    }

    ConfirmationModal Button {
        width: 12;
        margin: 0 1;
    }
    """

    def __init__(self,
                 title: str = "Confirm",
                 message: str = "Are you sure?",
                 confirm_text: str = "Yes",
                 cancel_text: str = "Cancel") -> None:
        """Initialize the confirmation dialog.

        Args:
            title: Heading of the dialog
            message: Question shown to the user
            confirm_text: Label of the confirm button
            cancel_text: Label of the cancel button
        """
        super().__init__()
        self.confirm_title = title
        self.message = message
        self.confirm_text = confirm_text
        self.cancel_text = cancel_text

    def compose(self) -> ComposeResult:
        with Container():
            yield Label(self.confirm_title, classes="modal-title")
            yield Static(self.message, markup=False)
            with Horizontal(classes="button-container"):
                yield Button(self.confirm_text, variant="error", id="confirm")
                yield Button(self.cancel_text, variant="default", id="cancel")

    def on_mount(self) -> None:
        """Focus the cancel button by default."""
        self.query_one("#cancel", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "confirm")

    def on_key(self, event) -> None:
        """Handle y/n shortcuts and escape."""
        if event.key == "y":
            event.stop()
            self.dismiss(True)
        elif event.key in ("n", "escape"):
            event.stop()
            self.dismiss(False)
