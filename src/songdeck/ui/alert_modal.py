"""Blocking alert dialog.

Shows a (possibly multi-line) message until the user acknowledges it.
"""
# Created: 2026-10-13

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button, Label, Static
from textual.screen import ModalScreen


class AlertModal(ModalScreen):
    """Modal alert with a single OK button."""

    DEFAULT_CSS = """
    AlertModal {
        align: center middle;
    }

    AlertModal > Container {
        width: 60;
        height: auto;
        max-height: 20;
        background: $surface;
        border: thick $warning;
        padding: 1 2;
    }

    AlertModal .modal-title {
        text-style: bold;
        color: $warning;
        margin-bottom: 1;
    }

    AlertModal .modal-message {
        margin-bottom: 1;
        color: $text;
    }

    AlertModal .button-container {
        height: 3;
        align: center middle;
    }
    """

    def __init__(self, message: str, title: str = "Invalid song") -> None:
        """Initialize the alert.

        Args:
            message: Text to display; surrounding blank lines are dropped
            title: Heading shown above the message
        """
        super().__init__()
        self.message = message
        self.alert_title = title

    def compose(self) -> ComposeResult:
        """Compose the alert UI."""
        with Container():
            yield Label(self.alert_title, classes="modal-title")
            yield Static(self.message.strip(), classes="modal-message", markup=False)
            with Horizontal(classes="button-container"):
                yield Button("OK", variant="primary", id="ok")

    def on_mount(self) -> None:
        self.query_one("#ok", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss()

    def on_key(self, event) -> None:
        if event.key in ("escape", "enter"):
            event.stop()
            self.dismiss()
