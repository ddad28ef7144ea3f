"""Main songdeck TUI application.

Shows the song list and drives the song modal for viewing, adding and
editing songs.
"""
# Created: 2026-10-16

import logging
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import Button, Footer, Header, Label, ListItem, ListView, Static

from .catalog import SongCatalog, default_catalog
from .config.settings import Settings
from .models import ModalMode, Song, SongInput
from .ui.alert_modal import AlertModal
from .ui.confirmation_modal import ConfirmationModal
from .ui.modal_controller import ModalController
from .ui.widgets import ModalButton, ModalDialog, ModalOverlay, dispatch_press


logger = logging.getLogger(__name__)


class SongItem(ListItem):
    """List entry for a single song."""

    def __init__(self, song: Song, genre_name: Optional[str] = None) -> None:
        genre = f"  [{genre_name}]" if genre_name else ""
        super().__init__(Label(f"{song}{genre}", markup=False))
        self.song = song


class SongCatalogApp(App):
    """Song catalog browser."""

    CSS = """
    Screen {
        layers: base overlay;
    }

    #toolbar {
        height: 3;
        padding: 0 1;
    }

    #song-count {
        width: 1fr;
        content-align: right middle;
        color: $text-muted;
    }

    #song-list {
        height: 1fr;
        border: solid $primary;
    }
    """

    TITLE = "songdeck"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("a", "add_song", "Add song"),
        Binding("escape", "close_modal", "Close", show=False),
    ]

    def __init__(self,
                 catalog: Optional[SongCatalog] = None,
                 settings: Optional[Settings] = None):
        """Initialize the application.

        Args:
            catalog: Songs to browse, built-in sample when omitted
            settings: Loaded settings, defaults when omitted
        """
        super().__init__()

        self.catalog = catalog or default_catalog()
        self.settings = settings or Settings()
        self.sub_title = self.settings.ui.title

        self.add_song_button = ModalButton("Add song", variant="primary", id="add-song-btn")
        self.modal_close = ModalButton("✕", id="modal-close")
        self.modal_dialog = ModalDialog(id="modal-dialog")
        self.modal_overlay = ModalOverlay(id="modal")

        self.song_modal = ModalController(
            self.modal_overlay,
            self.modal_dialog,
            self.modal_close,
            self.add_song_button,
            alert=self.show_alert,
            accumulate_all_errors=self.settings.validation.accumulate_all_errors,
            genre_lookup=self.catalog.genre_name,
        )
        self.song_modal.register_close_handler(self.focus_song_list)
        self.song_modal.register_add_handler(self.show_add_form)
        self.song_modal.register_submit_handler(self.save_song)

    def compose(self) -> ComposeResult:
        """Create the application layout."""
        yield Header()

        with Container(id="main-container"):
            with Horizontal(id="toolbar"):
                yield self.add_song_button
                yield Static("", id="song-count")
            yield ListView(id="song-list")

        with self.modal_overlay:
            yield self.modal_close
            yield self.modal_dialog

        yield Footer()

    def on_mount(self) -> None:
        self.refresh_song_list()
        self.focus_song_list()

    def refresh_song_list(self) -> None:
        """Rebuild the song list from the catalog."""
        song_list = self.query_one("#song-list", ListView)
        song_list.clear()
        song_list.extend(
            SongItem(song, self.catalog.genre_name(song.genre_id))
            for song in self.catalog.songs()
        )
        self.query_one("#song-count", Static).update(f"{len(self.catalog)} songs")

    def focus_song_list(self) -> None:
        self.query_one("#song-list", ListView).focus()

    def show_song(self, song: Song) -> None:
        """Open the read-only view of a song."""
        self.song_modal.render(ModalMode.DETAIL, song)
        self.song_modal.register_edit_handler(song, self.show_edit_form)
        self.call_after_refresh(self.modal_dialog.focus_first_field)

    def show_add_form(self) -> None:
        """Open an empty song form."""
        self.song_modal.render(ModalMode.ADD)
        self.song_modal.set_select_options(self.catalog.genres())
        self.call_after_refresh(self.modal_dialog.focus_first_field)

    def show_edit_form(self, song: Song) -> None:
        """Open the song form prefilled with ``song``."""
        self.song_modal.render(ModalMode.EDIT, song)
        self.song_modal.set_select_options(self.catalog.genres(), song.genre_id)
        self.call_after_refresh(self.modal_dialog.focus_first_field)

    def save_song(self, data: SongInput) -> None:
        """Store a submitted song and refresh the list."""
        try:
            song = self.catalog.save(data)
        except KeyError as e:
            logger.error(f"Error saving song: {e}")
            self.notify(f"Could not save song: {e}", severity="error")
            return

        verb = "Added" if data.is_new else "Updated"
        self.notify(f"{verb} song: {song.title}", timeout=self.settings.ui.notify_timeout)
        self.refresh_song_list()

    def show_alert(self, message: str) -> None:
        self.push_screen(AlertModal(message))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Open the detail view of the selected song."""
        if isinstance(event.item, SongItem):
            song = self.catalog.get_song(event.item.song.id) or event.item.song
            self.show_song(song)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Route presses of the toolbar's add button."""
        dispatch_press(event)

    def action_add_song(self) -> None:
        """Start adding a song unless the modal is already showing."""
        if self.song_modal.is_open:
            return
        self.add_song_button.press()

    def action_close_modal(self) -> None:
        if self.song_modal.is_open:
            self.song_modal.close()
            self.focus_song_list()

    async def action_quit(self) -> None:
        """Quit, asking first when ``ui.confirm_quit`` is set."""
        if not self.settings.ui.confirm_quit:
            self.exit()
            return

        def handle_confirmation(confirmed: Optional[bool]) -> None:
            if confirmed:
                self.exit()

        self.push_screen(
            ConfirmationModal(
                title="Quit songdeck",
                message="Quit and discard any unsaved song changes?",
                confirm_text="Quit",
            ),
            handle_confirmation,
        )
