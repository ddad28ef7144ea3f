"""Markup templates for the song modal.

Each template returns a Markup bundle: the widgets to mount into the
dialog plus the named form fields and controls inside them.
"""
# Created: 2026-10-13

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Input, Static

from .models import ModalMode, Song
from .ui.widgets import GenreSelect, ModalButton
from .validation import SongLink


# Well-known form field names
TITLE_FIELD = "Title"
ARTIST_FIELD = "Artist"
GENRE_FIELD = "Genre"
LINK_FIELD = "Link"

# Well-known control names
CANCEL_CONTROL = "cancel"
EDIT_CONTROL = "edit"
SAVE_CONTROL = "save"


@dataclass
class Markup:
    """Rendered content for the modal dialog."""
    mode: ModalMode
    widgets: List[Widget] = field(default_factory=list)
    fields: Dict[str, Widget] = field(default_factory=dict)
    controls: Dict[str, ModalButton] = field(default_factory=dict)


class MarkupTemplates:
    """Builds dialog content for each modal mode."""

    def get_song_detail(self, song: Song, genre_name: Optional[str] = None) -> Markup:
        """Read-only view of a song with an Edit control.

        Args:
            song: Song to show
            genre_name: Display name of the song's genre, if known

        Returns:
            Markup without form fields
        """
        edit_button = ModalButton("Edit", variant="primary", classes="modal-edit-btn")

        widgets: List[Widget] = [
            Static(song.title, classes="modal-heading", markup=False),
            Static(f"Artist: {song.artist}", classes="song-field", markup=False),
            Static(f"Genre: {genre_name or song.genre_id or 'Unknown'}", classes="song-field", markup=False),
            Static(f"Link: {song.link}", classes="song-field", markup=False),
        ]
        if song.last_edited:
            widgets.append(Static(f"Last edited: {song.last_edited}", classes="song-field", markup=False))
        widgets.append(Horizontal(edit_button, classes="modal-buttons"))

        return Markup(
            mode=ModalMode.DETAIL,
            widgets=widgets,
            controls={EDIT_CONTROL: edit_button},
        )

    def get_song_input_form(self, mode: ModalMode, song: Optional[Song] = None) -> Markup:
        """Form for adding a song, or editing one when ``song`` is given.

        Genre options are filled in afterwards by the controller.
        """
        heading = "Edit song" if mode is ModalMode.EDIT else "Add song"

        title_input = Input(value=song.title if song else "", placeholder="Song title", classes="field-title")
        artist_input = Input(value=song.artist if song else "", placeholder="Artist", classes="field-artist")
        genre_select = GenreSelect(value=song.genre_id if song else "", classes="field-genre")
        link_input = Input(
            value=song.link if song else "",
            placeholder="https://...",
            validators=[SongLink()],
            classes="field-link"
        )

        save_button = ModalButton("Save", variant="primary", classes="modal-save-btn")
        cancel_button = ModalButton("Cancel", variant="default", classes="modal-cancel-btn")

        widgets: List[Widget] = [
            Static(heading, classes="modal-heading"),
            Static("Title:"),
            title_input,
            Static("Artist:"),
            artist_input,
            Static("Genre:"),
            genre_select,
            Static("Link:"),
            link_input,
            Horizontal(save_button, cancel_button, classes="modal-buttons"),
        ]

        return Markup(
            mode=mode,
            widgets=widgets,
            fields={
                TITLE_FIELD: title_input,
                ARTIST_FIELD: artist_input,
                GENRE_FIELD: genre_select,
                LINK_FIELD: link_input,
            },
            controls={SAVE_CONTROL: save_button, CANCEL_CONTROL: cancel_button},
        )
