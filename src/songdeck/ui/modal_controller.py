"""Controller for the song modal.

Owns the overlay's open/closed state, renders the dialog for the detail,
add and edit modes, and turns submitted forms into validated SongInput
values handed back to the caller.
"""
# Created: 2026-10-14

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

from ..models import Genre, ModalMode, NEW_RECORD_ID, OverlayState, Song, SongInput
from ..templates import (
    ARTIST_FIELD, CANCEL_CONTROL, EDIT_CONTROL, GENRE_FIELD, LINK_FIELD,
    SAVE_CONTROL, TITLE_FIELD, Markup, MarkupTemplates
)
from ..validation import ValidationError, ensure_valid, is_valid_url, validate_song_input
from .fields import FieldReader


logger = logging.getLogger(__name__)

OPEN_CLASS = "open"


class SurfaceError(ValueError):
    """A surface the controller needs was not provided."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """Format a moment as UTC ISO 8601 with millisecond precision."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ModalController:
    """Drives the overlay, its dialog surface and the controls around it.

    Listeners attached to controls inside the rendered markup are scoped to
    the current render and detached before the next one. The submit listener
    lives on the dialog surface itself and is attached exactly once.
    """

    def __init__(self,
                 overlay: Any,
                 dialog: Any,
                 close_control: Any,
                 add_control: Any,
                 templates: Optional[MarkupTemplates] = None,
                 url_validator: Callable[[str], bool] = is_valid_url,
                 alert: Optional[Callable[[str], None]] = None,
                 clock: Callable[[], datetime] = utc_now,
                 accumulate_all_errors: bool = False,
                 genre_lookup: Optional[Callable[[str], Optional[str]]] = None):
        """Initialize the controller.

        Args:
            overlay: Overlay shown while the modal is open
            dialog: Dialog surface receiving rendered markup
            close_control: Control that closes the modal
            add_control: Control that starts adding a song
            templates: Markup templates for each mode
            url_validator: Predicate for song links
            alert: Blocking notification used for validation errors
            clock: Source of the submission timestamp
            accumulate_all_errors: Report every validation failure
            genre_lookup: Maps a genre id to its display name

        Raises:
            SurfaceError: If any surface is missing
        """
        surfaces = {
            "overlay": overlay,
            "dialog": dialog,
            "close control": close_control,
            "add control": add_control,
        }
        missing = [name for name, surface in surfaces.items() if surface is None]
        if missing:
            raise SurfaceError(f"Song modal cannot be built without: {', '.join(missing)}")

        self._overlay = overlay
        self._dialog = dialog
        self._close_control = close_control
        self._add_control = add_control

        self._templates = templates or MarkupTemplates()
        self._url_validator = url_validator
        self._alert = alert or self._log_alert
        self._clock = clock
        self.accumulate_all_errors = accumulate_all_errors
        self._genre_lookup = genre_lookup

        self._state = OverlayState.CLOSED
        self._mode: Optional[ModalMode] = None
        self._markup: Optional[Markup] = None
        self._reader = FieldReader()
        self._render_scoped: List[Tuple[Any, str, Callable]] = []
        self._submit_handler: Optional[Callable[[SongInput], None]] = None
        self._submit_attached = False

    @property
    def state(self) -> OverlayState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is OverlayState.OPEN

    @property
    def mode(self) -> Optional[ModalMode]:
        """Mode currently shown, None while closed."""
        return self._mode

    @property
    def record_id(self) -> str:
        """Id tagged on the dialog, empty for a new song."""
        return self._dialog.record_id or NEW_RECORD_ID

    @property
    def markup(self) -> Optional[Markup]:
        return self._markup

    def open(self) -> None:
        """Show the overlay."""
        self._overlay.add_class(OPEN_CLASS)
        self._state = OverlayState.OPEN

    def close(self) -> None:
        """Hide the overlay."""
        self._overlay.remove_class(OPEN_CLASS)
        self._state = OverlayState.CLOSED
        self._mode = None

    def render(self, mode: Union[ModalMode, str], record: Optional[Song] = None) -> None:
        """Render the dialog for a mode and open the overlay.

        Rendering while already open replaces the content in place.

        Args:
            mode: DETAIL, ADD or EDIT
            record: Song to show or edit; ignored for ADD

        Raises:
            ValueError: If DETAIL is requested without a song
        """
        mode = ModalMode(mode)
        if mode is ModalMode.DETAIL and record is None:
            raise ValueError("Song detail cannot be rendered without a song")

        self._detach_render_scoped()

        if mode is ModalMode.DETAIL:
            markup = self._templates.get_song_detail(record, self._genre_name(record))
            self._reader.unbind()
        elif mode is ModalMode.ADD:
            self._dialog.record_id = NEW_RECORD_ID
            markup = self._templates.get_song_input_form(mode)
            self._reader.bind(markup)
        else:
            self._dialog.record_id = record.id if record else NEW_RECORD_ID
            markup = self._templates.get_song_input_form(mode, record)
            self._reader.bind(markup)

        self._dialog.replace_content(markup)
        self._markup = markup

        cancel = markup.controls.get(CANCEL_CONTROL)
        if cancel is not None:
            self._attach(cancel, "click", self.close)

        save = markup.controls.get(SAVE_CONTROL)
        if save is not None:
            self._attach(save, "click", self._request_submit)

        logger.debug(f"Rendered song modal in {mode.value} mode (record: {self.record_id or 'new'})")
        self._mode = mode
        self.open()

    def register_close_handler(self, handler: Optional[Callable[[], None]] = None) -> None:
        """Close the modal when the close control is activated.

        Args:
            handler: Optional callback invoked after closing
        """
        def on_close() -> None:
            self.close()
            if handler is not None:
                handler()

        self._close_control.add_listener("click", on_close)

    def register_add_handler(self, handler: Callable[[], None]) -> None:
        """Invoke ``handler`` when the add control is activated."""
        self._add_control.add_listener("click", lambda: handler())

    def register_submit_handler(self, handler: Callable[[SongInput], None]) -> None:
        """Set the callback receiving valid submitted songs.

        The dialog listener is attached once; registering again only
        replaces the callback.
        """
        self._submit_handler = handler
        if not self._submit_attached:
            self._dialog.add_listener("submit", self._on_dialog_submit)
            self._submit_attached = True

    def register_edit_handler(self, record: Song, handler: Callable[[Song], None]) -> None:
        """Invoke ``handler`` with ``record`` when the edit control is activated.

        The binding belongs to the current render and must be registered
        again after the next one.
        """
        control = self._markup.controls.get(EDIT_CONTROL) if self._markup else None
        if control is None:
            logger.debug("No edit control in the current song modal")
            return
        self._attach(control, "click", lambda: handler(record))

    def set_select_options(self, genres: Iterable[Genre], selected_id: Optional[str] = None) -> None:
        """Replace the genre options, marking ``selected_id`` as chosen."""
        self._reader.field(GENRE_FIELD).replace_options(genres, selected_id)

    def read_form(self) -> SongInput:
        """Build a SongInput from the rendered form, stamped with the current time."""
        return SongInput(
            id=self.record_id,
            title=self._reader.read_text(TITLE_FIELD),
            artist=self._reader.read_text(ARTIST_FIELD),
            last_edited=iso_timestamp(self._clock()),
            link=self._reader.read_text(LINK_FIELD),
            genre_id=self._reader.read_choice(GENRE_FIELD),
        )

    def validate(self, data: SongInput) -> str:
        """Return the validation error for ``data``, empty when valid."""
        return validate_song_input(data, self._url_validator, self.accumulate_all_errors)

    def submit(self) -> Optional[SongInput]:
        """Extract, validate and hand over the form data.

        On failure the error is shown with the alert and the modal stays
        open with its fields untouched.

        Returns:
            The submitted data, or None if it was rejected
        """
        data = self.read_form()
        try:
            ensure_valid(data, self._url_validator, self.accumulate_all_errors)
        except ValidationError as e:
            logger.debug(f"Rejected song submission: {e.message.strip()!r}")
            self._alert(e.message)
            return None

        if self._submit_handler is not None:
            self._submit_handler(data)
        self.close()
        return data

    def _on_dialog_submit(self, *args) -> None:
        self.submit()

    def _request_submit(self) -> None:
        self._dialog.fire("submit")

    def _attach(self, control: Any, event: str, callback: Callable) -> None:
        control.add_listener(event, callback)
        self._render_scoped.append((control, event, callback))

    def _detach_render_scoped(self) -> None:
        for control, event, callback in self._render_scoped:
            control.remove_listener(event, callback)
        self._render_scoped = []

    def _genre_name(self, song: Song) -> Optional[str]:
        if self._genre_lookup is None or not song.genre_id:
            return None
        return self._genre_lookup(song.genre_id)

    @staticmethod
    def _log_alert(message: str) -> None:
        logger.warning(f"Song validation failed: {message.strip()}")
