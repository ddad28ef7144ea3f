"""Shared pytest fixtures for songdeck tests.

Provides sample records, fake modal surfaces and a controller wired to them.
"""
# Created: 2026-10-17

import pytest
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional
from unittest.mock import Mock

# Import the songdeck package from the source tree
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from songdeck.models import Genre, ModalMode, Song, SongInput
from songdeck.templates import Markup
from songdeck.ui.modal_controller import ModalController
from songdeck.ui.widgets import Listenable


FIXED_NOW = datetime(2026, 10, 17, 9, 30, 15, 123000, tzinfo=timezone.utc)


class FakeSurface(Listenable):
    """Stand-in for the overlay, dialog and controls."""

    def __init__(self) -> None:
        super().__init__()
        self.classes = set()
        self.record_id = ""
        self.content_markup: Optional[Markup] = None
        self.replace_count = 0

    def add_class(self, name: str) -> None:
        self.classes.add(name)

    def remove_class(self, name: str) -> None:
        self.classes.discard(name)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def replace_content(self, markup: Markup) -> None:
        self.content_markup = markup
        self.replace_count += 1

    def click(self) -> None:
        self.fire("click")


class FakeField:
    """Text control with a ``value``."""

    def __init__(self, value: str = "") -> None:
        self.value = value


class FakeGenreSelect:
    """Selection control mirroring GenreSelect's option handling."""

    def __init__(self, value: str = "") -> None:
        self.options = []
        self._value = value

    @property
    def value(self) -> str:
        if any(genre.id == self._value for genre in self.options):
            return self._value
        return self.options[0].id if self.options else ""

    def replace_options(self, genres: Iterable[Genre], selected_id: Optional[str] = None) -> None:
        self.options = list(genres)
        self._value = selected_id or ""

    def option_states(self):
        return [(genre, genre.id == self.value) for genre in self.options]


class FakeTemplates:
    """Templates producing fake controls instead of widgets."""

    def __init__(self) -> None:
        self.detail_calls = []
        self.form_calls = []

    def get_song_detail(self, song: Song, genre_name: Optional[str] = None) -> Markup:
        self.detail_calls.append((song, genre_name))
        return Markup(mode=ModalMode.DETAIL, controls={"edit": FakeSurface()})

    def get_song_input_form(self, mode: ModalMode, song: Optional[Song] = None) -> Markup:
        self.form_calls.append((mode, song))
        return Markup(
            mode=mode,
            fields={
                "Title": FakeField(song.title if song else ""),
                "Artist": FakeField(song.artist if song else ""),
                "Genre": FakeGenreSelect(song.genre_id if song else ""),
                "Link": FakeField(song.link if song else ""),
            },
            controls={"save": FakeSurface(), "cancel": FakeSurface()},
        )


def fill_form(controller: ModalController, title: str = "", artist: str = "",
              link: str = "", genre_id: Optional[str] = None) -> None:
    """Type values into the fields of the currently rendered form."""
    fields = controller.markup.fields
    fields["Title"].value = title
    fields["Artist"].value = artist
    fields["Link"].value = link
    if genre_id is not None:
        fields["Genre"]._value = genre_id


@pytest.fixture
def sample_genres():
    """Provide two genres."""
    return [Genre(id="g1", name="Rock"), Genre(id="g2", name="Jazz")]


@pytest.fixture
def sample_song():
    """Provide a stored song."""
    return Song(
        id="s42",
        title="So What",
        artist="Miles Davis",
        link="https://www.youtube.com/watch?v=zqNTltOGh5c",
        genre_id="g2",
        last_edited="2026-01-02T03:04:05.000Z",
    )


@pytest.fixture
def valid_input():
    """Provide SongInput that passes validation."""
    return SongInput(
        id="",
        title="T",
        artist="A",
        last_edited="2026-10-17T09:30:15.123Z",
        link="http://x.com",
        genre_id="g1",
    )


@pytest.fixture
def surfaces():
    """Provide overlay, dialog, close control and add control fakes."""
    return {
        "overlay": FakeSurface(),
        "dialog": FakeSurface(),
        "close_control": FakeSurface(),
        "add_control": FakeSurface(),
    }


@pytest.fixture
def alert():
    return Mock()


@pytest.fixture
def templates():
    return FakeTemplates()


@pytest.fixture
def controller(surfaces, templates, alert):
    """Provide a ModalController wired to fakes with a fixed clock."""
    return ModalController(
        templates=templates,
        alert=alert,
        clock=lambda: FIXED_NOW,
        genre_lookup={"g1": "Rock", "g2": "Jazz"}.get,
        **surfaces
    )
