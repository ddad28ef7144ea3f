"""Data models for songs and genres.

Defines the records shown by the catalog and the value object produced
by the song modal on submit.
"""
# Created: 2026-10-12

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class ModalMode(Enum):
    """Rendering variant presented by the song modal."""
    DETAIL = "detail"
    ADD = "add"
    EDIT = "edit"


class OverlayState(Enum):
    """Visibility of the modal overlay."""
    CLOSED = "closed"
    OPEN = "open"


# Record id sentinel meaning "no existing record"
NEW_RECORD_ID = ""


@dataclass
class Genre:
    """Represents a song genre."""
    id: str
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Genre':
        """Create a Genre from a catalog mapping."""
        return cls(id=str(data['id']), name=str(data.get('name', data['id'])))

    def __str__(self) -> str:
        return self.name


@dataclass
class Song:
    """Represents a song in the catalog."""
    id: str
    title: str
    artist: str
    link: str
    genre_id: str = ""
    last_edited: str = ""  # ISO 8601 timestamp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Song':
        """Create a Song from a catalog mapping.

        Accepts both ``genre_id``/``last_edited`` and the camelCase
        ``genreId``/``lastEdited`` keys used by exported catalogs.

        Args:
            data: Mapping with at least ``id``, ``title``, ``artist`` and ``link``

        Returns:
            Song instance
        """
        return cls(
            id=str(data['id']),
            title=str(data.get('title', '')),
            artist=str(data.get('artist', '')),
            link=str(data.get('link', '')),
            genre_id=str(data.get('genre_id', data.get('genreId', ''))),
            last_edited=str(data.get('last_edited', data.get('lastEdited', ''))),
        )

    def __str__(self) -> str:
        """String representation for display."""
        return f"{self.title} - {self.artist}"


@dataclass
class SongInput:
    """Song data collected from the add/edit form.

    An empty ``id`` marks a new song that has not been stored yet.
    """
    id: str
    title: str
    artist: str
    last_edited: str
    link: str
    genre_id: str

    @property
    def is_new(self) -> bool:
        return self.id == NEW_RECORD_ID

    def to_song(self) -> Song:
        """Convert the submitted data to a Song record."""
        return Song(
            id=self.id,
            title=self.title,
            artist=self.artist,
            link=self.link,
            genre_id=self.genre_id,
            last_edited=self.last_edited,
        )
