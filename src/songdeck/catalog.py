"""In-memory song catalog.

Holds the songs and genres the application browses. Catalogs are seeded
from a YAML file or from built-in sample data and live only in memory.
"""
# Created: 2026-10-15

import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .models import Genre, Song, SongInput


logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when a catalog file cannot be loaded."""


class SongCatalog:
    """Songs and genres keyed by id, in insertion order."""

    def __init__(self, songs: Optional[List[Song]] = None, genres: Optional[List[Genre]] = None):
        self._songs: Dict[str, Song] = {song.id: song for song in songs or []}
        self._genres: Dict[str, Genre] = {genre.id: genre for genre in genres or []}

    def songs(self) -> List[Song]:
        return list(self._songs.values())

    def genres(self) -> List[Genre]:
        return list(self._genres.values())

    def get_song(self, song_id: str) -> Optional[Song]:
        return self._songs.get(song_id)

    def get_genre(self, genre_id: str) -> Optional[Genre]:
        return self._genres.get(genre_id)

    def genre_name(self, genre_id: str) -> Optional[str]:
        """Display name for a genre id, None if unknown."""
        genre = self.get_genre(genre_id)
        return genre.name if genre else None

    def add_song(self, data: SongInput) -> Song:
        """Store a new song under a freshly generated id."""
        song = data.to_song()
        song.id = self._new_id()
        self._songs[song.id] = song
        logger.info(f"Added song {song.id}: {song}")
        return song

    def update_song(self, data: SongInput) -> Song:
        """Replace an existing song.

        Raises:
            KeyError: If no song has the given id
        """
        if data.id not in self._songs:
            raise KeyError(f"Unknown song: {data.id}")
        song = data.to_song()
        self._songs[song.id] = song
        logger.info(f"Updated song {song.id}: {song}")
        return song

    def save(self, data: SongInput) -> Song:
        """Add new songs and update existing ones."""
        if data.is_new:
            return self.add_song(data)
        return self.update_song(data)

    def _new_id(self) -> str:
        while True:
            song_id = uuid.uuid4().hex[:12]
            if song_id not in self._songs:
                return song_id

    def __len__(self) -> int:
        return len(self._songs)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SongCatalog':
        """Create a catalog from a mapping with ``genres`` and ``songs`` lists."""
        genres = [Genre.from_dict(item) for item in data.get('genres') or []]
        songs = [Song.from_dict(item) for item in data.get('songs') or []]
        return cls(songs=songs, genres=genres)


def load_catalog(path: Union[str, Path]) -> SongCatalog:
    """Load a catalog from a YAML file.

    Args:
        path: YAML document with ``genres`` and ``songs`` lists

    Returns:
        SongCatalog instance

    Raises:
        CatalogError: If the file is missing or malformed
    """
    path = Path(path)
    try:
        with open(path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in catalog {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(f"Catalog {path} must be a mapping with 'genres' and 'songs'")

    try:
        catalog = SongCatalog.from_dict(data)
    except (KeyError, TypeError, AttributeError) as e:
        raise CatalogError(f"Malformed entry in catalog {path}: {e}") from e

    logger.debug(f"Loaded {len(catalog)} songs and {len(catalog.genres())} genres from {path}")
    return catalog


def default_catalog() -> SongCatalog:
    """Small built-in catalog used when no file is given."""
    return SongCatalog.from_dict({
        'genres': [
            {'id': 'g1', 'name': 'Rock'},
            {'id': 'g2', 'name': 'Jazz'},
            {'id': 'g3', 'name': 'Electronic'},
        ],
        'songs': [
            {
                'id': 's1',
                'title': 'Paranoid Android',
                'artist': 'Radiohead',
                'link': 'https://www.youtube.com/watch?v=fHiGbolFFGw',
                'genre_id': 'g1',
            },
            {
                'id': 's2',
                'title': 'So What',
                'artist': 'Miles Davis',
                'link': 'https://www.youtube.com/watch?v=zqNTltOGh5c',
                'genre_id': 'g2',
            },
            {
                'id': 's3',
                'title': 'Windowlicker',
                'artist': 'Aphex Twin',
                'link': 'https://www.youtube.com/watch?v=5ZT3gTu4Sjw',
                'genre_id': 'g3',
            },
        ],
    })
