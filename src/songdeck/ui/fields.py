"""Typed access to the fields of a rendered song form."""
# Created: 2026-10-14

from typing import Any, Dict, Optional

from ..templates import (
    ARTIST_FIELD, GENRE_FIELD, LINK_FIELD, TITLE_FIELD, Markup
)


TEXT = "text"
CHOICE = "choice"

SONG_FORM_FIELDS: Dict[str, str] = {
    TITLE_FIELD: TEXT,
    ARTIST_FIELD: TEXT,
    GENRE_FIELD: CHOICE,
    LINK_FIELD: TEXT,
}


class MarkupError(ValueError):
    """Rendered markup does not provide the fields a form needs."""


class FieldReader:
    """Reads declared form fields from the currently rendered markup.

    The declared field set is checked once, when markup is bound, so a
    template that drops a field fails at render time instead of on submit.
    """

    def __init__(self, declared: Optional[Dict[str, str]] = None) -> None:
        self._declared = dict(declared or SONG_FORM_FIELDS)
        self._fields: Dict[str, Any] = {}

    @property
    def bound(self) -> bool:
        return bool(self._fields)

    def bind(self, markup: Markup) -> None:
        """Bind to the fields of freshly rendered markup.

        Raises:
            MarkupError: If a declared field is missing from the markup
        """
        missing = [name for name in self._declared if name not in markup.fields]
        if missing:
            raise MarkupError(
                f"{markup.mode.value} form is missing fields: {', '.join(missing)}"
            )
        self._fields = {name: markup.fields[name] for name in self._declared}

    def unbind(self) -> None:
        self._fields = {}

    def field(self, name: str) -> Any:
        """Return the control bound to a declared field."""
        if not self._fields:
            raise MarkupError("No song form is rendered")
        if name not in self._fields:
            raise MarkupError(f"Unknown form field: {name}")
        return self._fields[name]

    def read_text(self, name: str) -> str:
        """Read a text field, trimmed."""
        self._check_kind(name, TEXT)
        return str(self.field(name).value).strip()

    def read_choice(self, name: str) -> str:
        """Read the selected option id of a choice field."""
        self._check_kind(name, CHOICE)
        value = self.field(name).value
        return value if isinstance(value, str) else ""

    def _check_kind(self, name: str, kind: str) -> None:
        declared = self._declared.get(name)
        if declared != kind:
            raise MarkupError(f"Field {name} is declared as {declared}, not {kind}")
