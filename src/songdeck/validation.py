"""Validation of song form data.

Produces a single human-readable error message for a submitted song,
or an empty string when the data is acceptable.
"""
# Created: 2026-10-12

import re
from typing import Callable, List
from urllib.parse import urlparse

from textual.validation import URL, ValidationResult

from .models import SongInput


WHITE_SPACE_INVALID = "Title, artist and link must not be empty or contain only whitespace."
LINK_INVALID = "Link must be a valid http(s) URL."

LINK_SCHEMES = ("http", "https")
HOST_PATTERN = re.compile(
    r'^(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}$',
    re.IGNORECASE
)


class ValidationError(Exception):
    """Raised when submitted song data fails validation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SongLink(URL):
    """URL validator restricted to http(s) links with a dotted host name."""

    def validate(self, value: str) -> ValidationResult:
        result = super().validate(value)
        if not result.is_valid:
            return result

        parsed = urlparse(value)
        try:
            hostname = parsed.hostname
            parsed.port
        except ValueError:
            return self.failure(LINK_INVALID, value)

        if parsed.scheme.lower() not in LINK_SCHEMES:
            return self.failure(LINK_INVALID, value)
        if not hostname or not HOST_PATTERN.match(hostname):
            return self.failure(LINK_INVALID, value)
        if any(char.isspace() for char in value):
            return self.failure(LINK_INVALID, value)
        return self.success()


_song_link = SongLink()


def is_valid_url(value: str) -> bool:
    """Check whether a string is a syntactically valid song link.

    Args:
        value: Candidate URL

    Returns:
        True for http/https URLs with a dotted host name
    """
    return _song_link.validate(value.strip()).is_valid


def validate_song_input(data: SongInput,
                        url_validator: Callable[[str], bool] = is_valid_url,
                        accumulate_all: bool = False) -> str:
    """Validate song data collected from the modal form.

    In the default mode, an empty title, artist or link each set the error
    to WHITE_SPACE_INVALID, so later fields overwrite earlier ones. An
    invalid (non-empty) link appends LINK_INVALID on a new line to whatever
    is already there, which leaves a leading empty line when it is the only
    problem. Existing callers rely on this exact text.

    With ``accumulate_all`` every failing field is reported on its own line.

    Args:
        data: Submitted song data, already trimmed
        url_validator: Predicate deciding whether the link is a valid URL
        accumulate_all: Report every failure instead of the last one

    Returns:
        Error message, empty when the data is valid
    """
    if accumulate_all:
        return _collect_all_errors(data, url_validator)

    errors = ""

    if not data.title.strip():
        errors = WHITE_SPACE_INVALID

    if not data.artist.strip():
        errors = WHITE_SPACE_INVALID

    if not data.link.strip():
        errors = WHITE_SPACE_INVALID
    elif not url_validator(data.link):
        errors += f"\n{LINK_INVALID}"

    return errors


def _collect_all_errors(data: SongInput, url_validator: Callable[[str], bool]) -> str:
    """Report each failing field on its own line."""
    messages: List[str] = []

    for label, value in (("Title", data.title), ("Artist", data.artist), ("Link", data.link)):
        if not value.strip():
            messages.append(f"{label}: {WHITE_SPACE_INVALID}")

    if data.link.strip() and not url_validator(data.link):
        messages.append(LINK_INVALID)

    return "\n".join(messages)


def ensure_valid(data: SongInput,
                 url_validator: Callable[[str], bool] = is_valid_url,
                 accumulate_all: bool = False) -> SongInput:
    """Return the data unchanged, or raise ValidationError."""
    message = validate_song_input(data, url_validator, accumulate_all)
    if message:
        raise ValidationError(message)
    return data
