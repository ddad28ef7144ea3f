"""Tests for the song modal controller.

Exercises open/close state, mode rendering, listener scoping, form
extraction and the submit flow against fake surfaces.
"""
# Created: 2026-10-17

import pytest
from unittest.mock import Mock

from songdeck.models import ModalMode, OverlayState
from songdeck.ui.fields import MarkupError
from songdeck.ui.modal_controller import ModalController, SurfaceError, iso_timestamp
from songdeck.validation import LINK_INVALID, WHITE_SPACE_INVALID

from conftest import FIXED_NOW, fill_form


class TestConstruction:
    """Test surface injection."""

    def test_starts_closed(self, controller):
        assert controller.state is OverlayState.CLOSED
        assert controller.mode is None

    @pytest.mark.parametrize("missing, label", [
        ("overlay", "overlay"),
        ("dialog", "dialog"),
        ("close_control", "close control"),
        ("add_control", "add control"),
    ])
    def test_missing_surface_fails_fast(self, surfaces, missing, label):
        """Test that a missing surface is named in the error."""
        surfaces[missing] = None

        with pytest.raises(SurfaceError, match=label):
            ModalController(**surfaces)


class TestOpenClose:
    """Test overlay visibility."""

    def test_open_is_idempotent(self, controller, surfaces):
        controller.open()
        controller.open()

        assert controller.state is OverlayState.OPEN
        assert surfaces["overlay"].has_class("open")

    def test_close_from_closed_is_idempotent(self, controller, surfaces):
        controller.close()

        assert controller.state is OverlayState.CLOSED
        assert not surfaces["overlay"].has_class("open")

    def test_close_after_open(self, controller, surfaces):
        controller.open()
        controller.close()

        assert controller.is_open is False
        assert not surfaces["overlay"].has_class("open")


class TestRender:
    """Test mode dispatch."""

    def test_detail(self, controller, surfaces, templates, sample_song):
        """Test that detail mode shows the song without form fields."""
        controller.render(ModalMode.DETAIL, sample_song)

        assert controller.state is OverlayState.OPEN
        assert controller.mode is ModalMode.DETAIL
        assert templates.detail_calls == [(sample_song, "Jazz")]
        assert surfaces["dialog"].content_markup is controller.markup
        assert controller.markup.fields == {}

    def test_detail_without_song(self, controller):
        """Test that detail mode requires a song."""
        with pytest.raises(ValueError):
            controller.render(ModalMode.DETAIL)

        assert controller.state is OverlayState.CLOSED

    def test_add_tags_empty_record_id(self, controller, surfaces, templates, sample_song):
        """Test that add mode tags the dialog with the empty sentinel."""
        surfaces["dialog"].record_id = "stale"

        controller.render(ModalMode.ADD, sample_song)

        assert controller.record_id == ""
        assert surfaces["dialog"].record_id == ""
        assert templates.form_calls == [(ModalMode.ADD, None)]
        assert controller.mode is ModalMode.ADD

    def test_edit_tags_record_id(self, controller, surfaces, templates, sample_song):
        """Test that edit mode tags the dialog with the song id and prefills."""
        controller.render(ModalMode.EDIT, sample_song)

        assert surfaces["dialog"].record_id == "s42"
        assert templates.form_calls == [(ModalMode.EDIT, sample_song)]
        assert controller.markup.fields["Title"].value == "So What"

    def test_accepts_mode_values(self, controller):
        controller.render("add")
        assert controller.mode is ModalMode.ADD

    def test_unknown_mode(self, controller):
        with pytest.raises(ValueError):
            controller.render("delete")

    def test_render_while_open_overwrites(self, controller, surfaces, sample_song):
        """Test that a second render replaces content without closing."""
        controller.render(ModalMode.DETAIL, sample_song)
        controller.render(ModalMode.ADD)

        assert controller.state is OverlayState.OPEN
        assert controller.mode is ModalMode.ADD
        assert surfaces["dialog"].replace_count == 2

    def test_cancel_closes(self, controller):
        controller.render(ModalMode.ADD)
        controller.markup.controls["cancel"].click()

        assert controller.state is OverlayState.CLOSED
        assert controller.mode is None

    def test_previous_render_listeners_detached(self, controller):
        """Test that controls from an earlier render lose their listeners."""
        controller.render(ModalMode.ADD)
        old_cancel = controller.markup.controls["cancel"]
        controller.render(ModalMode.ADD)

        assert old_cancel.listener_count("click") == 0
        assert controller.markup.controls["cancel"].listener_count("click") == 1

    def test_form_without_fields_fails(self, surfaces):
        """Test that a template dropping a field fails at render time."""
        templates = Mock()
        templates.get_song_input_form.return_value = Mock(fields={"Title": object()}, mode=ModalMode.ADD)
        controller = ModalController(templates=templates, **surfaces)

        with pytest.raises(MarkupError, match="Artist"):
            controller.render(ModalMode.ADD)


class TestHandlers:
    """Test event wiring."""

    def test_close_handler(self, controller, surfaces):
        """Test that the close control closes and calls back."""
        handler = Mock()
        controller.register_close_handler(handler)
        controller.render(ModalMode.ADD)

        surfaces["close_control"].click()

        handler.assert_called_once_with()
        assert controller.state is OverlayState.CLOSED

    def test_close_handler_optional(self, controller, surfaces):
        controller.register_close_handler()
        controller.open()

        surfaces["close_control"].click()

        assert controller.state is OverlayState.CLOSED

    def test_add_handler(self, controller, surfaces):
        handler = Mock()
        controller.register_add_handler(handler)

        surfaces["add_control"].click()

        handler.assert_called_once_with()

    def test_edit_handler_receives_bound_song(self, controller, sample_song):
        """Test that the edit control passes the song bound at registration."""
        handler = Mock()
        controller.render(ModalMode.DETAIL, sample_song)
        controller.register_edit_handler(sample_song, handler)

        controller.markup.controls["edit"].click()

        handler.assert_called_once_with(sample_song)

    def test_edit_handler_scoped_to_render(self, controller, sample_song):
        """Test that an edit binding does not survive a re-render."""
        handler = Mock()
        controller.render(ModalMode.DETAIL, sample_song)
        controller.register_edit_handler(sample_song, handler)
        old_edit = controller.markup.controls["edit"]

        controller.render(ModalMode.DETAIL, sample_song)
        old_edit.click()

        handler.assert_not_called()

    def test_edit_handler_without_control(self, controller, sample_song):
        """Test that forms without an edit control are ignored."""
        handler = Mock()
        controller.render(ModalMode.ADD)

        controller.register_edit_handler(sample_song, handler)

        handler.assert_not_called()

    def test_submit_listener_attached_once(self, controller, surfaces):
        """Test that re-registering replaces the callback."""
        first, second = Mock(), Mock()
        controller.register_submit_handler(first)
        controller.register_submit_handler(second)
        controller.render(ModalMode.ADD)
        fill_form(controller, "T", "A", "http://x.com")

        surfaces["dialog"].fire("submit")

        assert surfaces["dialog"].listener_count("submit") == 1
        first.assert_not_called()
        second.assert_called_once()


class TestSelectOptions:
    """Test genre option replacement."""

    def test_marks_selected_genre(self, controller, sample_genres):
        controller.render(ModalMode.ADD)
        controller.set_select_options(sample_genres, "g2")

        states = controller.markup.fields["Genre"].option_states()
        assert [(genre.name, selected) for genre, selected in states] == [
            ("Rock", False),
            ("Jazz", True),
        ]

    def test_replaces_prior_options(self, controller, sample_genres):
        controller.render(ModalMode.ADD)
        controller.set_select_options(sample_genres)
        controller.set_select_options(sample_genres[:1])

        assert len(controller.markup.fields["Genre"].options) == 1

    def test_requires_form(self, controller, sample_song, sample_genres):
        controller.render(ModalMode.DETAIL, sample_song)

        with pytest.raises(MarkupError):
            controller.set_select_options(sample_genres)


class TestSubmit:
    """Test extraction, validation and hand-over."""

    def test_valid_submission(self, controller, alert, sample_genres):
        """Test that valid data reaches the handler and closes the modal."""
        handler = Mock()
        controller.register_submit_handler(handler)
        controller.render(ModalMode.ADD)
        controller.set_select_options(sample_genres, "g1")
        fill_form(controller, "  T ", " A", "http://x.com  ")

        controller.markup.controls["save"].click()

        handler.assert_called_once()
        data = handler.call_args[0][0]
        assert data.id == ""
        assert data.title == "T"
        assert data.artist == "A"
        assert data.link == "http://x.com"
        assert data.genre_id == "g1"
        assert data.last_edited == "2026-10-17T09:30:15.123Z"
        alert.assert_not_called()
        assert controller.state is OverlayState.CLOSED

    def test_edit_submission_keeps_id(self, controller, sample_song, sample_genres):
        handler = Mock()
        controller.register_submit_handler(handler)
        controller.render(ModalMode.EDIT, sample_song)
        controller.set_select_options(sample_genres, sample_song.genre_id)

        controller.submit()

        data = handler.call_args[0][0]
        assert data.id == "s42"
        assert data.genre_id == "g2"

    def test_whitespace_title_rejected(self, controller, alert, sample_genres):
        """Test that an invalid form alerts and stays open."""
        handler = Mock()
        controller.register_submit_handler(handler)
        controller.render(ModalMode.ADD)
        controller.set_select_options(sample_genres, "g1")
        fill_form(controller, " ", "A", "http://x.com")

        result = controller.submit()

        assert result is None
        handler.assert_not_called()
        alert.assert_called_once_with(WHITE_SPACE_INVALID)
        assert controller.state is OverlayState.OPEN
        assert controller.markup.fields["Artist"].value == "A"

    def test_invalid_link_rejected(self, controller, alert):
        handler = Mock()
        controller.register_submit_handler(handler)
        controller.render(ModalMode.ADD)
        fill_form(controller, "T", "A", "not-a-url")

        controller.submit()

        handler.assert_not_called()
        assert LINK_INVALID in alert.call_args[0][0]

    def test_alert_receives_validation_error_message(self, controller, alert):
        """Test that the alert gets the error text unchanged."""
        controller.render(ModalMode.ADD)
        fill_form(controller, "T", "A", "not-a-url")

        assert controller.submit() is None
        alert.assert_called_once_with(f"\n{LINK_INVALID}")

    def test_accumulate_all_errors(self, controller, alert):
        controller.accumulate_all_errors = True
        controller.render(ModalMode.ADD)
        fill_form(controller, "", "", "not-a-url")

        controller.submit()

        assert alert.call_args[0][0].count("\n") == 2

    def test_submit_without_handler_closes(self, controller):
        controller.render(ModalMode.ADD)
        fill_form(controller, "T", "A", "http://x.com")

        data = controller.submit()

        assert data.title == "T"
        assert controller.state is OverlayState.CLOSED

    def test_read_form_without_form(self, controller, sample_song):
        controller.render(ModalMode.DETAIL, sample_song)

        with pytest.raises(MarkupError):
            controller.read_form()

    def test_genre_defaults_to_first_option(self, controller, sample_genres):
        controller.render(ModalMode.ADD)
        controller.set_select_options(sample_genres)
        fill_form(controller, "T", "A", "http://x.com")

        assert controller.read_form().genre_id == "g1"


class TestIsoTimestamp:
    """Test submission timestamps."""

    def test_utc_with_milliseconds(self):
        assert iso_timestamp(FIXED_NOW) == "2026-10-17T09:30:15.123Z"

    def test_naive_treated_as_utc(self):
        assert iso_timestamp(FIXED_NOW.replace(tzinfo=None)) == "2026-10-17T09:30:15.123Z"
