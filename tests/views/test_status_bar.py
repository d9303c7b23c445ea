"""Tests for the status line"""

import os

import pytest

from jlv.helpers.curses_utils import Position, TextAttribute
from jlv.models.session_state import SessionState
from jlv.output_controller import Window
from jlv.viewmodels.session import SessionViewModel
from jlv.views.status import StatusBar
from tests.infra.mock_output_controller import MockOutputController

STATUS_ROW = 5


@pytest.fixture(name="status_bar")
def status_bar_fixture(
    state: SessionState, viewmodel: SessionViewModel, status_win: Window
) -> StatusBar:
    """Status line of the sample session"""
    return StatusBar(state, viewmodel, status_win)


def test_status_shows_position(
    status_bar: StatusBar, output_controller: MockOutputController
):
    """Test that the absolute line and the line count are on the right"""
    # Act
    status_bar.draw()

    # Assert
    line = output_controller.get_screen_line(STATUS_ROW)
    assert line.strip() == "1(5)"
    assert line.endswith("1(5)")
    assert len(line) == 79


def test_status_shows_view_name(
    status_bar: StatusBar,
    viewmodel: SessionViewModel,
    output_controller: MockOutputController,
):
    """Test that a filtered view is named by its filter"""
    # Arrange
    viewmodel.handle_chunk(b":f/level/info\rj")

    # Act
    status_bar.draw()

    # Assert
    assert output_controller.get_screen_line(STATUS_ROW).endswith(
        "level eq info 5(5)"
    )


def test_status_shows_pending_command(
    status_bar: StatusBar,
    viewmodel: SessionViewModel,
    output_controller: MockOutputController,
):
    """Test that the command being typed is shown with the cursor after it"""
    # Arrange
    viewmodel.handle_chunk(b":f/le")

    # Act
    status_bar.draw()

    # Assert
    assert output_controller.get_screen_line(STATUS_ROW).startswith(" :f/le ")
    assert output_controller.cursor_position == Position(STATUS_ROW, 6)


def test_status_shows_message(
    status_bar: StatusBar,
    viewmodel: SessionViewModel,
    output_controller: MockOutputController,
):
    """Test that messages are shown on the left"""
    # Arrange
    viewmodel.handle_chunk(b":p\r")

    # Act
    status_bar.draw()

    # Assert
    assert output_controller.get_screen_line(STATUS_ROW).startswith(
        f" {os.getpid()} "
    )


def test_status_shows_options_with_shortcuts(
    status_bar: StatusBar,
    viewmodel: SessionViewModel,
    output_controller: MockOutputController,
):
    """Test the autocomplete overlay"""
    # Arrange
    viewmodel.handle_chunk(b":\t")

    # Act
    status_bar.draw()

    # Assert
    line = output_controller.get_screen_line(STATUS_ROW)
    assert line.startswith(" filter search-tag exit quit goto ")
    content = output_controller.get_screen_content()
    assert content[Position(STATUS_ROW, 1)].attributes == [
        TextAttribute.REVERSE,
        TextAttribute.BOLD,
    ]
    assert content[Position(STATUS_ROW, 2)].attributes == [TextAttribute.REVERSE]
    assert content[Position(STATUS_ROW, 8)].attributes == [TextAttribute.BOLD]
    assert content[Position(STATUS_ROW, 9)].attributes == []


def test_status_clears_previous_content(
    status_bar: StatusBar,
    viewmodel: SessionViewModel,
    output_controller: MockOutputController,
):
    """Test that a redraw removes the old command"""
    # Arrange
    viewmodel.handle_chunk(b"/abcdef")
    status_bar.draw()

    # Act
    viewmodel.handle_chunk(b"\x1b")
    status_bar.draw()

    # Assert
    assert output_controller.get_screen_line(STATUS_ROW).strip() == "1(5)"


def test_status_shows_command_again_after_overlay_closes(
    status_bar: StatusBar,
    viewmodel: SessionViewModel,
    output_controller: MockOutputController,
):
    """Test that closing the options overlay brings back the pending command"""
    # Arrange
    viewmodel.handle_chunk(b":\t")
    status_bar.draw()

    # Act
    viewmodel.handle_chunk(b"\x1b")
    status_bar.draw()

    # Assert
    line = output_controller.get_screen_line(STATUS_ROW)
    assert line.startswith(" : ")
    assert "filter" not in line
    assert output_controller.cursor_position == Position(STATUS_ROW, 2)
