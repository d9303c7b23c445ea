"""Shared fixtures for view tests"""

import pytest

from jlv.helpers.curses_utils import Position, Size, Viewport
from jlv.models.file_view import FileView
from jlv.models.session_state import SessionState
from jlv.output_controller import Window
from jlv.viewmodels.session import SessionViewModel
from tests.infra.mock_output_controller import MockOutputController

TERMINAL_SIZE = Size(6, 80)


@pytest.fixture(name="output_controller")
def output_controller_fixture() -> MockOutputController:
    """A mock terminal"""
    return MockOutputController(TERMINAL_SIZE)


@pytest.fixture(name="main_window")
def main_window_fixture(output_controller: MockOutputController) -> Window:
    """The window covering the mock terminal"""
    return output_controller.create_main_window()


@pytest.fixture(name="state")
def state_fixture() -> SessionState:
    """Session state sized to the mock terminal"""
    return SessionState(terminal_size=TERMINAL_SIZE)


@pytest.fixture(name="viewmodel")
def viewmodel_fixture(state: SessionState, view: FileView) -> SessionViewModel:
    """Session viewmodel over the sample file"""
    return SessionViewModel(state, view)


@pytest.fixture(name="lines_win")
def lines_win_fixture(main_window: Window, state: SessionState) -> Window:
    """The part of the terminal showing lines"""
    return main_window.derwin(
        Viewport(Position(0, 0), Size(state.page_size, TERMINAL_SIZE.width))
    )


@pytest.fixture(name="status_win")
def status_win_fixture(main_window: Window, state: SessionState) -> Window:
    """The last row of the terminal"""
    return main_window.derwin(
        Viewport(Position(state.page_size, 0), Size(1, TERMINAL_SIZE.width))
    )
