"""Main application view - owns the windows and runs the session loop"""

import curses
import logging
import os
import sys

from jlv.helpers.curses_utils import Position, Size, Viewport
from jlv.input_controller import InputController, create_input_controller
from jlv.models.errors import InputClosedError, NotATerminalError, TerminalModeError
from jlv.models.file_view import FileView
from jlv.models.session_state import RenderMode, SessionState
from jlv.output_controller import CursesOutputController, OutputController
from jlv.viewmodels.session import SessionViewModel
from jlv.views.lines import LinesWindow
from jlv.views.record import RecordWindow
from jlv.views.status import StatusBar

logger = logging.getLogger(__name__)


class App:  # pylint: disable=too-many-instance-attributes
    """The interactive session over one view of a log file"""

    def __init__(
        self,
        output_controller: OutputController,
        input_controller: InputController,
        view: FileView,
    ) -> None:
        self._output_controller = output_controller
        self._input_controller = input_controller
        self._state = SessionState(
            terminal_size=output_controller.get_terminal_size()
        )
        self._viewmodel = SessionViewModel(self._state, view)

        self._main_window = output_controller.create_main_window()
        width = self._state.terminal_size.width
        page = self._state.page_size
        self._lines_win = self._main_window.derwin(
            Viewport(Position(0, 0), Size(page, width))
        )
        self._status_win = self._main_window.derwin(
            Viewport(Position(page, 0), Size(1, width))
        )
        self._lines_window = LinesWindow(self._state, self._viewmodel, self._lines_win)
        self._record_window = RecordWindow(self._lines_win)
        self._status_bar = StatusBar(self._state, self._viewmodel, self._status_win)

        self._state.register_watcher("terminal_size", self._resize_windows)

    @property
    def state(self) -> SessionState:
        """The session state"""
        return self._state

    @property
    def viewmodel(self) -> SessionViewModel:
        """The session viewmodel"""
        return self._viewmodel

    def run(self) -> None:
        """Main session loop, until an exit command"""
        self._output_controller.curs_set(0)
        self._draw()
        while not self._state.exit:
            chunk = self._input_controller.read()
            if not chunk:
                raise InputClosedError("terminal input closed")

            self._output_controller.update_lines_cols()
            self._state.terminal_size = self._output_controller.get_terminal_size()
            self._viewmodel.handle_chunk(chunk)
            self._draw()

    def _resize_windows(self) -> None:
        width = self._state.terminal_size.width
        page = self._state.page_size
        logger.debug("Terminal resized to %s", self._state.terminal_size)
        self._lines_win.resize(Size(page, width))
        self._status_win.mvderwin(Position(page, 0))
        self._status_win.resize(Size(1, width))
        self._viewmodel.resize()

    def _draw(self) -> None:
        if self._state.mode == RenderMode.RECORD:
            self._viewmodel.redraw.take()
            idx = self._viewmodel.current_index()
            record = self._viewmodel.current_record() or {}
            self._record_window.draw(
                self._viewmodel.view.absolute_index(idx) + 1, record
            )
        else:
            self._lines_window.draw()

        self._viewmodel.surface_errors()
        if "command" in self._state.changes:
            self._output_controller.curs_set(1 if self._state.command else 0)
        self._status_bar.draw()
        self._output_controller.update()
        self._state.clear_changes()


def _init_app(stdscr: curses.window, fd: int, view: FileView) -> None:
    curses.raw()
    with create_input_controller(fd) as input_controller:
        logger.info("Starting session")
        app = App(CursesOutputController(stdscr, fd), input_controller, view)
        try:
            app.run()
        except KeyboardInterrupt:
            logger.info("KeyboardInterrupt")
        except BaseException as e:
            logger.exception("An error occurred")
            raise e
        finally:
            logger.info("Exiting session")


def run(view: FileView, fd: int | None = None) -> None:
    """Run the interactive session on the terminal"""
    if fd is None:
        fd = sys.stdin.fileno()
    if not os.isatty(fd):
        raise NotATerminalError("standard input is not a terminal")
    try:
        curses.wrapper(_init_app, fd, view)
    except curses.error as e:
        raise TerminalModeError(f"cannot use the terminal: {e}") from e
