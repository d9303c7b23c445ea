"""Status line - pending command, autocomplete options or message, and the
position of the highlight"""

from jlv.helpers.curses_utils import Color, Position, TextAttribute
from jlv.models.options import Option, Options
from jlv.models.session_state import SessionState
from jlv.output_controller import Window
from jlv.viewmodels.session import SessionViewModel


class StatusBar:
    """Draws the last terminal row"""

    _MARGIN = 1

    def __init__(
        self, state: SessionState, viewmodel: SessionViewModel, window: Window
    ) -> None:
        self._state = state
        self._viewmodel = viewmodel
        self._window = window

    def draw(self) -> None:
        """Draw the status line"""
        self._window.clear_line(0)
        width = self._window.getmaxyx().width

        position = self._viewmodel.position_text()
        right_x = max(self._MARGIN, width - self._MARGIN - len(position))
        available = max(0, right_x - self._MARGIN - 1)

        if (options := self._state.options) is not None:
            self._draw_options(options, available)
        elif self._state.command:
            text = self._state.command[-available:] if available else ""
            self._window.addstr(Position(0, self._MARGIN), text)
            self._window.move(Position(0, self._MARGIN + len(text)))
        elif self._state.message:
            self._window.addstr(
                Position(0, self._MARGIN),
                self._state.message[:available],
                color=Color.WARNING,
            )

        self._window.addstr(
            Position(0, right_x),
            position[: width - right_x - self._MARGIN],
            color=Color.HEADER,
        )
        self._window.noutrefresh()

    def _draw_options(self, options: Options, available: int) -> None:
        x = self._MARGIN
        for option in options.visible:
            if x + len(option.name) > self._MARGIN + available:
                break
            is_current = option is options.selected
            self._draw_option(option, x, is_current)
            x += len(option.name) + 1

    def _draw_option(self, option: Option, x: int, is_current: bool) -> None:
        attributes = [TextAttribute.REVERSE] if is_current else []
        self._window.addstr(Position(0, x), option.name, attributes=attributes)
        if option.bold is not None:
            start, end = option.bold
            self._window.addstr(
                Position(0, x + start),
                option.name[start:end],
                attributes=attributes + [TextAttribute.BOLD],
            )
