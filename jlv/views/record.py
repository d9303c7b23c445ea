"""Record mode view - every field of the highlighted line"""

import textwrap

from jlv.helpers.curses_utils import Color, Position
from jlv.models.record import Record, value_to_string
from jlv.output_controller import Window


class RecordWindow:
    """Draws one record as a list of `name: value` fields"""

    _CONTENT_START_LINE = 2
    _MAX_KEY_WIDTH = 20

    def __init__(self, window: Window) -> None:
        self._window = window

    def draw(self, line_number: int, record: Record) -> None:
        """Draw the record of a 1-based file line"""
        self._window.clear()
        height, width = self._window.getmaxyx()

        title = f"Record - Line {line_number}"
        self._window.addstr(Position(0, 1), title[: width - 2], color=Color.HEADER)
        self._window.addstr(
            Position(1, 1), "─" * min(len(title), width - 2), color=Color.HEADER
        )

        fields = [(key, value_to_string(value)) for key, value in record.items()]
        content_end_line = height - 1
        key_width = min(
            self._MAX_KEY_WIDTH, max((len(key) for key, _ in fields), default=0)
        )
        value_start_x = key_width + 3
        available_width = max(1, width - value_start_x - 1)

        y_pos = self._CONTENT_START_LINE
        for key, value in fields:
            if y_pos >= content_end_line:
                break
            self._window.addstr(
                Position(y_pos, 1), f"{key[:key_width]}:", color=Color.HEADER
            )
            for line in self._break_value_into_lines(
                value, available_width, content_end_line - y_pos
            ):
                self._window.addstr(Position(y_pos, value_start_x), line)
                y_pos += 1

        self._window.addstr(
            Position(height - 1, 1),
            "Press ENTER to continue"[: width - 2],
            color=Color.INFO,
        )
        self._window.noutrefresh()

    @staticmethod
    def _break_value_into_lines(
        value: str, available_width: int, available_lines: int
    ) -> list[str]:
        lines: list[str] = []
        for line in value.split("\n"):
            lines.extend(textwrap.wrap(line, available_width) or [""])

        if len(lines) > available_lines:
            lines = lines[: available_lines - 1] + ["[...]"]
        return lines
