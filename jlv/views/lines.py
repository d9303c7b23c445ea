"""Line list view - one record per row"""

from jlv.helpers.curses_utils import Position, TextAttribute, get_level_color
from jlv.models.log_file import TagRole
from jlv.models.record import Record, get_value, value_to_string
from jlv.models.session_state import SessionState
from jlv.output_controller import Window
from jlv.viewmodels.redraw import RedrawKind
from jlv.viewmodels.session import SessionViewModel

_LEVEL_WIDTH = 5


class LinesWindow:
    """Draws the lines of the current view and replays partial redraws"""

    _MARGIN = 1

    def __init__(
        self, state: SessionState, viewmodel: SessionViewModel, window: Window
    ) -> None:
        self._state = state
        self._viewmodel = viewmodel
        self._window = window

    def format_line(self, record: Record) -> str:
        """Render a record as `time level message; name: value ...`"""
        view = self._viewmodel.view
        view.add_known_tags(record)
        parts = [
            get_value(record, view.tag_name(TagRole.TIME)),
            view.level_name(record).ljust(_LEVEL_WIDTH),
            get_value(record, view.tag_name(TagRole.MESSAGE)),
        ]
        line = " ".join(parts)

        role_tags = {view.tag_name(role) for role in TagRole if role != TagRole.OTHER}
        for tag in view.known_tags:
            if tag not in role_tags and tag in record:
                line += f"; {tag}: {value_to_string(record[tag])}"
        return line.replace("\n", "\\n").replace("\r", "\\r")

    def draw(self) -> None:
        """Draw what changed since the last draw"""
        full, ops = self._viewmodel.redraw.take()
        if full:
            self._window.clear()
            for row in range(self._state.page_size):
                self._draw_row(row)
        else:
            for op in ops:
                if op.kind == RedrawKind.SCROLL:
                    self._window.scroll(op.value)
                else:
                    self._draw_row(op.value)
        self._window.noutrefresh()

    def _draw_row(self, row: int) -> None:
        if not 0 <= row < self._state.page_size:
            return
        self._window.clear_line(row)
        record = self._viewmodel.view.line(row)
        if record is None:
            return

        width = self._window.getmaxyx().width - 2 * self._MARGIN
        text = self.format_line(record)[:width]
        color = get_level_color(self._viewmodel.view.level_name(record))
        is_current = row == self._state.current_row
        attributes = [TextAttribute.REVERSE] if is_current else None
        self._window.addstr(
            Position(row, self._MARGIN), text, color=color, attributes=attributes
        )

        highlight = self._state.highlight
        if is_current and highlight and (start := text.find(highlight)) != -1:
            self._window.addstr(
                Position(row, self._MARGIN + start),
                highlight,
                color=color,
                attributes=[TextAttribute.BOLD],
            )
