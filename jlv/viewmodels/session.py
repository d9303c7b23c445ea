"""Session viewmodel - turns keystrokes into command edits and view changes"""

import logging
from typing import Callable

from jlv.helpers.keys import Key, KeyDecoder
from jlv.helpers.list_utils import clamp
from jlv.models.errors import CommandSyntaxError, JlvError
from jlv.models.file_view import FileView
from jlv.models.filter import Filter
from jlv.models.options import Options
from jlv.models.record import Record
from jlv.models.search import SearchDirection, SearchParams
from jlv.models.session_state import RenderMode, SessionState
from jlv.viewmodels.commands import find_command, parse, root_options
from jlv.viewmodels.redraw import Redraw

logger = logging.getLogger(__name__)

COMMAND_KEYS = (":", "/", "?")


class SessionViewModel:  # pylint: disable=too-many-public-methods
    """The keystroke driven state machine of the terminal session.

    Input is fed as raw chunks. Every change of what the line list shows is
    recorded on `redraw` for the views to replay.
    """

    def __init__(self, state: SessionState, view: FileView) -> None:
        self._state = state
        self.view = view
        self.redraw = Redraw()
        self._decoder = KeyDecoder()
        self._key_handlers: dict[Key | str, Callable[[], None]] = {
            Key.UP: self.up,
            "k": self.up,
            Key.DOWN: self.down,
            "j": self.down,
            Key.PAGE_UP: self.page_up,
            Key.PAGE_DOWN: self.page_down,
            Key.HOME: self.home,
            Key.END: self.end,
            "G": self.end,
            "n": lambda: self.search(reverse=False),
            "N": lambda: self.search(reverse=True),
            Key.TAB: self.fill_options,
            Key.BACKSPACE: self.erase,
            Key.ESCAPE: self.cancel_command,
            Key.ENTER: self.enter,
        }

    @property
    def _page(self) -> int:
        return self._state.page_size

    def handle_chunk(self, chunk: bytes) -> None:
        """Handle a raw chunk read from the terminal"""
        for key in self._decoder.feed(chunk):
            self.handle_key(key)

    def handle_key(self, key: Key | str) -> None:
        """Handle one decoded key"""
        self._state.message = ""
        if self._state.mode == RenderMode.RECORD:
            self._state.mode = RenderMode.NORMAL
            self.redraw.everything()
            return

        if (options := self._state.options) is not None:
            self._handle_options_key(options, key)
        elif self._state.command and isinstance(key, str):
            self._state.command += key
        elif key in COMMAND_KEYS:
            self._state.command = str(key)
        elif handler := self._key_handlers.get(key):
            handler()

    def _handle_options_key(self, options: Options, key: Key | str) -> None:
        if key == Key.ESCAPE:
            self._state.options = None
        elif key == Key.ENTER:
            self._select_current_option()
        elif key == Key.BACKSPACE:
            if options.prefix:
                options.set_prefix(options.prefix[:-1])
                self._options_changed()
        elif key == Key.LEFT:
            options.prev()
            self._state.mark_changed("options")
        elif key == Key.RIGHT:
            options.next()
            self._state.mark_changed("options")
        elif isinstance(key, str):
            options.set_prefix(options.prefix + key)
            self._options_changed()

    def _show_options(self, options: Options | None) -> None:
        if options is None or not options.options:
            self._state.options = None
            return
        self._state.options = options
        self._options_changed()

    def _options_changed(self) -> None:
        options = self._state.options
        if options is None:
            return
        self._state.mark_changed("options")
        if len(options.visible) == 1:
            self._select_current_option()

    def _select_current_option(self) -> None:
        options = self._state.options
        if options is None or options.selected is None:
            return
        prefix = "" if options.replace else self._state.command
        self._state.command = prefix + options.selected.completion
        self._state.options = None

    def fill_options(self) -> None:
        """Offer the valid next tokens of the pending command"""
        text = self._state.command
        command = find_command(text)
        if command is None:
            self._show_options(root_options(text))
            return
        if command.options is not None:
            completion = command.options(text, self.view)
            self._state.command = completion.command
            self._show_options(completion.options)

    def erase(self) -> None:
        """Remove the last character of the pending command"""
        self._state.command = self._state.command[:-1]

    def cancel_command(self) -> None:
        """Discard the pending command"""
        self._state.command = ""

    def enter(self) -> None:
        """Run the pending command, or show the highlighted record"""
        if self._state.command:
            self.execute()
        elif self.current_record() is not None:
            self._state.mode = RenderMode.RECORD
            self.redraw.everything()

    def execute(self) -> None:
        """Run the pending command"""
        text = self._state.command
        self._state.command = ""
        if text == ":":
            return
        try:
            parsed = parse(text)
        except CommandSyntaxError:
            logger.info("Undefined command %r", text)
            self._state.message = f"{text}: undefined command"
            return
        logger.debug("Executing %s", parsed)
        parsed.apply(self)

    def apply_filter(self, filter_: Filter) -> None:
        """Replace the current view with a filtered one"""
        self.view = self.view.filter(filter_)
        self._state.current_row = 0
        self._clamp()
        self.redraw.everything()

    def pop_view(self, to_root: bool) -> None:
        """Go back to the parent or the root view"""
        self.view = self.view.top() if to_root else self.view.up()
        self._clamp()
        self.redraw.everything()

    def start_search(
        self, mask: str, direction: SearchDirection, tag: str, is_regexp: bool
    ) -> None:
        """Search from the highlighted line"""
        self._state.last_search = SearchParams(
            mask=mask,
            start=self.view.position + self._state.current_row,
            direction=direction,
            tag=tag,
            is_regexp=is_regexp,
        )
        self.search(reverse=False)

    def search(self, reverse: bool) -> None:
        """Repeat the last search, optionally in the opposite direction"""
        params = self._state.last_search
        if params is None or not params.mask:
            self._state.message = "nothing to search"
            return

        direction = params.direction.reversed() if reverse else params.direction
        try:
            if params.tag:
                result = self.view.search_tag(
                    params.tag, params.mask, params.start, direction, params.is_regexp
                )
            else:
                result = self.view.search(params.mask, params.start, direction)
        except JlvError as e:
            logger.warning("Search for %r failed: %s", params.mask, e)
            self._state.message = str(e)
            return

        if result is None:
            self._state.message = "not found"
            return

        params.start = result.index + direction
        self._state.highlight = result.matched
        self._center_on(result.index)

    def goto_line(self, line: int) -> None:
        """Highlight an absolute, 1-based file line"""
        count = len(self.view)
        if count == 0:
            return
        idx = self.view.locate(line - 1)
        if idx >= count - 1:
            self.end()
        elif idx <= 0:
            self.home()
        else:
            self._center_on(idx)

    def request_exit(self) -> None:
        """End the session"""
        self._state.exit = True

    def show_message(self, message: str) -> None:
        """Show a message on the status line"""
        self._state.message = message

    def up(self) -> None:
        """Move the highlight one line up, scrolling once it reaches the middle"""
        current = self._state.current_row
        if self.view.position > 0 and current <= self._page // 2:
            self.view.move(-1)
            self.redraw.scroll(-1)
            self.redraw.row(current + 1)
            self.redraw.row(current)
            self.redraw.row(0)
        elif current > 0:
            self._state.current_row = current - 1
            self.redraw.row(current)
            self.redraw.row(current - 1)

    def down(self) -> None:
        """Move the highlight one line down, scrolling once it reaches the middle"""
        current = self._state.current_row
        count = len(self.view)
        last_row = self._page - 1
        if self.view.position + last_row < count - 1 and current >= self._page // 2:
            self.view.move(1)
            self.redraw.scroll(1)
            self.redraw.row(current - 1)
            self.redraw.row(current)
            self.redraw.row(last_row)
        elif current < last_row and self.view.position + current < count - 1:
            self._state.current_row = current + 1
            self.redraw.row(current)
            self.redraw.row(current + 1)

    def page_up(self) -> None:
        """Scroll one screen up"""
        self.view.move(-(self._page - 1))
        if self.view.position < 0:
            self.home()
            return
        self.redraw.everything()

    def page_down(self) -> None:
        """Scroll one screen down"""
        self.view.move(self._page - 1)
        if self.view.position > max(0, len(self.view) - self._page):
            self.end()
            return
        self.redraw.everything()

    def home(self) -> None:
        """Go to the first line"""
        self.view.set_position(0)
        self._state.current_row = 0
        self.redraw.everything()

    def end(self) -> None:
        """Go to the last line"""
        count = len(self.view)
        self.view.set_position(max(0, count - self._page))
        self._state.current_row = max(0, min(self._page, count) - 1)
        self.redraw.everything()

    def resize(self) -> None:
        """Keep the highlight on screen after the terminal size changed"""
        self._clamp()
        self.redraw.everything()

    def _center_on(self, idx: int) -> None:
        top = max(0, idx - self._page // 2)
        self.view.set_position(top)
        self._state.current_row = idx - top
        self.redraw.everything()

    def _clamp(self) -> None:
        count = len(self.view)
        if count == 0:
            self.view.set_position(0)
            self._state.current_row = 0
            return
        self.view.set_position(clamp(self.view.position, 0, count - 1))
        self._state.current_row = clamp(
            self._state.current_row,
            0,
            min(self._page - 1, count - 1 - self.view.position),
        )

    def current_index(self) -> int:
        """View index of the highlighted line"""
        return self.view.position + self._state.current_row

    def current_record(self) -> Record | None:
        """Record of the highlighted line"""
        return self.view.record(self.current_index())

    def surface_errors(self) -> None:
        """Move errors recorded on the view to the status line"""
        error = self.view.error
        if error is None:
            return
        if not self._state.message:
            self._state.message = str(error)
        self.view.clear_error()

    def position_text(self) -> str:
        """View name and absolute line of the highlight, for the status line"""
        idx = self.current_index()
        line = self.view.absolute_index(idx) + 1 if 0 <= idx < len(self.view) else 0
        return f"{self.view.name} {line}({self.view.file.lines_count})".lstrip()
