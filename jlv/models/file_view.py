"""Views over a log file: the whole file, or a chain of filtered subsets"""

import logging
import re
from typing import Callable

from jlv.helpers.list_utils import clamp, find_first_index
from jlv.models.errors import FilterPatternError, LineReadError
from jlv.models.filter import Filter
from jlv.models.log_file import LEVELS, LogFile, TagRole
from jlv.models.record import MISSING, Record, value_to_string
from jlv.models.search import SearchDirection, SearchResult

logger = logging.getLogger(__name__)


class FileView:
    """The root view: every line of the file, in file order.

    Indexes given to a view are positions in the view. The view maps them to
    absolute file lines with `absolute_index`. `position` is the view index of
    the line scrolled to the top of the screen.
    """

    def __init__(self, log_file: LogFile, name: str = "") -> None:
        self._file = log_file
        self.name = name
        self.position = 0
        self._error: Exception | None = None

    @property
    def file(self) -> LogFile:
        """The file this view looks at"""
        return self._file

    @property
    def parent(self) -> "FileView | None":
        """The view this one was filtered from"""
        return None

    @property
    def lines_count(self) -> int:
        """Number of lines visible in the view"""
        return len(self)

    def __len__(self) -> int:
        return self._file.lines_count

    def absolute_index(self, idx: int) -> int:
        """Get the file line shown at the view index"""
        return idx

    def locate(self, absolute: int) -> int:
        """Get the view index of the first visible line at or after an
        absolute file line"""
        return clamp(absolute, 0, len(self) - 1)

    def rewind_to(self, absolute: int) -> None:
        """Scroll the view so that the absolute line is on top"""
        self.position = self.locate(absolute)

    @property
    def error(self) -> Exception | None:
        """Last error recorded on this view, its parents or the file"""
        return self._error or self._file.error

    @error.setter
    def error(self, error: Exception | None) -> None:
        self._error = error

    def clear_error(self) -> None:
        """Forget the errors recorded on this view, its parents and the file"""
        self._error = None
        self._file.error = None

    def record(self, idx: int) -> Record | None:
        """Get the record at a view index, None when there is none"""
        if not 0 <= idx < len(self):
            return None
        try:
            return self._file.record(self.absolute_index(idx))
        except LineReadError as e:
            logger.warning("Could not read line: %s", e)
            return None

    def line(self, row: int) -> Record | None:
        """Get the record shown at a screen row"""
        return self.record(self.position + row)

    def move(self, lines: int) -> "FileView":
        """Move the position by a number of lines; callers clamp it"""
        self.position += lines
        return self

    def set_position(self, position: int) -> "FileView":
        """Set the position of the view"""
        self.position = position
        return self

    def up(self) -> "FileView":
        """Get the parent view, scrolled to the line on top of this one"""
        return self

    def top(self) -> "FileView":
        """Get the root view, scrolled to the line on top of this one"""
        return self

    def filter(self, filter_: Filter) -> "FilteredView":
        """Create a view of the lines of this view that satisfy the filter"""
        index = []
        for idx in range(len(self)):
            record = self.record(idx)
            if record is not None and self._file.fit(record, filter_):
                index.append(self.absolute_index(idx))
        logger.info("Filter %s matched %d of %d lines", filter_, len(index), len(self))
        return FilteredView(self, str(filter_), index)

    def search(
        self, mask: str, start: int, direction: SearchDirection
    ) -> SearchResult | None:
        """Look for mask in the raw text of the lines, starting at the view
        index `start` and wrapping around the ends of the view.

        The span of the result counts characters of the line text. Returns
        None when no line matches. Raises LineReadError when a line cannot be
        read.
        """

        def match(idx: int) -> SearchResult | None:
            text = self._file.raw_text(self.absolute_index(idx))
            found = text.find(mask)
            if found == -1:
                return None
            return SearchResult(idx, (found, found + len(mask)), mask)

        return self._scan(start, direction, match)

    def search_tag(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        tag: str,
        mask: str,
        start: int,
        direction: SearchDirection,
        is_regexp: bool = False,
    ) -> SearchResult | None:
        """Look for mask in the value of one field, starting at the view
        index `start` and wrapping around the ends of the view.

        With `is_regexp` the mask is a regular expression. Returns None when no
        line matches.
        """
        try:
            pattern = re.compile(mask if is_regexp else re.escape(mask))
        except re.error as e:
            raise FilterPatternError(f"{mask}: {e}") from e

        def match(idx: int) -> SearchResult | None:
            value = self._file.record(self.absolute_index(idx)).get(tag, MISSING)
            if value is MISSING:
                return None
            found = pattern.search(value_to_string(value))
            if found is None:
                return None
            return SearchResult(idx, found.span(), found.group())

        return self._scan(start, direction, match)

    def _scan(
        self,
        start: int,
        direction: SearchDirection,
        match: Callable[[int], SearchResult | None],
    ) -> SearchResult | None:
        count = len(self)
        if count == 0:
            return None
        start %= count
        idx = start
        while True:
            if (result := match(idx)) is not None:
                return result
            idx = (idx + direction) % count
            if idx == start:
                return None

    @property
    def known_tags(self) -> list[str]:
        """Field names seen in the file so far"""
        return self._file.known_tags

    def add_known_tags(self, record: Record) -> None:
        """Remember the field names of a record"""
        self._file.add_known_tags(record)

    @property
    def levels(self) -> list[str]:
        """Level names, lowest first"""
        return list(LEVELS)

    def tag_name(self, role: TagRole) -> str:
        """Get the field name used for a role"""
        return self._file.tag_name(role)

    def level(self, record: Record) -> int:
        """Get the level rank of a record"""
        return self._file.level(record)

    def level_name(self, record: Record) -> str:
        """Get the lower-cased level name of a record"""
        return self._file.level_name(record)


class FilteredView(FileView):
    """A view holding the absolute lines of its parent that matched a filter
    when it was created"""

    def __init__(self, parent: FileView, name: str, index: list[int]) -> None:
        super().__init__(parent.file, name)
        self._parent = parent
        self._index = index

    @property
    def parent(self) -> FileView:
        return self._parent

    @property
    def index(self) -> list[int]:
        """Absolute lines visible in the view"""
        return self._index.copy()

    def __len__(self) -> int:
        return len(self._index)

    def absolute_index(self, idx: int) -> int:
        return self._index[idx]

    def locate(self, absolute: int) -> int:
        found = find_first_index(self._index, lambda line: line >= absolute)
        if found is None:
            return max(0, len(self._index) - 1)
        return found

    @property
    def error(self) -> Exception | None:
        return self._error or self._parent.error

    @error.setter
    def error(self, error: Exception | None) -> None:
        self._error = error

    def clear_error(self) -> None:
        self._error = None
        self._parent.clear_error()

    def _top_absolute(self) -> int | None:
        if not self._index:
            return None
        return self.absolute_index(clamp(self.position, 0, len(self._index) - 1))

    def up(self) -> FileView:
        absolute = self._top_absolute()
        if absolute is not None:
            self._parent.rewind_to(absolute)
        return self._parent

    def top(self) -> FileView:
        root = self._parent
        while root.parent is not None:
            root = root.parent
        absolute = self._top_absolute()
        if absolute is not None:
            root.rewind_to(absolute)
        return root
