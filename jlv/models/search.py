"""Search parameters and results"""

import dataclasses
import enum
from typing import NamedTuple


class SearchDirection(enum.IntEnum):
    """Direction of a search; the value is the step between visited lines"""

    FORWARD = 1
    BACKWARD = -1

    def reversed(self) -> "SearchDirection":
        """Get the opposite direction"""
        return SearchDirection(-self.value)


class SearchResult(NamedTuple):
    """A line of a view that matched a search"""

    index: int
    span: tuple[int, int]
    matched: str


@dataclasses.dataclass
class SearchParams:
    """Parameters of the last search, reused by repeat-search"""

    mask: str
    start: int
    direction: SearchDirection = SearchDirection.FORWARD
    tag: str = ""
    is_regexp: bool = False
