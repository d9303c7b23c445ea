"""State of the interactive session"""

import dataclasses
import enum

from jlv.helpers.curses_utils import Size
from jlv.helpers.state import State
from jlv.models.options import Options
from jlv.models.search import SearchParams


class RenderMode(enum.Enum):
    """What the screen shows"""

    NORMAL = "normal"
    RECORD = "record"


@dataclasses.dataclass
class SessionState(State):  # pylint: disable=too-many-instance-attributes
    """State of the terminal session"""

    terminal_size: Size = Size(0, 0)
    mode: RenderMode = RenderMode.NORMAL
    current_row: int = 0
    command: str = ""
    message: str = ""
    options: Options | None = None
    highlight: str = ""
    last_search: SearchParams | None = None
    exit: bool = False

    @property
    def page_size(self) -> int:
        """Number of rows showing lines; the last row is the status line"""
        return max(1, self.terminal_size.height - 1)
