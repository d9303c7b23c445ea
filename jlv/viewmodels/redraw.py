"""Screen damage collected by the session between two draws"""

import enum
from typing import NamedTuple


class RedrawKind(enum.Enum):
    """Kind of partial redraw"""

    SCROLL = "scroll"
    ROW = "row"


class RedrawOp(NamedTuple):
    """Scroll the line list by `value` rows, or redraw row `value`"""

    kind: RedrawKind
    value: int


class Redraw:
    """Ordered list of partial redraws, or a request to redraw everything"""

    def __init__(self) -> None:
        self.full = True
        self._ops: list[RedrawOp] = []

    def everything(self) -> None:
        """Redraw the whole screen"""
        self.full = True
        self._ops.clear()

    def scroll(self, lines: int) -> None:
        """Scroll the line list up by `lines` rows (down when negative).

        Rows are repainted from the state at draw time, so a scroll is only
        replayed as the first operation; anything later is a full redraw.
        """
        if self._ops:
            self.everything()
        elif not self.full:
            self._ops.append(RedrawOp(RedrawKind.SCROLL, lines))

    def row(self, row: int) -> None:
        """Redraw one row of the line list"""
        if not self.full:
            self._ops.append(RedrawOp(RedrawKind.ROW, row))

    @property
    def ops(self) -> list[RedrawOp]:
        """Pending partial redraws, in order"""
        return self._ops.copy()

    def take(self) -> tuple[bool, list[RedrawOp]]:
        """Get the pending damage and reset it"""
        full, ops = self.full, self._ops
        self.full = False
        self._ops = []
        return full, ops
