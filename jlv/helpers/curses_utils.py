"""Curses utility functions"""

import curses
import enum
from typing import NamedTuple


class Position(NamedTuple):
    """A simple position class"""

    y: int
    x: int


class Size(NamedTuple):
    """A simple size class"""

    height: int
    width: int


class Viewport(NamedTuple):
    """A simple viewport class"""

    pos: Position
    size: Size

    @property
    def x(self):
        """Get the x position"""
        return self.pos.x

    @property
    def y(self):
        """Get the y position"""
        return self.pos.y

    @property
    def width(self):
        """Get the width"""
        return self.size.width

    @property
    def height(self):
        """Get the height"""
        return self.size.height


class Color(enum.IntEnum):
    """Enumeration of colors"""

    DEFAULT = curses.COLOR_WHITE
    INFO = curses.COLOR_GREEN
    WARNING = curses.COLOR_YELLOW
    ERROR = curses.COLOR_RED
    DEBUG = curses.COLOR_BLUE
    HEADER = curses.COLOR_CYAN


class TextAttribute(enum.IntEnum):
    """Enumeration of text attributes"""

    BOLD = curses.A_BOLD
    REVERSE = curses.A_REVERSE


LEVEL_COLORS = {
    "trace": Color.DEBUG,
    "debug": Color.DEBUG,
    "info": Color.INFO,
    "warn": Color.WARNING,
    "error": Color.ERROR,
    "fault": Color.ERROR,
}


def get_level_color(level_name: str) -> Color | None:
    """Get the color used to draw lines of the given level"""
    return LEVEL_COLORS.get(level_name)
