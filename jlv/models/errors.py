"""Exceptions raised and recorded by the viewer"""


class JlvError(Exception):
    """Base class of all viewer errors"""


class LineReadError(JlvError, OSError):
    """Reading a line from the byte source failed or returned too few bytes"""


class RecordDecodeError(JlvError, ValueError):
    """A line is not a JSON object"""


class FilterPatternError(JlvError, ValueError):
    """A regular expression given to a filter or search does not compile"""


class CommandSyntaxError(JlvError, ValueError):
    """A typed command is unknown or malformed"""


class TerminalModeError(JlvError, OSError):
    """The terminal cannot be taken over by the interactive session"""


class NotATerminalError(TerminalModeError):
    """Standard input is not an interactive terminal"""


class InputClosedError(JlvError, OSError):
    """The terminal input stream ended or failed"""
