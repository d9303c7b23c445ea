"""Decoding of raw terminal input into keys"""

import codecs
import enum
import re

ESC = 27
DEL = 127


class Key(enum.Enum):
    """Non printable keys understood by the session"""

    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    PAGE_UP = enum.auto()
    PAGE_DOWN = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    ENTER = enum.auto()
    BACKSPACE = enum.auto()
    ESCAPE = enum.auto()
    TAB = enum.auto()


ESCAPE_SEQUENCES: dict[bytes, Key] = {
    b"\x1b[A": Key.UP,
    b"\x1b[B": Key.DOWN,
    b"\x1b[C": Key.RIGHT,
    b"\x1b[D": Key.LEFT,
    b"\x1bOA": Key.UP,
    b"\x1bOB": Key.DOWN,
    b"\x1bOC": Key.RIGHT,
    b"\x1bOD": Key.LEFT,
    b"\x1b[5~": Key.PAGE_UP,
    b"\x1b[6~": Key.PAGE_DOWN,
    b"\x1b[H": Key.HOME,
    b"\x1b[F": Key.END,
    b"\x1bOH": Key.HOME,
    b"\x1bOF": Key.END,
    b"\x1b[1~": Key.HOME,
    b"\x1b[4~": Key.END,
}

CONTROL_KEYS: dict[int, Key] = {
    ord("\r"): Key.ENTER,
    ord("\n"): Key.ENTER,
    ord("\t"): Key.TAB,
    DEL: Key.BACKSPACE,
    ord("\b"): Key.BACKSPACE,
    ESC: Key.ESCAPE,
}

_escape_sequence = re.compile(rb"\x1b(?:O[@-~]|\[[0-?]*[ -/]*[@-~])")
_partial_escape_sequence = re.compile(rb"\x1b(?:O|\[[0-?]*[ -/]*)?\Z")


class KeyDecoder:
    """Turns raw byte chunks into a sequence of keys and printable characters.

    A chunk read from the terminal may hold several keystrokes, or only a part
    of one. Incomplete UTF-8 characters and escape sequences are kept until the
    next chunk arrives.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._leftovers = b""

    def feed(self, chunk: bytes) -> list[Key | str]:
        """Decode a chunk, returning the keys it completes in input order"""
        data = self._leftovers + chunk
        self._leftovers = b""
        keys: list[Key | str] = []
        text = b""
        i = 0
        while i < len(data):
            byte = data[i]
            if byte != ESC:
                if byte < 32 or byte == DEL:
                    keys.extend(self._decode_text(text))
                    text = b""
                    if byte in CONTROL_KEYS:
                        keys.append(CONTROL_KEYS[byte])
                else:
                    text += data[i : i + 1]
                i += 1
                continue

            keys.extend(self._decode_text(text))
            text = b""
            if matches := _escape_sequence.match(data, i):
                sequence = matches.group()
                if sequence in ESCAPE_SEQUENCES:
                    keys.append(ESCAPE_SEQUENCES[sequence])
                i = matches.end()
            elif len(data) - i > 1 and _partial_escape_sequence.match(data, i):
                self._leftovers = data[i:]
                break
            else:
                keys.append(Key.ESCAPE)
                i += 1

        keys.extend(self._decode_text(text))
        return keys

    def _decode_text(self, text: bytes) -> list[str]:
        if not text:
            return []
        return [char for char in self._decoder.decode(text) if char.isprintable()]
