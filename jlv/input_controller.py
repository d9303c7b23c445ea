"""Input controllers delivering raw terminal bytes to the session"""

import contextlib
import logging
import os
import queue
import sys
import threading
from abc import ABC, abstractmethod
from typing import Iterator

from jlv.models.errors import NotATerminalError

logger = logging.getLogger(__name__)

READ_SIZE = 4
QUEUE_SIZE = 256


class InputController(ABC):
    """Abstract input controller"""

    @abstractmethod
    def read(self) -> bytes:
        """Block until the next chunk of input arrives; b"" means end of input"""


class TerminalInputController(InputController):
    """Reads the terminal on a background thread.

    The reader does short reads so that every keystroke is delivered as soon as
    it is typed. When the input ends or fails, an empty chunk is queued and the
    thread stops.
    """

    def __init__(
        self, fd: int, read_size: int = READ_SIZE, queue_size: int = QUEUE_SIZE
    ) -> None:
        self._fd = fd
        self._read_size = read_size
        self._queue: queue.Queue[bytes] = queue.Queue(maxsize=queue_size)
        self._thread = threading.Thread(
            target=self._read_loop, name="jlv-input", daemon=True
        )

    def start(self) -> "TerminalInputController":
        """Start the reader thread"""
        self._thread.start()
        return self

    def _read_loop(self) -> None:
        while True:
            try:
                chunk = os.read(self._fd, self._read_size)
            except OSError as e:
                logger.error("Reading input failed: %s", e)
                chunk = b""
            self._queue.put(chunk)
            if not chunk:
                logger.info("Input closed")
                return

    def read(self) -> bytes:
        return self._queue.get()


@contextlib.contextmanager
def create_input_controller(fd: int | None = None) -> Iterator[TerminalInputController]:
    """Create a started input controller over the terminal"""
    if fd is None:
        fd = sys.stdin.fileno()
    if not os.isatty(fd):
        raise NotATerminalError("standard input is not a terminal")
    yield TerminalInputController(fd).start()
