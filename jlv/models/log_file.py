"""Lazily decoded line-delimited JSON log file"""

import enum
import json
import logging
import re
from typing import TYPE_CHECKING, BinaryIO, Iterable

from jlv.helpers.lru_cache import LRUCache
from jlv.models.errors import FilterPatternError, LineReadError, RecordDecodeError
from jlv.models.filter import Filter, FilterOperator
from jlv.models.line_index import LineDescriptor, build_index
from jlv.models.record import Record, value_to_string

if TYPE_CHECKING:
    from jlv.models.file_view import FileView

CACHE_SIZE = 1024
KNOWN_TAGS_DEPTH = 500

LEVELS = ("trace", "debug", "info", "warn", "error", "fault")

logger = logging.getLogger(__name__)


class TagRole(enum.IntEnum):
    """Semantic roles of well known fields"""

    LEVEL = 0
    TIME = 1
    MESSAGE = 2
    OTHER = 3


DEFAULT_TAG_NAMES = {
    TagRole.LEVEL: "level",
    TagRole.TIME: "time",
    TagRole.MESSAGE: "msg",
}

_ROLE_ORDER = (TagRole.TIME, TagRole.LEVEL, TagRole.MESSAGE)


def level_rank(name: str) -> int:
    """Get the rank of a level name, -1 when it is not a known level"""
    try:
        return LEVELS.index(name.lower())
    except ValueError:
        return -1


class LogFile:  # pylint: disable=too-many-instance-attributes
    """A line-delimited JSON file, indexed once and decoded on demand.

    Only the line index is kept in memory. Records are decoded when asked for
    and kept in a fixed size LRU cache.
    """

    def __init__(
        self,
        source: BinaryIO,
        index: list[LineDescriptor],
        tag_names: dict[TagRole, str] | None = None,
        cache_size: int = CACHE_SIZE,
    ) -> None:
        self._source = source
        self._index = index
        self._cache: LRUCache[int, Record] = LRUCache(cache_size)
        self._buffer = bytearray()
        self._tag_names = DEFAULT_TAG_NAMES | (tag_names or {})
        self._known_tags: dict[str, None] = {}
        self.error: Exception | None = None

    @property
    def lines_count(self) -> int:
        """Number of lines in the file"""
        return len(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def view(self) -> "FileView":
        """Get the root view showing every line of the file"""
        from jlv.models.file_view import (  # pylint: disable=import-outside-toplevel
            FileView,
        )

        return FileView(self)

    def raw_bytes(self, n: int) -> bytes:
        """Read the undecoded bytes of line n, without the newline"""
        line = self._index[n]
        if len(self._buffer) < line.length:
            self._buffer = bytearray(line.length)
        window = memoryview(self._buffer)[: line.length]
        try:
            self._source.seek(line.start)
            read = self._source.readinto(window)
        except OSError as e:
            error = LineReadError(f"line {n + 1}: {e}")
            self.error = error
            raise error from e
        if read != line.length:
            error = LineReadError(f"line {n + 1}: read {read} of {line.length} bytes")
            self.error = error
            raise error
        return bytes(window)

    def raw_text(self, n: int) -> str:
        """Get line n as text, as it is in the file"""
        return self.raw_bytes(n).decode("utf-8", errors="replace")

    def record(self, n: int) -> Record:
        """Get the decoded record of line n.

        Lines that are not JSON objects decode to an empty record and leave a
        RecordDecodeError on the file. Read failures raise LineReadError.
        """
        cached = self._cache.get(n)
        if cached is not None:
            return cached

        raw = self.raw_bytes(n)
        record: Record = {}
        try:
            decoded = json.loads(raw)
            if not isinstance(decoded, dict):
                raise ValueError("not a JSON object")
            record = decoded
        except ValueError as e:
            logger.debug("Line %d is not a JSON object: %s", n + 1, e)
            self.error = RecordDecodeError(f"line {n + 1}: {e}")

        self._cache.put(n, record)
        return record

    def is_cached(self, n: int) -> bool:
        """Check whether the record of line n is held by the cache"""
        return n in self._cache

    def tag_name(self, role: TagRole) -> str:
        """Get the field name used for a role in this file"""
        return self._tag_names[role]

    def tag_role(self, tag: str) -> TagRole:
        """Get the role of a field name"""
        for role in _ROLE_ORDER:
            if self._tag_names[role] == tag:
                return role
        return TagRole.OTHER

    @property
    def known_tags(self) -> list[str]:
        """Field names seen so far: time, level and message first, then the
        others in the order they were first seen"""
        roles = [
            self._tag_names[role]
            for role in _ROLE_ORDER
            if self._tag_names[role] in self._known_tags
        ]
        others = [
            tag for tag in self._known_tags if self.tag_role(tag) == TagRole.OTHER
        ]
        return roles + others

    def add_known_tags(self, tags: Iterable[str]) -> None:
        """Remember field names"""
        for tag in tags:
            self._known_tags.setdefault(tag, None)

    def prime_known_tags(self, depth: int = KNOWN_TAGS_DEPTH) -> None:
        """Collect field names from the first lines of the file"""
        for n in range(min(depth, len(self._index))):
            self.add_known_tags(self.record(n))

    def level_name(self, record: Record) -> str:
        """Get the lower-cased level of a record, empty if it has none"""
        level = record.get(self._tag_names[TagRole.LEVEL])
        if isinstance(level, str):
            return level.lower()
        return ""

    def level(self, record: Record) -> int:
        """Get the level rank of a record"""
        return level_rank(self.level_name(record))

    def fit(self, record: Record, filter_: Filter) -> bool:
        """Check if the record satisfies the filter"""
        if not filter_.tag or filter_.tag not in record:
            return False

        value = value_to_string(record[filter_.tag])
        if filter_.operator == FilterOperator.REGEXP:
            try:
                return re.search(filter_.mask, value) is not None
            except re.error as e:
                self.error = FilterPatternError(f"{filter_.mask}: {e}")
                return False

        if filter_.tag == self._tag_names[TagRole.LEVEL]:
            return filter_.compare(level_rank(value), level_rank(filter_.mask))
        return filter_.compare(value, filter_.mask)


def open_file(
    source: BinaryIO,
    tag_names: dict[TagRole, str] | None = None,
    cache_size: int = CACHE_SIZE,
) -> tuple[LogFile, OSError | None]:
    """Index a seekable byte source and collect its field names.

    When indexing fails the file is still usable with the lines indexed so
    far; the error is returned next to it.
    """
    index, error = build_index(source)
    log_file = LogFile(source, index, tag_names, cache_size)
    log_file.error = error
    try:
        log_file.prime_known_tags()
    except LineReadError as e:
        logger.error("Could not collect field names: %s", e)
        error = error or e
    logger.info(
        "Opened file with %d lines and %d known tags",
        log_file.lines_count,
        len(log_file.known_tags),
    )
    return log_file, error
