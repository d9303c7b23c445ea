"""Index of newline-delimited records in a byte source"""

import logging
from typing import BinaryIO, NamedTuple

INDEX_CHUNK_SIZE = 64 * 1024

logger = logging.getLogger(__name__)


class LineDescriptor(NamedTuple):
    """Location of one undecoded record in the source"""

    start: int
    length: int


def build_index(
    source: BinaryIO, chunk_size: int = INDEX_CHUNK_SIZE
) -> tuple[list[LineDescriptor], OSError | None]:
    """Scan the source once and describe every line in it.

    The newline is not part of a line. Data after the last newline is the last
    line. When a read fails the lines found so far are returned together with
    the error.
    """
    index: list[LineDescriptor] = []
    line_start = 0
    offset = 0
    try:
        source.seek(0)
        while chunk := source.read(chunk_size):
            newline = chunk.find(b"\n")
            while newline != -1:
                line_end = offset + newline
                index.append(LineDescriptor(line_start, line_end - line_start))
                line_start = line_end + 1
                newline = chunk.find(b"\n", newline + 1)
            offset += len(chunk)
    except OSError as e:
        logger.error("Indexing stopped after %d lines: %s", len(index), e)
        return index, e

    if offset > line_start:
        index.append(LineDescriptor(line_start, offset - line_start))
    logger.info("Indexed %d lines (%d bytes)", len(index), offset)
    return index, None
