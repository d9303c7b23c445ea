"""Tests for indexing the lines of a byte source"""

import io

from jlv.models.line_index import LineDescriptor, build_index


class FailingSource(io.BytesIO):
    """A source whose reads fail after the first chunk"""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.reads = 0

    def read(self, size: int | None = -1) -> bytes:
        self.reads += 1
        if self.reads > 1:
            raise OSError("device error")
        return super().read(size)


def test_build_index_describes_every_line():
    """Test that line offsets and lengths exclude the newline"""
    # Arrange
    source = io.BytesIO(b'{"a":1}\n{"b":22}\n')

    # Act
    index, error = build_index(source)

    # Assert
    assert error is None
    assert index == [LineDescriptor(0, 7), LineDescriptor(8, 8)]


def test_build_index_includes_unterminated_last_line():
    """Test that data after the last newline is a line"""
    # Arrange
    source = io.BytesIO(b"first\nsecond")

    # Act
    index, _ = build_index(source)

    # Assert
    assert index == [LineDescriptor(0, 5), LineDescriptor(6, 6)]


def test_build_index_keeps_empty_lines():
    """Test that empty lines are indexed with zero length"""
    # Arrange
    source = io.BytesIO(b"a\n\nb\n")

    # Act
    index, _ = build_index(source)

    # Assert
    assert index == [LineDescriptor(0, 1), LineDescriptor(2, 0), LineDescriptor(3, 1)]


def test_build_index_lines_spanning_chunks():
    """Test that lines crossing chunk boundaries are described once"""
    # Arrange
    source = io.BytesIO(b"abcdef\nghij\nk")

    # Act
    index, _ = build_index(source, chunk_size=4)

    # Assert
    assert index == [LineDescriptor(0, 6), LineDescriptor(7, 4), LineDescriptor(12, 1)]


def test_build_index_of_empty_source():
    """Test that an empty source has no lines"""
    # Act
    index, error = build_index(io.BytesIO(b""))

    # Assert
    assert not index
    assert error is None


def test_build_index_returns_partial_index_on_read_error():
    """Test that lines read before a failure are kept"""
    # Arrange
    source = FailingSource(b"one\ntwo\nthree\n")

    # Act
    index, error = build_index(source, chunk_size=6)

    # Assert
    assert isinstance(error, OSError)
    assert index == [LineDescriptor(0, 3)]
