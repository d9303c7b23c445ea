"""Tests for decoding raw terminal input"""

import pytest

from jlv.helpers.keys import Key, KeyDecoder


@pytest.fixture(name="decoder")
def decoder_fixture() -> KeyDecoder:
    """A fresh key decoder"""
    return KeyDecoder()


@pytest.mark.parametrize(
    "chunk,expected",
    [
        (b"\x1b[A", Key.UP),
        (b"\x1b[B", Key.DOWN),
        (b"\x1bOA", Key.UP),
        (b"\x1b[5~", Key.PAGE_UP),
        (b"\x1b[6~", Key.PAGE_DOWN),
        (b"\x1b[H", Key.HOME),
        (b"\x1bOF", Key.END),
        (b"\x1b[4~", Key.END),
        (b"\r", Key.ENTER),
        (b"\n", Key.ENTER),
        (b"\t", Key.TAB),
        (b"\x7f", Key.BACKSPACE),
        (b"\x08", Key.BACKSPACE),
        (b"\x1b", Key.ESCAPE),
    ],
)
def test_single_key_chunks(decoder: KeyDecoder, chunk: bytes, expected: Key):
    """Test that a chunk holding one key decodes to that key"""
    # Act
    keys = decoder.feed(chunk)

    # Assert
    assert keys == [expected]


def test_coalesced_chunk_keeps_every_key_in_order(decoder: KeyDecoder):
    """Test that keystrokes read together are all delivered"""
    # Act
    keys = decoder.feed(b"jk\x1b[Bn:q\r")

    # Assert
    assert keys == ["j", "k", Key.DOWN, "n", ":", "q", Key.ENTER]


def test_escape_sequence_split_across_chunks(decoder: KeyDecoder):
    """Test that a partial escape sequence waits for the next chunk"""
    # Act
    first = decoder.feed(b"a\x1b[")
    second = decoder.feed(b"6~")

    # Assert
    assert first == ["a"]
    assert second == [Key.PAGE_DOWN]


def test_utf8_character_split_across_chunks(decoder: KeyDecoder):
    """Test that a multi-byte character is reassembled"""
    # Arrange
    encoded = "é".encode()

    # Act
    first = decoder.feed(b"/" + encoded[:1])
    second = decoder.feed(encoded[1:])

    # Assert
    assert first == ["/"]
    assert second == ["é"]


def test_unknown_escape_sequence_is_dropped(decoder: KeyDecoder):
    """Test that sequences with no key meaning are ignored"""
    # Act
    keys = decoder.feed(b"\x1b[15~x")

    # Assert
    assert keys == ["x"]


def test_escape_followed_by_text_is_escape_key(decoder: KeyDecoder):
    """Test that a bare escape before a printable key is the Escape key"""
    # Act
    keys = decoder.feed(b"\x1bj")

    # Assert
    assert keys == [Key.ESCAPE, "j"]


def test_other_control_bytes_are_dropped(decoder: KeyDecoder):
    """Test that unmapped control bytes produce nothing"""
    # Act
    keys = decoder.feed(b"\x01a\x03")

    # Assert
    assert keys == ["a"]
