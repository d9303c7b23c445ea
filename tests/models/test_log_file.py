"""Tests for the lazily decoded log file"""

import io

import pytest

from jlv.models.errors import FilterPatternError, LineReadError, RecordDecodeError
from jlv.models.filter import Filter, FilterOperator
from jlv.models.line_index import LineDescriptor
from jlv.models.log_file import LogFile, TagRole, level_rank, open_file
from tests.conftest import make_source


def test_open_file_counts_lines(log_file: LogFile):
    """Test that every line of the source is indexed"""
    # Assert
    assert log_file.lines_count == 5
    assert len(log_file) == 5


def test_record_decodes_line(log_file: LogFile):
    """Test decoding one line"""
    # Act
    record = log_file.record(2)

    # Assert
    assert record["msg"] == "connection refused"
    assert record["retry"] == 3


def test_raw_text_is_line_without_newline():
    """Test reading the undecoded text of a line"""
    # Arrange
    log_file, _ = open_file(io.BytesIO(b'{"msg":"a"}\n{"msg":"b"}\n'))

    # Act & Assert
    assert log_file.raw_text(1) == '{"msg":"b"}'
    assert log_file.raw_bytes(0) == b'{"msg":"a"}'


def test_line_that_is_not_an_object_decodes_to_empty_record():
    """Test that a malformed line becomes an empty record and an error"""
    # Arrange
    log_file, _ = open_file(io.BytesIO(b'{"msg":"a"}\nnot json\n[1, 2]\n'))

    # Act
    malformed = log_file.record(1)
    array = log_file.record(2)

    # Assert
    assert malformed == {}
    assert array == {}
    assert isinstance(log_file.error, RecordDecodeError)


def test_records_are_cached_with_bounded_size():
    """Test that only the most recently used records stay decoded and that an
    evicted line is decoded again"""
    # Arrange
    source = make_source([{"msg": str(i)} for i in range(5)])
    log_file, _ = open_file(source, cache_size=2)
    first = log_file.record(0)

    # Act
    log_file.record(1)
    log_file.record(2)
    evicted = not log_file.is_cached(0)
    again = log_file.record(0)

    # Assert
    assert evicted
    assert log_file.is_cached(2)
    assert not log_file.is_cached(1)
    assert again == first == {"msg": "0"}
    assert again is not first
    assert log_file.error is None


def test_cached_record_is_not_read_again(log_file: LogFile):
    """Test that a cached record is served without touching the source"""
    # Arrange
    first = log_file.record(0)

    # Act
    second = log_file.record(0)

    # Assert
    assert first is second


def test_short_read_raises_line_read_error():
    """Test that a line beyond the end of the data cannot be read"""
    # Arrange
    source = io.BytesIO(b'{"msg":"a"}\n')
    log_file = LogFile(source, [LineDescriptor(0, 11), LineDescriptor(12, 20)])

    # Act & Assert
    with pytest.raises(LineReadError):
        log_file.raw_bytes(1)
    assert isinstance(log_file.error, LineReadError)


def test_known_tags_put_role_tags_first(log_file: LogFile):
    """Test that time, level and message lead the known tags"""
    # Act
    tags = log_file.known_tags

    # Assert
    assert tags == ["time", "level", "msg", "user", "retry", "ms"]


def test_known_tags_with_custom_tag_names():
    """Test that the role fields can be renamed"""
    # Arrange
    source = make_source([{"extra": 1, "message": "m", "severity": "info", "ts": "t"}])

    # Act
    log_file, _ = open_file(
        source,
        {TagRole.MESSAGE: "message", TagRole.LEVEL: "severity", TagRole.TIME: "ts"},
    )

    # Assert
    assert log_file.known_tags == ["ts", "severity", "message", "extra"]
    assert log_file.tag_role("severity") == TagRole.LEVEL
    assert log_file.tag_role("extra") == TagRole.OTHER


def test_add_known_tags_appends_new_names(log_file: LogFile):
    """Test that names found later are added at the end"""
    # Act
    log_file.add_known_tags({"host": "a", "user": "b"})

    # Assert
    assert log_file.known_tags[-1] == "host"
    assert log_file.known_tags.count("user") == 1


def test_level_rank():
    """Test the ordering of level names"""
    # Assert
    assert level_rank("trace") == 0
    assert level_rank("WARN") == 3
    assert level_rank("fault") == 5
    assert level_rank("verbose") == -1


def test_level_name_is_lower_cased(log_file: LogFile):
    """Test reading the level of a record"""
    # Assert
    assert log_file.level_name({"level": "ERROR"}) == "error"
    assert log_file.level_name({"level": 3}) == ""
    assert log_file.level({"level": "warn"}) == 3


@pytest.mark.parametrize(
    "filter_,expected",
    [
        (Filter("user", "bob"), True),
        (Filter("user", "alice"), False),
        (Filter("user", "alice", FilterOperator.NOT_EQUAL), True),
        (Filter("retry", "3"), True),
        (Filter("retry", "2", FilterOperator.GREATER_OR_EQUAL), True),
        (Filter("level", "warn", FilterOperator.GREATER_OR_EQUAL), True),
        (Filter("level", "warn", FilterOperator.LESS_OR_EQUAL), False),
        (Filter("msg", "^conn.*used$", FilterOperator.REGEXP), True),
        (Filter("missing", "x", FilterOperator.NOT_EQUAL), False),
    ],
)
def test_fit(log_file: LogFile, filter_: Filter, expected: bool):
    """Test matching a record against filters"""
    # Arrange
    record = log_file.record(2)

    # Act & Assert
    assert log_file.fit(record, filter_) is expected


def test_fit_with_invalid_regexp_records_error(log_file: LogFile):
    """Test that a broken pattern matches nothing and is reported"""
    # Arrange
    record = log_file.record(0)

    # Act
    fits = log_file.fit(record, Filter("msg", "(", FilterOperator.REGEXP))

    # Assert
    assert not fits
    assert isinstance(log_file.error, FilterPatternError)


def test_open_file_of_empty_source():
    """Test opening a file without lines"""
    # Act
    log_file, error = open_file(io.BytesIO(b""))

    # Assert
    assert error is None
    assert log_file.lines_count == 0
    assert log_file.known_tags == []
