"""Shared fixtures"""

import io
import json

import pytest

from jlv.models.file_view import FileView
from jlv.models.log_file import LogFile, open_file

SAMPLE_RECORDS = [
    {"time": "10:00:00", "level": "info", "msg": "service started", "user": "alice"},
    {"time": "10:00:01", "level": "debug", "msg": "config loaded"},
    {
        "time": "10:00:02",
        "level": "error",
        "msg": "connection refused",
        "user": "bob",
        "retry": 3,
    },
    {"time": "10:00:03", "level": "warn", "msg": "slow query", "ms": 1200},
    {"time": "10:00:04", "level": "info", "msg": "request done", "user": "carol"},
]


def make_source(records: list) -> io.BytesIO:
    """Build an in-memory log file, one JSON value per line"""
    return io.BytesIO(
        b"".join(json.dumps(record).encode() + b"\n" for record in records)
    )


@pytest.fixture(name="sample_source")
def sample_source_fixture() -> io.BytesIO:
    """The sample records as a byte source"""
    return make_source(SAMPLE_RECORDS)


@pytest.fixture(name="log_file")
def log_file_fixture(sample_source: io.BytesIO) -> LogFile:
    """An opened sample log file"""
    log_file, error = open_file(sample_source)
    assert error is None
    return log_file


@pytest.fixture(name="view")
def view_fixture(log_file: LogFile) -> FileView:
    """The root view of the sample log file"""
    return log_file.view()
