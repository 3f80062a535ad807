import pytest

from earable.sd_logger import LOGGER_BUFFER_SIZE, SDLogger
from earable.storage import Storage

HEADER_LINE = b"ID, TIMESTAMP, Data1, Data2, Data3, Data4, Data5, Data6, Data7, Data8, Data9\n"


@pytest.fixture
def storage(tmp_path):
    return Storage(tmp_path)


def test_begin_writes_header(storage, tmp_path):
    logger = SDLogger(storage)
    assert logger.begin() is True
    assert (tmp_path / "Log.csv").read_bytes() == HEADER_LINE
    logger.end()


def test_entries_are_flushed_on_terminator(storage, tmp_path):
    logger = SDLogger(storage)
    assert logger.begin() is True
    logger.data_callback(1, 100, "0.5, 0.25")
    reader = storage.open_file("Log.csv", write=False)
    assert storage.read_block(reader, 1 << 16) == HEADER_LINE
    storage.close_file(reader)
    logger.data_callback(-1, 0, "")
    reader = storage.open_file("Log.csv", write=False)
    assert storage.read_block(reader, 1 << 16) == HEADER_LINE + b"1, 100, 0.5, 0.25\r"
    storage.close_file(reader)


def test_begin_replaces_existing_file(storage, tmp_path):
    (tmp_path / "Log.csv").write_bytes(b"old contents")
    logger = SDLogger(storage)
    assert logger.begin() is True
    logger.end()
    reader = storage.open_file("Log.csv", write=False)
    assert storage.read_block(reader, 1 << 16) == HEADER_LINE
    storage.close_file(reader)


def test_full_buffer_is_written_automatically(storage, tmp_path):
    logger = SDLogger(storage)
    assert logger.begin() is True
    for i in range(200):
        logger.data_callback(2, i, "x" * 20)
    reader = storage.open_file("Log.csv", write=False)
    on_disk = storage.read_block(reader, 1 << 16)
    storage.close_file(reader)
    assert len(on_disk) > len(HEADER_LINE) + LOGGER_BUFFER_SIZE // 2
    logger.data_callback(-1, 0, "")
    reader = storage.open_file("Log.csv", write=False)
    content = storage.read_block(reader, 1 << 16)
    storage.close_file(reader)
    assert content.count(b"\r") == 200
    assert content.startswith(HEADER_LINE + b"2, 0, ")


def test_set_name_switches_file(storage, tmp_path):
    logger = SDLogger(storage)
    assert logger.begin() is True
    logger.set_name("Other.csv")
    logger.data_callback(7, 1, "a")
    logger.data_callback(-1, 0, "")
    reader = storage.open_file("Other.csv", write=False)
    assert storage.read_block(reader, 1 << 16) == b"7, 1, a\r"
    storage.close_file(reader)
    assert (tmp_path / "Log.csv").read_bytes() == HEADER_LINE


def test_logging_continues_after_terminator(storage, tmp_path):
    logger = SDLogger(storage, "run.csv")
    assert logger.begin() is True
    logger.data_callback(0, 5, "b")
    logger.data_callback(-1, 0, "")
    logger.data_callback(0, 6, "c")
    logger.end()
    reader = storage.open_file("run.csv", write=False)
    assert storage.read_block(reader, 1 << 16) == HEADER_LINE + b"0, 5, b\r0, 6, c\r"
    storage.close_file(reader)


def test_begin_without_storage(tmp_path):
    logger = SDLogger(Storage(tmp_path / "absent"))
    assert logger.begin() is False