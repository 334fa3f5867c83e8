from tughra.errors import MalformedInputError
from tughra.stats import calculate_stats, decode_data_uri, file_to_data_uri, format_size

import pytest


def test_format_size():
    assert format_size(0) == "0.00 bytes"
    assert format_size(1023) == "1023.00 bytes"
    assert format_size(1536) == "1.50 KB"
    assert format_size(3 * 1024 ** 3) == "3.00 GB"
    assert format_size(2048 * 1024 ** 4) == "2048.00 TB"


def test_plain_text_stats():
    stats = calculate_stats("hello world\nbye ü")
    assert stats["characters"] == 17
    assert stats["words"] == 4
    assert stats["lines"] == 2
    assert stats["size"] == 18
    assert stats["type"] == "text/plain"
    assert not stats["is_data_uri"]


def test_data_uri_stats():
    stats = calculate_stats("data:image/png;base64,aGVsbG8=")
    assert stats["characters"] == 5
    assert stats["size"] == 5
    assert stats["type"] == "image/png"
    assert stats["is_data_uri"]


def test_decode_data_uri():
    assert decode_data_uri("data:,hi") == ("text/plain", b"hi")
    with pytest.raises(MalformedInputError):
        decode_data_uri("data:text/plain;base64,@@@")
    with pytest.raises(MalformedInputError):
        decode_data_uri("nope")


def test_file_to_data_uri(tmp_path):
    path = tmp_path / "note.txt"
    path.write_bytes(b"hi")
    assert file_to_data_uri(path) == "data:text/plain;base64,aGk="

    blob = tmp_path / "blob.unknownext"
    blob.write_bytes(b"\x00\x01")
    assert file_to_data_uri(blob) == "data:application/octet-stream;base64,AAE="
