import io
import json
import struct

import pytest

from mysqlreplay.convert import ConversionError
from mysqlreplay.result import (
    ResultRecord,
    convert_res_to_str,
    frame,
    read_records,
)


class FailingFile:
    """Accepts a number of writes, then fails."""

    def __init__(self, good_writes: int) -> None:
        self.good_writes = good_writes
        self.chunks: list[bytes] = []

    def write(self, data: bytes) -> int:
        if self.good_writes <= 0:
            raise OSError("no space left")
        self.good_writes -= 1
        self.chunks.append(bytes(data))
        return len(data)


def make_record(file=None, **kwargs) -> ResultRecord:
    row = ["abc", "def", "hij"]
    defaults = dict(
        rr_result=[row],
        rr_error_no=0,
        rr_error_desc="success",
        rr_begin_time=1000,
        rr_end_time=1000,
        pr_error_desc="success",
        file=file,
        file_path="./",
        file_name_prefix="192.16.8.1.1:8000",
    )
    defaults.update(kwargs)
    return ResultRecord(**defaults)


def test_convert_res_to_str_values():
    rows = [["abc", None, 1, b"xyz", 1.5, True]]
    assert convert_res_to_str(rows) == [["abc", "", "1", "xyz", "1.5", "true"]]


def test_convert_res_to_str_none_gives_empty():
    assert convert_res_to_str(None) == []


def test_convert_res_to_str_unconvertible():
    with pytest.raises(ConversionError):
        convert_res_to_str([[object()]])


def test_new_record_converts_results():
    rec = make_record(pr_result=[[1, None]])
    assert rec.rr_result == [["abc", "def", "hij"]]
    assert rec.pr_result == [["1", ""]]
    assert rec.pos == 0


def test_new_record_without_packet_result():
    rec = make_record()
    assert rec.pr_result is None
    assert json.loads(rec.to_json())["pr-result"] is None


def test_to_json_omits_empty_fields():
    doc = json.loads(make_record().to_json())
    assert "stmtID" not in doc
    assert "params" not in doc
    assert "db" not in doc
    assert "query" not in doc
    assert doc["rr-error-desc"] == "success"
    assert doc["FileNamePrefix"] == "192.16.8.1.1:8000"


def test_to_json_includes_set_fields():
    rec = make_record(stmt_id="7", params=[1, "a"], db="test", query="select 1")
    doc = json.loads(rec.to_json())
    assert doc["stmtID"] == "7"
    assert doc["params"] == [1, "a"]
    assert doc["db"] == "test"
    assert doc["query"] == "select 1"


def test_write_res_to_file_success():
    buf = io.BytesIO()
    rec = make_record(file=buf, db="test")
    n = rec.write_res_to_file()
    data = buf.getvalue()
    assert n > 0
    assert n == len(data)
    (length,) = struct.unpack(">Q", data[:8])
    assert length == len(data) - 8
    assert data.endswith(b"\n")
    buf.seek(0)
    records = list(read_records(buf))
    assert len(records) == 1
    assert records[0]["db"] == "test"
    assert records[0]["rr-result"] == [["abc", "def", "hij"]]


def test_write_res_to_file_accumulates_position():
    buf = io.BytesIO()
    rec = make_record(file=buf)
    first = rec.write_res_to_file()
    second = rec.write_res_to_file()
    assert second > first
    buf.seek(0)
    assert len(list(read_records(buf))) == 2


def test_write_res_to_file_length_write_fails():
    rec = make_record(file=FailingFile(0))
    with pytest.raises(OSError, match="no space left"):
        rec.write_res_to_file()
    assert rec.pos == 0


def test_write_res_to_file_payload_write_fails():
    f = FailingFile(1)
    rec = make_record(file=f)
    with pytest.raises(OSError, match="no space left"):
        rec.write_res_to_file()
    assert rec.pos == 0
    assert len(f.chunks) == 1


def test_write_res_to_file_marshal_fails():
    f = FailingFile(5)
    rec = make_record(file=f, params=[object()])
    with pytest.raises(TypeError):
        rec.write_res_to_file()
    assert rec.pos == 0
    assert f.chunks == []


def test_write_data_success():
    buf = io.BytesIO()
    rec = make_record(file=buf)
    assert rec.write_data(b"abc") == 3
    assert buf.getvalue() == b"abc"


def test_write_data_fail():
    rec = make_record(file=FailingFile(0))
    with pytest.raises(OSError, match="no space left"):
        rec.write_data(b"abc")


def test_frame_prefix():
    assert frame(b"abc") == b"\x00\x00\x00\x00\x00\x00\x00\x03abc"


def test_read_records_truncated_payload():
    data = frame(b'{"a":1}\n')[:-2]
    with pytest.raises(ValueError):
        list(read_records(io.BytesIO(data)))


def test_read_records_truncated_header():
    with pytest.raises(ValueError):
        list(read_records(io.BytesIO(b"\x00\x00")))


def test_read_records_round_trip_frames():
    data = frame(b'{"a":1}\n') + frame(b'{"b":2}\n')
    assert list(read_records(io.BytesIO(data))) == [{"a": 1}, {"b": 2}]