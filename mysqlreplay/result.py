"""Comparison records written to result files, framed with a length prefix."""

from __future__ import annotations

import base64
import json
import logging
import struct
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, BinaryIO, Iterable, Iterator, Sequence

from .convert import convert_assign

logger = logging.getLogger(__name__)

_LENGTH = struct.Struct(">Q")


def convert_res_to_str(rows: Iterable[Sequence[Any]] | None) -> list[list[str]]:
    """Render every value of a result set as text.

    NULL becomes the empty string, so NULL and '' cannot be told apart
    afterwards. Raises ConversionError for a value that has no text form.
    """
    converted: list[list[str]] = []
    for row in rows or ():
        converted.append(
            ["" if value is None else convert_assign(value, str) for value in row]
        )
    return converted


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, datetime):
        return convert_assign(value, str)
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def frame(payload: bytes) -> bytes:
    """Prefix ``payload`` with its length as an 8-byte big-endian integer."""
    return _LENGTH.pack(len(payload)) + payload


def read_records(file: BinaryIO) -> Iterator[dict[str, Any]]:
    """Yield the decoded records of a result file.

    Raises ValueError when the file ends in the middle of a record.
    """
    while True:
        header = file.read(_LENGTH.size)
        if not header:
            return
        if len(header) < _LENGTH.size:
            raise ValueError("truncated record length")
        (length,) = _LENGTH.unpack(header)
        payload = file.read(length)
        if len(payload) < length:
            raise ValueError(f"truncated record: expected {length} bytes, got {len(payload)}")
        yield json.loads(payload)


@dataclass
class ResultRecord:
    """One statement with the result captured from the packets and the replayed one."""

    type: Any = 0
    stmt_id: str = ""
    params: list[Any] | None = None
    db: str = ""
    query: str = ""
    pr_begin_time: int = 0
    pr_end_time: int = 0
    pr_error_no: int = 0
    pr_error_desc: str = ""
    pr_result: list[list[Any]] | None = None
    rr_begin_time: int = 0
    rr_end_time: int = 0
    rr_error_no: int = 0
    rr_error_desc: str = ""
    rr_result: list[list[Any]] | None = None
    file: BinaryIO | None = field(default=None, repr=False, compare=False)
    file_path: str = ""
    file_name_prefix: str = ""
    pos: int = 0

    def __post_init__(self) -> None:
        if self.pr_result is not None:
            self.pr_result = convert_res_to_str(self.pr_result)
        self.rr_result = convert_res_to_str(self.rr_result)

    def to_json(self) -> str:
        """Serialise the record; raises TypeError for unserialisable parameters."""
        doc: dict[str, Any] = {"type": self.type}
        if self.stmt_id:
            doc["stmtID"] = self.stmt_id
        if self.params:
            doc["params"] = self.params
        if self.db:
            doc["db"] = self.db
        if self.query:
            doc["query"] = self.query
        doc.update(
            {
                "pr-begin-time": self.pr_begin_time,
                "pr-end-time": self.pr_end_time,
                "pr-error-no": self.pr_error_no,
                "pr-error-desc": self.pr_error_desc,
                "pr-result": self.pr_result,
                "rr-begin-time": self.rr_begin_time,
                "rr-end-time": self.rr_end_time,
                "rr-error-no": self.rr_error_no,
                "rr-error-desc": self.rr_error_desc,
                "rr-result": self.rr_result,
                "FilePath": self.file_path,
                "FileNamePrefix": self.file_name_prefix,
                "Pos": self.pos,
            }
        )
        return json.dumps(doc, separators=(",", ":"), ensure_ascii=False, default=_json_default)

    def write_data(self, data: bytes) -> int:
        """Write ``data`` to the record's file and return the number of bytes written."""
        if self.file is None:
            raise OSError("no file to write the result to")
        try:
            written = self.file.write(data)
        except OSError as exc:
            logger.warning("write data fail , %s", exc)
            raise
        return len(data) if written is None else written

    def write_res_to_file(self) -> int:
        """Append the framed record to the file and return the new write position.

        On failure the position is left unchanged and the error propagates.
        """
        try:
            payload = (self.to_json() + "\n").encode("utf-8")
        except (TypeError, ValueError) as exc:
            logger.warning("format json fail ,%s", exc)
            raise
        header_len = self.write_data(_LENGTH.pack(len(payload)))
        payload_len = self.write_data(payload)
        self.pos += header_len + payload_len
        return self.pos