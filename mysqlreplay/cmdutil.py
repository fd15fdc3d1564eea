"""Helpers shared by the replay commands: names, filters and status reports."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import MutableMapping

from .stats import Statistics


def generate_log_name(device: str, port: int) -> str:
    """Name of the logger for a capture on ``device`` and ``port``."""
    return f"{port}-{device}"


def get_filter(port: int) -> str:
    """BPF filter that keeps TCP traffic from or to ``port``."""
    return f"tcp and ((src port {port}) or (dst port {port}))"


def generate_listen_str(port: int) -> str:
    """Address the status server listens on."""
    return f"0.0.0.0:{port}"


def generate_file_seq_string(seq: int) -> str:
    """File name suffix for sequence number ``seq``."""
    return f"-{seq}"


def get_first_file_name(files: MutableMapping[str, int]) -> str:
    """Pick the smallest unprocessed file name and mark it as taken.

    ``files`` maps names to 0 (pending) or non-zero (taken). Files are
    replayed in name order. Returns "" when nothing is pending.
    """
    pending = [name for name, state in files.items() if state == 0]
    if not pending:
        return ""
    first = min(pending)
    files[first] = 1
    return first


@dataclass(frozen=True)
class CaptureContext:
    """Capture metadata attached to a packet handed to the reassembler."""

    timestamp: datetime | None = None
    capture_length: int = 0
    length: int = 0
    interface_index: int = 0


_STAT_FIELDS: tuple[tuple[str, str], ...] = (
    ("get_packets", "ReadPacket"),
    ("handle_packets", "DealPacket"),
    ("get_sql", "GetSQL"),
    ("deal_sql", "DealSQL"),
    ("get_res", "GetRes"),
    ("write_res", "WriteRes"),
    ("packet_chan_len", "PacketChanLen"),
    ("sql_chan_len", "SQLChanLen"),
    ("write_res_chan_len", "WriteResChanLen"),
    ("exec_sql_fail", "ExecSQLFail"),
    ("write_res_file_fail", "WriteResFileFail"),
    ("format_json_fail", "FormatJsonFail"),
)


@dataclass
class QueryStats:
    """Status report served by the stats endpoint."""

    run_time: int = 0
    file_name_seq_no: int = 0
    write_done_file_num: int = 0
    write_done_file_size: int = 0
    writing_file_num: int = 0
    writing_file_size: int = 0
    get_packets: int = 0
    handle_packets: int = 0
    get_sql: int = 0
    deal_sql: int = 0
    get_res: int = 0
    write_res: int = 0
    packet_chan_len: int = 0
    sql_chan_len: int = 0
    write_res_chan_len: int = 0
    exec_sql_fail: int = 0
    write_res_file_fail: int = 0
    format_json_fail: int = 0

    @classmethod
    def from_statistics(cls, statistics: Statistics) -> "QueryStats":
        """Fill the counter fields from ``statistics``."""
        return cls(**{attr: statistics.get_value(key) for attr, key in _STAT_FIELDS})

    def to_json(self) -> str:
        """Serialise with the field names the endpoint has always used."""
        doc = {
            "runtime": self.run_time,
            "file_name_seq_no": self.file_name_seq_no,
            "write_end_file_num": self.write_done_file_num,
            "write_end_file_size": self.write_done_file_size,
            "writing_file_num": self.writing_file_num,
            "writing_file_size": self.writing_file_size,
            "get-packets": self.get_packets,
            "handle_packets": self.handle_packets,
            "get_sql": self.get_sql,
            "handle_sql": self.deal_sql,
            "get_res": self.get_res,
            "write_res": self.write_res,
            "packet_chan_len": self.packet_chan_len,
            "sql_chan_len": self.sql_chan_len,
            "write_res_chan_len": self.write_res_chan_len,
            "exec_sql_fail": self.exec_sql_fail,
            "write_res_file_fail": self.write_res_file_fail,
            "format_json_fail": self.format_json_fail,
        }
        return json.dumps(doc, separators=(",", ":"))