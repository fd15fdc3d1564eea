# mysqlreplay

Building blocks for tools that replay captured MySQL traffic against another
server and record how the two results compare.

## Installation

```
pip install mysqlreplay
```

The package has no runtime dependencies.

## What is inside

- `mysqlreplay.counter`: named signed integer counters (`add`, `get`, `dump`)
  for packets, queries, streams, connections and any other name, backed by a
  thread-safe `CounterRegistry`. The module-level functions share one
  process-wide registry.
- `mysqlreplay.stats`: the replay statistics (`ReadPacket`, `GetSQL`,
  `ExecSQLFail`, …) held as unsigned 64-bit values, with `add_static`,
  `get_value` and `dump_static`, backed by `Statistics`. The module-level
  functions share one process-wide set.
- `mysqlreplay.protocol`: MySQL wire-protocol constants as enums:
  `PacketHeader`, `ClientFlag`, `Command`, `FieldType`, `FieldFlag`,
  `StatusFlag` and `CachingSha2Auth`, plus a few plain constants such as
  `MAX_PACKET_SIZE` and `DEFAULT_AUTH_PLUGIN`.
- `mysqlreplay.collations`: `collation_id(name)` returns a collation's
  handshake id (raising `KeyError` for an unknown name), and
  `is_unsafe_collation(name)` reports the multibyte collations in which
  parameters cannot be interpolated safely.
- `mysqlreplay.convert`: conversion of values read from a database into
  `str`, `bytes`, `bytearray`, `bool`, `int`, `float` or `datetime`
  (`convert_assign`, `as_string`, `as_bytes`, `clone_bytes`), raising
  `ConversionError` when information would be lost; and the nullable
  wrappers `NullString`, `NullInt64`, `NullInt32`, `NullFloat64`, `NullBool`
  and `NullTime`, each with `scan` and `value`.
- `mysqlreplay.result`: `ResultRecord` holds the result captured from the
  traffic next to the result from the replay server. `write_res_to_file`
  appends it as a JSON line prefixed with its length as an 8-byte big-endian
  integer (see `frame`), and `read_records` reads such a file back.
  `convert_res_to_str` turns a result set into strings, NULL becoming `""`.
- `mysqlreplay.cmdutil`: helpers for capture and replay front ends: BPF
  filter strings (`get_filter`), listen addresses (`generate_listen_str`),
  logger names (`generate_log_name`), file-name suffixes
  (`generate_file_seq_string`), picking the next capture file in name order
  (`get_first_file_name`), the `CaptureContext` metadata record, and the
  `QueryStats` status report.

## Example

```python
from mysqlreplay.cmdutil import QueryStats, get_filter, get_first_file_name
from mysqlreplay.stats import Statistics

statistics = Statistics()
statistics.add_static("GetSQL", 1, False)
print(statistics.get_value("GetSQL"))
# 1

print(get_filter(4000))
# tcp and ((src port 4000) or (dst port 4000))

files = {"capture-1.pcap": 1, "capture-2.pcap": 0, "capture-3.pcap": 0}
print(get_first_file_name(files))
# capture-2.pcap, which is now marked as taken

report = QueryStats.from_statistics(statistics)
print(report.to_json())
```

Writing and reading a result file:

```python
from mysqlreplay.result import ResultRecord, read_records

with open("results.bin", "wb") as fh:
    record = ResultRecord(type=3, query="select 1", file=fh)
    record.write_res_to_file()

with open("results.bin", "rb") as fh:
    for entry in read_records(fh):
        print(entry["query"])
```

## What the package does not do

This is a library of parts, not a finished replay tool. It has no command
line, does not capture packets or read pcap files, does not reassemble TCP
streams or decode MySQL packets, does not connect to a server to replay
statements, and does not run an HTTP status server. `QueryStats` and the
helpers in `cmdutil` produce the names, filters and reports such a tool
would use, but the tool itself has to be built on top.