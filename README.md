# pfskit

pfskit provides typed Python records for the information Linux exposes under
`/proc` and `/sys`. It also provides generic helpers for parsing the text files
found there, and formatters that turn records into readable one-line summaries.

## Modules

- `pfskit.types` holds dataclasses and enums for what the kernel reports.
  - Task records: `TaskStat`, `TaskStatus` (with `UidSet`), `MemStats`, `MemRegion`, `MemPerm` and `IoStats`.
  - Network records: `NetDevice`, `NetSocket`, `UnixSocket`, `NetlinkSocket`, `NetRoute` and `NetArp`.
  - System records: `LoadAverage`, `Uptime`, `ProcStat` (with `Cpu` and `Sequence`), `Module`, `Mount`, `Zone`, `Cgroup`, `CgroupController`, `IdMap` and `BlockStat`.
  - Masks: `SignalMask.is_set(signal)` and `CapabilitiesMask.is_set(capability)`, with the `Signal` and `Capability` enums.
  - Addresses: `IP`, built from one 32-bit word for IPv4 or four words for IPv6, in kernel byte order. It offers `is_v4()`, `is_v6()` and `to_string()`.
  - Filtering: the `FilterAction` enum, with `KEEP` and `DROP`.
  - Errors: the `ParserError` exception.
  - Version: `version_string()` returns the library version as `"0.9.0"`.
- `pfskit.numbers` provides `to_number(value, kind, base)`. It parses decimal, octal (`Base.OCTAL`) or hexadecimal (`Base.HEX`) text into an integer that must fit a fixed-width `IntKind`, such as `IntKind.UINT32`. It raises `ParserError` if no number can be read or the value is out of range.
- `pfskit.lines` has two file parsers.
  - `parse_file_lines(path, parser, filter, lines_to_skip)` runs `parser` on every non-empty line after the skipped header lines. It keeps only the items for which `filter` returns `FilterAction.KEEP`.
  - `FileParser` reads `key<delim>value` files such as `/proc/<pid>/status` into an output object. Subclasses set `output_type` to choose that object. `parse(path, keys)` can limit the work to the given keys. It raises `ParserError` if the file cannot be opened or a line has no key.
- `pfskit.fmt_net` formats network and block records:
  - `format_net_device`, `format_net_socket`, `format_unix_socket`, `format_netlink_socket`, `format_net_route`, `format_net_arp`, `format_block_stat`
  - helpers: `join`, `is_printable`, `hexlify`
- `pfskit.fmt_system` formats task and system records:
  - task: `format_task_status`, `format_task_stat`, `format_mem_stats`, `format_io_stats`, `format_mem_region`
  - system: `format_module`, `format_mount`, `format_load_average`, `format_uptime`, `format_proc_stat`, `format_zone`, `format_cgroup`, `format_cgroup_controller`
  - `describe(value)` renders any record, enum, pair or plain value.
  - `to_octal_mask` and `to_hex_mask` render masks.
- `pfskit.log` renders titled sections.
  - `render_section(title, value)` produces a title, an underline, the value and a blank line. A collection gets one line per item, and a mapping gets `key = value` lines.
  - `print_section` writes that text to a stream, standard output by default.
  - `format_pair(key, value)` formats a single `key = value` pair.
- `pfskit.menu` is a small sub-command dispatcher.
  - `Command` holds a name, an argument hint, a description and a handler.
  - `Menu.run()` calls the command named by `argv[1]` with the remaining arguments. It returns `-EINVAL` on bad usage, and that return value can be configured.
  - `Menu.usage()` builds the help listing.

## Examples

Read a whitespace-separated table, skip its header and keep only some rows:

```python
from pfskit.lines import parse_file_lines
from pfskit.types import FilterAction

rows = parse_file_lines(
    "/proc/net/arp",
    parser=str.split,
    filter=lambda row: FilterAction.KEEP if row[-1] == "eth0" else FilterAction.DROP,
    lines_to_skip=1,
)
```

Fill a record from a key/value file:

```python
from pfskit.fmt_system import format_task_status
from pfskit.lines import FileParser
from pfskit.numbers import IntKind, to_number
from pfskit.types import TaskStatus


class StatusParser(FileParser):
    output_type = TaskStatus


parser = StatusParser(":", {
    "Name": lambda value, status: setattr(status, "name", value),
    "Pid": lambda value, status: setattr(status, "pid", to_number(value, IntKind.INT32)),
})
status = parser.parse("/proc/self/status", keys={"Name", "Pid"})
print(format_task_status(status))
```

Print a titled section:

```python
from pfskit.log import print_section

print_section("cmdline", ["init", "splash"])
```

## What it does not do

pfskit has no ready-made readers for particular `/proc` or `/sys` files. It has
no object for walking processes, tasks, file descriptors or block devices. It
installs no command-line tool. To fill the records, you write line parsers and
value parsers on top of `parse_file_lines` and `FileParser`.

## Requirements

Python 3.10 or newer. There are no third-party runtime dependencies. The tests
use pytest (`pip install pfskit[test]`).