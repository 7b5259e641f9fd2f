"""Text rendering of task, memory and system-wide records."""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable, Dict, Iterable

from .fmt_net import (
    format_block_stat,
    format_net_arp,
    format_net_device,
    format_net_route,
    format_net_socket,
    format_netlink_socket,
    format_unix_socket,
    join,
)
from .types import (
    IP,
    BlockStat,
    Cgroup,
    CgroupController,
    Cpu,
    IoStats,
    LoadAverage,
    MemPerm,
    MemRegion,
    MemStats,
    Module,
    ModuleState,
    Mount,
    NetArp,
    NetDevice,
    NetlinkSocket,
    NetRoute,
    NetSocket,
    NetState,
    ProcStat,
    Seccomp,
    SocketTimer,
    TaskStat,
    TaskState,
    TaskStatus,
    UidSet,
    UnixSocket,
    UnixSocketState,
    UnixSocketType,
    Uptime,
    Zone,
)

_UNKNOWN = "Unknown"

_TASK_STATE_NAMES = {
    TaskState.RUNNING: "Running",
    TaskState.SLEEPING: "Sleeping",
    TaskState.DISK_SLEEP: "Disk-Sleep",
    TaskState.STOPPED: "Stopped",
    TaskState.TRACING_STOP: "Tracing-Stop",
    TaskState.ZOMBIE: "Zombie",
    TaskState.DEAD: "Dead",
    TaskState.WAKEKILL: "Wake-Kill",
    TaskState.WAKING: "Waking",
    TaskState.PARKED: "Parked",
    TaskState.IDLE: "Idle",
}

_SECCOMP_NAMES = {
    Seccomp.DISABLED: "Disabled",
    Seccomp.STRICT: "Strict",
    Seccomp.FILTER: "Filter",
}

_MODULE_STATE_NAMES = {
    ModuleState.LIVE: "Live",
    ModuleState.LOADING: "Loading",
    ModuleState.UNLOADING: "Unloading",
}

_OTHER_ENUM_NAMES = {
    SocketTimer.NONE: "None",
    SocketTimer.RETRANSMIT: "Retransmit",
    SocketTimer.ANOTHER: "Another",
    SocketTimer.TIME_WAIT: "Time-Wait",
    SocketTimer.ZERO_WINDOW: "Zero-Window",
    NetState.ESTABLISHED: "Established",
    NetState.SYN_SENT: "Syn-Sent",
    NetState.SYN_RECV: "Syn-Recv",
    NetState.FIN_WAIT1: "Fin-Wait1",
    NetState.FIN_WAIT2: "Fin-Wait2",
    NetState.TIME_WAIT: "Time-Wait",
    NetState.CLOSE: "Close",
    NetState.CLOSE_WAIT: "Close-Wait",
    NetState.LAST_ACK: "Last-Ack",
    NetState.LISTEN: "Listen",
    NetState.CLOSING: "Closing",
    UnixSocketType.STREAM: "Stream",
    UnixSocketType.DATAGRAM: "Datagram",
    UnixSocketType.SEQPACKET: "SeqPacket",
    UnixSocketState.FREE: "Free",
    UnixSocketState.UNCONNECTED: "Unconnected",
    UnixSocketState.CONNECTING: "Connecting",
    UnixSocketState.CONNECTED: "Connected",
    UnixSocketState.DISCONNECTING: "Disconnecting",
}

_ENUM_NAMES: Dict[Enum, str] = {
    **_TASK_STATE_NAMES,
    **_SECCOMP_NAMES,
    **_MODULE_STATE_NAMES,
    **_OTHER_ENUM_NAMES,
}

_TASK_STAT_SPACED = (
    "pid", "comm", "state", "ppid", "pgrp", "session", "tty_nr", "tgpid",
    "flags", "minflt", "cminflt", "majflt", "cmajflt", "utime", "stime",
    "cutime", "cstime", "priority", "nice", "num_threads", "itrealvalue",
    "starttime", "vsize", "rss", "rsslim", "startcode", "endcode",
    "startstack", "kstkesp", "kstkeip", "signal", "blocked", "sigignore",
    "sigcatch", "wchan", "nswap", "cnswap", "exit_signal", "processor",
    "rt_priority", "policy", "delayacct_blkio_ticks", "guest_time",
    "cguest_time", "start_data", "end_data", "start_brk", "arg_start",
)

_IO_FIELDS = (
    "rchar", "wchar", "syscr", "syscw", "read_bytes", "write_bytes",
    "cancelled_write_bytes",
)

_CPU_FIELDS = (
    "user", "nice", "system", "idle", "iowait", "irq", "softirq", "steal",
    "guest", "guest_nice",
)


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _task_state_name(state: TaskState) -> str:
    return _TASK_STATE_NAMES.get(state, _UNKNOWN)


def _uid_set(ids: UidSet) -> str:
    return f"{ids.real},{ids.effective},{ids.saved_set},{ids.filesystem}"


def _whole_seconds(span: timedelta) -> int:
    """Seconds of a span, truncated toward zero."""
    seconds = span.days * 86400 + span.seconds
    if seconds < 0 and span.microseconds:
        seconds += 1
    return seconds


def to_octal_mask(mask: int) -> str:
    """Render a mask in octal, zero-padded to at least four digits."""
    return f"{mask:04o}"


def to_hex_mask(mask: int) -> str:
    """Render a mask in hex, zero-padded to at least sixteen digits."""
    return f"{mask:016x}"


def format_task_status(status: TaskStatus) -> str:
    """Render a /proc/[pid]/status record."""
    st = status
    parts = [
        f"name[{st.name}] ",
        f"umask[{to_octal_mask(st.umask)}] ",
        f"state[{_task_state_name(st.state)}] ",
        f"tgid[{st.tgid}] ",
        f"ngid[{st.ngid}] ",
        f"pid[{st.pid}] ",
        f"ppid[{st.ppid}] ",
        f"tracer_pid[{st.tracer_pid}] ",
        f"uid[{_uid_set(st.uid)}] ",
        f"gid[{_uid_set(st.gid)}] ",
        f"fdsize[{st.fd_size}] ",
        f"groups[{join(sorted(st.groups))}] ",
        f"ns_tgid[{join(st.ns_tgid)}] ",
        f"ns_pid[{join(st.ns_pid)}] ",
        f"ns_pgid[{join(st.ns_pgid)}] ",
        f"ns_sid[{join(st.ns_sid)}] ",
    ]
    for name in (
        "vm_peak", "vm_size", "vm_lck", "vm_pin", "vm_hwm", "vm_rss",
        "rss_anon", "rss_file", "rss_shmem", "vm_data", "vm_stk", "vm_exe",
        "vm_lib", "vm_pte", "vm_swap", "huge_tlb_pages",
    ):
        parts.append(f"{name}[{getattr(st, name)}] ")
    parts += [
        f"core_dumping[{_bool(st.core_dumping)}] ",
        f"threads[{st.threads}] ",
        f"sig_q[{st.sig_q[0]}/{st.sig_q[1]}] ",
    ]
    for name in (
        "sig_pnd", "shd_pnd", "sig_blk", "sig_ign", "sig_cgt",
        "cap_inh", "cap_prm", "cap_eff", "cap_bnd", "cap_amb",
    ):
        parts.append(f"{name}[{to_hex_mask(getattr(st, name).raw)}] ")
    parts += [
        f"no_new_privs[{_bool(st.no_new_privs)}] ",
        f"seccomp[{_SECCOMP_NAMES.get(st.seccomp_mode, _UNKNOWN)}] ",
        f"voluntary_ctxt_switches[{st.voluntary_ctxt_switches}] ",
        f"nonvoluntary_ctxt_switches[{st.nonvoluntary_ctxt_switches}] ",
    ]
    return "".join(parts)


def format_task_stat(stat: TaskStat) -> str:
    """Render a /proc/[pid]/stat record."""
    parts = []
    for name in _TASK_STAT_SPACED:
        value = getattr(stat, name)
        if name == "state":
            value = _task_state_name(value)
        parts.append(f"{name}[{value}] ")
    parts += [
        f"arg_end[{stat.arg_end}]",
        f"env_start[{stat.env_start}] ",
        f"env_end[{stat.env_end}]",
        f"exit_code[{stat.exit_code}]",
    ]
    return "".join(parts)


def format_mem_stats(mem: MemStats) -> str:
    """Render a /proc/[pid]/statm record."""
    return (
        f"total[{mem.total}] "
        f"resident[{mem.resident}] "
        f"shared[{mem.shared}] "
        f"text[{mem.text}] "
        f"data[{mem.data}]"
    )


def format_io_stats(io: IoStats) -> str:
    """Render a /proc/[pid]/io record."""
    return "".join(f"{name}[{getattr(io, name)}] " for name in _IO_FIELDS)


def format_mem_perm(perm: MemPerm) -> str:
    """Render mapping permissions in the 'rwxp' style of maps files."""
    return (
        ("r" if perm.can_read else "-")
        + ("w" if perm.can_write else "-")
        + ("x" if perm.can_execute else "-")
        + ("s" if perm.is_shared else "p")
    )


def format_mem_region(region: MemRegion) -> str:
    """Render a /proc/[pid]/maps record."""
    return (
        f"addr[0x{region.start_address:x}]-[0x{region.end_address:x}] "
        f"perm[{format_mem_perm(region.perm)}]"
        f"offset[0x{region.offset:x}] "
        f"device[{region.device:x}] "
        f"inode[{region.inode}] "
        f"pathname[{region.pathname}]"
    )


def format_mount(mount: Mount) -> str:
    """Render a /proc/[pid]/mountinfo record."""
    return (
        f"id[{mount.id}] "
        f"parent_id[{mount.parent_id}] "
        f"device[{mount.device}] "
        f"root[{mount.root}] "
        f"point[{mount.point}] "
        f"options[{join(mount.options)}] "
        f"optional[{join(mount.optional)}] "
        f"fs[{mount.filesystem_type}] "
        f"source[{mount.source}] "
        f"super_options[{join(mount.super_options)}] "
    )


def format_module(module: Module) -> str:
    """Render a /proc/modules record."""
    return (
        f"name[{module.name}] "
        f"size[{module.size}] "
        f"instances[{module.instances}] "
        f"dependencies[{join(module.dependencies)}] "
        f"state[{_MODULE_STATE_NAMES.get(module.module_state, _UNKNOWN)}] "
        f"offset[{module.offset}] "
        f"out_of_tree[{_bool(module.is_out_of_tree)}] "
        f"unsigned[{_bool(module.is_unsigned)}] "
    )


def format_load_average(load: LoadAverage) -> str:
    """Render a /proc/loadavg record."""
    return (
        f"load[{load.last_1min:g}, {load.last_5min:g}, {load.last_15min:g}] "
        f"runnable_tasks[{load.runnable_tasks}] "
        f"total_tasks[{load.total_tasks}] "
        f"last_created_task[{load.last_created_task}] "
    )


def format_uptime(uptime: Uptime) -> str:
    """Render a /proc/uptime record in whole seconds."""
    return (
        f"system_time[{_whole_seconds(uptime.system_time)}s] "
        f"idle_time[{_whole_seconds(uptime.idle_time)}s] "
    )


def format_cpu(cpu: Cpu) -> str:
    """Render the time counters of one CPU."""
    return " ".join(f"{name}[{getattr(cpu, name)}]" for name in _CPU_FIELDS)


def _epoch_seconds(moment: datetime) -> int:
    return int(moment.timestamp())


def format_proc_stat(stats: ProcStat) -> str:
    """Render a /proc/stat record over several lines."""
    parts = [f"stat_cpu_total[{format_cpu(stats.cpus.total)}]\n"]
    parts += [
        f"stat_cpu{index}[{format_cpu(cpu)}]\n"
        for index, cpu in enumerate(stats.cpus.per_item)
    ]
    parts += [
        f"stat_intr[total: {stats.intr.total}, "
        f"per_interrupt: {join(stats.intr.per_item)}]\n",
        f"stat_ctxt[{stats.ctxt}] ",
        f"stat_btime[{_epoch_seconds(stats.btime)}] ",
        f"stat_processes[{stats.processes}] ",
        f"stat_procs_running[{stats.procs_running}] ",
        f"stat_procs_blocked[{stats.procs_blocked}]\n",
        f"stat_softirq[total: {stats.softirq.total}, "
        f"per_irq: {join(stats.softirq.per_item)}] ",
    ]
    return "".join(parts)


def format_zone(zone: Zone) -> str:
    """Render a /proc/buddyinfo record."""
    return f"zone[{zone.name}] chunks[{join(zone.chunks)}] "


def format_cgroup_controller(controller: CgroupController) -> str:
    """Render a /proc/cgroups record."""
    return (
        f"subsys_name[{controller.subsys_name}] "
        f"hierarchy[{controller.hierarchy}] "
        f"num_cgroups[{controller.num_cgroups}] "
        f"enabled[{_bool(controller.enabled)}] "
    )


def format_cgroup(cgroup: Cgroup) -> str:
    """Render a /proc/[pid]/cgroup record."""
    return (
        f"hierarchy[{cgroup.hierarchy}] "
        f"controllers[{join(cgroup.controllers)}] "
        f"pathname[{cgroup.pathname}] "
    )


_FORMATTERS: Dict[type, Callable[[Any], str]] = {
    TaskStatus: format_task_status,
    TaskStat: format_task_stat,
    MemStats: format_mem_stats,
    IoStats: format_io_stats,
    MemPerm: format_mem_perm,
    MemRegion: format_mem_region,
    Mount: format_mount,
    Module: format_module,
    LoadAverage: format_load_average,
    Uptime: format_uptime,
    Cpu: format_cpu,
    ProcStat: format_proc_stat,
    Zone: format_zone,
    CgroupController: format_cgroup_controller,
    Cgroup: format_cgroup,
    UidSet: _uid_set,
    NetDevice: format_net_device,
    NetSocket: format_net_socket,
    UnixSocket: format_unix_socket,
    NetlinkSocket: format_netlink_socket,
    NetRoute: format_net_route,
    NetArp: format_net_arp,
    BlockStat: format_block_stat,
    IP: IP.to_string,
}


def describe(value: Any) -> str:
    """Render any record, enum or plain value as display text."""
    if isinstance(value, bool):
        return _bool(value)
    if isinstance(value, Enum) and value in _ENUM_NAMES:
        return _ENUM_NAMES[value]
    formatter = _FORMATTERS.get(type(value))
    if formatter is not None:
        return formatter(value)
    if isinstance(value, tuple) and len(value) == 2:
        return f"{describe(value[0])} = {describe(value[1])}"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def describe_all(values: Iterable[Any]) -> list:
    """Render each value of an iterable."""
    return [describe(value) for value in values]