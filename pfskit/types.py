"""Value types describing procfs and sysfs records."""

from __future__ import annotations

import ipaddress
import socket
import struct
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum, IntEnum
from typing import Generic, List, Optional, Sequence as SequenceType, Set, Tuple, TypeVar, Union

VERSION_MAJOR = 0
VERSION_MINOR = 9
VERSION_PATCH = 0
VERSION = VERSION_MAJOR * 10000 + VERSION_MINOR * 100 + VERSION_PATCH

INVALID_UID = 0xFFFFFFFF
INVALID_PID = -1
INVALID_INODE = 0

UINT32_MAX = 0xFFFFFFFF


def version_string() -> str:
    """Return the library version as 'major.minor.patch'."""
    return f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"


class FilterAction(Enum):
    """Verdict of a record filter."""

    DROP = "drop"
    KEEP = "keep"


class ParserError(RuntimeError):
    """Raised when procfs content cannot be parsed."""

    def __init__(self, message: str, extra: str) -> None:
        super().__init__(f"{message} [{extra}]")
        self.message = message
        self.extra = extra


class TaskState(Enum):
    """Scheduler state of a task (post 2.6.32 values only)."""

    RUNNING = 0
    SLEEPING = 1
    DISK_SLEEP = 2
    STOPPED = 3
    TRACING_STOP = 4
    ZOMBIE = 5
    DEAD = 6
    WAKEKILL = 7
    WAKING = 8
    PARKED = 9
    IDLE = 10


@dataclass
class TaskStat:
    """Contents of /proc/[pid]/stat."""

    pid: int = INVALID_PID
    comm: str = ""
    state: TaskState = TaskState.IDLE
    ppid: int = INVALID_PID
    pgrp: int = INVALID_PID
    session: int = 0
    tty_nr: int = 0
    tgpid: int = INVALID_PID
    flags: int = 0
    minflt: int = 0
    cminflt: int = 0
    majflt: int = 0
    cmajflt: int = 0
    utime: int = 0
    stime: int = 0
    cutime: int = 0
    cstime: int = 0
    priority: int = 0
    nice: int = 0
    num_threads: int = 0
    itrealvalue: int = 0
    starttime: int = 0
    vsize: int = 0  # bytes
    rss: int = 0  # pages
    rsslim: int = 0
    startcode: int = 0
    endcode: int = 0
    startstack: int = 0
    kstkesp: int = 0
    kstkeip: int = 0
    signal: int = 0
    blocked: int = 0
    sigignore: int = 0
    sigcatch: int = 0
    wchan: int = 0
    nswap: int = 0
    cnswap: int = 0
    exit_signal: int = 0
    processor: int = 0
    rt_priority: int = 0
    policy: int = 0
    delayacct_blkio_ticks: int = 0
    guest_time: int = 0
    cguest_time: int = 0
    start_data: int = 0
    end_data: int = 0
    start_brk: int = 0
    arg_start: int = 0
    arg_end: int = 0
    env_start: int = 0
    env_end: int = 0
    exit_code: int = 0


@dataclass
class IoStats:
    """Contents of /proc/[pid]/io."""

    rchar: int = 0
    wchar: int = 0
    syscr: int = 0
    syscw: int = 0
    read_bytes: int = 0
    write_bytes: int = 0
    cancelled_write_bytes: int = 0


class Capability(IntEnum):
    """Linux capability bit numbers."""

    CHOWN = 0
    DAC_OVERRIDE = 1
    DAC_READ_SEARCH = 2
    FOWNER = 3
    FSETID = 4
    KILL = 5
    SETGID = 6
    SETUID = 7
    SETPCAP = 8
    LINUX_IMMUTABLE = 9
    NET_BIND_SERVICE = 10
    NET_BROADCAST = 11
    NET_ADMIN = 12
    NET_RAW = 13
    IPC_LOCK = 14
    IPC_OWNER = 15
    SYS_MODULE = 16
    SYS_RAWIO = 17
    SYS_CHROOT = 18
    SYS_PTRACE = 19
    SYS_PACCT = 20
    SYS_ADMIN = 21
    SYS_BOOT = 22
    SYS_NICE = 23
    SYS_RESOURCE = 24
    SYS_TIME = 25
    SYS_TTY_CONFIG = 26
    MKNOD = 27
    LEASE = 28
    AUDIT_WRITE = 29
    AUDIT_CONTROL = 30
    SETFCAP = 31
    MAC_OVERRIDE = 32
    MAC_ADMIN = 33
    SYSLOG = 34
    WAKE_ALARM = 35
    BLOCK_SUSPEND = 36


@dataclass
class CapabilitiesMask:
    """A 64-bit capability set."""

    raw: int = 0

    def is_set(self, capability: Capability) -> bool:
        return bool(self.raw & (1 << int(capability)))


class Signal(IntEnum):
    """Signal numbers on x86/ARM and most other architectures."""

    SIGHUP = 1
    SIGINT = 2
    SIGQUIT = 3
    SIGILL = 4
    SIGTRAP = 5
    SIGABRT = 6
    SIGIOT = 6
    SIGBUS = 7
    SIGFPE = 8
    SIGKILL = 9
    SIGUSR1 = 10
    SIGSEGV = 11
    SIGUSR2 = 12
    SIGPIPE = 13
    SIGALRM = 14
    SIGTERM = 15
    SIGSTKFLT = 16
    SIGCHLD = 17
    SIGCONT = 18
    SIGSTOP = 19
    SIGTSTP = 20
    SIGTTIN = 21
    SIGTTOU = 22
    SIGURG = 23
    SIGXCPU = 24
    SIGXFSZ = 25
    SIGVTALRM = 26
    SIGPROF = 27
    SIGWINCH = 28
    SIGIO = 29
    SIGPOLL = 29
    SIGPWR = 30
    SIGSYS = 31
    SIGUNUSED = 31


@dataclass
class SignalMask:
    """A 64-bit signal set; signal N occupies bit N-1."""

    raw: int = 0

    def is_set(self, signal: Signal) -> bool:
        return bool(self.raw & (1 << (int(signal) - 1)))


class Seccomp(Enum):
    """Seccomp mode of a task."""

    DISABLED = 0
    STRICT = 1
    FILTER = 2


@dataclass
class UidSet:
    """Real, effective, saved-set and filesystem ids."""

    real: int = INVALID_UID
    effective: int = INVALID_UID
    saved_set: int = INVALID_UID
    filesystem: int = INVALID_UID


@dataclass
class TaskStatus:
    """Contents of /proc/[pid]/status. Sizes are in kB."""

    name: str = ""
    umask: int = 0
    state: TaskState = TaskState.RUNNING
    tgid: int = INVALID_PID
    ngid: int = INVALID_PID
    pid: int = INVALID_PID
    ppid: int = INVALID_PID
    tracer_pid: int = INVALID_PID
    uid: UidSet = field(default_factory=UidSet)
    gid: UidSet = field(default_factory=UidSet)
    fd_size: int = 0
    groups: Set[int] = field(default_factory=set)
    ns_tgid: List[int] = field(default_factory=list)
    ns_pid: List[int] = field(default_factory=list)
    ns_pgid: List[int] = field(default_factory=list)
    ns_sid: List[int] = field(default_factory=list)
    vm_peak: int = 0
    vm_size: int = 0
    vm_lck: int = 0
    vm_pin: int = 0
    vm_hwm: int = 0
    vm_rss: int = 0
    rss_anon: int = 0
    rss_file: int = 0
    rss_shmem: int = 0
    vm_data: int = 0
    vm_stk: int = 0
    vm_exe: int = 0
    vm_lib: int = 0
    vm_pte: int = 0
    vm_swap: int = 0
    huge_tlb_pages: int = 0
    core_dumping: bool = False
    threads: int = 1
    sig_q: Tuple[int, int] = (0, 0)
    sig_pnd: SignalMask = field(default_factory=SignalMask)
    shd_pnd: SignalMask = field(default_factory=SignalMask)
    sig_blk: SignalMask = field(default_factory=SignalMask)
    sig_ign: SignalMask = field(default_factory=SignalMask)
    sig_cgt: SignalMask = field(default_factory=SignalMask)
    cap_inh: CapabilitiesMask = field(default_factory=CapabilitiesMask)
    cap_prm: CapabilitiesMask = field(default_factory=CapabilitiesMask)
    cap_eff: CapabilitiesMask = field(default_factory=CapabilitiesMask)
    cap_bnd: CapabilitiesMask = field(default_factory=CapabilitiesMask)
    cap_amb: CapabilitiesMask = field(default_factory=CapabilitiesMask)
    no_new_privs: bool = False
    seccomp_mode: Seccomp = Seccomp.DISABLED
    voluntary_ctxt_switches: int = 0
    nonvoluntary_ctxt_switches: int = 0


@dataclass
class MemStats:
    """Contents of /proc/[pid]/statm, in pages."""

    total: int = 0
    resident: int = 0
    shared: int = 0
    text: int = 0
    data: int = 0


@dataclass
class MemPerm:
    """Permissions of a memory mapping."""

    can_read: bool = False
    can_write: bool = False
    can_execute: bool = False
    is_shared: bool = False
    is_private: bool = False  # copy on write


@dataclass
class MemRegion:
    """A line of /proc/[pid]/maps; ordered by start address."""

    start_address: int = 0
    end_address: int = 0
    perm: MemPerm = field(default_factory=MemPerm)
    offset: int = 0
    device: int = 0
    inode: int = INVALID_INODE
    pathname: str = ""

    def __lt__(self, other: "MemRegion") -> bool:
        return self.start_address < other.start_address


class ModuleState(Enum):
    """Load state of a kernel module."""

    LIVE = 0
    LOADING = 1
    UNLOADING = 2


@dataclass
class Module:
    """A line of /proc/modules; ordered by name."""

    name: str = ""
    size: int = 0
    instances: int = 0
    dependencies: List[str] = field(default_factory=list)
    module_state: ModuleState = ModuleState.LIVE
    offset: int = 0
    is_out_of_tree: bool = False
    is_unsigned: bool = False

    def __lt__(self, other: "Module") -> bool:
        return self.name < other.name


@dataclass
class Uptime:
    """Contents of /proc/uptime."""

    system_time: timedelta = field(default_factory=timedelta)
    idle_time: timedelta = field(default_factory=timedelta)


@dataclass
class LoadAverage:
    """Contents of /proc/loadavg."""

    last_1min: float = 0.0
    last_5min: float = 0.0
    last_15min: float = 0.0
    runnable_tasks: int = 0
    total_tasks: int = 0
    last_created_task: int = 0


@dataclass
class Cpu:
    """CPU time counters from /proc/stat."""

    user: int = 0
    nice: int = 0
    system: int = 0
    idle: int = 0
    iowait: int = 0
    irq: int = 0
    softirq: int = 0
    steal: int = 0
    guest: int = 0
    guest_nice: int = 0


T = TypeVar("T")


@dataclass
class Sequence(Generic[T]):
    """A total value together with its per-item breakdown."""

    total: T
    per_item: List[T] = field(default_factory=list)


def _epoch() -> datetime:
    return datetime.fromtimestamp(0, tz=timezone.utc)


@dataclass
class ProcStat:
    """Contents of /proc/stat."""

    cpus: Sequence[Cpu] = field(default_factory=lambda: Sequence(Cpu()))
    intr: Sequence[int] = field(default_factory=lambda: Sequence(0))
    ctxt: int = 0
    btime: datetime = field(default_factory=_epoch)
    processes: int = 0
    procs_running: int = 0
    procs_blocked: int = 0
    softirq: Sequence[int] = field(default_factory=lambda: Sequence(0))


@dataclass
class Mount:
    """A line of /proc/[pid]/mountinfo; ordered by id."""

    id: int = 0
    parent_id: int = 0
    device: int = 0
    root: str = ""
    point: str = ""
    options: List[str] = field(default_factory=list)
    optional: List[str] = field(default_factory=list)
    filesystem_type: str = ""
    source: str = ""
    super_options: List[str] = field(default_factory=list)

    def __lt__(self, other: "Mount") -> bool:
        return self.id < other.id


@dataclass
class Zone:
    """A line of /proc/buddyinfo."""

    node_id: int = 0
    name: str = ""
    chunks: List[int] = field(default_factory=list)

    def __lt__(self, other: "Zone") -> bool:
        return self.node_id < other.node_id or self.name < other.name


class IP:
    """An IPv4 or IPv6 address stored as kernel-order 32-bit words."""

    __slots__ = ("domain", "storage")

    def __init__(self, addr: Optional[Union[int, SequenceType[int]]] = None) -> None:
        if addr is None:
            self.domain = socket.AF_UNSPEC
            self.storage: Tuple[int, int, int, int] = (0, 0, 0, 0)
        elif isinstance(addr, int):
            self.domain = socket.AF_INET
            self.storage = (addr & 0xFFFFFFFF, 0, 0, 0)
        else:
            words = tuple(int(w) & 0xFFFFFFFF for w in addr)
            if len(words) != 4:
                raise ValueError("An IPv6 address needs exactly four words")
            self.domain = socket.AF_INET6
            self.storage = words  # type: ignore[assignment]

    def is_v4(self) -> bool:
        return self.domain == socket.AF_INET

    def is_v6(self) -> bool:
        return self.domain == socket.AF_INET6

    def to_string(self) -> str:
        if self.is_v4():
            return str(ipaddress.IPv4Address(struct.pack("=I", self.storage[0])))
        if self.is_v6():
            return str(ipaddress.IPv6Address(struct.pack("=4I", *self.storage)))
        return ""

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"IP(domain={self.domain}, storage={self.storage})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IP):
            return NotImplemented
        return self.domain == other.domain and self.storage == other.storage

    def __hash__(self) -> int:
        return hash((self.domain, self.storage))


@dataclass
class NetDevice:
    """A line of /proc/net/dev."""

    interface: str = ""
    rx_bytes: int = 0
    rx_packets: int = 0
    rx_errs: int = 0
    rx_drop: int = 0
    rx_fifo: int = 0
    rx_frame: int = 0
    rx_compressed: int = 0
    rx_multicast: int = 0
    tx_bytes: int = 0
    tx_packets: int = 0
    tx_errs: int = 0
    tx_drop: int = 0
    tx_fifo: int = 0
    tx_colls: int = 0
    tx_carrier: int = 0
    tx_compressed: int = 0


class SocketTimer(Enum):
    """Pending timer of an inet socket."""

    NONE = 0
    RETRANSMIT = 1
    ANOTHER = 2
    TIME_WAIT = 3
    ZERO_WINDOW = 4


class NetState(Enum):
    """TCP state of an inet socket."""

    ESTABLISHED = 1
    SYN_SENT = 2
    SYN_RECV = 3
    FIN_WAIT1 = 4
    FIN_WAIT2 = 5
    TIME_WAIT = 6
    CLOSE = 7
    CLOSE_WAIT = 8
    LAST_ACK = 9
    LISTEN = 10
    CLOSING = 11


@dataclass
class NetSocket:
    """A line of /proc/net/{tcp,udp,raw,...}[6]."""

    slot: int = 0
    local_ip: IP = field(default_factory=IP)
    local_port: int = 0
    remote_ip: IP = field(default_factory=IP)
    remote_port: int = 0
    socket_net_state: NetState = NetState.CLOSE
    tx_queue: int = 0
    rx_queue: int = 0
    timer_active: SocketTimer = SocketTimer.NONE
    timer_expire_jiffies: int = 0
    retransmits: int = 0
    uid: int = 0
    timeouts: int = 0
    inode: int = INVALID_INODE
    ref_count: int = 0
    skbuff: int = 0

    def __lt__(self, other: "NetSocket") -> bool:
        return self.skbuff < other.skbuff or self.inode < other.inode


class UnixSocketType(Enum):
    """Type of a unix domain socket."""

    STREAM = 1
    DATAGRAM = 2
    SEQPACKET = 5


class UnixSocketState(Enum):
    """Connection state of a unix domain socket."""

    FREE = 0
    UNCONNECTED = 1
    CONNECTING = 2
    CONNECTED = 3
    DISCONNECTING = 4


@dataclass
class UnixSocket:
    """A line of /proc/net/unix."""

    skbuff: int = 0
    ref_count: int = 0
    protocol: int = 0
    flags: int = 0
    socket_type: UnixSocketType = UnixSocketType.STREAM
    socket_state: UnixSocketState = UnixSocketState.FREE
    inode: int = INVALID_INODE
    path: str = ""

    def __lt__(self, other: "UnixSocket") -> bool:
        return self.skbuff < other.skbuff or self.inode < other.inode


@dataclass
class NetlinkSocket:
    """A line of /proc/net/netlink."""

    skbuff: int = 0
    protocol: int = 0
    port_id: int = 0
    groups: int = 0
    rmem: int = 0
    wmem: int = 0
    dumping: bool = False
    ref_count: int = 0
    drops: int = 0
    inode: int = INVALID_INODE

    def __lt__(self, other: "NetlinkSocket") -> bool:
        return self.skbuff < other.skbuff or self.inode < other.inode


@dataclass
class CgroupController:
    """A line of /proc/cgroups."""

    subsys_name: str = ""
    hierarchy: int = 0
    num_cgroups: int = 0
    enabled: bool = False


@dataclass
class Cgroup:
    """A line of /proc/[pid]/cgroup."""

    hierarchy: int = 0
    controllers: List[str] = field(default_factory=list)
    pathname: str = ""


@dataclass
class IdMap:
    """A line of /proc/[pid]/{uid,gid}_map."""

    id_inside_ns: int = 0
    id_outside_ns: int = 0
    length: int = UINT32_MAX


@dataclass
class NetRoute:
    """A line of /proc/net/route."""

    iface: str = ""
    destination: IP = field(default_factory=IP)
    gateway: IP = field(default_factory=IP)
    flags: int = 0
    refcnt: int = 0
    use: int = 0
    metric: int = 0
    mask: IP = field(default_factory=IP)
    mtu: int = 0
    window: int = 0
    irtt: int = 0


@dataclass
class NetArp:
    """A line of /proc/net/arp."""

    ip_address: str = ""
    type: int = 0
    flags: int = 0
    hw_address: str = ""
    mask: str = ""
    device: str = ""


@dataclass
class BlockStat:
    """Contents of /sys/block/<dev>/stat."""

    read_ios: int = 0
    read_merges: int = 0
    read_sectors: int = 0
    read_ticks: int = 0
    write_ios: int = 0
    write_merges: int = 0
    write_sectors: int = 0
    write_ticks: int = 0
    in_flight: int = 0
    io_ticks: int = 0
    time_in_queue: int = 0
    discard_ios: int = 0
    discard_merges: int = 0
    discard_sectors: int = 0
    discard_ticks: int = 0
    flush_ios: int = 0
    flush_ticks: int = 0