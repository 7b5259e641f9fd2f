import re
from dataclasses import asdict
from datetime import datetime, timedelta, timezone

import pytest

from pfskit.fmt_net import format_net_arp
from pfskit.fmt_system import (
    describe,
    format_cgroup,
    format_cgroup_controller,
    format_cpu,
    format_io_stats,
    format_load_average,
    format_mem_perm,
    format_mem_region,
    format_mem_stats,
    format_module,
    format_mount,
    format_proc_stat,
    format_task_stat,
    format_task_status,
    format_uptime,
    format_zone,
    to_hex_mask,
    to_octal_mask,
)
from pfskit.types import (
    CapabilitiesMask,
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
    ProcStat,
    Seccomp,
    Sequence,
    SignalMask,
    TaskStat,
    TaskState,
    TaskStatus,
    UidSet,
    Uptime,
    Zone,
)


def _fields(text):
    return dict(re.findall(r"(\w+)\[([^\[\]]*)\]", text))


def test_octal_mask_source_value():
    assert to_octal_mask(0o0002) == "0002"


@pytest.mark.parametrize("mask", [0, 2, 0o22, 0o777, 0o17777])
def test_octal_mask_round_trip(mask):
    out = to_octal_mask(mask)
    assert len(out) >= 4
    assert int(out, 8) == mask


def test_hex_mask_source_value():
    assert to_hex_mask(0x000000004B817EFB) == "000000004b817efb"


@pytest.mark.parametrize("mask", [0, 0x10000, 0x3FFFFFFFFF, (1 << 64) - 1])
def test_hex_mask_round_trip(mask):
    out = to_hex_mask(mask)
    assert len(out) == 16
    assert int(out, 16) == mask


def _bash_status():
    return TaskStatus(
        name="bash",
        umask=0o0002,
        state=TaskState.SLEEPING,
        tgid=4481,
        ngid=0,
        pid=4481,
        ppid=1322,
        tracer_pid=0,
        uid=UidSet(1000, 1000, 1000, 1000),
        gid=UidSet(1000, 1000, 1000, 1000),
        fd_size=256,
        groups={27, 4, 24},
        ns_tgid=[4481, 1],
        ns_pid=[4481, 1],
        ns_pgid=[4481, 1],
        ns_sid=[4481, 1],
        vm_peak=23848,
        vm_size=23816,
        sig_q=(1, 3697),
        sig_cgt=SignalMask(0x000000004B817EFB),
        cap_bnd=CapabilitiesMask(0x0000003FFFFFFFFF),
        voluntary_ctxt_switches=4731,
        nonvoluntary_ctxt_switches=5004,
    )


def test_task_status_fields():
    status = _bash_status()
    fields = _fields(format_task_status(status))
    assert fields["name"] == "bash"
    assert fields["umask"] == "0002"
    assert fields["state"] == "Sleeping"
    assert int(fields["pid"]) == status.pid
    assert int(fields["ppid"]) == status.ppid
    assert [int(x) for x in fields["uid"].split(",")] == [1000] * 4
    assert [int(x) for x in fields["groups"].split(",")] == sorted(status.groups)
    assert [int(x) for x in fields["ns_pid"].split(",")] == status.ns_pid
    assert int(fields["vm_peak"]) == status.vm_peak
    assert tuple(int(x) for x in fields["sig_q"].split("/")) == status.sig_q
    assert fields["sig_cgt"] == "000000004b817efb"
    assert int(fields["cap_bnd"], 16) == status.cap_bnd.raw
    assert fields["core_dumping"] == "false"
    assert fields["no_new_privs"] == fields["core_dumping"]
    assert fields["seccomp"] == "Disabled"
    assert int(fields["nonvoluntary_ctxt_switches"]) == 5004


def test_task_status_empty_lists_render_empty():
    fields = _fields(format_task_status(TaskStatus()))
    assert fields["groups"] == ""
    assert fields["ns_tgid"] == ""


def _kernel_stat():
    return TaskStat(
        pid=30739,
        comm="kworker/0:3-cgroup_destroy",
        state=TaskState.IDLE,
        ppid=2,
        tgpid=-1,
        flags=69238880,
        stime=1485,
        priority=20,
        num_threads=1,
        starttime=409074,
        rsslim=18446744073709551615,
        sigignore=2147483647,
        wchan=1,
        exit_signal=17,
    )


def test_task_stat_fields():
    stat = _kernel_stat()
    text = format_task_stat(stat)
    fields = _fields(text)
    assert fields["comm"] == stat.comm
    assert fields["state"] == "Idle"
    assert int(fields["tgpid"]) == -1
    assert int(fields["rsslim"]) == 18446744073709551615
    assert int(fields["sigignore"]) == 2147483647
    for name in ("pid", "flags", "stime", "starttime", "exit_signal", "exit_code"):
        assert int(fields[name]) == getattr(stat, name)


def test_task_stat_tail_has_no_separators():
    text = format_task_stat(TaskStat())
    assert "]env_start[" in text
    assert "]exit_code[" in text
    assert text.endswith("]")


def test_mem_stats_and_io_stats():
    mem = MemStats(10, 20, 30, 40, 50)
    fields = _fields(format_mem_stats(mem))
    assert {k: int(v) for k, v in fields.items()} == asdict(mem)
    assert format_mem_stats(mem).endswith("]")

    io = IoStats(1, 2, 3, 4, 5, 6, 7)
    fields = _fields(format_io_stats(io))
    assert {k: int(v) for k, v in fields.items()} == asdict(io)


@pytest.mark.parametrize("read", [True, False])
@pytest.mark.parametrize("write", [True, False])
@pytest.mark.parametrize("execute", [True, False])
@pytest.mark.parametrize("shared", [True, False])
def test_mem_perm_reflects_flags(read, write, execute, shared):
    out = format_mem_perm(MemPerm(read, write, execute, shared, not shared))
    assert len(out) == 4
    assert ("r" in out) == read
    assert ("w" in out) == write
    assert ("x" in out) == execute
    assert (out[3] == "s") == shared
    assert out[3] in "sp"


def test_mem_region_fields():
    region = MemRegion(
        start_address=0x400000,
        end_address=0x401000,
        perm=MemPerm(can_read=True, can_execute=True, is_private=True),
        offset=0x1000,
        device=0x803,
        inode=1234,
        pathname="/bin/cat",
    )
    text = format_mem_region(region)
    fields = _fields(text)
    assert int(fields["addr"], 16) == region.start_address
    end = re.search(r"\]-\[(0x[0-9a-f]+)\]", text)
    assert int(end.group(1), 16) == region.end_address
    assert fields["perm"] == format_mem_perm(region.perm)
    assert int(fields["offset"], 16) == region.offset
    assert int(fields["device"], 16) == region.device
    assert int(fields["inode"]) == region.inode
    assert fields["pathname"] == region.pathname


def test_mount_fields():
    mount = Mount(
        id=22,
        parent_id=1,
        device=5,
        root="/",
        point="/sys",
        options=["rw", "nosuid"],
        optional=["shared:7"],
        filesystem_type="sysfs",
        source="sysfs",
        super_options=["rw"],
    )
    fields = _fields(format_mount(mount))
    assert fields["options"].split(",") == mount.options
    assert fields["optional"].split(",") == mount.optional
    assert fields["fs"] == mount.filesystem_type
    assert fields["point"] == mount.point
    assert int(fields["id"]) == mount.id


def test_module_fields():
    module = Module(
        name="vboxsf",
        size=77824,
        instances=2,
        dependencies=[],
        module_state=ModuleState.LIVE,
        offset=0xFFFFFFFFC0759000,
        is_out_of_tree=True,
        is_unsigned=True,
    )
    fields = _fields(format_module(module))
    assert fields["name"] == "vboxsf"
    assert fields["dependencies"] == ""
    assert fields["state"] == "Live"
    assert int(fields["offset"]) == 0xFFFFFFFFC0759000
    assert fields["out_of_tree"] == "true"
    assert fields["unsigned"] == fields["out_of_tree"]


def test_module_dependencies_join():
    module = Module(name="raid6_pq", dependencies=["btrfs", "raid456"])
    fields = _fields(format_module(module))
    assert fields["dependencies"].split(",") == module.dependencies


def test_load_average():
    load = LoadAverage(0.12, 0.34, 5.04, 1, 112, 5935)
    fields = _fields(format_load_average(load))
    assert [float(x) for x in fields["load"].split(", ")] == [0.12, 0.34, 5.04]
    assert int(fields["runnable_tasks"]) == 1
    assert int(fields["total_tasks"]) == 112
    assert int(fields["last_created_task"]) == 5935


def test_uptime_truncates_to_seconds():
    uptime = Uptime(
        timedelta(seconds=100, milliseconds=900), timedelta(seconds=40, milliseconds=1)
    )
    fields = _fields(format_uptime(uptime))
    assert fields["system_time"].endswith("s")
    assert int(fields["system_time"][:-1]) == 100
    assert int(fields["idle_time"][:-1]) == 40


def test_cpu_fields():
    cpu = Cpu(1, 2, 3, 4, 5, 6, 7, 8, 9, 10)
    text = format_cpu(cpu)
    assert {k: int(v) for k, v in _fields(text).items()} == asdict(cpu)
    assert text.endswith("]")


def test_proc_stat():
    btime = datetime.fromtimestamp(1600000000, tz=timezone.utc)
    stats = ProcStat(
        cpus=Sequence(Cpu(user=9), [Cpu(user=4), Cpu(user=5)]),
        intr=Sequence(11, [5, 6]),
        ctxt=77,
        btime=btime,
        processes=300,
        procs_running=2,
        procs_blocked=0,
        softirq=Sequence(13, [1, 2, 3]),
    )
    text = format_proc_stat(stats)
    lines = text.split("\n")
    assert lines[0] == f"stat_cpu_total[{format_cpu(stats.cpus.total)}]"
    assert lines[1] == f"stat_cpu0[{format_cpu(stats.cpus.per_item[0])}]"
    assert lines[2] == f"stat_cpu1[{format_cpu(stats.cpus.per_item[1])}]"
    intr = re.search(r"per_interrupt: ([\d,]*)\]", text)
    assert [int(x) for x in intr.group(1).split(",")] == stats.intr.per_item
    assert f"stat_btime[{int(btime.timestamp())}]" in text
    assert f"stat_ctxt[{stats.ctxt}]" in text
    irq = re.search(r"per_irq: ([\d,]*)\]", text)
    assert [int(x) for x in irq.group(1).split(",")] == stats.softirq.per_item
    assert len(lines) == 6


def test_zone_and_cgroups():
    zone = Zone(0, "DMA32", [3, 1, 4])
    fields = _fields(format_zone(zone))
    assert fields["zone"] == "DMA32"
    assert [int(x) for x in fields["chunks"].split(",")] == zone.chunks

    controller = CgroupController("perf_event", 11, 1, True)
    fields = _fields(format_cgroup_controller(controller))
    assert fields["subsys_name"] == "perf_event"
    assert int(fields["hierarchy"]) == 11
    assert fields["enabled"] == describe(True)

    cgroup = Cgroup(4, ["cpu", "cpuacct"], "/user.slice")
    fields = _fields(format_cgroup(cgroup))
    assert fields["controllers"].split(",") == cgroup.controllers
    assert fields["pathname"] == cgroup.pathname


def test_describe_dispatches():
    assert describe(TaskState.DISK_SLEEP) == "Disk-Sleep"
    assert describe(Seccomp.FILTER) == "Filter"
    assert describe(ModuleState.UNLOADING) == "Unloading"
    assert describe(Cpu(user=3)) == format_cpu(Cpu(user=3))
    arp = NetArp(ip_address="192.168.10.1", device="eth0")
    assert describe(arp) == format_net_arp(arp)
    assert describe("abc") == "abc"
    assert [int(x) for x in describe(UidSet(1, 2, 3, 4)).split(",")] == [1, 2, 3, 4]
    assert describe(True) != describe(False)