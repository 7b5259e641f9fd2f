import io

from pfskit.fmt_system import describe, format_cpu
from pfskit.log import format_pair, print_section, render_section
from pfskit.types import Cpu, TaskState


def test_format_pair():
    assert format_pair("a", 1) == "a = 1"
    assert format_pair("ext3", True) == "ext3 = true"


def test_scalar_section():
    out = render_section("uptime", 5)
    lines = out.split("\n")
    assert lines[0] == "uptime"
    assert set(lines[1]) == {"-"}
    assert len(lines[1]) == len("uptime")
    assert lines[2] == "5"
    assert out.endswith("\n\n")


def test_string_is_not_iterated():
    out = render_section("cmdline", "abc")
    assert out.split("\n")[2] == "abc"
    assert out.count("\n") == 4


def test_list_gives_one_line_per_item():
    items = [Cpu(user=1), Cpu(user=2), Cpu(user=3)]
    out = render_section("cpus", items)
    lines = out.split("\n")
    assert lines[2:5] == [format_cpu(item) for item in items]
    assert lines[5:] == ["", ""]


def test_empty_list_gives_only_title():
    out = render_section("maps", [])
    assert out.split("\n") == ["maps", "----", "", ""]


def test_mapping_renders_pairs():
    data = {"MemTotal": 100, "MemFree": 50}
    lines = render_section("meminfo", data).split("\n")
    assert sorted(lines[2:4]) == sorted(format_pair(k, v) for k, v in data.items())


def test_pair_tuple_is_a_single_line():
    lines = render_section("sig", ("x", 2)).split("\n")
    assert lines[2] == format_pair("x", 2)
    assert lines[3] == ""


def test_record_uses_describe():
    lines = render_section("state", TaskState.ZOMBIE).split("\n")
    assert lines[2] == describe(TaskState.ZOMBIE)


def test_print_section_writes_rendering():
    stream = io.StringIO()
    print_section("groups", {3, 1, 2}, stream)
    assert stream.getvalue() == render_section("groups", {3, 1, 2})
    assert stream.getvalue().split("\n")[2:5] == ["1", "2", "3"]