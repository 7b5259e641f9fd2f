"""Text rendering of network and block-device records."""

from __future__ import annotations

from typing import Iterable

from .types import (
    BlockStat,
    NetArp,
    NetDevice,
    NetlinkSocket,
    NetRoute,
    NetSocket,
    NetState,
    SocketTimer,
    UnixSocket,
    UnixSocketState,
    UnixSocketType,
)

_PRINTABLE_MIN = 0x21
_PRINTABLE_MAX = 0x7E

_TIMER_NAMES = {
    SocketTimer.NONE: "None",
    SocketTimer.RETRANSMIT: "Retransmit",
    SocketTimer.ANOTHER: "Another",
    SocketTimer.TIME_WAIT: "Time-Wait",
    SocketTimer.ZERO_WINDOW: "Zero-Window",
}

_NET_STATE_NAMES = {
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
}

_UNIX_TYPE_NAMES = {
    UnixSocketType.STREAM: "Stream",
    UnixSocketType.DATAGRAM: "Datagram",
    UnixSocketType.SEQPACKET: "SeqPacket",
}

_UNIX_STATE_NAMES = {
    UnixSocketState.FREE: "Free",
    UnixSocketState.UNCONNECTED: "Unconnected",
    UnixSocketState.CONNECTING: "Connecting",
    UnixSocketState.CONNECTED: "Connected",
    UnixSocketState.DISCONNECTING: "Disconnecting",
}

_NET_DEVICE_FIELDS = (
    "rx_bytes",
    "rx_packets",
    "rx_errs",
    "rx_drop",
    "rx_fifo",
    "rx_frame",
    "rx_compressed",
    "rx_multicast",
    "tx_bytes",
    "tx_packets",
    "tx_errs",
    "tx_drop",
    "tx_fifo",
    "tx_colls",
    "tx_carrier",
    "tx_compressed",
)

_BLOCK_STAT_FIELDS = (
    "read_ios",
    "read_merges",
    "read_sectors",
    "read_ticks",
    "write_ios",
    "write_merges",
    "write_sectors",
    "write_ticks",
    "in_flight",
    "io_ticks",
    "time_in_queue",
    "discard_ios",
    "discard_merges",
    "discard_sectors",
    "discard_ticks",
)


def _fields(obj: object, names: Iterable[str]) -> str:
    return "".join(f"{name}[{getattr(obj, name)}] " for name in names)


def join(items: Iterable[object]) -> str:
    """Join items with commas, without a trailing separator."""
    return ",".join(str(item) for item in items)


def is_printable(byte: int) -> bool:
    """Whether a byte is a visible, non-space ASCII character."""
    return _PRINTABLE_MIN <= byte <= _PRINTABLE_MAX


def hexlify(buffer: Iterable[int]) -> str:
    """Render bytes as text, replacing non-printable bytes with '.'."""
    return "".join(chr(b) if is_printable(b) else "." for b in buffer)


def _timer_name(timer: SocketTimer) -> str:
    return _TIMER_NAMES.get(timer, "Unknown")


def _net_state_name(state: NetState) -> str:
    return _NET_STATE_NAMES.get(state, "Unknown")


def format_net_device(device: NetDevice) -> str:
    """Render a /proc/net/dev record."""
    return f"interface[{device.interface}] " + _fields(device, _NET_DEVICE_FIELDS)


def format_net_socket(socket: NetSocket) -> str:
    """Render an inet socket record."""
    return (
        f"slot[{socket.slot}] "
        f"local[{socket.local_ip.to_string()}:{socket.local_port}] "
        f"remote[{socket.remote_ip.to_string()}:{socket.remote_port}] "
        f"state[{_net_state_name(socket.socket_net_state)}] "
        f"tx_queue[{socket.tx_queue}] "
        f"rx_queue[{socket.rx_queue}] "
        f"timer[{_timer_name(socket.timer_active)}] "
        f"timer_expire[{socket.timer_expire_jiffies}] "
        f"retransmits[{socket.retransmits}] "
        f"uid[{socket.uid}] "
        f"timeouts[{socket.timeouts}] "
        f"inode[{socket.inode}] "
        f"ref_count[{socket.ref_count}] "
        f"skbuff[0x{socket.skbuff:x}] "
    )


def format_unix_socket(socket: UnixSocket) -> str:
    """Render a unix domain socket record."""
    return (
        f"skbuff[0x{socket.skbuff:x}] "
        f"ref_count[{socket.ref_count}] "
        f"protocol[{socket.protocol}] "
        f"flags[{socket.flags}] "
        f"type[{_UNIX_TYPE_NAMES.get(socket.socket_type, 'Unknown')}] "
        f"state[{_UNIX_STATE_NAMES.get(socket.socket_state, 'Unknown')}] "
        f"inode[{socket.inode}] "
        f"path[{socket.path}] "
    )


def format_netlink_socket(socket: NetlinkSocket) -> str:
    """Render a netlink socket record."""
    return (
        f"skbuff[0x{socket.skbuff:x}] "
        f"protocol[{socket.protocol}] "
        f"port_id[{socket.port_id}] "
        f"groups[{socket.groups:08x}] "
        f"rmem[{socket.rmem}] "
        f"wmem[{socket.wmem}] "
        f"dumping[{'true' if socket.dumping else 'false'}] "
        f"ref_count[{socket.ref_count}] "
        f"drops[{socket.drops}] "
        f"inode[{socket.inode}] "
    )


def format_net_route(route: NetRoute) -> str:
    """Render a /proc/net/route record."""
    return (
        f"interface[{route.iface}] "
        f"destination[{route.destination.to_string()}] "
        f"gateway[{route.gateway.to_string()}] "
        f"flags[{route.flags}] "
        f"refcnt[{route.refcnt}] "
        f"use[{route.use}] "
        f"metric[{route.metric}] "
        f"mask[{route.mask.to_string()}] "
        f"mtu[{route.mtu}] "
        f"window[{route.window}] "
        f"irtt[{route.irtt}] "
    )


def format_net_arp(arp: NetArp) -> str:
    """Render a /proc/net/arp record."""
    return (
        f"ip_address[{arp.ip_address}] "
        f"type[{arp.type}] "
        f"flags[{arp.flags}] "
        f"hw_address[{arp.hw_address}] "
        f"mask[{arp.mask}] "
        f"device[{arp.device}] "
    )


def format_block_stat(stat: BlockStat) -> str:
    """Render a block device stat record."""
    return _fields(stat, _BLOCK_STAT_FIELDS)