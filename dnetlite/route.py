"""Kernel routing table access: add, delete, look up and list routes."""

from __future__ import annotations

import errno
import ipaddress
import os
import socket
import struct
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Optional, Union

try:
    import fcntl
except ImportError:  # not available on every platform
    fcntl = None  # type: ignore[assignment]

Network = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]
Address = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

PROC_ROUTE_FILE = "/proc/net/route"
PROC_IPV6_ROUTE_FILE = "/proc/net/ipv6_route"

INTF_NAME_LEN = 16

RTF_UP = 0x0001
RTF_GATEWAY = 0x0002
RTF_HOST = 0x0004

_SIOCADDRT = 0x890B
_SIOCDELRT = 0x890C

_NLM_F_REQUEST = 0x1
_NLMSG_ERROR = 2
_RTM_GETROUTE = 26
_RTA_DST = 1
_RTA_OIF = 4
_RTA_GATEWAY = 5

_NLMSG_HDR = struct.Struct("=IHHII")
_RTMSG = struct.Struct("=BBBBBBBBI")
_RTATTR = struct.Struct("=HH")
_RTENTRY = struct.Struct("@L16s16s16sHhLPhPLLH0L")

# Looking up 0.0.0.0 asks for nothing useful; probe an arbitrary
# off-link address so the kernel answers with the default route.
_DEFAULT_ROUTE_PROBE = ipaddress.IPv4Address("96.6.6.6")

_REPLY_SIZE = 512


@dataclass(frozen=True)
class RouteEntry:
    """One route: destination network, gateway, interface and metric."""

    dst: Network
    gw: Optional[Address] = None
    intf_name: str = ""
    metric: int = 0


def _network(value: object) -> Network:
    return ipaddress.ip_network(value, strict=False)  # type: ignore[arg-type]


def _host_word(text: str) -> bytes:
    try:
        return int(text, 16).to_bytes(4, sys.byteorder)
    except OverflowError as exc:
        raise ValueError(f"value out of range: {text!r}") from exc


def _mask_bits(raw: bytes) -> int:
    value = int.from_bytes(raw, "big")
    width = len(raw) * 8
    count = bin(value).count("1")
    expected = ((1 << count) - 1) << (width - count)
    if value != expected:
        raise ValueError(f"netmask is not contiguous: {raw.hex()}")
    return count


def parse_ipv4_routes(lines: Iterable[str]) -> Iterator[RouteEntry]:
    """Yield the usable routes from lines in the ``/proc/net/route`` format."""
    for line in lines:
        fields = line.split()
        if len(fields) < 11:
            continue
        try:
            dst_raw = _host_word(fields[1])
            gw_raw = _host_word(fields[2])
            flags = int(fields[3], 16)
            int(fields[4])
            int(fields[5])
            metric = int(fields[6])
            mask_raw = _host_word(fields[7])
            for extra in fields[8:11]:
                int(extra)
        except ValueError:
            continue
        if not flags & RTF_UP:
            continue
        try:
            bits = _mask_bits(mask_raw)
        except ValueError:
            continue
        dst = ipaddress.IPv4Network(
            (ipaddress.IPv4Address(dst_raw), bits), strict=False
        )
        yield RouteEntry(
            dst=dst,
            gw=ipaddress.IPv4Address(gw_raw),
            intf_name=fields[0][: INTF_NAME_LEN - 1],
            metric=metric,
        )


def parse_ipv6_routes(lines: Iterable[str]) -> Iterator[RouteEntry]:
    """Yield the usable routes from lines in the ``/proc/net/ipv6_route`` format."""
    for line in lines:
        fields = line.split()
        if len(fields) < 9:
            continue
        dest, dlen, _src, _slen, nexthop, metric_text, _ref, _use, flags_text = fields[:9]
        iface = fields[9] if len(fields) > 9 else ""
        try:
            dst_addr = ipaddress.IPv6Address(bytes.fromhex(dest))
            prefix = int(dlen, 16)
            gw = ipaddress.IPv6Address(bytes.fromhex(nexthop))
            metric = int(metric_text, 16)
            flags = int(flags_text, 16)
            dst = ipaddress.IPv6Network((dst_addr, prefix), strict=False)
        except ValueError:
            continue
        if not flags & RTF_UP:
            continue
        yield RouteEntry(
            dst=dst, gw=gw, intf_name=iface[: INTF_NAME_LEN - 1], metric=metric
        )


def _sockaddr_in(address: ipaddress.IPv4Address) -> bytes:
    return struct.pack("@HH", socket.AF_INET, 0) + address.packed + bytes(8)


def _rtentry(dst: ipaddress.IPv4Network, gw: Optional[ipaddress.IPv4Address], flags: int) -> bytes:
    gateway = _sockaddr_in(gw) if gw is not None else bytes(16)
    return _RTENTRY.pack(
        0,
        _sockaddr_in(dst.network_address),
        gateway,
        _sockaddr_in(dst.netmask),
        flags,
        0, 0, 0, 0, 0, 0, 0, 0,
    )


def _parse_getroute_reply(reply: bytes, seq: int, dst: Network) -> RouteEntry:
    if len(reply) < _NLMSG_HDR.size:
        raise OSError(errno.EINVAL, "short netlink reply")
    length, mtype, _flags, reply_seq, _pid = _NLMSG_HDR.unpack_from(reply)
    if length < _NLMSG_HDR.size or length > len(reply) or reply_seq != seq:
        raise OSError(errno.EINVAL, "malformed netlink reply")
    if mtype == _NLMSG_ERROR:
        code = errno.EINVAL
        if length >= _NLMSG_HDR.size + 4:
            code = -struct.unpack_from("=i", reply, _NLMSG_HDR.size)[0] or errno.EINVAL
        raise OSError(code, os.strerror(code))

    alen = 4 if dst.version == 4 else 16
    gw: Optional[Address] = None
    name = ""
    offset = _NLMSG_HDR.size + _RTMSG.size
    while offset + _RTATTR.size <= length:
        rlen, rtype = _RTATTR.unpack_from(reply, offset)
        if rlen < _RTATTR.size or offset + rlen > length:
            break
        data = reply[offset + _RTATTR.size : offset + rlen]
        if rtype == _RTA_GATEWAY:
            gw = ipaddress.ip_address(data[:alen])
        elif rtype == _RTA_OIF:
            index = struct.unpack_from("=i", data)[0]
            name = socket.if_indextoname(index)[: INTF_NAME_LEN - 1]
        offset += (rlen + 3) & ~3
    if gw is None:
        raise OSError(errno.ESRCH, "no gateway for route")
    return RouteEntry(dst=dst, gw=gw, intf_name=name, metric=0)


class Route:
    """Handle on the kernel routing table."""

    def __init__(self) -> None:
        self._sock: Optional[socket.socket] = None
        self._nlsock: Optional[socket.socket] = None
        self._seq = 0
        if not hasattr(socket, "AF_NETLINK") or fcntl is None:
            raise OSError(errno.ENOSYS, "routing table access is not supported here")
        try:
            self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            self._nlsock = socket.socket(
                socket.AF_NETLINK, socket.SOCK_RAW, socket.NETLINK_ROUTE
            )
            self._nlsock.bind((0, 0))
        except OSError:
            self.close()
            raise

    def __enter__(self) -> Route:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _ioctl_sock(self) -> socket.socket:
        if self._sock is None:
            raise ValueError("route handle is closed")
        return self._sock

    def _netlink(self) -> socket.socket:
        if self._nlsock is None:
            raise ValueError("route handle is closed")
        return self._nlsock

    def add(self, entry: RouteEntry) -> None:
        """Add an IPv4 route through ``entry.gw``."""
        dst = _network(entry.dst)
        if entry.gw is None:
            raise ValueError("a route needs a gateway")
        gw = ipaddress.ip_address(entry.gw)
        if dst.version != 4 or gw.version != 4:
            raise ValueError("only IPv4 routes can be added")
        flags = RTF_UP | RTF_GATEWAY
        if dst.prefixlen == dst.max_prefixlen:
            flags |= RTF_HOST
        sock = self._ioctl_sock()
        fcntl.ioctl(sock.fileno(), _SIOCADDRT, _rtentry(dst, gw, flags))

    def delete(self, entry: RouteEntry) -> None:
        """Delete the IPv4 route to ``entry.dst``."""
        dst = _network(entry.dst)
        if dst.version != 4:
            raise ValueError("only IPv4 routes can be deleted")
        flags = RTF_UP
        if dst.prefixlen == dst.max_prefixlen:
            flags |= RTF_HOST
        sock = self._ioctl_sock()
        fcntl.ioctl(sock.fileno(), _SIOCDELRT, _rtentry(dst, None, flags))

    def get(self, dst: object) -> RouteEntry:
        """Look up the route the kernel would use for ``dst``."""
        network = _network(dst)
        sock = self._netlink()
        if network.version == 4:
            family = socket.AF_INET
            if int(network.network_address) == 0:
                probe = _DEFAULT_ROUTE_PROBE.packed
            else:
                probe = network.network_address.packed
        else:
            family = socket.AF_INET6
            probe = network.network_address.packed
        self._seq = (self._seq + 1) & 0xFFFFFFFF
        attr = _RTATTR.pack(_RTATTR.size + len(probe), _RTA_DST) + probe
        body = _RTMSG.pack(family, network.prefixlen, 0, 0, 0, 0, 0, 0, 0) + attr
        message = (
            _NLMSG_HDR.pack(
                _NLMSG_HDR.size + len(body), _RTM_GETROUTE, _NLM_F_REQUEST, self._seq, 0
            )
            + body
        )
        sock.sendto(message, (0, 0))
        reply = sock.recv(_REPLY_SIZE)
        if not reply:
            raise OSError(errno.EINVAL, "empty netlink reply")
        return _parse_getroute_reply(reply, self._seq, network)

    def loop(self) -> Iterator[RouteEntry]:
        """Yield every active IPv4 route, then every active IPv6 route."""
        sources = (
            (PROC_ROUTE_FILE, parse_ipv4_routes),
            (PROC_IPV6_ROUTE_FILE, parse_ipv6_routes),
        )
        for path, parser in sources:
            try:
                handle = open(path, encoding="ascii", errors="replace")
            except OSError:
                continue
            with handle:
                yield from parser(handle)

    def close(self) -> None:
        """Release the handle's sockets; safe to call twice."""
        for sock in (self._sock, self._nlsock):
            if sock is not None:
                sock.close()
        self._sock = None
        self._nlsock = None