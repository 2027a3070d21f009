"""Point-to-point IP tunnel devices."""

from __future__ import annotations

import errno
import ipaddress
import os
import socket
import struct
import sys
from typing import Optional

try:
    import fcntl
except ImportError:  # not available on every platform
    fcntl = None  # type: ignore[assignment]

TUN_DEVICE = "/dev/net/tun"

ETH_TYPE_IP = 0x0800
FRAME_HDR_LEN = 4

IFNAMSIZ = 16
_IFREQ_LEN = 40

_TUNSETIFF = 0x400454CA
_IFF_TUN = 0x0001
_IFF_UP = 0x0001
_IFF_POINTOPOINT = 0x0010

_SIOCGIFFLAGS = 0x8913
_SIOCSIFFLAGS = 0x8914
_SIOCSIFADDR = 0x8916
_SIOCSIFDSTADDR = 0x8918
_SIOCSIFNETMASK = 0x891C
_SIOCSIFMTU = 0x8922

_FRAME_HDR = struct.Struct("!HH")


def frame(data: bytes) -> bytes:
    """Prefix ``data`` with the packet-information header for an IP packet."""
    return _FRAME_HDR.pack(0, ETH_TYPE_IP) + bytes(data)


def unframe(data: bytes) -> bytes:
    """Strip the packet-information header from a frame read off the device."""
    if len(data) < FRAME_HDR_LEN:
        raise ValueError(
            f"tunnel frame needs at least {FRAME_HDR_LEN} bytes, got {len(data)}"
        )
    return bytes(data[FRAME_HDR_LEN:])


def _ipv4(value: object, what: str) -> ipaddress.IPv4Address:
    try:
        address = ipaddress.ip_interface(value).ip  # type: ignore[arg-type]
    except ValueError as exc:
        raise ValueError(f"invalid {what} address: {value!r}") from exc
    if address.version != 4:
        raise ValueError(f"{what} address must be IPv4: {value!r}")
    return address  # type: ignore[return-value]


def _ifreq(name: bytes, payload: bytes) -> bytes:
    return struct.pack(f"{IFNAMSIZ}s", name) + payload.ljust(_IFREQ_LEN - IFNAMSIZ, b"\0")


def _ifreq_addr(name: bytes, address: ipaddress.IPv4Address) -> bytes:
    sockaddr = struct.pack("@HH", socket.AF_INET, 0) + address.packed + bytes(8)
    return _ifreq(name, sockaddr)


class Tun:
    """An open tunnel device configured between ``src`` and ``dst``."""

    def __init__(self, src: object, dst: object, mtu: int) -> None:
        self._fd: Optional[int] = None
        self._name = ""
        local = _ipv4(src, "source")
        remote = _ipv4(dst, "destination")
        if isinstance(mtu, bool) or not isinstance(mtu, int) or mtu <= 0:
            raise ValueError(f"invalid MTU: {mtu!r}")
        if not sys.platform.startswith("linux") or fcntl is None:
            raise OSError(errno.ENOSYS, "tunnel devices are not supported here")

        self._fd = os.open(TUN_DEVICE, os.O_RDWR)
        try:
            reply = fcntl.ioctl(
                self._fd, _TUNSETIFF, _ifreq(b"", struct.pack("@H", _IFF_TUN))
            )
            raw_name = bytes(reply[:IFNAMSIZ]).split(b"\0", 1)[0]
            self._name = raw_name.decode("ascii", errors="replace")
            self._configure(raw_name, local, remote, mtu)
        except BaseException:
            self.close()
            raise

    @staticmethod
    def _configure(
        name: bytes,
        local: ipaddress.IPv4Address,
        remote: ipaddress.IPv4Address,
        mtu: int,
    ) -> None:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            fd = sock.fileno()
            fcntl.ioctl(fd, _SIOCSIFADDR, _ifreq_addr(name, local))
            fcntl.ioctl(
                fd,
                _SIOCSIFNETMASK,
                _ifreq_addr(name, ipaddress.IPv4Address("255.255.255.255")),
            )
            fcntl.ioctl(fd, _SIOCSIFDSTADDR, _ifreq_addr(name, remote))
            fcntl.ioctl(fd, _SIOCSIFMTU, _ifreq(name, struct.pack("@i", mtu)))
            reply = fcntl.ioctl(fd, _SIOCGIFFLAGS, _ifreq(name, b""))
            flags = struct.unpack_from("@H", reply, IFNAMSIZ)[0]
            flags |= _IFF_UP | _IFF_POINTOPOINT
            fcntl.ioctl(fd, _SIOCSIFFLAGS, _ifreq(name, struct.pack("@H", flags)))

    def __enter__(self) -> Tun:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _require_fd(self) -> int:
        if self._fd is None:
            raise ValueError("tunnel is closed")
        return self._fd

    def name(self) -> str:
        """The kernel's name for the tunnel interface."""
        return self._name

    def fileno(self) -> int:
        return self._require_fd()

    def send(self, data: bytes) -> int:
        """Send one IP packet; return the number of packet bytes written."""
        written = os.write(self._require_fd(), frame(data))
        return max(written - FRAME_HDR_LEN, 0)

    def recv(self, size: int) -> bytes:
        """Receive one IP packet of at most ``size`` bytes."""
        if size < 0:
            raise ValueError("size must not be negative")
        return unframe(os.read(self._require_fd(), size + FRAME_HDR_LEN))

    def close(self) -> None:
        """Close the device; safe to call twice."""
        if self._fd is not None:
            fd, self._fd = self._fd, None
            os.close(fd)