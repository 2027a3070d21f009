"""Firewall rule description."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple, Union

Network = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]

INTF_NAME_LEN = 16


class FwOp(IntEnum):
    ALLOW = 1
    BLOCK = 2


class FwDir(IntEnum):
    IN = 1
    OUT = 2


def _port_range(value: object, what: str) -> Tuple[int, int]:
    pair = tuple(value)  # type: ignore[arg-type]
    if len(pair) != 2:
        raise ValueError(f"{what} must hold exactly two values")
    for port in pair:
        if not isinstance(port, int) or not 0 <= port <= 0xFFFF:
            raise ValueError(f"{what} value out of range: {port!r}")
    return pair  # type: ignore[return-value]


@dataclass(frozen=True)
class FwRule:
    """A firewall rule.

    For ICMP rules the first element of ``sport`` is the ICMP type and the
    first element of ``dport`` the ICMP code.
    """

    device: str
    op: FwOp
    dir: FwDir
    proto: int
    src: Network
    dst: Network
    sport: Tuple[int, int]
    dport: Tuple[int, int]

    def __post_init__(self) -> None:
        set_ = object.__setattr__
        set_(self, "device", str(self.device)[: INTF_NAME_LEN - 1])
        set_(self, "op", FwOp(self.op))
        set_(self, "dir", FwDir(self.dir))
        if not isinstance(self.proto, int) or not 0 <= self.proto <= 0xFF:
            raise ValueError(f"protocol out of range: {self.proto!r}")
        set_(self, "src", ipaddress.ip_network(self.src, strict=False))
        set_(self, "dst", ipaddress.ip_network(self.dst, strict=False))
        set_(self, "sport", _port_range(self.sport, "sport"))
        set_(self, "dport", _port_range(self.dport, "dport"))