"""User Datagram Protocol header (RFC 768)."""

from __future__ import annotations

import struct
from dataclasses import dataclass

HDR_LEN = 8
PORT_MAX = 65535

_HDR = struct.Struct("!HHHH")


@dataclass(frozen=True)
class UdpHeader:
    """The eight-byte UDP header."""

    sport: int
    dport: int
    ulen: int
    sum: int = 0

    def pack(self) -> bytes:
        try:
            return _HDR.pack(self.sport, self.dport, self.ulen, self.sum)
        except struct.error as exc:
            raise ValueError(str(exc)) from exc

    @classmethod
    def unpack(cls, data: bytes) -> UdpHeader:
        if len(data) < HDR_LEN:
            raise ValueError(f"UDP header needs {HDR_LEN} bytes, got {len(data)}")
        return cls(*_HDR.unpack_from(data))


def pack_hdr(sport: int, dport: int, ulen: int) -> bytes:
    """Pack a UDP header with a zero checksum."""
    return UdpHeader(sport, dport, ulen).pack()