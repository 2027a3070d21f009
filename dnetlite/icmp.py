"""Internet Control Message Protocol headers (RFC 792 and successors)."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

HDR_LEN = 4
LEN_MIN = 8

CODE_NONE = 0

UNREACH_NET = 0
UNREACH_HOST = 1
UNREACH_PROTO = 2
UNREACH_PORT = 3
UNREACH_NEEDFRAG = 4
UNREACH_SRCFAIL = 5
UNREACH_NET_UNKNOWN = 6
UNREACH_HOST_UNKNOWN = 7
UNREACH_ISOLATED = 8
UNREACH_NET_PROHIB = 9
UNREACH_HOST_PROHIB = 10
UNREACH_TOSNET = 11
UNREACH_TOSHOST = 12
UNREACH_FILTER_PROHIB = 13
UNREACH_HOST_PRECEDENCE = 14
UNREACH_PRECEDENCE_CUTOFF = 15

REDIRECT_NET = 0
REDIRECT_HOST = 1
REDIRECT_TOSNET = 2
REDIRECT_TOSHOST = 3

RTRADVERT_NORMAL = 0
RTRADVERT_NOROUTE_COMMON = 16

TIMEXCEED_INTRANS = 0
TIMEXCEED_REASS = 1

PARAMPROB_ERRATPTR = 0
PARAMPROB_OPTABSENT = 1
PARAMPROB_LENGTH = 2

PHOTURIS_UNKNOWN_INDEX = 0
PHOTURIS_AUTH_FAILED = 1
PHOTURIS_DECOMPRESS_FAILED = 2
PHOTURIS_DECRYPT_FAILED = 3
PHOTURIS_NEED_AUTHN = 4
PHOTURIS_NEED_AUTHZ = 5

RTR_PREF_NODEFAULT = 0x80000000

TYPE_MAX = 40


class IcmpType(IntEnum):
    ECHOREPLY = 0
    UNREACH = 3
    SRCQUENCH = 4
    REDIRECT = 5
    ALTHOSTADDR = 6
    ECHO = 8
    RTRADVERT = 9
    RTRSOLICIT = 10
    TIMEXCEED = 11
    PARAMPROB = 12
    TSTAMP = 13
    TSTAMPREPLY = 14
    INFO = 15
    INFOREPLY = 16
    MASK = 17
    MASKREPLY = 18
    TRACEROUTE = 30
    DATACONVERR = 31
    MOBILE_REDIRECT = 32
    IPV6_WHEREAREYOU = 33
    IPV6_IAMHERE = 34
    MOBILE_REG = 35
    MOBILE_REGREPLY = 36
    DNS = 37
    DNSREPLY = 38
    SKIP = 39
    PHOTURIS = 40


_INFO_TYPES = frozenset(
    {
        IcmpType.ECHOREPLY,
        IcmpType.ECHO,
        IcmpType.RTRADVERT,
        IcmpType.RTRSOLICIT,
        IcmpType.TSTAMP,
        IcmpType.TSTAMPREPLY,
        IcmpType.INFO,
        IcmpType.INFOREPLY,
        IcmpType.MASK,
        IcmpType.MASKREPLY,
    }
)

_HDR = struct.Struct("!BBH")


def _pack(fmt: str, *values: int) -> bytes:
    try:
        return struct.pack(fmt, *values)
    except struct.error as exc:
        raise ValueError(str(exc)) from exc


@dataclass(frozen=True)
class IcmpHeader:
    """The fixed four-byte ICMP header."""

    icmp_type: int
    code: int
    cksum: int = 0

    def pack(self) -> bytes:
        return _pack(_HDR.format, self.icmp_type, self.code, self.cksum)

    @classmethod
    def unpack(cls, data: bytes) -> IcmpHeader:
        if len(data) < HDR_LEN:
            raise ValueError(f"ICMP header needs {HDR_LEN} bytes, got {len(data)}")
        return cls(*_HDR.unpack_from(data))


def is_info_type(icmp_type: int) -> bool:
    """True for the query/informational message types."""
    return icmp_type in _INFO_TYPES


def pack_hdr(icmp_type: int, code: int) -> bytes:
    """Pack a header with a zero checksum."""
    return IcmpHeader(icmp_type, code).pack()


def pack_echo(icmp_type: int, code: int, ident: int, seq: int, data: bytes = b"") -> bytes:
    return pack_hdr(icmp_type, code) + _pack("!HH", ident, seq) + bytes(data)


def pack_quote(icmp_type: int, code: int, word: int, packet: bytes) -> bytes:
    return pack_hdr(icmp_type, code) + _pack("!I", word) + bytes(packet)


def pack_mask(icmp_type: int, code: int, ident: int, seq: int, mask: int) -> bytes:
    return pack_hdr(icmp_type, code) + _pack("!III", ident, seq, mask)


def pack_needfrag(icmp_type: int, code: int, mtu: int, packet: bytes) -> bytes:
    return pack_hdr(icmp_type, code) + _pack("!HH", 0, mtu) + bytes(packet)