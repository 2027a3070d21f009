"""Stream Control Transmission Protocol headers (RFC 4960)."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

HDR_LEN = 12
CHUNK_HDR_LEN = 4
CHUNK_INIT_LEN = 20
PORT_MAX = 65535

TYPEFLAG_REPORT = 1
TYPEFLAG_SKIP = 2

_HDR = struct.Struct("!HHII")
_CHUNK = struct.Struct("!BBH")
_INIT_BODY = struct.Struct("!IIHHI")


class ChunkType(IntEnum):
    DATA = 0x00
    INIT = 0x01
    INIT_ACK = 0x02
    SACK = 0x03
    HEARTBEAT = 0x04
    HEARTBEAT_ACK = 0x05
    ABORT = 0x06
    SHUTDOWN = 0x07
    SHUTDOWN_ACK = 0x08
    ERROR = 0x09
    COOKIE_ECHO = 0x0A
    COOKIE_ACK = 0x0B
    ECNE = 0x0C
    CWR = 0x0D
    SHUTDOWN_COMPLETE = 0x0E
    AUTH = 0x0F
    ASCONF_ACK = 0x80
    PKTDROP = 0x81
    PAD = 0x84
    FORWARD_TSN = 0xC0
    ASCONF = 0xC1


def _pack(packer: struct.Struct, *values: int) -> bytes:
    try:
        return packer.pack(*values)
    except struct.error as exc:
        raise ValueError(str(exc)) from exc


@dataclass(frozen=True)
class SctpHeader:
    """The twelve-byte SCTP common header."""

    sport: int
    dport: int
    vtag: int
    sum: int = 0

    def pack(self) -> bytes:
        return _pack(_HDR, self.sport, self.dport, self.vtag, self.sum)

    @classmethod
    def unpack(cls, data: bytes) -> SctpHeader:
        if len(data) < HDR_LEN:
            raise ValueError(f"SCTP header needs {HDR_LEN} bytes, got {len(data)}")
        return cls(*_HDR.unpack_from(data))


@dataclass(frozen=True)
class ChunkHeader:
    """The four-byte header that starts every SCTP chunk."""

    chunk_type: int
    flags: int
    length: int

    def pack(self) -> bytes:
        return _pack(_CHUNK, self.chunk_type, self.flags, self.length)

    @classmethod
    def unpack(cls, data: bytes) -> ChunkHeader:
        if len(data) < CHUNK_HDR_LEN:
            raise ValueError(
                f"SCTP chunk header needs {CHUNK_HDR_LEN} bytes, got {len(data)}"
            )
        return cls(*_CHUNK.unpack_from(data))


def pack_hdr(sport: int, dport: int, vtag: int) -> bytes:
    """Pack a common header with a zero checksum."""
    return SctpHeader(sport, dport, vtag).pack()


def pack_chunkhdr(chunk_type: int, flags: int, length: int) -> bytes:
    return ChunkHeader(chunk_type, flags, length).pack()


def pack_chunkhdr_init(
    chunk_type: int,
    flags: int,
    length: int,
    itag: int,
    arwnd: int,
    nos: int,
    nis: int,
    itsn: int,
) -> bytes:
    return pack_chunkhdr(chunk_type, flags, length) + _pack(
        _INIT_BODY, itag, arwnd, nos, nis, itsn
    )


def pack_chunkhdr_init_ack(
    chunk_type: int,
    flags: int,
    length: int,
    itag: int,
    arwnd: int,
    nos: int,
    nis: int,
    itsn: int,
) -> bytes:
    return pack_chunkhdr_init(chunk_type, flags, length, itag, arwnd, nos, nis, itsn)


def pack_chunkhdr_abort(chunk_type: int, flags: int, length: int) -> bytes:
    return pack_chunkhdr(chunk_type, flags, length)


def pack_chunkhdr_shutdown_ack(chunk_type: int, flags: int, length: int) -> bytes:
    return pack_chunkhdr(chunk_type, flags, length)


def pack_chunkhdr_cookie_echo(chunk_type: int, flags: int, length: int) -> bytes:
    return pack_chunkhdr(chunk_type, flags, length)