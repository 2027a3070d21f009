import struct

import pytest

from dnetlite import sctp
from dnetlite.sctp import ChunkHeader, ChunkType, SctpHeader


def test_common_header_round_trip():
    hdr = SctpHeader(5000, 6000, 0xDEADBEEF, 0x01020304)
    assert SctpHeader.unpack(hdr.pack()) == hdr


def test_pack_hdr_length_and_zero_sum():
    raw = sctp.pack_hdr(1, sctp.PORT_MAX, 42)
    assert len(raw) == sctp.HDR_LEN
    assert SctpHeader.unpack(raw) == SctpHeader(1, sctp.PORT_MAX, 42, 0)


def test_common_header_short():
    with pytest.raises(ValueError):
        SctpHeader.unpack(b"\x00" * 11)


def test_vtag_out_of_range():
    with pytest.raises(ValueError):
        sctp.pack_hdr(1, 2, 2**32)


def test_chunk_header_round_trip():
    hdr = ChunkHeader(ChunkType.HEARTBEAT, 0, 8)
    assert ChunkHeader.unpack(hdr.pack()) == hdr


def test_chunk_header_short():
    with pytest.raises(ValueError):
        ChunkHeader.unpack(b"\x01\x00")


def test_chunkhdr_wire_bytes():
    assert sctp.pack_chunkhdr(ChunkType.ABORT, 0, 4) == b"\x06\x00\x00\x04"


def test_init_chunk_layout():
    raw = sctp.pack_chunkhdr_init(
        ChunkType.INIT, 0, sctp.CHUNK_INIT_LEN, 0x11223344, 65535, 10, 20, 99
    )
    assert len(raw) == sctp.CHUNK_INIT_LEN
    assert ChunkHeader.unpack(raw) == ChunkHeader(ChunkType.INIT, 0, sctp.CHUNK_INIT_LEN)
    assert struct.unpack_from("!IIHHI", raw, sctp.CHUNK_HDR_LEN) == (
        0x11223344,
        65535,
        10,
        20,
        99,
    )


def test_init_ack_matches_init_body():
    args = (0, sctp.CHUNK_INIT_LEN, 7, 1500, 1, 1, 3)
    init = sctp.pack_chunkhdr_init(ChunkType.INIT, *args)
    ack = sctp.pack_chunkhdr_init_ack(ChunkType.INIT_ACK, *args)
    assert ack[0] == ChunkType.INIT_ACK
    assert ack[1:] == init[1:]


@pytest.mark.parametrize(
    "func, ctype",
    [
        (sctp.pack_chunkhdr_abort, ChunkType.ABORT),
        (sctp.pack_chunkhdr_shutdown_ack, ChunkType.SHUTDOWN_ACK),
        (sctp.pack_chunkhdr_cookie_echo, ChunkType.COOKIE_ECHO),
    ],
)
def test_empty_chunks(func, ctype):
    raw = func(ctype, 1, sctp.CHUNK_HDR_LEN)
    assert raw == sctp.pack_chunkhdr(ctype, 1, sctp.CHUNK_HDR_LEN)
    assert ChunkHeader.unpack(raw).chunk_type == ctype


def test_init_stream_count_out_of_range():
    with pytest.raises(ValueError):
        sctp.pack_chunkhdr_init(ChunkType.INIT, 0, 20, 1, 1, 70000, 1, 1)