import pytest

from dnetlite import udp
from dnetlite.udp import UdpHeader


def test_round_trip():
    hdr = UdpHeader(1234, 53, 40, 0xABCD)
    assert UdpHeader.unpack(hdr.pack()) == hdr


def test_pack_hdr_length_and_zero_sum():
    raw = udp.pack_hdr(udp.PORT_MAX, 80, udp.HDR_LEN)
    assert len(raw) == udp.HDR_LEN
    hdr = UdpHeader.unpack(raw)
    assert hdr == UdpHeader(udp.PORT_MAX, 80, udp.HDR_LEN, 0)


def test_pack_hdr_wire_bytes():
    assert udp.pack_hdr(1, 2, 8) == b"\x00\x01\x00\x02\x00\x08\x00\x00"


def test_unpack_ignores_trailing_payload():
    raw = udp.pack_hdr(10, 20, 12) + b"data"
    assert UdpHeader.unpack(raw).ulen == 12


def test_unpack_short():
    with pytest.raises(ValueError):
        UdpHeader.unpack(b"\x00" * 7)


def test_port_out_of_range():
    with pytest.raises(ValueError):
        udp.pack_hdr(udp.PORT_MAX + 1, 0, 8)