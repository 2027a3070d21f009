import pytest

from dnetlite.rand import Rand


def test_same_seed_same_stream():
    first = Rand(b"seed").get(64)
    second = Rand(b"seed").get(64)
    assert len(first) == 64
    assert len(set(first)) > 1
    assert first == second


def test_different_seed_different_stream():
    assert Rand(b"seed-a").get(32) != Rand(b"seed-b").get(32)


def test_get_length():
    assert len(Rand(b"x").get(100)) == 100
    assert Rand(b"x").get(0) == b""


def test_get_negative_size():
    with pytest.raises(ValueError):
        Rand(b"x").get(-1)


def test_empty_seed_rejected():
    with pytest.raises(ValueError):
        Rand(b"")


def test_add_empty_rejected():
    r = Rand(b"x")
    with pytest.raises(ValueError):
        r.add(b"")


def test_set_resets_state():
    r = Rand(b"one")
    first = r.get(16)
    r.get(50)
    r.set(b"one")
    assert r.get(16) == first


def test_add_changes_stream():
    a = Rand(b"base")
    b = Rand(b"base")
    b.add(b"extra")
    assert a.get(32) != b.get(32)


def test_uint8_matches_stream():
    a = Rand(b"k")
    b = Rand(b"k")
    assert a.uint8() == b.get(1)[0]


def test_uint16_is_big_endian_of_stream():
    a = Rand(b"k")
    b = Rand(b"k")
    assert a.uint16() == int.from_bytes(b.get(2), "big")


def test_uint32_is_big_endian_of_stream():
    a = Rand(b"k")
    b = Rand(b"k")
    values = [a.uint32() for _ in range(5)]
    expected = [int.from_bytes(b.get(4), "big") for _ in range(5)]
    assert values == expected
    assert all(0 <= v < 2**32 for v in values)


def test_shuffle_is_permutation_and_deterministic():
    items1 = list(range(20))
    items2 = list(range(20))
    Rand(b"shuffle").shuffle(items1)
    Rand(b"shuffle").shuffle(items2)
    assert sorted(items1) == list(range(20))
    assert items1 == items2


def test_shuffle_short_sequences_untouched():
    single = ["a"]
    empty = []
    r = Rand(b"s")
    r.shuffle(single)
    r.shuffle(empty)
    assert single == ["a"]
    assert empty == []


def test_unseeded_generators_differ():
    first = Rand().get(32)
    second = Rand().get(32)
    assert len(first) == 32
    assert len(second) == 32
    assert first != second