import pytest

from dnetlite.strutil import strlcat, strlcpy, strsep


def test_strlcpy_fits():
    assert strlcpy("hello", 10) == ("hello", 5)


def test_strlcpy_truncates_to_size_minus_one():
    copied, total = strlcpy("hello world", 6)
    assert len(copied) == 5
    assert "hello world".startswith(copied)
    assert total >= 6


def test_strlcpy_zero_size():
    copied, total = strlcpy("abc", 0)
    assert copied == ""
    assert total == len("abc")


def test_strlcpy_negative_size_raises():
    with pytest.raises(ValueError):
        strlcpy("abc", -1)


def test_strlcat_fits():
    result, total = strlcat("foo", "bar", 16)
    assert result == "foo" + "bar"
    assert total == len("foobar")


def test_strlcat_truncates():
    result, total = strlcat("foo", "barbaz", 6)
    assert len(result) == 5
    assert ("foo" + "barbaz").startswith(result)
    assert total == len("foobarbaz")


def test_strlcat_full_destination_unchanged():
    result, total = strlcat("abcdef", "xyz", 4)
    assert result == "abcdef"
    assert total == 4 + len("xyz")


def test_strlcat_negative_size_raises():
    with pytest.raises(ValueError):
        strlcat("a", "b", -2)


def test_strsep_splits_first_token():
    assert strsep("a,b,c", ",") == ("a", "b,c")


def test_strsep_last_token():
    assert strsep("last", ",") == ("last", None)


def test_strsep_none():
    assert strsep(None, ",") == (None, None)


def test_strsep_empty_tokens():
    token, rest = strsep(",x", ",")
    assert token == ""
    assert rest == "x"


@pytest.mark.parametrize("text", ["a,b,,c", "", ",", "one", "x,y,z,"])
def test_strsep_walk_matches_split(text):
    tokens = []
    rest = text
    while rest is not None:
        token, rest = strsep(rest, ",")
        tokens.append(token)
    assert tokens == text.split(",")


def test_strsep_any_of_several_delimiters():
    tokens = []
    rest = "a b\tc"
    while rest is not None:
        token, rest = strsep(rest, " \t")
        tokens.append(token)
    assert tokens == "a b\tc".split()