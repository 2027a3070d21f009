"""Size-bounded string copy, concatenation and tokenising."""

from __future__ import annotations

from typing import Optional, Tuple


def _check_size(size: int) -> None:
    if size < 0:
        raise ValueError("size must not be negative")


def strlcpy(src: str, size: int) -> Tuple[str, int]:
    """Copy ``src`` into a buffer of ``size`` characters.

    Returns the copied text (at most ``size - 1`` characters) and the
    length of ``src``; a length of ``size`` or more means truncation.
    """
    _check_size(size)
    if size == 0:
        return "", len(src)
    return src[: size - 1], len(src)


def strlcat(dst: str, src: str, size: int) -> Tuple[str, int]:
    """Append ``src`` to ``dst`` in a buffer of ``size`` characters.

    Returns the resulting text and the length it tried to create; a
    length of ``size`` or more means truncation.  When ``dst`` already
    fills the buffer it is returned unchanged.
    """
    _check_size(size)
    dlen = min(len(dst), size)
    if dlen == size:
        return dst, dlen + len(src)
    room = size - dlen - 1
    return dst + src[:room], dlen + len(src)


def strsep(string: Optional[str], delims: str) -> Tuple[Optional[str], Optional[str]]:
    """Split off the first token of ``string``.

    Returns the token and the remainder after the delimiter, or ``None``
    as the remainder once no delimiter is left.  A ``None`` string gives
    ``(None, None)``.  Tokens may be empty.
    """
    if string is None:
        return None, None
    for index, char in enumerate(string):
        if char in delims:
            return string[:index], string[index + 1 :]
    return string, None