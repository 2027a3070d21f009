"""Fast pseudorandom number generation built on an ARC4-style stream."""

from __future__ import annotations

import os
import struct
import time
from collections.abc import MutableSequence
from typing import Any

_SEED_LEN = 256


class Rand:
    """Pseudorandom generator keyed by a byte string.

    With no seed, the generator is keyed from the operating system's
    random source mixed with the current time.
    """

    def __init__(self, seed: bytes | None = None) -> None:
        self._s: list[int] = []
        self._i = 0
        self._j = 0
        if seed is None:
            material = struct.pack("!QQ", time.time_ns(), time.perf_counter_ns())
            material += os.urandom(_SEED_LEN - len(material))
            self._reset()
            self._mix(material[:128])
            self._mix(material[128:])
        else:
            self.set(seed)

    def _reset(self) -> None:
        self._s = list(range(256))
        self._i = 0
        self._j = 0

    def _mix(self, data: bytes) -> None:
        key = bytes(data)
        if not key:
            raise ValueError("seed material must not be empty")
        s = self._s
        i = (self._i - 1) & 0xFF
        j = self._j
        for n in range(256):
            i = (i + 1) & 0xFF
            si = s[i]
            j = (j + si + key[n % len(key)]) & 0xFF
            s[i] = s[j]
            s[j] = si
        self._i = i
        self._j = i

    def _byte(self) -> int:
        s = self._s
        self._i = (self._i + 1) & 0xFF
        si = s[self._i]
        self._j = (self._j + si) & 0xFF
        sj = s[self._j]
        s[self._i] = sj
        s[self._j] = si
        return s[(si + sj) & 0xFF]

    def set(self, seed: bytes) -> None:
        """Rekey the generator from scratch with ``seed``."""
        self._reset()
        self._mix(seed)
        self._mix(seed)

    def add(self, data: bytes) -> None:
        """Stir ``data`` into the current state."""
        self._mix(data)

    def get(self, size: int) -> bytes:
        """Return ``size`` pseudorandom bytes."""
        if size < 0:
            raise ValueError("size must not be negative")
        return bytes(self._byte() for _ in range(size))

    def uint8(self) -> int:
        return self._byte()

    def uint16(self) -> int:
        return int.from_bytes(self.get(2), "big")

    def uint32(self) -> int:
        return int.from_bytes(self.get(4), "big")

    def shuffle(self, items: MutableSequence[Any]) -> None:
        """Shuffle a mutable sequence in place."""
        count = len(items)
        if count < 2:
            return
        for i in range(count):
            j = self.uint32() % (count - 1)
            if j != i:
                items[i], items[j] = items[j], items[i]