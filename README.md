# dnetlite

Small building blocks for low-level network work in Python.

- `dnetlite.icmp`, `dnetlite.udp` and `dnetlite.sctp` build and parse
  protocol headers in network byte order. Each has a frozen header dataclass
  with `pack()` and `unpack(data)` (`IcmpHeader`, `UdpHeader`, `SctpHeader`,
  `ChunkHeader`) and `pack_*` helpers that write a header with a zero
  checksum. `icmp.IcmpType` and `sctp.ChunkType` name the message and chunk
  types; `icmp.is_info_type` tells query messages from error messages.
  Values that do not fit their field raise `ValueError`.
- `dnetlite.route` reads and changes the Linux routing table. `Route` opens a
  handle (usable as a context manager); `Route.add` and `Route.delete` change
  IPv4 routes, `Route.get` asks the kernel which route it would use for a
  destination, and `Route.loop` yields a `RouteEntry` for every active IPv4
  route and then every active IPv6 route. The parsers behind `loop`,
  `parse_ipv4_routes` and `parse_ipv6_routes`, take any iterable of lines in
  the `/proc/net/route` and `/proc/net/ipv6_route` formats, so they also work
  on saved text.
- `dnetlite.tun` opens and configures a Linux TUN device with `Tun(src, dst,
  mtu)`. `Tun.send` and `Tun.recv` move single IP packets; `frame` and
  `unframe` add and strip the 4-byte packet-information prefix the device
  uses.
- `dnetlite.fw` describes firewall rules: `FwRule` with `FwOp` and `FwDir`,
  validated and normalised when the rule is created.
- `dnetlite.rand` holds `Rand`, a seedable RC4-style byte stream generator
  with `get`, `uint8`, `uint16`, `uint32` and an in-place `shuffle`. Without
  a seed it is keyed from `os.urandom` and the current time.
- `dnetlite.strutil` holds bounded string helpers: `strlcpy` and `strlcat`
  return the resulting text together with the length they tried to create,
  and `strsep` splits off one token at a time.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

Build an ICMP echo request and read its header back:

```python
from dnetlite import icmp

packet = icmp.pack_echo(icmp.IcmpType.ECHO, 0, ident=1, seq=1, data=b"ping")
header = icmp.IcmpHeader.unpack(packet)
assert header.icmp_type == icmp.IcmpType.ECHO
```

Generate the same random stream again by seeding it:

```python
from dnetlite.rand import Rand

r = Rand(b"seed material")
first = r.get(16)
r.set(b"seed material")
assert r.get(16) == first
```

Parse saved routing table text:

```python
from dnetlite.route import parse_ipv4_routes

with open("route.txt") as lines:
    for entry in parse_ipv4_routes(lines):
        print(entry.dst, entry.gw, entry.intf_name, entry.metric)
```

List the live routes on Linux:

```python
from dnetlite.route import Route

with Route() as routes:
    for entry in routes.loop():
        print(entry)
```

## Limits

- Routing table access and tunnel devices work on Linux only. Elsewhere
  `Route()` and `Tun(...)` raise `OSError` with `errno.ENOSYS`. Changing
  routes and opening tunnel devices needs root privileges.
- `Route.add` and `Route.delete` handle IPv4 routes only; `Route.get` and
  `Route.loop` handle both IPv4 and IPv6.
- `dnetlite.fw` only describes rules; nothing in the package installs,
  removes or lists rules in a firewall.
- Header helpers leave checksums at zero; the package does not compute them.
- There is no command-line tool; everything is used as a library.