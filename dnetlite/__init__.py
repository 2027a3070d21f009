"""Packet headers, Linux routing and tunnel access, firewall rule descriptions, random streams and bounded string helpers."""

__version__ = "0.1.0"

__all__ = ["fw", "icmp", "rand", "route", "sctp", "strutil", "tun", "udp"]