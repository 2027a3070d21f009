[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dnetlite"
version = "0.1.0"
description = "Low-level networking helpers: ICMP, UDP and SCTP headers, Linux routing table access, TUN devices and an RC4-style random generator"
requires-python = ">=3.10"
dependencies = []
keywords = ["networking", "icmp", "udp", "sctp", "routing", "tun", "packets"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dnetlite"]

[tool.pytest.ini_options]
addopts = "-ra"
