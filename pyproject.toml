[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dnsrv"
version = "0.1.0"
description = "A small authoritative UDP DNS server that answers from YAML zone files, with per-region record variants"
requires-python = ">=3.10"
keywords = ["dns", "authoritative", "nameserver", "udp", "zone", "yaml", "geodns"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: No Input/Output (Daemon)",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Name Service (DNS)",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dnsrv = "dnsrv.server:main"

[tool.hatch.build.targets.wheel]
packages = ["dnsrv"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
