[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spacetools"
version = "0.1.0"
description = "Ground-segment helpers: NaCl primitives, firmware image search, stdbuf logging, VTS streaming, VictoriaMetrics push and time fetching"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "nacl",
    "ed25519",
    "curve25519",
    "salsa20",
    "poly1305",
    "sha512",
    "firmware",
    "telemetry",
    "victoriametrics",
    "vts",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications",
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Astronomy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["spacetools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
