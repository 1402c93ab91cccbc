[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tsprobe"
version = "0.1.0"
description = "Tools for filtering MPEG transport stream files and extracting transport packets from UDP/RTP packet captures"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "mpeg-ts",
    "transport-stream",
    "pcap",
    "udp",
    "rtp",
    "scte35",
    "tr101290",
    "broadcast",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tsprobe-pid-drop = "tsprobe.piddrop:main"
tsprobe-pcap2ts = "tsprobe.pcap2ts:main"

[tool.hatch.build.targets.wheel]
packages = ["tsprobe"]

[tool.hatch.build.targets.sdist]
include = ["tsprobe", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
