[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dvmodem"
version = "0.1.0"
description = "Digital voice modem building blocks: DMR slot type coding, Morse ident, calibration pattern generators and a DMR direct-mode transmitter."
requires-python = ">=3.10"
dependencies = []
keywords = ["dmr", "nxdn", "p25", "pocsag", "fm", "cw", "morse", "golay", "modem", "ham-radio", "calibration"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Ham Radio",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dvmodem"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
