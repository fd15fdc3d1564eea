[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mysqlreplay"
version = "0.1.0"
description = "Building blocks for replaying captured MySQL traffic: statistics counters, protocol constants, value conversion and result files."
requires-python = ">=3.10"
dependencies = []
keywords = ["mysql", "replay", "traffic", "database", "testing"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mysqlreplay"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
