[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "costeer"
version = "0.1.0"
description = "Building blocks for a cooperative frame scheduler: work-stealing deques, wait services, IP addresses and socket options"
requires-python = ">=3.10"
dependencies = []
keywords = ["coroutines", "scheduler", "work-stealing", "ip-address", "socket-options"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["costeer"]

[tool.pytest.ini_options]
addopts = "-ra"
