[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shootogeth"
version = "0.1.0"
description = "A small multiplayer top-down game with a UDP game server and a pygame client"
requires-python = ">=3.10"
keywords = ["game", "multiplayer", "udp", "pygame", "asyncio"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: End Users/Desktop",
    "Framework :: AsyncIO",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
shootogeth-server = "shootogeth.server.networking:main"
shootogeth-client = "shootogeth.client.app:main"

[tool.hatch.build.targets.wheel]
packages = ["shootogeth"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
