[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gramkit"
version = "0.1.0"
description = "Client-side building blocks for Telegram bots: peer types, peer caching, keyboards, bot answer requests and media metadata"
requires-python = ">=3.10"
dependencies = []
keywords = ["telegram", "bot", "keyboard", "peer", "cache", "ffprobe"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gramkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
