[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hotline"
version = "0.10.23"
description = "Hotline protocol helpers and a terminal interface for Hotline BBS clients"
requires-python = ">=3.10"
keywords = ["hotline", "bbs", "chat", "file-transfer", "tui", "urwid"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: BBS",
    "Topic :: Communications :: Chat",
]
dependencies = [
    "pyyaml",
    "urwid",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hotline"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
