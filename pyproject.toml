[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slurmterm"
version = "0.1.0"
description = "A small curses terminal multiplexer with split panes, an ANSI renderer and a session-recording shell"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "multiplexer", "ansi", "curses", "pty", "shell"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
slurm = "slurmterm.app:main"
slurm-shell = "slurmterm.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["slurmterm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
