"""A small interactive shell that records its commands as a session."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

CLEAR_SCREEN = "\033[2J\033[1;1H"
DEFAULT_SESSION_FILE = "session.txt"


class ShellExit(Exception):
    """Raised when the ``exit`` command is given."""


class Shell:
    """Run commands, keeping a history that can be saved and replayed.

    Built-in commands: ``cd <dir>``, ``cls``, ``exit``, ``savesession`` and
    ``loadsession``; anything else is run by the system shell.
    """

    def __init__(self, session_file=DEFAULT_SESSION_FILE, output=None):
        self.session_file = Path(session_file)
        self._output = output
        self.commands: list[str] = []
        self.current_path = Path.cwd()

    @property
    def output(self):
        return self._output if self._output is not None else sys.stdout

    def prompt(self):
        """Return the prompt text for the current directory."""
        return f"{self.current_path} > "

    def execute(self, line):
        """Run one command line."""
        if line.startswith("cd "):
            self._change_directory(line[3:])
            self.commands.append(line)
        elif line == "cls":
            self.output.write(CLEAR_SCREEN)
            self.commands.append(line)
        elif line == "exit":
            raise ShellExit()
        elif line == "savesession":
            try:
                self.save_session(self.session_file)
            except OSError:
                self.output.write("Error opening file to write.\n")
        elif line == "loadsession":
            try:
                self.load_session(self.session_file)
            except OSError:
                self.output.write(
                    "Session file does not found, either the filename is "
                    "incorrect or it doesn't exist.\n"
                )
        else:
            self.output.flush()
            subprocess.run(line, shell=True, check=False)
            self.commands.append(line)

    def _change_directory(self, target: str) -> None:
        path = Path(target)
        try:
            if not path.exists():
                raise FileNotFoundError(target)
            os.chdir(path)
        except OSError:
            self.output.write("Invalid directory.\n")
            return
        self.current_path = Path.cwd()

    def save_session(self, path):
        """Write the recorded commands to ``path``, one per line."""
        with open(path, "w", encoding="utf-8") as file:
            for command in self.commands:
                file.write(command + "\n")

    def load_session(self, path):
        """Run every command stored in ``path``, in order."""
        with open(path, encoding="utf-8") as file:
            for line in file:
                self.execute(line.rstrip("\r\n"))

    def run(self, stream):
        """Read and run command lines from ``stream`` until ``exit`` or end of input."""
        try:
            while True:
                self.output.write(self.prompt())
                self.output.flush()
                line = stream.readline()
                if not line:
                    return
                self.execute(line.rstrip("\r\n"))
        except ShellExit:
            return


def main(argv=None):
    """Run the shell interactively."""
    parser = argparse.ArgumentParser(prog="slurmshell", description="A recording shell.")
    parser.add_argument(
        "--session",
        default=DEFAULT_SESSION_FILE,
        help="file used by savesession and loadsession",
    )
    args = parser.parse_args(argv)
    Shell(args.session).run(sys.stdin)
    return 0