"""A child process attached to a pseudo terminal of a given size."""

from __future__ import annotations

import os
import shlex
import subprocess

_POSIX = os.name == "posix"

if _POSIX:
    import fcntl
    import pty
    import struct
    import termios

READ_SIZE = 2047


def _check_size(size) -> tuple[int, int]:
    columns, rows = size
    if columns < 1 or rows < 1:
        raise ValueError(f"console size must be positive, got {columns}x{rows}")
    return int(columns), int(rows)


def _set_winsize(fd: int, size: tuple[int, int]) -> None:
    columns, rows = size
    fcntl.ioctl(fd, termios.TIOCSWINSZ, struct.pack("HHHH", rows, columns, 0, 0))


class PseudoConsole:
    """Run ``command`` with its input and output connected to a terminal.

    ``size`` is ``(columns, rows)``. On POSIX systems the child gets a real
    pseudo terminal; elsewhere it is connected through plain pipes.
    """

    def __init__(self, command, size):
        self.command = command
        self.size = _check_size(size)
        self._process: subprocess.Popen | None = None
        self._fd: int | None = None
        self._closed = False

    @property
    def running(self) -> bool:
        """Whether the child process has been started and has not exited."""
        return self._process is not None and self._process.poll() is None

    @property
    def pid(self) -> int | None:
        return self._process.pid if self._process is not None else None

    def _argv(self):
        if isinstance(self.command, str):
            return shlex.split(self.command) if _POSIX else self.command
        return list(self.command)

    def start(self):
        """Start the child process; return ``self``."""
        if self._process is not None:
            raise RuntimeError("pseudo console already started")
        if _POSIX:
            self._start_pty()
        else:
            self._process = subprocess.Popen(
                self._argv(),
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                bufsize=0,
            )
        return self

    def _start_pty(self) -> None:
        master, slave = pty.openpty()
        try:
            _set_winsize(slave, self.size)
            self._process = subprocess.Popen(
                self._argv(),
                stdin=slave,
                stdout=slave,
                stderr=slave,
                close_fds=True,
                start_new_session=True,
            )
        except BaseException:
            os.close(master)
            raise
        finally:
            os.close(slave)
        self._fd = master

    def _require_open(self) -> subprocess.Popen:
        if self._process is None or self._closed:
            raise RuntimeError("pseudo console is not running")
        return self._process

    def write(self, data):
        """Send bytes to the child's input."""
        process = self._require_open()
        data = bytes(data)
        if self._fd is not None:
            view = memoryview(data)
            while view:
                written = os.write(self._fd, view)
                view = view[written:]
        else:
            process.stdin.write(data)
            process.stdin.flush()

    def read(self, size=READ_SIZE):
        """Read up to ``size`` bytes of output; ``b""`` once the output has ended."""
        if self._process is None:
            raise RuntimeError("pseudo console is not running")
        if self._closed:
            return b""
        fd = self._fd
        try:
            if fd is not None:
                return os.read(fd, size)
            stdout = self._process.stdout
            return (stdout.read(size) or b"") if stdout is not None else b""
        except (OSError, ValueError):
            # The child side is gone or the console was closed under us.
            return b""

    def resize(self, size):
        """Change the terminal size the child sees."""
        self.size = _check_size(size)
        if self._fd is not None and not self._closed:
            _set_winsize(self._fd, self.size)

    def close(self):
        """Stop the child process and release the terminal."""
        if self._process is None or self._closed:
            self._closed = True
            return
        self._closed = True
        process = self._process
        if process.poll() is None:
            process.terminate()
            try:
                process.wait(timeout=2)
            except subprocess.TimeoutExpired:
                process.kill()
                process.wait()
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None
        for stream in (process.stdin, process.stdout):
            if stream is not None:
                stream.close()

    def __enter__(self):
        if self._process is None:
            self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()