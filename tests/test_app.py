import sys
import threading

from slurmterm.app import Multiplexer
from slurmterm.keys import KEY_DOWN, KEY_UP

WAIT = None
SLEEPER = [sys.executable, "-c", "import time; time.sleep(30)"]


class FakeScreen:
    def __init__(self, keys, wait_for=None, size=(24, 80)):
        self.keys = list(keys)
        self.wait_for = wait_for
        self.size = size
        self.rows = {}
        self.lock = threading.Lock()
        self.seen = threading.Event()
        self.nodelay_calls = []

    def getmaxyx(self):
        return self.size

    def text(self):
        return "\n".join(
            "".join(row[k] for k in sorted(row)) for _, row in sorted(self.rows.items())
        )

    def addstr(self, y, x, text, attr=0):
        with self.lock:
            row = self.rows.setdefault(y, {})
            for offset, ch in enumerate(text):
                row[x + offset] = ch
            if self.wait_for and self.wait_for in self.text():
                self.seen.set()

    def move(self, y, x):
        pass

    def refresh(self):
        pass

    def nodelay(self, flag):
        self.nodelay_calls.append(flag)

    def getch(self):
        while self.keys:
            key = self.keys.pop(0)
            if key is WAIT:
                self.seen.wait(10)
                continue
            return key
        return ord("q")


def test_quit_ends_run_with_one_pane():
    screen = FakeScreen([ord("q")])
    mux = Multiplexer(screen, SLEEPER)
    mux.run()
    assert len(mux.panes) == 1
    assert not mux.panes[0].console.running


def test_child_output_is_drawn():
    screen = FakeScreen([WAIT, ord("q")], wait_for="hello")
    mux = Multiplexer(screen, [sys.executable, "-c", "print('hello')"])
    mux.run()
    assert screen.seen.is_set()
    assert mux.panes[0].window.row_text(0).startswith("hello")


def test_keys_are_forwarded_to_console():
    code = "import sys; print(sys.stdin.readline().strip().upper())"
    screen = FakeScreen([ord("a"), ord("b"), ord("\n"), WAIT, ord("q")], wait_for="AB")
    mux = Multiplexer(screen, [sys.executable, "-c", code])
    mux.run()
    assert "AB" in screen.text()


def test_up_arrow_splits_side_by_side():
    screen = FakeScreen([KEY_UP, ord("q")])
    mux = Multiplexer(screen, SLEEPER)
    mux.run()
    assert len(mux.panes) == 2
    assert mux.layout.active == 1
    left, right = mux.layout.panes
    assert left.width + right.width == 80
    assert right.x == left.width
    assert mux.panes[0].window.width == left.width
    assert mux.panes[0].console.size == (left.width, left.height)


def test_down_arrow_splits_top_and_bottom():
    screen = FakeScreen([KEY_DOWN, ord("q")])
    mux = Multiplexer(screen, SLEEPER)
    mux.run()
    top, bottom = mux.layout.panes
    assert top.height + bottom.height == 24
    assert bottom.y == top.height
    assert (top.width, bottom.width) == (80, 80)
    assert mux.panes[1].window.height == bottom.height


def test_split_of_tiny_pane_is_ignored():
    screen = FakeScreen([KEY_UP, KEY_DOWN, ord("q")], size=(1, 1))
    mux = Multiplexer(screen, SLEEPER)
    mux.run()
    assert len(mux.panes) == 1
    assert mux.layout.active == 0


def test_lone_escape_checks_for_following_key():
    screen = FakeScreen([27, ord("q")])
    mux = Multiplexer(screen, SLEEPER)
    mux.run()
    assert screen.nodelay_calls == [True, False]