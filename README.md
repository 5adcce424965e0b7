# slurmterm

slurmterm is a small terminal multiplexer for the console. Each pane runs its
own program inside a pseudo terminal. The program's output goes through an ANSI
escape-sequence renderer into an in-memory window, and that window is drawn on
a curses screen.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## The multiplexer

```
slurm [command ...]
```

Every pane runs `command`. Without one, each pane runs the shell named by
`$SHELL`, or `/bin/sh` if that is unset. On Windows it uses `%COMSPEC%`, or
`cmd.exe` if that is unset. The program starts with a single pane that covers
the whole terminal. Keystrokes go to the active pane:

- **Up arrow** splits the active pane side by side, giving the left half to the
  old pane. The new pane becomes active.
- **Down arrow** splits the active pane top and bottom, giving the top half to
  the old pane. The new pane becomes active.
- **Left / Right arrows**, Tab, Enter, Backspace and printable ASCII characters
  are sent to the pane's program. Enter is sent as `\r\n`.
- **Esc** on its own is sent as a single escape byte.
- **q** / **Q** are sent to the program like any other character, and then the
  multiplexer ends. Closing stops every pane's program.

When a pane is too small to split, the split key is ignored.

On POSIX systems every program gets a real pseudo terminal, and that terminal
is resized when its pane is split. On other systems the program is connected
through plain pipes.

### Rendering

`slurmterm.ansi.AnsiRenderer` understands the following:

- Control characters: carriage return, line feed, backspace and tab (tab stops
  every 8 columns).
- SGR attributes: bold, dim, underline, blink and reverse, each with its reset
  code. Foreground colours 30–37 and 90–97 map to the eight colour pairs, and
  39 restores the default.
- CSI cursor movement (`A`, `B`, `C`, `D`), positioning (`H`, `f`), and saving
  and restoring the cursor (`s`, `u`).
- Erase in display (`J` with mode 0 or 2) and erase in line (`K` with mode 0
  or 2).
- Scrolling up and down (`S`, `T`).
- `?25h` / `?25l`, which are recorded in `cursor_visible`.
- The single-character escapes index (`ESC D`), next line (`ESC E`), reverse
  index (`ESC M`) and reset (`ESC c`).

OSC and DCS strings are read and then discarded. Any other sequence is ignored.
A move that would put the cursor outside the window does nothing. Every chunk
passed to `feed` is parsed separately, so a sequence split across two chunks is
not recognised.

### What it does not do

The multiplexer cannot switch focus between panes. The active pane is always
the one created most recently. It cannot close single panes, it does not react
when the outer terminal is resized, and it has no scrollback. `cursor_visible`
is recorded but never applied to the screen. Bright colours are drawn the same
as the normal ones.

## The session shell

```
slurm-shell [--session FILE]
```

This is a line-oriented shell. Its prompt is the current directory. It records
the commands you run, and it recognises these built-ins:

| Command       | Effect                                                     |
|---------------|------------------------------------------------------------|
| `cd <path>`   | change directory, printing `Invalid directory.` on failure |
| `cls`         | clear the screen                                           |
| `savesession` | write the recorded commands to the session file            |
| `loadsession` | run, in order, the commands stored in the session file     |
| `exit`        | leave the shell                                            |

The session file is `session.txt` in the current directory unless `--session`
names another one. Any other line goes to the system shell. `cd`, `cls` and
external commands are recorded. `savesession`, `loadsession` and `exit` are
not. The shell also stops at end of input.

## Library use

The building blocks work on their own:

- `slurmterm.window.Window` is an in-memory character grid with a cursor,
  attributes (`Attr`) and a colour pair. Use `row_text` and `lines` to read it
  back.
- `slurmterm.ansi.AnsiRenderer(window, colors)` feeds bytes of terminal output
  into a `Window`. `clean_string` strips carriage returns.
- `slurmterm.keys.encode_key` maps a key code to the bytes it sends.
  `slurmterm.keys.key_action` classifies a key as a `KeyAction`.
- `slurmterm.layout.Rect` and `slurmterm.layout.Layout` hold the pane
  rectangles and split them.
- `slurmterm.pseudoconsole.PseudoConsole(command, (columns, rows))` runs a
  command on a pseudo terminal and provides `start`, `read`, `write`, `resize`
  and `close`. It can also be used as a context manager.
- `slurmterm.app.Multiplexer(screen, command)` drives a curses screen.
- `slurmterm.shell.Shell` is the session-recording shell. `exit` raises
  `ShellExit` from `execute`.

```python
from slurmterm.window import Window
from slurmterm.ansi import AnsiRenderer

win = Window(3, 10)
AnsiRenderer(win).feed(b"hi\r\n\x1b[1mthere")
print(win.lines())
```