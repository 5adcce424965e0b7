"""A small terminal multiplexer with split panes, an ANSI renderer and a recording shell."""

__version__ = "0.1.0"