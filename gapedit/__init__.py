"""Gap buffer with a line index, command-line parsing, a modal input line and clipboard access."""

__version__ = "0.1.8"