from __future__ import annotations
import os
import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO


class C:
    """ANSI color/style escape codes."""
    RESET = "\x1b[0m"
    BOLD  = "\x1b[1m"
    DIM   = "\x1b[2m"
    RED   = "\x1b[31m"
    CYAN  = "\x1b[36m"


@dataclass(frozen=True)
class Span:
    line: int
    col: int
    end_line: int
    end_col: int


@dataclass
class Diagnostic:
    code: str
    message: str
    span: Optional[Span] = None
    filename: Optional[str] = None

    def location(self, default_filename: str) -> str:
        filename = self.filename or default_filename
        if self.span is None:
            return filename
        return f"{filename}:{self.span.line}:{self.span.col}"


class Reporter:
    """Collects code generation errors for one compilation unit."""

    def __init__(self, filename: str = "<input>") -> None:
        self.filename = filename
        self.items: List[Diagnostic] = []

    def error(self, code: str, msg: str, span: Optional[Span] = None) -> None:
        self.items.append(Diagnostic(code, msg, span, filename=self.filename))

    @property
    def has_errors(self) -> bool:
        return bool(self.items)

    def format(self, use_color: bool = True) -> str:
        """Render all diagnostics, one line per diagnostic."""
        out: List[str] = []
        for d in self.items:
            loc = d.location(self.filename)
            message = d.message if d.message.endswith('.') else f"{d.message}."
            if use_color:
                kind = f"{C.BOLD}{C.RED}error{C.RESET}"
                out.append(f"{C.CYAN}{loc}{C.RESET}: {kind} [{C.DIM}{d.code}{C.RESET}]: {message}")
            else:
                out.append(f"{loc}: error [{d.code}]: {message}")
        return "\n".join(out)

    def print(self, stream: Optional[TextIO] = None, use_color: Optional[bool] = None) -> None:
        """Print diagnostics to `stream` (default: sys.stderr).

        Color is auto-enabled for TTY unless NO_COLOR or TERM=dumb.
        """
        stream = stream or sys.stderr

        if use_color is None:
            is_tty = getattr(stream, "isatty", lambda: False)()
            no_color = os.getenv("NO_COLOR") is not None
            dumb = os.getenv("TERM") == "dumb"
            use_color = bool(is_tty and not no_color and not dumb)

        text = self.format(use_color=use_color)
        if text:
            print(text, file=stream)
