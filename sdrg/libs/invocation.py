"""
Parsed invocation - the immutable result of reading the command line
"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

DEFAULT_PATHS = (".",)


class Mode(Enum):
    """Operating modes, in selection precedence order"""
    STREAM = "stream"
    PREVIEW = "preview"
    REPLACE = "replace"


@dataclass(frozen=True)
class Invocation:
    """A single sd-rg run, constructed once by the argument parser"""
    pattern: str
    replacement: str
    paths: Tuple[str, ...] = ()
    preview: bool = False
    string_mode: bool = False
    flags: str = ""

    @property
    def ignore_case(self) -> bool:
        """Only the "i" regex flag is interpreted."""
        return "i" in self.flags

    @property
    def search_paths(self) -> Tuple[str, ...]:
        """Explicit paths, or the current directory when none were given."""
        return self.paths or DEFAULT_PATHS

    def select_mode(self, stdin_is_tty: bool) -> Mode:
        """
        Choose the operating mode
        Args:
            stdin_is_tty: Whether standard input is an interactive terminal
        Returns:
            STREAM when no paths were given and input is piped, else PREVIEW or REPLACE
        """
        if not self.paths and not stdin_is_tty:
            return Mode.STREAM
        if self.preview:
            return Mode.PREVIEW
        return Mode.REPLACE
