"""
Ripgrep command wrapper with fluent API
"""
from typing import List, Optional, Sequence
from ..libs.logger import get_logger
from .base import CommandWrapper
logger = get_logger(__name__)

STDIN_PATH = "-"


class Rg(CommandWrapper):
    """Wrapper for rg commands with fluent API - terminal methods return argument lists"""
    def __init__(self, binary: str = "rg"):
        """Initialize with default settings"""
        self._binary: str = binary
        self._fixed_strings: bool = False
        self._ignore_case: bool = False
        self._no_config: bool = True
        self._color: str = "never"

    def fixed_strings(self, value: bool = True) -> "Rg":
        """Treat the pattern as a literal string (returns self for chaining)."""
        self._fixed_strings = value
        return self

    def ignore_case(self, value: bool = True) -> "Rg":
        """Match case-insensitively (returns self for chaining)."""
        self._ignore_case = value
        return self

    def no_config(self, value: bool = True) -> "Rg":
        """Ignore RIPGREP_CONFIG_PATH (returns self for chaining)."""
        self._no_config = value
        return self

    def color(self, value: str) -> "Rg":
        """Set color mode used by preview (returns self for chaining)."""
        self._color = value
        return self

    def _base(self) -> List[str]:
        args = [self._binary]
        if self._no_config:
            args.append("--no-config")
        if self._fixed_strings:
            args.append("--fixed-strings")
        if self._ignore_case:
            args.append("--ignore-case")
        return args

    @staticmethod
    def _tail(pattern: str, paths: Sequence[str], replacement: Optional[str] = None) -> List[str]:
        # --opt=value keeps values that start with "-" from being read as flags
        args = [f"--regexp={pattern}"]
        if replacement is not None:
            args.append(f"--replace={replacement}")
        args.append("--")
        args.extend(paths)
        return args

    def passthrough(self, pattern: str, replacement: str, path: str = STDIN_PATH) -> List[str]:
        """Generate rg command emitting every input line with matches substituted."""
        return (
            self._base()
            + ["--passthru", "--no-line-number", "--no-filename", "--no-heading", "--color=never"]
            + self._tail(pattern, [path], replacement)
        )

    def files_with_matches(self, pattern: str, paths: Sequence[str]) -> List[str]:
        """Generate rg command listing each file with a match once, NUL separated, sorted by path."""
        return (
            self._base()
            + ["--files-with-matches", "--null", "--sort=path", "--no-heading", "--with-filename",
               "--color=never"]
            + self._tail(pattern, paths)
        )

    def preview(self, pattern: str, replacement: str, paths: Sequence[str]) -> List[str]:
        """Generate rg command showing matches with the substitution applied and locations."""
        return (
            self._base()
            + ["--no-heading", "--with-filename", "--line-number", "--sort=path", f"--color={self._color}"]
            + self._tail(pattern, paths, replacement)
        )
