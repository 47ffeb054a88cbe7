"""
Search Service - delegates matching, substitution and discovery to ripgrep
"""
import os
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, List, Optional, Sequence, Tuple
from ..cli.base import EXIT_ERROR, ErrorType
from ..cli.rg import Rg
from ..libs.config import SdRgConfig
from ..libs.invocation import Invocation
from ..libs.logger import get_logger
logger = get_logger(__name__)


class SearchEngineError(RuntimeError):
    """Raised when the search engine cannot be started or reports a failure"""
    def __init__(self, message: str, args: Sequence[str] = (), exit_code: Optional[int] = None):
        super().__init__(message)
        self.command = list(args)
        self.exit_code = exit_code


class DiscoveryStatus(Enum):
    """Outcome of a files-with-matches lookup"""
    FOUND = "found"
    NO_MATCHES = "no_matches"
    INVOCATION_ERROR = "invocation_error"


@dataclass(frozen=True)
class DiscoveryResult:
    """Files containing at least one match, in listing order without duplicates"""
    status: DiscoveryStatus
    files: Tuple[str, ...] = ()
    error_message: Optional[str] = None
    # rg's stderr, verbatim, for the caller to show
    error_output: str = ""


@dataclass
class PreviewResult:
    """Captured preview lines"""
    lines: List[str] = field(default_factory=list)
    truncated: bool = False
    exit_code: Optional[int] = None


class SearchEngine(ABC):
    """Capabilities sd-rg needs from an external search engine"""

    @abstractmethod
    def find_files_with_matches(self, invocation: Invocation) -> DiscoveryResult:
        """List files under invocation.search_paths containing a match."""

    @abstractmethod
    def substitute_stream(self, invocation: Invocation, stdin: Optional[BinaryIO] = None,
                          stdout: Optional[BinaryIO] = None) -> int:
        """Copy stdin to stdout with matches replaced; returns the engine exit status."""

    @abstractmethod
    def substitute_file(self, invocation: Invocation, path: str, out_file: BinaryIO) -> None:
        """Write the substituted content of ``path`` to ``out_file``; raises SearchEngineError."""

    @abstractmethod
    def preview_matches(self, invocation: Invocation, limit: int) -> PreviewResult:
        """Render matching lines with the substitution applied, at most ``limit`` lines."""


class RipgrepService(SearchEngine):
    """Search engine adapter that shells out to rg"""
    def __init__(self, cfg: SdRgConfig):
        """
        Initialize ripgrep service
        Args:
            cfg: sd-rg configuration (binary, color, --no-config)
        """
        self.cfg = cfg

    def command(self, invocation: Invocation) -> Rg:
        """Build an Rg wrapper with the invocation's flags translated."""
        return (
            Rg(self.cfg.rg_binary)
            .no_config(self.cfg.ignore_rg_config)
            .fixed_strings(invocation.string_mode)
            .ignore_case(invocation.ignore_case)
            .color(self.cfg.color)
        )

    def _run(self, args: List[str], **kwargs) -> subprocess.CompletedProcess:
        logger.debug("Running: %s", args)
        try:
            return subprocess.run(args, check=False, **kwargs)
        except OSError as exc:
            raise SearchEngineError(f"cannot run {args[0]}: {exc.strerror or exc}", args) from exc

    def find_files_with_matches(self, invocation: Invocation) -> DiscoveryResult:
        """
        List matching files
        Args:
            invocation: Parsed invocation
        Returns:
            DiscoveryResult; rg's stderr is captured into error_output, never discarded
        """
        args = self.command(invocation).files_with_matches(invocation.pattern, invocation.search_paths)
        try:
            proc = self._run(args, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
        except SearchEngineError as exc:
            return DiscoveryResult(DiscoveryStatus.INVOCATION_ERROR, error_message=str(exc), error_output=str(exc))
        files = tuple(dict.fromkeys(os.fsdecode(name) for name in proc.stdout.split(b"\0") if name))
        error_output = proc.stderr.decode("utf-8", errors="replace")
        result = Rg.parse_result(proc.returncode, error_output)
        if files:
            if result.has_error:
                # Partial failure (e.g. one unreadable file): keep what was listed
                logger.debug("rg reported an error during discovery: %s", result.error_message)
            return DiscoveryResult(DiscoveryStatus.FOUND, files, result.error_message, error_output)
        if result.error_type in (ErrorType.NONE, ErrorType.NO_MATCHES):
            return DiscoveryResult(DiscoveryStatus.NO_MATCHES, error_output=error_output)
        return DiscoveryResult(DiscoveryStatus.INVOCATION_ERROR, error_message=result.error_message,
                               error_output=error_output)

    def substitute_stream(self, invocation: Invocation, stdin: Optional[BinaryIO] = None,
                          stdout: Optional[BinaryIO] = None) -> int:
        """
        Passthrough substitution from stdin to stdout
        Args:
            invocation: Parsed invocation
            stdin: Input stream (default: inherit the process's stdin)
            stdout: Output stream (default: inherit the process's stdout)
        Returns:
            rg exit status
        """
        args = self.command(invocation).passthrough(invocation.pattern, invocation.replacement)
        return self._run(args, stdin=stdin, stdout=stdout).returncode

    def substitute_file(self, invocation: Invocation, path: str, out_file: BinaryIO) -> None:
        """
        Passthrough substitution of a single file
        Args:
            invocation: Parsed invocation
            path: File to read
            out_file: Destination for the substituted content
        Raises:
            SearchEngineError: rg could not run or failed on this file
        """
        args = self.command(invocation).passthrough(invocation.pattern, invocation.replacement, path)
        proc = self._run(args, stdin=subprocess.DEVNULL, stdout=out_file, stderr=subprocess.PIPE)
        result = Rg.parse_result(proc.returncode, proc.stderr.decode("utf-8", errors="replace"))
        # Passthru emits the whole file even when nothing matched (exit 1)
        if result.has_error:
            raise SearchEngineError(
                f"{path}: {result.error_message or 'substitution failed'}", args, proc.returncode
            )

    def preview_matches(self, invocation: Invocation, limit: int) -> PreviewResult:
        """
        Capture the first ``limit`` lines of a substituted match listing
        Args:
            invocation: Parsed invocation
            limit: Maximum number of lines to keep
        Returns:
            PreviewResult; rg is stopped once the limit is exceeded
        Raises:
            SearchEngineError: rg could not run or reported an error
        """
        args = self.command(invocation).preview(invocation.pattern, invocation.replacement,
                                                 invocation.search_paths)
        logger.debug("Running: %s", args)
        result = PreviewResult()
        try:
            proc = subprocess.Popen(args, stdin=subprocess.DEVNULL, stdout=subprocess.PIPE)
        except OSError as exc:
            raise SearchEngineError(f"cannot run {args[0]}: {exc.strerror or exc}", args) from exc
        with proc:
            for raw in proc.stdout:
                if len(result.lines) >= limit:
                    result.truncated = True
                    proc.kill()
                    break
                result.lines.append(raw.decode("utf-8", errors="replace").rstrip("\r\n"))
        result.exit_code = proc.returncode
        # A killed rg after truncation is not a failure; rg's own stderr was inherited
        if result.exit_code == EXIT_ERROR and not result.truncated:
            raise SearchEngineError(f"{args[0]} exited with status {EXIT_ERROR}", args, EXIT_ERROR)
        return result
