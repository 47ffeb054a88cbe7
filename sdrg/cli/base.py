"""
Base command wrapper with result parsing for the search engine
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from ..libs.logger import get_logger
logger = get_logger(__name__)

# ripgrep exit statuses
EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


class ErrorType(Enum):
    """Error types that can be detected in search engine output"""
    NONE = "none"
    NO_MATCHES = "no_matches"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    INVALID_PATTERN = "invalid_pattern"
    INVALID_ARGUMENT = "invalid_argument"
    COMMAND_FAILED = "command_failed"
    UNKNOWN = "unknown"


@dataclass
class CommandResult:
    """Structured result from command execution"""
    success: bool
    error_type: ErrorType
    error_message: Optional[str]
    exit_code: Optional[int]

    @property
    def has_error(self) -> bool:
        """Whether parsing detected a genuine error (no matches is not one)."""
        return self.error_type not in (ErrorType.NONE, ErrorType.NO_MATCHES)


class CommandWrapper:  # pylint: disable=too-few-public-methods
    """Base wrapper for CLI commands - generates argument lists and parses results"""
    # Error patterns matched against stderr: (pattern, error_type, description)
    ERROR_PATTERNS = [
        (r"regex parse error|error parsing regex|unclosed group|unopened group", ErrorType.INVALID_PATTERN,
         "Invalid regular expression"),
        (r"permission denied|access denied|operation not permitted", ErrorType.PERMISSION_DENIED,
         "Permission denied"),
        (r"no such file or directory|not found|os error 2", ErrorType.NOT_FOUND, "Path not found"),
        (r"unexpected argument|invalid value|unrecognized flag|unknown option", ErrorType.INVALID_ARGUMENT,
         "Invalid argument"),
    ]

    @classmethod
    def parse_result(cls, exit_code: Optional[int], error_output: Optional[str] = None) -> CommandResult:
        """
        Parse an exit status and captured stderr into a structured result
        Args:
            exit_code: Exit code, None when the process could not be started
            error_output: Captured standard error, if any
        Returns:
            CommandResult object
        """
        error_type, error_msg = cls._parse_error(exit_code, error_output)
        return CommandResult(
            success=error_type == ErrorType.NONE,
            error_type=error_type,
            error_message=error_msg,
            exit_code=exit_code,
        )

    @classmethod
    def _parse_error(cls, exit_code: Optional[int], error_output: Optional[str]) -> tuple[ErrorType, Optional[str]]:
        """Identify error type and message from exit status and stderr"""
        if exit_code is None:
            return ErrorType.UNKNOWN, error_output or "Command could not be started"
        if exit_code == EXIT_MATCH:
            return ErrorType.NONE, None
        if exit_code == EXIT_NO_MATCH and not error_output:
            return ErrorType.NO_MATCHES, None
        if error_output:
            for pattern, error_type, description in cls.ERROR_PATTERNS:
                if re.search(pattern, error_output, re.IGNORECASE):
                    return error_type, cls._extract_error_message(error_output, pattern) or description
            # rg exits 1 when some paths errored and nothing else matched
            if exit_code == EXIT_NO_MATCH:
                return ErrorType.NO_MATCHES, cls._extract_error_message(error_output, r".")
        return ErrorType.COMMAND_FAILED, f"Command failed with exit code {exit_code}"

    @staticmethod
    def _extract_error_message(output: str, pattern: str) -> Optional[str]:
        """Extract relevant error line from output"""
        for line in output.splitlines():
            if re.search(pattern, line, re.IGNORECASE):
                msg = line.strip()
                if len(msg) > 200:
                    msg = msg[:197] + "..."
                return msg
        stripped = output.strip()
        return stripped[-200:] if stripped else None
