"""Base class for mode command classes."""
import sys
from dataclasses import dataclass, field
from typing import Any, TextIO, Tuple
from .invocation import Invocation
from .logger import get_logger
logger = get_logger(__name__)


@dataclass
class Command:
    """Base class for mode command classes."""
    cfg: Any
    search_engine: Any = None
    out: TextIO = field(default_factory=lambda: sys.stdout)
    err: TextIO = field(default_factory=lambda: sys.stderr)

    def echo(self, message: str = "") -> None:
        """Write a user-facing line to standard output."""
        self.out.write(f"{message}\n")
        self.out.flush()

    def discover(self, invocation: Invocation) -> Tuple[str, ...]:
        """
        Matching files; a failed lookup counts as no matches
        rg's diagnostics are relayed to stderr unchanged.
        """
        # Imported here: services.search depends on libs
        from ..services.search import DiscoveryStatus
        discovery = self.search_engine.find_files_with_matches(invocation)
        if discovery.error_output:
            self.err.write(discovery.error_output)
            if not discovery.error_output.endswith("\n"):
                self.err.write("\n")
            self.err.flush()
        if discovery.status == DiscoveryStatus.INVOCATION_ERROR:
            logger.debug("Discovery failed, treating as no matches: %s", discovery.error_message)
            return ()
        return discovery.files
