"""Stream command: stdin to stdout substitution."""
import sys
from dataclasses import dataclass
from typing import BinaryIO, Optional
from ..libs.command import Command
from ..libs.invocation import Invocation
from ..libs.logger import get_logger
logger = get_logger(__name__)


@dataclass
class Stream(Command):
    """Pipe standard input through the search engine's passthrough substitution."""
    stdin: Optional[BinaryIO] = None
    stdout: Optional[BinaryIO] = None

    def run(self, invocation: Invocation) -> int:
        """Substitute standard input; a stream without matches still succeeds."""
        sys.stdout.flush()
        exit_code = self.search_engine.substitute_stream(invocation, stdin=self.stdin, stdout=self.stdout)
        logger.debug("Stream substitution finished with engine status %s", exit_code)
        return 0
