"""Replace command: rewrite every matching file in place."""
from dataclasses import dataclass
from typing import List
from ..libs.command import Command
from ..libs.files import atomic_replace
from ..libs.invocation import Invocation
from ..libs.logger import get_logger
logger = get_logger(__name__)


@dataclass
class Replace(Command):
    """Holds in-place replacement context."""

    def run(self, invocation: Invocation) -> int:
        """
        Replace matches in every matching file
        Engine and I/O errors propagate; files already rewritten stay rewritten.
        """
        files = self.discover(invocation)
        if not files:
            self.echo("No matches found")
            return 0
        logger.debug("Found %s files to modify", len(files))
        modified: List[str] = []
        for path in files:
            with atomic_replace(path) as tmp_file:
                self.search_engine.substitute_file(invocation, path, tmp_file)
            modified.append(path)
            self.echo(f"Modified: {path}")
        self.echo(f"Modified {len(modified)} file{'s' if len(modified) != 1 else ''}")
        return 0
