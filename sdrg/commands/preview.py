"""Preview command: show would-be changes without writing."""
from dataclasses import dataclass
from ..libs.command import Command
from ..libs.invocation import Invocation


@dataclass
class Preview(Command):
    """Render substituted matches and the list of files that would change."""

    def run(self, invocation: Invocation) -> int:
        """Show a capped preview, then the matching files. Never modifies anything."""
        limit = self.cfg.preview_lines
        preview = self.search_engine.preview_matches(invocation, limit)
        files = self.discover(invocation)
        if not files:
            self.echo("No matches found")
            return 0
        self.echo("Preview of changes:")
        for line in preview.lines:
            self.echo(line)
        if preview.truncated:
            self.echo(f"... (output truncated after {limit} lines)")
        self.echo()
        self.echo("Files that would be modified:")
        for path in files:
            self.echo(path)
        return 0
