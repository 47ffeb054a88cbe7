"""
Shared fixtures: an in-process search engine standing in for rg
"""
import re
from pathlib import Path
from typing import List
import pytest
from sdrg.libs.config import SdRgConfig
from sdrg.libs.invocation import Invocation
from sdrg.services.search import (
    DiscoveryResult,
    DiscoveryStatus,
    PreviewResult,
    SearchEngine,
    SearchEngineError,
)


def _python_replacement(replacement: str) -> str:
    """Translate $1 / $name / ${name} into re.sub syntax."""
    escaped = replacement.replace("\\", "\\\\")
    return re.sub(r"\$(?:\{(\w+)\}|(\w+))", lambda m: f"\\g<{m.group(1) or m.group(2)}>", escaped)


class FakeSearchEngine(SearchEngine):
    """Search engine implemented with the re module, recording every call"""
    def __init__(self):
        self.calls: List[tuple] = []
        self.fail_on: set = set()

    def _regex(self, invocation: Invocation):
        pattern = re.escape(invocation.pattern) if invocation.string_mode else invocation.pattern
        return re.compile(pattern, re.IGNORECASE if invocation.ignore_case else 0)

    def _files(self, invocation: Invocation):
        for root in invocation.search_paths:
            root_path = Path(root)
            candidates = [root_path] if root_path.is_file() else sorted(p for p in root_path.rglob("*") if p.is_file())
            for path in candidates:
                yield str(path)

    def find_files_with_matches(self, invocation):
        self.calls.append(("find_files_with_matches", invocation))
        regex = self._regex(invocation)
        files = tuple(dict.fromkeys(p for p in self._files(invocation) if regex.search(Path(p).read_text())))
        if not files:
            return DiscoveryResult(DiscoveryStatus.NO_MATCHES)
        return DiscoveryResult(DiscoveryStatus.FOUND, files)

    def substitute_stream(self, invocation, stdin=None, stdout=None):
        self.calls.append(("substitute_stream", invocation))
        data = stdin.read().decode("utf-8")
        stdout.write(self._regex(invocation).sub(_python_replacement(invocation.replacement), data).encode("utf-8"))
        return 0

    def substitute_file(self, invocation, path, out_file):
        self.calls.append(("substitute_file", invocation, path))
        if path in self.fail_on:
            raise SearchEngineError(f"{path}: substitution failed", ["fake"], 2)
        text = Path(path).read_text()
        out_file.write(self._regex(invocation).sub(_python_replacement(invocation.replacement), text).encode("utf-8"))

    def preview_matches(self, invocation, limit):
        self.calls.append(("preview_matches", invocation, limit))
        regex = self._regex(invocation)
        result = PreviewResult(exit_code=0)
        for path in self._files(invocation):
            for number, line in enumerate(Path(path).read_text().splitlines(), 1):
                if regex.search(line):
                    if len(result.lines) >= limit:
                        result.truncated = True
                        return result
                    result.lines.append(f"{path}:{number}:{regex.sub(_python_replacement(invocation.replacement), line)}")
        return result

    def call_names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def cfg():
    """Fixture for default configuration"""
    return SdRgConfig()


@pytest.fixture
def engine():
    """Fixture for the in-process search engine"""
    return FakeSearchEngine()


@pytest.fixture
def tree(tmp_path):
    """Fixture for a small directory of text files"""
    (tmp_path / "a.txt").write_text("hello world\nfoo bar\n")
    (tmp_path / "b.txt").write_text("nothing to see\n")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "c.txt").write_text("Hello again\nhello once more\n")
    return tmp_path
