"""
Services module - search engine interface and its ripgrep adapter
"""
from .search import (
    DiscoveryResult,
    DiscoveryStatus,
    PreviewResult,
    RipgrepService,
    SearchEngine,
    SearchEngineError,
)
__all__ = [
    "DiscoveryResult",
    "DiscoveryStatus",
    "PreviewResult",
    "RipgrepService",
    "SearchEngine",
    "SearchEngineError",
]
