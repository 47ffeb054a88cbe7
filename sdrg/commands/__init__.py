"""Mode command implementations."""
from .stream import Stream
from .preview import Preview
from .replace import Replace
__all__ = ["Stream", "Preview", "Replace"]
