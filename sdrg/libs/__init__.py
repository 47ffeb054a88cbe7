"""
Library functions organized by usage:
- invocation: parsed command line and mode selection
- config: configuration data model and YAML loading
- logger: logging configuration and utilities
- files: atomic file replacement
- command: base class for mode commands
"""
from . import invocation
from . import config
from . import logger
from . import files
from . import command
__all__ = ["invocation", "config", "logger", "files", "command"]
