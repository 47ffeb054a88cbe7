"""
CLI command wrappers with error parsing and structured results
"""
from .base import CommandResult, ErrorType, CommandWrapper
from .rg import Rg
__all__ = [
    "CommandResult",
    "ErrorType",
    "CommandWrapper",
    "Rg",
]
