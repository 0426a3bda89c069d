"""
Models package for webflow

Contains data structures and type definitions for the compilation pipeline.
"""

from .state import ProgramState, pipeline
from .errors import ErrorKind, ERROR_HEADLINES
from .parser import KeyValue, ParseResult

__all__ = [
    "ProgramState",
    "pipeline",
    "ErrorKind",
    "ERROR_HEADLINES",
    "KeyValue",
    "ParseResult",
]
