"""
webflow - markup to HTML compiler

Compiles indentation-free .webf element markup, with component imports,
into HTML fragments.
"""

from .lib import (
    __version__,
    Parser,
    Compiler,
    Emitter,
    WebflowError,
    tokenize,
    source_compile,
    file_compile,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "Parser",
    "Compiler",
    "Emitter",
    "WebflowError",
    "tokenize",
    "source_compile",
    "file_compile",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
