"""
webflow - markup compiler library

Lexer, parser, emitter and import-resolving compiler for .webf sources.
"""

__version__ = "1.0.0"

from .lexer import Lexer, Token, TokenType, tokenize
from .parser import Parser, Element, Import
from .emitter import Emitter
from .compiler import Compiler, LocalFileSystem, source_compile, file_compile
from .errors import WebflowError
from .log import LOG, state_connectToLogger

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "Parser",
    "Element",
    "Import",
    "Emitter",
    "Compiler",
    "LocalFileSystem",
    "source_compile",
    "file_compile",
    "WebflowError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
