"""
Error kinds raised by the compilation pipeline

Every fatal condition is one member of ErrorKind. A single exception type
(WebflowError in lib/errors.py) carries the kind, so callers branch on
``error.kind`` instead of on an exception class hierarchy.
"""

from enum import Enum
from typing import Dict


class ErrorKind(Enum):
    """
    Fatal error conditions, grouped by the stage that raises them
    """
    EMPTY_SOURCE = "EmptySource"                    # lexer
    UNCLOSED_CONSTRUCT = "UnclosedConstruct"        # lexer
    UNEXPECTED_CHARACTER = "UnexpectedCharacter"    # lexer
    UNEXPECTED_TOKEN = "UnexpectedToken"            # parser
    INVALID_SYNTAX = "InvalidSyntax"                # parser
    IMPORT_NOT_FOUND = "ImportNotFound"             # resolver
    CYCLIC_IMPORT = "CyclicImport"                  # resolver
    UNREADABLE_SOURCE = "UnreadableSource"          # resolver


# Headline printed at the CLI boundary, one per kind
ERROR_HEADLINES: Dict[ErrorKind, str] = {
    ErrorKind.EMPTY_SOURCE: "Empty source",
    ErrorKind.UNCLOSED_CONSTRUCT: "Unclosed construct",
    ErrorKind.UNEXPECTED_CHARACTER: "Unexpected character",
    ErrorKind.UNEXPECTED_TOKEN: "Unexpected token",
    ErrorKind.INVALID_SYNTAX: "Invalid syntax",
    ErrorKind.IMPORT_NOT_FOUND: "Import not found",
    ErrorKind.CYCLIC_IMPORT: "Cyclic import",
    ErrorKind.UNREADABLE_SOURCE: "Unreadable source",
}
