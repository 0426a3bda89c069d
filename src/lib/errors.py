"""
Error reporting for the webflow compiler

All stages raise WebflowError through error_raise(), which attaches enough
positional context to locate the fault without a source map:

- lexer errors: character offset, line/column and a caret excerpt
- parser errors: token index and token value (caller supplied)
- resolver errors: absolute path of the import target
"""

from typing import NoReturn, Optional

from ..models.errors import ErrorKind, ERROR_HEADLINES


class WebflowError(Exception):
    """
    Fatal compilation error

    Attributes:
        kind: ErrorKind identifying the condition
        message: Full human-readable message (includes context)
        position: Character offset in the source, if known
        path: File path involved, if any
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        position: Optional[int] = None,
        path: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.position = position
        self.path = path

    @property
    def headline(self) -> str:
        return ERROR_HEADLINES[self.kind]

    def path_attach(self, path: str) -> None:
        """Record the file the error occurred in and name it in the message"""
        self.path = path
        self.message = f"In {path}:\n{self.message}"
        self.args = (self.message,)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


def lineColumn_find(source: str, position: int) -> tuple[int, int]:
    """
    Convert a 0-based character offset into 1-based line and column numbers.

    Example:
        >>> lineColumn_find("a\\nbc", 3)
        (2, 2)
    """
    line = source.count('\n', 0, position) + 1
    line_start = source.rfind('\n', 0, position) + 1
    return line, position - line_start + 1


def context_format(source: str, position: int) -> str:
    """
    Build a one-line source excerpt with a caret under ``position``.

    Newlines and tabs inside the excerpt are flattened to spaces so the caret
    lines up with the offending character.
    """
    from ..config import appsettings

    width = appsettings.context_width
    context_start = max(0, position - width)
    context_end = min(len(source), position + width)
    context = source[context_start:context_end].replace('\n', ' ').replace('\t', ' ').replace('\r', ' ')

    return (
        f"Context: ...{context}...\n"
        f"            {' ' * (position - context_start)}^"
    )


def error_raise(
    kind: ErrorKind,
    message: str,
    source: Optional[str] = None,
    position: Optional[int] = None,
    path: Optional[str] = None,
) -> NoReturn:
    """
    Raise a WebflowError with source context appended to the message

    Args:
        kind: Error kind
        message: Description of the fault
        source: Source text, used to compute line/column and an excerpt
        position: Character offset of the fault in ``source``
        path: File involved in the fault

    Raises:
        WebflowError: Always
    """
    detail = message
    if source is not None and position is not None:
        line, column = lineColumn_find(source, position)
        detail = (
            f"{message}\n"
            f"Line {line}, column {column}\n"
            f"{context_format(source, position)}"
        )

    raise WebflowError(kind, detail, position=position, path=path)
