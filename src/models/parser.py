"""
Parser-specific data models

Type-safe structures for parser operations and return values.
"""

from dataclasses import dataclass, field
from typing import List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ..lib.parser import Element, Import


# (key, value) pair from a props{}, dataset{} or styles{} block
KeyValue = Tuple[str, str]


@dataclass
class ParseResult:
    """
    Result of parsing one webflow source file

    Returned by Parser.parse().

    Attributes:
        imports: Import statements in declaration order
        elements: Top-level elements in source order

    Example:
        For source 'import Nav from "nav.webf"; div: Nav:;;':
        ParseResult(
            imports=[Import(name="Nav", path="nav.webf", ...)],
            elements=[Element(tag_name="div", children=[Element(tag_name="Nav", ...)], ...)]
        )
    """
    imports: List['Import'] = field(default_factory=list)
    elements: List['Element'] = field(default_factory=list)
