"""
Parser for webflow markup

Transforms the token stream produced by the lexer into an abstract syntax
tree (AST) of Element nodes, plus the list of leading Import statements.

Grammar:
    program      := importStmt* element*
    importStmt   := "import" Tag "from" String ";"
    element      := Tag ":" elementBody
    elementBody  := (element | attributeSet)* ";"
    attributeSet := keyword ":"? Block
    keyword      := props | dataset | styles | classes | ids | content

Key features:
- Recursive descent with one token of lookahead
- Attribute mini-grammars for key/value lists, plain lists and content text
- Imports must precede every element

Example:
    >>> result = Parser('div: classes:{box} p: content:{Hi};;').parse()
    >>> result.elements[0].tag_name
    'div'
    >>> result.elements[0].children[0].content
    'Hi'
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, NoReturn, Optional, Tuple, Union

from ..models.errors import ErrorKind
from ..models.parser import KeyValue, ParseResult
from .errors import error_raise
from .lexer import Token, TokenType, tokenize
from .log import LOG


@dataclass
class Element:
    """
    Represents one element in the abstract syntax tree

    Attributes:
        tag_name: Tag name (e.g., "div", or a component name like "Header")
        props: Plain attributes, rendered as key="value"
        datasets: Data attributes, rendered as data-key="value"
        ids: Id tokens, rendered space-joined in one id="" attribute
        classes: Class tokens, rendered space-joined in one class="" attribute
        content: Inline text placed before the children, or None
        style: CSS declarations, rendered as style="k:v;k:v"
        closed: Body was terminated by ';'
        children: Nested elements in source order
        position: Source offset of the tag name (for error reporting)

    Example:
        For source 'a: props:{href: "/"} content:{Home};':
        Element(
            tag_name="a",
            props=[("href", '"/"')],
            content="Home",
            closed=True,
            ...
        )
    """
    tag_name: str
    props: List[KeyValue] = field(default_factory=list)
    datasets: List[KeyValue] = field(default_factory=list)
    ids: List[str] = field(default_factory=list)
    classes: List[str] = field(default_factory=list)
    content: Optional[str] = None
    style: List[KeyValue] = field(default_factory=list)
    closed: bool = False
    children: List['Element'] = field(default_factory=list)
    position: int = 0


@dataclass
class Import:
    """
    An import statement: ``import Name from "path";``

    Attributes:
        name: Tag name substituted with the compiled component
        path: Path of the component source, relative to the importing file
        position: Source offset of the import keyword
    """
    name: str
    path: str
    position: int = 0


class Parser:
    """
    Recursive-descent parser for webflow markup

    Handles:
    - Leading import statements
    - Nested elements
    - Attribute sets (props, dataset, styles, classes, ids, content)
    - Error reporting with token index and source position
    """

    def __init__(self, source: Union[str, List[Token]], debug: bool = False):
        """
        Initialize parser with source text or a token list

        Args:
            source: Raw webflow source, or tokens already produced by tokenize()
            debug: Enable debug output for parser operations

        Attributes:
            tokens: Token list being consumed (always EOF-terminated)
            position: Index of the current token
            imports: Accumulated import statements
            ast: Accumulated list of parsed top-level elements
        """
        self.source: Optional[str] = None
        if isinstance(source, str):
            self.source = source
            source = tokenize(source)
        self.tokens: List[Token] = source
        self.debug = debug
        self.position = 0
        self.imports: List[Import] = []
        self.ast: List[Element] = []

        self.attribute_parsers: Dict[TokenType, Tuple[str, Callable[[str], object]]] = {
            TokenType.PROPS: ('props', self.keyValue_parse),
            TokenType.DATASET: ('datasets', self.keyValue_parse),
            TokenType.STYLE: ('style', self.keyValue_parse),
            TokenType.CLASSES: ('classes', self.list_parse),
            TokenType.IDS: ('ids', self.list_parse),
            TokenType.CONTENT: ('content', self.content_parse),
        }

    def current(self) -> Token:
        """Return the lookahead token without consuming it"""
        return self.tokens[self.position]

    def eat(self, expected: Optional[TokenType] = None) -> Token:
        """
        Consume and return the current token

        The cursor never moves past the final EOF token.

        Args:
            expected: If given, the token type the current token must have

        Raises:
            WebflowError: UnexpectedToken if the type does not match
        """
        token = self.current()
        index = self.position
        if expected is not None and token.type != expected:
            self.error(
                ErrorKind.UNEXPECTED_TOKEN,
                f"Unexpected token '{token.value}' of type {token.type.value} "
                f"at token position {index} (expected {expected.value})",
                token,
            )
        if token.type != TokenType.EOF:
            self.position += 1
        if self.debug:
            LOG(f"eat #{index}: {token.type.value} {token.value!r}", level=3)
        return token

    def parse(self) -> ParseResult:
        """
        Parse the token stream into imports and top-level elements

        Returns:
            ParseResult with imports and elements in source order

        Raises:
            WebflowError: UnexpectedToken or InvalidSyntax on malformed input

        Example:
            >>> Parser('import Nav from "nav.webf"; Nav:;').parse().imports[0].path
            'nav.webf'
        """
        while self.current().type != TokenType.EOF:
            token = self.current()
            if token.type == TokenType.IMPORT:
                if self.ast:
                    self.error(
                        ErrorKind.INVALID_SYNTAX,
                        f"Imports must appear before elements (token position {self.position})",
                        token,
                    )
                self.imports.append(self.import_parse())
            elif token.type == TokenType.SEMICOLON:
                # Stray top-level ';'
                self.eat()
            else:
                self.ast.append(self.element_parse())

        LOG(f"Parsed {len(self.imports)} imports and {len(self.ast)} top-level elements", level=3)
        return ParseResult(imports=self.imports, elements=self.ast)

    def import_parse(self) -> Import:
        """Parse ``import Name from "path";``"""
        keyword = self.eat(TokenType.IMPORT)
        name = self.eat(TokenType.TAG).value
        self.eat(TokenType.FROM)
        path = self.eat(TokenType.STRING).value
        self.eat(TokenType.SEMICOLON)
        return Import(name=name, path=path, position=keyword.position)

    def element_parse(self) -> Element:
        """
        Parse one element and, recursively, its children

        Returns:
            Element with closed=True once its terminating ';' is consumed
        """
        tag = self.eat(TokenType.TAG)
        element = Element(tag_name=tag.value, position=tag.position)
        self.eat(TokenType.COLON)

        while True:
            token = self.current()
            if token.type == TokenType.SEMICOLON:
                self.eat()
                element.closed = True
                break
            if token.type == TokenType.TAG:
                element.children.append(self.element_parse())
                continue
            if token.type in self.attribute_parsers:
                self.attributeSet_parse(element)
                continue
            self.error(
                ErrorKind.UNEXPECTED_TOKEN,
                f"Unexpected token '{token.value}' of type {token.type.value} "
                f"at token position {self.position} in body of '{element.tag_name}'",
                token,
            )

        return element

    def attributeSet_parse(self, element: Element) -> None:
        """
        Parse one attribute set into ``element``

        A repeated keyword replaces the earlier value for that category.
        """
        token = self.current()
        entry = self.attribute_parsers.get(token.type)
        if entry is None:
            self.error(ErrorKind.INVALID_SYNTAX, "Invalid attribute set or missing semicolon", token)

        attribute, attribute_parse = entry
        self.eat()
        if self.current().type == TokenType.COLON:
            self.eat()
        block = self.eat(TokenType.BLOCK)
        setattr(element, attribute, attribute_parse(block.value))

    def segments_split(self, text: str) -> List[str]:
        """
        Split ``text`` on commas that are outside double-quoted spans

        Quote characters are kept in the segments.

        Example:
            >>> Parser([Token(TokenType.EOF, "EOF")]).segments_split('"a,b", c')
            ['"a,b"', ' c']
        """
        segments = []
        current = []
        quoted = False
        for char in text:
            if char == ',' and not quoted:
                segments.append(''.join(current))
                current = []
                continue
            if char == '"':
                quoted = not quoted
            current.append(char)
        segments.append(''.join(current))
        return segments

    def keyValue_parse(self, text: str) -> List[KeyValue]:
        """
        Parse a props{}, dataset{} or styles{} block

        Each non-blank segment is split on its first colon. A segment without
        a colon yields an empty value. Duplicate keys are kept.

        Example:
            >>> Parser([Token(TokenType.EOF, "EOF")]).keyValue_parse('href: "a:b", target:_blank')
            [('href', '"a:b"'), ('target', '_blank')]
        """
        pairs = []
        for segment in self.segments_split(text):
            if not segment.strip():
                continue
            key, _, value = segment.partition(':')
            pairs.append((key.strip(), value.strip()))
        return pairs

    def list_parse(self, text: str) -> List[str]:
        """
        Parse a classes{} or ids{} block

        Example:
            >>> Parser([Token(TokenType.EOF, "EOF")]).list_parse('"a,b", c')
            ['a,b', 'c']
        """
        return [self.quotes_strip(segment.strip()) for segment in self.segments_split(text) if segment.strip()]

    def content_parse(self, text: str) -> str:
        r"""Unescape ``\,`` to ``,``; everything else passes through verbatim"""
        return text.replace('\\,', ',')

    def quotes_strip(self, text: str) -> str:
        """Remove one layer of surrounding double quotes"""
        if text.startswith('"') and text.endswith('"'):
            return text[1:-1]
        return text

    def error(self, kind: ErrorKind, message: str, token: Token) -> NoReturn:
        """
        Report parser error with source context

        When the parser was built from source text, the message also carries
        line/column and an excerpt pointing at ``token``.

        Raises:
            WebflowError: Always
        """
        error_raise(kind, message, source=self.source, position=token.position)
