"""
Tokenizer for webflow markup

Turns raw .webf source into an EOF-terminated list of tokens.

Token types:
- Tag: any identifier that is not a keyword (e.g., div, Header, h1)
- Colon / Semicolon: ':' and ';'
- Block: raw text between '{' and '}' (escapes \\{ \\} \\\\ resolved)
- String: raw text between double quotes (escapes \\" \\\\ resolved)
- Props, Dataset, Classes, Ids, Content, Style: attribute-set keywords
- Import, From: import statement keywords
- EOF: end of input, always exactly one, always last

Comments start with '--' and run to the end of the line.

Example:
    >>> [t.type.value for t in tokenize("div: content:{hi};")]
    ['Tag', 'Colon', 'Content', 'Colon', 'Block', 'Semicolon', 'EOF']
"""

import string
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from ..models.errors import ErrorKind
from .errors import error_raise
from .log import LOG


class TokenType(Enum):
    TAG = "Tag"
    COLON = "Colon"
    SEMICOLON = "Semicolon"
    BLOCK = "Block"
    STRING = "String"
    PROPS = "Props"
    DATASET = "Dataset"
    CLASSES = "Classes"
    IDS = "Ids"
    CONTENT = "Content"
    STYLE = "Style"
    IMPORT = "Import"
    FROM = "From"
    EOF = "EOF"


@dataclass
class Token:
    """
    A single lexical token

    Attributes:
        type: Token type
        value: Token text (unescaped for Block and String tokens)
        position: Character offset of the token's first character in source
    """
    type: TokenType
    value: str
    position: int = 0


KEYWORDS: Dict[str, TokenType] = {
    'props': TokenType.PROPS,
    'content': TokenType.CONTENT,
    'classes': TokenType.CLASSES,
    'ids': TokenType.IDS,
    'dataset': TokenType.DATASET,
    'styles': TokenType.STYLE,
    'from': TokenType.FROM,
    'import': TokenType.IMPORT,
}

WHITESPACE = ' \t\r\n'
ASCII_IDENTIFIER_CHARS = frozenset(string.ascii_letters + string.digits)


class Lexer:
    """
    Left-to-right scanner over webflow source text

    Handles:
    - Punctuation (':' and ';')
    - Brace blocks and quoted strings with backslash escapes
    - Line comments
    - Identifiers and reserved keywords
    """

    def __init__(self, source: str, unicode_identifiers: Optional[bool] = None):
        """
        Initialize lexer with source text

        Args:
            source: Raw webflow source text (.webf file contents)
            unicode_identifiers: Also accept case-bearing non-ASCII characters
                                 in identifiers. Defaults to the
                                 ``unicode_identifiers`` setting.
        """
        from ..config import appsettings

        self.source = source
        self.position = 0
        self.tokens: List[Token] = []
        if unicode_identifiers is None:
            unicode_identifiers = appsettings.unicode_identifiers
        self.unicode_identifiers = unicode_identifiers

    def identifierChar_is(self, char: str) -> bool:
        """Check whether ``char`` may appear in a tag name or keyword"""
        if char in ASCII_IDENTIFIER_CHARS:
            return True
        if self.unicode_identifiers:
            return char.upper() != char.lower()
        return False

    def peek(self, offset: int = 0) -> str:
        """Character at ``position + offset``, or '' past the end"""
        index = self.position + offset
        if index < len(self.source):
            return self.source[index]
        return ''

    def tokenize(self) -> List[Token]:
        """
        Scan the whole source into tokens

        Returns:
            List of tokens ending with exactly one EOF token

        Raises:
            WebflowError: EmptySource, UnclosedConstruct or UnexpectedCharacter
        """
        if not self.source:
            error_raise(ErrorKind.EMPTY_SOURCE, "Empty source given to compile.")

        while self.position < len(self.source):
            char = self.source[self.position]

            if char == ':':
                self.tokens.append(Token(TokenType.COLON, char, self.position))
                self.position += 1
            elif char == ';':
                self.tokens.append(Token(TokenType.SEMICOLON, char, self.position))
                self.position += 1
            elif char == '{':
                self.delimited_scan('}', TokenType.BLOCK, "block", escapes='{}\\')
            elif char == '"':
                self.delimited_scan('"', TokenType.STRING, "string", escapes='"\\')
            elif char == '-' and self.peek(1) == '-':
                self.comment_skip()
            elif self.identifierChar_is(char):
                self.word_scan()
            elif char in WHITESPACE:
                self.position += 1
            else:
                error_raise(
                    ErrorKind.UNEXPECTED_CHARACTER,
                    f"Unexpected char '{char}' at position {self.position}",
                    source=self.source,
                    position=self.position,
                )

        self.tokens.append(Token(TokenType.EOF, "EOF", len(self.source)))
        LOG(f"Tokenized {len(self.source)} characters into {len(self.tokens)} tokens", level=3)
        return self.tokens

    def delimited_scan(self, closer: str, token_type: TokenType, construct: str, escapes: str) -> None:
        """
        Scan a block or string starting at the opening delimiter

        A backslash followed by one of ``escapes`` yields that character;
        any other backslash is kept verbatim.

        Args:
            closer: Closing delimiter character
            token_type: Type of token to emit
            construct: Name used in the unclosed error ("block" or "string")
            escapes: Characters that may follow a backslash
        """
        start = self.position
        self.position += 1
        value = []

        while self.position < len(self.source):
            char = self.source[self.position]
            if char == '\\' and self.peek(1) != '' and self.peek(1) in escapes:
                value.append(self.peek(1))
                self.position += 2
            elif char == closer:
                break
            else:
                value.append(char)
                self.position += 1

        if self.position >= len(self.source):
            error_raise(
                ErrorKind.UNCLOSED_CONSTRUCT,
                f"Unclosed {construct} opened at position {start}",
                source=self.source,
                position=start,
            )

        self.position += 1  # closer
        self.tokens.append(Token(token_type, ''.join(value), start))

    def comment_skip(self) -> None:
        """Discard characters up to, not including, the next newline"""
        while self.position < len(self.source) and self.source[self.position] != '\n':
            self.position += 1

    def word_scan(self) -> None:
        """Collect a maximal identifier run as a keyword or Tag token"""
        start = self.position
        while self.position < len(self.source) and self.identifierChar_is(self.source[self.position]):
            self.position += 1

        word = self.source[start:self.position]
        self.tokens.append(Token(KEYWORDS.get(word, TokenType.TAG), word, start))


def tokenize(source: str, unicode_identifiers: Optional[bool] = None) -> List[Token]:
    """
    Tokenize webflow source text

    Args:
        source: Raw webflow source text
        unicode_identifiers: See Lexer

    Returns:
        List of tokens ending with exactly one EOF token
    """
    return Lexer(source, unicode_identifiers=unicode_identifiers).tokenize()
