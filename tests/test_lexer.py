"""
Lexer tests - token classification, escapes and lexical errors
"""

import re

import pytest

from webflow.lib.lexer import Lexer, Token, TokenType, KEYWORDS, tokenize
from webflow.lib.errors import WebflowError
from webflow.models.errors import ErrorKind


def types(source):
    return [token.type for token in tokenize(source)]


class TestPunctuationAndWords:
    """Test single characters, identifiers and keywords"""

    def test_simple_element(self):
        """Tag, colon and semicolon"""
        assert types("div:;") == [TokenType.TAG, TokenType.COLON, TokenType.SEMICOLON, TokenType.EOF]

    def test_every_keyword(self):
        """Each reserved word gets its own token type"""
        for word, token_type in KEYWORDS.items():
            tokens = tokenize(word)
            assert tokens[0].type == token_type
            assert tokens[0].value == word

    def test_styles_keyword_is_style_type(self):
        """'styles' (plural) is the style keyword; 'style' is a plain tag"""
        assert tokenize("styles")[0].type == TokenType.STYLE
        assert tokenize("style")[0].type == TokenType.TAG

    def test_keywords_are_case_sensitive(self):
        """Capitalized keywords are tags"""
        assert tokenize("Props")[0].type == TokenType.TAG
        assert tokenize("IMPORT")[0].type == TokenType.TAG

    def test_digits_in_words(self):
        """Digits are identifier characters"""
        tokens = tokenize("h1 2col")
        assert [t.value for t in tokens[:-1]] == ["h1", "2col"]
        assert tokens[1].type == TokenType.TAG

    def test_word_boundary_at_punctuation(self):
        """Words end at ':' without whitespace"""
        tokens = tokenize("section:content")
        assert [t.type for t in tokens] == [
            TokenType.TAG, TokenType.COLON, TokenType.CONTENT, TokenType.EOF
        ]

    def test_positions(self):
        """Tokens record the offset of their first character"""
        tokens = tokenize("div: p:;")
        assert [t.position for t in tokens] == [0, 3, 5, 6, 7, 8]


class TestEOF:
    """Test the EOF terminator"""

    def test_single_eof_at_end(self):
        tokens = tokenize("a: b: ; ;")
        assert tokens[-1] == Token(TokenType.EOF, "EOF", 9)
        assert sum(1 for t in tokens if t.type == TokenType.EOF) == 1

    def test_whitespace_only_source(self):
        """Whitespace-only source is not empty; it yields just EOF"""
        assert types(" \t\r\n") == [TokenType.EOF]

    def test_comment_only_source(self):
        assert types("-- nothing here") == [TokenType.EOF]


class TestBlocks:
    """Test brace blocks and their escapes"""

    def test_block_raw_text(self):
        tokens = tokenize("{color: red, margin: 0}")
        assert tokens[0].type == TokenType.BLOCK
        assert tokens[0].value == "color: red, margin: 0"

    def test_block_keeps_whitespace_and_newlines(self):
        assert tokenize("{ a\n b }")[0].value == " a\n b "

    def test_escaped_braces(self):
        r"""\{ and \} become literal braces"""
        assert tokenize(r"{a \{b\} c}")[0].value == "a {b} c"

    def test_escaped_backslash(self):
        r"""\\ becomes a single backslash"""
        assert tokenize(r"{a\\b}")[0].value == "a\\b"

    def test_escaped_backslash_before_close(self):
        r"""\\} is an escaped backslash followed by the closing brace"""
        tokens = tokenize(r"{a\\}")
        assert tokens[0].value == "a\\"
        assert tokens[1].type == TokenType.EOF

    def test_other_backslashes_verbatim(self):
        r"""\, is left for the content parser"""
        assert tokenize(r"{a\,b}")[0].value == "a\\,b"

    def test_keywords_inside_block_are_text(self):
        assert tokenize("{props: import}")[0].value == "props: import"

    def test_empty_block(self):
        assert tokenize("{}")[0].value == ""


class TestStrings:
    """Test double-quoted strings"""

    def test_string(self):
        tokens = tokenize('"./components/nav.webf"')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == "./components/nav.webf"

    def test_escaped_quote_and_backslash(self):
        assert tokenize(r'"a\"b\\c"')[0].value == 'a"b\\c'


class TestComments:
    """Test '--' line comments"""

    def test_comment_to_end_of_line(self):
        tokens = tokenize("div: -- a comment; with {stuff}\n;")
        assert [t.type for t in tokens] == [
            TokenType.TAG, TokenType.COLON, TokenType.SEMICOLON, TokenType.EOF
        ]

    def test_comment_inside_block_is_text(self):
        assert tokenize("{a -- b}")[0].value == "a -- b"


class TestIdentifierRoundTrip:
    """Word tokens reproduce the identifier text of the source exactly"""

    def test_word_text_preserved(self):
        source = """
        import Nav from "nav.webf";
        -- header
        main: classes:{page}
            Nav:;
            section2: content:{Hi} props:{a:b};
        ;
        """
        words = [
            t.value for t in tokenize(source)
            if t.type not in (TokenType.COLON, TokenType.SEMICOLON, TokenType.BLOCK,
                              TokenType.STRING, TokenType.EOF)
        ]
        stripped = re.sub(r'--[^\n]*|\{[^}]*\}|"[^"]*"', ' ', source)
        assert words == re.findall(r'[A-Za-z0-9]+', stripped)


class TestUnicodeIdentifiers:
    """Test the identifier character predicate"""

    def test_non_ascii_rejected_by_default(self):
        with pytest.raises(WebflowError) as exc:
            Lexer("café:;", unicode_identifiers=False).tokenize()
        assert exc.value.kind == ErrorKind.UNEXPECTED_CHARACTER
        assert exc.value.position == 3

    def test_case_bearing_accepted_when_enabled(self):
        tokens = Lexer("café:;", unicode_identifiers=True).tokenize()
        assert tokens[0].value == "café"
        assert tokens[0].type == TokenType.TAG

    def test_caseless_still_rejected_when_enabled(self):
        """Characters without case (e.g., CJK) are not letters"""
        with pytest.raises(WebflowError) as exc:
            Lexer("漢:;", unicode_identifiers=True).tokenize()
        assert exc.value.kind == ErrorKind.UNEXPECTED_CHARACTER


class TestLexerErrors:
    """Test lexical failure modes"""

    def test_empty_source(self):
        with pytest.raises(WebflowError) as exc:
            tokenize("")
        assert exc.value.kind == ErrorKind.EMPTY_SOURCE

    def test_unclosed_block(self):
        with pytest.raises(WebflowError) as exc:
            tokenize("div: content:{abc;")
        assert exc.value.kind == ErrorKind.UNCLOSED_CONSTRUCT
        assert "block" in exc.value.message
        assert exc.value.position == 13

    def test_escaped_close_does_not_close(self):
        with pytest.raises(WebflowError) as exc:
            tokenize(r"{abc\}")
        assert exc.value.kind == ErrorKind.UNCLOSED_CONSTRUCT

    def test_unclosed_string(self):
        with pytest.raises(WebflowError) as exc:
            tokenize('import A from "a.webf;')
        assert exc.value.kind == ErrorKind.UNCLOSED_CONSTRUCT
        assert "string" in exc.value.message

    def test_unexpected_character(self):
        with pytest.raises(WebflowError) as exc:
            tokenize("div: <p>;")
        assert exc.value.kind == ErrorKind.UNEXPECTED_CHARACTER
        assert exc.value.position == 5
        assert "'<'" in exc.value.message

    def test_single_dash_is_unexpected(self):
        with pytest.raises(WebflowError) as exc:
            tokenize("my-tag:;")
        assert exc.value.kind == ErrorKind.UNEXPECTED_CHARACTER
        assert exc.value.position == 2

    def test_error_reports_line_and_column(self):
        with pytest.raises(WebflowError) as exc:
            tokenize("div:\n  p: @;\n;")
        assert exc.value.position == 10
        assert "Line 2, column 6" in exc.value.message
