"""
Unit tests for the tokenizer and keyword classification.
"""

import pytest
from sqlfront.parser.lexer import SqlLexer
from sqlfront.parser.tokens import (
    NON_RESERVED_KEYWORDS, RESERVED_KEYWORDS, Token, TokenKind,
    can_be_identifier, classify_word, is_reserved,
)
from sqlfront.utils.exceptions import SQLSyntaxError


class TestLexer:
    """Test SQL tokenization."""

    def setup_method(self):
        """Set up lexer for each test."""
        self.lexer = SqlLexer()

    def kinds(self, sql):
        """Helper returning the kinds of the non-EOF tokens."""
        return [t.kind for t in self.lexer.tokenize(sql, include_eof=False)]

    def texts(self, sql):
        """Helper returning the texts of the non-EOF tokens."""
        return [t.text for t in self.lexer.tokenize(sql, include_eof=False)]

    def test_keywords_are_case_insensitive(self):
        """Test that keywords are recognized in any case and keep their text."""
        tokens = self.lexer.tokenize("select From", include_eof=False)

        assert [t.kind for t in tokens] == [TokenKind.RESERVED_KEYWORD] * 2
        assert [t.keyword for t in tokens] == ["SELECT", "FROM"]
        assert [t.text for t in tokens] == ["select", "From"]

    def test_non_reserved_keyword(self):
        """Test that non-reserved keywords are classified separately."""
        token = self.lexer.tokenize("format", include_eof=False)[0]

        assert token.kind is TokenKind.NON_RESERVED_KEYWORD
        assert token.keyword == "FORMAT"

    def test_identifiers(self):
        """Test plain, quoted, back-quoted and digit-led identifiers."""
        tokens = self.lexer.tokenize('users "my ""col""" `a``b` 1abc', include_eof=False)

        assert [t.kind for t in tokens] == [
            TokenKind.IDENTIFIER,
            TokenKind.QUOTED_IDENTIFIER,
            TokenKind.BACKQUOTED_IDENTIFIER,
            TokenKind.DIGIT_IDENTIFIER,
        ]
        assert [t.text for t in tokens] == ["users", 'my "col"', "a`b", "1abc"]

    def test_strings(self):
        """Test that doubled quotes are unescaped."""
        token = self.lexer.tokenize("'it''s'", include_eof=False)[0]

        assert token.kind is TokenKind.STRING
        assert token.text == "it's"
        assert token.describe() == "'it''s'"

    def test_numbers(self):
        """Test integer and decimal literals."""
        assert self.kinds("1 1.5 .5 1. 1e3 2E-4") == [
            TokenKind.INTEGER_VALUE,
            TokenKind.DECIMAL_VALUE,
            TokenKind.DECIMAL_VALUE,
            TokenKind.DECIMAL_VALUE,
            TokenKind.DECIMAL_VALUE,
            TokenKind.DECIMAL_VALUE,
        ]

    def test_binary_literal(self):
        """Test that binary literals keep only the digits."""
        token = self.lexer.tokenize("X'0A1b'", include_eof=False)[0]

        assert token.kind is TokenKind.BINARY_LITERAL
        assert token.text == "0A1b"

    def test_multi_character_operators(self):
        """Test that two-character operators are single tokens."""
        assert self.texts("<> != <= >= || -> =>") == ["<>", "!=", "<=", ">=", "||", "->", "=>"]
        assert self.kinds("a>>b") == [
            TokenKind.IDENTIFIER, TokenKind.OPERATOR, TokenKind.OPERATOR, TokenKind.IDENTIFIER,
        ]

    def test_punctuation_and_delimiter(self):
        """Test punctuation and the statement delimiter."""
        assert self.kinds("(a, b[1]).c ?;") == [
            TokenKind.PUNCTUATION, TokenKind.IDENTIFIER, TokenKind.PUNCTUATION,
            TokenKind.IDENTIFIER, TokenKind.PUNCTUATION, TokenKind.INTEGER_VALUE,
            TokenKind.PUNCTUATION, TokenKind.PUNCTUATION, TokenKind.PUNCTUATION,
            TokenKind.IDENTIFIER, TokenKind.PUNCTUATION, TokenKind.DELIMITER,
        ]

    def test_comments_are_skipped(self):
        """Test simple and bracketed comments."""
        assert self.texts("SELECT 1 -- trailing\n/* block\ncomment */ + 2") == ["SELECT", "1", "+", "2"]

    def test_compound_type_names(self):
        """Test that multi-word type names form a single token."""
        token = self.lexer.tokenize("TIMESTAMP   WITH TIME\nZONE", include_eof=False)[0]

        assert token.kind is TokenKind.COMPOUND_TYPE
        assert token.text == "timestamp with time zone"
        assert token.keyword == "TIMESTAMP WITH TIME ZONE"

    def test_positions(self):
        """Test 1-based line and column positions."""
        tokens = self.lexer.tokenize("SELECT\n  a")

        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[1].line, tokens[1].column) == (2, 3)
        assert tokens[-1].kind is TokenKind.EOF
        assert (tokens[-1].line, tokens[-1].column) == (2, 4)

    def test_empty_input(self):
        """Test that empty input yields only EOF."""
        tokens = self.lexer.tokenize("")

        assert len(tokens) == 1
        assert tokens[0].describe() == "<EOF>"
        assert self.lexer.tokenize("  ", include_eof=False) == []

    def test_unrecognized_character(self):
        """Test that an unknown character raises SQLSyntaxError."""
        with pytest.raises(SQLSyntaxError) as exc_info:
            self.lexer.tokenize("SELECT $")

        assert exc_info.value.line == 1
        assert exc_info.value.column == 8
        assert "token recognition error" in exc_info.value.message

    def test_unterminated_string(self):
        """Test that an unterminated string is rejected."""
        with pytest.raises(SQLSyntaxError):
            self.lexer.tokenize("SELECT 'abc")


class TestKeywords:
    """Test keyword classification."""

    def test_keyword_sets_are_disjoint(self):
        """Test that reserved and non-reserved keywords do not overlap."""
        assert not (RESERVED_KEYWORDS & NON_RESERVED_KEYWORDS)

    def test_is_reserved(self):
        """Test reserved keyword lookups."""
        for word in ("select", "FROM", "Where", "unnest", "current_date"):
            assert is_reserved(word)
        for word in ("format", "data", "filter", "users", "if"):
            assert not is_reserved(word)

    def test_classify_word(self):
        """Test word classification."""
        assert classify_word("Join") == (TokenKind.RESERVED_KEYWORD, "JOIN")
        assert classify_word("tables") == (TokenKind.NON_RESERVED_KEYWORD, "TABLES")
        assert classify_word("orders") == (TokenKind.IDENTIFIER, None)

    def test_can_be_identifier(self):
        """Test which token kinds may stand in for an identifier."""
        assert can_be_identifier(Token(TokenKind.NON_RESERVED_KEYWORD, "show", keyword="SHOW"))
        assert can_be_identifier(Token(TokenKind.QUOTED_IDENTIFIER, "select"))
        assert can_be_identifier(Token(TokenKind.DIGIT_IDENTIFIER, "1x"))
        assert not can_be_identifier(Token(TokenKind.RESERVED_KEYWORD, "select", keyword="SELECT"))
        assert not can_be_identifier(Token(TokenKind.STRING, "a"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
