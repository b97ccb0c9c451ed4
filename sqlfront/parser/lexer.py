"""
SQL tokenizer using Lark.

Turns SQL text into the typed token stream the grammar consumes. Lark's
basic lexer does the character-level work from the terminals declared in
sql.lark; this module classifies words into keywords and identifiers and
removes quote escapes.
"""

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .tokens import Token, TokenKind, classify_word
from ..utils.exceptions import SQLSyntaxError

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r'\s+')

_COMPOUND_TYPES = {
    'TIME_WITH_TIME_ZONE': 'time with time zone',
    'TIMESTAMP_WITH_TIME_ZONE': 'timestamp with time zone',
    'DOUBLE_PRECISION': 'double precision',
}

_SIMPLE_KINDS = {
    'INTEGER_VALUE': TokenKind.INTEGER_VALUE,
    'DECIMAL_VALUE': TokenKind.DECIMAL_VALUE,
    'DIGIT_IDENTIFIER': TokenKind.DIGIT_IDENTIFIER,
    'OPERATOR': TokenKind.OPERATOR,
    'PUNCTUATION': TokenKind.PUNCTUATION,
    'DELIMITER': TokenKind.DELIMITER,
}


@lru_cache(maxsize=1)
def _load_lexer() -> Lark:
    """Build the Lark instance once; it is immutable and safe to share."""
    grammar_path = Path(__file__).parent / "sql.lark"
    with open(grammar_path, 'r') as f:
        grammar = f.read()

    return Lark(
        grammar,
        start='start',
        parser='lalr',
        lexer='basic'
    )


def _unquote(text: str, quote: str) -> str:
    """Strip the surrounding quotes and collapse doubled quote characters."""
    return text[1:-1].replace(quote + quote, quote)


class SqlLexer:
    """
    Default tokenizer.

    Any object with a compatible ``tokenize`` method can be handed to
    SqlParser instead.
    """

    def __init__(self):
        self._lark = _load_lexer()

    def tokenize(self, sql: str, include_eof: bool = True) -> List[Token]:
        """
        Split SQL text into tokens.

        Args:
            sql: SQL text
            include_eof: Append an EOF token after the last real token

        Returns:
            List of tokens

        Raises:
            SQLSyntaxError: If the text contains a character no token accepts
        """
        tokens = []
        try:
            for raw in self._lark.lex(sql):
                tokens.append(self._convert(raw))
        except UnexpectedCharacters as e:
            logger.debug("Token recognition error at %d:%d", e.line, e.column)
            raise SQLSyntaxError(
                f"token recognition error at: '{e.char}'",
                line=e.line,
                column=e.column,
                offending_token=e.char,
                sql=sql
            ) from None

        if include_eof:
            line, column = _end_position(sql)
            tokens.append(Token(TokenKind.EOF, "", line, column))
        return tokens

    def _convert(self, raw) -> Token:
        """Map a Lark token onto the grammar's token model."""
        kind_name = raw.type
        text = str(raw)

        if kind_name == 'IDENTIFIER':
            kind, keyword = classify_word(text)
            return Token(kind, text, raw.line, raw.column, keyword)
        if kind_name == 'STRING':
            return Token(TokenKind.STRING, _unquote(text, "'"), raw.line, raw.column)
        if kind_name == 'QUOTED_IDENTIFIER':
            return Token(TokenKind.QUOTED_IDENTIFIER, _unquote(text, '"'), raw.line, raw.column)
        if kind_name == 'BACKQUOTED_IDENTIFIER':
            return Token(TokenKind.BACKQUOTED_IDENTIFIER, _unquote(text, '`'), raw.line, raw.column)
        if kind_name == 'BINARY_LITERAL':
            # X'...' -> the hex digits between the quotes
            return Token(TokenKind.BINARY_LITERAL, text[2:-1], raw.line, raw.column)
        if kind_name in _COMPOUND_TYPES:
            return Token(
                TokenKind.COMPOUND_TYPE,
                _COMPOUND_TYPES[kind_name],
                raw.line,
                raw.column,
                _WHITESPACE.sub(' ', text.upper())
            )
        return Token(_SIMPLE_KINDS[kind_name], text, raw.line, raw.column)


def _end_position(sql: str) -> tuple[int, int]:
    """1-based line and column just past the end of the text."""
    lines = sql.split('\n')
    return len(lines), len(lines[-1]) + 1
