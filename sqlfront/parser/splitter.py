"""
Splitting of SQL text into statements on ';' delimiters.

Delimiters are found with the tokenizer, so a ';' inside a string, a quoted
identifier or a comment does not end a statement.
"""

from typing import List, Optional

from .lexer import SqlLexer
from .tokens import TokenKind
from ..utils.exceptions import SQLSyntaxError


class StatementSplitter:
    """
    Split text into complete statements and a trailing partial statement.

    Attributes:
        complete_statements: Statement texts that were followed by ';',
            stripped, empty ones dropped
        partial_statement: Text after the last ';', stripped
    """

    def __init__(self, sql: str, lexer: Optional[SqlLexer] = None):
        self._sql = sql
        self._lexer = lexer or SqlLexer()
        self._line_offsets = _line_offsets(sql)
        self.complete_statements: List[str] = []
        self.partial_statement = ""
        self._split()

    def _split(self):
        sql = self._sql
        unterminated = False
        try:
            tokens = self._lexer.tokenize(sql, include_eof=False)
        except SQLSyntaxError as e:
            # Text from the bad character on (an unterminated string, for
            # instance) can only belong to the trailing statement
            end = self._offset(e.line, e.column)
            tokens = self._lexer.tokenize(sql[:end], include_eof=False)
            unterminated = True

        start = 0
        has_tokens = False
        for token in tokens:
            if token.kind is not TokenKind.DELIMITER:
                has_tokens = True
                continue
            offset = self._offset(token.line, token.column)
            if has_tokens:
                self.complete_statements.append(sql[start:offset].strip())
            start = offset + 1
            has_tokens = False

        # a trailing comment on its own is not a statement
        if has_tokens or unterminated:
            self.partial_statement = sql[start:].strip()

    def _offset(self, line: int, column: int) -> int:
        return self._line_offsets[line - 1] + column - 1

    def is_empty(self) -> bool:
        return not self.complete_statements and not self.partial_statement


def split_statements(sql: str) -> List[str]:
    """All statements in the text, including a trailing one without ';'."""
    splitter = StatementSplitter(sql)
    statements = list(splitter.complete_statements)
    if splitter.partial_statement:
        statements.append(splitter.partial_statement)
    return statements


def _line_offsets(sql: str) -> List[int]:
    """Character offset at which each line starts."""
    offsets = [0]
    for index, char in enumerate(sql):
        if char == '\n':
            offsets.append(index + 1)
    return offsets
