"""
SQL parser facade.

Turns SQL text (or an already tokenized stream) into AST nodes. The grammar
itself lives in the mixins combined below; this module wires them to a
tokenizer and enforces that the whole input is consumed.
"""

import logging
import time
from typing import Optional, Sequence, Union

from . import ast
from .datatypes import TypeGrammar
from .expressions import ExpressionGrammar
from .lexer import SqlLexer
from .options import ParsingOptions
from .queries import QueryGrammar
from .statements import StatementGrammar
from .tokens import Token, TokenKind
from ..utils.exceptions import SQLSyntaxError

logger = logging.getLogger(__name__)

Source = Union[str, Sequence[Token]]


class _Grammar(StatementGrammar, QueryGrammar, ExpressionGrammar, TypeGrammar):
    """Complete grammar for one parse call."""


class SqlParser:
    """
    SQL Parser facade.

    Holds no per-parse state: every call builds its own grammar instance, so
    one SqlParser can be shared between threads.

    Args:
        options: Parser settings; defaults to ParsingOptions()
        tokenizer: Object with a ``tokenize(sql) -> list[Token]`` method;
            defaults to the Lark-based SqlLexer
    """

    def __init__(self, options: Optional[ParsingOptions] = None, tokenizer=None):
        self.options = options or ParsingOptions()
        self._tokenizer = tokenizer or SqlLexer()

    def parse_statement(self, source: Source) -> ast.Statement:
        """
        Parse a single statement.

        Args:
            source: SQL text or a token list

        Returns:
            Statement AST node

        Raises:
            SQLSyntaxError: If the input is not exactly one valid statement
        """
        return self._invoke(source, '_statement')

    def parse_expression(self, source: Source) -> ast.Expression:
        """
        Parse a standalone expression.

        Raises:
            SQLSyntaxError: If the input is not exactly one valid expression
        """
        return self._invoke(source, '_expression')

    def parse_type(self, source: Source) -> ast.DataType:
        """Parse a type such as ``map(varchar, array(bigint))``."""
        return self._invoke(source, '_type')

    def tokenize(self, sql: str) -> list:
        return self._tokenizer.tokenize(sql)

    def _invoke(self, source: Source, rule: str):
        started = time.perf_counter()
        if isinstance(source, str):
            sql = source
            tokens = self._tokenizer.tokenize(sql)
        else:
            sql = None
            tokens = list(source)

        grammar = _Grammar(tokens, self.options, sql)
        try:
            node = getattr(grammar, rule)()
            grammar._expect_end()
        except RecursionError:
            token = grammar._token
            raise SQLSyntaxError(
                "stack overflow while parsing",
                line=token.line,
                column=token.column,
                offending_token=token.describe(),
                sql=sql
            ) from None
        except SQLSyntaxError as e:
            logger.debug("Parse failed at %d:%d: %s", e.line, e.column, e.message)
            raise

        logger.debug(
            "Parsed %s from %d tokens in %.3f ms",
            type(node).__name__,
            sum(1 for t in tokens if t.kind is not TokenKind.EOF),
            (time.perf_counter() - started) * 1000
        )
        return node


_default_parser: Optional[SqlParser] = None


def _parser() -> SqlParser:
    global _default_parser
    if _default_parser is None:
        _default_parser = SqlParser()
    return _default_parser


def parse_statement(source: Source, options: Optional[ParsingOptions] = None) -> ast.Statement:
    """Parse one statement with a default parser."""
    if options is not None:
        return SqlParser(options).parse_statement(source)
    return _parser().parse_statement(source)


def parse_expression(source: Source, options: Optional[ParsingOptions] = None) -> ast.Expression:
    """Parse one expression with a default parser."""
    if options is not None:
        return SqlParser(options).parse_expression(source)
    return _parser().parse_expression(source)
