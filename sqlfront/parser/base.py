"""
Shared machinery of the recursive-descent grammar.

GrammarBase owns the per-call state of one parse: the token list, the
cursor, the nesting depth and the bookkeeping for error reporting. The
grammar mixins (types, expressions, queries, statements) build on the
helpers defined here.

Errors are reported at the farthest token any alternative reached, together
with every token description that was tried at that position. Since the set
depends only on the input, the same text always produces the same error.
"""

import functools
from typing import Callable, List, Optional, Sequence, TypeVar

from . import ast
from .options import ParsingOptions
from .tokens import Token, TokenKind, can_be_identifier
from ..utils.exceptions import SQLSyntaxError

T = TypeVar('T')

_QUERY_KEYWORDS = frozenset({'SELECT', 'VALUES', 'TABLE', 'WITH'})


def nested(rule: Callable[..., T]) -> Callable[..., T]:
    """
    Count nesting depth around a recursive grammar rule.

    Exceeding ParsingOptions.max_depth raises a fatal SQLSyntaxError
    instead of exhausting the interpreter stack.
    """
    @functools.wraps(rule)
    def wrapper(self, *args, **kwargs):
        self._depth += 1
        try:
            if self._depth > self._options.max_depth:
                raise self._error(
                    f"statement is too deeply nested (maximum depth is {self._options.max_depth})"
                )
            return rule(self, *args, **kwargs)
        finally:
            self._depth -= 1
    return wrapper


def memoized(rule: Callable[..., T]) -> Callable[..., T]:
    """
    Remember the outcome of a rule at each token position.

    Backtracking may ask for the same rule at the same position more than
    once; the first answer (a node and the position after it, or a plain
    syntax error) is replayed instead of parsing again. Fatal errors are not
    stored since they end the parse.
    """
    @functools.wraps(rule)
    def wrapper(self, *args):
        key = (rule.__name__, self._index, args)
        entry = self._memo.get(key)
        if entry is not None:
            node, end = entry
            self._index = end
            if node is None:
                raise self._syntax_error()
            return node
        try:
            node = rule(self, *args)
        except SQLSyntaxError as e:
            if not e.fatal:
                self._memo[key] = (None, self._index)
            raise
        self._memo[key] = (node, self._index)
        return node
    return wrapper


class GrammarBase:
    """Token cursor, matching helpers and error reporting."""

    def __init__(self, tokens: Sequence[Token], options: ParsingOptions, sql: Optional[str] = None):
        self._tokens = list(tokens)
        if not self._tokens or self._tokens[-1].kind is not TokenKind.EOF:
            last = self._tokens[-1] if self._tokens else None
            line = last.line if last else 1
            column = last.column + len(last.text) if last else 1
            self._tokens.append(Token(TokenKind.EOF, "", line, column))
        self._options = options
        self._sql = sql
        self._index = 0
        self._depth = 0
        self._farthest = 0
        self._expected = set()
        # (rule name, position, arguments) -> (node or None, end position)
        self._memo = {}
        # '?' placeholders are numbered by position in the token stream so
        # that backtracking cannot disturb the numbering
        markers = [
            i for i, tok in enumerate(self._tokens)
            if tok.kind is TokenKind.PUNCTUATION and tok.text == '?'
        ]
        self._parameter_positions = {index: n for n, index in enumerate(markers)}

    # ----- Cursor -----

    @property
    def _token(self) -> Token:
        return self._tokens[self._index]

    def _peek(self, offset: int = 1) -> Token:
        index = min(self._index + offset, len(self._tokens) - 1)
        return self._tokens[index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        if token.kind is not TokenKind.EOF:
            self._index += 1
        return token

    def _location(self, token: Optional[Token] = None) -> ast.NodeLocation:
        token = token or self._token
        return ast.NodeLocation(token.line, token.column)

    # ----- Expected-token bookkeeping -----

    def _note(self, *descriptions: str, offset: int = 0):
        """Record what would have been accepted at the current position."""
        index = self._index + offset
        if index > self._farthest:
            self._farthest = index
            self._expected = set(descriptions)
        elif index == self._farthest:
            self._expected.update(descriptions)

    # ----- Keyword matching -----

    def _at(self, *keywords: str) -> bool:
        """Check whether the current token is one of the keywords."""
        if self._token.keyword in keywords:
            return True
        self._note(*(f"'{kw}'" for kw in keywords))
        return False

    def _at_sequence(self, *keywords: str) -> bool:
        """Check whether the next tokens are exactly the keywords, in order."""
        for offset, keyword in enumerate(keywords):
            if self._peek(offset).keyword != keyword:
                self._note(f"'{keyword}'", offset=offset)
                return False
        return True

    def _accept(self, *keywords: str) -> Optional[Token]:
        if self._at(*keywords):
            return self._advance()
        return None

    def _expect(self, *keywords: str) -> Token:
        token = self._accept(*keywords)
        if token is None:
            raise self._syntax_error()
        return token

    # ----- Symbol matching -----

    def _at_symbol(self, *symbols: str) -> bool:
        token = self._token
        if token.kind in (TokenKind.OPERATOR, TokenKind.PUNCTUATION) and token.text in symbols:
            return True
        self._note(*(f"'{s}'" for s in symbols))
        return False

    def _peek_symbol(self, symbol: str, offset: int = 1) -> bool:
        token = self._peek(offset)
        return token.kind in (TokenKind.OPERATOR, TokenKind.PUNCTUATION) and token.text == symbol

    def _accept_symbol(self, *symbols: str) -> Optional[Token]:
        if self._at_symbol(*symbols):
            return self._advance()
        return None

    def _expect_symbol(self, symbol: str) -> Token:
        token = self._accept_symbol(symbol)
        if token is None:
            raise self._syntax_error()
        return token

    # ----- Terminals -----

    def _at_kind(self, kind: TokenKind, description: str) -> bool:
        if self._token.kind is kind:
            return True
        self._note(description)
        return False

    def _expect_kind(self, kind: TokenKind, description: str) -> Token:
        if not self._at_kind(kind, description):
            raise self._syntax_error()
        return self._advance()

    def _string(self) -> str:
        return self._expect_kind(TokenKind.STRING, "<string>").text

    def _integer(self) -> int:
        return int(self._expect_kind(TokenKind.INTEGER_VALUE, "<integer>").text)

    def _at_identifier(self) -> bool:
        if can_be_identifier(self._token):
            return True
        self._note("<identifier>")
        return False

    def _identifier(self) -> ast.Identifier:
        """
        Parse an identifier.

        Accepts quoted, back-quoted, digit-led and plain identifiers as well
        as non-reserved keywords. Reserved keywords are rejected.
        """
        if not self._at_identifier():
            raise self._syntax_error()
        token = self._advance()
        delimited = token.kind in (TokenKind.QUOTED_IDENTIFIER, TokenKind.BACKQUOTED_IDENTIFIER)
        return ast.Identifier(token.text, delimited, location=self._location(token))

    def _qualified_name(self) -> ast.QualifiedName:
        start = self._token
        parts = [self._identifier()]
        while self._at_symbol('.') and can_be_identifier(self._peek()):
            self._advance()
            parts.append(self._identifier())
        return ast.QualifiedName(tuple(parts), location=self._location(start))

    def _at_qualified_name_followed_by(self, symbol: str) -> bool:
        """Look ahead for ``identifier ('.' identifier)* symbol`` without consuming."""
        offset = 0
        if not can_be_identifier(self._peek(offset)):
            return False
        offset += 1
        while self._peek_symbol('.', offset) and can_be_identifier(self._peek(offset + 1)):
            offset += 2
        return self._peek_symbol(symbol, offset)

    def _starts_query(self, offset: int = 0) -> bool:
        """Check for a keyword that can only begin a query."""
        return self._peek(offset).keyword in _QUERY_KEYWORDS

    # ----- Lists -----

    def _comma_list(self, rule: Callable[[], T]) -> List[T]:
        """Parse ``rule (',' rule)*``."""
        items = [rule()]
        while self._accept_symbol(','):
            items.append(rule())
        return items

    def _parenthesized_list(self, rule: Callable[[], T]) -> List[T]:
        """Parse ``'(' rule (',' rule)* ')'``."""
        self._expect_symbol('(')
        items = self._comma_list(rule)
        self._expect_symbol(')')
        return items

    # ----- Alternatives -----

    def _attempt(self, rule: Callable[..., T], *args) -> Optional[T]:
        """
        Run a rule speculatively.

        Returns the rule's result, or None after rewinding the cursor when the
        rule does not match. Fatal errors are never swallowed.
        """
        mark = self._index
        try:
            return rule(*args)
        except SQLSyntaxError as e:
            if e.fatal:
                raise
            self._index = mark
            return None

    def _quantified(self, rule):
        """
        Parse an optional DISTINCT or ALL quantifier followed by ``rule``.

        ALL is a non-reserved word, so it is only taken as a quantifier when
        the rest still parses.
        """
        if self._accept('DISTINCT'):
            return True, rule()
        if self._at('ALL'):
            mark = self._index
            self._advance()
            result = self._attempt(rule)
            if result is not None:
                return False, result
            self._index = mark
        return False, rule()

    def _first_alternative(self, *rules: Callable[[], T]) -> T:
        """Try alternatives in order and commit to the first that matches."""
        for rule in rules:
            result = self._attempt(rule)
            if result is not None:
                return result
        raise self._syntax_error()

    def _expect_end(self):
        if not self._at_kind(TokenKind.EOF, "<EOF>"):
            raise self._syntax_error()

    # ----- Errors -----

    def _syntax_error(self) -> SQLSyntaxError:
        """Build the error for the farthest position reached so far."""
        index = max(self._farthest, self._index)
        token = self._tokens[min(index, len(self._tokens) - 1)]
        expected = self._expected if index == self._farthest else set()
        offending = token.describe()
        message = f"mismatched input '{offending}'"
        if expected:
            message += ". Expecting: " + ", ".join(sorted(expected))
        return SQLSyntaxError(
            message,
            line=token.line,
            column=token.column,
            offending_token=offending,
            expected_tokens=expected,
            sql=self._sql
        )

    def _error(self, message: str, token: Optional[Token] = None) -> SQLSyntaxError:
        """Build a fatal error for input that matched the grammar but is invalid."""
        token = token or self._token
        return SQLSyntaxError(
            message,
            line=token.line,
            column=token.column,
            offending_token=token.describe(),
            sql=self._sql,
            fatal=True
        )
