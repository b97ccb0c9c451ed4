"""
Token model and keyword classification.

Tokens are produced by the lexer and consumed by the grammar. Whether a
token may stand in for an identifier is decided here, from a fixed keyword
table, so that every identifier production in the grammar applies the same
rule.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TokenKind(Enum):
    """Lexical token categories."""
    RESERVED_KEYWORD = "reserved keyword"
    NON_RESERVED_KEYWORD = "non-reserved keyword"
    IDENTIFIER = "identifier"
    QUOTED_IDENTIFIER = "quoted identifier"
    BACKQUOTED_IDENTIFIER = "backquoted identifier"
    DIGIT_IDENTIFIER = "digit identifier"
    COMPOUND_TYPE = "type name"
    STRING = "string"
    BINARY_LITERAL = "binary literal"
    INTEGER_VALUE = "integer"
    DECIMAL_VALUE = "decimal"
    OPERATOR = "operator"
    PUNCTUATION = "punctuation"
    DELIMITER = "delimiter"
    EOF = "end of input"


# All keywords known to the dialect.
KEYWORDS = frozenset({
    'SELECT', 'FROM', 'ADD', 'AS', 'ALL', 'SOME', 'ANY', 'DISTINCT', 'WHERE',
    'GROUP', 'BY', 'GROUPING', 'SETS', 'CUBE', 'ROLLUP', 'ORDER', 'HAVING',
    'LIMIT', 'AT', 'OR', 'AND', 'IN', 'NOT', 'NO', 'EXISTS', 'BETWEEN', 'LIKE',
    'IS', 'NULL', 'TRUE', 'FALSE', 'NULLS', 'FIRST', 'LAST', 'ESCAPE', 'ASC',
    'DESC', 'SUBSTRING', 'POSITION', 'FOR', 'TINYINT', 'SMALLINT', 'INTEGER',
    'DATE', 'TIME', 'TIMESTAMP', 'INTERVAL', 'YEAR', 'MONTH', 'DAY', 'HOUR',
    'MINUTE', 'SECOND', 'ZONE', 'CURRENT_DATE', 'CURRENT_TIME',
    'CURRENT_TIMESTAMP', 'LOCALTIME', 'LOCALTIMESTAMP', 'EXTRACT', 'CASE',
    'WHEN', 'THEN', 'ELSE', 'END', 'JOIN', 'CROSS', 'OUTER', 'INNER', 'LEFT',
    'RIGHT', 'FULL', 'NATURAL', 'USING', 'ON', 'FILTER', 'OVER', 'PARTITION',
    'RANGE', 'ROWS', 'UNBOUNDED', 'PRECEDING', 'FOLLOWING', 'CURRENT', 'ROW',
    'WITH', 'RECURSIVE', 'VALUES', 'CREATE', 'SCHEMA', 'TABLE', 'COMMENT',
    'VIEW', 'REPLACE', 'INSERT', 'DELETE', 'INTO', 'CONSTRAINT', 'DESCRIBE',
    'GRANT', 'REVOKE', 'PRIVILEGES', 'PUBLIC', 'OPTION', 'EXPLAIN', 'ANALYZE',
    'FORMAT', 'TYPE', 'TEXT', 'GRAPHVIZ', 'LOGICAL', 'DISTRIBUTED', 'VALIDATE',
    'CAST', 'TRY_CAST', 'SHOW', 'TABLES', 'SCHEMAS', 'CATALOGS', 'COLUMNS',
    'COLUMN', 'USE', 'PARTITIONS', 'FUNCTIONS', 'DROP', 'UNION', 'EXCEPT',
    'INTERSECT', 'TO', 'SYSTEM', 'BERNOULLI', 'POISSONIZED', 'TABLESAMPLE',
    'ALTER', 'RENAME', 'UNNEST', 'ORDINALITY', 'ARRAY', 'MAP', 'SET', 'RESET',
    'SESSION', 'DATA', 'START', 'TRANSACTION', 'COMMIT', 'ROLLBACK', 'WORK',
    'ISOLATION', 'LEVEL', 'SERIALIZABLE', 'REPEATABLE', 'COMMITTED',
    'UNCOMMITTED', 'READ', 'WRITE', 'ONLY', 'CALL', 'PREPARE', 'DEALLOCATE',
    'EXECUTE', 'INPUT', 'OUTPUT', 'CASCADE', 'RESTRICT', 'INCLUDING',
    'EXCLUDING', 'PROPERTIES', 'NORMALIZE', 'NFD', 'NFC', 'NFKD', 'NFKC', 'IF',
    'NULLIF', 'COALESCE',
})

# Keywords that may still be used wherever an identifier is expected.
NON_RESERVED_KEYWORDS = frozenset({
    'SHOW', 'TABLES', 'COLUMNS', 'COLUMN', 'PARTITIONS', 'FUNCTIONS', 'SCHEMAS',
    'CATALOGS', 'SESSION',
    'ADD',
    'OVER', 'PARTITION', 'RANGE', 'ROWS', 'PRECEDING', 'FOLLOWING', 'CURRENT',
    'ROW', 'MAP', 'ARRAY',
    'TINYINT', 'SMALLINT', 'INTEGER', 'DATE', 'TIME', 'TIMESTAMP', 'INTERVAL',
    'ZONE',
    'YEAR', 'MONTH', 'DAY', 'HOUR', 'MINUTE', 'SECOND',
    'EXPLAIN', 'ANALYZE', 'FORMAT', 'TYPE', 'TEXT', 'GRAPHVIZ', 'LOGICAL',
    'DISTRIBUTED', 'VALIDATE',
    'TABLESAMPLE', 'SYSTEM', 'BERNOULLI', 'POISSONIZED', 'USE', 'TO',
    'SET', 'RESET',
    'VIEW', 'REPLACE',
    'IF', 'NULLIF', 'COALESCE',
    'NFD', 'NFC', 'NFKD', 'NFKC',
    'POSITION',
    'NO', 'DATA',
    'START', 'TRANSACTION', 'COMMIT', 'ROLLBACK', 'WORK', 'ISOLATION', 'LEVEL',
    'SERIALIZABLE', 'REPEATABLE', 'COMMITTED', 'UNCOMMITTED', 'READ', 'WRITE',
    'ONLY',
    'CALL',
    'GRANT', 'REVOKE', 'PRIVILEGES', 'PUBLIC', 'OPTION',
    'SUBSTRING',
    'SCHEMA', 'CASCADE', 'RESTRICT',
    'INPUT', 'OUTPUT',
    'INCLUDING', 'EXCLUDING', 'PROPERTIES',
    'ALL', 'SOME', 'ANY',
    'FILTER',
})

RESERVED_KEYWORDS = KEYWORDS - NON_RESERVED_KEYWORDS

IDENTIFIER_KINDS = frozenset({
    TokenKind.IDENTIFIER,
    TokenKind.QUOTED_IDENTIFIER,
    TokenKind.BACKQUOTED_IDENTIFIER,
    TokenKind.DIGIT_IDENTIFIER,
    TokenKind.NON_RESERVED_KEYWORD,
})


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    ``text`` holds the token as written, with quote escapes already removed
    for strings and delimited identifiers. ``keyword`` is the upper-cased
    keyword for keyword tokens and None otherwise.
    """
    kind: TokenKind
    text: str
    line: int = 1
    column: int = 1
    keyword: Optional[str] = None

    @property
    def is_keyword(self) -> bool:
        return self.keyword is not None

    def describe(self) -> str:
        """Render the token for error messages."""
        if self.kind is TokenKind.EOF:
            return "<EOF>"
        if self.kind is TokenKind.STRING:
            return "'" + self.text.replace("'", "''") + "'"
        if self.kind is TokenKind.QUOTED_IDENTIFIER:
            return '"' + self.text.replace('"', '""') + '"'
        if self.kind is TokenKind.BACKQUOTED_IDENTIFIER:
            return '`' + self.text.replace('`', '``') + '`'
        return self.text


def classify_word(word: str) -> tuple[TokenKind, Optional[str]]:
    """
    Classify a bare word as a keyword or a plain identifier.

    Args:
        word: Word text as written

    Returns:
        (kind, keyword) where keyword is the upper-cased keyword or None
    """
    upper = word.upper()
    if upper in NON_RESERVED_KEYWORDS:
        return TokenKind.NON_RESERVED_KEYWORD, upper
    if upper in RESERVED_KEYWORDS:
        return TokenKind.RESERVED_KEYWORD, upper
    return TokenKind.IDENTIFIER, None


def can_be_identifier(token: Token) -> bool:
    """Check whether a token may be used where an identifier is expected."""
    return token.kind in IDENTIFIER_KINDS


def is_reserved(word: str) -> bool:
    """Check whether a word is a reserved keyword."""
    return word.upper() in RESERVED_KEYWORDS
