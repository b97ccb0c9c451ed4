"""
Centralized exception hierarchy for the SQL front end.

All custom exceptions inherit from SQLFrontError to provide a single base
for catching parser errors. Syntax problems of every kind (bad characters,
missing tokens, trailing input, over-deep nesting) surface as SQLSyntaxError.
"""

from typing import Iterable, Optional


class SQLFrontError(Exception):
    """Base exception for all SQL front end errors."""
    pass


class SQLSyntaxError(SQLFrontError):
    """
    Raised when SQL text does not match the grammar.

    Attributes:
        message: Human readable description of the problem
        line: 1-based line of the offending token
        column: 1-based column of the offending token
        offending_token: Text of the token at the error position ("<EOF>" at end)
        expected_tokens: Sorted tuple of token descriptions acceptable there
        sql: The statement text, when known
    """

    def __init__(
        self,
        message: str,
        line: int = 1,
        column: int = 1,
        offending_token: Optional[str] = None,
        expected_tokens: Iterable[str] = (),
        sql: Optional[str] = None,
        fatal: bool = False
    ):
        self.message = message
        self.line = line
        self.column = column
        self.offending_token = offending_token
        self.expected_tokens = tuple(sorted(set(expected_tokens)))
        self.sql = sql
        # Fatal errors abort alternative trials instead of being retried
        self.fatal = fatal
        super().__init__(f"line {line}:{column}: {message}")

    def to_dict(self) -> dict:
        """Structured form of the error, for drivers and tooling."""
        return {
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "offending_token": self.offending_token,
            "expected_token_set": list(self.expected_tokens),
        }
