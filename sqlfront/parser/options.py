"""
Parser configuration.
"""

from dataclasses import dataclass
from enum import Enum


class DecimalLiteralTreatment(Enum):
    """How literals such as 1.5 are represented in the AST."""
    AS_DOUBLE = "double"
    AS_DECIMAL = "decimal"
    REJECT = "reject"


@dataclass(frozen=True)
class ParsingOptions:
    """
    Settings shared by every parse made through one SqlParser.

    Attributes:
        max_depth: Maximum nesting of expressions, queries, relations, types
            and statements before the input is rejected as too deeply nested
        decimal_literal_treatment: Representation of decimal literals
    """
    max_depth: int = 64
    decimal_literal_treatment: DecimalLiteralTreatment = DecimalLiteralTreatment.AS_DOUBLE

    def __post_init__(self):
        if self.max_depth < 1:
            raise ValueError("max_depth must be positive")
