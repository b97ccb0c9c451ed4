"""
Terminal formatting of parse results.

Separates presentation logic from parsing logic.
"""

from dataclasses import fields
from enum import Enum
from typing import List, Optional

from tabulate import tabulate

from .parser import ast
from .parser.sql_formatter import format_sql
from .parser.tokens import Token, TokenKind
from .utils.exceptions import SQLSyntaxError


def format_tokens(tokens: List[Token]) -> str:
    """
    Format a token stream as an ASCII table.

    Args:
        tokens: Tokens from SqlLexer.tokenize

    Returns:
        Formatted string with table
    """
    rows = [
        [token.line, token.column, token.kind.value, token.describe(), token.keyword or ""]
        for token in tokens
        if token.kind is not TokenKind.EOF
    ]
    if not rows:
        return "(0 tokens)"

    table = tabulate(rows, headers=["line", "col", "kind", "text", "keyword"], tablefmt='grid')
    return table + f"\n({len(rows)} token{'s' if len(rows) != 1 else ''})"


def format_tree(node: ast.Node) -> str:
    """
    Format an AST as an indented tree, one node per line.

    Scalar fields are shown next to the node name; child nodes are listed
    beneath it under their field name.
    """
    lines: List[str] = []
    _format_node(node, 0, None, lines)
    return "\n".join(lines)


def _format_node(node: ast.Node, depth: int, label: Optional[str], lines: List[str]):
    indent = "  " * depth
    prefix = f"{label}: " if label else ""

    attributes = []
    children = []
    for f in fields(node):
        if f.name == 'location':
            continue
        value = getattr(node, f.name)
        if isinstance(value, ast.Node):
            children.append((f.name, value))
        elif isinstance(value, tuple) and any(isinstance(v, (ast.Node, tuple)) for v in value):
            children.extend((f"{f.name}[{i}]", v) for i, v in enumerate(value))
        elif value is not None and value != ():
            attributes.append(f"{f.name}={_scalar(value)}")

    header = type(node).__name__
    if attributes:
        header += " (" + ", ".join(attributes) + ")"
    lines.append(f"{indent}{prefix}{header}")

    for name, child in children:
        if isinstance(child, ast.Node):
            _format_node(child, depth + 1, name, lines)
        elif isinstance(child, tuple):
            # grouping sets hold tuples of names
            lines.append(f"{indent}  {name}: ({', '.join(format_sql(c) for c in child)})")
        else:
            # integer type parameters
            lines.append(f"{indent}  {name}: {child}")


def _scalar(value) -> str:
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (str, bytes)):
        return repr(value)
    return str(value)


def format_statement(statement: ast.Statement) -> str:
    """Canonical SQL for a parsed statement."""
    return format_sql(statement)


def format_error(error: SQLSyntaxError, sql: Optional[str] = None) -> str:
    """
    Format a syntax error with the offending line and a caret under the
    error column.

    Args:
        error: The error raised by the parser
        sql: Statement text; defaults to the text stored on the error

    Returns:
        Formatted multi-line string
    """
    sql = sql if sql is not None else error.sql
    lines = [f"Syntax Error: {error}"]
    if sql:
        source_lines = sql.split('\n')
        if 1 <= error.line <= len(source_lines):
            lines.append("  " + source_lines[error.line - 1])
            lines.append("  " + " " * (error.column - 1) + "^")
    return "\n".join(lines)
