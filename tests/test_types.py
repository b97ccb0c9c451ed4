"""
Unit tests for type parsing.
"""

import pytest
from sqlfront.parser.parser import SqlParser
from sqlfront.parser.sql_formatter import format_sql
from sqlfront.parser import ast
from sqlfront.utils.exceptions import SQLSyntaxError


class TestTypes:
    """Test the type grammar."""

    def setup_method(self):
        """Set up parser for each test."""
        self.parser = SqlParser()

    def test_postfix_array_repeats(self):
        """Test INT ARRAY ARRAY."""
        assert self.parser.parse_type("INT ARRAY ARRAY") == ast.ArrayType(
            ast.ArrayType(ast.BaseType("int"))
        )

    def test_angle_bracket_types(self):
        """Test ARRAY<...> and MAP<..., ...>, including a closing >>."""
        assert self.parser.parse_type("array<varchar>") == ast.ArrayType(ast.BaseType("varchar"))
        assert self.parser.parse_type("MAP<VARCHAR, ARRAY<BIGINT>>") == ast.MapType(
            ast.BaseType("varchar"), ast.ArrayType(ast.BaseType("bigint"))
        )

    def test_row_type(self):
        """Test ROW(name type, ...)."""
        assert self.parser.parse_type("ROW(x BIGINT, y DOUBLE)") == ast.RowType((
            ast.RowField(ast.Identifier("x"), ast.BaseType("bigint")),
            ast.RowField(ast.Identifier("y"), ast.BaseType("double")),
        ))

    def test_parameterized_types(self):
        """Test integer and type parameters."""
        assert self.parser.parse_type("decimal(10, 2)") == ast.BaseType("decimal", (10, 2))
        assert self.parser.parse_type("map(varchar, array(bigint))") == ast.BaseType("map", (
            ast.BaseType("varchar"),
            ast.BaseType("array", (ast.BaseType("bigint"),)),
        ))

    def test_compound_type_names(self):
        """Test the multi-word type names."""
        assert self.parser.parse_type("timestamp with time zone") == \
            ast.BaseType("timestamp with time zone")
        assert self.parser.parse_type("TIME  WITH TIME ZONE") == ast.BaseType("time with time zone")
        assert self.parser.parse_type("DOUBLE PRECISION") == ast.BaseType("double precision")

    def test_type_names_are_lower_cased(self):
        """Test that unquoted type names are normalized."""
        assert self.parser.parse_type("BigInt") == ast.BaseType("bigint")

    def test_type_formatting(self):
        """Test the canonical rendering of types."""
        cases = {
            "INT ARRAY": "ARRAY<int>",
            "ROW(a bigint, b ARRAY<varchar>)": "ROW(a bigint, b ARRAY<varchar>)",
            "MAP<varchar, decimal(10, 2)>": "MAP<varchar, decimal(10, 2)>",
            "timestamp with time zone": "timestamp with time zone",
        }
        for sql, expected in cases.items():
            data_type = self.parser.parse_type(sql)
            assert format_sql(data_type) == expected
            assert self.parser.parse_type(expected) == data_type

    def test_invalid_types(self):
        """Test malformed types."""
        for sql in ("ARRAY<INT", "MAP<INT>", "ROW(x)", "decimal(", "", "select"):
            with pytest.raises(SQLSyntaxError):
                self.parser.parse_type(sql)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
