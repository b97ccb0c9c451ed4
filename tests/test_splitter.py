"""
Unit tests for statement splitting.
"""

import pytest
from sqlfront.parser.splitter import StatementSplitter, split_statements


class TestStatementSplitter:
    """Test splitting on ';' delimiters."""

    def test_complete_and_partial(self):
        """Test complete statements followed by an unterminated one."""
        splitter = StatementSplitter("SELECT 1; SELECT 2;\n SELECT 3 ")

        assert splitter.complete_statements == ["SELECT 1", "SELECT 2"]
        assert splitter.partial_statement == "SELECT 3"

    def test_delimiters_inside_literals(self):
        """Test that ';' in strings, quoted identifiers and comments is ignored."""
        sql = (
            "SELECT 'a;b' FROM t;\n"
            "SELECT \"x;y\" FROM t;\n"
            "SELECT 1 /* ; */ -- ;\n"
            "+ 2;"
        )
        splitter = StatementSplitter(sql)

        assert splitter.complete_statements == [
            "SELECT 'a;b' FROM t",
            "SELECT \"x;y\" FROM t",
            "SELECT 1 /* ; */ -- ;\n+ 2",
        ]
        assert splitter.partial_statement == ""

    def test_empty_statements_dropped(self):
        """Test that stray delimiters produce no statements."""
        splitter = StatementSplitter(" ; ;SELECT 1;;")

        assert splitter.complete_statements == ["SELECT 1"]
        assert splitter.partial_statement == ""

    def test_trailing_comment_is_not_a_statement(self):
        """Test that a comment after the last ';' is dropped."""
        splitter = StatementSplitter("SELECT 1; -- done\n")

        assert splitter.complete_statements == ["SELECT 1"]
        assert splitter.partial_statement == ""

    def test_unterminated_string(self):
        """Test that text with an unterminated string stays partial."""
        splitter = StatementSplitter("SELECT 1; SELECT 'abc; SELECT 2;")

        assert splitter.complete_statements == ["SELECT 1"]
        assert splitter.partial_statement == "SELECT 'abc; SELECT 2;"

    def test_multiline_offsets(self):
        """Test statement boundaries across lines."""
        splitter = StatementSplitter("SELECT a\nFROM t\n;\nSELECT b\nFROM u;")

        assert splitter.complete_statements == ["SELECT a\nFROM t", "SELECT b\nFROM u"]

    def test_is_empty(self):
        """Test detection of input with no statements."""
        for sql in ("", "   ", ";", "-- only a comment", "/* x */ ;"):
            assert StatementSplitter(sql).is_empty(), sql

        assert not StatementSplitter("SELECT").is_empty()
        assert not StatementSplitter("x;").is_empty()

    def test_split_statements(self):
        """Test the convenience function."""
        assert split_statements("SELECT 1; SELECT 2") == ["SELECT 1", "SELECT 2"]
        assert split_statements("SELECT 1;") == ["SELECT 1"]
        assert split_statements("") == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
