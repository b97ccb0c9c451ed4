"""
Unit tests for canonical SQL formatting.
"""

import pytest
from sqlfront.parser.parser import SqlParser
from sqlfront.parser.sql_formatter import format_sql, quote_identifier, quote_string
from sqlfront.parser import ast


STATEMENTS = [
    "SELECT 1",
    "SELECT a, b AS c FROM t WHERE x > 1 ORDER BY a DESC NULLS FIRST LIMIT 10",
    "SELECT DISTINCT t.*, s.t.* FROM s.t AS t (a, b) TABLESAMPLE SYSTEM (5)",
    "SELECT * FROM a JOIN b JOIN c",
    "SELECT * FROM a JOIN b JOIN c ON x ON y",
    "SELECT * FROM a LEFT JOIN b ON a.x = b.x RIGHT OUTER JOIN c USING (id) CROSS JOIN d",
    "SELECT * FROM a NATURAL JOIN b, (SELECT 1) x, UNNEST(ARRAY[1, 2]) WITH ORDINALITY",
    "SELECT * FROM ((a JOIN b ON p) JOIN c ON q)",
    "SELECT * FROM ((SELECT 1) UNION (SELECT 2)) u",
    "SELECT count(*), sum(DISTINCT x) FILTER (WHERE x > 0) FROM t GROUP BY ROLLUP (a, b) HAVING count(*) > 1",
    "SELECT a FROM t GROUP BY DISTINCT (a, b), CUBE (c), GROUPING SETS ((a, b), (c), ()), ()",
    "SELECT 1 UNION ALL SELECT 2 INTERSECT SELECT 3 EXCEPT SELECT 4 ORDER BY 1 LIMIT ALL",
    "(SELECT 1 UNION SELECT 2) INTERSECT SELECT 3",
    "WITH RECURSIVE x (a) AS (SELECT 1), y AS (VALUES (1, 2), (3, 4)) TABLE x",
    "VALUES 1, 2, 3",
    "CREATE TABLE IF NOT EXISTS s.t (id bigint COMMENT 'it''s', LIKE u EXCLUDING PROPERTIES) WITH (format = 'ORC')",
    "CREATE TABLE t WITH (a = 1) AS SELECT * FROM u WITH NO DATA",
    "CREATE SCHEMA IF NOT EXISTS c.s WITH (location = 'x')",
    "DROP SCHEMA IF EXISTS s CASCADE",
    "ALTER SCHEMA s RENAME TO s2",
    "DROP TABLE IF EXISTS t",
    "ALTER TABLE t RENAME TO u",
    "ALTER TABLE t RENAME COLUMN a TO b",
    "ALTER TABLE t ADD COLUMN c ARRAY<varchar> COMMENT 'x'",
    "CREATE OR REPLACE VIEW v AS SELECT 1",
    "DROP VIEW v",
    "INSERT INTO t (a, b) SELECT 1, 2",
    "INSERT INTO t VALUES (1, 'a')",
    "DELETE FROM t WHERE a IS NOT NULL",
    "CALL system.flush(1, name => 'x')",
    "GRANT SELECT, DELETE ON TABLE t TO alice WITH GRANT OPTION",
    "REVOKE GRANT OPTION FOR ALL PRIVILEGES ON t FROM bob",
    "EXPLAIN ANALYZE (FORMAT TEXT, TYPE LOGICAL) SELECT 1",
    "SHOW CREATE VIEW v",
    "SHOW TABLES FROM c.s LIKE 'a%'",
    "SHOW SCHEMAS FROM c LIKE 'b%'",
    "SHOW CATALOGS",
    "SHOW COLUMNS FROM t",
    "SHOW FUNCTIONS",
    "SHOW SESSION",
    "SHOW PARTITIONS FROM t WHERE ds > '2020' ORDER BY ds LIMIT 5",
    "USE c.s",
    "SET SESSION c.p = 'x'",
    "RESET SESSION p",
    "START TRANSACTION ISOLATION LEVEL READ COMMITTED, READ WRITE",
    "COMMIT",
    "ROLLBACK WORK",
    "PREPARE q FROM SELECT * FROM t WHERE a = ? AND b = ?",
    "DEALLOCATE PREPARE q",
    "EXECUTE q USING 1, 'a'",
    "DESCRIBE INPUT q",
    "DESCRIBE OUTPUT q",
]

EXPRESSIONS = [
    "1 + 2 * 3 - -4 / (5 % 6)",
    "a || b || 'c'",
    "NOT a AND b OR c",
    "x BETWEEN 1 AND 10",
    "x NOT IN (1, 2) AND y IN (SELECT z FROM t)",
    "name NOT LIKE 'a!%' ESCAPE '!'",
    "a IS NOT DISTINCT FROM b",
    "x = ANY (SELECT y FROM t)",
    "EXISTS (SELECT 1)",
    "(1, 2) = ROW(1, 2) AND ROW(1) IS NULL",
    "ARRAY[1, 2][1] + m['k'] + r.f.g",
    "transform(arr, x -> x + 1)",
    "reduce(arr, 0, (s, x) -> s + x, s -> s)",
    "rank() OVER (PARTITION BY a ORDER BY b DESC RANGE BETWEEN 1 PRECEDING AND UNBOUNDED FOLLOWING)",
    "sum(x) OVER ()",
    "CASE WHEN a THEN 1 WHEN b THEN 2 ELSE 3 END",
    "CASE x WHEN 1 THEN 'a' END",
    "if(a, 1) + nullif(b, 2) + coalesce(c, 3) + try(d)",
    "CAST(x AS decimal(10, 2)) || TRY_CAST(y AS MAP<varchar, ROW(a bigint)>)",
    "EXTRACT(DAY_OF_WEEK FROM ts) + POSITION('a' IN s)",
    "SUBSTRING(s FROM 2 FOR 3) || NORMALIZE(s, NFC) || NORMALIZE(s)",
    "CURRENT_DATE < CURRENT_TIMESTAMP(3) AND LOCALTIME > CURRENT_TIME",
    "ts AT TIME ZONE 'UTC' AT TIME ZONE INTERVAL '1' HOUR",
    "INTERVAL '1-2' YEAR TO MONTH + INTERVAL - '3' DAY",
    "TIME '01:02' < TIMESTAMP '2020-01-01' AND DATE '2020-01-01' = DOUBLE PRECISION '1.0'",
    "X'0AFF' = x''",
    "NULL IS NULL AND TRUE AND NOT FALSE",
    "1.5 + 1E10 + 0.1",
    '"select" + "a""b" + `c`',
    "count(*) + count() + f()",
    "9223372036854775807",
]


class TestSqlFormatter:
    """Test formatting and round trips."""

    def setup_method(self):
        """Set up parser for each test."""
        self.parser = SqlParser()

    def test_statement_round_trips(self):
        """Test that formatted statements parse back to an equal tree."""
        for sql in STATEMENTS:
            stmt = self.parser.parse_statement(sql)
            formatted = format_sql(stmt)
            assert self.parser.parse_statement(formatted) == stmt, sql
            # formatting is idempotent
            assert format_sql(self.parser.parse_statement(formatted)) == formatted

    def test_expression_round_trips(self):
        """Test that formatted expressions parse back to an equal tree."""
        for sql in EXPRESSIONS:
            expr = self.parser.parse_expression(sql)
            formatted = format_sql(expr)
            assert self.parser.parse_expression(formatted) == expr, sql

    def test_compound_expressions_are_parenthesized(self):
        """Test that precedence is made explicit."""
        expr = self.parser.parse_expression("a + b * c = d AND NOT e")

        assert format_sql(expr) == "(((a + (b * c)) = d) AND (NOT e))"

    def test_rows(self):
        """Test row rendering for one and several items."""
        assert format_sql(self.parser.parse_expression("(1, 2)")) == "(1, 2)"
        assert format_sql(self.parser.parse_expression("ROW(1)")) == "ROW (1)"

    def test_select_formatting(self):
        """Test the canonical form of a query."""
        stmt = self.parser.parse_statement(
            "select a x from t join u on t.id = u.id where b>1 order by a limit 3"
        )

        assert format_sql(stmt) == (
            "SELECT a AS x FROM t INNER JOIN u ON (t.id = u.id) "
            "WHERE (b > 1) ORDER BY a ASC LIMIT 3"
        )

    def test_literal_formatting(self):
        """Test literal rendering."""
        assert format_sql(ast.StringLiteral("it's")) == "'it''s'"
        assert format_sql(ast.BinaryLiteral(b"\x0a\xff")) == "X'0AFF'"
        assert format_sql(ast.DoubleLiteral(1.5)) == "1.5"
        assert format_sql(ast.DecimalLiteral("1.50")) == "1.50"
        assert format_sql(ast.Identifier("a b", True)) == '"a b"'

    def test_names_that_need_quotes_round_trip(self):
        """Test quoting of type names, literal prefixes and privileges."""
        cases = [
            ("CAST(x AS \"my type\")", "CAST(x AS \"my type\")"),
            ("CAST(x AS \"row\")", "CAST(x AS \"row\")"),
            ("CAST(x AS timestamp with time zone)", "CAST(x AS timestamp with time zone)"),
            ("\"time\" 'x'", "\"time\" 'x'"),
            ("\"my type\" 'x'", "\"my type\" 'x'"),
            ("\"select\" 'x'", "\"select\" 'x'"),
            ("JSON 'x'", "JSON 'x'"),
        ]
        for sql, expected in cases:
            expr = self.parser.parse_expression(sql)
            formatted = format_sql(expr)
            assert formatted == expected, sql
            assert self.parser.parse_expression(formatted) == expr, sql

        stmt = self.parser.parse_statement('GRANT "my priv", SELECT ON t TO bob')
        formatted = format_sql(stmt)
        assert formatted == 'GRANT "my priv", SELECT ON t TO bob'
        assert self.parser.parse_statement(formatted) == stmt

    def test_overflowing_double_round_trips(self):
        """Test that a double literal too large for a float prints back readable."""
        expr = self.parser.parse_expression("1e400")

        assert expr == ast.DoubleLiteral(float("inf"))
        assert format_sql(expr) == "1E999"
        assert self.parser.parse_expression(format_sql(expr)) == expr

        with pytest.raises(ValueError):
            format_sql(ast.DoubleLiteral(float("nan")))

    def test_quoting_helpers(self):
        """Test identifier and string quoting."""
        assert quote_identifier('a"b') == '"a""b"'
        assert quote_string("a'b") == "'a''b'"

    def test_unknown_node_rejected(self):
        """Test that formatting a bare base node fails."""
        with pytest.raises(TypeError):
            format_sql(ast.Expression())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
